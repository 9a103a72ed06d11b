"""
Syntactic address checks.

Nothing here touches the network: an address either has the shape of one of the known
families or it is rejected before any lookup is issued.
"""
import re
from typing import Any

from pointer_api.models import AddressFamily

EVM_PATTERN = re.compile(r"^0x[0-9a-fA-F]{40}\Z")
CW_PATTERN = re.compile(r"^sei1[a-z0-9]+\Z")
IBC_PATTERN = re.compile(r"^ibc/[0-9A-F]+\Z")

CW_MIN_LENGTH = 10
MAX_ADDRESS_LENGTH = 256
FORBIDDEN_CHARS = frozenset("=[]{}<>")

INVALID_FORMAT = "Invalid address format"


class InvalidAddressError(ValueError):
    """Raised when input does not look like any supported address or denom."""

    def __init__(self, address: Any, reason: str = INVALID_FORMAT):
        super().__init__(f"{reason}: {address!r}")
        self.address = address
        self.reason = reason


def is_cw_address(value: str) -> bool:
    return len(value) >= CW_MIN_LENGTH and bool(CW_PATTERN.match(value))


def _is_factory_denom(value: str) -> bool:
    if not value.startswith("factory/"):
        return False
    segments = value[len("factory/"):].split("/")
    if len(segments) != 2:
        return False
    creator, subdenom = segments
    return is_cw_address(creator) and bool(subdenom)


def detect_family(value: Any) -> AddressFamily:
    """Tag a string with its address family purely from its shape."""
    if not isinstance(value, str) or not value:
        return AddressFamily.UNKNOWN
    if value.startswith("0x"):
        return AddressFamily.EVM if EVM_PATTERN.match(value) else AddressFamily.UNKNOWN
    if value.startswith("sei1"):
        return AddressFamily.CW if is_cw_address(value) else AddressFamily.UNKNOWN
    if value.startswith("ibc/"):
        return AddressFamily.NATIVE_IBC if IBC_PATTERN.match(value) else AddressFamily.UNKNOWN
    if _is_factory_denom(value):
        return AddressFamily.NATIVE_FACTORY
    return AddressFamily.UNKNOWN


def is_native_denom(value: Any) -> bool:
    return detect_family(value).is_native


def _passes_input_guards(raw: str) -> bool:
    if len(raw) > MAX_ADDRESS_LENGTH:
        return False
    if any(ch in FORBIDDEN_CHARS for ch in raw):
        return False
    if ".." in raw:
        return False
    return not any(ch.isspace() for ch in raw)


def validate(raw: Any) -> bool:
    """Return True if raw is a syntactically valid EVM, CW, IBC or factory address."""
    if not isinstance(raw, str) or not raw:
        return False
    if not _passes_input_guards(raw):
        return False
    return detect_family(raw) is not AddressFamily.UNKNOWN


def validate_input(raw: Any) -> str:
    """Return raw unchanged if valid, otherwise raise InvalidAddressError with a specific reason."""
    if not isinstance(raw, str) or not raw.strip():
        raise InvalidAddressError(raw, "Address is required")
    if len(raw) > MAX_ADDRESS_LENGTH:
        raise InvalidAddressError(raw, "Address exceeds maximum length")
    if not validate(raw):
        raise InvalidAddressError(raw)
    return raw
