from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from pointer_api.models import AddressFamily, PointerType
from pointer_api.validation import detect_family

NULL_EVM_ADDRESS = "0x" + "0" * 40


@dataclass(frozen=True)
class LookupCheck:
    """
    One remote lookup in a resolution plan.

    by_pointer=True asks "is this address a pointer of pointer_type?" (answered with a
    pointee); by_pointer=False asks "is a pointer of pointer_type registered for this
    address?" (answered with a pointer).
    """

    pointer_type: PointerType
    by_pointer: bool


@dataclass(frozen=True)
class ResolutionPlan:
    family: AddressFamily
    pointer_checks: Tuple[LookupCheck, ...]
    base_checks: Tuple[LookupCheck, ...]
    fallback_type: str

    @property
    def checks(self) -> Tuple[LookupCheck, ...]:
        """All checks in priority order: pointer relationships before base-asset ones."""
        return self.pointer_checks + self.base_checks


def _as_pointer(*types: PointerType) -> Tuple[LookupCheck, ...]:
    return tuple(LookupCheck(t, by_pointer=True) for t in types)


def _as_pointee(*types: PointerType) -> Tuple[LookupCheck, ...]:
    return tuple(LookupCheck(t, by_pointer=False) for t in types)


_NATIVE_CHECKS = _as_pointee(PointerType.NATIVE)

PLANS: Dict[AddressFamily, ResolutionPlan] = {
    AddressFamily.EVM: ResolutionPlan(
        family=AddressFamily.EVM,
        pointer_checks=_as_pointer(
            PointerType.CW20, PointerType.CW721, PointerType.CW1155, PointerType.NATIVE
        ),
        base_checks=_as_pointee(PointerType.ERC20, PointerType.ERC721, PointerType.ERC1155),
        fallback_type=AddressFamily.EVM.value,
    ),
    AddressFamily.CW: ResolutionPlan(
        family=AddressFamily.CW,
        pointer_checks=_as_pointer(PointerType.ERC20, PointerType.ERC721, PointerType.ERC1155),
        base_checks=_as_pointee(
            PointerType.ERC20,
            PointerType.ERC721,
            PointerType.ERC1155,
            PointerType.CW20,
            PointerType.CW721,
            PointerType.CW1155,
        ),
        fallback_type=AddressFamily.CW.value,
    ),
    AddressFamily.NATIVE_IBC: ResolutionPlan(
        family=AddressFamily.NATIVE_IBC,
        pointer_checks=(),
        base_checks=_NATIVE_CHECKS,
        fallback_type=PointerType.NATIVE.name,
    ),
    AddressFamily.NATIVE_FACTORY: ResolutionPlan(
        family=AddressFamily.NATIVE_FACTORY,
        pointer_checks=(),
        base_checks=_NATIVE_CHECKS,
        fallback_type=PointerType.NATIVE.name,
    ),
}


def is_null_evm_address(address: str) -> bool:
    return address.lower() == NULL_EVM_ADDRESS


class AddressClassifier:
    """Maps an address to its family and the fixed set of lookups that resolve it."""

    def family_of(self, address: str) -> AddressFamily:
        return detect_family(address)

    def plan_for(self, address: str) -> Optional[ResolutionPlan]:
        """Return the resolution plan for address, or None for an unknown family."""
        return PLANS.get(self.family_of(address))
