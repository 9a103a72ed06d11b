from enum import Enum, IntEnum
from typing import List, Optional, Dict, Any
from pydantic import BaseModel, Field, ConfigDict, model_validator


class PointerType(IntEnum):
    """Token standards understood by the chain's pointer registry, keyed by their wire code."""

    ERC20 = 0
    ERC721 = 1
    NATIVE = 2
    CW20 = 3
    CW721 = 4
    ERC1155 = 5
    CW1155 = 6


class AddressFamily(str, Enum):
    EVM = "EVM"
    CW = "CW"
    NATIVE_IBC = "NativeIBC"
    NATIVE_FACTORY = "NativeFactory"
    UNKNOWN = "Unknown"

    @property
    def is_native(self) -> bool:
        return self in (AddressFamily.NATIVE_IBC, AddressFamily.NATIVE_FACTORY)


class PointerInfo(BaseModel):
    """Response shape shared by the pointer and pointee endpoints."""

    model_config = ConfigDict(extra="ignore")

    exists: bool = False
    pointer: Optional[str] = None
    pointee: Optional[str] = None
    version: Optional[int] = None


class LookupStatus(str, Enum):
    FOUND = "found"
    NOT_FOUND = "not_found"
    UNAVAILABLE = "unavailable"  # timeout, network error, non-2xx or malformed payload


class LookupResult(BaseModel):
    status: LookupStatus
    info: Optional[PointerInfo] = None
    reason: Optional[str] = None

    @classmethod
    def found(cls, info: PointerInfo) -> "LookupResult":
        return cls(status=LookupStatus.FOUND, info=info)

    @classmethod
    def not_found(cls, info: Optional[PointerInfo] = None) -> "LookupResult":
        return cls(status=LookupStatus.NOT_FOUND, info=info)

    @classmethod
    def absent(cls, reason: str) -> "LookupResult":
        return cls(status=LookupStatus.UNAVAILABLE, reason=reason)

    @property
    def is_found(self) -> bool:
        return self.status is LookupStatus.FOUND

    @property
    def is_unavailable(self) -> bool:
        return self.status is LookupStatus.UNAVAILABLE


class ClassificationResult(BaseModel):
    """
    Classification of a single address.

    Successful results carry exactly one of is_base_asset / is_pointer. Failed results
    carry only the address and an error message.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    address: str
    is_base_asset: Optional[bool] = Field(None, alias="isBaseAsset")
    is_pointer: Optional[bool] = Field(None, alias="isPointer")
    pointer_type: Optional[str] = Field(None, alias="pointerType")
    pointer_address: Optional[str] = Field(None, alias="pointerAddress")
    pointee_address: Optional[str] = Field(None, alias="pointeeAddress")
    error: Optional[str] = None

    @model_validator(mode="after")
    def _check_relationship(self) -> "ClassificationResult":
        if self.error is not None:
            return self
        if self.is_base_asset is None or self.is_pointer is None:
            raise ValueError("classification requires both isBaseAsset and isPointer")
        if self.is_base_asset == self.is_pointer:
            raise ValueError("exactly one of isBaseAsset and isPointer must be true")
        if self.pointer_address and self.pointee_address:
            raise ValueError("pointerAddress and pointeeAddress are mutually exclusive")
        return self

    @classmethod
    def base_asset(cls, address: str, pointer_type: str, pointer_address: str = "") -> "ClassificationResult":
        return cls(
            address=address,
            is_base_asset=True,
            is_pointer=False,
            pointer_type=pointer_type,
            pointer_address=pointer_address,
            pointee_address="",
        )

    @classmethod
    def pointer(cls, address: str, pointer_type: str, pointee_address: str) -> "ClassificationResult":
        return cls(
            address=address,
            is_base_asset=False,
            is_pointer=True,
            pointer_type=pointer_type,
            pointer_address="",
            pointee_address=pointee_address,
        )

    @classmethod
    def failure(cls, address: str, error: str) -> "ClassificationResult":
        return cls(address=address, error=error)

    @property
    def is_error(self) -> bool:
        return self.error is not None

    def to_response(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class ResolveRequest(BaseModel):
    address: Optional[str] = None
    addresses: Optional[List[Any]] = None
