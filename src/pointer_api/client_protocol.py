"""
Protocol definition for chain pointer query clients.
Lets the resolver run against the REST client or any in-memory stand-in interchangeably.
"""
from typing import Protocol, runtime_checkable

from pointer_api.models import LookupResult, PointerType


@runtime_checkable
class PointerQueryProtocol(Protocol):
    """Protocol for pointer registry query implementations."""

    async def pointee_by_pointer(
        self,
        pointer: str,
        pointer_type: PointerType
    ) -> LookupResult:
        """Check whether pointer is a registered pointer of pointer_type and return its pointee."""
        ...

    async def pointer_by_pointee(
        self,
        pointee: str,
        pointer_type: PointerType
    ) -> LookupResult:
        """Check whether a pointer of pointer_type is registered for pointee."""
        ...
