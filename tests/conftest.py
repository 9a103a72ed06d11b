"""Shared fixtures: an in-memory pointer registry standing in for the chain REST service."""

from __future__ import annotations

import pytest

from pointer_api.models import LookupResult, PointerInfo, PointerType

EVM_TOKEN = "0x809FF4801aA5bDb33045d1fEC810D082490D63a4"
EVM_POINTER = "0x5f0E07dFeE5832Faa00c63F2D33A0D79150E8598"
CW_TOKEN = "sei1hrndqntlvtmx2kepr0zsfgr7nzjptcc72cr4ppk4yav58vvy7v3s4er8ed"
CW_POINTER = "sei1msjly0e2v5u99z53vqre47ltv0fsfa6h9fzrljuvp0e5zg76x7fswxcxjl"
IBC_DENOM = "ibc/CA6FBFAF399474A06263E10D0CE5AEBBE15189D6D4B2DD9ADE61007E68EB9DB0"
IBC_POINTER = "0x3894085Ef7Ff0f0aeDf52E2A2704928d1Ec074F1"
FACTORY_DENOM = "factory/sei1e3gttzq5e5k49f9f5gzvrl0rltlav65xu6p9xc0aj7e84lantdjqp7cncc/isei"
NULL_ADDRESS = "0x0000000000000000000000000000000000000000"


class FakePointerClient:
    """Implements PointerQueryProtocol over two dicts keyed by (address, PointerType)."""

    def __init__(self, pointees=None, pointers=None, unavailable=(), broken=()):
        self.pointees: dict[tuple[str, PointerType], str] = dict(pointees or {})
        self.pointers: dict[tuple[str, PointerType], str] = dict(pointers or {})
        # addresses whose every lookup times out
        self.unavailable = set(unavailable)
        # addresses whose lookups raise unexpectedly
        self.broken = set(broken)
        self.calls: list[tuple[str, str, PointerType]] = []

    def _answer(self, address: str, table: dict, field: str, pointer_type: PointerType) -> LookupResult:
        if address in self.broken:
            raise RuntimeError("registry exploded")
        if address in self.unavailable:
            return LookupResult.absent("timeout")
        target = table.get((address, pointer_type))
        if target is None:
            return LookupResult.not_found(PointerInfo(exists=False))
        return LookupResult.found(PointerInfo(exists=True, version=1, **{field: target}))

    async def pointee_by_pointer(self, pointer: str, pointer_type: PointerType) -> LookupResult:
        self.calls.append(("pointee", pointer, pointer_type))
        return self._answer(pointer, self.pointees, "pointee", pointer_type)

    async def pointer_by_pointee(self, pointee: str, pointer_type: PointerType) -> LookupResult:
        self.calls.append(("pointer", pointee, pointer_type))
        return self._answer(pointee, self.pointers, "pointer", pointer_type)


@pytest.fixture
def registry() -> FakePointerClient:
    """Registry mirroring a small, consistent slice of chain state."""
    return FakePointerClient(
        pointees={
            (EVM_POINTER, PointerType.CW20): CW_TOKEN,
            (CW_POINTER, PointerType.ERC20): EVM_TOKEN,
        },
        pointers={
            (CW_TOKEN, PointerType.CW20): EVM_POINTER,
            (EVM_TOKEN, PointerType.ERC20): CW_POINTER,
            (IBC_DENOM, PointerType.NATIVE): IBC_POINTER,
        },
    )
