"""Tests for family detection and the per-family lookup plans."""

import pytest

from pointer_api.classification import (
    NULL_EVM_ADDRESS,
    PLANS,
    AddressClassifier,
    is_null_evm_address,
)
from pointer_api.models import AddressFamily, PointerType
from tests.conftest import CW_TOKEN, EVM_TOKEN, FACTORY_DENOM, IBC_DENOM


def _summary(checks):
    return [(c.pointer_type, c.by_pointer) for c in checks]


def test_every_known_family_has_a_plan():
    known = {f for f in AddressFamily if f is not AddressFamily.UNKNOWN}
    assert set(PLANS) == known


def test_evm_plan_checks_cw_and_native_pointees_before_erc_pointers():
    plan = AddressClassifier().plan_for(EVM_TOKEN)

    assert plan.family is AddressFamily.EVM
    assert _summary(plan.checks) == [
        (PointerType.CW20, True),
        (PointerType.CW721, True),
        (PointerType.CW1155, True),
        (PointerType.NATIVE, True),
        (PointerType.ERC20, False),
        (PointerType.ERC721, False),
        (PointerType.ERC1155, False),
    ]
    assert plan.fallback_type == "EVM"


def test_cw_plan_mirrors_evm_plan():
    plan = AddressClassifier().plan_for(CW_TOKEN)

    assert plan.family is AddressFamily.CW
    assert _summary(plan.pointer_checks) == [
        (PointerType.ERC20, True),
        (PointerType.ERC721, True),
        (PointerType.ERC1155, True),
    ]
    assert _summary(plan.base_checks) == [
        (PointerType.ERC20, False),
        (PointerType.ERC721, False),
        (PointerType.ERC1155, False),
        (PointerType.CW20, False),
        (PointerType.CW721, False),
        (PointerType.CW1155, False),
    ]
    assert plan.fallback_type == "CW"


@pytest.mark.parametrize("denom", [IBC_DENOM, FACTORY_DENOM])
def test_native_plans_are_never_pointers(denom):
    plan = AddressClassifier().plan_for(denom)

    assert plan.pointer_checks == ()
    assert _summary(plan.base_checks) == [(PointerType.NATIVE, False)]
    assert plan.fallback_type == "NATIVE"


def test_unknown_family_has_no_plan():
    classifier = AddressClassifier()

    assert classifier.family_of("usei") is AddressFamily.UNKNOWN
    assert classifier.plan_for("usei") is None


def test_null_address_detection_ignores_case():
    assert is_null_evm_address(NULL_EVM_ADDRESS)
    assert is_null_evm_address("0X" + "0" * 40)
    assert not is_null_evm_address(EVM_TOKEN)
