"""Admin gating, minting against the effective cap, and burn accounting."""
from __future__ import annotations

import logging

import pytest

from claimable_token.config import TokenConfig
from claimable_token.distribution import Distribution
from claimable_token.encoding import ZERO_ADDRESS, normalise_address
from claimable_token.errors import (
    CapExceededError,
    InsufficientAllowanceError,
    InsufficientBalanceError,
    InvalidDelegateError,
    UnauthorizedError,
    ZeroClaimError,
)
from claimable_token.supply import SupplyBudget
from claimable_token.token import CappedClaimToken

from tests.helpers import ADMIN, ALICE, BOB, DELEGATE, MALLORY, make_distribution, make_token, proof_for


@pytest.mark.parametrize(
    "operation, args",
    [
        ("set_merkle_root", (b"\x01" * 32,)),
        ("set_claimable_supply", (10,)),
        ("set_delegate", (DELEGATE,)),
        ("mint", (MALLORY, 1)),
        ("transfer_admin", (MALLORY,)),
    ],
)
def test_admin_operations_reject_other_callers(token: CappedClaimToken, operation: str, args: tuple) -> None:
    with pytest.raises(UnauthorizedError) as excinfo:
        getattr(token, operation)(MALLORY, *args)
    assert excinfo.value.operation == operation
    assert token.admin == normalise_address(ADMIN)


def test_set_delegate_rejects_zero_address(token: CappedClaimToken) -> None:
    with pytest.raises(InvalidDelegateError):
        token.set_delegate(ADMIN, ZERO_ADDRESS)
    assert token.delegate == ZERO_ADDRESS


def test_set_merkle_root_accepts_any_32_bytes(token: CappedClaimToken) -> None:
    token.set_merkle_root(ADMIN, "0x" + "00" * 32)
    assert token.merkle_root == b"\x00" * 32


def test_transfer_admin_moves_the_gate(token: CappedClaimToken) -> None:
    token.transfer_admin(ADMIN, BOB)
    token.set_claimable_supply(BOB, 42)
    with pytest.raises(UnauthorizedError):
        token.set_claimable_supply(ADMIN, 1)
    assert token.claimable_supply == 42


def test_mint_respects_the_cap(token: CappedClaimToken) -> None:
    token.mint(ADMIN, ALICE, 999_000)
    token.mint(ADMIN, BOB, 1_000)
    assert token.total_supply() == token.effective_cap()
    with pytest.raises(CapExceededError) as excinfo:
        token.mint(ADMIN, BOB, 1)
    assert excinfo.value.effective_cap == 1_000_000
    assert token.balance_of(BOB) == 1_000


def test_burn_lowers_cap_and_supply(token: CappedClaimToken) -> None:
    token.mint(ADMIN, ALICE, 5_000)
    token.burn(ALICE, 2_000)
    assert token.balance_of(ALICE) == 3_000
    assert token.total_burned == 2_000
    assert token.effective_cap() == 998_000
    assert token.effective_cap() + token.total_burned == token.config.max_supply


def test_burn_rejects_insufficient_balance(token: CappedClaimToken) -> None:
    with pytest.raises(InsufficientBalanceError):
        token.burn(ALICE, 1)
    assert token.total_burned == 0


def test_burn_from_spends_allowance(token: CappedClaimToken) -> None:
    token.mint(ADMIN, ALICE, 100)
    token.approve(ALICE, BOB, 60)
    token.burn_from(BOB, ALICE, 50)
    assert token.balance_of(ALICE) == 50
    assert token.ledger.allowance(ALICE, BOB) == 10
    assert token.total_burned == 50


def test_burn_from_rejects_missing_allowance(token: CappedClaimToken) -> None:
    token.mint(ADMIN, ALICE, 100)
    with pytest.raises(InsufficientAllowanceError):
        token.burn_from(BOB, ALICE, 1)
    assert token.total_burned == 0
    assert token.balance_of(ALICE) == 100


def test_burn_leaves_claimable_supply_unreconciled() -> None:
    distribution = make_distribution([(ALICE, 1000), (BOB, 1000)])
    token = make_token(distribution, max_supply=10_000, claimable_supply=1500)
    token.mint(ADMIN, ADMIN, 9_000)

    token.burn(ADMIN, 500)
    assert token.effective_cap() == 9_500
    assert token.claimable_supply == 1500
    assert token.total_supply() + token.claimable_supply > token.effective_cap()

    with pytest.raises(CapExceededError):
        token.mint(ADMIN, ADMIN, 1_001)

    token.claim(ALICE, 1000, 1000, proof_for(distribution, ALICE))
    assert token.total_supply() == token.effective_cap()
    assert token.claimable_supply == 500

    with pytest.raises(CapExceededError) as excinfo:
        token.claim(BOB, 1000, 500, proof_for(distribution, BOB))
    assert excinfo.value.total_issued == 9_500
    assert excinfo.value.effective_cap == 9_500
    assert token.claimable_supply == 500
    assert token.claimed_amount(BOB) == 0
    assert token.balance_of(BOB) == 0

    with pytest.raises(CapExceededError):
        token.mint(ADMIN, ADMIN, 1)


def test_claim_cannot_issue_past_the_cap() -> None:
    distribution = make_distribution([(ALICE, 1000), (BOB, 1000)])
    token = make_token(distribution, max_supply=500, claimable_supply=1000)

    with pytest.raises(CapExceededError) as excinfo:
        token.claim(ALICE, 1000, 1000, proof_for(distribution, ALICE))
    assert str(excinfo.value) == "Issuing 1000 on top of 0 exceeds effective cap 500"
    assert token.total_supply() == 0
    assert token.claimable_supply == 1000

    token.claim(ALICE, 1000, 500, proof_for(distribution, ALICE))
    token.burn(ALICE, 400)
    assert token.total_supply() == 100
    assert token.effective_cap() == 100
    assert token.total_supply() <= token.effective_cap()


def test_claims_are_logged(token: CappedClaimToken, distribution: Distribution, caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.INFO, logger="claimable_token")
    token.claim(ALICE, 1000, 10, proof_for(distribution, ALICE))
    assert "Claimed beneficiary=" in caplog.text


def test_rejections_are_logged_at_debug(token: CappedClaimToken, caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.DEBUG, logger="claimable_token")
    with pytest.raises(ZeroClaimError):
        token.claim(ALICE, 1000, 0, [])
    assert "Rejected claim" in caplog.text


def test_budget_must_match_config() -> None:
    with pytest.raises(ValueError):
        CappedClaimToken(TokenConfig(admin=ADMIN, max_supply=10), budget=SupplyBudget(11))
