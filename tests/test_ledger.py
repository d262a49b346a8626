from __future__ import annotations

import pytest

from claimable_token.encoding import UINT256_MAX
from claimable_token.errors import AmountOverflowError, InsufficientAllowanceError, InsufficientBalanceError
from claimable_token.ledger import TokenLedger

from tests.helpers import ALICE, BOB


@pytest.fixture()
def ledger() -> TokenLedger:
    ledger = TokenLedger()
    ledger.credit(ALICE, 500)
    return ledger


def test_credit_and_debit_track_total_issued(ledger: TokenLedger) -> None:
    ledger.credit(BOB, 250)
    ledger.debit(ALICE, 100)
    assert ledger.balance_of(ALICE) == 400
    assert ledger.balance_of(BOB) == 250
    assert ledger.total_issued() == 650


def test_debit_rejects_insufficient_balance(ledger: TokenLedger) -> None:
    with pytest.raises(InsufficientBalanceError) as excinfo:
        ledger.debit(ALICE, 501)
    assert excinfo.value.balance == 500
    assert ledger.total_issued() == 500


def test_credit_rejects_issuance_overflow(ledger: TokenLedger) -> None:
    with pytest.raises(AmountOverflowError):
        ledger.credit(BOB, UINT256_MAX)
    assert ledger.balance_of(BOB) == 0


def test_debit_from_spends_allowance(ledger: TokenLedger) -> None:
    ledger.approve(ALICE, BOB, 300)
    ledger.debit_from(BOB, ALICE, 200)
    assert ledger.allowance(ALICE, BOB) == 100
    assert ledger.balance_of(ALICE) == 300


def test_debit_from_checks_allowance_before_balance(ledger: TokenLedger) -> None:
    ledger.approve(ALICE, BOB, 10)
    with pytest.raises(InsufficientAllowanceError):
        ledger.debit_from(BOB, ALICE, 1_000)


def test_debit_from_keeps_allowance_when_balance_is_short(ledger: TokenLedger) -> None:
    ledger.approve(ALICE, BOB, 1_000)
    with pytest.raises(InsufficientBalanceError):
        ledger.debit_from(BOB, ALICE, 600)
    assert ledger.allowance(ALICE, BOB) == 1_000
    assert ledger.balance_of(ALICE) == 500


def test_unlimited_allowance_is_not_decremented(ledger: TokenLedger) -> None:
    ledger.approve(ALICE, BOB, UINT256_MAX)
    ledger.debit_from(BOB, ALICE, 500)
    assert ledger.allowance(ALICE, BOB) == UINT256_MAX


def test_from_dict_rejects_inconsistent_totals(ledger: TokenLedger) -> None:
    payload = ledger.as_dict()
    payload["total_issued"] = "1"
    with pytest.raises(ValueError):
        TokenLedger.from_dict(payload)
