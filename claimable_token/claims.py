"""Allocation claims against a Merkle root, directly or through the delegate.

Direct claims and delegated claims are two entry points over the same
validate-and-apply routine, so they share the per-beneficiary claim record
and the global claim budget. Every check is a read performed before the
first mutation.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterable, Sequence, Union

from .allocation import AllocationLedger
from .encoding import ZERO_ADDRESS, ZERO_HASH, as_amount, as_bytes32, normalise_address
from .errors import (
    AllocationExhaustedError,
    CapExceededError,
    ClaimExceedsRemainingAllocationError,
    DelegateNotConfiguredError,
    InsufficientClaimableSupplyError,
    InvalidProofError,
    OverAllocationError,
    UnauthorizedDelegateError,
    ZeroClaimError,
)
from .events import Claimed, ClaimedAndForwarded
from .ledger import TokenLedger
from .merkle import leaf_hash, verify
from .supply import SupplyBudget

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class DirectClaim:
    """The caller claims its own allocation and receives the tokens."""

    caller: str

    @property
    def beneficiary(self) -> str:
        return self.caller

    @property
    def recipient(self) -> str:
        return self.caller


@dataclass(frozen=True)
class DelegatedClaim:
    """The delegate claims against ``beneficiary``'s allocation and receives the tokens."""

    delegate: str
    beneficiary: str

    @property
    def recipient(self) -> str:
        return self.delegate


ClaimIntent = Union[DirectClaim, DelegatedClaim]


class ClaimCoordinator:
    """Validates claims and applies them to the ledger, the claim record and the budget.

    The coordinator does no locking of its own; callers that share it across
    threads must serialise access (see :class:`~claimable_token.token.CappedClaimToken`).
    """

    def __init__(
        self,
        ledger: TokenLedger,
        allocations: AllocationLedger,
        budget: SupplyBudget,
        *,
        merkle_root: Any = ZERO_HASH,
        delegate: str = ZERO_ADDRESS,
    ) -> None:
        self.ledger = ledger
        self.allocations = allocations
        self.budget = budget
        self.merkle_root = as_bytes32(merkle_root)
        self.delegate = normalise_address(delegate)

    def claim(
        self,
        caller: str,
        total_allocation: int,
        amount_to_claim: int,
        proof: Iterable[Any],
    ) -> Claimed:
        """Claim ``amount_to_claim`` of the caller's ``total_allocation``.

        Checks run in a fixed order and the first failure wins: zero amount,
        over-allocation, exhausted allocation, remaining allocation, claim
        budget, the Merkle proof, and finally the effective cap.
        """

        intent = DirectClaim(normalise_address(caller))
        total_allocation = as_amount(total_allocation, name="total_allocation")
        amount_to_claim = as_amount(amount_to_claim, name="amount_to_claim")
        if amount_to_claim == 0:
            raise ZeroClaimError(intent.beneficiary)
        self._apply(intent, total_allocation, amount_to_claim, proof)
        return Claimed(intent.beneficiary, amount_to_claim)

    def claim_for(
        self,
        caller: str,
        total_allocation: int,
        amount_to_claim: int,
        proof: Iterable[Any],
        beneficiary: str,
    ) -> ClaimedAndForwarded:
        """Claim on ``beneficiary``'s behalf; the configured delegate receives the tokens."""

        caller_address = normalise_address(caller)
        beneficiary_address = normalise_address(beneficiary)
        total_allocation = as_amount(total_allocation, name="total_allocation")
        amount_to_claim = as_amount(amount_to_claim, name="amount_to_claim")
        if self.delegate == ZERO_ADDRESS:
            raise DelegateNotConfiguredError()
        if caller_address != self.delegate:
            raise UnauthorizedDelegateError(caller_address, self.delegate)
        intent = DelegatedClaim(self.delegate, beneficiary_address)
        self._apply(intent, total_allocation, amount_to_claim, proof)
        return ClaimedAndForwarded(beneficiary_address, amount_to_claim)

    def remaining_allocation(self, beneficiary: str, total_allocation: int) -> int:
        claimed = self.allocations.already_claimed(beneficiary)
        return max(as_amount(total_allocation, name="total_allocation") - claimed, 0)

    def _apply(self, intent: ClaimIntent, total_allocation: int, amount: int, proof: Iterable[Any]) -> None:
        beneficiary = intent.beneficiary
        if amount > total_allocation:
            raise OverAllocationError(beneficiary, amount, total_allocation)

        claimed = self.allocations.already_claimed(beneficiary)
        if claimed >= total_allocation:
            raise AllocationExhaustedError(beneficiary, claimed, total_allocation)
        if claimed + amount > total_allocation:
            raise ClaimExceedsRemainingAllocationError(beneficiary, claimed, amount, total_allocation)

        if amount > self.budget.claimable_supply:
            raise InsufficientClaimableSupplyError(amount, self.budget.claimable_supply)

        if not self._proof_matches(proof, beneficiary, total_allocation):
            raise InvalidProofError(beneficiary, total_allocation)

        total_issued = self.ledger.total_issued()
        cap = self.budget.effective_cap()
        if total_issued + amount > cap:
            raise CapExceededError(amount, total_issued, cap)

        # only credit can still fail; the other two effects were validated above
        self.ledger.credit(intent.recipient, amount)
        self.allocations.record_claim(beneficiary, amount)
        self.budget.consume(amount)

    def _proof_matches(self, proof: Iterable[Any], beneficiary: str, total_allocation: int) -> bool:
        try:
            siblings: Sequence[Any] = list(proof)
            return verify(siblings, self.merkle_root, leaf_hash(beneficiary, total_allocation))
        except (TypeError, ValueError) as exc:
            _LOGGER.debug("Malformed proof for %s: %s", beneficiary, exc)
            return False


__all__ = ["ClaimCoordinator", "ClaimIntent", "DelegatedClaim", "DirectClaim"]
