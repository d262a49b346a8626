"""Capped, mintable token with Merkle allocation claims and burn accounting."""
from __future__ import annotations

import logging
import threading
from typing import Any, Iterable, List, Optional

from .allocation import AllocationLedger
from .claims import ClaimCoordinator
from .config import TokenConfig
from .encoding import ZERO_ADDRESS, ZERO_HASH, as_amount, as_bytes32, normalise_address, to_hex
from .errors import CapExceededError, ClaimTokenError, InvalidDelegateError, UnauthorizedError
from .events import ClaimEvent, Claimed, ClaimedAndForwarded
from .ledger import TokenLedger
from .supply import SupplyBudget

_LOGGER = logging.getLogger(__name__)


class CappedClaimToken:
    """Owns every piece of token state and serialises all mutations.

    Each state-changing method runs its whole read-validate-mutate-issue
    sequence under one re-entrant lock, so concurrent callers observe the same
    ordering a single-threaded caller would.
    """

    def __init__(
        self,
        config: TokenConfig,
        *,
        ledger: Optional[TokenLedger] = None,
        allocations: Optional[AllocationLedger] = None,
        budget: Optional[SupplyBudget] = None,
        merkle_root: Any = ZERO_HASH,
        delegate: str = ZERO_ADDRESS,
        events: Iterable[ClaimEvent] = (),
        admin: Optional[str] = None,
    ) -> None:
        self.config = config
        self._admin = normalise_address(admin) if admin else config.admin
        self._lock = threading.RLock()
        self.ledger = ledger if ledger is not None else TokenLedger()
        self.allocations = allocations if allocations is not None else AllocationLedger()
        self.budget = budget if budget is not None else SupplyBudget(config.max_supply)
        if self.budget.max_supply != config.max_supply:
            raise ValueError("Supply budget and config disagree on max_supply")
        self._claims = ClaimCoordinator(
            self.ledger,
            self.allocations,
            self.budget,
            merkle_root=merkle_root,
            delegate=delegate,
        )
        self._events: List[ClaimEvent] = list(events)

    # -- access control -------------------------------------------------

    @property
    def admin(self) -> str:
        return self._admin

    def require_admin(self, caller: str, operation: str = "admin operation") -> None:
        address = normalise_address(caller)
        if address != self._admin:
            raise UnauthorizedError(address, operation)

    def transfer_admin(self, caller: str, new_admin: str) -> None:
        with self._lock:
            self.require_admin(caller, "transfer_admin")
            address = normalise_address(new_admin)
            if address == ZERO_ADDRESS:
                raise InvalidDelegateError(address)
            _LOGGER.info("Admin transferred from %s to %s", self._admin, address)
            self._admin = address

    # -- views ------------------------------------------------------------

    @property
    def merkle_root(self) -> bytes:
        return self._claims.merkle_root

    @property
    def delegate(self) -> str:
        return self._claims.delegate

    @property
    def claimable_supply(self) -> int:
        return self.budget.claimable_supply

    @property
    def total_burned(self) -> int:
        return self.budget.total_burned

    @property
    def events(self) -> List[ClaimEvent]:
        return list(self._events)

    def effective_cap(self) -> int:
        return self.budget.effective_cap()

    def total_supply(self) -> int:
        return self.ledger.total_issued()

    def balance_of(self, account: str) -> int:
        return self.ledger.balance_of(account)

    def claimed_amount(self, account: str) -> int:
        return self.allocations.already_claimed(account)

    # -- admin configuration ----------------------------------------------

    def set_merkle_root(self, caller: str, root: Any) -> None:
        """Replace the allocation root. Proofs against the previous root stop verifying."""

        with self._lock:
            self.require_admin(caller, "set_merkle_root")
            self._claims.merkle_root = as_bytes32(root)
            _LOGGER.info("Merkle root set to %s", to_hex(self._claims.merkle_root))

    def set_claimable_supply(self, caller: str, amount: int) -> None:
        with self._lock:
            self.require_admin(caller, "set_claimable_supply")
            self.budget.set_claimable(amount)
            _LOGGER.info("Claimable supply set to %s", self.budget.claimable_supply)

    def set_delegate(self, caller: str, delegate: str) -> None:
        with self._lock:
            self.require_admin(caller, "set_delegate")
            address = normalise_address(delegate)
            if address == ZERO_ADDRESS:
                raise InvalidDelegateError(address)
            self._claims.delegate = address
            _LOGGER.info("Claim delegate set to %s", address)

    # -- issuance ---------------------------------------------------------

    def mint(self, caller: str, to: str, amount: int) -> None:
        with self._lock:
            self.require_admin(caller, "mint")
            amount = as_amount(amount)
            total_issued = self.ledger.total_issued()
            cap = self.budget.effective_cap()
            if total_issued + amount > cap:
                raise CapExceededError(amount, total_issued, cap)
            self.ledger.credit(to, amount)
            _LOGGER.info("Minted %s to %s", amount, normalise_address(to))

    def burn(self, caller: str, amount: int) -> None:
        """Destroy ``amount`` of the caller's tokens, permanently lowering the cap."""

        with self._lock:
            amount = as_amount(amount)
            self.ledger.debit(caller, amount)
            self.budget.record_burn(amount)
            _LOGGER.info("Burned %s from %s", amount, normalise_address(caller))

    def burn_from(self, spender: str, owner: str, amount: int) -> None:
        with self._lock:
            amount = as_amount(amount)
            self.ledger.debit_from(spender, owner, amount)
            self.budget.record_burn(amount)
            _LOGGER.info(
                "Burned %s from %s on behalf of %s",
                amount,
                normalise_address(owner),
                normalise_address(spender),
            )

    def approve(self, owner: str, spender: str, amount: int) -> None:
        with self._lock:
            self.ledger.approve(owner, spender, amount)

    # -- claims -----------------------------------------------------------

    def claim(self, caller: str, total_allocation: int, amount_to_claim: int, proof: Iterable[Any]) -> Claimed:
        with self._lock:
            try:
                event = self._claims.claim(caller, total_allocation, amount_to_claim, proof)
            except ClaimTokenError as exc:
                _LOGGER.debug("Rejected claim from %s: %s", caller, exc)
                raise
            self._record(event)
            return event

    def claim_for(
        self,
        caller: str,
        total_allocation: int,
        amount_to_claim: int,
        proof: Iterable[Any],
        beneficiary: str,
    ) -> ClaimedAndForwarded:
        with self._lock:
            try:
                event = self._claims.claim_for(caller, total_allocation, amount_to_claim, proof, beneficiary)
            except ClaimTokenError as exc:
                _LOGGER.debug("Rejected delegated claim from %s for %s: %s", caller, beneficiary, exc)
                raise
            self._record(event)
            return event

    def _record(self, event: ClaimEvent) -> None:
        self._events.append(event)
        _LOGGER.info("%s beneficiary=%s amount=%s", type(event).__name__, event.beneficiary, event.amount)
