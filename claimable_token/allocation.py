"""Per-beneficiary bookkeeping of claimed allocation."""
from __future__ import annotations

from typing import Dict, Iterator, Mapping

from .encoding import UINT256_MAX, as_amount, normalise_address
from .errors import AmountOverflowError


class AllocationLedger:
    """Cumulative amount issued against each beneficiary's allocation.

    A beneficiary without a record has claimed zero. Records only ever grow
    and are never removed. Range checks against the allocation itself belong
    to :class:`~claimable_token.claims.ClaimCoordinator`.
    """

    def __init__(self, records: Mapping[str, int] | None = None) -> None:
        self._claimed: Dict[str, int] = {}
        for beneficiary, amount in (records or {}).items():
            self._claimed[normalise_address(beneficiary)] = as_amount(amount)

    def already_claimed(self, beneficiary: str) -> int:
        return self._claimed.get(normalise_address(beneficiary), 0)

    def record_claim(self, beneficiary: str, amount: int) -> int:
        """Add ``amount`` to the beneficiary's record and return the new total."""

        address = normalise_address(beneficiary)
        amount = as_amount(amount)
        current = self._claimed.get(address, 0)
        if current + amount > UINT256_MAX:
            raise AmountOverflowError(f"claimed[{address}]", current, amount)
        self._claimed[address] = current + amount
        return self._claimed[address]

    def __iter__(self) -> Iterator[str]:
        return iter(self._claimed)

    def __len__(self) -> int:
        return len(self._claimed)

    def as_dict(self) -> Dict[str, str]:
        return {address: str(amount) for address, amount in self._claimed.items()}

    @classmethod
    def from_dict(cls, payload: Mapping[str, str]) -> "AllocationLedger":
        return cls({address: int(amount) for address, amount in payload.items()})
