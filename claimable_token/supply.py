"""Claim budget and burn accounting that together define the live mint cap."""
from __future__ import annotations

from typing import Any, Dict, Mapping

from .encoding import UINT256_MAX, as_amount
from .errors import AmountOverflowError, InsufficientClaimableSupplyError


class SupplyBudget:
    """Holds ``claimable_supply`` and ``total_burned`` next to the fixed maximum supply.

    ``claimable_supply`` is a reservation for claims, not an issuance, so
    replacing it is never checked against the cap. The effective cap is
    ``max_supply - total_burned``; it can drop below the outstanding budget
    after burns and nothing here reconciles the two.
    """

    def __init__(self, max_supply: int, claimable_supply: int = 0, total_burned: int = 0) -> None:
        self.max_supply = as_amount(max_supply, name="max_supply")
        self.claimable_supply = as_amount(claimable_supply, name="claimable_supply")
        self.total_burned = as_amount(total_burned, name="total_burned")

    def set_claimable(self, amount: int) -> None:
        self.claimable_supply = as_amount(amount, name="claimable_supply")

    def consume(self, amount: int) -> None:
        amount = as_amount(amount)
        if amount > self.claimable_supply:
            raise InsufficientClaimableSupplyError(amount, self.claimable_supply)
        self.claimable_supply -= amount

    def record_burn(self, amount: int) -> None:
        amount = as_amount(amount)
        if self.total_burned + amount > UINT256_MAX:
            raise AmountOverflowError("total_burned", self.total_burned, amount)
        self.total_burned += amount

    def effective_cap(self) -> int:
        return self.max_supply - self.total_burned

    def as_dict(self) -> Dict[str, str]:
        return {
            "max_supply": str(self.max_supply),
            "claimable_supply": str(self.claimable_supply),
            "total_burned": str(self.total_burned),
        }

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "SupplyBudget":
        return cls(
            int(payload["max_supply"]),
            claimable_supply=int(payload.get("claimable_supply", 0)),
            total_burned=int(payload.get("total_burned", 0)),
        )
