"""Events emitted by successful claims."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Union


@dataclass(frozen=True)
class Claimed:
    """A beneficiary claimed ``amount`` tokens for itself."""

    beneficiary: str
    amount: int

    def as_dict(self) -> Dict[str, Any]:
        return {"event": "Claimed", "beneficiary": self.beneficiary, "amount": str(self.amount)}


@dataclass(frozen=True)
class ClaimedAndForwarded:
    """The delegate claimed ``amount`` against ``beneficiary``'s allocation and kept the tokens."""

    beneficiary: str
    amount: int

    def as_dict(self) -> Dict[str, Any]:
        return {
            "event": "ClaimedAndForwarded",
            "beneficiary": self.beneficiary,
            "amount": str(self.amount),
        }


ClaimEvent = Union[Claimed, ClaimedAndForwarded]
