"""In-process fungible token ledger used as the issuance backend.

Only the surface the claim subsystem needs is implemented: irreversible
issuance and destruction, balances, and allowances for delegated burns.
"""
from __future__ import annotations

from typing import Any, Dict, Mapping, Tuple

from .encoding import UINT256_MAX, as_amount, normalise_address
from .errors import AmountOverflowError, InsufficientAllowanceError, InsufficientBalanceError


class TokenLedger:
    def __init__(self) -> None:
        self._balances: Dict[str, int] = {}
        self._allowances: Dict[Tuple[str, str], int] = {}
        self._total_issued = 0

    def total_issued(self) -> int:
        return self._total_issued

    def balance_of(self, account: str) -> int:
        return self._balances.get(normalise_address(account), 0)

    def allowance(self, owner: str, spender: str) -> int:
        return self._allowances.get((normalise_address(owner), normalise_address(spender)), 0)

    def approve(self, owner: str, spender: str, amount: int) -> None:
        key = (normalise_address(owner), normalise_address(spender))
        self._allowances[key] = as_amount(amount)

    def credit(self, account: str, amount: int) -> None:
        """Issue ``amount`` new tokens to ``account``."""

        address = normalise_address(account)
        amount = as_amount(amount)
        if self._total_issued + amount > UINT256_MAX:
            raise AmountOverflowError("total_issued", self._total_issued, amount)
        self._total_issued += amount
        self._balances[address] = self._balances.get(address, 0) + amount

    def debit(self, account: str, amount: int) -> None:
        """Destroy ``amount`` tokens held by ``account``."""

        address = normalise_address(account)
        amount = as_amount(amount)
        balance = self._balances.get(address, 0)
        if amount > balance:
            raise InsufficientBalanceError(address, balance, amount)
        self._balances[address] = balance - amount
        self._total_issued -= amount

    def debit_from(self, spender: str, owner: str, amount: int) -> None:
        """Destroy ``amount`` of ``owner``'s tokens against ``spender``'s allowance.

        Both the allowance and the balance are checked before either is
        touched. The maximum uint256 allowance is treated as unlimited and is
        not decremented.
        """

        owner_address = normalise_address(owner)
        spender_address = normalise_address(spender)
        amount = as_amount(amount)
        key = (owner_address, spender_address)
        allowance = self._allowances.get(key, 0)
        if amount > allowance:
            raise InsufficientAllowanceError(owner_address, spender_address, allowance, amount)
        balance = self._balances.get(owner_address, 0)
        if amount > balance:
            raise InsufficientBalanceError(owner_address, balance, amount)
        if allowance != UINT256_MAX:
            self._allowances[key] = allowance - amount
        self.debit(owner_address, amount)

    def as_dict(self) -> Dict[str, Any]:
        return {
            "total_issued": str(self._total_issued),
            "balances": {address: str(balance) for address, balance in self._balances.items()},
            "allowances": [
                {"owner": owner, "spender": spender, "amount": str(amount)}
                for (owner, spender), amount in self._allowances.items()
            ],
        }

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "TokenLedger":
        ledger = cls()
        for address, balance in payload.get("balances", {}).items():
            ledger._balances[normalise_address(address)] = as_amount(int(balance))
        for entry in payload.get("allowances", []):
            ledger.approve(entry["owner"], entry["spender"], int(entry["amount"]))
        total = as_amount(int(payload.get("total_issued", 0)), name="total_issued")
        if total != sum(ledger._balances.values()):
            raise ValueError("total_issued does not match the sum of balances")
        ledger._total_issued = total
        return ledger
