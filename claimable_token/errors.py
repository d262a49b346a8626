"""Exceptions raised when a claim, mint, burn or admin update is rejected.

Every rejection happens before the first state mutation, so catching one of
these errors always means the token state is unchanged. Each error keeps the
offending values as attributes so callers can decide whether to retry with
corrected parameters.
"""
from __future__ import annotations


class ClaimTokenError(RuntimeError):
    """Base class for all rejections raised by :mod:`claimable_token`."""


class AmountOverflowError(ClaimTokenError):
    """Raised when a counter would leave the uint256 range."""

    def __init__(self, counter: str, current: int, amount: int) -> None:
        self.counter = counter
        self.current = current
        self.amount = amount
        super().__init__(f"{counter} overflow: {current} + {amount} exceeds uint256")


class ZeroClaimError(ClaimTokenError):
    """Raised when a direct claim requests nothing."""

    def __init__(self, beneficiary: str) -> None:
        self.beneficiary = beneficiary
        super().__init__(f"Claim amount for {beneficiary} must be greater than zero")


class OverAllocationError(ClaimTokenError):
    """Raised when a single claim asks for more than the whole allocation."""

    def __init__(self, beneficiary: str, amount: int, total_allocation: int) -> None:
        self.beneficiary = beneficiary
        self.amount = amount
        self.total_allocation = total_allocation
        super().__init__(
            f"Claim of {amount} for {beneficiary} exceeds total allocation {total_allocation}"
        )


class AllocationExhaustedError(ClaimTokenError):
    """Raised when the beneficiary has already claimed its entire allocation."""

    def __init__(self, beneficiary: str, claimed: int, total_allocation: int) -> None:
        self.beneficiary = beneficiary
        self.claimed = claimed
        self.total_allocation = total_allocation
        super().__init__(
            f"Allocation of {total_allocation} for {beneficiary} is exhausted ({claimed} claimed)"
        )


class ClaimExceedsRemainingAllocationError(ClaimTokenError):
    """Raised when a partial claim would push the cumulative total past the allocation."""

    def __init__(self, beneficiary: str, claimed: int, amount: int, total_allocation: int) -> None:
        self.beneficiary = beneficiary
        self.claimed = claimed
        self.amount = amount
        self.total_allocation = total_allocation
        self.remaining = total_allocation - claimed
        super().__init__(
            f"Claim of {amount} for {beneficiary} exceeds remaining allocation {self.remaining}"
        )


class InsufficientClaimableSupplyError(ClaimTokenError):
    """Raised when the claim budget cannot cover the requested amount."""

    def __init__(self, amount: int, claimable_supply: int) -> None:
        self.amount = amount
        self.claimable_supply = claimable_supply
        super().__init__(f"Claim of {amount} exceeds claimable supply {claimable_supply}")


class InvalidProofError(ClaimTokenError):
    """Raised when the Merkle proof does not reconstruct the current root."""

    def __init__(self, beneficiary: str, total_allocation: int) -> None:
        self.beneficiary = beneficiary
        self.total_allocation = total_allocation
        super().__init__(
            f"Invalid Merkle proof for {beneficiary} with allocation {total_allocation}"
        )


class DelegateNotConfiguredError(ClaimTokenError):
    """Raised when a delegated claim is attempted before a delegate is set."""

    def __init__(self) -> None:
        super().__init__("No claim delegate is configured")


class UnauthorizedDelegateError(ClaimTokenError):
    """Raised when someone other than the configured delegate claims on a beneficiary's behalf."""

    def __init__(self, caller: str, delegate: str) -> None:
        self.caller = caller
        self.delegate = delegate
        super().__init__(f"{caller} is not the configured delegate {delegate}")


class InvalidDelegateError(ClaimTokenError):
    """Raised when the zero address is offered as delegate or admin."""

    def __init__(self, address: str) -> None:
        self.address = address
        super().__init__(f"{address} cannot be used as a privileged address")


class CapExceededError(ClaimTokenError):
    """Raised when a mint or claim would push issuance past the effective cap."""

    def __init__(self, amount: int, total_issued: int, effective_cap: int) -> None:
        self.amount = amount
        self.total_issued = total_issued
        self.effective_cap = effective_cap
        super().__init__(
            f"Issuing {amount} on top of {total_issued} exceeds effective cap {effective_cap}"
        )


class UnauthorizedError(ClaimTokenError):
    """Raised when a non-admin caller invokes an admin operation."""

    def __init__(self, caller: str, operation: str) -> None:
        self.caller = caller
        self.operation = operation
        super().__init__(f"{caller} is not allowed to call {operation}")


class InsufficientBalanceError(ClaimTokenError):
    """Raised by the ledger when an account cannot cover a debit."""

    def __init__(self, account: str, balance: int, needed: int) -> None:
        self.account = account
        self.balance = balance
        self.needed = needed
        super().__init__(f"{account} balance {balance} is below {needed}")


class InsufficientAllowanceError(ClaimTokenError):
    """Raised by the ledger when a spender's allowance cannot cover a burn."""

    def __init__(self, owner: str, spender: str, allowance: int, needed: int) -> None:
        self.owner = owner
        self.spender = spender
        self.allowance = allowance
        self.needed = needed
        super().__init__(f"Allowance of {spender} over {owner} is {allowance}, needed {needed}")


__all__ = [
    "AllocationExhaustedError",
    "AmountOverflowError",
    "CapExceededError",
    "ClaimExceedsRemainingAllocationError",
    "ClaimTokenError",
    "DelegateNotConfiguredError",
    "InsufficientAllowanceError",
    "InsufficientBalanceError",
    "InsufficientClaimableSupplyError",
    "InvalidDelegateError",
    "InvalidProofError",
    "OverAllocationError",
    "UnauthorizedDelegateError",
    "UnauthorizedError",
    "ZeroClaimError",
]
