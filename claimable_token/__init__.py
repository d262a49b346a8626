"""Capped token ledger with Merkle allocation claims, delegated claims and burn accounting."""
from __future__ import annotations

from .allocation import AllocationLedger
from .claims import ClaimCoordinator, DelegatedClaim, DirectClaim
from .config import TokenConfig, load_config
from .distribution import Distribution, build_distribution, load_allocations_csv, load_distribution
from .encoding import UINT256_MAX, ZERO_ADDRESS, normalise_address
from .errors import (
    AllocationExhaustedError,
    AmountOverflowError,
    CapExceededError,
    ClaimExceedsRemainingAllocationError,
    ClaimTokenError,
    DelegateNotConfiguredError,
    InsufficientAllowanceError,
    InsufficientBalanceError,
    InsufficientClaimableSupplyError,
    InvalidDelegateError,
    InvalidProofError,
    OverAllocationError,
    UnauthorizedDelegateError,
    UnauthorizedError,
    ZeroClaimError,
)
from .events import Claimed, ClaimedAndForwarded
from .ledger import TokenLedger
from .merkle import leaf_hash, verify
from .supply import SupplyBudget
from .token import CappedClaimToken

__all__ = [
    "AllocationExhaustedError",
    "AllocationLedger",
    "AmountOverflowError",
    "CapExceededError",
    "CappedClaimToken",
    "ClaimCoordinator",
    "ClaimExceedsRemainingAllocationError",
    "ClaimTokenError",
    "Claimed",
    "ClaimedAndForwarded",
    "DelegateNotConfiguredError",
    "DelegatedClaim",
    "DirectClaim",
    "Distribution",
    "InsufficientAllowanceError",
    "InsufficientBalanceError",
    "InsufficientClaimableSupplyError",
    "InvalidDelegateError",
    "InvalidProofError",
    "OverAllocationError",
    "SupplyBudget",
    "TokenConfig",
    "TokenLedger",
    "UINT256_MAX",
    "UnauthorizedDelegateError",
    "UnauthorizedError",
    "ZERO_ADDRESS",
    "ZeroClaimError",
    "build_distribution",
    "leaf_hash",
    "load_allocations_csv",
    "load_config",
    "load_distribution",
    "normalise_address",
    "verify",
]
