"""Shared addresses and builders for the claim token tests."""
from __future__ import annotations

from typing import List, Sequence, Tuple

from claimable_token.config import TokenConfig
from claimable_token.distribution import Distribution, build_distribution
from claimable_token.token import CappedClaimToken

ADMIN = "0x" + "aa" * 20
DELEGATE = "0x" + "dd" * 20
ALICE = "0x1111111111111111111111111111111111111111"
BOB = "0x2222222222222222222222222222222222222222"
CAROL = "0x3333333333333333333333333333333333333333"
MALLORY = "0x" + "ee" * 20

DEFAULT_ALLOCATIONS: Tuple[Tuple[str, int], ...] = ((ALICE, 1000), (BOB, 1000), (CAROL, 250))


def make_distribution(rows: Sequence[Tuple[str, int]] = DEFAULT_ALLOCATIONS) -> Distribution:
    return build_distribution(rows)


def make_token(
    distribution: Distribution,
    *,
    max_supply: int = 1_000_000,
    claimable_supply: int = 1500,
    delegate: str | None = None,
) -> CappedClaimToken:
    token = CappedClaimToken(TokenConfig(admin=ADMIN, max_supply=max_supply))
    token.set_merkle_root(ADMIN, distribution.root)
    token.set_claimable_supply(ADMIN, claimable_supply)
    if delegate is not None:
        token.set_delegate(ADMIN, delegate)
    return token


def proof_for(distribution: Distribution, beneficiary: str) -> List[bytes]:
    return list(distribution.entry_for(beneficiary).proof)
