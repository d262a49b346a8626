"""Fixtures for a token with a three-beneficiary allocation round."""
from __future__ import annotations

import pytest

from claimable_token.distribution import Distribution
from claimable_token.token import CappedClaimToken

from .helpers import DELEGATE, make_distribution, make_token


@pytest.fixture()
def distribution() -> Distribution:
    return make_distribution()


@pytest.fixture()
def token(distribution: Distribution) -> CappedClaimToken:
    return make_token(distribution)


@pytest.fixture()
def delegated_token(distribution: Distribution) -> CappedClaimToken:
    return make_token(distribution, delegate=DELEGATE)
