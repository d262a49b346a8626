"""Token configuration resolved from ``CLAIM_TOKEN_*`` environment variables."""
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any, Dict, Mapping, MutableMapping

from dotenv import load_dotenv
from eth_account import Account

from .encoding import as_amount, normalise_address, parse_amount

DEFAULT_NAME = "Claimable Token"
DEFAULT_SYMBOL = "CLAIM"
DEFAULT_DECIMALS = 18
DEFAULT_MAX_SUPPLY_TOKENS = 1_000_000_000


@dataclass(frozen=True)
class TokenConfig:
    """Static parameters of a token instance.

    ``max_supply`` is expressed in base units (already scaled by ``decimals``).
    """

    admin: str
    name: str = DEFAULT_NAME
    symbol: str = DEFAULT_SYMBOL
    decimals: int = DEFAULT_DECIMALS
    max_supply: int = DEFAULT_MAX_SUPPLY_TOKENS * 10**DEFAULT_DECIMALS

    def __post_init__(self) -> None:
        object.__setattr__(self, "admin", normalise_address(self.admin))
        as_amount(self.max_supply, name="max_supply")
        if not 0 <= self.decimals <= 77:
            raise ValueError(f"decimals must be between 0 and 77, received {self.decimals}")

    def as_dict(self) -> Dict[str, Any]:
        return {
            "admin": self.admin,
            "name": self.name,
            "symbol": self.symbol,
            "decimals": self.decimals,
            "max_supply": str(self.max_supply),
        }

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "TokenConfig":
        return cls(
            admin=payload["admin"],
            name=payload.get("name", DEFAULT_NAME),
            symbol=payload.get("symbol", DEFAULT_SYMBOL),
            decimals=int(payload.get("decimals", DEFAULT_DECIMALS)),
            max_supply=int(payload["max_supply"]),
        )


def _get_env() -> MutableMapping[str, str]:
    """Expose ``os.environ`` separately to simplify testing."""

    load_dotenv()
    return os.environ


def _resolve_admin(env: Mapping[str, str]) -> str:
    address = env.get("CLAIM_TOKEN_ADMIN")
    if address:
        return normalise_address(address)
    secret_key = env.get("CLAIM_TOKEN_ADMIN_KEY")
    if secret_key:
        return Account.from_key(secret_key).address
    raise RuntimeError("Set CLAIM_TOKEN_ADMIN (or CLAIM_TOKEN_ADMIN_KEY) before creating a token.")


def load_config(env: Mapping[str, str] | None = None) -> TokenConfig:
    """Build a :class:`TokenConfig` from environment variables.

    Parameters
    ----------
    env:
        Optional mapping used to resolve variables. When omitted ``os.environ``
        (after ``load_dotenv``) is used.

    Raises
    ------
    RuntimeError
        If neither an admin address nor an admin key is configured.
    """

    if env is None:
        env = _get_env()

    decimals = int(env.get("CLAIM_TOKEN_DECIMALS", DEFAULT_DECIMALS))
    max_supply_tokens = parse_amount(
        env.get("CLAIM_TOKEN_MAX_SUPPLY", str(DEFAULT_MAX_SUPPLY_TOKENS)),
        name="CLAIM_TOKEN_MAX_SUPPLY",
    )
    return TokenConfig(
        admin=_resolve_admin(env),
        name=env.get("CLAIM_TOKEN_NAME", DEFAULT_NAME),
        symbol=env.get("CLAIM_TOKEN_SYMBOL", DEFAULT_SYMBOL),
        decimals=decimals,
        max_supply=max_supply_tokens * 10**decimals,
    )


__all__ = ["TokenConfig", "load_config"]
