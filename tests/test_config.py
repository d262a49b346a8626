from __future__ import annotations

import pytest
from eth_account import Account

import claimable_token.config as config_module
from claimable_token.config import DEFAULT_MAX_SUPPLY_TOKENS, TokenConfig, load_config
from claimable_token.encoding import normalise_address

from tests.helpers import ADMIN

ADMIN_KEY = "0x" + "11" * 32


def test_load_config_uses_defaults() -> None:
    config = load_config({"CLAIM_TOKEN_ADMIN": ADMIN})
    assert config.admin == normalise_address(ADMIN)
    assert config.decimals == 18
    assert config.max_supply == DEFAULT_MAX_SUPPLY_TOKENS * 10**18


def test_load_config_scales_max_supply_by_decimals() -> None:
    config = load_config(
        {
            "CLAIM_TOKEN_ADMIN": ADMIN,
            "CLAIM_TOKEN_DECIMALS": "6",
            "CLAIM_TOKEN_MAX_SUPPLY": "21_000_000",
            "CLAIM_TOKEN_SYMBOL": "DROP",
        }
    )
    assert config.max_supply == 21_000_000 * 10**6
    assert config.symbol == "DROP"


def test_load_config_derives_admin_from_key() -> None:
    config = load_config({"CLAIM_TOKEN_ADMIN_KEY": ADMIN_KEY})
    assert config.admin == Account.from_key(ADMIN_KEY).address


def test_load_config_requires_an_admin() -> None:
    with pytest.raises(RuntimeError):
        load_config({})


def test_load_config_reads_process_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(config_module, "load_dotenv", lambda: False)
    monkeypatch.setenv("CLAIM_TOKEN_ADMIN", ADMIN)
    monkeypatch.setenv("CLAIM_TOKEN_NAME", "Env Token")
    assert load_config().name == "Env Token"


def test_token_config_rejects_bad_admin() -> None:
    with pytest.raises(ValueError):
        TokenConfig(admin="0x1234")


def test_token_config_round_trips_through_dict() -> None:
    config = TokenConfig(admin=ADMIN, max_supply=5)
    assert TokenConfig.from_dict(config.as_dict()) == config
