"""JSON snapshots of a :class:`~claimable_token.token.CappedClaimToken`."""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Mapping

from .allocation import AllocationLedger
from .config import TokenConfig
from .encoding import to_hex
from .events import ClaimEvent, Claimed, ClaimedAndForwarded
from .ledger import TokenLedger
from .supply import SupplyBudget
from .token import CappedClaimToken

_LOGGER = logging.getLogger(__name__)

STATE_VERSION = 1

_EVENT_TYPES = {"Claimed": Claimed, "ClaimedAndForwarded": ClaimedAndForwarded}


class StateFileError(RuntimeError):
    """Raised when a state file cannot be read back into a token."""


def snapshot(token: CappedClaimToken) -> Dict[str, Any]:
    return {
        "version": STATE_VERSION,
        "config": token.config.as_dict(),
        "admin": token.admin,
        "merkle_root": to_hex(token.merkle_root),
        "delegate": token.delegate,
        "budget": token.budget.as_dict(),
        "claimed": token.allocations.as_dict(),
        "ledger": token.ledger.as_dict(),
        "events": [event.as_dict() for event in token.events],
    }


def _event_from_dict(payload: Mapping[str, Any]) -> ClaimEvent:
    try:
        event_cls = _EVENT_TYPES[payload["event"]]
    except KeyError as exc:
        raise StateFileError(f"Unknown event record {payload!r}") from exc
    return event_cls(payload["beneficiary"], int(payload["amount"]))


def restore(payload: Mapping[str, Any]) -> CappedClaimToken:
    if payload.get("version") != STATE_VERSION:
        raise StateFileError(f"Unsupported state version {payload.get('version')!r}")
    try:
        config = TokenConfig.from_dict(payload["config"])
        token = CappedClaimToken(
            config,
            ledger=TokenLedger.from_dict(payload["ledger"]),
            allocations=AllocationLedger.from_dict(payload.get("claimed", {})),
            budget=SupplyBudget.from_dict(payload["budget"]),
            merkle_root=payload["merkle_root"],
            delegate=payload["delegate"],
            events=[_event_from_dict(entry) for entry in payload.get("events", [])],
            admin=payload.get("admin"),
        )
    except (KeyError, TypeError, ValueError) as exc:
        raise StateFileError(f"Malformed state payload: {exc}") from exc
    return token


def save_state(token: CappedClaimToken, path: Path) -> None:
    path.write_text(json.dumps(snapshot(token), indent=2) + "\n", encoding="utf-8")
    _LOGGER.debug("Wrote token state to %s", path)


def load_state(path: Path) -> CappedClaimToken:
    if not path.is_file():
        raise StateFileError(f"State file not found at {path}")
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise StateFileError(f"Failed to parse state JSON at {path}") from exc
    return restore(payload)


__all__ = ["StateFileError", "load_state", "restore", "save_state", "snapshot"]
