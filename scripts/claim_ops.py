#!/usr/bin/env python3
"""Operate a claimable token whose state is kept in a JSON file.

Example usage::

    python scripts/claim_ops.py --state token.json init
    python scripts/claim_ops.py --state token.json set-root --caller 0xADMIN --distribution distribution.json
    python scripts/claim_ops.py --state token.json set-supply --caller 0xADMIN --amount 1500
    python scripts/claim_ops.py --state token.json claim --caller 0xUSER --amount 400 --distribution distribution.json
    python scripts/claim_ops.py --state token.json approve --caller 0xUSER --spender 0xBURNER --amount 100
    python scripts/claim_ops.py --state token.json burn-from --caller 0xBURNER --owner 0xUSER --amount 100
    python scripts/claim_ops.py --state token.json status --account 0xUSER --json

Every command except ``status`` rewrites the state file after it succeeds.
A rejected command leaves the file untouched and exits with status 1.
"""
from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple

from claimable_token.config import load_config
from claimable_token.distribution import DistributionError, load_distribution
from claimable_token.encoding import as_bytes32, parse_amount, to_hex
from claimable_token.errors import ClaimTokenError
from claimable_token.state import StateFileError, load_state, save_state
from claimable_token.token import CappedClaimToken


def _add_proof_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--distribution",
        type=Path,
        help="Distribution JSON used to look up the allocation and proof of the beneficiary",
    )
    parser.add_argument("--total", help="Total allocation when no distribution file is given")
    parser.add_argument(
        "--proof",
        action="append",
        default=[],
        help="Proof node (bytes32 hex string); repeat for each level",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument("--state", type=Path, default=Path("token_state.json"), help="Token state JSON file")
    parser.add_argument("--json", action="store_true", help="Emit results as JSON for downstream scripting")
    parser.add_argument("--log-level", default="INFO", help="Logging verbosity (default: INFO)")
    commands = parser.add_subparsers(dest="command", required=True)

    init = commands.add_parser("init", help="Create a new state file from CLAIM_TOKEN_* settings")
    init.add_argument("--force", action="store_true", help="Overwrite an existing state file")

    set_root = commands.add_parser("set-root", help="Replace the Merkle root")
    set_root.add_argument("--caller", required=True)
    root_source = set_root.add_mutually_exclusive_group(required=True)
    root_source.add_argument("--root", help="Merkle root as a bytes32 hex string")
    root_source.add_argument("--distribution", type=Path, help="Take the root from a distribution JSON")

    set_supply = commands.add_parser("set-supply", help="Replace the claimable supply")
    set_supply.add_argument("--caller", required=True)
    set_supply.add_argument("--amount", required=True)

    set_delegate = commands.add_parser("set-delegate", help="Configure the claim delegate")
    set_delegate.add_argument("--caller", required=True)
    set_delegate.add_argument("--delegate", required=True)

    mint = commands.add_parser("mint", help="Mint tokens within the effective cap")
    mint.add_argument("--caller", required=True)
    mint.add_argument("--to", required=True)
    mint.add_argument("--amount", required=True)

    burn = commands.add_parser("burn", help="Burn the caller's tokens")
    burn.add_argument("--caller", required=True)
    burn.add_argument("--amount", required=True)

    approve = commands.add_parser("approve", help="Let a spender burn part of the caller's balance")
    approve.add_argument("--caller", required=True)
    approve.add_argument("--spender", required=True)
    approve.add_argument("--amount", required=True)

    burn_from = commands.add_parser("burn-from", help="Burn an owner's tokens against the caller's allowance")
    burn_from.add_argument("--caller", required=True)
    burn_from.add_argument("--owner", required=True)
    burn_from.add_argument("--amount", required=True)

    claim = commands.add_parser("claim", help="Claim part of the caller's allocation")
    claim.add_argument("--caller", required=True)
    claim.add_argument("--amount", required=True)
    _add_proof_arguments(claim)

    claim_for = commands.add_parser("claim-for", help="Claim as the delegate on a beneficiary's behalf")
    claim_for.add_argument("--caller", required=True)
    claim_for.add_argument("--beneficiary", required=True)
    claim_for.add_argument("--amount", required=True)
    _add_proof_arguments(claim_for)

    status = commands.add_parser("status", help="Show supply figures and account positions")
    status.add_argument("--account", action="append", default=[], help="Account to report on; repeatable")
    return parser


def _resolve_allocation(args: argparse.Namespace, beneficiary: str) -> Tuple[int, List[bytes]]:
    if args.distribution is not None:
        entry = load_distribution(args.distribution).entry_for(beneficiary)
        return entry.amount, list(entry.proof)
    if args.total is None:
        raise ValueError("Provide --distribution or --total with --proof nodes")
    return parse_amount(args.total, name="total"), [as_bytes32(node) for node in args.proof]


def _status(token: CappedClaimToken, accounts: Sequence[str]) -> Dict[str, Any]:
    return {
        "admin": token.admin,
        "delegate": token.delegate,
        "merkle_root": to_hex(token.merkle_root),
        "total_supply": str(token.total_supply()),
        "claimable_supply": str(token.claimable_supply),
        "total_burned": str(token.total_burned),
        "effective_cap": str(token.effective_cap()),
        "accounts": {
            account: {
                "balance": str(token.balance_of(account)),
                "claimed": str(token.claimed_amount(account)),
            }
            for account in accounts
        },
    }


def _run(args: argparse.Namespace) -> Tuple[Optional[CappedClaimToken], Dict[str, Any]]:
    if args.command == "init":
        if args.state.exists() and not args.force:
            raise StateFileError(f"{args.state} already exists; pass --force to overwrite")
        token = CappedClaimToken(load_config())
        return token, {"status": "initialised", "admin": token.admin, "max_supply": str(token.config.max_supply)}

    token = load_state(args.state)

    if args.command == "status":
        return None, _status(token, args.account)

    if args.command == "set-root":
        root = load_distribution(args.distribution).root if args.distribution else args.root
        token.set_merkle_root(args.caller, root)
        return token, {"status": "ok", "merkle_root": to_hex(token.merkle_root)}

    if args.command == "set-supply":
        token.set_claimable_supply(args.caller, parse_amount(args.amount))
        return token, {"status": "ok", "claimable_supply": str(token.claimable_supply)}

    if args.command == "set-delegate":
        token.set_delegate(args.caller, args.delegate)
        return token, {"status": "ok", "delegate": token.delegate}

    if args.command == "mint":
        token.mint(args.caller, args.to, parse_amount(args.amount))
        return token, {"status": "ok", "total_supply": str(token.total_supply())}

    if args.command == "burn":
        token.burn(args.caller, parse_amount(args.amount))
        return token, {"status": "ok", "effective_cap": str(token.effective_cap())}

    if args.command == "approve":
        token.approve(args.caller, args.spender, parse_amount(args.amount))
        return token, {"status": "ok", "allowance": str(token.ledger.allowance(args.caller, args.spender))}

    if args.command == "burn-from":
        token.burn_from(args.caller, args.owner, parse_amount(args.amount))
        return token, {"status": "ok", "effective_cap": str(token.effective_cap())}

    if args.command == "claim":
        total, proof = _resolve_allocation(args, args.caller)
        event = token.claim(args.caller, total, parse_amount(args.amount), proof)
        return token, {"status": "ok", **event.as_dict()}

    if args.command == "claim-for":
        total, proof = _resolve_allocation(args, args.beneficiary)
        event = token.claim_for(args.caller, total, parse_amount(args.amount), proof, args.beneficiary)
        return token, {"status": "ok", **event.as_dict()}

    raise ValueError(f"Unknown command {args.command!r}")  # pragma: no cover - argparse guards this


def main(argv: Sequence[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        token, result = _run(args)
    except (ClaimTokenError, StateFileError, DistributionError, ValueError, RuntimeError) as exc:
        if args.json:
            json.dump({"status": "error", "error": type(exc).__name__, "message": str(exc)}, sys.stdout, indent=2)
            sys.stdout.write("\n")
        else:
            print(f"[❌] {exc}")
        return 1

    if token is not None:
        save_state(token, args.state)

    if args.json:
        json.dump(result, sys.stdout, indent=2)
        sys.stdout.write("\n")
    else:
        print(f"[✅] {args.command} complete")
        print(json.dumps(result, indent=2))
    return 0


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    raise SystemExit(main())
