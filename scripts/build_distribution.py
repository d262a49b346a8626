#!/usr/bin/env python3
"""Build a Merkle allocation distribution from an ``address,amount`` CSV file."""
from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Sequence

from claimable_token.distribution import (
    DistributionError,
    build_distribution,
    load_allocations_csv,
    save_distribution,
)
from claimable_token.encoding import to_hex


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("csv", type=Path, help="CSV file with an 'address,amount' header")
    parser.add_argument(
        "--output",
        type=Path,
        default=Path("distribution.json"),
        help="Destination JSON file holding the root and per-address proofs",
    )
    parser.add_argument("--json", action="store_true", help="Print the root and total as JSON")
    parser.add_argument("--log-level", default="WARNING", help="Logging verbosity (default: WARNING)")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        rows = load_allocations_csv(args.csv)
        distribution = build_distribution(rows)
    except (OSError, DistributionError) as exc:
        print(f"[❌] {exc}")
        return 1

    save_distribution(distribution, args.output)
    logging.info("Wrote %d allocations to %s", len(distribution.claims), args.output)

    summary = {
        "merkle_root": to_hex(distribution.root),
        "total": str(distribution.total),
        "beneficiaries": len(distribution.claims),
        "output": str(args.output),
    }
    if args.json:
        json.dump(summary, sys.stdout, indent=2)
        sys.stdout.write("\n")
    else:
        print(f"[✅] Merkle root: {summary['merkle_root']}")
        print(f"Total allocation: {summary['total']} across {summary['beneficiaries']} beneficiaries")
        print(f"Wrote {args.output}")
    return 0


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    raise SystemExit(main())
