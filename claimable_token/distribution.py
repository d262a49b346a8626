"""Allocation lists and the Merkle distribution built from them.

A distribution file maps each beneficiary to its total allocation and the
proof that ties ``(beneficiary, amount)`` to the published root. Proofs do not
depend on the claim amount, so one entry serves every partial claim.
"""
from __future__ import annotations

import csv
import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Tuple

from .encoding import as_amount, as_bytes32, normalise_address, parse_amount, to_hex
from .merkle import build_tree, get_proof, leaf_hash


class DistributionError(RuntimeError):
    """Raised when an allocation list or distribution file is malformed."""


@dataclass(frozen=True)
class AllocationEntry:
    amount: int
    proof: Tuple[bytes, ...]

    def as_dict(self) -> Dict[str, Any]:
        return {"amount": str(self.amount), "proof": [to_hex(node) for node in self.proof]}


@dataclass(frozen=True)
class Distribution:
    """Merkle root, total and per-beneficiary proofs of one allocation round."""

    root: bytes
    total: int
    claims: Mapping[str, AllocationEntry] = field(default_factory=dict)

    def entry_for(self, beneficiary: str) -> AllocationEntry:
        address = normalise_address(beneficiary)
        try:
            return self.claims[address]
        except KeyError as exc:
            raise DistributionError(f"{address} has no allocation in this distribution") from exc

    def as_dict(self) -> Dict[str, Any]:
        return {
            "merkle_root": to_hex(self.root),
            "total": str(self.total),
            "claims": {address: entry.as_dict() for address, entry in self.claims.items()},
        }


def build_distribution(rows: Iterable[Tuple[str, int]]) -> Distribution:
    """Build the tree for ``(beneficiary, total_allocation)`` rows.

    Raises:
        DistributionError: If the list is empty or names a beneficiary twice.
    """

    allocations: Dict[str, int] = {}
    for beneficiary, amount in rows:
        address = normalise_address(beneficiary)
        if address in allocations:
            raise DistributionError(f"Duplicate allocation for {address}")
        allocations[address] = as_amount(amount)
    if not allocations:
        raise DistributionError("Allocation list is empty")

    leaves = {address: leaf_hash(address, amount) for address, amount in allocations.items()}
    levels = build_tree(leaves.values())
    claims = {
        address: AllocationEntry(amount=amount, proof=tuple(get_proof(levels, leaves[address])))
        for address, amount in sorted(allocations.items())
    }
    return Distribution(root=levels[-1][0], total=sum(allocations.values()), claims=claims)


def load_allocations_csv(path: Path) -> List[Tuple[str, int]]:
    """Read ``address,amount`` rows from a CSV file with a header line."""

    rows: List[Tuple[str, int]] = []
    with path.open("r", encoding="utf-8", newline="") as handle:
        reader = csv.DictReader(handle)
        fieldnames = reader.fieldnames or []
        if "address" not in fieldnames or "amount" not in fieldnames:
            raise DistributionError(f"{path} needs an 'address,amount' header")
        for line_number, record in enumerate(reader, start=2):
            address = (record.get("address") or "").strip()
            amount = (record.get("amount") or "").strip()
            if not address and not amount:
                continue
            try:
                rows.append((normalise_address(address), parse_amount(amount)))
            except ValueError as exc:
                raise DistributionError(f"{path}:{line_number}: {exc}") from exc
    return rows


def distribution_from_dict(payload: Mapping[str, Any]) -> Distribution:
    try:
        claims = {
            normalise_address(address): AllocationEntry(
                amount=int(entry["amount"]),
                proof=tuple(as_bytes32(node) for node in entry.get("proof", [])),
            )
            for address, entry in payload["claims"].items()
        }
        return Distribution(
            root=as_bytes32(payload["merkle_root"]),
            total=int(payload.get("total", sum(entry.amount for entry in claims.values()))),
            claims=claims,
        )
    except (KeyError, TypeError, ValueError) as exc:
        raise DistributionError(f"Malformed distribution payload: {exc}") from exc


def load_distribution(path: Path) -> Distribution:
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise DistributionError(f"Failed to read distribution JSON at {path}: {exc}") from exc
    return distribution_from_dict(payload)


def save_distribution(distribution: Distribution, path: Path) -> None:
    path.write_text(json.dumps(distribution.as_dict(), indent=2) + "\n", encoding="utf-8")


__all__ = [
    "AllocationEntry",
    "Distribution",
    "DistributionError",
    "build_distribution",
    "distribution_from_dict",
    "load_allocations_csv",
    "load_distribution",
    "save_distribution",
]
