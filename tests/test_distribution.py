from __future__ import annotations

from pathlib import Path

import pytest

from claimable_token.distribution import (
    DistributionError,
    build_distribution,
    load_allocations_csv,
    load_distribution,
    save_distribution,
)
from claimable_token.encoding import normalise_address
from claimable_token.merkle import leaf_hash, verify

from tests.helpers import ALICE, BOB, CAROL


def test_build_distribution_produces_verifiable_proofs() -> None:
    distribution = build_distribution([(ALICE, 1000), (BOB, 1000), (CAROL, 250)])
    assert distribution.total == 2250
    for address, entry in distribution.claims.items():
        assert verify(entry.proof, distribution.root, leaf_hash(address, entry.amount))


def test_build_distribution_rejects_duplicates() -> None:
    with pytest.raises(DistributionError):
        build_distribution([(ALICE, 1), (ALICE.upper().replace("0X", "0x"), 2)])


def test_build_distribution_rejects_empty_lists() -> None:
    with pytest.raises(DistributionError):
        build_distribution([])


def test_entry_for_unknown_beneficiary() -> None:
    distribution = build_distribution([(ALICE, 1)])
    with pytest.raises(DistributionError):
        distribution.entry_for(BOB)


def test_load_allocations_csv(tmp_path: Path) -> None:
    csv_path = tmp_path / "allocations.csv"
    csv_path.write_text(f"address,amount\n{ALICE},1000\n\n{BOB},0x10\n", encoding="utf-8")
    assert load_allocations_csv(csv_path) == [(normalise_address(ALICE), 1000), (normalise_address(BOB), 16)]


def test_load_allocations_csv_reports_bad_rows(tmp_path: Path) -> None:
    csv_path = tmp_path / "allocations.csv"
    csv_path.write_text(f"address,amount\n{ALICE},ten\n", encoding="utf-8")
    with pytest.raises(DistributionError, match=":2:"):
        load_allocations_csv(csv_path)


def test_load_allocations_csv_requires_header(tmp_path: Path) -> None:
    csv_path = tmp_path / "allocations.csv"
    csv_path.write_text(f"{ALICE},1000\n", encoding="utf-8")
    with pytest.raises(DistributionError):
        load_allocations_csv(csv_path)


def test_distribution_file_round_trip(tmp_path: Path) -> None:
    distribution = build_distribution([(ALICE, 1000), (BOB, 5)])
    path = tmp_path / "distribution.json"
    save_distribution(distribution, path)
    assert load_distribution(path) == distribution


def test_load_distribution_rejects_garbage(tmp_path: Path) -> None:
    path = tmp_path / "distribution.json"
    path.write_text("{\"claims\": {}}", encoding="utf-8")
    with pytest.raises(DistributionError):
        load_distribution(path)
