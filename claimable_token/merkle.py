"""Sorted-pair keccak Merkle trees for allocation claims.

Leaves commit to ``(beneficiary, total_allocation)`` using the Solidity packed
encoding, so a single proof stays valid for every partial claim against the
same allocation. Parent nodes hash the numerically smaller child first, which
makes proofs independent of left/right placement.
"""
from __future__ import annotations

from typing import Any, Iterable, List, Sequence

from eth_abi.packed import encode_packed
from web3 import Web3

from .encoding import as_amount, as_bytes32, normalise_address


def keccak(data: bytes) -> bytes:
    return bytes(Web3.keccak(data))


def leaf_hash(beneficiary: str, total_allocation: int) -> bytes:
    """Return ``keccak256(abi.encodePacked(beneficiary, total_allocation))``."""

    address = normalise_address(beneficiary)
    amount = as_amount(total_allocation, name="total_allocation")
    return keccak(encode_packed(["address", "uint256"], [address, amount]))


def hash_pair(a: bytes, b: bytes) -> bytes:
    if b < a:
        a, b = b, a
    return keccak(a + b)


def verify(proof: Iterable[Any], root: Any, leaf: Any) -> bool:
    """Return ``True`` when ``proof`` folds ``leaf`` into ``root``.

    Args:
        proof: Sibling hashes from the leaf level upwards.
        root: The committed 32-byte root.
        leaf: The 32-byte leaf hash being proven.

    Raises:
        ValueError: If any input is not a 32-byte hash.
    """

    computed = as_bytes32(leaf)
    for sibling in proof:
        computed = hash_pair(computed, as_bytes32(sibling))
    return computed == as_bytes32(root)


def build_tree(leaves: Iterable[bytes]) -> List[List[bytes]]:
    """Build every level of the tree, leaves first and root last.

    Leaves are sorted so the layout does not depend on input order. An unpaired
    node at the end of a level is promoted to the next level unchanged.
    """

    level = sorted(as_bytes32(leaf) for leaf in leaves)
    if not level:
        raise ValueError("Cannot build a Merkle tree without leaves")
    levels = [level]
    while len(level) > 1:
        parents: List[bytes] = []
        for index in range(0, len(level), 2):
            if index + 1 < len(level):
                parents.append(hash_pair(level[index], level[index + 1]))
            else:
                parents.append(level[index])
        levels.append(parents)
        level = parents
    return levels


def merkle_root(leaves: Iterable[bytes]) -> bytes:
    return build_tree(leaves)[-1][0]


def get_proof(levels: Sequence[Sequence[bytes]], leaf: bytes) -> List[bytes]:
    """Return the sibling path for ``leaf`` in a tree produced by :func:`build_tree`."""

    target = as_bytes32(leaf)
    try:
        position = list(levels[0]).index(target)
    except ValueError as exc:
        raise ValueError(f"Leaf 0x{target.hex()} is not part of the tree") from exc

    proof: List[bytes] = []
    for level in levels[:-1]:
        sibling = position ^ 1
        if sibling < len(level):
            proof.append(level[sibling])
        position //= 2
    return proof


__all__ = ["build_tree", "get_proof", "hash_pair", "keccak", "leaf_hash", "merkle_root", "verify"]
