"""
Cryptographic utilities.

- keccak256 hashing (NOT SHA3-256)
"""

from __future__ import annotations

from Crypto.Hash import keccak as _keccak_mod


def keccak256(data: bytes) -> bytes:
    """Compute Keccak-256 hash."""
    h = _keccak_mod.new(digest_bits=256)
    h.update(data)
    return h.digest()
