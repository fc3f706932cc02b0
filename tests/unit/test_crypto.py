"""Unit tests for the keccak256 wrapper.

Tests the wrapper code in ethdeployer.common.crypto, not pycryptodome.
"""

import hashlib

from eth_utils import keccak

from ethdeployer.common.crypto import keccak256


class TestKeccak256:
    def test_hash_empty(self):
        assert keccak256(b"").hex() == (
            "c5d2460186f7233c927e7db2dcc703c0e500b653ca82273b7bfad8045d85a470"
        )

    def test_not_sha3(self):
        assert keccak256(b"abc") != hashlib.sha3_256(b"abc").digest()

    def test_matches_eth_utils(self):
        for data in [b"", b"a", b"a" * 100, b"a" * 10000]:
            assert keccak256(data) == keccak(data)

    def test_hash_length(self):
        for data in [b"", b"a", b"a" * 100]:
            assert len(keccak256(data)) == 32
