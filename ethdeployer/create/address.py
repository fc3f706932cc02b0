"""CREATE (nonce-based) contract address prediction.

The host derives the address of a contract created by ``sender`` while its
nonce is ``nonce`` as the last 20 bytes of::

    keccak256(rlp([sender, nonce]))

``sender`` is always 20 bytes and the nonce is small, so the RLP list can
be laid out by hand. The list prefix (0xc0 + payload length) and the nonce
prefix depend only on how many bytes the nonce needs:

    nonce == 0              d6 94 <sender> 80
    0x01 .. 0x7f            d6 94 <sender> <nonce>
    0x80 .. 0xff            d7 94 <sender> 81 <1 byte>
    0x100 .. 0xffff         d8 94 <sender> 82 <2 bytes>
    0x10000 .. 0xffffff     d9 94 <sender> 83 <3 bytes>
    above                   da 94 <sender> 84 <4 bytes>

Nonces are assumed to fit in four bytes. Anything larger is truncated to
its low four bytes and no longer matches ``rlp.encode([sender, nonce])``.
"""

from __future__ import annotations

from dataclasses import dataclass

from ethdeployer.common.crypto import keccak256
from ethdeployer.common.types import ADDRESS_SIZE, AddressLike, normalize_address

# 0x80 + 20: string prefix of a 20-byte address
ADDRESS_PREFIX = 0x94
# RLP empty string, the encoding of integer zero
ZERO_NONCE_MARKER = 0x80
MAX_NONCE_BYTES = 4
NONCE_MASK = (1 << (8 * MAX_NONCE_BYTES)) - 1


@dataclass(frozen=True)
class NonceSizeClass:
    name: str
    upper: int          # inclusive upper bound of the class
    list_prefix: int
    width: int          # big-endian bytes after the length prefix, 0 = inline

    def encode_nonce(self, nonce: int) -> bytes:
        if nonce == 0:
            return bytes([ZERO_NONCE_MARKER])
        if self.width == 0:
            return bytes([nonce])
        return bytes([0x80 + self.width]) + (nonce & NONCE_MASK).to_bytes(self.width, "big")


NONCE_SIZE_CLASSES: tuple[NonceSizeClass, ...] = (
    NonceSizeClass("zero", 0x0, 0xD6, 0),
    NonceSizeClass("single", 0x7F, 0xD6, 0),
    NonceSizeClass("uint8", 0xFF, 0xD7, 1),
    NonceSizeClass("uint16", 0xFFFF, 0xD8, 2),
    NonceSizeClass("uint24", 0xFFFFFF, 0xD9, 3),
    NonceSizeClass("uint32", NONCE_MASK, 0xDA, 4),
)


def nonce_size_class(nonce: int) -> NonceSizeClass:
    """Pick the encoding class for a nonce.

    Nonces past the 4-byte range fall into the last class.
    """
    if isinstance(nonce, bool) or not isinstance(nonce, int):
        raise TypeError(f"Nonce must be an int, got {type(nonce).__name__}")
    if nonce < 0:
        raise ValueError(f"Nonce must be non-negative, got {nonce}")
    for size_class in NONCE_SIZE_CLASSES:
        if nonce <= size_class.upper:
            return size_class
    return NONCE_SIZE_CLASSES[-1]


def encode_create_preimage(sender: AddressLike, nonce: int) -> bytes:
    """RLP encoding of ``[sender, nonce]`` as hashed by CREATE."""
    sender = normalize_address(sender)
    size_class = nonce_size_class(nonce)
    return (
        bytes([size_class.list_prefix, ADDRESS_PREFIX])
        + sender
        + size_class.encode_nonce(nonce)
    )


def compute_create_address(sender: AddressLike, nonce: int) -> bytes:
    """
    Compute the address a CREATE by ``sender`` at ``nonce`` will produce.

    Args:
        sender: 20-byte creator address or its 0x-prefixed hex form
        nonce: creator's nonce at the time of creation

    Returns:
        20-byte contract address

    Raises:
        ValueError: If sender is not 20 bytes or nonce is negative

    Example:
        >>> sender = bytes.fromhex("6ac7ea33f8831ea9dcc53393aaa88b25a785dbf0")
        >>> compute_create_address(sender, 0).hex()
        'cd234a471b72ba2f1ccf0a70fcaba648a5eecd8d'
    """
    return keccak256(encode_create_preimage(sender, nonce))[-ADDRESS_SIZE:]
