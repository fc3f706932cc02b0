"""
RLP (Recursive Length Prefix) serialization.

General-purpose encoder used by the host to derive creation addresses the
way a client does, plus a decoder so encoded preimages can be checked for
being self-describing.

https://ethereum.org/en/developers/docs/data-structures-and-encoding/rlp/
"""

from __future__ import annotations

from typing import Union

RLPItem = Union[bytes, list["RLPItem"]]

SHORT_STRING_OFFSET = 0x80
LONG_STRING_OFFSET = 0xB7
SHORT_LIST_OFFSET = 0xC0
LONG_LIST_OFFSET = 0xF7
SHORT_PAYLOAD_MAX = 55


class RLPDecodingError(Exception):
    pass


# ---------------------------------------------------------------------------
# Encoding
# ---------------------------------------------------------------------------

def encode(item: RLPItem | int) -> bytes:
    """Encode bytes, a non-negative int, or a (nested) list of those.

    Integers are big-endian with no leading zeros; zero is the empty string.
    """
    if isinstance(item, bool):
        raise TypeError("Refusing to RLP-encode bool")
    if isinstance(item, int):
        return _encode_bytes(encode_uint(item))
    if isinstance(item, (bytes, bytearray, memoryview)):
        return _encode_bytes(bytes(item))
    if isinstance(item, (list, tuple)):
        payload = b"".join(encode(child) for child in item)
        return _length_prefix(len(payload), SHORT_LIST_OFFSET, LONG_LIST_OFFSET) + payload
    raise TypeError(f"Cannot RLP-encode type {type(item).__name__}")


def _encode_bytes(data: bytes) -> bytes:
    if len(data) == 1 and data[0] < SHORT_STRING_OFFSET:
        return data
    return _length_prefix(len(data), SHORT_STRING_OFFSET, LONG_STRING_OFFSET) + data


def _length_prefix(length: int, short_offset: int, long_offset: int) -> bytes:
    if length <= SHORT_PAYLOAD_MAX:
        return bytes([short_offset + length])
    len_bytes = encode_uint(length)
    return bytes([long_offset + len(len_bytes)]) + len_bytes


def encode_uint(value: int) -> bytes:
    """Big-endian bytes of an unsigned integer, without leading zeros."""
    if value < 0:
        raise ValueError("RLP cannot encode negative integers")
    if value == 0:
        return b""
    return value.to_bytes((value.bit_length() + 7) // 8, "big")


# ---------------------------------------------------------------------------
# Decoding
# ---------------------------------------------------------------------------

def decode(data: bytes | bytearray | memoryview) -> RLPItem:
    """Decode exactly one RLP item; trailing bytes are an error."""
    view = memoryview(bytes(data))
    item, consumed = _decode_item(view, 0)
    if consumed != len(view):
        raise RLPDecodingError(f"Trailing bytes: consumed {consumed} of {len(view)}")
    return item


def decode_uint(data: bytes) -> int:
    if data[:1] == b"\x00":
        raise RLPDecodingError("Leading zeros in integer")
    return int.from_bytes(data, "big")


def _decode_item(data: memoryview, offset: int) -> tuple[RLPItem, int]:
    if offset >= len(data):
        raise RLPDecodingError("Unexpected end of data")

    prefix = data[offset]
    if prefix < SHORT_STRING_OFFSET:
        return bytes(data[offset : offset + 1]), offset + 1

    if prefix < SHORT_LIST_OFFSET:
        start, end = _payload_bounds(data, offset, SHORT_STRING_OFFSET, LONG_STRING_OFFSET)
        if end - start == 1 and data[start] < SHORT_STRING_OFFSET:
            raise RLPDecodingError("Single byte should not have string prefix")
        return bytes(data[start:end]), end

    start, end = _payload_bounds(data, offset, SHORT_LIST_OFFSET, LONG_LIST_OFFSET)
    items: list[RLPItem] = []
    pos = start
    while pos < end:
        item, pos = _decode_item(data, pos)
        items.append(item)
    if pos != end:
        raise RLPDecodingError("List items did not consume exact payload")
    return items, end


def _payload_bounds(
    data: memoryview, offset: int, short_offset: int, long_offset: int
) -> tuple[int, int]:
    """Return (start, end) of the payload whose prefix sits at offset."""
    prefix = data[offset]
    if prefix <= long_offset:
        start = offset + 1
        length = prefix - short_offset
    else:
        len_of_len = prefix - long_offset
        start = offset + 1 + len_of_len
        if start > len(data):
            raise RLPDecodingError("Length-of-length exceeds data")
        len_bytes = data[offset + 1 : start]
        if len_bytes[0] == 0:
            raise RLPDecodingError("Leading zeros in length")
        length = int.from_bytes(len_bytes, "big")
        if length <= SHORT_PAYLOAD_MAX:
            raise RLPDecodingError("Should have used short encoding")
    end = start + length
    if end > len(data):
        raise RLPDecodingError("Payload length exceeds data")
    return start, end
