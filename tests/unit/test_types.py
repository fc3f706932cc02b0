"""Unit tests for shared value types and the ContractCreation event."""

import pytest
from eth_utils import keccak, to_checksum_address

from ethdeployer.common.types import (
    ZERO_ADDRESS,
    CallContext,
    Log,
    left_pad32,
    normalize_address,
)
from ethdeployer.create.events import (
    CONTRACT_CREATION_TOPIC,
    CreationEvent,
)
from tests.fixtures.addresses import ALICE_ADDRESS


class TestNormalizeAddress:
    def test_bytes_pass_through(self):
        assert normalize_address(ALICE_ADDRESS) == ALICE_ADDRESS

    def test_checksummed_hex(self):
        assert normalize_address(to_checksum_address(ALICE_ADDRESS)) == ALICE_ADDRESS

    def test_wrong_length_bytes(self):
        with pytest.raises(ValueError, match="20 bytes"):
            normalize_address(b"\x01" * 19)

    def test_garbage_string(self):
        with pytest.raises(ValueError):
            normalize_address("not-an-address")


class TestCallContext:
    def test_defaults(self):
        ctx = CallContext()
        assert ctx.caller == ZERO_ADDRESS
        assert ctx.value == 0

    def test_negative_value(self):
        with pytest.raises(ValueError):
            CallContext(caller=ALICE_ADDRESS, value=-1)

    def test_hex_caller_is_normalized(self):
        ctx = CallContext(caller="0x" + ALICE_ADDRESS.hex(), value=1)
        assert ctx.caller == ALICE_ADDRESS


class TestCreationEvent:
    def test_topic_is_event_signature_hash(self):
        assert CONTRACT_CREATION_TOPIC == keccak(text="ContractCreation(address)")

    def test_log_roundtrip(self):
        new_address = b"\x07" * 20
        log = CreationEvent(new_address).to_log(ALICE_ADDRESS)
        assert log.address == ALICE_ADDRESS
        assert log.topics == [CONTRACT_CREATION_TOPIC, left_pad32(new_address)]
        assert log.data == b""
        assert CreationEvent.from_log(log).new_address == new_address

    def test_from_foreign_log(self):
        with pytest.raises(ValueError):
            CreationEvent.from_log(Log(address=ALICE_ADDRESS, topics=[b"\x00" * 32]))

    def test_left_pad32_too_long(self):
        with pytest.raises(ValueError):
            left_pad32(b"\x00" * 33)
