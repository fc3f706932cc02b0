"""ContractCreation event."""

from __future__ import annotations

from dataclasses import dataclass

from ethdeployer.common.crypto import keccak256
from ethdeployer.common.types import Log, left_pad32

CONTRACT_CREATION_SIGNATURE = "ContractCreation(address)"
CONTRACT_CREATION_TOPIC = keccak256(CONTRACT_CREATION_SIGNATURE.encode())


@dataclass(frozen=True)
class CreationEvent:
    new_address: bytes

    def to_log(self, emitter: bytes) -> Log:
        """Render as a log with the new address as an indexed topic."""
        return Log(
            address=emitter,
            topics=[CONTRACT_CREATION_TOPIC, left_pad32(self.new_address)],
        )

    @classmethod
    def from_log(cls, log: Log) -> "CreationEvent":
        if len(log.topics) != 2 or log.topics[0] != CONTRACT_CREATION_TOPIC:
            raise ValueError("Log is not a ContractCreation event")
        return cls(new_address=log.topics[1][-20:])
