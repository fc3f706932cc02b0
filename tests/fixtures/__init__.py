"""Test fixtures for deployer and address prediction tests."""

from .addresses import (
    ALICE_ADDRESS,
    BOB_ADDRESS,
    DEPLOYER_ADDRESS,
    VECTOR_SENDER,
    CREATE_VECTORS,
)
from .contracts import (
    SIMPLE_INIT_CODE,
    EMPTY_RUNTIME_INIT_CODE,
    COPY_RUNTIME_INIT_CODE,
    RUNTIME_CODE,
    NON_PAYABLE_INIT_CODE,
    REVERT_INIT_CODE,
    EF_RUNTIME_INIT_CODE,
    OVERSIZED_RUNTIME_INIT_CODE,
    INFINITE_LOOP_INIT_CODE,
    UNSUPPORTED_OPCODE_INIT_CODE,
)

__all__ = [
    # Addresses
    "ALICE_ADDRESS",
    "BOB_ADDRESS",
    "DEPLOYER_ADDRESS",
    "VECTOR_SENDER",
    "CREATE_VECTORS",
    # Contracts
    "SIMPLE_INIT_CODE",
    "EMPTY_RUNTIME_INIT_CODE",
    "COPY_RUNTIME_INIT_CODE",
    "RUNTIME_CODE",
    "NON_PAYABLE_INIT_CODE",
    "REVERT_INIT_CODE",
    "EF_RUNTIME_INIT_CODE",
    "OVERSIZED_RUNTIME_INIT_CODE",
    "INFINITE_LOOP_INIT_CODE",
    "UNSUPPORTED_OPCODE_INIT_CODE",
]
