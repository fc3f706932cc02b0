"""Contract deployer and CREATE address prediction."""

from ethdeployer.create.address import compute_create_address, encode_create_preimage
from ethdeployer.create.deployer import Deployer
from ethdeployer.create.errors import (
    DeployerError,
    InsufficientBalance,
    InsufficientCallerFunds,
    ZeroBytecodeLength,
    CreationFailed,
)
from ethdeployer.create.events import CreationEvent

__all__ = [
    "compute_create_address",
    "encode_create_preimage",
    "Deployer",
    "DeployerError",
    "InsufficientBalance",
    "InsufficientCallerFunds",
    "ZeroBytecodeLength",
    "CreationFailed",
    "CreationEvent",
]
