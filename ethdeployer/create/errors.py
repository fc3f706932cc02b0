"""Deployer failure taxonomy.

Every failure is terminal for the current call: state is rolled back and
the exception propagates to the caller.
"""

from __future__ import annotations

from eth_utils import to_checksum_address


class DeployerError(Exception):
    """Base class for deployment failures."""
    pass


class InsufficientBalance(DeployerError):
    """Deployer holds less than the requested transfer amount."""

    def __init__(self, balance: int, amount: int):
        self.balance = balance
        self.amount = amount
        super().__init__(f"Insufficient balance: have {balance}, need {amount}")


class ZeroBytecodeLength(DeployerError):
    """Empty init code."""

    def __init__(self) -> None:
        super().__init__("Bytecode length is zero")


class CreationFailed(DeployerError):
    """The host's creation primitive returned no address."""

    def __init__(self, creator: bytes, nonce: int):
        self.creator = creator
        self.nonce = nonce
        super().__init__(
            f"Contract creation failed for {to_checksum_address(creator)} at nonce {nonce}"
        )


class InsufficientCallerFunds(DeployerError):
    """The caller cannot cover the value attached to the call."""

    def __init__(self, caller: bytes, value: int):
        self.caller = caller
        self.value = value
        super().__init__(f"{to_checksum_address(caller)} cannot attach {value}")
