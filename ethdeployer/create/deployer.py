"""
Contract deployer.

Creates contracts from raw init code on behalf of any caller, using its
own account as the creator, and broadcasts a ContractCreation event for
each success. Value for the new contract comes from the deployer's
balance, which callers can top up through ``receive`` or by attaching
value to the ``deploy`` call itself.
"""

from __future__ import annotations

import logging
from typing import Optional

from eth_utils import is_bytes, to_checksum_address

from ethdeployer.common.types import AddressLike, CallContext, normalize_address
from ethdeployer.create.address import compute_create_address
from ethdeployer.create.errors import (
    CreationFailed,
    InsufficientBalance,
    InsufficientCallerFunds,
    ZeroBytecodeLength,
)
from ethdeployer.create.events import CreationEvent
from ethdeployer.vm.host import Host, InsufficientFunds

logger = logging.getLogger(__name__)


class Deployer:
    """Deploys contracts from ``address`` through ``host``."""

    def __init__(self, host: Host, address: AddressLike) -> None:
        self.host = host
        self.address = normalize_address(address)

    def __repr__(self) -> str:
        return f"Deployer({to_checksum_address(self.address)})"

    @property
    def balance(self) -> int:
        return self.host.get_balance(self.address)

    @property
    def nonce(self) -> int:
        return self.host.get_nonce(self.address)

    def receive(self, ctx: CallContext) -> None:
        """Accept a plain value transfer."""
        try:
            self.host.transfer(ctx.caller, self.address, ctx.value)
        except InsufficientFunds as exc:
            raise InsufficientCallerFunds(ctx.caller, ctx.value) from exc

    def predict_next_address(self) -> bytes:
        """Address the next successful ``deploy`` will return."""
        return compute_create_address(self.address, self.nonce)

    def deploy(self, amount: int, payload: bytes, ctx: Optional[CallContext] = None) -> bytes:
        """
        Deploy a contract from ``payload`` and send it ``amount``.

        Args:
            amount: value to transfer to the new contract
            payload: init code; must be non-empty
            ctx: calling context; its value is credited to the deployer first

        Returns:
            20-byte address of the new contract

        Raises:
            TypeError: ``payload`` is not bytes-like
            InsufficientCallerFunds: ``ctx.caller`` cannot pay ``ctx.value``
            InsufficientBalance: deployer balance is below ``amount``
            ZeroBytecodeLength: ``payload`` is empty
            CreationFailed: the host created nothing (e.g. init code reverted)

        Any failure leaves host state as it was before the call.
        """
        if amount < 0:
            raise ValueError(f"Amount must be non-negative, got {amount}")
        if isinstance(payload, memoryview):
            payload = payload.tobytes()
        if not is_bytes(payload):
            raise TypeError(f"Payload must be bytes-like, got {type(payload).__name__}")
        payload = bytes(payload)

        snap = self.host.snapshot()
        try:
            if ctx is not None:
                self.receive(ctx)

            balance = self.host.get_balance(self.address)
            if balance < amount:
                raise InsufficientBalance(balance, amount)
            if len(payload) == 0:
                raise ZeroBytecodeLength()

            nonce = self.host.get_nonce(self.address)
            new_address = self.host.create(self.address, amount, payload)
            if new_address is None:
                raise CreationFailed(self.address, nonce)

            self.host.emit_log(CreationEvent(new_address).to_log(self.address))
        except Exception as exc:
            self.host.rollback(snap)
            logger.debug("%r: deploy rolled back: %s", self, exc)
            raise

        self.host.commit(snap)
        logger.info(
            "%r: deployed %s (nonce %d, %d bytes, value %d)",
            self, to_checksum_address(new_address), nonce, len(payload), amount,
        )
        return new_address
