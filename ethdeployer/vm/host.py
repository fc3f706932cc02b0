"""
Host platform capabilities used by the deployer.

Host is the interface the deployer depends on: balance and nonce queries,
value transfer, the atomic CREATE primitive, log emission and state
snapshots. InMemoryHost is a dict-backed implementation that derives
addresses and runs init code the way a client does.
"""

from __future__ import annotations

import logging
from typing import Optional

from eth_utils import to_checksum_address

from ethdeployer.common import rlp
from ethdeployer.common.config import CreateRules, DEFAULT_RULES
from ethdeployer.common.crypto import keccak256
from ethdeployer.common.types import AddressLike, Log, normalize_address
from ethdeployer.vm.frame import InitFrame
from ethdeployer.vm.hooks import ExecutionHook, DefaultHook
from ethdeployer.vm.interpreter import run_init_code

logger = logging.getLogger(__name__)


class InsufficientFunds(Exception):
    """A transfer asked for more than the sender holds."""

    def __init__(self, sender: bytes, balance: int, value: int):
        self.sender = sender
        self.balance = balance
        self.value = value
        super().__init__(f"{to_checksum_address(sender)} has {balance}, needs {value}")


class Host:
    """Capability interface between the deployer and the platform.

    Every method here is abstract and raises NotImplementedError; concrete
    hosts such as InMemoryHost override all of them.
    """

    def get_balance(self, address: bytes) -> int:
        raise NotImplementedError

    def get_nonce(self, address: bytes) -> int:
        raise NotImplementedError

    def transfer(self, sender: bytes, recipient: bytes, value: int) -> None:
        """Move value between accounts, raising InsufficientFunds on shortfall."""
        raise NotImplementedError

    def create(self, creator: bytes, value: int, init_code: bytes) -> Optional[bytes]:
        """Create a contract atomically. Returns its address or None."""
        raise NotImplementedError

    def emit_log(self, log: Log) -> None:
        raise NotImplementedError

    def snapshot(self) -> int:
        raise NotImplementedError

    def rollback(self, snap_id: int) -> None:
        raise NotImplementedError

    def commit(self, snap_id: int) -> None:
        raise NotImplementedError


class InMemoryHost(Host):
    """Dict-backed host state with snapshot/rollback."""

    def __init__(self, rules: CreateRules = DEFAULT_RULES, hook: Optional[ExecutionHook] = None) -> None:
        self.rules = rules
        self.hook: ExecutionHook = hook or DefaultHook()

        self.logs: list[Log] = []

        self._balances: dict[bytes, int] = {}
        self._nonces: dict[bytes, int] = {}
        self._code: dict[bytes, bytes] = {}
        self._storage: dict[tuple[bytes, int], int] = {}

        self._snapshots: list[dict] = []

    # -- Setup --

    def install(
        self,
        address: AddressLike,
        balance: int = 0,
        nonce: Optional[int] = None,
        code: bytes = b"",
    ) -> bytes:
        """Seed an account. Accounts with code default to the contract initial nonce."""
        address = normalize_address(address)
        if nonce is None:
            nonce = self.rules.contract_initial_nonce if code else 0
        self._balances[address] = balance
        self._nonces[address] = nonce
        if code:
            self._code[address] = code
        return address

    # -- State accessors --

    def get_balance(self, address: bytes) -> int:
        return self._balances.get(address, 0)

    def set_balance(self, address: bytes, balance: int) -> None:
        old = self._balances.get(address, 0)
        self._balances[address] = balance
        self.hook.on_balance_change(address, old, balance)

    def get_nonce(self, address: bytes) -> int:
        return self._nonces.get(address, 0)

    def increment_nonce(self, address: bytes) -> None:
        self._nonces[address] = self.get_nonce(address) + 1

    def get_code(self, address: bytes) -> bytes:
        return self._code.get(address, b"")

    def get_storage(self, address: bytes, key: int) -> int:
        return self._storage.get((address, key), 0)

    def set_storage(self, address: bytes, key: int, value: int) -> None:
        if value == 0:
            self._storage.pop((address, key), None)
        else:
            self._storage[(address, key)] = value

    def transfer(self, sender: bytes, recipient: bytes, value: int) -> None:
        if value < 0:
            raise ValueError(f"Transfer value must be non-negative, got {value}")
        if value == 0:
            return
        balance = self.get_balance(sender)
        if balance < value:
            raise InsufficientFunds(sender, balance, value)
        self.set_balance(sender, balance - value)
        self.set_balance(recipient, self.get_balance(recipient) + value)

    def emit_log(self, log: Log) -> None:
        self.logs.append(log)
        self.hook.on_log(log)

    # -- Snapshots --

    def snapshot(self) -> int:
        self._snapshots.append({
            "balances": dict(self._balances),
            "nonces": dict(self._nonces),
            "code": dict(self._code),
            "storage": dict(self._storage),
            "logs_len": len(self.logs),
        })
        return len(self._snapshots) - 1

    def rollback(self, snap_id: int) -> None:
        snap = self._snapshots[snap_id]
        self._balances = snap["balances"]
        self._nonces = snap["nonces"]
        self._code = snap["code"]
        self._storage = snap["storage"]
        del self.logs[snap["logs_len"]:]
        self._snapshots = self._snapshots[:snap_id]

    def commit(self, snap_id: int) -> None:
        self._snapshots = self._snapshots[:snap_id]

    # -- CREATE --

    def derive_create_address(self, creator: bytes, nonce: int) -> bytes:
        """address = keccak256(rlp([creator, nonce]))[12:]"""
        return keccak256(rlp.encode([creator, nonce]))[12:]

    def _collides(self, address: bytes) -> bool:
        return bool(self._code.get(address)) or self.get_nonce(address) != 0

    def create(self, creator: bytes, value: int, init_code: bytes) -> Optional[bytes]:
        """Execute CREATE. Returns the new address, or None on failure.

        The creator's nonce is bumped even when creation fails, matching
        client behaviour; callers that need an all-or-nothing call wrap this
        in their own snapshot.
        """
        nonce = self.get_nonce(creator)
        addr = self.derive_create_address(creator, nonce)
        self.increment_nonce(creator)

        if self.get_balance(creator) < value:
            logger.debug("CREATE from %s: balance below value %d", to_checksum_address(creator), value)
            return None
        if not self.rules.initcode_size_ok(init_code):
            logger.debug("CREATE from %s: init code too large (%d bytes)", to_checksum_address(creator), len(init_code))
            return None
        if self._collides(addr):
            logger.debug("CREATE collision at %s", to_checksum_address(addr))
            return None

        snap = self.snapshot()
        self.transfer(creator, addr, value)
        self._nonces[addr] = self.rules.contract_initial_nonce

        frame = InitFrame(creator=creator, address=addr, code=bytes(init_code), value=value)
        self.hook.before_create(frame)
        success, return_data = run_init_code(frame, self, self.rules.max_init_steps)

        if success and not self.rules.code_size_ok(return_data):
            logger.debug("CREATE at %s: runtime code too large (%d bytes)", to_checksum_address(addr), len(return_data))
            success = False
        if success and not self.rules.code_prefix_ok(return_data):
            logger.debug("CREATE at %s: runtime code starts with 0xEF", to_checksum_address(addr))
            success = False

        if not success:
            self.rollback(snap)
            self.hook.after_create(frame, None)
            return None

        if return_data:
            self._code[addr] = return_data
        self.commit(snap)
        self.hook.after_create(frame, addr)
        return addr
