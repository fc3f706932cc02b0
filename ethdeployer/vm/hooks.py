"""
Host hook system.

Extension points for observing contract creation without modifying the
host. DefaultHook is all no-ops.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from ethdeployer.common.types import Log
    from ethdeployer.vm.frame import InitFrame


class ExecutionHook:
    """Base hook interface; override methods to observe the host."""

    def before_create(self, frame: InitFrame) -> None:
        """Called before init code runs for a new contract."""
        pass

    def after_create(self, frame: InitFrame, address: Optional[bytes]) -> None:
        """Called after a creation attempt; address is None on failure."""
        pass

    def on_log(self, log: Log) -> None:
        """Called when a log is emitted."""
        pass

    def on_balance_change(self, address: bytes, old_balance: int, new_balance: int) -> None:
        """Called when an account balance changes."""
        pass


class DefaultHook(ExecutionHook):
    pass
