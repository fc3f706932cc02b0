"""
State of a single init-code run.

An InitFrame ties the contract being created to the operand stack and
scratch memory its constructor works in. Faults raised here end the run
as a failed creation; Halt carries a normal STOP/RETURN/REVERT out of
the interpreter loop.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from ethdeployer.common.types import ZERO_ADDRESS

WORD_MASK = (1 << 256) - 1
STACK_LIMIT = 1024
# Constructors here only lay out runtime code; cap scratch memory at 16 MiB.
MEMORY_LIMIT = 1 << 24

JUMPDEST = 0x5B
FIRST_PUSH = 0x60
LAST_PUSH = 0x7F


class ExecutionFault(Exception):
    """Init code did something that aborts the creation."""


class StackFault(ExecutionFault):
    pass


class MemoryFault(ExecutionFault):
    pass


class BadJump(ExecutionFault):
    pass


class UnknownOpcode(ExecutionFault):
    pass


class StepLimitExceeded(ExecutionFault):
    pass


class Halt(Exception):
    """End of the run: success flag plus the bytes handed back."""

    def __init__(self, success: bool, output: bytes = b""):
        self.success = success
        self.output = output
        super().__init__()


def push_width(opcode: int) -> int:
    """Immediate bytes following a PUSH1..PUSH32 opcode, 0 for anything else."""
    if FIRST_PUSH <= opcode <= LAST_PUSH:
        return opcode - FIRST_PUSH + 1
    return 0


def scan_jump_targets(code: bytes) -> frozenset[int]:
    """JUMPDEST offsets that are real instructions, not PUSH data."""
    targets = set()
    pc = 0
    while pc < len(code):
        if code[pc] == JUMPDEST:
            targets.add(pc)
        pc += 1 + push_width(code[pc])
    return frozenset(targets)


class OperandStack:
    """Word stack; values wrap to 256 bits on the way in."""

    __slots__ = ("items",)

    def __init__(self) -> None:
        self.items: list[int] = []

    def push(self, *values: int) -> None:
        for value in values:
            if len(self.items) >= STACK_LIMIT:
                raise StackFault(f"Stack limit of {STACK_LIMIT} reached")
            self.items.append(value & WORD_MASK)

    def take(self, count: int) -> list[int]:
        """Remove ``count`` words and return them top first."""
        if count > len(self.items):
            raise StackFault(f"Need {count} stack items, have {len(self.items)}")
        if count == 0:
            return []
        taken = self.items[-count:]
        del self.items[-count:]
        taken.reverse()
        return taken

    def duplicate(self, position: int) -> None:
        """Copy the word ``position`` deep (1 = top) onto the top."""
        if position > len(self.items):
            raise StackFault(f"Cannot duplicate item {position} of {len(self.items)}")
        self.push(self.items[-position])

    def exchange(self, position: int) -> None:
        """Swap the top with the word ``position`` below it."""
        if position >= len(self.items):
            raise StackFault(f"Cannot exchange with item {position} of {len(self.items)}")
        below = -1 - position
        self.items[-1], self.items[below] = self.items[below], self.items[-1]

    def __len__(self) -> int:
        return len(self.items)


class ScratchMemory:
    """Zero-initialised bytes that grow a word at a time."""

    __slots__ = ("buf",)

    def __init__(self) -> None:
        self.buf = bytearray()

    def reserve(self, offset: int, size: int) -> None:
        """Grow to cover ``[offset, offset + size)``, faulting past the limit."""
        if size == 0:
            return
        end = offset + size
        if end > MEMORY_LIMIT:
            raise MemoryFault(f"Access up to byte {end} is beyond the {MEMORY_LIMIT}-byte limit")
        rounded = -(-end // 32) * 32
        if rounded > len(self.buf):
            self.buf.extend(bytes(rounded - len(self.buf)))

    def read(self, offset: int, size: int) -> bytes:
        self.reserve(offset, size)
        return bytes(self.buf[offset : offset + size])

    def write(self, offset: int, data: bytes) -> None:
        self.reserve(offset, len(data))
        self.buf[offset : offset + len(data)] = data

    def read_word(self, offset: int) -> int:
        return int.from_bytes(self.read(offset, 32), "big")

    def write_word(self, offset: int, value: int) -> None:
        self.write(offset, (value & WORD_MASK).to_bytes(32, "big"))

    @property
    def size(self) -> int:
        return len(self.buf)


@dataclass
class InitFrame:
    """Constructor run for the contract at ``address``, created by ``creator``."""

    creator: bytes = ZERO_ADDRESS
    address: bytes = ZERO_ADDRESS
    code: bytes = b""
    value: int = 0

    pc: int = 0
    steps: int = 0
    stack: OperandStack = field(default_factory=OperandStack)
    memory: ScratchMemory = field(default_factory=ScratchMemory)
    jump_targets: frozenset[int] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.jump_targets = scan_jump_targets(self.code)
