"""
Init-code interpreter.

Runs the constructor part of a contract creation: enough of the EVM to
check call value, copy runtime code out of the init code, touch storage
and RETURN or REVERT. There is no gas; execution is bounded by a step
limit instead. Opcodes outside the handler table abort the run.

Handlers take ``(frame, host, opcode)`` and return a jump target, or None
to continue with the next instruction.
"""

from __future__ import annotations

import logging
from enum import IntEnum
from typing import TYPE_CHECKING, Callable, Optional

from ethdeployer.vm.frame import (
    BadJump,
    ExecutionFault,
    Halt,
    InitFrame,
    StepLimitExceeded,
    UnknownOpcode,
    push_width,
)

if TYPE_CHECKING:
    from ethdeployer.vm.host import InMemoryHost

logger = logging.getLogger(__name__)

Handler = Callable[[InitFrame, "InMemoryHost", int], Optional[int]]


class Opcode(IntEnum):
    STOP = 0x00
    ADD = 0x01
    SUB = 0x03
    LT = 0x10
    GT = 0x11
    EQ = 0x14
    ISZERO = 0x15
    ADDRESS = 0x30
    CALLER = 0x33
    CALLVALUE = 0x34
    CODESIZE = 0x38
    CODECOPY = 0x39
    SELFBALANCE = 0x47
    POP = 0x50
    MLOAD = 0x51
    MSTORE = 0x52
    MSTORE8 = 0x53
    SLOAD = 0x54
    SSTORE = 0x55
    JUMP = 0x56
    JUMPI = 0x57
    PC = 0x58
    MSIZE = 0x59
    JUMPDEST = 0x5B
    PUSH0 = 0x5F
    PUSH1 = 0x60
    PUSH32 = 0x7F
    DUP1 = 0x80
    DUP16 = 0x8F
    SWAP1 = 0x90
    SWAP16 = 0x9F
    RETURN = 0xF3
    REVERT = 0xFD
    INVALID = 0xFE


_BINARY: dict[int, Callable[[int, int], int]] = {
    Opcode.ADD: lambda a, b: a + b,
    Opcode.SUB: lambda a, b: a - b,
    Opcode.LT: lambda a, b: int(a < b),
    Opcode.GT: lambda a, b: int(a > b),
    Opcode.EQ: lambda a, b: int(a == b),
}

# Opcodes that only push a value read from the frame or host.
_READS: dict[int, Callable[[InitFrame, "InMemoryHost"], int]] = {
    Opcode.ADDRESS: lambda frame, host: int.from_bytes(frame.address, "big"),
    Opcode.CALLER: lambda frame, host: int.from_bytes(frame.creator, "big"),
    Opcode.CALLVALUE: lambda frame, host: frame.value,
    Opcode.CODESIZE: lambda frame, host: len(frame.code),
    Opcode.SELFBALANCE: lambda frame, host: host.get_balance(frame.address),
    Opcode.PC: lambda frame, host: frame.pc,
    Opcode.MSIZE: lambda frame, host: frame.memory.size,
    Opcode.PUSH0: lambda frame, host: 0,
}


def _binary(frame, host, opcode):
    a, b = frame.stack.take(2)
    frame.stack.push(_BINARY[opcode](a, b))


def _iszero(frame, host, opcode):
    (a,) = frame.stack.take(1)
    frame.stack.push(int(a == 0))


def _read(frame, host, opcode):
    frame.stack.push(_READS[opcode](frame, host))


def _push_immediate(frame, host, opcode):
    width = push_width(opcode)
    start = frame.pc + 1
    # Immediates cut short by the end of code are zero-padded on the right
    frame.stack.push(int.from_bytes(frame.code[start : start + width].ljust(width, b"\x00"), "big"))


def _dup(frame, host, opcode):
    frame.stack.duplicate(opcode - Opcode.DUP1 + 1)


def _swap(frame, host, opcode):
    frame.stack.exchange(opcode - Opcode.SWAP1 + 1)


def _pop(frame, host, opcode):
    frame.stack.take(1)


def _nothing(frame, host, opcode):
    return None


def _codecopy(frame, host, opcode):
    dest, start, size = frame.stack.take(3)
    frame.memory.reserve(dest, size)
    frame.memory.write(dest, frame.code[start : start + size].ljust(size, b"\x00"))


def _mload(frame, host, opcode):
    (offset,) = frame.stack.take(1)
    frame.stack.push(frame.memory.read_word(offset))


def _mstore(frame, host, opcode):
    offset, value = frame.stack.take(2)
    frame.memory.write_word(offset, value)


def _mstore8(frame, host, opcode):
    offset, value = frame.stack.take(2)
    frame.memory.write(offset, bytes([value & 0xFF]))


def _sload(frame, host, opcode):
    (key,) = frame.stack.take(1)
    frame.stack.push(host.get_storage(frame.address, key))


def _sstore(frame, host, opcode):
    key, value = frame.stack.take(2)
    host.set_storage(frame.address, key, value)


def _checked_target(frame: InitFrame, target: int) -> int:
    if target not in frame.jump_targets:
        raise BadJump(f"No JUMPDEST at {target}")
    return target


def _jump(frame, host, opcode):
    (target,) = frame.stack.take(1)
    return _checked_target(frame, target)


def _jumpi(frame, host, opcode):
    target, condition = frame.stack.take(2)
    if condition:
        return _checked_target(frame, target)
    return None


def _stop(frame, host, opcode):
    raise Halt(True)


def _halt_with_output(frame, host, opcode):
    offset, size = frame.stack.take(2)
    raise Halt(opcode == Opcode.RETURN, frame.memory.read(offset, size))


def _invalid(frame, host, opcode):
    raise UnknownOpcode("Designated INVALID instruction")


HANDLERS: dict[int, Handler] = {
    Opcode.STOP: _stop,
    Opcode.ISZERO: _iszero,
    Opcode.CODECOPY: _codecopy,
    Opcode.POP: _pop,
    Opcode.MLOAD: _mload,
    Opcode.MSTORE: _mstore,
    Opcode.MSTORE8: _mstore8,
    Opcode.SLOAD: _sload,
    Opcode.SSTORE: _sstore,
    Opcode.JUMP: _jump,
    Opcode.JUMPI: _jumpi,
    Opcode.JUMPDEST: _nothing,
    Opcode.RETURN: _halt_with_output,
    Opcode.REVERT: _halt_with_output,
    Opcode.INVALID: _invalid,
}
HANDLERS.update(dict.fromkeys(_BINARY, _binary))
HANDLERS.update(dict.fromkeys(_READS, _read))
HANDLERS.update(dict.fromkeys(range(Opcode.PUSH1, Opcode.PUSH32 + 1), _push_immediate))
HANDLERS.update(dict.fromkeys(range(Opcode.DUP1, Opcode.DUP16 + 1), _dup))
HANDLERS.update(dict.fromkeys(range(Opcode.SWAP1, Opcode.SWAP16 + 1), _swap))


def run_init_code(frame: InitFrame, host: InMemoryHost, max_steps: int) -> tuple[bool, bytes]:
    """Execute init code in the given frame.

    Returns (success, return_data). On success return_data is the runtime
    code to install; on REVERT it is the revert payload. Any fault yields
    (False, b"").
    """
    code = frame.code
    try:
        while frame.pc < len(code):
            opcode = code[frame.pc]
            handler = HANDLERS.get(opcode)
            if handler is None:
                raise UnknownOpcode(f"Unsupported opcode 0x{opcode:02x}")
            frame.steps += 1
            if frame.steps > max_steps:
                raise StepLimitExceeded(f"Init code ran past {max_steps} steps")
            target = handler(frame, host, opcode)
            frame.pc = frame.pc + 1 + push_width(opcode) if target is None else target
    except Halt as halt:
        return halt.success, halt.output
    except ExecutionFault as exc:
        logger.debug("Init code for %s aborted at pc=%d: %s", frame.address.hex(), frame.pc, exc)
        return False, b""
    # Running off the end of the code is an implicit STOP
    return True, b""
