"""Init code used by deployer and host tests."""

# Stores 42 at slot 0, returns a 32-byte word holding 42 as runtime code
SIMPLE_INIT_CODE = bytes.fromhex("602a600055602a60005260206000f3")
# 602a      PUSH1 42
# 6000      PUSH1 0
# 55        SSTORE
# 602a      PUSH1 42
# 6000      PUSH1 0
# 52        MSTORE
# 6020      PUSH1 32
# 6000      PUSH1 0
# f3        RETURN

# PUSH1 0 PUSH1 0 RETURN: accepts value, installs no code
EMPTY_RUNTIME_INIT_CODE = bytes.fromhex("60006000f3")

# Runtime: PUSH1 42 PUSH1 0 MSTORE PUSH1 32 PUSH1 0 RETURN
RUNTIME_CODE = bytes.fromhex("602a60005260206000f3")

# Constructor that CODECOPYs the runtime appended after it
COPY_RUNTIME_INIT_CODE = bytes.fromhex(
    "600a"    # PUSH1 10 (runtime length)
    "600c"    # PUSH1 12 (runtime offset in init code)
    "6000"    # PUSH1 0  (memory destination)
    "39"      # CODECOPY
    "600a"    # PUSH1 10
    "6000"    # PUSH1 0
    "f3"      # RETURN
) + RUNTIME_CODE

# Solidity-style non-payable constructor: reverts when CALLVALUE != 0
NON_PAYABLE_INIT_CODE = bytes.fromhex(
    "34"      # CALLVALUE
    "80"      # DUP1
    "15"      # ISZERO
    "6009"    # PUSH1 9
    "57"      # JUMPI
    "5f"      # PUSH0
    "80"      # DUP1
    "fd"      # REVERT
    "5b"      # JUMPDEST
    "50"      # POP
    "6000"    # PUSH1 0
    "6000"    # PUSH1 0
    "f3"      # RETURN
)

# PUSH1 0 DUP1 REVERT
REVERT_INIT_CODE = bytes.fromhex("600080fd")

# Returns a single 0xEF byte (rejected by EIP-3541)
EF_RUNTIME_INIT_CODE = bytes.fromhex("60ef60005360016000f3")

# Returns 24577 zero bytes (one over the EIP-170 limit)
OVERSIZED_RUNTIME_INIT_CODE = bytes.fromhex("6160016000f3")

# JUMPDEST PUSH0 JUMP
INFINITE_LOOP_INIT_CODE = bytes.fromhex("5b5f56")

# CREATE is not available to init code here
UNSUPPORTED_OPCODE_INIT_CODE = bytes.fromhex("f0")
