"""Standard test addresses.

All addresses are 20 bytes (canonical form, not checksummed).
"""

from eth_keys import keys

# Private key 0x01...01 -> Address
ALICE_PRIVATE_KEY = bytes.fromhex("01" * 32)
ALICE_ADDRESS = keys.PrivateKey(ALICE_PRIVATE_KEY).public_key.to_canonical_address()

# Private key 0x02...02 -> Address
BOB_PRIVATE_KEY = bytes.fromhex("02" * 32)
BOB_ADDRESS = keys.PrivateKey(BOB_PRIVATE_KEY).public_key.to_canonical_address()

# Address the deployer contract lives at in host tests
DEPLOYER_ADDRESS = bytes.fromhex("00" * 18 + "de01")

# Widely published CREATE vectors for this sender
VECTOR_SENDER = bytes.fromhex("6ac7ea33f8831ea9dcc53393aaa88b25a785dbf0")
CREATE_VECTORS = {
    0: bytes.fromhex("cd234a471b72ba2f1ccf0a70fcaba648a5eecd8d"),
    1: bytes.fromhex("343c43a37d37dff08ae8c4a11544c718abb4fcf8"),
    2: bytes.fromhex("f778b86fa74e846c4f0a1fbd1335fe81c00a0c91"),
    3: bytes.fromhex("fffd933a0bc612844eaf0c6fe3e5b8e9b6c1d19c"),
}
