"""
Immutable parameters of the CorgiCoin token.

These values define the public rules of the ledger.
Changing them changes every holder's accounting and MUST be publicly announced.
"""

TOKEN_NAME = "CorgiCoin"
TOKEN_SYMBOL = "CORGI"

# ERC-20 style tokens use 18 decimals
TOKEN_DECIMALS = 18

# 100 billion whole tokens, minted once to the deployer (raw units)
INITIAL_SUPPLY = 100_000_000_000 * (10**TOKEN_DECIMALS)

# Amounts live in unsigned 256-bit space
UINT256_MAX = (1 << 256) - 1

# An allowance at this value is never spent down
INFINITE_ALLOWANCE = UINT256_MAX

ADDRESS_LENGTH = 20
