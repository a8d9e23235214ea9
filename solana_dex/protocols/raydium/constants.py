"""
Raydium and SPL program constants
"""

# Token Programs
TOKEN_PROGRAM_ID = "TokenkegQfeZyiNwAJbNbGKPFXCWuBvf9Ss623VQ5DA"

# Associated Token Program
ASSOCIATED_TOKEN_PROGRAM_ID = "ATokenGPvbdGVxr1b2hvZbsiqW5xWH25efTNsLJA8knL"

# System Program
SYSTEM_PROGRAM_ID = "11111111111111111111111111111111"

# Associated token program instruction tags
ATA_CREATE = 0
ATA_CREATE_IDEMPOTENT = 1

# System program instruction tags
SYSTEM_TRANSFER = 2

# SPL token instruction tags
TOKEN_TRANSFER_CHECKED = 12

# Trade API endpoints (relative to RaydiumConfig.swap_host)
SWAP_COMPUTE_PATH = "/compute/swap-base-in"
SWAP_TRANSACTION_PATH = "/transaction/swap-base-in"

# Priority fee tiers in the auto-fee response
PRIORITY_FEE_TIERS = ("vh", "h", "m")
