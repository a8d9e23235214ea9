"""
Raydium Protocol

Provides:
- RaydiumAPI: priority fee, swap quote, swap transaction build, mint metadata
- SPL instruction builders used around swaps and transfers
"""

from .api import RaydiumAPI
from .constants import (
    TOKEN_PROGRAM_ID,
    ASSOCIATED_TOKEN_PROGRAM_ID,
    SYSTEM_PROGRAM_ID,
)
from .instructions import (
    get_associated_token_address,
    build_create_ata_instruction,
    build_transfer_sol_instruction,
    build_transfer_checked_instruction,
)

__all__ = [
    "RaydiumAPI",
    # Constants
    "TOKEN_PROGRAM_ID",
    "ASSOCIATED_TOKEN_PROGRAM_ID",
    "SYSTEM_PROGRAM_ID",
    # Instruction builders
    "get_associated_token_address",
    "build_create_ata_instruction",
    "build_transfer_sol_instruction",
    "build_transfer_checked_instruction",
]
