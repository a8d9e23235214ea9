"""
Type definitions for the Solana DEX client
"""

from .common import TokenInfo, TokenAccountRef, TokenPrice
from .api import ApiResult, ApiSuccess, ApiFailure
from .result import TxResult, TxStatus
from .swap import (
    SwapRequest,
    SwapQuote,
    PriorityFee,
    BuiltTransaction,
    SubmissionResult,
)
from .solana_tokens import (
    WRAPPED_SOL_MINT,
    SOLANA_TOKEN_MINTS,
    SOLANA_TOKEN_DECIMALS,
    resolve_token_mint,
    is_known_token,
    is_native_sol,
    get_token_decimals,
    get_token_symbol,
)

__all__ = [
    "TokenInfo",
    "TokenAccountRef",
    "TokenPrice",
    "ApiResult",
    "ApiSuccess",
    "ApiFailure",
    "TxResult",
    "TxStatus",
    "SwapRequest",
    "SwapQuote",
    "PriorityFee",
    "BuiltTransaction",
    "SubmissionResult",
    "WRAPPED_SOL_MINT",
    "SOLANA_TOKEN_MINTS",
    "SOLANA_TOKEN_DECIMALS",
    "resolve_token_mint",
    "is_known_token",
    "is_native_sol",
    "get_token_decimals",
    "get_token_symbol",
]
