"""
Solana DEX client - Raydium swaps and wallet operations on Solana

Provides:
- Token swaps through the Raydium trade API
- SOL and SPL token transfers
- Associated token account management
- Token price queries and subscriptions
"""

from .client import SolanaDexClient
from .types import (
    SwapRequest,
    SwapQuote,
    PriorityFee,
    BuiltTransaction,
    SubmissionResult,
    TokenInfo,
    TokenAccountRef,
    TokenPrice,
    TxResult,
    TxStatus,
    ApiResult,
    ApiSuccess,
    ApiFailure,
)
from .errors import (
    ErrorCode,
    DexClientError,
    RpcError,
    InsufficientFundsError,
    FeeUnavailableError,
    QuoteUnavailableError,
    BuildFailedError,
    PriceUnavailableError,
    TransactionError,
    SubmissionError,
    AccountCreationError,
    DecimalsUnavailableError,
    SignerError,
    ConfigurationError,
)
from .utils import (
    LAMPORTS_PER_SOL,
    lamports_to_sol,
    sol_to_lamports,
    to_smallest_unit,
    from_smallest_unit,
    find_associated_token_address,
    explorer_url,
)
from .config import setup_logging, enable_file_logging

__version__ = "0.1.0"

__all__ = [
    # Client
    "SolanaDexClient",
    # Types
    "SwapRequest",
    "SwapQuote",
    "PriorityFee",
    "BuiltTransaction",
    "SubmissionResult",
    "TokenInfo",
    "TokenAccountRef",
    "TokenPrice",
    "TxResult",
    "TxStatus",
    "ApiResult",
    "ApiSuccess",
    "ApiFailure",
    # Errors
    "ErrorCode",
    "DexClientError",
    "RpcError",
    "InsufficientFundsError",
    "FeeUnavailableError",
    "QuoteUnavailableError",
    "BuildFailedError",
    "PriceUnavailableError",
    "TransactionError",
    "SubmissionError",
    "AccountCreationError",
    "DecimalsUnavailableError",
    "SignerError",
    "ConfigurationError",
    # Utilities
    "LAMPORTS_PER_SOL",
    "lamports_to_sol",
    "sol_to_lamports",
    "to_smallest_unit",
    "from_smallest_unit",
    "find_associated_token_address",
    "explorer_url",
    # Logging
    "setup_logging",
    "enable_file_logging",
]
