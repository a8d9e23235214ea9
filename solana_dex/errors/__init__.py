"""
Error definitions for the Solana DEX client
"""

from .exceptions import (
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

__all__ = [
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
]
