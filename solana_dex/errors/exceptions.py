"""
Exception definitions for the Solana DEX client
"""

from enum import Enum
from typing import Optional
from decimal import Decimal


class ErrorCode(Enum):
    """
    Unified error codes for client operations

    1xxx - RPC errors
    2xxx - Transaction errors
    3xxx - Balance errors
    4xxx - Swap API errors
    5xxx - Token metadata errors
    6xxx - Signer errors
    9xxx - Configuration errors
    """
    # RPC errors (recoverable)
    RPC_CONNECTION_FAILED = "1001"
    RPC_TIMEOUT = "1002"
    RPC_RATE_LIMITED = "1003"
    RPC_INVALID_RESPONSE = "1004"

    # Transaction errors
    TX_SEND_FAILED = "2001"
    TX_CONFIRMATION_FAILED = "2002"
    TX_SUBMISSION_FAILED = "2003"
    TX_ACCOUNT_CREATION_FAILED = "2004"
    TX_INVALID_BLOCKHASH = "2005"

    # Balance errors
    INSUFFICIENT_FUNDS = "3001"
    INSUFFICIENT_FEE_RESERVE = "3002"

    # Swap API errors
    FEE_UNAVAILABLE = "4001"
    QUOTE_UNAVAILABLE = "4002"
    BUILD_FAILED = "4003"
    PRICE_UNAVAILABLE = "4004"

    # Token metadata errors
    DECIMALS_UNAVAILABLE = "5001"

    # Signer errors
    SIGNER_NOT_CONFIGURED = "6001"
    SIGNER_FAILED = "6002"

    # Configuration errors
    CONFIG_INVALID = "9001"
    CONFIG_MISSING = "9002"


class DexClientError(Exception):
    """
    Base exception for all client errors

    Attributes:
        message: Human-readable error message
        code: Error code for programmatic handling
        recoverable: Whether the error might succeed on retry
        original_error: The underlying exception if any
        details: Additional error context
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode,
        recoverable: bool = False,
        original_error: Optional[Exception] = None,
        details: Optional[dict] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.recoverable = recoverable
        self.original_error = original_error
        self.details = details or {}

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.message}"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code.value}, message={self.message!r})"

    @property
    def should_retry(self) -> bool:
        """Indicate if the caller may retry the operation"""
        return self.recoverable


class RpcError(DexClientError):
    """
    RPC-related errors - typically recoverable

    Raised when:
    - Connection to RPC endpoint fails
    - Request times out
    - Rate limit is hit
    - The node answers with a JSON-RPC error
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.RPC_CONNECTION_FAILED,
        original_error: Optional[Exception] = None,
        endpoint: Optional[str] = None,
    ):
        super().__init__(
            message,
            code,
            recoverable=True,
            original_error=original_error,
            details={"endpoint": endpoint} if endpoint else None,
        )
        self.endpoint = endpoint

    @classmethod
    def connection_failed(cls, endpoint: str, error: Exception = None) -> "RpcError":
        return cls(
            f"Failed to connect to RPC endpoint: {endpoint}",
            ErrorCode.RPC_CONNECTION_FAILED,
            original_error=error,
            endpoint=endpoint,
        )

    @classmethod
    def timeout(cls, endpoint: str, timeout_seconds: float) -> "RpcError":
        return cls(
            f"RPC request timed out after {timeout_seconds}s",
            ErrorCode.RPC_TIMEOUT,
            endpoint=endpoint,
        )

    @classmethod
    def rate_limited(cls, endpoint: str) -> "RpcError":
        return cls(
            "RPC rate limit exceeded",
            ErrorCode.RPC_RATE_LIMITED,
            endpoint=endpoint,
        )


class InsufficientFundsError(DexClientError):
    """
    Insufficient balance - not recoverable without deposit

    Raised before anything is broadcast when:
    - SOL balance is below the fee reserve
    - Token balance is below the requested amount
    """

    def __init__(
        self,
        message: str,
        token: Optional[str] = None,
        required: Optional[Decimal] = None,
        available: Optional[Decimal] = None,
        code: ErrorCode = ErrorCode.INSUFFICIENT_FUNDS,
    ):
        super().__init__(
            message,
            code,
            recoverable=False,
            details={
                "token": token,
                "required": str(required) if required is not None else None,
                "available": str(available) if available is not None else None,
            },
        )
        self.token = token
        self.required = required
        self.available = available

    @classmethod
    def token_balance(cls, token: str, required: int, available: int) -> "InsufficientFundsError":
        return cls(
            f"Insufficient {token} balance: need {required}, have {available} (smallest units)",
            token=token,
            required=Decimal(required),
            available=Decimal(available),
        )

    @classmethod
    def sol_for_fees(cls, required_lamports: int, available_lamports: int) -> "InsufficientFundsError":
        return cls(
            f"Insufficient SOL balance for transaction fees: need {required_lamports/1e9:.6f} SOL, "
            f"have {available_lamports/1e9:.6f} SOL",
            token="SOL",
            required=Decimal(required_lamports) / Decimal(10 ** 9),
            available=Decimal(available_lamports) / Decimal(10 ** 9),
            code=ErrorCode.INSUFFICIENT_FEE_RESERVE,
        )

    @classmethod
    def sol_for_transfer(cls, required_lamports: int, available_lamports: int) -> "InsufficientFundsError":
        return cls(
            f"Insufficient SOL balance for transfer plus fees: need {required_lamports/1e9:.9f} SOL, "
            f"have {available_lamports/1e9:.9f} SOL",
            token="SOL",
            required=Decimal(required_lamports) / Decimal(10 ** 9),
            available=Decimal(available_lamports) / Decimal(10 ** 9),
        )


class FeeUnavailableError(DexClientError):
    """Priority fee estimate could not be fetched"""

    def __init__(self, message: str, original_error: Optional[Exception] = None):
        super().__init__(
            message,
            ErrorCode.FEE_UNAVAILABLE,
            recoverable=True,
            original_error=original_error,
        )

    @classmethod
    def from_api(cls, reason: str) -> "FeeUnavailableError":
        return cls(f"Priority fee unavailable: {reason}")


class QuoteUnavailableError(DexClientError):
    """Swap quote API reported failure or was unreachable"""

    def __init__(
        self,
        message: str,
        input_mint: Optional[str] = None,
        output_mint: Optional[str] = None,
    ):
        super().__init__(
            message,
            ErrorCode.QUOTE_UNAVAILABLE,
            recoverable=True,
            details={"input_mint": input_mint, "output_mint": output_mint},
        )
        self.input_mint = input_mint
        self.output_mint = output_mint

    @classmethod
    def from_api(cls, reason: str, input_mint: str = None, output_mint: str = None) -> "QuoteUnavailableError":
        return cls(
            f"Swap quote failed: {reason}",
            input_mint=input_mint,
            output_mint=output_mint,
        )


class BuildFailedError(DexClientError):
    """Swap transaction build API reported failure or was unreachable"""

    def __init__(self, message: str):
        super().__init__(message, ErrorCode.BUILD_FAILED, recoverable=False)

    @classmethod
    def from_api(cls, reason: str) -> "BuildFailedError":
        return cls(f"Swap transaction failed: {reason}")


class PriceUnavailableError(DexClientError):
    """Token price could not be fetched"""

    def __init__(self, message: str, mint: Optional[str] = None):
        super().__init__(
            message,
            ErrorCode.PRICE_UNAVAILABLE,
            recoverable=True,
            details={"mint": mint},
        )
        self.mint = mint

    @classmethod
    def from_api(cls, mint: str, reason: str) -> "PriceUnavailableError":
        return cls(f"Price unavailable for {mint}: {reason}", mint=mint)


class TransactionError(DexClientError):
    """
    Transaction execution errors

    Raised when:
    - Transaction send fails
    - Confirmation fails or times out
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.TX_SEND_FAILED,
        signature: Optional[str] = None,
        recoverable: bool = False,
        original_error: Optional[Exception] = None,
    ):
        super().__init__(
            message,
            code,
            recoverable=recoverable,
            original_error=original_error,
            details={"signature": signature},
        )
        self.signature = signature

    @classmethod
    def send_failed(cls, error: str, original_error: Exception = None) -> "TransactionError":
        # Network issues are worth a caller-side retry
        recoverable = "timeout" in error.lower() or "connection" in error.lower()
        return cls(
            f"Failed to send transaction: {error}",
            ErrorCode.TX_SEND_FAILED,
            recoverable=recoverable,
            original_error=original_error,
        )

    @classmethod
    def confirmation_failed(cls, signature: str, error: str) -> "TransactionError":
        return cls(
            f"Transaction confirmation failed: {error}",
            ErrorCode.TX_CONFIRMATION_FAILED,
            signature=signature,
            recoverable=True,
        )


class SubmissionError(TransactionError):
    """
    Signing or broadcasting a built swap transaction failed

    Transactions submitted before the failing one stay in flight.
    """

    def __init__(
        self,
        message: str,
        index: Optional[int] = None,
        submitted: Optional[list] = None,
        original_error: Optional[Exception] = None,
    ):
        super().__init__(
            message,
            ErrorCode.TX_SUBMISSION_FAILED,
            original_error=original_error,
        )
        self.index = index
        self.submitted = list(submitted or [])
        self.details["index"] = index

    @classmethod
    def at_index(cls, index: int, error: Exception, submitted: list = None) -> "SubmissionError":
        return cls(
            f"Failed to submit transaction #{index + 1}: {error}",
            index=index,
            submitted=submitted,
            original_error=error,
        )


class AccountCreationError(TransactionError):
    """Associated token account creation failed for a reason other than 'already exists'"""

    def __init__(
        self,
        message: str,
        address: Optional[str] = None,
        mint: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ):
        super().__init__(
            message,
            ErrorCode.TX_ACCOUNT_CREATION_FAILED,
            original_error=original_error,
        )
        self.address = address
        self.mint = mint
        self.details.update({"address": address, "mint": mint})

    @classmethod
    def failed(cls, address: str, mint: str, error: Exception) -> "AccountCreationError":
        return cls(
            f"Failed to create token account {address} for mint {mint}: {error}",
            address=address,
            mint=mint,
            original_error=error,
        )


class DecimalsUnavailableError(DexClientError):
    """Token decimals could not be resolved from metadata or chain"""

    def __init__(self, message: str, mint: Optional[str] = None):
        super().__init__(
            message,
            ErrorCode.DECIMALS_UNAVAILABLE,
            recoverable=False,
            details={"mint": mint},
        )
        self.mint = mint

    @classmethod
    def for_mint(cls, mint: str) -> "DecimalsUnavailableError":
        return cls(f"Could not determine decimals for mint {mint}", mint=mint)


class SignerError(DexClientError):
    """
    Signing-related errors

    Raised when:
    - No wallet secret configured
    - Secret key cannot be decoded
    - Wallet is not a required signer of a transaction
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.SIGNER_FAILED,
    ):
        super().__init__(message, code, recoverable=False)

    @classmethod
    def not_configured(cls) -> "SignerError":
        return cls(
            "No signer configured. Provide a secret key, keypair or keypair file.",
            ErrorCode.SIGNER_NOT_CONFIGURED,
        )

    @classmethod
    def failed(cls, reason: str) -> "SignerError":
        return cls(f"Signing failed: {reason}", ErrorCode.SIGNER_FAILED)


class ConfigurationError(DexClientError):
    """
    Configuration-related errors

    Raised when:
    - Required configuration is missing
    - Configuration or request values are invalid
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.CONFIG_INVALID,
    ):
        super().__init__(message, code, recoverable=False)

    @classmethod
    def missing(cls, param: str) -> "ConfigurationError":
        return cls(f"Missing required configuration: {param}", ErrorCode.CONFIG_MISSING)

    @classmethod
    def invalid(cls, param: str, reason: str) -> "ConfigurationError":
        return cls(f"Invalid configuration '{param}': {reason}", ErrorCode.CONFIG_INVALID)
