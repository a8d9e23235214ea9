"""
Test Errors Module

Tests for solana_dex.errors package.
"""

import sys
from decimal import Decimal
from pathlib import Path

# Add parent to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent.parent))


def test_error_code():
    """Test ErrorCode enum"""
    from solana_dex.errors import ErrorCode

    print("Testing ErrorCode...")

    assert ErrorCode.RPC_CONNECTION_FAILED.value == "1001"
    assert ErrorCode.TX_SUBMISSION_FAILED.value == "2003"
    assert ErrorCode.INSUFFICIENT_FUNDS.value == "3001"
    assert ErrorCode.BUILD_FAILED.value == "4003"
    assert ErrorCode.DECIMALS_UNAVAILABLE.value == "5001"

    print("  ErrorCode: PASSED")


def test_base_error():
    """Test DexClientError base class"""
    from solana_dex.errors import DexClientError, ErrorCode

    print("Testing DexClientError...")

    error = DexClientError(
        message="Test error",
        code=ErrorCode.RPC_CONNECTION_FAILED,
        recoverable=True,
    )

    # __str__ returns "[code] message" format
    assert "[1001] Test error" == str(error)
    assert error.code == ErrorCode.RPC_CONNECTION_FAILED
    assert error.should_retry is True
    assert error.details == {}

    print("  DexClientError: PASSED")


def test_rpc_error():
    """Test RpcError exception"""
    from solana_dex.errors import RpcError, ErrorCode

    print("Testing RpcError...")

    error1 = RpcError.connection_failed("https://rpc.example.com")
    assert error1.code == ErrorCode.RPC_CONNECTION_FAILED
    assert error1.recoverable is True
    assert error1.endpoint == "https://rpc.example.com"

    error2 = RpcError.timeout("https://rpc.example.com", 30.0)
    assert error2.code == ErrorCode.RPC_TIMEOUT
    assert "30.0s" in error2.message

    error3 = RpcError.rate_limited("https://rpc.example.com")
    assert error3.code == ErrorCode.RPC_RATE_LIMITED

    print("  RpcError: PASSED")


def test_insufficient_funds():
    """Test InsufficientFundsError factories"""
    from solana_dex.errors import InsufficientFundsError, ErrorCode

    print("Testing InsufficientFundsError...")

    error = InsufficientFundsError.token_balance("USDC", 1_000_000, 500_000)
    assert error.code == ErrorCode.INSUFFICIENT_FUNDS
    assert error.token == "USDC"
    assert error.required == Decimal(1_000_000)
    assert error.available == Decimal(500_000)
    assert error.recoverable is False
    assert "USDC" in str(error)

    fees = InsufficientFundsError.sol_for_fees(10_000_000, 5_000_000)
    assert fees.code == ErrorCode.INSUFFICIENT_FEE_RESERVE
    assert fees.required == Decimal("0.01")
    assert fees.available == Decimal("0.005")

    transfer = InsufficientFundsError.sol_for_transfer(1_010_000_000, 1_000_000_000)
    assert transfer.code == ErrorCode.INSUFFICIENT_FUNDS
    assert transfer.token == "SOL"

    print("  InsufficientFundsError: PASSED")


def test_swap_api_errors():
    """Test fee, quote and build errors carry the API message"""
    from solana_dex.errors import (
        FeeUnavailableError,
        QuoteUnavailableError,
        BuildFailedError,
        ErrorCode,
    )

    print("Testing swap API errors...")

    fee = FeeUnavailableError.from_api("timeout")
    assert fee.code == ErrorCode.FEE_UNAVAILABLE
    assert "timeout" in str(fee)

    quote = QuoteUnavailableError.from_api("insufficient liquidity", "mintA", "mintB")
    assert quote.code == ErrorCode.QUOTE_UNAVAILABLE
    assert quote.input_mint == "mintA"
    assert quote.output_mint == "mintB"
    assert "insufficient liquidity" in str(quote)

    build = BuildFailedError.from_api("route not found")
    assert build.code == ErrorCode.BUILD_FAILED
    assert "route not found" in str(build)
    assert build.recoverable is False

    print("  Swap API errors: PASSED")


def test_transaction_errors():
    """Test TransactionError and its subclasses"""
    from solana_dex.errors import (
        TransactionError,
        SubmissionError,
        AccountCreationError,
        ErrorCode,
    )

    print("Testing TransactionError...")

    send = TransactionError.send_failed("connection reset by peer")
    assert send.code == ErrorCode.TX_SEND_FAILED
    assert send.recoverable is True

    rejected = TransactionError.send_failed("Blockhash not found")
    assert rejected.recoverable is False

    confirm = TransactionError.confirmation_failed("sig123", "dropped")
    assert confirm.signature == "sig123"
    assert confirm.code == ErrorCode.TX_CONFIRMATION_FAILED

    cause = RuntimeError("node rejected")
    submission = SubmissionError.at_index(1, cause, submitted=["sig1"])
    assert isinstance(submission, TransactionError)
    assert submission.code == ErrorCode.TX_SUBMISSION_FAILED
    assert submission.index == 1
    assert submission.submitted == ["sig1"]
    assert submission.original_error is cause
    assert "#2" in str(submission)

    creation = AccountCreationError.failed("ataAddr", "mintAddr", cause)
    assert isinstance(creation, TransactionError)
    assert creation.code == ErrorCode.TX_ACCOUNT_CREATION_FAILED
    assert creation.address == "ataAddr"
    assert creation.mint == "mintAddr"
    assert creation.original_error is cause

    print("  TransactionError: PASSED")


def test_other_errors():
    """Test decimals, price, signer and configuration errors"""
    from solana_dex.errors import (
        DecimalsUnavailableError,
        PriceUnavailableError,
        SignerError,
        ConfigurationError,
        DexClientError,
        ErrorCode,
    )

    print("Testing other errors...")

    decimals = DecimalsUnavailableError.for_mint("mintX")
    assert decimals.mint == "mintX"
    assert decimals.code == ErrorCode.DECIMALS_UNAVAILABLE

    price = PriceUnavailableError.from_api("mintX", "no price")
    assert price.code == ErrorCode.PRICE_UNAVAILABLE
    assert price.recoverable is True

    signer = SignerError.not_configured()
    assert signer.code == ErrorCode.SIGNER_NOT_CONFIGURED

    missing = ConfigurationError.missing("SOLANA_RPC_URL")
    assert missing.code == ErrorCode.CONFIG_MISSING
    assert "SOLANA_RPC_URL" in str(missing)

    invalid = ConfigurationError.invalid("amount", "must be positive")
    assert invalid.code == ErrorCode.CONFIG_INVALID

    for error in (decimals, price, signer, missing, invalid):
        assert isinstance(error, DexClientError)

    print("  Other errors: PASSED")
