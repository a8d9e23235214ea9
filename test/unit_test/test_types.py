"""
Test Types Module

Tests for type definitions.
"""

import sys
from decimal import Decimal
from pathlib import Path

import pytest

# Add parent to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

import solana_dex.types.swap as swap_types
from solana_dex.types import (
    SwapRequest,
    SwapQuote,
    PriorityFee,
    BuiltTransaction,
    SubmissionResult,
    TokenInfo,
    TokenAccountRef,
    TxResult,
    TxStatus,
    ApiSuccess,
    ApiFailure,
    WRAPPED_SOL_MINT,
    SOLANA_TOKEN_MINTS,
    resolve_token_mint,
    is_known_token,
    is_native_sol,
    get_token_decimals,
    get_token_symbol,
)
from solana_dex.errors import ConfigurationError

USDC = SOLANA_TOKEN_MINTS["USDC"]


class TestSwapRequest:
    """Tests for SwapRequest validation"""

    def test_valid_request(self):
        request = SwapRequest("USDC", "SOL", 1_000_000, 100, output_is_native=True)

        assert request.amount == 1_000_000
        assert request.slippage_bps == 100
        assert request.input_is_native is False
        assert request.output_is_native is True
        assert request.resolved_input_mint == USDC
        assert request.resolved_output_mint == WRAPPED_SOL_MINT

    def test_zero_amount_rejected(self):
        with pytest.raises(ConfigurationError):
            SwapRequest("USDC", "SOL", 0, 100)

    def test_negative_amount_rejected(self):
        with pytest.raises(ConfigurationError):
            SwapRequest("USDC", "SOL", -5, 100)

    def test_non_integer_amount_rejected(self):
        """Amounts are smallest units, so floats and bools are refused"""
        with pytest.raises(ConfigurationError):
            SwapRequest("USDC", "SOL", 1.5, 100)
        with pytest.raises(ConfigurationError):
            SwapRequest("USDC", "SOL", True, 100)

    def test_negative_slippage_rejected(self):
        with pytest.raises(ConfigurationError):
            SwapRequest("USDC", "SOL", 1_000_000, -1)

    def test_non_integer_slippage_rejected(self):
        """Slippage is whole basis points"""
        with pytest.raises(ConfigurationError):
            SwapRequest("USDC", "SOL", 1_000_000, 1.5)
        with pytest.raises(ConfigurationError):
            SwapRequest("USDC", "SOL", 1_000_000, "100")
        with pytest.raises(ConfigurationError):
            SwapRequest("USDC", "SOL", 1_000_000, True)

    def test_from_percent_uses_configured_default(self, monkeypatch):
        monkeypatch.setattr(swap_types.global_config.trading, "default_slippage_bps", 75)
        assert SwapRequest.from_percent("USDC", "SOL", 1_000_000).slippage_bps == 75

    def test_missing_mint_rejected(self):
        with pytest.raises(ConfigurationError):
            SwapRequest("", "SOL", 1_000_000, 100)

    def test_from_percent(self):
        """Percent slippage converts to basis points"""
        assert SwapRequest.from_percent("USDC", "SOL", 1_000_000, 1).slippage_bps == 100
        assert SwapRequest.from_percent("USDC", "SOL", 1_000_000, 0.5).slippage_bps == 50
        assert SwapRequest.from_percent("USDC", "SOL", 1_000_000, 0.1).slippage_bps == 10

    def test_frozen(self):
        request = SwapRequest("USDC", "SOL", 1_000_000, 100)
        with pytest.raises(AttributeError):
            request.amount = 5


class TestSwapQuote:
    """Tests for SwapQuote accessors"""

    RAW = {
        "id": "abc",
        "success": True,
        "version": "V1",
        "data": {
            "swapType": "BaseIn",
            "inputMint": USDC,
            "inputAmount": "1000000",
            "outputMint": WRAPPED_SOL_MINT,
            "outputAmount": "6500000",
            "otherAmountThreshold": "6435000",
            "slippageBps": 100,
            "priceImpactPct": 0.01,
            "routePlan": [{"poolId": "pool1"}],
        },
    }

    def test_accessors(self):
        quote = SwapQuote(raw=self.RAW)

        assert quote.input_mint == USDC
        assert quote.output_mint == WRAPPED_SOL_MINT
        assert quote.input_amount == 1_000_000
        assert quote.output_amount == 6_500_000
        assert quote.min_output_amount == 6_435_000
        assert quote.slippage_bps == 100
        assert quote.price_impact_pct == 0.01
        assert quote.route_plan == [{"poolId": "pool1"}]

    def test_raw_is_untouched(self):
        quote = SwapQuote(raw=self.RAW)
        assert quote.raw is self.RAW

    def test_missing_data(self):
        quote = SwapQuote(raw={"success": True})
        assert quote.output_amount == 0
        assert quote.route_plan == []


class TestSubmissionTypes:
    """Tests for built transactions and submission results"""

    def test_built_transaction_bytes(self):
        tx = BuiltTransaction(transaction_base64="AQID")
        assert tx.to_bytes() == b"\x01\x02\x03"

    def test_submission_result_sequence(self):
        result = SubmissionResult(signatures=("sig1", "sig2"))

        assert len(result) == 2
        assert list(result) == ["sig1", "sig2"]
        assert result[0] == "sig1"
        assert result.explorer_urls("https://solscan.io/tx/") == [
            "https://solscan.io/tx/sig1",
            "https://solscan.io/tx/sig2",
        ]

    def test_empty_result(self):
        assert len(SubmissionResult()) == 0


class TestApiResult:
    """Tests for ApiSuccess / ApiFailure"""

    def test_success(self):
        result = ApiSuccess(PriorityFee(micro_lamports=1000))
        assert result.ok is True
        assert result.data.micro_lamports == 1000

    def test_failure(self):
        result = ApiFailure("route not found")
        assert result.ok is False
        assert str(result) == "route not found"

    def test_failure_with_status(self):
        result = ApiFailure("bad gateway", status_code=502)
        assert str(result) == "bad gateway (HTTP 502)"


class TestTxResult:
    """Tests for TxResult factories"""

    def test_success(self):
        result = TxResult.success("5" * 64)
        assert result.is_success
        assert result.status == TxStatus.SUCCESS
        assert "SUCCESS" in str(result)

    def test_failed(self):
        result = TxResult.failed("custom program error", signature="sig")
        assert result.is_failed
        assert result.error == "custom program error"

    def test_timeout(self):
        result = TxResult.timeout("sig")
        assert result.is_timeout
        assert result.recoverable is True

    def test_pending(self):
        assert TxResult.pending("sig").is_pending


class TestCommonTypes:
    """Tests for token info and account references"""

    def test_token_info(self):
        info = TokenInfo(mint=USDC, decimals=6, symbol="USDC")
        assert info.ui_amount(1_500_000) == Decimal("1.5")
        assert str(info) == "USDC"

    def test_token_account_ref(self):
        ref = TokenAccountRef(owner="owner", mint="mint", address="ata")
        assert str(ref) == "ata"
        assert ref == TokenAccountRef(owner="owner", mint="mint", address="ata")


class TestTokenRegistry:
    """Tests for the token registry"""

    def test_resolve_symbol(self):
        assert resolve_token_mint("usdc") == USDC
        assert resolve_token_mint(" SOL ") == WRAPPED_SOL_MINT

    def test_resolve_mint_passthrough(self):
        assert resolve_token_mint(USDC) == USDC

    def test_unknown_symbol_passthrough(self):
        assert resolve_token_mint("NOPE") == "NOPE"
        assert is_known_token("NOPE") is False

    def test_native_sol(self):
        assert is_native_sol("SOL") is True
        assert is_native_sol(WRAPPED_SOL_MINT) is True
        assert is_native_sol("USDC") is False

    def test_decimals_and_symbol(self):
        assert get_token_decimals(USDC) == 6
        assert get_token_decimals(WRAPPED_SOL_MINT) == 9
        assert get_token_decimals("unknown") is None
        assert get_token_symbol(USDC) == "USDC"
        assert get_token_symbol(WRAPPED_SOL_MINT) == "SOL"
