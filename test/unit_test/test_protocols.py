"""
Test Protocols Module

Tests the Raydium and price API decoders with a mocked HTTP client,
and the SPL instruction builders.
"""

import sys
import struct
from pathlib import Path
from unittest.mock import Mock

import httpx
import pytest

# Add parent to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from solders.keypair import Keypair
from solders.pubkey import Pubkey

from solana_dex.protocols import RaydiumAPI, PriceAPI
from solana_dex.protocols.raydium.instructions import (
    get_associated_token_address,
    build_create_ata_instruction,
    build_transfer_sol_instruction,
    build_transfer_checked_instruction,
)
from solana_dex.protocols.raydium.constants import (
    ASSOCIATED_TOKEN_PROGRAM_ID,
    SYSTEM_PROGRAM_ID,
    TOKEN_PROGRAM_ID,
)
from solana_dex.types import SwapQuote, WRAPPED_SOL_MINT, SOLANA_TOKEN_MINTS

USDC = SOLANA_TOKEN_MINTS["USDC"]
BASE = "https://api.test"
SWAP = "https://swap.test"


def _response(body, status_code=200, reason="OK"):
    response = Mock()
    response.status_code = status_code
    response.is_error = status_code >= 400
    response.reason_phrase = reason
    response.json.return_value = body
    return response


@pytest.fixture
def raydium():
    api = RaydiumAPI(timeout=5, base_host=BASE, swap_host=SWAP, tx_version="V0", priority_fee_tier="h")
    api._client = Mock()
    return api


class TestPriorityFee:
    """Tests for RaydiumAPI.get_priority_fee"""

    def test_uses_configured_tier(self, raydium):
        raydium._client.request.return_value = _response(
            {"id": "x", "success": True, "data": {"default": {"vh": 120000, "h": 60000, "m": 10000}}}
        )

        result = raydium.get_priority_fee()

        assert result.ok
        assert result.data.micro_lamports == 60000
        assert result.data.very_high == 120000
        assert result.data.medium == 10000
        args, _ = raydium._client.request.call_args
        assert args == ("GET", f"{BASE}/main/auto-fee")

    def test_missing_tier(self, raydium):
        raydium._client.request.return_value = _response({"success": True, "data": {"default": {}}})

        assert raydium.get_priority_fee().ok is False

    def test_transport_error(self, raydium):
        raydium._client.request.side_effect = httpx.ConnectError("connection refused")

        result = raydium.get_priority_fee()
        assert result.ok is False
        assert "connection refused" in str(result)

    def test_http_error_status(self, raydium):
        raydium._client.request.return_value = _response(None, status_code=503, reason="Service Unavailable")

        result = raydium.get_priority_fee()
        assert result.ok is False
        assert result.status_code == 503
        assert "Service Unavailable" in str(result)


class TestSwapQuote:
    """Tests for RaydiumAPI.get_swap_quote"""

    def test_success(self, raydium):
        body = {"id": "q", "success": True, "data": {"outputAmount": "6500000"}}
        raydium._client.request.return_value = _response(body)

        result = raydium.get_swap_quote(USDC, WRAPPED_SOL_MINT, 1_000_000, 100)

        assert result.ok
        assert result.data.raw is body
        assert result.data.output_amount == 6_500_000
        args, kwargs = raydium._client.request.call_args
        assert args == ("GET", f"{SWAP}/compute/swap-base-in")
        assert kwargs["params"] == {
            "inputMint": USDC,
            "outputMint": WRAPPED_SOL_MINT,
            "amount": "1000000",
            "slippageBps": 100,
            "txVersion": "V0",
        }

    def test_unsuccessful(self, raydium):
        raydium._client.request.return_value = _response({"id": "q", "success": False, "msg": "ROUTE_NOT_FOUND"})

        result = raydium.get_swap_quote(USDC, WRAPPED_SOL_MINT, 1_000_000, 100)

        assert result.ok is False
        assert str(result) == "ROUTE_NOT_FOUND"

    def test_error_status_with_message(self, raydium):
        raydium._client.request.return_value = _response(
            {"success": False, "msg": "amount too small"}, status_code=400, reason="Bad Request"
        )

        result = raydium.get_swap_quote(USDC, WRAPPED_SOL_MINT, 1, 100)
        assert str(result) == "amount too small (HTTP 400)"

    def test_invalid_json(self, raydium):
        response = _response(None)
        response.json.side_effect = ValueError("Expecting value")
        raydium._client.request.return_value = response

        result = raydium.get_swap_quote(USDC, WRAPPED_SOL_MINT, 1, 100)
        assert str(result).startswith("invalid JSON response")


class TestBuildSwapTransactions:
    """Tests for RaydiumAPI.build_swap_transactions"""

    QUOTE = SwapQuote(raw={"id": "q", "success": True, "data": {"inputMint": USDC}})

    def test_payload_and_decode(self, raydium):
        raydium._client.request.return_value = _response(
            {"id": "b", "success": True, "data": [{"transaction": "AQID"}, {"transaction": "BAUG"}]}
        )

        result = raydium.build_swap_transactions(
            self.QUOTE,
            50_000,
            "Wallet111",
            unwrap_sol=True,
            input_account="InputAta111",
        )

        assert result.ok
        assert [tx.transaction_base64 for tx in result.data] == ["AQID", "BAUG"]

        args, kwargs = raydium._client.request.call_args
        assert args == ("POST", f"{SWAP}/transaction/swap-base-in")
        payload = kwargs["json"]
        assert payload["computeUnitPriceMicroLamports"] == "50000"
        assert payload["swapResponse"] is self.QUOTE.raw
        assert payload["txVersion"] == "V0"
        assert payload["wallet"] == "Wallet111"
        assert payload["wrapSol"] is False
        assert payload["unwrapSol"] is True
        assert payload["inputAccount"] == "InputAta111"
        # Native side is addressed by the wallet itself
        assert payload["outputAccount"] == "Wallet111"

    def test_route_not_found(self, raydium):
        raydium._client.request.return_value = _response({"id": "b", "success": False, "msg": "route not found"})

        result = raydium.build_swap_transactions(self.QUOTE, 1, "Wallet111")

        assert result.ok is False
        assert "route not found" in str(result)

    def test_empty_transactions(self, raydium):
        raydium._client.request.return_value = _response({"success": True, "data": []})

        assert raydium.build_swap_transactions(self.QUOTE, 1, "Wallet111").ok is False

    def test_malformed_entry(self, raydium):
        raydium._client.request.return_value = _response(
            {"success": True, "data": [{"transaction": "AQID"}, {"tx": "BAUG"}]}
        )

        assert raydium.build_swap_transactions(self.QUOTE, 1, "Wallet111").ok is False


class TestTokenInfo:
    """Tests for RaydiumAPI.get_token_info"""

    def test_found(self, raydium):
        raydium._client.request.return_value = _response({
            "success": True,
            "data": [{"address": USDC, "decimals": 6, "symbol": "USDC", "name": "USD Coin"}],
        })

        result = raydium.get_token_info(USDC)

        assert result.ok
        assert result.data.decimals == 6
        assert result.data.name == "USD Coin"
        _, kwargs = raydium._client.request.call_args
        assert kwargs["params"] == {"mints": USDC}

    def test_missing(self, raydium):
        raydium._client.request.return_value = _response({"success": True, "data": [None]})

        assert raydium.get_token_info(USDC).ok is False


class TestPriceAPI:
    """Tests for PriceAPI.get_price"""

    @pytest.fixture
    def prices(self):
        api = PriceAPI(timeout=5, url="https://price.test/v2")
        api._client = Mock()
        return api

    def test_price(self, prices):
        response = Mock()
        response.json.return_value = {"data": {WRAPPED_SOL_MINT: {"id": WRAPPED_SOL_MINT, "price": "151.42"}}}
        prices._client.get.return_value = response

        result = prices.get_price(WRAPPED_SOL_MINT)

        assert result.ok
        assert result.data == 151.42
        prices._client.get.assert_called_once_with("https://price.test/v2", params={"ids": WRAPPED_SOL_MINT})

    def test_no_price(self, prices):
        response = Mock()
        response.json.return_value = {"data": {WRAPPED_SOL_MINT: None}}
        prices._client.get.return_value = response

        assert prices.get_price(WRAPPED_SOL_MINT).ok is False

    @pytest.mark.parametrize("body", [
        {"data": {WRAPPED_SOL_MINT: "150.0"}},
        {"data": ["150.0"]},
        {"data": "unavailable"},
        ["150.0"],
    ])
    def test_malformed_body(self, prices, body):
        """Unexpected shapes become failures instead of raising"""
        response = Mock()
        response.json.return_value = body
        prices._client.get.return_value = response

        result = prices.get_price(WRAPPED_SOL_MINT)
        assert result.ok is False
        assert "no price" in str(result)

    def test_http_status_error(self, prices):
        request = httpx.Request("GET", "https://price.test/v2")
        error_response = httpx.Response(502, request=request)
        response = Mock()
        response.raise_for_status.side_effect = httpx.HTTPStatusError(
            "Bad Gateway", request=request, response=error_response
        )
        prices._client.get.return_value = response

        result = prices.get_price(WRAPPED_SOL_MINT)
        assert result.ok is False
        assert result.status_code == 502

    def test_transport_error(self, prices):
        prices._client.get.side_effect = httpx.ReadTimeout("timed out")

        assert prices.get_price(WRAPPED_SOL_MINT).ok is False


class TestInstructions:
    """Tests for SPL instruction builders"""

    def test_ata_derivation(self):
        owner = Keypair().pubkey()
        mint = Pubkey.from_string(USDC)
        expected, _ = Pubkey.find_program_address(
            [bytes(owner), bytes(Pubkey.from_string(TOKEN_PROGRAM_ID)), bytes(mint)],
            Pubkey.from_string(ASSOCIATED_TOKEN_PROGRAM_ID),
        )

        assert get_associated_token_address(owner, mint) == expected

    def test_create_ata(self):
        payer = Keypair().pubkey()
        owner = Keypair().pubkey()
        mint = Pubkey.from_string(USDC)

        ix = build_create_ata_instruction(payer, owner, mint)
        idempotent = build_create_ata_instruction(payer, owner, mint, idempotent=True)

        assert bytes(ix.data) == bytes([0])
        assert bytes(idempotent.data) == bytes([1])
        assert [str(m.pubkey) for m in ix.accounts] == [
            str(payer),
            str(get_associated_token_address(owner, mint)),
            str(owner),
            USDC,
            SYSTEM_PROGRAM_ID,
            TOKEN_PROGRAM_ID,
        ]
        assert ix.accounts[0].is_signer and ix.accounts[0].is_writable
        assert ix.accounts[1].is_writable and not ix.accounts[1].is_signer

    def test_transfer_sol(self):
        source = Keypair().pubkey()
        dest = Keypair().pubkey()

        ix = build_transfer_sol_instruction(source, dest, 1_000_000_000)

        assert str(ix.program_id) == SYSTEM_PROGRAM_ID
        assert bytes(ix.data) == struct.pack("<IQ", 2, 1_000_000_000)
        assert ix.accounts[0].is_signer

    def test_transfer_checked(self):
        source = Keypair().pubkey()
        dest = Keypair().pubkey()
        owner = Keypair().pubkey()
        mint = Pubkey.from_string(USDC)

        ix = build_transfer_checked_instruction(source, mint, dest, owner, 1_500_000, 6)

        assert str(ix.program_id) == TOKEN_PROGRAM_ID
        assert bytes(ix.data) == bytes([12]) + (1_500_000).to_bytes(8, "little") + bytes([6])
        assert ix.accounts[3].is_signer
        assert not ix.accounts[3].is_writable
