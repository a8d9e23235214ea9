"""
Raydium API Client

REST API client for the Raydium trade API (quote and transaction build)
and the Raydium v3 API (priority fee and mint metadata).

Every response is decoded into an ApiResult right after the HTTP call;
callers never see raw response dicts or httpx exceptions.
"""

import logging
from typing import Any, Dict, List, Optional

import httpx

from ...types import (
    ApiResult,
    ApiSuccess,
    ApiFailure,
    PriorityFee,
    SwapQuote,
    BuiltTransaction,
    TokenInfo,
)
from ...config import config as global_config
from .constants import SWAP_COMPUTE_PATH, SWAP_TRANSACTION_PATH, PRIORITY_FEE_TIERS

logger = logging.getLogger(__name__)


def _failure_message(body: Any, default: str) -> str:
    """Extract the API's own error message from a response body"""
    if isinstance(body, dict):
        msg = body.get("msg") or body.get("message") or body.get("error")
        if msg:
            return str(msg)
    return default


class RaydiumAPI:
    """
    Raydium REST API client

    Provides:
    - Priority fee estimate
    - Swap quotes (base-in)
    - Swap transaction building
    - Token metadata (decimals, symbol)

    Usage:
        api = RaydiumAPI()
        fee = api.get_priority_fee()
        quote = api.get_swap_quote(USDC_MINT, WSOL_MINT, 1_000_000, 100)
        if quote.ok:
            txs = api.build_swap_transactions(quote.data, fee.data.micro_lamports, wallet)
    """

    def __init__(
        self,
        timeout: float = None,
        base_host: str = None,
        swap_host: str = None,
        tx_version: str = None,
        priority_fee_tier: str = None,
    ):
        """
        Initialize Raydium API client

        Args:
            timeout: Request timeout in seconds (default from config)
            base_host: v3 API host for fee and metadata (default from config)
            swap_host: Trade API host for quote and build (default from config)
            tx_version: "V0" or "LEGACY" (default from config)
            priority_fee_tier: Auto-fee tier to use: vh, h or m (default from config)
        """
        cfg = global_config.raydium
        self._timeout = timeout if timeout is not None else cfg.timeout
        self._base_host = (base_host if base_host is not None else cfg.base_host).rstrip("/")
        self._swap_host = (swap_host if swap_host is not None else cfg.swap_host).rstrip("/")
        self._tx_version = tx_version if tx_version is not None else cfg.tx_version
        self._priority_fee_tier = priority_fee_tier if priority_fee_tier is not None else cfg.priority_fee_tier
        self._priority_fee_path = cfg.priority_fee_path
        self._mint_info_path = cfg.mint_info_path
        self._client: Optional[httpx.Client] = None

        if self._priority_fee_tier not in PRIORITY_FEE_TIERS:
            logger.warning(
                f"Unknown priority fee tier '{self._priority_fee_tier}', expected one of {PRIORITY_FEE_TIERS}"
            )

    @property
    def tx_version(self) -> str:
        return self._tx_version

    def _get_client(self) -> httpx.Client:
        """Get or create HTTP client"""
        if self._client is None:
            self._client = httpx.Client(timeout=self._timeout)
        return self._client

    def _request(
        self,
        method: str,
        url: str,
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Dict[str, Any]] = None,
    ) -> ApiResult[Dict[str, Any]]:
        """
        Perform one HTTP call and decode the JSON body

        Transport errors, non-2xx statuses and undecodable bodies become
        ApiFailure; a decoded body is returned as ApiSuccess for the
        endpoint-specific decoder.
        """
        client = self._get_client()

        try:
            response = client.request(method, url, params=params, json=json)
        except httpx.HTTPError as e:
            logger.warning(f"Raydium API request failed: {method} {url}: {e}")
            return ApiFailure(f"request failed: {e}")

        try:
            body = response.json()
        except ValueError:
            body = None

        if response.is_error:
            message = _failure_message(body, response.reason_phrase or "HTTP error")
            logger.warning(f"Raydium API error {response.status_code}: {method} {url}: {message}")
            return ApiFailure(message, status_code=response.status_code, raw=body if isinstance(body, dict) else None)

        if not isinstance(body, dict):
            return ApiFailure("invalid JSON response", status_code=response.status_code)

        return ApiSuccess(body)

    def get_priority_fee(self) -> ApiResult[PriorityFee]:
        """
        Get the current priority fee estimate

        Returns:
            PriorityFee whose micro_lamports is the configured tier
        """
        result = self._request("GET", f"{self._base_host}{self._priority_fee_path}")
        if not result.ok:
            return result

        body = result.data
        tiers = (body.get("data") or {}).get("default") or {}
        chosen = tiers.get(self._priority_fee_tier)
        if chosen is None:
            return ApiFailure(
                _failure_message(body, f"fee tier '{self._priority_fee_tier}' missing from response"),
                raw=body,
            )

        try:
            fee = PriorityFee(
                micro_lamports=int(chosen),
                very_high=int(tiers["vh"]) if tiers.get("vh") is not None else None,
                high=int(tiers["h"]) if tiers.get("h") is not None else None,
                medium=int(tiers["m"]) if tiers.get("m") is not None else None,
            )
        except (TypeError, ValueError) as e:
            return ApiFailure(f"invalid fee value: {e}", raw=body)

        logger.debug(f"Priority fee: {fee}")
        return ApiSuccess(fee)

    def get_swap_quote(
        self,
        input_mint: str,
        output_mint: str,
        amount: int,
        slippage_bps: int,
    ) -> ApiResult[SwapQuote]:
        """
        Get swap quote (exact input)

        Args:
            input_mint: Input token mint address
            output_mint: Output token mint address
            amount: Input amount in smallest units
            slippage_bps: Slippage tolerance in basis points

        Returns:
            SwapQuote wrapping the full response, which the build call
            needs unmodified
        """
        params = {
            "inputMint": input_mint,
            "outputMint": output_mint,
            "amount": str(amount),
            "slippageBps": slippage_bps,
            "txVersion": self._tx_version,
        }

        result = self._request("GET", f"{self._swap_host}{SWAP_COMPUTE_PATH}", params=params)
        if not result.ok:
            return result

        body = result.data
        if not body.get("success"):
            return ApiFailure(_failure_message(body, "quote request unsuccessful"), raw=body)

        quote = SwapQuote(raw=body)
        logger.debug(f"Swap quote: {quote}")
        return ApiSuccess(quote)

    def build_swap_transactions(
        self,
        quote: SwapQuote,
        compute_unit_price: int,
        wallet: str,
        wrap_sol: bool = False,
        unwrap_sol: bool = False,
        input_account: Optional[str] = None,
        output_account: Optional[str] = None,
    ) -> ApiResult[List[BuiltTransaction]]:
        """
        Build serialized swap transactions for a quote

        Args:
            quote: Quote from get_swap_quote()
            compute_unit_price: Priority fee in microlamports per CU
            wallet: Wallet public key (fee payer and signer)
            wrap_sol: Input is native SOL
            unwrap_sol: Output should be native SOL
            input_account: Input token account (wallet address when native)
            output_account: Output token account (wallet address when native)

        Returns:
            Unsigned transactions in execution order
        """
        payload = {
            "computeUnitPriceMicroLamports": str(compute_unit_price),
            "swapResponse": quote.raw,
            "txVersion": self._tx_version,
            "wallet": wallet,
            "wrapSol": wrap_sol,
            "unwrapSol": unwrap_sol,
            "inputAccount": input_account or wallet,
            "outputAccount": output_account or wallet,
        }

        result = self._request("POST", f"{self._swap_host}{SWAP_TRANSACTION_PATH}", json=payload)
        if not result.ok:
            return result

        body = result.data
        if not body.get("success"):
            return ApiFailure(_failure_message(body, "transaction build unsuccessful"), raw=body)

        entries = body.get("data") or []
        transactions = [
            BuiltTransaction(transaction_base64=entry["transaction"])
            for entry in entries
            if isinstance(entry, dict) and entry.get("transaction")
        ]
        if not transactions or len(transactions) != len(entries):
            return ApiFailure("response contains no usable transactions", raw=body)

        logger.debug(f"Built {len(transactions)} swap transaction(s)")
        return ApiSuccess(transactions)

    def get_token_info(self, mint: str) -> ApiResult[TokenInfo]:
        """
        Get token metadata for a mint

        Args:
            mint: Token mint address

        Returns:
            TokenInfo with decimals, symbol and name
        """
        result = self._request(
            "GET",
            f"{self._base_host}{self._mint_info_path}",
            params={"mints": mint},
        )
        if not result.ok:
            return result

        body = result.data
        for entry in body.get("data") or []:
            if not isinstance(entry, dict) or entry.get("address") != mint:
                continue
            decimals = entry.get("decimals")
            if decimals is None:
                break
            return ApiSuccess(TokenInfo(
                mint=mint,
                decimals=int(decimals),
                symbol=entry.get("symbol") or "",
                name=entry.get("name") or "",
            ))

        return ApiFailure(_failure_message(body, f"no metadata for mint {mint}"), raw=body)

    def close(self):
        """Close HTTP client"""
        if self._client:
            self._client.close()
            self._client = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
