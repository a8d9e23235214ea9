"""
Swap Module

Token swaps through the Raydium trade API:
validate -> priority fee -> quote -> build -> sign and submit.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Tuple, TYPE_CHECKING

if TYPE_CHECKING:
    from ..client import SolanaDexClient

from ..types import SwapRequest, SwapQuote, PriorityFee, BuiltTransaction, SubmissionResult
from ..types.solana_tokens import get_token_symbol
from ..infra.correlation import CorrelationContext, log_with_correlation
from ..errors import (
    InsufficientFundsError,
    FeeUnavailableError,
    QuoteUnavailableError,
    BuildFailedError,
)
from ..config import config
from ..utils import explorer_url

logger = logging.getLogger(__name__)


class SwapModule:
    """
    Swap operations module

    Every step runs strictly after the previous one and nothing is
    retried: a failure raises immediately. Transactions broadcast before
    a submission failure are not rolled back.

    Usage:
        request = SwapRequest(
            input_mint="USDC",
            output_mint="SOL",
            amount=1_000_000,
            slippage_bps=100,
            output_is_native=True,
        )

        # Preview
        quote = client.swap.quote(request)

        # Execute
        signatures = client.swap.swap(request)
    """

    def __init__(
        self,
        client: "SolanaDexClient",
        fee_reserve_lamports: Optional[int] = None,
    ):
        """
        Initialize swap module

        Args:
            client: SolanaDexClient instance
            fee_reserve_lamports: Minimum SOL kept for fees (default from config)
        """
        self._client = client
        self._rpc = client.rpc
        self._fee_reserve = (
            fee_reserve_lamports
            if fee_reserve_lamports is not None
            else config.trading.fee_reserve_lamports
        )

    @property
    def fee_reserve_lamports(self) -> int:
        return self._fee_reserve

    def _log(self, level: int, step: str, message: str):
        log_with_correlation(logger, level, message, step)

    def _validate(self, request: SwapRequest) -> Tuple[Optional[str], Optional[str]]:
        """
        Check balances and make sure token accounts exist

        Returns:
            (input_account, output_account); None for a native side
        """
        wallet = self._client.pubkey

        lamports = self._rpc.get_balance(wallet)
        if lamports < self._fee_reserve:
            raise InsufficientFundsError.sol_for_fees(self._fee_reserve, lamports)

        input_account = None
        output_account = None

        if not request.input_is_native:
            input_mint = request.resolved_input_mint
            symbol = get_token_symbol(input_mint) or input_mint

            # A missing input account holds nothing; fail before creating one
            if self._client.accounts.find(input_mint) is None:
                raise InsufficientFundsError.token_balance(symbol, request.amount, 0)

            input_account = self._client.accounts.ensure_account(input_mint)
            self._log(logging.INFO, "validate", f"Input token account: {input_account}")

            balance = self._rpc.get_token_account_balance(input_account)
            available = int(balance.get("amount") or 0)
            if available < request.amount:
                raise InsufficientFundsError.token_balance(symbol, request.amount, available)

        if not request.output_is_native:
            output_account = self._client.accounts.ensure_account(request.resolved_output_mint)
            self._log(logging.INFO, "validate", f"Output token account: {output_account}")

        return input_account, output_account

    def _priority_fee(self) -> PriorityFee:
        result = self._client.raydium.get_priority_fee()
        if not result.ok:
            raise FeeUnavailableError.from_api(str(result))
        self._log(logging.INFO, "fee", f"Priority fee: {result.data}")
        return result.data

    def quote(self, request: SwapRequest) -> SwapQuote:
        """
        Get a swap quote without validating or executing

        Args:
            request: Swap request

        Returns:
            SwapQuote

        Raises:
            QuoteUnavailableError: If the quote API fails or is unreachable
        """
        input_mint = request.resolved_input_mint
        output_mint = request.resolved_output_mint

        result = self._client.raydium.get_swap_quote(
            input_mint,
            output_mint,
            request.amount,
            request.slippage_bps,
        )
        if not result.ok:
            raise QuoteUnavailableError.from_api(str(result), input_mint, output_mint)

        self._log(logging.INFO, "quote", f"Swap quote: {result.data}")
        return result.data

    def _build(
        self,
        request: SwapRequest,
        quote: SwapQuote,
        fee: PriorityFee,
        input_account: Optional[str],
        output_account: Optional[str],
    ) -> List[BuiltTransaction]:
        result = self._client.raydium.build_swap_transactions(
            quote,
            fee.micro_lamports,
            self._client.pubkey,
            wrap_sol=request.input_is_native,
            unwrap_sol=request.output_is_native,
            input_account=input_account,
            output_account=output_account,
        )
        if not result.ok:
            raise BuildFailedError.from_api(str(result))

        self._log(logging.INFO, "build", f"Received {len(result.data)} transaction(s)")
        return result.data

    def swap(self, request: SwapRequest) -> SubmissionResult:
        """
        Execute a swap

        Args:
            request: Swap request

        Returns:
            SubmissionResult with one signature per built transaction, in
            submission order

        Raises:
            InsufficientFundsError: SOL below the fee reserve, or input
                token balance below the requested amount
            AccountCreationError: A required token account could not be created
            FeeUnavailableError: Priority fee could not be fetched
            QuoteUnavailableError: Quote API failed
            BuildFailedError: Build API failed
            SubmissionError: Signing or broadcasting a transaction failed
        """
        with CorrelationContext("swap"):
            self._log(
                logging.INFO,
                "swap",
                f"Starting swap: {request.amount} {request.input_mint} -> {request.output_mint} "
                f"(slippage {request.slippage_bps} bps)",
            )

            input_account, output_account = self._validate(request)
            fee = self._priority_fee()
            quote = self.quote(request)
            payloads = self._build(request, quote, fee, input_account, output_account)

            result = self._client.tx_builder.submit_all(payloads)

            for signature in result:
                self._log(logging.INFO, "submit", f"Transaction sent: {explorer_url(signature)}")

            return result
