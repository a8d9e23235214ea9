"""
Wallet Module

Provides balance queries and native/token transfers.
"""

import logging
from decimal import Decimal
from typing import Optional, TYPE_CHECKING

from solders.pubkey import Pubkey

if TYPE_CHECKING:
    from ..client import SolanaDexClient

from ..types import TokenInfo, TxResult
from ..types.solana_tokens import resolve_token_mint, get_token_symbol
from ..protocols.raydium.instructions import (
    build_create_ata_instruction,
    build_transfer_sol_instruction,
    build_transfer_checked_instruction,
)
from ..errors import (
    InsufficientFundsError,
    DecimalsUnavailableError,
    TransactionError,
    RpcError,
    ConfigurationError,
)
from ..config import config
from ..utils import Number, to_smallest_unit, sol_to_lamports, lamports_to_sol, explorer_url

logger = logging.getLogger(__name__)


def _check_address(value: str, name: str) -> Pubkey:
    try:
        return Pubkey.from_string(value)
    except ValueError:
        raise ConfigurationError.invalid(name, f"not a valid Solana address: {value!r}")


class WalletModule:
    """
    Wallet operations module

    Provides:
    - SOL and token balance queries
    - Token metadata (decimals)
    - SOL transfers
    - SPL token transfers

    Usage:
        client = SolanaDexClient(rpc_url, secret_key=...)

        sol = client.wallet.sol_balance()
        usdc = client.wallet.token_balance("USDC")

        sig = client.wallet.send_sol("Recipient...", Decimal("0.1"))
        sig = client.wallet.send_token("Recipient...", "USDC", Decimal("1.5"))
    """

    def __init__(
        self,
        client: "SolanaDexClient",
        fee_reserve_lamports: Optional[int] = None,
    ):
        """
        Initialize wallet module

        Args:
            client: SolanaDexClient instance
            fee_reserve_lamports: SOL kept back for fees on transfers (default from config)
        """
        self._client = client
        self._rpc = client.rpc
        self._fee_reserve = (
            fee_reserve_lamports
            if fee_reserve_lamports is not None
            else config.trading.fee_reserve_lamports
        )

    @property
    def address(self) -> str:
        """Wallet address"""
        return self._client.pubkey

    def sol_balance_lamports(self) -> int:
        """Get native SOL balance in lamports"""
        return self._rpc.get_balance(self.address)

    def sol_balance(self) -> Decimal:
        """
        Get native SOL balance

        Returns:
            SOL balance in decimal (e.g., 1.5 SOL)
        """
        lamports = self.sol_balance_lamports()
        balance = lamports_to_sol(lamports)
        logger.debug(f"SOL balance: {balance} SOL")
        return balance

    def token_balance_raw(self, token: str) -> int:
        """
        Get the wallet's token balance in smallest units

        Returns 0 when the wallet has no token account for the mint.
        """
        ref = self._client.accounts.derive(token)
        if self._rpc.get_account_info(ref.address) is None:
            return 0
        balance = self._rpc.get_token_account_balance(ref.address)
        return int(balance.get("amount") or 0)

    def token_balance(self, token: str) -> Decimal:
        """
        Get token balance by symbol or mint address

        Args:
            token: Token symbol (e.g., "USDC") or mint address

        Returns:
            Token balance in UI units
        """
        ref = self._client.accounts.derive(token)
        if self._rpc.get_account_info(ref.address) is None:
            return Decimal(0)

        # amount + decimals keeps full precision (uiAmount is a float)
        balance = self._rpc.get_token_account_balance(ref.address)
        amount = balance.get("amount")
        decimals = balance.get("decimals", 0)
        if not amount:
            return Decimal(0)
        return Decimal(amount) / (Decimal(10) ** decimals)

    def token_info(self, token: str) -> TokenInfo:
        """
        Get token metadata

        Uses the metadata API and falls back to the on-chain mint account.

        Raises:
            DecimalsUnavailableError: If neither source yields decimals
        """
        mint = resolve_token_mint(token)

        result = self._client.raydium.get_token_info(mint)
        if result.ok:
            return result.data
        logger.debug(f"Metadata lookup failed for {mint}: {result}, reading mint account")

        try:
            account = self._rpc.get_account_info(mint, encoding="jsonParsed")
        except RpcError as e:
            logger.warning(f"Mint account lookup failed for {mint}: {e}")
            account = None

        data = (account or {}).get("data")
        if isinstance(data, dict):
            decimals = (data.get("parsed") or {}).get("info", {}).get("decimals")
            if decimals is not None:
                return TokenInfo(mint=mint, decimals=int(decimals), symbol=get_token_symbol(mint) or "")

        raise DecimalsUnavailableError.for_mint(mint)

    def token_decimals(self, token: str) -> int:
        """Get the decimal count for a token"""
        return self.token_info(token).decimals

    def _confirmed_signature(self, result: TxResult) -> str:
        if result.is_success:
            logger.info(f"Transfer confirmed: {explorer_url(result.signature)}")
            return result.signature
        if result.is_timeout:
            raise TransactionError.confirmation_failed(result.signature, "not confirmed before timeout")
        raise TransactionError.confirmation_failed(result.signature, result.error or result.status.value)

    def send_sol(self, destination: str, amount_sol: Number) -> str:
        """
        Transfer native SOL

        Args:
            destination: Recipient wallet address
            amount_sol: Amount in SOL

        Returns:
            Confirmed transaction signature

        Raises:
            InsufficientFundsError: Balance below amount plus fee reserve
            TransactionError: Send or confirmation failed
        """
        recipient = _check_address(destination, "destination")
        lamports = sol_to_lamports(amount_sol)
        if lamports <= 0:
            raise ConfigurationError.invalid("amount", f"must be positive, got {amount_sol}")

        required = lamports + self._fee_reserve
        available = self.sol_balance_lamports()
        if available < required:
            raise InsufficientFundsError.sol_for_transfer(required, available)

        logger.info(f"Sending {lamports_to_sol(lamports)} SOL to {destination}")

        instruction = build_transfer_sol_instruction(
            Pubkey.from_string(self.address),
            recipient,
            lamports,
        )
        result = self._client.tx_builder.build_and_send([instruction])
        return self._confirmed_signature(result)

    def send_token(self, destination: str, token: str, amount: Number) -> str:
        """
        Transfer SPL tokens

        The recipient's associated token account is created in the same
        transaction when it does not exist yet.

        Args:
            destination: Recipient wallet address
            token: Token symbol or mint address
            amount: Amount in UI units (rounded half up to the token's decimals)

        Returns:
            Confirmed transaction signature

        Raises:
            DecimalsUnavailableError: Token decimals could not be resolved
            InsufficientFundsError: Token balance below the amount
            TransactionError: Send or confirmation failed
        """
        recipient = _check_address(destination, "destination")
        mint = resolve_token_mint(token)

        decimals = self.token_decimals(mint)
        raw_amount = to_smallest_unit(amount, decimals)
        if raw_amount <= 0:
            raise ConfigurationError.invalid("amount", f"must be positive after rounding, got {amount}")

        source = self._client.accounts.derive(mint)
        available = self.token_balance_raw(mint)
        if available < raw_amount:
            raise InsufficientFundsError.token_balance(get_token_symbol(mint) or mint, raw_amount, available)

        dest = self._client.accounts.derive(mint, owner=destination)
        owner = Pubkey.from_string(self.address)
        mint_pubkey = Pubkey.from_string(mint)

        instructions = []
        if self._rpc.get_account_info(dest.address) is None:
            logger.info(f"Recipient token account {dest.address} will be created")
            instructions.append(build_create_ata_instruction(
                payer=owner,
                owner=recipient,
                mint=mint_pubkey,
                idempotent=True,
            ))

        instructions.append(build_transfer_checked_instruction(
            source=Pubkey.from_string(source.address),
            mint=mint_pubkey,
            destination=Pubkey.from_string(dest.address),
            owner=owner,
            amount=raw_amount,
            decimals=decimals,
        ))

        logger.info(f"Sending {raw_amount} raw units of {mint} to {destination}")

        result = self._client.tx_builder.build_and_send(instructions)
        return self._confirmed_signature(result)
