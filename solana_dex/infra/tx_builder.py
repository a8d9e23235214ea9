"""
Transaction builder and sender

Provides utilities for:
- Building versioned transactions
- Adding compute budget instructions
- Sending and confirming transactions
- Submitting pre-built serialized transactions in order
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from solders.compute_budget import set_compute_unit_limit, set_compute_unit_price
from solders.hash import Hash
from solders.instruction import Instruction
from solders.message import MessageV0
from solders.pubkey import Pubkey
from solders.signature import Signature
from solders.transaction import VersionedTransaction

from .rpc import RpcClient
from .solana_signer import Signer
from ..types import BuiltTransaction, SubmissionResult, TxResult
from ..errors import DexClientError, TransactionError, SubmissionError, RpcError
from ..config import config as global_config

logger = logging.getLogger(__name__)


@dataclass
class TxBuilderConfig:
    """
    Transaction builder runtime configuration

    This is a runtime configuration class that allows per-builder overrides
    while pulling defaults from the global config (solana_dex.config.TxConfig).

    Usage:
        # Use all defaults from environment
        builder = TxBuilder(rpc, signer)

        # Override specific settings
        config = TxBuilderConfig(compute_unit_price=50_000, confirmation_timeout=90)
        builder = TxBuilder(rpc, signer, config=config)
    """
    compute_units: int = None
    compute_unit_price: int = None
    skip_preflight: bool = None
    swap_skip_preflight: bool = None
    preflight_commitment: str = None
    confirmation_timeout: float = None
    confirmation_poll_interval: float = None

    def __post_init__(self):
        """Apply defaults from global config for any unset values"""
        if self.compute_units is None:
            self.compute_units = global_config.tx.compute_units
        if self.compute_unit_price is None:
            self.compute_unit_price = global_config.tx.compute_unit_price
        if self.skip_preflight is None:
            self.skip_preflight = global_config.tx.skip_preflight
        if self.swap_skip_preflight is None:
            self.swap_skip_preflight = global_config.tx.swap_skip_preflight
        if self.preflight_commitment is None:
            self.preflight_commitment = global_config.tx.preflight_commitment
        if self.confirmation_timeout is None:
            self.confirmation_timeout = global_config.tx.confirmation_timeout
        if self.confirmation_poll_interval is None:
            self.confirmation_poll_interval = global_config.tx.confirmation_poll_interval


class TxBuilder:
    """
    Transaction builder and sender

    Handles:
    - Building versioned transactions with compute budget
    - Signing via the wallet signer
    - Sending and confirmation polling
    - Ordered submission of serialized transactions from the swap API

    Usage:
        builder = TxBuilder(rpc, signer)

        # Build and send
        result = builder.build_and_send(instructions)

        # Or step by step
        tx_bytes = builder.build(instructions)
        signed_bytes, sig = builder.sign(tx_bytes)
        result = builder.send(signed_bytes)

        # Swap API payloads
        signatures = builder.submit_all(built_transactions)
    """

    def __init__(
        self,
        rpc: RpcClient,
        signer: Signer,
        config: Optional[TxBuilderConfig] = None,
    ):
        """
        Initialize transaction builder

        Args:
            rpc: RPC client
            signer: Transaction signer
            config: Transaction configuration
        """
        self._rpc = rpc
        self._signer = signer
        self._config = config or TxBuilderConfig()

    @property
    def pubkey(self) -> str:
        """Signer's public key"""
        return self._signer.pubkey

    @property
    def config(self) -> TxBuilderConfig:
        return self._config

    def build(
        self,
        instructions: List[Instruction],
        payer: Optional[str] = None,
        compute_units: Optional[int] = None,
        compute_unit_price: Optional[int] = None,
        recent_blockhash: Optional[str] = None,
    ) -> bytes:
        """
        Build unsigned versioned transaction

        Args:
            instructions: List of instructions
            payer: Fee payer pubkey (defaults to signer)
            compute_units: Compute unit limit (0 = no limit instruction)
            compute_unit_price: Priority fee in microlamports per CU
            recent_blockhash: Optional blockhash (fetched if not provided)

        Returns:
            Unsigned transaction bytes
        """
        all_instructions = []

        cu_limit = self._config.compute_units if compute_units is None else compute_units
        cu_price = self._config.compute_unit_price if compute_unit_price is None else compute_unit_price

        if cu_limit > 0:
            all_instructions.append(set_compute_unit_limit(cu_limit))

        if cu_price > 0:
            all_instructions.append(set_compute_unit_price(cu_price))

        all_instructions.extend(instructions)

        if recent_blockhash is None:
            blockhash_info = self._rpc.get_latest_blockhash()
            recent_blockhash = blockhash_info.get("blockhash")

        if not recent_blockhash:
            raise TransactionError.send_failed("Failed to get recent blockhash")

        payer_pubkey = Pubkey.from_string(payer or self.pubkey)
        message = MessageV0.try_compile(
            payer_pubkey,
            all_instructions,
            [],  # Address lookup tables
            Hash.from_string(recent_blockhash),
        )

        # Signature slots must match num_required_signatures
        num_signers = message.header.num_required_signatures
        null_signatures = [Signature.default()] * num_signers
        tx = VersionedTransaction.populate(message, null_signatures)

        return bytes(tx)

    def sign(self, unsigned_tx: bytes) -> Tuple[bytes, str]:
        """
        Sign transaction with the wallet

        Args:
            unsigned_tx: Unsigned transaction bytes

        Returns:
            (signed_tx_bytes, signature_base58)
        """
        return self._signer.sign_transaction(unsigned_tx)

    def send(
        self,
        signed_tx: bytes,
        skip_preflight: Optional[bool] = None,
        wait_confirmation: bool = True,
    ) -> TxResult:
        """
        Send signed transaction

        Args:
            signed_tx: Signed transaction bytes
            skip_preflight: Skip simulation (default from config)
            wait_confirmation: Wait for confirmation

        Returns:
            TxResult with status and signature

        Raises:
            TransactionError: If the node rejects the transaction
        """
        skip = skip_preflight if skip_preflight is not None else self._config.skip_preflight

        try:
            signature = self._rpc.send_transaction(
                signed_tx,
                skip_preflight=skip,
                preflight_commitment=self._config.preflight_commitment,
            )
        except RpcError as e:
            raise TransactionError.send_failed(e.message, original_error=e)

        if not signature:
            raise TransactionError.send_failed("RPC returned no signature")

        logger.info(f"Transaction sent: {signature}")

        if not wait_confirmation:
            return TxResult.pending(signature)

        confirmed = self._rpc.confirm_transaction(
            signature,
            commitment=self._config.preflight_commitment,
            timeout_seconds=self._config.confirmation_timeout,
            poll_interval=self._config.confirmation_poll_interval,
        )

        if confirmed is True:
            return TxResult.success(signature)
        elif confirmed is False:
            return TxResult.failed(
                "Transaction failed on-chain (check explorer for details)",
                signature=signature,
            )
        # None: never landed or still unconfirmed at timeout
        return TxResult.timeout(signature)

    def build_and_send(
        self,
        instructions: List[Instruction],
        compute_units: Optional[int] = None,
        compute_unit_price: Optional[int] = None,
        skip_preflight: Optional[bool] = None,
        wait_confirmation: bool = True,
    ) -> TxResult:
        """
        Build, sign, and send transaction in one call

        Args:
            instructions: List of instructions
            compute_units: Compute unit limit
            compute_unit_price: Priority fee
            skip_preflight: Skip simulation
            wait_confirmation: Wait for confirmation

        Returns:
            TxResult
        """
        unsigned_tx = self.build(
            instructions,
            compute_units=compute_units,
            compute_unit_price=compute_unit_price,
        )

        signed_tx, _ = self.sign(unsigned_tx)

        return self.send(
            signed_tx,
            skip_preflight=skip_preflight,
            wait_confirmation=wait_confirmation,
        )

    def submit_serialized(self, tx_bytes: bytes) -> str:
        """
        Sign and broadcast one serialized transaction without waiting

        Args:
            tx_bytes: Unsigned transaction bytes from the swap build API

        Returns:
            Transaction signature (base58)
        """
        signed_tx, _ = self.sign(tx_bytes)
        result = self.send(
            signed_tx,
            skip_preflight=self._config.swap_skip_preflight,
            wait_confirmation=False,
        )
        return result.signature

    def submit_all(self, payloads: Iterable[BuiltTransaction]) -> SubmissionResult:
        """
        Submit built transactions strictly in order

        Each payload is deserialized, signed, and broadcast before the next
        one is touched. The first failure stops the loop; transactions
        already broadcast are not rolled back.

        Args:
            payloads: Built transactions in the order returned by the API

        Returns:
            SubmissionResult with one signature per payload

        Raises:
            SubmissionError: On the first payload that fails to sign or send
        """
        signatures: List[str] = []

        for index, payload in enumerate(payloads):
            try:
                signature = self.submit_serialized(payload.to_bytes())
            except (DexClientError, ValueError) as e:
                logger.error(f"Submission of transaction #{index + 1} failed: {e}")
                raise SubmissionError.at_index(index, e, submitted=signatures)

            signatures.append(signature)
            logger.info(f"Transaction #{index + 1} submitted: {signature}")

        return SubmissionResult(signatures=tuple(signatures))
