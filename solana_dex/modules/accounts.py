"""
Token Account Module

Derives, looks up and creates the wallet's associated token accounts.
"""

import logging
from typing import Any, Dict, Optional, TYPE_CHECKING

from solders.pubkey import Pubkey

if TYPE_CHECKING:
    from ..client import SolanaDexClient

from ..types import TokenAccountRef
from ..types.solana_tokens import resolve_token_mint
from ..protocols.raydium.instructions import (
    get_associated_token_address,
    build_create_ata_instruction,
)
from ..errors import DexClientError, AccountCreationError
from ..utils import explorer_url

logger = logging.getLogger(__name__)

# Substring the system program logs when an address is already allocated
ALREADY_IN_USE = "already in use"


def is_already_in_use(error: Exception) -> bool:
    """
    Check whether a failed create was rejected because the account exists

    Walks the error chain, including simulation logs that the RPC node
    attaches to preflight failures.
    """
    current: Optional[Exception] = error
    while current is not None:
        texts = [str(current)]
        details = getattr(current, "details", None) or {}
        data = details.get("rpc_error_data")
        if isinstance(data, dict):
            texts.extend(str(line) for line in data.get("logs") or [])
        if any(ALREADY_IN_USE in text.lower() for text in texts):
            return True
        current = getattr(current, "original_error", None)
    return False


class TokenAccountResolver:
    """
    Associated token account resolver

    Addresses are derived fresh on every call and never cached.

    Usage:
        ref = client.accounts.derive("USDC")
        info = client.accounts.find("USDC")         # None if absent
        address = client.accounts.ensure_account("USDC")
    """

    def __init__(self, client: "SolanaDexClient"):
        """
        Initialize resolver

        Args:
            client: SolanaDexClient instance
        """
        self._client = client
        self._rpc = client.rpc

    @property
    def owner(self) -> str:
        """Wallet address"""
        return self._client.pubkey

    def derive(self, mint: str, owner: Optional[str] = None) -> TokenAccountRef:
        """
        Derive the associated token account for (owner, mint)

        Args:
            mint: Token symbol or mint address
            owner: Account owner (defaults to the wallet)

        Returns:
            TokenAccountRef; the account may not exist on chain
        """
        mint_address = resolve_token_mint(mint)
        owner_address = owner or self.owner
        address = get_associated_token_address(
            Pubkey.from_string(owner_address),
            Pubkey.from_string(mint_address),
        )
        return TokenAccountRef(owner=owner_address, mint=mint_address, address=str(address))

    def find(self, mint: str, owner: Optional[str] = None) -> Optional[Dict[str, Any]]:
        """
        Look up the associated token account on chain

        Returns:
            Account info, or None if the account does not exist
        """
        ref = self.derive(mint, owner)
        return self._rpc.get_account_info(ref.address)

    def exists(self, mint: str, owner: Optional[str] = None) -> bool:
        return self.find(mint, owner) is not None

    def ensure_account(self, mint: str) -> str:
        """
        Return the wallet's token account for a mint, creating it if absent

        Creation is sent and confirmed before returning. If another party
        creates the same account first, the "already in use" rejection is
        treated as success.

        Args:
            mint: Token symbol or mint address

        Returns:
            Token account address

        Raises:
            AccountCreationError: If creation fails for any other reason
        """
        ref = self.derive(mint)
        if self._rpc.get_account_info(ref.address) is not None:
            return ref.address

        logger.info(f"Creating token account {ref.address} for mint {ref.mint}")

        owner = Pubkey.from_string(ref.owner)
        instruction = build_create_ata_instruction(
            payer=owner,
            owner=owner,
            mint=Pubkey.from_string(ref.mint),
        )

        try:
            result = self._client.tx_builder.build_and_send([instruction])
        except DexClientError as e:
            if is_already_in_use(e):
                logger.info(f"Token account {ref.address} already exists (created concurrently)")
                return ref.address
            logger.error(f"Token account creation failed for {ref.address}: {e}")
            raise AccountCreationError.failed(ref.address, ref.mint, e)

        if result.is_success:
            logger.info(f"Created token account: {ref.address}, tx: {explorer_url(result.signature)}")
            return ref.address

        # Failed or unconfirmed: the account may still exist (concurrent creator or late landing)
        if self._rpc.get_account_info(ref.address) is not None:
            logger.info(f"Token account {ref.address} exists after {result.status.value} create")
            return ref.address

        raise AccountCreationError.failed(ref.address, ref.mint, RuntimeError(result.error or result.status.value))
