"""
Transaction signing abstractions

Provides unified signing interface for local signing with keypair.
"""

from __future__ import annotations

import json
import logging
import os
from typing import Optional, Protocol, Tuple, runtime_checkable

import base58
from solders.keypair import Keypair
from solders.message import MessageV0
from solders.signature import Signature
from solders.transaction import VersionedTransaction

from ..errors import SignerError, ConfigurationError
from ..config import config as global_config

logger = logging.getLogger(__name__)


@runtime_checkable
class Signer(Protocol):
    """
    Protocol for transaction signers

    Implementations must provide:
    - pubkey: The signer's public key (base58)
    - sign(): Sign a message/transaction
    """

    @property
    def pubkey(self) -> str:
        """Signer's public key (base58)"""
        ...

    def sign(self, message: bytes) -> bytes:
        """
        Sign a message

        Args:
            message: Message bytes to sign

        Returns:
            64-byte signature
        """
        ...

    def sign_transaction(self, unsigned_tx: bytes) -> Tuple[bytes, str]:
        """
        Sign a transaction

        Args:
            unsigned_tx: Unsigned transaction bytes

        Returns:
            (signed_tx_bytes, signature_base58)
        """
        ...


class LocalSigner:
    """
    Local signer using Solana keypair

    Usage:
        signer = LocalSigner.from_base58(os.environ["WALLET_SECRET_KEY"])

        signed_tx, sig = signer.sign_transaction(unsigned_tx_bytes)
    """

    def __init__(self, keypair: Keypair):
        """
        Initialize with keypair

        Args:
            keypair: solders.keypair.Keypair instance
        """
        self._keypair = keypair

    @property
    def pubkey(self) -> str:
        """Public key as base58 string"""
        return str(self._keypair.pubkey())

    @property
    def keypair(self) -> Keypair:
        return self._keypair

    @property
    def secret_key_base58(self) -> str:
        """64-byte secret key encoded as base58 (the format wallets export)"""
        return base58.b58encode(bytes(self._keypair)).decode("ascii")

    def sign(self, message: bytes) -> bytes:
        """Sign message bytes"""
        sig = self._keypair.sign_message(message)
        return bytes(sig)

    def sign_transaction(self, unsigned_tx: bytes) -> Tuple[bytes, str]:
        """
        Sign versioned transaction

        Works for transactions built locally and for the serialized swap
        transactions returned by the build API, where the wallet is the
        only required signer.

        Args:
            unsigned_tx: Unsigned VersionedTransaction bytes

        Returns:
            (signed_tx_bytes, signature_base58)
        """
        try:
            tx = VersionedTransaction.from_bytes(unsigned_tx)
        except ValueError as e:
            raise SignerError.failed(f"cannot deserialize transaction: {e}")
        message = tx.message

        # A v0 message is signed together with its 0x80 version prefix
        message_bytes = bytes(message)
        if isinstance(message, MessageV0):
            message_bytes = bytes([0x80]) + message_bytes

        signature = self._keypair.sign_message(message_bytes)

        num_required_signatures = message.header.num_required_signatures
        account_keys = message.account_keys
        our_pubkey = self._keypair.pubkey()

        # The first num_required_signatures account keys are the signers
        signer_index = None
        for i in range(num_required_signatures):
            if i < len(account_keys) and account_keys[i] == our_pubkey:
                signer_index = i
                break

        if signer_index is None:
            raise SignerError.failed(
                f"wallet {our_pubkey} is not in the required signers list. "
                f"Expected signers: {[str(account_keys[i]) for i in range(min(num_required_signatures, len(account_keys)))]}"
            )

        # Keep any signatures already present for the other signers
        signatures = list(tx.signatures)
        if len(signatures) != num_required_signatures:
            signatures = [Signature.default()] * num_required_signatures
        signatures[signer_index] = signature

        signed_tx = VersionedTransaction.populate(message, signatures)

        return bytes(signed_tx), str(signature)

    @classmethod
    def generate(cls) -> "LocalSigner":
        """Create signer with a freshly generated keypair"""
        return cls(Keypair())

    @classmethod
    def from_bytes(cls, secret_key: bytes) -> "LocalSigner":
        """Create signer from secret key bytes (64 bytes)"""
        try:
            keypair = Keypair.from_bytes(secret_key)
        except (ValueError, TypeError) as e:
            raise ConfigurationError.invalid("secret_key", f"not a valid 64-byte keypair: {e}")
        return cls(keypair)

    @classmethod
    def from_base58(cls, secret_key: str) -> "LocalSigner":
        """Create signer from base58 secret key"""
        try:
            secret_bytes = base58.b58decode(secret_key.strip())
        except ValueError as e:
            raise ConfigurationError.invalid("secret_key", f"not valid base58: {e}")
        return cls.from_bytes(secret_bytes)

    @classmethod
    def from_file(cls, path: str) -> "LocalSigner":
        """
        Create signer from keypair file

        Supports:
        - JSON array format (Solana CLI): [1,2,3,...]
        - Raw bytes file (64 bytes)
        """
        with open(path, "rb") as f:
            content = f.read()

        # Try JSON format first
        try:
            data = json.loads(content.decode("utf-8"))
            if isinstance(data, list):
                return cls.from_bytes(bytes(data))
        except (json.JSONDecodeError, UnicodeDecodeError):
            pass

        if len(content) == 64:
            return cls.from_bytes(content)

        raise ConfigurationError.invalid("keypair_file", f"Cannot parse keypair file: {path}")


def create_signer(
    secret_key: Optional[str] = None,
    keypair: Optional[Keypair] = None,
    keypair_path: Optional[str] = None,
) -> Signer:
    """
    Create signer based on configuration

    Priority:
    1. keypair: Use LocalSigner with provided keypair
    2. secret_key: Decode base58 secret key
    3. keypair_path: Load keypair from file
    4. Environment: WALLET_SECRET_KEY, then SOLANA_KEYPAIR_PATH

    Args:
        secret_key: Optional base58 secret key
        keypair: Optional Keypair instance
        keypair_path: Optional path to keypair file

    Returns:
        Signer instance

    Raises:
        SignerError: If no valid signer configuration found
    """
    if keypair is not None:
        return LocalSigner(keypair)

    if secret_key:
        return LocalSigner.from_base58(secret_key)

    if keypair_path is not None:
        return LocalSigner.from_file(keypair_path)

    if global_config.signer.secret_key:
        return LocalSigner.from_base58(global_config.signer.secret_key)

    if global_config.signer.keypair_path and os.path.isfile(global_config.signer.keypair_path):
        return LocalSigner.from_file(global_config.signer.keypair_path)

    raise SignerError.not_configured()
