"""
SolanaDexClient - Entry point for Raydium swaps and wallet operations

Provides high-level interface through functional modules
(accounts, wallet, swap, market).
"""

from __future__ import annotations

from typing import Dict, Optional, Union, List, TYPE_CHECKING

from solders.keypair import Keypair

from .infra import RpcClient, RpcClientConfig, TxBuilder, TxBuilderConfig, create_signer, Signer, LocalSigner
from .protocols import RaydiumAPI, PriceAPI
from .errors import ConfigurationError
from .config import config


class SolanaDexClient:
    """
    Solana DEX client

    Provides access to operations through functional modules:
    - accounts: Associated token account derivation and creation
    - wallet: Balances, SOL and token transfers
    - swap: Raydium swaps (quote, execute)
    - market: Token prices and price subscriptions

    Usage:
        client = SolanaDexClient(
            rpc_url="https://api.mainnet-beta.solana.com",
            secret_key="base58 secret...",
        )

        # Or with keypair file path, or WALLET_SECRET_KEY / SOLANA_RPC_URL in .env
        client = SolanaDexClient(keypair_path="/path/to/keypair.json")

        balance = client.wallet.sol_balance()
        signatures = client.swap.swap(SwapRequest("USDC", "SOL", 1_000_000, 100, output_is_native=True))
    """

    def __init__(
        self,
        rpc_url: Union[str, List[str], None] = None,
        secret_key: Optional[str] = None,
        keypair: Optional[Keypair] = None,
        keypair_path: Optional[str] = None,
        rpc_config: Optional[RpcClientConfig] = None,
        tx_config: Optional[TxBuilderConfig] = None,
        raydium_api: Optional[RaydiumAPI] = None,
        price_api: Optional[PriceAPI] = None,
    ):
        """
        Initialize SolanaDexClient

        Args:
            rpc_url: RPC endpoint URL or list of URLs for fallback (default SOLANA_RPC_URL)
            secret_key: Optional base58 wallet secret key
            keypair: Optional Keypair for local signing
            keypair_path: Optional path to keypair file
            rpc_config: Optional RPC configuration
            tx_config: Optional transaction configuration
            raydium_api: Optional Raydium API client
            price_api: Optional price API client
        """
        rpc_url = rpc_url or config.rpc.url
        if not rpc_url:
            raise ConfigurationError.missing("SOLANA_RPC_URL")

        self._rpc = RpcClient(rpc_url, config=rpc_config)

        self._signer = create_signer(
            secret_key=secret_key,
            keypair=keypair,
            keypair_path=keypair_path,
        )

        self._tx_builder = TxBuilder(self._rpc, self._signer, config=tx_config)

        self._raydium = raydium_api or RaydiumAPI()
        self._prices = price_api or PriceAPI()

        # Lazy-loaded modules
        self._accounts: Optional["TokenAccountResolver"] = None
        self._wallet: Optional["WalletModule"] = None
        self._market: Optional["MarketModule"] = None
        self._swap: Optional["SwapModule"] = None

    @staticmethod
    def create_wallet() -> Dict[str, str]:
        """
        Generate a new wallet

        Returns:
            Dict with "public_key" and base58 "secret_key"
        """
        signer = LocalSigner.generate()
        return {
            "public_key": signer.pubkey,
            "secret_key": signer.secret_key_base58,
        }

    @property
    def rpc(self) -> RpcClient:
        """Access to RPC client"""
        return self._rpc

    @property
    def signer(self) -> Signer:
        """Access to signer"""
        return self._signer

    @property
    def tx_builder(self) -> TxBuilder:
        """Access to transaction builder"""
        return self._tx_builder

    @property
    def raydium(self) -> RaydiumAPI:
        """Access to Raydium API client"""
        return self._raydium

    @property
    def prices(self) -> PriceAPI:
        """Access to price API client"""
        return self._prices

    @property
    def pubkey(self) -> str:
        """Owner's public key"""
        return self._signer.pubkey

    @property
    def accounts(self) -> "TokenAccountResolver":
        """
        Token account resolver

        Provides:
        - derive(mint): Associated token account address
        - find(mint): Account info or None
        - ensure_account(mint): Create if absent
        """
        if self._accounts is None:
            from .modules.accounts import TokenAccountResolver
            self._accounts = TokenAccountResolver(self)
        return self._accounts

    @property
    def wallet(self) -> "WalletModule":
        """
        Wallet module

        Provides:
        - sol_balance(), token_balance(token)
        - token_info(token), token_decimals(token)
        - send_sol(destination, amount)
        - send_token(destination, token, amount)
        """
        if self._wallet is None:
            from .modules.wallet import WalletModule
            self._wallet = WalletModule(self)
        return self._wallet

    @property
    def market(self) -> "MarketModule":
        """
        Market module for prices

        Provides:
        - price(token): Current price
        - subscribe(token, handler, interval_ms): Poll price
        - unsubscribe(token)
        """
        if self._market is None:
            from .modules.market import MarketModule
            self._market = MarketModule(self)
        return self._market

    @property
    def swap(self) -> "SwapModule":
        """
        Swap module

        Provides:
        - quote(request): Quote preview
        - swap(request): Validate, quote, build, sign and submit
        """
        if self._swap is None:
            from .modules.swap import SwapModule
            self._swap = SwapModule(self)
        return self._swap

    def close(self):
        """Cancel price subscriptions and close connections"""
        if self._market is not None:
            self._market.unsubscribe_all()
        self._raydium.close()
        self._prices.close()
        self._rpc.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def __repr__(self) -> str:
        return f"SolanaDexClient(endpoint={self._rpc.endpoint}, pubkey={self.pubkey[:8]}...)"


# Type hints for modules (resolved at runtime)
if TYPE_CHECKING:
    from .modules.accounts import TokenAccountResolver
    from .modules.wallet import WalletModule
    from .modules.market import MarketModule
    from .modules.swap import SwapModule
