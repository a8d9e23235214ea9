"""
Functional modules for the Solana DEX client

- accounts: Associated token account resolution and creation
- wallet: Balances, SOL and token transfers
- swap: Raydium swaps
- market: Token prices and price subscriptions
"""

from .accounts import TokenAccountResolver
from .wallet import WalletModule
from .swap import SwapModule
from .market import MarketModule, PriceSubscription

__all__ = [
    "TokenAccountResolver",
    "WalletModule",
    "SwapModule",
    "MarketModule",
    "PriceSubscription",
]
