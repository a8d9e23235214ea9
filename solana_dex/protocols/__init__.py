"""
External protocol clients

- raydium: swap quote/build, priority fee, mint metadata, SPL instructions
- jupiter: token prices
"""

from .raydium import RaydiumAPI
from .jupiter import PriceAPI

__all__ = [
    "RaydiumAPI",
    "PriceAPI",
]
