"""
Jupiter Price API
"""

from .api import PriceAPI

__all__ = [
    "PriceAPI",
]
