"""
Common type definitions
"""

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class TokenInfo:
    """
    Token metadata

    Attributes:
        mint: Token mint address (base58)
        decimals: Number of decimal places
        symbol: Token symbol (e.g., "SOL", "USDC")
        name: Full token name (optional)
    """
    mint: str
    decimals: int
    symbol: str = ""
    name: str = ""

    def __str__(self) -> str:
        return self.symbol or self.mint

    def __repr__(self) -> str:
        return f"TokenInfo({self.symbol or '?'}, {self.mint[:8]}..., decimals={self.decimals})"

    def ui_amount(self, raw_amount: int) -> Decimal:
        """Convert raw amount (smallest units) to UI amount"""
        return Decimal(raw_amount) / Decimal(10 ** self.decimals)


@dataclass(frozen=True)
class TokenAccountRef:
    """
    Associated token account reference

    Derived deterministically from (owner, mint). Existence on chain is
    not implied.
    """
    owner: str
    mint: str
    address: str

    def __str__(self) -> str:
        return self.address


@dataclass(frozen=True)
class TokenPrice:
    """
    Price observation delivered to price subscribers

    Attributes:
        mint: Token mint address
        price: Price in USD
        timestamp_ms: Observation time (unix epoch, milliseconds)
    """
    mint: str
    price: float
    timestamp_ms: int
