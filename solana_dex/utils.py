"""
Amount conversion and address helpers
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Optional, Union

from .errors import ConfigurationError

LAMPORTS_PER_SOL = 10 ** 9

Number = Union[Decimal, int, float, str]


def _to_decimal(amount: Number) -> Decimal:
    # str() keeps the literal the caller wrote (1.0000005, not its binary float expansion)
    try:
        value = amount if isinstance(amount, Decimal) else Decimal(str(amount))
    except ArithmeticError:
        raise ConfigurationError.invalid("amount", f"not a number: {amount!r}")
    if not value.is_finite():
        raise ConfigurationError.invalid("amount", f"not a finite number: {amount!r}")
    return value


def to_smallest_unit(amount: Number, decimals: int) -> int:
    """
    Convert a UI amount to the token's smallest unit

    Rounds half up at the last representable digit, so with 6 decimals
    1.0000005 becomes 1_000_001 and 1.0000004 becomes 1_000_000.

    Args:
        amount: Human-readable amount
        decimals: Token decimal count

    Returns:
        Integer amount in smallest units
    """
    if decimals < 0:
        raise ConfigurationError.invalid("decimals", f"must not be negative, got {decimals}")
    scaled = _to_decimal(amount) * (Decimal(10) ** decimals)
    return int(scaled.quantize(Decimal(1), rounding=ROUND_HALF_UP))


def from_smallest_unit(raw_amount: int, decimals: int) -> Decimal:
    """Convert smallest units back to a UI amount"""
    return Decimal(raw_amount) / (Decimal(10) ** decimals)


def lamports_to_sol(lamports: int) -> Decimal:
    """Convert lamports to SOL"""
    return from_smallest_unit(lamports, 9)


def sol_to_lamports(sol: Number) -> int:
    """Convert SOL to lamports (half-up rounding)"""
    return to_smallest_unit(sol, 9)


def find_associated_token_address(owner: str, mint: str) -> str:
    """Derive the associated token account address for (owner, mint)"""
    from solders.pubkey import Pubkey
    from .protocols.raydium.instructions import get_associated_token_address

    return str(get_associated_token_address(Pubkey.from_string(owner), Pubkey.from_string(mint)))


def explorer_url(signature: str, base_url: Optional[str] = None) -> str:
    """Block explorer link for a transaction signature"""
    if base_url is None:
        from .config import config
        base_url = config.trading.explorer_url
    return f"{base_url}{signature}"
