"""
Centralized Token Registry

Provides a single source of truth for token symbol to mint address mappings.
Used across all modules to avoid duplicate definitions.
"""

from typing import Dict, Optional


WRAPPED_SOL_MINT = "So11111111111111111111111111111111111111112"

# Solana token mints (keys are uppercase for case-insensitive lookup)
SOLANA_TOKEN_MINTS: Dict[str, str] = {
    # SOL/WSOL
    "SOL": WRAPPED_SOL_MINT,
    "WSOL": WRAPPED_SOL_MINT,

    # Stablecoins
    "USDC": "EPjFWdd5AufqSSqeM2qN1xzybapC8G4wEGGkZwyTDt1v",
    "USDT": "Es9vMFrzaCERmJfrF4H2FYD4KCoNkY11McCe8BenwNYB",

    # Popular tokens
    "RAY": "4k3Dyjzvzp8eMZWUXbBCjEvwSkkk59S5iCNLY3QrkX6R",
    "BONK": "DezXAZ8z7PnrnRJjz3wXBoRgixCa6xjnB7YaB1pPB263",
    "JUP": "JUPyiwrYJFskUPiHa7hkeR8VUtAeFoSYbKedZNsDvCN",
    "MSOL": "mSoLzYCxHdYgdzU16g5QSh3i5K3z3KZK7ytfqcJm7So",
    "JITOSOL": "J1toso1uCk3RLmjorhTtrVwY9HJ7X8V9yYac6Y7kGCPn",
    "WIF": "EKpQGSJtjMFqKZ9KQanSqYXRcF8fBopzLHYxdM65zcjm",
}

# Mint address to decimals mapping
SOLANA_TOKEN_DECIMALS: Dict[str, int] = {
    WRAPPED_SOL_MINT: 9,                                 # SOL/WSOL
    "EPjFWdd5AufqSSqeM2qN1xzybapC8G4wEGGkZwyTDt1v": 6,  # USDC
    "Es9vMFrzaCERmJfrF4H2FYD4KCoNkY11McCe8BenwNYB": 6,  # USDT
    "4k3Dyjzvzp8eMZWUXbBCjEvwSkkk59S5iCNLY3QrkX6R": 6,  # RAY
    "DezXAZ8z7PnrnRJjz3wXBoRgixCa6xjnB7YaB1pPB263": 5,  # BONK
    "JUPyiwrYJFskUPiHa7hkeR8VUtAeFoSYbKedZNsDvCN": 6,   # JUP
    "mSoLzYCxHdYgdzU16g5QSh3i5K3z3KZK7ytfqcJm7So": 9,   # mSOL
    "J1toso1uCk3RLmjorhTtrVwY9HJ7X8V9yYac6Y7kGCPn": 9,  # jitoSOL
    "EKpQGSJtjMFqKZ9KQanSqYXRcF8fBopzLHYxdM65zcjm": 6,  # WIF
}


def resolve_token_mint(token: str) -> str:
    """
    Resolve token symbol or mint address to mint address

    Args:
        token: Token symbol (e.g., "SOL", "USDC") or mint address

    Returns:
        Mint address

    Note:
        Unknown symbols are returned as-is. Use is_known_token() to check
        if a symbol is recognized before calling this function.
    """
    token = token.strip()

    # Mint addresses are base58, typically 32-44 chars
    if len(token) > 30:
        return token

    upper = token.upper()
    if upper in SOLANA_TOKEN_MINTS:
        return SOLANA_TOKEN_MINTS[upper]

    return token


def is_known_token(symbol: str) -> bool:
    """Check if a token symbol is in the registry (case-insensitive)"""
    return symbol.strip().upper() in SOLANA_TOKEN_MINTS


def is_native_sol(token: str) -> bool:
    """Check if a symbol or mint refers to SOL / wrapped SOL"""
    return resolve_token_mint(token) == WRAPPED_SOL_MINT


def get_token_decimals(mint: str) -> Optional[int]:
    """
    Get decimals for a known token mint

    Args:
        mint: Token mint address

    Returns:
        Decimals if known, None otherwise
    """
    return SOLANA_TOKEN_DECIMALS.get(mint)


# Reverse mapping: mint address -> symbol
MINT_TO_SYMBOL: Dict[str, str] = {
    mint: symbol for symbol, mint in SOLANA_TOKEN_MINTS.items()
    if symbol not in ("WSOL",)  # Skip aliases
}


def get_token_symbol(mint: str) -> Optional[str]:
    """Get token symbol for a known mint address"""
    return MINT_TO_SYMBOL.get(mint)
