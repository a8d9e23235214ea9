"""
Swap type definitions
"""

import base64
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, Iterator, List, Optional, Tuple

from ..config import config as global_config
from ..errors import ConfigurationError
from .solana_tokens import resolve_token_mint


@dataclass(frozen=True)
class SwapRequest:
    """
    Swap request

    Attributes:
        input_mint: Input token symbol or mint address
        output_mint: Output token symbol or mint address
        amount: Input amount in the input token's smallest unit
        slippage_bps: Slippage tolerance in basis points (100 = 1%)
        input_is_native: Pay with native SOL (wrapped by the swap transaction)
        output_is_native: Receive native SOL (unwrapped by the swap transaction)

    Usage:
        request = SwapRequest(
            input_mint="USDC",
            output_mint="SOL",
            amount=1_000_000,
            slippage_bps=100,
            output_is_native=True,
        )
    """
    input_mint: str
    output_mint: str
    amount: int
    slippage_bps: int
    input_is_native: bool = False
    output_is_native: bool = False

    def __post_init__(self):
        if isinstance(self.amount, bool) or not isinstance(self.amount, int):
            raise ConfigurationError.invalid("amount", f"must be an integer in smallest units, got {self.amount!r}")
        if self.amount <= 0:
            raise ConfigurationError.invalid("amount", f"must be positive, got {self.amount}")
        if isinstance(self.slippage_bps, bool) or not isinstance(self.slippage_bps, int):
            raise ConfigurationError.invalid("slippage_bps", f"must be an integer number of basis points, got {self.slippage_bps!r}")
        if self.slippage_bps < 0:
            raise ConfigurationError.invalid("slippage_bps", f"must not be negative, got {self.slippage_bps}")
        if not self.input_mint or not self.output_mint:
            raise ConfigurationError.invalid("mint", "input and output tokens are required")

    @classmethod
    def from_percent(
        cls,
        input_mint: str,
        output_mint: str,
        amount: int,
        slippage_percent: Optional[float] = None,
        input_is_native: bool = False,
        output_is_native: bool = False,
    ) -> "SwapRequest":
        """
        Build a request with slippage given in percent (1 = 1% = 100 bps)

        Without a percent, DEFAULT_SLIPPAGE_BPS from config is used.
        """
        if slippage_percent is None:
            slippage_bps = global_config.trading.default_slippage_bps
        else:
            slippage_bps = int(Decimal(str(slippage_percent)) * 100)
        return cls(
            input_mint=input_mint,
            output_mint=output_mint,
            amount=amount,
            slippage_bps=slippage_bps,
            input_is_native=input_is_native,
            output_is_native=output_is_native,
        )

    @property
    def resolved_input_mint(self) -> str:
        return resolve_token_mint(self.input_mint)

    @property
    def resolved_output_mint(self) -> str:
        return resolve_token_mint(self.output_mint)


@dataclass(frozen=True)
class PriorityFee:
    """
    Priority fee estimate (compute unit price in microlamports)

    Attributes:
        micro_lamports: Fee used for the swap build call
        very_high: "vh" tier as reported by the API
        high: "h" tier
        medium: "m" tier
    """
    micro_lamports: int
    very_high: Optional[int] = None
    high: Optional[int] = None
    medium: Optional[int] = None

    def __str__(self) -> str:
        return f"{self.micro_lamports} microlamports/CU"


@dataclass(frozen=True)
class SwapQuote:
    """
    Swap quote returned by the compute API

    The raw response is passed unmodified to the transaction build call;
    the properties below only read from it.
    """
    raw: Dict[str, Any] = field(compare=False)

    @property
    def _data(self) -> Dict[str, Any]:
        return self.raw.get("data") or {}

    @property
    def input_mint(self) -> Optional[str]:
        return self._data.get("inputMint")

    @property
    def output_mint(self) -> Optional[str]:
        return self._data.get("outputMint")

    @property
    def input_amount(self) -> int:
        return int(self._data.get("inputAmount", 0))

    @property
    def output_amount(self) -> int:
        return int(self._data.get("outputAmount", 0))

    @property
    def min_output_amount(self) -> int:
        return int(self._data.get("otherAmountThreshold", 0))

    @property
    def slippage_bps(self) -> Optional[int]:
        return self._data.get("slippageBps")

    @property
    def price_impact_pct(self) -> float:
        return float(self._data.get("priceImpactPct", 0) or 0)

    @property
    def route_plan(self) -> List[Dict[str, Any]]:
        return list(self._data.get("routePlan") or [])

    def __str__(self) -> str:
        return f"SwapQuote({self.input_amount} -> {self.output_amount}, impact={self.price_impact_pct:.2f}%)"


@dataclass(frozen=True)
class BuiltTransaction:
    """Serialized, unsigned swap transaction returned by the build API"""
    transaction_base64: str

    def to_bytes(self) -> bytes:
        return base64.b64decode(self.transaction_base64)


@dataclass(frozen=True)
class SubmissionResult:
    """
    Ordered transaction signatures, one per built transaction, in
    submission order
    """
    signatures: Tuple[str, ...] = ()

    def __len__(self) -> int:
        return len(self.signatures)

    def __iter__(self) -> Iterator[str]:
        return iter(self.signatures)

    def __getitem__(self, index: int) -> str:
        return self.signatures[index]

    def explorer_urls(self, base_url: Optional[str] = None) -> List[str]:
        """Explorer links for each signature"""
        from ..utils import explorer_url
        return [explorer_url(sig, base_url) for sig in self.signatures]

    def __str__(self) -> str:
        return f"SubmissionResult({', '.join(sig[:16] + '...' for sig in self.signatures)})"
