"""
Market Module

Token price queries and periodic price subscriptions.
"""

import logging
import threading
import time
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from ..client import SolanaDexClient

from ..types import TokenPrice
from ..types.solana_tokens import resolve_token_mint
from ..errors import ConfigurationError, DexClientError, PriceUnavailableError
from ..config import config

logger = logging.getLogger(__name__)

PriceHandler = Callable[[TokenPrice], None]


@dataclass
class PriceSubscription:
    """
    Active price subscription

    The stop event is the cancellation handle; setting it ends the
    polling thread after its current tick.
    """
    mint: str
    interval_ms: int
    handler: PriceHandler
    stop_event: threading.Event = field(default_factory=threading.Event)
    thread: Optional[threading.Thread] = None

    @property
    def active(self) -> bool:
        return self.thread is not None and self.thread.is_alive() and not self.stop_event.is_set()


class MarketModule:
    """
    Market data module

    Provides:
    - One-shot token price
    - Price subscriptions polled on a fixed interval (at most one per mint)

    Usage:
        client = SolanaDexClient(rpc_url, secret_key=...)

        price = client.market.price("SOL")

        client.market.subscribe("SOL", lambda p: print(p.price), interval_ms=1000)
        ...
        client.market.unsubscribe("SOL")
    """

    def __init__(self, client: "SolanaDexClient"):
        """
        Initialize market module

        Args:
            client: SolanaDexClient instance
        """
        self._client = client
        self._subscriptions: Dict[str, PriceSubscription] = {}
        self._lock = threading.Lock()

    def price(self, token: str) -> TokenPrice:
        """
        Get the current USD price of a token

        Args:
            token: Token symbol or mint address

        Raises:
            PriceUnavailableError: If the price API gives no price
        """
        mint = resolve_token_mint(token)
        return self._fetch(mint)

    def _fetch(self, mint: str) -> TokenPrice:
        result = self._client.prices.get_price(mint)
        if not result.ok:
            raise PriceUnavailableError.from_api(mint, str(result))
        return TokenPrice(mint=mint, price=result.data, timestamp_ms=int(time.time() * 1000))

    @property
    def subscriptions(self) -> List[str]:
        """Mints with an active subscription"""
        with self._lock:
            return list(self._subscriptions)

    def is_subscribed(self, token: str) -> bool:
        mint = resolve_token_mint(token)
        with self._lock:
            return mint in self._subscriptions

    def subscribe(
        self,
        token: str,
        handler: PriceHandler,
        interval_ms: Optional[int] = None,
    ) -> bool:
        """
        Start polling a token's price

        The handler runs on the polling thread once per interval. Fetch
        and handler errors are logged and polling continues.

        Args:
            token: Token symbol or mint address
            handler: Called with a TokenPrice on each successful fetch
            interval_ms: Polling interval (default from config)

        Returns:
            True if a new subscription was started, False if the mint was
            already subscribed
        """
        interval = interval_ms if interval_ms is not None else config.price.poll_interval_ms
        if interval <= 0:
            raise ConfigurationError.invalid("interval_ms", f"must be positive, got {interval}")

        mint = resolve_token_mint(token)

        with self._lock:
            if mint in self._subscriptions:
                logger.warning(f"Already subscribed to price updates for {mint}")
                return False

            subscription = PriceSubscription(mint=mint, interval_ms=interval, handler=handler)
            subscription.thread = threading.Thread(
                target=self._poll,
                args=(subscription,),
                name=f"price-{mint[:8]}",
                daemon=True,
            )
            self._subscriptions[mint] = subscription

        subscription.thread.start()
        logger.info(f"Subscribed to price updates for {mint} every {interval}ms")
        return True

    def unsubscribe(self, token: str) -> bool:
        """
        Stop polling a token's price

        Unknown mints are ignored.

        Returns:
            True if a subscription was cancelled
        """
        mint = resolve_token_mint(token)

        with self._lock:
            subscription = self._subscriptions.pop(mint, None)

        if subscription is None:
            return False

        subscription.stop_event.set()
        logger.info(f"Unsubscribed from price updates for {mint}")
        return True

    def unsubscribe_all(self):
        """Cancel every subscription"""
        with self._lock:
            subscriptions = list(self._subscriptions.values())
            self._subscriptions.clear()

        for subscription in subscriptions:
            subscription.stop_event.set()

        if subscriptions:
            logger.info(f"Cancelled {len(subscriptions)} price subscription(s)")

    def _poll(self, subscription: PriceSubscription):
        """Polling loop, runs on the subscription's thread"""
        interval = subscription.interval_ms / 1000.0

        while not subscription.stop_event.wait(interval):
            try:
                price = self._fetch(subscription.mint)
            except DexClientError as e:
                logger.error(f"Error fetching price for {subscription.mint}: {e}")
                continue
            except Exception as e:
                logger.error(f"Unexpected error fetching price for {subscription.mint}: {e}", exc_info=True)
                continue

            if subscription.stop_event.is_set():
                break

            try:
                subscription.handler(price)
            except Exception as e:
                logger.error(f"Price handler for {subscription.mint} raised: {e}", exc_info=True)
