"""Price API HTTP client and cached, periodically refreshed price snapshot"""

import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

import httpx

from airdrop_estimator.config import settings
from airdrop_estimator.domain.exceptions import PriceFeedError
from airdrop_estimator.infrastructure.observability.metrics import (
    price_fetch_failures_counter,
    price_fetch_latency_histogram,
)

logger = logging.getLogger(__name__)


class PriceClient:
    """Client for the CoinGecko simple price API"""

    def __init__(
        self,
        base_url: str | None = None,
        token_id: str | None = None,
        vs_currency: str | None = None,
        timeout: float | None = None,
    ):
        self.base_url = base_url or settings.price_api_base
        self.token_id = token_id or settings.price_token_id
        self.vs_currency = vs_currency or settings.price_vs_currency
        self.timeout = timeout or settings.http_timeout_seconds

    async def get_price(self) -> float:
        """
        Fetch the current reward token price.

        Raises:
            PriceFeedError: On timeout, HTTP errors, or a payload without a numeric price
        """
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            try:
                with price_fetch_latency_histogram.time():
                    response = await client.get(
                        f"{self.base_url}/api/v3/simple/price",
                        params={"ids": self.token_id, "vs_currencies": self.vs_currency},
                        headers={"Cache-Control": "no-store"},
                    )
                response.raise_for_status()
                price = response.json()[self.token_id][self.vs_currency]

            except httpx.TimeoutException as e:
                raise PriceFeedError(f"Price API timeout after {self.timeout}s") from e
            except httpx.HTTPStatusError as e:
                raise PriceFeedError(f"Price API error: {e.response.status_code}") from e
            except httpx.RequestError as e:
                raise PriceFeedError(f"Price API unreachable: {e}") from e
            except (KeyError, ValueError, TypeError) as e:
                raise PriceFeedError(f"Invalid price data: {e}") from e

        if isinstance(price, bool) or not isinstance(price, (int, float)):
            raise PriceFeedError(f"Invalid price data: {price!r} is not a number")
        return float(price)


@dataclass
class PriceSnapshot:
    """Last known price; price is None when no value could be fetched"""

    price: Optional[float] = None
    fetched_at: Optional[datetime] = None
    error: Optional[str] = None


class PriceFeed:
    """
    Holds the latest price snapshot and refreshes it in the background.

    Refresh strategy:
    - One fetch on start, then every `interval` seconds
    - Explicit refresh() on request
    - A failed fetch clears the price and records the error text; it never raises
    """

    def __init__(self, client: PriceClient | None = None, interval: float | None = None):
        self.client = client or PriceClient()
        self.interval = interval or settings.price_refresh_seconds
        self.snapshot = PriceSnapshot()
        self._task: asyncio.Task | None = None

    @property
    def price(self) -> Optional[float]:
        return self.snapshot.price

    async def refresh(self) -> PriceSnapshot:
        """Fetch a new price and publish a new snapshot"""
        try:
            price = await self.client.get_price()
        except PriceFeedError as e:
            price_fetch_failures_counter.inc()
            logger.warning(f"Price refresh failed: {e}", extra={"step": "price_refresh"})
            self.snapshot = PriceSnapshot(price=None, fetched_at=datetime.now(timezone.utc), error=str(e))
        else:
            logger.info("Price refreshed", extra={"step": "price_refresh", "price": price})
            self.snapshot = PriceSnapshot(price=price, fetched_at=datetime.now(timezone.utc))
        return self.snapshot

    async def _run(self) -> None:
        while True:
            try:
                await self.refresh()
            except Exception:
                # keep the loop alive; the next tick retries
                logger.exception("Unexpected price refresh error", extra={"step": "price_refresh"})
            await asyncio.sleep(self.interval)

    def start(self) -> None:
        """Start the periodic refresh task on the running event loop"""
        if self._task is None or self._task.done():
            self._task = asyncio.create_task(self._run())

    async def stop(self) -> None:
        """Cancel the refresh task and wait for it to finish"""
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
