"""
Data-layer caching for the price sources.

A successful fetch is reused for ``ttl_seconds``; all requests inside that
window share one upstream call. ``None`` results and exceptions are never
cached. The upstream call runs outside the lock.
"""

import logging
import threading
import time
from typing import Callable, Generic, Optional, TypeVar

from src.domain.entities.metal_price import (
    CombinedMetalPrices,
    GoldPrice,
    GoldSilverRatio,
    ShanghaiSilverPrice,
    SilverPrice,
    UsdMetalPrices,
)
from src.domain.ports.price_source_port import (
    ICombinedMetalPricesSource,
    IGoldPriceSource,
    IGoldSilverRatioSource,
    IShanghaiSilverPriceSource,
    ISilverPriceSource,
    IUsdMetalPricesSource,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


class TTLCachedCall(Generic[T]):
    """Memoizes the last non-None result of a zero-argument *fetch* for *ttl_seconds*."""

    def __init__(
        self,
        fetch: Callable[[], Optional[T]],
        ttl_seconds: float,
        name: str = "cache",
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._fetch = fetch
        self._ttl = ttl_seconds
        self._name = name
        self._clock = clock
        self._lock = threading.Lock()
        self._value: Optional[T] = None
        self._stored_at: float = 0.0

    def get(self) -> Optional[T]:
        with self._lock:
            if self._value is not None and self._clock() - self._stored_at < self._ttl:
                logger.debug("%s: cache hit", self._name)
                return self._value

        value = self._fetch()
        if value is not None:
            with self._lock:
                self._value = value
                self._stored_at = self._clock()
        return value

    def clear(self) -> None:
        with self._lock:
            self._value = None


class CachedGoldPriceSource(IGoldPriceSource):
    def __init__(self, inner: IGoldPriceSource, ttl_seconds: float, **kwargs) -> None:
        self._cache = TTLCachedCall(inner.get_gold_price, ttl_seconds, name="gold-price", **kwargs)

    def get_gold_price(self) -> Optional[GoldPrice]:
        return self._cache.get()


class CachedGoldSilverRatioSource(IGoldSilverRatioSource):
    def __init__(self, inner: IGoldSilverRatioSource, ttl_seconds: float, **kwargs) -> None:
        self._cache = TTLCachedCall(inner.get_ratio, ttl_seconds, name="gold-silver-ratio", **kwargs)

    def get_ratio(self) -> Optional[GoldSilverRatio]:
        return self._cache.get()


class CachedShanghaiSilverPriceSource(IShanghaiSilverPriceSource):
    def __init__(self, inner: IShanghaiSilverPriceSource, ttl_seconds: float, **kwargs) -> None:
        self._cache = TTLCachedCall(inner.get_price, ttl_seconds, name="shanghai-silver-price", **kwargs)

    def get_price(self) -> Optional[ShanghaiSilverPrice]:
        return self._cache.get()


class CachedSilverPriceSource(ISilverPriceSource):
    def __init__(self, inner: ISilverPriceSource, ttl_seconds: float, **kwargs) -> None:
        self._cache = TTLCachedCall(inner.get_silver_price, ttl_seconds, name="silver-price", **kwargs)

    def get_silver_price(self) -> Optional[SilverPrice]:
        return self._cache.get()


class CachedCombinedMetalPricesSource(ICombinedMetalPricesSource):
    def __init__(self, inner: ICombinedMetalPricesSource, ttl_seconds: float, **kwargs) -> None:
        self._cache = TTLCachedCall(inner.get_combined_prices, ttl_seconds, name="combined-prices", **kwargs)

    def get_combined_prices(self) -> Optional[CombinedMetalPrices]:
        return self._cache.get()


class CachedUsdMetalPricesSource(IUsdMetalPricesSource):
    def __init__(self, inner: IUsdMetalPricesSource, ttl_seconds: float, **kwargs) -> None:
        self._cache = TTLCachedCall(inner.get_usd_prices, ttl_seconds, name="usd-prices", **kwargs)

    def get_usd_prices(self) -> Optional[UsdMetalPrices]:
        return self._cache.get()
