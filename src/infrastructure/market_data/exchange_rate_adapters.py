"""
Infrastructure adapters: public FX HTTP APIs → IExchangeRateProvider.

FrankfurterExchangeRateProvider  https://api.frankfurter.app (ECB reference rates)
OpenErApiExchangeRateProvider    https://open.er-api.com (free tier, daily rates)
FallbackExchangeRateProvider     tries a chain of providers in order

Transport and decoding failures are logged and reported as None; the price
services treat a missing rate as "no data".
"""

import logging
import math
from abc import abstractmethod
from typing import Any, Optional, Sequence

import httpx

from src.domain.ports.market_data_port import IExchangeRateProvider

logger = logging.getLogger(__name__)


def _extract_rate(payload: Any, quote: str) -> Optional[float]:
    rates = payload.get("rates") if isinstance(payload, dict) else None
    if not isinstance(rates, dict):
        return None
    rate = rates.get(quote)
    if isinstance(rate, (int, float)) and not isinstance(rate, bool) and math.isfinite(rate) and rate > 0:
        return float(rate)
    return None


class _HttpExchangeRateProvider(IExchangeRateProvider):
    name = "http"

    def __init__(self, client: Optional[httpx.Client] = None, timeout: float = 10.0) -> None:
        self._client = client or httpx.Client(timeout=timeout)

    @abstractmethod
    def _request(self, base: str, quote: str) -> httpx.Request: ...

    def close(self) -> None:
        self._client.close()

    def get_rate(self, base: str, quote: str) -> Optional[float]:
        base, quote = base.upper(), quote.upper()
        try:
            response = self._client.send(self._request(base, quote))
            response.raise_for_status()
            rate = _extract_rate(response.json(), quote)
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning("%s %s/%s fetch failed: %s", self.name, base, quote, exc)
            return None

        if rate is None:
            logger.warning("%s returned no %s/%s rate", self.name, base, quote)
        return rate


class FrankfurterExchangeRateProvider(_HttpExchangeRateProvider):
    name = "Frankfurter"
    BASE_URL = "https://api.frankfurter.app/latest"

    def _request(self, base: str, quote: str) -> httpx.Request:
        return self._client.build_request("GET", self.BASE_URL, params={"from": base, "to": quote})


class OpenErApiExchangeRateProvider(_HttpExchangeRateProvider):
    name = "ExchangeRate API"
    BASE_URL = "https://open.er-api.com/v6/latest"

    def _request(self, base: str, quote: str) -> httpx.Request:
        return self._client.build_request("GET", f"{self.BASE_URL}/{base}")


class FallbackExchangeRateProvider(IExchangeRateProvider):
    """Returns the first rate from *providers* that falls inside *valid_range*."""

    def __init__(
        self,
        providers: Sequence[IExchangeRateProvider],
        valid_range: Optional[tuple[float, float]] = None,
    ) -> None:
        """
        Args:
            providers:   Providers in priority order.
            valid_range: Optional exclusive (low, high) sanity bounds; rates
                         outside it are skipped as if the provider had no data.
        """
        self._providers = list(providers)
        self._valid_range = valid_range

    def get_rate(self, base: str, quote: str) -> Optional[float]:
        for provider in self._providers:
            rate = provider.get_rate(base, quote)
            if rate is None:
                continue
            if self._valid_range and not (self._valid_range[0] < rate < self._valid_range[1]):
                logger.warning(
                    "%s %s/%s rate %s outside %s, trying next source",
                    provider.__class__.__name__, base, quote, rate, self._valid_range,
                )
                continue
            logger.debug("%s/%s from %s: %s", base, quote, provider.__class__.__name__, rate)
            return rate

        logger.error("All %s/%s exchange rate sources failed", base, quote)
        return None
