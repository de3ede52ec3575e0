"""
Ports (interfaces) for upstream market data.
Infrastructure adapters (e.g. YFinanceMarketQuoteProvider, FrankfurterExchangeRateProvider)
must implement these interfaces.
"""

from abc import ABC, abstractmethod
from typing import Optional

from src.domain.entities.metal_price import MarketQuote


class IMarketQuoteProvider(ABC):
    @abstractmethod
    def get_quote(self, symbol: str) -> Optional[MarketQuote]:
        """Return the latest quote for *symbol*, or None if upstream has no usable price."""
        ...


class IExchangeRateProvider(ABC):
    @abstractmethod
    def get_rate(self, base: str, quote: str) -> Optional[float]:
        """Return how many units of *quote* one unit of *base* buys, or None if unavailable."""
        ...
