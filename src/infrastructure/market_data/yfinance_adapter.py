"""
Infrastructure adapter: yfinance → IMarketQuoteProvider, IExchangeRateProvider.
All yfinance-specific details (Ticker.fast_info, symbol conventions) are confined here;
the rest of the codebase depends only on the market data ports.

Symbols used by the price services:
    GC=F   COMEX gold futures, USD per troy ounce
    SI=F   COMEX silver futures, USD per troy ounce
    CNY=X  USD/CNY spot
    INR=X  USD/INR spot
"""

import logging
import math
from typing import Optional

import yfinance as yf

from src.domain.entities.metal_price import MarketQuote
from src.domain.ports.market_data_port import IExchangeRateProvider, IMarketQuoteProvider

logger = logging.getLogger(__name__)


def _positive(value) -> Optional[float]:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) and number > 0 else None


class YFinanceMarketQuoteProvider(IMarketQuoteProvider):
    """Fetches futures and FX quotes from Yahoo Finance via the yfinance library."""

    def get_quote(self, symbol: str) -> Optional[MarketQuote]:
        try:
            fast_info = yf.Ticker(symbol).fast_info
            price = _positive(getattr(fast_info, "last_price", None))
            if price is None:
                logger.error("Invalid price data from Yahoo Finance for %s", symbol)
                return None
            quote = MarketQuote(
                symbol=symbol,
                price=price,
                previous_close=_positive(getattr(fast_info, "previous_close", None)),
                day_high=_positive(getattr(fast_info, "day_high", None)),
                day_low=_positive(getattr(fast_info, "day_low", None)),
                currency=getattr(fast_info, "currency", None) or "USD",
            )
        except Exception as exc:  # yfinance surfaces transport and parse errors untyped
            logger.warning("Yahoo Finance fetch failed for %s: %s", symbol, exc)
            return None

        logger.debug("Yahoo Finance %s: %s", symbol, quote.price)
        return quote


class YFinanceExchangeRateProvider(IExchangeRateProvider):
    """Reads USD-based FX spot rates from Yahoo's ``<QUOTE>=X`` symbols."""

    def __init__(self, quotes: Optional[IMarketQuoteProvider] = None) -> None:
        self._quotes = quotes or YFinanceMarketQuoteProvider()

    def get_rate(self, base: str, quote: str) -> Optional[float]:
        if base.upper() != "USD":
            return None
        result = self._quotes.get_quote(f"{quote.upper()}=X")
        return result.price if result else None
