"""
Application service: live Indian gold price from COMEX futures and USD/INR.

Business decisions owned here:
  - The landed-cost formula (see landed_cost.py) applied to 24K.
  - 22K/18K derived from 24K by purity ratio.
  - 24h change measured against the COMEX previous close at today's FX rate.

Market data ports are injected; no yfinance or httpx imports appear here.
"""

import logging
from datetime import datetime, timezone
from typing import Callable, Optional

from src.application.services.landed_cost import (
    GOLD_PURITY,
    SOVEREIGN_TO_GRAM,
    TOLA_TO_GRAM,
    indian_price_per_gram,
    round2,
)
from src.domain.entities.metal_price import GoldPrice
from src.domain.ports.market_data_port import IExchangeRateProvider, IMarketQuoteProvider
from src.domain.ports.price_source_port import IGoldPriceSource

logger = logging.getLogger(__name__)


class GoldPriceService(IGoldPriceSource):
    SYMBOL: str = "GC=F"
    SOURCE: str = "calculated"

    def __init__(
        self,
        quotes: IMarketQuoteProvider,
        rates: IExchangeRateProvider,
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ) -> None:
        self._quotes = quotes
        self._rates = rates
        self._clock = clock

    def get_gold_price(self) -> Optional[GoldPrice]:
        """Return the current INR gold price, or None if any upstream input is missing."""
        quote = self._quotes.get_quote(self.SYMBOL)
        usd_inr = self._rates.get_rate("USD", "INR")
        if quote is None or usd_inr is None:
            logger.error(
                "Cannot calculate gold price - missing data: comex=%s usd_inr=%s",
                quote.price if quote else None, usd_inr,
            )
            return None

        price_24k = indian_price_per_gram(quote.price, usd_inr)
        price_22k = price_24k * (GOLD_PURITY["22K"] / GOLD_PURITY["24K"])
        price_18k = price_24k * (GOLD_PURITY["18K"] / GOLD_PURITY["24K"])

        change, change_percent = 0.0, 0.0
        if quote.previous_close:
            previous_24k = indian_price_per_gram(quote.previous_close, usd_inr)
            change = price_24k - previous_24k
            change_percent = change / previous_24k * 100

        high_24k = indian_price_per_gram(quote.day_high, usd_inr) if quote.day_high else price_24k
        low_24k = indian_price_per_gram(quote.day_low, usd_inr) if quote.day_low else price_24k

        logger.debug(
            "Calculated: $%s/oz x %s = %.2f/gram (24K with duties)",
            quote.price, usd_inr, price_24k,
        )
        return GoldPrice(
            price_24k_per_gram=round2(price_24k),
            price_24k_per_10_gram=round2(price_24k * 10),
            price_24k_per_tola=round2(price_24k * TOLA_TO_GRAM),
            price_24k_per_sovereign=round2(price_24k * SOVEREIGN_TO_GRAM),
            price_22k_per_gram=round2(price_22k),
            price_22k_per_10_gram=round2(price_22k * 10),
            price_22k_per_tola=round2(price_22k * TOLA_TO_GRAM),
            price_22k_per_sovereign=round2(price_22k * SOVEREIGN_TO_GRAM),
            price_18k_per_gram=round2(price_18k),
            price_18k_per_10_gram=round2(price_18k * 10),
            currency="INR",
            timestamp=self._clock().isoformat(),
            change_24h=round2(change),
            change_percent_24h=round2(change_percent),
            high_24h=round2(max(high_24k, price_24k)),
            low_24h=round2(min(low_24k, price_24k)),
            source=self.SOURCE,
            usd_inr=round2(usd_inr),
            comex_usd=round2(quote.price),
        )
