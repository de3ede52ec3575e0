"""
Application service: live Indian silver price from COMEX futures and USD/INR.

Same landed-cost formula as gold, quoted per gram, 10 g, tola and kg.
The 24h change is measured against the COMEX previous close at today's FX rate.
"""

import logging
from datetime import datetime, timezone
from typing import Callable, Optional

from src.application.services.landed_cost import (
    GRAM_PER_KG,
    TOLA_TO_GRAM,
    indian_price_per_gram,
    round2,
)
from src.domain.entities.metal_price import SilverPrice
from src.domain.ports.market_data_port import IExchangeRateProvider, IMarketQuoteProvider
from src.domain.ports.price_source_port import ISilverPriceSource

logger = logging.getLogger(__name__)


class SilverPriceService(ISilverPriceSource):
    SYMBOL: str = "SI=F"
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

    def get_silver_price(self) -> Optional[SilverPrice]:
        quote = self._quotes.get_quote(self.SYMBOL)
        usd_inr = self._rates.get_rate("USD", "INR")
        if quote is None or usd_inr is None:
            logger.error(
                "Cannot calculate silver price - missing data: comex=%s usd_inr=%s",
                quote.price if quote else None, usd_inr,
            )
            return None

        per_gram = indian_price_per_gram(quote.price, usd_inr)

        change, change_percent = 0.0, 0.0
        if quote.previous_close:
            previous = indian_price_per_gram(quote.previous_close, usd_inr)
            change = per_gram - previous
            change_percent = change / previous * 100

        high = indian_price_per_gram(quote.day_high, usd_inr) if quote.day_high else per_gram
        low = indian_price_per_gram(quote.day_low, usd_inr) if quote.day_low else per_gram

        logger.debug("Calculated silver: $%s/oz x %s = %.2f/gram (with duties)", quote.price, usd_inr, per_gram)
        return SilverPrice(
            price_per_gram=round2(per_gram),
            price_per_kg=float(round(per_gram * GRAM_PER_KG)),
            price_per_10_gram=round2(per_gram * 10),
            price_per_tola=round2(per_gram * TOLA_TO_GRAM),
            currency="INR",
            timestamp=self._clock().isoformat(),
            change_24h=round2(change),
            change_percent_24h=round2(change_percent),
            high_24h=round2(max(high, per_gram)),
            low_24h=round2(min(low, per_gram)),
            source=self.SOURCE,
            usd_inr=round2(usd_inr),
            comex_usd=round2(quote.price),
        )
