"""
Application services: gold and silver side by side.

CombinedMetalPricesService   INR retail units for both metals, the ratio, and
                             USD/INR, USD/EUR, USD/GBP.
UsdMetalPricesService        COMEX-based USD prices for both metals, with INR
                             equivalents for comparison.

Both return None when a COMEX quote or any of the three FX rates is missing.
"""

import logging
from datetime import datetime, timezone
from typing import Callable, Optional

from src.application.services.landed_cost import (
    GRAM_PER_KG,
    OZ_TO_GRAM,
    TOLA_TO_GRAM,
    indian_price_per_gram,
    round2,
)
from src.domain.entities.metal_price import (
    CombinedMetalPrices,
    GoldPriceUsd,
    MetalPriceSummary,
    SilverPriceUsd,
    UsdMetalPrices,
)
from src.domain.ports.market_data_port import IExchangeRateProvider, IMarketQuoteProvider
from src.domain.ports.price_source_port import (
    ICombinedMetalPricesSource,
    IGoldSilverRatioSource,
    IUsdMetalPricesSource,
)

logger = logging.getLogger(__name__)

GOLD_SYMBOL = "GC=F"
SILVER_SYMBOL = "SI=F"
QUOTE_CURRENCIES = ("INR", "EUR", "GBP")


def _usd_rates(rates: IExchangeRateProvider) -> Optional[dict[str, float]]:
    result = {currency: rates.get_rate("USD", currency) for currency in QUOTE_CURRENCIES}
    if any(rate is None for rate in result.values()):
        logger.error("Missing exchange rates: %s", result)
        return None
    return result


def _summary(usd_per_oz: float, usd_inr: float) -> MetalPriceSummary:
    per_gram = indian_price_per_gram(usd_per_oz, usd_inr)
    return MetalPriceSummary(
        price_per_gram=round2(per_gram),
        price_per_10_gram=round2(per_gram * 10),
        price_per_100_gram=round2(per_gram * 100),
        price_per_kg=float(round(per_gram * GRAM_PER_KG)),
        price_per_tola=round2(per_gram * TOLA_TO_GRAM),
        price_per_oz_usd=round2(usd_per_oz),
    )


class CombinedMetalPricesService(ICombinedMetalPricesSource):
    def __init__(
        self,
        quotes: IMarketQuoteProvider,
        rates: IExchangeRateProvider,
        ratio_source: Optional[IGoldSilverRatioSource] = None,
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ) -> None:
        """
        Args:
            ratio_source: Supplies the ratio block; the block is None when it has
                          no data or when no source is given.
        """
        self._quotes = quotes
        self._rates = rates
        self._ratio_source = ratio_source
        self._clock = clock

    def get_combined_prices(self) -> Optional[CombinedMetalPrices]:
        gold = self._quotes.get_quote(GOLD_SYMBOL)
        silver = self._quotes.get_quote(SILVER_SYMBOL)
        rates = _usd_rates(self._rates)
        if gold is None or silver is None or rates is None:
            logger.error(
                "Failed to fetch combined price data: gold=%s silver=%s",
                gold.price if gold else None, silver.price if silver else None,
            )
            return None

        ratio = self._ratio_source.get_ratio() if self._ratio_source else None
        return CombinedMetalPrices(
            gold=_summary(gold.price, rates["INR"]),
            silver=_summary(silver.price, rates["INR"]),
            ratio=ratio,
            timestamp=self._clock().isoformat(),
            usd_inr=round2(rates["INR"]),
            usd_eur=round(rates["EUR"], 4),
            usd_gbp=round(rates["GBP"], 4),
        )


class UsdMetalPricesService(IUsdMetalPricesSource):
    SOURCE: str = "COMEX"

    def __init__(
        self,
        quotes: IMarketQuoteProvider,
        rates: IExchangeRateProvider,
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ) -> None:
        self._quotes = quotes
        self._rates = rates
        self._clock = clock

    def get_usd_prices(self) -> Optional[UsdMetalPrices]:
        silver = self._quotes.get_quote(SILVER_SYMBOL)
        gold = self._quotes.get_quote(GOLD_SYMBOL)
        rates = _usd_rates(self._rates)
        if silver is None or gold is None or rates is None:
            logger.error(
                "Failed to fetch USD price data: silver=%s gold=%s",
                silver.price if silver else None, gold.price if gold else None,
            )
            return None

        timestamp = self._clock().isoformat()
        usd_inr = rates["INR"]

        change, change_percent = 0.0, 0.0
        if silver.previous_close:
            change = silver.price - silver.previous_close
            change_percent = change / silver.previous_close * 100

        silver_usd = SilverPriceUsd(
            price_per_oz=round2(silver.price),
            price_per_gram=round(silver.price / OZ_TO_GRAM, 3),
            price_per_kg=round2(silver.price / OZ_TO_GRAM * GRAM_PER_KG),
            change_24h=round2(change),
            change_percent_24h=round2(change_percent),
            high_24h=round2(max(silver.day_high or silver.price, silver.price)),
            low_24h=round2(min(silver.day_low or silver.price, silver.price)),
            source=self.SOURCE,
            timestamp=timestamp,
            usd_inr=round2(usd_inr),
            usd_eur=round(rates["EUR"], 4),
            usd_gbp=round(rates["GBP"], 4),
            price_per_oz_inr=round2(silver.price * usd_inr),
            price_per_gram_inr=round2(indian_price_per_gram(silver.price, usd_inr)),
        )
        gold_usd = GoldPriceUsd(
            price_per_oz=round2(gold.price),
            price_per_gram=round2(gold.price / OZ_TO_GRAM),
            price_per_kg=round2(gold.price / OZ_TO_GRAM * GRAM_PER_KG),
            source=self.SOURCE,
            timestamp=timestamp,
        )
        return UsdMetalPrices(
            silver=silver_usd,
            gold=gold_usd,
            gold_silver_ratio=round2(gold_usd.price_per_oz / silver_usd.price_per_oz),
            timestamp=timestamp,
        )
