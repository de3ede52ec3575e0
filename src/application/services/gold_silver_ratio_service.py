"""
Application service: gold-silver ratio with a plain-language interpretation.

Historical reference used for the thresholds:
  - 50-year average ~55-60, modern (2000-2024) average ~65-70
  - COVID high (March 2020) ~125
  - Above 80 silver is cheap relative to gold, below 50 it is expensive
"""

import logging
from datetime import datetime, timezone
from typing import Callable, Optional

from src.application.services.landed_cost import indian_price_per_gram, round2
from src.domain.entities.metal_price import GoldSilverRatio
from src.domain.ports.market_data_port import IExchangeRateProvider, IMarketQuoteProvider
from src.domain.ports.price_source_port import IGoldSilverRatioSource

logger = logging.getLogger(__name__)

EXTREMELY_UNDERVALUED = 90
UNDERVALUED = 80
OVERVALUED = 50


def interpret_ratio(ratio: float) -> tuple[str, str, str, str]:
    """Return (interpretation, text, historical_context, investment_hint) for *ratio*."""
    if ratio >= EXTREMELY_UNDERVALUED:
        return (
            "silver_undervalued",
            "Silver is significantly UNDERVALUED relative to gold",
            f"Current ratio of {ratio:.1f} is well above the historical average of 65-70. "
            "This is similar to levels seen during economic uncertainty.",
            "Strong buy signal for silver. Consider increasing silver allocation in your portfolio.",
        )
    if ratio >= UNDERVALUED:
        return (
            "silver_undervalued",
            "Silver appears UNDERVALUED relative to gold",
            f"Ratio of {ratio:.1f} is above the normal range (60-80). "
            "Silver has potential to outperform gold.",
            "Favorable entry point for silver. Silver may offer better returns than gold in the medium term.",
        )
    if ratio <= OVERVALUED:
        return (
            "silver_overvalued",
            "Silver appears OVERVALUED relative to gold",
            f"Ratio of {ratio:.1f} is below historical norms. "
            "Silver is relatively expensive compared to gold.",
            "Consider gold over silver at current prices. Wait for ratio to normalize before adding silver.",
        )
    return (
        "normal",
        "Gold-Silver ratio is in NORMAL range",
        f"Ratio of {ratio:.1f} is within the typical 60-80 range. "
        "Both metals are fairly valued relative to each other.",
        "Both gold and silver are options. Choose based on your investment goals and risk tolerance.",
    )


class GoldSilverRatioService(IGoldSilverRatioSource):
    GOLD_SYMBOL: str = "GC=F"
    SILVER_SYMBOL: str = "SI=F"

    def __init__(
        self,
        quotes: IMarketQuoteProvider,
        rates: IExchangeRateProvider,
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ) -> None:
        self._quotes = quotes
        self._rates = rates
        self._clock = clock

    def get_ratio(self) -> Optional[GoldSilverRatio]:
        gold = self._quotes.get_quote(self.GOLD_SYMBOL)
        silver = self._quotes.get_quote(self.SILVER_SYMBOL)
        usd_inr = self._rates.get_rate("USD", "INR")
        if gold is None or silver is None or usd_inr is None:
            logger.warning(
                "Cannot calculate gold-silver ratio - missing data: gold=%s silver=%s usd_inr=%s",
                gold.price if gold else None, silver.price if silver else None, usd_inr,
            )
            return None

        ratio = gold.price / silver.price
        interpretation, text, context, hint = interpret_ratio(ratio)
        logger.debug("Gold: $%s/oz, Silver: $%s/oz, Ratio: %.2f", gold.price, silver.price, ratio)

        return GoldSilverRatio(
            ratio=round2(ratio),
            gold_price_per_gram=round2(indian_price_per_gram(gold.price, usd_inr)),
            silver_price_per_gram=round2(indian_price_per_gram(silver.price, usd_inr)),
            gold_price_per_oz_usd=round2(gold.price),
            silver_price_per_oz_usd=round2(silver.price),
            interpretation=interpretation,
            interpretation_text=text,
            historical_context=context,
            investment_hint=hint,
            timestamp=self._clock().isoformat(),
            usd_inr=round2(usd_inr),
        )
