"""
Application service: estimated Shanghai (SGE) silver price from COMEX + premium.

Shanghai silver (CNY/kg) = COMEX (USD/oz) × (1 + premium) × USD/CNY ÷ 31.1035 × 1000

The premium is an estimate, not live SGE Ag(T+D) data: a 4% base, +1% during
Asian trading hours, a small hour-of-day variation, clamped to 2-8%.
Official benchmark: https://en.sge.com.cn/data_SilverBenchmarkPrice
"""

import logging
import math
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

from src.application.services.landed_cost import GRAM_PER_KG, OZ_TO_GRAM, round2
from src.domain.entities.metal_price import ShanghaiSilverPrice
from src.domain.ports.market_data_port import IExchangeRateProvider, IMarketQuoteProvider
from src.domain.ports.price_source_port import IShanghaiSilverPriceSource

logger = logging.getLogger(__name__)

BEIJING = timezone(timedelta(hours=8), "Asia/Shanghai")

PREMIUM_BASE = 0.04
PREMIUM_ASIAN_HOURS = 0.01
PREMIUM_MIN = 0.02
PREMIUM_MAX = 0.08

# India: import duty + IGST + MCX premium, roughly 24% over COMEX.
INDIA_SILVER_MARKUP = 1.24

COMEX_SILVER_RANGE = (15.0, 150.0)

# SGE sessions in Beijing hours; the night session runs past midnight.
DAY_SESSION_MORNING = (9.0, 11.5)
DAY_SESSION_AFTERNOON = (13.5, 15.5)
NIGHT_SESSION_START = 21.0
NIGHT_SESSION_END = 2.5
PRE_MARKET_DAY = 8.5
PRE_MARKET_NIGHT = 20.5

DISCLAIMER = (
    "Estimated price based on COMEX + calculated premium. "
    "Actual SGE Ag(T+D) prices may differ."
)
OFFICIAL_SGE_URL = "https://en.sge.com.cn/data_SilverBenchmarkPrice"


def sge_market_status(now: datetime) -> tuple[str, str]:
    """Return (status, session) for the Shanghai Gold Exchange at *now*."""
    beijing = now.astimezone(BEIJING)
    hour = beijing.hour + beijing.minute / 60

    if beijing.weekday() >= 5:
        return "closed", "Weekend"
    if DAY_SESSION_MORNING[0] <= hour < DAY_SESSION_MORNING[1]:
        return "open", "Day Session (Morning)"
    if DAY_SESSION_AFTERNOON[0] <= hour < DAY_SESSION_AFTERNOON[1]:
        return "open", "Day Session (Afternoon)"
    if hour >= NIGHT_SESSION_START or hour < NIGHT_SESSION_END:
        return "open", "Night Session"
    if PRE_MARKET_DAY <= hour < DAY_SESSION_MORNING[0]:
        return "pre-market", "Pre-Market (Day)"
    if PRE_MARKET_NIGHT <= hour < NIGHT_SESSION_START:
        return "pre-market", "Pre-Market (Night)"
    return "closed", "Between Sessions"


def shanghai_premium(now: datetime) -> float:
    """Estimated Shanghai premium over COMEX as a fraction (0.02-0.08)."""
    utc = now.astimezone(timezone.utc)
    asian_hours = 1 <= utc.hour <= 10 or 13 <= utc.hour <= 19

    premium = PREMIUM_BASE
    if asian_hours and utc.weekday() < 5:
        premium += PREMIUM_ASIAN_HOURS
    premium += math.sin(utc.hour * 0.3) * 0.01
    return max(PREMIUM_MIN, min(PREMIUM_MAX, premium))


class ShanghaiSilverService(IShanghaiSilverPriceSource):
    SYMBOL: str = "SI=F"
    SOURCE: str = "Calculated from COMEX + estimated premium"

    def __init__(
        self,
        quotes: IMarketQuoteProvider,
        usd_cny: IExchangeRateProvider,
        usd_inr: IExchangeRateProvider,
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ) -> None:
        """
        Args:
            quotes:  Provider for the COMEX silver futures quote.
            usd_cny: Provider for USD/CNY, typically a fallback chain.
            usd_inr: Provider for USD/INR, typically a fallback chain.
            clock:   Source of "now" for the premium, market status and timestamp.
        """
        self._quotes = quotes
        self._usd_cny = usd_cny
        self._usd_inr = usd_inr
        self._clock = clock

    def get_price(self) -> Optional[ShanghaiSilverPrice]:
        quote = self._quotes.get_quote(self.SYMBOL)
        if quote is None or not (COMEX_SILVER_RANGE[0] < quote.price < COMEX_SILVER_RANGE[1]):
            logger.error(
                "COMEX silver price unavailable or outside %s: %s",
                COMEX_SILVER_RANGE, quote.price if quote else None,
            )
            return None

        usd_cny = self._usd_cny.get_rate("USD", "CNY")
        usd_inr = self._usd_inr.get_rate("USD", "INR")
        if usd_cny is None or usd_inr is None:
            logger.error("Missing exchange rate data: usd_cny=%s usd_inr=%s", usd_cny, usd_inr)
            return None

        comex_usd = quote.price
        change_percent = 0.0
        if quote.previous_close:
            change_percent = (comex_usd - quote.previous_close) / quote.previous_close * 100

        now = self._clock()
        premium = shanghai_premium(now)
        status, session = sge_market_status(now)

        shanghai_usd_per_oz = comex_usd * (1 + premium)
        price_per_oz_cny = shanghai_usd_per_oz * usd_cny
        price_per_gram_cny = price_per_oz_cny / OZ_TO_GRAM
        price_per_kg_cny = price_per_gram_cny * GRAM_PER_KG
        price_per_gram_usd = shanghai_usd_per_oz / OZ_TO_GRAM
        price_per_gram_inr = price_per_gram_usd * usd_inr
        india_rate = comex_usd * usd_inr / OZ_TO_GRAM * INDIA_SILVER_MARKUP

        return ShanghaiSilverPrice(
            price_per_kg_cny=round2(price_per_kg_cny),
            price_per_gram_cny=round2(price_per_gram_cny),
            price_per_oz_cny=round2(price_per_oz_cny),
            price_per_oz_usd=round2(shanghai_usd_per_oz),
            price_per_gram_usd=round2(price_per_gram_usd),
            price_per_kg_usd=round2(price_per_gram_usd * GRAM_PER_KG),
            price_per_gram_inr=round2(price_per_gram_inr),
            price_per_kg_inr=float(round(price_per_gram_inr * GRAM_PER_KG)),
            price_per_oz_inr=round2(shanghai_usd_per_oz * usd_inr),
            india_rate_per_gram=round2(india_rate),
            comex_usd=round2(comex_usd),
            premium_percent=round2(premium * 100),
            premium_usd=round2(shanghai_usd_per_oz - comex_usd),
            usd_cny=round(usd_cny, 4),
            usd_inr=round2(usd_inr),
            cny_inr=round(usd_inr / usd_cny, 4),
            market_status=status,
            market_session=session,
            timestamp=now.isoformat(),
            source=self.SOURCE,
            change_24h_percent=round2(change_percent),
            change_24h_cny=float(round(price_per_kg_cny * change_percent / 100)),
            is_estimate=True,
            disclaimer=DISCLAIMER,
            official_sge_url=OFFICIAL_SGE_URL,
        )
