"""
Domain entities for precious-metal price data.
Zero external dependencies, pure Python dataclasses only.
"""

from dataclasses import dataclass
from typing import Literal, Optional


@dataclass(frozen=True)
class MarketQuote:
    symbol: str
    price: float
    previous_close: Optional[float] = None
    day_high: Optional[float] = None
    day_low: Optional[float] = None
    currency: str = "USD"


@dataclass(frozen=True)
class GoldPrice:
    price_24k_per_gram: float
    price_24k_per_10_gram: float
    price_24k_per_tola: float
    price_24k_per_sovereign: float
    price_22k_per_gram: float
    price_22k_per_10_gram: float
    price_22k_per_tola: float
    price_22k_per_sovereign: float
    price_18k_per_gram: float
    price_18k_per_10_gram: float
    currency: str
    timestamp: str
    change_24h: float
    change_percent_24h: float
    high_24h: float
    low_24h: float
    source: str
    usd_inr: float
    comex_usd: float


RatioInterpretation = Literal["silver_undervalued", "silver_overvalued", "normal"]


@dataclass(frozen=True)
class GoldSilverRatio:
    ratio: float
    gold_price_per_gram: float
    silver_price_per_gram: float
    gold_price_per_oz_usd: float
    silver_price_per_oz_usd: float
    interpretation: RatioInterpretation
    interpretation_text: str
    historical_context: str
    investment_hint: str
    timestamp: str
    usd_inr: float


MarketStatus = Literal["open", "closed", "pre-market"]


@dataclass(frozen=True)
class ShanghaiSilverPrice:
    price_per_kg_cny: float
    price_per_gram_cny: float
    price_per_oz_cny: float
    price_per_oz_usd: float
    price_per_gram_usd: float
    price_per_kg_usd: float
    price_per_gram_inr: float
    price_per_kg_inr: float
    price_per_oz_inr: float
    india_rate_per_gram: float
    comex_usd: float
    premium_percent: float
    premium_usd: float
    usd_cny: float
    usd_inr: float
    cny_inr: float
    market_status: MarketStatus
    market_session: str
    timestamp: str
    source: str
    change_24h_percent: float
    change_24h_cny: float
    is_estimate: bool
    disclaimer: str
    official_sge_url: str


@dataclass(frozen=True)
class SilverPrice:
    price_per_gram: float
    price_per_kg: float
    price_per_10_gram: float
    price_per_tola: float
    currency: str
    timestamp: str
    change_24h: float
    change_percent_24h: float
    high_24h: float
    low_24h: float
    source: str
    usd_inr: float
    comex_usd: float


@dataclass(frozen=True)
class MetalPriceSummary:
    """INR prices for one metal in the common retail units, plus COMEX USD/oz."""

    price_per_gram: float
    price_per_10_gram: float
    price_per_100_gram: float
    price_per_kg: float
    price_per_tola: float
    price_per_oz_usd: float


@dataclass(frozen=True)
class CombinedMetalPrices:
    gold: MetalPriceSummary
    silver: MetalPriceSummary
    ratio: Optional[GoldSilverRatio]
    timestamp: str
    usd_inr: float
    usd_eur: float
    usd_gbp: float


@dataclass(frozen=True)
class SilverPriceUsd:
    price_per_oz: float
    price_per_gram: float
    price_per_kg: float
    change_24h: float
    change_percent_24h: float
    high_24h: float
    low_24h: float
    source: str
    timestamp: str
    usd_inr: float
    usd_eur: float
    usd_gbp: float
    price_per_oz_inr: float
    price_per_gram_inr: float


@dataclass(frozen=True)
class GoldPriceUsd:
    price_per_oz: float
    price_per_gram: float
    price_per_kg: float
    source: str
    timestamp: str


@dataclass(frozen=True)
class UsdMetalPrices:
    silver: SilverPriceUsd
    gold: GoldPriceUsd
    gold_silver_ratio: float
    timestamp: str
