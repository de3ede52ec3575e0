"""
Pydantic response models for the HTTP API.

Domain entities are snake_case dataclasses; the wire format is camelCase to
match what the web client already consumes (e.g. ``price24KPerGram``,
``todayHighTime``). Fields containing digits carry explicit aliases.
"""

import dataclasses
import datetime as dt
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from src.application.use_cases.get_gold_price import GoldPriceReport
from src.application.use_cases.get_silver_price import SilverPriceReport
from src.domain.entities.daily_extremes import DailyExtremes
from src.domain.entities.metal_price import (
    CombinedMetalPrices,
    GoldSilverRatio,
    ShanghaiSilverPrice,
    UsdMetalPrices,
)


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ErrorResponse(BaseModel):
    error: str
    message: Optional[str] = None


class GoldPriceResponse(CamelModel):
    price_24k_per_gram: float = Field(alias="price24KPerGram")
    price_24k_per_10_gram: float = Field(alias="price24KPer10Gram")
    price_24k_per_tola: float = Field(alias="price24KPerTola")
    price_24k_per_sovereign: float = Field(alias="price24KPerSovereign")
    price_22k_per_gram: float = Field(alias="price22KPerGram")
    price_22k_per_10_gram: float = Field(alias="price22KPer10Gram")
    price_22k_per_tola: float = Field(alias="price22KPerTola")
    price_22k_per_sovereign: float = Field(alias="price22KPerSovereign")
    price_18k_per_gram: float = Field(alias="price18KPerGram")
    price_18k_per_10_gram: float = Field(alias="price18KPer10Gram")
    currency: str
    timestamp: str
    change_24h: float = Field(alias="change24h")
    change_percent_24h: float = Field(alias="changePercent24h")
    high_24h: float = Field(alias="high24h")
    low_24h: float = Field(alias="low24h")
    source: str
    usd_inr: float
    comex_usd: float

    today_high: float
    today_high_time: dt.datetime
    today_low: float
    today_low_time: dt.datetime
    today_open: float

    @classmethod
    def from_report(cls, report: GoldPriceReport) -> "GoldPriceResponse":
        extremes = report.extremes
        return cls(
            **dataclasses.asdict(report.price),
            today_high=extremes.high,
            today_high_time=extremes.high_time,
            today_low=extremes.low,
            today_low_time=extremes.low_time,
            today_open=extremes.open_price,
        )


class GoldSilverRatioResponse(CamelModel):
    ratio: float
    gold_price_per_gram: float
    silver_price_per_gram: float
    gold_price_per_oz_usd: float
    silver_price_per_oz_usd: float
    interpretation: str
    interpretation_text: str
    historical_context: str
    investment_hint: str
    timestamp: str
    usd_inr: float

    @classmethod
    def from_entity(cls, ratio: GoldSilverRatio) -> "GoldSilverRatioResponse":
        return cls(**dataclasses.asdict(ratio))


class ShanghaiSilverPriceResponse(CamelModel):
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
    market_status: str
    market_session: str
    timestamp: str
    source: str
    change_24h_percent: float = Field(alias="change24hPercent")
    change_24h_cny: float = Field(alias="change24hCny")
    is_estimate: bool
    disclaimer: str
    official_sge_url: str

    @classmethod
    def from_entity(cls, price: ShanghaiSilverPrice) -> "ShanghaiSilverPriceResponse":
        return cls(**dataclasses.asdict(price))


class DailyExtremesResponse(CamelModel):
    date: dt.date
    open_price: float
    high: float
    high_time: dt.datetime
    low: float
    low_time: dt.datetime
    last_updated: dt.datetime

    @classmethod
    def from_entity(cls, extremes: DailyExtremes) -> "DailyExtremesResponse":
        return cls(**dataclasses.asdict(extremes))


class SilverPriceResponse(CamelModel):
    price_per_gram: float
    price_per_kg: float
    price_per_10_gram: float = Field(alias="pricePer10Gram")
    price_per_tola: float
    currency: str
    timestamp: str
    change_24h: float = Field(alias="change24h")
    change_percent_24h: float = Field(alias="changePercent24h")
    high_24h: float = Field(alias="high24h")
    low_24h: float = Field(alias="low24h")
    source: str
    usd_inr: float
    comex_usd: float

    today_high: float
    today_high_time: dt.datetime
    today_low: float
    today_low_time: dt.datetime
    today_open: float

    @classmethod
    def from_report(cls, report: SilverPriceReport) -> "SilverPriceResponse":
        extremes = report.extremes
        return cls(
            **dataclasses.asdict(report.price),
            today_high=extremes.high,
            today_high_time=extremes.high_time,
            today_low=extremes.low,
            today_low_time=extremes.low_time,
            today_open=extremes.open_price,
        )


class MetalPriceSummaryResponse(CamelModel):
    price_per_gram: float
    price_per_10_gram: float = Field(alias="pricePer10Gram")
    price_per_100_gram: float = Field(alias="pricePer100Gram")
    price_per_kg: float
    price_per_tola: float
    price_per_oz_usd: float


class CombinedMetalPricesResponse(CamelModel):
    gold: MetalPriceSummaryResponse
    silver: MetalPriceSummaryResponse
    ratio: Optional[GoldSilverRatioResponse]
    timestamp: str
    usd_inr: float
    usd_eur: float
    usd_gbp: float

    @classmethod
    def from_entity(cls, prices: CombinedMetalPrices) -> "CombinedMetalPricesResponse":
        return cls(**dataclasses.asdict(prices))


class SilverPriceUsdResponse(CamelModel):
    price_per_oz: float
    price_per_gram: float
    price_per_kg: float
    change_24h: float = Field(alias="change24h")
    change_percent_24h: float = Field(alias="changePercent24h")
    high_24h: float = Field(alias="high24h")
    low_24h: float = Field(alias="low24h")
    source: str
    timestamp: str
    usd_inr: float
    usd_eur: float
    usd_gbp: float
    price_per_oz_inr: float
    price_per_gram_inr: float


class GoldPriceUsdResponse(CamelModel):
    price_per_oz: float
    price_per_gram: float
    price_per_kg: float
    source: str
    timestamp: str


class UsdMetalPricesResponse(CamelModel):
    silver: SilverPriceUsdResponse
    gold: GoldPriceUsdResponse
    gold_silver_ratio: float
    timestamp: str

    @classmethod
    def from_entity(cls, prices: UsdMetalPrices) -> "UsdMetalPricesResponse":
        return cls(**dataclasses.asdict(prices))
