"""
Ports (interfaces) for the price fetchers consumed by the request handlers.
Each returns None when upstream data is unavailable and raises on unexpected failure.
"""

from abc import ABC, abstractmethod
from typing import Optional

from src.domain.entities.metal_price import (
    CombinedMetalPrices,
    GoldPrice,
    GoldSilverRatio,
    ShanghaiSilverPrice,
    SilverPrice,
    UsdMetalPrices,
)


class IGoldPriceSource(ABC):
    @abstractmethod
    def get_gold_price(self) -> Optional[GoldPrice]: ...


class ISilverPriceSource(ABC):
    @abstractmethod
    def get_silver_price(self) -> Optional[SilverPrice]: ...


class IGoldSilverRatioSource(ABC):
    @abstractmethod
    def get_ratio(self) -> Optional[GoldSilverRatio]: ...


class IShanghaiSilverPriceSource(ABC):
    @abstractmethod
    def get_price(self) -> Optional[ShanghaiSilverPrice]: ...


class ICombinedMetalPricesSource(ABC):
    @abstractmethod
    def get_combined_prices(self) -> Optional[CombinedMetalPrices]: ...


class IUsdMetalPricesSource(ABC):
    @abstractmethod
    def get_usd_prices(self) -> Optional[UsdMetalPrices]: ...
