"""
Use-case: fetch the live silver price and fold it into today's silver open/high/low.
Depends only on Domain ports and entities, no infrastructure imports.
"""

import logging
from dataclasses import dataclass

from src.domain.entities.daily_extremes import DailyExtremes
from src.domain.entities.fetch_result import FetchFailed, Fetched, FetchResult, Unavailable
from src.domain.entities.metal_price import SilverPrice
from src.domain.ports.extremes_store_port import IDailyExtremesStore
from src.domain.ports.price_source_port import ISilverPriceSource

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SilverPriceReport:
    price: SilverPrice
    extremes: DailyExtremes


class GetSilverPriceUseCase:
    def __init__(self, source: ISilverPriceSource, extremes_store: IDailyExtremesStore) -> None:
        self._source = source
        self._extremes_store = extremes_store

    def execute(self) -> FetchResult[SilverPriceReport]:
        """Fetch the silver price once; the silver store is updated only on success."""
        try:
            price = self._source.get_silver_price()
            if price is None:
                return Unavailable("No silver price data available from upstream sources")
            extremes = self._extremes_store.update(price.price_per_gram)
        except Exception as exc:
            logger.exception("Error fetching price")
            return FetchFailed(exc)
        return Fetched(SilverPriceReport(price=price, extremes=extremes))
