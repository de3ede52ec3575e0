"""
Use-case: fetch the live gold price and fold it into today's open/high/low.
Depends only on Domain ports and entities, no infrastructure imports.
"""

import logging
from dataclasses import dataclass

from src.domain.entities.daily_extremes import DailyExtremes
from src.domain.entities.fetch_result import FetchFailed, Fetched, FetchResult, Unavailable
from src.domain.entities.metal_price import GoldPrice
from src.domain.ports.extremes_store_port import IDailyExtremesStore
from src.domain.ports.price_source_port import IGoldPriceSource

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GoldPriceReport:
    price: GoldPrice
    extremes: DailyExtremes


class GetGoldPriceUseCase:
    def __init__(self, source: IGoldPriceSource, extremes_store: IDailyExtremesStore) -> None:
        self._source = source
        self._extremes_store = extremes_store

    def execute(self) -> FetchResult[GoldPriceReport]:
        """Fetch the gold price once and update today's extremes on success.

        The extremes store is only touched after a successful fetch.

        Returns:
            Fetched(GoldPriceReport) on success, Unavailable when the source
            has no data, FetchFailed when the fetch or the store update raised.
        """
        try:
            price = self._source.get_gold_price()
            if price is None:
                return Unavailable("No gold price data available from upstream sources")
            extremes = self._extremes_store.update(price.price_24k_per_gram)
        except Exception as exc:
            logger.exception("[GoldPriceAPI] Error fetching price")
            return FetchFailed(exc)
        return Fetched(GoldPriceReport(price=price, extremes=extremes))
