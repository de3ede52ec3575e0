"""
Use-case: fetch gold and silver prices together.
Depends only on Domain ports and entities, no infrastructure imports.
"""

import logging

from src.domain.entities.fetch_result import FetchFailed, Fetched, FetchResult, Unavailable
from src.domain.entities.metal_price import CombinedMetalPrices
from src.domain.ports.price_source_port import ICombinedMetalPricesSource

logger = logging.getLogger(__name__)


class GetCombinedMetalPricesUseCase:
    def __init__(self, source: ICombinedMetalPricesSource) -> None:
        self._source = source

    def execute(self) -> FetchResult[CombinedMetalPrices]:
        try:
            prices = self._source.get_combined_prices()
        except Exception as exc:
            logger.exception("[API] Combined prices error")
            return FetchFailed(exc)
        if prices is None:
            return Unavailable("Gold, silver or exchange rates unavailable")
        return Fetched(prices)
