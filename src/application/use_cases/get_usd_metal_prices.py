"""
Use-case: fetch USD prices for silver and gold.
Depends only on Domain ports and entities, no infrastructure imports.
"""

import logging

from src.domain.entities.fetch_result import FetchFailed, Fetched, FetchResult, Unavailable
from src.domain.entities.metal_price import UsdMetalPrices
from src.domain.ports.price_source_port import IUsdMetalPricesSource

logger = logging.getLogger(__name__)


class GetUsdMetalPricesUseCase:
    def __init__(self, source: IUsdMetalPricesSource) -> None:
        self._source = source

    def execute(self) -> FetchResult[UsdMetalPrices]:
        try:
            prices = self._source.get_usd_prices()
        except Exception as exc:
            logger.exception("[API] USD prices error")
            return FetchFailed(exc)
        if prices is None:
            return Unavailable("Silver, gold or exchange rates unavailable")
        return Fetched(prices)
