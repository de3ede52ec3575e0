"""
Use-case: fetch the estimated Shanghai silver price.
Depends only on Domain ports and entities, no infrastructure imports.
"""

import logging

from src.domain.entities.fetch_result import FetchFailed, Fetched, FetchResult, Unavailable
from src.domain.entities.metal_price import ShanghaiSilverPrice
from src.domain.ports.price_source_port import IShanghaiSilverPriceSource

logger = logging.getLogger(__name__)


class GetShanghaiSilverPriceUseCase:
    def __init__(self, source: IShanghaiSilverPriceSource) -> None:
        self._source = source

    def execute(self) -> FetchResult[ShanghaiSilverPrice]:
        try:
            price = self._source.get_price()
        except Exception as exc:
            logger.exception("Error in shanghai-price API")
            return FetchFailed(exc)
        if price is None:
            return Unavailable("COMEX silver or exchange rates unavailable")
        return Fetched(price)
