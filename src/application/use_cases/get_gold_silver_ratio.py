"""
Use-case: fetch the current gold-silver ratio.
Depends only on Domain ports and entities, no infrastructure imports.
"""

import logging

from src.domain.entities.fetch_result import FetchFailed, Fetched, FetchResult, Unavailable
from src.domain.entities.metal_price import GoldSilverRatio
from src.domain.ports.price_source_port import IGoldSilverRatioSource

logger = logging.getLogger(__name__)


class GetGoldSilverRatioUseCase:
    def __init__(self, source: IGoldSilverRatioSource) -> None:
        self._source = source

    def execute(self) -> FetchResult[GoldSilverRatio]:
        try:
            ratio = self._source.get_ratio()
        except Exception as exc:
            logger.exception("[API] Gold-Silver Ratio error")
            return FetchFailed(exc)
        if ratio is None:
            return Unavailable("Gold, silver or USD/INR price unavailable")
        return Fetched(ratio)
