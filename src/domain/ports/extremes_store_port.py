"""
Port (interface) for the daily price-extremes store.
Infrastructure adapters (e.g. InMemoryDailyExtremesStore) must implement this interface.
"""

from abc import ABC, abstractmethod
from typing import Optional

from src.domain.entities.daily_extremes import DailyExtremes


class IDailyExtremesStore(ABC):
    @abstractmethod
    def update(self, current_price: float) -> DailyExtremes:
        """Record *current_price* against today's open/high/low and return the new record.

        The read-compare-write sequence is atomic: concurrent callers never
        observe low > high, and only one caller creates the day's record.

        Raises:
            InvalidPriceError: if *current_price* is NaN or infinite.
        """
        ...

    @abstractmethod
    def read(self) -> Optional[DailyExtremes]:
        """Return today's record, or None if nothing has been recorded today."""
        ...
