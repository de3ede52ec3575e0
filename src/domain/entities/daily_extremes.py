"""
Domain entity for the daily open/high/low record of a single price series.
Zero external dependencies, pure Python dataclasses only.
"""

from dataclasses import dataclass
from datetime import date, datetime


@dataclass(frozen=True)
class DailyExtremes:
    date: date
    open_price: float
    high: float
    high_time: datetime
    low: float
    low_time: datetime
    last_updated: datetime


class InvalidPriceError(ValueError):
    """Raised when a price cannot be recorded (NaN or infinite)."""
