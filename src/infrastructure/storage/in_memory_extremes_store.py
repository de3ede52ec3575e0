"""
Infrastructure adapter: process-local memory → IDailyExtremesStore.

The live record is keyed by the calendar date in the store's timezone; the
first update after a date change replaces it. All state transitions happen
under a single threading.Lock, so FastAPI's threadpool workers can call
update() concurrently.
"""

import logging
import math
import threading
from dataclasses import replace
from datetime import datetime, timezone, tzinfo
from typing import Callable, Optional

from src.domain.entities.daily_extremes import DailyExtremes, InvalidPriceError
from src.domain.ports.extremes_store_port import IDailyExtremesStore

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


class InMemoryDailyExtremesStore(IDailyExtremesStore):
    """Holds today's open/high/low for one price series."""

    def __init__(
        self,
        tz: tzinfo = timezone.utc,
        clock: Optional[Clock] = None,
        label: str = "price",
    ) -> None:
        """
        Args:
            tz:    Timezone whose calendar date defines "today".
            clock: Zero-argument callable returning the current time. Naive
                   datetimes are interpreted in *tz*. Defaults to the system clock.
            label: Series name used in log messages.
        """
        self._tz = tz
        self._clock = clock or (lambda: datetime.now(tz))
        self._label = label
        self._lock = threading.Lock()
        self._record: Optional[DailyExtremes] = None

    def _now(self) -> datetime:
        now = self._clock()
        if now.tzinfo is None:
            return now.replace(tzinfo=self._tz)
        return now.astimezone(self._tz)

    def _now_for(self, record: Optional[DailyExtremes]) -> datetime:
        """Current time, never earlier than the live record's last update.

        A wall clock stepping backwards (including across midnight) keeps the
        live record instead of opening a new day.
        """
        now = self._now()
        if record is not None and now < record.last_updated:
            return record.last_updated
        return now

    def update(self, current_price: float) -> DailyExtremes:
        price = float(current_price)
        if not math.isfinite(price):
            raise InvalidPriceError(f"Cannot record non-finite {self._label}: {current_price!r}")

        with self._lock:
            record = self._record
            now = self._now_for(record)

            if record is None or record.date != now.date():
                record = DailyExtremes(
                    date=now.date(),
                    open_price=price,
                    high=price,
                    high_time=now,
                    low=price,
                    low_time=now,
                    last_updated=now,
                )
                logger.info("New day %s started for %s. Open: %.2f", record.date, self._label, price)
            else:
                changes = {"last_updated": now}
                if price > record.high:
                    logger.info("New %s high: %.2f (was %.2f)", self._label, price, record.high)
                    changes.update(high=price, high_time=now)
                if price < record.low:
                    logger.info("New %s low: %.2f (was %.2f)", self._label, price, record.low)
                    changes.update(low=price, low_time=now)
                record = replace(record, **changes)

            self._record = record

        self._after_update(record)
        return record

    def read(self) -> Optional[DailyExtremes]:
        with self._lock:
            record = self._record
            if record is None or record.date != self._now_for(record).date():
                return None
            return record

    def _after_update(self, record: DailyExtremes) -> None:
        """Hook called outside the lock after every successful update."""

    def _restore(self, record: DailyExtremes) -> None:
        with self._lock:
            if record.date == self._now().date():
                self._record = record
