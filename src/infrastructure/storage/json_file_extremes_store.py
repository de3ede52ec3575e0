"""
Infrastructure adapter: JSON snapshot file + in-memory record → IDailyExtremesStore.

The live record is mirrored to a single JSON file after every update so a
restart on the same day keeps the day's open/high/low. A snapshot from an
earlier day is ignored on load. Write failures are logged and never fail the
update itself.
"""

import json
import logging
import math
import threading
from datetime import date, datetime
from pathlib import Path

from src.domain.entities.daily_extremes import DailyExtremes
from src.infrastructure.storage.in_memory_extremes_store import InMemoryDailyExtremesStore

logger = logging.getLogger(__name__)


def _to_json(record: DailyExtremes) -> dict:
    return {
        "date": record.date.isoformat(),
        "openPrice": record.open_price,
        "high": record.high,
        "highTime": record.high_time.isoformat(),
        "low": record.low,
        "lowTime": record.low_time.isoformat(),
        "lastUpdated": record.last_updated.isoformat(),
    }


def _aware(value: str, field: str) -> datetime:
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None or parsed.utcoffset() is None:
        raise ValueError(f"{field} has no UTC offset: {value!r}")
    return parsed


def _from_json(data: dict) -> DailyExtremes:
    """Parse a snapshot.

    Raises:
        ValueError: on naive timestamps, non-finite prices, or a record whose
                    open lies outside [low, high].
    """
    record = DailyExtremes(
        date=date.fromisoformat(data["date"]),
        open_price=float(data["openPrice"]),
        high=float(data["high"]),
        high_time=_aware(data["highTime"], "highTime"),
        low=float(data["low"]),
        low_time=_aware(data["lowTime"], "lowTime"),
        last_updated=_aware(data["lastUpdated"], "lastUpdated"),
    )
    if not all(math.isfinite(v) for v in (record.open_price, record.high, record.low)):
        raise ValueError("snapshot prices must be finite")
    if not record.low <= record.open_price <= record.high:
        raise ValueError(
            f"inconsistent snapshot: low={record.low} open={record.open_price} high={record.high}"
        )
    return record


class JsonFileDailyExtremesStore(InMemoryDailyExtremesStore):
    """In-memory extremes store that also persists today's record to *path*."""

    def __init__(self, path: str, **kwargs) -> None:
        super().__init__(**kwargs)
        self._path = Path(path)
        self._write_lock = threading.Lock()
        self._load()

    def _load(self) -> None:
        if not self._path.exists():
            return
        try:
            record = _from_json(json.loads(self._path.read_text(encoding="utf-8")))
        except (OSError, ValueError, KeyError, TypeError) as exc:
            logger.warning("Ignoring unreadable extremes snapshot %s: %s", self._path, exc)
            return
        self._restore(record)
        if self.read() is not None:
            logger.info("Restored extremes for %s from %s", record.date, self._path)

    def _after_update(self, record: DailyExtremes) -> None:
        with self._write_lock:
            # Another thread may have written a newer record while we waited.
            latest = self.read() or record
            try:
                self._path.parent.mkdir(parents=True, exist_ok=True)
                self._path.write_text(json.dumps(_to_json(latest), indent=2), encoding="utf-8")
            except OSError as exc:
                logger.error("Error writing extremes snapshot to %s: %s", self._path, exc)
