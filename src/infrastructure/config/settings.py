"""
Runtime configuration read from environment variables (and a local .env file).

    MARKET_TIMEZONE                day boundary for the extremes records (Asia/Kolkata)
    LOG_LEVEL                      DEBUG, INFO, WARNING, ERROR (INFO)
    LOG_DIR                        enables rotating log files when set
    HTTP_TIMEOUT_SECONDS           timeout for FX API calls (10)
    EXTREMES_SNAPSHOT_PATH         persist today's gold extremes to this JSON file when set
    SILVER_EXTREMES_SNAPSHOT_PATH  same for the silver extremes
    GOLD_CACHE_TTL_SECONDS         data-layer cache for the gold price (60)
    RATIO_CACHE_TTL_SECONDS        data-layer cache for the gold-silver ratio (300)
    SHANGHAI_CACHE_TTL_SECONDS     data-layer cache for the Shanghai price (60)
    SILVER_CACHE_TTL_SECONDS       data-layer cache for the INR silver price (60)
    COMBINED_CACHE_TTL_SECONDS     data-layer cache for combined and USD prices (60)
"""

import os
from dataclasses import dataclass
from typing import Mapping, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError


def _float(env: Mapping[str, str], name: str, default: float) -> float:
    raw = env.get(name) or ""
    if not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be a number, got {raw!r}") from exc


@dataclass(frozen=True)
class Settings:
    market_timezone: str = "Asia/Kolkata"
    log_level: str = "INFO"
    log_dir: Optional[str] = None
    http_timeout_seconds: float = 10.0
    extremes_snapshot_path: Optional[str] = None
    silver_extremes_snapshot_path: Optional[str] = None
    gold_cache_ttl_seconds: float = 60.0
    ratio_cache_ttl_seconds: float = 300.0
    shanghai_cache_ttl_seconds: float = 60.0
    silver_cache_ttl_seconds: float = 60.0
    combined_cache_ttl_seconds: float = 60.0

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "Settings":
        """Build settings from *env* (defaults to os.environ).

        Raises:
            ValueError: on a malformed number or an unknown timezone.
        """
        env = os.environ if env is None else env
        settings = cls(
            market_timezone=env.get("MARKET_TIMEZONE") or cls.market_timezone,
            log_level=(env.get("LOG_LEVEL") or cls.log_level).upper(),
            log_dir=env.get("LOG_DIR") or None,
            http_timeout_seconds=_float(env, "HTTP_TIMEOUT_SECONDS", cls.http_timeout_seconds),
            extremes_snapshot_path=env.get("EXTREMES_SNAPSHOT_PATH") or None,
            silver_extremes_snapshot_path=env.get("SILVER_EXTREMES_SNAPSHOT_PATH") or None,
            gold_cache_ttl_seconds=_float(env, "GOLD_CACHE_TTL_SECONDS", cls.gold_cache_ttl_seconds),
            ratio_cache_ttl_seconds=_float(env, "RATIO_CACHE_TTL_SECONDS", cls.ratio_cache_ttl_seconds),
            shanghai_cache_ttl_seconds=_float(
                env, "SHANGHAI_CACHE_TTL_SECONDS", cls.shanghai_cache_ttl_seconds
            ),
            silver_cache_ttl_seconds=_float(env, "SILVER_CACHE_TTL_SECONDS", cls.silver_cache_ttl_seconds),
            combined_cache_ttl_seconds=_float(
                env, "COMBINED_CACHE_TTL_SECONDS", cls.combined_cache_ttl_seconds
            ),
        )
        settings.tz()
        return settings

    def tz(self) -> ZoneInfo:
        try:
            return ZoneInfo(self.market_timezone)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"Unknown MARKET_TIMEZONE: {self.market_timezone!r}") from exc
