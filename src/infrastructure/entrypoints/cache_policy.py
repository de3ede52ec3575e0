"""
Shared-cache (CDN) policies for the price endpoints.

``s-maxage`` is the window in which a cached copy is served without hitting
the app; ``stale-while-revalidate`` is the further window in which the stale
copy is still served while a refresh happens in the background.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class CachePolicy:
    fresh_seconds: int
    stale_seconds: int

    def header(self) -> str:
        return f"public, s-maxage={self.fresh_seconds}, stale-while-revalidate={self.stale_seconds}"


MINUTE_CACHE = CachePolicy(fresh_seconds=60, stale_seconds=120)
HOURLY_CACHE = CachePolicy(fresh_seconds=3600, stale_seconds=7200)
NO_STORE = "no-store"

# Live-polled price endpoint: never cached by browsers or CDNs.
REALTIME_HEADERS = {
    "Cache-Control": "no-store, no-cache, must-revalidate",
    "Pragma": "no-cache",
    "Expires": "0",
}
