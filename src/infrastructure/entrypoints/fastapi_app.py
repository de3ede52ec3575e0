"""
FastAPI entry point for the precious-metal price API.

This module is the Composition Root: it reads Settings, wires all
infrastructure adapters, and passes them to the application layer. Use cases
live on ``app.state`` and reach the routes through FastAPI dependencies;
``create_app`` accepts any already-wired use cases.

Routes are plain ``def`` functions: FastAPI runs them in its threadpool, and
the extremes stores serialize concurrent updates with their own locks.

Run locally:
    uvicorn src.infrastructure.entrypoints.fastapi_app:app --reload --port 8000
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, Optional, Sequence

from dotenv import load_dotenv
from fastapi import Depends, FastAPI, Request, Response
from fastapi.responses import JSONResponse

load_dotenv()

from src.application.services.combined_prices_service import (
    CombinedMetalPricesService,
    UsdMetalPricesService,
)
from src.application.services.gold_price_service import GoldPriceService
from src.application.services.gold_silver_ratio_service import GoldSilverRatioService
from src.application.services.shanghai_silver_service import ShanghaiSilverService
from src.application.services.silver_price_service import SilverPriceService
from src.application.use_cases.get_combined_metal_prices import GetCombinedMetalPricesUseCase
from src.application.use_cases.get_gold_price import GetGoldPriceUseCase
from src.application.use_cases.get_gold_silver_ratio import GetGoldSilverRatioUseCase
from src.application.use_cases.get_shanghai_silver_price import GetShanghaiSilverPriceUseCase
from src.application.use_cases.get_silver_price import GetSilverPriceUseCase
from src.application.use_cases.get_usd_metal_prices import GetUsdMetalPricesUseCase
from src.domain.entities.fetch_result import Fetched, Unavailable
from src.domain.ports.extremes_store_port import IDailyExtremesStore
from src.infrastructure.cache.ttl_cache import (
    CachedCombinedMetalPricesSource,
    CachedGoldPriceSource,
    CachedGoldSilverRatioSource,
    CachedShanghaiSilverPriceSource,
    CachedSilverPriceSource,
    CachedUsdMetalPricesSource,
)
from src.infrastructure.config.logging_config import setup_logging
from src.infrastructure.config.settings import Settings
from src.infrastructure.entrypoints.cache_policy import (
    HOURLY_CACHE,
    MINUTE_CACHE,
    NO_STORE,
    REALTIME_HEADERS,
)
from src.infrastructure.entrypoints.schemas import (
    CombinedMetalPricesResponse,
    DailyExtremesResponse,
    ErrorResponse,
    GoldPriceResponse,
    GoldSilverRatioResponse,
    ShanghaiSilverPriceResponse,
    SilverPriceResponse,
    UsdMetalPricesResponse,
)
from src.infrastructure.market_data.exchange_rate_adapters import (
    FallbackExchangeRateProvider,
    FrankfurterExchangeRateProvider,
    OpenErApiExchangeRateProvider,
)
from src.infrastructure.market_data.yfinance_adapter import (
    YFinanceExchangeRateProvider,
    YFinanceMarketQuoteProvider,
)
from src.infrastructure.storage.in_memory_extremes_store import InMemoryDailyExtremesStore
from src.infrastructure.storage.json_file_extremes_store import JsonFileDailyExtremesStore

logger = logging.getLogger(__name__)

LIVE_DATA_UNAVAILABLE = "Unable to fetch live price data from external sources. Please try again later."


def _error(status_code: int, error: str, message: Optional[str] = None) -> JSONResponse:
    body = ErrorResponse(error=error, message=message).model_dump(exclude_none=True)
    return JSONResponse(body, status_code=status_code)


# ---------------------------------------------------------------------------
# Dependencies
# ---------------------------------------------------------------------------
def get_gold_use_case(request: Request) -> GetGoldPriceUseCase:
    return request.app.state.gold_use_case


def get_silver_use_case(request: Request) -> GetSilverPriceUseCase:
    return request.app.state.silver_use_case


def get_ratio_use_case(request: Request) -> GetGoldSilverRatioUseCase:
    return request.app.state.ratio_use_case


def get_shanghai_use_case(request: Request) -> GetShanghaiSilverPriceUseCase:
    return request.app.state.shanghai_use_case


def get_combined_use_case(request: Request) -> GetCombinedMetalPricesUseCase:
    return request.app.state.combined_use_case


def get_usd_use_case(request: Request) -> GetUsdMetalPricesUseCase:
    return request.app.state.usd_use_case


def get_extremes_store(request: Request) -> IDailyExtremesStore:
    return request.app.state.extremes_store


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------
def gold_price(
    response: Response,
    use_case: GetGoldPriceUseCase = Depends(get_gold_use_case),
):
    """Live INR gold price (24K/22K/18K) with today's tracked open/high/low."""
    result = use_case.execute()
    if isinstance(result, Unavailable):
        return _error(
            503,
            "Service unavailable",
            "Unable to fetch live gold price data from external sources. Please try again later.",
        )
    if not isinstance(result, Fetched):
        return _error(500, "Failed to fetch gold price")

    response.headers["Cache-Control"] = MINUTE_CACHE.header()
    return GoldPriceResponse.from_report(result.value)


def silver_price(
    response: Response,
    use_case: GetSilverPriceUseCase = Depends(get_silver_use_case),
):
    """Live INR silver price with today's tracked open/high/low; polled by clients."""
    result = use_case.execute()
    if isinstance(result, Unavailable):
        return _error(
            503,
            "Service unavailable",
            "Unable to fetch live silver price data from external sources. Please try again later.",
        )
    if not isinstance(result, Fetched):
        return _error(500, "Failed to fetch price")

    response.headers.update(REALTIME_HEADERS)
    return SilverPriceResponse.from_report(result.value)


def gold_silver_ratio(
    response: Response,
    use_case: GetGoldSilverRatioUseCase = Depends(get_ratio_use_case),
):
    """Current gold-silver ratio with interpretation."""
    result = use_case.execute()
    if isinstance(result, Unavailable):
        return _error(
            503,
            "Unable to calculate gold-silver ratio",
            "Price data temporarily unavailable. Please try again.",
        )
    if not isinstance(result, Fetched):
        return _error(500, "Internal server error", "Failed to fetch price data")

    response.headers["Cache-Control"] = HOURLY_CACHE.header()
    return GoldSilverRatioResponse.from_entity(result.value)


def shanghai_price(
    response: Response,
    use_case: GetShanghaiSilverPriceUseCase = Depends(get_shanghai_use_case),
):
    """Estimated Shanghai silver price in CNY, USD and INR with SGE market status."""
    result = use_case.execute()
    if isinstance(result, Unavailable):
        return _error(500, "Failed to fetch Shanghai silver price")
    if not isinstance(result, Fetched):
        return _error(500, "Internal server error")

    response.headers["Cache-Control"] = HOURLY_CACHE.header()
    return ShanghaiSilverPriceResponse.from_entity(result.value)


def combined_prices(
    response: Response,
    use_case: GetCombinedMetalPricesUseCase = Depends(get_combined_use_case),
):
    """Gold and silver INR prices side by side with the ratio and FX rates."""
    result = use_case.execute()
    if isinstance(result, Unavailable):
        return _error(503, "Service unavailable", LIVE_DATA_UNAVAILABLE)
    if not isinstance(result, Fetched):
        return _error(500, "Internal server error", "Failed to fetch price data")

    response.headers["Cache-Control"] = MINUTE_CACHE.header()
    return CombinedMetalPricesResponse.from_entity(result.value)


def usd_prices(
    response: Response,
    use_case: GetUsdMetalPricesUseCase = Depends(get_usd_use_case),
):
    """Silver and gold in USD per oz/gram/kg, with INR equivalents."""
    result = use_case.execute()
    if isinstance(result, Unavailable):
        return _error(503, "Service unavailable", LIVE_DATA_UNAVAILABLE)
    if not isinstance(result, Fetched):
        return _error(500, "Internal server error", "Failed to fetch USD price data")

    response.headers["Cache-Control"] = MINUTE_CACHE.header()
    return UsdMetalPricesResponse.from_entity(result.value)


def gold_extremes(
    response: Response,
    store: IDailyExtremesStore = Depends(get_extremes_store),
):
    """Today's tracked 24K open/high/low without triggering an upstream fetch."""
    extremes = store.read()
    if extremes is None:
        return _error(404, "No extremes recorded today")

    response.headers["Cache-Control"] = NO_STORE
    return DailyExtremesResponse.from_entity(extremes)


async def health():
    return {"status": "ok"}


_ERRORS = {500: {"model": ErrorResponse}, 503: {"model": ErrorResponse}}


def create_app(
    gold_use_case: GetGoldPriceUseCase,
    ratio_use_case: GetGoldSilverRatioUseCase,
    shanghai_use_case: GetShanghaiSilverPriceUseCase,
    extremes_store: IDailyExtremesStore,
    silver_use_case: GetSilverPriceUseCase,
    combined_use_case: GetCombinedMetalPricesUseCase,
    usd_use_case: GetUsdMetalPricesUseCase,
    resources: Sequence[Any] = (),
) -> FastAPI:
    """Build the FastAPI app around already-wired use cases.

    Args:
        resources: Objects with a ``close()`` method (HTTP clients) released
                   when the app shuts down.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        logger.info("Application shutting down, closing %d resources", len(resources))
        for resource in resources:
            resource.close()

    app = FastAPI(title="Precious Metal Price API", lifespan=lifespan)
    app.state.gold_use_case = gold_use_case
    app.state.silver_use_case = silver_use_case
    app.state.ratio_use_case = ratio_use_case
    app.state.shanghai_use_case = shanghai_use_case
    app.state.combined_use_case = combined_use_case
    app.state.usd_use_case = usd_use_case
    app.state.extremes_store = extremes_store

    app.add_api_route(
        "/api/gold-price", gold_price, methods=["GET"],
        response_model=GoldPriceResponse, responses=_ERRORS,
    )
    app.add_api_route(
        "/api/gold-price/extremes", gold_extremes, methods=["GET"],
        response_model=DailyExtremesResponse, responses={404: {"model": ErrorResponse}},
    )
    app.add_api_route(
        "/api/price", silver_price, methods=["GET"],
        response_model=SilverPriceResponse, responses=_ERRORS,
    )
    app.add_api_route(
        "/api/gold-silver-ratio", gold_silver_ratio, methods=["GET"],
        response_model=GoldSilverRatioResponse, responses=_ERRORS,
    )
    app.add_api_route(
        "/api/shanghai-price", shanghai_price, methods=["GET"],
        response_model=ShanghaiSilverPriceResponse, responses={500: {"model": ErrorResponse}},
    )
    app.add_api_route(
        "/api/combined-prices", combined_prices, methods=["GET"],
        response_model=CombinedMetalPricesResponse, responses=_ERRORS,
    )
    app.add_api_route(
        "/api/silver-price-usd", usd_prices, methods=["GET"],
        response_model=UsdMetalPricesResponse, responses=_ERRORS,
    )
    app.add_api_route("/health", health, methods=["GET"])
    return app


def _extremes_store(path: Optional[str], tz, label: str) -> IDailyExtremesStore:
    if path:
        return JsonFileDailyExtremesStore(path, tz=tz, label=label)
    return InMemoryDailyExtremesStore(tz=tz, label=label)


def build_app(settings: Settings) -> FastAPI:
    """Wire every adapter from *settings* and return the app."""
    tz = settings.tz()
    gold_store = _extremes_store(settings.extremes_snapshot_path, tz, "gold 24K/gram")
    silver_store = _extremes_store(settings.silver_extremes_snapshot_path, tz, "silver/gram")

    quotes = YFinanceMarketQuoteProvider()
    frankfurter = FrankfurterExchangeRateProvider(timeout=settings.http_timeout_seconds)
    open_er_api = OpenErApiExchangeRateProvider(timeout=settings.http_timeout_seconds)
    yahoo_fx = YFinanceExchangeRateProvider(quotes)
    usd_fx = FallbackExchangeRateProvider([frankfurter, open_er_api, yahoo_fx])

    gold_source = CachedGoldPriceSource(
        GoldPriceService(quotes, frankfurter),
        settings.gold_cache_ttl_seconds,
    )
    silver_source = CachedSilverPriceSource(
        SilverPriceService(quotes, frankfurter),
        settings.silver_cache_ttl_seconds,
    )
    ratio_source = CachedGoldSilverRatioSource(
        GoldSilverRatioService(quotes, frankfurter),
        settings.ratio_cache_ttl_seconds,
    )
    shanghai_source = CachedShanghaiSilverPriceSource(
        ShanghaiSilverService(
            quotes,
            usd_cny=FallbackExchangeRateProvider([yahoo_fx, frankfurter, open_er_api], valid_range=(5, 10)),
            usd_inr=FallbackExchangeRateProvider([frankfurter, open_er_api, yahoo_fx], valid_range=(70, 100)),
        ),
        settings.shanghai_cache_ttl_seconds,
    )
    combined_source = CachedCombinedMetalPricesSource(
        CombinedMetalPricesService(quotes, usd_fx, ratio_source=ratio_source),
        settings.combined_cache_ttl_seconds,
    )
    usd_source = CachedUsdMetalPricesSource(
        UsdMetalPricesService(quotes, usd_fx),
        settings.combined_cache_ttl_seconds,
    )

    return create_app(
        gold_use_case=GetGoldPriceUseCase(gold_source, gold_store),
        ratio_use_case=GetGoldSilverRatioUseCase(ratio_source),
        shanghai_use_case=GetShanghaiSilverPriceUseCase(shanghai_source),
        extremes_store=gold_store,
        silver_use_case=GetSilverPriceUseCase(silver_source, silver_store),
        combined_use_case=GetCombinedMetalPricesUseCase(combined_source),
        usd_use_case=GetUsdMetalPricesUseCase(usd_source),
        resources=[frankfurter, open_er_api],
    )


# ---------------------------------------------------------------------------
# Composition Root: wire all dependencies once at startup
# ---------------------------------------------------------------------------
_settings = Settings.from_env()
setup_logging(_settings.log_level, _settings.log_dir)
app = build_app(_settings)
