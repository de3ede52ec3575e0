"""Shared fixtures for the price API tests."""

from datetime import datetime, timezone

import pytest

from src.application.services.combined_prices_service import (
    CombinedMetalPricesService,
    UsdMetalPricesService,
)
from src.application.services.gold_price_service import GoldPriceService
from src.application.services.gold_silver_ratio_service import GoldSilverRatioService
from src.application.services.shanghai_silver_service import ShanghaiSilverService
from src.application.services.silver_price_service import SilverPriceService
from src.domain.entities.metal_price import MarketQuote
from tests.fakes import IST, FakeClock, FakeQuotes, FakeRates


@pytest.fixture
def clock():
    """Clock starting at 10:00 IST on a Wednesday."""
    return FakeClock(datetime(2026, 1, 14, 10, 0, tzinfo=IST))


@pytest.fixture
def gold_quote():
    return MarketQuote(
        symbol="GC=F",
        price=2650.0,
        previous_close=2600.0,
        day_high=2670.0,
        day_low=2630.0,
    )


@pytest.fixture
def silver_quote():
    return MarketQuote(symbol="SI=F", price=30.0, previous_close=29.5)


@pytest.fixture
def gold_price(gold_quote, clock):
    service = GoldPriceService(FakeQuotes({"GC=F": gold_quote}), FakeRates({("USD", "INR"): 85.0}), clock=clock)
    return service.get_gold_price()


@pytest.fixture
def gold_silver_ratio(gold_quote, silver_quote, clock):
    service = GoldSilverRatioService(
        FakeQuotes({"GC=F": gold_quote, "SI=F": silver_quote}),
        FakeRates({("USD", "INR"): 85.0}),
        clock=clock,
    )
    return service.get_ratio()


@pytest.fixture
def shanghai_silver_price(silver_quote):
    service = ShanghaiSilverService(
        FakeQuotes({"SI=F": silver_quote}),
        FakeRates({("USD", "CNY"): 7.2}),
        FakeRates({("USD", "INR"): 85.0}),
        clock=FakeClock(datetime(2026, 1, 14, 2, 0, tzinfo=timezone.utc)),
    )
    return service.get_price()


@pytest.fixture
def usd_rates():
    return FakeRates({("USD", "INR"): 85.0, ("USD", "EUR"): 0.92, ("USD", "GBP"): 0.79})


@pytest.fixture
def silver_price(silver_quote, clock):
    service = SilverPriceService(FakeQuotes({"SI=F": silver_quote}), FakeRates({("USD", "INR"): 85.0}), clock=clock)
    return service.get_silver_price()


@pytest.fixture
def combined_prices(gold_quote, silver_quote, usd_rates, clock):
    service = CombinedMetalPricesService(
        FakeQuotes({"GC=F": gold_quote, "SI=F": silver_quote}), usd_rates, clock=clock
    )
    return service.get_combined_prices()


@pytest.fixture
def usd_prices(gold_quote, silver_quote, usd_rates, clock):
    service = UsdMetalPricesService(FakeQuotes({"GC=F": gold_quote, "SI=F": silver_quote}), usd_rates, clock=clock)
    return service.get_usd_prices()
