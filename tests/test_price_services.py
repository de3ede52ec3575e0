"""Tests for the INR, USD, ratio and Shanghai price services."""

from datetime import datetime, timedelta, timezone
from unittest.mock import Mock

import pytest
from hypothesis import given, strategies as st

from src.application.services.combined_prices_service import (
    CombinedMetalPricesService,
    UsdMetalPricesService,
)
from src.application.services.gold_price_service import GoldPriceService
from src.application.services.gold_silver_ratio_service import GoldSilverRatioService, interpret_ratio
from src.application.services.landed_cost import indian_price_per_gram
from src.application.services.shanghai_silver_service import (
    BEIJING,
    ShanghaiSilverService,
    sge_market_status,
    shanghai_premium,
)
from src.application.services.silver_price_service import SilverPriceService
from src.domain.entities.metal_price import MarketQuote
from src.domain.ports.price_source_port import IGoldSilverRatioSource
from tests.fakes import FakeClock, FakeQuotes, FakeRates

USD_INR = 85.0
USD_CNY = 7.2


class TestLandedCost:
    def test_formula(self):
        expected = 2650.0 * USD_INR / 31.1035 * 1.06 * 1.03 * 1.03
        assert indian_price_per_gram(2650.0, USD_INR) == pytest.approx(expected)


class TestGoldPriceService:
    def _service(self, quotes, rates, clock):
        return GoldPriceService(FakeQuotes(quotes), FakeRates(rates), clock=clock)

    def test_calculates_indian_prices(self, gold_quote, clock):
        service = self._service({"GC=F": gold_quote}, {("USD", "INR"): USD_INR}, clock)

        price = service.get_gold_price()

        per_gram = indian_price_per_gram(2650.0, USD_INR)
        assert price.price_24k_per_gram == round(per_gram, 2)
        assert price.price_24k_per_10_gram == round(per_gram * 10, 2)
        assert price.price_24k_per_tola == round(per_gram * 11.6638, 2)
        assert price.price_24k_per_sovereign == round(per_gram * 8, 2)
        assert price.price_22k_per_gram == pytest.approx(per_gram * 0.916 / 0.999, abs=0.01)
        assert price.price_18k_per_gram == pytest.approx(per_gram * 0.750 / 0.999, abs=0.01)
        assert price.currency == "INR"
        assert price.source == "calculated"
        assert price.comex_usd == 2650.0
        assert price.usd_inr == USD_INR
        assert price.timestamp == clock.now.isoformat()

    def test_change_is_measured_against_previous_close(self, gold_quote, clock):
        service = self._service({"GC=F": gold_quote}, {("USD", "INR"): USD_INR}, clock)

        price = service.get_gold_price()

        today = indian_price_per_gram(2650.0, USD_INR)
        previous = indian_price_per_gram(2600.0, USD_INR)
        assert price.change_24h == round(today - previous, 2)
        assert price.change_percent_24h == pytest.approx((2650 - 2600) / 2600 * 100, abs=0.01)

    def test_high_low_from_day_range(self, gold_quote, clock):
        service = self._service({"GC=F": gold_quote}, {("USD", "INR"): USD_INR}, clock)

        price = service.get_gold_price()

        assert price.high_24h == round(indian_price_per_gram(2670.0, USD_INR), 2)
        assert price.low_24h == round(indian_price_per_gram(2630.0, USD_INR), 2)

    def test_missing_previous_close_and_range(self, clock):
        quote = MarketQuote(symbol="GC=F", price=2650.0)
        service = self._service({"GC=F": quote}, {("USD", "INR"): USD_INR}, clock)

        price = service.get_gold_price()

        assert price.change_24h == 0
        assert price.change_percent_24h == 0
        assert price.high_24h == price.low_24h == price.price_24k_per_gram

    @pytest.mark.parametrize(
        "quotes, rates",
        [
            ({}, {("USD", "INR"): USD_INR}),
            ({"GC=F": MarketQuote(symbol="GC=F", price=2650.0)}, {}),
        ],
    )
    def test_missing_upstream_data_returns_none(self, quotes, rates, clock):
        assert self._service(quotes, rates, clock).get_gold_price() is None


class TestGoldSilverRatio:
    @pytest.mark.parametrize(
        "ratio, interpretation, text_fragment",
        [
            (95.0, "silver_undervalued", "significantly UNDERVALUED"),
            (90.0, "silver_undervalued", "significantly UNDERVALUED"),
            (85.0, "silver_undervalued", "appears UNDERVALUED"),
            (70.0, "normal", "NORMAL range"),
            (50.0, "silver_overvalued", "OVERVALUED"),
            (40.0, "silver_overvalued", "OVERVALUED"),
        ],
    )
    def test_interpretation_thresholds(self, ratio, interpretation, text_fragment):
        kind, text, context, hint = interpret_ratio(ratio)
        assert kind == interpretation
        assert text_fragment in text
        assert f"{ratio:.1f}" in context
        assert hint

    def test_service_computes_ratio(self, gold_quote, silver_quote, clock):
        service = GoldSilverRatioService(
            FakeQuotes({"GC=F": gold_quote, "SI=F": silver_quote}),
            FakeRates({("USD", "INR"): USD_INR}),
            clock=clock,
        )

        result = service.get_ratio()

        assert result.ratio == round(2650.0 / 30.0, 2)
        assert result.interpretation == "silver_undervalued"
        assert result.gold_price_per_oz_usd == 2650.0
        assert result.silver_price_per_oz_usd == 30.0
        assert result.gold_price_per_gram == round(indian_price_per_gram(2650.0, USD_INR), 2)
        assert result.silver_price_per_gram == round(indian_price_per_gram(30.0, USD_INR), 2)
        assert result.usd_inr == USD_INR

    def test_missing_silver_returns_none(self, gold_quote, clock):
        service = GoldSilverRatioService(
            FakeQuotes({"GC=F": gold_quote}),
            FakeRates({("USD", "INR"): USD_INR}),
            clock=clock,
        )
        assert service.get_ratio() is None


def _beijing(day, hour, minute=0):
    return datetime(2026, 1, day, hour, minute, tzinfo=BEIJING)


class TestSgeMarketStatus:
    @pytest.mark.parametrize(
        "now, status, session",
        [
            (_beijing(14, 10), "open", "Day Session (Morning)"),
            (_beijing(14, 14), "open", "Day Session (Afternoon)"),
            (_beijing(14, 22), "open", "Night Session"),
            (_beijing(15, 1), "open", "Night Session"),
            (_beijing(14, 8, 45), "pre-market", "Pre-Market (Day)"),
            (_beijing(14, 20, 45), "pre-market", "Pre-Market (Night)"),
            (_beijing(14, 12), "closed", "Between Sessions"),
            (_beijing(14, 3), "closed", "Between Sessions"),
            (_beijing(17, 10), "closed", "Weekend"),
        ],
    )
    def test_sessions(self, now, status, session):
        assert sge_market_status(now) == (status, session)

    def test_status_uses_beijing_time(self):
        # 02:00 UTC is 10:00 in Beijing.
        now = datetime(2026, 1, 14, 2, 0, tzinfo=timezone.utc)
        assert sge_market_status(now) == ("open", "Day Session (Morning)")


class TestShanghaiPremium:
    @given(hours=st.integers(min_value=0, max_value=24 * 7))
    def test_premium_stays_in_bounds(self, hours):
        now = datetime(2026, 1, 12, tzinfo=timezone.utc) + timedelta(hours=hours)
        assert 0.02 <= shanghai_premium(now) <= 0.08

    def test_asian_hours_bonus_dropped_on_weekends(self):
        weekday = datetime(2026, 1, 14, 3, 0, tzinfo=timezone.utc)
        weekend = datetime(2026, 1, 17, 3, 0, tzinfo=timezone.utc)
        assert shanghai_premium(weekday) - shanghai_premium(weekend) == pytest.approx(0.01)


class TestShanghaiSilverService:
    def _service(self, quote, usd_cny=USD_CNY, usd_inr=USD_INR, now=None):
        clock = FakeClock(now or datetime(2026, 1, 14, 2, 0, tzinfo=timezone.utc))
        quotes = FakeQuotes({"SI=F": quote} if quote else {})
        cny = FakeRates({("USD", "CNY"): usd_cny} if usd_cny else {})
        inr = FakeRates({("USD", "INR"): usd_inr} if usd_inr else {})
        return ShanghaiSilverService(quotes, cny, inr, clock=clock), clock

    def test_calculates_multi_currency_prices(self, silver_quote):
        service, clock = self._service(silver_quote)

        price = service.get_price()

        premium = shanghai_premium(clock.now)
        shanghai_usd = 30.0 * (1 + premium)
        assert price.premium_percent == round(premium * 100, 2)
        assert price.price_per_oz_usd == round(shanghai_usd, 2)
        assert price.premium_usd == round(shanghai_usd - 30.0, 2)
        assert price.price_per_oz_cny == round(shanghai_usd * USD_CNY, 2)
        assert price.price_per_kg_cny == round(shanghai_usd * USD_CNY / 31.1035 * 1000, 2)
        assert price.price_per_gram_inr == round(shanghai_usd / 31.1035 * USD_INR, 2)
        assert price.india_rate_per_gram == round(30.0 * USD_INR / 31.1035 * 1.24, 2)
        assert price.cny_inr == round(USD_INR / USD_CNY, 4)
        assert price.comex_usd == 30.0
        assert price.market_status == "open"
        assert price.market_session == "Day Session (Morning)"
        assert price.is_estimate is True
        assert "sge.com.cn" in price.official_sge_url

    def test_change_from_previous_close(self, silver_quote):
        service, _ = self._service(silver_quote)
        price = service.get_price()
        assert price.change_24h_percent == round((30.0 - 29.5) / 29.5 * 100, 2)

    @pytest.mark.parametrize("comex", [10.0, 150.0, 200.0])
    def test_comex_outside_sanity_range_returns_none(self, comex):
        service, _ = self._service(MarketQuote(symbol="SI=F", price=comex))
        assert service.get_price() is None

    def test_missing_quote_returns_none(self):
        service, _ = self._service(None)
        assert service.get_price() is None

    @pytest.mark.parametrize("usd_cny, usd_inr", [(None, USD_INR), (USD_CNY, None)])
    def test_missing_exchange_rate_returns_none(self, silver_quote, usd_cny, usd_inr):
        service, _ = self._service(silver_quote, usd_cny=usd_cny, usd_inr=usd_inr)
        assert service.get_price() is None


class TestSilverPriceService:
    def _service(self, quote, usd_inr=USD_INR, clock=None):
        quotes = FakeQuotes({"SI=F": quote} if quote else {})
        rates = FakeRates({("USD", "INR"): usd_inr} if usd_inr else {})
        return SilverPriceService(quotes, rates, clock=clock or FakeClock(datetime(2026, 1, 14, tzinfo=timezone.utc)))

    def test_calculates_indian_units(self, silver_quote):
        price = self._service(silver_quote).get_silver_price()

        per_gram = indian_price_per_gram(30.0, USD_INR)
        assert price.price_per_gram == round(per_gram, 2)
        assert price.price_per_10_gram == round(per_gram * 10, 2)
        assert price.price_per_tola == round(per_gram * 11.6638, 2)
        assert price.price_per_kg == float(round(per_gram * 1000))
        assert price.currency == "INR"
        assert price.source == "calculated"
        assert price.comex_usd == 30.0
        assert price.usd_inr == USD_INR
        assert price.timestamp == "2026-01-14T00:00:00+00:00"

    def test_change_is_measured_against_previous_close(self, silver_quote):
        price = self._service(silver_quote).get_silver_price()

        previous = indian_price_per_gram(29.5, USD_INR)
        change = indian_price_per_gram(30.0, USD_INR) - previous
        assert price.change_24h == round(change, 2)
        assert price.change_percent_24h == round(change / previous * 100, 2)

    def test_high_low_fall_back_to_current_price(self, silver_quote):
        price = self._service(silver_quote).get_silver_price()
        assert price.high_24h == price.low_24h == price.price_per_gram

    def test_high_low_from_day_range(self):
        quote = MarketQuote(symbol="SI=F", price=30.0, day_high=31.0, day_low=29.0)
        price = self._service(quote).get_silver_price()
        assert price.high_24h == round(indian_price_per_gram(31.0, USD_INR), 2)
        assert price.low_24h == round(indian_price_per_gram(29.0, USD_INR), 2)
        assert price.change_24h == 0.0

    @pytest.mark.parametrize("has_quote, usd_inr", [(False, USD_INR), (True, None)])
    def test_missing_upstream_data_returns_none(self, silver_quote, has_quote, usd_inr):
        service = self._service(silver_quote if has_quote else None, usd_inr=usd_inr)
        assert service.get_silver_price() is None


USD_RATES = {("USD", "INR"): USD_INR, ("USD", "EUR"): 0.92, ("USD", "GBP"): 0.79}


class TestCombinedMetalPricesService:
    def _quotes(self, gold_quote, silver_quote):
        return FakeQuotes({"GC=F": gold_quote, "SI=F": silver_quote})

    def test_summaries_for_both_metals(self, gold_quote, silver_quote, clock):
        service = CombinedMetalPricesService(self._quotes(gold_quote, silver_quote), FakeRates(USD_RATES), clock=clock)

        prices = service.get_combined_prices()

        gold_gram = indian_price_per_gram(2650.0, USD_INR)
        silver_gram = indian_price_per_gram(30.0, USD_INR)
        assert prices.gold.price_per_gram == round(gold_gram, 2)
        assert prices.gold.price_per_100_gram == round(gold_gram * 100, 2)
        assert prices.gold.price_per_oz_usd == 2650.0
        assert prices.silver.price_per_kg == float(round(silver_gram * 1000))
        assert prices.silver.price_per_tola == round(silver_gram * 11.6638, 2)
        assert (prices.usd_inr, prices.usd_eur, prices.usd_gbp) == (USD_INR, 0.92, 0.79)
        assert prices.timestamp == clock.now.isoformat()

    def test_ratio_is_none_without_a_ratio_source(self, gold_quote, silver_quote, clock):
        service = CombinedMetalPricesService(self._quotes(gold_quote, silver_quote), FakeRates(USD_RATES), clock=clock)
        assert service.get_combined_prices().ratio is None

    def test_ratio_comes_from_ratio_source(self, gold_quote, silver_quote, gold_silver_ratio, clock):
        ratio_source = Mock(spec=IGoldSilverRatioSource)
        ratio_source.get_ratio.return_value = gold_silver_ratio
        service = CombinedMetalPricesService(
            self._quotes(gold_quote, silver_quote), FakeRates(USD_RATES), ratio_source=ratio_source, clock=clock
        )

        assert service.get_combined_prices().ratio is gold_silver_ratio

    def test_ratio_source_without_data_leaves_ratio_empty(self, gold_quote, silver_quote, clock):
        ratio_source = Mock(spec=IGoldSilverRatioSource)
        ratio_source.get_ratio.return_value = None
        service = CombinedMetalPricesService(
            self._quotes(gold_quote, silver_quote), FakeRates(USD_RATES), ratio_source=ratio_source, clock=clock
        )

        prices = service.get_combined_prices()

        assert prices is not None
        assert prices.ratio is None

    @pytest.mark.parametrize("missing", [("USD", "INR"), ("USD", "EUR"), ("USD", "GBP")])
    def test_any_missing_rate_returns_none(self, gold_quote, silver_quote, missing):
        rates = {pair: rate for pair, rate in USD_RATES.items() if pair != missing}
        service = CombinedMetalPricesService(self._quotes(gold_quote, silver_quote), FakeRates(rates))
        assert service.get_combined_prices() is None

    def test_missing_quote_returns_none(self, gold_quote):
        service = CombinedMetalPricesService(FakeQuotes({"GC=F": gold_quote}), FakeRates(USD_RATES))
        assert service.get_combined_prices() is None


class TestUsdMetalPricesService:
    def test_usd_units_and_inr_equivalents(self, gold_quote, silver_quote, clock):
        quotes = FakeQuotes({"GC=F": gold_quote, "SI=F": silver_quote})
        service = UsdMetalPricesService(quotes, FakeRates(USD_RATES), clock=clock)

        prices = service.get_usd_prices()

        silver, gold = prices.silver, prices.gold
        assert silver.price_per_oz == 30.0
        assert silver.price_per_gram == round(30.0 / 31.1035, 3)
        assert silver.price_per_kg == round(30.0 / 31.1035 * 1000, 2)
        assert silver.change_24h == 0.5
        assert silver.change_percent_24h == round(0.5 / 29.5 * 100, 2)
        assert silver.high_24h == silver.low_24h == 30.0
        assert silver.source == gold.source == "COMEX"
        assert silver.price_per_oz_inr == round(30.0 * USD_INR, 2)
        assert silver.price_per_gram_inr == round(indian_price_per_gram(30.0, USD_INR), 2)
        assert (silver.usd_eur, silver.usd_gbp) == (0.92, 0.79)
        assert gold.price_per_oz == 2650.0
        assert gold.price_per_gram == round(2650.0 / 31.1035, 2)
        assert prices.gold_silver_ratio == round(2650.0 / 30.0, 2)
        assert prices.timestamp == silver.timestamp == gold.timestamp == clock.now.isoformat()

    def test_day_range_bounds_silver_high_low(self, gold_quote):
        silver = MarketQuote(symbol="SI=F", price=30.0, day_high=30.8, day_low=29.1)
        service = UsdMetalPricesService(FakeQuotes({"GC=F": gold_quote, "SI=F": silver}), FakeRates(USD_RATES))

        prices = service.get_usd_prices()

        assert prices.silver.high_24h == 30.8
        assert prices.silver.low_24h == 29.1
        assert prices.silver.change_24h == 0.0

    def test_missing_rate_returns_none(self, gold_quote, silver_quote):
        rates = {("USD", "INR"): USD_INR, ("USD", "EUR"): 0.92}
        service = UsdMetalPricesService(FakeQuotes({"GC=F": gold_quote, "SI=F": silver_quote}), FakeRates(rates))
        assert service.get_usd_prices() is None

    def test_missing_gold_returns_none(self, silver_quote):
        service = UsdMetalPricesService(FakeQuotes({"SI=F": silver_quote}), FakeRates(USD_RATES))
        assert service.get_usd_prices() is None
