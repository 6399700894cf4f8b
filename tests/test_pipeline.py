"""Tests for the config-driven batch runner and its parallel variant."""

import logging

import pandas as pd
import pytest

from stock_indicators.configs import INDICATOR_PARAMS, IndicatorsConfig
from stock_indicators.exceptions import ConfigurationError, DataValidationError
from stock_indicators.indicators import (
    INDICATORS,
    compute_indicator,
    compute_indicators,
    compute_indicators_parallel,
    donchian_channels,
    relative_strength_index,
)
from stock_indicators.models.enums import InputName
from tests.utils import (
    DataPattern,
    SyntheticDataGenerator,
    assert_valid_result,
    generate_edge_case_data,
    generate_trend_data,
)

MARKET_SHAPES = {
    "extreme_move": lambda: generate_edge_case_data(150, "extreme_move"),
    "downtrend": lambda: generate_trend_data(150, trend_pct=0.01, direction="down"),
    "uptrend": lambda: generate_trend_data(150, trend_pct=0.01, direction="up"),
    "high_volatility": lambda: SyntheticDataGenerator(seed=7).generate_ohlcv(150, pattern=DataPattern.HIGH_VOLATILITY),
    "low_volatility": lambda: SyntheticDataGenerator(seed=7).generate_ohlcv(150, pattern=DataPattern.LOW_VOLATILITY),
}


def make_config(**kwargs):
    indicators = kwargs.pop(
        "indicators",
        [
            {"name": "rsi14", "indicator": "rsi"},
            {"name": "dc10", "indicator": "donchian_channels", "params": {"length": 10}},
        ],
    )
    return IndicatorsConfig(indicators=indicators, **kwargs)


class TestRegistry:
    """Tests for the indicator registry."""

    def test_registry_matches_parameter_models(self):
        assert set(INDICATORS) == set(INDICATOR_PARAMS)

    @pytest.mark.parametrize("indicator", sorted(INDICATOR_PARAMS))
    def test_every_indicator_runs_with_defaults(self, indicator, ohlcv):
        result = compute_indicator(indicator, ohlcv)
        assert_valid_result(result, len(ohlcv))

    @pytest.mark.parametrize("indicator", sorted(INDICATOR_PARAMS))
    def test_every_indicator_handles_empty_input(self, indicator, empty_ohlcv):
        result = compute_indicator(indicator, empty_ohlcv)
        assert len(result) == 0
        assert result.last() == {}

    def test_unknown_indicator(self, ohlcv):
        with pytest.raises(ConfigurationError, match="Unknown indicator"):
            compute_indicator("macd", ohlcv)

    def test_params_forwarded(self, ohlcv):
        result = compute_indicator("rsi", ohlcv, precision=2, length=5)
        expected = relative_strength_index(ohlcv, precision=2, length=5)
        pd.testing.assert_frame_equal(result.to_frame(), expected.to_frame())


class TestComputeIndicators:
    """Tests for compute_indicators."""

    def test_results_in_request_order(self, ohlcv):
        results = compute_indicators(ohlcv, make_config())
        assert list(results) == ["rsi14", "dc10"]
        pd.testing.assert_frame_equal(results["rsi14"].to_frame(), relative_strength_index(ohlcv).to_frame())
        pd.testing.assert_frame_equal(
            results["dc10"].to_frame(), donchian_channels(ohlcv, length=10).to_frame()
        )

    def test_config_input_and_precision_applied(self, ohlcv):
        config = make_config(input_name=InputName.TYPICAL_PRICE, precision=2)
        results = compute_indicators(ohlcv, config)
        expected = relative_strength_index(ohlcv, precision=2, input_name="typical_price")
        pd.testing.assert_frame_equal(results["rsi14"].to_frame(), expected.to_frame())
        assert results["rsi14"].metadata == {"input_name": "typical_price", "precision": 2}

    def test_empty_config(self, ohlcv):
        assert compute_indicators(ohlcv, IndicatorsConfig()) == {}

    def test_bad_data_raises(self):
        with pytest.raises(DataValidationError):
            compute_indicators(pd.DataFrame({"close": [1.0, 2.0]}), make_config())

    def test_logs_batch_performance(self, ohlcv, caplog):
        with caplog.at_level(logging.DEBUG, logger="stock_indicators"):
            compute_indicators(ohlcv, make_config())
        messages = [record.getMessage() for record in caplog.records]
        assert any("PERFORMANCE: compute_indicators" in message and "Memory" in message for message in messages)
        assert any("Computed 2 indicators" in message for message in messages)


class TestComputeIndicatorsParallel:
    """Tests for compute_indicators_parallel."""

    def test_matches_sequential(self, generator):
        series_map = {
            "AAA": generator.generate_ohlcv(80),
            "BBB": generator.generate_ohlcv(60),
            "CCC": generator.generate_ohlcv(40),
        }
        config = make_config()
        results = compute_indicators_parallel(series_map, config, max_workers=2)

        assert list(results) == ["AAA", "BBB", "CCC"]
        for symbol, data in series_map.items():
            expected = compute_indicators(data, config)
            for name, result in results[symbol].items():
                pd.testing.assert_frame_equal(result.to_frame(), expected[name].to_frame())

    def test_failed_symbol_is_none(self, ohlcv, caplog):
        series_map = {"GOOD": ohlcv, "BAD": pd.DataFrame({"close": [1.0, 2.0]})}
        with caplog.at_level(logging.ERROR, logger="stock_indicators"):
            results = compute_indicators_parallel(series_map, make_config())

        assert results["BAD"] is None
        assert set(results["GOOD"]) == {"rsi14", "dc10"}
        assert any("BAD" in record.getMessage() for record in caplog.records)

    def test_empty_map(self):
        assert compute_indicators_parallel({}, make_config()) == {}


class TestMarketShapes:
    """Every indicator stays finite and fully populated across market regimes."""

    @pytest.mark.parametrize("shape", sorted(MARKET_SHAPES))
    @pytest.mark.parametrize("indicator", sorted(INDICATOR_PARAMS))
    def test_indicator_over_shape(self, indicator, shape):
        data = MARKET_SHAPES[shape]()
        assert_valid_result(compute_indicator(indicator, data), len(data))
