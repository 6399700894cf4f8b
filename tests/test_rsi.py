"""Unit tests for the RSI family."""

import numpy as np
import pytest

from stock_indicators.configs import AverageAbsoluteErrorNormalizationConfig
from stock_indicators.configs.validation import ConfigValidationError
from stock_indicators.exceptions import ConfigurationError
from stock_indicators.indicators.moving_average import get_moving_average
from stock_indicators.indicators.rsi import (
    adaptive_rsi,
    apirine_slow_rsi,
    asymmetrical_rsi,
    average_absolute_error_normalization,
    breakout_rsi,
    connors_rsi,
    folded_rsi,
    liquid_rsi,
    relative_strength_index,
    rsi_values,
    volume_weighted_rsi,
)
from stock_indicators.models.signals import Signal
from tests.utils import assert_no_lookahead, assert_valid_result, assert_within_bounds, closes_to_frame

RSI_FAMILY = [
    (relative_strength_index, "Rsi"),
    (connors_rsi, "ConnorsRsi"),
    (asymmetrical_rsi, "Arsi"),
    (adaptive_rsi, "Arsi"),
    (apirine_slow_rsi, "Asrsi"),
    (breakout_rsi, "Brsi"),
    (liquid_rsi, "Lrsi"),
    (folded_rsi, "Frsi"),
    (volume_weighted_rsi, "Vwrsi"),
    (average_absolute_error_normalization, "Aaen"),
]

# Oscillators bounded to [0, 100]
BOUNDED = [
    (relative_strength_index, "Rsi"),
    (connors_rsi, "ConnorsRsi"),
    (asymmetrical_rsi, "Arsi"),
    (apirine_slow_rsi, "Asrsi"),
    (breakout_rsi, "Brsi"),
    (liquid_rsi, "Lrsi"),
]


class TestRelativeStrengthIndex:
    """Tests for Wilder's RSI."""

    def test_worked_example(self, stockcharts_closes):
        """Wilder averages seeded at bar 0 (gain = loss = 0), alpha = 1/14 from bar 1."""
        result = relative_strength_index(stockcharts_closes, length=14)
        assert abs(result["Rsi"].iloc[13] - 71.8024) < 1e-3
        # Last change is zero: both averages decay by 13/14, ratio unchanged
        assert abs(result["Rsi"].iloc[14] - result["Rsi"].iloc[13]) <= 1e-4

    def test_leading_44_example(self):
        closes = [44, 44.34, 44.09, 44.15, 43.61, 44.33, 44.83, 45.10, 45.42, 45.84, 46.08, 45.89, 46.03, 45.61, 46.28]
        result = relative_strength_index(closes_to_frame(closes), length=14)
        # Discounted gains 2.4272 over discounted losses 0.9022 -> RS 2.6902
        assert abs(result["Rsi"].iloc[-1] - 72.9012) < 1e-3

    def test_outputs_and_primary(self, ohlcv):
        result = relative_strength_index(ohlcv)
        assert result.labels == ["Rsi", "Signal", "Histogram"]
        assert_valid_result(result, len(ohlcv), primary="Rsi")
        np.testing.assert_allclose(result["Histogram"], result["Rsi"] - result["Signal"], atol=2e-4)

    def test_constant_series(self, flat_ohlcv):
        """No losses ever occur: RSI is 100 on every bar and no signal fires."""
        result = relative_strength_index(flat_ohlcv)
        assert (result["Rsi"] == 100.0).all()
        assert (result["Histogram"] == 0.0).all()
        assert (result.signals == Signal.NEUTRAL).all()

    def test_rising_is_100(self, rising_ohlcv):
        assert (relative_strength_index(rising_ohlcv)["Rsi"] == 100.0).all()

    def test_falling_is_0_after_first_bar(self, falling_ohlcv):
        rsi = relative_strength_index(falling_ohlcv)["Rsi"]
        assert rsi.iloc[0] == 100.0
        assert (rsi.iloc[1:] == 0.0).all()

    def test_values_rounded(self, ohlcv):
        rsi = relative_strength_index(ohlcv, precision=2)["Rsi"]
        np.testing.assert_array_equal(rsi.to_numpy(), rsi.round(2).to_numpy())

    def test_chaining_primary_series(self, ohlcv):
        """An indicator's primary series can be the input of another."""
        first = relative_strength_index(ohlcv)
        second = relative_strength_index(first.primary, length=5)
        assert len(second) == len(ohlcv)
        assert_within_bounds(second["Rsi"], 0.0, 100.0)

    def test_rsi_values_matches_indicator(self, ohlcv):
        raw = rsi_values(ohlcv["close"], get_moving_average("wilders", 14))
        np.testing.assert_allclose(relative_strength_index(ohlcv)["Rsi"], raw, atol=1e-4)

    def test_empty(self, empty_ohlcv):
        result = relative_strength_index(empty_ohlcv)
        assert len(result) == 0
        assert all(len(series) == 0 for series in result.outputs.values())

    @pytest.mark.parametrize(
        "params",
        [
            {"length": 0},
            {"signal_length": -1},
            {"ma_type": "bogus"},
            {"overbought": 30, "oversold": 70},
            {"unknown_param": 1},
            {"input_name": "vwap"},
        ],
    )
    def test_invalid_config(self, ohlcv, params):
        with pytest.raises(ConfigurationError):
            relative_strength_index(ohlcv, **params)

    def test_config_error_lists_field(self, ohlcv):
        with pytest.raises(ConfigValidationError) as exc_info:
            relative_strength_index(ohlcv, length=0)
        assert exc_info.value.field == "length"
        assert "length" in str(exc_info.value)


class TestConnorsRsi:
    """Tests for Connors RSI."""

    def test_outputs(self, ohlcv):
        result = connors_rsi(ohlcv)
        assert result.labels == ["Rsi", "PctRank", "StreakRsi", "ConnorsRsi"]
        assert_valid_result(result, len(ohlcv), primary="ConnorsRsi")

    def test_is_mean_of_components(self, ohlcv):
        result = connors_rsi(ohlcv)
        mean = (result["Rsi"] + result["PctRank"] + result["StreakRsi"]) / 3
        np.testing.assert_allclose(result["ConnorsRsi"], mean, atol=1e-3)

    def test_constant_series(self, flat_ohlcv):
        result = connors_rsi(flat_ohlcv)
        # Bar 0 has no prior ROC to rank against
        assert abs(result["ConnorsRsi"].iloc[0] - 66.6667) < 1e-4
        assert (result["ConnorsRsi"].iloc[1:] == 100.0).all()


class TestRsiVariants:
    """Tests shared by every RSI variant."""

    @pytest.mark.parametrize("func,primary", RSI_FAMILY)
    def test_lengths_and_primary(self, ohlcv, func, primary):
        assert_valid_result(func(ohlcv), len(ohlcv), primary=primary)

    @pytest.mark.parametrize("func,label", BOUNDED)
    def test_bounded(self, ohlcv, func, label):
        assert_within_bounds(func(ohlcv)[label], 0.0, 100.0)

    @pytest.mark.parametrize("func,primary", RSI_FAMILY)
    def test_no_lookahead(self, ohlcv, func, primary):
        assert_no_lookahead(func, ohlcv, cutoff=70)

    @pytest.mark.parametrize("func,primary", RSI_FAMILY)
    def test_flat_series_does_not_fault(self, flat_ohlcv, func, primary):
        result = func(flat_ohlcv)
        assert_valid_result(result, len(flat_ohlcv))

    @pytest.mark.parametrize("func,primary", RSI_FAMILY)
    def test_empty(self, empty_ohlcv, func, primary):
        assert len(func(empty_ohlcv)) == 0

    @pytest.mark.parametrize("func,primary", RSI_FAMILY)
    def test_first_signal_neutral(self, ohlcv, func, primary):
        assert func(ohlcv).signals.iloc[0] == Signal.NEUTRAL


class TestSpecificVariants:
    """Behaviour specific to individual RSI variants."""

    def test_adaptive_tracks_price_at_extremes(self, rising_ohlcv):
        """RSI stays at 100, so alpha is 1 and the average equals price."""
        result = adaptive_rsi(rising_ohlcv)
        np.testing.assert_allclose(result["Arsi"], rising_ohlcv["close"], atol=1e-4)
        assert (result.signals == Signal.NEUTRAL).all()

    def test_volume_weighted_scaled_range(self, ohlcv):
        assert_within_bounds(volume_weighted_rsi(ohlcv)["Vwrsi"], -100.0, 100.0)

    def test_volume_weighted_rising(self, rising_ohlcv):
        assert (volume_weighted_rsi(rising_ohlcv)["Vwrsi"] == 100.0).all()

    def test_liquid_zero_without_joint_movement(self, flat_ohlcv):
        assert (liquid_rsi(flat_ohlcv)["Lrsi"] == 0.0).all()

    def test_folded_outputs(self, ohlcv):
        result = folded_rsi(ohlcv)
        assert result.labels == ["Frsi", "Signal"]
        assert (result["Frsi"] >= 0).all()

    def test_breakout_defaults_to_full_typical_price(self, ohlcv):
        assert breakout_rsi(ohlcv).metadata["input_name"] == "full_typical_price"

    def test_asymmetrical_all_gains(self, rising_ohlcv):
        assert (asymmetrical_rsi(rising_ohlcv)["Arsi"] == 100.0).all()

    def test_apirine_custom_smoothing(self, ohlcv):
        result = apirine_slow_rsi(ohlcv, ma_type="wilders", smooth_length=3)
        assert_within_bounds(result["Asrsi"], 0.0, 100.0)


class TestAverageAbsoluteErrorNormalization:
    """Tests for the average absolute error normalization."""

    def test_worked_values(self):
        # Bar 1: errors [0, 2] -> a = 1, tracker 13; bar 2: errors [0, 2, -2] -> a = 0
        result = average_absolute_error_normalization(closes_to_frame([10.0, 12.0, 11.0]), length=3)
        assert result["Aaen"].tolist() == [0.0, 1.0, 0.0]

    def test_window_length_one(self):
        # Only the current error counts: bar 2 error 11 - 14 = -3 -> a = -1
        result = average_absolute_error_normalization(closes_to_frame([10.0, 12.0, 11.0]), length=1)
        assert result["Aaen"].tolist() == [0.0, 1.0, -1.0]

    def test_bounded(self, ohlcv):
        result = average_absolute_error_normalization(ohlcv)
        assert_valid_result(result, len(ohlcv), primary="Aaen")
        assert_within_bounds(result["Aaen"], -1.0, 1.0)

    def test_flat_series(self, flat_ohlcv):
        result = average_absolute_error_normalization(flat_ohlcv)
        assert (result["Aaen"] == 0.0).all()
        assert (result.signals == Signal.NEUTRAL).all()

    def test_trends_saturate(self, rising_ohlcv, falling_ohlcv):
        rising = average_absolute_error_normalization(rising_ohlcv)["Aaen"]
        falling = average_absolute_error_normalization(falling_ohlcv)["Aaen"]
        assert rising.iloc[0] == 0.0 and (rising.iloc[1:] == 1.0).all()
        assert falling.iloc[0] == 0.0 and (falling.iloc[1:] == -1.0).all()

    def test_default_bands(self):
        config = AverageAbsoluteErrorNormalizationConfig()
        assert (config.length, config.overbought, config.oversold) == (14, 0.8, -0.8)

    def test_no_lookahead(self, ohlcv):
        assert_no_lookahead(average_absolute_error_normalization, ohlcv, cutoff=50)
