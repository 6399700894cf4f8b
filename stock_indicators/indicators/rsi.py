"""Relative Strength Index family.

All variants share ``rsi_values``: smoothed gains over smoothed losses fed
through ``ratio_oscillator`` (zero average loss gives 100, otherwise zero
average gain gives 0).
"""

import numpy as np
import pandas as pd

from ..configs.indicator_config import (
    AdaptiveRsiConfig,
    ApirineSlowRsiConfig,
    AsymmetricalRsiConfig,
    AverageAbsoluteErrorNormalizationConfig,
    BreakoutRsiConfig,
    ConnorsRsiConfig,
    FoldedRsiConfig,
    LiquidRsiConfig,
    RsiConfig,
    VolumeWeightedRsiConfig,
)
from ..configs.validation import build_config
from ..constants import DECIMAL_PRECISION, OSCILLATOR_MAX, OSCILLATOR_MIN
from ..models.result import IndicatorResult
from .bounding import clamp, clamp_series, ratio_oscillator, safe_divide
from .composition import crossover_rule, price_minus, run_indicator, slope, spread, threshold_rule
from .inputs import InputValues, PriceData
from .momentum import rate_of_change
from .moving_average import MovingAverage, get_moving_average
from .rolling import previous_values, rolling_percentile_rank, streak, trailing_sum

OSCILLATOR_BOUNDS = (OSCILLATOR_MIN, OSCILLATOR_MAX)


def price_changes(price: pd.Series) -> pd.Series:
    """Bar-over-bar change; the first bar has no predecessor and counts as 0."""
    return price.diff().fillna(0.0)


def rsi_values(price: pd.Series, smoother: MovingAverage) -> pd.Series:
    """Unrounded RSI of ``price`` using ``smoother`` for average gain and loss."""
    change = price_changes(price)
    gain = change.clip(lower=0)
    loss = (-change).clip(lower=0)
    return ratio_oscillator(smoother(gain), smoother(loss))


def relative_strength_index(
    data: PriceData, precision: int = DECIMAL_PRECISION, **params
) -> IndicatorResult:
    """Wilder's RSI with a smoothed signal line and histogram.

    Outputs: Rsi, Signal (RSI smoothed over ``signal_length``), Histogram
    (Rsi - Signal). Signals use the 70/30 bands on Rsi with Histogram
    crossings as the fallback.

    Example:
        >>> result = relative_strength_index(df, length=14)
        >>> result["Rsi"].iloc[-1]
    """
    config = build_config(RsiConfig, **params)
    smoother = get_moving_average(config.ma_type, config.length)
    signal_smoother = get_moving_average(config.ma_type, config.signal_length)

    def compute(inputs: InputValues):
        rsi = rsi_values(inputs.price, smoother)
        signal = signal_smoother(rsi)
        return {"Rsi": rsi, "Signal": signal, "Histogram": rsi - signal}

    return run_indicator(
        "RelativeStrengthIndex",
        data,
        compute,
        threshold_rule("Rsi", config.overbought, config.oversold, delta=spread("Rsi", "Signal")),
        primary="Rsi",
        bounds={"Rsi": OSCILLATOR_BOUNDS, "Signal": OSCILLATOR_BOUNDS},
        input_name=config.input_name,
        precision=precision,
    )


def connors_rsi(data: PriceData, precision: int = DECIMAL_PRECISION, **params) -> IndicatorResult:
    """Connors RSI: mean of a short RSI, the RSI of the up/down streak and the percentile rank of ROC."""
    config = build_config(ConnorsRsiConfig, **params)
    rsi_smoother = get_moving_average(config.ma_type, config.rsi_length)
    streak_smoother = get_moving_average(config.ma_type, config.streak_length)

    def compute(inputs: InputValues):
        rsi = rsi_values(inputs.price, rsi_smoother)
        pct_rank = rolling_percentile_rank(rate_of_change(inputs.price, config.roc_length), config.roc_length)
        streak_rsi = rsi_values(streak(inputs.price), streak_smoother)
        connors = clamp_series((rsi + pct_rank + streak_rsi) / 3, *OSCILLATOR_BOUNDS)
        return {"Rsi": rsi, "PctRank": pct_rank, "StreakRsi": streak_rsi, "ConnorsRsi": connors}

    return run_indicator(
        "ConnorsRelativeStrengthIndex",
        data,
        compute,
        threshold_rule("ConnorsRsi", config.overbought, config.oversold),
        primary="ConnorsRsi",
        bounds={label: OSCILLATOR_BOUNDS for label in ("Rsi", "PctRank", "StreakRsi", "ConnorsRsi")},
        input_name=config.input_name,
        precision=precision,
    )


def asymmetrical_rsi(data: PriceData, precision: int = DECIMAL_PRECISION, **params) -> IndicatorResult:
    """RSI of percent changes whose up/down smoothing speeds follow the count of up bars in the window."""
    config = build_config(AsymmetricalRsiConfig, **params)
    length = config.length

    def compute(inputs: InputValues):
        prev_price = previous_values(inputs.price)
        roc = safe_divide((inputs.price - prev_price) * 100.0, prev_price)
        up_count = trailing_sum(roc >= 0, length).to_numpy()
        down_count = length - up_count
        up_alpha = np.divide(1.0, up_count, out=np.zeros(len(roc)), where=up_count != 0)
        down_alpha = np.divide(1.0, down_count, out=np.zeros(len(roc)), where=down_count != 0)

        pos_roc = roc.clip(lower=0).to_numpy()
        neg_roc = (-roc).clip(lower=0).to_numpy()
        up_sum = np.zeros(len(roc))
        down_sum = np.zeros(len(roc))
        prev_up = prev_down = 0.0
        for i in range(len(roc)):
            prev_up = up_alpha[i] * pos_roc[i] + (1 - up_alpha[i]) * prev_up
            prev_down = down_alpha[i] * neg_roc[i] + (1 - down_alpha[i]) * prev_down
            up_sum[i] = prev_up
            down_sum[i] = prev_down

        return {"Arsi": ratio_oscillator(pd.Series(up_sum, index=roc.index), pd.Series(down_sum, index=roc.index))}

    return run_indicator(
        "AsymmetricalRelativeStrengthIndex",
        data,
        compute,
        threshold_rule("Arsi", config.overbought, config.oversold),
        primary="Arsi",
        bounds={"Arsi": OSCILLATOR_BOUNDS},
        input_name=config.input_name,
        precision=precision,
    )


def adaptive_rsi(data: PriceData, precision: int = DECIMAL_PRECISION, **params) -> IndicatorResult:
    """Price smoothed with alpha = 2 * |RSI / 100 - 0.5|: fast at RSI extremes, frozen at 50."""
    config = build_config(AdaptiveRsiConfig, **params)
    smoother = get_moving_average(config.ma_type, config.length)

    def compute(inputs: InputValues):
        alpha = (2 * (rsi_values(inputs.price, smoother) / 100 - 0.5).abs()).to_numpy()
        values = inputs.price.to_numpy(dtype=float)
        arsi = np.empty(len(values))
        prev = values[0] if len(values) else 0.0
        for i, value in enumerate(values):
            prev = alpha[i] * value + (1 - alpha[i]) * prev
            arsi[i] = prev
        return {"Arsi": pd.Series(arsi, index=inputs.price.index)}

    return run_indicator(
        "AdaptiveRelativeStrengthIndex",
        data,
        compute,
        crossover_rule(price_minus("Arsi")),
        primary="Arsi",
        input_name=config.input_name,
        precision=precision,
    )


def apirine_slow_rsi(data: PriceData, precision: int = DECIMAL_PRECISION, **params) -> IndicatorResult:
    """RSI of the price's distance above/below its own smoothed value."""
    config = build_config(ApirineSlowRsiConfig, **params)
    baseline_smoother = get_moving_average(config.ma_type, config.smooth_length)
    smoother = get_moving_average(config.ma_type, config.length)

    def compute(inputs: InputValues):
        distance = inputs.price - baseline_smoother(inputs.price)
        above = distance.clip(lower=0)
        below = (-distance).clip(lower=0)
        return {"Asrsi": ratio_oscillator(smoother(above), smoother(below))}

    return run_indicator(
        "ApirineSlowRelativeStrengthIndex",
        data,
        compute,
        threshold_rule("Asrsi", config.overbought, config.oversold),
        primary="Asrsi",
        bounds={"Asrsi": OSCILLATOR_BOUNDS},
        input_name=config.input_name,
        precision=precision,
    )


def breakout_rsi(data: PriceData, precision: int = DECIMAL_PRECISION, **params) -> IndicatorResult:
    """RSI of breakout power: price * bar strength * recent volume."""
    config = build_config(BreakoutRsiConfig, **params)

    def compute(inputs: InputValues):
        bo_volume = trailing_sum(inputs.volume, config.lookback_length)
        bo_strength = safe_divide(inputs.close - inputs.open, inputs.high - inputs.low)
        bo_power = inputs.price * bo_strength * bo_volume
        prev_power = previous_values(bo_power)
        pos_power = bo_power.abs().where(bo_power > prev_power, 0.0)
        neg_power = bo_power.abs().where(bo_power < prev_power, 0.0)
        brsi = ratio_oscillator(trailing_sum(pos_power, config.length), trailing_sum(neg_power, config.length))
        return {"Brsi": brsi}

    return run_indicator(
        "BreakoutRelativeStrengthIndex",
        data,
        compute,
        threshold_rule("Brsi", config.overbought, config.oversold),
        primary="Brsi",
        bounds={"Brsi": OSCILLATOR_BOUNDS},
        input_name=config.input_name,
        precision=precision,
    )


def liquid_rsi(data: PriceData, precision: int = DECIMAL_PRECISION, **params) -> IndicatorResult:
    """Share of joint price/volume movement that is upward (both rising), in percent."""
    config = build_config(LiquidRsiConfig, **params)
    smoother = get_moving_average(config.ma_type, config.length)

    def compute(inputs: InputValues):
        price_change = price_changes(inputs.price)
        volume_change = price_changes(inputs.volume)
        num = price_change.clip(lower=0) * volume_change.clip(lower=0)
        den = price_change.abs() * volume_change.abs()
        lrsi = safe_divide(100.0 * smoother(num), smoother(den))
        return {"Lrsi": lrsi}

    return run_indicator(
        "LiquidRelativeStrengthIndex",
        data,
        compute,
        threshold_rule("Lrsi", config.overbought, config.oversold),
        primary="Lrsi",
        bounds={"Lrsi": OSCILLATOR_BOUNDS},
        input_name=config.input_name,
        precision=precision,
    )


def folded_rsi(data: PriceData, precision: int = DECIMAL_PRECISION, **params) -> IndicatorResult:
    """Trailing sum of RSI's distance from 50 (doubled), with a smoothed signal line."""
    config = build_config(FoldedRsiConfig, **params)
    smoother = get_moving_average(config.ma_type, config.length)

    def compute(inputs: InputValues):
        folded = 2 * (rsi_values(inputs.price, smoother) - 50).abs()
        frsi = trailing_sum(folded, config.length)
        return {"Frsi": frsi, "Signal": smoother(frsi)}

    return run_indicator(
        "FoldedRelativeStrengthIndex",
        data,
        compute,
        threshold_rule("Frsi", config.overbought, config.oversold, delta=spread("Frsi", "Signal")),
        primary="Frsi",
        input_name=config.input_name,
        precision=precision,
    )


def volume_weighted_rsi(data: PriceData, precision: int = DECIMAL_PRECISION, **params) -> IndicatorResult:
    """RSI of volume-weighted price changes, rescaled to [-100, 100] and smoothed."""
    config = build_config(VolumeWeightedRsiConfig, **params)
    smoother = get_moving_average(config.ma_type, config.length)
    signal_smoother = get_moving_average(config.ma_type, config.smooth_length)

    def compute(inputs: InputValues):
        weighted_change = price_changes(inputs.price) * inputs.volume
        up = smoother(weighted_change.clip(lower=0))
        down = smoother((-weighted_change).clip(lower=0))
        scaled = ratio_oscillator(up, down) * 2 - 100
        return {"Vwrsi": signal_smoother(scaled)}

    return run_indicator(
        "VolumeWeightedRelativeStrengthIndex",
        data,
        compute,
        crossover_rule(slope("Vwrsi")),
        primary="Vwrsi",
        bounds={"Vwrsi": (-OSCILLATOR_MAX, OSCILLATOR_MAX)},
        input_name=config.input_name,
        precision=precision,
    )


def average_absolute_error_normalization(
    data: PriceData, precision: int = DECIMAL_PRECISION, **params
) -> IndicatorResult:
    """Mean signed error over mean absolute error of a self-correcting price tracker.

    Each bar the tracker's error ``e = price - prev_y`` is added to the
    window; ``a = mean(e) / mean(|e|)`` lies in [-1, 1] and the tracker moves
    to ``y = price + a * mean(|e|)``. ``a`` is 0 while the window holds no error.
    """
    config = build_config(AverageAbsoluteErrorNormalizationConfig, **params)
    length = config.length

    def compute(inputs: InputValues):
        values = inputs.price.to_numpy(dtype=float)
        errors = np.zeros(len(values))
        aaen = np.zeros(len(values))
        prev_y = values[0] if len(values) else 0.0
        for i, value in enumerate(values):
            errors[i] = value - prev_y
            window = errors[max(0, i - length + 1) : i + 1]
            abs_mean = np.abs(window).mean()
            if abs_mean > 0:
                aaen[i] = clamp(window.mean() / abs_mean, -1.0, 1.0)
            prev_y = value + aaen[i] * abs_mean
        return {"Aaen": pd.Series(aaen, index=inputs.price.index)}

    return run_indicator(
        "AverageAbsoluteErrorNormalization",
        data,
        compute,
        threshold_rule("Aaen", config.overbought, config.oversold),
        primary="Aaen",
        bounds={"Aaen": (-1.0, 1.0)},
        input_name=config.input_name,
        precision=precision,
    )
