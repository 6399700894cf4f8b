"""Price channels and bands around a moving centre line."""

import numpy as np
import pandas as pd

from ..configs.indicator_config import (
    AtrChannelConfig,
    DonchianChannelsConfig,
    FractalChaosBandsConfig,
    MovingAverageChannelConfig,
    MovingAverageEnvelopeConfig,
    PriceChannelConfig,
    StdDevChannelConfig,
    StollerChannelConfig,
)
from ..configs.validation import build_config
from ..constants import DECIMAL_PRECISION
from ..models.result import IndicatorResult
from .atr import average_true_range
from .composition import band_rule, crossover_rule, price_minus, run_indicator
from .inputs import InputValues, PriceData
from .moving_average import get_moving_average
from .rolling import trailing_extrema, trailing_std


def _bands_around_price_rule():
    return band_rule(price_minus("MiddleBand"), lambda outputs, inputs: inputs.price, "UpperBand", "LowerBand")


def price_channel(data: PriceData, precision: int = DECIMAL_PRECISION, **params) -> IndicatorResult:
    """Smoothed price +/- a fixed percentage; signals on crossings of the middle line."""
    config = build_config(PriceChannelConfig, **params)
    smoother = get_moving_average(config.ma_type, config.length)

    def compute(inputs: InputValues):
        centre = smoother(inputs.price)
        upper = centre * (1 + config.pct)
        lower = centre * (1 - config.pct)
        return {"UpperChannel": upper, "LowerChannel": lower, "MiddleChannel": (upper + lower) / 2}

    return run_indicator(
        "PriceChannel",
        data,
        compute,
        crossover_rule(price_minus("MiddleChannel")),
        primary="MiddleChannel",
        input_name=config.input_name,
        precision=precision,
    )


def donchian_channels(data: PriceData, precision: int = DECIMAL_PRECISION, **params) -> IndicatorResult:
    """Highest high and lowest low over the window, with their midpoint."""
    config = build_config(DonchianChannelsConfig, **params)

    def compute(inputs: InputValues):
        upper, lower = trailing_extrema(inputs.high, inputs.low, config.length)
        return {"UpperChannel": upper, "LowerChannel": lower, "MiddleChannel": (upper + lower) / 2}

    return run_indicator(
        "DonchianChannels",
        data,
        compute,
        crossover_rule(price_minus("MiddleChannel")),
        primary="MiddleChannel",
        input_name=config.input_name,
        precision=precision,
    )


def moving_average_channel(data: PriceData, precision: int = DECIMAL_PRECISION, **params) -> IndicatorResult:
    """Smoothed highs and lows as the bands, their midpoint as the centre."""
    config = build_config(MovingAverageChannelConfig, **params)
    smoother = get_moving_average(config.ma_type, config.length)

    def compute(inputs: InputValues):
        upper = smoother(inputs.high)
        lower = smoother(inputs.low)
        return {"UpperBand": upper, "MiddleBand": (upper + lower) / 2, "LowerBand": lower}

    return run_indicator(
        "MovingAverageChannel",
        data,
        compute,
        crossover_rule(price_minus("MiddleBand")),
        primary="MiddleBand",
        input_name=config.input_name,
        precision=precision,
    )


def moving_average_envelope(data: PriceData, precision: int = DECIMAL_PRECISION, **params) -> IndicatorResult:
    """Moving average +/- ``mult`` times itself."""
    config = build_config(MovingAverageEnvelopeConfig, **params)
    smoother = get_moving_average(config.ma_type, config.length)

    def compute(inputs: InputValues):
        centre = smoother(inputs.price)
        factor = centre * config.mult
        return {"UpperBand": centre + factor, "MiddleBand": centre, "LowerBand": centre - factor}

    return run_indicator(
        "MovingAverageEnvelope",
        data,
        compute,
        crossover_rule(price_minus("MiddleBand")),
        primary="MiddleBand",
        input_name=config.input_name,
        precision=precision,
    )


def stoller_average_range_channels(
    data: PriceData, precision: int = DECIMAL_PRECISION, **params
) -> IndicatorResult:
    """Moving average +/- ``atr_mult`` ATRs (STARC bands)."""
    config = build_config(StollerChannelConfig, **params)
    smoother = get_moving_average(config.ma_type, config.length)

    def compute(inputs: InputValues):
        centre = smoother(inputs.price)
        offset = average_true_range(inputs, config.length, config.ma_type) * config.atr_mult
        return {"UpperBand": centre + offset, "MiddleBand": centre, "LowerBand": centre - offset}

    return run_indicator(
        "StollerAverageRangeChannels",
        data,
        compute,
        _bands_around_price_rule(),
        primary="MiddleBand",
        input_name=config.input_name,
        precision=precision,
    )


def average_true_range_channel(data: PriceData, precision: int = DECIMAL_PRECISION, **params) -> IndicatorResult:
    """Price +/- ``atr_mult`` ATRs, with the moving average of price as the centre."""
    config = build_config(AtrChannelConfig, **params)
    smoother = get_moving_average(config.ma_type, config.length)

    def compute(inputs: InputValues):
        offset = average_true_range(inputs, config.length, config.ma_type) * config.atr_mult
        return {
            "UpperBand": inputs.price + offset,
            "MiddleBand": smoother(inputs.price),
            "LowerBand": inputs.price - offset,
        }

    return run_indicator(
        "AverageTrueRangeChannel",
        data,
        compute,
        _bands_around_price_rule(),
        primary="MiddleBand",
        input_name=config.input_name,
        precision=precision,
    )


def _fractal_levels(values: np.ndarray, is_peak) -> np.ndarray:
    """Carry forward the last confirmed three-bar fractal of ``values``.

    The fractal at bar i-2 is confirmed at bar i when ``is_peak(values[i-2],
    neighbour)`` holds for both bar i-1 and bar i-3. Before the first
    confirmation the level is the first bar's value.
    """
    levels = np.empty(len(values))
    level = values[0] if len(values) else 0.0
    for i in range(len(values)):
        if i >= 3 and is_peak(values[i - 2], values[i - 1]) and is_peak(values[i - 2], values[i - 3]):
            level = values[i - 2]
        levels[i] = level
    return levels


def fractal_chaos_bands(data: PriceData, precision: int = DECIMAL_PRECISION, **params) -> IndicatorResult:
    """Last confirmed fractal high and fractal low, with their midpoint."""
    config = build_config(FractalChaosBandsConfig, **params)

    def compute(inputs: InputValues):
        index = inputs.price.index
        upper = pd.Series(_fractal_levels(inputs.high.to_numpy(dtype=float), lambda x, y: x > y), index=index)
        lower = pd.Series(_fractal_levels(inputs.low.to_numpy(dtype=float), lambda x, y: x < y), index=index)
        return {"UpperBand": upper, "MiddleBand": (upper + lower) / 2, "LowerBand": lower}

    return run_indicator(
        "FractalChaosBands",
        data,
        compute,
        _bands_around_price_rule(),
        primary="MiddleBand",
        input_name=config.input_name,
        precision=precision,
    )


def standard_deviation_channel(data: PriceData, precision: int = DECIMAL_PRECISION, **params) -> IndicatorResult:
    """Regression line +/- ``std_dev_mult`` population standard deviations."""
    config = build_config(StdDevChannelConfig, **params)
    smoother = get_moving_average(config.ma_type, config.length)

    def compute(inputs: InputValues):
        centre = smoother(inputs.price)
        offset = trailing_std(inputs.price, config.length) * config.std_dev_mult
        return {"UpperBand": centre + offset, "MiddleBand": centre, "LowerBand": centre - offset}

    return run_indicator(
        "StandardDeviationChannel",
        data,
        compute,
        _bands_around_price_rule(),
        primary="MiddleBand",
        input_name=config.input_name,
        precision=precision,
    )
