"""Indicator calculation modules."""

from .atr import average_true_range, true_range
from .bounding import clamp, clamp_series, ratio_oscillator, round_series, round_value, safe_divide
from .channels import (
    average_true_range_channel,
    donchian_channels,
    fractal_chaos_bands,
    moving_average_channel,
    moving_average_envelope,
    price_channel,
    standard_deviation_channel,
    stoller_average_range_channels,
)
from .composition import (
    band_rule,
    crossover_rule,
    output,
    price_minus,
    run_indicator,
    slope,
    spread,
    threshold_rule,
)
from .inputs import InputValues, get_input_values
from .momentum import rate_of_change
from .moving_average import MOVING_AVERAGES, MovingAverage, get_moving_average, moving_average
from .parallel import compute_indicators_parallel
from .pipeline import INDICATORS, compute_indicator, compute_indicators
from .rolling import (
    percentile_rank,
    previous_values,
    rolling_percentile_rank,
    streak,
    trailing_average,
    trailing_extrema,
    trailing_max,
    trailing_min,
    trailing_std,
    trailing_sum,
    validate_window,
)
from .rsi import (
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
from .signals import (
    band_signal,
    band_signals,
    compare_signal,
    compare_signals,
    threshold_signal,
    threshold_signals,
    validate_bands,
)

__all__ = [
    "get_input_values",
    "InputValues",
    "trailing_sum",
    "trailing_average",
    "trailing_max",
    "trailing_min",
    "trailing_extrema",
    "trailing_std",
    "percentile_rank",
    "rolling_percentile_rank",
    "streak",
    "previous_values",
    "validate_window",
    "MovingAverage",
    "MOVING_AVERAGES",
    "get_moving_average",
    "moving_average",
    "clamp",
    "clamp_series",
    "round_value",
    "round_series",
    "safe_divide",
    "ratio_oscillator",
    "compare_signal",
    "threshold_signal",
    "band_signal",
    "compare_signals",
    "threshold_signals",
    "band_signals",
    "validate_bands",
    "run_indicator",
    "output",
    "price_minus",
    "spread",
    "slope",
    "crossover_rule",
    "threshold_rule",
    "band_rule",
    "true_range",
    "average_true_range",
    "rate_of_change",
    "rsi_values",
    "relative_strength_index",
    "connors_rsi",
    "asymmetrical_rsi",
    "adaptive_rsi",
    "apirine_slow_rsi",
    "breakout_rsi",
    "liquid_rsi",
    "folded_rsi",
    "volume_weighted_rsi",
    "average_absolute_error_normalization",
    "price_channel",
    "donchian_channels",
    "moving_average_channel",
    "moving_average_envelope",
    "stoller_average_range_channels",
    "average_true_range_channel",
    "fractal_chaos_bands",
    "standard_deviation_channel",
    "INDICATORS",
    "compute_indicator",
    "compute_indicators",
    "compute_indicators_parallel",
]
