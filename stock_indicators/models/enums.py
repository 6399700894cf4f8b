"""Enumerations shared by configs and indicator calculations."""

from enum import Enum


class InputName(str, Enum):
    """Which bar-derived value an indicator treats as its price series."""

    CLOSE = "close"
    OPEN = "open"
    MEDIAN_PRICE = "median_price"  # (H + L) / 2
    TYPICAL_PRICE = "typical_price"  # (H + L + C) / 3
    FULL_TYPICAL_PRICE = "full_typical_price"  # (O + H + L + C) / 4
    WEIGHTED_CLOSE = "weighted_close"  # (H + L + 2C) / 4


class MovingAvgType(str, Enum):
    """Smoothing recurrences supported by the moving average dispatcher."""

    SIMPLE = "simple"
    EXPONENTIAL = "exponential"
    WILDERS = "wilders"
    WEIGHTED = "weighted"
    DOUBLE_EXPONENTIAL = "double_exponential"
    TRIPLE_EXPONENTIAL = "triple_exponential"
    HULL = "hull"
    TRIANGULAR = "triangular"
    ZERO_LAG_EXPONENTIAL = "zero_lag_exponential"
    KAUFMAN_ADAPTIVE = "kaufman_adaptive"
    ARNAUD_LEGOUX = "arnaud_legoux"
    TILLSON_T3 = "tillson_t3"
    LEAST_SQUARES = "least_squares"
    SINE_WEIGHTED = "sine_weighted"
