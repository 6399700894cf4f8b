"""Signal classifier.

Each classification looks only at the current bar and the one before it.
The scalar functions classify a single transition; the ``*_signals``
functions apply the same rules to whole series, pairing bar 0 with itself so
that it is always NEUTRAL.
"""

import numpy as np
import pandas as pd

from ..exceptions import ConfigurationError
from ..models.signals import Signal
from .rolling import previous_values

# Integer codes used by the vectorized classifiers
_NEUTRAL, _BUY, _SELL, _STRONG_BUY, _STRONG_SELL = range(5)
_CODE_TO_SIGNAL = np.array(
    [Signal.NEUTRAL, Signal.BUY, Signal.SELL, Signal.STRONG_BUY, Signal.STRONG_SELL], dtype=object
)


def validate_bands(upper: float, lower: float) -> None:
    """Raise ConfigurationError unless ``upper > lower``."""
    if not upper > lower:
        raise ConfigurationError(
            f"Upper band ({upper}) must be greater than lower band ({lower})", field="overbought"
        )


def compare_signal(delta: float, prev_delta: float) -> Signal:
    """BUY on an upward zero cross, SELL on a downward one, else NEUTRAL."""
    if delta > 0 and prev_delta <= 0:
        return Signal.BUY
    if delta < 0 and prev_delta >= 0:
        return Signal.SELL
    return Signal.NEUTRAL


def band_signal(
    delta: float,
    prev_delta: float,
    value: float,
    prev_value: float,
    upper: float,
    prev_upper: float,
    lower: float,
    prev_lower: float,
) -> Signal:
    """Classify a transition against (possibly moving) upper and lower bands.

    Precedence:
        1. STRONG_SELL when ``value`` falls back below ``upper`` after being at or above it
        2. STRONG_BUY when ``value`` rises back above ``lower`` after being at or below it
        3. SELL when ``delta`` turns negative while ``value`` is still above ``upper``
        4. BUY when ``delta`` turns positive while ``value`` is still below ``lower``
        5. otherwise ``compare_signal(delta, prev_delta)``
    """
    if prev_value >= prev_upper and value < upper:
        return Signal.STRONG_SELL
    if prev_value <= prev_lower and value > lower:
        return Signal.STRONG_BUY
    if value > upper and delta < 0 and prev_delta >= 0:
        return Signal.SELL
    if value < lower and delta > 0 and prev_delta <= 0:
        return Signal.BUY
    return compare_signal(delta, prev_delta)


def threshold_signal(
    delta: float, prev_delta: float, value: float, prev_value: float, upper: float, lower: float
) -> Signal:
    """``band_signal`` with fixed overbought/oversold levels."""
    return band_signal(delta, prev_delta, value, prev_value, upper, upper, lower, lower)


def _to_signals(codes: np.ndarray, index: pd.Index) -> pd.Series:
    return pd.Series(_CODE_TO_SIGNAL[codes.astype(int)], index=index, dtype=object)


def _compare_conditions(d: np.ndarray, p: np.ndarray):
    return [(d > 0) & (p <= 0), (d < 0) & (p >= 0)], [_BUY, _SELL]


def compare_signals(delta: pd.Series) -> pd.Series:
    """Series form of ``compare_signal``."""
    d = delta.to_numpy(dtype=float)
    p = previous_values(delta).to_numpy(dtype=float)
    conditions, choices = _compare_conditions(d, p)
    return _to_signals(np.select(conditions, choices, default=_NEUTRAL), delta.index)


def band_signals(delta: pd.Series, value: pd.Series, upper: pd.Series, lower: pd.Series) -> pd.Series:
    """Series form of ``band_signal``; all inputs must share one index."""
    d = delta.to_numpy(dtype=float)
    p = previous_values(delta).to_numpy(dtype=float)
    v = value.to_numpy(dtype=float)
    pv = previous_values(value).to_numpy(dtype=float)
    u = upper.to_numpy(dtype=float)
    pu = previous_values(upper).to_numpy(dtype=float)
    lo = lower.to_numpy(dtype=float)
    plo = previous_values(lower).to_numpy(dtype=float)

    compare_conditions, compare_choices = _compare_conditions(d, p)
    conditions = [
        (pv >= pu) & (v < u),
        (pv <= plo) & (v > lo),
        (v > u) & (d < 0) & (p >= 0),
        (v < lo) & (d > 0) & (p <= 0),
    ] + compare_conditions
    choices = [_STRONG_SELL, _STRONG_BUY, _SELL, _BUY] + compare_choices
    return _to_signals(np.select(conditions, choices, default=_NEUTRAL), delta.index)


def threshold_signals(delta: pd.Series, value: pd.Series, upper: float, lower: float) -> pd.Series:
    """Series form of ``threshold_signal``."""
    validate_bands(upper, lower)
    upper_band = pd.Series(float(upper), index=value.index)
    lower_band = pd.Series(float(lower), index=value.index)
    return band_signals(delta, value, upper_band, lower_band)
