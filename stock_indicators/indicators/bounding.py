"""Clamping, rounding and zero-guarded division helpers."""

import numpy as np
import pandas as pd

from ..constants import DECIMAL_PRECISION, OSCILLATOR_MAX, OSCILLATOR_MIN
from ..exceptions import ConfigurationError


def _check_bounds(lower: float, upper: float) -> None:
    if lower > upper:
        raise ConfigurationError(f"lower bound ({lower}) must not exceed upper bound ({upper})")


def clamp(value: float, lower: float = OSCILLATOR_MIN, upper: float = OSCILLATOR_MAX) -> float:
    """Return ``lower`` if value < lower, ``upper`` if value > upper, else value."""
    _check_bounds(lower, upper)
    if value < lower:
        return lower
    if value > upper:
        return upper
    return value


def clamp_series(series: pd.Series, lower: float = OSCILLATOR_MIN, upper: float = OSCILLATOR_MAX) -> pd.Series:
    _check_bounds(lower, upper)
    return series.clip(lower=lower, upper=upper)


def _check_precision(precision: int) -> int:
    if isinstance(precision, bool) or not isinstance(precision, int) or precision < 0:
        raise ConfigurationError(f"precision must be a non-negative integer, got {precision!r}", field="precision")
    return precision


def round_value(value: float, precision: int = DECIMAL_PRECISION) -> float:
    return float(round(value, _check_precision(precision)))


def round_series(series: pd.Series, precision: int = DECIMAL_PRECISION) -> pd.Series:
    """Round every value to ``precision`` decimals (the stored form of an output)."""
    return series.round(_check_precision(precision))


def safe_divide(numerator: pd.Series, denominator: pd.Series, default: float = 0.0) -> pd.Series:
    """Element-wise division returning ``default`` wherever the denominator is zero."""
    num = np.asarray(numerator, dtype=float)
    den = np.asarray(denominator, dtype=float)
    out = np.full(num.shape, default, dtype=float)
    np.divide(num, den, out=out, where=den != 0)
    index = numerator.index if isinstance(numerator, pd.Series) else None
    return pd.Series(out, index=index)


def ratio_oscillator(
    up: pd.Series, down: pd.Series, lower: float = OSCILLATOR_MIN, upper: float = OSCILLATOR_MAX
) -> pd.Series:
    """``100 - 100 / (1 + up / down)`` bounded to [lower, upper].

    Zero guards are checked in a fixed order: ``down == 0`` gives 100 (this
    includes the flat case where both are zero), then ``up == 0`` gives 0.
    """
    up_values = np.asarray(up, dtype=float)
    down_values = np.asarray(down, dtype=float)
    with np.errstate(divide="ignore", invalid="ignore"):
        raw = 100.0 - 100.0 / (1.0 + up_values / down_values)
    result = np.where(down_values == 0, 100.0, np.where(up_values == 0, 0.0, raw))
    index = up.index if isinstance(up, pd.Series) else None
    return clamp_series(pd.Series(result, index=index, dtype=float), lower, upper)
