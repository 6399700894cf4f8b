"""Rolling window toolkit.

Every statistic uses a left-truncated trailing window: index ``i`` sees
``S[max(0, i-K+1) .. i]``, so early bars use whatever history exists and no
warm-up NaNs are produced.
"""

import numbers
from typing import Sequence, Tuple

import numpy as np
import pandas as pd

from ..exceptions import ConfigurationError


def validate_window(window: int, name: str = "length") -> int:
    """Return ``window`` if it is a positive integer, else raise ConfigurationError."""
    if isinstance(window, bool) or not isinstance(window, numbers.Integral):
        raise ConfigurationError(f"{name} must be an integer, got {window!r}", field=name)
    if window <= 0:
        raise ConfigurationError(f"{name} must be positive, got {window}", field=name)
    return int(window)


def trailing_sum(series: pd.Series, window: int) -> pd.Series:
    window = validate_window(window)
    return series.astype(float).rolling(window=window, min_periods=1).sum()


def trailing_average(series: pd.Series, window: int) -> pd.Series:
    """Mean over the truncated window (divides by the count actually present)."""
    window = validate_window(window)
    return series.astype(float).rolling(window=window, min_periods=1).mean()


def trailing_max(series: pd.Series, window: int) -> pd.Series:
    window = validate_window(window)
    return series.astype(float).rolling(window=window, min_periods=1).max()


def trailing_min(series: pd.Series, window: int) -> pd.Series:
    window = validate_window(window)
    return series.astype(float).rolling(window=window, min_periods=1).min()


def trailing_extrema(high: pd.Series, low: pd.Series, window: int) -> Tuple[pd.Series, pd.Series]:
    """Windowed highest ``high`` and lowest ``low``, computed jointly."""
    return trailing_max(high, window), trailing_min(low, window)


def trailing_std(series: pd.Series, window: int) -> pd.Series:
    """Population standard deviation over the truncated window (0 for a single value)."""
    window = validate_window(window)
    return series.astype(float).rolling(window=window, min_periods=1).std(ddof=0).fillna(0.0)


def lagged(series: pd.Series, periods: int) -> pd.Series:
    """Value at ``max(0, i - periods)``; the first bar stands in for missing history."""
    if periods < 0:
        raise ConfigurationError(f"periods must be non-negative, got {periods}", field="periods")
    values = series.to_numpy(dtype=float)
    if len(values) == 0:
        return pd.Series(dtype=float, index=series.index)
    positions = np.maximum(np.arange(len(values)) - periods, 0)
    return pd.Series(values[positions], index=series.index)


def previous_values(series: pd.Series) -> pd.Series:
    """Series shifted one bar; bar 0 is paired with itself."""
    return lagged(series, 1)


def percentile_rank(history: Sequence[float], window: int, value: float) -> float:
    """Percentage of the ``window - 1`` most recent prior values that are <= ``value``.

    ``history`` holds prior values only (the current value excluded). Returns 0
    when ``window <= 1`` or no prior values exist.
    """
    window = validate_window(window)
    if window <= 1:
        return 0.0
    priors = list(history)[-(window - 1):]
    if not priors:
        return 0.0
    count = sum(1 for x in priors if x <= value)
    return 100.0 * count / len(priors)


def rolling_percentile_rank(series: pd.Series, window: int) -> pd.Series:
    """Series form of ``percentile_rank``: each bar ranked against its own priors."""
    window = validate_window(window)
    values = series.to_numpy(dtype=float)
    n = len(values)
    counts = np.zeros(n)
    present = np.zeros(n)
    # Rank needs the whole window per bar; compare against each lag in turn
    for lag in range(1, min(window, n)):
        counts[lag:] += values[:-lag] <= values[lag:]
        present[lag:] += 1
    rank = np.divide(counts * 100.0, present, out=np.zeros(n), where=present > 0)
    return pd.Series(rank, index=series.index)


def streak(series: pd.Series) -> pd.Series:
    """Signed run length of consecutive rises (positive) or falls (negative).

    No change resets to 0; a reversal restarts at +1 or -1.

    Example:
        >>> streak(pd.Series([1, 2, 3, 2, 2, 1])).tolist()
        [0.0, 1.0, 2.0, -1.0, 0.0, -1.0]
    """
    values = series.to_numpy(dtype=float)
    out = np.zeros(len(values))
    for i in range(1, len(values)):
        prev = out[i - 1]
        if values[i] > values[i - 1]:
            out[i] = prev + 1 if prev > 0 else 1
        elif values[i] < values[i - 1]:
            out[i] = prev - 1 if prev < 0 else -1
    return pd.Series(out, index=series.index)
