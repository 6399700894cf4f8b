"""Moving average dispatcher.

Each smoothing kind is a ``MovingAverage`` subclass registered under its
``MovingAvgType``. The kind and window length are validated once, when the
smoother is built by ``get_moving_average``; calling the smoother on a source
series never raises for degenerate data.
"""

import math
from abc import ABC, abstractmethod
from typing import Callable, Dict, Type, Union

import numpy as np
import pandas as pd
from numpy.lib.stride_tricks import sliding_window_view

from ..constants import ALMA_OFFSET, ALMA_SIGMA, KAMA_FAST_LENGTH, KAMA_SLOW_LENGTH, T3_VOLUME_FACTOR
from ..exceptions import ConfigurationError
from ..models.enums import MovingAvgType
from .rolling import lagged, trailing_average, trailing_sum, validate_window


def _ema(source: pd.Series, length: int) -> pd.Series:
    # out[0] = source[0]; out[i] = alpha * source[i] + (1 - alpha) * out[i-1]
    return source.ewm(alpha=2 / (length + 1), adjust=False).mean()


def _wilders(source: pd.Series, length: int) -> pd.Series:
    # Same recurrence as _ema with alpha = 1 / length; out[0] = source[0]
    return source.ewm(alpha=1 / length, adjust=False).mean()


def _weighted_window(source: pd.Series, length: int, weights: Callable[[int], np.ndarray]) -> pd.Series:
    """Weighted mean over the truncated trailing window.

    ``weights(m)`` returns ``m`` weights ordered oldest to newest; they are
    normalized by their sum.
    """
    values = source.to_numpy(dtype=float)
    n = len(values)
    out = np.empty(n)

    for i in range(min(length - 1, n)):
        w = weights(i + 1)
        total = w.sum()
        out[i] = values[: i + 1] @ w / total if total != 0 else values[i]

    if n >= length:
        w = weights(length)
        total = w.sum()
        if total != 0:
            out[length - 1:] = sliding_window_view(values, length) @ w / total
        else:
            out[length - 1:] = values[length - 1:]

    return pd.Series(out, index=source.index)


def _linear_weights(m: int) -> np.ndarray:
    return np.arange(1, m + 1, dtype=float)


def _wma(source: pd.Series, length: int) -> pd.Series:
    return _weighted_window(source, length, _linear_weights)


def _sine_weights(m: int) -> np.ndarray:
    return np.sin(np.arange(1, m + 1) * math.pi / (m + 1))


def _least_squares_weights(m: int) -> np.ndarray:
    # Weights whose dot product with the window is the regression line's value at the newest bar
    if m == 1:
        return np.ones(1)
    x = np.arange(m, dtype=float)
    x_mean = x.mean()
    sxx = ((x - x_mean) ** 2).sum()
    return 1.0 / m + (x - x_mean) * (x[-1] - x_mean) / sxx


def _alma_weights(m: int, offset: float = ALMA_OFFSET, sigma: float = ALMA_SIGMA) -> np.ndarray:
    center = offset * (m - 1)
    width = m / sigma
    x = np.arange(m, dtype=float)
    return np.exp(-((x - center) ** 2) / (2 * width * width))


class MovingAverage(ABC):
    """A smoothing recurrence with a fixed, validated window length."""

    kind: MovingAvgType

    def __init__(self, length: int):
        self.length = validate_window(length)

    def __call__(self, source: pd.Series) -> pd.Series:
        """Smooth ``source``; the result has the same length and index."""
        if not isinstance(source, pd.Series):
            source = pd.Series(source, dtype=float)
        if len(source) == 0:
            return pd.Series(dtype=float, index=source.index)
        return self._compute(source.astype(float))

    @abstractmethod
    def _compute(self, source: pd.Series) -> pd.Series:
        ...

    def __repr__(self) -> str:
        return f"{type(self).__name__}(length={self.length})"


class SimpleMovingAverage(MovingAverage):
    kind = MovingAvgType.SIMPLE

    def _compute(self, source: pd.Series) -> pd.Series:
        return trailing_average(source, self.length)


class ExponentialMovingAverage(MovingAverage):
    kind = MovingAvgType.EXPONENTIAL

    def _compute(self, source: pd.Series) -> pd.Series:
        return _ema(source, self.length)


class WildersMovingAverage(MovingAverage):
    kind = MovingAvgType.WILDERS

    def _compute(self, source: pd.Series) -> pd.Series:
        return _wilders(source, self.length)


class WeightedMovingAverage(MovingAverage):
    """Linear weights 1..K, heaviest on the newest bar."""

    kind = MovingAvgType.WEIGHTED

    def _compute(self, source: pd.Series) -> pd.Series:
        return _wma(source, self.length)


class DoubleExponentialMovingAverage(MovingAverage):
    kind = MovingAvgType.DOUBLE_EXPONENTIAL

    def _compute(self, source: pd.Series) -> pd.Series:
        ema1 = _ema(source, self.length)
        ema2 = _ema(ema1, self.length)
        return 2 * ema1 - ema2


class TripleExponentialMovingAverage(MovingAverage):
    kind = MovingAvgType.TRIPLE_EXPONENTIAL

    def _compute(self, source: pd.Series) -> pd.Series:
        ema1 = _ema(source, self.length)
        ema2 = _ema(ema1, self.length)
        ema3 = _ema(ema2, self.length)
        return 3 * ema1 - 3 * ema2 + ema3


class HullMovingAverage(MovingAverage):
    kind = MovingAvgType.HULL

    def _compute(self, source: pd.Series) -> pd.Series:
        half_length = max(1, self.length // 2)
        sqrt_length = max(1, int(round(math.sqrt(self.length))))
        raw = 2 * _wma(source, half_length) - _wma(source, self.length)
        return _wma(raw, sqrt_length)


class TriangularMovingAverage(MovingAverage):
    kind = MovingAvgType.TRIANGULAR

    def _compute(self, source: pd.Series) -> pd.Series:
        first = trailing_average(source, (self.length + 1) // 2)
        return trailing_average(first, self.length // 2 + 1)


class ZeroLagExponentialMovingAverage(MovingAverage):
    kind = MovingAvgType.ZERO_LAG_EXPONENTIAL

    def _compute(self, source: pd.Series) -> pd.Series:
        lag = (self.length - 1) // 2
        return _ema(2 * source - lagged(source, lag), self.length)


class KaufmanAdaptiveMovingAverage(MovingAverage):
    """EMA whose alpha follows the efficiency ratio (net change / path length)."""

    kind = MovingAvgType.KAUFMAN_ADAPTIVE

    def __init__(self, length: int, fast_length: int = KAMA_FAST_LENGTH, slow_length: int = KAMA_SLOW_LENGTH):
        super().__init__(length)
        self.fast_alpha = 2 / (validate_window(fast_length, "fast_length") + 1)
        self.slow_alpha = 2 / (validate_window(slow_length, "slow_length") + 1)

    def _compute(self, source: pd.Series) -> pd.Series:
        change = (source - lagged(source, self.length)).abs()
        volatility = trailing_sum(source.diff().fillna(0.0).abs(), self.length)
        efficiency = np.divide(
            change.to_numpy(), volatility.to_numpy(), out=np.zeros(len(source)), where=volatility.to_numpy() != 0
        )
        smoothing = (efficiency * (self.fast_alpha - self.slow_alpha) + self.slow_alpha) ** 2

        values = source.to_numpy(dtype=float)
        out = np.empty(len(values))
        out[0] = values[0]
        for i in range(1, len(values)):
            out[i] = out[i - 1] + smoothing[i] * (values[i] - out[i - 1])
        return pd.Series(out, index=source.index)


class ArnaudLegouxMovingAverage(MovingAverage):
    kind = MovingAvgType.ARNAUD_LEGOUX

    def __init__(self, length: int, offset: float = ALMA_OFFSET, sigma: float = ALMA_SIGMA):
        super().__init__(length)
        if not 0 <= offset <= 1:
            raise ConfigurationError(f"offset must be within [0, 1], got {offset}", field="offset")
        if sigma <= 0:
            raise ConfigurationError(f"sigma must be positive, got {sigma}", field="sigma")
        self.offset = offset
        self.sigma = sigma

    def _compute(self, source: pd.Series) -> pd.Series:
        return _weighted_window(source, self.length, lambda m: _alma_weights(m, self.offset, self.sigma))


class TillsonT3MovingAverage(MovingAverage):
    kind = MovingAvgType.TILLSON_T3

    def __init__(self, length: int, volume_factor: float = T3_VOLUME_FACTOR):
        super().__init__(length)
        self.volume_factor = volume_factor

    def _compute(self, source: pd.Series) -> pd.Series:
        v = self.volume_factor
        c1 = -(v ** 3)
        c2 = 3 * v ** 2 + 3 * v ** 3
        c3 = -6 * v ** 2 - 3 * v - 3 * v ** 3
        c4 = 1 + 3 * v + v ** 3 + 3 * v ** 2

        emas = []
        current = source
        for _ in range(6):
            current = _ema(current, self.length)
            emas.append(current)
        return c1 * emas[5] + c2 * emas[4] + c3 * emas[3] + c4 * emas[2]


class LeastSquaresMovingAverage(MovingAverage):
    """Endpoint of the least squares line fitted over the trailing window."""

    kind = MovingAvgType.LEAST_SQUARES

    def _compute(self, source: pd.Series) -> pd.Series:
        return _weighted_window(source, self.length, _least_squares_weights)


class SineWeightedMovingAverage(MovingAverage):
    kind = MovingAvgType.SINE_WEIGHTED

    def _compute(self, source: pd.Series) -> pd.Series:
        return _weighted_window(source, self.length, _sine_weights)


MOVING_AVERAGES: Dict[MovingAvgType, Type[MovingAverage]] = {
    cls.kind: cls
    for cls in (
        SimpleMovingAverage,
        ExponentialMovingAverage,
        WildersMovingAverage,
        WeightedMovingAverage,
        DoubleExponentialMovingAverage,
        TripleExponentialMovingAverage,
        HullMovingAverage,
        TriangularMovingAverage,
        ZeroLagExponentialMovingAverage,
        KaufmanAdaptiveMovingAverage,
        ArnaudLegouxMovingAverage,
        TillsonT3MovingAverage,
        LeastSquaresMovingAverage,
        SineWeightedMovingAverage,
    )
}


def coerce_moving_avg_type(kind: Union[MovingAvgType, str]) -> MovingAvgType:
    """Resolve a MovingAvgType from an enum member, its value or its name."""
    if isinstance(kind, MovingAvgType):
        return kind
    if isinstance(kind, str):
        try:
            return MovingAvgType(kind.lower())
        except ValueError:
            pass
        try:
            return MovingAvgType[kind.upper()]
        except KeyError:
            pass
    raise ConfigurationError(
        f"Unknown moving average type: {kind!r}. Available: {[k.value for k in MovingAvgType]}",
        field="ma_type",
    )


def get_moving_average(kind: Union[MovingAvgType, str], length: int) -> MovingAverage:
    """Build the smoother for ``kind`` with window ``length``.

    Raises:
        ConfigurationError: If the kind is unknown or the length is not a positive integer
    """
    kind = coerce_moving_avg_type(kind)
    try:
        cls = MOVING_AVERAGES[kind]
    except KeyError:
        raise ConfigurationError(f"No implementation registered for {kind.value}", field="ma_type")
    return cls(length)


def moving_average(kind: Union[MovingAvgType, str], length: int, source: pd.Series) -> pd.Series:
    """Smooth ``source`` with the ``kind`` recurrence over ``length`` bars.

    Example:
        >>> moving_average("simple", 3, pd.Series([1.0, 2.0, 3.0, 4.0])).tolist()
        [1.0, 1.5, 2.0, 3.0]
    """
    return get_moving_average(kind, length)(source)
