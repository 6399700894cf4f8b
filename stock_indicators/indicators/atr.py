"""True range and Average True Range."""

from typing import Union

import numpy as np
import pandas as pd

from ..constants import ATR_LENGTH
from ..models.enums import InputName, MovingAvgType
from .inputs import InputValues, PriceData, get_input_values
from .moving_average import get_moving_average
from .rolling import previous_values


def true_range(inputs: InputValues) -> pd.Series:
    """Compute the per-bar True Range.

    True Range is the maximum of:
    1. High - Low
    2. |High - Previous Close|
    3. |Low - Previous Close|

    The first bar has no previous close and uses its own close instead.
    """
    prev_close = previous_values(inputs.close)
    tr1 = inputs.high - inputs.low
    tr2 = (inputs.high - prev_close).abs()
    tr3 = (inputs.low - prev_close).abs()

    tr = np.maximum.reduce([tr1.to_numpy(dtype=float), tr2.to_numpy(dtype=float), tr3.to_numpy(dtype=float)])
    return pd.Series(tr, index=inputs.close.index)


def average_true_range(
    data: PriceData,
    length: int = ATR_LENGTH,
    ma_type: Union[MovingAvgType, str] = MovingAvgType.WILDERS,
) -> pd.Series:
    """Smooth the True Range with the selected moving average.

    Args:
        data: OHLC data accepted by ``get_input_values``
        length: Smoothing window (default 14)
        ma_type: Smoothing kind (default Wilder's)

    Returns:
        Series of ATR values, one per bar. No warm-up NaNs: early bars
        average over the history available.

    Example:
        >>> df = pd.DataFrame({
        ...     'open': [100, 101, 100, 102],
        ...     'high': [100, 102, 101, 103],
        ...     'low': [99, 100, 99.5, 101],
        ...     'close': [100.5, 101, 100, 102]
        ... })
        >>> atr14 = average_true_range(df, length=14)
    """
    smoother = get_moving_average(ma_type, length)
    inputs = get_input_values(data, InputName.CLOSE)
    if len(inputs.close) == 0:
        return pd.Series(dtype=float, index=inputs.close.index)
    return smoother(true_range(inputs))
