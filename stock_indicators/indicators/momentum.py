"""Momentum primitives (Rate of Change)."""

import numpy as np
import pandas as pd

from .rolling import validate_window


def rate_of_change(price: pd.Series, length: int) -> pd.Series:
    """Compute Rate of Change in percent over ``length`` bars.

    Formula: (price[t] - price[t-length]) / price[t-length] * 100

    Returns:
        Series with ROC values. Bars without ``length`` bars of history, and
        bars whose reference price is zero, are 0.

    Example:
        >>> rate_of_change(pd.Series([100.0, 110.0, 121.0]), length=1).tolist()
        [0.0, 10.0, 10.0]
    """
    length = validate_window(length)
    values = price.to_numpy(dtype=float)
    n = len(values)
    roc = np.zeros(n)
    if n > length:
        current = values[length:]
        reference = values[:-length]
        np.divide((current - reference) * 100.0, reference, out=roc[length:], where=reference != 0)
    return pd.Series(roc, index=price.index)
