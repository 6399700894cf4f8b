"""Input adapter: turn raw price data into aligned OHLCV series."""

from typing import NamedTuple, Sequence, Union

import numpy as np
import pandas as pd

from ..exceptions import ConfigurationError, DataValidationError
from ..models.bar import Bar
from ..models.enums import InputName

REQUIRED_COLUMNS = ["open", "high", "low", "close"]


class InputValues(NamedTuple):
    """Equal-length series extracted from one input, sharing one index."""

    price: pd.Series
    high: pd.Series
    low: pd.Series
    open: pd.Series
    close: pd.Series
    volume: pd.Series


PriceData = Union[pd.DataFrame, pd.Series, Sequence[Bar], InputValues]


def coerce_input_name(input_name: Union[InputName, str]) -> InputName:
    """Resolve an InputName from an enum member, its value or its name."""
    if isinstance(input_name, InputName):
        return input_name
    if isinstance(input_name, str):
        try:
            return InputName(input_name.lower())
        except ValueError:
            pass
        try:
            return InputName[input_name.upper()]
        except KeyError:
            pass
    raise ConfigurationError(
        f"Unknown input name: {input_name!r}. Available: {[n.value for n in InputName]}",
        field="input_name",
    )


def derive_price(
    open_: pd.Series, high: pd.Series, low: pd.Series, close: pd.Series, input_name: InputName
) -> pd.Series:
    """Compute the price series selected by ``input_name`` from OHLC columns."""
    if input_name == InputName.CLOSE:
        return close.copy()
    if input_name == InputName.OPEN:
        return open_.copy()
    if input_name == InputName.MEDIAN_PRICE:
        return (high + low) / 2
    if input_name == InputName.TYPICAL_PRICE:
        return (high + low + close) / 3
    if input_name == InputName.FULL_TYPICAL_PRICE:
        return (open_ + high + low + close) / 4
    if input_name == InputName.WEIGHTED_CLOSE:
        return (high + low + 2 * close) / 4
    raise ConfigurationError(f"Unknown input name: {input_name}", field="input_name")


def _from_frame(df: pd.DataFrame, input_name: InputName) -> InputValues:
    if len(df.columns) == 0 and len(df) == 0:
        empty = pd.Series(dtype=float, index=df.index)
        return InputValues(empty, empty.copy(), empty.copy(), empty.copy(), empty.copy(), empty.copy())

    frame = df.rename(columns=lambda c: str(c).lower())
    missing = [col for col in REQUIRED_COLUMNS if col not in frame.columns]
    if missing:
        raise DataValidationError(
            f"DataFrame must contain columns: {REQUIRED_COLUMNS}. "
            f"Missing: {missing}. Found: {list(df.columns)}"
        )

    try:
        open_, high, low, close = (frame[col].astype(float) for col in REQUIRED_COLUMNS)
        if "volume" in frame.columns:
            volume = frame["volume"].astype(float)
        else:
            volume = pd.Series(0.0, index=frame.index)
    except (TypeError, ValueError) as e:
        raise DataValidationError(f"OHLCV columns must be numeric: {e}") from e

    price = derive_price(open_, high, low, close, input_name)
    return InputValues(price, high, low, open_, close, volume)


def _from_bars(bars: Sequence[Bar], input_name: InputName) -> InputValues:
    dates = [bar.date for bar in bars]
    if bars and all(date is not None for date in dates):
        index = pd.DatetimeIndex(dates, name="date")
    else:
        index = pd.RangeIndex(len(bars))

    frame = pd.DataFrame(
        {
            "open": [bar.open for bar in bars],
            "high": [bar.high for bar in bars],
            "low": [bar.low for bar in bars],
            "close": [bar.close for bar in bars],
            "volume": [bar.volume for bar in bars],
        },
        index=index,
        dtype=float,
    )
    return _from_frame(frame, input_name)


def _from_series(series: pd.Series) -> InputValues:
    # A bare series (e.g. another indicator's primary output) serves as every price column
    price = series.astype(float)
    return InputValues(
        price,
        price.copy(),
        price.copy(),
        price.copy(),
        price.copy(),
        pd.Series(0.0, index=price.index),
    )


def _check_aligned(values: InputValues) -> InputValues:
    lengths = {field: len(series) for field, series in zip(values._fields, values)}
    if len(set(lengths.values())) > 1:
        raise DataValidationError(f"Input series lengths differ: {lengths}")
    return values


def get_input_values(data: PriceData, input_name: Union[InputName, str] = InputName.CLOSE) -> InputValues:
    """Extract aligned price/high/low/open/close/volume series from ``data``.

    Args:
        data: OHLCV DataFrame, sequence of Bar, bare price Series, or InputValues
        input_name: Which derived price to expose as ``price``

    Returns:
        InputValues with every series of identical length N

    Raises:
        ConfigurationError: If ``input_name`` is unknown
        DataValidationError: If ``data`` is missing OHLC columns or is misaligned
    """
    input_name = coerce_input_name(input_name)

    if isinstance(data, InputValues):
        return _check_aligned(data)
    if isinstance(data, pd.DataFrame):
        return _from_frame(data, input_name)
    if isinstance(data, pd.Series):
        return _from_series(data)
    if isinstance(data, np.ndarray):
        return _from_series(pd.Series(data, dtype=float))
    if isinstance(data, (list, tuple)):
        if all(isinstance(item, Bar) for item in data):
            return _from_bars(data, input_name)
        return _from_series(pd.Series(list(data), dtype=float))

    raise DataValidationError(f"Unsupported input type: {type(data).__name__}")
