"""Unit tests for the input adapter."""

import numpy as np
import pandas as pd
import pytest

from stock_indicators.exceptions import ConfigurationError, DataValidationError, IndicatorError
from stock_indicators.indicators.inputs import InputValues, coerce_input_name, get_input_values
from stock_indicators.models.bar import Bar
from stock_indicators.models.enums import InputName
from tests.utils import create_sample_bars


@pytest.fixture
def frame():
    return pd.DataFrame(
        {
            "Open": [10.0, 11.0],
            "High": [12.0, 13.0],
            "Low": [9.0, 10.0],
            "Close": [11.0, 12.0],
            "Volume": [100.0, 200.0],
        },
        index=pd.date_range("2024-01-01", periods=2),
    )


class TestGetInputValues:
    """Tests for extracting aligned series."""

    def test_dataframe_columns_case_insensitive(self, frame):
        values = get_input_values(frame)
        assert values.price.tolist() == [11.0, 12.0]
        assert values.volume.tolist() == [100.0, 200.0]
        assert values.price.index.equals(frame.index)

    @pytest.mark.parametrize(
        "input_name,expected",
        [
            (InputName.CLOSE, 11.0),
            (InputName.OPEN, 10.0),
            (InputName.MEDIAN_PRICE, 10.5),
            (InputName.TYPICAL_PRICE, (12.0 + 9.0 + 11.0) / 3),
            (InputName.FULL_TYPICAL_PRICE, (10.0 + 12.0 + 9.0 + 11.0) / 4),
            (InputName.WEIGHTED_CLOSE, (12.0 + 9.0 + 22.0) / 4),
        ],
    )
    def test_price_selectors(self, frame, input_name, expected):
        assert abs(get_input_values(frame, input_name).price.iloc[0] - expected) < 1e-12

    def test_selector_matches_bar_price(self, frame):
        bar = Bar(open=10.0, high=12.0, low=9.0, close=11.0, volume=100.0)
        for input_name in InputName:
            assert abs(get_input_values(frame, input_name).price.iloc[0] - bar.price(input_name)) < 1e-12

    def test_missing_columns(self):
        with pytest.raises(DataValidationError, match="must contain columns"):
            get_input_values(pd.DataFrame({"close": [1.0, 2.0]}))

    def test_missing_column_error_is_indicator_error(self):
        with pytest.raises(IndicatorError):
            get_input_values(pd.DataFrame({"open": [1.0], "close": [1.0]}))

    def test_volume_optional(self, frame):
        values = get_input_values(frame.drop(columns=["Volume"]))
        assert values.volume.tolist() == [0.0, 0.0]

    def test_non_numeric_column(self, frame):
        frame["Close"] = ["a", "b"]
        with pytest.raises(DataValidationError, match="numeric"):
            get_input_values(frame)

    def test_bars(self):
        bars = create_sample_bars([10.0, 11.0, 12.0])
        values = get_input_values(bars)
        assert values.close.tolist() == [10.0, 11.0, 12.0]
        assert values.high.tolist() == [11.0, 12.0, 13.0]
        assert isinstance(values.price.index, pd.DatetimeIndex)

    def test_undated_bars_get_range_index(self):
        bars = [Bar(open=1.0, high=2.0, low=0.5, close=1.5)]
        assert isinstance(get_input_values(bars).price.index, pd.RangeIndex)

    def test_bare_series_used_for_every_price(self):
        series = pd.Series([1.0, 2.0, 3.0])
        values = get_input_values(series, InputName.TYPICAL_PRICE)
        assert values.price.tolist() == [1.0, 2.0, 3.0]
        assert values.high.tolist() == [1.0, 2.0, 3.0]
        assert values.volume.tolist() == [0.0, 0.0, 0.0]

    def test_list_of_floats(self):
        assert get_input_values([1.0, 2.0]).price.tolist() == [1.0, 2.0]

    def test_numpy_array(self):
        assert get_input_values(np.array([1.0, 2.0])).price.tolist() == [1.0, 2.0]

    def test_input_values_pass_through(self, frame):
        values = get_input_values(frame)
        assert get_input_values(values) is values

    def test_misaligned_input_values(self):
        s2 = pd.Series([1.0, 2.0])
        s3 = pd.Series([1.0, 2.0, 3.0])
        with pytest.raises(DataValidationError, match="lengths differ"):
            get_input_values(InputValues(s2, s2, s2, s2, s2, s3))

    @pytest.mark.parametrize(
        "data",
        [
            pd.DataFrame(),
            pd.DataFrame(columns=["open", "high", "low", "close", "volume"], dtype=float),
            [],
            pd.Series(dtype=float),
        ],
    )
    def test_empty_inputs(self, data):
        values = get_input_values(data)
        assert all(len(series) == 0 for series in values)

    def test_unsupported_type(self):
        with pytest.raises(DataValidationError, match="Unsupported input type"):
            get_input_values(42)


class TestCoerceInputName:
    """Tests for resolving input selectors."""

    @pytest.mark.parametrize("value", ["typical_price", "TYPICAL_PRICE", InputName.TYPICAL_PRICE])
    def test_accepted_spellings(self, value):
        assert coerce_input_name(value) == InputName.TYPICAL_PRICE

    def test_unknown_rejected(self):
        with pytest.raises(ConfigurationError, match="Unknown input name"):
            coerce_input_name("vwap")

    def test_unknown_rejected_by_adapter(self, frame):
        with pytest.raises(ConfigurationError):
            get_input_values(frame, "vwap")
