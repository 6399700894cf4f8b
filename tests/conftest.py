"""Shared fixtures for indicator tests."""

import pandas as pd
import pytest

from tests.utils import DataPattern, SyntheticDataGenerator, closes_to_frame

# Worked RSI example (StockCharts closes)
STOCKCHARTS_CLOSES = [
    44.34, 44.09, 44.15, 43.61, 44.33, 44.83, 45.10, 45.42,
    45.84, 46.08, 45.89, 46.03, 45.61, 46.28, 46.28,
]


@pytest.fixture
def generator():
    return SyntheticDataGenerator(seed=42)


@pytest.fixture
def ohlcv(generator):
    """120 business days of random-walk OHLCV data."""
    return generator.generate_ohlcv(120)


@pytest.fixture
def flat_ohlcv(generator):
    return generator.generate_ohlcv(50, pattern=DataPattern.FLAT)


@pytest.fixture
def rising_ohlcv(generator):
    return generator.generate_ohlcv(60, pattern=DataPattern.RISING)


@pytest.fixture
def falling_ohlcv(generator):
    return generator.generate_ohlcv(60, pattern=DataPattern.FALLING)


@pytest.fixture
def empty_ohlcv():
    return pd.DataFrame(columns=["open", "high", "low", "close", "volume"], dtype=float)


@pytest.fixture
def stockcharts_closes():
    return closes_to_frame(STOCKCHARTS_CLOSES)
