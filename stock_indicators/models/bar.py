"""OHLCV bar data model."""

import math
from dataclasses import dataclass
from typing import Optional

import pandas as pd

from .enums import InputName


@dataclass(frozen=True)
class Bar:
    """Single OHLCV bar. Immutable once created."""

    open: float
    high: float
    low: float
    close: float
    volume: float = 0.0
    date: Optional[pd.Timestamp] = None

    def __post_init__(self):
        """Validate OHLC relationships."""
        for name in ("open", "high", "low", "close", "volume"):
            value = getattr(self, name)
            if not math.isfinite(value):
                raise ValueError(f"Invalid bar at {self.date}: {name} must be finite, got {value}")

        if self.high < self.low:
            raise ValueError(f"Invalid OHLC at {self.date}: high ({self.high}) must be >= low ({self.low})")

        if self.volume < 0:
            raise ValueError(f"Negative volume at {self.date}: volume={self.volume}")

    def price(self, input_name: InputName = InputName.CLOSE) -> float:
        """Return the derived price selected by ``input_name``."""
        if input_name == InputName.CLOSE:
            return self.close
        if input_name == InputName.OPEN:
            return self.open
        if input_name == InputName.MEDIAN_PRICE:
            return (self.high + self.low) / 2
        if input_name == InputName.TYPICAL_PRICE:
            return (self.high + self.low + self.close) / 3
        if input_name == InputName.FULL_TYPICAL_PRICE:
            return (self.open + self.high + self.low + self.close) / 4
        if input_name == InputName.WEIGHTED_CLOSE:
            return (self.high + self.low + 2 * self.close) / 4
        raise ValueError(f"Unknown input name: {input_name}")
