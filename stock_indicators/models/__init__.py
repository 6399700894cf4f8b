"""Indicator data models."""

from .bar import Bar
from .enums import InputName, MovingAvgType
from .result import SIGNALS_COLUMN, IndicatorResult
from .signals import Signal

__all__ = [
    "Bar",
    "InputName",
    "MovingAvgType",
    "Signal",
    "IndicatorResult",
    "SIGNALS_COLUMN",
]
