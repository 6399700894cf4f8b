"""Technical-analysis indicators over OHLCV price series."""

from .configs import IndicatorsConfig, LoggingConfig, load_indicators_config
from .exceptions import ConfigurationError, DataValidationError, IndicatorError, IndicatorsError
from .indicators import (
    compute_indicators,
    compute_indicators_parallel,
    get_moving_average,
    moving_average,
    relative_strength_index,
)
from .logging import get_logger, setup_logging
from .models import Bar, IndicatorResult, InputName, MovingAvgType, Signal

__version__ = "0.1.0"

__all__ = [
    "Bar",
    "InputName",
    "MovingAvgType",
    "Signal",
    "IndicatorResult",
    "IndicatorsConfig",
    "LoggingConfig",
    "load_indicators_config",
    "compute_indicators",
    "compute_indicators_parallel",
    "get_moving_average",
    "moving_average",
    "relative_strength_index",
    "setup_logging",
    "get_logger",
    "IndicatorsError",
    "ConfigurationError",
    "IndicatorError",
    "DataValidationError",
]
