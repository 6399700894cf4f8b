"""Custom exception classes for the indicator library.

Configuration problems are raised before any per-bar work starts. Degenerate
price data (flat series, zero denominators, empty input) never raises; it is
resolved by documented fallback values inside each formula.
"""

from typing import Any, Dict, List, Optional


class IndicatorsError(Exception):
    """Base exception for all indicator library errors."""
    pass


class ConfigurationError(IndicatorsError):
    """Raised when indicator parameters are invalid (window length, smoothing kind, bands)."""

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        errors: Optional[List[Dict[str, Any]]] = None,
        config_path: Optional[str] = None,
    ):
        super().__init__(message)
        self.field = field
        self.errors = errors or []
        self.config_path = config_path


class IndicatorError(IndicatorsError):
    """Raised when an indicator cannot be computed from the supplied input."""

    def __init__(self, message: str, indicator_name: Optional[str] = None, symbol: Optional[str] = None):
        super().__init__(message)
        self.indicator_name = indicator_name
        self.symbol = symbol


class DataValidationError(IndicatorError):
    """Raised when the input frame is malformed (missing columns, misaligned lengths)."""
    pass
