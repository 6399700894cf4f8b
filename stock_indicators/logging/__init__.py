"""Logging helpers: setup, structured formatting and performance timing."""

from .logger import (
    PerformanceContext,
    StructuredFormatter,
    get_logger,
    log_performance_metric,
    log_signal_summary,
    setup_logging,
)

__all__ = [
    "setup_logging",
    "get_logger",
    "log_signal_summary",
    "log_performance_metric",
    "PerformanceContext",
    "StructuredFormatter",
]
