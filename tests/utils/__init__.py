"""Test utilities for indicator tests."""

from .assertions import assert_no_lookahead, assert_valid_result, assert_within_bounds
from .data_generator import DataPattern, SyntheticDataGenerator, generate_edge_case_data, generate_trend_data
from .test_helpers import closes_to_frame, create_sample_bar, create_sample_bars

__all__ = [
    # Helpers
    "create_sample_bar",
    "create_sample_bars",
    "closes_to_frame",
    # Assertions
    "assert_valid_result",
    "assert_within_bounds",
    "assert_no_lookahead",
    # Data Generator
    "SyntheticDataGenerator",
    "DataPattern",
    "generate_trend_data",
    "generate_edge_case_data",
]
