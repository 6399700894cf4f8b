"""Parallel indicator computation across independent price series."""

import logging
import os
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Dict, Optional

from ..configs.indicator_config import IndicatorsConfig
from ..models.result import IndicatorResult
from .inputs import PriceData
from .pipeline import compute_indicators, resolve_requests

logger = logging.getLogger(__name__)


def compute_indicators_parallel(
    series_map: Dict[str, PriceData],
    config: IndicatorsConfig,
    max_workers: Optional[int] = None,
) -> Dict[str, Optional[Dict[str, IndicatorResult]]]:
    """Compute the configured indicators for several symbols in parallel.

    Each run owns its inputs and outputs, so threads need no coordination.

    Args:
        series_map: Dictionary mapping symbol to price data
        config: IndicatorsConfig applied to every symbol
        max_workers: Maximum number of worker threads (default: CPU count)

    Returns:
        Dictionary mapping symbol to its results, or None if that symbol failed

    Example:
        >>> results = compute_indicators_parallel({'AAPL': df_aapl, 'MSFT': df_msft}, config)
    """
    # Configuration problems fail the whole batch up front
    resolve_requests(config)

    if max_workers is None:
        max_workers = os.cpu_count() or 1

    results: Dict[str, Optional[Dict[str, IndicatorResult]]] = {}
    if not series_map:
        return results

    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        futures = {executor.submit(compute_indicators, data, config): symbol for symbol, data in series_map.items()}

        for future in as_completed(futures):
            symbol = futures[future]
            try:
                results[symbol] = future.result()
            except Exception as e:
                # Log error but continue with other symbols
                logger.error(f"Error computing indicators for {symbol}: {e}")
                results[symbol] = None

    return {symbol: results[symbol] for symbol in series_map}
