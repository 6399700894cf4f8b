"""Config-driven batch runner over the indicator registry."""

import logging
from typing import Callable, Dict, List, Tuple

from ..configs.indicator_config import IndicatorParams, IndicatorsConfig
from ..constants import DECIMAL_PRECISION
from ..exceptions import ConfigurationError
from ..logging.logger import PerformanceContext
from ..models.result import IndicatorResult
from .channels import (
    average_true_range_channel,
    donchian_channels,
    fractal_chaos_bands,
    moving_average_channel,
    moving_average_envelope,
    price_channel,
    standard_deviation_channel,
    stoller_average_range_channels,
)
from .inputs import PriceData
from .rsi import (
    adaptive_rsi,
    apirine_slow_rsi,
    asymmetrical_rsi,
    average_absolute_error_normalization,
    breakout_rsi,
    connors_rsi,
    folded_rsi,
    liquid_rsi,
    relative_strength_index,
    volume_weighted_rsi,
)

logger = logging.getLogger(__name__)

IndicatorFunction = Callable[..., IndicatorResult]

INDICATORS: Dict[str, IndicatorFunction] = {
    "rsi": relative_strength_index,
    "connors_rsi": connors_rsi,
    "asymmetrical_rsi": asymmetrical_rsi,
    "adaptive_rsi": adaptive_rsi,
    "apirine_slow_rsi": apirine_slow_rsi,
    "breakout_rsi": breakout_rsi,
    "liquid_rsi": liquid_rsi,
    "folded_rsi": folded_rsi,
    "volume_weighted_rsi": volume_weighted_rsi,
    "average_absolute_error_normalization": average_absolute_error_normalization,
    "price_channel": price_channel,
    "donchian_channels": donchian_channels,
    "moving_average_channel": moving_average_channel,
    "moving_average_envelope": moving_average_envelope,
    "stoller_average_range_channels": stoller_average_range_channels,
    "average_true_range_channel": average_true_range_channel,
    "fractal_chaos_bands": fractal_chaos_bands,
    "standard_deviation_channel": standard_deviation_channel,
}


def compute_indicator(indicator: str, data: PriceData, precision: int = DECIMAL_PRECISION, **params) -> IndicatorResult:
    """Run one registered indicator by its registry key.

    Example:
        >>> result = compute_indicator("rsi", df, length=10)
    """
    try:
        function = INDICATORS[indicator]
    except KeyError:
        raise ConfigurationError(
            f"Unknown indicator '{indicator}'. Available: {sorted(INDICATORS)}", field="indicator"
        )
    return function(data, precision=precision, **params)


def resolve_requests(config: IndicatorsConfig) -> List[Tuple[str, str, IndicatorParams]]:
    """Validate every request's parameters before any computation starts."""
    return [
        (request.name, request.indicator, request.to_params(config.input_name)) for request in config.indicators
    ]


def compute_indicators(data: PriceData, config: IndicatorsConfig) -> Dict[str, IndicatorResult]:
    """Compute every indicator listed in ``config`` over the same price data.

    Args:
        data: Price data accepted by ``get_input_values``
        config: Validated IndicatorsConfig

    Returns:
        Mapping of request name to IndicatorResult, in request order

    Raises:
        ConfigurationError: If any request's parameters are invalid (nothing is computed)
    """
    requests = resolve_requests(config)
    results: Dict[str, IndicatorResult] = {}

    with PerformanceContext(logger, "compute_indicators", log_memory=True, indicators=len(requests)):
        for name, indicator, params in requests:
            results[name] = compute_indicator(
                indicator, data, precision=config.precision, **dict(params)
            )

    logger.debug(f"Computed {len(results)} indicators: {list(results)}")
    return results
