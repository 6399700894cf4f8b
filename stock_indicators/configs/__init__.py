"""Configuration models and validation helpers."""

from .indicator_config import (
    INDICATOR_PARAMS,
    AdaptiveRsiConfig,
    ApirineSlowRsiConfig,
    AsymmetricalRsiConfig,
    AtrChannelConfig,
    AverageAbsoluteErrorNormalizationConfig,
    BreakoutRsiConfig,
    ConnorsRsiConfig,
    DonchianChannelsConfig,
    FoldedRsiConfig,
    FractalChaosBandsConfig,
    IndicatorParams,
    IndicatorRequest,
    IndicatorsConfig,
    LiquidRsiConfig,
    MovingAverageChannelConfig,
    MovingAverageEnvelopeConfig,
    OscillatorParams,
    PriceChannelConfig,
    RsiConfig,
    StdDevChannelConfig,
    StollerChannelConfig,
    VolumeWeightedRsiConfig,
    load_indicators_config,
)
from .logging_config import LoggingConfig
from .validation import ConfigValidationError, build_config, wrap_validation_error

__all__ = [
    "INDICATOR_PARAMS",
    "IndicatorParams",
    "OscillatorParams",
    "RsiConfig",
    "ConnorsRsiConfig",
    "AsymmetricalRsiConfig",
    "AdaptiveRsiConfig",
    "ApirineSlowRsiConfig",
    "BreakoutRsiConfig",
    "LiquidRsiConfig",
    "FoldedRsiConfig",
    "VolumeWeightedRsiConfig",
    "AverageAbsoluteErrorNormalizationConfig",
    "PriceChannelConfig",
    "DonchianChannelsConfig",
    "MovingAverageChannelConfig",
    "MovingAverageEnvelopeConfig",
    "StollerChannelConfig",
    "AtrChannelConfig",
    "FractalChaosBandsConfig",
    "StdDevChannelConfig",
    "IndicatorRequest",
    "IndicatorsConfig",
    "load_indicators_config",
    "LoggingConfig",
    "ConfigValidationError",
    "build_config",
    "wrap_validation_error",
]
