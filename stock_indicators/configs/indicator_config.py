"""Parameter models for every indicator and the YAML-loadable batch config."""

from pathlib import Path
from typing import Any, Dict, List, Type, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from ..constants import (
    ATR_CHANNEL_MULT,
    ATR_LENGTH,
    CONNORS_ROC_LENGTH,
    CONNORS_RSI_LENGTH,
    CONNORS_STREAK_LENGTH,
    DECIMAL_PRECISION,
    DONCHIAN_LENGTH,
    ENVELOPE_LENGTH,
    ENVELOPE_MULT,
    PRICE_CHANNEL_LENGTH,
    PRICE_CHANNEL_PCT,
    RSI_LENGTH,
    RSI_OVERBOUGHT,
    RSI_OVERSOLD,
    RSI_SIGNAL_LENGTH,
    STD_DEV_CHANNEL_LENGTH,
    STD_DEV_CHANNEL_MULT,
    STOLLER_ATR_MULT,
)
from ..models.enums import InputName, MovingAvgType
from .validation import validate_file_exists, validate_yaml_format, wrap_validation_error


class IndicatorParams(BaseModel):
    """Base for indicator parameter models. Unknown parameters are rejected."""

    model_config = ConfigDict(extra="forbid")

    input_name: InputName = InputName.CLOSE


class OscillatorParams(IndicatorParams):
    """Parameters shared by oscillators classified against overbought/oversold bands."""

    overbought: float = RSI_OVERBOUGHT
    oversold: float = RSI_OVERSOLD

    @model_validator(mode="after")
    def validate_bands(self):
        if self.overbought <= self.oversold:
            raise ValueError(
                f"overbought ({self.overbought}) must be greater than oversold ({self.oversold})"
            )
        return self


class RsiConfig(OscillatorParams):
    ma_type: MovingAvgType = MovingAvgType.WILDERS
    length: int = Field(default=RSI_LENGTH, ge=1)
    signal_length: int = Field(default=RSI_SIGNAL_LENGTH, ge=1)


class ConnorsRsiConfig(OscillatorParams):
    ma_type: MovingAvgType = MovingAvgType.WILDERS
    streak_length: int = Field(default=CONNORS_STREAK_LENGTH, ge=1)
    rsi_length: int = Field(default=CONNORS_RSI_LENGTH, ge=1)
    roc_length: int = Field(default=CONNORS_ROC_LENGTH, ge=1)


class AsymmetricalRsiConfig(OscillatorParams):
    length: int = Field(default=RSI_LENGTH, ge=1)


class AdaptiveRsiConfig(IndicatorParams):
    ma_type: MovingAvgType = MovingAvgType.WILDERS
    length: int = Field(default=RSI_LENGTH, ge=1)


class ApirineSlowRsiConfig(OscillatorParams):
    ma_type: MovingAvgType = MovingAvgType.EXPONENTIAL
    length: int = Field(default=RSI_LENGTH, ge=1)
    smooth_length: int = Field(default=6, ge=1)


class BreakoutRsiConfig(OscillatorParams):
    input_name: InputName = InputName.FULL_TYPICAL_PRICE
    length: int = Field(default=RSI_LENGTH, ge=1)
    lookback_length: int = Field(default=2, ge=1)
    overbought: float = 80.0
    oversold: float = 20.0


class LiquidRsiConfig(OscillatorParams):
    ma_type: MovingAvgType = MovingAvgType.WILDERS
    length: int = Field(default=RSI_LENGTH, ge=1)
    overbought: float = 80.0
    oversold: float = 20.0


class FoldedRsiConfig(OscillatorParams):
    ma_type: MovingAvgType = MovingAvgType.EXPONENTIAL
    length: int = Field(default=RSI_LENGTH, ge=1)
    overbought: float = 50.0
    oversold: float = 10.0


class VolumeWeightedRsiConfig(IndicatorParams):
    ma_type: MovingAvgType = MovingAvgType.WEIGHTED
    length: int = Field(default=10, ge=1)
    smooth_length: int = Field(default=3, ge=1)


class AverageAbsoluteErrorNormalizationConfig(OscillatorParams):
    length: int = Field(default=RSI_LENGTH, ge=1)
    overbought: float = 0.8
    oversold: float = -0.8


class PriceChannelConfig(IndicatorParams):
    ma_type: MovingAvgType = MovingAvgType.EXPONENTIAL
    length: int = Field(default=PRICE_CHANNEL_LENGTH, ge=1)
    pct: float = Field(default=PRICE_CHANNEL_PCT, ge=0, lt=1)


class DonchianChannelsConfig(IndicatorParams):
    length: int = Field(default=DONCHIAN_LENGTH, ge=1)


class MovingAverageChannelConfig(IndicatorParams):
    ma_type: MovingAvgType = MovingAvgType.SIMPLE
    length: int = Field(default=ENVELOPE_LENGTH, ge=1)


class MovingAverageEnvelopeConfig(IndicatorParams):
    ma_type: MovingAvgType = MovingAvgType.SIMPLE
    length: int = Field(default=ENVELOPE_LENGTH, ge=1)
    mult: float = Field(default=ENVELOPE_MULT, ge=0)


class StollerChannelConfig(IndicatorParams):
    ma_type: MovingAvgType = MovingAvgType.SIMPLE
    length: int = Field(default=ATR_LENGTH, ge=1)
    atr_mult: float = Field(default=STOLLER_ATR_MULT, gt=0)


class AtrChannelConfig(IndicatorParams):
    ma_type: MovingAvgType = MovingAvgType.SIMPLE
    length: int = Field(default=ATR_LENGTH, ge=1)
    atr_mult: float = Field(default=ATR_CHANNEL_MULT, gt=0)


class FractalChaosBandsConfig(IndicatorParams):
    pass


class StdDevChannelConfig(IndicatorParams):
    ma_type: MovingAvgType = MovingAvgType.LEAST_SQUARES
    length: int = Field(default=STD_DEV_CHANNEL_LENGTH, ge=1)
    std_dev_mult: float = Field(default=STD_DEV_CHANNEL_MULT, gt=0)


# Registry name -> parameter model
INDICATOR_PARAMS: Dict[str, Type[IndicatorParams]] = {
    "rsi": RsiConfig,
    "connors_rsi": ConnorsRsiConfig,
    "asymmetrical_rsi": AsymmetricalRsiConfig,
    "adaptive_rsi": AdaptiveRsiConfig,
    "apirine_slow_rsi": ApirineSlowRsiConfig,
    "breakout_rsi": BreakoutRsiConfig,
    "liquid_rsi": LiquidRsiConfig,
    "folded_rsi": FoldedRsiConfig,
    "volume_weighted_rsi": VolumeWeightedRsiConfig,
    "average_absolute_error_normalization": AverageAbsoluteErrorNormalizationConfig,
    "price_channel": PriceChannelConfig,
    "donchian_channels": DonchianChannelsConfig,
    "moving_average_channel": MovingAverageChannelConfig,
    "moving_average_envelope": MovingAverageEnvelopeConfig,
    "stoller_average_range_channels": StollerChannelConfig,
    "average_true_range_channel": AtrChannelConfig,
    "fractal_chaos_bands": FractalChaosBandsConfig,
    "standard_deviation_channel": StdDevChannelConfig,
}


class IndicatorRequest(BaseModel):
    """One indicator to run: an output name, a registry key and its parameters."""

    model_config = ConfigDict(extra="forbid")

    name: str = Field(min_length=1)
    indicator: str
    params: Dict[str, Any] = Field(default_factory=dict)

    @model_validator(mode="after")
    def validate_params(self):
        model_class = INDICATOR_PARAMS.get(self.indicator)
        if model_class is None:
            raise ValueError(
                f"Unknown indicator '{self.indicator}'. Available: {sorted(INDICATOR_PARAMS)}"
            )
        # Raises ValidationError, surfaced through the enclosing model
        model_class(**self.params)
        return self

    def to_params(self, default_input: InputName = InputName.CLOSE) -> IndicatorParams:
        """Validated parameter model, falling back to ``default_input`` when no input_name was given."""
        params = dict(self.params)
        model_class = INDICATOR_PARAMS[self.indicator]
        if "input_name" not in params and model_class.model_fields["input_name"].default == InputName.CLOSE:
            params["input_name"] = default_input
        return model_class(**params)


class IndicatorsConfig(BaseModel):
    """Batch of indicators computed over the same price data."""

    model_config = ConfigDict(extra="forbid")

    input_name: InputName = InputName.CLOSE
    precision: int = Field(default=DECIMAL_PRECISION, ge=0, le=12)
    indicators: List[IndicatorRequest] = Field(default_factory=list)

    @model_validator(mode="after")
    def validate_unique_names(self):
        seen = set()
        for request in self.indicators:
            if request.name in seen:
                raise ValueError(f"Duplicate indicator name: '{request.name}'")
            seen.add(request.name)
        return self

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> "IndicatorsConfig":
        """Load an indicators config from a YAML file.

        Raises:
            FileNotFoundError: If the file doesn't exist
            ConfigValidationError: If the YAML or its contents are invalid
        """
        path = str(path)
        validate_file_exists(path, "indicators config")
        data = validate_yaml_format(path)
        try:
            return cls(**data)
        except ValidationError as e:
            raise wrap_validation_error(e, "Indicators config", path) from e


def load_indicators_config(path: Union[str, Path]) -> IndicatorsConfig:
    return IndicatorsConfig.from_yaml(path)
