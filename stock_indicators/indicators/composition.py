"""Reusable indicator pipeline.

``run_indicator`` is the single routine every indicator goes through:
extract inputs, compute the named output series, clamp the bounded ones,
round everything to a fixed precision and classify one signal per bar from
the rounded outputs. Indicators differ only in the ``compute`` callable and
the signal rule they pass in.
"""

import logging
from typing import Callable, Dict, Optional, Tuple, Union

import numpy as np
import pandas as pd

from ..constants import DECIMAL_PRECISION
from ..exceptions import IndicatorError
from ..logging.logger import PerformanceContext, log_signal_summary
from ..models.enums import InputName
from ..models.result import IndicatorResult
from .bounding import clamp_series, round_series
from .inputs import InputValues, PriceData, coerce_input_name, get_input_values
from .rolling import previous_values
from .signals import band_signals, compare_signals, threshold_signals, validate_bands

logger = logging.getLogger(__name__)

Outputs = Dict[str, pd.Series]
Compute = Callable[[InputValues], Outputs]
Extractor = Callable[[Outputs, InputValues], pd.Series]
SignalRule = Callable[[Outputs, InputValues], pd.Series]


# Extractors: pick or derive a series from the rounded outputs


def output(label: str) -> Extractor:
    return lambda outputs, inputs: outputs[label]


def price_minus(label: str) -> Extractor:
    """Distance of the input price from an output (e.g. price minus a middle band)."""
    return lambda outputs, inputs: inputs.price - outputs[label]


def spread(minuend: str, subtrahend: str) -> Extractor:
    return lambda outputs, inputs: outputs[minuend] - outputs[subtrahend]


def slope(label: str) -> Extractor:
    """Bar-over-bar change of an output (0 at bar 0)."""

    def extract(outputs: Outputs, inputs: InputValues) -> pd.Series:
        series = outputs[label]
        return series - previous_values(series)

    return extract


# Signal rules


def crossover_rule(delta: Extractor) -> SignalRule:
    """Zero-line crossings of ``delta``."""
    return lambda outputs, inputs: compare_signals(delta(outputs, inputs))


def threshold_rule(value: str, upper: float, lower: float, delta: Optional[Extractor] = None) -> SignalRule:
    """Overbought/oversold exits of output ``value``, falling back to crossings of ``delta``.

    The band ordering is checked here, when the rule is built. ``delta``
    defaults to the slope of ``value``.
    """
    validate_bands(upper, lower)
    delta = delta or slope(value)
    return lambda outputs, inputs: threshold_signals(delta(outputs, inputs), outputs[value], upper, lower)


def band_rule(delta: Extractor, value: Extractor, upper_label: str, lower_label: str) -> SignalRule:
    """Exits of ``value`` from the moving bands ``upper_label``/``lower_label``."""
    return lambda outputs, inputs: band_signals(
        delta(outputs, inputs), value(outputs, inputs), outputs[upper_label], outputs[lower_label]
    )


def run_indicator(
    name: str,
    data: PriceData,
    compute: Compute,
    signal_rule: SignalRule,
    primary: Optional[str] = None,
    bounds: Optional[Dict[str, Tuple[float, float]]] = None,
    input_name: Union[InputName, str] = InputName.CLOSE,
    precision: int = DECIMAL_PRECISION,
) -> IndicatorResult:
    """Compute an indicator and classify its signals.

    Args:
        name: Indicator name recorded on the result
        data: Price data accepted by ``get_input_values``
        compute: Maps the extracted inputs to labelled output series
        signal_rule: Classifies one signal per bar from the rounded outputs
        primary: Output label used when chaining into another indicator
        bounds: Label -> (lower, upper) clamp applied before rounding
        input_name: Price selector passed to the input adapter
        precision: Decimal places every output is rounded to

    Returns:
        IndicatorResult whose outputs and signals all have the input's length

    Raises:
        DataValidationError: If ``data`` is malformed
        IndicatorError: If ``compute`` returns a series of the wrong length
    """
    input_name = coerce_input_name(input_name)
    inputs = get_input_values(data, input_name)
    index = inputs.price.index
    bars = len(index)
    bounds = bounds or {}

    with PerformanceContext(logger, f"indicator:{name}", indicator=name, bars=bars):
        outputs: Outputs = {}
        for label, series in compute(inputs).items():
            values = np.asarray(series, dtype=float)
            if len(values) != bars:
                raise IndicatorError(
                    f"{name}: output '{label}' has {len(values)} values for {bars} bars", indicator_name=name
                )
            result = pd.Series(values, index=index)
            if label in bounds:
                result = clamp_series(result, *bounds[label])
            outputs[label] = round_series(result, precision)

        signals = signal_rule(outputs, inputs)
        signals.index = index

    log_signal_summary(logger, name, signals, bars)
    return IndicatorResult(
        name=name,
        outputs=outputs,
        signals=signals,
        primary_label=primary,
        metadata={"input_name": input_name.value, "precision": precision},
    )
