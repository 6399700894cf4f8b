"""Output bundle returned by every indicator."""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import pandas as pd

from .signals import Signal

SIGNALS_COLUMN = "Signals"


@dataclass(frozen=True)
class IndicatorResult:
    """Named output series, a parallel signal series and the primary series label.

    Attributes:
        name: Indicator name (e.g. "RelativeStrengthIndex")
        outputs: Mapping of output label to Series, all of identical length
        signals: Series of Signal values aligned with the outputs
        primary_label: Label of the output used when chaining into another indicator
    """

    name: str
    outputs: Dict[str, pd.Series]
    signals: pd.Series
    primary_label: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        lengths = {label: len(series) for label, series in self.outputs.items()}
        lengths[SIGNALS_COLUMN] = len(self.signals)
        if len(set(lengths.values())) > 1:
            raise ValueError(f"{self.name}: output series lengths differ: {lengths}")
        if self.primary_label is not None and self.primary_label not in self.outputs:
            raise ValueError(
                f"{self.name}: primary label '{self.primary_label}' not in outputs {list(self.outputs)}"
            )

    def __len__(self) -> int:
        return len(self.signals)

    def __getitem__(self, label: str) -> pd.Series:
        return self.outputs[label]

    @property
    def labels(self) -> list:
        return list(self.outputs)

    @property
    def primary(self) -> pd.Series:
        """Series used as input when this indicator feeds another one."""
        if self.primary_label is None:
            raise ValueError(f"{self.name} has no primary series")
        return self.outputs[self.primary_label]

    def to_frame(self) -> pd.DataFrame:
        """Combine outputs and signals into one DataFrame (one row per bar)."""
        frame = pd.DataFrame(self.outputs, index=self.signals.index)
        frame[SIGNALS_COLUMN] = self.signals
        return frame

    def last(self) -> Dict[str, Any]:
        """Latest value of every output plus the latest signal."""
        if len(self) == 0:
            return {}
        latest: Dict[str, Any] = {label: float(series.iloc[-1]) for label, series in self.outputs.items()}
        latest[SIGNALS_COLUMN] = self.signals.iloc[-1]
        return latest

    def signal_counts(self) -> Dict[Signal, int]:
        counts = {signal: 0 for signal in Signal}
        for signal in self.signals:
            counts[signal] += 1
        return counts
