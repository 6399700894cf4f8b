"""Discrete trading signal states produced per bar."""

from enum import Enum


class Signal(str, Enum):
    """Directional classification of a single bar.

    The STRONG variants mark band exits (an oscillator leaving an
    overbought/oversold zone); the plain variants mark turns and zero-line
    crossings.
    """

    STRONG_BUY = "STRONG_BUY"
    BUY = "BUY"
    NEUTRAL = "NEUTRAL"
    SELL = "SELL"
    STRONG_SELL = "STRONG_SELL"

    @property
    def is_buy(self) -> bool:
        return self in (Signal.BUY, Signal.STRONG_BUY)

    @property
    def is_sell(self) -> bool:
        return self in (Signal.SELL, Signal.STRONG_SELL)

    @property
    def mirrored(self) -> "Signal":
        """Signal obtained when every input is sign-flipped."""
        return _MIRRORS[self]


_MIRRORS = {
    Signal.STRONG_BUY: Signal.STRONG_SELL,
    Signal.BUY: Signal.SELL,
    Signal.NEUTRAL: Signal.NEUTRAL,
    Signal.SELL: Signal.BUY,
    Signal.STRONG_SELL: Signal.STRONG_BUY,
}
