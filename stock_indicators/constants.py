"""Library-wide numeric constants and indicator defaults."""

# Every stored output value is rounded to this many decimal places.
DECIMAL_PRECISION: int = 4

# Oscillator domain
OSCILLATOR_MIN: float = 0.0
OSCILLATOR_MAX: float = 100.0

# RSI parameters
RSI_LENGTH: int = 14
RSI_SIGNAL_LENGTH: int = 3
RSI_OVERBOUGHT: float = 70.0
RSI_OVERSOLD: float = 30.0

# Connors RSI parameters
CONNORS_STREAK_LENGTH: int = 2
CONNORS_RSI_LENGTH: int = 3
CONNORS_ROC_LENGTH: int = 100

# Channel parameters
PRICE_CHANNEL_LENGTH: int = 21
PRICE_CHANNEL_PCT: float = 0.06
DONCHIAN_LENGTH: int = 20
ENVELOPE_LENGTH: int = 20
ENVELOPE_MULT: float = 0.025
ATR_LENGTH: int = 14
STOLLER_ATR_MULT: float = 2.0
ATR_CHANNEL_MULT: float = 2.5
STD_DEV_CHANNEL_LENGTH: int = 40
STD_DEV_CHANNEL_MULT: float = 2.0

# Kaufman adaptive moving average smoothing constants
KAMA_FAST_LENGTH: int = 2
KAMA_SLOW_LENGTH: int = 30

# Arnaud Legoux moving average shape
ALMA_OFFSET: float = 0.85
ALMA_SIGMA: float = 6.0

# Tillson T3 volume factor
T3_VOLUME_FACTOR: float = 0.7
