from trading_rules.indicators.base import (
    ClosePriceIndicator,
    ConstantIndicator,
    FixedIndicator,
    HighPriceIndicator,
    Indicator,
    LowPriceIndicator,
    OpenPriceIndicator,
    TypicalPriceIndicator,
    VolumeIndicator,
    as_array,
)
from trading_rules.indicators.registry import IndicatorRegistry
from trading_rules.indicators.technical import (
    MOVING_AVERAGES,
    DifferenceIndicator,
    ExponentialMovingAverage,
    PercentChangeIndicator,
    SimpleMovingAverage,
    macd_indicator,
)
