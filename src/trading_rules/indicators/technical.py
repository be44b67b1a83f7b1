from decimal import Decimal

from trading_rules.errors import IndicatorIndexError
from trading_rules.indicators.base import (
    ClosePriceIndicator,
    ConstantIndicator,
    HighPriceIndicator,
    Indicator,
    LowPriceIndicator,
    OpenPriceIndicator,
    TypicalPriceIndicator,
    VolumeIndicator,
)
from trading_rules.indicators.registry import IndicatorRegistry
from trading_rules.utils import ONE, ZERO

IndicatorRegistry.register('close')(ClosePriceIndicator)
IndicatorRegistry.register('open')(OpenPriceIndicator)
IndicatorRegistry.register('high')(HighPriceIndicator)
IndicatorRegistry.register('low')(LowPriceIndicator)
IndicatorRegistry.register('volume')(VolumeIndicator)
IndicatorRegistry.register('typical')(TypicalPriceIndicator)
IndicatorRegistry.register('constant')(ConstantIndicator)


MOVING_AVERAGES = ('sma', 'ema')


def _check_window(window: int) -> int:
    if window < 1:
        raise ValueError("Window must be at least 1")
    return window


def _check_non_negative(index: int) -> None:
    if index < 0:
        raise IndicatorIndexError(f"Negative index {index}")


@IndicatorRegistry.register('sma')
class SimpleMovingAverage(Indicator):
    """Mean of the last `window` values; fewer near the start of the series"""

    def __init__(self, indicator: Indicator, window: int):
        self.indicator = indicator
        self.window = _check_window(window)

    def calculate(self, index: int) -> Decimal:
        _check_non_negative(index)
        start = max(0, index - self.window + 1)
        total = sum((self.indicator.calculate(i) for i in range(start, index + 1)), ZERO)
        return total / Decimal(index - start + 1)


@IndicatorRegistry.register('ema')
class ExponentialMovingAverage(Indicator):
    """EMA with alpha 2/(window+1), seeded with the first value"""

    def __init__(self, indicator: Indicator, window: int):
        self.indicator = indicator
        self.window = _check_window(window)
        self.alpha = Decimal(2) / Decimal(window + 1)

    def calculate(self, index: int) -> Decimal:
        _check_non_negative(index)
        # Recomputed from the start on every call, nothing is cached
        ema = self.indicator.calculate(0)
        for i in range(1, index + 1):
            ema = (self.indicator.calculate(i) - ema) * self.alpha + ema
        return ema


@IndicatorRegistry.register('difference')
class DifferenceIndicator(Indicator):
    def __init__(self, minuend: Indicator, subtrahend: Indicator):
        self.minuend = minuend
        self.subtrahend = subtrahend

    def calculate(self, index: int) -> Decimal:
        return self.minuend.calculate(index) - self.subtrahend.calculate(index)


@IndicatorRegistry.register('macd')
def macd_indicator(base: Indicator, short_window: int, long_window: int) -> Indicator:
    """Fast EMA minus slow EMA"""
    return DifferenceIndicator(
        ExponentialMovingAverage(base, short_window),
        ExponentialMovingAverage(base, long_window)
    )


@IndicatorRegistry.register('percent_change')
class PercentChangeIndicator(Indicator):
    """Change relative to the previous value; zero at index 0"""

    def __init__(self, indicator: Indicator):
        self.indicator = indicator

    def calculate(self, index: int) -> Decimal:
        current = self.indicator.calculate(index)
        if index == 0:
            return ZERO
        previous = self.indicator.calculate(index - 1)
        return current / previous - ONE
