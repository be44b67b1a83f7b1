from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Iterable

import numpy as np

from trading_rules.errors import IndicatorIndexError
from trading_rules.models.market_data import Candle, TimeSeries
from trading_rules.utils import Number, to_decimal


class Indicator(ABC):
    """
    Pure mapping from a bar index to a Decimal.

    Implementations keep no per-run state: calling calculate() twice with the
    same index returns the same value, so one indicator can be shared by
    several rules and backtests.
    """

    @abstractmethod
    def calculate(self, index: int) -> Decimal:
        """Value at the given bar index"""


def check_index(index: int, length: int) -> None:
    if index < 0 or index >= length:
        raise IndicatorIndexError(f"Index {index} out of range for series of length {length}")


class CandleIndicator(Indicator):
    """Reads one field of each candle in a time series"""
    field = 'close'

    def __init__(self, series: TimeSeries):
        self.series = series

    def calculate(self, index: int) -> Decimal:
        check_index(index, len(self.series))
        return self.value(self.series[index])

    def value(self, candle: Candle) -> Decimal:
        return getattr(candle, self.field)


class ClosePriceIndicator(CandleIndicator):
    field = 'close'


class OpenPriceIndicator(CandleIndicator):
    field = 'open'


class HighPriceIndicator(CandleIndicator):
    field = 'high'


class LowPriceIndicator(CandleIndicator):
    field = 'low'


class VolumeIndicator(CandleIndicator):
    field = 'volume'


class TypicalPriceIndicator(CandleIndicator):
    def value(self, candle: Candle) -> Decimal:
        return (candle.high + candle.low + candle.close) / 3


class ConstantIndicator(Indicator):
    """Same value at every index"""

    def __init__(self, value: Number):
        self.value = to_decimal(value)

    def calculate(self, index: int) -> Decimal:
        if index < 0:
            raise IndicatorIndexError(f"Negative index {index}")
        return self.value


class FixedIndicator(Indicator):
    """Explicit list of values, one per index"""

    def __init__(self, values: Iterable[Number]):
        self.values = tuple(to_decimal(v) for v in values)

    def calculate(self, index: int) -> Decimal:
        check_index(index, len(self.values))
        return self.values[index]


def as_array(indicator: Indicator, length: int) -> np.ndarray:
    """Float array of the first `length` values, for plotting"""
    return np.array([float(indicator.calculate(i)) for i in range(length)], dtype=float)
