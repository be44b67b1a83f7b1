from decimal import Decimal
from typing import Optional

from trading_rules.indicators.base import ClosePriceIndicator, Indicator
from trading_rules.models.market_data import TimeSeries
from trading_rules.models.trading_record import TradingRecord
from trading_rules.rules.base import Rule
from trading_rules.utils import ONE, Number, to_decimal


def _threshold(tolerance: Number) -> Decimal:
    tolerance = to_decimal(tolerance)
    if not -ONE < tolerance < ONE:
        raise ValueError(f"Tolerance must lie between -1 and 1, got {tolerance}")
    return ONE + tolerance


def _price_indicator(series: Optional[TimeSeries], indicator: Optional[Indicator]) -> Indicator:
    if indicator is not None:
        return indicator
    if series is None:
        raise ValueError("Either a series or a price indicator is required")
    return ClosePriceIndicator(series)


class StopLossRule(Rule):
    """
    Satisfied once price / entrance price falls to 1 + tolerance or below.

    Tolerance is a fraction between -1 and 1, e.g. -0.05 for a 5% stop. The
    entrance price is read from the record's open position on every call.
    """

    def __init__(self, series: Optional[TimeSeries], tolerance: Number, indicator: Optional[Indicator] = None):
        self.indicator = _price_indicator(series, indicator)
        self.threshold = _threshold(tolerance)

    def is_satisfied(self, index: int, record: TradingRecord) -> bool:
        position = record.current_position()
        if not position.is_open:
            return False

        open_price = position.entrance_order.price
        loss = self.indicator.calculate(index) / open_price
        return loss <= self.threshold


class TakeProfitRule(Rule):
    """
    Satisfied once price * amount / cost basis reaches 1 + tolerance.

    Tolerance is a fraction between -1 and 1, e.g. 0.10 for a 10% target.
    """

    def __init__(self, series: Optional[TimeSeries], tolerance: Number, indicator: Optional[Indicator] = None):
        self.indicator = _price_indicator(series, indicator)
        self.threshold = _threshold(tolerance)

    def is_satisfied(self, index: int, record: TradingRecord) -> bool:
        position = record.current_position()
        if not position.is_open:
            return False

        amount = position.entrance_order.amount
        win = self.indicator.calculate(index) * amount / position.cost_basis
        return win >= self.threshold
