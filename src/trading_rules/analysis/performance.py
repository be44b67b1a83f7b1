"""
Reducers over a finished trading record.

Every analysis returns a float. Only closed trades are considered unless an
analysis says otherwise. Records without closed trades give 0, except
AverageProfitAnalysis which raises EmptyRecordError.
"""
from abc import ABC, abstractmethod
from datetime import timedelta
from decimal import Decimal
from typing import List

from trading_rules.errors import EmptyRecordError
from trading_rules.models.market_data import Candle, TimeSeries
from trading_rules.models.order import Order, OrderSide
from trading_rules.models.position import Position
from trading_rules.models.trading_record import TradingRecord
from trading_rules.utils import ZERO, Number, to_decimal


class Analysis(ABC):
    @abstractmethod
    def analyze(self, record: TradingRecord) -> float:
        pass


def _total_profit(trades: List[Position]) -> Decimal:
    return sum((t.profit for t in trades), ZERO)


class TotalProfitAnalysis(Analysis):
    def analyze(self, record: TradingRecord) -> float:
        return float(_total_profit(record.closed_trades))


class PercentGainAnalysis(Analysis):
    """Last exit value relative to the first cost basis, minus one"""

    def analyze(self, record: TradingRecord) -> float:
        trades = record.closed_trades
        if not trades:
            return 0.0
        return float(trades[-1].exit_value / trades[0].cost_basis - 1)


class NumTradesAnalysis(Analysis):
    def analyze(self, record: TradingRecord) -> float:
        return float(len(record.closed_trades))


class ProfitableTradesAnalysis(Analysis):
    """Number of trades with a positive realized profit"""

    def analyze(self, record: TradingRecord) -> float:
        return float(sum(1 for t in record.closed_trades if t.profit > 0))


class AverageProfitAnalysis(Analysis):
    """Total profit divided by the number of closed trades; raises on an empty record"""

    def analyze(self, record: TradingRecord) -> float:
        trades = record.closed_trades
        if not trades:
            raise EmptyRecordError("Average profit is undefined without closed trades")
        return float(_total_profit(trades) / len(trades))


class PeriodProfitAnalysis(Analysis):
    """
    Average profit per period.

    A record spanning a year analysed with a 30 day period returns the total
    profit divided by 12. Spans shorter than one period give 0.
    """

    def __init__(self, period: timedelta):
        if period <= timedelta(0):
            raise ValueError("Period must be positive")
        self.period = period

    def analyze(self, record: TradingRecord) -> float:
        trades = record.closed_trades
        if not trades:
            return 0.0
        span = trades[-1].exit_order.execution_time - trades[0].entrance_order.execution_time
        periods = span // self.period
        if periods == 0:
            return 0.0
        return float(_total_profit(trades) / periods)


class BuyAndHoldAnalysis(Analysis):
    """
    Profit of buying with `starting_money` at the first close of the series and
    selling at the last close. Baseline for comparing a strategy against.
    """

    def __init__(self, series: TimeSeries, starting_money: Number):
        self.series = series
        self.starting_money = to_decimal(starting_money)

    def analyze(self, record: TradingRecord) -> float:
        if len(record) == 0 or len(self.series) == 0:
            return 0.0

        first, last = self.series[0], self.series[-1]
        amount = self.starting_money / first.close
        position = Position()
        position.enter(Order(
            side=OrderSide.BUY,
            security=self.series.symbol,
            price=first.close,
            amount=amount,
            execution_time=first.period_start
        ))
        position.exit(position.exit_order_for(last.close, amount, last.period_start))
        return float(position.profit)


class CommissionAnalysis(Analysis):
    """Total commission paid, with `commission` given in percent of each order's value"""

    def __init__(self, commission: Number):
        self.rate = to_decimal(commission) / 100

    def analyze(self, record: TradingRecord) -> float:
        total = ZERO
        for trade in record.closed_trades:
            total += trade.cost_basis * self.rate
            total += trade.exit_value * self.rate
        return float(total)


class OpenPLAnalysis(Analysis):
    """Profit of the open position if it were closed at the candle's close"""

    def __init__(self, last_candle: Candle):
        self.last_candle = last_candle

    def analyze(self, record: TradingRecord) -> float:
        position = record.current_position()
        if not position.is_open:
            return 0.0
        market_value = self.last_candle.close * position.entrance_order.amount
        profit = market_value - position.cost_basis
        return float(-profit if position.is_short else profit)


def _longest_streak(trades: List[Position], winning: bool) -> int:
    longest = current = 0
    for trade in trades:
        if trade.is_profitable == winning:
            current += 1
            longest = max(longest, current)
        else:
            current = 0
    return longest


class WinStreakAnalysis(Analysis):
    def analyze(self, record: TradingRecord) -> float:
        return float(_longest_streak(record.closed_trades, winning=True))


class LoseStreakAnalysis(Analysis):
    def analyze(self, record: TradingRecord) -> float:
        return float(_longest_streak(record.closed_trades, winning=False))


class MaxWinAnalysis(Analysis):
    def analyze(self, record: TradingRecord) -> float:
        wins = [t.profit for t in record.closed_trades if t.is_profitable]
        return float(max(wins, default=ZERO))


class MaxLossAnalysis(Analysis):
    """Most negative profit among losing trades, 0 when there are none"""

    def analyze(self, record: TradingRecord) -> float:
        losses = [t.profit for t in record.closed_trades if not t.is_profitable]
        return float(min(losses + [ZERO]))


class AverageWinAnalysis(Analysis):
    def analyze(self, record: TradingRecord) -> float:
        wins = [t.profit for t in record.closed_trades if t.is_profitable]
        if not wins:
            return 0.0
        return float(sum(wins, ZERO) / len(wins))


class AverageLossAnalysis(Analysis):
    def analyze(self, record: TradingRecord) -> float:
        losses = [t.profit for t in record.closed_trades if not t.is_profitable]
        if not losses:
            return 0.0
        return float(sum(losses, ZERO) / len(losses))
