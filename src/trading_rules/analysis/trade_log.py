import logging
from typing import Optional

import pandas as pd

from trading_rules.analysis.performance import Analysis
from trading_rules.models.order import Order
from trading_rules.models.position import Position
from trading_rules.models.trading_record import TradingRecord

_TIME_FORMAT = '%d %b %y %H:%M UTC'

TRADE_COLUMNS = [
    'security', 'side', 'entry_time', 'exit_time', 'entry_price',
    'exit_price', 'amount', 'cost_basis', 'exit_value', 'profit'
]


def _describe(action: str, order: Order) -> str:
    return (
        f"{order.execution_time.strftime(_TIME_FORMAT)} - {action} with {order.side.value} "
        f"{order.security} ({order.amount} @ ${order.price})"
    )


class LogTradesAnalysis(Analysis):
    """Logs every closed trade at INFO level; always returns 0"""

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)

    def log_trade(self, trade: Position) -> None:
        self.logger.info(_describe('enter', trade.entrance_order))
        self.logger.info(_describe('exit', trade.exit_order))
        self.logger.info(f"Profit: ${trade.profit}")

    def analyze(self, record: TradingRecord) -> float:
        for trade in record.closed_trades:
            self.log_trade(trade)
        return 0.0


def trades_frame(record: TradingRecord) -> pd.DataFrame:
    """One row per closed trade, money columns as floats"""
    return pd.DataFrame([{
        'security': t.entrance_order.security,
        'side': t.side.value,
        'entry_time': t.entrance_order.execution_time,
        'exit_time': t.exit_order.execution_time,
        'entry_price': float(t.entrance_order.price),
        'exit_price': float(t.exit_order.price),
        'amount': float(t.entrance_order.amount),
        'cost_basis': float(t.cost_basis),
        'exit_value': float(t.exit_value),
        'profit': float(t.profit)
    } for t in record.closed_trades], columns=TRADE_COLUMNS)
