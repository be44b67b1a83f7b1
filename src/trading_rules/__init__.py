"""Rule and indicator engine for backtesting trading strategies on decimal price series."""

from trading_rules.errors import (
    CandleOrderError,
    EmptyRecordError,
    IndicatorIndexError,
    OrderSideError,
    PositionStateError,
    TradingRulesError,
)
from trading_rules.models.market_data import Candle, TimeSeries
from trading_rules.models.order import Order, OrderSide
from trading_rules.models.position import Position, PositionSide
from trading_rules.models.trading_record import TradingRecord

__version__ = "0.1"
