class TradingRulesError(Exception):
    """Base class for errors raised by trading_rules"""


class IndicatorIndexError(TradingRulesError, IndexError):
    """Indicator evaluated at an index outside its series"""


class PositionStateError(TradingRulesError, ValueError):
    """Operation not allowed in the position's current lifecycle state"""


class OrderSideError(PositionStateError):
    """Exit order on the same side as the entrance order"""


class CandleOrderError(TradingRulesError, ValueError):
    """Candle added out of chronological order"""


class EmptyRecordError(TradingRulesError, ZeroDivisionError):
    """Average requested over a trading record with no closed trades"""
