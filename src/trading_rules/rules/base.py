from abc import ABC, abstractmethod

from trading_rules.indicators.base import Indicator
from trading_rules.models.trading_record import TradingRecord


class Rule(ABC):
    """
    Boolean condition evaluated at a bar index against a trading record.

    Rules read the record and their indicators but never modify them, so
    they may be evaluated any number of times per index. Combine rules with
    `&`, `|` and `~`.
    """

    @abstractmethod
    def is_satisfied(self, index: int, record: TradingRecord) -> bool:
        pass

    def __and__(self, other: 'Rule') -> 'Rule':
        return And(self, other)

    def __or__(self, other: 'Rule') -> 'Rule':
        return Or(self, other)

    def __invert__(self) -> 'Rule':
        return Not(self)


class And(Rule):
    def __init__(self, first: Rule, second: Rule):
        self.first = first
        self.second = second

    def is_satisfied(self, index: int, record: TradingRecord) -> bool:
        return self.first.is_satisfied(index, record) and self.second.is_satisfied(index, record)


class Or(Rule):
    def __init__(self, first: Rule, second: Rule):
        self.first = first
        self.second = second

    def is_satisfied(self, index: int, record: TradingRecord) -> bool:
        return self.first.is_satisfied(index, record) or self.second.is_satisfied(index, record)


class Not(Rule):
    def __init__(self, rule: Rule):
        self.rule = rule

    def is_satisfied(self, index: int, record: TradingRecord) -> bool:
        return not self.rule.is_satisfied(index, record)


class OverIndicatorRule(Rule):
    """Satisfied when the first indicator is strictly above the second"""

    def __init__(self, first: Indicator, second: Indicator):
        self.first = first
        self.second = second

    def is_satisfied(self, index: int, record: TradingRecord) -> bool:
        return self.first.calculate(index) > self.second.calculate(index)


class UnderIndicatorRule(Rule):
    """Satisfied when the first indicator is strictly below the second"""

    def __init__(self, first: Indicator, second: Indicator):
        self.first = first
        self.second = second

    def is_satisfied(self, index: int, record: TradingRecord) -> bool:
        return self.first.calculate(index) < self.second.calculate(index)


class PositionNewRule(Rule):
    def is_satisfied(self, index: int, record: TradingRecord) -> bool:
        return record.current_position().is_new


class PositionOpenRule(Rule):
    def is_satisfied(self, index: int, record: TradingRecord) -> bool:
        return record.current_position().is_open


class FixedBarRule(Rule):
    """Satisfied only at the given indices"""

    def __init__(self, *indices: int):
        self.indices = frozenset(indices)

    def is_satisfied(self, index: int, record: TradingRecord) -> bool:
        return index in self.indices


class IncreaseRule(Rule):
    """Satisfied when the indicator rose since the previous bar"""

    def __init__(self, indicator: Indicator):
        self.indicator = indicator

    def is_satisfied(self, index: int, record: TradingRecord) -> bool:
        if index == 0:
            return False
        return self.indicator.calculate(index) > self.indicator.calculate(index - 1)


class DecreaseRule(Rule):
    """Satisfied when the indicator fell since the previous bar"""

    def __init__(self, indicator: Indicator):
        self.indicator = indicator

    def is_satisfied(self, index: int, record: TradingRecord) -> bool:
        if index == 0:
            return False
        return self.indicator.calculate(index) < self.indicator.calculate(index - 1)
