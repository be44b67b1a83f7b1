from abc import ABC, abstractmethod

from trading_rules.models.trading_record import TradingRecord
from trading_rules.rules.base import Rule


class TradingStrategy(ABC):
    @abstractmethod
    def should_enter(self, index: int, record: TradingRecord) -> bool:
        """Define entry logic"""
        pass

    @abstractmethod
    def should_exit(self, index: int, record: TradingRecord) -> bool:
        """Define exit logic"""
        pass


class RuleStrategy(TradingStrategy):
    """
    Entry and exit rules plus an unstable period.

    Neither rule is consulted during the first `unstable_period` bars, while
    slow indicators are still warming up. The entry rule only applies when no
    position is open and the exit rule only when one is.
    """

    def __init__(self, entry_rule: Rule, exit_rule: Rule, unstable_period: int = 0):
        if unstable_period < 0:
            raise ValueError("Unstable period cannot be negative")
        self.entry_rule = entry_rule
        self.exit_rule = exit_rule
        self.unstable_period = unstable_period

    def should_enter(self, index: int, record: TradingRecord) -> bool:
        if index < self.unstable_period:
            return False
        if record.current_position().is_new:
            return self.entry_rule.is_satisfied(index, record)
        return False

    def should_exit(self, index: int, record: TradingRecord) -> bool:
        if index < self.unstable_period:
            return False
        if record.current_position().is_open:
            return self.exit_rule.is_satisfied(index, record)
        return False
