from trading_rules.indicators.base import Indicator
from trading_rules.models.trading_record import TradingRecord
from trading_rules.rules.base import Rule


def _compare(a, b) -> int:
    return (a > b) - (a < b)


class CrossRule(Rule):
    """
    Fires at the single bar where `lower` reaches the `cmp` side of `upper`.

    Walking back from the previous bar, bars where the two indicators are
    equal are skipped. The first unequal bar decides: already on the `cmp`
    side means the cross happened earlier, on the other side confirms a
    cross at this bar. A history of nothing but ties is not a cross.
    """

    def __init__(self, upper: Indicator, lower: Indicator, cmp: int):
        if cmp not in (1, -1):
            raise ValueError("cmp must be 1 or -1")
        self.upper = upper
        self.lower = lower
        self.cmp = cmp

    def _sign(self, index: int) -> int:
        return _compare(self.lower.calculate(index), self.upper.calculate(index))

    def is_satisfied(self, index: int, record: TradingRecord) -> bool:
        if index == 0:
            return False

        if self._sign(index) != self.cmp:
            return False

        for i in range(index - 1, -1, -1):
            sign = self._sign(i)
            if sign == self.cmp:
                return False
            if sign == -self.cmp:
                return True

        return False


class CrossUpIndicatorRule(CrossRule):
    """Satisfied when `lower` crosses above `upper`"""

    def __init__(self, upper: Indicator, lower: Indicator):
        super().__init__(upper=upper, lower=lower, cmp=1)


class CrossDownIndicatorRule(CrossRule):
    """Satisfied when `upper` crosses below `lower`"""

    def __init__(self, upper: Indicator, lower: Indicator):
        super().__init__(upper=lower, lower=upper, cmp=-1)
