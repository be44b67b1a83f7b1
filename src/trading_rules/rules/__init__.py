from trading_rules.rules.base import (
    And,
    DecreaseRule,
    FixedBarRule,
    IncreaseRule,
    Not,
    Or,
    OverIndicatorRule,
    PositionNewRule,
    PositionOpenRule,
    Rule,
    UnderIndicatorRule,
)
from trading_rules.rules.cross import CrossDownIndicatorRule, CrossRule, CrossUpIndicatorRule
from trading_rules.rules.stop import StopLossRule, TakeProfitRule
