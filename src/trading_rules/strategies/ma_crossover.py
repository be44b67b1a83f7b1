import logging

from trading_rules.core.strategy import RuleStrategy
from trading_rules.indicators.base import ClosePriceIndicator, Indicator
from trading_rules.indicators.registry import IndicatorRegistry
from trading_rules.models.market_data import TimeSeries
from trading_rules.models.position import PositionSide
from trading_rules.models.strategy_config import StrategyConfig
from trading_rules.rules.cross import CrossDownIndicatorRule, CrossUpIndicatorRule
from trading_rules.rules.stop import StopLossRule, TakeProfitRule

logger = logging.getLogger(__name__)


class MovingAverageCrossStrategy(RuleStrategy):
    """
    Long: enter when the fast average crosses above the slow one, exit when
    it crosses back below. Short: the mirror image.

    Stop-loss and take-profit tolerances from the risk config are OR-ed into
    the exit rule of long strategies. Both rules measure the price relative
    to the entrance, which only reads as a loss/gain for longs, so short
    strategies ignore them.
    """

    def __init__(self, series: TimeSeries, config: StrategyConfig):
        close = ClosePriceIndicator(series)
        self.short_average: Indicator = IndicatorRegistry.create(config.moving_average, close, config.short_window)
        self.long_average: Indicator = IndicatorRegistry.create(config.moving_average, close, config.long_window)

        cross_up = CrossUpIndicatorRule(upper=self.long_average, lower=self.short_average)
        cross_down = CrossDownIndicatorRule(upper=self.short_average, lower=self.long_average)

        risk = config.risk_config
        if config.direction is PositionSide.LONG:
            entry_rule, exit_rule = cross_up, cross_down
            if risk.stop_loss_tolerance is not None:
                exit_rule = exit_rule | StopLossRule(series, risk.stop_loss_tolerance)
            if risk.take_profit_tolerance is not None:
                exit_rule = exit_rule | TakeProfitRule(series, risk.take_profit_tolerance)
        else:
            entry_rule, exit_rule = cross_down, cross_up
            if risk.stop_loss_tolerance is not None or risk.take_profit_tolerance is not None:
                logger.warning("Stop-loss/take-profit tolerances are ignored for short strategies")

        super().__init__(
            entry_rule=entry_rule,
            exit_rule=exit_rule,
            unstable_period=max(config.unstable_period, config.long_window - 1)
        )

    @classmethod
    def from_config(cls, series: TimeSeries, config: StrategyConfig) -> 'MovingAverageCrossStrategy':
        return cls(series, config)
