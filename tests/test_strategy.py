from datetime import datetime

import pytest

from trading_rules.core.strategy import RuleStrategy
from trading_rules.models.order import OrderSide
from trading_rules.models.position import PositionSide
from trading_rules.models.strategy_config import RiskConfig, StrategyConfig
from trading_rules.models.trading_record import TradingRecord
from trading_rules.rules import CrossDownIndicatorRule, FixedBarRule, Or, StopLossRule, TakeProfitRule
from trading_rules.strategies.ma_crossover import MovingAverageCrossStrategy


def test_unstable_period_blocks_rules():
    strategy = RuleStrategy(FixedBarRule(0, 1, 2), FixedBarRule(0, 1, 2), unstable_period=2)
    record = TradingRecord()
    assert not strategy.should_enter(0, record)
    assert not strategy.should_enter(1, record)
    assert strategy.should_enter(2, record)


def test_entry_only_when_new_and_exit_only_when_open():
    strategy = RuleStrategy(FixedBarRule(1), FixedBarRule(1))
    record = TradingRecord()
    assert strategy.should_enter(1, record)
    assert not strategy.should_exit(1, record)

    record.enter(OrderSide.BUY, 10, 1, datetime(2020, 1, 1))
    assert not strategy.should_enter(1, record)
    assert strategy.should_exit(1, record)


def test_negative_unstable_period():
    with pytest.raises(ValueError):
        RuleStrategy(FixedBarRule(), FixedBarRule(), unstable_period=-1)


def test_moving_average_strategy_from_config(series_factory):
    config = StrategyConfig(
        symbol='TEST',
        short_window=2,
        long_window=4,
        unstable_period=1,
        risk_config=RiskConfig(stop_loss_tolerance=-0.05, take_profit_tolerance=0.2)
    )
    strategy = MovingAverageCrossStrategy.from_config(series_factory([1] * 10), config)

    assert strategy.unstable_period == 3
    assert isinstance(strategy.exit_rule, Or)
    assert isinstance(strategy.exit_rule.second, TakeProfitRule)
    assert isinstance(strategy.exit_rule.first, Or)
    assert isinstance(strategy.exit_rule.first.second, StopLossRule)


def test_short_strategy_swaps_rules(series_factory):
    config = StrategyConfig(
        symbol='TEST',
        short_window=2,
        long_window=3,
        moving_average='ema',
        direction=PositionSide.SHORT,
        risk_config=RiskConfig(stop_loss_tolerance=-0.05)
    )
    strategy = MovingAverageCrossStrategy(series_factory([1] * 5), config)
    assert isinstance(strategy.entry_rule, CrossDownIndicatorRule)
