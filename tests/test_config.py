from decimal import Decimal

import pytest
from pydantic import ValidationError

from trading_rules.models.position import PositionSide
from trading_rules.models.strategy_config import RiskConfig, StrategyConfig


def test_defaults():
    config = StrategyConfig(symbol='TEST')
    assert config.direction is PositionSide.LONG
    assert config.order_amount == Decimal(1)
    assert config.moving_average == 'sma'
    assert config.risk_config.stop_loss_tolerance is None


def test_order_amount_from_float_is_exact():
    assert StrategyConfig(symbol='TEST', order_amount=0.1).order_amount == Decimal('0.1')


@pytest.mark.parametrize('kwargs', [
    {'initial_capital': 0},
    {'order_amount': -1},
    {'moving_average': 'unknown'},
    {'moving_average': 'macd'},
    {'moving_average': 'close'},
    {'moving_average': 'difference'},
    {'short_window': 30, 'long_window': 10},
    {'short_window': 0},
    {'unstable_period': -1},
])
def test_invalid_strategy_config(kwargs):
    with pytest.raises(ValidationError):
        StrategyConfig(symbol='TEST', **kwargs)


@pytest.mark.parametrize('kwargs', [
    {'stop_loss_tolerance': 0.05},
    {'stop_loss_tolerance': -1},
    {'take_profit_tolerance': -0.1},
    {'take_profit_tolerance': 1},
    {'commission_pct': -0.5},
])
def test_invalid_risk_config(kwargs):
    with pytest.raises(ValidationError):
        RiskConfig(**kwargs)


def test_symbol_is_required():
    with pytest.raises(ValidationError):
        StrategyConfig()


@pytest.mark.parametrize('name', ['sma', 'ema'])
def test_every_accepted_moving_average_builds_a_strategy(series_factory, name):
    from trading_rules.strategies.ma_crossover import MovingAverageCrossStrategy

    config = StrategyConfig(symbol='TEST', moving_average=name, short_window=2, long_window=4)
    strategy = MovingAverageCrossStrategy(series_factory([1, 2, 3, 4, 5]), config)
    assert strategy.short_average.calculate(4) > strategy.long_average.calculate(4)
