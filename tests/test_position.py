from datetime import datetime
from decimal import Decimal

import pytest
from pydantic import ValidationError

from trading_rules.errors import OrderSideError, PositionStateError
from trading_rules.models.order import OrderSide
from trading_rules.models.position import Position, PositionSide


def test_new_position_state():
    position = Position()
    assert position.is_new
    assert not position.is_open
    assert not position.is_closed
    assert not position.is_long
    assert not position.is_short
    assert position.side is None


def test_long_lifecycle_and_profit(order_factory):
    position = Position()
    position.enter(order_factory(OrderSide.BUY, 10, 5))
    assert position.is_open
    assert position.is_long
    assert position.side is PositionSide.LONG

    position.exit(order_factory(OrderSide.SELL, 12, 5, day=1))
    assert position.is_closed
    assert position.cost_basis == Decimal(50)
    assert position.exit_value == Decimal(60)
    assert position.exit_value - position.cost_basis == Decimal(10)
    assert position.profit == Decimal(10)
    assert position.is_profitable


def test_short_profit_sign(order_factory):
    position = Position()
    position.enter(order_factory(OrderSide.SELL, 10, 5))
    assert position.is_short
    position.exit(order_factory(OrderSide.BUY, 8, 5, day=1))

    assert position.cost_basis - position.exit_value == Decimal(10)
    assert position.profit == Decimal(10)
    assert position.is_profitable


def test_enter_twice_fails(order_factory):
    position = Position()
    position.enter(order_factory(OrderSide.BUY, 10, 1))
    with pytest.raises(PositionStateError):
        position.enter(order_factory(OrderSide.BUY, 11, 1))


def test_exit_new_position_fails(order_factory):
    with pytest.raises(PositionStateError):
        Position().exit(order_factory(OrderSide.SELL, 10, 1))


def test_closed_position_is_never_reopened(order_factory):
    position = Position()
    position.enter(order_factory(OrderSide.BUY, 10, 1))
    position.exit(order_factory(OrderSide.SELL, 11, 1, day=1))
    with pytest.raises(PositionStateError):
        position.enter(order_factory(OrderSide.BUY, 10, 1, day=2))
    with pytest.raises(PositionStateError):
        position.exit(order_factory(OrderSide.SELL, 10, 1, day=2))


def test_exit_on_same_side_fails(order_factory):
    position = Position()
    position.enter(order_factory(OrderSide.BUY, 10, 1))
    with pytest.raises(OrderSideError):
        position.exit(order_factory(OrderSide.BUY, 11, 1, day=1))
    assert position.is_open


def test_exit_before_entrance_fails(order_factory):
    position = Position()
    position.enter(order_factory(OrderSide.BUY, 10, 1, day=3))
    with pytest.raises(PositionStateError):
        position.exit(order_factory(OrderSide.SELL, 11, 1, day=2))


def test_exit_order_for_derives_opposite_side(order_factory):
    position = Position()
    position.enter(order_factory(OrderSide.SELL, 10, 2, security='ABC'))
    order = position.exit_order_for(9, 2, datetime(2020, 1, 5))
    assert order.side is OrderSide.BUY
    assert order.security == 'ABC'
    assert order.price == Decimal(9)


def test_derived_values_require_orders(order_factory):
    position = Position()
    with pytest.raises(PositionStateError):
        position.cost_basis
    position.enter(order_factory(OrderSide.BUY, 10, 1))
    with pytest.raises(PositionStateError):
        position.exit_value
    with pytest.raises(PositionStateError):
        position.profit


def test_order_is_immutable(order_factory):
    order = order_factory(OrderSide.BUY, 10, 1)
    with pytest.raises(ValidationError):
        order.price = Decimal(11)


def test_order_rejects_non_positive_amount(order_factory):
    with pytest.raises(ValueError):
        order_factory(OrderSide.BUY, 10, 0)


def test_constructed_closed_position_is_valid(order_factory):
    position = Position(
        entrance_order=order_factory(OrderSide.BUY, 10, 5),
        exit_order=order_factory(OrderSide.SELL, 12, 5, day=1)
    )
    assert position.is_closed
    assert position.profit == Decimal(10)


def test_constructor_rejects_exit_on_same_side(order_factory):
    with pytest.raises(ValidationError, match="Exit order must be a sell"):
        Position(
            entrance_order=order_factory(OrderSide.BUY, 10, 5),
            exit_order=order_factory(OrderSide.BUY, 12, 5, day=1)
        )


def test_constructor_rejects_exit_without_entrance(order_factory):
    with pytest.raises(ValidationError, match="requires an entrance order"):
        Position(exit_order=order_factory(OrderSide.BUY, 10, 1))


def test_constructor_rejects_exit_before_entrance(order_factory):
    with pytest.raises(ValidationError, match="precedes entrance"):
        Position(
            entrance_order=order_factory(OrderSide.SELL, 10, 1, day=2),
            exit_order=order_factory(OrderSide.BUY, 9, 1, day=1)
        )
