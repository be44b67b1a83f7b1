from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, model_validator

from trading_rules.errors import OrderSideError, PositionStateError
from trading_rules.models.order import Order, OrderSide
from trading_rules.utils import Number, to_decimal


def _check_exit(entrance_order: Optional[Order], exit_order: Order) -> None:
    if entrance_order is None:
        raise PositionStateError("An exit order requires an entrance order")
    if exit_order.side is entrance_order.side:
        raise OrderSideError(
            f"Exit order must be a {entrance_order.side.opposite.value}, got {exit_order.side.value}"
        )
    if exit_order.execution_time < entrance_order.execution_time:
        raise PositionStateError(
            f"Exit at {exit_order.execution_time} precedes entrance at {entrance_order.execution_time}"
        )


class PositionSide(str, Enum):
    LONG = "long"
    SHORT = "short"

    @property
    def entrance_side(self) -> OrderSide:
        return OrderSide.BUY if self is PositionSide.LONG else OrderSide.SELL


class Position(BaseModel):
    """
    One round-trip trade: an entrance order and, once closed, an exit order.

    A position moves New -> Open -> Closed and is never reopened. Orders are
    only set through enter() and exit(); orders passed to the constructor
    must describe a valid state.
    """
    entrance_order: Optional[Order] = None
    exit_order: Optional[Order] = None

    @model_validator(mode='after')
    def validate_orders(self):
        if self.exit_order is not None:
            _check_exit(self.entrance_order, self.exit_order)
        return self

    @property
    def is_new(self) -> bool:
        return self.entrance_order is None and self.exit_order is None

    @property
    def is_open(self) -> bool:
        return self.entrance_order is not None and self.exit_order is None

    @property
    def is_closed(self) -> bool:
        return self.entrance_order is not None and self.exit_order is not None

    @property
    def is_long(self) -> bool:
        return self.entrance_order is not None and self.entrance_order.side is OrderSide.BUY

    @property
    def is_short(self) -> bool:
        return self.entrance_order is not None and self.entrance_order.side is OrderSide.SELL

    @property
    def side(self) -> Optional[PositionSide]:
        if self.entrance_order is None:
            return None
        return PositionSide.LONG if self.is_long else PositionSide.SHORT

    def enter(self, order: Order) -> None:
        if not self.is_new:
            raise PositionStateError("Cannot enter a position that is not new")
        self.entrance_order = order

    def exit(self, order: Order) -> None:
        if not self.is_open:
            raise PositionStateError("Cannot exit a position that is not open")
        _check_exit(self.entrance_order, order)
        self.exit_order = order

    def exit_order_for(self, price: Number, amount: Number, execution_time: datetime) -> Order:
        """Build the order that closes this position, on the opposite side of the entrance"""
        if not self.is_open:
            raise PositionStateError("Only an open position has an exit side")
        return Order(
            side=self.entrance_order.side.opposite,
            security=self.entrance_order.security,
            price=to_decimal(price),
            amount=to_decimal(amount),
            execution_time=execution_time
        )

    @property
    def cost_basis(self) -> Decimal:
        if self.entrance_order is None:
            raise PositionStateError("Cost basis requires an entrance order")
        return self.entrance_order.price * self.entrance_order.amount

    @property
    def exit_value(self) -> Decimal:
        if not self.is_closed:
            raise PositionStateError("Exit value is only defined for a closed position")
        return self.exit_order.price * self.exit_order.amount

    @property
    def profit(self) -> Decimal:
        """Realized profit; positive when a short was bought back cheaper"""
        if self.is_short:
            return self.cost_basis - self.exit_value
        return self.exit_value - self.cost_basis

    @property
    def is_profitable(self) -> bool:
        if not self.is_closed:
            raise PositionStateError("Only a closed position can be profitable")
        if self.is_long:
            return self.exit_order.price > self.entrance_order.price
        return self.exit_order.price < self.entrance_order.price
