import logging
from datetime import datetime
from typing import List, Optional

from trading_rules.errors import PositionStateError
from trading_rules.models.order import Order, OrderSide
from trading_rules.models.position import Position
from trading_rules.utils import Number, to_decimal

logger = logging.getLogger(__name__)


class TradingRecord:
    """
    Ordered history of the positions taken during one strategy run.

    Every stored position has been entered; only the last one may still be
    open. The record only grows.
    """

    def __init__(self):
        self._trades: List[Position] = []
        self._pending = Position()

    def _adopt_pending(self) -> None:
        # current_position() hands out the pending position; once entered in
        # place it belongs to the history
        if not self._pending.is_new:
            self._trades.append(self._pending)
            self._pending = Position()

    @property
    def trades(self) -> List[Position]:
        self._adopt_pending()
        return list(self._trades)

    @property
    def closed_trades(self) -> List[Position]:
        return [t for t in self.trades if t.is_closed]

    @property
    def last_trade(self) -> Optional[Position]:
        """Most recent closed position"""
        closed = self.closed_trades
        return closed[-1] if closed else None

    def current_position(self) -> Position:
        """
        The open position, or the New position the next trade will use.

        Entering the returned New position in place records it, the same as
        operate() would.
        """
        self._adopt_pending()
        if self._trades and self._trades[-1].is_open:
            return self._trades[-1]
        return self._pending

    def operate(self, order: Order) -> Position:
        """Enter a new position or exit the open one with the given order"""
        position = self.current_position()
        if position.is_open:
            position.exit(order)
            logger.debug(f"Exited {order.security} with {order.side.value} {order.amount} @ {order.price}")
        else:
            position.enter(order)
            self._adopt_pending()
            logger.debug(f"Entered {order.security} with {order.side.value} {order.amount} @ {order.price}")
        return position

    def enter(
        self,
        side: OrderSide,
        price: Number,
        amount: Number,
        execution_time: datetime,
        security: str = ''
    ) -> Position:
        if self.current_position().is_open:
            raise PositionStateError("Cannot enter while a position is open")
        return self.operate(Order(
            side=side,
            security=security,
            price=to_decimal(price),
            amount=to_decimal(amount),
            execution_time=execution_time
        ))

    def exit(self, price: Number, amount: Number, execution_time: datetime) -> Position:
        """Close the open position; the order side is derived from the entrance"""
        position = self.current_position()
        if not position.is_open:
            raise PositionStateError("No open position to exit")
        return self.operate(position.exit_order_for(price, amount, execution_time))

    def __len__(self) -> int:
        return len(self.trades)
