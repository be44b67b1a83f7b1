from datetime import datetime
from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class OrderSide(str, Enum):
    BUY = "buy"
    SELL = "sell"

    @property
    def opposite(self) -> 'OrderSide':
        return OrderSide.SELL if self is OrderSide.BUY else OrderSide.BUY


class Order(BaseModel):
    """A filled order. Immutable once created."""
    model_config = ConfigDict(frozen=True)

    side: OrderSide
    security: str = Field('', description="Traded symbol")
    price: Decimal = Field(..., gt=0, description="Fill price")
    amount: Decimal = Field(..., gt=0, description="Filled quantity")
    execution_time: datetime

    @property
    def value(self) -> Decimal:
        """Price times amount"""
        return self.price * self.amount
