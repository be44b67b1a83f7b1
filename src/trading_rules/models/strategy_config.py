from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from trading_rules.indicators.technical import MOVING_AVERAGES
from trading_rules.models.position import PositionSide


class RiskConfig(BaseModel):
    stop_loss_tolerance: Optional[float] = Field(None, gt=-1, le=0, description="Stop-loss tolerance, e.g. -0.05 for 5%")
    take_profit_tolerance: Optional[float] = Field(None, ge=0, lt=1, description="Take-profit tolerance, e.g. 0.10 for 10%")
    commission_pct: float = Field(0.0, ge=0, description="Commission per order, in percent of order value")


class StrategyConfig(BaseModel):
    symbol: str = Field(..., description="Trading symbol")
    initial_capital: float = Field(10000.0, description="Starting money for buy-and-hold comparison")
    order_amount: Decimal = Field(Decimal(1), description="Quantity traded per order")
    direction: PositionSide = Field(PositionSide.LONG, description="Side taken on entry")
    moving_average: str = Field('sma', description="Moving average used for both windows, one of MOVING_AVERAGES")
    short_window: int = Field(10, ge=1, description="Fast moving average window")
    long_window: int = Field(30, ge=1, description="Slow moving average window")
    unstable_period: int = Field(0, ge=0, description="Bars ignored before rules may fire")
    risk_config: RiskConfig = Field(default_factory=RiskConfig)

    @field_validator('initial_capital')
    @classmethod
    def validate_capital(cls, v):
        if v <= 0:
            raise ValueError("Initial capital must be positive")
        return v

    @field_validator('order_amount')
    @classmethod
    def validate_amount(cls, v):
        if v <= 0:
            raise ValueError("Order amount must be positive")
        return v

    @field_validator('moving_average')
    @classmethod
    def validate_moving_average(cls, v):
        if v not in MOVING_AVERAGES:
            raise ValueError(f"'{v}' is not a moving average, expected one of {MOVING_AVERAGES}")
        return v

    @model_validator(mode='after')
    def validate_windows(self):
        if self.short_window >= self.long_window:
            raise ValueError("short_window must be smaller than long_window")
        return self
