from datetime import datetime, timedelta

import pytest

from trading_rules.models.market_data import Candle, TimeSeries
from trading_rules.models.order import Order
from trading_rules.utils import to_decimal

START = datetime(2020, 1, 1)


def make_series(closes, symbol='TEST'):
    series = TimeSeries(symbol=symbol)
    for i, close in enumerate(closes):
        price = to_decimal(close)
        series.add_candle(Candle(
            period_start=START + timedelta(days=i),
            open=price,
            high=price,
            low=price,
            close=price,
            volume=100
        ))
    return series


def make_order(side, price, amount, day=0, security='TEST'):
    return Order(
        side=side,
        security=security,
        price=to_decimal(price),
        amount=to_decimal(amount),
        execution_time=START + timedelta(days=day)
    )


@pytest.fixture
def series_factory():
    return make_series


@pytest.fixture
def order_factory():
    return make_order
