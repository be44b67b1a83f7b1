from datetime import datetime, timedelta
from decimal import Decimal

import pandas as pd
import pytest
from pydantic import ValidationError

from trading_rules.errors import CandleOrderError
from trading_rules.models.market_data import Candle, TimeSeries


def candle(day, close=10, period=timedelta(days=1)):
    return Candle(
        period_start=datetime(2020, 1, 1) + timedelta(days=day),
        period=period,
        open=close,
        high=close,
        low=close,
        close=close
    )


def test_add_candle_in_order():
    series = TimeSeries()
    assert series.last_candle is None
    assert series.last_index == -1

    series.add_candle(candle(0))
    series.add_candle(candle(1, close=11))
    assert len(series) == 2
    assert series.last_index == 1
    assert series.last_candle.close == Decimal(11)


def test_add_overlapping_candle_fails():
    series = TimeSeries([candle(0, period=timedelta(days=2))])
    with pytest.raises(CandleOrderError):
        series.add_candle(candle(1))
    with pytest.raises(CandleOrderError):
        series.add_candle(candle(-1))
    assert len(series) == 1


def test_candles_are_immutable():
    with pytest.raises(ValidationError):
        candle(0).close = Decimal(1)


def test_candle_properties():
    c = Candle(period_start=datetime(2020, 1, 1), open=10, high=15, low=9, close=12)
    assert c.period_end == datetime(2020, 1, 2)
    assert c.price_range == Decimal(6)
    assert c.is_bullish


def test_from_dataframe_round_trip():
    df = pd.DataFrame({
        'Open': [1.0, 2.0, 3.0],
        'High': [1.5, 2.5, 3.5],
        'Low': [0.5, 1.5, 2.5],
        'Close': [1.1, 2.1, 3.1],
        'Volume': [100, 200, 300],
    }, index=pd.date_range('2021-01-01', periods=3, freq=pd.Timedelta(hours=1)))

    series = TimeSeries.from_dataframe(df, symbol='ABC')

    assert series.symbol == 'ABC'
    assert len(series) == 3
    assert series[0].close == Decimal('1.1')
    assert series[2].volume == Decimal(300)
    assert series[0].period == timedelta(hours=1)

    out = series.to_dataframe()
    assert list(out.columns) == ['open', 'high', 'low', 'close', 'volume']
    assert out['close'].tolist() == [1.1, 2.1, 3.1]


def test_from_dataframe_with_timestamp_column():
    df = pd.DataFrame({
        'timestamp': ['2021-01-02', '2021-01-01'],
        'open': [2, 1], 'high': [2, 1], 'low': [2, 1], 'close': [2, 1],
    })
    series = TimeSeries.from_dataframe(df)
    assert [c.close for c in series] == [Decimal(1), Decimal(2)]
    assert series[0].volume == Decimal(0)


def test_from_dataframe_missing_columns():
    df = pd.DataFrame({'close': [1.0]}, index=pd.date_range('2021-01-01', periods=1))
    with pytest.raises(ValueError):
        TimeSeries.from_dataframe(df)
