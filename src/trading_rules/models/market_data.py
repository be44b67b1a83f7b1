# src/trading_rules/models/market_data.py
from datetime import datetime, timedelta
from decimal import Decimal
from typing import Iterable, Iterator, List, Optional

import pandas as pd
from pydantic import BaseModel, ConfigDict, Field

from trading_rules.errors import CandleOrderError
from trading_rules.utils import ZERO, to_decimal

_PRICE_COLUMNS = ('open', 'high', 'low', 'close')


class Candle(BaseModel):
    model_config = ConfigDict(frozen=True)

    period_start: datetime
    period: timedelta = Field(timedelta(days=1), description="Bar duration")
    open: Decimal
    high: Decimal
    low: Decimal
    close: Decimal
    volume: Decimal = ZERO

    @property
    def period_end(self) -> datetime:
        return self.period_start + self.period

    @property
    def price_range(self) -> Decimal:
        """High minus low"""
        return self.high - self.low

    @property
    def is_bullish(self) -> bool:
        return self.close > self.open


class TimeSeries:
    """Ordered, append-only sequence of candles indexed 0..N-1"""

    def __init__(self, candles: Optional[Iterable[Candle]] = None, symbol: str = ''):
        self.symbol = symbol
        self._candles: List[Candle] = []
        for candle in candles or []:
            self.add_candle(candle)

    def add_candle(self, candle: Candle) -> None:
        """Append a candle; it must start no earlier than the last candle ends"""
        last = self.last_candle
        if last is not None and candle.period_start < last.period_end:
            raise CandleOrderError(
                f"Candle starting {candle.period_start} overlaps last candle ending {last.period_end}"
            )
        self._candles.append(candle)

    @property
    def candles(self) -> List[Candle]:
        return list(self._candles)

    @property
    def last_candle(self) -> Optional[Candle]:
        return self._candles[-1] if self._candles else None

    @property
    def last_index(self) -> int:
        return len(self._candles) - 1

    def __len__(self) -> int:
        return len(self._candles)

    def __getitem__(self, index: int) -> Candle:
        return self._candles[index]

    def __iter__(self) -> Iterator[Candle]:
        return iter(self._candles)

    @classmethod
    def from_dataframe(
        cls,
        df: pd.DataFrame,
        symbol: str = '',
        period: Optional[timedelta] = None
    ) -> 'TimeSeries':
        """
        Build a series from an OHLC(V) DataFrame.

        :param df: DataFrame with open/high/low/close (volume optional) columns,
            any case, indexed by timestamp or carrying a 'timestamp' column
        :param symbol: Symbol the series belongs to
        :param period: Bar duration (default: smallest gap between rows, or 1 day)
        :return: TimeSeries with one candle per row
        """
        df = df.rename(columns=lambda c: str(c).lower())
        if 'timestamp' in df.columns:
            df = df.set_index('timestamp')
        df = df.sort_index()
        timestamps = pd.to_datetime(df.index)

        missing = [c for c in _PRICE_COLUMNS if c not in df.columns]
        if missing:
            raise ValueError(f"DataFrame is missing columns: {missing}")

        if period is None:
            gaps = timestamps.to_series().diff().dropna()
            period = gaps.min().to_pytimedelta() if len(gaps) else timedelta(days=1)

        series = cls(symbol=symbol)
        for ts, (_, row) in zip(timestamps, df.iterrows()):
            series.add_candle(Candle(
                period_start=ts.to_pydatetime(),
                period=period,
                open=to_decimal(row['open']),
                high=to_decimal(row['high']),
                low=to_decimal(row['low']),
                close=to_decimal(row['close']),
                volume=to_decimal(row['volume']) if 'volume' in df.columns else ZERO
            ))
        return series

    def to_dataframe(self) -> pd.DataFrame:
        """Float OHLCV frame indexed by period start"""
        return pd.DataFrame([{
            'timestamp': c.period_start,
            'open': float(c.open),
            'high': float(c.high),
            'low': float(c.low),
            'close': float(c.close),
            'volume': float(c.volume)
        } for c in self._candles], columns=['timestamp', *_PRICE_COLUMNS, 'volume']).set_index('timestamp')
