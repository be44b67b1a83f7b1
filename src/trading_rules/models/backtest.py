import logging
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict

from trading_rules.analysis.performance import (
    AverageProfitAnalysis,
    BuyAndHoldAnalysis,
    CommissionAnalysis,
    LoseStreakAnalysis,
    MaxLossAnalysis,
    MaxWinAnalysis,
    NumTradesAnalysis,
    OpenPLAnalysis,
    PercentGainAnalysis,
    ProfitableTradesAnalysis,
    TotalProfitAnalysis,
    WinStreakAnalysis,
)
from trading_rules.core.strategy import TradingStrategy
from trading_rules.models.market_data import TimeSeries
from trading_rules.models.strategy_config import StrategyConfig
from trading_rules.models.trading_record import TradingRecord


class TradeMetrics(BaseModel):
    """Statistics for a set of trades"""
    total_trades: int
    profitable_trades: int
    win_rate: float
    total_profit: float
    average_profit: float
    percent_gain: float
    max_win: float
    max_loss: float
    win_streak: int
    lose_streak: int
    commission: float
    buy_and_hold_profit: float
    open_pl: float

    @classmethod
    def from_record(cls, record: TradingRecord, series: TimeSeries, config: StrategyConfig) -> 'TradeMetrics':
        total_trades = int(NumTradesAnalysis().analyze(record))
        profitable_trades = int(ProfitableTradesAnalysis().analyze(record))
        last_candle = series.last_candle
        return cls(
            total_trades=total_trades,
            profitable_trades=profitable_trades,
            win_rate=profitable_trades / total_trades * 100 if total_trades > 0 else 0.0,
            total_profit=TotalProfitAnalysis().analyze(record),
            average_profit=AverageProfitAnalysis().analyze(record) if total_trades > 0 else 0.0,
            percent_gain=PercentGainAnalysis().analyze(record) * 100,
            max_win=MaxWinAnalysis().analyze(record),
            max_loss=MaxLossAnalysis().analyze(record),
            win_streak=int(WinStreakAnalysis().analyze(record)),
            lose_streak=int(LoseStreakAnalysis().analyze(record)),
            commission=CommissionAnalysis(config.risk_config.commission_pct).analyze(record),
            buy_and_hold_profit=BuyAndHoldAnalysis(series, config.initial_capital).analyze(record),
            open_pl=OpenPLAnalysis(last_candle).analyze(record) if last_candle else 0.0
        )


class BacktestResults(BaseModel):
    """Complete results of a strategy backtest"""
    model_config = ConfigDict(arbitrary_types_allowed=True)

    strategy_config: StrategyConfig
    series: TimeSeries
    record: TradingRecord
    metrics: TradeMetrics

    @property
    def start_date(self) -> Optional[datetime]:
        return self.series[0].period_start if len(self.series) else None

    @property
    def end_date(self) -> Optional[datetime]:
        last = self.series.last_candle
        return last.period_end if last else None


class BacktestRunner:
    def __init__(
        self,
        strategy: TradingStrategy,
        config: StrategyConfig,
        logger: Optional[logging.Logger] = None
    ):
        """
        Replays a strategy over a time series, one bar at a time.

        :param strategy: Strategy deciding entries and exits
        :param config: Strategy configuration (symbol, direction, order amount)
        :param logger: Optional custom logger
        """
        self.strategy = strategy
        self.config = config
        self.logger = logger or logging.getLogger(__name__)

    def run(self, series: TimeSeries) -> BacktestResults:
        """Run backtest and return results"""
        record = TradingRecord()
        if len(series) == 0:
            self.logger.warning("Empty time series, nothing to backtest")

        for index, candle in enumerate(series):
            if self.strategy.should_enter(index, record):
                position = record.enter(
                    self.config.direction.entrance_side,
                    candle.close,
                    self.config.order_amount,
                    candle.period_start,
                    security=self.config.symbol
                )
                self.logger.info(
                    f"Bar {index}: entered {position.side.value} {self.config.symbol} "
                    f"{position.entrance_order.amount} @ {candle.close}"
                )
            elif self.strategy.should_exit(index, record):
                amount = record.current_position().entrance_order.amount
                position = record.exit(candle.close, amount, candle.period_start)
                self.logger.info(
                    f"Bar {index}: exited {self.config.symbol} @ {candle.close}, profit {position.profit}"
                )
            else:
                self.logger.debug(f"Bar {index}: no action")

        if record.current_position().is_open:
            self.logger.info("Position still open at the end of the series")

        return BacktestResults(
            strategy_config=self.config,
            series=series,
            record=record,
            metrics=TradeMetrics.from_record(record, series, self.config)
        )
