from typing import Dict, Optional

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd

from trading_rules.analysis.trade_log import trades_frame
from trading_rules.indicators.base import Indicator, as_array
from trading_rules.models.backtest import BacktestResults


class PerformanceVisualizer:
    def __init__(self, results: BacktestResults, overlays: Optional[Dict[str, Indicator]] = None):
        """
        :param results: Backtest to draw
        :param overlays: Indicators to draw over the price, by label
        """
        self.results = results
        self.overlays = overlays or {}
        self._prepare_data()

    def _prepare_data(self):
        """Prepare DataFrames for visualization"""
        self.market_df = self.results.series.to_dataframe()
        length = len(self.market_df)
        self.overlay_df = pd.DataFrame(
            {label: as_array(indicator, length) for label, indicator in self.overlays.items()},
            index=self.market_df.index
        )

        self.trades_df = trades_frame(self.results.record)
        self.trades_df['cumulative_profit'] = np.cumsum(self.trades_df['profit'].to_numpy(dtype=float))

    def plot_summary(self):
        """Price with trade markers on top, cumulative profit below"""
        fig, (ax1, ax2) = plt.subplots(2, 1, figsize=(15, 10), sharex=True)

        self.market_df['close'].plot(ax=ax1, label='Close', x_compat=True)
        for column in self.overlay_df.columns:
            self.overlay_df[column].plot(ax=ax1, label=column, x_compat=True)
        if not self.trades_df.empty:
            ax1.scatter(self.trades_df['entry_time'], self.trades_df['entry_price'],
                        marker='^', color='green', label='Entry')
            ax1.scatter(self.trades_df['exit_time'], self.trades_df['exit_price'],
                        marker='v', color='red', label='Exit')
        ax1.set_title(f"{self.results.strategy_config.symbol} Trades")
        ax1.set_ylabel('Price')
        ax1.grid(True)
        ax1.legend()

        if not self.trades_df.empty:
            self.trades_df.set_index('exit_time')['cumulative_profit'].plot(ax=ax2, drawstyle='steps-post', x_compat=True)
        ax2.set_title('Cumulative Profit')
        ax2.set_ylabel('Profit')
        ax2.grid(True)

        plt.tight_layout()
        return fig

    def print_summary(self):
        """Print performance summary"""
        metrics = self.results.metrics
        print("Performance Metrics:")
        print(f"Total Profit: ${metrics.total_profit:.2f}")
        print(f"Percent Gain: {metrics.percent_gain:.2f}%")
        print(f"Buy & Hold Profit: ${metrics.buy_and_hold_profit:.2f}")
        print(f"Open P/L: ${metrics.open_pl:.2f}")

        print(f"\nTrade Statistics:")
        print(f"Total Trades: {metrics.total_trades}")
        print(f"Win Rate: {metrics.win_rate:.2f}%")
        print(f"Average Trade Profit: ${metrics.average_profit:.2f}")
        print(f"Max Win: ${metrics.max_win:.2f}")
        print(f"Max Loss: ${metrics.max_loss:.2f}")
        print(f"Win Streak: {metrics.win_streak}")
        print(f"Lose Streak: {metrics.lose_streak}")
        print(f"Commission Paid: ${metrics.commission:.2f}")
