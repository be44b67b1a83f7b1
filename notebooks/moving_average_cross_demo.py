#%% [markdown]
# # Moving Average Cross Demo

#
# This file is configured to run in VS Code's Interactive Window.

# ## Load and prepare market data
#%%
import logging

import pandas as pd
from trading_rules.indicators import ClosePriceIndicator, SimpleMovingAverage
from trading_rules.models.backtest import BacktestRunner
from trading_rules.models.market_data import TimeSeries
from trading_rules.models.strategy_config import RiskConfig, StrategyConfig
from trading_rules.strategies.ma_crossover import MovingAverageCrossStrategy
from trading_rules.visualization.performance import PerformanceVisualizer

logging.basicConfig(level=logging.INFO)

df = pd.read_csv('../data/raw/USDJPY.csv', parse_dates=['local_time_GMT'])
df = df.rename(columns={
    'local_time_GMT': 'timestamp',
    'USDJPY_Open': 'open',
    'USDJPY_High': 'high',
    'USDJPY_Low': 'low',
    'USDJPY_Close': 'close',
})
series = TimeSeries.from_dataframe(df, symbol='USDJPY')

#%% [markdown]
# ## Configure and run backtest

#%%
strategy_config = StrategyConfig(
    symbol='USDJPY',
    initial_capital=100000,
    order_amount=1000,
    moving_average='sma',
    short_window=20,
    long_window=50,
    risk_config=RiskConfig(
        stop_loss_tolerance=-0.02,
        take_profit_tolerance=0.04,
        commission_pct=0.01
    )
)

strategy = MovingAverageCrossStrategy.from_config(series, strategy_config)
runner = BacktestRunner(strategy, strategy_config)
results = runner.run(series)

# Visualize results
close = ClosePriceIndicator(series)
visualizer = PerformanceVisualizer(results, overlays={
    'SMA 20': SimpleMovingAverage(close, 20),
    'SMA 50': SimpleMovingAverage(close, 50),
})
visualizer.print_summary()
visualizer.plot_summary()
# %%
