import matplotlib

matplotlib.use('Agg')

import matplotlib.pyplot as plt

from trading_rules.core.strategy import RuleStrategy
from trading_rules.indicators import ClosePriceIndicator, SimpleMovingAverage
from trading_rules.models.backtest import BacktestRunner
from trading_rules.models.strategy_config import StrategyConfig
from trading_rules.rules import FixedBarRule
from trading_rules.visualization.performance import PerformanceVisualizer


def run(series):
    config = StrategyConfig(symbol='TEST')
    strategy = RuleStrategy(FixedBarRule(0, 3), FixedBarRule(2, 5))
    return BacktestRunner(strategy, config).run(series)


def test_plot_summary(series_factory):
    series = series_factory([10, 11, 12, 13, 12, 11])
    overlays = {'SMA 3': SimpleMovingAverage(ClosePriceIndicator(series), 3)}
    visualizer = PerformanceVisualizer(run(series), overlays=overlays)

    assert visualizer.trades_df['cumulative_profit'].tolist() == [2.0, 0.0]
    assert list(visualizer.overlay_df.columns) == ['SMA 3']

    fig = visualizer.plot_summary()
    assert len(fig.axes) == 2
    plt.close(fig)


def test_plot_without_trades(series_factory):
    series = series_factory([10, 11])
    config = StrategyConfig(symbol='TEST')
    results = BacktestRunner(RuleStrategy(FixedBarRule(), FixedBarRule()), config).run(series)

    fig = PerformanceVisualizer(results).plot_summary()
    plt.close(fig)


def test_print_summary(series_factory, capsys):
    PerformanceVisualizer(run(series_factory([10, 11, 12, 13, 12, 11]))).print_summary()
    out = capsys.readouterr().out
    assert "Total Trades: 2" in out
    assert "Win Rate: 50.00%" in out
