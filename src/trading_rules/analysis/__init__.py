from trading_rules.analysis.performance import (
    Analysis,
    AverageLossAnalysis,
    AverageProfitAnalysis,
    AverageWinAnalysis,
    BuyAndHoldAnalysis,
    CommissionAnalysis,
    LoseStreakAnalysis,
    MaxLossAnalysis,
    MaxWinAnalysis,
    NumTradesAnalysis,
    OpenPLAnalysis,
    PercentGainAnalysis,
    PeriodProfitAnalysis,
    ProfitableTradesAnalysis,
    TotalProfitAnalysis,
    WinStreakAnalysis,
)
from trading_rules.analysis.trade_log import LogTradesAnalysis, trades_frame
