"""
策略聚合系统 — 内置子策略

导入即注册到默认策略目录：
- rsi: RSI 超买超卖
- macd: MACD 柱状图穿越
- trend_ema: EMA 趋势
- speed: 价格速度突变
"""

from .macd import MacdStrategy
from .rsi import RsiStrategy
from .speed import SpeedStrategy
from .trend_ema import TrendEmaStrategy

__all__ = [
    "MacdStrategy",
    "RsiStrategy",
    "SpeedStrategy",
    "TrendEmaStrategy",
]
