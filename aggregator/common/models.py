"""
策略聚合系统 — 数据模型

StrategyContext 由宿主交易引擎持有，聚合器在每个周期内原地读写。
"""

from dataclasses import dataclass, field
from typing import Any

from .enums import Signal


@dataclass
class StrategyContext:
    """
    共享上下文（宿主持有）

    - options: 全局选项；聚合器写入 buy_pct / sell_pct
    - period: 当前 K 线 {time, open, high, low, close, volume}
    - lookback: 历史 K 线，最新在前
    - my_trades: 成交历史
    - in_preroll: 预热阶段标志
    - signal: 聚合决策输出
    """
    options: dict[str, Any] = field(default_factory=dict)
    period: dict[str, Any] = field(default_factory=dict)
    lookback: list[dict[str, Any]] = field(default_factory=list)
    my_trades: list[Any] = field(default_factory=list)
    in_preroll: bool = False
    signal: Signal | str | None = None
