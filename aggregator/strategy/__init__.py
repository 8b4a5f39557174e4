"""
策略聚合系统 — 策略层

策略层负责：
1. 子策略包装（私有状态隔离、本地参数）
2. 周期分频（不同周期的策略共用一个时钟）
3. 加权投票（动态阈值、仓位百分比）

内置子策略随本包导入时注册。
"""

from .base import BaseStrategy, HostServices, ServiceContainer
from .builtin import MacdStrategy, RsiStrategy, SpeedStrategy, TrendEmaStrategy
from .cadence import CadenceMultiplexer
from .catalog import StrategyCatalog, default_catalog, register_strategy
from .engine import AggregatorEngine
from .options import parse_option, parse_options
from .registry import WrapperRegistry
from .reporter import build_report_line
from .state import PERIOD_MAX, AggregationState
from .voting import VoteAggregator, VoteResult
from .wrapper import StrategyWrapper, WrapperState

__all__ = [
    # 基类
    "BaseStrategy",
    "HostServices",
    "ServiceContainer",
    # 目录
    "StrategyCatalog",
    "default_catalog",
    "register_strategy",
    # 包装器
    "StrategyWrapper",
    "WrapperState",
    "parse_option",
    "parse_options",
    # 注册表
    "WrapperRegistry",
    # 聚合
    "AggregationState",
    "CadenceMultiplexer",
    "PERIOD_MAX",
    "VoteAggregator",
    "VoteResult",
    "build_report_line",
    # 引擎
    "AggregatorEngine",
    # 内置策略
    "MacdStrategy",
    "RsiStrategy",
    "SpeedStrategy",
    "TrendEmaStrategy",
]
