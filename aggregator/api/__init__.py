"""
策略聚合系统 — REST API 模块

提供聚合器的只读状态接口：
- 聚合状态与最近决策
- 子策略信号、周期与权重
"""

from .app import app, create_app
from .dependencies import AggregatorEngineDep, init_services
from .schemas import (
    AggregatorStatusResponse,
    ApiResponse,
    StrategyListResponse,
    StrategyStatusResponse,
)

__all__ = [
    # 应用
    "app",
    "create_app",
    # 依赖
    "init_services",
    "AggregatorEngineDep",
    # 响应模型
    "ApiResponse",
    "AggregatorStatusResponse",
    "StrategyListResponse",
    "StrategyStatusResponse",
]
