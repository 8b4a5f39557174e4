"""
策略聚合系统 — API 响应模型
"""

from datetime import datetime
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, Field

from aggregator.common.enums import Signal
from aggregator.common.utils import utc_now

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    """统一 API 响应格式"""
    success: bool = True
    data: T | None = None
    error: dict[str, Any] | None = None
    timestamp: datetime = Field(default_factory=utc_now)


class StrategyStatusResponse(BaseModel):
    """子策略状态"""
    name: str
    period: int
    weight: int
    signal: Signal
    due: bool = Field(description="下一个 tick 是否触发")


class StrategyListResponse(BaseModel):
    """子策略列表"""
    strategies: list[StrategyStatusResponse]
    total: int
    total_weight: int


class AggregatorStatusResponse(BaseModel):
    """聚合器状态"""
    tick: int
    total_signal: int
    threshold: int
    possible_signal: int
    last_decision: Signal | None = None
    last_percent: int | None = None
    decided_at: datetime | None = None
    report: str
    strategies: list[StrategyStatusResponse]
