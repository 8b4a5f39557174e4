"""
策略聚合系统 — 公共分析模块

提供技术指标，供内置子策略复用。
"""

from .indicators import (
    RSIResult,
    calculate_ema,
    calculate_rsi,
    closes_from_state,
    ema_series,
)

__all__ = [
    "RSIResult",
    "calculate_ema",
    "calculate_rsi",
    "closes_from_state",
    "ema_series",
]
