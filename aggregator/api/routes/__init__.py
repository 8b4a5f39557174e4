"""
策略聚合系统 — API 路由模块
"""

from .aggregator import router as aggregator_router

__all__ = [
    "aggregator_router",
]
