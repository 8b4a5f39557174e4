"""
策略聚合系统 — API 依赖注入
"""

from typing import Annotated

from fastapi import Depends, HTTPException, status

from aggregator.common.logging import get_logger
from aggregator.strategy.engine import AggregatorEngine

logger = get_logger(__name__)


# ========================================
# 单例实例（由宿主在启动时注入）
# ========================================

_engine: AggregatorEngine | None = None


def init_services(engine: AggregatorEngine | None = None) -> None:
    """
    初始化服务实例

    宿主完成 setup 后调用，注入聚合引擎。
    """
    global _engine
    _engine = engine
    if engine is not None:
        logger.info(f"API 已绑定聚合引擎: {engine.registry.count} 个策略")


async def get_engine() -> AggregatorEngine:
    """获取聚合引擎"""
    if _engine is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail={"code": "ENGINE_NOT_READY", "message": "聚合引擎尚未初始化"},
        )
    return _engine


AggregatorEngineDep = Annotated[AggregatorEngine, Depends(get_engine)]
