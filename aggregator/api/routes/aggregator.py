"""
策略聚合系统 — 聚合器路由

只读接口：状态行、子策略信号、最近决策。
"""

from fastapi import APIRouter, HTTPException, status

from aggregator.api.dependencies import AggregatorEngineDep
from aggregator.api.schemas import (
    AggregatorStatusResponse,
    ApiResponse,
    StrategyListResponse,
    StrategyStatusResponse,
)
from aggregator.strategy.engine import AggregatorEngine
from aggregator.strategy.wrapper import StrategyWrapper

router = APIRouter(prefix="/aggregator", tags=["聚合器"])


def _strategy_response(engine: AggregatorEngine, wrapper: StrategyWrapper) -> StrategyStatusResponse:
    return StrategyStatusResponse(
        name=wrapper.name,
        period=wrapper.period,
        weight=wrapper.weight,
        signal=wrapper.signal,
        due=engine.cadence.due(wrapper),
    )


@router.get("/status", response_model=ApiResponse[AggregatorStatusResponse])
async def get_status(engine: AggregatorEngineDep) -> ApiResponse[AggregatorStatusResponse]:
    """
    获取聚合器状态

    返回 tick、票数、阈值、最近决策与状态行。
    """
    snapshot = engine.status()
    state = engine.state

    response = AggregatorStatusResponse(
        tick=state.tick,
        total_signal=state.total_signal,
        threshold=state.threshold,
        possible_signal=state.possible_signal,
        last_decision=state.last_decision,
        last_percent=state.last_percent,
        decided_at=state.decided_at,
        report=snapshot["report"],
        strategies=[_strategy_response(engine, w) for w in engine.registry],
    )

    return ApiResponse(data=response)


@router.get("/strategies", response_model=ApiResponse[StrategyListResponse])
async def get_strategies(engine: AggregatorEngineDep) -> ApiResponse[StrategyListResponse]:
    """获取所有子策略"""
    strategies = [_strategy_response(engine, w) for w in engine.registry]

    response = StrategyListResponse(
        strategies=strategies,
        total=len(strategies),
        total_weight=engine.registry.total_weight,
    )

    return ApiResponse(data=response)


@router.get("/strategies/{name}", response_model=ApiResponse[StrategyStatusResponse])
async def get_strategy(name: str, engine: AggregatorEngineDep) -> ApiResponse[StrategyStatusResponse]:
    """获取子策略详情"""
    wrapper = engine.get_wrapper(name)

    if not wrapper:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail={"code": "STRATEGY_NOT_FOUND", "message": f"策略不存在: {name}"},
        )

    return ApiResponse(data=_strategy_response(engine, wrapper))
