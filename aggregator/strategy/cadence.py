"""
策略聚合系统 — 周期分频器

宿主每分钟驱动一次 on_period；周期为 p 的策略每 p 个 tick 触发一次。
"""

from aggregator.common.logging import get_logger
from aggregator.common.models import StrategyContext

from .registry import WrapperRegistry
from .state import PERIOD_MAX, AggregationState
from .wrapper import StrategyWrapper

logger = get_logger(__name__)


class CadenceMultiplexer:
    """
    周期分频器

    共享 tick 计数器在 [0, period_max) 内循环。
    归零只用于限制计数增长，触发判定仅取决于取模。
    """

    def __init__(self, state: AggregationState, period_max: int = PERIOD_MAX):
        if period_max <= 0:
            raise ValueError("period_max must be positive")
        self.state = state
        self.period_max = period_max

    @property
    def tick(self) -> int:
        return self.state.tick

    def due(self, wrapper: StrategyWrapper) -> bool:
        """本 tick 是否触发该策略"""
        return self.state.tick % wrapper.period == 0

    def advance(self) -> None:
        """tick 前进一步，到达上限归零"""
        self.state.tick += 1
        if self.state.tick >= self.period_max:
            self.state.tick = 0

    def run(self, registry: WrapperRegistry, shared: StrategyContext) -> list[str]:
        """
        执行一次分频

        按注册顺序依次调用到期策略的 on_period，然后推进 tick。

        Returns:
            本次触发的策略名
        """
        fired: list[str] = []
        for wrapper in registry:
            if self.due(wrapper):
                signal = wrapper.on_period(shared)
                fired.append(wrapper.name)
                logger.debug(
                    f"策略触发: {wrapper.name} -> {signal.value} (tick={self.state.tick})",
                    extra={"strategy": wrapper.name, "tick": self.state.tick, "signal": signal.value},
                )

        self.advance()
        return fired
