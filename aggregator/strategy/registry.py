"""
策略聚合系统 — 包装器注册表

管理参与投票的策略包装器。注册顺序即投票与报告顺序。
"""

from typing import Iterator

from aggregator.common.logging import get_logger

from .wrapper import StrategyWrapper

logger = get_logger(__name__)


class WrapperRegistry:
    """
    包装器注册表

    以策略名为键；同名包装器只注册一次。
    """

    def __init__(self):
        self._wrappers: dict[str, StrategyWrapper] = {}

    def register(self, wrapper: StrategyWrapper) -> bool:
        """
        注册包装器

        Args:
            wrapper: 包装器实例

        Returns:
            是否新注册（已存在时返回 False，保留原实例）
        """
        if wrapper.name in self._wrappers:
            logger.warning(f"策略已存在，跳过注册: {wrapper.name}")
            return False

        self._wrappers[wrapper.name] = wrapper
        logger.info(
            f"策略已注册: {wrapper.name}, 周期: {wrapper.period}, 权重: {wrapper.weight}",
            extra={"strategy": wrapper.name, "period": wrapper.period, "weight": wrapper.weight},
        )
        return True

    def get(self, name: str) -> StrategyWrapper | None:
        """获取包装器"""
        return self._wrappers.get(name)

    def get_all(self) -> list[StrategyWrapper]:
        """获取所有包装器（注册顺序）"""
        return list(self._wrappers.values())

    @property
    def names(self) -> list[str]:
        """策略名（注册顺序）"""
        return list(self._wrappers)

    @property
    def total_weight(self) -> int:
        """全部权重之和"""
        return sum(w.weight for w in self._wrappers.values())

    @property
    def count(self) -> int:
        """包装器总数"""
        return len(self._wrappers)

    def __contains__(self, name: str) -> bool:
        return name in self._wrappers

    def __iter__(self) -> Iterator[StrategyWrapper]:
        return iter(list(self._wrappers.values()))

    def __len__(self) -> int:
        return len(self._wrappers)
