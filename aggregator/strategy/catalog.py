"""
策略聚合系统 — 策略目录

策略名 → 工厂函数。子策略在导入时显式注册，聚合器按名称解析，
不做任何运行时模块查找。
"""

from typing import Callable

from aggregator.common.exceptions import LoadError, StrategyError
from aggregator.common.logging import get_logger

from .base import BaseStrategy, HostServices

logger = get_logger(__name__)

StrategyFactory = Callable[[HostServices], BaseStrategy]


class StrategyCatalog:
    """
    策略目录

    管理可用子策略的工厂函数。
    """

    def __init__(self):
        self._factories: dict[str, StrategyFactory] = {}

    def register(self, name: str, factory: StrategyFactory) -> None:
        """
        注册策略工厂

        Args:
            name: 策略名
            factory: 工厂函数，接收宿主服务，返回策略实例

        Raises:
            StrategyError: 名称已被注册
        """
        if name in self._factories:
            raise StrategyError(f"策略已注册: {name}", details={"strategy": name})

        self._factories[name] = factory
        logger.debug(f"策略已登记: {name}", extra={"strategy": name})

    def resolve(self, name: str) -> StrategyFactory:
        """
        解析策略工厂

        Raises:
            LoadError: 策略未注册
        """
        factory = self._factories.get(name)
        if factory is None:
            raise LoadError(
                f"无法加载策略: {name}",
                details={"strategy": name, "available": self.names},
            )
        return factory

    def create(self, name: str, services: HostServices) -> BaseStrategy:
        """解析并实例化策略"""
        return self.resolve(name)(services)

    @property
    def names(self) -> list[str]:
        """已注册策略名（排序）"""
        return sorted(self._factories)

    def __contains__(self, name: str) -> bool:
        return name in self._factories

    def __len__(self) -> int:
        return len(self._factories)


# 默认目录（内置策略在 aggregator.strategy.builtin 导入时注册）
default_catalog = StrategyCatalog()


def register_strategy(
    name: str,
    catalog: StrategyCatalog | None = None,
) -> Callable[[type[BaseStrategy]], type[BaseStrategy]]:
    """
    类装饰器：把策略类注册到目录

    用法：
        @register_strategy("rsi")
        class RsiStrategy(BaseStrategy): ...
    """
    def decorator(cls: type[BaseStrategy]) -> type[BaseStrategy]:
        target = catalog if catalog is not None else default_catalog
        target.register(name, cls)
        if not cls.name:
            cls.name = name
        return cls

    return decorator
