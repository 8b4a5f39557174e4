"""
策略聚合系统 — 策略基类

子策略与聚合器本身都实现同一组能力：
- get_options(): 声明配置选项
- calculate(): 更新指标状态
- on_period(): 产生信号并调用完成回调
- on_report(): 返回状态片段
"""

from abc import ABC, abstractmethod
from typing import Any, Callable, Protocol

# 宿主选项注册函数: register(name, description, type_, default)
OptionRegistrar = Callable[[str, str, type, Any], None]

# 完成回调
DoneCallback = Callable[[], None]


class HostServices(Protocol):
    """宿主提供的 get / set / clear 原语"""

    def get(self, key: str) -> Any:
        ...

    def set(self, key: str, value: Any) -> None:
        ...

    def clear(self, key: str) -> None:
        ...


class ServiceContainer:
    """
    基于字典的宿主服务容器

    宿主没有自己的容器时使用。
    """

    def __init__(self, initial: dict[str, Any] | None = None):
        self._services: dict[str, Any] = dict(initial or {})

    def get(self, key: str) -> Any:
        return self._services.get(key)

    def set(self, key: str, value: Any) -> None:
        self._services[key] = value

    def clear(self, key: str) -> None:
        self._services.pop(key, None)

    def __contains__(self, key: str) -> bool:
        return key in self._services


class BaseStrategy(ABC):
    """
    策略基类

    子类必须实现：
    - calculate(): 根据状态更新内部指标
    - on_period(): 把信号写入 state.signal 并调用 done()
    - on_report(): 返回可渲染的状态片段
    """

    name: str = ""
    description: str = ""

    def __init__(self, services: HostServices):
        self.services = services

    def get_options(self, register: OptionRegistrar, state: Any = None) -> None:
        """
        声明配置选项（默认无选项）

        Args:
            register: 选项注册函数 register(name, description, type_, default)
            state: 包装器私有状态；宿主直接调用时为 None。
                默认值依赖其他选项（如 period）时从 state.options 读取
        """

    @abstractmethod
    def calculate(self, state: Any) -> None:
        """
        更新指标状态

        Args:
            state: 策略状态（宿主上下文或包装器私有状态）
        """
        pass

    @abstractmethod
    def on_period(self, state: Any, done: DoneCallback) -> None:
        """
        周期回调

        Args:
            state: 策略状态
            done: 完成回调，必须调用一次
        """
        pass

    @abstractmethod
    def on_report(self, state: Any) -> list[str]:
        """返回状态片段"""
        pass

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"
