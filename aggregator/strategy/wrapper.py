"""
策略聚合系统 — 策略包装器

每个包装器持有一个子策略实例及其私有状态，
多个子策略共用同一宿主上下文时互不干扰。
"""

from dataclasses import dataclass, field
from typing import Any, Iterable

from aggregator.common.config import OnLoadAction, StrategyConfig
from aggregator.common.enums import OnLoadActionType, Signal
from aggregator.common.exceptions import ConfigError
from aggregator.common.logging import LoggerAdapter, get_logger
from aggregator.common.models import StrategyContext

from .base import BaseStrategy, HostServices
from .catalog import StrategyCatalog, default_catalog
from .options import ParsedOptions, parse_options

logger = get_logger(__name__)


@dataclass
class WrapperState:
    """
    包装器私有状态

    与 StrategyContext 同构，另有 indicators 供子策略保存中间指标。
    """
    options: dict[str, Any] = field(default_factory=dict)
    period: dict[str, Any] = field(default_factory=dict)
    lookback: list[dict[str, Any]] = field(default_factory=list)
    my_trades: list[Any] = field(default_factory=list)
    in_preroll: bool = False
    signal: Signal | str | None = None
    indicators: dict[str, Any] = field(default_factory=dict)


def _done() -> None:
    """空完成回调"""


class StrategyWrapper:
    """
    策略包装器

    - 按名称从目录创建子策略
    - 解析本地参数（本地参数优先于全局同名选项）
    - 每次 calculate 前从共享上下文刷新私有状态
    """

    def __init__(
        self,
        name: str,
        period: int,
        weight: int,
        services: HostServices,
        params: Iterable[str] = (),
        on_load: Iterable[OnLoadAction] = (),
        catalog: StrategyCatalog | None = None,
    ):
        if period <= 0:
            raise ConfigError(f"策略周期必须为正整数: {name}", details={"strategy": name, "period": period})
        if weight <= 0:
            raise ConfigError(f"策略权重必须为正整数: {name}", details={"strategy": name, "weight": weight})

        catalog = catalog if catalog is not None else default_catalog

        self.name = name
        self.period = period
        self.weight = weight
        self.signal = Signal.HOLD
        self.strategy: BaseStrategy = catalog.create(name, services)
        self._log = LoggerAdapter(logger, {"strategy": name})

        self.state = WrapperState()
        self.options: ParsedOptions = parse_options(params)
        self._defaults: dict[str, Any] = {}

        # 收集子策略声明的默认值，不向宿主登记
        self.state.options = dict(self.options)
        self._declare_options()

        for action in on_load:
            self._apply_on_load(action)

    @classmethod
    def from_config(
        cls,
        config: StrategyConfig,
        services: HostServices,
        catalog: StrategyCatalog | None = None,
    ) -> "StrategyWrapper":
        """从策略配置创建包装器"""
        return cls(
            name=config.name,
            period=config.period,
            weight=config.weight,
            services=services,
            params=config.params,
            on_load=config.on_load,
            catalog=catalog,
        )

    # ========================================
    # 选项
    # ========================================

    def _collect_default(self, name: str, description: str, type_: type, default: Any) -> None:
        self._defaults[name] = default

    def _declare_options(self) -> None:
        """
        按当前私有状态重新收集子策略默认值

        后声明的默认值覆盖先前的；本地参数始终优先。
        """
        self.strategy.get_options(self._collect_default, self.state)
        self.state.options = {**self._defaults, **self.options}

    def _apply_on_load(self, action: OnLoadAction) -> None:
        """执行一个加载钩子动作"""
        if action.action == OnLoadActionType.SET_OPTION:
            value = action.value
            if isinstance(value, str):
                value = value.replace("{period}", str(self.period))
            self.options[action.name] = value
            self.state.options[action.name] = value
        elif action.action == OnLoadActionType.DECLARE_OPTIONS:
            self._declare_options()

        self._log.debug(f"加载钩子已执行: {action.action}")

    def refresh(self, shared: StrategyContext) -> None:
        """
        从共享上下文刷新私有状态

        选项合并顺序：子策略默认值 < 全局选项 < 本地参数。
        """
        self.state.options = {**self._defaults, **shared.options, **self.options}
        self.state.period = dict(shared.period)
        self.state.lookback = list(shared.lookback)
        self.state.my_trades = list(shared.my_trades)

    # ========================================
    # 周期操作
    # ========================================

    def calculate(self, shared: StrategyContext) -> None:
        """刷新状态后委托子策略计算"""
        self.refresh(shared)
        self.strategy.calculate(self.state)

    def on_period(self, shared: StrategyContext) -> Signal:
        """
        委托子策略产生信号

        缺失或无法识别的信号按 HOLD 处理。
        """
        self.strategy.on_period(self.state, _done)

        raw = self.state.signal
        self.signal = Signal.coerce(raw)
        if raw is not None and self.signal == Signal.HOLD and raw != Signal.HOLD:
            self._log.debug(f"无法识别的信号 {raw!r}，按 hold 处理")

        return self.signal

    def on_report(self, shared: StrategyContext) -> Any:
        """委托子策略输出状态片段"""
        return self.strategy.on_report(self.state)

    @property
    def vote(self) -> int:
        """带符号的加权票数：buy +w，sell -w，hold 0"""
        if self.signal == Signal.BUY:
            return self.weight
        if self.signal == Signal.SELL:
            return -self.weight
        return 0

    def __repr__(self) -> str:
        return (
            f"StrategyWrapper(name={self.name!r}, period={self.period}, "
            f"weight={self.weight}, signal={self.signal.value!r})"
        )
