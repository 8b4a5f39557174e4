"""
策略聚合系统 — 聚合引擎

对宿主而言，聚合引擎本身就是一个策略：
- get_options(): 声明选项并构建注册表
- calculate(): 逐个包装器刷新并计算
- on_period(): 分频触发子策略，加权投票，写回决策
- on_report(): 输出状态行
"""

from typing import Any

from aggregator.common.config import Settings
from aggregator.common.logging import get_logger
from aggregator.common.models import StrategyContext

from .base import BaseStrategy, DoneCallback, HostServices, OptionRegistrar
from .cadence import CadenceMultiplexer
from .catalog import StrategyCatalog, default_catalog
from .registry import WrapperRegistry
from .reporter import build_report_line
from .state import PERIOD_MAX, AggregationState
from .voting import VoteAggregator, VoteResult
from .wrapper import StrategyWrapper

logger = get_logger(__name__)


class AggregatorEngine(BaseStrategy):
    """
    聚合引擎

    持有注册表与聚合状态，进程内只创建一次。
    """

    name = "aggregator"
    description = "Aggregates multiple trading strategies democratically"

    def __init__(
        self,
        settings: Settings,
        services: HostServices,
        catalog: StrategyCatalog | None = None,
    ):
        super().__init__(services)
        self.settings = settings
        self.catalog = catalog if catalog is not None else default_catalog

        self.registry = WrapperRegistry()
        self.state = AggregationState()
        self.cadence = CadenceMultiplexer(self.state, PERIOD_MAX)
        self.voter = VoteAggregator(self.registry, self.state)
        self.last_result: VoteResult | None = None

    # ========================================
    # 初始化
    # ========================================

    def get_options(self, register: OptionRegistrar, state: Any = None) -> None:
        """声明聚合器选项并构建注册表"""
        options = self.settings.aggregator
        register("period", "base tick time - probably don't want to change.", str, options.period)
        register("min_periods", "min. # history periods", int, options.min_periods)
        self.setup()

    def setup(self) -> int:
        """
        按启用列表创建包装器

        已存在的策略名直接跳过，可重复调用。

        Returns:
            本次新建的包装器数量

        Raises:
            ConfigError: 启用的策略缺少配置或参数格式错误
            LoadError: 策略无法加载
        """
        created = 0
        for name in self.settings.strategies.enabled:
            if name in self.registry:
                continue

            config = self.settings.strategies.get(name)
            wrapper = StrategyWrapper.from_config(config, self.services, self.catalog)
            self.registry.register(wrapper)
            created += 1

        self.voter.calculate_threshold()
        logger.info(
            f"聚合器初始化完成: {self.registry.count} 个策略, 阈值 {self.state.threshold}/{self.state.possible_signal}",
            extra={"strategies": self.registry.names, "created_count": created},
        )
        return created

    # ========================================
    # 周期操作
    # ========================================

    def calculate(self, state: StrategyContext) -> None:
        for wrapper in self.registry:
            wrapper.calculate(state)

    def on_period(self, state: StrategyContext, done: DoneCallback) -> None:
        # 预热阶段不投票
        if state.in_preroll:
            return done()

        self.cadence.run(self.registry, state)
        self.last_result = self.voter.process_signals(state)
        done()

    def on_report(self, state: StrategyContext) -> list[str]:
        """状态行（单元素列表）"""
        return [build_report_line(self.registry, self.state.total_signal, self.state.threshold)]

    # ========================================
    # 查询
    # ========================================

    def get_wrapper(self, name: str) -> StrategyWrapper | None:
        return self.registry.get(name)

    def status(self) -> dict[str, Any]:
        """当前状态快照"""
        return {
            "strategies": [
                {
                    "name": w.name,
                    "period": w.period,
                    "weight": w.weight,
                    "signal": w.signal.value,
                    "due": self.cadence.due(w),
                }
                for w in self.registry
            ],
            "state": self.state.to_dict(),
            "report": build_report_line(self.registry, self.state.total_signal, self.state.threshold),
        }
