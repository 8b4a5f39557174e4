"""
策略聚合系统 — 加权投票

阈值 = ceil(总权重 / 2)；|加权票数| 达到阈值时按符号买入或卖出，
仓位百分比 = |加权票数| / 总权重 × 100。
"""

import math
from dataclasses import dataclass

from aggregator.common.enums import Signal
from aggregator.common.logging import get_logger
from aggregator.common.models import StrategyContext
from aggregator.common.utils import round_half_up, utc_now

from .registry import WrapperRegistry
from .state import AggregationState

logger = get_logger(__name__)


@dataclass(frozen=True)
class VoteResult:
    """投票结果"""
    decision: Signal
    percent: int
    total_signal: int
    threshold: int
    possible_signal: int
    changed: bool = False


class VoteAggregator:
    """
    投票聚合器

    读取各包装器信号，把最终决策写回共享上下文。
    """

    def __init__(self, registry: WrapperRegistry, state: AggregationState):
        self.registry = registry
        self.state = state

    def calculate_threshold(self) -> int:
        """按当前注册表重新计算总权重与阈值"""
        possible = self.registry.total_weight
        self.state.possible_signal = possible
        self.state.threshold = math.ceil(possible / 2)
        return self.state.threshold

    def tally(self) -> int:
        """加权票数：buy +w，sell -w，hold 0"""
        total = sum(wrapper.vote for wrapper in self.registry)
        self.state.total_signal = total
        return total

    def decide(self) -> tuple[Signal, int]:
        """
        根据当前票数与阈值给出决策

        总权重为 0 时一律 HOLD。
        """
        total = self.state.total_signal
        possible = self.state.possible_signal

        if possible <= 0 or total == 0 or abs(total) < self.state.threshold:
            return Signal.HOLD, 0

        percent = round_half_up(abs(total) / possible * 100)
        decision = Signal.BUY if total > 0 else Signal.SELL
        return decision, percent

    def process_signals(self, shared: StrategyContext) -> VoteResult:
        """
        汇总信号并写入决策

        - buy: shared.signal = buy，shared.options["buy_pct"] = 百分比
        - sell: shared.signal = sell，shared.options["sell_pct"] = 百分比
        - hold: 仅写 shared.signal
        """
        self.calculate_threshold()
        self.tally()
        decision, percent = self.decide()

        shared.signal = decision
        if decision == Signal.BUY:
            shared.options["buy_pct"] = percent
        elif decision == Signal.SELL:
            shared.options["sell_pct"] = percent

        changed = (
            decision != self.state.last_decision
            or percent != self.state.last_percent
        )
        if changed:
            self._log_transition(decision, percent)
            self.state.last_decision = decision
            self.state.last_percent = percent
            self.state.decided_at = utc_now()

        return VoteResult(
            decision=decision,
            percent=percent,
            total_signal=self.state.total_signal,
            threshold=self.state.threshold,
            possible_signal=self.state.possible_signal,
            changed=changed,
        )

    def _log_transition(self, decision: Signal, percent: int) -> None:
        message = f"聚合器决策: {decision.value}"
        if decision != Signal.HOLD:
            message += f" {percent}%"
        message += f" - 信号: {abs(self.state.total_signal)}/{self.state.threshold}"

        logger.info(
            message,
            extra={
                "decision": decision.value,
                "percent": percent,
                "previous_decision": self.state.last_decision.value if self.state.last_decision else None,
                "previous_percent": self.state.last_percent,
                "total_signal": self.state.total_signal,
                "threshold": self.state.threshold,
            },
        )
