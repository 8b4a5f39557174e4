"""
策略聚合系统 — 聚合状态
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from aggregator.common.enums import Signal

# tick 计数上限（分钟），到达后归零
PERIOD_MAX = 120


@dataclass
class AggregationState:
    """
    聚合状态

    引擎创建一次，每个周期原地更新。
    last_decision / last_percent 仅用于变更日志。
    """
    tick: int = 0
    total_signal: int = 0
    threshold: int = 0
    possible_signal: int = 0
    last_decision: Signal | None = None
    last_percent: int | None = None
    decided_at: datetime | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "tick": self.tick,
            "total_signal": self.total_signal,
            "threshold": self.threshold,
            "possible_signal": self.possible_signal,
            "last_decision": self.last_decision.value if self.last_decision else None,
            "last_percent": self.last_percent,
            "decided_at": self.decided_at.isoformat() if self.decided_at else None,
        }
