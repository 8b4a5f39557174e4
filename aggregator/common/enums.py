"""
策略聚合系统 — 枚举定义
"""

from enum import Enum
from typing import Any


class Signal(str, Enum):
    """交易信号"""
    BUY = "buy"
    SELL = "sell"
    HOLD = "hold"

    @classmethod
    def coerce(cls, value: Any) -> "Signal":
        """
        将任意值转换为信号

        只接受 "buy" / "sell" / "hold"，其余（None、空串、大小写不符）一律视为 HOLD。
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value)
            except ValueError:
                return cls.HOLD
        return cls.HOLD

    @property
    def code(self) -> str:
        """单字母代码：B / S / H"""
        return self.value[0].upper()


class OnLoadActionType(str, Enum):
    """加载钩子动作类型"""
    SET_OPTION = "set_option"
    DECLARE_OPTIONS = "declare_options"
