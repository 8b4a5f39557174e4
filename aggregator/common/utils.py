"""
策略聚合系统 — 工具函数
"""

import math
from datetime import datetime, timezone


def utc_now() -> datetime:
    """
    获取当前 UTC 时间

    Returns:
        带时区信息的 UTC datetime
    """
    return datetime.now(timezone.utc)


def round_half_up(value: float) -> int:
    """
    四舍五入到整数（.5 远离零）

    Python 内置 round() 为银行家舍入，仓位百分比需要常规舍入。

    Args:
        value: 输入值

    Returns:
        舍入后的整数
    """
    if value < 0:
        return -math.floor(-value + 0.5)
    return math.floor(value + 0.5)
