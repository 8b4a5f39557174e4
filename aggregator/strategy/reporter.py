"""
策略聚合系统 — 状态行

格式: "| rsi:B | macd:H | -> buy @ 200/125"
"""

from typing import Iterable

from aggregator.common.enums import Signal

from .wrapper import StrategyWrapper


def signal_code(signal: Signal | str | None) -> str:
    """信号单字母代码，无法识别时为 H"""
    return Signal.coerce(signal).code


def overall_word(total_signal: int) -> str:
    """按票数符号给出总体方向（与阈值无关）"""
    if total_signal > 0:
        return Signal.BUY.value
    if total_signal < 0:
        return Signal.SELL.value
    return Signal.HOLD.value


def build_report_line(
    wrappers: Iterable[StrategyWrapper],
    total_signal: int,
    threshold: int,
) -> str:
    """
    生成状态行

    Args:
        wrappers: 包装器（注册顺序）
        total_signal: 加权票数（带符号）
        threshold: 当前阈值
    """
    parts = ["| "]
    for wrapper in wrappers:
        parts.append(f"{wrapper.name}:{signal_code(wrapper.signal)} | ")
    parts.append(f"-> {overall_word(total_signal)} @ {total_signal}/{threshold}")
    return "".join(parts)
