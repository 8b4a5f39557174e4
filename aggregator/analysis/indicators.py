"""
策略聚合系统 — 技术指标

RSI、EMA，供内置子策略复用。
"""

import statistics
from dataclasses import dataclass
from typing import Any, Sequence


@dataclass
class RSIResult:
    """RSI 结果"""
    value: float
    is_overbought: bool
    is_oversold: bool


def closes_from_state(state: Any, limit: int | None = None) -> list[float]:
    """
    从策略状态提取收盘价序列（旧 → 新）

    lookback 中最新的 K 线在前，当前 period 排在最后。

    Args:
        state: 具有 period / lookback 的状态对象
        limit: 最多取最近多少个
    """
    bars = list(reversed(state.lookback))
    if state.period:
        bars.append(state.period)

    closes = [float(bar["close"]) for bar in bars if bar.get("close") is not None]
    if limit is not None:
        closes = closes[-limit:]
    return closes


def calculate_rsi(
    closes: Sequence[float],
    period: int = 14,
    overbought: float = 70.0,
    oversold: float = 30.0,
) -> RSIResult:
    """
    计算 RSI（Relative Strength Index）

    Args:
        closes: 收盘价（旧 → 新）
        period: 计算周期
        overbought: 超买阈值
        oversold: 超卖阈值

    Returns:
        RSI 结果，数据不足时为 50
    """
    if len(closes) < period + 1:
        return RSIResult(value=50.0, is_overbought=False, is_oversold=False)

    # 计算价格变化
    gains = []
    losses = []

    for i in range(1, len(closes)):
        change = closes[i] - closes[i - 1]
        if change > 0:
            gains.append(change)
            losses.append(0.0)
        else:
            gains.append(0.0)
            losses.append(abs(change))

    # 取最近 period 个
    recent_gains = gains[-period:]
    recent_losses = losses[-period:]

    avg_gain = statistics.mean(recent_gains) if recent_gains else 0.0
    avg_loss = statistics.mean(recent_losses) if recent_losses else 0.0

    if avg_loss == 0:
        rsi = 100.0 if avg_gain > 0 else 50.0
    else:
        rs = avg_gain / avg_loss
        rsi = 100.0 - (100.0 / (1.0 + rs))

    return RSIResult(
        value=rsi,
        is_overbought=rsi >= overbought,
        is_oversold=rsi <= oversold,
    )


def ema_series(values: Sequence[float], period: int) -> list[float]:
    """
    指数移动平均序列

    以首个值为种子，平滑系数 2 / (period + 1)。
    """
    if period <= 0:
        raise ValueError("period must be positive")
    if not values:
        return []

    alpha = 2.0 / (period + 1)
    result = [float(values[0])]
    for value in values[1:]:
        result.append(alpha * value + (1 - alpha) * result[-1])
    return result


def calculate_ema(values: Sequence[float], period: int) -> float | None:
    """最新 EMA 值，无数据时为 None"""
    series = ema_series(values, period)
    return series[-1] if series else None
