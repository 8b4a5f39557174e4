"""
策略聚合系统 — 价格速度子策略

单周期价格变化幅度超过基线 trigger_factor 倍时，顺势给出信号。
"""

from typing import Any

from aggregator.analysis import calculate_ema, closes_from_state

from ..base import BaseStrategy, DoneCallback, OptionRegistrar
from ..catalog import register_strategy


@register_strategy("speed")
class SpeedStrategy(BaseStrategy):
    """价格速度突变"""

    description = "Trade when % change from last period is higher than average."

    def get_options(self, register: OptionRegistrar, state: Any = None) -> None:
        register("baseline_periods", "lookback periods for volatility baseline", int, 3000)
        register("trigger_factor", "multiply with volatility baseline EMA to get trigger value", float, 1.6)

    def calculate(self, state: Any) -> None:
        baseline_periods = int(state.options["baseline_periods"])
        closes = closes_from_state(state, limit=baseline_periods + 1)
        if len(closes) < 3:
            state.indicators.pop("speed", None)
            return

        speeds = [
            abs(closes[i] - closes[i - 1]) / closes[i - 1] * 100 if closes[i - 1] else 0.0
            for i in range(1, len(closes))
        ]
        state.indicators["speed"] = speeds[-1]
        state.indicators["speed_baseline"] = calculate_ema(speeds[:-1], baseline_periods)
        state.indicators["speed_direction"] = closes[-1] - closes[-2]

    def on_period(self, state: Any, done: DoneCallback) -> None:
        indicators = state.indicators
        state.signal = None

        speed = indicators.get("speed")
        baseline = indicators.get("speed_baseline")
        if speed is None or not baseline:
            return done()

        trigger = baseline * float(state.options["trigger_factor"])
        if speed >= trigger:
            direction = indicators["speed_direction"]
            if direction > 0:
                state.signal = "buy"
            elif direction < 0:
                state.signal = "sell"

        done()

    def on_report(self, state: Any) -> list[str]:
        speed = state.indicators.get("speed")
        if speed is None:
            return ["speed -"]
        return [f"speed {speed:.4f}%"]
