"""
策略聚合系统 — RSI 子策略

超卖买入，超买卖出。
"""

from typing import Any

from aggregator.analysis import calculate_rsi, closes_from_state

from ..base import BaseStrategy, DoneCallback, OptionRegistrar
from ..catalog import register_strategy


@register_strategy("rsi")
class RsiStrategy(BaseStrategy):
    """RSI 超买超卖"""

    description = "Attempts to buy low and sell high by tracking RSI high-water readings."

    def get_options(self, register: OptionRegistrar, state: Any = None) -> None:
        register("rsi_periods", "number of RSI periods", int, 14)
        register("oversold_rsi", "buy when RSI reaches or drops below this value", float, 30)
        register("overbought_rsi", "sell when RSI reaches or goes above this value", float, 82)

    def calculate(self, state: Any) -> None:
        periods = int(state.options["rsi_periods"])
        closes = closes_from_state(state, limit=periods * 4)
        if len(closes) < periods + 1:
            state.indicators.pop("rsi", None)
            return

        result = calculate_rsi(
            closes,
            period=periods,
            overbought=float(state.options["overbought_rsi"]),
            oversold=float(state.options["oversold_rsi"]),
        )
        state.indicators["rsi"] = result

    def on_period(self, state: Any, done: DoneCallback) -> None:
        result = state.indicators.get("rsi")
        state.signal = None

        if result is not None:
            if result.is_oversold:
                state.signal = "buy"
            elif result.is_overbought:
                state.signal = "sell"

        done()

    def on_report(self, state: Any) -> list[str]:
        result = state.indicators.get("rsi")
        if result is None:
            return ["rsi -"]
        return [f"rsi {result.value:.2f}"]
