"""
策略聚合系统 — EMA 趋势子策略

EMA 变化率高于中性区间买入，低于中性区间卖出；RSI 极度超卖时买入。
"""

from typing import Any

from aggregator.analysis import calculate_rsi, closes_from_state, ema_series

from ..base import BaseStrategy, DoneCallback, OptionRegistrar
from ..catalog import register_strategy


@register_strategy("trend_ema")
class TrendEmaStrategy(BaseStrategy):
    """EMA 趋势"""

    description = "Buy when EMA trend turns up, sell when it turns down."

    def get_options(self, register: OptionRegistrar, state: Any = None) -> None:
        register("trend_ema", "number of periods for trend EMA", int, 26)
        register("neutral_rate", "avoid trades if abs(trend_ema rate) under this float", float, 0.0)
        register("oversold_rsi_periods", "number of periods for oversold RSI", int, 14)
        register("oversold_rsi", "buy when RSI reaches this value", float, 10)

    def calculate(self, state: Any) -> None:
        options = state.options
        closes = closes_from_state(state)
        if len(closes) < 2:
            state.indicators.pop("trend_ema_rate", None)
            return

        ema = ema_series(closes, int(options["trend_ema"]))
        previous = ema[-2]
        state.indicators["trend_ema"] = ema[-1]
        state.indicators["trend_ema_rate"] = (ema[-1] - previous) / previous * 100 if previous else 0.0

        rsi_periods = int(options["oversold_rsi_periods"])
        state.indicators["oversold_rsi"] = calculate_rsi(closes, period=rsi_periods).value

    def on_period(self, state: Any, done: DoneCallback) -> None:
        indicators = state.indicators
        state.signal = None

        rate = indicators.get("trend_ema_rate")
        if rate is None:
            return done()

        neutral = abs(float(state.options["neutral_rate"]))
        if indicators["oversold_rsi"] <= float(state.options["oversold_rsi"]):
            state.signal = "buy"
        elif rate > neutral:
            state.signal = "buy"
        elif rate < -neutral:
            state.signal = "sell"

        done()

    def on_report(self, state: Any) -> list[str]:
        rate = state.indicators.get("trend_ema_rate")
        if rate is None:
            return ["trend_ema -"]
        return [f"trend_ema {rate:+.4f}%"]
