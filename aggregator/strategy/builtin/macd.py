"""
策略聚合系统 — MACD 子策略

柱状图上穿阈值买入，下穿阈值卖出；RSI 超买时卖出。
"""

from typing import Any

from aggregator.analysis import calculate_rsi, closes_from_state, ema_series

from ..base import BaseStrategy, DoneCallback, OptionRegistrar
from ..catalog import register_strategy


@register_strategy("macd")
class MacdStrategy(BaseStrategy):
    """MACD 柱状图穿越"""

    description = "Buy when (MACD - Signal > 0) and sell when (MACD - Signal < 0)."

    def get_options(self, register: OptionRegistrar, state: Any = None) -> None:
        register("ema_short_period", "number of periods for the shorter EMA", int, 12)
        register("ema_long_period", "number of periods for the longer EMA", int, 26)
        register("signal_period", "number of periods for the signal EMA", int, 9)
        register("up_trend_threshold", "threshold to trigger a buy signal", float, 0)
        register("down_trend_threshold", "threshold to trigger a sold signal", float, 0)
        register("overbought_rsi_periods", "number of periods for overbought RSI", int, 25)
        register("overbought_rsi", "sold when RSI exceeds this value", float, 70)

    def calculate(self, state: Any) -> None:
        options = state.options
        short_period = int(options["ema_short_period"])
        long_period = int(options["ema_long_period"])
        signal_period = int(options["signal_period"])

        closes = closes_from_state(state)
        if len(closes) < long_period + 1:
            state.indicators.pop("macd_histogram", None)
            return

        short_ema = ema_series(closes, short_period)
        long_ema = ema_series(closes, long_period)
        macd = [s - l for s, l in zip(short_ema, long_ema)]
        signal = ema_series(macd, signal_period)
        histogram = [m - s for m, s in zip(macd, signal)]

        state.indicators["macd"] = macd[-1]
        state.indicators["macd_signal"] = signal[-1]
        state.indicators["macd_histogram"] = histogram[-1]
        state.indicators["macd_histogram_prev"] = histogram[-2]

        rsi_periods = int(options["overbought_rsi_periods"])
        state.indicators["overbought_rsi"] = calculate_rsi(closes, period=rsi_periods).value

    def on_period(self, state: Any, done: DoneCallback) -> None:
        indicators = state.indicators
        state.signal = None

        if "macd_histogram" not in indicators:
            return done()

        options = state.options
        up = float(options["up_trend_threshold"])
        down = float(options["down_trend_threshold"])
        histogram = indicators["macd_histogram"]
        previous = indicators["macd_histogram_prev"]

        if indicators["overbought_rsi"] >= float(options["overbought_rsi"]):
            state.signal = "sell"
        elif histogram - up > 0 and previous - up <= 0:
            state.signal = "buy"
        elif histogram + down < 0 and previous + down >= 0:
            state.signal = "sell"

        done()

    def on_report(self, state: Any) -> list[str]:
        histogram = state.indicators.get("macd_histogram")
        if histogram is None:
            return ["macd -"]
        return [f"macd {histogram:+.4f}"]
