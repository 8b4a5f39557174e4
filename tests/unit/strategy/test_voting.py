"""
加权投票单元测试
"""

import math
from unittest.mock import patch

import pytest

from aggregator.common.enums import Signal
from aggregator.common.models import StrategyContext
from aggregator.strategy import voting
from aggregator.strategy.base import BaseStrategy, ServiceContainer
from aggregator.strategy.catalog import StrategyCatalog
from aggregator.strategy.registry import WrapperRegistry
from aggregator.strategy.state import AggregationState
from aggregator.strategy.voting import VoteAggregator
from aggregator.strategy.wrapper import StrategyWrapper


class MockStrategy(BaseStrategy):
    """测试用子策略"""

    def calculate(self, state):
        pass

    def on_period(self, state, done):
        done()

    def on_report(self, state):
        return []


def build(votes: list[tuple[int, Signal]]) -> tuple[WrapperRegistry, AggregationState, VoteAggregator]:
    """按 (权重, 信号) 构建注册表与聚合器"""
    catalog = StrategyCatalog()
    services = ServiceContainer()
    registry = WrapperRegistry()

    for i, (weight, signal) in enumerate(votes):
        name = f"s{i}"
        catalog.register(name, MockStrategy)
        wrapper = StrategyWrapper(name, 1, weight, services, catalog=catalog)
        wrapper.signal = signal
        registry.register(wrapper)

    state = AggregationState()
    return registry, state, VoteAggregator(registry, state)


class TestThreshold:
    """阈值测试"""

    @pytest.mark.parametrize(
        "weights,expected",
        [
            ([100, 100, 50], 125),
            ([50], 25),
            ([1], 1),
            ([3, 4], 4),
            ([100, 100, 100, 100, 50, 50], 250),
            ([], 0),
        ],
    )
    def test_threshold_is_half_total_rounded_up(self, weights, expected):
        """测试阈值 = ceil(总权重 / 2)"""
        _, state, voter = build([(w, Signal.HOLD) for w in weights])

        threshold = voter.calculate_threshold()

        assert threshold == expected == math.ceil(sum(weights) / 2)
        assert state.possible_signal == sum(weights)


class TestTally:
    """计票测试"""

    @pytest.mark.parametrize(
        "votes,expected",
        [
            ([(100, Signal.BUY), (100, Signal.BUY), (50, Signal.HOLD)], 200),
            ([(100, Signal.SELL), (100, Signal.BUY), (50, Signal.HOLD)], 0),
            ([(50, Signal.SELL)], -50),
            ([(10, Signal.SELL), (20, Signal.SELL), (5, Signal.BUY)], -25),
            ([], 0),
        ],
    )
    def test_tally(self, votes, expected):
        """测试加权票数"""
        _, state, voter = build(votes)

        assert voter.tally() == expected
        assert state.total_signal == expected


class TestProcessSignals:
    """决策测试"""

    def test_majority_buy(self):
        """测试多数买入：200/250 → buy 80%"""
        _, state, voter = build([(100, Signal.BUY), (100, Signal.BUY), (50, Signal.HOLD)])
        shared = StrategyContext()

        result = voter.process_signals(shared)

        assert state.possible_signal == 250
        assert state.threshold == 125
        assert result.total_signal == 200
        assert result.decision == Signal.BUY
        assert result.percent == 80
        assert shared.signal == Signal.BUY
        assert shared.options["buy_pct"] == 80
        assert "sell_pct" not in shared.options

    def test_split_vote_holds(self):
        """测试票数抵消 → hold"""
        _, _, voter = build([(100, Signal.SELL), (100, Signal.BUY), (50, Signal.HOLD)])
        shared = StrategyContext()

        result = voter.process_signals(shared)

        assert result.decision == Signal.HOLD
        assert result.percent == 0
        assert shared.signal == Signal.HOLD
        assert "buy_pct" not in shared.options
        assert "sell_pct" not in shared.options

    def test_single_seller(self):
        """测试单个卖出：-50/25 → sell 100%"""
        _, state, voter = build([(50, Signal.SELL)])
        shared = StrategyContext()

        result = voter.process_signals(shared)

        assert state.threshold == 25
        assert result.decision == Signal.SELL
        assert result.percent == 100
        assert shared.options["sell_pct"] == 100
        assert "buy_pct" not in shared.options

    def test_below_threshold_holds(self):
        """测试未达阈值 → hold"""
        _, _, voter = build([(100, Signal.BUY), (100, Signal.HOLD), (50, Signal.HOLD)])
        shared = StrategyContext()

        result = voter.process_signals(shared)

        assert result.total_signal == 100
        assert result.decision == Signal.HOLD
        assert "buy_pct" not in shared.options

    def test_exactly_at_threshold(self):
        """测试恰好达到阈值"""
        _, _, voter = build([(50, Signal.BUY), (50, Signal.HOLD)])
        shared = StrategyContext()

        result = voter.process_signals(shared)

        assert result.decision == Signal.BUY
        assert result.percent == 50

    def test_percent_rounds_half_up(self):
        """测试百分比四舍五入：5/8 = 62.5% → 63"""
        _, _, voter = build([(5, Signal.BUY), (3, Signal.HOLD)])
        shared = StrategyContext()

        result = voter.process_signals(shared)

        assert result.percent == 63

    def test_no_wrappers_holds(self):
        """测试无策略 → hold, 0"""
        _, state, voter = build([])
        shared = StrategyContext()

        result = voter.process_signals(shared)

        assert result.decision == Signal.HOLD
        assert result.percent == 0
        assert state.threshold == 0
        assert shared.signal == Signal.HOLD

    def test_existing_options_preserved(self):
        """测试不覆盖其他选项"""
        _, _, voter = build([(10, Signal.BUY)])
        shared = StrategyContext(options={"period": "1m", "sell_pct": 40})

        voter.process_signals(shared)

        assert shared.options["period"] == "1m"
        assert shared.options["sell_pct"] == 40
        assert shared.options["buy_pct"] == 100


class TestTransitionLogging:
    """变更日志测试"""

    def test_logs_only_on_change(self):
        """测试仅在决策或百分比变化时输出"""
        registry, state, voter = build([(100, Signal.BUY), (100, Signal.BUY), (50, Signal.HOLD)])
        shared = StrategyContext()

        with patch.object(voting.logger, "info") as info:
            first = voter.process_signals(shared)
            second = voter.process_signals(shared)
            third = voter.process_signals(shared)

        assert info.call_count == 1
        assert first.changed is True
        assert second.changed is False
        assert third.changed is False
        assert state.last_decision == Signal.BUY
        assert state.last_percent == 80
        assert state.decided_at is not None

    def test_percent_change_logs_again(self):
        """测试百分比变化也会输出"""
        registry, state, voter = build([(100, Signal.BUY), (100, Signal.BUY), (50, Signal.HOLD)])
        shared = StrategyContext()

        with patch.object(voting.logger, "info") as info:
            voter.process_signals(shared)
            registry.get("s2").signal = Signal.BUY
            result = voter.process_signals(shared)

        assert info.call_count == 2
        assert result.percent == 100
        assert state.last_percent == 100

    def test_message_format(self):
        """测试日志内容"""
        _, _, voter = build([(100, Signal.BUY), (100, Signal.BUY), (50, Signal.HOLD)])

        with patch.object(voting.logger, "info") as info:
            voter.process_signals(StrategyContext())

        message = info.call_args.args[0]
        assert "buy 80%" in message
        assert "200/125" in message

    def test_hold_message_has_no_percent(self):
        """测试 hold 不带百分比"""
        _, _, voter = build([(100, Signal.SELL), (100, Signal.BUY)])

        with patch.object(voting.logger, "info") as info:
            voter.process_signals(StrategyContext())

        message = info.call_args.args[0]
        assert "hold" in message
        assert "%" not in message
