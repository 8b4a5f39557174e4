"""
状态行单元测试
"""

import pytest

from aggregator.common.enums import Signal
from aggregator.strategy.base import BaseStrategy, ServiceContainer
from aggregator.strategy.catalog import StrategyCatalog
from aggregator.strategy.reporter import build_report_line, overall_word, signal_code
from aggregator.strategy.wrapper import StrategyWrapper


class MockStrategy(BaseStrategy):
    """测试用子策略"""

    def calculate(self, state):
        pass

    def on_period(self, state, done):
        done()

    def on_report(self, state):
        return []


@pytest.fixture
def wrappers():
    catalog = StrategyCatalog()
    services = ServiceContainer()
    result = []
    for name, signal in (("a", Signal.BUY), ("b", Signal.HOLD), ("c", Signal.SELL)):
        catalog.register(name, MockStrategy)
        wrapper = StrategyWrapper(name, 1, 100, services, catalog=catalog)
        wrapper.signal = signal
        result.append(wrapper)
    return result


class TestSignalCode:
    """信号代码测试"""

    @pytest.mark.parametrize(
        "signal,expected",
        [
            (Signal.BUY, "B"),
            (Signal.SELL, "S"),
            (Signal.HOLD, "H"),
            ("buy", "B"),
            ("sell", "S"),
            (None, "H"),
            ("unknown", "H"),
        ],
    )
    def test_signal_code(self, signal, expected):
        assert signal_code(signal) == expected


class TestOverallWord:
    """总体方向测试"""

    def test_sign_only(self):
        """测试仅按符号判断"""
        assert overall_word(1) == "buy"
        assert overall_word(-1) == "sell"
        assert overall_word(0) == "hold"


class TestBuildReportLine:
    """状态行测试"""

    def test_format(self, wrappers):
        """测试状态行格式"""
        line = build_report_line(wrappers[:2], 100, 100)

        assert line == "| a:B | b:H | -> buy @ 100/100"

    def test_all_codes(self, wrappers):
        """测试三种代码"""
        line = build_report_line(wrappers, 0, 150)

        assert line == "| a:B | b:H | c:S | -> hold @ 0/150"

    def test_negative_total(self, wrappers):
        """测试卖出方向带符号票数"""
        line = build_report_line(wrappers[2:], -100, 50)

        assert line == "| c:S | -> sell @ -100/50"

    def test_direction_ignores_threshold(self, wrappers):
        """测试方向与阈值无关"""
        line = build_report_line(wrappers[:1], 100, 150)

        assert line.endswith("-> buy @ 100/150")

    def test_no_wrappers(self):
        """测试无策略"""
        assert build_report_line([], 0, 0) == "| -> hold @ 0/0"
