"""
技术指标单元测试
"""

import pytest

from aggregator.analysis import calculate_ema, calculate_rsi, closes_from_state, ema_series
from aggregator.common.models import StrategyContext


class TestClosesFromState:
    """收盘价提取测试"""

    def test_order_oldest_first(self):
        """测试旧 → 新排序，当前 period 在最后"""
        state = StrategyContext(
            period={"close": 3},
            lookback=[{"close": 2}, {"close": 1}],
        )

        assert closes_from_state(state) == [1.0, 2.0, 3.0]

    def test_limit(self):
        state = StrategyContext(
            period={"close": 3},
            lookback=[{"close": 2}, {"close": 1}],
        )

        assert closes_from_state(state, limit=2) == [2.0, 3.0]

    def test_missing_close_skipped(self):
        """测试缺失收盘价的 K 线被跳过"""
        state = StrategyContext(period={}, lookback=[{"close": 2}, {"open": 1}])

        assert closes_from_state(state) == [2.0]


class TestCalculateRsi:
    """RSI 测试"""

    def test_insufficient_data(self):
        """测试数据不足返回中性值"""
        result = calculate_rsi([1.0, 2.0], period=14)

        assert result.value == 50.0
        assert not result.is_overbought
        assert not result.is_oversold

    def test_all_gains(self):
        result = calculate_rsi([float(i) for i in range(20)], period=14)

        assert result.value == 100.0
        assert result.is_overbought

    def test_all_losses(self):
        result = calculate_rsi([float(20 - i) for i in range(20)], period=14)

        assert result.value == 0.0
        assert result.is_oversold

    def test_mixed(self):
        """测试涨跌各半"""
        closes = [10.0, 11.0, 10.0, 11.0, 10.0]

        result = calculate_rsi(closes, period=4)

        assert result.value == pytest.approx(50.0)


class TestEma:
    """EMA 测试"""

    def test_seeded_with_first_value(self):
        series = ema_series([10.0, 20.0], period=3)

        # alpha = 0.5
        assert series == [10.0, 15.0]

    def test_constant_series(self):
        assert ema_series([5.0] * 10, period=4) == [5.0] * 10

    def test_empty(self):
        assert ema_series([], period=3) == []
        assert calculate_ema([], period=3) is None

    def test_latest_value(self):
        assert calculate_ema([10.0, 20.0], period=3) == 15.0

    def test_invalid_period(self):
        with pytest.raises(ValueError):
            ema_series([1.0], period=0)
