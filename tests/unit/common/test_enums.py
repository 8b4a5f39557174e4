"""枚举测试"""

import pytest

from aggregator.common.enums import OnLoadActionType, Signal


class TestSignal:
    """交易信号枚举测试"""

    def test_all_signals_defined(self):
        """验证所有信号已定义"""
        assert {s.value for s in Signal} == {"buy", "sell", "hold"}

    def test_str_comparison(self):
        """验证可与字符串比较"""
        assert Signal.BUY == "buy"

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("buy", Signal.BUY),
            ("sell", Signal.SELL),
            ("hold", Signal.HOLD),
            (Signal.SELL, Signal.SELL),
            (None, Signal.HOLD),
            ("", Signal.HOLD),
            ("Buy", Signal.HOLD),
            (" buy", Signal.HOLD),
            (0, Signal.HOLD),
        ],
    )
    def test_coerce(self, value, expected):
        """验证信号转换"""
        assert Signal.coerce(value) is expected

    def test_code(self):
        """验证单字母代码"""
        assert Signal.BUY.code == "B"
        assert Signal.SELL.code == "S"
        assert Signal.HOLD.code == "H"


class TestOnLoadActionType:
    """加载钩子动作枚举测试"""

    def test_values(self):
        assert OnLoadActionType.SET_OPTION == "set_option"
        assert OnLoadActionType.DECLARE_OPTIONS == "declare_options"
