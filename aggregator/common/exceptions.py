"""
策略聚合系统 — 自定义异常

异常层级：
- AggregatorError: 基础异常
  - ConfigError: 配置异常（参数格式错误、配置缺失）
  - LoadError: 子策略加载失败
  - StrategyError: 策略层异常
"""

from typing import Any


class AggregatorError(Exception):
    """聚合系统基础异常"""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


# ============================================================
# 配置异常
# ============================================================

class ConfigError(AggregatorError):
    """
    配置异常

    触发场景：
    - 参数字符串不符合 `name = literal` 格式
    - 启用的策略缺少配置项
    - 配置文件校验失败
    """
    pass


# ============================================================
# 加载异常
# ============================================================

class LoadError(AggregatorError):
    """子策略无法解析（未注册的策略名）"""
    pass


# ============================================================
# 策略层异常
# ============================================================

class StrategyError(AggregatorError):
    """策略层异常"""
    pass
