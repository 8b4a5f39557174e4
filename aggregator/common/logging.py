"""
策略聚合系统 — 结构化日志

提供 JSON 格式日志输出，便于日志聚合和分析。
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

# LogRecord 自带属性，不作为额外字段输出
_RESERVED_ATTRS = frozenset(
    vars(logging.LogRecord("", 0, "", 0, "", (), None)).keys()
) | {"message", "asctime", "extra_data"}


class JSONFormatter(logging.Formatter):
    """JSON 格式日志格式化器"""

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        # 添加位置信息
        if record.pathname:
            log_data["location"] = {
                "file": record.pathname,
                "line": record.lineno,
                "function": record.funcName,
            }

        # 添加异常信息
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        # 添加额外字段（extra=... 与 LoggerAdapter 两种来源）
        extra: dict[str, Any] = {
            key: value
            for key, value in vars(record).items()
            if key not in _RESERVED_ATTRS
        }
        if hasattr(record, "extra_data"):
            extra.update(record.extra_data)
        if extra:
            log_data["extra"] = extra

        return json.dumps(log_data, ensure_ascii=False, default=str)


def get_logger(
    name: str,
    level: int = logging.INFO,
    use_json: bool = True,
) -> logging.Logger:
    """
    获取结构化日志记录器

    Args:
        name: 日志记录器名称
        level: 日志级别
        use_json: 是否使用 JSON 格式

    Returns:
        配置好的 Logger 实例
    """
    logger = logging.getLogger(name)

    # 避免重复添加 handler
    if logger.handlers:
        return logger

    logger.setLevel(level)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)

    if use_json:
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(
            logging.Formatter(
                "%(asctime)s | %(levelname)s | %(name)s | %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )

    logger.addHandler(handler)
    logger.propagate = False

    return logger


def configure_logging(level: str | int = logging.INFO, use_json: bool = True) -> None:
    """
    按配置重设包内所有 logger 的级别与格式

    Args:
        level: 日志级别（名称或数值）
        use_json: 是否使用 JSON 格式
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    formatter: logging.Formatter
    if use_json:
        formatter = JSONFormatter()
    else:
        formatter = logging.Formatter(
            "%(asctime)s | %(levelname)s | %(name)s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    for name, logger in logging.root.manager.loggerDict.items():
        if not name.startswith("aggregator") or not isinstance(logger, logging.Logger):
            continue
        logger.setLevel(level)
        for handler in logger.handlers:
            handler.setLevel(level)
            handler.setFormatter(formatter)


class LoggerAdapter(logging.LoggerAdapter):
    """支持额外字段的日志适配器"""

    def process(
        self, msg: str, kwargs: dict[str, Any]
    ) -> tuple[str, dict[str, Any]]:
        extra = kwargs.get("extra", {})
        extra["extra_data"] = self.extra
        kwargs["extra"] = extra
        return msg, kwargs
