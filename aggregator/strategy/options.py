"""
策略聚合系统 — 参数解析

把 `identifier = literal` 形式的参数字符串解析为类型化选项。
只接受数字、带引号字符串和布尔字面量，不执行任何代码。
"""

import re
from typing import Any, Iterable

from aggregator.common.exceptions import ConfigError

_ENTRY_RE = re.compile(r"^\s*([A-Za-z_][A-Za-z0-9_]*)\s*=\s*(.*?)\s*$")
_INT_RE = re.compile(r"^[+-]?\d+$")
_FLOAT_RE = re.compile(r"^[+-]?(\d+\.\d*|\.\d+|\d+)([eE][+-]?\d+)?$")
_STRING_RE = re.compile(r"""^(?P<q>["'])(?P<body>(?:\\.|(?!(?P=q)).)*)(?P=q)$""")
_ESCAPES = {"n": "\n", "t": "\t", "r": "\r", "\\": "\\", '"': '"', "'": "'"}

ParsedOptions = dict[str, Any]


def _unescape(body: str) -> str:
    return re.sub(r"\\(.)", lambda m: _ESCAPES.get(m.group(1), m.group(1)), body)


def parse_literal(text: str) -> int | float | str | bool:
    """
    解析字面量

    Args:
        text: 字面量文本

    Returns:
        int / float / str / bool

    Raises:
        ValueError: 不是受支持的字面量
    """
    if _INT_RE.match(text):
        return int(text)

    if _FLOAT_RE.match(text):
        return float(text)

    lowered = text.lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False

    match = _STRING_RE.match(text)
    if match:
        return _unescape(match.group("body"))

    raise ValueError(f"unsupported literal: {text!r}")


def parse_option(entry: str) -> tuple[str, Any]:
    """
    解析单条参数

    Args:
        entry: 例如 'rsi_periods = 16' 或 'modelfile = "models/a.json"'

    Returns:
        (名称, 值)

    Raises:
        ConfigError: 格式错误
    """
    if not isinstance(entry, str):
        raise ConfigError(f"参数必须是字符串: {entry!r}", details={"entry": entry})

    match = _ENTRY_RE.match(entry)
    if not match or not match.group(2):
        raise ConfigError(f"参数格式错误: {entry!r}", details={"entry": entry})

    name, literal = match.group(1), match.group(2)
    try:
        value = parse_literal(literal)
    except ValueError as e:
        raise ConfigError(
            f"参数值不是数字、字符串或布尔字面量: {entry!r}",
            details={"entry": entry, "name": name},
        ) from e

    return name, value


def parse_options(entries: Iterable[str]) -> ParsedOptions:
    """
    解析参数列表

    顺序无语义，重复名称以后出现者为准。
    """
    options: ParsedOptions = {}
    for entry in entries:
        name, value = parse_option(entry)
        options[name] = value
    return options
