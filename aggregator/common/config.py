"""
策略聚合系统 — 配置加载

支持 YAML 配置文件和环境变量替换。
"""

import os
import re
from pathlib import Path
from typing import Annotated, Any, Literal, Union

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from .exceptions import ConfigError
from .logging import get_logger

logger = get_logger(__name__)

# 配置文件路径环境变量
CONFIG_ENV_VAR = "AGGREGATOR_CONFIG"

OptionValue = bool | int | float | str


# ============================================================
# 加载钩子（数据化的初始化动作）
# ============================================================

class SetOptionAction(BaseModel):
    """
    设置本地选项

    value 为字符串时可使用 {period} 占位符，由包装器周期填充，
    例如 "{period}m" → "30m"。
    """
    model_config = {"frozen": True}

    action: Literal["set_option"] = "set_option"
    name: str
    value: OptionValue

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        if not v.isidentifier():
            raise ValueError(f"invalid option name: {v!r}")
        return v


class DeclareOptionsAction(BaseModel):
    """重新调用子策略的 get_options，补齐依赖已有选项的默认值"""
    model_config = {"frozen": True}

    action: Literal["declare_options"] = "declare_options"


OnLoadAction = Annotated[
    Union[SetOptionAction, DeclareOptionsAction],
    Field(discriminator="action"),
]


# ============================================================
# 策略配置
# ============================================================

class StrategyConfig(BaseModel):
    """单个子策略配置"""
    model_config = {"frozen": True}

    name: str
    period: int = Field(gt=0, description="触发周期（tick 数，通常为分钟）")
    weight: int = Field(gt=0, description="投票权重")
    params: list[str] = Field(default_factory=list, description="参数: ['name = literal', ...]")
    on_load: list[OnLoadAction] = Field(default_factory=list)


class StrategiesConfig(BaseModel):
    """启用列表与各策略配置"""

    enabled: list[str] = Field(default_factory=list)
    settings: dict[str, StrategyConfig] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def fill_names(cls, data: Any) -> Any:
        """以配置键作为策略名"""
        if not isinstance(data, dict):
            return data

        settings = data.get("settings") or {}
        filled: dict[str, Any] = {}
        for key, value in settings.items():
            if isinstance(value, dict):
                value = {**value, "name": key}
            filled[key] = value

        return {**data, "settings": filled}

    def get(self, name: str) -> StrategyConfig:
        """
        获取策略配置

        Raises:
            ConfigError: 策略未配置
        """
        config = self.settings.get(name)
        if config is None:
            raise ConfigError(
                f"策略缺少配置: {name}",
                details={"strategy": name, "configured": sorted(self.settings)},
            )
        return config


class AggregatorOptions(BaseModel):
    """聚合器自身选项"""

    period: str = Field(default="1m", description="基础 tick 周期")
    min_periods: int = Field(default=40, ge=1, description="最少历史周期数")


class LoggingConfig(BaseModel):
    """日志配置"""

    level: str = Field(default="INFO")
    use_json: bool = Field(default=True)


class Settings(BaseModel):
    """系统配置"""

    env: str = Field(default="development")
    debug: bool = Field(default=False)

    aggregator: AggregatorOptions = Field(default_factory=AggregatorOptions)
    strategies: StrategiesConfig = Field(default_factory=StrategiesConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def _substitute_env_vars(value: Any) -> Any:
    """替换环境变量占位符 ${VAR_NAME}"""
    if isinstance(value, str):
        pattern = r"\$\{([^}]+)\}"

        def replacer(match: re.Match[str]) -> str:
            var_name = match.group(1)
            return os.environ.get(var_name, match.group(0))

        return re.sub(pattern, replacer, value)

    if isinstance(value, dict):
        return {k: _substitute_env_vars(v) for k, v in value.items()}

    if isinstance(value, list):
        return [_substitute_env_vars(item) for item in value]

    return value


def load_yaml_config(path: str | Path) -> dict[str, Any]:
    """
    加载 YAML 配置文件

    Args:
        path: 配置文件路径

    Returns:
        配置字典
    """
    path = Path(path)

    if not path.exists():
        logger.warning(f"配置文件不存在: {path}")
        return {}

    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise ConfigError(f"配置文件顶层必须是映射: {path}", details={"path": str(path)})

    return _substitute_env_vars(data)


def load_settings(config_path: str | Path | None = None) -> Settings:
    """
    加载系统配置

    优先级：显式路径 > 环境变量 AGGREGATOR_CONFIG > 默认值

    Args:
        config_path: 配置文件路径

    Returns:
        Settings 实例

    Raises:
        ConfigError: 配置校验失败
    """
    if config_path is None:
        config_path = os.environ.get(CONFIG_ENV_VAR)

    config_data: dict[str, Any] = {}
    if config_path:
        config_data = load_yaml_config(config_path)

    try:
        return Settings(**config_data)
    except ValidationError as e:
        raise ConfigError(
            f"配置校验失败: {config_path}",
            details={"path": str(config_path), "errors": e.errors(include_url=False)},
        ) from e


# 全局配置实例（延迟初始化）
_settings: Settings | None = None


def get_settings() -> Settings:
    """获取全局配置实例"""
    global _settings
    if _settings is None:
        _settings = load_settings()
    return _settings
