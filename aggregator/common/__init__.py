"""公共模块"""

from .config import (
    AggregatorOptions,
    DeclareOptionsAction,
    LoggingConfig,
    OnLoadAction,
    SetOptionAction,
    Settings,
    StrategiesConfig,
    StrategyConfig,
    get_settings,
    load_settings,
    load_yaml_config,
)
from .enums import OnLoadActionType, Signal
from .exceptions import AggregatorError, ConfigError, LoadError, StrategyError
from .logging import JSONFormatter, LoggerAdapter, configure_logging, get_logger
from .models import StrategyContext
from .utils import round_half_up, utc_now

__all__ = [
    # Config
    "AggregatorOptions",
    "DeclareOptionsAction",
    "LoggingConfig",
    "OnLoadAction",
    "SetOptionAction",
    "Settings",
    "StrategiesConfig",
    "StrategyConfig",
    "get_settings",
    "load_settings",
    "load_yaml_config",
    # Enums
    "OnLoadActionType",
    "Signal",
    # Exceptions
    "AggregatorError",
    "ConfigError",
    "LoadError",
    "StrategyError",
    # Logging
    "JSONFormatter",
    "LoggerAdapter",
    "configure_logging",
    "get_logger",
    # Models
    "StrategyContext",
    # Utils
    "round_half_up",
    "utc_now",
]
