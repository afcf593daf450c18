"""Application configuration."""

from canvasfx.core.config.loader import (
    configure_logging,
    detect_format,
    load_app_config,
    load_config,
    reset_app_config_cache,
)
from canvasfx.core.config.models import (
    AppConfig,
    CanvasConfig,
    LoggingConfig,
    ScalingConfig,
    SchemaConfig,
)

__all__ = [
    "AppConfig",
    "CanvasConfig",
    "LoggingConfig",
    "ScalingConfig",
    "SchemaConfig",
    "configure_logging",
    "detect_format",
    "load_app_config",
    "load_config",
    "reset_app_config_cache",
]
