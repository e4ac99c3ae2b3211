"""Configuration loading and models."""

from .loader import ConfigLoader, load_config, parse_log_level, resolve_env_vars
from .models import AppConfig, LoggingConfig, MoodleConfig, ServerConfig

__all__ = [
    # Config models
    "AppConfig",
    "MoodleConfig",
    "LoggingConfig",
    "ServerConfig",
    # Loader
    "ConfigLoader",
    "load_config",
    "parse_log_level",
    "resolve_env_vars",
]
