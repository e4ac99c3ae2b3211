"""Configuration loader.

Sources, lowest precedence first:
1. YAML file (optional)
2. Environment variables (MOODLE_SITE_URL, MOODLE_WS_TOKEN, MOODLE_TIMEOUT,
   LOG_LEVEL, LOG_FORMAT)
"""

import os
import re
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from moodle_mcp.errors import CONFIG_INVALID, create_error
from moodle_mcp.types import LogFormat, LogLevel

from .models import DEFAULT_TIMEOUT_SECONDS, AppConfig, LoggingConfig, MoodleConfig, ServerConfig

CONFIG_PATH_ENV = "MOODLE_MCP_CONFIG"
DEFAULT_CONFIG_FILE = "moodle-mcp.yaml"

# env var -> (section, key)
ENV_OVERRIDES: dict[str, tuple[str, str]] = {
    "MOODLE_SITE_URL": ("moodle", "site_url"),
    "MOODLE_WS_TOKEN": ("moodle", "ws_token"),
    "MOODLE_TIMEOUT": ("moodle", "timeout"),
    "LOG_LEVEL": ("logging", "level"),
    "LOG_FORMAT": ("logging", "format"),
}

_LEVEL_ALIASES = {"WARNING": "WARN"}


def resolve_env_vars(value: str, environ: Mapping[str, str] | None = None) -> str:
    """Resolve environment variable references in string.

    Supports:
    - ${VAR} - Required, error if not set
    - ${VAR:-default} - With default value
    - ${VAR:?error message} - Required with custom error

    Args:
        value: String with potential env var references
        environ: Environment to read (defaults to os.environ)

    Returns:
        String with env vars resolved

    Raises:
        MoodleError: If required var not set
    """
    env = os.environ if environ is None else environ
    pattern = r"\$\{([^}:]+)(?::([?-])([^}]*))?\}"

    def replacer(match: re.Match[str]) -> str:
        var_name = match.group(1)
        operator = match.group(2)  # '-' or '?' or None
        operand = match.group(3)

        env_value = env.get(var_name)
        if env_value is not None:
            return env_value

        if operator == "-":
            return operand or ""
        reason = (operand if operator == "?" and operand else None) or (
            f"required environment variable {var_name} not set"
        )
        raise create_error(CONFIG_INVALID, reason=reason)

    return re.sub(pattern, replacer, value)


def _resolve_env_vars_recursive(data: Any, environ: Mapping[str, str] | None) -> Any:
    if isinstance(data, dict):
        return {k: _resolve_env_vars_recursive(v, environ) for k, v in data.items()}
    elif isinstance(data, list):
        return [_resolve_env_vars_recursive(item, environ) for item in data]
    elif isinstance(data, str):
        return resolve_env_vars(data, environ)
    else:
        return data


def parse_log_level(value: str | LogLevel) -> LogLevel:
    """Parse a log level name, case-insensitively.

    Args:
        value: Level name such as "info" or "warning"

    Returns:
        LogLevel

    Raises:
        MoodleError: If the name is not a known level
    """
    if isinstance(value, LogLevel):
        return value
    name = str(value).strip().upper()
    name = _LEVEL_ALIASES.get(name, name)
    try:
        return LogLevel(name)
    except ValueError:
        raise create_error(CONFIG_INVALID, reason=f"unknown log level '{value}'") from None


class ConfigLoader:
    """Load and validate configuration."""

    def __init__(self, environ: Mapping[str, str] | None = None):
        """Initialize config loader.

        Args:
            environ: Environment to read (defaults to os.environ)
        """
        self._environ = environ
        self._config_path: Path | None = None

    @property
    def env(self) -> Mapping[str, str]:
        return os.environ if self._environ is None else self._environ

    @property
    def config_path(self) -> Path | None:
        """Path of the YAML file used by the last load, if any."""
        return self._config_path

    def load(self, path: str | Path | None = None) -> AppConfig:
        """Load configuration.

        Resolution order for the file if path not specified:
        1. MOODLE_MCP_CONFIG environment variable
        2. ./moodle-mcp.yaml
        No file is fine; the environment alone can configure the process.

        Args:
            path: Optional path to a YAML config file

        Returns:
            Validated AppConfig

        Raises:
            MoodleError: If the site URL or token is missing, or a value is invalid
        """
        data: dict[str, Any] = {}

        config_path = Path(path) if path is not None else self._resolve_config_path()
        if config_path is not None:
            if not config_path.exists():
                if path is not None:
                    raise create_error(
                        CONFIG_INVALID, reason=f"config file not found: {config_path}"
                    )
            else:
                data = self._read_yaml(config_path)
                self._config_path = config_path

        for env_name, (section, key) in ENV_OVERRIDES.items():
            env_value = self.env.get(env_name)
            if env_value:
                data.setdefault(section, {})[key] = env_value

        return self._build(data)

    def _resolve_config_path(self) -> Path | None:
        env_path = self.env.get(CONFIG_PATH_ENV)
        if env_path:
            return Path(env_path)
        default = Path.cwd() / DEFAULT_CONFIG_FILE
        return default if default.exists() else None

    def _read_yaml(self, config_path: Path) -> dict[str, Any]:
        try:
            with config_path.open() as f:
                raw = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise create_error(CONFIG_INVALID, reason=f"invalid YAML in {config_path}: {e}") from e

        if not isinstance(raw, dict):
            raise create_error(CONFIG_INVALID, reason=f"{config_path} must contain a mapping")

        resolved: dict[str, Any] = _resolve_env_vars_recursive(raw, self._environ)
        for section in ("moodle", "logging", "server"):
            if resolved.get(section) is None:
                resolved[section] = {}
            elif not isinstance(resolved[section], dict):
                raise create_error(CONFIG_INVALID, reason=f"'{section}' must be a mapping")
        return resolved

    def _build(self, data: dict[str, Any]) -> AppConfig:
        moodle = data.get("moodle", {})
        site_url = str(moodle.get("site_url") or "").strip()
        ws_token = str(moodle.get("ws_token") or "").strip()

        missing = [
            name
            for name, value in (("MOODLE_SITE_URL", site_url), ("MOODLE_WS_TOKEN", ws_token))
            if not value
        ]
        if missing:
            raise create_error(CONFIG_INVALID, reason=f"{' and '.join(missing)} must be set")

        if not site_url.startswith(("http://", "https://")):
            raise create_error(
                CONFIG_INVALID, reason=f"site URL must start with http:// or https://: {site_url}"
            )

        try:
            timeout = float(moodle.get("timeout", DEFAULT_TIMEOUT_SECONDS))
        except (TypeError, ValueError):
            raise create_error(
                CONFIG_INVALID, reason=f"timeout must be a number: {moodle.get('timeout')!r}"
            ) from None
        if timeout <= 0:
            raise create_error(CONFIG_INVALID, reason="timeout must be positive")

        logging_data = data.get("logging", {})
        try:
            log_format = LogFormat(str(logging_data.get("format", LogFormat.COLORED.value)).lower())
        except ValueError:
            raise create_error(
                CONFIG_INVALID, reason=f"unknown log format '{logging_data.get('format')}'"
            ) from None

        server_data = {
            k: str(v) for k, v in data.get("server", {}).items() if k in ("name", "version")
        }

        return AppConfig(
            moodle=MoodleConfig(site_url=site_url, ws_token=ws_token, timeout=timeout),
            logging=LoggingConfig(
                level=parse_log_level(logging_data.get("level", LogLevel.INFO)),
                format=log_format,
            ),
            server=ServerConfig(**server_data),
        )


def load_config(path: str | Path | None = None) -> AppConfig:
    """Load configuration from the process environment (and optional file).

    Args:
        path: Optional path to a YAML config file

    Returns:
        Validated AppConfig
    """
    return ConfigLoader().load(path)
