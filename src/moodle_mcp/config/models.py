"""Configuration data models."""

from dataclasses import dataclass, field

from moodle_mcp.types import LogFormat, LogLevel

REST_ENDPOINT_PATH = "/webservice/rest/server.php"
DEFAULT_TIMEOUT_SECONDS = 30.0


@dataclass(frozen=True)
class MoodleConfig:
    """Connection settings for the remote web service.

    Built once at startup and shared read-only by every call.
    """

    site_url: str
    ws_token: str
    timeout: float = DEFAULT_TIMEOUT_SECONDS

    @property
    def endpoint(self) -> str:
        """Absolute URL of the REST server script."""
        return self.site_url.rstrip("/") + REST_ENDPOINT_PATH

    def __repr__(self) -> str:
        return f"MoodleConfig(site_url={self.site_url!r}, ws_token='***', timeout={self.timeout})"


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: LogLevel = LogLevel.INFO
    format: LogFormat = LogFormat.COLORED


@dataclass
class ServerConfig:
    """Identity reported to the MCP host."""

    name: str = "moodle-mcp"
    version: str = "0.1.0"


@dataclass
class AppConfig:
    """Complete application configuration."""

    moodle: MoodleConfig
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    server: ServerConfig = field(default_factory=ServerConfig)
