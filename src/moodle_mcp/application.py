"""Moodle MCP Application - orchestrator for all components.

Initializes and wires the components together: config, logger, error
handling, the web-service invoker, the tool catalog, the dispatcher and
the stdio MCP frontend.
"""

import sys
from typing import TextIO

from moodle_mcp.catalog import build_registry
from moodle_mcp.config import AppConfig, ConfigLoader
from moodle_mcp.dispatch import ToolDispatcher
from moodle_mcp.errors import ErrorFactory, ErrorRegistry
from moodle_mcp.invoker import FunctionInvoker
from moodle_mcp.logging import LogConfig, MoodleLogger
from moodle_mcp.mcp_frontend import MCPFrontend
from moodle_mcp.registry import ToolRegistry
from moodle_mcp.types import LogLevel


class MoodleMCPApplication:
    """
    Moodle MCP Application orchestrator.

    Initialization sequence:

    1. Config loading
    2. Logger setup
    3. Error registry
    4. Function invoker (HTTP client)
    5. Tool registry (static catalog)
    6. Tool dispatcher
    7. MCP frontend (stdio server)
    """

    def __init__(
        self,
        config_path: str | None = None,
        log_output: TextIO | None = None,
        log_level: LogLevel | None = None,
    ):
        """Initialize application.

        Args:
            config_path: Path to config file (optional)
            log_output: Output stream for logs (default: sys.stderr)
            log_level: Override for the configured log level
        """
        self._config_path = config_path
        self._log_output = log_output or sys.stderr
        self._log_level = log_level
        self._initialized = False

        self.config_loader: ConfigLoader | None = None
        self.config: AppConfig | None = None
        self.logger: MoodleLogger | None = None
        self.error_registry: ErrorRegistry | None = None
        self.error_factory: ErrorFactory | None = None
        self.invoker: FunctionInvoker | None = None
        self.tool_registry: ToolRegistry | None = None
        self.dispatcher: ToolDispatcher | None = None
        self.mcp_frontend: MCPFrontend | None = None

    async def initialize(self) -> None:
        """Initialize all components.

        Raises:
            MoodleError: ``config_invalid`` if the configuration is unusable
        """
        if self._initialized:
            return

        # 1. Config Loader
        self.config_loader = ConfigLoader()
        self.config = self.config_loader.load(self._config_path)

        # 2. Logger
        log_config = LogConfig(
            level=self._log_level or self.config.logging.level,
            format=self.config.logging.format,
            output=self._log_output,
        )
        self.logger = MoodleLogger(log_config)
        if self.config_loader.config_path:
            self.logger.info(
                "config", f"Loaded configuration from {self.config_loader.config_path}"
            )

        # 3. Error Registry & Factory
        self.error_registry = ErrorRegistry()
        self.error_factory = ErrorFactory(self.error_registry)

        # 4. Function Invoker
        self.invoker = FunctionInvoker(
            self.config.moodle,
            logger=self.logger,
            error_factory=self.error_factory,
        )

        # 5. Tool Registry
        self.tool_registry = build_registry()

        # 6. Dispatcher
        self.dispatcher = ToolDispatcher(
            self.tool_registry,
            self.invoker,
            logger=self.logger,
            error_factory=self.error_factory,
        )

        # 7. MCP Frontend
        self.mcp_frontend = MCPFrontend(
            self.dispatcher,
            config=self.config.server,
            logger=self.logger,
        )

        self._initialized = True
        self.logger.debug(
            "server",
            "Application initialized",
            site=self.config.moodle.site_url,
            tools=len(self.tool_registry),
        )

    async def shutdown(self) -> None:
        """Shutdown all components."""
        if not self._initialized:
            return

        if self.invoker:
            await self.invoker.aclose()

        self._initialized = False

    async def start(self) -> None:
        """Start the MCP frontend server.

        Initializes the application if needed, serves until the host closes
        stdin, then shuts down.
        """
        if not self._initialized:
            await self.initialize()

        try:
            if self.mcp_frontend:
                await self.mcp_frontend.start()
        finally:
            await self.shutdown()
