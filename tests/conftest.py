"""
Pytest configuration and shared fixtures for moodle-mcp tests.
"""

import io
import sys
from collections.abc import Callable
from pathlib import Path

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))
sys.path.insert(0, str(Path(__file__).parent.parent))

from moodle_mcp.catalog import build_registry  # noqa: E402
from moodle_mcp.config import MoodleConfig  # noqa: E402
from moodle_mcp.dispatch import ToolDispatcher  # noqa: E402
from moodle_mcp.invoker import FunctionInvoker  # noqa: E402
from moodle_mcp.logging import LogConfig, MoodleLogger  # noqa: E402
from moodle_mcp.registry import ToolRegistry  # noqa: E402
from moodle_mcp.types import LogFormat, LogLevel  # noqa: E402
from tests.mocks import SITE_URL, WS_TOKEN, MockMoodleSite  # noqa: E402

# =============================================================================
# Path Fixtures
# =============================================================================


@pytest.fixture(scope="session")
def project_root() -> Path:
    """Return the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture(scope="session")
def tests_dir() -> Path:
    """Return the tests directory."""
    return Path(__file__).parent


# =============================================================================
# Configuration Fixtures
# =============================================================================


@pytest.fixture
def moodle_config() -> MoodleConfig:
    """Site config pointing at the mock site."""
    return MoodleConfig(site_url=SITE_URL, ws_token=WS_TOKEN, timeout=5.0)


# =============================================================================
# Logging Fixtures
# =============================================================================


@pytest.fixture
def log_stream() -> io.StringIO:
    """Captured log output."""
    return io.StringIO()


@pytest.fixture
def logger(log_stream: io.StringIO) -> MoodleLogger:
    """DEBUG-level JSON logger writing to log_stream."""
    return MoodleLogger(LogConfig(level=LogLevel.DEBUG, format=LogFormat.JSON, output=log_stream))


# =============================================================================
# Remote Site Fixtures
# =============================================================================


@pytest.fixture
def moodle_site() -> MockMoodleSite:
    """Mock web-service endpoint; answers ``[]`` unless told otherwise."""
    return MockMoodleSite()


@pytest.fixture
async def invoker(moodle_config, moodle_site, logger):
    """FunctionInvoker wired to the mock site."""
    function_invoker = FunctionInvoker(
        moodle_config, logger=logger, transport=moodle_site.transport
    )
    yield function_invoker
    await function_invoker.aclose()


@pytest.fixture(scope="session")
def tool_registry() -> ToolRegistry:
    """The full tool catalog."""
    return build_registry()


@pytest.fixture
def dispatcher(tool_registry, invoker, logger) -> ToolDispatcher:
    """Dispatcher over the full catalog and the mock site."""
    return ToolDispatcher(tool_registry, invoker, logger=logger)


@pytest.fixture
def make_invoker(moodle_config, moodle_site) -> Callable[..., FunctionInvoker]:
    """Build an invoker with config overrides (caller closes it)."""

    def _make(**overrides) -> FunctionInvoker:
        config = MoodleConfig(
            site_url=overrides.pop("site_url", moodle_config.site_url),
            ws_token=overrides.pop("ws_token", moodle_config.ws_token),
            timeout=overrides.pop("timeout", moodle_config.timeout),
        )
        return FunctionInvoker(config, transport=moodle_site.transport, **overrides)

    return _make


# =============================================================================
# Markers Configuration
# =============================================================================


def pytest_configure(config):
    """Configure custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "property: Property-based tests")
    config.addinivalue_line("markers", "frontend: MCP frontend tests")
