"""Moodle MCP - expose a Moodle site's web-service API as MCP tools.

Each tool maps onto one REST web-service function; arguments are validated,
renamed to the remote API's field names and sent with the site token.
"""

from moodle_mcp.application import MoodleMCPApplication

__version__ = "0.1.0"
__all__ = ["__version__", "MoodleMCPApplication"]
