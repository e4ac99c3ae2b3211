"""Test mocks for moodle-mcp.

Provides mock implementations for testing:
- MockMoodleSite: Simulates a site's REST web-service endpoint
"""

from .mock_moodle import SITE_URL, WS_TOKEN, CannedResponse, MockMoodleSite

__all__ = ["SITE_URL", "WS_TOKEN", "CannedResponse", "MockMoodleSite"]
