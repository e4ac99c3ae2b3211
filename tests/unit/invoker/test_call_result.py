"""Unit tests for CallResult."""

import pytest

from moodle_mcp.errors import NETWORK_ERROR, create_error
from moodle_mcp.invoker import CallResult


class TestCallResult:
    """Tests for the success / failure union."""

    def test_ok(self):
        result = CallResult.ok({"id": 1}, "core_course_get_courses", 12)

        assert result.success
        assert result.data == {"id": 1}
        assert result.error is None
        assert result.to_dict() == {"data": {"id": 1}}

    def test_ok_with_null_payload(self):
        """Functions that return nothing still succeed."""
        result = CallResult.ok(None)

        assert result.success
        assert result.data is None

    def test_fail(self):
        error = create_error(NETWORK_ERROR, message="Connection refused")
        result = CallResult.fail(error, "core_webservice_get_site_info")

        assert not result.success
        assert result.data is None
        assert result.to_dict() == {
            "exception": "network_error",
            "errorcode": "network_error",
            "message": "Connection refused",
        }

    def test_both_variants_rejected(self):
        error = create_error(NETWORK_ERROR, message="boom")

        with pytest.raises(ValueError, match="both"):
            CallResult(data={"id": 1}, error=error)
