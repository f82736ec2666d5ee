"""Tests for pipeline exceptions and tool input-error categorization."""

from __future__ import annotations

import pytest

from interview_insight_mcp.errors import UploadProcessingFailed, make_tool_error


class TestUploadProcessingFailed:
    def test_message_names_state(self):
        exc = UploadProcessingFailed("files/abc", "FAILED")
        assert exc.state == "FAILED"
        assert "State: FAILED" in str(exc)


class TestMakeToolError:
    @pytest.mark.parametrize("error,category", [
        (FileNotFoundError("Media file not found: x.mp4"), "FILE_NOT_FOUND"),
        (ValueError("Unsupported media extension '.txt'"), "FILE_UNSUPPORTED"),
        (ValueError("Not a file: /tmp"), "FILE_UNSUPPORTED"),
        (PermissionError("Permission denied: x.mp4"), "UNKNOWN"),
    ])
    def test_categories(self, error, category):
        result = make_tool_error(error)
        assert result["category"] == category
        assert result["error"] == str(error)
        assert result["hint"]

    def test_record_shape(self):
        assert set(make_tool_error(ValueError("odd"))) == {"error", "category", "hint"}
