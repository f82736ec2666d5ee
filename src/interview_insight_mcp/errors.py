"""Pipeline exceptions, error categories and the structured tool error model."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel


class UploadProcessingFailed(RuntimeError):
    """Raised when an uploaded file settles in a state other than ACTIVE."""

    def __init__(self, file_name: str, state: str) -> None:
        self.file_name = file_name
        self.state = state
        super().__init__(f"File processing failed. State: {state} ({file_name})")


class MediaUploadError(RuntimeError):
    """Raised when the large-file upload path fails before processing completes."""


class MalformedResponseError(ValueError):
    """Raised when the model's response text is not a JSON object."""


class ErrorCategory(str, Enum):
    """Categories of input errors reported by the tool surface."""

    FILE_NOT_FOUND = "FILE_NOT_FOUND"
    FILE_UNSUPPORTED = "FILE_UNSUPPORTED"
    UNKNOWN = "UNKNOWN"


class ToolError(BaseModel):
    """Structured error returned when a tool cannot start an analysis."""

    error: str
    category: str
    hint: str


def categorize_error(error: Exception) -> tuple[ErrorCategory, str]:
    """Map an input exception to an ErrorCategory + human-readable hint."""
    s = str(error).lower()

    if isinstance(error, FileNotFoundError):
        return (ErrorCategory.FILE_NOT_FOUND, "File not found — check the path")
    if "unsupported media extension" in s or "not a file" in s:
        return (
            ErrorCategory.FILE_UNSUPPORTED,
            "Not a usable recording — pass a video or audio file, or set mime_type explicitly",
        )

    return (ErrorCategory.UNKNOWN, str(error))


def make_tool_error(error: Exception) -> dict:
    """Create a serialisable ToolError dict from an exception."""
    cat, hint = categorize_error(error)
    return ToolError(error=str(error), category=cat.value, hint=hint).model_dump(mode="json")
