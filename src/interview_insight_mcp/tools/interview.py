"""Interview tools — 2 tools on a FastMCP sub-server."""

from __future__ import annotations

import logging
from typing import Annotated

from fastmcp import FastMCP
from mcp.types import ToolAnnotations
from pydantic import Field

from ..errors import make_tool_error
from ..taxonomy import FEATURE_CHECKLIST, FEELINGS, KANO_CATEGORIES, TECHNICIAN_TYPES
from ..tracing import trace
from ..types import InterviewFileId, MediaFilePath
from .interview_core import analyze_interview
from .interview_media import MediaInput

logger = logging.getLogger(__name__)
interview_server = FastMCP("interview")


@interview_server.tool(
    annotations=ToolAnnotations(
        readOnlyHint=False,
        destructiveHint=False,
        idempotentHint=False,
        openWorldHint=True,
    )
)
@trace(name="interview_analyze", span_type="TOOL")
async def interview_analyze(
    file_path: MediaFilePath,
    file_id: InterviewFileId = "",
    model: Annotated[str | None, Field(
        description="Gemini model ID; defaults to GEMINI_MODEL",
    )] = None,
    mime_type: Annotated[str | None, Field(
        description="MIME type of the recording; skips extension detection when set",
    )] = None,
) -> dict:
    """Analyze a recorded sealant product-testing interview.

    Returns the reconciled record: Kano satisfaction for every checklist
    feature (session1), blind-sample sensory scores (session2), the
    hands-on session (session3), marketing and expert insights, and the
    technician classification. Analysis failures come back as
    ``{"status": "error", "errorMessage": ...}``.

    Args:
        file_path: Local video or audio recording.
        file_id: Identifier for the interview, used in logs.
        model: Override the Gemini model.
        mime_type: Declare the recording's MIME type, for files whose
            extension is not recognized.

    Returns:
        Dict with the analysis record, or a tool error if the file is unusable.
    """
    try:
        media = MediaInput.from_path(file_path, mime_type=mime_type or None)
    except (OSError, ValueError) as exc:
        return make_tool_error(exc)

    result = await analyze_interview(media, file_id or media.display_name, model_name=model)
    return result.to_record()


@interview_server.tool(annotations=ToolAnnotations(readOnlyHint=True, openWorldHint=False))
async def interview_checklist() -> dict:
    """Return the fixed taxonomy used by interview_analyze.

    Includes the checklist features in order, the 5-point feeling scale,
    the Kano category legend and the six technician archetypes.
    """
    return {
        "features": [f._asdict() for f in FEATURE_CHECKLIST],
        "feelings": list(FEELINGS),
        "kano_categories": dict(KANO_CATEGORIES),
        "technician_types": [
            {**t._asdict(), "keywords": list(t.keywords)} for t in TECHNICIAN_TYPES
        ],
    }
