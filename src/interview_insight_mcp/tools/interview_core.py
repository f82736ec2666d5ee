"""Interview analysis pipeline: media part, Gemini call, reconciliation."""

from __future__ import annotations

import logging

from google.genai import types

from ..client import GeminiClient
from ..config import get_config
from ..models.interview import AnalysisResult
from ..prompts.interview import analysis_schema, build_instruction
from ..reconcile import reconcile
from ..tracing import annotate_span, trace
from .interview_media import MediaInput, prepare_content

logger = logging.getLogger(__name__)


@trace(name="analyze_interview", span_type="CHAIN")
async def analyze_interview(
    media: MediaInput,
    file_id: str,
    model_name: str | None = None,
) -> AnalysisResult:
    """Analyze one recorded interview end to end.

    Runs the four stages in order: prepare the media part (inline or File
    API upload), attach the fixed instruction and schema, call Gemini with
    retry, and reconcile the JSON answer against the feature checklist.

    Every failure is caught here and returned as an error result; nothing
    is raised to the caller and no partial result is ever returned.

    Args:
        media: The recording to analyze.
        file_id: Caller's identifier for the interview (logging only).
        model_name: Gemini model ID; defaults to the configured model.

    Returns:
        A completed ``AnalysisResult``, or one with ``status="error"``.
    """
    try:
        cfg = get_config()
        model = model_name or cfg.default_model
        annotate_span(
            file_id=file_id,
            model=model,
            media_bytes=media.size,
            media_route="upload" if media.size > cfg.inline_max_bytes else "inline",
        )
        part = await prepare_content(media)
        contents = types.Content(
            role="user",
            parts=[part.to_part(), types.Part(text=build_instruction())],
        )
        raw = await GeminiClient.generate(
            contents,
            model=model,
            response_schema=analysis_schema(),
            temperature=cfg.temperature,
        )
        if cfg.log_raw_responses:
            logger.debug("Raw response for %s: %s", file_id, raw)
        result = reconcile(raw)
    except Exception as exc:
        logger.error(
            "Gemini analysis failed for %s (%s): %s",
            file_id,
            media.display_name,
            exc,
            exc_info=True,
        )
        annotate_span(status="error")
        return AnalysisResult.failure(str(exc))

    annotate_span(status=result.status)
    logger.info("Analyzed interview %s with %s", file_id, model)
    return result
