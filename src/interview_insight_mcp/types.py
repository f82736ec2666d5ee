"""Shared type aliases for tool parameters and models."""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import Field

# ── Literal enums ────────────────────────────────────────────────────────────

KanoFeeling = Literal["Like", "Expect", "Neutral", "Tolerate", "Dislike"]
KanoCategory = Literal["A", "O", "M", "I", "R", "Q"]
BrandSentiment = Literal["Positive", "Negative", "Neutral"]
AnalysisStatus = Literal["completed", "error"]

# ── Annotated aliases ────────────────────────────────────────────────────────

MediaFilePath = Annotated[str, Field(
    min_length=1,
    description="Path to a local interview recording (video or audio)",
)]
InterviewFileId = Annotated[str, Field(
    description="Caller's identifier for the interview, used in logs and traces",
)]
