"""Tests for the interview Pydantic models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from interview_insight_mcp.models.interview import (
    AnalysisResult,
    FeatureRating,
    InterviewAnalysis,
    ReconciledFeature,
)


class TestAnalysisResult:
    def test_failure_record_has_only_status_and_message(self):
        result = AnalysisResult.failure("boom")
        assert result.ok is False
        assert result.to_record() == {"status": "error", "errorMessage": "boom"}

    def test_is_immutable(self):
        result = AnalysisResult(status="completed", summary="x")
        with pytest.raises(ValidationError):
            result.summary = "y"

    def test_rejects_unknown_status(self):
        with pytest.raises(ValidationError):
            AnalysisResult(status="pending")


class TestFeatureModels:
    def test_feature_rating_accepts_alias(self):
        r = FeatureRating.model_validate(
            {"featureKey": "paintable", "functional": "Like", "dysfunctional": "Neutral"}
        )
        assert r.feature_key == "paintable"
        assert r.note == ""

    def test_feature_rating_rejects_unknown_feeling(self):
        with pytest.raises(ValidationError):
            FeatureRating(feature_key="paintable", functional="Love", dysfunctional="Neutral")

    def test_reconciled_feature_dumps_by_alias(self):
        f = ReconciledFeature(feature_key="paintable", category="I")
        assert f.model_dump(by_alias=True) == {
            "featureKey": "paintable",
            "functional": "Neutral",
            "dysfunctional": "Neutral",
            "note": "",
            "category": "I",
        }


class TestInterviewAnalysis:
    def test_minimal_valid_payload(self):
        analysis = InterviewAnalysis.model_validate({
            "summary": "ok",
            "session1": [],
            "session2": [{"sampleId": "Sample 1", "scores": {"hard_soft": -2}}],
            "marketing_analysis": {},
            "technician_profile": {"type": "ช่างกระจก", "confidence_score": 70},
            "expert_insights": {},
        })
        assert analysis.session3 is None
        assert analysis.session2[0].scores.hard_soft == -2
        assert analysis.session2[0].scores.opacity == 0
