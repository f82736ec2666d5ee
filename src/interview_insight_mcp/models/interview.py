"""Interview analysis models — structured output schema and the result record.

``InterviewAnalysis`` is only used to derive the JSON schema sent with every
request; the response itself is reconciled from the raw JSON dict (see
``reconcile.py``) and not re-validated against these models.
``AnalysisResult`` is the record handed back to callers.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from ..types import AnalysisStatus, BrandSentiment, KanoCategory, KanoFeeling


class FeatureRating(BaseModel):
    """Functional / dysfunctional answer for one checklist feature."""

    model_config = ConfigDict(populate_by_name=True)

    feature_key: str = Field(alias="featureKey")
    functional: KanoFeeling = Field(description="Feeling if the product HAS the feature")
    dysfunctional: KanoFeeling = Field(description="Feeling if the product LACKS the feature")
    note: str = ""


class MarketingAnalysis(BaseModel):
    target_audience: str = ""
    unique_selling_point: str = ""
    pricing_perception: str = ""
    marketing_channels: list[str] = Field(default_factory=list)
    marketing_hooks: list[str] = Field(default_factory=list)
    pain_point_solution: str = ""


class TechnicianProfile(BaseModel):
    """Exactly-one-of-six technician classification."""

    type: str = ""
    match_reason: str = ""
    primary_keywords: list[str] = Field(default_factory=list)
    confidence_score: float = Field(default=0, description="Confidence from 1 to 100")


class BrandMention(BaseModel):
    brand: str = ""
    product: str = ""
    sentiment: BrandSentiment = "Neutral"
    reason: str = ""
    comparison_points: list[str] = Field(default_factory=list)
    switching_barrier: str = ""


class QualitativeInsights(BaseModel):
    brands: list[BrandMention] = Field(default_factory=list)


class SensoryScores(BaseModel):
    """Ten sensory scores, each expected in [-2, +2]."""

    hard_soft: float = 0
    smooth_rough: float = 0
    matte_glossy: float = 0
    reflective: float = 0
    cold_warm: float = 0
    elasticity: float = 0
    opacity: float = 0
    tough_ductile: float = 0
    strong_weak: float = 0
    light_heavy: float = 0


class BlindSample(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    sample_id: str = Field(default="", alias="sampleId")
    note: str = ""
    technical_analysis: str = ""
    scores: SensoryScores = Field(default_factory=SensoryScores)


class HandlingSession(BaseModel):
    """Secondary hands-on session scores."""

    ease_of_extrusion: float = 0
    smooth_finishing: float = 0
    initial_tack: float = 0
    odor_acceptability: float = 0
    note: str = ""


class ExpertInsights(BaseModel):
    persona_profile: str = ""
    sealant_personality: str = ""
    professional_lifestyle: str = ""
    expertise_level: str = ""
    unspoken_needs: list[str] = Field(default_factory=list)
    rd_roadmap_suggestions: list[str] = Field(default_factory=list)
    critical_quotes: list[str] = Field(default_factory=list)


class InterviewAnalysis(BaseModel):
    """Structured output requested from Gemini for one interview.

    Fields without defaults are the required top-level keys.
    """

    model_config = ConfigDict(populate_by_name=True)

    summary: str
    decision_reasoning: str = Field(default="", alias="decisionReasoning")
    transcript: str = ""
    session1: list[FeatureRating]
    marketing_analysis: MarketingAnalysis
    technician_profile: TechnicianProfile
    qualitative: QualitativeInsights = Field(default_factory=QualitativeInsights)
    session2: list[BlindSample]
    session3: HandlingSession | None = None
    expert_insights: ExpertInsights


class ReconciledFeature(BaseModel):
    """A satisfaction entry after merging against the checklist.

    Extra keys returned by the model are kept as-is.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow", frozen=True)

    feature_key: str = Field(alias="featureKey")
    functional: Any = "Neutral"
    dysfunctional: Any = "Neutral"
    note: Any = ""
    category: KanoCategory


class AnalysisResult(BaseModel):
    """Reconciled outcome of one interview analysis.

    On success every section is present (``session1`` always has one entry
    per checklist feature, ``session2`` and ``session3`` are defaulted).
    On failure only ``status`` and ``error_message`` are set.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    status: AnalysisStatus
    summary: Any = None
    decision_reasoning: Any = Field(default=None, alias="decisionReasoning")
    transcript: Any = None
    satisfaction: list[ReconciledFeature] | None = Field(default=None, alias="session1")
    qualitative: Any = None
    blind_samples: list[Any] | None = Field(default=None, alias="session2")
    handling_session: Any = Field(default=None, alias="session3")
    expert_insights: Any = None
    marketing_analysis: Any = None
    technician_profile: Any = None
    error_message: str | None = Field(default=None, alias="errorMessage")

    @classmethod
    def failure(cls, message: str) -> AnalysisResult:
        return cls(status="error", error_message=message)

    @property
    def ok(self) -> bool:
        return self.status == "completed"

    def to_record(self) -> dict:
        """Serialise with the downstream record's keys, omitting absent fields."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
