"""Reconciliation of raw model output into an ``AnalysisResult``.

The model's JSON is trusted for types: sections are copied through as
returned. Only the satisfaction list is reshaped, so that it always holds
exactly one entry per checklist feature in checklist order.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any

from .errors import MalformedResponseError
from .models.interview import AnalysisResult, ReconciledFeature
from .taxonomy import (
    CONFIDENCE_RANGE,
    FEATURE_CHECKLIST,
    NEUTRAL_CATEGORY,
    SENSORY_SCORE_RANGE,
    kano_category,
)

logger = logging.getLogger(__name__)

MISSING_FEATURE_NOTE = "ไม่พบข้อมูลในบทสัมภาษณ์"  # "no data found in interview"
UNSPECIFIED_NOTE = "ไม่ได้ระบุ"  # "not specified"

_FENCE_OPEN = re.compile(r"^```(?:json)?\s*")
_FENCE_CLOSE = re.compile(r"\s*```$")


def default_handling_session() -> dict:
    """Secondary session used when the model returns none."""
    return {
        "ease_of_extrusion": 0,
        "smooth_finishing": 0,
        "initial_tack": 0,
        "odor_acceptability": 0,
        "note": UNSPECIFIED_NOTE,
    }


def clean_json_text(text: str | None) -> str:
    """Trim the text and strip a surrounding Markdown code fence.

    Empty or missing text becomes ``"{}"``.
    """
    if not text:
        return "{}"
    cleaned = text.strip()
    if cleaned.startswith("```"):
        cleaned = _FENCE_CLOSE.sub("", _FENCE_OPEN.sub("", cleaned, count=1), count=1)
    return cleaned or "{}"


def parse_model_output(text: str | None) -> dict[str, Any]:
    """Parse cleaned model text into a dict.

    Raises:
        MalformedResponseError: If the text is not JSON or not a JSON object.
    """
    cleaned = clean_json_text(text)
    try:
        parsed = json.loads(cleaned)
    except json.JSONDecodeError as exc:
        raise MalformedResponseError(
            f"Gemini returned non-JSON: {cleaned[:200]!r}"
        ) from exc
    if not isinstance(parsed, dict):
        raise MalformedResponseError(
            f"Gemini returned JSON {type(parsed).__name__}, expected an object"
        )
    return parsed


def _find_entry(entries: list[Any], key: str) -> dict | None:
    for item in entries:
        if isinstance(item, dict) and item.get("featureKey") == key:
            return item
    return None


def reconcile_satisfaction(entries: Any) -> list[ReconciledFeature]:
    """Merge model entries against the checklist.

    The first entry per feature key wins; unknown keys are dropped and
    features with no entry get a Neutral/Neutral placeholder.
    """
    if not isinstance(entries, list):
        entries = []

    reconciled: list[ReconciledFeature] = []
    for feature in FEATURE_CHECKLIST:
        found = _find_entry(entries, feature.key)
        if found is None:
            reconciled.append(ReconciledFeature(
                feature_key=feature.key,
                functional="Neutral",
                dysfunctional="Neutral",
                category=NEUTRAL_CATEGORY,
                note=MISSING_FEATURE_NOTE,
            ))
            continue
        data = {**found, "featureKey": feature.key}
        data.setdefault("functional", "Neutral")
        data.setdefault("dysfunctional", "Neutral")
        data["category"] = kano_category(data["functional"], data["dysfunctional"])
        reconciled.append(ReconciledFeature.model_validate(data))

    known = {f.key for f in FEATURE_CHECKLIST}
    dropped = [
        key
        for key in (item.get("featureKey") for item in entries if isinstance(item, dict))
        if not isinstance(key, str) or key not in known
    ]
    if dropped:
        logger.debug("Dropped satisfaction entries with unknown keys: %r", dropped)
    return reconciled


def _out_of_range(value: Any, bounds: tuple[float, float]) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    low, high = bounds
    return not low <= value <= high


def find_range_issues(parsed: dict[str, Any]) -> list[str]:
    """List numeric values outside their instructed ranges.

    Sensory scores should lie in [-2, 2] and technician confidence in
    [1, 100]. Values are reported, never clamped.

    Returns:
        List of issue strings (empty = all in range).
    """
    issues: list[str] = []

    samples = parsed.get("session2")
    for i, sample in enumerate(samples if isinstance(samples, list) else []):
        if not isinstance(sample, dict) or not isinstance(sample.get("scores"), dict):
            continue
        label = sample.get("sampleId") or f"Sample #{i + 1}"
        for name, value in sample["scores"].items():
            if _out_of_range(value, SENSORY_SCORE_RANGE):
                issues.append(f"{label}: {name}={value} outside [-2, 2]")

    profile = parsed.get("technician_profile")
    if isinstance(profile, dict) and _out_of_range(profile.get("confidence_score"), CONFIDENCE_RANGE):
        issues.append(
            f"technician_profile.confidence_score={profile['confidence_score']} outside [1, 100]"
        )

    return issues


def build_result(parsed: dict[str, Any]) -> AnalysisResult:
    """Shape a parsed model response into a completed ``AnalysisResult``."""
    for issue in find_range_issues(parsed):
        logger.warning("Range check: %s", issue)

    return AnalysisResult(
        status="completed",
        summary=parsed.get("summary"),
        decision_reasoning=parsed.get("decisionReasoning"),
        transcript=parsed.get("transcript"),
        satisfaction=reconcile_satisfaction(parsed.get("session1")),
        qualitative=parsed.get("qualitative"),
        blind_samples=parsed.get("session2") or [],
        handling_session=parsed.get("session3") or default_handling_session(),
        expert_insights=parsed.get("expert_insights"),
        marketing_analysis=parsed.get("marketing_analysis"),
        technician_profile=parsed.get("technician_profile"),
    )


def reconcile(text: str | None) -> AnalysisResult:
    """Clean, parse and reconcile raw model text in one step."""
    return build_result(parse_model_output(text))
