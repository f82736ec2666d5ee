"""Shared test fixtures for interview-insight-mcp."""

from __future__ import annotations

import json
from typing import Any
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from interview_insight_mcp.taxonomy import FEATURE_KEYS


def unwrap_tool(tool: Any) -> Any:
    """Extract the raw coroutine from a FastMCP FunctionTool, if wrapped.

    FastMCP 2.x wraps @server.tool functions in FunctionTool (not callable).
    FastMCP 3.x preserves the original function. This helper works with both.
    """
    return getattr(tool, "fn", tool)


@pytest.fixture(autouse=True)
def _set_dummy_api_key(monkeypatch):
    """Ensure tests never hit real Gemini API."""
    monkeypatch.setenv("GEMINI_API_KEY", "test-key-not-real")


@pytest.fixture(autouse=True)
def _disable_tracing(monkeypatch):
    monkeypatch.setenv("GEMINI_TRACING_ENABLED", "false")


@pytest.fixture(autouse=True)
def clean_config():
    """Reset the config singleton between tests."""
    import interview_insight_mcp.config as cfg_mod

    cfg_mod._config = None
    yield
    cfg_mod._config = None


@pytest.fixture()
def mock_gemini_client():
    """Patch GeminiClient.get() and .generate() for unit tests."""
    with (
        patch("interview_insight_mcp.client.GeminiClient.get") as mock_get,
        patch(
            "interview_insight_mcp.client.GeminiClient.generate", new_callable=AsyncMock
        ) as mock_gen,
    ):
        client = MagicMock()
        mock_get.return_value = client
        yield {
            "get": mock_get,
            "generate": mock_gen,
            "client": client,
        }


@pytest.fixture()
def no_sleep():
    """Patch asyncio.sleep so backoff and upload polling return immediately."""
    with patch("interview_insight_mcp.retry.asyncio.sleep", new_callable=AsyncMock) as mock_sleep:
        yield mock_sleep


@pytest.fixture()
def small_recording(tmp_path):
    f = tmp_path / "interview.mp4"
    f.write_bytes(b"\x00" * 128)
    return f


def make_response_payload(n_features: int = len(FEATURE_KEYS), **overrides: Any) -> dict:
    """Build a plausible model response covering the first *n_features* features."""
    payload: dict[str, Any] = {
        "summary": "ช่างให้ความสำคัญกับความทนทาน",
        "decisionReasoning": "เลือกตัวอย่างที่ 3 เพราะยิงลื่น",
        "transcript": "...",
        "session1": [
            {
                "featureKey": key,
                "functional": "Like",
                "dysfunctional": "Dislike",
                "note": f"พูดถึง {key}",
            }
            for key in FEATURE_KEYS[:n_features]
        ],
        "session2": [
            {
                "sampleId": f"Sample {i}",
                "note": "",
                "technical_analysis": "เนื้อแน่น",
                "scores": {"hard_soft": 1, "smooth_rough": -1},
            }
            for i in range(1, 10)
        ],
        "session3": {
            "ease_of_extrusion": 4,
            "smooth_finishing": 3,
            "initial_tack": 5,
            "odor_acceptability": 2,
            "note": "กลิ่นค่อนข้างแรง",
        },
        "marketing_analysis": {"target_audience": "ช่างอลูมิเนียม", "marketing_hooks": ["ยิงลื่น"]},
        "technician_profile": {
            "type": "ช่างประตู–หน้าต่าง / อลูมิเนียม",
            "match_reason": "เน้นงานสวย",
            "primary_keywords": ["งานสวย", "ยิงลื่น"],
            "confidence_score": 85,
        },
        "qualitative": {"brands": [{"brand": "BrandX", "sentiment": "Negative"}]},
        "expert_insights": {"persona_profile": "ช่างฝีมือผู้หลงใหลความสมบูรณ์แบบ"},
    }
    payload.update(overrides)
    return payload


def make_response_text(**overrides: Any) -> str:
    return json.dumps(make_response_payload(**overrides), ensure_ascii=False)
