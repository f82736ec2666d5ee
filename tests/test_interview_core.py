"""Tests for the analyze_interview pipeline and its error boundary."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock, patch

from google.genai import types

from interview_insight_mcp.client import GeminiClient
from interview_insight_mcp.config import DEFAULT_MODEL, update_config
from interview_insight_mcp.reconcile import MISSING_FEATURE_NOTE
from interview_insight_mcp.taxonomy import FEATURE_KEYS
from interview_insight_mcp.tools.interview_core import analyze_interview
from interview_insight_mcp.tools.interview_media import MediaInput
from tests.conftest import make_response_text


def _text_response(text: str) -> MagicMock:
    response = MagicMock()
    response.candidates = []
    response.text = text
    return response


class TestAnalyzeInterview:
    async def test_happy_path(self, small_recording, mock_gemini_client):
        mock_gemini_client["generate"].return_value = make_response_text()

        result = await analyze_interview(MediaInput.from_path(small_recording), "int-001")

        assert result.status == "completed"
        assert [e.feature_key for e in result.satisfaction] == list(FEATURE_KEYS)
        assert len(result.blind_samples) == 9

    async def test_request_shape(self, small_recording, mock_gemini_client):
        mock_gemini_client["generate"].return_value = "{}"

        await analyze_interview(MediaInput.from_path(small_recording), "int-001")

        call = mock_gemini_client["generate"].call_args
        contents = call.args[0]
        assert len(contents.parts) == 2
        assert contents.parts[0].inline_data.data == b"\x00" * 128
        assert "TASK 1" in contents.parts[1].text
        assert call.kwargs["model"] == DEFAULT_MODEL
        assert call.kwargs["temperature"] == 0.2
        assert "session1" in call.kwargs["response_schema"]["properties"]

    async def test_model_name_is_honoured(self, small_recording, mock_gemini_client):
        mock_gemini_client["generate"].return_value = "{}"

        await analyze_interview(
            MediaInput.from_path(small_recording), "int-001", model_name="gemini-3-flash-preview"
        )

        assert mock_gemini_client["generate"].call_args.kwargs["model"] == "gemini-3-flash-preview"

    async def test_zero_satisfaction_entries(self, small_recording, mock_gemini_client):
        mock_gemini_client["generate"].return_value = make_response_text(n_features=0)

        result = await analyze_interview(MediaInput.from_path(small_recording), "int-001")

        assert len(result.satisfaction) == len(FEATURE_KEYS)
        assert all(e.note == MISSING_FEATURE_NOTE for e in result.satisfaction)

    async def test_fenced_response(self, small_recording, mock_gemini_client):
        plain = make_response_text()
        mock_gemini_client["generate"].side_effect = [plain, f"```json\n{plain}\n```"]
        media = MediaInput.from_path(small_recording)

        first = await analyze_interview(media, "a")
        second = await analyze_interview(media, "b")

        assert first.to_record() == second.to_record()

    async def test_malformed_response_becomes_error_record(self, small_recording, mock_gemini_client):
        mock_gemini_client["generate"].return_value = "not json at all"

        result = await analyze_interview(MediaInput.from_path(small_recording), "int-001")

        assert result.to_record() == {
            "status": "error",
            "errorMessage": "Gemini returned non-JSON: 'not json at all'",
        }
        mock_gemini_client["generate"].assert_awaited_once()

    async def test_upload_failure_becomes_error_record(
        self, small_recording, mock_gemini_client, no_sleep, monkeypatch
    ):
        monkeypatch.setenv("INTERVIEW_INLINE_MAX_BYTES", "64")
        client = mock_gemini_client["client"]
        client.aio.files.upload = AsyncMock(return_value=MagicMock(uri="u", state="PROCESSING"))
        client.aio.files.get = AsyncMock(side_effect=[
            MagicMock(state="PROCESSING"),
            MagicMock(state="FAILED"),
        ])

        result = await analyze_interview(MediaInput.from_path(small_recording), "int-001")

        assert result.status == "error"
        assert "FAILED" in result.error_message
        mock_gemini_client["generate"].assert_not_awaited()


class TestRetryThroughPipeline:
    """Exercise the real GeminiClient.generate with a mocked SDK client."""

    async def test_rate_limit_exhausts_five_attempts(self, small_recording, no_sleep):
        client = MagicMock()
        client.aio.models.generate_content = AsyncMock(
            side_effect=Exception("429 RESOURCE_EXHAUSTED")
        )
        with patch.object(GeminiClient, "get", return_value=client):
            result = await analyze_interview(MediaInput.from_path(small_recording), "int-001")

        assert result.status == "error"
        assert "429" in result.error_message
        assert client.aio.models.generate_content.await_count == 5
        delays = [c.args[0] * 1000 for c in no_sleep.await_args_list]
        assert delays == [3000, 7500, 18750, 46875]

    async def test_unclassified_error_is_not_retried(self, small_recording, no_sleep):
        client = MagicMock()
        client.aio.models.generate_content = AsyncMock(side_effect=Exception("400 INVALID_ARGUMENT"))
        with patch.object(GeminiClient, "get", return_value=client):
            result = await analyze_interview(MediaInput.from_path(small_recording), "int-001")

        assert result.status == "error"
        client.aio.models.generate_content.assert_awaited_once()
        no_sleep.assert_not_awaited()

    async def test_recovers_after_overload(self, small_recording, no_sleep):
        client = MagicMock()
        client.aio.models.generate_content = AsyncMock(side_effect=[
            Exception("503 The model is overloaded"),
            _text_response(make_response_text()),
        ])
        with patch.object(GeminiClient, "get", return_value=client):
            result = await analyze_interview(MediaInput.from_path(small_recording), "int-001")

        assert result.status == "completed"
        config = client.aio.models.generate_content.call_args.kwargs["config"]
        assert isinstance(config, types.GenerateContentConfig)
        assert config.response_mime_type == "application/json"
        assert config.temperature == 0.2


class TestSpanAnnotations:
    async def test_records_file_id_route_and_status(self, small_recording, mock_gemini_client):
        mock_gemini_client["generate"].return_value = "{}"
        with patch("interview_insight_mcp.tools.interview_core.annotate_span") as mock_annotate:
            await analyze_interview(MediaInput.from_path(small_recording), "int-007")

        first, last = mock_annotate.call_args_list[0], mock_annotate.call_args_list[-1]
        assert first.kwargs == {
            "file_id": "int-007",
            "model": DEFAULT_MODEL,
            "media_bytes": 128,
            "media_route": "inline",
        }
        assert last.kwargs == {"status": "completed"}

    async def test_records_error_status(self, small_recording, mock_gemini_client):
        mock_gemini_client["generate"].return_value = "not json"
        with patch("interview_insight_mcp.tools.interview_core.annotate_span") as mock_annotate:
            await analyze_interview(MediaInput.from_path(small_recording), "int-007")

        assert mock_annotate.call_args_list[-1].kwargs == {"status": "error"}


class TestRawResponseLogging:
    async def test_raw_text_logged_only_when_enabled(
        self, small_recording, mock_gemini_client, caplog
    ):
        mock_gemini_client["generate"].return_value = '{"summary": "raw-marker"}'
        logger_name = "interview_insight_mcp.tools.interview_core"

        with caplog.at_level("DEBUG", logger=logger_name):
            await analyze_interview(MediaInput.from_path(small_recording), "int-008")
        assert "raw-marker" not in caplog.text

        update_config(log_raw_responses=True)
        with caplog.at_level("DEBUG", logger=logger_name):
            await analyze_interview(MediaInput.from_path(small_recording), "int-008")
        assert "Raw response for int-008" in caplog.text
        assert "raw-marker" in caplog.text
