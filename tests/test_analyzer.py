"""Tests for the AI strength analyzer."""

import json
from unittest.mock import Mock, patch

import pytest
import requests
from structlog.testing import capture_logs

from passforge.analyzer import (
    PROMPT_TEMPLATE,
    AnalysisError,
    StrengthResult,
    analyze_strength,
    build_request,
    parse_response,
    strength_label,
)


# ── Fixtures / helpers ─────────────────────────────────────────────────────


def _reply(payload) -> dict:
    """Wrap *payload* the way generateContent returns structured output."""
    text = payload if isinstance(payload, str) else json.dumps(payload)
    return {"candidates": [{"content": {"role": "model", "parts": [{"text": text}]}}]}


def _mock_response(data, status_error=None) -> Mock:
    resp = Mock()
    resp.json.return_value = data
    resp.raise_for_status = Mock(side_effect=status_error)
    return resp


GOOD = {"strengthScore": 0.85, "analysis": "Long and varied. Consider a passphrase."}


# ── strength_label / StrengthResult ────────────────────────────────────────


class TestStrengthLabel:
    @pytest.mark.parametrize(
        "score, label",
        [
            (0.0, "Weak"),
            (0.29, "Weak"),
            (0.3, "Moderate"),
            (0.59, "Moderate"),
            (0.6, "Strong"),
            (0.8, "Very Strong"),
            (1.0, "Very Strong"),
        ],
    )
    def test_buckets(self, score, label):
        assert strength_label(score) == label

    def test_result_properties(self):
        r = StrengthResult.model_validate(GOOD)
        assert r.strength_score == 0.85
        assert r.label == "Very Strong"
        assert r.percent == 85

    def test_result_dumps_camel_case(self):
        r = StrengthResult(strength_score=0.5, analysis="ok")
        assert r.model_dump(by_alias=True) == {"strengthScore": 0.5, "analysis": "ok"}


# ── build_request / parse_response ─────────────────────────────────────────


class TestRequestContract:
    def test_prompt_interpolates_password(self):
        body = build_request("hunter2!")
        text = body["contents"][0]["parts"][0]["text"]
        assert text == PROMPT_TEMPLATE.format(password="hunter2!")
        assert "Password: hunter2!" in text
        assert "expert in password security" in text

    def test_requests_json_schema(self):
        gen = build_request("x")["generationConfig"]
        assert gen["responseMimeType"] == "application/json"
        schema = gen["responseSchema"]
        assert set(schema["properties"]) == {"strengthScore", "analysis"}
        assert schema["required"] == ["strengthScore", "analysis"]

    def test_parse_valid(self):
        r = parse_response(_reply(GOOD))
        assert r.analysis.startswith("Long and varied")

    def test_parse_integer_score(self):
        assert parse_response(_reply({"strengthScore": 1, "analysis": "x"})).strength_score == 1.0

    @pytest.mark.parametrize(
        "data",
        [
            {},
            {"candidates": []},
            {"candidates": [{"content": {"parts": []}}]},
            {"candidates": [{"finishReason": "SAFETY"}]},
            {"candidates": [{"content": {"parts": None}}]},
            {"candidates": [{"content": {"parts": [{"text": None}]}}]},
        ],
    )
    def test_no_output_raises(self, data):
        with pytest.raises(AnalysisError, match="no output"):
            parse_response(data)

    def test_non_json_raises(self):
        with pytest.raises(AnalysisError, match="not valid JSON"):
            parse_response(_reply("This password is strong!"))

    @pytest.mark.parametrize(
        "payload",
        [
            {"strengthScore": 1.5, "analysis": "x"},
            {"strengthScore": -0.1, "analysis": "x"},
            {"strengthScore": 0.5},
            {"analysis": "x"},
            {"strengthScore": "high", "analysis": "x"},
            [0.5, "x"],
        ],
    )
    def test_schema_mismatch_raises(self, payload):
        with pytest.raises(AnalysisError, match="expected schema"):
            parse_response(_reply(payload))


# ── analyze_strength ───────────────────────────────────────────────────────


class TestAnalyzeStrength:
    @pytest.mark.asyncio
    @patch("passforge.analyzer.requests.post")
    async def test_success(self, mock_post, settings):
        mock_post.return_value = _mock_response(_reply(GOOD))
        result = await analyze_strength("Xy7!abcdEFGH", settings=settings)
        assert result.strength_score == 0.85
        assert result.label == "Very Strong"

    @pytest.mark.asyncio
    @patch("passforge.analyzer.requests.post")
    async def test_request_shape(self, mock_post, settings):
        mock_post.return_value = _mock_response(_reply(GOOD))
        await analyze_strength("Xy7!abcdEFGH", settings=settings)

        url = mock_post.call_args[0][0]
        kwargs = mock_post.call_args[1]
        assert url == "https://example.invalid/v1beta/models/gemini-test:generateContent"
        assert kwargs["headers"] == {"x-goog-api-key": "test-key"}
        assert kwargs["timeout"] == 5
        assert kwargs["json"] == build_request("Xy7!abcdEFGH")
        # Key never travels in the URL
        assert "test-key" not in url

    @pytest.mark.asyncio
    @patch("passforge.analyzer.requests.post")
    async def test_network_error(self, mock_post, settings):
        mock_post.side_effect = requests.ConnectionError("down")
        with pytest.raises(AnalysisError, match="request failed") as exc_info:
            await analyze_strength("Xy7!abcdEFGH", settings=settings)
        assert isinstance(exc_info.value.__cause__, requests.ConnectionError)

    @pytest.mark.asyncio
    @patch("passforge.analyzer.requests.post")
    async def test_timeout(self, mock_post, settings):
        mock_post.side_effect = requests.Timeout("slow")
        with pytest.raises(AnalysisError):
            await analyze_strength("Xy7!abcdEFGH", settings=settings)

    @pytest.mark.asyncio
    @patch("passforge.analyzer.requests.post")
    async def test_http_error_status(self, mock_post, settings):
        mock_post.return_value = _mock_response({}, status_error=requests.HTTPError("503"))
        with pytest.raises(AnalysisError, match="503"):
            await analyze_strength("Xy7!abcdEFGH", settings=settings)

    @pytest.mark.asyncio
    @patch("passforge.analyzer.requests.post")
    async def test_non_json_body(self, mock_post, settings):
        resp = _mock_response(None)
        resp.json.side_effect = ValueError("no json")
        mock_post.return_value = resp
        with pytest.raises(AnalysisError, match="non-JSON"):
            await analyze_strength("Xy7!abcdEFGH", settings=settings)

    @pytest.mark.asyncio
    @patch("passforge.analyzer.requests.post")
    async def test_malformed_model_output(self, mock_post, settings):
        mock_post.return_value = _mock_response(_reply({"score": 0.5}))
        with pytest.raises(AnalysisError):
            await analyze_strength("Xy7!abcdEFGH", settings=settings)

    @pytest.mark.asyncio
    @patch("passforge.analyzer.requests.post")
    async def test_missing_api_key(self, mock_post, settings, monkeypatch):
        monkeypatch.delenv("GEMINI_API_KEY", raising=False)
        monkeypatch.delenv("GOOGLE_API_KEY", raising=False)
        no_key = settings.model_copy(update={"api_key": None})
        with pytest.raises(AnalysisError, match="No API key"):
            await analyze_strength("Xy7!abcdEFGH", settings=no_key)
        mock_post.assert_not_called()

    @pytest.mark.asyncio
    @patch("passforge.analyzer.requests.post")
    async def test_one_attempt_per_call(self, mock_post, settings):
        mock_post.side_effect = requests.ConnectionError("down")
        with pytest.raises(AnalysisError):
            await analyze_strength("Xy7!abcdEFGH", settings=settings)
        assert mock_post.call_count == 1

    @pytest.mark.asyncio
    @patch("passforge.analyzer.requests.post")
    async def test_logs_length_not_password(self, mock_post, settings):
        mock_post.return_value = _mock_response(_reply(GOOD))
        with capture_logs() as logs:
            await analyze_strength("Xy7!abcdEFGH", settings=settings)

        events = {e["event"]: e for e in logs}
        started = events["strength_analysis_started"]
        completed = events["strength_analysis_completed"]
        assert started["model"] == "gemini-test"
        assert started["length"] == 12
        assert completed["score"] == 0.85
        assert all("Xy7!abcdEFGH" not in str(v) for e in logs for v in e.values())

    @pytest.mark.asyncio
    @patch("passforge.analyzer.requests.post")
    async def test_logs_failure_reason(self, mock_post, settings):
        mock_post.side_effect = requests.ConnectionError("down")
        with capture_logs() as logs:
            with pytest.raises(AnalysisError):
                await analyze_strength("Xy7!abcdEFGH", settings=settings)

        failed = [e for e in logs if e["event"] == "strength_analysis_failed"]
        assert len(failed) == 1
        assert "down" in failed[0]["reason"]
        assert all("Xy7!abcdEFGH" not in str(v) for e in logs for v in e.values())


def test_package_reexports_analyzer():
    import passforge
    import passforge.analyzer as analyzer

    assert passforge.AnalysisError is analyzer.AnalysisError
    assert passforge.StrengthResult is analyzer.StrengthResult
    assert passforge.analyze_strength is analyzer.analyze_strength
    assert passforge.strength_label is analyzer.strength_label
