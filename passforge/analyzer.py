"""AI password strength analysis.

Sends a password to a Generative Language model with a fixed instruction and
a JSON response schema, and returns the parsed score and critique.  The
result is advisory text from a third-party model, not a security audit.
"""

import asyncio
import json

import requests
import structlog
from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as SchemaError

from passforge.config import Settings, get_settings

logger = structlog.get_logger(__name__)


PROMPT_TEMPLATE = """You are an expert in password security.

Analyze the following password and provide a strength score between 0 and 1, \
and an analysis of its weaknesses and suggestions for improvement.

Password: {password}
"""

RESPONSE_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "strengthScore": {
            "type": "NUMBER",
            "description": "A score from 0 to 1 indicating the password strength.",
        },
        "analysis": {
            "type": "STRING",
            "description": (
                "An analysis of the password, including potential weaknesses "
                "and suggestions for improvement."
            ),
        },
    },
    "required": ["strengthScore", "analysis"],
}


class AnalysisError(RuntimeError):
    """Raised when the strength analysis could not be obtained."""


class StrengthResult(BaseModel):
    """Score and critique returned by the model."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    strength_score: float = Field(alias="strengthScore", ge=0.0, le=1.0)
    analysis: str

    @property
    def label(self) -> str:
        return strength_label(self.strength_score)

    @property
    def percent(self) -> int:
        return round(self.strength_score * 100)


def strength_label(score: float) -> str:
    """Bucket a 0..1 score into a human-readable label."""
    if score >= 0.8:
        return "Very Strong"
    if score >= 0.6:
        return "Strong"
    if score >= 0.3:
        return "Moderate"
    return "Weak"


# ── Request / response ─────────────────────────────────────────────────────


def build_request(password: str) -> dict:
    """Return the generateContent request body for *password*."""
    return {
        "contents": [
            {"role": "user", "parts": [{"text": PROMPT_TEMPLATE.format(password=password)}]},
        ],
        "generationConfig": {
            "responseMimeType": "application/json",
            "responseSchema": RESPONSE_SCHEMA,
        },
    }


def parse_response(data: dict) -> StrengthResult:
    """Extract and validate the structured output from a generateContent reply."""
    try:
        parts = data["candidates"][0]["content"]["parts"]
        text = "".join(p.get("text") or "" for p in parts if isinstance(p, dict))
    except (KeyError, IndexError, TypeError) as exc:
        raise AnalysisError("Model returned no output") from exc

    if not text.strip():
        raise AnalysisError("Model returned no output")

    try:
        return StrengthResult.model_validate(json.loads(text))
    except json.JSONDecodeError as exc:
        raise AnalysisError("Model output is not valid JSON") from exc
    except SchemaError as exc:
        raise AnalysisError("Model output does not match the expected schema") from exc


def _analyze_sync(password: str, settings: Settings) -> StrengthResult:
    if not settings.api_key:
        raise AnalysisError("No API key configured (set PASSFORGE_API_KEY)")

    url = f"{settings.api_base}/v1beta/models/{settings.model}:generateContent"
    try:
        resp = requests.post(
            url,
            headers={"x-goog-api-key": settings.api_key},
            json=build_request(password),
            timeout=settings.request_timeout,
        )
        resp.raise_for_status()
        data = resp.json()
    except requests.RequestException as exc:
        raise AnalysisError(f"Strength analysis request failed: {exc}") from exc
    except ValueError as exc:
        raise AnalysisError("Service returned a non-JSON response") from exc

    return parse_response(data)


async def analyze_strength(password: str, *, settings: Settings | None = None) -> StrengthResult:
    """Ask the model to score *password* and critique it.

    One attempt per call, no retries and no caching.  Every failure (network,
    HTTP status, malformed model output) is raised as :class:`AnalysisError`.
    The caller is expected to pass a non-empty password.
    """
    settings = settings or get_settings()
    log = logger.bind(model=settings.model, length=len(password))
    log.info("strength_analysis_started")

    try:
        result = await asyncio.to_thread(_analyze_sync, password, settings)
    except AnalysisError as exc:
        log.warning("strength_analysis_failed", reason=str(exc))
        raise

    log.info("strength_analysis_completed", score=result.strength_score)
    return result
