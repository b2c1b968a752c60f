"""
CV analysis via Google Gemini, with a canned fallback.

The analysis is a nice-to-have on top of extraction, so it never fails the
request: a missing API key, every model failing, or an unparseable answer
all degrade to mock_analysis(). The returned source tag tells the caller
which path produced the result.
"""

from __future__ import annotations

import json
import logging
import threading
from typing import Any, List, Optional, Tuple

from google import genai
from google.genai import types
from pydantic import ValidationError

from cv_analyzer.config import settings
from cv_analyzer.core.schemas import AnalysisResult, ParsedCvData
from cv_analyzer.prompts.cv_review import build_review_prompt

logger = logging.getLogger(__name__)


SOURCE_GEMINI = "gemini"
SOURCE_MOCK = "mock"
SOURCE_FALLBACK_MOCK = "fallback-mock"
SOURCE_FALLBACK_PARSE = "fallback-parse"
SOURCE_ERROR_FALLBACK = "error-fallback"

# ── Client ──────────────────────────────────────────────────────────────────

_client: Optional[genai.Client] = None
_client_lock = threading.Lock()


def get_genai_client() -> Optional[genai.Client]:
    """Gemini client, created on first use. None when no API key is configured."""
    global _client
    if not settings.gemini_api_key:
        return None
    with _client_lock:
        if _client is None:
            _client = genai.Client(api_key=settings.gemini_api_key)
    return _client


# ── Mock ────────────────────────────────────────────────────────────────────


def mock_analysis() -> AnalysisResult:
    """Fixed sample analysis so the UI keeps working without Gemini."""
    return AnalysisResult.model_validate({
        "summary": "Basic check: the PDF was read successfully, returning a sample analysis.",
        "missingSections": ["Projects", "Certifications"],
        "suggestions": [
            "Add measurable outcomes to experience entries (e.g. 25% performance improvement).",
            "List technical skills with proficiency levels (Beginner/Intermediate/Advanced).",
            "Add dates and degree information to the education section.",
        ],
        "scoring": {
            "structure": {"score": 72, "reason": "Headings are present, formatting consistency can improve."},
            "language": {"score": 78, "reason": "Language is clear, some sentences could be simpler."},
            "relevance": {"score": 75, "reason": "Moderate fit for the target role; projects should be added."},
            "technical": {"score": 70, "reason": "Core skills are present, technology details are missing."},
            "clarity": {"score": 80, "reason": "Information is readable, bullet points are adequate."},
        },
        "interviewQuestions": {
            "technical": [
                "How did you apply React performance optimizations in your recent projects?",
                "What is your error handling and logging strategy when designing Node.js APIs?",
            ],
            "behavioral": [
                "How did you work with your team under a tight deadline?",
                "Can you describe a bug you caught early and how you fixed it?",
            ],
            "roleSpecific": [
                "How would you set up a CI/CD pipeline for this position?",
                "Which patterns do you prefer for a scalable frontend architecture?",
            ],
        },
    })


# ── Response parsing ────────────────────────────────────────────────────────


def _strip_code_fences(raw: str) -> str:
    text = raw.strip()
    if "```json" in text:
        start = text.index("```json") + 7
        end = text.find("```", start)
        return text[start:end].strip() if end != -1 else text[start:].strip()
    if text.startswith("```"):
        start = 3
        end = text.find("```", start)
        return text[start:end].strip() if end != -1 else text[start:].strip()
    return text


def parse_analysis_response(raw: str) -> AnalysisResult:
    """
    Parse the model's answer into an AnalysisResult.

    Raises:
        ValueError: not JSON (json.JSONDecodeError) or not the expected shape (ValidationError)
    """
    data: Any = json.loads(_strip_code_fences(raw))
    return AnalysisResult.model_validate(data)


# ── Analysis ────────────────────────────────────────────────────────────────


def _generate(client: genai.Client, models: List[str], prompt: str) -> Optional[str]:
    """Try each model in order; first non-empty answer wins."""
    for model in models:
        try:
            response = client.models.generate_content(
                model=model,
                contents=prompt,
                config=types.GenerateContentConfig(
                    temperature=0.4,
                    response_mime_type="application/json",
                ),
            )
            text = response.text
            if text:
                logger.info(f"Gemini analysis produced by model {model} ({len(text)} chars)")
                return text
            logger.warning(f"Gemini model {model} returned an empty response")
        except Exception as e:
            logger.warning(f"Gemini model {model} failed: {e}")
    return None


def analyze_cv(
    parsed: ParsedCvData,
    client: Optional[genai.Client] = None,
    models: Optional[List[str]] = None,
) -> Tuple[AnalysisResult, str]:
    """
    Score a parsed CV and generate interview questions.

    Returns:
        (analysis, source) where source is one of gemini, mock,
        fallback-mock, fallback-parse, error-fallback
    """
    try:
        client = client or get_genai_client()
        if client is None:
            logger.warning("GEMINI_API_KEY not set, returning mock analysis")
            return mock_analysis(), SOURCE_MOCK

        text = _generate(client, models or settings.gemini_models, build_review_prompt(parsed))
        if not text:
            logger.warning("All Gemini models failed, returning mock analysis")
            return mock_analysis(), SOURCE_FALLBACK_MOCK

        try:
            return parse_analysis_response(text), SOURCE_GEMINI
        except (ValueError, ValidationError) as e:
            logger.error(f"Could not parse Gemini response, returning mock analysis: {e}")
            return mock_analysis(), SOURCE_FALLBACK_PARSE
    except Exception:
        logger.exception("Unexpected error during CV analysis, returning mock analysis")
        return mock_analysis(), SOURCE_ERROR_FALLBACK
