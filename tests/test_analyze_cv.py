"""Tests for the Gemini-backed CV analysis and its fallbacks."""

import json

import pytest
from fastapi.testclient import TestClient

from cv_analyzer.api.routes import analyze as analyze_route
from cv_analyzer.config import settings
from cv_analyzer.core.schemas import ParsedCvData
from cv_analyzer.main import app
from cv_analyzer.services import analysis_service
from cv_analyzer.services.analysis_service import analyze_cv, mock_analysis, parse_analysis_response

client = TestClient(app)

PARSED = ParsedCvData(
    name="JOHN SMITH",
    email="john@example.com",
    skills=["Python"],
    education="MIT",
    raw_text="JOHN SMITH\njohn@example.com\nEDUCATION\nMIT\n",
)

ANALYSIS_JSON = {
    "summary": "Solid junior profile.",
    "missingSections": ["Projects"],
    "suggestions": ["Add metrics."],
    "scoring": {
        "structure": {"score": 80, "reason": "Clear headings."},
        "language": {"score": 75, "reason": "Readable."},
        "relevance": {"score": 70, "reason": "Fits backend roles."},
        "technical": {"score": 65, "reason": "Few technologies listed."},
        "clarity": {"score": 85, "reason": "Concise."},
    },
    "interviewQuestions": {
        "technical": ["Explain Python generators."],
        "behavioral": ["Describe a conflict."],
        "roleSpecific": ["How would you design an API?"],
    },
}


class FakeResponse:
    def __init__(self, text):
        self.text = text


class FakeModels:
    """Plays back one answer per call; exceptions are raised instead of returned."""

    def __init__(self, answers):
        self.answers = list(answers)
        self.models_called = []

    def generate_content(self, model, contents, config=None):
        self.models_called.append(model)
        answer = self.answers.pop(0)
        if isinstance(answer, Exception):
            raise answer
        return FakeResponse(answer)


class FakeClient:
    def __init__(self, answers):
        self.models = FakeModels(answers)


@pytest.fixture
def no_api_key(monkeypatch):
    monkeypatch.setattr(settings, "gemini_api_key", None)


def test_no_api_key_returns_mock(no_api_key):
    analysis, source = analyze_cv(PARSED)
    assert source == "mock"
    assert analysis == mock_analysis()


def test_gemini_answer_used():
    fake = FakeClient([json.dumps(ANALYSIS_JSON)])
    analysis, source = analyze_cv(PARSED, client=fake, models=["m1"])
    assert source == "gemini"
    assert analysis.summary == "Solid junior profile."
    assert analysis.scoring.clarity.score == 85
    assert analysis.interview_questions.role_specific == ["How would you design an API?"]


def test_next_model_tried_after_failure():
    fake = FakeClient([RuntimeError("quota exceeded"), json.dumps(ANALYSIS_JSON)])
    _, source = analyze_cv(PARSED, client=fake, models=["m1", "m2"])
    assert source == "gemini"
    assert fake.models.models_called == ["m1", "m2"]


def test_all_models_fail():
    fake = FakeClient([RuntimeError("boom"), ""])
    analysis, source = analyze_cv(PARSED, client=fake, models=["m1", "m2"])
    assert source == "fallback-mock"
    assert analysis == mock_analysis()


def test_unparseable_answer():
    fake = FakeClient(["Sure! Here is my review of the CV."])
    _, source = analyze_cv(PARSED, client=fake, models=["m1"])
    assert source == "fallback-parse"


def test_wrong_shape_answer():
    fake = FakeClient([json.dumps({"summary": "missing everything else"})])
    _, source = analyze_cv(PARSED, client=fake, models=["m1"])
    assert source == "fallback-parse"


def test_unexpected_error(monkeypatch):
    def broken_prompt(parsed):
        raise RuntimeError("template error")

    monkeypatch.setattr(analysis_service, "build_review_prompt", broken_prompt)
    _, source = analyze_cv(PARSED, client=FakeClient([]), models=["m1"])
    assert source == "error-fallback"


def test_code_fenced_json():
    raw = "```json\n" + json.dumps(ANALYSIS_JSON) + "\n```"
    assert parse_analysis_response(raw).summary == "Solid junior profile."


def test_prompt_contains_fields():
    fake = FakeClient([json.dumps(ANALYSIS_JSON)])
    captured = {}
    real_generate = fake.models.generate_content

    def capture(model, contents, config=None):
        captured["prompt"] = contents
        return real_generate(model, contents, config)

    fake.models.generate_content = capture
    analyze_cv(PARSED, client=fake, models=["m1"])
    assert "JOHN SMITH" in captured["prompt"]
    assert "Phone: Not found" in captured["prompt"]


# ===== API =====

def test_analyze_endpoint_mock(no_api_key):
    r = client.post("/analyze-cv", json={"parsedData": PARSED.model_dump(by_alias=True)})
    assert r.status_code == 200
    data = r.json()
    assert data["source"] == "mock"
    assert set(data["analysis"]) == {"summary", "missingSections", "suggestions", "scoring", "interviewQuestions"}
    assert "roleSpecific" in data["analysis"]["interviewQuestions"]


def test_analyze_endpoint_requires_raw_text():
    assert client.post("/analyze-cv", json={}).status_code == 400
    assert client.post("/analyze-cv", json={"parsedData": {"name": "JOHN SMITH"}}).status_code == 400
    assert client.post("/analyze-cv").status_code == 400


def test_analyze_endpoint_rejects_bad_shape():
    r = client.post("/analyze-cv", json={"parsedData": {"rawText": "text", "skills": "Python"}})
    assert r.status_code == 422


def test_test_models_without_key(no_api_key):
    assert client.get("/test-models").json() == {"error": "GEMINI_API_KEY not set"}


def test_test_models_with_client(monkeypatch):
    monkeypatch.setattr(analyze_route, "get_genai_client", lambda: FakeClient([]))
    monkeypatch.setattr(settings, "gemini_models", ["m1", "m2"])
    data = client.get("/test-models").json()
    assert data["models"] == ["m1", "m2"]
