import logging
from typing import Optional

from fastapi import APIRouter, HTTPException
from pydantic import ValidationError
from starlette.concurrency import run_in_threadpool

from cv_analyzer.config import settings
from cv_analyzer.core.schemas import AnalyzeRequest, AnalyzeResponse, ParsedCvData
from cv_analyzer.services.analysis_service import analyze_cv, get_genai_client

logger = logging.getLogger(__name__)

router = APIRouter(tags=["analysis"])


@router.post(
    "/analyze-cv",
    response_model=AnalyzeResponse,
    summary="Analyze Parsed CV",
    description="Score a parsed CV and generate interview questions with Gemini. Falls back to a sample analysis.",
    responses={
        400: {"description": "parsedData with rawText is required"},
        422: {"description": "parsedData has the wrong shape"},
    },
)
async def analyze(req: Optional[AnalyzeRequest] = None):
    """
    Analyze the `parsedData` returned by `/upload-pdf`.

    **source** tells which path produced the analysis: `gemini`, `mock` (no API
    key configured), `fallback-mock` (all models failed), `fallback-parse`
    (unreadable model answer) or `error-fallback`.
    """
    payload = req.parsed_data if req else None
    if not payload or not payload.get("rawText"):
        raise HTTPException(status_code=400, detail="parsedData with rawText is required")

    try:
        parsed = ParsedCvData.model_validate(payload)
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=f"Invalid parsedData: {e.error_count()} validation error(s)")

    analysis, source = await run_in_threadpool(analyze_cv, parsed)
    logger.info(f"CV analysis returned from source={source}")
    return AnalyzeResponse(analysis=analysis, source=source)


@router.get("/test-models", summary="Check LLM Configuration")
def test_models():
    """Report whether a Gemini client can be created and which models will be tried."""
    if get_genai_client() is None:
        return {"error": "GEMINI_API_KEY not set"}
    return {"message": "API initialized successfully", "models": settings.gemini_models}
