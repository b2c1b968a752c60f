from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


class CanonicalSection(str, Enum):
    """Resume section categories that header aliases resolve to."""
    CONTACT = "CONTACT"
    SKILLS = "SKILLS"
    EXPERIENCE = "EXPERIENCE"
    EDUCATION = "EDUCATION"
    PROJECTS = "PROJECTS"
    REFERENCES = "REFERENCES"
    LANGUAGES = "LANGUAGES"
    AWARDS = "AWARDS"
    CERTIFICATIONS = "CERTIFICATIONS"
    INTERESTS = "INTERESTS"


# Sections whose content is a list of entries rather than one text block
ENTRY_SECTIONS = frozenset({CanonicalSection.EXPERIENCE, CanonicalSection.EDUCATION})


class ParsedCvData(BaseModel):
    """Structured fields recovered from one resume. Immutable once built."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    skills: Tuple[str, ...] = Field(default=(), description="Matched vocabulary skills, in vocabulary order")
    experience: Optional[str] = None  # Flattened EXPERIENCE entries
    education: Optional[str] = None  # Flattened EDUCATION entries
    raw_text: str = Field(..., alias="rawText", description="Verbatim text extracted from the PDF")


class UploadResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    parsed_data: ParsedCvData = Field(..., alias="parsedData")


# ===== LLM ANALYSIS =====

class ScoringItem(BaseModel):
    score: int = Field(..., ge=0, le=100)
    reason: str


class Scoring(BaseModel):
    structure: ScoringItem
    language: ScoringItem
    relevance: ScoringItem
    technical: ScoringItem
    clarity: ScoringItem


class InterviewQuestions(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    technical: List[str] = Field(default_factory=list)
    behavioral: List[str] = Field(default_factory=list)
    role_specific: List[str] = Field(default_factory=list, alias="roleSpecific")


class AnalysisResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    summary: str
    missing_sections: List[str] = Field(default_factory=list, alias="missingSections")
    suggestions: List[str] = Field(default_factory=list)
    scoring: Scoring
    interview_questions: InterviewQuestions = Field(..., alias="interviewQuestions")


class AnalyzeRequest(BaseModel):
    """Body of /analyze-cv. Kept loose so a missing rawText is a 400, not a 422."""
    model_config = ConfigDict(populate_by_name=True)

    parsed_data: Optional[Dict[str, Any]] = Field(default=None, alias="parsedData")


class AnalyzeResponse(BaseModel):
    analysis: AnalysisResult
    source: str = Field(..., description="gemini, mock, fallback-mock, fallback-parse or error-fallback")
