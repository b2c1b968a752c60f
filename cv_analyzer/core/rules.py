"""
Locale tables driving the extraction heuristics.

Section header aliases, the skill vocabulary, the name denylist and the month
prefixes are data, not code: the defaults below cover English and Turkish,
and a JSON rules file can override any of them without touching the matching
logic. Loaded rules are cached per path and treated as read-only.
"""

import json
import logging
from functools import lru_cache
from pathlib import Path
from typing import Dict, List, Optional

from pydantic import BaseModel, Field, ValidationError

from cv_analyzer.core.errors import RulesError
from cv_analyzer.core.schemas import CanonicalSection

logger = logging.getLogger(__name__)


# ===== SECTION HEADER ALIASES =====

DEFAULT_SECTION_ALIASES: Dict[CanonicalSection, List[str]] = {
    CanonicalSection.CONTACT: [
        "CONTACT",
        "CONTACT INFORMATION",
        "PERSONAL INFORMATION",
        "PERSONAL DETAILS",
        "İLETİŞİM",
        "İLETİŞİM BİLGİLERİ",
        "KİŞİSEL BİLGİLER",
    ],
    CanonicalSection.SKILLS: ["SKILLS", "TECHNICAL SKILLS", "BECERİLER", "YETENEKLER"],
    CanonicalSection.EXPERIENCE: [
        "WORK EXPERIENCE",
        "EXPERIENCE",
        "PROFESSIONAL EXPERIENCE",
        "DENEYİM",
        "İŞ DENEYİMİ",
    ],
    CanonicalSection.EDUCATION: ["EDUCATION", "EĞİTİM", "EĞİTİM BİLGİLERİ"],
    CanonicalSection.PROJECTS: ["PROJECTS", "PROJELER"],
    CanonicalSection.REFERENCES: ["REFERENCES", "REFERANSLAR"],
    CanonicalSection.LANGUAGES: ["LANGUAGES", "DİLLER", "YABANCI DİLLER"],
    CanonicalSection.AWARDS: ["AWARDS", "ÖDÜLLER"],
    CanonicalSection.CERTIFICATIONS: ["CERTIFICATIONS", "CERTIFICATES", "SERTİFİKALAR"],
    CanonicalSection.INTERESTS: ["INTERESTS", "HOBBIES", "HOBİLER", "İLGİ ALANLARI"],
}


# ===== SKILL VOCABULARY (output order) =====

DEFAULT_SKILL_VOCABULARY: List[str] = [
    "HTML", "HTML5", "CSS", "CSS3", "JavaScript", "TypeScript", "React", "React.js",
    "Node.js", "Python", "Angular", "Next.js", "Tailwind", "Bootstrap", "Vue.js",
    "Vue", "Express", "Express.js", "MongoDB", "PostgreSQL", "MySQL", "SQL",
    "Git", "GitHub", "Docker", "Kubernetes", "AWS", "Azure", "GCP", "Firebase",
    "Redux", "MobX", "GraphQL", "REST", "API", "Jest", "Testing", "JUnit",
    "Selenium", "Cypress", "Webpack", "Vite", "NPM", "Yarn", "Linux", "Unix",
    "Java", "C++", "C#", ".NET", "PHP", "Ruby", "Go", "Rust", "Swift", "Kotlin",
    "Django", "Flask", "Spring", "Laravel", "Rails", "TensorFlow", "PyTorch",
    "Machine Learning", "AI", "Deep Learning", "Data Science", "Pandas", "NumPy",
    "Scikit-learn", "Tableau", "Power BI", "Excel", "Agile", "Scrum", "DevOps",
    "CI/CD", "Jenkins", "Travis CI", "CircleCI", "GitLab CI", "Microservices",
    "Serverless", "Lambda", "S3", "EC2", "RDS", "DynamoDB", "Redis", "Elasticsearch",
]


# ===== NAME DENYLIST =====
# Uppercase words that often appear in two-word caps runs near the top of a
# resume but are never part of a person's name. Section alias words are added
# on top of these when the name extractor is built.

DEFAULT_NAME_DENYLIST: List[str] = [
    # Document titles
    "CURRICULUM", "VITAE", "RESUME", "RÉSUMÉ", "ÖZGEÇMİŞ", "PROFILE", "PROFİL",
    "SUMMARY", "OBJECTIVE", "ÖZET", "HAKKIMDA", "PERSONAL", "DETAILS", "INFORMATION",
    "KİŞİSEL", "BİLGİLER", "BİLGİLERİ",
    # Institutions
    "UNIVERSITY", "UNIVERSITESI", "ÜNİVERSİTESİ", "ÜNİVERSİTE", "COLLEGE", "INSTITUTE",
    "SCHOOL", "LİSESİ", "LISESI", "FAKÜLTESİ", "FACULTY", "DEPARTMENT", "BÖLÜMÜ",
    "COMPANY", "CORPORATION", "TEKNOLOJİ", "TECHNOLOGY", "TECHNOLOGIES", "LTD", "INC",
    # Titles
    "ENGINEER", "ENGINEERING", "MÜHENDİSİ", "MÜHENDİS", "MÜHENDİSLİĞİ", "DEVELOPER",
    "GELİŞTİRİCİ", "SOFTWARE", "YAZILIM", "FRONTEND", "BACKEND", "FULLSTACK", "STACK",
    "FULL", "SENIOR", "JUNIOR", "INTERN", "STAJYER", "MANAGER", "MÜDÜR", "DESIGNER",
    "ANALYST", "CONSULTANT", "SPECIALIST", "UZMAN", "LEAD", "DATA", "SCIENTIST",
    # Degrees and fields
    "BACHELOR", "MASTER", "LİSANS", "COMPUTER", "SCIENCE", "BİLGİSAYAR",
    # Contact words
    "EMAIL", "MAIL", "PHONE", "TELEFON", "ADDRESS", "ADRES", "LINKEDIN", "GITHUB",
    # Technology acronyms common in caps runs
    "HTML", "CSS", "SQL", "API", "REST", "AWS", "GCP", "NPM", "PHP",
]


# ===== NEW-ENTRY MONTH PREFIXES =====

DEFAULT_MONTH_PREFIXES: List[str] = [
    "Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
    "Ocak", "Şubat", "Mart", "Nisan", "Mayıs", "Haziran",
    "Temmuz", "Ağustos", "Eylül", "Ekim", "Kasım", "Aralık",
]


class ExtractionRules(BaseModel):
    """All locale-dependent data used by the extraction pipeline."""
    section_aliases: Dict[CanonicalSection, List[str]] = Field(
        default_factory=lambda: {k: list(v) for k, v in DEFAULT_SECTION_ALIASES.items()}
    )
    skill_vocabulary: List[str] = Field(default_factory=lambda: list(DEFAULT_SKILL_VOCABULARY))
    name_denylist: List[str] = Field(default_factory=lambda: list(DEFAULT_NAME_DENYLIST))
    month_prefixes: List[str] = Field(default_factory=lambda: list(DEFAULT_MONTH_PREFIXES))
    name_window: int = Field(default=1000, gt=0, description="Characters from the top searched for a name")
    phone_region: str = Field(default="US", description="Default region for the phone number matcher")


DEFAULT_RULES = ExtractionRules()


@lru_cache(maxsize=8)
def load_rules(path: Optional[str] = None) -> ExtractionRules:
    """
    Load extraction rules, optionally overriding defaults from a JSON file.

    Keys present in the file replace the corresponding default wholesale;
    missing keys keep their defaults. Example file:

        {"skill_vocabulary": ["Python", "Go"], "name_window": 1500}

    Raises:
        RulesError: the file cannot be read, is not JSON, or fails validation.
    """
    if not path:
        return DEFAULT_RULES

    file_path = Path(path)
    try:
        overrides = json.loads(file_path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        raise RulesError(f"Cannot read rules file {file_path}: {e}") from e

    if not isinstance(overrides, dict):
        raise RulesError(f"Rules file {file_path} must contain a JSON object")

    try:
        rules = ExtractionRules.model_validate({**DEFAULT_RULES.model_dump(), **overrides})
    except ValidationError as e:
        raise RulesError(f"Invalid rules in {file_path}: {e}") from e

    logger.info(f"Loaded extraction rules from {file_path} (overrides: {sorted(overrides)})")
    return rules
