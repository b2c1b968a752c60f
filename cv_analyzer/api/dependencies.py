from functools import lru_cache

from cv_analyzer.config import settings
from cv_analyzer.core.cv_parser import CvParser
from cv_analyzer.core.name_extractor import SpacyPersonNameRecognizer
from cv_analyzer.core.rules import load_rules


@lru_cache(maxsize=1)
def get_cv_parser() -> CvParser:
    """Shared parser for all requests: rules from RULES_PATH, spaCy name fallback."""
    return CvParser(
        rules=load_rules(settings.rules_path),
        recognizer=SpacyPersonNameRecognizer(settings.spacy_model),
    )
