"""
Candidate name extraction.

Names sit near the top of a resume, so the pattern layers only look at a
bounded prefix window. Layers run in priority order and the first one that
produces a candidate wins; there is no scoring across layers:

  1. ALL-CAPS run of 2+ tokens ("JOHN SMITH", "AYŞE YILMAZ")
  2. Title Case run of 2+ tokens ("Jane Doe")
  3. Keyword context ("Name: Jane Doe", "Ad Soyad: Ayşe Yılmaz")
  4. Named-entity recognizer over the full text

Runs are broken at denylisted words (section headers, institution and job
title words) so "JOHN SMITH SOFTWARE ENGINEER" still yields "JOHN SMITH".
"""

import logging
import re
import threading
from typing import Callable, List, Optional, Protocol, Set

import spacy

from cv_analyzer.core.contact_extractor import EMAIL_RE, PHONE_PATTERNS
from cv_analyzer.core.rules import DEFAULT_RULES, ExtractionRules
from cv_analyzer.core.text_normalization import LOWER_CLASS, UPPER_CLASS, fold_case, normalize_for_matching

logger = logging.getLogger(__name__)


MAX_NAME_TOKENS = 3

URL_RE = re.compile(r"\b(?:https?://|www\.)\S+", re.IGNORECASE)

CAPS_RUN_RE = re.compile(rf"(?<!\w)[{UPPER_CLASS}]{{3,}}(?:[ \t]+[{UPPER_CLASS}]{{3,}})+(?!\w)")
TITLE_RUN_RE = re.compile(
    rf"(?<!\w)[{UPPER_CLASS}][{LOWER_CLASS}]{{2,}}(?:[ \t]+[{UPPER_CLASS}][{LOWER_CLASS}]{{2,}})+(?!\w)"
)
KEYWORD_NAME_RE = re.compile(
    r"(?<!\w)(?i:full[ \t]+name|name|candidate|ad[\u0131i]?[ \t]*soyad[\u0131i]?|isim)[ \t]*:[ \t]*"
    rf"([{UPPER_CLASS}][{LOWER_CLASS}]+(?:[ \t]+[{UPPER_CLASS}][{LOWER_CLASS}]+){{1,3}})"
)


class PersonNameRecognizer(Protocol):
    def find_people_names(self, text: str) -> List[str]:
        ...


class SpacyPersonNameRecognizer:
    """
    PERSON entities from a spaCy pipeline, in document order.

    The model is loaded on first use. A missing model package is logged once
    and the recognizer then reports no names, so the name field just stays
    empty instead of failing the whole parse.
    """

    def __init__(self, model_name: str = "en_core_web_sm") -> None:
        self.model_name = model_name
        self._nlp = None
        self._unavailable = False
        self._lock = threading.Lock()

    def _load(self):
        with self._lock:
            if self._nlp is None and not self._unavailable:
                try:
                    self._nlp = spacy.load(self.model_name)
                    logger.info(f"Loaded spaCy model '{self.model_name}'")
                except OSError as e:
                    self._unavailable = True
                    logger.warning(f"spaCy model '{self.model_name}' unavailable, NER name fallback disabled: {e}")
        return self._nlp

    def find_people_names(self, text: str) -> List[str]:
        nlp = self._load()
        if nlp is None or not text:
            return []
        doc = nlp(text)
        return [ent.text.strip() for ent in doc.ents if ent.label_ == "PERSON" and ent.text.strip()]


def _strip_contact_noise(text: str) -> str:
    """Blank out emails, URLs and phone numbers so their letters can't form a name."""
    t = EMAIL_RE.sub(" ", text)
    t = URL_RE.sub(" ", t)
    for pattern in PHONE_PATTERNS:
        t = pattern.sub(" ", t)
    return t


class NameExtractor:
    """Ordered fallback layers; see module docstring."""

    def __init__(
        self,
        rules: ExtractionRules = DEFAULT_RULES,
        recognizer: Optional[PersonNameRecognizer] = None,
    ) -> None:
        self.window = rules.name_window
        self.recognizer = recognizer
        self.denylist: Set[str] = {fold_case(w) for w in rules.name_denylist}
        for aliases in rules.section_aliases.values():
            for alias in aliases:
                self.denylist.update(fold_case(normalize_for_matching(w)) for w in alias.split())

        self.layers: List[Callable[[str, str], Optional[str]]] = [
            self._from_caps_run,
            self._from_title_run,
            self._from_keyword,
            self._from_recognizer,
        ]

    def _first_clean_run(self, pattern: re.Pattern, window: str) -> Optional[str]:
        for m in pattern.finditer(window):
            piece: List[str] = []
            for token in m.group(0).split():
                if fold_case(token) in self.denylist:
                    if len(piece) >= 2:
                        break
                    piece = []
                else:
                    piece.append(token)
            if len(piece) >= 2:
                return " ".join(piece[:MAX_NAME_TOKENS])
        return None

    def _from_caps_run(self, window: str, text: str) -> Optional[str]:
        return self._first_clean_run(CAPS_RUN_RE, _strip_contact_noise(window))

    def _from_title_run(self, window: str, text: str) -> Optional[str]:
        return self._first_clean_run(TITLE_RUN_RE, _strip_contact_noise(window))

    def _from_keyword(self, window: str, text: str) -> Optional[str]:
        m = KEYWORD_NAME_RE.search(window)
        return m.group(1).strip() if m else None

    def _from_recognizer(self, window: str, text: str) -> Optional[str]:
        if self.recognizer is None:
            return None
        names = [n.strip() for n in self.recognizer.find_people_names(text) if n and n.strip()]
        if not names:
            return None
        for name in names:
            if 2 <= len(name.split()) <= 4:
                return name
        return names[0]

    def extract(self, text: str) -> Optional[str]:
        if not text:
            return None
        t = normalize_for_matching(text)
        window = t[: self.window]
        for layer in self.layers:
            name = layer(window, t)
            if name:
                logger.debug(f"Name found by {layer.__name__}")
                return name
        return None


def extract_name(text: str, recognizer: Optional[PersonNameRecognizer] = None) -> Optional[str]:
    """Extract a candidate name with the default rules."""
    return NameExtractor(DEFAULT_RULES, recognizer).extract(text)
