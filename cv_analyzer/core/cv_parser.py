import logging
from functools import lru_cache
from typing import Optional

from cv_analyzer.core.contact_extractor import extract_email, extract_phone
from cv_analyzer.core.name_extractor import NameExtractor, PersonNameRecognizer
from cv_analyzer.core.rules import DEFAULT_RULES, ExtractionRules
from cv_analyzer.core.schemas import CanonicalSection, ParsedCvData
from cv_analyzer.core.section_parser import SectionSegmenter, flatten_entries
from cv_analyzer.core.skill_matcher import SkillMatcher
from cv_analyzer.core.text_normalization import normalize_for_matching, split_lines

logger = logging.getLogger(__name__)


class CvParser:
    """
    Heuristic resume text -> ParsedCvData pipeline.

    Built once per rules object; all compiled tables are read-only afterwards,
    so one instance can serve concurrent requests.
    """

    def __init__(
        self,
        rules: ExtractionRules = DEFAULT_RULES,
        recognizer: Optional[PersonNameRecognizer] = None,
    ) -> None:
        self.rules = rules
        self.names = NameExtractor(rules, recognizer)
        self.skills = SkillMatcher(rules)
        self.segmenter = SectionSegmenter(rules)

    def parse(self, raw_text: str) -> ParsedCvData:
        raw_text = raw_text or ""
        text = normalize_for_matching(raw_text)

        sections = self.segmenter.segment(split_lines(text))

        parsed = ParsedCvData(
            name=self.names.extract(text),
            email=extract_email(text),
            phone=extract_phone(text, self.rules.phone_region),
            skills=self.skills.match(text),
            experience=flatten_entries(sections.get(CanonicalSection.EXPERIENCE)),
            education=flatten_entries(sections.get(CanonicalSection.EDUCATION)),
            raw_text=raw_text,
        )

        logger.debug(
            f"Parsed CV: name={parsed.name is not None} email={parsed.email is not None} "
            f"phone={parsed.phone is not None} skills={len(parsed.skills)} "
            f"sections={[s.value for s in sections]}"
        )
        return parsed


@lru_cache(maxsize=1)
def _default_parser() -> CvParser:
    return CvParser(DEFAULT_RULES)


def extract_cv(
    raw_text: str,
    recognizer: Optional[PersonNameRecognizer] = None,
    rules: Optional[ExtractionRules] = None,
) -> ParsedCvData:
    """
    Extract structured fields from resume text.

    Never raises for unmatched fields: anything a heuristic cannot find is
    left as None (or an empty skills list). raw_text is carried through
    verbatim in the result.

    Args:
        raw_text: Text extracted from the PDF, one line per rendered line
        recognizer: Person-name recognizer for the last-resort name layer
        rules: Locale tables; the built-in English/Turkish defaults if omitted
    """
    if recognizer is None and rules is None:
        return _default_parser().parse(raw_text)
    return CvParser(rules or DEFAULT_RULES, recognizer).parse(raw_text)
