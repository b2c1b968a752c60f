import re
from functools import lru_cache
from typing import List, Pattern, Tuple

from cv_analyzer.core.rules import DEFAULT_RULES, ExtractionRules
from cv_analyzer.core.text_normalization import normalize_for_matching


def _skill_pattern(skill: str) -> Pattern[str]:
    # \b fails next to non-word characters ("C++", ".NET"), so use lookarounds instead
    return re.compile(rf"(?<!\w){re.escape(skill)}(?!\w)", re.IGNORECASE)


class SkillMatcher:
    """Whole-word, case-insensitive presence check against a fixed vocabulary."""

    def __init__(self, rules: ExtractionRules = DEFAULT_RULES) -> None:
        seen = set()
        self._patterns: List[Tuple[str, Pattern[str]]] = []
        for skill in rules.skill_vocabulary:
            skill = skill.strip()
            if not skill or skill in seen:
                continue
            seen.add(skill)
            self._patterns.append((skill, _skill_pattern(skill)))

    @property
    def vocabulary(self) -> List[str]:
        return [skill for skill, _ in self._patterns]

    def match(self, text: str) -> List[str]:
        """Skills present in text, in vocabulary order."""
        if not text:
            return []
        return [skill for skill, pattern in self._patterns if pattern.search(text)]


@lru_cache(maxsize=1)
def _default_matcher() -> SkillMatcher:
    return SkillMatcher(DEFAULT_RULES)


def match_skills(text: str) -> List[str]:
    return _default_matcher().match(normalize_for_matching(text))
