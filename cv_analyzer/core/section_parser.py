"""
Section segmentation and entry reconstruction.

Walks the resume line by line, switching the current section whenever a line
is exactly a known header alias (case- and whitespace-insensitive). Lines are
accumulated under the current section; lines before the first header belong
to no section and are dropped (name and contact details are picked up by
their own extractors).

EXPERIENCE and EDUCATION keep a list of entries instead of a single block. A
line opens a new entry when it starts with a month or a year, or looks like a
heading; anything else is treated as a continuation of the previous entry.
This is a heuristic: multi-line job titles and bullet lists starting with a
capital and no other capitals will be split into separate entries.
"""

import logging
import re
from functools import lru_cache
from typing import Dict, Iterable, List, Optional, Union

from cv_analyzer.core.rules import DEFAULT_RULES, ExtractionRules
from cv_analyzer.core.schemas import ENTRY_SECTIONS, CanonicalSection
from cv_analyzer.core.text_normalization import (
    LOWER_CLASS,
    UPPER_CLASS,
    fold_case,
    normalize_for_matching,
    split_lines,
)

logger = logging.getLogger(__name__)

SectionContent = Union[List[str], str]

_WS_RE = re.compile(r"\s+")


def _alias_key(alias: str) -> str:
    """Lookup key for an alias or a matched header: folded, no whitespace."""
    return _WS_RE.sub("", fold_case(normalize_for_matching(alias)))


class SectionAccumulator:
    """
    Mutable state of one segmentation run.

    Owned by a single call to SectionSegmenter.segment(); never shared
    between documents.
    """

    def __init__(self) -> None:
        self.current: Optional[CanonicalSection] = None
        self.contents: Dict[CanonicalSection, SectionContent] = {}

    def enter(self, section: CanonicalSection) -> None:
        self.current = section
        if section not in self.contents:
            self.contents[section] = [] if section in ENTRY_SECTIONS else ""

    def reset(self) -> None:
        self.current = None

    def add_text(self, line: str) -> None:
        existing = self.contents[self.current]
        self.contents[self.current] = f"{existing}\n{line}" if existing else line

    def add_entry_line(self, line: str, starts_entry: bool) -> None:
        entries = self.contents[self.current]
        if not entries or starts_entry:
            entries.append(line)
        else:
            entries[-1] += "\n" + line


class SectionSegmenter:
    """Header-driven state machine built once from a rules object."""

    def __init__(self, rules: ExtractionRules = DEFAULT_RULES) -> None:
        self._sections_by_key: Dict[str, CanonicalSection] = {}
        alternatives: List[str] = []
        for section, aliases in rules.section_aliases.items():
            for alias in aliases:
                words = fold_case(normalize_for_matching(alias)).split()
                if not words:
                    continue
                self._sections_by_key[_alias_key(alias)] = section
                alternatives.append(r"\s*".join(re.escape(w) for w in words))

        # Longest first so alternation prefers the most specific alias
        alternatives.sort(key=len, reverse=True)
        self.header_re = re.compile(r"^(" + "|".join(alternatives) + r")$", re.IGNORECASE) if alternatives else None

        months = [re.escape(normalize_for_matching(m)) for m in rules.month_prefixes if m.strip()]
        date_prefix = "|".join(months + [r"\d{4}"])
        self.date_start_re = re.compile(rf"^(?:{date_prefix})")
        self.heading_re = re.compile(rf"^[{UPPER_CLASS}][{LOWER_CLASS}0-9.,\s&-]+$")

    def match_header(self, line: str) -> Optional[str]:
        """Return the matched header text if the whole line is a header alias."""
        if self.header_re is None:
            return None
        m = self.header_re.match(fold_case(line.strip()))
        return m.group(1) if m else None

    def resolve_header(self, header: str) -> Optional[CanonicalSection]:
        return self._sections_by_key.get(_WS_RE.sub("", header))

    def starts_new_entry(self, line: str) -> bool:
        """Month/year prefix or heading-looking line."""
        return bool(self.date_start_re.match(line) or self.heading_re.match(line))

    def segment(self, lines: Iterable[str]) -> Dict[CanonicalSection, SectionContent]:
        """
        Assign lines to canonical sections.

        Args:
            lines: Trimmed, non-blank lines in document order

        Returns:
            Mapping of every section seen to its content: a list of entries
            for EXPERIENCE/EDUCATION, a newline-joined string otherwise.
        """
        acc = SectionAccumulator()

        for line in lines:
            header = self.match_header(line)
            if header is not None:
                section = self.resolve_header(header)
                if section is None:
                    logger.debug(f"Unresolved header '{line}', dropping content until next header")
                    acc.reset()
                else:
                    logger.debug(f"SECTION HEADER '{line}' -> {section.value}")
                    acc.enter(section)
                continue

            if acc.current is None:
                continue

            if acc.current in ENTRY_SECTIONS:
                acc.add_entry_line(line, self.starts_new_entry(line))
            else:
                acc.add_text(line)

        return acc.contents


def flatten_entries(entries: Optional[SectionContent]) -> Optional[str]:
    """Join entries with newlines; None when the section is absent or empty."""
    if not entries:
        return None
    if isinstance(entries, str):
        return entries.strip() or None
    return "\n".join(entries).strip() or None


@lru_cache(maxsize=1)
def _default_segmenter() -> SectionSegmenter:
    return SectionSegmenter(DEFAULT_RULES)


def segment_sections(text: str) -> Dict[CanonicalSection, SectionContent]:
    """Segment raw text with the default rules."""
    return _default_segmenter().segment(split_lines(normalize_for_matching(text)))
