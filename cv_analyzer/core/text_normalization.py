"""
Text normalization utilities applied before any pattern matching.

PDF text arrives in mixed encodings: composed vs. decomposed diacritics,
non-breaking spaces, and Turkish letters that went through a UTF-8 -> Latin-1
round trip ("Ä°LETÄ°ÅžÄ°M" instead of "İLETİŞİM"). Everything here works on a
copy used for matching; the raw text handed back to callers is never touched.
"""

import re
import unicodedata
from typing import List


# ============================================================================
# Unicode letter classes (explicit code points, no literal diacritics)
# ============================================================================

# Latin + Turkish uppercase: Ç Ğ İ Ö Ş Ü
UPPER_CLASS = "A-Z\u00c7\u011e\u0130\u00d6\u015e\u00dc"
# Latin + Turkish lowercase: ç ğ ı ö ş ü
LOWER_CLASS = "a-z\u00e7\u011f\u0131\u00f6\u015f\u00fc"

# Lead bytes of UTF-8 sequences for Turkish letters when decoded as cp1252/latin-1
_MOJIBAKE_MARKERS = ("\u00c3", "\u00c4", "\u00c5")

_SPACE_VARIANTS_RE = re.compile("[\u00a0\u2007\u202f\u2009\u200a]")
_ZERO_WIDTH_RE = re.compile("[\u200b\u200c\u200d\ufeff]")
_WHITESPACE_RE = re.compile(r"\s+")
_NON_DIGIT_RE = re.compile(r"\D")


def repair_mojibake(text: str) -> str:
    """
    Undo a UTF-8 -> single-byte decode round trip.

    Examples:
      'EÄŸitim' -> 'Eğitim'
      'Ã‡alÄ±ÅŸma' -> 'Çalışma'
      'Eğitim' -> 'Eğitim' (already correct, unchanged)

    Only attempted when typical marker characters are present, and only kept
    when the whole text survives the reverse round trip.
    """
    if not text or not any(m in text for m in _MOJIBAKE_MARKERS):
        return text

    for codec in ("cp1252", "latin-1"):
        try:
            return text.encode(codec).decode("utf-8")
        except (UnicodeEncodeError, UnicodeDecodeError):
            continue
    return text


def normalize_for_matching(text: str) -> str:
    """NFC-normalize, repair mojibake and unify space characters."""
    if not text:
        return ""
    t = repair_mojibake(text)
    t = unicodedata.normalize("NFC", t)
    t = _ZERO_WIDTH_RE.sub("", t)
    t = _SPACE_VARIANTS_RE.sub(" ", t)
    return t


def fold_case(text: str) -> str:
    """
    Case-fold with Turkish dotted/dotless I collapsed onto plain 'i'.

    str.lower() maps 'İ' to 'i' + COMBINING DOT ABOVE and leaves 'ı' alone,
    so 'İLETİŞİM', 'iletişim' and 'ILETISIM' would otherwise fold differently.
    """
    t = text.replace("\u0130", "i").replace("\u0131", "i")
    return t.lower()


def collapse_whitespace(text: str) -> str:
    return _WHITESPACE_RE.sub(" ", text).strip()


def digit_count(text: str) -> int:
    return len(_NON_DIGIT_RE.sub("", text))


def split_lines(text: str) -> List[str]:
    """Trimmed, non-blank lines in document order."""
    return [ln.strip() for ln in text.splitlines() if ln.strip()]
