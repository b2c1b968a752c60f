"""
Email and phone extraction over the full resume text.

Both extractors return the first hit in document order, or None. Phone
numbers go through the libphonenumber matcher first; the regex ladder below
only runs when it finds nothing, and every regex hit must carry at least ten
digits once separators are ignored. Date ranges and month.year groups are
never reported as phone numbers.
"""

import logging
import re
from typing import List, Optional, Pattern

import phonenumbers

from cv_analyzer.core.text_normalization import digit_count, normalize_for_matching

logger = logging.getLogger(__name__)


EMAIL_RE = re.compile(r"[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}")

# Ordered from most to least specific
PHONE_PATTERNS: List[Pattern[str]] = [
    # International: +1 (555) 123-4567, +90 532 123 45 67, +44.207.123.4567
    re.compile(r"\+\d{1,3}[ \t.-]?\(?\d{3}\)?[ \t.-]?\d{3}[ \t.-]?\d{2}[ \t.-]?\d{2}(?!\d)"),
    # Domestic 3-3-4: (555) 123-4567, 555.123.4567, 555 123 4567
    re.compile(r"(?<![\d+])\(?\d{3}\)?[ \t.-]?\d{3}[ \t.-]?\d{4}(?!\d)"),
    # Turkish domestic with trunk prefix: 0532 123 45 67, 0 (532) 123-45-67
    re.compile(r"(?<!\d)0[ \t]?\(?\d{3}\)?[ \t.-]?\d{3}[ \t.-]?\d{2}[ \t.-]?\d{2}(?!\d)"),
    # Anything digit-heavy on one line: 5551234567, 00 90 532 1234567
    re.compile(r"(?<!\d)\+?\d[\d \t().-]{8,}\d(?!\d)"),
]

MIN_PHONE_DIGITS = 10

# Date ranges ("2016 - 2020") and month.year groups ("09.2016", "01.09.2016")
DATE_LIKE_RE = re.compile(r"\s[-\u2013]\s|(?<!\d)\d{1,2}[./]\d{4}(?!\d)")


def _user_looks_like_phone(user: str) -> bool:
    """Reject 'emails' whose local part is a glued phone number, e.g. '366-5713k.o.smith'."""
    digits = sum(1 for c in user if c.isdigit())
    return "(" in user or ")" in user or user.startswith("+") or (digits >= 7 and "-" in user)


def extract_email(text: str) -> Optional[str]:
    """First email address in document order."""
    if not text:
        return None
    for m in EMAIL_RE.finditer(normalize_for_matching(text)):
        email = m.group(0)
        user = email.split("@", 1)[0]
        if _user_looks_like_phone(user):
            logger.debug(f"Skipping phone-like email candidate '{email}'")
            continue
        return email
    return None


def _match_phone_library(text: str, region: Optional[str]) -> Optional[str]:
    for match in phonenumbers.PhoneNumberMatcher(text, region):
        candidate = match.raw_string.strip()
        if not DATE_LIKE_RE.search(candidate):
            return candidate
    return None


def _match_phone_patterns(text: str) -> Optional[str]:
    for pattern in PHONE_PATTERNS:
        for m in pattern.finditer(text):
            candidate = m.group(0).strip()
            if digit_count(candidate) < MIN_PHONE_DIGITS:
                continue
            if DATE_LIKE_RE.search(candidate):
                logger.debug(f"Skipping date-like phone candidate '{candidate}'")
                continue
            return candidate
    return None


def extract_phone(text: str, region: Optional[str] = "US") -> Optional[str]:
    """
    First phone number in the text.

    Args:
        text: Full resume text
        region: Default region for numbers written without a country code

    Returns:
        The phone number as written in the text, or None
    """
    if not text:
        return None
    t = normalize_for_matching(text)

    phone = _match_phone_library(t, region)
    if phone:
        logger.debug("Phone found by phonenumbers matcher")
        return phone

    phone = _match_phone_patterns(t)
    if phone:
        logger.debug("Phone found by regex fallback")
    return phone
