import io
import logging
import re
from itertools import groupby
from typing import Any, Iterable, List, Tuple

import pdfplumber
from pdfminer.pdfparser import PDFSyntaxError
from pdfplumber.utils.exceptions import PdfminerException

from cv_analyzer.core.errors import PdfExtractionError

logger = logging.getLogger(__name__)

# pdfminer is very chatty about malformed fonts and CropBoxes
logging.getLogger("pdfminer").setLevel(logging.ERROR)

DEFAULT_X_TOLERANCES: Tuple[float, ...] = (1.5, 2, 2.5, 3)

_LETTER_RUN_RE = re.compile(r"[^\W\d_]+")


def _page_lines_text(page: Any, x_tolerance: float = 3, y_tolerance: float = 2, line_height: float = 3) -> str:
    """
    Rebuild the rendered lines of one page from pdfplumber word boxes.

    Words whose top edge falls in the same `line_height` band form one line,
    ordered left to right and separated by single spaces.

    Args:
        page: pdfplumber page
        x_tolerance: Horizontal gap below which characters are merged into one word
        y_tolerance: Vertical gap below which characters are merged into one word
        line_height: Band size used to bucket words into lines
    """
    words = page.extract_words(
        x_tolerance=x_tolerance,
        y_tolerance=y_tolerance,
        keep_blank_chars=False,
        use_text_flow=True,
    )
    if not words:
        return ""

    def band(word):
        return round(word["top"] / line_height)

    ordered = sorted(words, key=lambda w: (band(w), w["x0"]))
    return "\n".join(" ".join(w["text"] for w in line) for _, line in groupby(ordered, key=band))


def _artifact_score(text: str) -> float:
    """
    How broken the extracted text looks; lower is better.

    Very long letter runs mean words were glued together, many one-letter
    tokens mean words were split apart.
    """
    runs = _LETTER_RUN_RE.findall(text)
    if not runs:
        return 1e9

    glued = sum(1 for r in runs if len(r) >= 18)
    # a handful of real single letters (initials, "a", "I") is normal
    fragments = max(0, sum(1 for r in runs if len(r) == 1) - 10)
    return glued * 10 + fragments * 3


def _best_page_text(page: Any, tolerances: Iterable[float] = DEFAULT_X_TOLERANCES) -> Tuple[str, float]:
    """Extract the page at each x-tolerance and keep the least broken text."""
    scored: List[Tuple[float, float, str]] = []
    for xt in tolerances:
        text = _page_lines_text(page, x_tolerance=xt)
        scored.append((_artifact_score(text), xt, text))
    _, xt, text = min(scored, key=lambda s: s[0])
    return text, xt


def extract_pdf_text(pdf_bytes: bytes) -> str:
    """
    Extract the text of a PDF as one string in reading order.

    Words on the same rendered line are joined with single spaces, lines with
    newlines, and every page's text ends with a newline.

    Raises:
        PdfExtractionError: the bytes are not a readable PDF
    """
    pages: List[str] = []
    try:
        with pdfplumber.open(io.BytesIO(pdf_bytes)) as pdf:
            for number, page in enumerate(pdf.pages, start=1):
                text, xt = _best_page_text(page)
                logger.debug(f"PDF page {number}: {len(text)} chars (x_tolerance={xt})")
                pages.append(text + "\n")
    except (PdfminerException, PDFSyntaxError, ValueError, KeyError, TypeError) as e:
        raise PdfExtractionError(f"Could not read PDF: {e}") from e

    return "".join(pages)
