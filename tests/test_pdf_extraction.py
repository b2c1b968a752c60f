"""Tests for PDF text extraction helpers."""

import pytest

from cv_analyzer.core.errors import PdfExtractionError
from cv_analyzer.core.pdf_extractor import _artifact_score, _best_page_text, _page_lines_text, extract_pdf_text


class FakePage:
    """Minimal stand-in for a pdfplumber page."""

    def __init__(self, words):
        self.words = words
        self.calls = []

    def extract_words(self, **kwargs):
        self.calls.append(kwargs)
        return [dict(w) for w in self.words]


def _word(text, x0, top):
    return {"text": text, "x0": x0, "top": top}


def test_words_grouped_into_lines():
    page = FakePage([
        _word("SMITH", 60, 10),
        _word("JOHN", 10, 10.4),
        _word("EDUCATION", 10, 40),
        _word("MIT", 10, 60),
    ])
    assert _page_lines_text(page) == "JOHN SMITH\nEDUCATION\nMIT"


def test_no_words():
    assert _page_lines_text(FakePage([])) == ""


def test_score_penalizes_glued_words():
    assert _artifact_score("Software engineer at Acme") < _artifact_score("Softwareengineeratacmecorporation")


def test_score_penalizes_fragmented_words():
    fragmented = " ".join("softwareengineer")
    assert _artifact_score("software engineer") < _artifact_score(fragmented)


def test_score_empty_text_is_worst():
    assert _artifact_score("") == 1e9


def test_best_page_text_tries_each_tolerance():
    page = FakePage([_word("Jane", 10, 10), _word("Doe", 50, 10)])
    text, xt = _best_page_text(page, tolerances=[1, 2])
    assert text == "Jane Doe"
    assert xt in (1, 2)
    assert [c["x_tolerance"] for c in page.calls] == [1, 2]


def test_not_a_pdf():
    with pytest.raises(PdfExtractionError):
        extract_pdf_text(b"this is not a pdf")
