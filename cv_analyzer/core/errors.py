"""Exceptions raised by the CV analyzer outside of the extraction core.

Field extraction itself never raises: a heuristic that does not match simply
leaves its field empty. These errors cover the collaborators around it.
"""


class CvAnalyzerError(Exception):
    """Base class for all CV analyzer errors."""


class PdfExtractionError(CvAnalyzerError):
    """The uploaded bytes could not be read as a PDF document."""


class RulesError(CvAnalyzerError):
    """A rules file could not be read or does not describe valid extraction rules."""
