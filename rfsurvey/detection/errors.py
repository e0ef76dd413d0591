"""Exception taxonomy for parsing and signal detection."""

from __future__ import annotations


class SurveyError(Exception):
    """Base class for survey analysis failures."""


class DegenerateTraceError(SurveyError):
    """A trace holds no records, so no noise floor can be derived."""


class MissingParameterError(SurveyError):
    def __init__(self, title: str, detail: str = "not present"):
        super().__init__(f"parameter '{title}' {detail}")
        self.title = title


class SweepFormatError(SurveyError):
    """An analyzer export could not be split into traces and records."""
