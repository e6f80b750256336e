"""Exception types raised or returned by the report pipeline."""

from __future__ import annotations


class ReportError(Exception):
    """Base class for every report-building failure."""


class ValidationError(ReportError, ValueError):
    """Invalid period selector or date range."""


class MalformedInputError(ReportError):
    """A single issue record that cannot take part in a report.

    These are collected and returned alongside the report instead of being
    raised, so one bad record never hides the rest of the project.
    """

    def __init__(self, reason: str, *, key: str | None = None, index: int | None = None):
        self.reason = reason
        self.key = key
        self.index = index
        where = key if key else f"record #{index}" if index is not None else "record"
        super().__init__(f"{where}: {reason}")

    def to_dict(self) -> dict:
        return {"key": self.key, "index": self.index, "reason": self.reason}


class MalformedBucketError(ReportError, TypeError):
    """A category bucket that is not an ordered sequence of issue records."""


class IssueSourceError(ReportError, RuntimeError):
    """Fetching issues from Jira failed."""


class RiskFileError(ReportError):
    """An uploaded risk workbook could not be read."""
