"""Deterministic ordering of report buckets."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from datetime import date

from jira_report.core.config import ACCOMPLISHMENTS, BUCKET_NAMES, MILESTONES, PRIORITIES, RISKS, UPCOMING_MILESTONES
from jira_report.core.models import CategoryBucket, IssueRecord


def _due_sort_key(record: IssueRecord) -> tuple[bool, date, str]:
    # Missing due dates sort after every dated issue
    missing = record.due_date is None
    return missing, record.due_date or date.max, record.key


def sort_by_key(records: Iterable[IssueRecord]) -> list[IssueRecord]:
    return sorted(records, key=lambda r: r.key)


def sort_by_due_date(records: Iterable[IssueRecord]) -> list[IssueRecord]:
    """Order by due date ascending, undated last, ties broken by key."""
    return sorted(records, key=_due_sort_key)


# Milestones without any due dates fall back to plain key order under the
# due-date sort, so they share it with the date-bearing buckets.
SORTERS = {
    ACCOMPLISHMENTS: sort_by_key,
    RISKS: sort_by_key,
    PRIORITIES: sort_by_due_date,
    MILESTONES: sort_by_due_date,
    UPCOMING_MILESTONES: sort_by_due_date,
}


def sort_buckets(buckets: Mapping[str, Iterable[IssueRecord]]) -> dict[str, CategoryBucket]:
    out: dict[str, CategoryBucket] = {}
    for name in BUCKET_NAMES:
        members = buckets.get(name, ())
        out[name] = CategoryBucket(name, tuple(SORTERS[name](members)))
    return out
