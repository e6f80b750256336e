"""Project-level issue counts shown at the top of a report."""

from __future__ import annotations

from collections.abc import Iterable

import pandas as pd

from jira_report.core.config import UNASSIGNED
from jira_report.core.models import IssueRecord, ProjectSummary
from jira_report.core.status import clean_status_name


def _ordered_counts(series: pd.Series) -> dict[str, int]:
    counts = series.value_counts()
    items = sorted(((str(k), int(v)) for k, v in counts.items()), key=lambda kv: (-kv[1], kv[0]))
    return dict(items)


def summarize_issues(records: Iterable[IssueRecord]) -> ProjectSummary:
    """Count issues by status, type and assignee.

    Every supplied record counts, eligible for a section or not. Counts are
    ordered by frequency, then name.
    """
    rows = [
        {
            "status": clean_status_name(r.status),
            "issue_type": clean_status_name(r.issue_type),
            "assignee": (r.assignee or "").strip() or UNASSIGNED,
        }
        for r in records
    ]
    if not rows:
        return ProjectSummary(total=0, by_status={}, by_type={}, by_assignee={})
    df = pd.DataFrame(rows)
    return ProjectSummary(
        total=len(df),
        by_status=_ordered_counts(df["status"]),
        by_type=_ordered_counts(df["issue_type"]),
        by_assignee=_ordered_counts(df["assignee"]),
    )
