"""Assign eligible issues to the five report buckets.

Each bucket has its own predicate and predicates are evaluated
independently, so one issue can appear in several buckets (an open Epic due
this week is both a priority and an upcoming milestone).

The risk and milestone rules come in variants; the defaults are:

- risks: open Stories
- milestones: Epics and Milestones

``CategoryRules(risk_mode="priority")`` switches risks to open Stories or
Tasks that are High/Highest priority or carry no due date, and
``broaden_milestones=True`` counts Stories as milestones too. Issue types
and priorities are compared trimmed and case-insensitively, never by
substring.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from datetime import date

from jira_report.core.config import (
    ACCOMPLISHMENTS,
    BROAD_MILESTONE_ISSUE_TYPES,
    BUCKET_NAMES,
    HIGH_PRIORITIES,
    MILESTONE_ISSUE_TYPES,
    MILESTONES,
    PRIORITIES,
    PRIORITY_RISK_ISSUE_TYPES,
    RISK_ISSUE_TYPES,
    RISKS,
    UPCOMING_MILESTONES,
    normalize_priority_name,
)
from jira_report.core.errors import ValidationError
from jira_report.core.models import IssueRecord, ReportWindow

RISK_MODE_STORY = "story"
RISK_MODE_PRIORITY = "priority"
RISK_MODES: frozenset[str] = frozenset({RISK_MODE_STORY, RISK_MODE_PRIORITY})


@dataclass(frozen=True, slots=True)
class CategoryRules:
    risk_mode: str = RISK_MODE_STORY
    broaden_milestones: bool = False

    def __post_init__(self):
        if self.risk_mode not in RISK_MODES:
            raise ValidationError(f"Unknown risk mode {self.risk_mode!r}; expected one of: {', '.join(sorted(RISK_MODES))}")

    @property
    def milestone_types(self) -> frozenset[str]:
        return BROAD_MILESTONE_ISSUE_TYPES if self.broaden_milestones else MILESTONE_ISSUE_TYPES


def _type_of(record: IssueRecord) -> str:
    return (record.issue_type or "").strip().lower()


def _priority_of(record: IssueRecord) -> str:
    if not record.priority:
        return ""
    return normalize_priority_name(record.priority).lower()


def is_accomplishment(record: IssueRecord, window: ReportWindow, now: date) -> bool:
    if not record.is_done or record.resolution_date is None:
        return False
    return window.start <= record.resolution_date <= now


def is_priority(record: IssueRecord, window: ReportWindow) -> bool:
    if record.is_done or record.due_date is None:
        return False
    return record.due_date <= window.end


def is_risk(record: IssueRecord, rules: CategoryRules) -> bool:
    if record.is_done:
        return False
    issue_type = _type_of(record)
    if rules.risk_mode == RISK_MODE_PRIORITY:
        if issue_type not in PRIORITY_RISK_ISSUE_TYPES:
            return False
        return _priority_of(record) in HIGH_PRIORITIES or record.due_date is None
    return issue_type in RISK_ISSUE_TYPES


def is_milestone(record: IssueRecord, rules: CategoryRules) -> bool:
    return _type_of(record) in rules.milestone_types


def is_upcoming_milestone(record: IssueRecord, window: ReportWindow, now: date, rules: CategoryRules) -> bool:
    if not is_milestone(record, rules) or record.due_date is None:
        return False
    return now <= record.due_date <= window.end


def bucket_predicates(
    window: ReportWindow, now: date, rules: CategoryRules
) -> dict[str, Callable[[IssueRecord], bool]]:
    return {
        ACCOMPLISHMENTS: lambda r: is_accomplishment(r, window, now),
        PRIORITIES: lambda r: is_priority(r, window),
        RISKS: lambda r: is_risk(r, rules),
        MILESTONES: lambda r: is_milestone(r, rules),
        UPCOMING_MILESTONES: lambda r: is_upcoming_milestone(r, window, now, rules),
    }


def categorize(
    records: Iterable[IssueRecord],
    window: ReportWindow,
    now: date,
    rules: CategoryRules | None = None,
) -> dict[str, list[IssueRecord]]:
    """Return every bucket name mapped to its members, in input order."""
    rules = rules or CategoryRules()
    predicates = bucket_predicates(window, now, rules)
    buckets: dict[str, list[IssueRecord]] = {name: [] for name in BUCKET_NAMES}
    for record in records:
        for name, predicate in predicates.items():
            if predicate(record):
                buckets[name].append(record)
    return buckets
