"""Domain data models for issue records, report windows, buckets and reports."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import StrEnum
from typing import Any

from .config import STATUS_CATEGORY_DONE, STATUS_CATEGORY_INDETERMINATE, STATUS_CATEGORY_NEW


class StatusCategory(StrEnum):
    NEW = STATUS_CATEGORY_NEW
    INDETERMINATE = STATUS_CATEGORY_INDETERMINATE
    DONE = STATUS_CATEGORY_DONE


STATUS_CATEGORIES: frozenset[str] = frozenset(c.value for c in StatusCategory)


@dataclass(frozen=True, slots=True)
class IssueRecord:
    key: str
    description: str = ""
    assignee: str | None = None
    status: str | None = None
    status_category: str | None = None
    issue_type: str | None = None
    priority: str | None = None
    resolution_date: date | None = None
    due_date: date | None = None
    summary: str | None = None

    @property
    def is_done(self) -> bool:
        return self.status_category == StatusCategory.DONE


@dataclass(frozen=True, slots=True)
class ReportWindow:
    start: date
    end: date
    label: str
    period: str

    def contains(self, value: date) -> bool:
        return self.start <= value <= self.end

    def to_dict(self) -> dict[str, str]:
        return {
            "period": self.period,
            "start": self.start.isoformat(),
            "end": self.end.isoformat(),
            "label": self.label,
        }


@dataclass(frozen=True, slots=True)
class CategoryBucket:
    name: str
    issues: tuple[IssueRecord, ...] = ()

    def __len__(self) -> int:
        return len(self.issues)

    def __iter__(self):
        return iter(self.issues)

    @property
    def keys(self) -> list[str]:
        return [issue.key for issue in self.issues]


@dataclass(slots=True)
class ReportSection:
    name: str
    title: str
    fields: list[str]
    rows: list[dict[str, str]] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.rows

    def to_dict(self) -> dict[str, Any]:
        return {
            "sectionName": self.name,
            "title": self.title,
            "fields": list(self.fields),
            "rows": [dict(row) for row in self.rows],
        }


@dataclass(frozen=True, slots=True)
class ProjectSummary:
    total: int
    by_status: dict[str, int]
    by_type: dict[str, int]
    by_assignee: dict[str, int]

    def to_dict(self) -> dict[str, Any]:
        return {
            "totalIssues": self.total,
            "byStatus": dict(self.by_status),
            "byType": dict(self.by_type),
            "byAssignee": dict(self.by_assignee),
        }


@dataclass(frozen=True, slots=True)
class RiskSnapshot:
    """Immutable copy of the risk table taken at report-build time."""

    rows: tuple[dict[str, Any], ...] = ()
    headers: tuple[str, ...] = ()
    filename: str | None = None
    last_updated: datetime | None = None

    def __len__(self) -> int:
        return len(self.rows)

    def to_dict(self) -> dict[str, Any]:
        return {
            "filename": self.filename,
            "lastUpdated": self.last_updated.isoformat() if self.last_updated else None,
            "headers": list(self.headers),
            "risks": [dict(row) for row in self.rows],
        }


@dataclass(slots=True)
class ReportModel:
    window: ReportWindow
    now: date
    generated_at: datetime
    sections: list[ReportSection]
    buckets: dict[str, CategoryBucket]
    rejected: list = field(default_factory=list)
    summary: ProjectSummary | None = None
    risk_snapshot: RiskSnapshot | None = None

    def section(self, name: str) -> ReportSection:
        for section in self.sections:
            if section.name == name:
                return section
        raise KeyError(name)

    def bucket_keys(self, name: str) -> list[str]:
        return self.buckets[name].keys

    def issues(self) -> list[IssueRecord]:
        """Distinct issues across all buckets, in first-seen bucket order."""
        seen: dict[str, IssueRecord] = {}
        for bucket in self.buckets.values():
            for record in bucket:
                seen.setdefault(record.key, record)
        return list(seen.values())

    def to_dict(self) -> dict[str, Any]:
        return {
            "generatedAt": self.generated_at.isoformat(),
            "now": self.now.isoformat(),
            "window": self.window.to_dict(),
            "summary": self.summary.to_dict() if self.summary else None,
            "sections": [section.to_dict() for section in self.sections],
            "rejected": [err.to_dict() for err in self.rejected],
            "risks": self.risk_snapshot.to_dict() if self.risk_snapshot is not None else None,
        }
