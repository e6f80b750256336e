"""Turn ordered buckets into named report sections with fixed row layouts."""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from datetime import date
from typing import Any

from jira_report.core.config import BUCKET_NAMES, NOT_AVAILABLE, RISK_REGISTER, UNASSIGNED
from jira_report.core.errors import MalformedBucketError
from jira_report.core.models import CategoryBucket, IssueRecord, ReportSection, RiskSnapshot
from jira_report.core.section_config import default_layout


def issue_link(key: str, base_url: str | None) -> str:
    if not base_url or not key:
        return NOT_AVAILABLE
    return f"{base_url.rstrip('/')}/browse/{key}"


def _text(value: Any) -> str:
    if value is None:
        return NOT_AVAILABLE
    text = str(value).strip()
    return text or NOT_AVAILABLE


def _date(value: date | None) -> str:
    return value.isoformat() if value else NOT_AVAILABLE


def describe(record: IssueRecord) -> str:
    """Description text, falling back to the summary."""
    if record.description and record.description.strip():
        return record.description.strip()
    return _text(record.summary)


FieldGetter = Callable[[IssueRecord, str | None], str]

FIELD_GETTERS: dict[str, FieldGetter] = {
    "key": lambda r, base: r.key,
    "link": lambda r, base: issue_link(r.key, base),
    "description": lambda r, base: describe(r),
    "summary": lambda r, base: _text(r.summary),
    "owner": lambda r, base: (r.assignee or "").strip() or UNASSIGNED,
    "status": lambda r, base: _text(r.status),
    "statusCategory": lambda r, base: _text(r.status_category),
    "issueType": lambda r, base: _text(r.issue_type),
    "priority": lambda r, base: _text(r.priority),
    "resolvedDate": lambda r, base: _date(r.resolution_date),
    "dueDate": lambda r, base: _date(r.due_date),
    "targetDate": lambda r, base: _date(r.due_date),
}


def format_row(record: IssueRecord, fields: Sequence[str], base_url: str | None = None) -> dict[str, str]:
    row: dict[str, str] = {}
    for name in fields:
        getter = FIELD_GETTERS.get(name)
        row[name] = getter(record, base_url) if getter else NOT_AVAILABLE
    return row


def _bucket_members(name: str, bucket: Any) -> Sequence[IssueRecord]:
    members = bucket.issues if isinstance(bucket, CategoryBucket) else bucket
    if isinstance(members, (str, bytes)) or not isinstance(members, Sequence):
        raise MalformedBucketError(f"Bucket {name!r} is not an ordered sequence (got {type(members).__name__})")
    for position, record in enumerate(members):
        if not isinstance(record, IssueRecord):
            raise MalformedBucketError(
                f"Bucket {name!r} item {position} is {type(record).__name__}, not IssueRecord"
            )
    return members


def risk_register_section(snapshot: RiskSnapshot, title: str) -> ReportSection:
    headers = list(snapshot.headers)
    rows = [{h: _text(row.get(h)) for h in headers} for row in snapshot.rows]
    return ReportSection(RISK_REGISTER, title, headers, rows)


def assemble_sections(
    buckets: Mapping[str, CategoryBucket | Sequence[IssueRecord]],
    *,
    base_url: str | None = None,
    risk_snapshot: RiskSnapshot | None = None,
    layout: Mapping[str, Mapping] | None = None,
) -> list[ReportSection]:
    """Build the ordered section list for a report.

    All five bucket sections are always present, empty or not, followed by
    the risk register when a snapshot is given. Missing optional issue
    fields render as sentinels ("Unassigned", "N/A"); only a structurally
    broken bucket raises MalformedBucketError.
    """
    layout = layout or default_layout()
    fields_by_section = layout["fields"]
    titles = layout["titles"]
    sections: list[ReportSection] = []
    for name in BUCKET_NAMES:
        if name not in buckets:
            raise MalformedBucketError(f"Missing bucket {name!r}")
        members = _bucket_members(name, buckets[name])
        fields = list(fields_by_section.get(name, ("key", "description")))
        rows = [format_row(record, fields, base_url) for record in members]
        sections.append(ReportSection(name, titles.get(name, name), fields, rows))
    if risk_snapshot is not None:
        sections.append(risk_register_section(risk_snapshot, titles.get(RISK_REGISTER, RISK_REGISTER)))
    return sections
