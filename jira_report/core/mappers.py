"""Mapping raw Jira issue JSON or loose dicts into IssueRecord instances."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import asdict
from datetime import date, datetime
from typing import Any

import pandas as pd
import pytz

from .adf import extract_text
from .config import ISSUE_TABLE_COLUMNS, TIMEZONE, UNASSIGNED
from .errors import MalformedInputError
from .models import IssueRecord
from .status import normalize_status_category, resolve_status_category

logger = logging.getLogger(__name__)

# Accepted spellings for loose record dicts: camelCase as used by JSON
# clients, snake_case as used by IssueRecord itself
FIELD_ALIASES: dict[str, tuple[str, ...]] = {
    "key": ("key",),
    "summary": ("summary", "title"),
    "description": ("description",),
    "assignee": ("assignee", "owner"),
    "status": ("status",),
    "status_category": ("statusCategory", "status_category"),
    "issue_type": ("issueType", "issue_type", "issuetype", "type"),
    "priority": ("priority",),
    "resolution_date": ("resolutionDate", "resolution_date", "resolutiondate"),
    "due_date": ("dueDate", "due_date", "duedate"),
}


def parse_date(value: Any, tz=None) -> date | None:
    """Parse a Jira timestamp or date into a calendar date.

    Aware timestamps are converted to ``tz`` (default TIMEZONE) first so a
    resolution at 23:30 local time lands on the local day.
    """
    if value is None or value == "":
        return None
    tz = tz or pytz.timezone(TIMEZONE)
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            return value.astimezone(tz).date()
        return value.date()
    if isinstance(value, date):
        return value
    ts = pd.to_datetime(value, errors="coerce")
    if ts is None or pd.isna(ts):
        logger.debug("Unparseable date value %r ignored", value)
        return None
    if ts.tzinfo is not None:
        ts = ts.tz_convert(tz)
    return ts.date()


def _display_name(value: Any) -> str | None:
    if value is None:
        return None
    if isinstance(value, Mapping):
        value = value.get("displayName") or value.get("name")
    text = str(value).strip() if value is not None else ""
    return text or None


def _name(value: Any) -> str | None:
    if isinstance(value, Mapping):
        value = value.get("name")
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def map_issue(raw: dict[str, Any]) -> IssueRecord:
    """Map one issue from the Jira REST v3 search payload."""
    fields = raw.get("fields") or {}
    status_block = fields.get("status") or {}
    status = _name(status_block)
    category_block = status_block.get("statusCategory") if isinstance(status_block, Mapping) else None
    category = None
    if isinstance(category_block, Mapping):
        category = category_block.get("key") or category_block.get("name")
    return IssueRecord(
        key=str(raw.get("key") or "").strip(),
        summary=fields.get("summary"),
        description=extract_text(fields.get("description")),
        assignee=_display_name(fields.get("assignee")),
        status=status,
        status_category=resolve_status_category(category, status),
        issue_type=_name(fields.get("issuetype")),
        priority=_name(fields.get("priority")),
        resolution_date=parse_date(fields.get("resolutiondate")),
        due_date=parse_date(fields.get("duedate")),
    )


def _lookup(data: Mapping[str, Any], name: str) -> Any:
    for alias in FIELD_ALIASES[name]:
        if alias in data:
            return data[alias]
    return None


def record_from_dict(data: Mapping[str, Any], index: int | None = None) -> IssueRecord:
    """Coerce a loose issue dict (or a raw Jira issue) into an IssueRecord.

    Raises
    ------
    MalformedInputError
        If ``data`` is not a mapping.
    """
    if not isinstance(data, Mapping):
        raise MalformedInputError(f"expected a mapping, got {type(data).__name__}", index=index)
    if isinstance(data.get("fields"), Mapping):
        return map_issue(dict(data))

    status = _name(_lookup(data, "status"))
    raw_category = _lookup(data, "status_category")
    if raw_category is None or raw_category == "":
        category = resolve_status_category(None, status)
    else:
        # Keep unrecognized values so validation reports them
        category = normalize_status_category(raw_category) or str(raw_category)
    key = _lookup(data, "key")
    return IssueRecord(
        key=str(key).strip() if key is not None else "",
        summary=_lookup(data, "summary"),
        description=extract_text(_lookup(data, "description")),
        assignee=_display_name(_lookup(data, "assignee")),
        status=status,
        status_category=category,
        issue_type=_name(_lookup(data, "issue_type")),
        priority=_name(_lookup(data, "priority")),
        resolution_date=parse_date(_lookup(data, "resolution_date")),
        due_date=parse_date(_lookup(data, "due_date")),
    )


def records_to_dataframe(records: Iterable[IssueRecord]) -> pd.DataFrame:
    rows = []
    for record in records:
        row = asdict(record)
        row["assignee"] = record.assignee or UNASSIGNED
        rows.append(row)
    if not rows:
        return pd.DataFrame(columns=list(ISSUE_TABLE_COLUMNS))
    df = pd.DataFrame(rows)
    cols = [c for c in ISSUE_TABLE_COLUMNS if c in df.columns]
    trailing = [c for c in df.columns if c not in cols]
    return df[cols + trailing]
