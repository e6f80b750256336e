"""Renderers for a ReportModel: plain text, JSON, slide tables and DataFrames.

The engine never truncates; each renderer applies its own limits here.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field

import pandas as pd

from jira_report.core.config import (
    BUCKET_NAMES,
    ELLIPSIS,
    EMPTY_SECTION_PLACEHOLDER,
    RISK_REGISTER,
    SLIDE_MAX_RISK_COLUMNS,
    SLIDE_MAX_ROWS,
    SLIDE_TRUNCATE_CHARS,
    TEXT_TRUNCATE_CHARS,
)
from jira_report.core.models import ReportModel, ReportSection

# Fields folded into the lead of a text line rather than listed after it
_TEXT_LEAD_FIELDS = ("key", "link", "description", "owner")


def truncate(text: str, limit: int | None) -> str:
    """Cut ``text`` to ``limit`` characters, marking the cut with an ellipsis."""
    if limit is None or limit <= 0 or len(text) <= limit:
        return text
    return text[:limit] + ELLIPSIS


def _one_line(text: str) -> str:
    return " ".join(str(text).split())


def _text_row(section: ReportSection, row: dict[str, str], width: int | None) -> str:
    if section.name == RISK_REGISTER:
        return "- " + " | ".join(f"{h}: {truncate(_one_line(row.get(h, '')), width)}" for h in section.fields)
    lead = f"- {row.get('key', '')}"
    if "description" in row:
        lead += f": {truncate(_one_line(row['description']), width)}"
    if "owner" in row:
        lead += f" ({row['owner']})"
    extras = [f"{name}: {row[name]}" for name in section.fields if name not in _TEXT_LEAD_FIELDS]
    if extras:
        lead += " | " + " | ".join(extras)
    return lead


def render_text(model: ReportModel, width: int | None = TEXT_TRUNCATE_CHARS) -> str:
    """Plain-text report with the five numbered section headings."""
    lines = [f"Status Report ({model.window.label})", f"Generated: {model.generated_at:%Y-%m-%d %H:%M}", ""]
    if model.summary is not None:
        s = model.summary
        lines.append(f"Total issues: {s.total}")
        if s.by_status:
            lines.append("By status: " + ", ".join(f"{k} {v}" for k, v in s.by_status.items()))
        if s.by_type:
            lines.append("By type: " + ", ".join(f"{k} {v}" for k, v in s.by_type.items()))
        lines.append("")
    number = 0
    for section in model.sections:
        if section.name in BUCKET_NAMES:
            number += 1
            lines.append(f"{number}. {section.title}")
        else:
            lines.append(section.title)
        if section.is_empty:
            lines.append(f"   {EMPTY_SECTION_PLACEHOLDER}")
        else:
            lines.extend(_text_row(section, row, width) for row in section.rows)
        lines.append("")
    return "\n".join(lines).rstrip() + "\n"


def render_json(model: ReportModel, indent: int | None = 2) -> str:
    return json.dumps(model.to_dict(), indent=indent, default=str)


@dataclass(slots=True)
class SlideTable:
    name: str
    title: str
    header: list[str]
    rows: list[list[str]] = field(default_factory=list)
    overflow: int = 0
    placeholder: str | None = None

    @property
    def overflow_note(self) -> str | None:
        if self.overflow <= 0:
            return None
        return f"+ {self.overflow} more"


def slide_table(section: ReportSection) -> SlideTable:
    """Header row plus the first few rows of ``section``, cells truncated."""
    max_rows = SLIDE_MAX_ROWS.get(section.name, 8)
    limit = SLIDE_TRUNCATE_CHARS.get(section.name)
    if section.name == RISK_REGISTER:
        header = list(section.fields[:SLIDE_MAX_RISK_COLUMNS])
    else:
        header = [f for f in section.fields if f != "link"]
    rows = [[truncate(_one_line(row.get(col, "")), limit) for col in header] for row in section.rows[:max_rows]]
    placeholder = None
    if section.is_empty:
        placeholder = "No risk data uploaded" if section.name == RISK_REGISTER else f"No {section.title.lower()}"
    return SlideTable(
        name=section.name,
        title=section.title,
        header=header,
        rows=rows,
        overflow=max(0, len(section.rows) - max_rows),
        placeholder=placeholder,
    )


def render_slide_tables(model: ReportModel) -> list[SlideTable]:
    return [slide_table(section) for section in model.sections]


def section_frame(section: ReportSection) -> pd.DataFrame:
    return pd.DataFrame(section.rows, columns=list(section.fields))
