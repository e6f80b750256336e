"""Table helpers for rendering report sections in Streamlit."""

from __future__ import annotations

import pandas as pd
import streamlit as st

from jira_report.core.config import EMPTY_SECTION_PLACEHOLDER, NOT_AVAILABLE, SETTINGS
from jira_report.core.models import ReportSection
from jira_report.reporting.renderers import section_frame

COLUMN_LABELS: dict[str, str] = {
    "key": "Key",
    "link": "Ticket",
    "description": "Description",
    "summary": "Summary",
    "owner": "Owner",
    "status": "Status",
    "statusCategory": "Status Category",
    "issueType": "Type",
    "priority": "Priority",
    "resolvedDate": "Resolved",
    "dueDate": "Due",
    "targetDate": "Target Date",
}


def link_column_config(df: pd.DataFrame, column: str = "link") -> dict[str, object]:
    if df.empty or column not in df.columns:
        return {}
    if not (df[column] != NOT_AVAILABLE).any():
        return {}
    return {
        column: st.column_config.LinkColumn(
            COLUMN_LABELS.get(column, column),
            display_text=r"browse/(.*)$",
            help="Open in Jira",
            width="medium",
        )
    }


def prepare_section_table(section: ReportSection) -> tuple[pd.DataFrame, dict[str, object]]:
    df = section_frame(section)
    cfg = link_column_config(df)
    for col in df.columns:
        if col not in cfg:
            cfg[col] = st.column_config.TextColumn(COLUMN_LABELS.get(col, col))
    return df, cfg


def render_section(section: ReportSection, limit: int | None = None) -> None:
    st.subheader(section.title)
    if section.is_empty:
        st.caption(EMPTY_SECTION_PLACEHOLDER)
        return
    df, cfg = prepare_section_table(section)
    st.dataframe(df.head(limit or SETTINGS.max_table_rows), hide_index=True, column_config=cfg)
