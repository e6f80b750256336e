"""Chart builders (Altair) for report summaries."""

from __future__ import annotations

import altair as alt
import pandas as pd

from jira_report.core.models import ProjectSummary, ReportModel


def counts_frame(counts: dict[str, int], label: str) -> pd.DataFrame:
    return pd.DataFrame({label: list(counts.keys()), "count": [int(v) for v in counts.values()]})


def breakdown_chart(counts: dict[str, int], label: str, title: str | None = None):
    """Horizontal bar chart of ``counts``; None when there is nothing to plot."""
    if not counts:
        return None
    df = counts_frame(counts, label)
    return (
        alt.Chart(df, title=title or label)
        .mark_bar()
        .encode(
            x=alt.X("count:Q", title="Issues"),
            y=alt.Y(f"{label}:N", sort="-x", title=None),
            tooltip=[alt.Tooltip(f"{label}:N"), alt.Tooltip("count:Q", title="Issues")],
        )
    )


def status_breakdown_chart(summary: ProjectSummary | None):
    if summary is None:
        return None
    return breakdown_chart(summary.by_status, "status", "Status Breakdown")


def section_size_chart(model: ReportModel):
    counts = {section.title: len(section.rows) for section in model.sections}
    if not any(counts.values()):
        return None
    return breakdown_chart(counts, "section", "Issues per Section")
