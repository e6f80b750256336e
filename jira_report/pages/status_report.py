"""Status report page.

Fetches a project's issues, builds the weekly/biweekly/custom report and
shows each section as a table, with text, JSON and CSV downloads.
"""

from __future__ import annotations

import logging
from datetime import timedelta

import pandas as pd
import streamlit as st

from jira_report.app import register_page, session_risk_store
from jira_report.core.config import (
    DEFAULT_PROJECT_KEY,
    PERIOD_BIWEEKLY,
    PERIOD_CUSTOM,
    PERIOD_LABELS,
    PERIOD_WEEKLY,
    SETTINGS,
)
from jira_report.core.errors import IssueSourceError, ValidationError
from jira_report.core.mappers import records_to_dataframe
from jira_report.core.service import IssueService
from jira_report.reporting.categorize import RISK_MODE_PRIORITY, RISK_MODE_STORY, CategoryRules
from jira_report.reporting.inclusion import InclusionRules
from jira_report.reporting.renderers import render_json, render_text, section_frame
from jira_report.visual.charts import section_size_chart, status_breakdown_chart
from jira_report.visual.progress import ProgressReporter
from jira_report.visual.tables import render_section

logger = logging.getLogger(__name__)


def _project_options() -> list[str]:
    projects = st.session_state.get("jira_projects") or []
    keys = [p["key"] for p in projects if p.get("key")]
    return keys or [DEFAULT_PROJECT_KEY]


def _sections_csv(model) -> bytes:
    frames = []
    for section in model.sections:
        df = section_frame(section)
        df.insert(0, "section", section.title)
        frames.append(df)
    combined = pd.concat(frames, ignore_index=True) if frames else pd.DataFrame()
    return combined.to_csv(index=False).encode(SETTINGS.download_encoding)


@register_page("Status Report")
def status_report_page():
    st.title("Status Report")
    st.caption("Accomplishments, upcoming priorities, risks and milestones for a reporting period.")
    service: IssueService | None = st.session_state.get("issue_service")
    if service is None:
        st.warning("Initialize connection on Setup page first.")
        return

    options = _project_options()
    current = st.session_state.get("project_key")
    project = st.selectbox("Project", options, index=options.index(current) if current in options else 0)
    period = st.radio(
        "Period",
        [PERIOD_WEEKLY, PERIOD_BIWEEKLY, PERIOD_CUSTOM],
        format_func=PERIOD_LABELS.get,
        horizontal=True,
    )
    custom_range = None
    if period == PERIOD_CUSTOM:
        today = service.now().date()
        col_start, col_end = st.columns(2)
        start = col_start.date_input("Start", value=today - timedelta(days=7))
        end = col_end.date_input("End", value=today + timedelta(days=7))
        custom_range = (start, end)

    with st.expander("Categorization options"):
        risk_mode = st.selectbox(
            "Risk rule",
            [RISK_MODE_STORY, RISK_MODE_PRIORITY],
            format_func=lambda m: "Open stories" if m == RISK_MODE_STORY else "High priority or undated stories/tasks",
        )
        broaden = st.checkbox("Count stories as milestones", value=False)
        summary_fallback = st.checkbox("Use summary when description is blank", value=False)
    store = session_risk_store()
    include_risks = st.checkbox(
        f"Include risk register ({len(store)} row(s) loaded)", value=store.loaded, disabled=not store.loaded
    )

    if st.button("Generate Report", type="primary"):
        st.session_state["project_key"] = project
        reporter = ProgressReporter(f"Building {PERIOD_LABELS[period].lower()} report for {project}")
        try:
            model = service.build_project_report(
                project,
                period,
                custom_range=custom_range,
                risk_store=store,
                include_risks=include_risks,
                rules=CategoryRules(risk_mode=risk_mode, broaden_milestones=broaden),
                inclusion=InclusionRules(allow_summary_fallback=summary_fallback),
                progress=reporter.callback,
            )
        except ValidationError as exc:
            reporter.error(str(exc))
            return
        except IssueSourceError as exc:
            logger.error("Jira fetch failed for %s: %s", project, exc)
            reporter.error(f"Failed to fetch issues: {exc}")
            return
        st.session_state["status_report"] = model
        reporter.complete(f"Report ready: {model.window.label}")

    model = st.session_state.get("status_report")
    if model is None:
        st.info("No report generated yet.")
        return

    st.markdown(f"**{model.window.label}**")
    if model.summary is not None:
        cols = st.columns(4)
        cols[0].metric("Total Issues", model.summary.total)
        for col, section_name in zip(cols[1:], ("accomplishments", "priorities", "risks"), strict=True):
            section = model.section(section_name)
            col.metric(section.title, len(section.rows))
        chart_cols = st.columns(2)
        status_chart = status_breakdown_chart(model.summary)
        if status_chart is not None:
            chart_cols[0].altair_chart(status_chart, use_container_width=True)
        size_chart = section_size_chart(model)
        if size_chart is not None:
            chart_cols[1].altair_chart(size_chart, use_container_width=True)
    if model.rejected:
        with st.expander(f"{len(model.rejected)} record(s) skipped as malformed"):
            st.dataframe(pd.DataFrame([err.to_dict() for err in model.rejected]), hide_index=True)

    st.markdown("---")
    for section in model.sections:
        render_section(section)

    issues = model.issues()
    if issues:
        with st.expander(f"{len(issues)} issue(s) in this report"):
            st.dataframe(records_to_dataframe(issues).head(SETTINGS.max_table_rows), hide_index=True)

    st.markdown("---")
    stem = f"status_report_{st.session_state.get('project_key', 'project')}_{model.now.isoformat()}"
    dl = st.columns(3)
    dl[0].download_button("Download Text", data=render_text(model), file_name=f"{stem}.txt", mime="text/plain")
    dl[1].download_button("Download JSON", data=render_json(model), file_name=f"{stem}.json", mime="application/json")
    dl[2].download_button("Download CSV", data=_sections_csv(model), file_name=f"{stem}.csv", mime="text/csv")
