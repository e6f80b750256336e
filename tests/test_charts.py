from datetime import timedelta

from jira_report.reporting.builder import build_report
from jira_report.visual.charts import (
    breakdown_chart,
    counts_frame,
    section_size_chart,
    status_breakdown_chart,
)


def test_counts_frame_shape():
    df = counts_frame({"Done": 2, "To Do": 1}, "status")
    assert list(df.columns) == ["status", "count"]
    assert df["count"].tolist() == [2, 1]


def test_breakdown_chart_empty_is_none():
    assert breakdown_chart({}, "status") is None
    assert status_breakdown_chart(None) is None


def test_report_charts(make_issue, now):
    model = build_report(
        [
            make_issue("A-1", status="Done", status_category="done", resolution_date=now - timedelta(days=1)),
            make_issue("A-2", due_date=now + timedelta(days=2)),
        ],
        "weekly",
        now,
    )
    chart = status_breakdown_chart(model.summary)
    assert chart is not None
    assert chart.to_dict()["mark"]["type"] == "bar"
    assert section_size_chart(model) is not None


def test_section_chart_none_for_empty_report(now):
    assert section_size_chart(build_report([], "weekly", now)) is None
