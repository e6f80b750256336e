from datetime import date, timedelta

import pytest

from jira_report.core.errors import ValidationError
from jira_report.reporting.categorize import CategoryRules, categorize
from jira_report.reporting.window import compute_window


def _keys(buckets, name):
    return [r.key for r in buckets[name]]


def _buckets(issues, now, rules=None, period="weekly"):
    return categorize(issues, compute_window(period, now), now, rules)


def test_accomplishments_need_resolution_in_lookback(make_issue, now):
    issues = [
        make_issue("A-1", status_category="done", resolution_date=now - timedelta(days=3)),
        make_issue("A-2", status_category="done", resolution_date=now - timedelta(days=8)),
        make_issue("A-3", status_category="done", resolution_date=now),
        make_issue("A-4", status_category="done", resolution_date=now - timedelta(days=7)),
        # resolved "in the future" relative to now falls outside [start, now]
        make_issue("A-5", status_category="done", resolution_date=now + timedelta(days=1)),
        make_issue("A-6", status_category="indeterminate", resolution_date=now - timedelta(days=1)),
    ]
    assert _keys(_buckets(issues, now), "accomplishments") == ["A-1", "A-3", "A-4"]


def test_priorities_are_open_and_due_before_window_end(make_issue, now):
    issues = [
        make_issue("P-1", due_date=now + timedelta(days=2)),
        make_issue("P-2", due_date=now + timedelta(days=7)),
        make_issue("P-3", due_date=now + timedelta(days=8)),
        make_issue("P-4", due_date=now - timedelta(days=30)),  # overdue still counts
        make_issue("P-5", due_date=None),
        make_issue("P-6", status_category="done", resolution_date=now, due_date=now),
    ]
    assert _keys(_buckets(issues, now), "priorities") == ["P-1", "P-2", "P-4"]


def test_risks_default_to_open_stories(make_issue, now):
    issues = [
        make_issue("R-1", issue_type="Story"),
        make_issue("R-2", issue_type=" story "),
        make_issue("R-3", issue_type="Task", priority="Highest"),
        make_issue("R-4", issue_type="Story", status_category="done", resolution_date=now),
        make_issue("R-5", issue_type="User Story"),
    ]
    assert _keys(_buckets(issues, now), "risks") == ["R-1", "R-2"]


def test_priority_risk_mode(make_issue, now):
    rules = CategoryRules(risk_mode="priority")
    issues = [
        make_issue("R-1", issue_type="Task", priority="High", due_date=now),
        make_issue("R-2", issue_type="Story", priority="Low", due_date=None),
        make_issue("R-3", issue_type="Story", priority="Low", due_date=now),
        make_issue("R-4", issue_type="Bug", priority="Highest", due_date=None),
        make_issue("R-5", issue_type="Task", priority="Critical", due_date=now),
        make_issue("R-6", issue_type="Task", priority="High", status_category="done", resolution_date=now),
    ]
    assert _keys(_buckets(issues, now, rules), "risks") == ["R-1", "R-2", "R-5"]


def test_milestones_by_type(make_issue, now):
    issues = [
        make_issue("M-1", issue_type="Epic"),
        make_issue("M-2", issue_type="Milestone", status_category="done", resolution_date=now),
        make_issue("M-3", issue_type="Story"),
    ]
    assert _keys(_buckets(issues, now), "milestones") == ["M-1", "M-2"]
    broad = _buckets(issues, now, CategoryRules(broaden_milestones=True))
    assert _keys(broad, "milestones") == ["M-1", "M-2", "M-3"]


def test_upcoming_milestones_subset(make_issue, now):
    issues = [
        make_issue("M-1", issue_type="Epic", due_date=now + timedelta(days=3)),
        make_issue("M-2", issue_type="Epic", due_date=now - timedelta(days=1)),
        make_issue("M-3", issue_type="Epic", due_date=now + timedelta(days=10)),
        make_issue("M-4", issue_type="Epic", due_date=None),
        make_issue("M-5", issue_type="Task", due_date=now + timedelta(days=1)),
        make_issue("M-6", issue_type="Milestone", due_date=now),
    ]
    buckets = _buckets(issues, now)
    assert _keys(buckets, "upcomingMilestones") == ["M-1", "M-6"]
    assert set(_keys(buckets, "upcomingMilestones")) <= set(_keys(buckets, "milestones"))


def test_issue_can_land_in_several_buckets(make_issue, now):
    epic = make_issue("E-1", issue_type="Epic", due_date=now + timedelta(days=2))
    buckets = _buckets([epic], now)
    assert _keys(buckets, "priorities") == ["E-1"]
    assert _keys(buckets, "milestones") == ["E-1"]
    assert _keys(buckets, "upcomingMilestones") == ["E-1"]
    assert buckets["priorities"][0] is epic


def test_custom_window_in_past_uses_now_for_upcoming(make_issue):
    now = date(2024, 9, 10)
    window = compute_window("custom", now, date(2024, 8, 1), date(2024, 8, 31))
    issue = make_issue("M-1", issue_type="Epic", due_date=date(2024, 8, 20))
    buckets = categorize([issue], window, now)
    assert _keys(buckets, "upcomingMilestones") == []
    assert _keys(buckets, "priorities") == ["M-1"]


def test_unknown_risk_mode_rejected():
    with pytest.raises(ValidationError):
        CategoryRules(risk_mode="substring")
