from datetime import date

from jira_report.core.models import CategoryBucket
from jira_report.reporting.sorting import sort_buckets, sort_by_due_date, sort_by_key


def test_sort_by_key_is_lexicographic(make_issue):
    issues = [make_issue("A-10"), make_issue("A-2"), make_issue("A-1")]
    assert [i.key for i in sort_by_key(issues)] == ["A-1", "A-10", "A-2"]


def test_due_date_ties_broken_by_key(make_issue):
    due = date(2024, 9, 12)
    issues = [make_issue("B-2", due_date=due), make_issue("B-1", due_date=due)]
    assert [i.key for i in sort_by_due_date(issues)] == ["B-1", "B-2"]


def test_undated_issues_sort_last(make_issue):
    issues = [
        make_issue("C-1", due_date=None),
        make_issue("C-3", due_date=date(2024, 9, 20)),
        make_issue("C-0", due_date=None),
        make_issue("C-2", due_date=date(2024, 9, 11)),
    ]
    assert [i.key for i in sort_by_due_date(issues)] == ["C-2", "C-3", "C-0", "C-1"]


def test_sort_is_stable_for_full_ties(make_issue):
    first = make_issue("D-1", description="first")
    second = make_issue("D-1", description="second")
    assert sort_by_key([first, second]) == [first, second]
    assert sort_by_due_date([second, first]) == [second, first]


def test_sort_buckets_applies_per_bucket_order(make_issue):
    early, late = date(2024, 9, 11), date(2024, 9, 15)
    z_epic = make_issue("Z-1", issue_type="Epic", due_date=early)
    a_epic = make_issue("A-1", issue_type="Epic", due_date=late)
    raw = {
        "accomplishments": [make_issue("K-2"), make_issue("K-1")],
        "priorities": [a_epic, z_epic],
        "risks": [make_issue("S-2"), make_issue("S-1")],
        "milestones": [a_epic, z_epic],
        "upcomingMilestones": [a_epic, z_epic],
    }
    buckets = sort_buckets(raw)
    assert all(isinstance(b, CategoryBucket) for b in buckets.values())
    assert buckets["accomplishments"].keys == ["K-1", "K-2"]
    assert buckets["risks"].keys == ["S-1", "S-2"]
    assert buckets["priorities"].keys == ["Z-1", "A-1"]
    assert buckets["milestones"].keys == ["Z-1", "A-1"]
    assert buckets["upcomingMilestones"].keys == ["Z-1", "A-1"]


def test_undated_milestones_fall_back_to_key_order(make_issue):
    raw = {"milestones": [make_issue("M-3", issue_type="Epic"), make_issue("M-1", issue_type="Epic")]}
    buckets = sort_buckets(raw)
    assert buckets["milestones"].keys == ["M-1", "M-3"]
    assert len(buckets["priorities"]) == 0
