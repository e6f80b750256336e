from datetime import date

from jira_report.core.errors import MalformedInputError
from jira_report.core.models import IssueRecord
from jira_report.reporting.inclusion import (
    InclusionRules,
    filter_eligible,
    is_eligible,
    split_valid_records,
)


def test_open_issue_with_description_is_eligible(make_issue):
    assert is_eligible(make_issue("A-1"))


def test_blank_description_is_excluded(make_issue):
    assert not is_eligible(make_issue("A-1", description="   "))


def test_done_without_resolution_date_is_excluded(make_issue):
    issue = make_issue("A-1", status_category="done", description="shipped", resolution_date=None)
    assert not is_eligible(issue)


def test_done_with_resolution_date_is_eligible(make_issue):
    issue = make_issue("A-1", status_category="done", resolution_date=date(2024, 9, 8))
    assert is_eligible(issue)


def test_open_issue_needs_no_dates(make_issue):
    assert is_eligible(make_issue("A-1", status_category="indeterminate", due_date=None))


def test_summary_fallback_is_opt_in(make_issue):
    issue = make_issue("A-1", description="", summary="Title only")
    assert not is_eligible(issue)
    assert is_eligible(issue, InclusionRules(allow_summary_fallback=True))


def test_filter_keeps_input_order(make_issue):
    issues = [make_issue("A-2"), make_issue("A-3", description=""), make_issue("A-1")]
    assert [i.key for i in filter_eligible(issues)] == ["A-2", "A-1"]


def test_malformed_records_are_returned_not_raised(make_issue):
    records = [
        make_issue("A-1"),
        IssueRecord(key="", description="no key", status_category="new"),
        make_issue("A-3", status_category="blocked"),
        make_issue("A-4", status_category=None),
        make_issue("A-5"),
    ]
    valid, rejected = split_valid_records(records)
    assert [r.key for r in valid] == ["A-1", "A-5"]
    assert len(rejected) == 3
    assert all(isinstance(err, MalformedInputError) for err in rejected)
    assert rejected[0].index == 1 and rejected[0].key is None
    assert rejected[1].key == "A-3"


def test_dict_records_are_coerced():
    valid, rejected = split_valid_records(
        [
            {"key": "D-1", "description": "x", "statusCategory": "done", "resolutionDate": "2024-09-08"},
            {"description": "missing key", "statusCategory": "new"},
            "not a record",
        ]
    )
    assert [r.key for r in valid] == ["D-1"]
    assert valid[0].resolution_date == date(2024, 9, 8)
    assert [err.index for err in rejected] == [1, 2]
