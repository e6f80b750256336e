from jira_report.core.config import normalize_priority_name
from jira_report.core.status import (
    clean_status_name,
    infer_status_category,
    normalize_status_category,
    resolve_status_category,
)


def test_normalize_status_category():
    assert normalize_status_category("done") == "done"
    assert normalize_status_category(" To Do ") == "new"
    assert normalize_status_category("In Progress") == "indeterminate"
    assert normalize_status_category("undefined") is None
    assert normalize_status_category(None) is None


def test_infer_from_status_name():
    assert infer_status_category("In Progress") == "indeterminate"
    assert infer_status_category("resolved") == "done"
    assert infer_status_category("Something New") is None


def test_category_wins_over_status_name():
    assert resolve_status_category("new", "Done") == "new"
    assert resolve_status_category(None, "Done") == "done"


def test_clean_status_name():
    assert clean_status_name(None) == "Unknown"
    assert clean_status_name("  ") == "Unknown"
    assert clean_status_name("null") == "Unknown"
    assert clean_status_name(" In Progress ") == "In Progress"


def test_priority_normalization():
    assert normalize_priority_name("HIGH") == "High"
    assert normalize_priority_name("Medium (migrated)") == "Medium"
    assert normalize_priority_name("Blocker") == "Highest"
    assert normalize_priority_name(None) == "None"
    assert normalize_priority_name("P1") == "P1"
