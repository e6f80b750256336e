"""Test configuration ensuring local package import when editable install not active.

If users invoke `pytest` outside the project's virtualenv, we still add the project
root to sys.path so `import jira_report` works.
"""

from __future__ import annotations

import sys
from datetime import date
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from jira_report.core.models import IssueRecord  # noqa: E402

NOW = date(2024, 9, 10)


@pytest.fixture
def now() -> date:
    return NOW


@pytest.fixture
def make_issue():
    """Factory for IssueRecords with reportable defaults (open, described)."""

    def _make(key: str, **overrides) -> IssueRecord:
        values = {
            "description": f"Work on {key}",
            "assignee": "Alice",
            "status": "To Do",
            "status_category": "new",
            "issue_type": "Task",
            "priority": "Medium",
        }
        values.update(overrides)
        return IssueRecord(key=key, **values)

    return _make
