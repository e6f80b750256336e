"""Central configuration, constants, and shared section definitions."""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass

# =============================================================================
# Jira Connection Settings
# =============================================================================
JIRA_DEFAULT_SERVER = "https://your-domain.atlassian.net"
TIMEZONE = "America/Santiago"
DEFAULT_PROJECT_KEY = "OBS"

# =============================================================================
# Reporting Periods
# =============================================================================
PERIOD_WEEKLY = "weekly"
PERIOD_BIWEEKLY = "biweekly"
PERIOD_CUSTOM = "custom"

# Half-width of the window on each side of "now", in days
PERIOD_DAYS: dict[str, int] = {
    PERIOD_WEEKLY: 7,
    PERIOD_BIWEEKLY: 14,
}

PERIOD_LABELS: dict[str, str] = {
    PERIOD_WEEKLY: "Weekly",
    PERIOD_BIWEEKLY: "Biweekly",
    PERIOD_CUSTOM: "Custom",
}

# =============================================================================
# Report Sections
# =============================================================================
ACCOMPLISHMENTS = "accomplishments"
PRIORITIES = "priorities"
RISKS = "risks"
MILESTONES = "milestones"
UPCOMING_MILESTONES = "upcomingMilestones"
RISK_REGISTER = "riskRegister"

BUCKET_NAMES: Sequence[str] = (
    ACCOMPLISHMENTS,
    PRIORITIES,
    RISKS,
    MILESTONES,
    UPCOMING_MILESTONES,
)

SECTION_TITLES: dict[str, str] = {
    ACCOMPLISHMENTS: "Accomplishments",
    PRIORITIES: "Upcoming Priorities",
    RISKS: "Risks",
    MILESTONES: "Milestones",
    UPCOMING_MILESTONES: "Upcoming Milestones",
    RISK_REGISTER: "Risk Register",
}

# Default row layouts; sections.yaml may override them
SECTION_FIELDS: dict[str, Sequence[str]] = {
    ACCOMPLISHMENTS: ("key", "link", "description", "owner", "resolvedDate"),
    PRIORITIES: ("key", "link", "description", "owner", "dueDate"),
    RISKS: ("key", "link", "description", "owner", "targetDate", "status"),
    MILESTONES: ("key", "link", "description", "owner", "dueDate", "status"),
    UPCOMING_MILESTONES: ("key", "link", "description", "owner", "dueDate"),
}

# =============================================================================
# Categorization Rules
# =============================================================================
RISK_ISSUE_TYPES: frozenset[str] = frozenset({"story"})
PRIORITY_RISK_ISSUE_TYPES: frozenset[str] = frozenset({"story", "task"})
HIGH_PRIORITIES: frozenset[str] = frozenset({"high", "highest"})
MILESTONE_ISSUE_TYPES: frozenset[str] = frozenset({"epic", "milestone"})
BROAD_MILESTONE_ISSUE_TYPES: frozenset[str] = MILESTONE_ISSUE_TYPES | {"story"}

# =============================================================================
# Rendering Sentinels and Limits
# =============================================================================
UNASSIGNED = "Unassigned"
NOT_AVAILABLE = "N/A"
EMPTY_SECTION_PLACEHOLDER = "None"
ELLIPSIS = "..."

TEXT_TRUNCATE_CHARS: int = 120

# Slide tables are small; limits per section (rows, characters per cell)
SLIDE_MAX_ROWS: dict[str, int] = {
    ACCOMPLISHMENTS: 10,
    PRIORITIES: 8,
    RISKS: 8,
    MILESTONES: 8,
    UPCOMING_MILESTONES: 8,
    RISK_REGISTER: 6,
}
SLIDE_TRUNCATE_CHARS: dict[str, int] = {
    ACCOMPLISHMENTS: 70,
    PRIORITIES: 55,
    RISKS: 55,
    MILESTONES: 55,
    UPCOMING_MILESTONES: 55,
    RISK_REGISTER: 30,
}
SLIDE_MAX_RISK_COLUMNS: int = 4

# pandas reads these through openpyxl
RISK_UPLOAD_TYPES: Sequence[str] = ("xlsx",)

# =============================================================================
# Workflow Status Configuration
# =============================================================================
STATUS_CATEGORY_NEW = "new"
STATUS_CATEGORY_INDETERMINATE = "indeterminate"
STATUS_CATEGORY_DONE = "done"

# Map various status strings to Jira status category keys
# Keys should be lowercase for case-insensitive matching
STATUS_ALIASES: dict[str, str] = {
    # Initial/Open statuses
    "reported": STATUS_CATEGORY_NEW,
    "to do": STATUS_CATEGORY_NEW,
    "todo": STATUS_CATEGORY_NEW,
    "open": STATUS_CATEGORY_NEW,
    "new": STATUS_CATEGORY_NEW,
    "backlog": STATUS_CATEGORY_NEW,
    # In Progress variants
    "in progress": STATUS_CATEGORY_INDETERMINATE,
    "inprogress": STATUS_CATEGORY_INDETERMINATE,
    "in-progress": STATUS_CATEGORY_INDETERMINATE,
    "working": STATUS_CATEGORY_INDETERMINATE,
    "in review": STATUS_CATEGORY_INDETERMINATE,
    "testing": STATUS_CATEGORY_INDETERMINATE,
    "tracking": STATUS_CATEGORY_INDETERMINATE,
    "blocked": STATUS_CATEGORY_INDETERMINATE,
    # Done variants
    "done": STATUS_CATEGORY_DONE,
    "resolved": STATUS_CATEGORY_DONE,
    "closed": STATUS_CATEGORY_DONE,
    "complete": STATUS_CATEGORY_DONE,
    "completed": STATUS_CATEGORY_DONE,
    "cancelled": STATUS_CATEGORY_DONE,
    "canceled": STATUS_CATEGORY_DONE,
    "duplicate": STATUS_CATEGORY_DONE,
}

# Jira also reports category names ("To Do") instead of keys on some endpoints
STATUS_CATEGORY_NAMES: dict[str, str] = {
    "to do": STATUS_CATEGORY_NEW,
    "in progress": STATUS_CATEGORY_INDETERMINATE,
    "done": STATUS_CATEGORY_DONE,
}

# =============================================================================
# Priority Configuration
# =============================================================================
# Priority aliases for normalization (lowercase keys)
PRIORITY_ALIASES: dict[str, str] = {
    "highest": "Highest",
    "blocker": "Highest",
    "critical": "Highest",
    "high": "High",
    "medium": "Medium",
    "low": "Low",
    "lowest": "Lowest",
    "none": "None",
}


def normalize_priority_name(priority: str | None) -> str:
    """Normalize a priority name to its canonical form.

    Handles variations like:
    - "(migrated)" suffixes: "Medium (migrated)" -> "Medium"
    - Case variations: "HIGH" -> "High"
    - Whitespace: "  Medium  " -> "Medium"

    Parameters
    ----------
    priority : str or None
        Raw priority string from Jira.

    Returns
    -------
    str
        Canonical priority name, or the cleaned string if no mapping found.
    """
    if priority is None:
        return "None"

    cleaned = str(priority).strip()
    if not cleaned:
        return "None"

    cleaned = re.sub(r"\s*\(migrated\)\s*$", "", cleaned, flags=re.IGNORECASE).strip()

    lookup_key = cleaned.lower()
    if lookup_key in PRIORITY_ALIASES:
        return PRIORITY_ALIASES[lookup_key]
    return cleaned


# =============================================================================
# Jira Fetch Settings
# =============================================================================
JIRA_FETCH_BASE_FIELDS = [
    "summary",
    "description",
    "status",
    "assignee",
    "priority",
    "issuetype",
    "resolutiondate",
    "duedate",
]

# Columns shown when issues are displayed as a flat table
ISSUE_TABLE_COLUMNS: Sequence[str] = (
    "key",
    "summary",
    "issue_type",
    "status",
    "status_category",
    "priority",
    "assignee",
    "due_date",
    "resolution_date",
)


@dataclass(slots=True)
class AppSettings:
    max_table_rows: int = 1000
    download_encoding: str = "utf-8"
    page_size: int = 100


SETTINGS = AppSettings()
