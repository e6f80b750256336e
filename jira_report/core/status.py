"""Status name cleanup and status-category resolution.

Jira attaches a status category (``new``, ``indeterminate``, ``done``) to
every workflow status. The report engine only trusts that category for
done/not-done decisions; these helpers recover it when a payload carries
just the status name, using STATUS_ALIASES from config.py.
"""

from __future__ import annotations

from .config import STATUS_ALIASES, STATUS_CATEGORY_NAMES
from .models import STATUS_CATEGORIES


def clean_status_name(value: str | None) -> str:
    """Sanitize status string, converting null-like values to "Unknown".

    Parameters
    ----------
    value : str | None
        Raw status string.

    Returns
    -------
    str
        Cleaned status string or "Unknown" for empty/null values.
    """
    if not value:
        return "Unknown"
    text = str(value).strip()
    if not text:
        return "Unknown"
    if text.lower() in {"nan", "none", "null"}:
        return "Unknown"
    return text


def normalize_status_category(value: str | None) -> str | None:
    """Map a status category key or name onto one of the three keys.

    Parameters
    ----------
    value : str | None
        Category key ("done") or display name ("To Do") from Jira.

    Returns
    -------
    str | None
        "new", "indeterminate" or "done"; None when unrecognized.

    Examples
    --------
    >>> normalize_status_category("Done")
    'done'
    >>> normalize_status_category("In Progress")
    'indeterminate'
    >>> normalize_status_category("undefined") is None
    True
    """
    if not value:
        return None
    text = str(value).strip().lower()
    if text in STATUS_CATEGORIES:
        return text
    return STATUS_CATEGORY_NAMES.get(text)


def infer_status_category(status: str | None) -> str | None:
    """Guess the status category from a workflow status name.

    Used only when the payload omits ``statusCategory``. Unknown names
    return None so the record is reported as malformed rather than guessed.
    """
    if not status:
        return None
    return STATUS_ALIASES.get(str(status).strip().lower())


def resolve_status_category(category: str | None, status: str | None) -> str | None:
    return normalize_status_category(category) or infer_status_category(status)
