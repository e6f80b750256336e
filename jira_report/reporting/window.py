"""Report window resolution for weekly, biweekly and custom periods."""

from __future__ import annotations

from datetime import date, datetime, timedelta

import pytz

from jira_report.core.config import PERIOD_CUSTOM, PERIOD_DAYS, PERIOD_LABELS, TIMEZONE
from jira_report.core.errors import ValidationError
from jira_report.core.models import ReportWindow


def as_local_date(value: date | datetime, tz=None) -> date:
    """Reduce ``now`` to a calendar date in the report timezone.

    Aware datetimes are converted to ``tz`` (default TIMEZONE); naive ones
    are taken as already local.
    """
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            return value.astimezone(tz or pytz.timezone(TIMEZONE)).date()
        return value.date()
    if isinstance(value, date):
        return value
    raise ValidationError(f"now must be a date or datetime, got {type(value).__name__}")


def normalize_period(period: str | None) -> str:
    text = str(period or "").strip().lower()
    if text not in PERIOD_LABELS:
        allowed = ", ".join(PERIOD_LABELS)
        raise ValidationError(f"Unknown period {period!r}; expected one of: {allowed}")
    return text


def window_label(period: str, start: date, end: date) -> str:
    return f"{PERIOD_LABELS[period]}: {start.isoformat()} to {end.isoformat()}"


def compute_window(
    period: str,
    now: date | datetime,
    start: date | datetime | None = None,
    end: date | datetime | None = None,
    *,
    tz=None,
) -> ReportWindow:
    """Resolve a period selector into a report window.

    Parameters
    ----------
    period : str
        "weekly", "biweekly" or "custom" (case-insensitive).
    now : date | datetime
        Reference instant.
    start, end : date | datetime, optional
        Required for, and only accepted with, the custom period.
    tz : timezone, optional
        Timezone used to reduce aware datetimes to dates.

    Returns
    -------
    ReportWindow
        ``weekly`` spans now-7d..now+7d, ``biweekly`` now-14d..now+14d.

    Raises
    ------
    ValidationError
        Unknown period, missing custom dates, dates passed to a non-custom
        period, or ``end < start``.
    """
    selector = normalize_period(period)
    today = as_local_date(now, tz)

    if selector == PERIOD_CUSTOM:
        if start is None or end is None:
            raise ValidationError("Custom period requires both start and end dates")
        start_day = as_local_date(start, tz)
        end_day = as_local_date(end, tz)
        if end_day < start_day:
            raise ValidationError(
                f"Custom period end {end_day.isoformat()} is before start {start_day.isoformat()}"
            )
        return ReportWindow(start_day, end_day, window_label(selector, start_day, end_day), selector)

    if start is not None or end is not None:
        raise ValidationError(f"Explicit start/end dates are only valid for the custom period, not {selector!r}")
    span = timedelta(days=PERIOD_DAYS[selector])
    start_day = today - span
    end_day = today + span
    return ReportWindow(start_day, end_day, window_label(selector, start_day, end_day), selector)
