from datetime import date, datetime, timedelta

import pytest
import pytz

from jira_report.core.errors import ValidationError
from jira_report.reporting.window import as_local_date, compute_window


def test_weekly_window_spans_fourteen_days(now):
    window = compute_window("weekly", now)
    assert window.start == date(2024, 9, 3)
    assert window.end == date(2024, 9, 17)
    assert window.end - window.start == timedelta(days=14)
    assert window.label == "Weekly: 2024-09-03 to 2024-09-17"


def test_biweekly_window_spans_twenty_eight_days(now):
    window = compute_window("biweekly", now)
    assert window.end - window.start == timedelta(days=28)
    assert window.start == now - timedelta(days=14)


def test_period_selector_is_case_insensitive(now):
    assert compute_window(" Weekly ", now).period == "weekly"


def test_custom_window_may_sit_entirely_in_the_past(now):
    window = compute_window("custom", now, date(2024, 1, 1), date(2024, 1, 31))
    assert window.start == date(2024, 1, 1)
    assert window.end == date(2024, 1, 31)
    assert not window.contains(now)
    assert window.label.startswith("Custom: ")


def test_custom_single_day_window_is_valid(now):
    window = compute_window("custom", now, now, now)
    assert window.start == window.end == now


@pytest.mark.parametrize(
    "start,end",
    [(None, date(2024, 9, 1)), (date(2024, 9, 1), None), (None, None)],
)
def test_custom_requires_both_dates(now, start, end):
    with pytest.raises(ValidationError):
        compute_window("custom", now, start, end)


def test_custom_end_before_start_rejected(now):
    with pytest.raises(ValidationError, match="before start"):
        compute_window("custom", now, date(2024, 9, 20), date(2024, 9, 1))


def test_dates_not_accepted_for_weekly(now):
    with pytest.raises(ValidationError):
        compute_window("weekly", now, date(2024, 9, 1), date(2024, 9, 20))


def test_unknown_period_rejected(now):
    with pytest.raises(ValidationError, match="Unknown period"):
        compute_window("monthly", now)


def test_aware_now_is_reduced_in_report_timezone():
    tz = pytz.timezone("America/Santiago")
    # 02:00 UTC on the 11th is still the 10th in Santiago
    instant = datetime(2024, 9, 11, 2, 0, tzinfo=pytz.UTC)
    assert as_local_date(instant, tz) == date(2024, 9, 10)
    window = compute_window("weekly", instant, tz=tz)
    assert window.start == date(2024, 9, 3)


def test_window_is_deterministic(now):
    assert compute_window("biweekly", now) == compute_window("biweekly", now)
