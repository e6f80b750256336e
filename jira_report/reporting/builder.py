"""Report entry point: window -> validation -> inclusion -> buckets -> sections."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from datetime import date, datetime
from typing import Any

import pytz

from jira_report.core.config import TIMEZONE
from jira_report.core.errors import ValidationError
from jira_report.core.models import IssueRecord, ReportModel, RiskSnapshot
from jira_report.core.risk_store import RiskStore, clean_cell

from .assembler import assemble_sections
from .categorize import CategoryRules, categorize
from .inclusion import InclusionRules, filter_eligible, split_valid_records
from .sorting import sort_buckets
from .summary import summarize_issues
from .window import as_local_date, compute_window

logger = logging.getLogger(__name__)

CustomRange = Mapping[str, date | datetime | None] | Sequence[date | datetime | None]
RiskInput = RiskSnapshot | RiskStore | Sequence[Mapping[str, Any]]


def unpack_range(custom_range: CustomRange | None) -> tuple[Any, Any]:
    if custom_range is None:
        return None, None
    if isinstance(custom_range, Mapping):
        return custom_range.get("start"), custom_range.get("end")
    if isinstance(custom_range, Sequence) and not isinstance(custom_range, str) and len(custom_range) == 2:
        return custom_range[0], custom_range[1]
    raise ValidationError("custom_range must be a {start, end} mapping or a (start, end) pair")


def resolve_risk_snapshot(risks: RiskInput | None) -> RiskSnapshot | None:
    """Take the single copy of the risk table a build works from."""
    if risks is None:
        return None
    if isinstance(risks, RiskSnapshot):
        return risks
    if isinstance(risks, RiskStore):
        return risks.snapshot()
    rows = tuple({key: clean_cell(value) for key, value in row.items()} for row in risks)
    headers = tuple(str(h) for h in rows[0]) if rows else ()
    return RiskSnapshot(rows=rows, headers=headers)


def build_report(
    issues: Iterable[IssueRecord | Mapping[str, Any]],
    period: str,
    now: date | datetime,
    custom_range: CustomRange | None = None,
    risk_snapshot: RiskInput | None = None,
    *,
    rules: CategoryRules | None = None,
    inclusion: InclusionRules | None = None,
    base_url: str | None = None,
    layout: Mapping[str, Mapping] | None = None,
    summary: bool = True,
    tz=None,
) -> ReportModel:
    """Build the categorized status report for one period.

    Parameters
    ----------
    issues : iterable of IssueRecord or dict
        Issue snapshot; dicts are coerced with camelCase or snake_case keys.
    period : str
        "weekly", "biweekly" or "custom".
    now : date | datetime
        Reference instant; identical inputs and ``now`` give identical output.
    custom_range : mapping or pair, optional
        ``{"start": ..., "end": ...}`` or ``(start, end)`` for custom periods.
    risk_snapshot : RiskSnapshot, RiskStore or list of dicts, optional
        Risk table to append as a register section; read once.
    rules, inclusion : optional
        Categorization and inclusion variants.
    base_url : str, optional
        Jira server used to build browse links.
    layout : mapping, optional
        Section field orders and titles, as returned by
        ``load_section_layout``; the built-in layout when omitted.
    summary : bool
        Attach project-level counts.

    Returns
    -------
    ReportModel

    Raises
    ------
    ValidationError
        For a bad period or date range; raised before any bucket work.
    """
    tz = tz or pytz.timezone(TIMEZONE)
    start, end = unpack_range(custom_range)
    window = compute_window(period, now, start, end, tz=tz)
    today = as_local_date(now, tz)
    snapshot = resolve_risk_snapshot(risk_snapshot)

    valid, rejected = split_valid_records(issues)
    eligible = filter_eligible(valid, inclusion)
    buckets = sort_buckets(categorize(eligible, window, today, rules))
    sections = assemble_sections(buckets, base_url=base_url, risk_snapshot=snapshot, layout=layout)

    logger.info(
        "Built %s report (%s): %s issue(s), %s eligible, %s rejected; %s",
        window.period,
        window.label,
        len(valid) + len(rejected),
        len(eligible),
        len(rejected),
        ", ".join(f"{name}={len(bucket)}" for name, bucket in buckets.items()),
    )
    generated_at = now if isinstance(now, datetime) else datetime.now(tz)
    return ReportModel(
        window=window,
        now=today,
        generated_at=generated_at,
        sections=sections,
        buckets=buckets,
        rejected=rejected,
        summary=summarize_issues(valid) if summary else None,
        risk_snapshot=snapshot,
    )
