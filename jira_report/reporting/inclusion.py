"""Record validation and the eligibility filter applied before categorization."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from jira_report.core.errors import MalformedInputError
from jira_report.core.mappers import record_from_dict
from jira_report.core.models import STATUS_CATEGORIES, IssueRecord

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class InclusionRules:
    # Let the summary stand in for a blank description
    allow_summary_fallback: bool = False


def validate_record(record: IssueRecord, index: int | None = None) -> None:
    """Raise MalformedInputError if ``record`` cannot be reported at all."""
    if not isinstance(record, IssueRecord):
        raise MalformedInputError(f"expected IssueRecord, got {type(record).__name__}", index=index)
    if not record.key or not str(record.key).strip():
        raise MalformedInputError("missing key", index=index)
    if record.status_category not in STATUS_CATEGORIES:
        raise MalformedInputError(
            f"status category {record.status_category!r} is not one of new/indeterminate/done",
            key=record.key,
            index=index,
        )


def split_valid_records(
    records: Iterable[IssueRecord | Mapping[str, Any]],
) -> tuple[list[IssueRecord], list[MalformedInputError]]:
    """Separate usable records from malformed ones.

    Dict records are coerced first. Malformed records are returned, not
    raised, so the rest of the project still reaches the report.
    """
    valid: list[IssueRecord] = []
    rejected: list[MalformedInputError] = []
    for index, item in enumerate(records):
        try:
            record = item if isinstance(item, IssueRecord) else record_from_dict(item, index=index)
            validate_record(record, index=index)
        except MalformedInputError as err:
            logger.warning("Rejected issue record: %s", err)
            rejected.append(err)
            continue
        valid.append(record)
    return valid, rejected


def has_description(record: IssueRecord, rules: InclusionRules | None = None) -> bool:
    if record.description and record.description.strip():
        return True
    rules = rules or InclusionRules()
    return bool(rules.allow_summary_fallback and record.summary and str(record.summary).strip())


def is_eligible(record: IssueRecord, rules: InclusionRules | None = None) -> bool:
    """An issue is reportable when it has text and, if done, a resolution date."""
    if not has_description(record, rules):
        return False
    if record.is_done and record.resolution_date is None:
        return False
    return True


def filter_eligible(records: Iterable[IssueRecord], rules: InclusionRules | None = None) -> list[IssueRecord]:
    eligible: list[IssueRecord] = []
    for record in records:
        if is_eligible(record, rules):
            eligible.append(record)
        else:
            logger.debug("Excluded %s from report (no description or unresolved done issue)", record.key)
    return eligible
