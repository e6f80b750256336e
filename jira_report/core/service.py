"""IssueService: fetches a project's issues and builds status reports from them."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from datetime import date, datetime

import pytz

from jira_report.reporting.builder import CustomRange, build_report, unpack_range
from jira_report.reporting.categorize import CategoryRules
from jira_report.reporting.inclusion import InclusionRules
from jira_report.reporting.window import compute_window

from .config import JIRA_FETCH_BASE_FIELDS, SETTINGS, TIMEZONE
from .jira_client import JiraAPI
from .mappers import map_issue
from .models import IssueRecord, ReportModel
from .risk_store import RiskStore
from .section_config import load_section_layout

DEFAULT_FIELDS: Sequence[str] = tuple(JIRA_FETCH_BASE_FIELDS)
ProgressCallback = Callable[[str, int | None, int | None], None]

logger = logging.getLogger(__name__)


def project_jql(project_key: str) -> str:
    return f'project = "{project_key}" ORDER BY key ASC'


class IssueService:
    def __init__(self, api: JiraAPI):
        self.api = api
        self._tz = pytz.timezone(TIMEZONE)

    @property
    def server(self) -> str:
        return getattr(self.api, "server", "")

    def get_projects(self) -> list[dict[str, str]]:
        """Fetch all projects from Jira."""
        return self.api.list_projects()

    def fetch_project_issues(
        self,
        project_key: str,
        *,
        progress: ProgressCallback | None = None,
    ) -> list[IssueRecord]:
        """Fetch every issue of ``project_key`` as IssueRecords.

        Transport failures surface as IssueSourceError; nothing is retried.
        """
        self.api.clear_cache()
        if progress:
            progress(f"Querying issues for {project_key}", None, None)
        raw = self.api.search_enhanced(
            project_jql(project_key),
            fields=list(DEFAULT_FIELDS),
            page_size=SETTINGS.page_size,
        )
        if progress:
            progress(f"Mapping {len(raw)} issue(s)", len(raw), len(raw))
        records = [map_issue(r) for r in raw]
        logger.debug("Fetched %s issue(s) for %s", len(records), project_key)
        return records

    def now(self) -> datetime:
        return datetime.now(self._tz)

    def build_project_report(
        self,
        project_key: str,
        period: str,
        *,
        now: date | datetime | None = None,
        custom_range: CustomRange | None = None,
        risk_store: RiskStore | None = None,
        include_risks: bool = True,
        rules: CategoryRules | None = None,
        inclusion: InclusionRules | None = None,
        layout: dict[str, dict] | None = None,
        progress: ProgressCallback | None = None,
    ) -> ReportModel:
        """Fetch ``project_key`` and build its report.

        ``layout`` defaults to ``load_section_layout()``, so a
        ``sections.yaml`` beside the app can reshape the sections.
        """
        now = now or self.now()
        # Reject a bad period before spending a Jira round trip
        compute_window(period, now, *unpack_range(custom_range), tz=self._tz)
        issues = self.fetch_project_issues(project_key, progress=progress)
        if progress:
            progress("Categorizing issues", None, None)
        snapshot = risk_store.snapshot() if include_risks and risk_store is not None else None
        return build_report(
            issues,
            period,
            now,
            custom_range,
            snapshot,
            rules=rules,
            inclusion=inclusion,
            base_url=self.server,
            layout=layout or load_section_layout(),
            tz=self._tz,
        )
