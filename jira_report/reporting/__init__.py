"""Status report categorization and windowing engine."""

from jira_report.reporting.assembler import assemble_sections
from jira_report.reporting.builder import build_report
from jira_report.reporting.categorize import CategoryRules, categorize
from jira_report.reporting.inclusion import InclusionRules, filter_eligible, is_eligible, split_valid_records
from jira_report.reporting.renderers import render_json, render_slide_tables, render_text, section_frame
from jira_report.reporting.sorting import sort_buckets
from jira_report.reporting.summary import summarize_issues
from jira_report.reporting.window import compute_window

__all__ = [
    "CategoryRules",
    "InclusionRules",
    "assemble_sections",
    "build_report",
    "categorize",
    "compute_window",
    "filter_eligible",
    "is_eligible",
    "render_json",
    "render_slide_tables",
    "render_text",
    "section_frame",
    "sort_buckets",
    "split_valid_records",
    "summarize_issues",
]
