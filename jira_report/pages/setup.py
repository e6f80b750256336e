"""Connection setup page: collect Jira credentials and initialize IssueService."""

from __future__ import annotations

import logging

import streamlit as st

from jira_report.app import register_page
from jira_report.core.config import JIRA_DEFAULT_SERVER
from jira_report.core.errors import IssueSourceError
from jira_report.core.jira_client import JiraAPI
from jira_report.core.service import IssueService

logger = logging.getLogger(__name__)


def secret_credentials() -> tuple[str | None, str | None, str | None]:
    """Read Jira credentials from a ``[jira]`` secrets section or the top level."""
    jira_secrets = st.secrets.get("jira", {})
    server = jira_secrets.get("JIRA_SERVER") or st.secrets.get("JIRA_SERVER")
    email = jira_secrets.get("JIRA_EMAIL") or st.secrets.get("JIRA_EMAIL")
    token = (
        jira_secrets.get("JIRA_API_TOKEN")
        or st.secrets.get("JIRA_API_TOKEN")
        or jira_secrets.get("JIRA_TOKEN")
        or st.secrets.get("JIRA_TOKEN")
    )
    return server, email, token


@register_page("Setup / Connection")
def setup_page():
    st.title("Jira Connection Setup")
    st.caption("Enter credentials (use secrets manager in production).")

    secret_server, secret_email, secret_token = secret_credentials()
    server = st.text_input(
        "Jira Server URL",
        value=st.session_state.get("jira_server") or secret_server or JIRA_DEFAULT_SERVER,
    )
    email = st.text_input(
        "Email / Username",
        value=st.session_state.get("jira_email") or secret_email or "",
    )
    token = st.text_input("API Token", type="password", value=secret_token or "")
    ttl = st.number_input("Client cache TTL (seconds)", min_value=60, max_value=3600, value=300)

    if st.button("Initialize Connection", type="primary"):
        if not (server and email and token):
            st.error("All fields required.")
            return
        try:
            api = JiraAPI(server, email, token)
            api._cache_ttl = float(ttl)
            service = IssueService(api)
            projects = service.get_projects()
        except IssueSourceError as exc:
            logger.error("Jira connection check failed: %s", exc)
            st.error(f"Connected, but listing projects failed: {exc}")
            return
        except Exception as exc:  # pragma: no cover - jira raises many error types on connect
            logger.error("Failed to initialize Jira client: %s", exc)
            st.error(f"Failed to initialize Jira client: {exc}")
            return
        st.session_state["jira_server"] = server
        st.session_state["jira_email"] = email
        st.session_state["issue_service"] = service
        st.session_state["jira_projects"] = projects
        st.success(f"Connection initialized ({len(projects)} project(s) visible).")

    if "issue_service" in st.session_state:
        st.info("IssueService ready.")
