"""Convenience launcher for the Streamlit app.

Usage:
  streamlit run run_report.py

Automatically imports every module in ``jira_report/pages`` so each page
decorated with ``@register_page`` registers itself without manual edits here.
"""

import logging
from importlib import import_module
from pathlib import Path

import streamlit as st

from jira_report.app import main

st.set_page_config(layout="wide")
logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger("jira_report")


def _auto_init_issue_service():
    """Initialize Jira service from Streamlit secrets if available."""
    if "issue_service" in st.session_state:
        return

    from jira_report.pages.setup import secret_credentials

    server, email, token = secret_credentials()
    if server and email and token:
        try:
            from jira_report.core.jira_client import JiraAPI
            from jira_report.core.service import IssueService

            api = JiraAPI(server, email, token)
            st.session_state["jira_server"] = server
            st.session_state["issue_service"] = IssueService(api)
            st.sidebar.success("Jira connection successful!")
        except Exception as e:
            logger.error("Jira connection from secrets failed: %s", e)
            st.sidebar.error(f"Jira connection failed: {e}")
            st.session_state.pop("issue_service", None)
    else:
        st.sidebar.warning("Jira secrets not found. Please use the Setup page.")


PAGES_DIR = Path(__file__).parent / "jira_report" / "pages"
for py in sorted(PAGES_DIR.glob("[!_]*.py")):
    mod_name = f"jira_report.pages.{py.stem}"
    try:
        import_module(mod_name)
    except Exception as e:  # pragma: no cover - a broken page must not take down the app
        logger.error("Failed importing page %s: %s", mod_name, e)

_auto_init_issue_service()

if __name__ == "__main__":
    main()
