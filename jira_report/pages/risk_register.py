"""Risk register page: upload, inspect and clear the session's risk table."""

from __future__ import annotations

import logging

import streamlit as st

from jira_report.app import register_page, session_risk_store
from jira_report.core.config import RISK_UPLOAD_TYPES, SETTINGS
from jira_report.core.errors import RiskFileError

logger = logging.getLogger(__name__)


@register_page("Risk Register")
def risk_register_page():
    st.title("Risk Register")
    st.caption("Upload an Excel risk log; its first sheet is appended to status reports.")
    store = session_risk_store()

    upload = st.file_uploader("Risk workbook", type=list(RISK_UPLOAD_TYPES))
    if upload is not None and st.button("Load Risks", type="primary"):
        try:
            count = store.load_excel(upload.getvalue(), filename=upload.name)
        except RiskFileError as exc:
            logger.error("Risk upload %s failed: %s", upload.name, exc)
            st.error(str(exc))
        else:
            st.success(f"Loaded {count} risk(s) from {upload.name}.")

    status = store.status()
    if not status["loaded"]:
        st.info("No risk data uploaded.")
        return
    st.markdown(f"**{status['filename']}**: {status['risk_count']} risk(s), updated {status['last_updated']}")
    st.dataframe(store.to_dataframe().head(SETTINGS.max_table_rows), hide_index=True)
    if st.button("Clear Risks"):
        store.clear()
        st.rerun()
