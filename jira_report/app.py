"""Application entry point: page registry, router and per-session state."""

from __future__ import annotations

import streamlit as st

from jira_report.core.risk_store import RiskStore

PAGES = {}

PREFERRED_ORDER = [
    "Status Report",
    "Risk Register",
    "Setup / Connection",
]


def register_page(label):
    def decorator(func):
        PAGES[label] = func
        return func

    return decorator


def session_risk_store() -> RiskStore:
    """Risk store owned by the current browser session."""
    store = st.session_state.get("risk_store")
    if not isinstance(store, RiskStore):
        store = RiskStore()
        st.session_state["risk_store"] = store
    return store


def ordered_pages(labels) -> list[str]:
    ordered = [name for name in PREFERRED_ORDER if name in labels]
    trailing = sorted(name for name in labels if name not in PREFERRED_ORDER)
    return ordered + trailing


def main():
    st.sidebar.title("Jira Status Reports")
    pages = ordered_pages(PAGES.keys())
    if not pages:
        st.write("No pages registered yet.")
        return
    # Send first-time visitors to setup until a Jira connection exists
    if "Setup / Connection" in pages and "issue_service" not in st.session_state:
        default = pages.index("Setup / Connection")
    else:
        default = 0
    page = st.sidebar.selectbox("Page", pages, index=default)
    PAGES[page]()


if __name__ == "__main__":
    main()
