"""Progress banner for long-running report builds."""

from __future__ import annotations

import streamlit as st


class ProgressReporter:
    """Wraps ``st.status`` so IssueService progress callbacks show up live."""

    def __init__(self, title: str):
        self._status = st.status(title, expanded=False)
        self._finalized = False

    def callback(self, message: str, current: int | None = None, total: int | None = None) -> None:
        """Signature compatible with IssueService progress callbacks."""
        if self._finalized:
            return
        if total:
            message = f"{message} ({current or 0}/{total})"
        self._status.write(message)

    def complete(self, message: str) -> None:
        if self._finalized:
            return
        self._status.update(label=message, state="complete")
        self._finalized = True

    def error(self, message: str) -> None:
        if self._finalized:
            return
        self._status.update(label=message, state="error", expanded=True)
        self._finalized = True
