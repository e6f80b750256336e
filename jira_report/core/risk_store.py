"""Uploaded risk register held for inclusion in status reports.

The store is an explicit object handed to whoever builds a report; nothing
here is module-global. Reports read it once through :meth:`RiskStore.snapshot`,
which returns an immutable copy, so a later upload never changes a report
already in flight.
"""

from __future__ import annotations

import base64
import binascii
import io
import logging
from collections.abc import Iterable, Mapping
from datetime import date, datetime, time
from pathlib import Path
from typing import Any

import pandas as pd
import pytz

from .config import TIMEZONE
from .errors import RiskFileError
from .models import RiskSnapshot

logger = logging.getLogger(__name__)


def clean_cell(value: Any) -> Any:
    if value is None:
        return ""
    try:
        if pd.isna(value):
            return ""
    except (TypeError, ValueError):
        # Non-scalar cell; keep as-is
        pass
    if isinstance(value, datetime):
        stamp = pd.Timestamp(value)
        return stamp.date().isoformat() if stamp == stamp.normalize() else stamp.isoformat()
    if isinstance(value, (date, time)):
        return value.isoformat()
    return value


def _is_existing_path(value: str | Path) -> bool:
    try:
        return Path(value).is_file()
    except (OSError, ValueError):
        return False


def read_risk_workbook(data: bytes | str | Path | io.IOBase) -> tuple[list[dict[str, Any]], list[str]]:
    """Read the first sheet of an Excel workbook into rows and headers.

    ``data`` may be raw bytes, a base64 string, a filesystem path or a
    binary file-like object.
    """
    source: Any = data
    if isinstance(data, str) and not _is_existing_path(data):
        try:
            source = io.BytesIO(base64.b64decode(data, validate=True))
        except (binascii.Error, ValueError) as exc:
            raise RiskFileError(f"Risk upload is neither a file path nor base64 data: {exc}") from exc
    elif isinstance(data, (bytes, bytearray)):
        source = io.BytesIO(data)
    try:
        frame = pd.read_excel(source, sheet_name=0)
    except Exception as exc:  # pandas/openpyxl raise a wide range of errors
        raise RiskFileError(f"Could not read risk workbook: {exc}") from exc
    frame = frame.dropna(how="all")
    headers = [str(col) for col in frame.columns]
    rows = [
        {header: clean_cell(value) for header, value in zip(headers, record, strict=True)}
        for record in frame.itertuples(index=False, name=None)
    ]
    return rows, headers


class RiskStore:
    def __init__(self):
        self._rows: list[dict[str, Any]] = []
        self._headers: list[str] = []
        self._filename: str | None = None
        self._last_updated: datetime | None = None
        self._tz = pytz.timezone(TIMEZONE)

    def replace(
        self,
        rows: Iterable[Mapping[str, Any]],
        filename: str | None = None,
        headers: Iterable[str] | None = None,
    ) -> int:
        """Replace the whole table; returns the new row count."""
        copied = [{key: clean_cell(value) for key, value in row.items()} for row in rows]
        if headers is None:
            header_list = [str(h) for h in copied[0].keys()] if copied else []
        else:
            header_list = [str(h) for h in headers]
        self._rows = copied
        self._headers = header_list
        self._filename = filename
        self._last_updated = datetime.now(self._tz)
        logger.info("Risk register replaced from %s: %s row(s)", filename or "<rows>", len(copied))
        return len(copied)

    def load_excel(self, data: bytes | str | Path | io.IOBase, filename: str | None = None) -> int:
        """Parse an uploaded workbook and replace the table with its first sheet.

        Raises
        ------
        RiskFileError
            If the workbook cannot be read; the current table is kept.
        """
        rows, headers = read_risk_workbook(data)
        if filename is None and isinstance(data, (str, Path)) and _is_existing_path(data):
            filename = Path(data).name
        return self.replace(rows, filename=filename or "risk.xlsx", headers=headers)

    def clear(self) -> None:
        self._rows = []
        self._headers = []
        self._filename = None
        self._last_updated = None
        logger.info("Risk register cleared")

    @property
    def loaded(self) -> bool:
        return bool(self._rows)

    def __len__(self) -> int:
        return len(self._rows)

    def status(self) -> dict[str, Any]:
        return {
            "loaded": self.loaded,
            "filename": self._filename,
            "risk_count": len(self._rows),
            "last_updated": self._last_updated.isoformat() if self._last_updated else None,
        }

    def snapshot(self) -> RiskSnapshot:
        return RiskSnapshot(
            rows=tuple(dict(row) for row in self._rows),
            headers=tuple(self._headers),
            filename=self._filename,
            last_updated=self._last_updated,
        )

    def to_dataframe(self) -> pd.DataFrame:
        return pd.DataFrame(self._rows, columns=self._headers or None)
