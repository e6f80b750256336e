"""Load and expose report section layouts from YAML (with fallbacks)."""

from __future__ import annotations

import logging
from pathlib import Path

import yaml

from .config import SECTION_FIELDS, SECTION_TITLES

logger = logging.getLogger(__name__)

_CACHE: dict[str, dict] | None = None


def default_layout() -> dict[str, dict]:
    """Built-in field orders and titles; no file access."""
    return {
        "fields": {name: list(cols) for name, cols in SECTION_FIELDS.items()},
        "titles": dict(SECTION_TITLES),
    }


def load_section_layout(base_path: str | Path | None = None, *, refresh: bool = False) -> dict[str, dict]:
    """Return ``{"fields": {...}, "titles": {...}}`` for every section.

    ``sections.yaml`` in ``base_path`` (default: the directory the app is
    launched from) may override any section's field order or title;
    sections it does not name keep the defaults.
    """
    global _CACHE
    if _CACHE is not None and not refresh and base_path is None:
        return _CACHE
    base = Path(base_path) if base_path is not None else Path.cwd()
    yaml_path = base / "sections.yaml"
    layout = default_layout()
    if yaml_path.exists():
        try:
            data = yaml.safe_load(yaml_path.read_text()) or {}
        except yaml.YAMLError as exc:
            logger.warning("Ignoring unreadable %s: %s", yaml_path, exc)
            data = {}
        if not isinstance(data, dict):
            data = {}
        for name, entry in (data.get("sections") or {}).items():
            if not isinstance(entry, dict):
                continue
            fields = entry.get("fields")
            if isinstance(fields, list) and fields:
                layout["fields"][name] = [str(f) for f in fields]
            title = entry.get("title")
            if isinstance(title, str) and title.strip():
                layout["titles"][name] = title.strip()
    if base_path is None:
        _CACHE = layout
    return layout
