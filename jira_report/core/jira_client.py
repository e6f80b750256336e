"""Jira API client wrapper (REST v3 + enhanced search pagination)."""

from __future__ import annotations

import hashlib
import json
import time
from typing import Any

import requests
from jira import JIRA, JIRAError

from .errors import IssueSourceError


class JiraAPI:
    def __init__(self, server: str, email: str, token: str):
        self.server = server.rstrip("/")
        self.client = JIRA(
            basic_auth=(email, token), options={"server": self.server, "rest_api_version": "3"}
        )
        # Simple in-memory cache: {(hash): (timestamp, data)}
        self._cache: dict[str, tuple[float, list]] = {}
        self._cache_ttl = 300.0  # seconds

    def clear_cache(self) -> None:
        """Reset the in-memory search cache."""
        self._cache.clear()

    def _cache_key(self, jql: str, fields, expand, page_size: int) -> str:
        payload = {
            "jql": jql,
            "fields": fields,
            "expand": expand,
            "page_size": page_size,
        }
        return hashlib.sha256(json.dumps(payload, sort_keys=True).encode()).hexdigest()

    def search_enhanced(
        self,
        jql: str,
        fields: list[str] | None = None,
        expand: list[str] | None = None,
        page_size: int = 100,
    ) -> list[dict[str, Any]]:
        session = getattr(self.client, "_session", None)
        if session is None:
            raise IssueSourceError("JIRA session unavailable")
        url = f"{self.server}/rest/api/3/search/jql"
        key = self._cache_key(jql, fields, expand, page_size)
        now = time.time()
        cached = self._cache.get(key)
        if cached and (now - cached[0]) < self._cache_ttl:
            return cached[1]
        params = {"jql": jql, "maxResults": page_size}
        if fields:
            params["fields"] = ",".join(fields)
        if expand:
            params["expand"] = ",".join(expand)
        out: list[dict[str, Any]] = []
        token = None
        while True:
            qp = dict(params)
            if token:
                qp["nextPageToken"] = token
            try:
                resp = session.get(url, params=qp)
            except requests.RequestException as exc:
                raise IssueSourceError(f"Enhanced search failed: {exc}") from exc
            if resp.status_code >= 400:
                raise IssueSourceError(f"Enhanced search failed {resp.status_code}: {resp.text[:200]}")
            data = resp.json()
            out.extend(data.get("issues", []))
            token = data.get("nextPageToken")
            if not token or data.get("isLast") is True:
                break
        self._cache[key] = (now, out)
        return out

    def list_projects(self) -> list[dict[str, str]]:
        try:
            projects = self.client.projects()
        except JIRAError as exc:  # pragma: no cover - network error path
            raise IssueSourceError(f"Failed to list projects: {exc}") from exc
        return [{"key": p.key, "name": getattr(p, "name", p.key)} for p in projects]
