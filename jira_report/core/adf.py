"""Plain-text extraction from Atlassian Document Format (ADF) descriptions.

ADF is the JSON tree Jira Cloud uses for rich text. Only a handful of node
types carry text the report needs:

- ``doc`` and ``paragraph`` (and any other container) hold ``content`` lists
- ``text`` holds a ``text`` run
- ``hardBreak`` is a line break inside a paragraph

Block nodes (paragraphs, headings, list items, ...) are separated by
newlines; text runs inside a block are concatenated. Any other node type is
skipped, though its children are still visited, so an unexpected node never
raises.
"""

from __future__ import annotations

import json
from typing import Any

TEXT_NODE = "text"
HARD_BREAK_NODE = "hardBreak"
INLINE_NODES: frozenset[str] = frozenset({TEXT_NODE, HARD_BREAK_NODE, "mention", "emoji", "inlineCard"})


def _inline_text(node: dict[str, Any]) -> str:
    node_type = node.get("type")
    if node_type == TEXT_NODE:
        return str(node.get("text") or "")
    if node_type == HARD_BREAK_NODE:
        return "\n"
    attrs = node.get("attrs") or {}
    if node_type in {"mention", "emoji"}:
        return str(attrs.get("text") or "")
    if node_type == "inlineCard":
        return str(attrs.get("url") or "")
    return ""


def _walk(node: Any, blocks: list[str]) -> str:
    """Return the inline text of ``node``; completed blocks go to ``blocks``."""
    if isinstance(node, list):
        return "".join(_walk(item, blocks) for item in node)
    if not isinstance(node, dict):
        return ""
    if node.get("type") in INLINE_NODES:
        return _inline_text(node)
    content = node.get("content")
    if not isinstance(content, list):
        return ""
    inline: list[str] = []
    for child in content:
        text = _walk(child, blocks)
        if text:
            inline.append(text)
    joined = "".join(inline).strip()
    if joined:
        blocks.append(joined)
    return ""


def extract_text(body: Any) -> str:
    """Extract plain text from an ADF document, a JSON string, or plain text.

    Parameters
    ----------
    body : str, dict, list or None
        Description as returned by Jira.

    Returns
    -------
    str
        Plain text with blocks separated by newlines; "" for empty input.

    Examples
    --------
    >>> extract_text({"type": "doc", "content": [
    ...     {"type": "paragraph", "content": [{"type": "text", "text": "Hello"}]}]})
    'Hello'
    """
    if body is None:
        return ""
    if isinstance(body, str):
        stripped = body.strip()
        if stripped.startswith("{") and '"type"' in stripped:
            try:
                body = json.loads(stripped)
            except (json.JSONDecodeError, ValueError):
                return stripped
        else:
            return stripped
    if not isinstance(body, (dict, list)):
        return str(body).strip()
    blocks: list[str] = []
    trailing = _walk(body, blocks).strip()
    if trailing:
        blocks.append(trailing)
    return "\n".join(blocks)
