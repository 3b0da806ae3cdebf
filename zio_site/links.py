"""Detect relative markdown links that do not resolve to a known page."""

from __future__ import annotations

import logging
import posixpath
import re
import typing as typ
from urllib.parse import urlsplit

if typ.TYPE_CHECKING:
    from .plugins.base import BuildContext, Document

LINK_PATTERN = re.compile(r"(?<!!)\[[^\]]*\]\(([^)\s]+)(?:\s+\"[^\"]*\")?\)")
FENCE_PATTERN = re.compile(r"^\s*(`{3,}|~{3,})")

logger = logging.getLogger(__name__)


class BrokenLinkError(RuntimeError):
    """Raised when broken markdown links are found and the policy is ``throw``."""


def _link_targets(markdown_text: str) -> list[str]:
    """Return link targets outside fenced code blocks."""
    targets: list[str] = []
    fence: str | None = None
    for line in markdown_text.splitlines():
        fence_match = FENCE_PATTERN.match(line)
        if fence_match:
            marker = fence_match.group(1)
            if fence is None:
                fence = marker
            elif marker[0] == fence[0]:
                fence = None
            continue
        if fence is None:
            targets.extend(match.group(1) for match in LINK_PATTERN.finditer(line))
    return targets


def _resolve_markdown_link(document: Document, target: str) -> str | None:
    """Return the source path a relative ``.md`` link points at, or None to skip it."""
    lower = target.lower()
    if lower.startswith(("http://", "https://", "mailto:", "tel:", "data:", "javascript:")):
        return None
    if target.startswith(("#", "/")) or ":://" in target:
        return None
    parsed = urlsplit(target)
    if parsed.scheme or parsed.netloc or not parsed.path.endswith((".md", ".mdx")):
        return None
    base_dir = posixpath.dirname(document.source_path)
    return posixpath.normpath(posixpath.join(base_dir, parsed.path))


def find_broken_links(context: BuildContext) -> list[tuple[str, str]]:
    """Return ``(route, target)`` pairs for markdown links with no page."""
    known = {document.source_path for document in context.documents.values()}
    broken: list[tuple[str, str]] = []
    for document in context.documents.values():
        for target in _link_targets(document.content):
            source = _resolve_markdown_link(document, target)
            if source is not None and source not in known:
                broken.append((document.route, target))
    return broken


def report_broken_links(context: BuildContext, policy: str) -> list[tuple[str, str]]:
    """Apply the broken-link ``policy`` (ignore, log, warn, throw)."""
    if policy == "ignore":
        return []
    broken = find_broken_links(context)
    if not broken:
        return broken
    lines = [f"{route} -> {target}" for route, target in broken]
    if policy == "throw":
        msg = "Broken markdown links:\n" + "\n".join(lines)
        raise BrokenLinkError(msg)
    level = logging.WARNING if policy == "warn" else logging.INFO
    for line in lines:
        logger.log(level, "broken markdown link %s", line)
    return broken


__all__ = ["BrokenLinkError", "find_broken_links", "report_broken_links"]
