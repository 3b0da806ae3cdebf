"""Version map construction and doc-set resolution.

A version map pairs version keys with a label and an optional URL segment.
Exactly one entry, ``current``, has no segment: it is the live docs tree
served at the docs base route. Every other entry is a frozen snapshot stored
under ``versioned_docs/version-<key>/`` and served below its own segment.

Examples
--------
>>> versions = build_version_map(
...     {"current": {"label": "2.x"}, "1.0.18": {"label": "1.0.18", "path": "1.0.18"}}
... )
>>> [entry.key for entry in versions]
['current', '1.0.18']
"""

from __future__ import annotations

import dataclasses as dc
import typing as typ
from pathlib import Path

from .helpers import _as_mapping, _join_route, _optional_str
from .models import CURRENT_VERSION, SiteConfigError, VersionEntry, VersionMap

if typ.TYPE_CHECKING:
    from .models import DocsConfig

VERSIONED_DOCS_DIR = "versioned_docs"
VERSIONED_SIDEBARS_DIR = "versioned_sidebars"
CURRENT_DOCS_DIR = "docs"


@dc.dataclass(frozen=True, slots=True)
class DocSet:
    """A browsable documentation tree for one version."""

    version: VersionEntry
    route: str
    content_dir: Path
    sidebar_path: Path


def build_version_map(
    payload: typ.Mapping[str, typ.Any], *, last_version: str | None = None
) -> VersionMap:
    """Validate a version mapping and return it as a :class:`VersionMap`.

    Parameters
    ----------
    payload : Mapping[str, Any]
        Version key to ``{label, path}`` mapping. Keys are unique by
        construction; the YAML loader rejects duplicate keys.
    last_version : str, optional
        Version served by default; defaults to ``current``.

    Returns
    -------
    VersionMap
        Entries in declaration order.

    Raises
    ------
    SiteConfigError
        If ``current`` is missing, if the number of path-less entries is not
        exactly one, if ``current`` declares a path, if two entries share a
        path, or if ``last_version`` is not a declared key.
    """
    if not payload:
        msg = "Docs versions must declare a 'current' entry."
        raise SiteConfigError(msg)

    entries: list[VersionEntry] = []
    for raw_key, raw_entry in payload.items():
        key = str(raw_key).strip()
        data = _as_mapping(raw_entry, f"Version '{key}'")
        label = _optional_str(data.get("label")) or key
        path = _optional_str(data.get("path"))
        entries.append(VersionEntry(key=key, label=label, path=path and path.strip("/")))

    _validate_entries(entries)

    last = last_version or CURRENT_VERSION
    if last not in {entry.key for entry in entries}:
        msg = f"Last version '{last}' is not a declared docs version."
        raise SiteConfigError(msg)
    return VersionMap(entries=tuple(entries), last_version=last)


def _validate_entries(entries: list[VersionEntry]) -> None:
    """Check the single-current and unique-path invariants."""
    keys = [entry.key for entry in entries]
    if len(set(keys)) != len(keys):
        msg = f"Docs version keys must be unique, got {keys!r}."
        raise SiteConfigError(msg)

    pathless = [entry.key for entry in entries if not entry.path]
    if len(pathless) != 1:
        msg = (
            "Exactly one docs version may omit 'path' (the current version); "
            f"found {len(pathless)}: {pathless!r}."
        )
        raise SiteConfigError(msg)
    if CURRENT_VERSION not in keys:
        msg = "Docs versions must declare a 'current' entry."
        raise SiteConfigError(msg)
    if pathless[0] != CURRENT_VERSION:
        msg = (
            f"Version '{pathless[0]}' has no path; only '{CURRENT_VERSION}' "
            "may be served from the docs base."
        )
        raise SiteConfigError(msg)

    seen: set[str] = set()
    for entry in entries:
        if not entry.path:
            continue
        if entry.path in seen:
            msg = f"Docs version path '{entry.path}' is used more than once."
            raise SiteConfigError(msg)
        seen.add(entry.path)


def resolve_doc_sets(
    docs: DocsConfig, *, base_url: str = "/", site_root: Path | None = None
) -> list[DocSet]:
    """Return one :class:`DocSet` per configured version.

    Examples
    --------
    With ``route_base_path="/"`` and ``base_url="/"`` the current docs are
    served at ``/`` and a ``1.0.18`` snapshot at ``/1.0.18/``.
    """
    root = site_root or Path()
    doc_sets: list[DocSet] = []
    for entry in docs.versions:
        if entry.is_current:
            content_dir = root / CURRENT_DOCS_DIR
            sidebar = docs.sidebar_path
        else:
            content_dir = root / VERSIONED_DOCS_DIR / f"version-{entry.key}"
            sidebar = root / VERSIONED_SIDEBARS_DIR / f"version-{entry.key}-sidebars.json"
        route = _join_route(base_url, docs.route_base_path, entry.path)
        doc_sets.append(
            DocSet(
                version=entry,
                route=route,
                content_dir=content_dir,
                sidebar_path=sidebar,
            )
        )
    return doc_sets


__all__ = ["DocSet", "build_version_map", "resolve_doc_sets"]
