"""Resolve named presets into docs, blog, and analytics sub-configurations.

A preset is a bundle of defaults. Site files select one by name and override
individual fields; :func:`merge_options` applies the override map on top of the
defaults and :func:`resolve_preset` turns the merged mapping into typed
dataclasses.

Examples
--------
>>> merge_options({"docs": {"route_base_path": "docs", "x": 1}}, {"docs": {"x": 2}})
{'docs': {'route_base_path': 'docs', 'x': 2}}
"""

from __future__ import annotations

import copy
import typing as typ
from pathlib import Path

from .helpers import _as_bool, _as_list, _as_mapping, _optional_str, _require_str
from .models import (
    AnalyticsConfig,
    BlogConfig,
    DocsConfig,
    PresetConfig,
    RemarkPluginEntry,
    SiteConfigError,
)
from .plugin_entries import _build_plugin_entries
from .versions import build_version_map

ALL_POSTS = "ALL"
ANALYTICS_PROVIDERS: dict[str, str] = {
    "google_analytics": "google-analytics",
    "gtag": "gtag",
}

PRESETS: dict[str, dict[str, typ.Any]] = {
    "classic": {
        "debug": False,
        "theme": {"custom_css": []},
        "docs": {
            "route_base_path": "docs",
            "sidebar_path": None,
            "edit_url": None,
            "last_version": "current",
            "versions": {"current": {"label": "Next"}},
            "remark_plugins": [],
        },
        "blog": {
            "blog_title": "Blog",
            "blog_description": "Blog",
            "posts_per_page": 10,
            "route_base_path": "blog",
        },
        "google_analytics": None,
        "gtag": None,
    },
}


def merge_options(
    defaults: typ.Mapping[str, typ.Any], overrides: typ.Mapping[str, typ.Any] | None
) -> dict[str, typ.Any]:
    """Return ``defaults`` with ``overrides`` applied on top.

    Nested mappings merge key by key; any other override value (including
    lists and ``None``) replaces the default outright. Neither input is
    mutated and the merge cannot fail.
    """
    merged = copy.deepcopy(dict(defaults))
    for key, value in (overrides or {}).items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = merge_options(current, value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


def resolve_preset(
    name: str,
    overrides: typ.Mapping[str, typ.Any] | None = None,
    *,
    site_root: Path | None = None,
) -> PresetConfig:
    """Merge ``overrides`` into the named preset and build its sub-configs.

    Parameters
    ----------
    name : str
        Preset identifier, for example ``"classic"``.
    overrides : Mapping[str, Any], optional
        Site-specific options; keys win over the preset defaults.
    site_root : Path, optional
        Directory against which relative paths (sidebar, custom CSS) resolve.

    Returns
    -------
    PresetConfig
        Docs, blog, and analytics settings.

    Raises
    ------
    SiteConfigError
        If the preset is unknown or the docs block lacks ``sidebar_path`` or
        ``edit_url``. A site ``versions`` map replaces the default one rather
        than merging into it, so it must declare ``current`` itself.
        Whether the sidebar file exists is checked by the build step, not
        here.
    """
    try:
        defaults = PRESETS[name]
    except KeyError as exc:
        available = ", ".join(sorted(PRESETS))
        msg = f"Unknown preset '{name}'. Known presets: {available}"
        raise SiteConfigError(msg) from exc

    root = site_root or Path()
    merged = merge_options(defaults, overrides)
    docs_overrides = (overrides or {}).get("docs")
    if isinstance(docs_overrides, dict) and "versions" in docs_overrides:
        merged["docs"]["versions"] = copy.deepcopy(docs_overrides["versions"])
    theme = _as_mapping(merged.get("theme"), "Preset theme options")
    custom_css = tuple(
        root / str(entry) for entry in _as_list(theme.get("custom_css"), "Custom CSS")
    )
    return PresetConfig(
        name=name,
        docs=_build_docs_config(_as_mapping(merged.get("docs"), "Docs options"), root),
        blog=_build_blog_config(merged.get("blog")),
        analytics=_build_analytics(merged),
        custom_css=custom_css,
        debug=_as_bool(merged.get("debug"), default=False),
    )


def _build_docs_config(data: typ.Mapping[str, typ.Any], root: Path) -> DocsConfig:
    sidebar = _require_str(data, "sidebar_path", "Docs configuration")
    edit_url = _require_str(data, "edit_url", "Docs configuration")
    versions = build_version_map(
        _as_mapping(data.get("versions"), "Docs versions"),
        last_version=_optional_str(data.get("last_version")),
    )
    return DocsConfig(
        route_base_path=_optional_str(data.get("route_base_path")) or "/",
        sidebar_path=root / sidebar,
        edit_url=edit_url,
        versions=versions,
        remark_plugins=_build_plugin_entries(
            data.get("remark_plugins"), RemarkPluginEntry
        ),
    )


def _build_blog_config(payload: object) -> BlogConfig | None:
    if payload is False or payload is None:
        return None
    data = _as_mapping(payload, "Blog options")
    per_page = data.get("posts_per_page", 10)
    if isinstance(per_page, str) and per_page.strip().upper() == ALL_POSTS:
        posts_per_page: int | typ.Literal["ALL"] = ALL_POSTS
    else:
        try:
            posts_per_page = int(per_page)
        except (TypeError, ValueError) as exc:
            msg = f"Blog 'posts_per_page' must be a number or 'ALL', got {per_page!r}."
            raise SiteConfigError(msg) from exc
        if posts_per_page < 1:
            msg = "Blog 'posts_per_page' must be positive."
            raise SiteConfigError(msg)
    return BlogConfig(
        blog_title=_require_str(data, "blog_title", "Blog configuration"),
        blog_description=_optional_str(data.get("blog_description")) or "",
        posts_per_page=posts_per_page,
        route_base_path=_optional_str(data.get("route_base_path")) or "blog",
    )


def _build_analytics(merged: typ.Mapping[str, typ.Any]) -> tuple[AnalyticsConfig, ...]:
    integrations: list[AnalyticsConfig] = []
    for key, provider in ANALYTICS_PROVIDERS.items():
        payload = merged.get(key)
        if not payload:
            continue
        data = _as_mapping(payload, f"Analytics '{key}'")
        integrations.append(
            AnalyticsConfig(
                provider=provider,
                tracking_id=_require_str(data, "tracking_id", f"Analytics '{key}'"),
                anonymize_ip=_as_bool(data.get("anonymize_ip"), default=False),
            )
        )
    return tuple(integrations)


__all__ = ["ALL_POSTS", "PRESETS", "merge_options", "resolve_preset"]
