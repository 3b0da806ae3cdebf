"""Load the site configuration YAML into typed dataclasses."""

from __future__ import annotations

import datetime as dt  # noqa: TC003 - used for runtime type metadata
import typing as typ
from pathlib import Path
from urllib.parse import urlsplit

from ruamel.yaml import YAML

from .helpers import (
    _as_list,
    _as_mapping,
    _current_year,
    _optional_str,
    _require_str,
)
from .models import (
    BROKEN_LINK_POLICIES,
    MarkdownConfig,
    Metadata,
    PluginEntry,
    RedirectRule,
    SiteConfig,
    SiteConfigError,
)
from .plugin_entries import _build_plugin_entries
from .presets import resolve_preset
from .redirects import build_redirect_rules
from .theme import _build_theme_config

REDIRECT_PLUGIN = "client-redirects"


def load_site_config(path: Path, *, today: dt.date | None = None) -> SiteConfig:
    """Load the YAML file describing the documentation site.

    Parameters
    ----------
    path : Path
        Filesystem path to the site file (for example ``config/site.yaml``).
        Relative paths inside the file resolve against the parent of the
        directory holding it when that directory is named ``config``, and
        against the file's own directory otherwise.
    today : date, optional
        Date used for the copyright year; defaults to the current UTC date.

    Returns
    -------
    SiteConfig
        Fully assembled configuration.

    Raises
    ------
    FileNotFoundError
        If the configuration file does not exist at ``path``.
    SiteConfigError
        If required fields are missing or any sub-configuration is invalid.
    YAMLError
        If the YAML content cannot be parsed, including duplicate keys.

    Examples
    --------
    >>> from pathlib import Path
    >>> from zio_site.config import load_site_config
    >>> site = load_site_config(Path("config/site.yaml"))  # doctest: +SKIP
    >>> site.metadata.title  # doctest: +SKIP
    'ZIO'
    """
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    if not isinstance(loaded, dict):
        msg = "Top-level YAML structure must be a mapping."
        raise SiteConfigError(msg)
    parent = path.resolve().parent
    site_root = parent.parent if parent.name == "config" else parent
    return build_site_config(loaded, site_root=site_root, today=today)


def build_site_config(
    raw: typ.Mapping[str, typ.Any],
    *,
    site_root: Path,
    today: dt.date | None = None,
) -> SiteConfig:
    """Assemble a :class:`SiteConfig` from already-parsed literal data.

    Schema errors are raised here, before any plugin has a chance to run.
    Assembling the same mapping twice with the same ``today`` yields equal
    values.
    """
    year = _current_year(today)
    metadata = _build_metadata(_as_mapping(raw.get("site"), "Site metadata"))
    theme = _build_theme_config(
        _as_mapping(raw.get("theme"), "Theme configuration"), copyright_year=year
    )
    preset_raw = _as_mapping(raw.get("preset"), "Preset configuration")
    preset = resolve_preset(
        _optional_str(preset_raw.get("name")) or "classic",
        _as_mapping(preset_raw.get("options"), "Preset options"),
        site_root=site_root,
    )
    plugins = _build_plugin_entries(raw.get("plugins"))
    markdown_raw = _as_mapping(raw.get("markdown"), "Markdown options")
    return SiteConfig(
        metadata=metadata,
        theme=theme,
        preset=preset,
        plugins=plugins,
        site_root=site_root,
        copyright_year=year,
        redirects=_collect_redirects(plugins),
        markdown=MarkdownConfig(mermaid=bool(markdown_raw.get("mermaid", False))),
        themes=tuple(str(name) for name in _as_list(raw.get("themes"), "Themes")),
    )


def _build_metadata(data: typ.Mapping[str, typ.Any]) -> Metadata:
    """Build site metadata, enforcing the required identity fields."""
    title = _require_str(data, "title", "Site metadata")
    url = _require_str(data, "url", "Site metadata")
    base_url = _require_str(data, "base_url", "Site metadata")

    parts = urlsplit(url)
    if parts.scheme not in {"http", "https"} or not parts.netloc:
        msg = f"Site 'url' must be an absolute http(s) URL, got '{url}'."
        raise SiteConfigError(msg)
    if not (base_url.startswith("/") and base_url.endswith("/")):
        msg = f"Site 'base_url' must start and end with '/', got '{base_url}'."
        raise SiteConfigError(msg)

    policies = {}
    for key in ("on_broken_links", "on_broken_markdown_links"):
        policy = (_optional_str(data.get(key)) or "warn").lower()
        if policy not in BROKEN_LINK_POLICIES:
            allowed = ", ".join(BROKEN_LINK_POLICIES)
            msg = f"Site '{key}' must be one of {allowed}, got '{policy}'."
            raise SiteConfigError(msg)
        policies[key] = policy

    return Metadata(
        title=title,
        tagline=_optional_str(data.get("tagline")) or "",
        url=url.rstrip("/"),
        base_url=base_url,
        favicon=_optional_str(data.get("favicon")),
        organization_name=_optional_str(data.get("organization_name")),
        project_name=_optional_str(data.get("project_name")),
        **policies,
    )


def _collect_redirects(plugins: tuple[PluginEntry, ...]) -> tuple[RedirectRule, ...]:
    """Validate the rule sets of every redirect plugin entry."""
    rules: list[RedirectRule] = []
    for entry in plugins:
        if entry.reference == REDIRECT_PLUGIN:
            rules.extend(build_redirect_rules(entry.options.get("redirects")))
    if len(rules) > 1:
        build_redirect_rules(
            [{"from": rule.from_path, "to": rule.to_path} for rule in rules]
        )
    return tuple(rules)


__all__ = ["REDIRECT_PLUGIN", "build_site_config", "load_site_config"]
