"""Load and validate the documentation site configuration.

This subpackage parses the project's ``site.yaml`` file, resolves the selected
preset with its overrides, validates the version map and redirect rules, and
produces frozen dataclasses (:class:`SiteConfig`, :class:`DocsConfig`, etc.)
that the build step consumes. The primary entry point is
:func:`load_site_config`; :func:`build_site_config` does the same work for an
already-parsed mapping.

Examples
--------
>>> from pathlib import Path
>>> from zio_site.config import load_site_config
>>> site = load_site_config(Path("config/site.yaml"))  # doctest: +SKIP
>>> [entry.key for entry in site.docs.versions]  # doctest: +SKIP
['current', '1.0.18']
"""

from .loader import REDIRECT_PLUGIN, build_site_config, load_site_config
from .models import (
    CURRENT_VERSION,
    AlgoliaConfig,
    AnalyticsConfig,
    AnnouncementBar,
    BlogConfig,
    DocNavItem,
    DocsConfig,
    DropdownNavItem,
    FooterConfig,
    FooterLink,
    FooterLinkGroup,
    LinkNavItem,
    MarkdownConfig,
    Metadata,
    NavbarConfig,
    NavbarItem,
    NavbarLogo,
    PluginEntry,
    PresetConfig,
    PrismConfig,
    RedirectRule,
    RemarkPluginEntry,
    SiteConfig,
    SiteConfigError,
    ThemeConfig,
    VersionDropdownNavItem,
    VersionEntry,
    VersionMap,
)
from .presets import PRESETS, merge_options, resolve_preset
from .redirects import build_redirect_rules, validate_redirect_rules
from .versions import DocSet, build_version_map, resolve_doc_sets

__all__ = [
    "CURRENT_VERSION",
    "PRESETS",
    "REDIRECT_PLUGIN",
    "AlgoliaConfig",
    "AnalyticsConfig",
    "AnnouncementBar",
    "BlogConfig",
    "DocNavItem",
    "DocSet",
    "DocsConfig",
    "DropdownNavItem",
    "FooterConfig",
    "FooterLink",
    "FooterLinkGroup",
    "LinkNavItem",
    "MarkdownConfig",
    "Metadata",
    "NavbarConfig",
    "NavbarItem",
    "NavbarLogo",
    "PluginEntry",
    "PresetConfig",
    "PrismConfig",
    "RedirectRule",
    "RemarkPluginEntry",
    "SiteConfig",
    "SiteConfigError",
    "ThemeConfig",
    "VersionDropdownNavItem",
    "VersionEntry",
    "VersionMap",
    "build_redirect_rules",
    "build_site_config",
    "build_version_map",
    "load_site_config",
    "merge_options",
    "resolve_doc_sets",
    "resolve_preset",
    "validate_redirect_rules",
]
