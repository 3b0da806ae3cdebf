"""Typed dataclasses describing the documentation site configuration tree."""

from __future__ import annotations

import dataclasses as dc
import typing as typ
from pathlib import Path  # noqa: TC003 - used for runtime type metadata

CURRENT_VERSION = "current"
BROKEN_LINK_POLICIES = ("ignore", "log", "warn", "throw")


class SiteConfigError(ValueError):
    """Raised when the site configuration is invalid or incomplete."""


@dc.dataclass(frozen=True, slots=True)
class Metadata:
    """Site identity shared by every generated page."""

    title: str
    tagline: str
    url: str
    base_url: str
    favicon: str | None = None
    organization_name: str | None = None
    project_name: str | None = None
    on_broken_links: str = "warn"
    on_broken_markdown_links: str = "warn"


@dc.dataclass(frozen=True, slots=True)
class NavbarLogo:
    """Brand image rendered at the start of the navbar."""

    alt: str
    src: str


@dc.dataclass(frozen=True, slots=True)
class DocNavItem:
    """Navbar entry pointing at a document id."""

    doc_id: str
    label: str
    position: str = "left"


@dc.dataclass(frozen=True, slots=True)
class LinkNavItem:
    """Navbar entry pointing at an internal route or an external URL."""

    label: str | None = None
    to: str | None = None
    href: str | None = None
    position: str = "left"
    class_name: str | None = None
    aria_label: str | None = None


@dc.dataclass(frozen=True, slots=True)
class DropdownNavItem:
    """Navbar entry expanding into a list of links."""

    label: str
    items: tuple[LinkNavItem, ...]
    position: str = "left"


@dc.dataclass(frozen=True, slots=True)
class VersionDropdownNavItem:
    """Navbar dropdown listing the configured documentation versions."""

    position: str = "right"
    dropdown_active_class_disabled: bool = False


NavbarItem = DocNavItem | LinkNavItem | DropdownNavItem | VersionDropdownNavItem


@dc.dataclass(frozen=True, slots=True)
class NavbarConfig:
    """Navbar logo and ordered items."""

    items: tuple[NavbarItem, ...]
    logo: NavbarLogo | None = None


@dc.dataclass(frozen=True, slots=True)
class FooterLink:
    """Footer entry: either a label/href link or a raw HTML block."""

    label: str | None = None
    href: str | None = None
    html: str | None = None


@dc.dataclass(frozen=True, slots=True)
class FooterLinkGroup:
    """Titled column of footer links."""

    title: str
    items: tuple[FooterLink, ...]


@dc.dataclass(frozen=True, slots=True)
class FooterConfig:
    """Footer link groups and the rendered copyright line."""

    links: tuple[FooterLinkGroup, ...]
    copyright: str


@dc.dataclass(frozen=True, slots=True)
class AnnouncementBar:
    """Banner displayed above the navbar."""

    id: str
    content: str
    background_color: str | None = None
    text_color: str | None = None
    is_closeable: bool = True


@dc.dataclass(frozen=True, slots=True)
class PrismConfig:
    """Code highlighting theme pair and extra languages."""

    theme: str = "github"
    dark_theme: str = "dracula"
    additional_languages: tuple[str, ...] = ()


@dc.dataclass(frozen=True, slots=True)
class AlgoliaConfig:
    """Credentials handed to the hosted search widget."""

    app_id: str
    api_key: str
    index_name: str
    contextual_search: bool = True
    search_page_path: str | None = "search"


@dc.dataclass(frozen=True, slots=True)
class ThemeConfig:
    """Theme options consumed by the site-build engine."""

    navbar: NavbarConfig
    footer: FooterConfig
    prism: PrismConfig = dc.field(default_factory=PrismConfig)
    announcement_bar: AnnouncementBar | None = None
    algolia: AlgoliaConfig | None = None
    image: str | None = None
    auto_collapse_categories: bool = False


@dc.dataclass(frozen=True, slots=True)
class VersionEntry:
    """One documentation snapshot.

    Attributes
    ----------
    key : str
        Version identifier (``"current"`` for the live docs tree).
    label : str
        Human-readable name shown in the version dropdown.
    path : str or None
        URL segment of the snapshot; ``None`` only for ``current``.
    """

    key: str
    label: str
    path: str | None = None

    @property
    def is_current(self) -> bool:
        """Return ``True`` for the live documentation tree."""
        return self.key == CURRENT_VERSION


@dc.dataclass(frozen=True, slots=True)
class VersionMap:
    """Ordered version entries with exactly one ``current`` entry."""

    entries: tuple[VersionEntry, ...]
    last_version: str = CURRENT_VERSION

    def __iter__(self) -> typ.Iterator[VersionEntry]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    @property
    def current(self) -> VersionEntry:
        """Return the entry served from the docs base path."""
        return self.get(CURRENT_VERSION)

    def get(self, key: str) -> VersionEntry:
        """Return the entry registered under ``key``."""
        for entry in self.entries:
            if entry.key == key:
                return entry
        available = ", ".join(entry.key for entry in self.entries)
        msg = f"Unknown version '{key}'. Known versions: {available}"
        raise KeyError(msg)


@dc.dataclass(frozen=True, slots=True)
class PluginEntry:
    """Reference to a registered plugin together with its own options."""

    reference: str
    options: typ.Mapping[str, typ.Any] = dc.field(default_factory=dict)


@dc.dataclass(frozen=True, slots=True)
class RemarkPluginEntry(PluginEntry):
    """Plugin entry applied to markdown sources before the general plugins."""


@dc.dataclass(frozen=True, slots=True)
class RedirectRule:
    """Map one source path onto the route that serves its content."""

    from_path: str
    to_path: str


@dc.dataclass(frozen=True, slots=True)
class DocsConfig:
    """Docs sub-configuration resolved from the preset."""

    route_base_path: str
    sidebar_path: Path
    edit_url: str
    versions: VersionMap
    remark_plugins: tuple[RemarkPluginEntry, ...] = ()

    @property
    def last_version(self) -> str:
        """Return the version served by default."""
        return self.versions.last_version

    def edit_url_for(self, relative_path: str) -> str:
        """Return the edit URL for a source file under the docs root."""
        return f"{self.edit_url.rstrip('/')}/docs/{relative_path.lstrip('/')}"


@dc.dataclass(frozen=True, slots=True)
class BlogConfig:
    """Blog sub-configuration resolved from the preset."""

    blog_title: str
    blog_description: str
    posts_per_page: int | typ.Literal["ALL"] = 10
    route_base_path: str = "blog"


@dc.dataclass(frozen=True, slots=True)
class AnalyticsConfig:
    """Tracking integration handed to an analytics provider."""

    provider: str
    tracking_id: str
    anonymize_ip: bool = False


@dc.dataclass(frozen=True, slots=True)
class PresetConfig:
    """Merged docs, blog, and analytics settings of a named preset."""

    name: str
    docs: DocsConfig
    blog: BlogConfig | None
    analytics: tuple[AnalyticsConfig, ...] = ()
    custom_css: tuple[Path, ...] = ()
    debug: bool = False


@dc.dataclass(frozen=True, slots=True)
class MarkdownConfig:
    """Markdown features toggled for the build engine."""

    mermaid: bool = False


@dc.dataclass(frozen=True, slots=True)
class SiteConfig:
    """Fully assembled, read-only site configuration."""

    metadata: Metadata
    theme: ThemeConfig
    preset: PresetConfig
    plugins: tuple[PluginEntry, ...]
    site_root: Path
    copyright_year: int
    redirects: tuple[RedirectRule, ...] = ()
    markdown: MarkdownConfig = dc.field(default_factory=MarkdownConfig)
    themes: tuple[str, ...] = ()

    @property
    def docs(self) -> DocsConfig:
        """Shortcut to the preset's docs sub-configuration."""
        return self.preset.docs


__all__ = [
    "BROKEN_LINK_POLICIES",
    "CURRENT_VERSION",
    "AlgoliaConfig",
    "AnalyticsConfig",
    "AnnouncementBar",
    "BlogConfig",
    "DocNavItem",
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
]
