"""Theme configuration builders: navbar, footer, banner, code themes, search."""

from __future__ import annotations

import typing as typ

from pygments.lexers import get_lexer_by_name
from pygments.util import ClassNotFound

from .helpers import (
    _as_bool,
    _as_list,
    _as_mapping,
    _optional_str,
    _render_copyright,
    _require_str,
)
from .models import (
    AlgoliaConfig,
    AnnouncementBar,
    DocNavItem,
    DropdownNavItem,
    FooterConfig,
    FooterLink,
    FooterLinkGroup,
    LinkNavItem,
    NavbarConfig,
    NavbarItem,
    NavbarLogo,
    PrismConfig,
    SiteConfigError,
    ThemeConfig,
    VersionDropdownNavItem,
)


def _build_theme_config(
    payload: typ.Mapping[str, typ.Any], *, copyright_year: int
) -> ThemeConfig:
    """Build the ThemeConfig from the ``theme`` block of the site file."""
    docs = _as_mapping(payload.get("docs"), "Theme docs options")
    sidebar = _as_mapping(docs.get("sidebar"), "Theme docs sidebar options")
    return ThemeConfig(
        navbar=_build_navbar_config(payload.get("navbar")),
        footer=_build_footer_config(payload.get("footer"), copyright_year=copyright_year),
        prism=_build_prism_config(payload.get("prism")),
        announcement_bar=_build_announcement_bar(payload.get("announcement_bar")),
        algolia=_build_algolia_config(payload.get("algolia")),
        image=_optional_str(payload.get("image")),
        auto_collapse_categories=_as_bool(
            sidebar.get("auto_collapse_categories"), default=False
        ),
    )


def _build_navbar_config(payload: object) -> NavbarConfig:
    """Build the navbar logo and ordered items."""
    data = _as_mapping(payload, "Navbar configuration")
    logo = None
    match data.get("logo"):
        case {"alt": alt, "src": src}:
            logo = NavbarLogo(alt=str(alt), src=str(src))
        case None:
            pass
        case _:
            msg = "Navbar logo requires 'alt' and 'src'."
            raise SiteConfigError(msg)
    items = tuple(
        _build_nav_item(entry) for entry in _as_list(data.get("items"), "Navbar items")
    )
    return NavbarConfig(items=items, logo=logo)


def _build_nav_item(entry: object) -> NavbarItem:
    """Build a single navbar item from its tagged mapping."""
    match entry:
        case {"type": "doc", "doc_id": doc_id, "label": label, **rest}:
            return DocNavItem(
                doc_id=str(doc_id),
                label=str(label),
                position=str(rest.get("position", "left")),
            )
        case {"type": "docs_version_dropdown", **rest}:
            return VersionDropdownNavItem(
                position=str(rest.get("position", "right")),
                dropdown_active_class_disabled=_as_bool(
                    rest.get("dropdown_active_class_disabled"), default=False
                ),
            )
        case {"type": "dropdown", "label": label, "items": items, **rest}:
            links = tuple(_build_link_item(item) for item in _as_list(items, "Dropdown"))
            return DropdownNavItem(
                label=str(label),
                items=links,
                position=str(rest.get("position", "left")),
            )
        case {"type": "doc" | "dropdown" as kind}:
            msg = f"Navbar '{kind}' item is missing required fields: {entry!r}."
            raise SiteConfigError(msg)
        case {"type": str() as kind}:
            msg = f"Unsupported navbar item type '{kind}'."
            raise SiteConfigError(msg)
        case dict():
            return _build_link_item(entry)
        case _:
            msg = f"Navbar items must be mappings, got {entry!r}."
            raise SiteConfigError(msg)


def _build_link_item(entry: object) -> LinkNavItem:
    """Build a link navbar item pointing at ``to`` or ``href``."""
    data = _as_mapping(entry, "Navbar link")
    to = _optional_str(data.get("to"))
    href = _optional_str(data.get("href"))
    if not (to or href):
        msg = "Navbar links require 'to' or 'href'."
        raise SiteConfigError(msg)
    if to and href:
        msg = "Navbar links accept only one of 'to' and 'href'."
        raise SiteConfigError(msg)
    return LinkNavItem(
        label=_optional_str(data.get("label")),
        to=to,
        href=href,
        position=str(data.get("position", "left")),
        class_name=_optional_str(data.get("class_name")),
        aria_label=_optional_str(data.get("aria_label")),
    )


def _build_footer_config(payload: object, *, copyright_year: int) -> FooterConfig:
    """Build footer link groups and render the copyright line."""
    data = _as_mapping(payload, "Footer configuration")
    groups: list[FooterLinkGroup] = []
    for group in _as_list(data.get("links"), "Footer links"):
        match group:
            case {"title": title, "items": items}:
                pass
            case _:
                msg = "Footer link groups require 'title' and 'items'."
                raise SiteConfigError(msg)
        groups.append(
            FooterLinkGroup(
                title=str(title),
                items=tuple(
                    _build_footer_link(item) for item in _as_list(items, "Footer items")
                ),
            )
        )
    template = _optional_str(data.get("copyright")) or ""
    return FooterConfig(
        links=tuple(groups),
        copyright=_render_copyright(template, copyright_year),
    )


def _build_footer_link(entry: object) -> FooterLink:
    """Build a footer link or raw HTML block."""
    match entry:
        case {"html": html}:
            return FooterLink(html=str(html).strip())
        case {"label": label, "href": href}:
            return FooterLink(label=str(label), href=str(href))
        case _:
            msg = f"Footer items require 'label' and 'href' or 'html', got {entry!r}."
            raise SiteConfigError(msg)


def _build_announcement_bar(payload: object) -> AnnouncementBar | None:
    """Build the announcement banner, if configured."""
    if payload is None:
        return None
    data = _as_mapping(payload, "Announcement bar")
    return AnnouncementBar(
        id=_optional_str(data.get("id")) or "announcement_bar",
        content=_require_str(data, "content", "Announcement bar"),
        background_color=_optional_str(data.get("background_color")),
        text_color=_optional_str(data.get("text_color")),
        is_closeable=_as_bool(data.get("is_closeable"), default=True),
    )


def _build_prism_config(payload: object) -> PrismConfig:
    """Build the code highlighting themes and check extra languages."""
    data = _as_mapping(payload, "Prism configuration")
    base = PrismConfig()
    languages = tuple(
        str(language).strip().lower()
        for language in _as_list(data.get("additional_languages"), "Prism languages")
    )
    for language in languages:
        try:
            get_lexer_by_name(language)
        except ClassNotFound as exc:
            msg = f"Unknown highlighting language '{language}'."
            raise SiteConfigError(msg) from exc
    return PrismConfig(
        theme=_optional_str(data.get("theme")) or base.theme,
        dark_theme=_optional_str(data.get("dark_theme")) or base.dark_theme,
        additional_languages=languages,
    )


def _build_algolia_config(payload: object) -> AlgoliaConfig | None:
    """Build the search provider credentials, if configured."""
    if payload is None:
        return None
    data = _as_mapping(payload, "Algolia configuration")
    search_page = data.get("search_page_path", "search")
    return AlgoliaConfig(
        app_id=_require_str(data, "app_id", "Algolia configuration"),
        api_key=_require_str(data, "api_key", "Algolia configuration"),
        index_name=_require_str(data, "index_name", "Algolia configuration"),
        contextual_search=_as_bool(data.get("contextual_search"), default=True),
        search_page_path=None if search_page is False else _optional_str(search_page),
    )


__all__ = [
    "_build_algolia_config",
    "_build_announcement_bar",
    "_build_footer_config",
    "_build_nav_item",
    "_build_navbar_config",
    "_build_prism_config",
    "_build_theme_config",
]
