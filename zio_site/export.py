"""Serialise a :class:`SiteConfig` into the site-build engine's format.

The engine consumes a camelCase configuration object shaped like
``docusaurus.config.js``. :func:`to_engine_config` produces that structure as
plain dictionaries and :func:`write_engine_config` writes it as indented JSON.

Example
-------
>>> from zio_site.config import load_site_config
>>> site = load_site_config(Path("config/site.yaml"))  # doctest: +SKIP
>>> to_engine_config(site)["baseUrl"]  # doctest: +SKIP
'/'
"""

from __future__ import annotations

import typing as typ
from pathlib import Path

import msgspec.json as msgspec_json

from .config import (
    DocNavItem,
    DropdownNavItem,
    LinkNavItem,
    VersionDropdownNavItem,
)

if typ.TYPE_CHECKING:
    from .config import (
        FooterConfig,
        NavbarItem,
        PluginEntry,
        PresetConfig,
        SiteConfig,
        ThemeConfig,
    )

PRESET_PACKAGES = {"classic": "@docusaurus/preset-classic"}
ANALYTICS_KEYS = {"google-analytics": "googleAnalytics", "gtag": "gtag"}


def to_engine_config(site: SiteConfig) -> dict[str, typ.Any]:
    """Return the engine configuration mapping for ``site``."""
    metadata = site.metadata
    config: dict[str, typ.Any] = {
        "title": metadata.title,
        "tagline": metadata.tagline,
        "url": metadata.url,
        "baseUrl": metadata.base_url,
        "onBrokenLinks": metadata.on_broken_links,
        "onBrokenMarkdownLinks": metadata.on_broken_markdown_links,
        "favicon": metadata.favicon,
        "organizationName": metadata.organization_name,
        "projectName": metadata.project_name,
        "themeConfig": _theme(site.theme),
        "presets": [_preset(site.preset, site.site_root)],
        "plugins": [_plugin(entry) for entry in site.plugins],
        "markdown": {"mermaid": site.markdown.mermaid},
        "themes": list(site.themes),
    }
    return _drop_none(config)


def write_engine_config(site: SiteConfig, path: Path) -> Path:
    """Write the engine configuration as indented JSON and return ``path``."""
    payload = msgspec_json.format(msgspec_json.encode(to_engine_config(site)), indent=2)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(payload + b"\n")
    return path


def _theme(theme: ThemeConfig) -> dict[str, typ.Any]:
    result: dict[str, typ.Any] = {
        "image": theme.image,
        "docs": {"sidebar": {"autoCollapseCategories": theme.auto_collapse_categories}},
        "prism": {
            "theme": theme.prism.theme,
            "darkTheme": theme.prism.dark_theme,
            "additionalLanguages": list(theme.prism.additional_languages),
        },
        "navbar": {
            "logo": (
                {"alt": theme.navbar.logo.alt, "src": theme.navbar.logo.src}
                if theme.navbar.logo
                else None
            ),
            "items": [_nav_item(item) for item in theme.navbar.items],
        },
        "footer": _footer(theme.footer),
    }
    if theme.announcement_bar:
        bar = theme.announcement_bar
        result["announcementBar"] = {
            "id": bar.id,
            "content": bar.content,
            "backgroundColor": bar.background_color,
            "textColor": bar.text_color,
            "isCloseable": bar.is_closeable,
        }
    if theme.algolia:
        search = theme.algolia
        result["algolia"] = {
            "appId": search.app_id,
            "apiKey": search.api_key,
            "indexName": search.index_name,
            "contextualSearch": search.contextual_search,
            "searchPagePath": search.search_page_path or False,
        }
    return result


def _nav_item(item: NavbarItem) -> dict[str, typ.Any]:
    match item:
        case DocNavItem():
            return {
                "type": "doc",
                "docId": item.doc_id,
                "label": item.label,
                "position": item.position,
            }
        case VersionDropdownNavItem():
            return {
                "type": "docsVersionDropdown",
                "position": item.position,
                "dropdownActiveClassDisabled": item.dropdown_active_class_disabled,
            }
        case DropdownNavItem():
            return {
                "type": "dropdown",
                "label": item.label,
                "position": item.position,
                "items": [_nav_item(link) for link in item.items],
            }
        case LinkNavItem():
            return {
                "label": item.label,
                "to": item.to,
                "href": item.href,
                "position": item.position,
                "className": item.class_name,
                "aria-label": item.aria_label,
            }
    msg = f"Unsupported navbar item {item!r}"
    raise TypeError(msg)


def _footer(footer: FooterConfig) -> dict[str, typ.Any]:
    return {
        "links": [
            {
                "title": group.title,
                "items": [
                    {"html": link.html}
                    if link.html
                    else {"label": link.label, "href": link.href}
                    for link in group.items
                ],
            }
            for group in footer.links
        ],
        "copyright": footer.copyright,
    }


def _preset(preset: PresetConfig, site_root: Path) -> list[typ.Any]:
    docs = preset.docs
    options: dict[str, typ.Any] = {
        "debug": preset.debug,
        "theme": {"customCss": [_relative(path, site_root) for path in preset.custom_css]},
        "docs": {
            "routeBasePath": docs.route_base_path,
            "sidebarPath": _relative(docs.sidebar_path, site_root),
            "editUrl": docs.edit_url,
            "lastVersion": docs.last_version,
            "versions": {
                entry.key: {"label": entry.label, "path": entry.path}
                for entry in docs.versions
            },
            "remarkPlugins": [_plugin(entry) for entry in docs.remark_plugins],
        },
        "blog": (
            {
                "blogTitle": preset.blog.blog_title,
                "blogDescription": preset.blog.blog_description,
                "postsPerPage": preset.blog.posts_per_page,
                "routeBasePath": preset.blog.route_base_path,
            }
            if preset.blog
            else False
        ),
    }
    for integration in preset.analytics:
        options[ANALYTICS_KEYS[integration.provider]] = {
            "trackingID": integration.tracking_id,
            "anonymizeIP": integration.anonymize_ip,
        }
    return [PRESET_PACKAGES.get(preset.name, preset.name), options]


def _plugin(entry: PluginEntry) -> list[typ.Any]:
    return [entry.reference, _camelize(dict(entry.options))]


def _camelize(value: typ.Any) -> typ.Any:
    """Convert snake_case mapping keys to camelCase, recursively."""
    match value:
        case dict():
            return {_camel_key(str(key)): _camelize(item) for key, item in value.items()}
        case list() | tuple():
            return [_camelize(item) for item in value]
        case _:
            return value


def _camel_key(key: str) -> str:
    head, *rest = key.split("_")
    return head + "".join(part[:1].upper() + part[1:] for part in rest)


def _relative(path: Path, root: Path) -> str:
    try:
        return f"./{path.relative_to(root).as_posix()}"
    except ValueError:
        return path.as_posix()


def _drop_none(value: typ.Any) -> typ.Any:
    """Remove ``None`` values from nested mappings."""
    match value:
        case dict():
            return {key: _drop_none(item) for key, item in value.items() if item is not None}
        case list():
            return [_drop_none(item) for item in value]
        case _:
            return value


__all__ = ["to_engine_config", "write_engine_config"]
