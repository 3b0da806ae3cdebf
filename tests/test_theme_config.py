"""Tests for navbar, footer, code-highlighting, and search configuration."""

from __future__ import annotations

import typing as typ

import pytest

from conftest import FIXED_DAY, make_payload
from zio_site.config import (
    DocNavItem,
    DropdownNavItem,
    LinkNavItem,
    SiteConfigError,
    VersionDropdownNavItem,
    build_site_config,
)

if typ.TYPE_CHECKING:
    from pathlib import Path


def _theme(tmp_path: Path, theme: dict[str, typ.Any]):
    payload = make_payload()
    payload["theme"] = theme
    return build_site_config(payload, site_root=tmp_path, today=FIXED_DAY).theme


def test_navbar_items_are_tagged(tmp_path: Path) -> None:
    theme = _theme(
        tmp_path,
        {
            "navbar": {
                "logo": {"alt": "ZIO", "src": "/img/navbar_brand.png"},
                "items": [
                    {"type": "doc", "doc_id": "reference/index", "label": "Reference"},
                    {"to": "blog", "label": "Blog", "position": "right"},
                    {
                        "type": "dropdown",
                        "label": "More",
                        "items": [{"href": "https://zio.dev/faq", "label": "FAQ"}],
                    },
                    {
                        "type": "docs_version_dropdown",
                        "dropdown_active_class_disabled": True,
                    },
                    {
                        "href": "https://github.com/zio/zio",
                        "class_name": "header-github-link",
                        "aria_label": "GitHub repository",
                        "position": "right",
                    },
                ],
            }
        },
    )
    items = theme.navbar.items
    assert isinstance(items[0], DocNavItem)
    assert items[0].doc_id == "reference/index"
    assert items[0].position == "left"
    assert isinstance(items[1], LinkNavItem)
    assert items[1].to == "blog"
    assert isinstance(items[2], DropdownNavItem)
    assert items[2].items[0].href == "https://zio.dev/faq"
    assert isinstance(items[3], VersionDropdownNavItem)
    assert items[3].position == "right"
    assert items[3].dropdown_active_class_disabled is True
    assert items[4].class_name == "header-github-link"
    assert theme.navbar.logo is not None
    assert theme.navbar.logo.src == "/img/navbar_brand.png"


@pytest.mark.parametrize(
    "item",
    [
        pytest.param({"type": "doc", "label": "Missing id"}, id="doc-without-id"),
        pytest.param({"type": "dropdown", "label": "Empty"}, id="dropdown-without-items"),
        pytest.param({"type": "search"}, id="unknown-type"),
        pytest.param({"label": "Nowhere"}, id="link-without-target"),
        pytest.param({"to": "/a", "href": "https://b"}, id="link-with-two-targets"),
        pytest.param("Reference", id="not-a-mapping"),
    ],
)
def test_invalid_navbar_items(tmp_path: Path, item: object) -> None:
    with pytest.raises(SiteConfigError):
        _theme(tmp_path, {"navbar": {"items": [item]}})


def test_footer_groups_and_html_items(tmp_path: Path) -> None:
    theme = _theme(
        tmp_path,
        {
            "footer": {
                "links": [
                    {
                        "title": "Learn!",
                        "items": [{"label": "Guides", "href": "/guides"}],
                    },
                    {
                        "title": "ZIO Newsletter",
                        "items": [{"html": "<a href='https://zio.dev'>Subscribe</a>"}],
                    },
                ],
                "copyright": "Copyright © {year} ZIO Maintainers",
            }
        },
    )
    groups = theme.footer.links
    assert [group.title for group in groups] == ["Learn!", "ZIO Newsletter"]
    assert groups[0].items[0].href == "/guides"
    assert groups[1].items[0].html is not None
    assert theme.footer.copyright == "Copyright © 2024 ZIO Maintainers"


def test_footer_item_requires_label_and_href(tmp_path: Path) -> None:
    footer = {"links": [{"title": "Learn!", "items": [{"label": "Guides"}]}]}
    with pytest.raises(SiteConfigError, match="href"):
        _theme(tmp_path, {"footer": footer})


def test_prism_languages_are_checked(tmp_path: Path) -> None:
    theme = _theme(
        tmp_path,
        {"prism": {"dark_theme": "vsDark", "additional_languages": ["json", "java", "scala"]}},
    )
    assert theme.prism.theme == "github"
    assert theme.prism.dark_theme == "vsDark"
    assert theme.prism.additional_languages == ("json", "java", "scala")

    with pytest.raises(SiteConfigError, match="not-a-language"):
        _theme(tmp_path, {"prism": {"additional_languages": ["not-a-language"]}})


def test_announcement_and_search(tmp_path: Path) -> None:
    theme = _theme(
        tmp_path,
        {
            "announcement_bar": {"content": "ZIONOMICON is out", "is_closeable": False},
            "algolia": {
                "app_id": "IAX8GRSWEQ",
                "api_key": "6d38dc1ca6f0305c6e883ef79f82523d",
                "index_name": "zio",
                "search_page_path": False,
            },
            "docs": {"sidebar": {"auto_collapse_categories": True}},
        },
    )
    assert theme.announcement_bar is not None
    assert theme.announcement_bar.id == "announcement_bar"
    assert theme.announcement_bar.is_closeable is False
    assert theme.algolia is not None
    assert theme.algolia.contextual_search is True
    assert theme.algolia.search_page_path is None
    assert theme.auto_collapse_categories is True


def test_search_requires_credentials(tmp_path: Path) -> None:
    with pytest.raises(SiteConfigError, match="api_key"):
        _theme(tmp_path, {"algolia": {"app_id": "IAX8GRSWEQ", "index_name": "zio"}})
