"""Tests for preset resolution and option merging."""

from __future__ import annotations

import copy
from pathlib import Path

import pytest

from zio_site.config import PRESETS, SiteConfigError, merge_options, resolve_preset

DOCS = {
    "sidebar_path": "sidebars.js",
    "edit_url": "https://github.com/zio/zio/edit/series/2.x",
}


def test_merge_is_deep_for_mappings_only() -> None:
    defaults = {"docs": {"route_base_path": "docs", "remark_plugins": ["a"]}, "debug": False}
    overrides = {"docs": {"remark_plugins": ["b"]}, "debug": True}
    merged = merge_options(defaults, overrides)
    assert merged == {"docs": {"route_base_path": "docs", "remark_plugins": ["b"]}, "debug": True}


def test_merge_does_not_mutate_inputs() -> None:
    defaults = copy.deepcopy(PRESETS["classic"])
    overrides = {"docs": {"versions": {"1.0.18": {"path": "1.0.18"}}}}
    merged = merge_options(PRESETS["classic"], overrides)
    merged["docs"]["versions"]["current"]["label"] = "changed"
    assert PRESETS["classic"] == defaults, "Preset defaults must stay untouched"
    assert overrides == {"docs": {"versions": {"1.0.18": {"path": "1.0.18"}}}}


def test_classic_preset_applies_defaults() -> None:
    preset = resolve_preset("classic", {"docs": DOCS}, site_root=Path("site"))
    assert preset.name == "classic"
    assert preset.docs.route_base_path == "docs"
    assert preset.docs.sidebar_path == Path("site/sidebars.js")
    assert [entry.label for entry in preset.docs.versions] == ["Next"]
    assert preset.blog is not None
    assert preset.blog.posts_per_page == 10
    assert preset.analytics == ()
    assert preset.debug is False


def test_overrides_win_over_defaults() -> None:
    overrides = {
        "debug": True,
        "theme": {"custom_css": ["src/css/custom.css"]},
        "docs": {**DOCS, "route_base_path": "/", "versions": {"current": {"label": "2.x"}}},
        "blog": {"blog_title": "ZIO Blog", "posts_per_page": "ALL"},
        "google_analytics": {"tracking_id": "UA-237088290-2", "anonymize_ip": True},
        "gtag": {"tracking_id": "G-SH0HNKLNRT", "anonymize_ip": True},
    }
    preset = resolve_preset("classic", overrides, site_root=Path("site"))
    assert preset.debug is True
    assert preset.custom_css == (Path("site/src/css/custom.css"),)
    assert preset.docs.route_base_path == "/"
    assert preset.docs.versions.current.label == "2.x"
    assert preset.blog is not None
    assert preset.blog.posts_per_page == "ALL"
    assert preset.blog.blog_title == "ZIO Blog"
    assert [(item.provider, item.tracking_id) for item in preset.analytics] == [
        ("google-analytics", "UA-237088290-2"),
        ("gtag", "G-SH0HNKLNRT"),
    ]
    assert all(item.anonymize_ip for item in preset.analytics)


@pytest.mark.parametrize("missing", ["sidebar_path", "edit_url"])
def test_docs_requires_sidebar_and_edit_url(missing: str) -> None:
    docs = {key: value for key, value in DOCS.items() if key != missing}
    with pytest.raises(SiteConfigError, match=missing):
        resolve_preset("classic", {"docs": docs})


def test_site_versions_replace_the_default_map() -> None:
    docs = {**DOCS, "versions": {"current": {"label": "2.x"}, "1.0.18": {"path": "1.0.18"}}}
    preset = resolve_preset("classic", {"docs": docs})
    assert [entry.key for entry in preset.docs.versions] == ["current", "1.0.18"]
    assert preset.docs.versions.current.label == "2.x"


def test_site_versions_without_current_are_rejected() -> None:
    docs = {**DOCS, "versions": {"2.x": {"label": "2.x", "path": "2.x"}}}
    with pytest.raises(SiteConfigError, match="current"):
        resolve_preset("classic", {"docs": docs})


def test_unknown_preset() -> None:
    with pytest.raises(SiteConfigError, match="classic"):
        resolve_preset("fancy", {"docs": DOCS})


@pytest.mark.parametrize("blog", [False, None])
def test_blog_can_be_disabled(blog: object) -> None:
    preset = resolve_preset("classic", {"docs": DOCS, "blog": blog})
    assert preset.blog is None


@pytest.mark.parametrize("per_page", ["many", 0, -3])
def test_invalid_posts_per_page(per_page: object) -> None:
    with pytest.raises(SiteConfigError, match="posts_per_page"):
        resolve_preset("classic", {"docs": DOCS, "blog": {"posts_per_page": per_page}})


def test_remark_plugins_keep_order() -> None:
    docs = {
        **DOCS,
        "remark_plugins": [
            ["blended-include-code-plugin", {"marker": "CODE_INCLUDE"}],
            ["remark-kroki-plugin", {"lang": "kroki"}],
        ],
    }
    preset = resolve_preset("classic", {"docs": docs})
    assert [entry.reference for entry in preset.docs.remark_plugins] == [
        "blended-include-code-plugin",
        "remark-kroki-plugin",
    ]
    assert preset.docs.remark_plugins[0].options["marker"] == "CODE_INCLUDE"
