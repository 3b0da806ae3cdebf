"""Tests for assembling ``site.yaml`` into a :class:`SiteConfig`.

These cover determinism of assembly, the generated copyright year, the
required identity fields, and the parsing of plugin entries in each of the
accepted YAML shapes.
"""

from __future__ import annotations

import datetime as dt
import typing as typ

import pytest

from conftest import FIXED_DAY, make_payload, write_site
from zio_site.config import (
    PluginEntry,
    SiteConfigError,
    build_site_config,
    load_site_config,
)

if typ.TYPE_CHECKING:
    from pathlib import Path


def test_assembly_is_deterministic(tmp_path: Path) -> None:
    """Assembling the same literal data twice yields equal configurations."""
    first = build_site_config(make_payload(), site_root=tmp_path, today=FIXED_DAY)
    second = build_site_config(make_payload(), site_root=tmp_path, today=FIXED_DAY)
    assert first == second, "Expected identical input to produce equal configs"


def test_copyright_uses_current_year(tmp_path: Path) -> None:
    """The footer copyright carries the year of the assembly date."""
    site = build_site_config(make_payload(), site_root=tmp_path, today=dt.date(2031, 1, 2))
    assert site.copyright_year == 2031
    assert site.theme.footer.copyright == "Copyright © 2031 ZIO Maintainers"


def test_copyright_defaults_to_today(tmp_path: Path) -> None:
    site = build_site_config(make_payload(), site_root=tmp_path)
    assert site.copyright_year == dt.date.today().year


@pytest.mark.parametrize("field", ["title", "url", "base_url"])
def test_missing_identity_field_is_rejected(tmp_path: Path, field: str) -> None:
    payload = make_payload()
    del payload["site"][field]
    with pytest.raises(SiteConfigError, match=field):
        build_site_config(payload, site_root=tmp_path, today=FIXED_DAY)


@pytest.mark.parametrize(
    ("field", "value"),
    [
        ("url", "zio.dev"),
        ("url", "ftp://zio.dev"),
        ("base_url", "docs/"),
        ("base_url", "/docs"),
        ("on_broken_links", "explode"),
    ],
)
def test_invalid_metadata_is_rejected(tmp_path: Path, field: str, value: str) -> None:
    payload = make_payload()
    payload["site"][field] = value
    with pytest.raises(SiteConfigError):
        build_site_config(payload, site_root=tmp_path, today=FIXED_DAY)


def test_url_trailing_slash_is_dropped(site_payload: dict[str, typ.Any], tmp_path: Path) -> None:
    site_payload["site"]["url"] = "https://zio.dev/"
    site = build_site_config(site_payload, site_root=tmp_path, today=FIXED_DAY)
    assert site.metadata.url == "https://zio.dev"


def test_plugins_keep_declaration_order(site_config) -> None:
    references = [entry.reference for entry in site_config.plugins]
    assert references == ["docusaurus-tailwindcss", "client-redirects"]


def test_plugin_entry_shapes(tmp_path: Path) -> None:
    """Bare names, one- and two-element lists, and tagged mappings all parse."""
    payload = make_payload()
    payload["plugins"] = [
        "alpha",
        ["beta"],
        ["gamma", {"level": 2}],
        {"plugin": "delta", "options": {"flag": True}},
    ]
    site = build_site_config(payload, site_root=tmp_path, today=FIXED_DAY)
    assert [(entry.reference, dict(entry.options)) for entry in site.plugins] == [
        ("alpha", {}),
        ("beta", {}),
        ("gamma", {"level": 2}),
        ("delta", {"flag": True}),
    ]


def test_plugin_options_are_read_only(site_config) -> None:
    entry: PluginEntry = site_config.plugins[1]
    with pytest.raises(TypeError):
        entry.options["redirects"] = []  # type: ignore[index]


@pytest.mark.parametrize("entry", [42, ["a", {}, "extra"], {"options": {}}, ""])
def test_malformed_plugin_entry_is_rejected(tmp_path: Path, entry: object) -> None:
    payload = make_payload()
    payload["plugins"] = [entry]
    with pytest.raises(SiteConfigError):
        build_site_config(payload, site_root=tmp_path, today=FIXED_DAY)


def test_redirects_are_collected_from_plugin(site_config) -> None:
    assert [(rule.from_path, rule.to_path) for rule in site_config.redirects] == [
        ("/about/about_contributing", "/overview/getting-started")
    ]


def test_duplicate_redirect_sources_across_entries(tmp_path: Path) -> None:
    payload = make_payload()
    rule = {"from": "/old", "to": "/new"}
    payload["plugins"] = [
        ["client-redirects", {"redirects": [rule]}],
        ["client-redirects", {"redirects": [rule]}],
    ]
    with pytest.raises(SiteConfigError, match="/old"):
        build_site_config(payload, site_root=tmp_path, today=FIXED_DAY)


def test_load_resolves_site_root_above_config_dir(tmp_path: Path) -> None:
    config_path = write_site(tmp_path, make_payload())
    site = load_site_config(config_path, today=FIXED_DAY)
    assert site.site_root == tmp_path.resolve()
    assert site.docs.sidebar_path == tmp_path.resolve() / "sidebars.js"


def test_load_matches_build(tmp_path: Path) -> None:
    config_path = write_site(tmp_path, make_payload())
    loaded = load_site_config(config_path, today=FIXED_DAY)
    built = build_site_config(make_payload(), site_root=tmp_path.resolve(), today=FIXED_DAY)
    assert loaded == built


def test_load_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_site_config(tmp_path / "missing.yaml")


def test_load_rejects_non_mapping(tmp_path: Path) -> None:
    path = tmp_path / "site.yaml"
    path.write_text("- just\n- a list\n", encoding="utf-8")
    with pytest.raises(SiteConfigError, match="mapping"):
        load_site_config(path)


def test_markdown_and_themes(site_config) -> None:
    assert site_config.markdown.mermaid is True
    assert site_config.themes == ("@docusaurus/theme-mermaid",)
