"""Tests for the engine configuration export."""

from __future__ import annotations

import typing as typ

import msgspec.json as msgspec_json

from conftest import FIXED_DAY
from zio_site.config import build_site_config
from zio_site.export import to_engine_config, write_engine_config

if typ.TYPE_CHECKING:
    from pathlib import Path

    from zio_site.config import SiteConfig


def test_top_level_fields(site_config: SiteConfig) -> None:
    config = to_engine_config(site_config)
    assert config["title"] == "ZIO"
    assert config["url"] == "https://zio.dev"
    assert config["baseUrl"] == "/"
    assert config["onBrokenMarkdownLinks"] == "warn"
    assert config["markdown"] == {"mermaid": True}
    assert config["themes"] == ["@docusaurus/theme-mermaid"]
    assert "favicon" not in config, "Unset optional fields are omitted"


def test_preset_shape(site_config: SiteConfig) -> None:
    [[package, options]] = to_engine_config(site_config)["presets"]
    assert package == "@docusaurus/preset-classic"
    docs = options["docs"]
    assert docs["routeBasePath"] == "/"
    assert docs["sidebarPath"] == "./sidebars.js"
    assert docs["lastVersion"] == "current"
    assert docs["versions"] == {
        "current": {"label": "2.x"},
        "1.0.18": {"label": "1.0.18", "path": "1.0.18"},
    }
    assert docs["remarkPlugins"] == [
        ["blended-include-code-plugin", {"marker": "CODE_INCLUDE"}]
    ]
    assert options["blog"]["postsPerPage"] == "ALL"


def test_plugins_keep_order_and_camelize_options(site_config: SiteConfig) -> None:
    plugins = to_engine_config(site_config)["plugins"]
    assert [name for name, _ in plugins] == ["docusaurus-tailwindcss", "client-redirects"]
    assert plugins[1][1] == {
        "redirects": [{"from": "/about/about_contributing", "to": "/overview/getting-started"}]
    }


def test_theme_config(site_config: SiteConfig) -> None:
    theme = to_engine_config(site_config)["themeConfig"]
    assert theme["navbar"]["items"] == [
        {
            "type": "doc",
            "docId": "overview/getting-started",
            "label": "Overview",
            "position": "left",
        },
        {
            "type": "docsVersionDropdown",
            "position": "right",
            "dropdownActiveClassDisabled": False,
        },
    ]
    assert theme["footer"]["copyright"] == "Copyright © 2024 ZIO Maintainers"
    assert theme["prism"]["theme"] == "github"


def test_analytics_and_disabled_blog(site_payload: dict[str, typ.Any], tmp_path: Path) -> None:
    options = site_payload["preset"]["options"]
    options["blog"] = False
    options["gtag"] = {"tracking_id": "G-SH0HNKLNRT", "anonymize_ip": True}
    site = build_site_config(site_payload, site_root=tmp_path, today=FIXED_DAY)
    [[_, preset]] = to_engine_config(site)["presets"]
    assert preset["blog"] is False
    assert preset["gtag"] == {"trackingID": "G-SH0HNKLNRT", "anonymizeIP": True}


def test_write_engine_config(site_config: SiteConfig, tmp_path: Path) -> None:
    target = write_engine_config(site_config, tmp_path / "out" / "docusaurus.config.json")
    raw = target.read_bytes()
    assert raw.endswith(b"\n")
    assert raw.startswith(b'{\n  "title"'), "Expected two-space indentation"
    assert msgspec_json.decode(raw) == to_engine_config(site_config)
