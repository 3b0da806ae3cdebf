"""Shared fixtures for the zio_site test-suite.

The helpers build a small but complete documentation site on disk: a
``config/site.yaml`` file, the sidebar files for both docs versions, a few
markdown pages, and a source file for code inclusion. Tests that need a
different configuration mutate the ``site_payload`` fixture before writing it
with :func:`write_site`.
"""

from __future__ import annotations

import datetime as dt
import typing as typ
from pathlib import Path

import pytest
from ruamel.yaml import YAML

from zio_site.config import SiteConfig, build_site_config

FIXED_DAY = dt.date(2024, 5, 17)
EDIT_URL = "https://github.com/zio/zio/edit/series/2.x"


def make_payload() -> dict[str, typ.Any]:
    """Return a fresh raw site mapping shaped like ``config/site.yaml``."""
    return {
        "site": {
            "title": "ZIO",
            "tagline": "Type-safe, composable asynchronous programming for Scala",
            "url": "https://zio.dev",
            "base_url": "/",
            "on_broken_markdown_links": "warn",
        },
        "theme": {
            "navbar": {
                "items": [
                    {"type": "doc", "doc_id": "overview/getting-started", "label": "Overview"},
                    {"type": "docs_version_dropdown", "position": "right"},
                ]
            },
            "footer": {"copyright": "Copyright © {year} ZIO Maintainers"},
        },
        "preset": {
            "name": "classic",
            "options": {
                "docs": {
                    "route_base_path": "/",
                    "sidebar_path": "sidebars.js",
                    "edit_url": EDIT_URL,
                    "versions": {
                        "current": {"label": "2.x"},
                        "1.0.18": {"label": "1.0.18", "path": "1.0.18"},
                    },
                    "remark_plugins": [
                        ["blended-include-code-plugin", {"marker": "CODE_INCLUDE"}]
                    ],
                },
                "blog": {"blog_title": "ZIO Blog", "posts_per_page": "ALL"},
            },
        },
        "plugins": [
            "docusaurus-tailwindcss",
            {
                "plugin": "client-redirects",
                "options": {
                    "redirects": [
                        {
                            "from": "/about/about_contributing",
                            "to": "/overview/getting-started",
                        }
                    ]
                },
            },
        ],
        "markdown": {"mermaid": True},
        "themes": ["@docusaurus/theme-mermaid"],
    }


def write_site(root: Path, payload: typ.Mapping[str, typ.Any]) -> Path:
    """Write a documentation site below ``root`` and return its config path."""
    files = {
        "sidebars.js": "module.exports = {};\n",
        "versioned_sidebars/version-1.0.18-sidebars.json": "{}\n",
        "docs/index.md": "# ZIO\n\nStart with the [overview](overview/getting-started.md).\n",
        "docs/overview/getting-started.md": (
            "# Getting Started\n\n"
            'CODE_INCLUDE file="../examples/Main.scala" doctag="main"\n\n'
            "Back to the [introduction](../index.md).\n"
        ),
        "docs/_partials/snippet.md": "Not a page.\n",
        "versioned_docs/version-1.0.18/index.md": "# ZIO 1.x\n",
        "examples/Main.scala": (
            "object Main extends ZIOAppDefault {\n"
            "  // doctag<main>\n"
            '  val run = Console.printLine("Hello")\n'
            "  // doctag<main>\n"
            "}\n"
        ),
    }
    for relative, content in files.items():
        target = root / relative
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8")

    config_path = root / "config" / "site.yaml"
    config_path.parent.mkdir(parents=True, exist_ok=True)
    yaml = YAML(typ="safe")
    yaml.default_flow_style = False
    yaml.sort_base_mapping_type_on_output = False
    with config_path.open("w", encoding="utf-8") as handle:
        yaml.dump(dict(payload), handle)
    return config_path


@pytest.fixture
def site_payload() -> dict[str, typ.Any]:
    """Provide a mutable copy of the default raw site mapping."""
    return make_payload()


@pytest.fixture
def site_config(tmp_path: Path, site_payload: dict[str, typ.Any]) -> SiteConfig:
    """Assemble the payload against an empty site root."""
    return build_site_config(site_payload, site_root=tmp_path, today=FIXED_DAY)


@pytest.fixture
def site_root(tmp_path: Path, site_payload: dict[str, typ.Any]) -> Path:
    """Write the full site tree and return its root directory."""
    write_site(tmp_path, site_payload)
    return tmp_path
