"""Behaviour tests for client-side redirect pages.

The scenarios write a small site to ``tmp_path``, run the full build, and
inspect the emitted redirect page with BeautifulSoup.
"""

from __future__ import annotations

import typing as typ
from pathlib import Path

import pytest
from bs4 import BeautifulSoup
from pytest_bdd import given, parsers, scenarios, then, when

from conftest import FIXED_DAY, make_payload, write_site
from zio_site.build import SiteBuilder
from zio_site.config import SiteConfigError, build_site_config, load_site_config

FEATURE_FILE = Path(__file__).resolve().parents[2] / "features" / "client_redirects.feature"
scenarios(FEATURE_FILE)

ScenarioState = dict[str, typ.Any]


@pytest.fixture
def scenario_state() -> ScenarioState:
    payload = make_payload()
    payload["plugins"] = [["client-redirects", {"redirects": []}]]
    return {"payload": payload}


@given(parsers.parse('a site with a page at "{route}"'))
def given_page(scenario_state: ScenarioState, route: str) -> None:
    scenario_state["page"] = f"docs{route}.md"


@given(parsers.parse('a redirect from "{source}" to "{target}"'))
def given_redirect(scenario_state: ScenarioState, source: str, target: str) -> None:
    [[_, options]] = scenario_state["payload"]["plugins"]
    options["redirects"].append({"from": source, "to": target})


@when("the site is built")
def when_built(scenario_state: ScenarioState, tmp_path: Path) -> None:
    site_dir = tmp_path / "site"
    config_path = write_site(site_dir, scenario_state["payload"])
    page = site_dir / scenario_state["page"]
    page.write_text("# Contributor Guidelines\n", encoding="utf-8")
    site = load_site_config(config_path, today=FIXED_DAY)
    out_dir = tmp_path / "out"
    SiteBuilder(site, out_dir=out_dir).run()
    scenario_state["out_dir"] = out_dir


@when("the site configuration is assembled")
def when_assembled(scenario_state: ScenarioState, tmp_path: Path) -> None:
    try:
        build_site_config(scenario_state["payload"], site_root=tmp_path, today=FIXED_DAY)
    except SiteConfigError as exc:
        scenario_state["error"] = exc


@then(parsers.parse('visiting "{source}" serves a redirect to "{target}"'))
def then_redirect_page(scenario_state: ScenarioState, source: str, target: str) -> None:
    html_path = scenario_state["out_dir"] / "static" / source.strip("/") / "index.html"
    soup = BeautifulSoup(html_path.read_text(encoding="utf-8"), "html.parser")
    refresh = soup.find("meta", attrs={"http-equiv": "refresh"})
    assert refresh is not None, "Expected a meta refresh tag"
    assert refresh["content"] == f"0; url={target}"
    link = soup.select_one("body a")
    assert link is not None
    assert link["href"] == target
    canonical = soup.find("link", rel="canonical")
    assert canonical is not None
    assert canonical["href"] == f"https://zio.dev{target}"


@then(parsers.parse('the configuration is rejected mentioning "{text}"'))
def then_rejected(scenario_state: ScenarioState, text: str) -> None:
    error = scenario_state.get("error")
    assert isinstance(error, SiteConfigError), "Expected a configuration error"
    assert text in str(error)
