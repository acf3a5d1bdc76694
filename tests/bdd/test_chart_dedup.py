"""Behaviour tests for content-addressed chart images.

The scenarios in ``chart_dedup.feature`` generate a small version whose two
documents embed an identical chart. They check that the chart is rasterized
once, written to a single ``charts/chart-<hash>.png`` file and linked from
each page relative to that page's own directory. A failing rasterizer must
leave the pages intact with a placeholder in place of the image.

Usage
-----
Run ``pytest tests/bdd/test_chart_dedup.py -v``. The rasterizer is a
``pytest-mock`` stub, so matplotlib is never invoked.
"""

from __future__ import annotations

import typing as typ
from pathlib import Path

import pytest
from bs4 import BeautifulSoup
from pytest_bdd import given, parsers, scenarios, then, when

from docs_html.charts import ChartRenderError
from docs_html.config import SiteConfig
from docs_html.site import build_site

from conftest import PNG_BYTES, write_json, write_version

FEATURE_FILE = Path(__file__).resolve().parents[2] / "features" / "chart_dedup.feature"
scenarios(FEATURE_FILE)

CHART_BLOCK = {
    "type": "chart",
    "chartData": {
        "type": "bar",
        "title": "Weekly runs",
        "labels": ["Mon", "Tue"],
        "datasets": [{"label": "Runs", "data": [4, 7]}],
    },
}


@pytest.fixture
def scenario_state() -> dict[str, typ.Any]:
    """Return a mutable dict used to share scenario state across BDD steps."""
    return {}


def _chart_images(site_dir: Path) -> list[Path]:
    return sorted((site_dir / "charts").glob("chart-*.png"))


def _img_src(page: Path) -> str:
    soup = BeautifulSoup(page.read_text(encoding="utf-8"), "html.parser")
    image = soup.find("img")
    assert image is not None, f"no chart image in {page}"
    return str(image["src"])


@given("a version with two documents embedding the same bar chart")
def given_chart_version(
    tmp_path: Path, mocker: typ.Any, scenario_state: dict[str, typ.Any]
) -> None:
    """Write a data root whose two standalone documents share one chart."""
    root = tmp_path / "data"
    write_json(root / "versions.json", ["1.0"])
    write_version(
        root,
        "1.0",
        docs=[
            {"id": "first", "title": "First", "content": [CHART_BLOCK]},
            {"id": "second", "title": "Second", "content": [CHART_BLOCK]},
        ],
    )
    scenario_state["config"] = SiteConfig(
        data_root=root,
        output_directory=tmp_path / "out",
        separate_build=True,
        asset_source_dirs=[],
    )
    scenario_state["rasterizer"] = mocker.Mock(return_value=PNG_BYTES)


@given("the rasterizer rejects every chart")
def given_failing_rasterizer(scenario_state: dict[str, typ.Any]) -> None:
    """Make every rasterization attempt raise."""
    scenario_state["rasterizer"].side_effect = ChartRenderError("unsupported chart")


@when("I generate the site in separate build mode")
def when_generate(scenario_state: dict[str, typ.Any]) -> None:
    """Run the generator with the stubbed rasterizer."""
    [site_dir] = build_site(
        scenario_state["config"], rasterizer=scenario_state["rasterizer"]
    )
    scenario_state["site_dir"] = site_dir


@then("the chart is rasterized exactly once")
def then_rasterized_once(scenario_state: dict[str, typ.Any]) -> None:
    """Assert the rasterizer saw a single call."""
    scenario_state["rasterizer"].assert_called_once()


@then("the version site contains one chart image")
def then_one_chart(scenario_state: dict[str, typ.Any]) -> None:
    """Assert one PNG was written under ``charts/``."""
    images = _chart_images(scenario_state["site_dir"])
    assert len(images) == 1
    assert images[0].read_bytes() == PNG_BYTES
    scenario_state["chart_name"] = images[0].name


@then(parsers.parse('the landing page links to the chart with a "{prefix}" prefix'))
def then_landing_link(scenario_state: dict[str, typ.Any], prefix: str) -> None:
    """Assert the index page references the shared chart file."""
    src = _img_src(scenario_state["site_dir"] / "index.html")
    assert src == f"{prefix}{scenario_state['chart_name']}"


@then(parsers.parse('the second document links to the chart with a "{prefix}" prefix'))
def then_document_link(scenario_state: dict[str, typ.Any], prefix: str) -> None:
    """Assert a nested document page references the shared chart file."""
    src = _img_src(scenario_state["site_dir"] / "docs" / "second" / "index.html")
    assert src == f"{prefix}{scenario_state['chart_name']}"


@then("the version site contains no chart images")
def then_no_charts(scenario_state: dict[str, typ.Any]) -> None:
    """Assert nothing was written under ``charts/``."""
    assert _chart_images(scenario_state["site_dir"]) == []


@then("every document shows the chart placeholder")
def then_placeholders(scenario_state: dict[str, typ.Any]) -> None:
    """Assert each generated document renders the chart placeholder."""
    site_dir = scenario_state["site_dir"]
    for page in ("index.html", "docs/first/index.html", "docs/second/index.html"):
        html = (site_dir / page).read_text(encoding="utf-8")
        assert "Chart preview unavailable in static export." in html
