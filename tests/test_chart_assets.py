"""Tests for chart sizing, rasterization and content-addressed chart files."""

from __future__ import annotations

import logging
import typing as typ

import pytest

from docs_html.charts import (
    ChartAssetManager,
    ChartRenderError,
    hash_chart_input,
    parse_css_color,
    render_chart_png,
    resolve_chart_dimensions,
    resolve_chart_render_height,
    resolve_chart_render_width,
)
from docs_html.config import Theme
from docs_html.content import Block

if typ.TYPE_CHECKING:
    from pathlib import Path

PNG_BYTES = b"\x89PNG\r\n\x1a\nchart"

BAR = {"type": "bar", "labels": ["a", "b"], "datasets": [{"label": "n", "data": [1, 2]}]}


def _chart(data: dict[str, typ.Any]) -> Block:
    return Block.from_mapping({"type": "chart", "chartData": data})


@pytest.mark.parametrize(
    ("scale", "expected"),
    [(None, 896), (1, 896), (0.5, 448), (0.1, 360), ("wide", 896), (True, 896), (3, 896)],
)
def test_render_width(scale: object, expected: int) -> None:
    assert resolve_chart_render_width(scale) == expected


def test_render_height_rules() -> None:
    assert resolve_chart_render_height("bar", 896) == 504
    assert resolve_chart_render_height("line", 360) == 203
    assert resolve_chart_render_height("radar", 500) == 500
    assert resolve_chart_dimensions({"type": "polarArea"}, 2000) == (896, 896)


def test_parse_css_color() -> None:
    assert parse_css_color("rgba(255, 0, 0, 0.5)") == pytest.approx((1.0, 0.0, 0.0, 0.5))
    assert parse_css_color("#00ff00") == pytest.approx((0.0, 1.0, 0.0, 1.0))
    assert parse_css_color("not-a-colour", "#000000") == pytest.approx((0, 0, 0, 1))


def test_parse_css_color_translates_css_fallbacks() -> None:
    assert parse_css_color(None, "rgba(0,0,0,0.05)") == pytest.approx((0, 0, 0, 0.05))
    assert parse_css_color("hsl(0, 0%, 90%)", "rgb(255, 255, 255)") == pytest.approx(
        (1, 1, 1, 1)
    )
    assert parse_css_color("bogus", "also-bogus") == pytest.approx((0, 0, 0, 1))


@pytest.mark.parametrize(
    "chart_theme",
    [{}, {"gridLineColor": "hsl(0, 0%, 90%)", "axisTickColor": "hsl(0, 0%, 30%)"}],
)
def test_render_chart_png_with_default_theme_colours(
    chart_theme: dict[str, str],
) -> None:
    png = render_chart_png(BAR, 360, 203, chart_theme)
    assert png.startswith(b"\x89PNG")


def test_empty_theme_materializes_charts(tmp_path: Path) -> None:
    manager = ChartAssetManager(Theme(), tmp_path, version_label="1.0")
    manager.prepare_content([_chart(BAR)], source="intro")
    [asset] = manager.list_assets()
    assert (tmp_path / asset).read_bytes().startswith(b"\x89PNG")


def test_hash_is_order_independent() -> None:
    first = hash_chart_input({"a": 1, "b": [1, 2]}, {"legend": "x"}, 448, 252)
    second = hash_chart_input({"b": [1, 2], "a": 1}, {"legend": "x"}, 448, 252)
    assert first == second
    assert first != hash_chart_input({"a": 1, "b": [1, 2]}, {"legend": "x"}, 449, 252)
    assert len(first) == 40


def test_repeated_specs_rasterize_once(tmp_path: Path, mocker: typ.Any) -> None:
    rasterizer = mocker.Mock(return_value=PNG_BYTES)
    manager = ChartAssetManager(Theme(), tmp_path, rasterizer=rasterizer)
    manager.prepare_content([_chart(BAR), _chart(dict(BAR))], source="doc")
    manager.prepare_content([_chart(BAR)], source="other")

    rasterizer.assert_called_once()
    _spec, width, height, _theme = rasterizer.call_args.args
    assert (width, height) == (896, 504)
    assets = manager.list_assets()
    assert len(assets) == 1
    assert assets[0].startswith("charts/chart-")
    assert (tmp_path / assets[0]).read_bytes() == PNG_BYTES


def test_get_asset_href_relative_to_page(tmp_path: Path, mocker: typ.Any) -> None:
    manager = ChartAssetManager(
        Theme(), tmp_path, rasterizer=mocker.Mock(return_value=PNG_BYTES)
    )
    spec = {**BAR, "scale": 0.5}
    manager.prepare_content([_chart(spec)])

    from_index = manager.get_asset_href(spec, tmp_path, 448)
    from_doc = manager.get_asset_href(spec, tmp_path / "docs" / "intro", 448)
    assert from_index is not None
    assert from_doc is not None
    assert from_index.src.startswith("./charts/chart-")
    assert from_doc.src.startswith("../../charts/chart-")
    assert (from_doc.width, from_doc.height) == (448, 252)


def test_get_asset_href_miss(tmp_path: Path) -> None:
    manager = ChartAssetManager(Theme(), tmp_path, rasterizer=lambda *_: PNG_BYTES)
    assert manager.get_asset_href(BAR, tmp_path, 896) is None


def test_theme_changes_the_hash(tmp_path: Path) -> None:
    plain = ChartAssetManager(Theme(), tmp_path, rasterizer=lambda *_: PNG_BYTES)
    themed = ChartAssetManager(
        Theme({"chart": {"legendLabelColor": "#fff"}}),
        tmp_path,
        rasterizer=lambda *_: PNG_BYTES,
    )
    plain.prepare_content([_chart(BAR)])
    themed.prepare_content([_chart(BAR)])
    assert plain.list_assets() != themed.list_assets()


def test_rasterization_failure_is_logged(
    tmp_path: Path, mocker: typ.Any, caplog: pytest.LogCaptureFixture
) -> None:
    rasterizer = mocker.Mock(side_effect=ChartRenderError("boom"))
    manager = ChartAssetManager(
        Theme(), tmp_path, rasterizer=rasterizer, version_label="1.0"
    )
    with caplog.at_level(logging.WARNING):
        manager.prepare_content([_chart(BAR)], source="intro")
    assert manager.list_assets() == []
    assert "intro" in caplog.text
    assert "1.0" in caplog.text


@pytest.mark.parametrize(
    "chart_type",
    ["bar", "line", "pie", "doughnut", "radar", "polarArea", "scatter", "bubble"],
)
def test_render_chart_png_produces_png(chart_type: str) -> None:
    spec = {
        "type": chart_type,
        "labels": ["a", "b", "c"],
        "datasets": [
            {
                "label": "series",
                "data": [1, 2, 3]
                if chart_type not in {"scatter", "bubble"}
                else [{"x": 1, "y": 2, "r": 4}, {"x": 2, "y": 3, "r": 6}],
                "backgroundColor": "rgba(54, 162, 235, 0.5)",
            }
        ],
    }
    png = render_chart_png(spec, 360, 203, {"legendLabelColor": "#333333"})
    assert png.startswith(b"\x89PNG")
