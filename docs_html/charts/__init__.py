"""Chart sizing, rasterization and content-addressed chart assets."""

from __future__ import annotations

from .assets import (
    CHART_SUBDIR,
    ChartAssetInfo,
    ChartAssetManager,
    ChartHref,
    Rasterizer,
    hash_chart_input,
)
from .rasterizer import ChartRenderError, parse_css_color, render_chart_png
from .sizing import (
    CHART_TYPES,
    normalise_chart_type,
    resolve_chart_dimensions,
    resolve_chart_render_height,
    resolve_chart_render_width,
)

__all__ = [
    "CHART_SUBDIR",
    "CHART_TYPES",
    "ChartAssetInfo",
    "ChartAssetManager",
    "ChartHref",
    "ChartRenderError",
    "Rasterizer",
    "hash_chart_input",
    "normalise_chart_type",
    "parse_css_color",
    "render_chart_png",
    "resolve_chart_dimensions",
    "resolve_chart_render_height",
    "resolve_chart_render_width",
]
