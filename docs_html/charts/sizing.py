"""Chart type normalisation and render-size rules shared by renderers and assets.

Examples
--------
>>> resolve_chart_render_width(0.5)
448
>>> resolve_chart_render_height("bar", 448)
252
>>> resolve_chart_render_height("radar", 448)
448
"""

from __future__ import annotations

import math
import typing as typ

CONTENT_MAX_WIDTH = 896
CONTENT_MIN_WIDTH = 360
MIN_SCALE = 0.35
DEFAULT_ASPECT_RATIO = 540 / 960
RADIAL_HEIGHT_RATIO = 0.8
CHART_STYLE_VERSION = "v2"

ChartType = typ.Literal[
    "bar", "line", "radar", "doughnut", "polarArea", "bubble", "pie", "scatter"
]
CHART_TYPES: frozenset[str] = frozenset(typ.get_args(ChartType))
RADIAL_TYPES: frozenset[str] = frozenset({"radar", "polarArea"})
DEFAULT_CHART_TYPE: ChartType = "bar"


def normalise_chart_type(raw_type: object | None) -> ChartType:
    """Return a supported chart type, defaulting to ``bar``."""
    if isinstance(raw_type, str) and raw_type in CHART_TYPES:
        return typ.cast("ChartType", raw_type)
    return DEFAULT_CHART_TYPE


def _round(value: float) -> int:
    """Round halves up, as browsers do for pixel sizes."""
    return math.floor(value + 0.5)


def _clamp_width(width: float) -> int:
    return max(CONTENT_MIN_WIDTH, min(CONTENT_MAX_WIDTH, _round(width)))


def resolve_chart_render_width(scale: object | None = None) -> int:
    """Return the pixel width a chart block is rasterized at.

    The declared scale is clamped into ``[0.35, 1]`` and applied to the
    content column width; the result is clamped to ``[360, 896]``.
    """
    effective = 1.0
    if isinstance(scale, int | float) and not isinstance(scale, bool):
        effective = float(scale)
    clamped = min(1.0, max(MIN_SCALE, effective))
    return _clamp_width(CONTENT_MAX_WIDTH * clamped)


def resolve_chart_render_height(chart_type: str, width: int) -> int:
    """Return the pixel height for ``chart_type`` at ``width``."""
    if chart_type in RADIAL_TYPES:
        return max(width, _round(width * RADIAL_HEIGHT_RATIO))
    return max(
        _round(CONTENT_MIN_WIDTH * DEFAULT_ASPECT_RATIO),
        _round(width * DEFAULT_ASPECT_RATIO),
    )


def resolve_chart_dimensions(
    chart_spec: typ.Mapping[str, typ.Any], target_width: float
) -> tuple[int, int]:
    """Return the clamped ``(width, height)`` for a chart at ``target_width``."""
    width = _clamp_width(target_width)
    return width, resolve_chart_render_height(
        normalise_chart_type(chart_spec.get("type")), width
    )


__all__ = [
    "CHART_STYLE_VERSION",
    "CHART_TYPES",
    "CONTENT_MAX_WIDTH",
    "CONTENT_MIN_WIDTH",
    "RADIAL_TYPES",
    "ChartType",
    "normalise_chart_type",
    "resolve_chart_dimensions",
    "resolve_chart_render_height",
    "resolve_chart_render_width",
]
