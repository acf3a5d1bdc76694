"""Renderers for math expressions and pre-rasterized charts."""

from __future__ import annotations

import io
import logging
import typing as typ
import uuid

from matplotlib import rc_context
from matplotlib.figure import Figure

from docs_html.charts.sizing import resolve_chart_render_width

from .helpers import (
    block_spacing,
    class_names,
    escape_html,
    get_alignment,
    spacing_class,
    validate_scale,
    wrap_with_spacing,
)

if typ.TYPE_CHECKING:
    from docs_html.content import Block

    from .context import RenderContext

logger = logging.getLogger(__name__)

MATH_FONT_SIZE = 16
JUSTIFY_VALUES = {"left": "flex-start", "center": "center", "right": "flex-end"}
CHART_UNAVAILABLE = (
    '<div class="rounded-lg border border-dashed border-gray-400 bg-white/80 p-6'
    ' text-sm text-gray-500">Chart preview unavailable in static export.</div>'
)


def render_math_markup(expression: str) -> str:
    """Typeset a TeX expression into inline SVG using matplotlib mathtext.

    Parse failures never raise; the escaped source is returned inside a
    ``math-error`` element instead.
    """
    figure = Figure()
    figure.text(0, 0, f"${expression}$", fontsize=MATH_FONT_SIZE)
    buffer = io.StringIO()
    # A stable salt keeps element ids identical across runs for the same input.
    salt = uuid.uuid5(uuid.NAMESPACE_URL, expression).hex
    try:
        with rc_context({"svg.hashsalt": salt, "svg.fonttype": "path"}):
            figure.savefig(
                buffer,
                format="svg",
                bbox_inches="tight",
                pad_inches=0.02,
                transparent=True,
                metadata={"Date": None},
            )
    except (ValueError, RuntimeError) as exc:
        logger.debug("Could not typeset %r: %s", expression, exc)
        return f'<code class="math-error">{escape_html(expression)}</code>'
    svg = buffer.getvalue()
    return svg[svg.find("<svg") :]


def render_math(ctx: RenderContext, block: Block) -> str | None:
    """Render a display math block centred by default."""
    expression = block.data.get("expression")
    if not expression:
        return None
    raw_alignment = str(block.data.get("alignment") or "center").lower()
    alignment_key = raw_alignment if raw_alignment in JUSTIFY_VALUES else "center"
    alignment = get_alignment(alignment_key)
    renderer = ctx.math_renderer or render_math_markup
    container_class = class_names(
        ctx.theme.slot("text", "math"), alignment.text, "math-block"
    )
    style = (
        f"display:flex;justify-content:{JUSTIFY_VALUES[alignment_key]};width:100%;"
    )
    html = (
        f'<div class="{escape_html(container_class)}" style="{escape_html(style)}">'
        f"{renderer(str(expression))}</div>"
    )
    return wrap_with_spacing(html, spacing_class(block_spacing(block)))


def _chart_title(data: typ.Mapping[str, typ.Any]) -> str:
    datasets = data.get("datasets") or []
    first = datasets[0] if datasets and isinstance(datasets[0], dict) else {}
    title = (
        data.get("title")
        or first.get("label")
        or (f"{data['type']} chart" if data.get("type") else "chart")
    )
    return str(title).strip()


def render_chart(ctx: RenderContext, block: Block) -> str | None:
    """Render a chart as a pre-rasterized image, or a placeholder on cache miss."""
    data = block.data
    if not data:
        return None
    alignment = get_alignment(data.get("alignment"), default="center")
    target_width = resolve_chart_render_width(validate_scale(data.get("scale")))
    asset = (
        ctx.get_chart_asset_href(data, target_width)
        if ctx.get_chart_asset_href is not None
        else None
    )
    if asset is not None:
        figure = (
            '<figure class="flex flex-col items-center gap-3">'
            f'<img src="{escape_html(asset.src)}"'
            f' alt="{escape_html(_chart_title(data) or "Chart visualization")}"'
            f' width="{asset.width}" height="{asset.height}" loading="lazy"'
            ' class="w-full h-auto" /></figure>'
        )
        max_width = asset.width
    else:
        figure = CHART_UNAVAILABLE
        max_width = target_width
    wrapper_class = class_names(spacing_class(block_spacing(block)), alignment.text)
    return (
        f'<div class="{escape_html(wrapper_class)}">'
        f'<div class="{escape_html(alignment.container)}"'
        f' style="width: 100%; max-width: {max_width}px;">{figure}</div></div>'
    )


__all__ = ["render_chart", "render_math", "render_math_markup"]
