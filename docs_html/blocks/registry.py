"""Dispatch content blocks to their renderers."""

from __future__ import annotations

import collections.abc as cabc

from docs_html.content import Block

from .code import render_code
from .context import RenderContext
from .figures import render_chart, render_math
from .media import (
    render_audio,
    render_image,
    render_image_carousel,
    render_image_compare,
    render_image_grid,
    render_youtube,
)
from .text import (
    render_divider,
    render_list,
    render_message_box,
    render_table,
    render_text,
    render_title,
)

BlockRenderer = cabc.Callable[[RenderContext, Block], str | None]

_PLACEHOLDER_CLASS = "my-4 p-4 border border-dashed border-gray-400 text-sm text-gray-500"


def render_unknown(_ctx: RenderContext, _block: Block) -> str:
    """Render the visible fallback used for unsupported block kinds."""
    return (
        f'<div class="{_PLACEHOLDER_CLASS}">Unsupported block type in static export.</div>'
    )


def render_graph(_ctx: RenderContext, _block: Block) -> str:
    return (
        f'<div class="{_PLACEHOLDER_CLASS}">'
        "Graph block is not yet supported in static export.</div>"
    )


def render_category_navigator(_ctx: RenderContext, _block: Block) -> None:
    # The sidebar already provides category navigation in the static export.
    return None


BLOCK_RENDERERS: dict[str, BlockRenderer] = {
    "title": render_title,
    "text": render_text,
    "list": render_list,
    "divider": render_divider,
    "messageBox": render_message_box,
    "table": render_table,
    "code": render_code,
    "math": render_math,
    "audio": render_audio,
    "image": render_image,
    "imageGrid": render_image_grid,
    "imageCarousel": render_image_carousel,
    "imageCompare": render_image_compare,
    "youtube": render_youtube,
    "chart": render_chart,
    "graph": render_graph,
    "categoryNavigator": render_category_navigator,
}


def render_content_block(ctx: RenderContext, block: Block) -> str | None:
    """Render one block, falling back to the unsupported-block placeholder."""
    renderer = BLOCK_RENDERERS.get(block.type, render_unknown)
    return renderer(ctx, block)


def render_blocks(blocks: cabc.Iterable[Block], ctx: RenderContext) -> str:
    """Render ``blocks`` in order, joining the non-empty fragments by newlines."""
    fragments = (render_content_block(ctx, block) for block in blocks)
    return "\n".join(fragment for fragment in fragments if fragment is not None)


__all__ = [
    "BLOCK_RENDERERS",
    "BlockRenderer",
    "render_blocks",
    "render_content_block",
    "render_unknown",
]
