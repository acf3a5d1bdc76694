"""Render typed content blocks into static HTML fragments.

Every renderer takes a :class:`RenderContext` and a block and returns an HTML
string, or ``None`` when the block has nothing to show. User text is always
escaped; media references go through the context's asset resolver.

Examples
--------
>>> from docs_html.config import Theme
>>> from docs_html.content import Block
>>> ctx = RenderContext(theme=Theme())
>>> render_content_block(ctx, Block.from_mapping({"type": "hologram"}))
'<div class="my-4 p-4 border border-dashed border-gray-400 text-sm text-gray-500">Unsupported block type in static export.</div>'
"""

from __future__ import annotations

from .code import highlight_code, normalize_language
from .context import ChartAssetRef, ChartResolver, RenderContext, RenderSession
from .figures import render_math_markup
from .helpers import escape_html, slugify
from .media import compare_script
from .registry import BLOCK_RENDERERS, BlockRenderer, render_blocks, render_content_block

__all__ = [
    "BLOCK_RENDERERS",
    "BlockRenderer",
    "ChartAssetRef",
    "ChartResolver",
    "RenderContext",
    "RenderSession",
    "compare_script",
    "escape_html",
    "highlight_code",
    "normalize_language",
    "render_blocks",
    "render_content_block",
    "render_math_markup",
    "slugify",
]
