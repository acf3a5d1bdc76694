"""Renderers for textual blocks: titles, paragraphs, lists, dividers, notes, tables."""

from __future__ import annotations

import typing as typ

from .helpers import (
    block_spacing,
    class_names,
    escape_html,
    get_alignment,
    slugify,
    spacing_class,
    wrap_with_spacing,
)

if typ.TYPE_CHECKING:
    from docs_html.content import Block

    from .context import RenderContext

UNDERLINE_CLASS = "border-b-2 pb-2 border-gray-300"
MESSAGE_BOX_SIZES = {"small": "p-3 text-sm", "large": "p-6 text-lg"}
DIVIDER_VARIANTS = {
    "dashed": "border-t-2 border-dashed",
    "dotted": "border-t-2 border-dotted",
    "double": "border-t-4 border-double",
    "thick": "border-t-2",
}


def _heading_level(raw: object) -> int:
    try:
        level = int(raw) if raw is not None else 1  # type: ignore[arg-type]
    except (TypeError, ValueError):
        level = 1
    return min(max(level, 1), 6)


def render_title(ctx: RenderContext, block: Block) -> str | None:
    """Render a heading, optionally with a slug anchor link."""
    text = block.data.get("text")
    if not text:
        return None
    level = _heading_level(block.data.get("level"))
    alignment = get_alignment(block.data.get("alignment"))
    theme = ctx.theme
    level_class = {
        1: theme.slot("text", "titleLevel1"),
        2: theme.slot("text", "titleLevel2"),
        3: theme.slot("text", "titleLevel3"),
    }.get(level) or theme.slot("text", "documentTitle")

    anchor_enabled = bool(block.data.get("enableAnchorLink"))
    heading_id = slugify(str(text)) if anchor_enabled else ""
    id_attr = f' id="{escape_html(heading_id)}"' if heading_id else ""
    anchor = ""
    if heading_id:
        anchor_class = class_names(
            theme.slot("text", "titleAnchor", "text-blue-500"), "ml-2 text-sm"
        )
        anchor = (
            f'<a class="{escape_html(anchor_class)}" href="#{escape_html(heading_id)}"'
            ' aria-label="Anchor link">#</a>'
        )
    heading_class = class_names(
        alignment.text,
        "font-bold scroll-mt-20 group relative",
        level_class,
        UNDERLINE_CLASS if block.data.get("underline") else "",
    )
    heading = (
        f'<h{level}{id_attr} class="{escape_html(heading_class)}">'
        f"{escape_html(text)}{anchor}</h{level}>"
    )
    container = f'<div class="{escape_html(alignment.text)}">{heading}</div>'
    return wrap_with_spacing(container, spacing_class(block_spacing(block), "none"))


def render_text(ctx: RenderContext, block: Block) -> str | None:
    """Render a paragraph that preserves line breaks."""
    text = block.data.get("text")
    if not text:
        return None
    alignment = get_alignment(block.data.get("alignment"))
    cls = class_names(alignment.text, ctx.theme.slot("text", "general"))
    paragraph = (
        f'<p class="{escape_html(cls)}" style="white-space: pre-line;">'
        f"{escape_html(text)}</p>"
    )
    return wrap_with_spacing(paragraph, spacing_class(block_spacing(block)))


def render_list(ctx: RenderContext, block: Block) -> str | None:
    """Render an ordered or unordered list; empty lists render nothing."""
    items = block.data.get("items") or []
    if not items:
        return None
    ordered = block.data.get("type") == "ol"
    tag = "ol" if ordered else "ul"
    alignment = get_alignment(block.data.get("alignment"))
    cls = class_names(
        ctx.theme.slot("text", "list"),
        alignment.text,
        "list-decimal" if ordered else "list-disc",
        "ml-4" if block.data.get("inside") else "",
    )
    start = block.data.get("startNumber")
    start_attr = (
        f' start="{escape_html(start)}"'
        if ordered and isinstance(start, int) and not isinstance(start, bool)
        else ""
    )
    aria_label = block.data.get("ariaLabel")
    aria_attr = f' aria-label="{escape_html(aria_label)}"' if aria_label else ""
    entries = "".join(f"<li>{escape_html(item)}</li>" for item in items)
    html = (
        f'<{tag} class="{escape_html(cls)}"{start_attr}{aria_attr} role="list">'
        f"{entries}</{tag}>"
    )
    return wrap_with_spacing(html, spacing_class(block_spacing(block)))


def render_divider(ctx: RenderContext, block: Block) -> str:
    """Render a horizontal rule, optionally split around a centred label.

    An empty or missing payload renders the default solid rule.
    """
    theme = ctx.theme
    spacing = spacing_class(block_spacing(block))
    variant = block.data.get("type")
    if variant == "gradient":
        divider_class = class_names(
            "h-px w-full bg-gradient-to-r",
            theme.slot(
                "divider", "gradient", "from-transparent via-gray-300 to-transparent"
            ),
        )
    else:
        divider_class = class_names(
            "w-full",
            theme.slot("divider", "border", "border-gray-300"),
            DIVIDER_VARIANTS.get(str(variant), "border-t"),
        )

    label = block.data.get("text")
    if label:
        side_class = divider_class.replace("w-full", "flex-1")
        text_class = class_names(
            "px-4", theme.slot("divider", "text", "text-gray-500 text-sm")
        )
        html = (
            '<div class="flex items-center">'
            f'<div class="{escape_html(side_class)}"></div>'
            f'<span class="{escape_html(text_class)}">{escape_html(label)}</span>'
            f'<div class="{escape_html(side_class)}"></div>'
            "</div>"
        )
        return wrap_with_spacing(html, spacing)
    return wrap_with_spacing(f'<div class="{escape_html(divider_class)}"></div>', spacing)


def render_message_box(ctx: RenderContext, block: Block) -> str | None:
    """Render a callout box or, for ``quote``, a blockquote."""
    text = block.data.get("text")
    if not text:
        return None
    theme = ctx.theme
    kind = str(block.data.get("type") or "neutral")
    if kind == "quote":
        cls = class_names("pl-4 py-2", theme.slot("messageBox", "quote"))
        html = f'<blockquote class="{escape_html(cls)}">{escape_html(text)}</blockquote>'
        return wrap_with_spacing(html, spacing_class(block_spacing(block)))

    size_class = MESSAGE_BOX_SIZES.get(str(block.data.get("size")), "p-4 text-base")
    type_class = theme.slot("messageBox", kind, theme.slot("messageBox", "neutral"))
    box_class = class_names("rounded-lg border flex", type_class, size_class)
    return (
        f'<div class="my-4"><div class="{escape_html(box_class)}">'
        f'<div class="flex-1">{escape_html(text)}</div></div></div>'
    )


def _cell_style(
    ctx: RenderContext, table_type: object, row: int, column: int, is_header: bool
) -> str:
    theme = ctx.theme
    if table_type == "matrix" and row == 0 and column == 0:
        return theme.slot("table", "cornerCell")
    if (
        is_header
        or (table_type == "vertical" and row == 0)
        or (table_type == "horizontal" and column == 0)
    ):
        return theme.slot("table", "headers")
    return theme.slot("table", "rows")


def render_table(ctx: RenderContext, block: Block) -> str:
    """Render a table; empty data renders a visible placeholder."""
    theme = ctx.theme
    rows = block.data.get("data") or []
    if not rows:
        cls = class_names("mb-6 p-4", theme.slot("table", "empty"))
        return f'<div class="{escape_html(cls)}">No data available</div>'

    border = theme.slot("table", "border", "border-gray-200")
    table_type = block.data.get("type")
    row_class = class_names(
        "border-b last:border-b-0", border, theme.slot("table", "rows")
    )
    rendered_rows: list[str] = []
    for row_index, row in enumerate(rows):
        cells: list[str] = []
        for column_index, raw_cell in enumerate(row or []):
            cell = raw_cell if isinstance(raw_cell, dict) else {"content": raw_cell}
            is_header = bool(cell.get("isHeader"))
            tag = "th" if is_header else "td"
            cls = class_names(
                "px-2 py-1 border-r",
                border,
                _cell_style(ctx, table_type, row_index, column_index, is_header),
                "last:border-r-0",
            )
            scope = cell.get("scope")
            scope_attr = f' scope="{escape_html(scope)}"' if scope else ""
            cells.append(
                f'<{tag} class="{escape_html(cls)}"{scope_attr}>'
                f"{escape_html(cell.get('content') or '')}</{tag}>"
            )
        rendered_rows.append(f'<tr class="{escape_html(row_class)}">{"".join(cells)}</tr>')

    table_class = class_names(border, "border rounded-lg min-w-full")
    return (
        '<div class="mb-6 overflow-x-auto">'
        f'<table class="{escape_html(table_class)}"'
        ' style="border-collapse: collapse; table-layout: auto;">'
        f"<tbody>{''.join(rendered_rows)}</tbody></table></div>"
    )


__all__ = [
    "render_divider",
    "render_list",
    "render_message_box",
    "render_table",
    "render_text",
    "render_title",
]
