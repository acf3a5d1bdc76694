"""Renderers for audio, images, carousels, before/after comparisons and videos."""

from __future__ import annotations

import functools
import typing as typ
from pathlib import Path

from .helpers import (
    block_spacing,
    class_names,
    escape_html,
    extract_youtube_id,
    figure_caption,
    get_alignment,
    resolve_asset_path,
    responsive_width,
    spacing_class,
    validate_scale,
)

if typ.TYPE_CHECKING:
    from docs_html.content import Block

    from .context import RenderContext

COMPARE_SCRIPT_PATH = (
    Path(__file__).resolve().parents[1] / "static" / "compare-slider.js"
)
COMPARE_INITIAL_PERCENT = 50
YOUTUBE_EMBED_URL = "https://www.youtube.com/embed/{id}"
YOUTUBE_ALLOW = (
    "accelerometer; autoplay; clipboard-write; encrypted-media; gyroscope;"
    " picture-in-picture"
)


@functools.cache
def compare_script() -> str:
    """Return the inline ``<script>`` that drives comparison sliders."""
    source = COMPARE_SCRIPT_PATH.read_text(encoding="utf-8").strip()
    return f"<script>{source}</script>"


def _wrapper_class(block: Block, alignment_text: str) -> str:
    return class_names(spacing_class(block_spacing(block)), alignment_text)


def _image(ctx: RenderContext, src: str | None, alt: str, cls: str = "") -> str:
    class_attr = f' class="{escape_html(cls)}"' if cls else ""
    return (
        f'<img src="{escape_html(resolve_asset_path(ctx, src))}"'
        f' alt="{escape_html(alt)}"{class_attr} />'
    )


def render_audio(ctx: RenderContext, block: Block) -> str | None:
    """Render an ``audio`` element with an optional caption."""
    src = block.data.get("src")
    if not src:
        return None
    mime = block.data.get("mimeType")
    type_attr = f' type="{escape_html(mime)}"' if mime else ""
    return (
        f'<figure class="{escape_html(spacing_class(block_spacing(block)))}">'
        '<audio controls preload="metadata" class="w-full">'
        f'<source src="{escape_html(resolve_asset_path(ctx, src))}"{type_attr} />'
        "Your browser does not support the audio element.</audio>"
        f"{figure_caption(ctx, block.data.get('caption'))}</figure>"
    )


def render_image(ctx: RenderContext, block: Block) -> str | None:
    """Render a single scaled image."""
    image = block.data.get("image") or {}
    if not image.get("src"):
        return None
    alignment = get_alignment(block.data.get("alignment"), default="center")
    width = responsive_width(validate_scale(block.data.get("scale")))
    alt = image.get("alt") or ""
    return (
        f'<figure class="{escape_html(_wrapper_class(block, alignment.text))}">'
        f'<div class="{escape_html(alignment.container or "mx-auto")}"'
        f' style="width: {escape_html(width)};">'
        f"{_image(ctx, image['src'], alt, 'w-full h-auto')}"
        f"{figure_caption(ctx, alt)}</div></figure>"
    )


def render_image_grid(ctx: RenderContext, block: Block) -> str | None:
    """Render a responsive grid of captioned images."""
    images = [img for img in block.data.get("images") or [] if isinstance(img, dict)]
    if not images:
        return None
    alignment_key = str(block.data.get("alignment") or "center").lower()
    alignment = get_alignment(alignment_key, default="center")
    scale = validate_scale(block.data.get("scale"))
    style = ""
    if scale != 1:
        origin = alignment_key if alignment_key in {"left", "right"} else "center"
        style = f"transform: scale({scale:g}); transform-origin: {origin};"
    cells = "".join(
        f'<figure class="flex flex-col items-center" style="{escape_html(style)}">'
        f"{_image(ctx, image.get('src'), image.get('alt') or '', 'w-full h-auto')}"
        f"{figure_caption(ctx, image.get('alt'))}</figure>"
        for image in images
    )
    grid_class = class_names("grid gap-4 sm:grid-cols-2 md:grid-cols-3", alignment.container)
    return (
        f'<div class="{escape_html(_wrapper_class(block, alignment.text))}">'
        f'<div class="{escape_html(grid_class)}">{cells}</div></div>'
    )


def render_image_carousel(ctx: RenderContext, block: Block) -> str | None:
    """Render a CSS-only carousel driven by radio inputs."""
    images = [img for img in block.data.get("images") or [] if isinstance(img, dict)]
    if not images:
        return None
    alignment = get_alignment(block.data.get("alignment"), default="center")
    width = responsive_width(validate_scale(block.data.get("scale")))
    carousel_id = ctx.session.next_carousel_id()
    safe_id = escape_html(carousel_id)
    total = len(images)

    def option(index: int) -> str:
        return escape_html(f"{carousel_id}-option-{index % total}")

    inputs = "".join(
        f'<input type="radio" name="{safe_id}-input" id="{option(index)}"'
        f' class="static-carousel-input"{" checked" if index == 0 else ""} />'
        for index in range(total)
    )
    slides: list[str] = []
    for index, image in enumerate(images):
        navlinks = ""
        if total > 1:
            navlinks = (
                '<div class="static-carousel-navlinks">'
                '<label class="static-carousel-prev" role="button" tabindex="0"'
                f' for="{option(index - 1)}" aria-label="Previous slide"></label>'
                '<label class="static-carousel-next" role="button" tabindex="0"'
                f' for="{option(index + 1)}" aria-label="Next slide"></label>'
                "</div>"
            )
        slides.append(
            '<li class="static-carousel-slide"><figure>'
            f"{_image(ctx, image.get('src'), image.get('alt') or '')}"
            f"{figure_caption(ctx, image.get('alt'))}</figure>{navlinks}</li>"
        )

    rules = [f"#{safe_id} .static-carousel-slide {{ display: none; }}"]
    rules.extend(
        f"#{safe_id} .static-carousel-input:nth-of-type({nth}):checked"
        f" ~ .static-carousel-viewport .static-carousel-slide:nth-of-type({nth})"
        " { display: flex; }"
        for nth in range(1, total + 1)
    )
    style = "<style>" + "\n".join(rules) + "</style>"
    return (
        f'<div class="{escape_html(_wrapper_class(block, alignment.text))}">'
        f'<div class="{escape_html(alignment.container)}" style="width: {escape_html(width)};">'
        f'<div class="static-carousel" id="{safe_id}">{style}{inputs}'
        f'<ol class="static-carousel-viewport">{"".join(slides)}</ol>'
        "</div></div></div>"
    )


def _render_side_by_side(
    ctx: RenderContext,
    block: Block,
    before: typ.Mapping[str, typ.Any],
    after: typ.Mapping[str, typ.Any],
    labels: tuple[str, str],
) -> str:
    alignment = get_alignment(block.data.get("alignment"), default="center")
    width = responsive_width(validate_scale(block.data.get("scale")))
    container = class_names("flex gap-4 justify-center", alignment.container)
    figures = "".join(
        '<div class="w-1/2"><figure class="flex flex-col items-center">'
        f"{_image(ctx, image.get('src'), label, 'w-full h-auto')}"
        f"{figure_caption(ctx, label)}</figure></div>"
        for image, label in zip((before, after), labels, strict=True)
    )
    return (
        f'<div class="{escape_html(_wrapper_class(block, alignment.text))}">'
        f'<div class="{escape_html(container)}" style="width: {escape_html(width)};">'
        f"{figures}</div></div>"
    )


def render_image_compare(ctx: RenderContext, block: Block) -> str | None:
    """Render a before/after comparison as a slider or side by side.

    The slider carries a ``noscript`` fallback; the driving script is emitted
    once per page, alongside the first slider.
    """
    before = block.data.get("beforeImage") or {}
    after = block.data.get("afterImage") or {}
    if not before.get("src") or not after.get("src"):
        return None
    before_label = before.get("alt") or "Before"
    after_label = after.get("alt") or "After"
    if block.data.get("type") == "individual":
        return _render_side_by_side(ctx, block, before, after, (before_label, after_label))

    alignment = get_alignment(block.data.get("alignment"), default="center")
    width = responsive_width(validate_scale(block.data.get("scale")))
    compare_id = ctx.session.next_compare_id()
    initial = COMPARE_INITIAL_PERCENT
    summary = ""
    if block.data.get("showPercentage") and (before.get("alt") or after.get("alt")):
        cls = class_names("static-compare-summary", ctx.theme.slot("text", "alternative"))
        summary = f'<p class="{escape_html(cls)}" data-static-compare-summary></p>'

    slider = (
        f'<div class="static-compare" id="{escape_html(compare_id)}" data-static-compare'
        f' data-before-label="{escape_html(before_label)}"'
        f' data-after-label="{escape_html(after_label)}" data-initial="{initial}"'
        f' style="--static-compare-position: {initial}%;">'
        '<figure class="static-compare-figure">'
        f"{_image(ctx, after['src'], after_label, 'static-compare-image static-compare-image--after')}"
        '<div class="static-compare-overlay" data-static-compare-overlay>'
        f"{_image(ctx, before['src'], before_label, 'static-compare-image static-compare-image--before')}"
        "</div>"
        '<div class="static-compare-handle" data-static-compare-handle aria-hidden="true"></div>'
        "</figure>"
        '<div class="static-compare-controls">'
        f'<input type="range" min="0" max="100" value="{initial}" class="static-compare-range"'
        f' data-static-compare-range aria-label="Reveal {escape_html(before_label)}'
        f' compared to {escape_html(after_label)}" />{summary}</div>'
        '<noscript><div class="static-compare-noscript">'
        "Enable JavaScript to adjust the comparison slider.</div></noscript>"
        "</div>"
    )
    html = (
        f'<div class="{escape_html(_wrapper_class(block, alignment.text))}">'
        f'<div class="{escape_html(alignment.container)}" style="width: {escape_html(width)};">'
        f"{slider}</div></div>"
    )
    script = compare_script() if ctx.session.claim_compare_script() else ""
    return f"{html}{script}"


def render_youtube(ctx: RenderContext, block: Block) -> str | None:
    """Render an embedded YouTube player; unrecognised ids render nothing."""
    video_id = extract_youtube_id(block.data.get("youtubeVideoId"))
    if video_id is None:
        return None
    alignment = get_alignment(block.data.get("alignment"))
    width = responsive_width(validate_scale(block.data.get("scale")))
    caption = block.data.get("caption")
    caption_html = ""
    if caption:
        cls = class_names("mt-2", ctx.theme.slot("text", "alternative"))
        caption_html = f'<p class="{escape_html(cls)}">{escape_html(caption)}</p>'
    return (
        f'<div class="{escape_html(_wrapper_class(block, alignment.text))}">'
        f'<div class="{escape_html(alignment.container)}" style="width: {escape_html(width)};">'
        '<div class="aspect-video">'
        f'<iframe src="{escape_html(YOUTUBE_EMBED_URL.format(id=video_id))}"'
        f' title="YouTube video player" allow="{YOUTUBE_ALLOW}" allowfullscreen'
        ' class="w-full h-full rounded-lg border"></iframe>'
        f"</div>{caption_html}</div></div>"
    )


__all__ = [
    "compare_script",
    "render_audio",
    "render_image",
    "render_image_carousel",
    "render_image_compare",
    "render_image_grid",
    "render_youtube",
]
