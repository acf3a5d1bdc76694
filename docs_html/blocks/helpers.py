"""Shared helpers for block renderers: escaping, spacing, alignment and media."""

from __future__ import annotations

import dataclasses as dc
import re
import typing as typ
from html import escape
from urllib.parse import parse_qs, urlsplit

from docs_html.paths import EXTERNAL_PATTERN

if typ.TYPE_CHECKING:
    from docs_html.content import Block

    from .context import RenderContext

SPACING_CLASSES: dict[str, str] = {
    "none": "",
    "small": "mb-2",
    "medium": "mb-4",
    "large": "mb-8",
}

# Blocks whose spacing lives inside their payload rather than on the block.
PAYLOAD_SPACING_TYPES = frozenset({"text", "title", "divider", "messageBox"})

MIN_SCALE = 0.1
MAX_SCALE = 1.0
YOUTUBE_ID_PATTERN = re.compile(r"^[A-Za-z0-9_-]{11}$")


@dc.dataclass(frozen=True, slots=True)
class Alignment:
    """Text-alignment class plus the matching block container class."""

    text: str
    container: str


ALIGNMENT_CLASSES: dict[str, Alignment] = {
    "left": Alignment(text="text-left", container="mr-auto"),
    "center": Alignment(text="text-center", container="mx-auto"),
    "right": Alignment(text="text-right", container="ml-auto"),
}


def escape_html(value: object | None) -> str:
    """Escape ``value`` for element content and quoted attributes."""
    if value is None:
        return ""
    return escape(str(value), quote=True)


def class_names(*classes: str | None) -> str:
    """Join the truthy class strings with single spaces."""
    return " ".join(cls for cls in classes if cls)


def spacing_class(spacing: str | None, fallback: str = "medium") -> str:
    """Map a named spacing tier to its margin class."""
    return SPACING_CLASSES.get(spacing or fallback, "")


def wrap_with_spacing(html: str, spacing: str) -> str:
    """Wrap ``html`` in a spacing ``div`` unless the class is empty."""
    if not spacing:
        return html
    return f'<div class="{escape_html(spacing)}">{html}</div>'


def get_alignment(alignment: object | None, default: str = "left") -> Alignment:
    """Resolve a named alignment, falling back to ``left``."""
    key = str(alignment).lower() if alignment else default
    return ALIGNMENT_CLASSES.get(key, ALIGNMENT_CLASSES["left"])


def block_spacing(block: Block) -> str | None:
    """Return the spacing tier declared for ``block``."""
    if block.type in PAYLOAD_SPACING_TYPES:
        spacing = block.data.get("spacing")
        return str(spacing) if spacing else None
    return block.spacing


def slugify(value: str) -> str:
    """Return a lowercase hyphenated anchor for ``value``.

    Examples
    --------
    >>> slugify("Getting Started!")
    'getting-started'
    """
    return re.sub(r"[^a-z0-9]+", "-", value.lower()).strip("-")


def is_external_path(value: str) -> bool:
    """Return whether ``value`` is absolute, protocol-relative or inline data."""
    return bool(EXTERNAL_PATTERN.match(value)) or value.lower().startswith("data:")


def resolve_asset_path(ctx: RenderContext, raw: str | None) -> str:
    """Resolve a media reference through the page's asset resolver."""
    if not raw:
        return ""
    if is_external_path(raw):
        return raw
    if ctx.resolve_asset_href is not None:
        resolved = ctx.resolve_asset_href(raw)
        if resolved:
            return resolved
    return raw if raw.startswith("/") else f"/{raw}"


def figure_caption(ctx: RenderContext, caption: str | None) -> str:
    """Render a ``figcaption`` or an empty string."""
    if not caption:
        return ""
    cls = class_names(ctx.theme.slot("text", "alternative"), "mt-2")
    return f'<figcaption class="{escape_html(cls)}">{escape_html(caption)}</figcaption>'


def validate_scale(scale: object | None) -> float:
    """Coerce a declared scale into ``[0.1, 1.0]``, defaulting to ``1.0``."""
    if isinstance(scale, bool) or not isinstance(scale, int | float):
        return MAX_SCALE
    return min(MAX_SCALE, max(MIN_SCALE, float(scale)))


def responsive_width(scale: float) -> str:
    """Render a scale as a CSS percentage width."""
    return f"{round(scale * 100, 2):g}%"


def extract_youtube_id(value: str | None) -> str | None:
    """Return the video id from a YouTube URL or a bare id.

    Examples
    --------
    >>> extract_youtube_id("https://youtu.be/dQw4w9WgXcQ")
    'dQw4w9WgXcQ'
    >>> extract_youtube_id("not a video") is None
    True
    """
    if not value:
        return None
    candidate = value.strip()
    if YOUTUBE_ID_PATTERN.match(candidate):
        return candidate
    parts = urlsplit(candidate if "//" in candidate else f"https://{candidate}")
    host = parts.netloc.lower().removeprefix("www.").removeprefix("m.")
    segments = [segment for segment in parts.path.split("/") if segment]
    found: str | None = None
    if host == "youtu.be" and segments:
        found = segments[0]
    elif host.endswith("youtube.com") or host.endswith("youtube-nocookie.com"):
        if segments[:1] == ["watch"]:
            found = (parse_qs(parts.query).get("v") or [None])[0]
        elif len(segments) >= 2 and segments[0] in {"embed", "shorts", "v", "live"}:  # noqa: PLR2004
            found = segments[1]
    if found and YOUTUBE_ID_PATTERN.match(found):
        return found
    return None


__all__ = [
    "ALIGNMENT_CLASSES",
    "SPACING_CLASSES",
    "Alignment",
    "block_spacing",
    "class_names",
    "escape_html",
    "extract_youtube_id",
    "figure_caption",
    "get_alignment",
    "is_external_path",
    "resolve_asset_path",
    "responsive_width",
    "slugify",
    "spacing_class",
    "validate_scale",
    "wrap_with_spacing",
]
