"""Shared stylesheet bundle and per-version media copying."""

from .media import (
    collect_media_paths,
    copy_referenced_media,
    warn_missing_media,
)
from .static import (
    copy_katex_fonts,
    copy_stylesheet,
    list_asset_files,
    rewrite_asset_urls,
    write_static_assets,
)

__all__ = [
    "collect_media_paths",
    "copy_katex_fonts",
    "copy_referenced_media",
    "copy_stylesheet",
    "list_asset_files",
    "rewrite_asset_urls",
    "warn_missing_media",
    "write_static_assets",
]
