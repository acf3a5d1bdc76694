"""Write the shared ``static-styles`` directory used by every generated page.

The directory holds the compiled site stylesheet, the syntax-highlighting
theme, the stylesheets for code tabs, carousels and comparison sliders, any
KaTeX fonts and an ``assets-manifest.json`` listing. Every step is
recoverable: a failure is logged as a warning and the remaining steps still
run, so a site without its stylesheet bundle is degraded rather than lost.
"""

from __future__ import annotations

import json
import logging
import re
import shutil
import typing as typ
from pathlib import Path

from pygments.formatters import HtmlFormatter
from pygments.util import ClassNotFound

from docs_html._constants import (
    ASSETS_MANIFEST,
    CAROUSEL_STYLE_TARGET,
    CODE_TABS_TARGET,
    COMPARE_STYLE_TARGET,
    HIGHLIGHT_THEME_TARGET,
    STYLESHEET_TARGET,
)

if typ.TYPE_CHECKING:
    import collections.abc as cabc

logger = logging.getLogger(__name__)

PACKAGED_STATIC_DIR = Path(__file__).resolve().parents[1] / "static"
PACKAGED_STYLESHEETS = (CODE_TABS_TARGET, CAROUSEL_STYLE_TARGET, COMPARE_STYLE_TARGET)
HIGHLIGHT_SCOPE = ".static-code-block"
FALLBACK_PYGMENTS_STYLE = "default"
KATEX_PREFIX = "KaTeX_"

_ASSET_URL_PATTERN = re.compile(r"url\((['\"]?)/(?:[^)'\"]*/)?assets/")


def find_stylesheet(source_dirs: cabc.Iterable[Path]) -> Path | None:
    """Return the compiled site stylesheet from the first directory holding one.

    An ``index-*.css`` bundle is preferred; otherwise the first ``*.css`` file
    in name order is used.
    """
    for source_dir in source_dirs:
        if not source_dir.is_dir():
            continue
        candidates = sorted(path for path in source_dir.glob("*.css") if path.is_file())
        preferred = [path for path in candidates if path.name.startswith("index-")]
        if preferred or candidates:
            return (preferred or candidates)[0]
    return None


def rewrite_asset_urls(css: str) -> str:
    """Point absolute ``/…/assets/`` URLs at the stylesheet's own directory.

    Examples
    --------
    >>> rewrite_asset_urls("src: url(/docs/assets/KaTeX_Main.woff2)")
    'src: url(./KaTeX_Main.woff2)'
    >>> rewrite_asset_urls("url('/assets/font.ttf')")
    "url('./font.ttf')"
    """
    return _ASSET_URL_PATTERN.sub(r"url(\1./", css)


def copy_stylesheet(assets_dir: Path, source_dirs: cabc.Sequence[Path]) -> Path | None:
    """Copy the site stylesheet into ``assets_dir`` as ``site.css``."""
    source = find_stylesheet(source_dirs)
    if source is None:
        checked = ", ".join(str(path) for path in source_dirs) or "<none>"
        logger.warning("No CSS assets found. Checked: %s", checked)
        return None
    target = assets_dir / STYLESHEET_TARGET
    try:
        css = source.read_text(encoding="utf-8")
        target.write_text(rewrite_asset_urls(css), encoding="utf-8")
    except OSError as exc:
        logger.warning("Failed to copy stylesheet %s: %s", source, exc)
        return None
    logger.debug("Copied stylesheet %s to %s", source.name, STYLESHEET_TARGET)
    return target


def highlight_stylesheet(style: str) -> str:
    """Return Pygments CSS for ``style`` scoped to static code blocks."""
    try:
        formatter = HtmlFormatter(style=style)
    except ClassNotFound:
        logger.warning(
            "Unknown Pygments style '%s'; using '%s'.", style, FALLBACK_PYGMENTS_STYLE
        )
        formatter = HtmlFormatter(style=FALLBACK_PYGMENTS_STYLE)
    return formatter.get_style_defs(HIGHLIGHT_SCOPE)


def write_highlight_theme(assets_dir: Path, style: str) -> Path | None:
    target = assets_dir / HIGHLIGHT_THEME_TARGET
    try:
        target.write_text(highlight_stylesheet(style), encoding="utf-8")
    except OSError as exc:
        logger.warning("Failed to write syntax highlighting theme: %s", exc)
        return None
    return target


def write_packaged_stylesheets(assets_dir: Path) -> list[Path]:
    """Copy the block stylesheets shipped with the package."""
    written: list[Path] = []
    for name in PACKAGED_STYLESHEETS:
        try:
            shutil.copyfile(PACKAGED_STATIC_DIR / name, assets_dir / name)
        except OSError as exc:
            logger.warning("Failed to write %s: %s", name, exc)
            continue
        written.append(assets_dir / name)
    return written


def copy_katex_fonts(assets_dir: Path, source_dirs: cabc.Sequence[Path]) -> list[Path]:
    """Copy ``KaTeX_*`` font files from the first directory that has any."""
    for source_dir in source_dirs:
        if not source_dir.is_dir():
            continue
        fonts = sorted(
            path
            for path in source_dir.iterdir()
            if path.is_file() and path.name.startswith(KATEX_PREFIX)
        )
        if not fonts:
            continue
        copied: list[Path] = []
        for font in fonts:
            try:
                shutil.copyfile(font, assets_dir / font.name)
            except OSError as exc:
                logger.warning("Failed to copy KaTeX font %s: %s", font.name, exc)
                continue
            copied.append(assets_dir / font.name)
        logger.debug("Copied %d KaTeX font files from %s", len(copied), source_dir)
        return copied
    logger.warning(
        "Failed to copy KaTeX font assets (no %s* files in %s). "
        "Math blocks may render incorrectly offline.",
        KATEX_PREFIX,
        ", ".join(str(path) for path in source_dirs) or "<none>",
    )
    return []


def list_asset_files(root: Path) -> list[str]:
    """Return every file below ``root`` as sorted POSIX paths, manifest excluded."""
    return sorted(
        path.relative_to(root).as_posix()
        for path in root.rglob("*")
        if path.is_file() and path.relative_to(root).as_posix() != ASSETS_MANIFEST
    )


def write_assets_manifest(assets_dir: Path) -> Path | None:
    manifest = assets_dir / ASSETS_MANIFEST
    try:
        files = list_asset_files(assets_dir)
        manifest.write_text(json.dumps(files, indent=2), encoding="utf-8")
    except OSError as exc:
        logger.warning("Failed to write assets manifest in %s: %s", assets_dir, exc)
        return None
    logger.debug("Updated assets manifest at %s (%d entries)", manifest, len(files))
    return manifest


def write_static_assets(
    assets_dir: Path,
    *,
    source_dirs: cabc.Sequence[Path] = (),
    pygments_style: str = "monokai",
) -> Path:
    """Populate the shared static-assets directory.

    Parameters
    ----------
    assets_dir : Path
        Destination ``static-styles`` directory; created when missing.
    source_dirs : Sequence[Path], optional
        Directories searched for the compiled stylesheet and KaTeX fonts.
    pygments_style : str, optional
        Pygments style used for the highlighting theme.

    Returns
    -------
    Path
        ``assets_dir``.
    """
    assets_dir.mkdir(parents=True, exist_ok=True)
    copy_stylesheet(assets_dir, source_dirs)
    write_highlight_theme(assets_dir, pygments_style)
    write_packaged_stylesheets(assets_dir)
    copy_katex_fonts(assets_dir, source_dirs)
    write_assets_manifest(assets_dir)
    return assets_dir


__all__ = [
    "KATEX_PREFIX",
    "PACKAGED_STYLESHEETS",
    "copy_katex_fonts",
    "copy_stylesheet",
    "find_stylesheet",
    "highlight_stylesheet",
    "list_asset_files",
    "rewrite_asset_urls",
    "write_assets_manifest",
    "write_static_assets",
]
