"""Content-addressed chart images for one version's output tree.

Charts are rasterized once per distinct ``(spec, chart theme, style tag,
width, height)`` tuple and written to ``charts/chart-<sha1>.png`` beneath
the version output directory. Rendering a page never rasterizes: the block
renderer performs a pure lookup through :meth:`ChartAssetManager.get_asset_href`,
so :meth:`ChartAssetManager.prepare_content` must run before the page body is
rendered.
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import hashlib
import json
import logging
import typing as typ

from docs_html.paths import relative_href

from .rasterizer import ChartRenderError, render_chart_png
from .sizing import (
    CHART_STYLE_VERSION,
    normalise_chart_type,
    resolve_chart_dimensions,
    resolve_chart_render_height,
    resolve_chart_render_width,
)

if typ.TYPE_CHECKING:
    from pathlib import Path

    from docs_html.config import Theme
    from docs_html.content import Block

logger = logging.getLogger(__name__)

CHART_SUBDIR = "charts"
CHART_FILE_TEMPLATE = "chart-{hash}.png"

Rasterizer = cabc.Callable[
    [typ.Mapping[str, typ.Any], int, int, typ.Mapping[str, str]], bytes
]


@dc.dataclass(frozen=True, slots=True)
class ChartAssetInfo:
    """A chart image materialized on disk."""

    hash: str
    file_name: str
    absolute_path: Path
    width: int
    height: int


@dc.dataclass(frozen=True, slots=True)
class ChartHref:
    """Page-relative reference to a chart image plus its pixel size."""

    src: str
    width: int
    height: int


def hash_chart_input(
    chart_spec: typ.Mapping[str, typ.Any],
    chart_theme: typ.Mapping[str, str],
    width: int,
    height: int,
) -> str:
    """Return the SHA-1 content hash identifying a rendered chart."""
    payload = json.dumps(
        {
            "data": chart_spec,
            "theme": chart_theme,
            "style": CHART_STYLE_VERSION,
            "width": width,
            "height": height,
        },
        sort_keys=True,
        separators=(",", ":"),
        default=str,
    )
    return hashlib.sha1(payload.encode("utf-8"), usedforsecurity=False).hexdigest()


class ChartAssetManager:
    """Rasterize and look up chart images for one version render."""

    def __init__(
        self,
        theme: Theme,
        version_out_dir: Path,
        *,
        rasterizer: Rasterizer = render_chart_png,
        version_label: str = "",
    ) -> None:
        """Bind the manager to a theme and a version output directory.

        Parameters
        ----------
        theme : Theme
            Site theme; only the ``chart`` group participates in hashing.
        version_out_dir : Path
            Root of the version's generated site.
        rasterizer : Callable, optional
            Turns ``(spec, width, height, chart theme)`` into PNG bytes.
        version_label : str, optional
            Version name used in log messages.
        """
        self.chart_theme = theme.group("chart")
        self.version_out_dir = version_out_dir
        self.charts_dir = version_out_dir / CHART_SUBDIR
        self.rasterizer = rasterizer
        self.version_label = version_label
        self._assets: dict[str, ChartAssetInfo] = {}

    def prepare_content(
        self, blocks: cabc.Iterable[Block], *, source: str | None = None
    ) -> None:
        """Rasterize every chart in ``blocks`` that is not yet on disk.

        Failures are logged with the version and ``source`` id and leave a
        cache miss behind, which the chart block renders as a placeholder.
        """
        for block in blocks:
            if block.type != "chart" or not block.data:
                continue
            chart_type = normalise_chart_type(block.data.get("type"))
            width = resolve_chart_render_width(block.data.get("scale"))
            height = resolve_chart_render_height(chart_type, width)
            try:
                self._ensure_asset(block.data, width, height)
            except (ChartRenderError, OSError) as exc:
                logger.warning(
                    "Failed to render chart asset for %s in version %s: %s",
                    source or "<unknown>",
                    self.version_label,
                    exc,
                )

    def _ensure_asset(
        self, chart_spec: typ.Mapping[str, typ.Any], width: int, height: int
    ) -> ChartAssetInfo:
        digest = hash_chart_input(chart_spec, self.chart_theme, width, height)
        if existing := self._assets.get(digest):
            return existing
        png = self.rasterizer(chart_spec, width, height, self.chart_theme)
        self.charts_dir.mkdir(parents=True, exist_ok=True)
        file_name = CHART_FILE_TEMPLATE.format(hash=digest)
        absolute_path = self.charts_dir / file_name
        absolute_path.write_bytes(png)
        info = ChartAssetInfo(
            hash=digest,
            file_name=file_name,
            absolute_path=absolute_path,
            width=width,
            height=height,
        )
        self._assets[digest] = info
        logger.debug("Rendered chart %s (%sx%s)", file_name, width, height)
        return info

    def get_asset_href(
        self,
        chart_spec: typ.Mapping[str, typ.Any],
        page_dir: Path,
        target_width: float,
    ) -> ChartHref | None:
        """Return the chart image href relative to ``page_dir``, or ``None``."""
        width, height = resolve_chart_dimensions(chart_spec, target_width)
        digest = hash_chart_input(chart_spec, self.chart_theme, width, height)
        asset = self._assets.get(digest)
        if asset is None:
            return None
        return ChartHref(
            src=relative_href(page_dir, asset.absolute_path),
            width=asset.width,
            height=asset.height,
        )

    def list_assets(self) -> list[str]:
        """Return the asset paths relative to the version output directory."""
        return [
            info.absolute_path.relative_to(self.version_out_dir).as_posix()
            for info in self._assets.values()
        ]


__all__ = [
    "CHART_SUBDIR",
    "ChartAssetInfo",
    "ChartAssetManager",
    "ChartHref",
    "Rasterizer",
    "hash_chart_input",
]
