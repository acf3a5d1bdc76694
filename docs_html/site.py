"""Orchestrate static HTML generation for every requested version.

:class:`VersionRenderer` writes one version's site: the landing page, every
category and document page, chart images, copied media and a
``static-manifest.json`` summarizing the output. :func:`build_site` builds the
render plan, writes the shared ``static-styles`` directory once and renders
each entry with a single :class:`~docs_html.blocks.RenderSession`.

Example
-------
>>> from pathlib import Path
>>> from docs_html.config import apply_overrides, load_site_config
>>> from docs_html.site import build_site
>>> config = load_site_config(Path("config/docs.yaml"))  # doctest: +SKIP
>>> build_site(apply_overrides(config, separate_build=True))  # doctest: +SKIP
[PosixPath('dist/html/1.0'), PosixPath('dist/html/2.0')]
"""

from __future__ import annotations

import datetime as dt
import json
import logging
import os
import typing as typ

from docs_html._constants import ASSETS_MANIFEST, INDEX_PAGE, STATIC_MANIFEST
from docs_html.assets import (
    collect_media_paths,
    copy_referenced_media,
    warn_missing_media,
    write_static_assets,
)
from docs_html.blocks import RenderContext, RenderSession
from docs_html.charts import ChartAssetManager, render_chart_png
from docs_html.content import build_render_plan
from docs_html.navigation import build_navigation_index
from docs_html.pages import (
    create_environment,
    render_category_page,
    render_document_page,
    render_placeholder_page,
    render_version_landing,
)
from docs_html.paths import SiteLayout

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from pathlib import Path

    from jinja2 import Environment

    from docs_html.charts import Rasterizer
    from docs_html.config import SiteConfig
    from docs_html.content import Block, VersionRenderEntry
    from docs_html.navigation import NavigationIndex
    from docs_html.paths import PageLinks

logger = logging.getLogger(__name__)


class GenerationError(RuntimeError):
    """Raised when a generation run has nothing to render."""


class VersionRenderer:
    """Render one version (and product) into its output directory."""

    def __init__(
        self,
        entry: VersionRenderEntry,
        config: SiteConfig,
        session: RenderSession,
        *,
        rasterizer: Rasterizer = render_chart_png,
        env: Environment | None = None,
    ) -> None:
        """Bind the renderer to a plan entry and the run-wide state.

        Parameters
        ----------
        entry : VersionRenderEntry
            Version content to render.
        config : SiteConfig
            Resolved configuration; selects the output topology.
        session : RenderSession
            Counters shared by every page of the invocation.
        rasterizer : Callable, optional
            Chart rasterizer handed to the :class:`ChartAssetManager`.
        env : Environment, optional
            Jinja environment; defaults to the package templates.
        """
        self.entry = entry
        self.config = config
        self.session = session
        self.env = env or create_environment()
        self.layout = SiteLayout.for_entry(config, entry)
        self.nav_index: NavigationIndex = build_navigation_index(
            entry, public_base=config.public_data_path
        )
        self.charts = ChartAssetManager(
            config.theme,
            self.layout.site_dir,
            rasterizer=rasterizer,
            version_label=entry.label,
        )

    def _context(self, links: PageLinks) -> RenderContext:
        page_dir = links.page_dir
        return RenderContext(
            theme=self.config.theme,
            current_path=links.page_relative,
            resolve_asset_href=links.resolve_asset_href,
            get_chart_asset_href=lambda spec, width: self.charts.get_asset_href(
                spec, page_dir, width
            ),
            session=self.session,
        )

    def _begin(self, blocks: cabc.Iterable[Block], source: str) -> None:
        self.session.begin_page()
        self.charts.prepare_content(blocks, source=source)

    def _write(self, links: PageLinks, html: str) -> str:
        output_path = links.page_path
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(html, encoding="utf-8")
        return links.page_relative

    def render_index(self) -> str:
        """Write ``index.html``: the default document, a landing or a placeholder."""
        nav_index = self.nav_index
        links = self.layout.page(INDEX_PAGE)
        branding = self.config.branding
        default_doc = nav_index.default_document()
        if default_doc is not None:
            self._begin(default_doc.content, default_doc.id)
            html = render_document_page(
                default_doc,
                nav_index,
                links=links,
                ctx=self._context(links),
                branding=branding,
                env=self.env,
            )
            return self._write(links, html)

        self.session.begin_page()
        theme = self.config.theme
        if nav_index.tree:
            logger.warning(
                "No documentation pages available for %s; rendering the version landing.",
                self.entry.label,
            )
            html = render_version_landing(
                nav_index, links=links, theme=theme, branding=branding, env=self.env
            )
        else:
            logger.warning(
                "No documentation pages available to render default landing for %s",
                self.entry.label,
            )
            html = render_placeholder_page(
                nav_index, links=links, theme=theme, branding=branding, env=self.env
            )
        return self._write(links, html)

    def render_categories(self) -> list[str]:
        written: list[str] = []
        for category in self.nav_index.categories.values():
            links = self.layout.page(category.output_path_relative)
            self._begin(category.content, category.id)
            html = render_category_page(
                category,
                self.nav_index,
                links=links,
                ctx=self._context(links),
                branding=self.config.branding,
                env=self.env,
            )
            written.append(self._write(links, html))
        return written

    def render_documents(self) -> list[str]:
        written: list[str] = []
        for doc in self.nav_index.documents.values():
            links = self.layout.page(doc.output_path_relative)
            self._begin(doc.content, doc.id)
            html = render_document_page(
                doc,
                self.nav_index,
                links=links,
                ctx=self._context(links),
                branding=self.config.branding,
                env=self.env,
            )
            written.append(self._write(links, html))
        return written

    def copy_media(self) -> list[str]:
        """Return the referenced media that the site can serve.

        Separate builds copy each file next to the pages; inline sites serve
        media from the data root, so only presence is checked. Missing files
        are logged and left out of the manifest.
        """
        media = collect_media_paths(self.entry, self.config.public_data_path)
        if self.layout.separate_build:
            return copy_referenced_media(
                media,
                self.entry.version_root,
                self.layout.site_dir,
                label=self.entry.label,
            )
        present: list[str] = []
        for inside, referrers in media.items():
            if (self.entry.version_root / inside).is_file():
                present.append(inside)
            else:
                warn_missing_media(self.entry.label, inside, referrers)
        return present

    def write_manifest(
        self,
        index: str,
        categories: cabc.Iterable[str],
        docs: cabc.Iterable[str],
        media: cabc.Iterable[str],
    ) -> Path:
        """Write ``static-manifest.json`` describing the version output."""
        static_styles = os.path.relpath(
            self.layout.static_assets_dir, self.layout.site_dir
        ).replace(os.sep, "/")
        manifest = {
            "version": self.entry.version.version,
            "generatedAt": dt.datetime.now(dt.UTC).isoformat(),
            "index": index,
            "categories": sorted(set(categories)),
            "docs": sorted(set(docs)),
            "charts": sorted(set(self.charts.list_assets())),
            "media": sorted(set(media)),
            "staticStylesPath": static_styles,
            "assetsManifest": f"{static_styles.rstrip('/')}/{ASSETS_MANIFEST}",
        }
        path = self.layout.site_dir / STATIC_MANIFEST
        path.write_text(json.dumps(manifest, indent=2), encoding="utf-8")
        return path

    def run(self) -> Path:
        """Render the version and return its site directory.

        Notes
        -----
        Charts referenced by a page are rasterized before that page is
        rendered; a chart that fails to rasterize renders as a placeholder.
        """
        site_dir = self.layout.site_dir
        site_dir.mkdir(parents=True, exist_ok=True)
        index = self.render_index()
        categories = self.render_categories()
        docs = self.render_documents()
        media = self.copy_media()
        self.write_manifest(index, categories, docs, media)
        logger.info("Rendered static HTML for %s -> %s", self.entry.label, site_dir)
        return site_dir


def build_site(
    config: SiteConfig,
    versions: cabc.Collection[str] = (),
    *,
    rasterizer: Rasterizer = render_chart_png,
) -> list[Path]:
    """Generate every requested version and return the site directories.

    Parameters
    ----------
    config : SiteConfig
        Resolved configuration including CLI and environment overrides.
    versions : Collection[str], optional
        Version ids to render; empty renders every version.
    rasterizer : Callable, optional
        Chart rasterizer used for every version.

    Returns
    -------
    list[Path]
        One site directory per rendered entry, in plan order.

    Raises
    ------
    GenerationError
        If no version matches the data root and the requested versions.
    """
    plan = build_render_plan(config, versions)
    if not plan:
        requested = ", ".join(versions) or "<all>"
        msg = (
            f"No versions to render in '{config.data_root}' (requested: {requested})."
        )
        raise GenerationError(msg)

    write_static_assets(
        config.static_assets_dir,
        source_dirs=config.asset_source_dirs,
        pygments_style=config.pygments_style,
    )
    session = RenderSession()
    env = create_environment()
    return [
        VersionRenderer(entry, config, session, rasterizer=rasterizer, env=env).run()
        for entry in plan
    ]


__all__ = ["GenerationError", "VersionRenderer", "build_site"]
