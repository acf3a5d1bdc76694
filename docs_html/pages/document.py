"""Document page rendering."""

from __future__ import annotations

import typing as typ

from markupsafe import Markup

from docs_html.blocks import render_blocks

from .shell import BreadcrumbSegment, PageShell, render_page_shell

if typ.TYPE_CHECKING:
    from jinja2 import Environment

    from docs_html.blocks import RenderContext
    from docs_html.config import HeaderBranding
    from docs_html.navigation import NavDocumentEntry, NavigationIndex
    from docs_html.paths import PageLinks

DOCUMENT_TEMPLATE = "document.jinja"


def ancestor_trail(
    nav_index: NavigationIndex,
    ancestor_ids: typ.Iterable[str],
    title: str,
    links: PageLinks,
) -> list[BreadcrumbSegment]:
    """Return linked ancestor categories followed by the unlinked page title."""
    segments = [
        BreadcrumbSegment(
            label=category.title,
            href=links.resolve_href(category.output_path_relative),
        )
        for ancestor_id in ancestor_ids
        if (category := nav_index.categories.get(ancestor_id))
    ]
    segments.append(BreadcrumbSegment(label=title))
    return segments


def render_document_page(
    doc: NavDocumentEntry,
    nav_index: NavigationIndex,
    *,
    links: PageLinks,
    ctx: RenderContext,
    branding: HeaderBranding,
    env: Environment | None = None,
) -> str:
    """Render a document's blocks inside the page shell.

    Parameters
    ----------
    doc : NavDocumentEntry
        Document to render.
    nav_index : NavigationIndex
        Version navigation used for the sidebar and breadcrumb.
    links : PageLinks
        Href resolvers bound to the page's output location.
    ctx : RenderContext
        Block rendering context (theme, asset and chart resolvers, session).
    branding : HeaderBranding
        Header logo and repository link.
    env : Environment, optional
        Jinja environment; defaults to the package templates.
    """
    shell = PageShell(
        title=doc.title,
        nav_index=nav_index,
        stylesheet_href=links.stylesheet,
        additional_stylesheets=links.additional_stylesheets,
        resolve_href=links.resolve_href,
        active_doc_id=doc.id,
        branding=branding,
        theme=ctx.theme,
    )
    return render_page_shell(
        shell,
        template_name=DOCUMENT_TEMPLATE,
        env=env,
        doc=doc,
        segments=ancestor_trail(nav_index, doc.ancestor_category_ids, doc.title, links),
        content_html=Markup(render_blocks(doc.content, ctx)),  # noqa: S704
    )


__all__ = ["ancestor_trail", "render_document_page"]
