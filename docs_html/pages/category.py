"""Category page rendering: optional blocks followed by child and document cards."""

from __future__ import annotations

import dataclasses as dc
import typing as typ

from markupsafe import Markup

from docs_html.blocks import render_blocks

from .document import ancestor_trail
from .shell import PageShell, render_page_shell

if typ.TYPE_CHECKING:
    from jinja2 import Environment

    from docs_html.blocks import RenderContext
    from docs_html.config import HeaderBranding
    from docs_html.navigation import NavCategoryEntry, NavigationIndex
    from docs_html.paths import PageLinks

CATEGORY_TEMPLATE = "category.jinja"


@dc.dataclass(frozen=True, slots=True)
class Card:
    """A linked summary of a child category or a document."""

    title: str
    href: str
    description: str | None = None
    is_category: bool = False


def category_cards(
    category: NavCategoryEntry, nav_index: NavigationIndex, links: PageLinks
) -> list[Card]:
    """Return cards for the child categories first, then the documents."""
    cards = [
        Card(
            title=child.title,
            href=links.resolve_href(child.output_path_relative),
            description=child.description,
            is_category=True,
        )
        for child_id in category.child_categories
        if (child := nav_index.categories.get(child_id))
    ]
    cards.extend(
        Card(
            title=doc.title,
            href=links.resolve_href(doc.output_path_relative),
            description=doc.description,
        )
        for doc_id in category.docs
        if (doc := nav_index.documents.get(doc_id))
    )
    return cards


def render_category_page(
    category: NavCategoryEntry,
    nav_index: NavigationIndex,
    *,
    links: PageLinks,
    ctx: RenderContext,
    branding: HeaderBranding,
    env: Environment | None = None,
) -> str:
    """Render a category page; empty categories show a notice instead of cards."""
    shell = PageShell(
        title=category.title,
        nav_index=nav_index,
        stylesheet_href=links.stylesheet,
        additional_stylesheets=links.additional_stylesheets,
        resolve_href=links.resolve_href,
        active_category_id=category.id,
        branding=branding,
        theme=ctx.theme,
    )
    content_html = render_blocks(category.content, ctx) if category.content else ""
    return render_page_shell(
        shell,
        template_name=CATEGORY_TEMPLATE,
        env=env,
        category=category,
        segments=ancestor_trail(
            nav_index, category.ancestor_category_ids, category.title, links
        ),
        content_html=Markup(content_html),  # noqa: S704
        cards=category_cards(category, nav_index, links),
    )


__all__ = ["Card", "category_cards", "render_category_page"]
