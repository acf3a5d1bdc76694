"""Version landing and placeholder pages used when no document can be the index."""

from __future__ import annotations

import typing as typ

from .category import Card
from .shell import BreadcrumbSegment, PageShell, render_page_shell

if typ.TYPE_CHECKING:
    from jinja2 import Environment

    from docs_html.config import HeaderBranding, Theme
    from docs_html.navigation import NavigationIndex
    from docs_html.paths import PageLinks

LANDING_TEMPLATE = "landing.jinja"
PLACEHOLDER_TEMPLATE = "placeholder.jinja"


def _version_shell(
    nav_index: NavigationIndex, links: PageLinks, theme: Theme, branding: HeaderBranding
) -> PageShell:
    return PageShell(
        title=nav_index.version_label,
        nav_index=nav_index,
        stylesheet_href=links.stylesheet,
        additional_stylesheets=links.additional_stylesheets,
        resolve_href=links.resolve_href,
        breadcrumb=[BreadcrumbSegment(label=nav_index.version_label)],
        branding=branding,
        theme=theme,
    )


def render_version_landing(
    nav_index: NavigationIndex,
    *,
    links: PageLinks,
    theme: Theme,
    branding: HeaderBranding,
    env: Environment | None = None,
) -> str:
    """Render category summaries and the standalone document list."""
    cards = [
        Card(
            title=category.title,
            href=links.resolve_href(category.output_path_relative),
            description=category.description,
            is_category=True,
        )
        for category in nav_index.tree
    ]
    return render_page_shell(
        _version_shell(nav_index, links, theme, branding),
        template_name=LANDING_TEMPLATE,
        env=env,
        cards=cards,
    )


def render_placeholder_page(
    nav_index: NavigationIndex,
    *,
    links: PageLinks,
    theme: Theme,
    branding: HeaderBranding,
    env: Environment | None = None,
) -> str:
    """Render the notice shown for a version without any content."""
    return render_page_shell(
        _version_shell(nav_index, links, theme, branding),
        template_name=PLACEHOLDER_TEMPLATE,
        env=env,
    )


__all__ = ["render_placeholder_page", "render_version_landing"]
