"""Full-page HTML assembly around rendered content blocks."""

from __future__ import annotations

from .category import Card, category_cards, render_category_page
from .document import ancestor_trail, render_document_page
from .landing import render_placeholder_page, render_version_landing
from .shell import (
    BreadcrumbSegment,
    NavigationView,
    PageShell,
    build_navigation_view,
    compute_expanded_category_ids,
    create_environment,
    render_page_shell,
)

__all__ = [
    "BreadcrumbSegment",
    "Card",
    "NavigationView",
    "PageShell",
    "ancestor_trail",
    "build_navigation_view",
    "category_cards",
    "compute_expanded_category_ids",
    "create_environment",
    "render_category_page",
    "render_document_page",
    "render_page_shell",
    "render_placeholder_page",
    "render_version_landing",
]
