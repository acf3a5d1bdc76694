"""Page shell assembly: Jinja environment, sidebar view-model and breadcrumbs.

Every generated page shares one shell: a header with branding, a desktop and
a mobile sidebar built from the :class:`~docs_html.navigation.NavigationIndex`,
an optional breadcrumb trail and the embedded navigation script. The sidebar
expands only the categories on the path to the active page; collapsed
categories stay in the markup hidden with ``display:none``.
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import functools
import typing as typ
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape
from markupsafe import Markup

from docs_html._constants import NAV_STORAGE_KEY_TEMPLATE
from docs_html.blocks.helpers import class_names
from docs_html.config import HeaderBranding, Theme

if typ.TYPE_CHECKING:
    from docs_html.navigation import NavCategoryEntry, NavigationIndex

DEFAULT_TEMPLATES_DIR = Path(__file__).resolve().parents[1] / "templates"
SHELL_TEMPLATE = "page_shell.jinja"

HrefResolver = cabc.Callable[[str], str]


@dc.dataclass(frozen=True, slots=True)
class BreadcrumbSegment:
    """One breadcrumb item; the last segment of a trail is never linked."""

    label: str
    href: str | None = None


@dc.dataclass(frozen=True, slots=True)
class NavDocLink:
    """Sidebar entry for a document."""

    id: str
    title: str
    href: str
    depth: int = 0
    active: bool = False


@dc.dataclass(frozen=True, slots=True)
class NavCategoryNode:
    """Sidebar entry for a category with its nested documents and children."""

    id: str
    title: str
    href: str
    depth: int
    active: bool
    expanded: bool
    docs: tuple[NavDocLink, ...] = ()
    children: tuple[NavCategoryNode, ...] = ()

    @property
    def has_children(self) -> bool:
        return bool(self.docs or self.children)


@dc.dataclass(frozen=True, slots=True)
class NavigationView:
    """Template-ready sidebar: standalone documents and the category forest."""

    standalone: tuple[NavDocLink, ...]
    tree: tuple[NavCategoryNode, ...]


@dc.dataclass(slots=True)
class PageShell:
    """Inputs shared by every page rendered through the shell template."""

    title: str
    nav_index: NavigationIndex
    stylesheet_href: str
    resolve_href: HrefResolver
    main_content: str = ""
    additional_stylesheets: cabc.Sequence[str] = ()
    breadcrumb: cabc.Sequence[BreadcrumbSegment] | None = None
    active_doc_id: str | None = None
    active_category_id: str | None = None
    branding: HeaderBranding = dc.field(default_factory=HeaderBranding)
    theme: Theme = dc.field(default_factory=Theme)


@functools.cache
def _cached_environment(templates_dir: Path) -> Environment:
    env = Environment(
        loader=FileSystemLoader(str(templates_dir)),
        autoescape=select_autoescape(["html", "xml", "jinja"]),
        trim_blocks=True,
        lstrip_blocks=True,
    )
    env.filters["class_names"] = lambda values: class_names(*values)
    return env


def create_environment(templates_dir: Path | None = None) -> Environment:
    """Return the Jinja environment for ``templates_dir`` (package templates by default)."""
    return _cached_environment((templates_dir or DEFAULT_TEMPLATES_DIR).resolve())


def compute_expanded_category_ids(
    nav_index: NavigationIndex,
    *,
    active_doc_id: str | None = None,
    active_category_id: str | None = None,
) -> set[str]:
    """Return the ids of the categories expanded for the active page.

    Examples
    --------
    >>> from docs_html.navigation import NavigationIndex
    >>> empty = NavigationIndex("1.0", "1.0", "/1.0/", {}, {}, (), ())
    >>> compute_expanded_category_ids(empty, active_doc_id="missing")
    set()
    """
    expanded: set[str] = set()
    if active_doc_id and (doc := nav_index.documents.get(active_doc_id)):
        if doc.parent_category_id:
            expanded.add(doc.parent_category_id)
        expanded.update(doc.ancestor_category_ids)
    if active_category_id and (category := nav_index.categories.get(active_category_id)):
        expanded.add(category.id)
        expanded.update(category.ancestor_category_ids)
    return expanded


def build_navigation_view(
    nav_index: NavigationIndex,
    resolve_href: HrefResolver,
    *,
    active_doc_id: str | None = None,
    active_category_id: str | None = None,
) -> NavigationView:
    """Project the navigation index into sidebar view-models for one page."""
    expanded = compute_expanded_category_ids(
        nav_index, active_doc_id=active_doc_id, active_category_id=active_category_id
    )

    def doc_link(doc_id: str, depth: int) -> NavDocLink | None:
        doc = nav_index.documents.get(doc_id)
        if doc is None:
            return None
        return NavDocLink(
            id=doc.id,
            title=doc.title,
            href=resolve_href(doc.output_path_relative),
            depth=depth,
            active=doc.id == active_doc_id,
        )

    def category_node(category: NavCategoryEntry, depth: int) -> NavCategoryNode:
        docs = (doc_link(doc_id, depth + 1) for doc_id in category.docs)
        children = (
            category_node(child, depth + 1)
            for child_id in category.child_categories
            if (child := nav_index.categories.get(child_id))
        )
        return NavCategoryNode(
            id=category.id,
            title=category.title,
            href=resolve_href(category.output_path_relative),
            depth=depth,
            active=category.id == active_category_id,
            expanded=category.id in expanded,
            docs=tuple(link for link in docs if link is not None),
            children=tuple(children),
        )

    standalone = (
        doc_link(doc.id, 0) for doc in nav_index.standalone_documents
    )
    return NavigationView(
        standalone=tuple(link for link in standalone if link is not None),
        tree=tuple(category_node(category, 0) for category in nav_index.tree),
    )


def shell_context(shell: PageShell) -> dict[str, typ.Any]:
    """Return the template variables consumed by ``page_shell.jinja``."""
    nav_index = shell.nav_index
    return {
        "title": shell.title,
        "version_label": nav_index.version_label,
        "stylesheet_href": shell.stylesheet_href,
        "additional_stylesheets": list(shell.additional_stylesheets),
        "storage_key": NAV_STORAGE_KEY_TEMPLATE.format(version=nav_index.version_id),
        "theme": shell.theme,
        "branding": shell.branding,
        "logo_text": shell.branding.logo_text or nav_index.version_label,
        "nav": build_navigation_view(
            nav_index,
            shell.resolve_href,
            active_doc_id=shell.active_doc_id,
            active_category_id=shell.active_category_id,
        ),
        "breadcrumb": list(shell.breadcrumb or ()),
        "main_content": Markup(shell.main_content),  # noqa: S704 - rendered blocks
    }


def render_page_shell(
    shell: PageShell,
    *,
    template_name: str = SHELL_TEMPLATE,
    env: Environment | None = None,
    **extra: typ.Any,
) -> str:
    """Render ``shell`` through ``template_name``, which extends the shell.

    Parameters
    ----------
    shell : PageShell
        Title, navigation, stylesheets, resolvers and branding for the page.
    template_name : str, optional
        Template to render; page templates extend ``page_shell.jinja`` and
        replace its ``main`` block.
    env : Environment, optional
        Jinja environment; defaults to the package templates.
    **extra : Any
        Additional template variables for the page template.

    Returns
    -------
    str
        The complete HTML document.
    """
    environment = env or create_environment()
    template = environment.get_template(template_name)
    return template.render(**shell_context(shell), **extra)


__all__ = [
    "DEFAULT_TEMPLATES_DIR",
    "BreadcrumbSegment",
    "HrefResolver",
    "NavCategoryNode",
    "NavDocLink",
    "NavigationView",
    "PageShell",
    "build_navigation_view",
    "compute_expanded_category_ids",
    "create_environment",
    "render_page_shell",
    "shell_context",
]
