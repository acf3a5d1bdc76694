"""Flatten a version's category forest into a cross-referenced navigation index.

The index is the single source of truth for sidebar rendering, breadcrumbs
and output paths. Categories are visited depth-first in pre-order so parents
are always registered before their descendants. Output paths depend only on
ids: ``categories/<id>/index.html`` and ``docs/<id>/index.html``.

Examples
--------
>>> from pathlib import Path
>>> from docs_html.content import Category, DocItem, Version, VersionRenderEntry
>>> intro = DocItem(id="intro", title="Intro")
>>> entry = VersionRenderEntry(
...     version=Version("1.0"),
...     version_root=Path("data/1.0"),
...     items=(intro,),
...     tree=(Category(id="guides", title="Guides", docs=(intro,)),),
... )
>>> index = build_navigation_index(entry, public_base="/docs/")
>>> index.documents["intro"].breadcrumb
('Guides', 'Intro')
>>> index.version_base_url
'/docs/1.0/'
"""

from __future__ import annotations

import dataclasses as dc
import logging
import typing as typ

from docs_html._constants import CATEGORY_PAGE_TEMPLATE, DOCUMENT_PAGE_TEMPLATE
from docs_html.paths import join_url

if typ.TYPE_CHECKING:
    from docs_html.content import Block, Category, DocItem, VersionRenderEntry

logger = logging.getLogger(__name__)


@dc.dataclass(frozen=True, slots=True)
class NavCategoryEntry:
    """Index-time projection of a category."""

    id: str
    title: str
    description: str | None
    content: tuple[Block, ...]
    breadcrumb: tuple[str, ...]
    ancestor_category_ids: tuple[str, ...]
    output_path_relative: str
    docs: tuple[str, ...] = ()
    child_categories: tuple[str, ...] = ()

    @property
    def parent_category_id(self) -> str | None:
        """Return the id of the enclosing category, if any."""
        return self.ancestor_category_ids[-1] if self.ancestor_category_ids else None


@dc.dataclass(frozen=True, slots=True)
class NavDocumentEntry:
    """Index-time projection of a document."""

    id: str
    title: str
    description: str | None
    content: tuple[Block, ...]
    breadcrumb: tuple[str, ...]
    ancestor_category_ids: tuple[str, ...]
    output_path_relative: str
    is_standalone: bool
    parent_category_id: str | None = None


@dc.dataclass(frozen=True, slots=True)
class NavigationIndex:
    """Lookup maps and ordered views over one version's content."""

    version_id: str
    version_label: str
    version_base_url: str
    categories: typ.Mapping[str, NavCategoryEntry]
    documents: typ.Mapping[str, NavDocumentEntry]
    tree: tuple[NavCategoryEntry, ...]
    standalone_documents: tuple[NavDocumentEntry, ...]
    duplicate_ids: tuple[str, ...] = ()

    def default_document(self) -> NavDocumentEntry | None:
        """Return the document rendered as the version landing page.

        The first standalone document wins, then the first embedded document.
        """
        if self.standalone_documents:
            return self.standalone_documents[0]
        for doc in self.documents.values():
            if not doc.is_standalone:
                return doc
        return next(iter(self.documents.values()), None)


class _IndexBuilder:
    def __init__(self, version_label: str) -> None:
        self.version_label = version_label
        self.categories: dict[str, NavCategoryEntry] = {}
        self.documents: dict[str, NavDocumentEntry] = {}
        self.duplicates: list[str] = []

    def _claim(self, registry: typ.Mapping[str, object], kind: str, item_id: str) -> bool:
        # Ids become output directory names.
        if item_id in {"", ".", ".."} or "/" in item_id or "\\" in item_id:
            logger.warning(
                "Skipping %s id '%s' in version %s; ids must be a single path segment",
                kind,
                item_id,
                self.version_label,
            )
            return False
        if item_id not in registry:
            return True
        logger.warning(
            "Duplicate %s id '%s' in version %s; keeping the first occurrence",
            kind,
            item_id,
            self.version_label,
        )
        self.duplicates.append(item_id)
        return False

    def add_document(
        self,
        doc: DocItem,
        *,
        breadcrumb: tuple[str, ...],
        ancestors: tuple[str, ...],
        parent_id: str | None,
    ) -> NavDocumentEntry | None:
        if not self._claim(self.documents, "document", doc.id):
            return None
        entry = NavDocumentEntry(
            id=doc.id,
            title=doc.title or "",
            description=doc.description,
            content=doc.content,
            breadcrumb=(*breadcrumb, doc.title or ""),
            ancestor_category_ids=ancestors,
            output_path_relative=DOCUMENT_PAGE_TEMPLATE.format(id=doc.id),
            is_standalone=parent_id is None,
            parent_category_id=parent_id,
        )
        self.documents[doc.id] = entry
        return entry

    def add_category(
        self,
        category: Category,
        *,
        parent_breadcrumb: tuple[str, ...],
        ancestors: tuple[str, ...],
    ) -> NavCategoryEntry | None:
        if not self._claim(self.categories, "category", category.id):
            return None
        breadcrumb = (*parent_breadcrumb, category.title or "")
        # Registered before descendants; doc and child ids are filled in below.
        self.categories[category.id] = NavCategoryEntry(
            id=category.id,
            title=category.title or "",
            description=category.description,
            content=category.content,
            breadcrumb=breadcrumb,
            ancestor_category_ids=ancestors,
            output_path_relative=CATEGORY_PAGE_TEMPLATE.format(id=category.id),
        )
        child_ancestors = (*ancestors, category.id)
        doc_ids = [
            entry.id
            for doc in category.docs
            if (
                entry := self.add_document(
                    doc,
                    breadcrumb=breadcrumb,
                    ancestors=child_ancestors,
                    parent_id=category.id,
                )
            )
        ]
        child_ids = [
            entry.id
            for child in category.children
            if (
                entry := self.add_category(
                    child, parent_breadcrumb=breadcrumb, ancestors=child_ancestors
                )
            )
        ]
        completed = dc.replace(
            self.categories[category.id],
            docs=tuple(doc_ids),
            child_categories=tuple(child_ids),
        )
        self.categories[category.id] = completed
        return completed


def build_navigation_index(
    entry: VersionRenderEntry, *, public_base: str = "/"
) -> NavigationIndex:
    """Build the navigation index for one version render entry.

    Parameters
    ----------
    entry : VersionRenderEntry
        Version content: the category forest and the standalone documents.
    public_base : str, optional
        Public base URL path; combined with the optional product and the
        version id into ``version_base_url``.

    Returns
    -------
    NavigationIndex
        Immutable index. Duplicate ids are logged, listed in
        ``duplicate_ids`` and resolved in favour of the first occurrence.
    """
    version_id = entry.version.version
    version_label = entry.version.label or version_id
    builder = _IndexBuilder(entry.label)

    roots = [
        root
        for category in entry.tree
        if (root := builder.add_category(category, parent_breadcrumb=(), ancestors=()))
    ]
    # Refresh roots so they carry their completed doc and child lists.
    tree = tuple(builder.categories[root.id] for root in roots)
    standalone = tuple(
        doc_entry
        for doc in entry.standalone_docs
        if (
            doc_entry := builder.add_document(
                doc, breadcrumb=(), ancestors=(), parent_id=None
            )
        )
    )

    return NavigationIndex(
        version_id=version_id,
        version_label=version_label,
        version_base_url=join_url(
            public_base, entry.product.product if entry.product else "", version_id
        ),
        categories=dict(builder.categories),
        documents=dict(builder.documents),
        tree=tree,
        standalone_documents=standalone,
        duplicate_ids=tuple(builder.duplicates),
    )


__all__ = [
    "NavCategoryEntry",
    "NavDocumentEntry",
    "NavigationIndex",
    "build_navigation_index",
]
