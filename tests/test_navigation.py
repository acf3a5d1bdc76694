"""Tests for flattening category forests into the navigation index."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from docs_html.content import Category, DocItem, Product, Version, VersionRenderEntry
from docs_html.navigation import build_navigation_index


def _entry(
    tree: tuple[Category, ...],
    standalone: tuple[DocItem, ...] = (),
    *,
    product: Product | None = None,
) -> VersionRenderEntry:
    return VersionRenderEntry(
        version=Version("2.0", label="Second"),
        version_root=Path("data/2.0"),
        tree=tree,
        standalone_docs=standalone,
        product=product,
    )


@pytest.fixture
def nested_entry() -> VersionRenderEntry:
    leaf_doc = DocItem(id="leaf-doc", title="Leaf Doc")
    top_doc = DocItem(id="top-doc", title="Top Doc")
    leaf = Category(id="leaf", title="Leaf", docs=(leaf_doc,))
    middle = Category(id="middle", title="Middle", children=(leaf,))
    root = Category(id="root", title="Root", docs=(top_doc,), children=(middle,))
    return _entry((root,), (DocItem(id="about", title="About"),))


def test_index_sizes_match_forest(nested_entry: VersionRenderEntry) -> None:
    index = build_navigation_index(nested_entry)
    assert set(index.categories) == {"root", "middle", "leaf"}
    assert set(index.documents) == {"top-doc", "leaf-doc", "about"}
    assert [category.id for category in index.tree] == ["root"]
    assert [doc.id for doc in index.standalone_documents] == ["about"]
    assert index.duplicate_ids == ()


def test_categories_visited_in_preorder(nested_entry: VersionRenderEntry) -> None:
    index = build_navigation_index(nested_entry)
    assert list(index.categories) == ["root", "middle", "leaf"]


def test_breadcrumbs_and_ancestors(nested_entry: VersionRenderEntry) -> None:
    index = build_navigation_index(nested_entry)
    leaf_doc = index.documents["leaf-doc"]
    assert leaf_doc.breadcrumb == ("Root", "Middle", "Leaf", "Leaf Doc")
    assert leaf_doc.ancestor_category_ids == ("root", "middle", "leaf")
    assert leaf_doc.parent_category_id == "leaf"
    assert not leaf_doc.is_standalone

    leaf = index.categories["leaf"]
    assert leaf.breadcrumb == ("Root", "Middle", "Leaf")
    assert leaf.ancestor_category_ids == ("root", "middle")
    assert leaf.parent_category_id == "middle"
    assert index.categories["root"].parent_category_id is None


def test_every_breadcrumb_ends_with_own_title(nested_entry: VersionRenderEntry) -> None:
    index = build_navigation_index(nested_entry)
    for category in index.categories.values():
        assert category.breadcrumb[-1] == category.title
        assert len(category.breadcrumb) == len(category.ancestor_category_ids) + 1
    for doc in index.documents.values():
        assert doc.breadcrumb[-1] == doc.title


def test_output_paths_depend_on_ids(nested_entry: VersionRenderEntry) -> None:
    index = build_navigation_index(nested_entry)
    assert index.categories["middle"].output_path_relative == "categories/middle/index.html"
    assert index.documents["about"].output_path_relative == "docs/about/index.html"


def test_child_lists_reference_registered_entries(
    nested_entry: VersionRenderEntry,
) -> None:
    index = build_navigation_index(nested_entry)
    root = index.tree[0]
    assert root.docs == ("top-doc",)
    assert root.child_categories == ("middle",)
    assert index.categories["middle"].child_categories == ("leaf",)


def test_version_base_url_includes_product() -> None:
    entry = _entry((), product=Product("engine"))
    index = build_navigation_index(entry, public_base="/docs/")
    assert index.version_base_url == "/docs/engine/2.0/"
    assert index.version_label == "Second"


def test_duplicate_ids_keep_first_occurrence(caplog: pytest.LogCaptureFixture) -> None:
    first = DocItem(id="dup", title="First")
    second = DocItem(id="dup", title="Second")
    tree = (
        Category(id="a", title="A", docs=(first,)),
        Category(id="b", title="B", docs=(second,)),
        Category(id="a", title="A again"),
    )
    with caplog.at_level(logging.WARNING):
        index = build_navigation_index(_entry(tree))

    assert index.documents["dup"].title == "First"
    assert index.categories["a"].title == "A"
    assert index.categories["b"].docs == ()
    assert [category.id for category in index.tree] == ["a", "b"]
    assert set(index.duplicate_ids) == {"dup", "a"}
    assert "Duplicate document id 'dup'" in caplog.text


@pytest.mark.parametrize("bad_id", ["../escape", "a/b", "..", "a\\b"])
def test_path_like_ids_are_skipped(bad_id: str, caplog: pytest.LogCaptureFixture) -> None:
    tree = (
        Category(id="guides", title="Guides", docs=(DocItem(id=bad_id, title="Bad"),)),
        Category(id=bad_id, title="Bad category", docs=(DocItem(id="inner"),)),
    )
    with caplog.at_level(logging.WARNING):
        index = build_navigation_index(_entry(tree))

    assert list(index.documents) == []
    assert list(index.categories) == ["guides"]
    assert index.categories["guides"].docs == ()
    assert f"Skipping document id '{bad_id}' in version 2.0" in caplog.text
    assert f"Skipping category id '{bad_id}' in version 2.0" in caplog.text


def test_default_document_prefers_standalone(nested_entry: VersionRenderEntry) -> None:
    index = build_navigation_index(nested_entry)
    default = index.default_document()
    assert default is not None
    assert default.id == "about"


def test_default_document_falls_back_to_first_embedded() -> None:
    doc = DocItem(id="only", title="Only")
    index = build_navigation_index(_entry((Category(id="c", title="C", docs=(doc,)),)))
    default = index.default_document()
    assert default is not None
    assert default.id == "only"


def test_default_document_none_without_documents() -> None:
    index = build_navigation_index(_entry((Category(id="c", title="C"),)))
    assert index.default_document() is None
