"""Read versions, products and document trees from a JSON data root.

Layout::

    <root>/versions.json            [{"version": "1.0", "label": "Release 1"}]
    <root>/products.json            [{"product": "engine", "label": "Engine"}]
    <version root>/items/*.json     one document per file
    <version root>/tree.json        category forest referencing docs by id

Documents not referenced from ``tree.json`` are standalone.
"""

from __future__ import annotations

import json
import logging
import typing as typ
from pathlib import Path

from .models import (
    Block,
    Category,
    ContentError,
    DocItem,
    Product,
    Version,
    VersionData,
)

logger = logging.getLogger(__name__)

VERSIONS_FILE = "versions.json"
PRODUCTS_FILE = "products.json"
ITEMS_DIR = "items"
TREE_FILE = "tree.json"


def _read_json(path: Path) -> typ.Any:  # noqa: ANN401 - JSON is untyped
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        msg = f"Invalid JSON in '{path}': {exc}"
        raise ContentError(msg) from exc


def _read_list(path: Path) -> list[typ.Any]:
    if not path.exists():
        return []
    loaded = _read_json(path)
    if not isinstance(loaded, list):
        msg = f"Expected a JSON list in '{path}'."
        raise ContentError(msg)
    return loaded


def load_versions(root: Path) -> list[Version]:
    """Return the versions listed in ``root/versions.json``.

    Entries may be objects (``{"version": ..., "label": ...}``) or bare
    strings. A missing file yields an empty list.
    """
    versions: list[Version] = []
    for entry in _read_list(root / VERSIONS_FILE):
        match entry:
            case str() as version_id if version_id:
                versions.append(Version(version=version_id))
            case {"version": str() as version_id, **rest} if version_id:
                label = rest.get("label")
                versions.append(Version(version=version_id, label=label or None))
            case _:
                logger.warning("Skipping malformed version entry in %s: %r", root, entry)
    return versions


def load_products(root: Path) -> list[Product]:
    """Return the products listed in ``root/products.json``."""
    products: list[Product] = []
    for entry in _read_list(root / PRODUCTS_FILE):
        match entry:
            case str() as product_id if product_id:
                products.append(Product(product=product_id))
            case {"product": str() as product_id, **rest} if product_id:
                label = rest.get("label")
                products.append(Product(product=product_id, label=label or None))
            case _:
                logger.warning("Skipping malformed product entry in %s: %r", root, entry)
    return products


def _parse_blocks(raw: object) -> tuple[Block, ...]:
    if not isinstance(raw, list):
        return ()
    return tuple(Block.from_mapping(item) for item in raw if isinstance(item, dict))


def _parse_doc(payload: typ.Mapping[str, typ.Any], source: Path) -> DocItem:
    doc_id = payload.get("id")
    if not doc_id:
        msg = f"Document in '{source}' is missing an 'id'."
        raise ContentError(msg)
    return DocItem(
        id=str(doc_id),
        title=str(payload.get("title") or ""),
        description=payload.get("description") or None,
        content=_parse_blocks(payload.get("content")),
    )


def _load_items(version_root: Path) -> list[DocItem]:
    items_dir = version_root / ITEMS_DIR
    if not items_dir.is_dir():
        return []
    items: list[DocItem] = []
    for path in sorted(items_dir.glob("*.json")):
        payload = _read_json(path)
        if not isinstance(payload, dict):
            msg = f"Expected a JSON object in '{path}'."
            raise ContentError(msg)
        items.append(_parse_doc(payload, path))
    return items


class _TreeBuilder:
    """Resolve the raw category forest against the loaded documents."""

    def __init__(self, items: dict[str, DocItem], source: Path) -> None:
        self.items = items
        self.source = source
        self.referenced: set[str] = set()

    def build(self, raw: typ.Sequence[typ.Any]) -> tuple[Category, ...]:
        return tuple(
            self._category(entry) for entry in raw if isinstance(entry, dict)
        )

    def _category(self, payload: typ.Mapping[str, typ.Any]) -> Category:
        category_id = payload.get("id")
        if not category_id:
            msg = f"Category in '{self.source}' is missing an 'id'."
            raise ContentError(msg)
        docs: list[DocItem] = []
        for doc_id in payload.get("docs") or []:
            doc = self.items.get(str(doc_id))
            if doc is None:
                logger.warning(
                    "Category '%s' references unknown document '%s' in %s",
                    category_id,
                    doc_id,
                    self.source,
                )
                continue
            self.referenced.add(doc.id)
            docs.append(doc)
        return Category(
            id=str(category_id),
            title=str(payload.get("title") or ""),
            description=payload.get("description") or None,
            content=_parse_blocks(payload.get("content")),
            docs=tuple(docs),
            children=self.build(payload.get("children") or []),
        )


def load_version_data(version_root: Path) -> VersionData:
    """Load documents and the category forest for one version root.

    Parameters
    ----------
    version_root : Path
        Directory holding ``items/`` and optionally ``tree.json``.

    Returns
    -------
    VersionData
        All documents, the resolved forest and the standalone documents in
        file-name order.

    Raises
    ------
    ContentError
        If a JSON file is malformed or an entry lacks an id.
    """
    items = _load_items(version_root)
    by_id = {item.id: item for item in items}
    builder = _TreeBuilder(by_id, version_root / TREE_FILE)
    tree = builder.build(_read_list(version_root / TREE_FILE))
    standalone = tuple(item for item in items if item.id not in builder.referenced)
    return VersionData(items=tuple(items), tree=tree, standalone_docs=standalone)


__all__ = [
    "ITEMS_DIR",
    "PRODUCTS_FILE",
    "TREE_FILE",
    "VERSIONS_FILE",
    "load_products",
    "load_version_data",
    "load_versions",
]
