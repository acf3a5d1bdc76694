"""Turn configuration plus requested versions into render entries."""

from __future__ import annotations

import logging
import typing as typ

from .loader import load_products, load_version_data, load_versions
from .models import Product, Version, VersionRenderEntry

if typ.TYPE_CHECKING:
    from pathlib import Path

    from docs_html.config import SiteConfig

logger = logging.getLogger(__name__)


def _filter_versions(
    versions: list[Version], requested: typ.Collection[str]
) -> list[Version]:
    if not requested:
        return versions
    allowed = set(requested)
    return [version for version in versions if version.version in allowed]


def _entry(root: Path, version: Version, product: Product | None) -> VersionRenderEntry:
    version_root = root / product.product if product else root
    version_root = version_root / version.version
    data = load_version_data(version_root)
    logger.debug(
        "Prepared %sversion %s: %d categories, %d docs, %d standalone",
        f"product {product.product} / " if product else "",
        version.version,
        len(data.tree),
        len(data.items),
        len(data.standalone_docs),
    )
    return VersionRenderEntry(
        version=version,
        version_root=version_root,
        items=data.items,
        tree=data.tree,
        standalone_docs=data.standalone_docs,
        product=product,
    )


def build_render_plan(
    config: SiteConfig, requested_versions: typ.Collection[str] = ()
) -> list[VersionRenderEntry]:
    """Return one render entry per version (and product) to generate.

    Parameters
    ----------
    config : SiteConfig
        Resolved configuration; ``data_root`` and ``product_versioning`` are
        consulted.
    requested_versions : Collection[str], optional
        Version ids to keep; empty means every version.

    Returns
    -------
    list[VersionRenderEntry]
        Entries in data-file order. Product versioning without any products
        falls back to single-root rendering with a warning.
    """
    root = config.data_root
    if config.product_versioning:
        products = load_products(root)
        if products:
            entries: list[VersionRenderEntry] = []
            for product in products:
                versions = _filter_versions(
                    load_versions(root / product.product), requested_versions
                )
                entries.extend(_entry(root, version, product) for version in versions)
            return entries
        logger.warning(
            "Product versioning is enabled but no products were found in %s; "
            "falling back to single-root rendering.",
            root,
        )

    versions = _filter_versions(load_versions(root), requested_versions)
    return [_entry(root, version, None) for version in versions]


__all__ = ["build_render_plan"]
