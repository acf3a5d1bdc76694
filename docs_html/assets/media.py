"""Collect and copy media files referenced from a version's content blocks."""

from __future__ import annotations

import logging
import shutil
import typing as typ

from docs_html.paths import parse_media_reference

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from pathlib import Path

    from docs_html.content import Block, Category, VersionRenderEntry

logger = logging.getLogger(__name__)


def _iter_strings(value: object) -> cabc.Iterator[str]:
    match value:
        case str():
            yield value
        case dict():
            for item in value.values():
                yield from _iter_strings(item)
        case list() | tuple():
            for item in value:
                yield from _iter_strings(item)
        case _:
            return


def _category_blocks(
    categories: cabc.Iterable[Category],
) -> cabc.Iterator[tuple[str, Block]]:
    for category in categories:
        for block in category.content:
            yield category.id, block
        yield from _category_blocks(category.children)


def _entry_blocks(entry: VersionRenderEntry) -> cabc.Iterator[tuple[str, Block]]:
    for doc in entry.items:
        for block in doc.content:
            yield doc.id, block
    yield from _category_blocks(entry.tree)


def collect_media_paths(
    entry: VersionRenderEntry, public_base: str
) -> dict[str, tuple[str, ...]]:
    """Map each media file ``entry`` references to the ids referencing it.

    Every string value of every block payload is parsed as a media reference;
    only references into this version (and product) are kept. Paths are
    relative to the version root, use forward slashes and are returned in
    sorted order. The document or category ids are sorted as well.
    """
    product = entry.product.product if entry.product else None
    referrers: dict[str, set[str]] = {}
    for owner, block in _entry_blocks(entry):
        for value in _iter_strings(block.data):
            reference = parse_media_reference(
                value, public_base=public_base, product=product
            )
            if (
                reference.kind == "internal"
                and reference.path
                and reference.version == entry.version.version
                and reference.product == product
            ):
                referrers.setdefault(reference.path.lstrip("/"), set()).add(owner)
    return {path: tuple(sorted(referrers[path])) for path in sorted(referrers)}


def warn_missing_media(label: str, inside: str, referrers: cabc.Iterable[str]) -> None:
    """Log a media file that is referenced but absent from the data root."""
    logger.warning(
        "Missing media asset referenced in version %s: %s (referenced by %s)",
        label,
        inside,
        ", ".join(referrers) or "<unknown>",
    )


def copy_referenced_media(
    paths: cabc.Mapping[str, cabc.Collection[str]],
    source_root: Path,
    dest_root: Path,
    *,
    label: str = "",
) -> list[str]:
    """Copy ``paths`` from ``source_root`` to the same location under ``dest_root``.

    Parameters
    ----------
    paths : Mapping[str, Collection[str]]
        In-version media paths and their referencing ids, as returned by
        :func:`collect_media_paths`.
    source_root : Path
        Version directory in the data root.
    dest_root : Path
        Version output directory.
    label : str, optional
        Version label used in log messages.

    Returns
    -------
    list[str]
        The paths that were copied. Missing sources, non-files and copy
        failures are logged and skipped.
    """
    copied: list[str] = []
    for inside, referrers in paths.items():
        source = source_root / inside
        if not source.exists():
            warn_missing_media(label, inside, referrers)
            continue
        if not source.is_file():
            logger.warning(
                "Skipping non-file media asset %s for version %s", inside, label
            )
            continue
        target = dest_root / inside
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            shutil.copyfile(source, target)
        except OSError as exc:
            logger.warning(
                "Failed to copy media asset %s for %s: %s", inside, label, exc
            )
            continue
        logger.debug("Copied media asset for %s: %s", label, inside)
        copied.append(inside)
    return copied


__all__ = ["collect_media_paths", "copy_referenced_media", "warn_missing_media"]
