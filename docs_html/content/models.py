"""Typed containers for versioned documentation content."""

from __future__ import annotations

import dataclasses as dc
import typing as typ
from pathlib import Path


class ContentError(ValueError):
    """Raised when content data on disk cannot be read or parsed."""


@dc.dataclass(frozen=True, slots=True)
class Block:
    """One typed unit of page content.

    Each block stores its payload under ``<type>Data`` in the source JSON; the
    payload is kept as a plain mapping because renderers read only the keys
    they understand and unknown kinds must survive loading untouched.

    Examples
    --------
    >>> block = Block.from_mapping({"type": "text", "textData": {"text": "Hi"}})
    >>> block.data["text"]
    'Hi'
    """

    type: str
    data: typ.Mapping[str, typ.Any] = dc.field(default_factory=dict)
    spacing: str | None = None

    @classmethod
    def from_mapping(cls, payload: typ.Mapping[str, typ.Any]) -> Block:
        """Build a block from its JSON representation."""
        kind = str(payload.get("type") or "")
        data = payload.get(f"{kind}Data") if kind else None
        spacing = payload.get("spacing")
        return cls(
            type=kind,
            data=dict(data) if isinstance(data, dict) else {},
            spacing=str(spacing) if spacing is not None else None,
        )


@dc.dataclass(frozen=True, slots=True)
class DocItem:
    """A single documentation page."""

    id: str
    title: str = ""
    description: str | None = None
    content: tuple[Block, ...] = ()


@dc.dataclass(frozen=True, slots=True)
class Category:
    """A navigational grouping of documents and nested categories."""

    id: str
    title: str = ""
    description: str | None = None
    content: tuple[Block, ...] = ()
    docs: tuple[DocItem, ...] = ()
    children: tuple[Category, ...] = ()


@dc.dataclass(frozen=True, slots=True)
class Version:
    """One independently rendered documentation release."""

    version: str
    label: str | None = None


@dc.dataclass(frozen=True, slots=True)
class Product:
    """A product whose versions live under their own data directory."""

    product: str
    label: str | None = None


@dc.dataclass(frozen=True, slots=True)
class VersionData:
    """Resolved content for a single version root."""

    items: tuple[DocItem, ...] = ()
    tree: tuple[Category, ...] = ()
    standalone_docs: tuple[DocItem, ...] = ()


@dc.dataclass(frozen=True, slots=True)
class VersionRenderEntry:
    """Everything the version renderer needs for one version (and product)."""

    version: Version
    version_root: Path
    items: tuple[DocItem, ...] = ()
    tree: tuple[Category, ...] = ()
    standalone_docs: tuple[DocItem, ...] = ()
    product: Product | None = None

    @property
    def label(self) -> str:
        """Return a human readable ``product / version`` label for logs."""
        if self.product:
            return f"{self.product.product} / {self.version.version}"
        return self.version.version


__all__ = [
    "Block",
    "Category",
    "ContentError",
    "DocItem",
    "Product",
    "Version",
    "VersionData",
    "VersionRenderEntry",
]
