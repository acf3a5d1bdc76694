"""Relative href computation between generated pages and shared assets.

Every generated page lives at ``<site dir>/<page relative path>``. Links to
other pages, to copied media and to the shared ``static-styles`` directory
are always emitted relative to the current page's directory so the site can
be hosted under any prefix. Two topologies are supported:

``separate build``
    The site is written to ``<out>/<product?>/<version>`` and the shared
    assets to ``<out>/static-styles``; asset hrefs are computed between the
    real directories.
``inline``
    The site is written to ``<data root>/<product?>/<version>/static`` and
    asset hrefs follow the logical convention ``static-styles/<file>``
    relative to each page.

Examples
--------
>>> join_url("/docs/", "engine", "1.0")
'/docs/engine/1.0/'
>>> logical_href("docs/intro/index.html", "categories/guides/index.html")
'../../categories/guides/index.html'
>>> parse_media_reference("https://cdn.example.com/a.png", public_base="/docs/").kind
'external'
"""

from __future__ import annotations

import dataclasses as dc
import os
import posixpath
import re
import typing as typ
from pathlib import Path

from docs_html._constants import (
    EXTRA_STYLESHEETS,
    INLINE_SITE_SUBDIR,
    STATIC_STYLES_DIR,
    STYLESHEET_TARGET,
)

if typ.TYPE_CHECKING:
    from docs_html.config import SiteConfig
    from docs_html.content import VersionRenderEntry

EXTERNAL_PATTERN = re.compile(r"^([a-z][a-z0-9+.-]*:)?//", re.IGNORECASE)

ReferenceKind = typ.Literal["internal", "external", "static", "unrecognized"]


def join_url(*parts: str) -> str:
    """Join URL segments into a slash-normalized absolute path.

    Empty segments are dropped; the result always starts and ends with a
    slash, and ``"/"`` is returned when nothing remains.
    """
    cleaned = [part.strip("/") for part in parts if part]
    cleaned = [part for part in cleaned if part]
    if not cleaned:
        return "/"
    return "/" + "/".join(cleaned) + "/"


def _with_dot_prefix(rel: str) -> str:
    if rel in {"", "."}:
        return "./"
    if rel == ".." or rel.startswith("../"):
        if all(segment == ".." for segment in rel.split("/")):
            return f"{rel}/"
        return rel
    return f"./{rel}"


def logical_href(page_relative: str, target: str) -> str:
    """Return ``target`` relative to the directory of ``page_relative``.

    Both arguments are site-relative POSIX paths; an empty target refers to
    the site root.
    """
    page_dir = posixpath.dirname(page_relative.replace("\\", "/")) or "."
    target_path = target.replace("\\", "/") or "."
    return _with_dot_prefix(posixpath.relpath(target_path, page_dir))


def relative_href(from_dir: Path, target: Path) -> str:
    """Return a ``./``-prefixed POSIX href from ``from_dir`` to ``target``."""
    rel = os.path.relpath(target, from_dir).replace(os.sep, "/")
    return _with_dot_prefix(rel)


@dc.dataclass(frozen=True, slots=True)
class MediaReference:
    """Structured result of :func:`parse_media_reference`."""

    kind: ReferenceKind
    raw: str
    version: str | None = None
    path: str | None = None
    product: str | None = None


def _split(value: str) -> list[str]:
    return [segment for segment in value.split("/") if segment]


def parse_media_reference(
    value: str, *, public_base: str, product: str | None = None
) -> MediaReference:
    """Classify a media reference found in block content.

    Parameters
    ----------
    value : str
        Reference as written in the content (``src`` attributes and the like).
    public_base : str
        Public base URL path under which version data is served.
    product : str, optional
        When product versioning is active, the segment after the base is the
        product id.

    Returns
    -------
    MediaReference
        ``external`` for protocol, protocol-relative and ``data:`` URLs;
        ``internal`` (with ``product``, ``version`` and ``path``) for
        ``<base>/<product?>/<version>/<path>``; ``static`` for references into
        the shared ``static-styles`` directory; ``unrecognized`` otherwise.
    """
    if not value:
        return MediaReference(kind="unrecognized", raw=value)
    if EXTERNAL_PATTERN.match(value) or value.lower().startswith("data:"):
        return MediaReference(kind="external", raw=value)

    parts = _split(value.split("?", 1)[0].split("#", 1)[0])
    base_parts = _split(public_base)
    if parts[: len(base_parts)] == base_parts:
        rest = parts[len(base_parts) :]
        product_id = None
        if product is not None and rest:
            product_id, rest = rest[0], rest[1:]
        if len(rest) >= 2:  # noqa: PLR2004 - version plus at least one segment
            inside = posixpath.normpath("/".join(rest[1:]))
            if not inside.startswith(".."):
                return MediaReference(
                    kind="internal",
                    raw=value,
                    version=rest[0],
                    path=inside,
                    product=product_id,
                )

    if len(parts) >= 2 and parts[-2] == STATIC_STYLES_DIR:  # noqa: PLR2004
        return MediaReference(kind="static", raw=value, path=parts[-1])
    return MediaReference(kind="unrecognized", raw=value)


@dc.dataclass(frozen=True, slots=True)
class SiteLayout:
    """Where one version's site and the shared assets live on disk."""

    site_dir: Path
    static_assets_dir: Path
    version_id: str
    public_base: str = "/"
    separate_build: bool = True
    product: str | None = None

    @classmethod
    def for_entry(cls, config: SiteConfig, entry: VersionRenderEntry) -> SiteLayout:
        """Return the layout of ``entry`` under the configured topology."""
        version_base = config.out_dir
        if entry.product:
            version_base = version_base / entry.product.product
        version_base = version_base / entry.version.version
        site_dir = version_base if config.separate_build else version_base / INLINE_SITE_SUBDIR
        return cls(
            site_dir=site_dir,
            static_assets_dir=config.static_assets_dir,
            version_id=entry.version.version,
            public_base=config.public_data_path,
            separate_build=config.separate_build,
            product=entry.product.product if entry.product else None,
        )

    def page(self, page_relative: str) -> PageLinks:
        """Return the resolvers for the page at ``page_relative``."""
        return PageLinks(self, page_relative.replace("\\", "/"))


@dc.dataclass(frozen=True, slots=True)
class PageLinks:
    """Href resolvers bound to one generated page."""

    layout: SiteLayout
    page_relative: str

    @property
    def page_path(self) -> Path:
        """Absolute output path of the page."""
        return self.layout.site_dir / self.page_relative

    @property
    def page_dir(self) -> Path:
        """Directory containing the page."""
        return self.page_path.parent

    def resolve_href(self, target_relative: str) -> str:
        """Return the href from this page to another generated page."""
        return logical_href(self.page_relative, target_relative)

    def resolve_global_asset_href(self, file_name: str) -> str:
        """Return the href of a file in the shared static-assets directory."""
        if not self.layout.separate_build:
            return logical_href(
                self.page_relative, posixpath.join(STATIC_STYLES_DIR, file_name)
            )
        return relative_href(self.page_dir, self.layout.static_assets_dir / file_name)

    def resolve_asset_href(self, reference: str) -> str:
        """Return the href for a media reference found in block content.

        External references and references to other versions or products are
        returned unchanged.
        """
        parsed = parse_media_reference(
            reference, public_base=self.layout.public_base, product=self.layout.product
        )
        match parsed:
            case MediaReference(kind="static", path=str() as file_name):
                return self.resolve_global_asset_href(file_name)
            case MediaReference(kind="internal", version=version, path=str() as inside) if (
                version == self.layout.version_id
                and parsed.product == self.layout.product
            ):
                if not self.layout.separate_build:
                    return logical_href(self.page_relative, inside)
                return relative_href(self.page_dir, self.layout.site_dir / inside)
            case _:
                return reference

    @property
    def stylesheet(self) -> str:
        """Href of the main site stylesheet."""
        return self.resolve_global_asset_href(STYLESHEET_TARGET)

    @property
    def additional_stylesheets(self) -> list[str]:
        """Hrefs of the highlight, code tab, carousel and compare stylesheets."""
        hrefs = [self.resolve_global_asset_href(name) for name in EXTRA_STYLESHEETS]
        return list(dict.fromkeys(hrefs))


__all__ = [
    "MediaReference",
    "PageLinks",
    "SiteLayout",
    "join_url",
    "logical_href",
    "parse_media_reference",
    "relative_href",
]
