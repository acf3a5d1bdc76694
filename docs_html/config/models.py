"""Typed dataclasses describing docs_html site configuration structures."""

from __future__ import annotations

import dataclasses as dc
import typing as typ
from pathlib import Path

from docs_html._constants import DEFAULT_OUT_DIR, STATIC_STYLES_DIR


class SiteConfigError(ValueError):
    """Raised when the site configuration is invalid or incomplete."""


@dc.dataclass(frozen=True, slots=True)
class Theme:
    """Nested mapping of semantic slot names to CSS classes or colours.

    Groups mirror the page regions that consume them (``text``,
    ``navigation``, ``category``, ``sections``, ``divider``, ``messageBox``,
    ``table``, ``code``, ``buttons``, ``header`` and ``chart``). Every lookup
    goes through :meth:`slot` so callers always provide a fallback.

    Examples
    --------
    >>> theme = Theme({"text": {"general": "text-gray-800"}})
    >>> theme.slot("text", "general")
    'text-gray-800'
    >>> theme.slot("text", "breadcrumb", "text-sm")
    'text-sm'
    """

    groups: typ.Mapping[str, typ.Mapping[str, str]] = dc.field(default_factory=dict)

    def slot(self, group: str, name: str, default: str = "") -> str:
        """Return the configured value for ``group.name`` or ``default``."""
        values = self.groups.get(group) or {}
        value = values.get(name)
        if value is None:
            return default
        return str(value)

    def group(self, name: str) -> dict[str, str]:
        """Return a copy of a whole group, used for hashing chart themes."""
        return dict(self.groups.get(name) or {})


@dc.dataclass(slots=True)
class HeaderBranding:
    """Logo and repository link shown in every page header."""

    logo_text: str | None = None
    logo_src: str | None = None
    logo_alt: str | None = None
    repository_url: str | None = None
    repository_label: str = "GitHub"


@dc.dataclass(slots=True)
class SiteConfig:
    """Resolved settings for one static HTML generation run."""

    data_root: Path = Path("public/data")
    public_data_path: str = "/"
    product_versioning: bool = False
    branding: HeaderBranding = dc.field(default_factory=HeaderBranding)
    theme: Theme = dc.field(default_factory=Theme)
    output_directory: Path = Path(DEFAULT_OUT_DIR)
    separate_build: bool = False
    pygments_style: str = "monokai"
    asset_source_dirs: list[Path] = dc.field(
        default_factory=lambda: [Path("dist/assets")]
    )

    @property
    def out_dir(self) -> Path:
        """Return the root that receives version sites for this topology."""
        if self.separate_build:
            return self.output_directory
        return self.data_root

    @property
    def static_assets_dir(self) -> Path:
        """Return the shared directory holding stylesheets and fonts."""
        return self.out_dir / STATIC_STYLES_DIR


__all__ = ["HeaderBranding", "SiteConfig", "SiteConfigError", "Theme"]
