"""Utility helpers shared by the docs_html configuration loader."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from .models import HeaderBranding, SiteConfigError, Theme

TRUTHY_VALUES = frozenset({"true", "1", "yes", "on"})
FALSY_VALUES = frozenset({"false", "0", "no", "off"})

DEFAULT_THEME: dict[str, dict[str, str]] = {
    "text": {
        "general": "text-base text-gray-700",
        "alternative": "text-sm text-gray-500",
        "documentTitle": "text-3xl font-bold text-gray-900",
        "titleLevel1": "text-3xl text-gray-900",
        "titleLevel2": "text-2xl text-gray-900",
        "titleLevel3": "text-xl text-gray-900",
        "titleAnchor": "text-blue-500 opacity-0 group-hover:opacity-100",
        "list": "text-base text-gray-700 space-y-1",
        "breadcrumb": "text-gray-500",
        "logoText": "text-lg font-semibold text-gray-900",
        "math": "text-gray-900",
    },
    "navigation": {
        "row": "rounded text-gray-700",
        "rowHover": "hover:bg-gray-100",
        "rowActive": "bg-gray-200 font-semibold text-gray-900",
    },
    "category": {
        "cardBody": "bg-white border-gray-200 hover:border-gray-400",
        "cardHeaderText": "text-gray-900",
        "cardDescriptionText": "text-sm text-gray-500",
        "empty": "text-sm text-gray-500",
    },
    "sections": {
        "siteBackground": "bg-gray-50",
        "siteBorders": "border-x border-gray-200",
        "headerBackground": "bg-white border-b border-gray-200",
        "sidebarBackground": "bg-white border-r border-gray-200",
        "contentBackground": "bg-white",
        "documentHeaderBackground": "",
    },
    "divider": {
        "border": "border-gray-300",
        "gradient": "from-transparent via-gray-300 to-transparent",
        "text": "text-gray-500 text-sm",
    },
    "messageBox": {
        "neutral": "bg-gray-50 border-gray-300 text-gray-800",
        "info": "bg-blue-50 border-blue-300 text-blue-900",
        "warning": "bg-yellow-50 border-yellow-300 text-yellow-900",
        "error": "bg-red-50 border-red-300 text-red-900",
        "success": "bg-green-50 border-green-300 text-green-900",
        "quote": "border-l-4 border-gray-300 italic text-gray-600",
    },
    "table": {
        "border": "border-gray-200",
        "headers": "bg-gray-100 font-semibold text-gray-900",
        "rows": "text-gray-700",
        "cornerCell": "bg-gray-200",
        "empty": "text-sm text-gray-500 border border-dashed border-gray-300",
    },
    "code": {
        "header": "bg-gray-800 text-gray-100",
        "language": "text-xs text-gray-300",
        "lines": "text-gray-500",
        "empty": "bg-gray-50 text-gray-500 text-sm border",
    },
    "buttons": {
        "common": "border border-gray-300 rounded",
        "tabSmall": "text-gray-100",
    },
    "header": {
        "mobileNavigationToggle": "text-gray-700",
        "mobileMenuToggle": "text-gray-700",
    },
    "chart": {
        "legendLabelColor": "#1f2937",
        "gridLineColor": "rgba(0,0,0,0.05)",
        "axisTickColor": "#4b5563",
    },
}


def _optional_str(value: object | None) -> str | None:
    """Return a stripped string value or None when empty."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _parse_bool(value: object | None) -> bool | None:
    """Interpret YAML booleans and common truthy/falsy strings."""
    match value:
        case bool():
            return value
        case str() as text:
            normalized = text.strip().lower()
            if normalized in TRUTHY_VALUES:
                return True
            if normalized in FALSY_VALUES:
                return False
            return None
        case _:
            return None


def _normalize_base_path(value: str | None) -> str:
    """Return ``value`` with exactly one leading and trailing slash."""
    stripped = (value or "").strip().strip("/")
    if not stripped:
        return "/"
    return f"/{stripped}/"


def _merge_theme(base: Theme, override: typ.Mapping[str, typ.Any] | None) -> Theme:
    """Merge an override mapping into ``base`` one group at a time."""
    if not override:
        return base
    merged: dict[str, dict[str, str]] = {
        name: dict(values) for name, values in base.groups.items()
    }
    for name, values in override.items():
        if not isinstance(values, dict):
            msg = f"Theme group '{name}' must be a mapping."
            raise SiteConfigError(msg)
        group = merged.setdefault(str(name), {})
        for slot_name, slot_value in values.items():
            if slot_value is None:
                continue
            group[str(slot_name)] = str(slot_value)
    return Theme(merged)


def _build_branding(payload: typ.Mapping[str, typ.Any] | None) -> HeaderBranding:
    """Build header branding from the ``header_branding`` mapping."""
    if not payload:
        return HeaderBranding()
    return HeaderBranding(
        logo_text=_optional_str(payload.get("logo_text")),
        logo_src=_optional_str(payload.get("logo_src")),
        logo_alt=_optional_str(payload.get("logo_alt")),
        repository_url=_optional_str(payload.get("repository_url")),
        repository_label=_optional_str(payload.get("repository_label")) or "GitHub",
    )


def _path_list(value: object | None, default: list[Path]) -> list[Path]:
    """Normalize a string or list of strings into paths."""
    match value:
        case None:
            return list(default)
        case str() as text:
            return [Path(text)]
        case list() as items:
            return [Path(str(item)) for item in items if str(item).strip()]
        case _:
            msg = "'asset_source_dirs' must be a string or a list of strings."
            raise SiteConfigError(msg)


__all__ = [
    "DEFAULT_THEME",
    "_build_branding",
    "_merge_theme",
    "_normalize_base_path",
    "_optional_str",
    "_parse_bool",
    "_path_list",
]
