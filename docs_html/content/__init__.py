"""Documentation content: typed models, the JSON data provider and render plans."""

from .loader import load_products, load_version_data, load_versions
from .models import (
    Block,
    Category,
    ContentError,
    DocItem,
    Product,
    Version,
    VersionData,
    VersionRenderEntry,
)
from .plan import build_render_plan

__all__ = [
    "Block",
    "Category",
    "ContentError",
    "DocItem",
    "Product",
    "Version",
    "VersionData",
    "VersionRenderEntry",
    "build_render_plan",
    "load_products",
    "load_version_data",
    "load_versions",
]
