"""Static HTML documentation site generator.

Versioned JSON content (documents, a category forest and typed content
blocks) is rendered into self-contained static sites with a sidebar,
breadcrumbs, pre-rendered charts and math, and a shared stylesheet bundle.
"""

from .site import GenerationError, VersionRenderer, build_site

__all__ = ["GenerationError", "VersionRenderer", "build_site"]
