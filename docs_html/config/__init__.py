"""Load and validate site configuration YAML for docs_html builds.

This subpackage parses the project's ``docs.yaml`` file, merges theme
overrides over the built-in defaults, applies CLI and environment overrides,
and produces the typed :class:`SiteConfig` consumed by the site builder. The
primary entry point is :func:`load_site_config`.

Examples
--------
>>> from pathlib import Path
>>> from docs_html.config import apply_overrides, load_site_config
>>> site = load_site_config(Path("config/docs.yaml"))  # doctest: +SKIP
>>> site = apply_overrides(site, separate_build=True)  # doctest: +SKIP
>>> site.static_assets_dir  # doctest: +SKIP
PosixPath('dist/html/static-styles')
"""

from .helpers import DEFAULT_THEME
from .loader import (
    apply_overrides,
    default_site_config,
    load_site_config,
    read_env_separate_build,
)
from .models import HeaderBranding, SiteConfig, SiteConfigError, Theme

__all__ = [
    "DEFAULT_THEME",
    "HeaderBranding",
    "SiteConfig",
    "SiteConfigError",
    "Theme",
    "apply_overrides",
    "default_site_config",
    "load_site_config",
    "read_env_separate_build",
]
