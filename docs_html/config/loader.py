"""Load site configuration YAML into typed dataclasses."""

from __future__ import annotations

import dataclasses as dc
import logging
import os
import typing as typ
from pathlib import Path

from ruamel.yaml import YAML

from docs_html._constants import SEPARATE_BUILD_ENV_KEYS

from .helpers import (
    DEFAULT_THEME,
    _build_branding,
    _merge_theme,
    _normalize_base_path,
    _parse_bool,
    _path_list,
)
from .models import SiteConfig, SiteConfigError, Theme

logger = logging.getLogger(__name__)


def default_site_config() -> SiteConfig:
    """Return a configuration populated with the built-in theme."""
    return SiteConfig(theme=Theme(DEFAULT_THEME))


def load_site_config(path: Path) -> SiteConfig:
    """Load the YAML configuration describing data roots, output and theme.

    Parameters
    ----------
    path : Path
        Filesystem path to the YAML configuration file (for example,
        ``config/docs.yaml``).

    Returns
    -------
    SiteConfig
        Parsed configuration with the theme merged over the defaults.

    Raises
    ------
    FileNotFoundError
        If the configuration file does not exist at ``path``.
    TypeError
        If the top-level YAML structure is not a mapping.
    SiteConfigError
        If a section has the wrong shape.
    YAMLError
        If the YAML content cannot be parsed by the underlying loader.

    Examples
    --------
    >>> from pathlib import Path
    >>> from docs_html.config import load_site_config
    >>> config = load_site_config(Path("config/docs.yaml"))  # doctest: +SKIP
    >>> config.public_data_path  # doctest: +SKIP
    '/docs/'
    """
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    if not isinstance(loaded, dict):
        msg = "Top-level YAML structure must be a mapping."
        raise TypeError(msg)
    raw: dict[str, typ.Any] = dict(loaded)

    generator_raw = raw.get("html_generator") or {}
    if not isinstance(generator_raw, dict):
        msg = "'html_generator' must be a mapping."
        raise SiteConfigError(msg)
    branding_raw = raw.get("header_branding")
    if branding_raw is not None and not isinstance(branding_raw, dict):
        msg = "'header_branding' must be a mapping."
        raise SiteConfigError(msg)

    base = default_site_config()
    separate_build = _parse_bool(generator_raw.get("separate_build"))
    return SiteConfig(
        data_root=Path(raw.get("data_root", base.data_root)),
        public_data_path=_normalize_base_path(
            raw.get("public_data_path", base.public_data_path)
        ),
        product_versioning=bool(_parse_bool(raw.get("product_versioning"))),
        branding=_build_branding(branding_raw),
        theme=_merge_theme(base.theme, generator_raw.get("theme")),
        output_directory=Path(
            generator_raw.get("output_directory", base.output_directory)
        ),
        separate_build=bool(separate_build),
        pygments_style=generator_raw.get("pygments_style", base.pygments_style),
        asset_source_dirs=_path_list(
            generator_raw.get("asset_source_dirs"), base.asset_source_dirs
        ),
    )


def read_env_separate_build(environ: typ.Mapping[str, str] | None = None) -> bool | None:
    """Return the separate-build override from the environment, if any."""
    source = os.environ if environ is None else environ
    for key in SEPARATE_BUILD_ENV_KEYS:
        raw = source.get(key)
        if raw is None:
            continue
        parsed = _parse_bool(raw)
        if parsed is not None:
            return parsed
    return None


def apply_overrides(
    config: SiteConfig,
    *,
    data_root: Path | None = None,
    base_path: str | None = None,
    out_dir: Path | None = None,
    separate_build: bool | None = None,
    environ: typ.Mapping[str, str] | None = None,
) -> SiteConfig:
    """Return ``config`` with CLI and environment overrides applied.

    Separate-build precedence is: explicit argument, environment variable,
    configuration file, ``False``.
    """
    env_override = read_env_separate_build(environ)
    if separate_build is not None:
        resolved_separate = separate_build
    elif env_override is not None:
        resolved_separate = env_override
    else:
        resolved_separate = config.separate_build

    if not resolved_separate and out_dir is not None:
        logger.warning("Ignoring --out option because separate build is disabled.")

    return dc.replace(
        config,
        data_root=data_root if data_root is not None else config.data_root,
        public_data_path=(
            _normalize_base_path(base_path)
            if base_path is not None
            else config.public_data_path
        ),
        output_directory=(
            out_dir
            if out_dir is not None and resolved_separate
            else config.output_directory
        ),
        separate_build=resolved_separate,
    )


__all__ = [
    "apply_overrides",
    "default_site_config",
    "load_site_config",
    "read_env_separate_build",
]
