"""Cyclopts CLI entrypoint for generating static HTML documentation sites.

The ``docs-html`` console script defined here renders every configured
version into a self-contained static site and checks generated output for
script tags. Typical usage involves running ``docs-html generate`` in CI and
``docs-html validate`` before publishing to a host that forbids scripting.

Examples
--------
Generate every version in separate-build mode:

>>> from docs_html.cli import app
>>> app.run(["generate", "--separate-build", "--out", "dist/html"])  # doctest: +SKIP

Regenerate two versions into the data root:

>>> app.run(
...     ["generate", "--inline", "--version", "1.0", "--version", "2.0"]
... )  # doctest: +SKIP
"""

from __future__ import annotations

import logging
import sys
import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter

from ._constants import DEFAULT_CONFIG_PATH
from .config import apply_overrides, default_site_config, load_site_config
from .site import GenerationError, build_site
from .validate import validate_output

DEFAULT_CONFIG = Path(DEFAULT_CONFIG_PATH)

logger = logging.getLogger(__name__)

app = App(  # type: ignore[unknown-argument]
    name="docs-html",
    config=cyclopts.config.Env("DOCS_HTML_", command=False),
    version_flags=(),
)


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


def configure_logging(*, quiet: bool = False) -> None:
    """Send log records to stderr at INFO, or WARNING when ``quiet``."""
    logging.basicConfig(
        level=logging.WARNING if quiet else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
        force=True,
    )


@app.command(help="Generate static HTML documentation for the configured versions.")
def generate(
    *,
    config: typ.Annotated[
        Path, Parameter(help="Path to the docs configuration YAML")
    ] = DEFAULT_CONFIG,
    versions: typ.Annotated[
        list[str] | None,
        Parameter(name="--version", help="Version id to render (repeatable)"),
    ] = None,
    data: typ.Annotated[
        Path | None, Parameter(help="Override the content data root")
    ] = None,
    base: typ.Annotated[
        str | None, Parameter(help="Override the public base path for data URLs")
    ] = None,
    out: typ.Annotated[
        Path | None,
        Parameter(help="Output directory (separate build only)"),
    ] = None,
    separate_build: typ.Annotated[
        bool | None,
        Parameter(
            name="--separate-build",
            negative="--inline",
            help="Write sites to the output directory instead of the data root",
        ),
    ] = None,
    quiet: typ.Annotated[
        bool, Parameter(help="Only log warnings and errors")
    ] = False,
) -> None:
    """Generate a static site per version.

    Parameters
    ----------
    config : Path, optional
        Path to ``docs.yaml``; a missing file falls back to the defaults.
    versions : list[str] or None, optional
        Version ids to render; all versions when omitted.
    data : Path or None, optional
        Content data root overriding ``data_root`` from the configuration.
    base : str or None, optional
        Public base path overriding ``public_data_path``.
    out : Path or None, optional
        Output directory; ignored with a warning in inline mode.
    separate_build : bool or None, optional
        Topology override. Precedence is this flag, then the
        ``SEPARATE_BUILD_FOR_HTML_GENERATOR`` environment variable, then the
        configuration file.
    quiet : bool, optional
        Lower the log level to WARNING.

    Raises
    ------
    SystemExit
        With status 1 when nothing could be rendered.
    """
    configure_logging(quiet=quiet)
    if config.exists():
        site_config = load_site_config(config)
    else:
        logger.warning("Configuration file %s not found; using defaults.", config)
        site_config = default_site_config()
    site_config = apply_overrides(
        site_config,
        data_root=data,
        base_path=base,
        out_dir=out,
        separate_build=separate_build,
    )

    try:
        written = build_site(site_config, versions or ())
    except GenerationError as exc:
        logger.error("%s", exc)  # noqa: TRY400 - message only, no traceback
        sys.exit(1)
    for path in written:
        print(f"wrote {_format_path(path)}")


@app.command(help="Fail when generated HTML contains script tags.")
def validate(
    *,
    out: typ.Annotated[
        Path, Parameter(help="Directory holding generated sites")
    ] = Path("dist/html"),
    allow_scripts: typ.Annotated[
        bool, Parameter(help="Report script tags without failing")
    ] = False,
    fail_on_missing: typ.Annotated[
        bool, Parameter(help="Fail when the output directory does not exist")
    ] = True,
) -> None:
    """Scan generated output for ``<script`` tags.

    Raises
    ------
    SystemExit
        With status 1 when scripts are found (and not allowed) or the output
        directory is missing while ``fail_on_missing`` is set.
    """
    configure_logging()
    try:
        report = validate_output(
            out, allow_scripts=allow_scripts, fail_on_missing=fail_on_missing
        )
    except FileNotFoundError as exc:
        logger.error("%s", exc)  # noqa: TRY400 - message only, no traceback
        sys.exit(1)
    for violation in report.violations:
        print(f"script tag in {violation}")
    print(f"checked {len(report.files)} HTML files, {len(report.violations)} with scripts")
    if not report.ok:
        sys.exit(1)


def main() -> None:
    """Invoke the Cyclopts application behind the ``docs-html`` console command.

    Examples
    --------
    >>> main()  # doctest: +SKIP
    """
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
