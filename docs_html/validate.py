"""Check generated HTML for script tags.

Generated pages embed only the navigation script and, where comparison
sliders appear, the slider script. Hosting targets that forbid scripting run
this check to list every page that would be affected.
"""

from __future__ import annotations

import dataclasses as dc
import re
import typing as typ

if typ.TYPE_CHECKING:
    from pathlib import Path

SCRIPT_TAG_PATTERN = re.compile(r"<script\b", re.IGNORECASE)


@dc.dataclass(frozen=True, slots=True)
class ValidationReport:
    """Outcome of :func:`validate_output`.

    ``files`` lists every scanned page and ``violations`` the pages that
    contain a ``<script`` tag, both relative to the scanned directory.
    """

    files: tuple[str, ...] = ()
    violations: tuple[str, ...] = ()
    allow_scripts: bool = False

    @property
    def ok(self) -> bool:
        return self.allow_scripts or not self.violations


def validate_output(
    out_dir: Path, *, allow_scripts: bool = False, fail_on_missing: bool = True
) -> ValidationReport:
    """Scan ``out_dir`` recursively for HTML pages containing scripts.

    Parameters
    ----------
    out_dir : Path
        Directory holding generated sites.
    allow_scripts : bool, optional
        Report violations without failing the check.
    fail_on_missing : bool, optional
        Raise when ``out_dir`` does not exist instead of returning an empty
        report.

    Raises
    ------
    FileNotFoundError
        If ``out_dir`` is missing and ``fail_on_missing`` is true.
    """
    if not out_dir.is_dir():
        if fail_on_missing:
            msg = f"Output directory '{out_dir}' not found."
            raise FileNotFoundError(msg)
        return ValidationReport(allow_scripts=allow_scripts)

    files: list[str] = []
    violations: list[str] = []
    for path in sorted(out_dir.rglob("*.html")):
        if not path.is_file():
            continue
        relative = path.relative_to(out_dir).as_posix()
        files.append(relative)
        if SCRIPT_TAG_PATTERN.search(path.read_text(encoding="utf-8")):
            violations.append(relative)
    return ValidationReport(
        files=tuple(files), violations=tuple(violations), allow_scripts=allow_scripts
    )


__all__ = ["ValidationReport", "validate_output"]
