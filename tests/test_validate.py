"""Tests for the script-tag scan over generated output."""

from __future__ import annotations

import typing as typ

import pytest

from docs_html.validate import validate_output

if typ.TYPE_CHECKING:
    from pathlib import Path


def _page(path: Path, body: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(f"<html><body>{body}</body></html>", encoding="utf-8")


def test_reports_pages_with_scripts(tmp_path: Path) -> None:
    _page(tmp_path / "1.0" / "index.html", "<SCRIPT>nav()</SCRIPT>")
    _page(tmp_path / "1.0" / "docs" / "a" / "index.html", "<p>no scripts</p>")
    (tmp_path / "1.0" / "notes.txt").write_text("<script>", encoding="utf-8")

    report = validate_output(tmp_path)

    assert report.files == ("1.0/docs/a/index.html", "1.0/index.html")
    assert report.violations == ("1.0/index.html",)
    assert not report.ok
    assert validate_output(tmp_path, allow_scripts=True).ok


def test_clean_output_passes(tmp_path: Path) -> None:
    _page(tmp_path / "index.html", "<noscript>plain</noscript>")
    report = validate_output(tmp_path)
    assert report.ok
    assert report.violations == ()


def test_missing_directory(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError, match="not found"):
        validate_output(tmp_path / "missing")
    report = validate_output(tmp_path / "missing", fail_on_missing=False)
    assert report.files == ()
    assert report.ok
