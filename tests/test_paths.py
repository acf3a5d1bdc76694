"""Tests for page-relative href resolution in both output topologies."""

from __future__ import annotations

from pathlib import Path

import pytest

from docs_html.config import SiteConfig
from docs_html.content import Product, Version, VersionRenderEntry
from docs_html.paths import (
    SiteLayout,
    join_url,
    logical_href,
    parse_media_reference,
    relative_href,
)


def _layout(tmp_path: Path, *, separate_build: bool, product: str | None = None) -> SiteLayout:
    config = SiteConfig(
        data_root=tmp_path / "data",
        public_data_path="/docs/",
        output_directory=tmp_path / "out",
        separate_build=separate_build,
    )
    entry = VersionRenderEntry(
        version=Version("1.0"),
        version_root=tmp_path / "data" / "1.0",
        product=Product(product) if product else None,
    )
    return SiteLayout.for_entry(config, entry)


@pytest.mark.parametrize(
    ("parts", "expected"),
    [
        (("/docs/", "1.0"), "/docs/1.0/"),
        (("", ""), "/"),
        (("docs", "", "engine", "2.0/"), "/docs/engine/2.0/"),
    ],
)
def test_join_url(parts: tuple[str, ...], expected: str) -> None:
    assert join_url(*parts) == expected


@pytest.mark.parametrize(
    ("page", "target", "expected"),
    [
        ("index.html", "docs/a/index.html", "./docs/a/index.html"),
        ("docs/a/index.html", "docs/b/index.html", "../b/index.html"),
        ("docs/a/index.html", "index.html", "../../index.html"),
        ("categories/x/index.html", "", "../../"),
        ("index.html", "", "./"),
    ],
)
def test_logical_href(page: str, target: str, expected: str) -> None:
    assert logical_href(page, target) == expected


def test_relative_href_between_real_directories(tmp_path: Path) -> None:
    out = tmp_path / "out"
    href = relative_href(out / "1.0" / "docs" / "a", out / "static-styles" / "site.css")
    assert href == "../../../static-styles/site.css"
    assert relative_href(tmp_path, tmp_path / "x.css") == "./x.css"


def test_parse_internal_reference() -> None:
    ref = parse_media_reference("/docs/1.0/images/a.png?v=2", public_base="/docs/")
    assert ref.kind == "internal"
    assert ref.version == "1.0"
    assert ref.path == "images/a.png"


def test_parse_product_reference() -> None:
    ref = parse_media_reference(
        "/docs/engine/3.1/media/clip.mp3", public_base="/docs/", product="engine"
    )
    assert (ref.kind, ref.product, ref.version, ref.path) == (
        "internal",
        "engine",
        "3.1",
        "media/clip.mp3",
    )


@pytest.mark.parametrize(
    "value",
    ["https://cdn.example.com/a.png", "//cdn.example.com/a.png", "data:image/png;base64,AA"],
)
def test_parse_external_reference(value: str) -> None:
    assert parse_media_reference(value, public_base="/docs/").kind == "external"


def test_parse_static_and_unrecognized() -> None:
    static = parse_media_reference("static-styles/site.css", public_base="/docs/")
    assert (static.kind, static.path) == ("static", "site.css")
    assert parse_media_reference("/elsewhere/a.png", public_base="/docs/").kind == "unrecognized"
    assert parse_media_reference("/docs/1.0/../../etc", public_base="/docs/").kind != "internal"


def test_separate_build_layout(tmp_path: Path) -> None:
    layout = _layout(tmp_path, separate_build=True)
    assert layout.site_dir == tmp_path / "out" / "1.0"
    assert layout.static_assets_dir == tmp_path / "out" / "static-styles"

    links = layout.page("docs/intro/index.html")
    assert links.stylesheet == "../../../static-styles/site.css"
    assert links.resolve_href("categories/guides/index.html") == (
        "../../categories/guides/index.html"
    )
    assert links.resolve_asset_href("/docs/1.0/images/a.png") == "../../images/a.png"
    assert len(links.additional_stylesheets) == 4


def test_inline_layout_uses_logical_static_styles(tmp_path: Path) -> None:
    layout = _layout(tmp_path, separate_build=False)
    assert layout.site_dir == tmp_path / "data" / "1.0" / "static"

    index = layout.page("index.html")
    assert index.stylesheet == "./static-styles/site.css"
    doc = layout.page("docs/intro/index.html")
    assert doc.stylesheet == "../../static-styles/site.css"
    assert doc.resolve_asset_href("/docs/1.0/images/a.png") == "../../images/a.png"


def test_product_layout(tmp_path: Path) -> None:
    layout = _layout(tmp_path, separate_build=True, product="engine")
    assert layout.site_dir == tmp_path / "out" / "engine" / "1.0"
    links = layout.page("index.html")
    assert links.stylesheet == "../../static-styles/site.css"
    assert links.resolve_asset_href("/docs/engine/1.0/a.png") == "./a.png"


@pytest.mark.parametrize(
    "reference",
    [
        "https://cdn.example.com/a.png",
        "/docs/2.0/images/a.png",
        "/unrelated/a.png",
    ],
)
def test_foreign_references_unchanged(tmp_path: Path, reference: str) -> None:
    links = _layout(tmp_path, separate_build=True).page("index.html")
    assert links.resolve_asset_href(reference) == reference


def test_page_hrefs_are_never_absolute_or_empty(tmp_path: Path) -> None:
    layout = _layout(tmp_path, separate_build=True)
    pages = ["index.html", "docs/a/index.html", "categories/b/index.html"]
    for page in pages:
        links = layout.page(page)
        for target in [*pages, ""]:
            href = links.resolve_href(target)
            assert href
            assert not href.startswith("/")
