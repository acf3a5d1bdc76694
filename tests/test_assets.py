"""Tests for the shared static-styles directory and media copying."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest

from docs_html.assets import (
    collect_media_paths,
    copy_referenced_media,
    rewrite_asset_urls,
    write_static_assets,
)
from docs_html.assets.static import find_stylesheet, highlight_stylesheet
from docs_html.content import Block, Category, DocItem, Product, Version, VersionRenderEntry


def _image(src: str) -> Block:
    return Block.from_mapping({"type": "image", "imageData": {"image": {"src": src}}})


@pytest.mark.parametrize(
    ("css", "expected"),
    [
        ("url(/docs/assets/KaTeX_Main.woff2)", "url(./KaTeX_Main.woff2)"),
        ("url('/assets/logo.svg')", "url('./logo.svg')"),
        ('url("/a/b/assets/x.ttf")', 'url("./x.ttf")'),
        ("url(https://cdn.example.com/assets/x.ttf)", "url(https://cdn.example.com/assets/x.ttf)"),
    ],
)
def test_rewrite_asset_urls(css: str, expected: str) -> None:
    assert rewrite_asset_urls(css) == expected


def test_find_stylesheet_prefers_index_bundle(tmp_path: Path) -> None:
    (tmp_path / "vendor.css").write_text("", encoding="utf-8")
    (tmp_path / "index-1234.css").write_text("", encoding="utf-8")
    assert find_stylesheet([tmp_path / "missing", tmp_path]) == tmp_path / "index-1234.css"
    assert find_stylesheet([tmp_path / "missing"]) is None


def test_unknown_pygments_style_falls_back(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING):
        css = highlight_stylesheet("no-such-style")
    assert ".static-code-block" in css
    assert "no-such-style" in caplog.text


def test_write_static_assets_without_sources(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    assets_dir = tmp_path / "static-styles"
    with caplog.at_level(logging.WARNING):
        write_static_assets(assets_dir, source_dirs=[tmp_path / "nowhere"])

    assert "No CSS assets found" in caplog.text
    assert "Math blocks may render incorrectly offline." in caplog.text
    assert not (assets_dir / "site.css").exists()
    listed = json.loads((assets_dir / "assets-manifest.json").read_text(encoding="utf-8"))
    assert listed == [
        "prism-tomorrow.css",
        "static-carousel.css",
        "static-code-block.css",
        "static-compare.css",
    ]


def _entry(product: Product | None = None) -> VersionRenderEntry:
    doc = DocItem(
        id="a",
        content=(
            _image("/docs/1.0/img/a.png"),
            _image("/docs/2.0/img/other.png"),
            _image("https://example.com/x.png"),
            Block.from_mapping(
                {
                    "type": "imageCompare",
                    "imageCompareData": {
                        "beforeImage": {"src": "/docs/1.0/img/before.png?v=2"},
                        "afterImage": {"src": "/docs/1.0/img/a.png"},
                    },
                }
            ),
        ),
    )
    nested = Category(
        id="child",
        content=(
            Block.from_mapping({"type": "audio", "audioData": {"src": "/docs/1.0/clip.mp3"}}),
            _image("/docs/1.0/img/a.png"),
        ),
    )
    return VersionRenderEntry(
        version=Version("1.0"),
        version_root=Path("data/1.0"),
        items=(doc,),
        tree=(Category(id="root", children=(nested,)),),
        product=product,
    )


def test_collect_media_paths() -> None:
    assert collect_media_paths(_entry(), "/docs/") == {
        "clip.mp3": ("child",),
        "img/a.png": ("a", "child"),
        "img/before.png": ("a",),
    }


def test_collect_media_paths_with_product() -> None:
    entry = _entry(Product("engine"))
    assert collect_media_paths(entry, "/docs/") == {}
    doc = DocItem(id="b", content=(_image("/docs/engine/1.0/shot.png"),))
    with_product = VersionRenderEntry(
        version=Version("1.0"),
        version_root=Path("data/engine/1.0"),
        items=(doc,),
        product=Product("engine"),
    )
    assert collect_media_paths(with_product, "/docs/") == {"shot.png": ("b",)}


def test_copy_referenced_media(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    source = tmp_path / "src"
    (source / "img").mkdir(parents=True)
    (source / "img" / "a.png").write_bytes(b"a")
    (source / "folder.png").mkdir()
    dest = tmp_path / "dest"

    with caplog.at_level(logging.WARNING):
        copied = copy_referenced_media(
            {"img/a.png": ("a",), "missing.png": ("a", "intro"), "folder.png": ("b",)},
            source,
            dest,
            label="1.0",
        )

    assert copied == ["img/a.png"]
    assert (dest / "img" / "a.png").read_bytes() == b"a"
    assert (
        "Missing media asset referenced in version 1.0: missing.png (referenced by a, intro)"
        in caplog.text
    )
    assert "Skipping non-file media asset folder.png" in caplog.text

