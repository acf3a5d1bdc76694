"""Shared fixtures for building JSON data roots and render contexts."""

from __future__ import annotations

import json
import typing as typ

import pytest

from docs_html.blocks import RenderContext, RenderSession
from docs_html.config import DEFAULT_THEME, SiteConfig, Theme

if typ.TYPE_CHECKING:
    from pathlib import Path

PNG_BYTES = b"\x89PNG\r\n\x1a\nfake"


def write_json(path: Path, payload: object) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


def write_version(
    root: Path,
    version: str,
    *,
    docs: typ.Sequence[dict[str, typ.Any]] = (),
    tree: typ.Sequence[dict[str, typ.Any]] | None = None,
) -> Path:
    """Write ``items/*.json`` and ``tree.json`` for one version root."""
    version_root = root / version
    (version_root / "items").mkdir(parents=True, exist_ok=True)
    for doc in docs:
        write_json(version_root / "items" / f"{doc['id']}.json", doc)
    if tree is not None:
        write_json(version_root / "tree.json", list(tree))
    return version_root


def fake_rasterizer(
    spec: typ.Mapping[str, typ.Any],  # noqa: ARG001
    width: int,  # noqa: ARG001
    height: int,  # noqa: ARG001
    chart_theme: typ.Mapping[str, str],  # noqa: ARG001
) -> bytes:
    return PNG_BYTES


@pytest.fixture
def theme() -> Theme:
    return Theme(DEFAULT_THEME)


@pytest.fixture
def ctx(theme: Theme) -> RenderContext:
    """Render context with a stub math renderer and a fresh session."""
    return RenderContext(
        theme=theme,
        math_renderer=lambda expression: f"<svg data-tex=\"{expression}\"></svg>",
        session=RenderSession(),
    )


@pytest.fixture
def data_root(tmp_path: Path) -> Path:
    """Data root with one version: a guides category, a nested category and a standalone doc."""
    root = tmp_path / "data"
    write_json(root / "versions.json", [{"version": "1.0", "label": "Release 1"}])
    write_version(
        root,
        "1.0",
        docs=[
            {
                "id": "intro",
                "title": "Introduction",
                "description": "Start here",
                "content": [
                    {
                        "type": "title",
                        "titleData": {
                            "text": "Getting Started",
                            "level": 2,
                            "enableAnchorLink": True,
                        },
                    },
                    {
                        "type": "image",
                        "imageData": {
                            "image": {"src": "/docs/1.0/images/shot.png", "alt": "Shot"}
                        },
                    },
                ],
            },
            {
                "id": "install",
                "title": "Install",
                "content": [{"type": "text", "textData": {"text": "pip install it"}}],
            },
            {
                "id": "deep",
                "title": "Deep Dive",
                "content": [],
            },
            {
                "id": "faq",
                "title": "FAQ",
                "content": [{"type": "text", "textData": {"text": "Questions"}}],
            },
        ],
        tree=[
            {
                "id": "guides",
                "title": "Guides",
                "description": "How-to guides",
                "docs": ["intro", "install"],
                "children": [{"id": "advanced", "title": "Advanced", "docs": ["deep"]}],
            },
            {"id": "empty", "title": "Empty"},
        ],
    )
    images = root / "1.0" / "images"
    images.mkdir(parents=True)
    (images / "shot.png").write_bytes(PNG_BYTES)
    return root


@pytest.fixture
def site_config(data_root: Path, tmp_path: Path) -> SiteConfig:
    assets = tmp_path / "assets"
    assets.mkdir()
    (assets / "index-abc123.css").write_text(
        "@font-face{src:url(/docs/assets/KaTeX_Main-Regular.woff2)}", encoding="utf-8"
    )
    (assets / "KaTeX_Main-Regular.woff2").write_bytes(b"font")
    return SiteConfig(
        data_root=data_root,
        public_data_path="/docs/",
        theme=Theme(DEFAULT_THEME),
        output_directory=tmp_path / "out",
        separate_build=True,
        asset_source_dirs=[assets],
    )
