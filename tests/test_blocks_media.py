"""Tests for image, carousel, comparison, audio and video blocks."""

from __future__ import annotations

import dataclasses as dc

from bs4 import BeautifulSoup

from docs_html.blocks import RenderContext, render_blocks, render_content_block
from docs_html.blocks.media import compare_script
from docs_html.content import Block


def _block(kind: str, data: dict[str, object]) -> Block:
    return Block.from_mapping({"type": kind, f"{kind}Data": data})


def _compare_block() -> Block:
    return _block(
        "imageCompare",
        {
            "beforeImage": {"src": "/docs/1.0/before.png", "alt": "Old"},
            "afterImage": {"src": "/docs/1.0/after.png", "alt": "New"},
            "showPercentage": True,
        },
    )


def test_image_resolves_through_context(ctx: RenderContext) -> None:
    ctx = dc.replace(ctx, resolve_asset_href=lambda ref: f"resolved:{ref}")
    html = render_content_block(
        ctx, _block("image", {"image": {"src": "/docs/1.0/a.png", "alt": "Alt"}, "scale": 0.5})
    )
    assert html is not None
    soup = BeautifulSoup(html, "html.parser")
    assert soup.find("img")["src"] == "resolved:/docs/1.0/a.png"
    assert "width: 50%" in soup.select_one("div[style]")["style"]
    assert soup.find("figcaption").get_text() == "Alt"


def test_external_image_is_not_resolved(ctx: RenderContext) -> None:
    ctx = dc.replace(ctx, resolve_asset_href=lambda ref: f"resolved:{ref}")
    html = render_content_block(
        ctx, _block("image", {"image": {"src": "https://cdn.example.com/a.png"}})
    )
    assert html is not None
    assert 'src="https://cdn.example.com/a.png"' in html


def test_image_without_source_renders_nothing(ctx: RenderContext) -> None:
    assert render_content_block(ctx, _block("image", {"image": {}})) is None


def test_image_grid_scales_cells(ctx: RenderContext) -> None:
    html = render_content_block(
        ctx,
        _block(
            "imageGrid",
            {"images": [{"src": "a.png", "alt": "A"}, {"src": "b.png"}], "scale": 0.5},
        ),
    )
    assert html is not None
    figures = BeautifulSoup(html, "html.parser").find_all("figure")
    assert len(figures) == 2
    assert "scale(0.5)" in figures[0]["style"]


def test_carousel_wraps_navigation(ctx: RenderContext) -> None:
    html = render_content_block(
        ctx,
        _block(
            "imageCarousel",
            {"images": [{"src": "a.png"}, {"src": "b.png"}, {"src": "c.png"}]},
        ),
    )
    assert html is not None
    soup = BeautifulSoup(html, "html.parser")
    assert soup.select_one(".static-carousel")["id"] == "static-carousel-0"
    assert len(soup.select(".static-carousel-input")) == 3
    first_prev = soup.select(".static-carousel-prev")[0]
    last_next = soup.select(".static-carousel-next")[-1]
    assert first_prev["for"] == "static-carousel-0-option-2"
    assert last_next["for"] == "static-carousel-0-option-0"


def test_single_image_carousel_has_no_navigation(ctx: RenderContext) -> None:
    html = render_content_block(ctx, _block("imageCarousel", {"images": [{"src": "a.png"}]}))
    assert html is not None
    assert "static-carousel-navlinks" not in html


def test_compare_slider_has_noscript_fallback(ctx: RenderContext) -> None:
    html = render_content_block(ctx, _compare_block())
    assert html is not None
    soup = BeautifulSoup(html, "html.parser")
    slider = soup.select_one("[data-static-compare]")
    assert slider is not None
    assert slider["data-before-label"] == "Old"
    assert soup.find("input", attrs={"type": "range"})["value"] == "50"
    assert "Enable JavaScript to adjust the comparison slider." in html
    assert soup.select_one("[data-static-compare-summary]") is not None


def test_compare_script_emitted_once_per_page(ctx: RenderContext) -> None:
    page = render_blocks([_compare_block(), _compare_block()], ctx)
    assert page.count("<script>") == 1
    assert compare_script() in page

    ctx.session.begin_page()
    next_page = render_blocks([_compare_block()], ctx)
    assert next_page.count("<script>") == 1
    assert 'id="static-compare-2"' in next_page


def test_individual_compare_renders_side_by_side(ctx: RenderContext) -> None:
    block = Block.from_mapping(
        {
            "type": "imageCompare",
            "imageCompareData": {
                "type": "individual",
                "beforeImage": {"src": "a.png"},
                "afterImage": {"src": "b.png"},
            },
        }
    )
    html = render_content_block(ctx, block)
    assert html is not None
    assert "<script" not in html
    captions = [cap.get_text() for cap in BeautifulSoup(html, "html.parser").find_all("figcaption")]
    assert captions == ["Before", "After"]


def test_audio_block(ctx: RenderContext) -> None:
    html = render_content_block(
        ctx, _block("audio", {"src": "clip.mp3", "mimeType": "audio/mpeg", "caption": "Clip"})
    )
    assert html is not None
    source = BeautifulSoup(html, "html.parser").find("source")
    assert source["src"] == "/clip.mp3"
    assert source["type"] == "audio/mpeg"


def test_youtube_block_embeds_player(ctx: RenderContext) -> None:
    html = render_content_block(
        ctx, _block("youtube", {"youtubeVideoId": "https://www.youtube.com/watch?v=dQw4w9WgXcQ"})
    )
    assert html is not None
    iframe = BeautifulSoup(html, "html.parser").find("iframe")
    assert iframe["src"] == "https://www.youtube.com/embed/dQw4w9WgXcQ"


def test_youtube_block_with_invalid_id(ctx: RenderContext) -> None:
    assert render_content_block(ctx, _block("youtube", {"youtubeVideoId": "nope"})) is None
