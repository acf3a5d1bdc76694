"""Rendering context and per-run session state for block renderers."""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import typing as typ

if typ.TYPE_CHECKING:
    from docs_html.config import Theme


class ChartAssetRef(typ.Protocol):
    """Shape of a resolved chart image returned by the chart resolver."""

    src: str
    width: int
    height: int


ChartResolver = cabc.Callable[[typ.Mapping[str, typ.Any], int], ChartAssetRef | None]


@dc.dataclass(slots=True)
class RenderSession:
    """Counters and flags shared by every page rendered in one invocation.

    DOM ids for code, carousel and compare blocks are drawn from run-wide
    counters so they never collide within a page. The compare script flag
    is reset by :meth:`begin_page`, giving each page at most one copy.
    """

    code_blocks: int = 0
    carousels: int = 0
    compare_sliders: int = 0
    compare_script_injected: bool = False

    def begin_page(self) -> None:
        """Reset per-page state before a page's blocks are rendered."""
        self.compare_script_injected = False

    def next_code_block_id(self) -> str:
        block_id = f"code-block-{self.code_blocks}"
        self.code_blocks += 1
        return block_id

    def next_carousel_id(self) -> str:
        carousel_id = f"static-carousel-{self.carousels}"
        self.carousels += 1
        return carousel_id

    def next_compare_id(self) -> str:
        compare_id = f"static-compare-{self.compare_sliders}"
        self.compare_sliders += 1
        return compare_id

    def claim_compare_script(self) -> bool:
        """Return ``True`` the first time the compare script is requested."""
        if self.compare_script_injected:
            return False
        self.compare_script_injected = True
        return True


@dc.dataclass(slots=True)
class RenderContext:
    """Everything a block renderer may consult for the current page."""

    theme: Theme
    current_path: str = ""
    resolve_asset_href: cabc.Callable[[str], str] | None = None
    get_chart_asset_href: ChartResolver | None = None
    math_renderer: cabc.Callable[[str], str] | None = None
    session: RenderSession = dc.field(default_factory=RenderSession)


__all__ = ["ChartAssetRef", "ChartResolver", "RenderContext", "RenderSession"]
