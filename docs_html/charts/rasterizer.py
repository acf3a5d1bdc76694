"""Rasterize chart specifications to PNG bytes with matplotlib's Agg backend.

Chart specifications follow the shape authored in the content data: a
``type``, a list of ``labels`` and a list of ``datasets`` whose ``data`` are
numbers (or ``{"x", "y", "r"}`` points for scatter and bubble charts).
Colours are CSS strings; ``rgb()``/``rgba()`` are translated here and
everything else (hex, named colours) is handed to matplotlib.
"""

from __future__ import annotations

import io
import math
import re
import typing as typ

from matplotlib.backends.backend_agg import FigureCanvasAgg
from matplotlib.colors import to_rgba
from matplotlib.figure import Figure

from .sizing import RADIAL_TYPES, normalise_chart_type

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from matplotlib.axes import Axes

RGBA = tuple[float, float, float, float]

DPI = 100
FONT_SIZE = 11
DEFAULT_PALETTE = (
    "#3b82f6",
    "#ef4444",
    "#10b981",
    "#f59e0b",
    "#8b5cf6",
    "#ec4899",
    "#14b8a6",
    "#6366f1",
)
THEME_FALLBACKS = {
    "legendLabelColor": "#1f2937",
    "gridLineColor": "rgba(0,0,0,0.05)",
    "axisTickColor": "#4b5563",
}
CSS_RGB_PATTERN = re.compile(
    r"^rgba?\(\s*([\d.]+)\s*,\s*([\d.]+)\s*,\s*([\d.]+)\s*(?:,\s*([\d.]+%?)\s*)?\)$",
    re.IGNORECASE,
)


class ChartRenderError(RuntimeError):
    """Raised when a chart specification cannot be rasterized."""


def _css_rgba(value: object | None) -> RGBA | None:
    if not isinstance(value, str):
        return None
    text = value.strip()
    if match := CSS_RGB_PATTERN.match(text):
        red, green, blue, alpha = match.groups()
        if alpha is None:
            opacity = 1.0
        elif alpha.endswith("%"):
            opacity = float(alpha[:-1]) / 100
        else:
            opacity = float(alpha)
        return (
            min(float(red), 255.0) / 255,
            min(float(green), 255.0) / 255,
            min(float(blue), 255.0) / 255,
            min(max(opacity, 0.0), 1.0),
        )
    try:
        return to_rgba(text)
    except ValueError:
        return None


def parse_css_color(value: object | None, fallback: str = "#000000") -> RGBA:
    """Translate a CSS colour string into a matplotlib RGBA tuple.

    The fallback goes through the same translation; opaque black is used
    when neither colour can be read.

    Examples
    --------
    >>> parse_css_color("rgba(0,0,0,0.5)")
    (0.0, 0.0, 0.0, 0.5)
    >>> parse_css_color("not-a-colour", "#ffffff")
    (1.0, 1.0, 1.0, 1.0)
    >>> parse_css_color(None, "rgba(0,0,0,0.05)")
    (0.0, 0.0, 0.0, 0.05)
    """
    return _css_rgba(value) or _css_rgba(fallback) or (0.0, 0.0, 0.0, 1.0)


def _number(value: object) -> float:
    if isinstance(value, bool):
        return float(value)
    if isinstance(value, int | float):
        return float(value) if math.isfinite(value) else 0.0
    if isinstance(value, dict):
        return _number(value.get("y"))
    try:
        return float(str(value))
    except ValueError:
        return 0.0


def _dataset_colour(dataset: typ.Mapping[str, typ.Any], key: str, index: int) -> RGBA:
    value = dataset.get(key)
    if isinstance(value, list):
        value = value[0] if value else None
    return parse_css_color(value, DEFAULT_PALETTE[index % len(DEFAULT_PALETTE)])


def _segment_colours(dataset: typ.Mapping[str, typ.Any], count: int) -> list[RGBA]:
    value = dataset.get("backgroundColor")
    colours: list[RGBA] = []
    for index in range(count):
        declared = value[index] if isinstance(value, list) and index < len(value) else None
        if isinstance(value, str) and count == 1:
            declared = value
        colours.append(
            parse_css_color(declared, DEFAULT_PALETTE[index % len(DEFAULT_PALETTE)])
        )
    return colours


def _points(values: cabc.Sequence[typ.Any]) -> list[tuple[float, float, float]]:
    points: list[tuple[float, float, float]] = []
    for index, value in enumerate(values):
        if isinstance(value, dict):
            points.append(
                (_number(value.get("x")), _number(value.get("y")), _number(value.get("r")))
            )
        else:
            points.append((float(index), _number(value), 0.0))
    return points


def _draw_bar(axes: Axes, labels: list[str], datasets: list[dict[str, typ.Any]]) -> None:
    count = max([len(labels), *(len(ds.get("data") or []) for ds in datasets)], default=0)
    group_width = 0.8
    bar_width = group_width / max(len(datasets), 1)
    for index, dataset in enumerate(datasets):
        values = [_number(value) for value in dataset.get("data") or []]
        offset = -group_width / 2 + bar_width * (index + 0.5)
        axes.bar(
            [position + offset for position in range(len(values))],
            values,
            width=bar_width,
            color=_dataset_colour(dataset, "backgroundColor", index),
            edgecolor=_dataset_colour(dataset, "borderColor", index),
            linewidth=dataset.get("borderWidth", 2),
            label=dataset.get("label"),
        )
    axes.set_xticks(range(count), [*labels, *[""] * (count - len(labels))][:count])


def _draw_line(axes: Axes, labels: list[str], datasets: list[dict[str, typ.Any]]) -> None:
    for index, dataset in enumerate(datasets):
        values = [_number(value) for value in dataset.get("data") or []]
        colour = _dataset_colour(dataset, "borderColor", index)
        axes.plot(
            range(len(values)),
            values,
            color=colour,
            linewidth=dataset.get("borderWidth", 3),
            marker="o",
            markersize=dataset.get("pointRadius", 4) * 1.5,
            label=dataset.get("label"),
        )
        if dataset.get("fill"):
            axes.fill_between(
                range(len(values)),
                values,
                color=_dataset_colour(dataset, "backgroundColor", index),
                alpha=0.3,
            )
    if labels:
        axes.set_xticks(range(len(labels)), labels)


def _draw_scatter(
    axes: Axes, _labels: list[str], datasets: list[dict[str, typ.Any]], *, bubble: bool = False
) -> None:
    for index, dataset in enumerate(datasets):
        points = _points(dataset.get("data") or [])
        if not points:
            continue
        xs, ys, radii = zip(*points, strict=True)
        sizes = [max(radius, 1.0) ** 2 * 4 for radius in radii] if bubble else 48
        axes.scatter(
            xs,
            ys,
            s=sizes,
            color=_dataset_colour(dataset, "backgroundColor", index),
            edgecolors=[_dataset_colour(dataset, "borderColor", index)],
            alpha=0.8 if bubble else 1.0,
            label=dataset.get("label"),
        )


def _draw_pie(
    axes: Axes, labels: list[str], datasets: list[dict[str, typ.Any]], *, doughnut: bool = False
) -> None:
    dataset = datasets[0] if datasets else {}
    values = [max(_number(value), 0.0) for value in dataset.get("data") or []]
    if not any(values):
        return
    wedge_props: dict[str, typ.Any] = {"edgecolor": "white", "linewidth": 2}
    if doughnut:
        wedge_props["width"] = 0.5
    axes.pie(
        values,
        labels=None,
        colors=_segment_colours(dataset, len(values)),
        wedgeprops=wedge_props,
        startangle=90,
        counterclock=False,
    )
    axes.set_aspect("equal")
    axes.legend(
        [*labels, *[""] * (len(values) - len(labels))][: len(values)],
        loc="center left",
        bbox_to_anchor=(1.0, 0.5),
        frameon=False,
    )


def _angles(count: int) -> list[float]:
    return [2 * math.pi * index / count for index in range(count)]


def _draw_radar(axes: Axes, labels: list[str], datasets: list[dict[str, typ.Any]]) -> None:
    count = max([len(labels), *(len(ds.get("data") or []) for ds in datasets)], default=0)
    if count == 0:
        return
    angles = _angles(count)
    for index, dataset in enumerate(datasets):
        values = [_number(value) for value in dataset.get("data") or []]
        values = [*values, *[0.0] * (count - len(values))][:count]
        closed_angles = [*angles, angles[0]]
        closed_values = [*values, values[0]]
        axes.plot(
            closed_angles,
            closed_values,
            color=_dataset_colour(dataset, "borderColor", index),
            linewidth=dataset.get("borderWidth", 3),
            marker="o",
            label=dataset.get("label"),
        )
        axes.fill(
            closed_angles,
            closed_values,
            color=_dataset_colour(dataset, "backgroundColor", index),
            alpha=0.25,
        )
    axes.set_xticks(angles, [*labels, *[""] * (count - len(labels))][:count])


def _draw_polar_area(
    axes: Axes, labels: list[str], datasets: list[dict[str, typ.Any]]
) -> None:
    dataset = datasets[0] if datasets else {}
    values = [max(_number(value), 0.0) for value in dataset.get("data") or []]
    if not values:
        return
    angles = _angles(len(values))
    axes.bar(
        angles,
        values,
        width=2 * math.pi / len(values),
        color=_segment_colours(dataset, len(values)),
        edgecolor="white",
        alpha=0.7,
    )
    axes.set_xticks(angles, [*labels, *[""] * (len(values) - len(labels))][: len(values)])


def _style_axes(axes: Axes, chart_theme: typ.Mapping[str, str], *, radial: bool) -> None:
    grid = parse_css_color(
        chart_theme.get("gridLineColor"), THEME_FALLBACKS["gridLineColor"]
    )
    ticks = parse_css_color(
        chart_theme.get("axisTickColor"), THEME_FALLBACKS["axisTickColor"]
    )
    axes.set_facecolor((0, 0, 0, 0))
    axes.grid(visible=True, color=grid)
    axes.set_axisbelow(True)
    axes.tick_params(colors=ticks, labelsize=FONT_SIZE)
    if not radial:
        for spine in axes.spines.values():
            spine.set_color(grid)


def _apply_legend(axes: Axes, chart_theme: typ.Mapping[str, str]) -> None:
    colour = parse_css_color(
        chart_theme.get("legendLabelColor"), THEME_FALLBACKS["legendLabelColor"]
    )
    legend = axes.get_legend()
    if legend is None:
        _handles, names = axes.get_legend_handles_labels()
        if not any(names):
            return
        legend = axes.legend(loc="upper center", bbox_to_anchor=(0.5, 1.12), ncols=4, frameon=False)
    for text in legend.get_texts():
        text.set_color(colour)
        text.set_fontsize(FONT_SIZE)


def render_chart_png(
    chart_spec: typ.Mapping[str, typ.Any],
    width: int,
    height: int,
    chart_theme: typ.Mapping[str, str],
) -> bytes:
    """Rasterize ``chart_spec`` into a transparent PNG of ``width`` x ``height``.

    Parameters
    ----------
    chart_spec : Mapping[str, Any]
        Chart payload with ``type``, ``labels`` and ``datasets``.
    width, height : int
        Output size in pixels.
    chart_theme : Mapping[str, str]
        The ``chart`` theme group (legend, grid and tick colours).

    Returns
    -------
    bytes
        PNG image data.

    Raises
    ------
    ChartRenderError
        If the payload cannot be drawn.
    """
    chart_type = normalise_chart_type(chart_spec.get("type"))
    labels = [str(label) for label in chart_spec.get("labels") or []]
    datasets = [ds for ds in chart_spec.get("datasets") or [] if isinstance(ds, dict)]
    radial = chart_type in RADIAL_TYPES

    figure = Figure(figsize=(width / DPI, height / DPI), dpi=DPI)
    FigureCanvasAgg(figure)
    axes = figure.add_subplot(projection="polar" if radial else None)
    try:
        match chart_type:
            case "line":
                _draw_line(axes, labels, datasets)
            case "scatter" | "bubble":
                _draw_scatter(axes, labels, datasets, bubble=chart_type == "bubble")
            case "pie" | "doughnut":
                _draw_pie(axes, labels, datasets, doughnut=chart_type == "doughnut")
            case "radar":
                _draw_radar(axes, labels, datasets)
            case "polarArea":
                _draw_polar_area(axes, labels, datasets)
            case _:
                _draw_bar(axes, labels, datasets)
        if chart_type not in {"pie", "doughnut"}:
            _style_axes(axes, chart_theme, radial=radial)
        _apply_legend(axes, chart_theme)
        figure.tight_layout(pad=1.5)
        buffer = io.BytesIO()
        figure.savefig(
            buffer, format="png", dpi=DPI, transparent=True, metadata={"Software": None}
        )
    except (TypeError, ValueError, KeyError, IndexError) as exc:
        msg = f"Cannot rasterize {chart_type} chart: {exc}"
        raise ChartRenderError(msg) from exc
    return buffer.getvalue()


__all__ = ["ChartRenderError", "parse_css_color", "render_chart_png"]
