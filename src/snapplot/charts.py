"""Matplotlib-based chart rendering for snapshot time series.

Scales are computed here rather than by matplotlib: the x axis is a band
scale over the date labels and the y axis a linear scale over the padded
value range. Points are drawn in pixel space using those scales, and the
figure is exported as a fixed-size SVG.
"""

import io
from dataclasses import dataclass
from pathlib import Path
from typing import Literal, Optional

import matplotlib
matplotlib.use('Agg')  # Non-interactive backend for headless rendering
import matplotlib.pyplot as plt

from .scales import BandScale, LinearScale, stepped_ticks
from .series import TimeSeries
from . import log


# Type alias for theme names
ThemeName = Literal["light", "dark"]

# Above this many grid lines the fixed spacing is ignored in favour of nice ticks
MAX_GRID_TICKS = 50


class ChartError(RuntimeError):
    """The chart cannot be computed, drawn or written."""


@dataclass(frozen=True)
class ChartTheme:
    """Color palette for chart rendering."""

    name: str
    # Colors as hex values (without #)
    background: str
    canvas: str
    text: str
    axis: str
    grid: str
    line: str


CHART_THEMES: dict[ThemeName, ChartTheme] = {
    "light": ChartTheme(
        name="light",
        background="faf8f5",
        canvas="ffffff",
        text="1a1915",
        axis="8a857a",
        grid="e8e4dc",
        line="b45309",
    ),
    "dark": ChartTheme(
        name="dark",
        background="111111",  # Matches the raster background
        canvas="161a1e",
        text="f0efe8",
        axis="706d62",
        grid="252a30",
        line="f59e0b",
    ),
}


@dataclass(frozen=True)
class ChartStyle:
    """Layout and drawing options for a chart."""

    name: str
    theme: ChartTheme = CHART_THEMES["dark"]
    # (top, right, bottom, left) in pixels; bottom leaves room for rotated dates
    margins: tuple[int, int, int, int] = (90, 40, 95, 60)
    inner_padding: float = 0.1
    outer_padding: float = 0.1
    y_padding: float = 10.0
    marker: str = "o"
    marker_size: float = 6.0
    line_width: float = 2.0
    point_labels: bool = True
    label_offset: float = 6.0  # points above the marker
    x_label_rotation: int = 90
    grid_spacing: Optional[float] = None  # y units between grid lines, None = no grid


CHART_STYLES: dict[str, ChartStyle] = {
    "plain": ChartStyle(name="plain"),
    "grid": ChartStyle(name="grid", grid_spacing=10.0),
}


def get_chart_theme(name: str) -> ChartTheme:
    """Get a named chart theme."""
    try:
        return CHART_THEMES[name]
    except KeyError:
        raise ValueError(f"Unknown chart theme: {name}") from None


def get_chart_style(name: str) -> ChartStyle:
    """Get a named chart style."""
    try:
        return CHART_STYLES[name]
    except KeyError:
        raise ValueError(f"Unknown chart style: {name}") from None


@dataclass(frozen=True)
class ChartScales:
    """Axis scales for one chart, in plot-area pixel coordinates."""

    x: BandScale
    y: LinearScale
    plot_width: int
    plot_height: int


def compute_scales(
    series: TimeSeries,
    size: tuple[int, int],
    style: ChartStyle,
) -> ChartScales:
    """Compute the x band scale and y linear scale for a series.

    The y domain is the value range widened by ``style.y_padding`` on both
    sides, so a single-point series still gets a usable domain as long as
    the padding is non-zero.

    Args:
        series: Series to plot
        size: (width, height) of the whole chart in pixels
        style: Chart style providing margins and padding

    Returns:
        ChartScales for the plot area

    Raises:
        ChartError: If the series is empty or the y domain has zero width
    """
    if series.is_empty:
        raise ChartError("Cannot chart an empty series")

    width, height = size
    top, right, bottom, left = style.margins
    plot_width = width - left - right
    plot_height = height - top - bottom
    if plot_width <= 0 or plot_height <= 0:
        raise ChartError(f"Margins {style.margins} leave no plot area in {width}x{height}")

    values = series.values
    y_min = min(values) - style.y_padding
    y_max = max(values) + style.y_padding
    if y_min == y_max:
        raise ChartError(f"Value range [{y_min}, {y_max}] has zero width; set a y padding")

    try:
        x_scale = BandScale.from_labels(
            series.labels,
            (0, plot_width),
            inner_padding=style.inner_padding,
            outer_padding=style.outer_padding,
        )
        y_scale = LinearScale((y_min, y_max), (plot_height, 0))
    except ValueError as e:
        raise ChartError(str(e)) from e

    return ChartScales(x=x_scale, y=y_scale, plot_width=plot_width, plot_height=plot_height)


def _format_value(value: float) -> str:
    """Format a metric value for labels (integers without a decimal point)."""
    if float(value).is_integer():
        return str(int(value))
    return f"{value:g}"


def _y_ticks(scales: ChartScales, style: ChartStyle) -> list[float]:
    if style.grid_spacing is not None:
        ticks = stepped_ticks(*scales.y.domain, style.grid_spacing)
        if 0 < len(ticks) <= MAX_GRID_TICKS:
            return ticks
    return scales.y.ticks()


def render_chart_svg(
    series: TimeSeries,
    title: str,
    size: tuple[int, int] = (1920, 1080),
    style: Optional[ChartStyle] = None,
) -> str:
    """Render a series as an SVG line chart using matplotlib.

    Args:
        series: Series to plot
        title: Chart title
        size: (width, height) in pixels
        style: Chart style, defaults to "plain"

    Returns:
        SVG document as a string

    Raises:
        ChartError: If scales cannot be computed or drawing fails
    """
    if style is None:
        style = CHART_STYLES["plain"]

    scales = compute_scales(series, size, style)
    theme = style.theme

    width, height = size
    top, right, bottom, left = style.margins

    dpi = 100
    fig = plt.figure(figsize=(width / dpi, height / dpi), dpi=dpi)

    try:
        fig.patch.set_facecolor(f"#{theme.background}")

        # Axes placed by pixel margins; figure coordinates run bottom-up
        ax = fig.add_axes((
            left / width,
            bottom / height,
            scales.plot_width / width,
            scales.plot_height / height,
        ))
        ax.set_facecolor(f"#{theme.canvas}")
        ax.set_xlim(0, scales.plot_width)
        ax.set_ylim(scales.plot_height, 0)

        ax.spines['top'].set_visible(False)
        ax.spines['right'].set_visible(False)
        ax.spines['left'].set_color(f"#{theme.grid}")
        ax.spines['bottom'].set_color(f"#{theme.grid}")
        ax.tick_params(colors=f"#{theme.axis}", labelsize=10)

        labels = series.labels
        xs = [scales.x.center(label) for label in labels]
        ys = [scales.y(value) for value in series.values]

        ax.plot(
            xs,
            ys,
            color=f"#{theme.line}",
            linewidth=style.line_width,
            marker=style.marker,
            markersize=style.marker_size,
        )

        if style.point_labels:
            for x, y, value in zip(xs, ys, series.values):
                ax.annotate(
                    _format_value(value),
                    xy=(x, y),
                    xytext=(0, style.label_offset),
                    textcoords="offset points",
                    ha="center",
                    va="bottom",
                    fontsize=9,
                    color=f"#{theme.text}",
                )

        ax.set_xticks(xs)
        ax.set_xticklabels(labels, rotation=style.x_label_rotation, ha="center")

        y_ticks = _y_ticks(scales, style)
        ax.set_yticks([scales.y(t) for t in y_ticks])
        ax.set_yticklabels([_format_value(t) for t in y_ticks])

        if style.grid_spacing is not None:
            ax.grid(True, linestyle='-', alpha=0.5, color=f"#{theme.grid}")
            ax.set_axisbelow(True)

        fig.suptitle(
            title,
            y=1 - (top / 2) / height,
            va="center",
            fontsize=16,
            color=f"#{theme.text}",
        )

        svg_buffer = io.StringIO()
        fig.savefig(svg_buffer, format='svg', facecolor=fig.get_facecolor())
        svg_content = svg_buffer.getvalue()
    except (ValueError, RuntimeError) as e:
        raise ChartError(f"Failed to draw chart: {e}") from e
    finally:
        # Ensure figure is closed to prevent memory leaks
        plt.close(fig)

    log.debug(f"Rendered {len(series)} points with style {style.name}")
    return svg_content


def write_chart(svg_content: str, path: Path) -> Path:
    """Write a rendered chart to disk.

    Raises:
        ChartError: If the file cannot be written
    """
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(svg_content)
    except OSError as e:
        raise ChartError(f"Failed to write chart {path}: {e}") from e

    log.debug(f"Wrote chart to {path}")
    return path
