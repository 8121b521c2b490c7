"""End-to-end run: snapshots -> series -> SVG chart -> PNG image."""

import dataclasses
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .charts import (
    ChartError,
    ChartStyle,
    get_chart_style,
    get_chart_theme,
    render_chart_svg,
    write_chart,
)
from .env import Config, get_config, set_config
from .raster import ConversionResult, ImageMagickConverter, RasterConverter
from .series import TimeSeries, build_series
from .snapshot import MetricExtractor, get_extractor
from . import log


@dataclass
class PipelineResult:
    """Artifacts produced by one pipeline run."""

    series: TimeSeries
    svg_path: Path
    output_path: Path
    conversion: ConversionResult


def run_pipeline(
    cfg: Optional[Config] = None,
    extractor: Optional[MetricExtractor] = None,
    style: Optional[ChartStyle] = None,
    converter: Optional[RasterConverter] = None,
) -> PipelineResult:
    """Chart every usable snapshot in the configured directory.

    Args:
        cfg: Run configuration, defaults to the environment config. An explicit
            config also becomes the global one for the run, so logging follows it
        extractor: Metric extraction rule, defaults to cfg.metric_rule
        style: Chart style, defaults to cfg.chart_style with cfg.chart_theme
            and cfg.y_padding
        converter: Raster converter, defaults to ImageMagick

    Returns:
        PipelineResult with the series and written artifact paths

    Raises:
        SnapshotDirectoryError: If the snapshot directory cannot be read
        ChartError: If there is nothing to chart or the SVG cannot be written
        RasterError: If the converter cannot be started
    """
    if cfg is None:
        cfg = get_config()
    else:
        set_config(cfg)
    if extractor is None:
        extractor = get_extractor(cfg.metric_rule, cfg.metric_field)
    if style is None:
        style = dataclasses.replace(
            get_chart_style(cfg.chart_style),
            theme=get_chart_theme(cfg.chart_theme),
            y_padding=cfg.y_padding,
        )
    if converter is None:
        converter = ImageMagickConverter(
            binary=cfg.convert_bin,
            density=cfg.raster_density,
            background=cfg.raster_background,
        )

    started = time.perf_counter()
    series = build_series(
        cfg.snapshot_dir,
        extractor,
        date_format=cfg.date_format,
        collapse=cfg.collapse_policy,
    )
    built = time.perf_counter()
    log.debug(f"Built series in {built - started:.3f}s")

    if series.is_empty:
        raise ChartError(f"No usable snapshots in {cfg.snapshot_dir}")

    svg_content = render_chart_svg(series, cfg.chart_title, cfg.picture_size, style)
    svg_path = write_chart(svg_content, cfg.svg_path)
    rendered = time.perf_counter()
    log.debug(f"Rendered chart in {rendered - built:.3f}s")

    conversion = converter.convert(svg_path, cfg.output_path, cfg.picture_size)
    log.debug(f"Converted chart in {time.perf_counter() - rendered:.3f}s")

    if conversion.output:
        log.info(conversion.output)

    log.info(f"Charted {len(series)} points to {cfg.output_path}")
    return PipelineResult(
        series=series,
        svg_path=svg_path,
        output_path=cfg.output_path,
        conversion=conversion,
    )
