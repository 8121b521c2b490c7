"""Environment variable parsing and configuration."""

import os
from pathlib import Path
from typing import Optional


def get_str(key: str, default: Optional[str] = None) -> Optional[str]:
    """Get string env var."""
    return os.environ.get(key, default)


def get_int(key: str, default: int) -> int:
    """Get integer env var."""
    val = os.environ.get(key)
    if val is None:
        return default
    try:
        return int(val)
    except ValueError:
        return default


def get_bool(key: str, default: bool = False) -> bool:
    """Get boolean env var (0/1, true/false, yes/no)."""
    val = os.environ.get(key, "").lower()
    if not val:
        return default
    return val in ("1", "true", "yes", "on")


def get_float(key: str, default: float) -> float:
    """Get float env var."""
    val = os.environ.get(key)
    if val is None:
        return default
    try:
        return float(val)
    except ValueError:
        return default


def get_path(key: str, default: str) -> Path:
    """Get path env var, expanding user and making absolute."""
    val = os.environ.get(key, default)
    return Path(val).expanduser().resolve()


class Config:
    """Configuration loaded from environment variables."""

    def __init__(self):
        self.debug = get_bool("SNAPPLOT_DEBUG", False)

        # Paths
        self.snapshot_dir = get_path("SNAPSHOT_DIR", "./data/state_backups")
        self.out_dir = get_path("OUT_DIR", "./out")
        self.svg_name = get_str("SVG_NAME", "chart.svg")
        self.output_name = get_str("OUTPUT_NAME", "chart.png")

        # Chart
        self.chart_title = get_str("CHART_TITLE", "Number of chats")
        self.picture_width = get_int("PICTURE_WIDTH", 1920)
        self.picture_height = get_int("PICTURE_HEIGHT", 1080)
        self.date_format = get_str("DATE_FORMAT", "%d.%m.%Y")
        self.chart_style = get_str("CHART_STYLE", "plain")
        self.chart_theme = get_str("CHART_THEME", "dark")  # light | dark
        self.y_padding = get_float("Y_PADDING", 10.0)

        # Metric extraction
        self.metric_field = get_str("METRIC_FIELD", "chats")
        self.metric_rule = get_str("METRIC_RULE", "all")  # all | titled
        self.collapse_policy = get_str("COLLAPSE_POLICY", "adjacent")  # adjacent | global

        # Raster conversion (ImageMagick)
        self.convert_bin = get_str("CONVERT_BIN", "convert")
        self.raster_density = get_int("RASTER_DENSITY", 600)
        self.raster_background = get_str("RASTER_BACKGROUND", "#111")

    @property
    def picture_size(self) -> tuple[int, int]:
        return (self.picture_width, self.picture_height)

    @property
    def svg_path(self) -> Path:
        return self.out_dir / self.svg_name

    @property
    def output_path(self) -> Path:
        return self.out_dir / self.output_name


# Global config instance
_config: Optional[Config] = None


def get_config() -> Config:
    """Get or create the global config instance."""
    global _config
    if _config is None:
        _config = Config()
    return _config


def set_config(cfg: Config) -> None:
    """Make cfg the global config instance (used by log.debug)."""
    global _config
    _config = cfg
