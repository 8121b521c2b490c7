#!/usr/bin/env python3
"""
Render the snapshot chart.

Reads every timestamped snapshot in SNAPSHOT_DIR, charts the entity count
per day as SVG and converts it to PNG with ImageMagick.
"""

import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from snapplot import log
from snapplot.charts import ChartError
from snapplot.env import get_config
from snapplot.pipeline import run_pipeline
from snapplot.raster import RasterError
from snapplot.series import SnapshotDirectoryError


def main() -> int:
    """Run the pipeline and report fatal errors."""
    cfg = get_config()
    log.info(f"Rendering chart from {cfg.snapshot_dir}...")

    try:
        run_pipeline(cfg)
    except (SnapshotDirectoryError, ChartError, RasterError, ValueError) as e:
        log.error(str(e))
        return 1

    log.info("Chart rendering complete")
    return 0


if __name__ == "__main__":
    sys.exit(main())
