"""Root fixtures for all tests."""

import os
from pathlib import Path

import pytest

from tests.utils.data_generators import DAY_SECONDS, write_snapshot_file


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Clear snapplot env vars and reset config singleton before each test."""
    env_keys = (
        "SNAPPLOT_",
        "SNAPSHOT_DIR",
        "OUT_DIR",
        "SVG_NAME",
        "OUTPUT_NAME",
        "CHART_",
        "PICTURE_",
        "DATE_FORMAT",
        "Y_PADDING",
        "METRIC_",
        "COLLAPSE_POLICY",
        "CONVERT_BIN",
        "RASTER_",
    )

    for key in list(os.environ.keys()):
        for prefix in env_keys:
            if key.startswith(prefix):
                monkeypatch.delenv(key, raising=False)
                break

    # Reset config singleton
    import snapplot.env

    snapplot.env._config = None

    yield

    # Reset again after test
    snapplot.env._config = None


@pytest.fixture
def snapshot_dir(tmp_path):
    """Empty snapshot directory."""
    path = tmp_path / "state_backups"
    path.mkdir()
    return path


@pytest.fixture
def tmp_out_dir(tmp_path):
    """Create temp directory for rendered output."""
    out_dir = tmp_path / "out"
    out_dir.mkdir()
    return out_dir


@pytest.fixture
def configured_env(snapshot_dir, tmp_out_dir, monkeypatch):
    """Set up test environment with temp directories."""
    monkeypatch.setenv("SNAPSHOT_DIR", str(snapshot_dir))
    monkeypatch.setenv("OUT_DIR", str(tmp_out_dir))
    # Reset config to pick up new values
    import snapplot.env

    snapplot.env._config = None
    return {"snapshot_dir": snapshot_dir, "out_dir": tmp_out_dir}


@pytest.fixture
def base_ts():
    """Midnight UTC, 2024-01-01."""
    return 1704067200


@pytest.fixture
def week_of_snapshots(snapshot_dir, base_ts):
    """Seven daily snapshots with a run of equal counts and a later repeat."""
    counts = [3, 5, 5, 5, 8, 5, 6]
    for day, count in enumerate(counts):
        write_snapshot_file(snapshot_dir, base_ts + day * DAY_SECONDS + 3600, count)
    return snapshot_dir


@pytest.fixture
def project_root():
    """Path to the project root directory."""
    return Path(__file__).parent.parent
