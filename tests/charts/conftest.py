"""Fixtures for chart tests."""

import pytest

from snapplot.charts import CHART_STYLES
from snapplot.series import SeriesPoint, TimeSeries


@pytest.fixture
def plain_style():
    """Default chart style."""
    return CHART_STYLES["plain"]


@pytest.fixture
def grid_style():
    """Chart style with grid overlay."""
    return CHART_STYLES["grid"]


@pytest.fixture
def sample_series():
    """Two weeks of alternating chat counts."""
    values = [12, 14, 13, 17, 21, 20, 25, 24, 26, 30, 28, 29, 33, 31]
    return TimeSeries(
        points=[
            SeriesPoint(label=f"{day + 1:02d}.01.2024", value=float(v))
            for day, v in enumerate(values)
        ]
    )


@pytest.fixture
def empty_series():
    """Series with no points."""
    return TimeSeries()


@pytest.fixture
def single_point_series():
    """Series with a single point of value 42."""
    return TimeSeries(points=[SeriesPoint(label="01.01.2024", value=42.0)])
