"""Build a chart-ready time series from a directory of snapshots."""

import os
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Iterable, Literal

from .snapshot import MetricExtractor, parse_file
from .timestamps import DEFAULT_DATE_FORMAT, date_from_filename, timestamp_from_filename
from . import log


# Which repeated values are dropped from the plotted series
CollapsePolicy = Literal["adjacent", "global"]

COLLAPSE_POLICIES: tuple[CollapsePolicy, ...] = ("adjacent", "global")


class SnapshotDirectoryError(RuntimeError):
    """The snapshot directory is missing or cannot be listed."""


@dataclass(frozen=True)
class SeriesPoint:
    """A single labeled data point."""
    label: str
    value: float


@dataclass
class TimeSeries:
    """Ordered series of points, one per snapshot date."""

    points: list[SeriesPoint] = field(default_factory=list)

    @property
    def labels(self) -> list[str]:
        return [p.label for p in self.points]

    @property
    def values(self) -> list[float]:
        return [p.value for p in self.points]

    @property
    def is_empty(self) -> bool:
        return len(self.points) == 0

    def __len__(self) -> int:
        return len(self.points)


def list_snapshots(base_dir: Path) -> list[tuple[str, datetime]]:
    """List snapshot files in a directory, ordered by date.

    Files without a timestamp suffix are ignored. Entries are ordered by
    date, then by the full timestamp, so the earliest snapshot of a day comes
    first. Filename order only breaks ties between identical timestamps.

    Raises:
        SnapshotDirectoryError: If the directory cannot be listed
    """
    try:
        names = sorted(os.listdir(base_dir))
    except OSError as e:
        raise SnapshotDirectoryError(f"Cannot read snapshot directory {base_dir}: {e}") from e

    found: list[tuple[datetime, int, str]] = []
    for name in names:
        date = date_from_filename(name)
        if date is None:
            continue
        if not (base_dir / name).is_file():
            continue
        found.append((date, timestamp_from_filename(name), name))

    # Stable sort keeps filename order for equal timestamps
    found.sort(key=lambda entry: (entry[0], entry[1]))
    return [(name, date) for date, _, name in found]


def collapse_repeats(
    points: Iterable[SeriesPoint],
    policy: CollapsePolicy = "adjacent",
) -> list[SeriesPoint]:
    """Drop points that would not change the plotted line.

    With the "adjacent" policy only runs of consecutive equal values are
    collapsed to their first point. The "global" policy also drops a value
    that already appeared anywhere earlier in the series.
    """
    if policy not in COLLAPSE_POLICIES:
        raise ValueError(f"Unknown collapse policy: {policy}")

    result: list[SeriesPoint] = []
    seen: set[float] = set()

    for point in points:
        if result and result[-1].value == point.value:
            continue
        if policy == "global" and point.value in seen:
            continue
        result.append(point)
        seen.add(point.value)

    return result


def build_series(
    base_dir: Path,
    extractor: MetricExtractor,
    date_format: str = DEFAULT_DATE_FORMAT,
    collapse: CollapsePolicy = "adjacent",
) -> TimeSeries:
    """Build the plotted series from every usable snapshot in a directory.

    Unusable snapshots (bad JSON, missing metric) are skipped. Only the
    first snapshot per date label is kept, then repeated values are
    collapsed according to the policy.

    Args:
        base_dir: Snapshot directory
        extractor: Metric extraction rule
        date_format: strftime format for point labels
        collapse: Repeat-collapsing policy

    Returns:
        TimeSeries ordered by snapshot date

    Raises:
        SnapshotDirectoryError: If the directory cannot be listed
    """
    entries = list_snapshots(base_dir)

    labeled: list[SeriesPoint] = []
    seen_labels: set[str] = set()

    for filename, date in entries:
        parsed = parse_file(base_dir, filename, date, extractor, date_format)
        if parsed is None:
            continue

        label, count = parsed
        if label in seen_labels:
            continue
        seen_labels.add(label)
        labeled.append(SeriesPoint(label=label, value=float(count)))

    points = collapse_repeats(labeled, collapse)

    log.debug(
        f"{base_dir}: {len(entries)} snapshots, {len(labeled)} usable dates, "
        f"{len(points)} points after {collapse} collapse"
    )
    return TimeSeries(points=points)
