"""Snapshot loading and metric extraction."""

import json
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any, Optional, Protocol

from .timestamps import DEFAULT_DATE_FORMAT, format_date
from . import log


class MetricExtractor(Protocol):
    """Extracts the single charted metric from a snapshot document."""

    name: str

    def extract(self, document: Any) -> Optional[int]:
        """Return the metric, or None if the document lacks the field."""
        ...


def _entities(document: Any, field: str) -> Optional[list]:
    if not isinstance(document, dict):
        return None
    entities = document.get(field)
    if not isinstance(entities, list):
        return None
    return entities


@dataclass(frozen=True)
class CountEntities:
    """Count every member of an entity collection."""

    field: str = "chats"
    name: str = "all"

    def extract(self, document: Any) -> Optional[int]:
        entities = _entities(document, self.field)
        if entities is None:
            return None
        return len(entities)


@dataclass(frozen=True)
class CountTitledEntities:
    """Count members of an entity collection that have a display title."""

    field: str = "chats"
    title_key: str = "title"
    name: str = "titled"

    def extract(self, document: Any) -> Optional[int]:
        entities = _entities(document, self.field)
        if entities is None:
            return None
        return sum(
            1
            for entity in entities
            if isinstance(entity, dict)
            and isinstance(entity.get(self.title_key), str)
            and entity[self.title_key]
        )


def get_extractor(rule: str, field: str = "chats") -> MetricExtractor:
    """Get the metric extractor for a configured rule.

    Args:
        rule: "all" or "titled"
        field: Name of the list-valued field holding the entities

    Returns:
        Extractor instance
    """
    if rule == "all":
        return CountEntities(field=field)
    elif rule == "titled":
        return CountTitledEntities(field=field)
    else:
        raise ValueError(f"Unknown metric rule: {rule}")


def load_snapshot(path: Path) -> Optional[Any]:
    """Load a snapshot document, or None if it cannot be read or parsed."""
    try:
        return json.loads(path.read_text())
    except (json.JSONDecodeError, UnicodeDecodeError, OSError) as e:
        log.debug(f"Skipping unreadable snapshot {path}: {e}")
        return None


def parse_file(
    base_dir: Path,
    filename: str,
    date: datetime,
    extractor: MetricExtractor,
    date_format: str = DEFAULT_DATE_FORMAT,
) -> Optional[tuple[str, int]]:
    """Load one snapshot and extract its labeled metric.

    Args:
        base_dir: Snapshot directory
        filename: Snapshot filename inside base_dir
        date: Snapshot date taken from the filename
        extractor: Metric extraction rule
        date_format: strftime format for the label

    Returns:
        (date label, metric) or None if the snapshot is unusable
    """
    document = load_snapshot(base_dir / filename)
    if document is None:
        return None

    value = extractor.extract(document)
    if value is None:
        log.debug(f"Skipping {filename}: metric '{extractor.name}' not found")
        return None

    return (format_date(date, date_format), value)
