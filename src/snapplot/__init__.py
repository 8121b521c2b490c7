"""Chart the size of periodic JSON state snapshots over time."""

__version__ = "0.1.0"
