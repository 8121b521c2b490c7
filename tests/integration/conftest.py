"""Integration test fixtures."""

from pathlib import Path

import pytest

from snapplot.raster import ConversionResult


class FakeConverter:
    """Raster converter that records calls and copies the SVG."""

    def __init__(self, returncode: int = 0, stdout: str = "", stderr: str = ""):
        self.calls: list[tuple[Path, Path, tuple[int, int]]] = []
        self.result = ConversionResult(returncode=returncode, stdout=stdout, stderr=stderr)

    def convert(self, source: Path, destination: Path, size: tuple[int, int]) -> ConversionResult:
        self.calls.append((source, destination, size))
        destination.write_bytes(source.read_bytes())
        return self.result


@pytest.fixture
def fake_converter():
    """Converter that never spawns a process."""
    return FakeConverter()
