"""Raster export of rendered charts through ImageMagick."""

import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from . import log


class RasterError(RuntimeError):
    """The conversion process could not be started."""


@dataclass(frozen=True)
class ConversionResult:
    """Exit status and captured output of a conversion."""

    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    @property
    def output(self) -> str:
        """Combined output text, empty if the converter printed nothing."""
        if not self.stdout and not self.stderr:
            return ""
        return f"{self.stdout.strip()} | {self.stderr.strip()}"


class RasterConverter(Protocol):
    """Converts a vector chart into a raster image."""

    def convert(
        self,
        source: Path,
        destination: Path,
        size: tuple[int, int],
    ) -> ConversionResult:
        ...


@dataclass(frozen=True)
class ImageMagickConverter:
    """Converter that shells out to ImageMagick's ``convert``.

    The output is a few pixels taller than the chart so rotated date labels
    at the bottom edge are not clipped.
    """

    binary: str = "convert"
    density: int = 600
    background: str = "#111"
    extra_height: int = 70

    def command(self, source: Path, destination: Path, size: tuple[int, int]) -> list[str]:
        width, height = size
        return [
            self.binary,
            "-resize", f"{width}x{height + self.extra_height}",
            "-density", str(self.density),
            "-background", self.background,
            str(source),
            str(destination),
        ]

    def convert(
        self,
        source: Path,
        destination: Path,
        size: tuple[int, int],
    ) -> ConversionResult:
        """Run the conversion.

        Raises:
            RasterError: If the converter binary cannot be started
        """
        cmd = self.command(source, destination, size)
        log.debug(f"Running: {' '.join(cmd)}")

        try:
            proc = subprocess.run(cmd, capture_output=True, text=True, check=False)
        except OSError as e:
            raise RasterError(f"Failed to start {self.binary}: {e}") from e

        result = ConversionResult(
            returncode=proc.returncode,
            stdout=proc.stdout or "",
            stderr=proc.stderr or "",
        )
        if not result.ok:
            log.warn(f"{self.binary} exited with status {result.returncode}")
        return result
