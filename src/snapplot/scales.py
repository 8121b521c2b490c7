"""Band and linear scales mapping chart data onto pixel coordinates."""

import math
from dataclasses import dataclass, field
from typing import Sequence


def nice_ticks(start: float, stop: float, count: int = 10) -> list[float]:
    """Return round tick values covering [start, stop].

    Step sizes are 1, 2 or 5 times a power of ten, chosen so that roughly
    ``count`` ticks fall inside the interval.
    """
    lo, hi = min(start, stop), max(start, stop)
    if count <= 0 or hi == lo:
        return [lo]

    raw_step = (hi - lo) / count
    power = 10 ** math.floor(math.log10(raw_step))
    error = raw_step / power
    if error >= math.sqrt(50):
        step = power * 10
    elif error >= math.sqrt(10):
        step = power * 5
    elif error >= math.sqrt(2):
        step = power * 2
    else:
        step = power

    return stepped_ticks(lo, hi, step)


def stepped_ticks(start: float, stop: float, step: float) -> list[float]:
    """Return the multiples of ``step`` inside [start, stop]."""
    if step <= 0:
        raise ValueError(f"Tick step must be positive, got {step}")

    lo, hi = min(start, stop), max(start, stop)
    first = math.ceil(lo / step)
    last = math.floor(hi / step)
    # Multiplying avoids accumulating float error across ticks
    return [round(i * step, 10) for i in range(first, last + 1)]


@dataclass(frozen=True)
class BandScale:
    """Categorical scale dividing a pixel range into equal bands.

    Padding is expressed as a fraction of the band step: inner padding
    separates adjacent bands, outer padding sits before the first and after
    the last band. Leftover space is split evenly on both sides.
    """

    domain: tuple[str, ...]
    range: tuple[float, float]
    inner_padding: float = 0.0
    outer_padding: float = 0.0
    _index: dict[str, int] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        if len(set(self.domain)) != len(self.domain):
            raise ValueError("Band scale domain contains duplicate labels")
        if not 0 <= self.inner_padding <= 1:
            raise ValueError(f"Inner padding must be in [0, 1], got {self.inner_padding}")
        object.__setattr__(self, "_index", {label: i for i, label in enumerate(self.domain)})

    @classmethod
    def from_labels(
        cls,
        labels: Sequence[str],
        range: tuple[float, float],
        inner_padding: float = 0.0,
        outer_padding: float = 0.0,
    ) -> "BandScale":
        return cls(tuple(labels), range, inner_padding, outer_padding)

    @property
    def step(self) -> float:
        n = len(self.domain)
        start, stop = self.range
        return (stop - start) / max(1.0, n - self.inner_padding + self.outer_padding * 2)

    @property
    def bandwidth(self) -> float:
        return self.step * (1 - self.inner_padding)

    @property
    def _offset(self) -> float:
        n = len(self.domain)
        start, stop = self.range
        return start + (stop - start - self.step * (n - self.inner_padding)) / 2

    def __call__(self, label: str) -> float:
        """Pixel position of the start of a label's band."""
        try:
            index = self._index[label]
        except KeyError:
            raise KeyError(f"Label not in band scale domain: {label!r}") from None
        return self._offset + self.step * index

    def center(self, label: str) -> float:
        """Pixel position of the middle of a label's band."""
        return self(label) + self.bandwidth / 2


@dataclass(frozen=True)
class LinearScale:
    """Continuous scale mapping a numeric domain onto a pixel range."""

    domain: tuple[float, float]
    range: tuple[float, float]

    def __post_init__(self):
        d0, d1 = self.domain
        if d0 == d1:
            raise ValueError(f"Linear scale domain has zero width: {self.domain}")

    def __call__(self, value: float) -> float:
        d0, d1 = self.domain
        r0, r1 = self.range
        return r0 + (value - d0) / (d1 - d0) * (r1 - r0)

    def ticks(self, count: int = 10) -> list[float]:
        return nice_ticks(self.domain[0], self.domain[1], count)
