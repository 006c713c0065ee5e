from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, tzinfo
from typing import Iterator, Sequence

import numpy as np

from clickchart.errors import ChartDataError


@dataclass(frozen=True)
class Sample:
    timestamp: datetime
    value: float


@dataclass(frozen=True, eq=False)
class SampleSeries:
    """Ordered, immutable samples with a cached epoch-seconds view.

    Built through `clickchart.adapters.normalize_samples`; the constructor only
    checks the ascending-timestamp invariant and never sorts.
    """

    samples: tuple[Sample, ...]
    epochs: np.ndarray = field(init=False, repr=False)
    values: np.ndarray = field(init=False, repr=False)

    def __post_init__(self) -> None:
        epochs = np.asarray([s.timestamp.timestamp() for s in self.samples], dtype=np.float64)
        values = np.asarray([float(s.value) for s in self.samples], dtype=np.float64)
        if epochs.size > 1 and np.any(np.diff(epochs) < 0):
            idx = int(np.flatnonzero(np.diff(epochs) < 0)[0]) + 1
            raise ChartDataError(f"samples must be ordered by timestamp ascending (index {idx} goes backwards)")
        epochs.setflags(write=False)
        values.setflags(write=False)
        object.__setattr__(self, "epochs", epochs)
        object.__setattr__(self, "values", values)

    def __len__(self) -> int:
        return len(self.samples)

    def __iter__(self) -> Iterator[Sample]:
        return iter(self.samples)

    def __getitem__(self, index: int) -> Sample:
        return self.samples[index]

    @property
    def tzinfo(self) -> tzinfo | None:
        if not self.samples:
            return None
        return self.samples[0].timestamp.tzinfo

    def to_datetime(self, epoch: float) -> datetime:
        """Convert epoch seconds back into the series' time zone (local when naive)."""
        tz = self.tzinfo
        if tz is None:
            return datetime.fromtimestamp(float(epoch))
        return datetime.fromtimestamp(float(epoch), tz=tz)

    @classmethod
    def empty(cls) -> "SampleSeries":
        return cls(samples=())

    @classmethod
    def from_samples(cls, samples: Sequence[Sample]) -> "SampleSeries":
        return cls(samples=tuple(samples))
