from __future__ import annotations

import numpy as np

from clickchart.errors import ChartDataError
from clickchart.samples import Sample, SampleSeries
from clickchart.scales import ScaleMapping


def locate_index(series: SampleSeries, pointer_x: float, scales: ScaleMapping) -> int:
    """Index of the sample whose timestamp is closest to the pointer column.

    Exact ties resolve to the earlier sample, and among duplicate timestamps
    the first occurrence wins.
    """

    epochs = series.epochs
    if epochs.size == 0:
        raise ChartDataError("cannot locate a sample in an empty series")
    t0 = scales.x_to_time(pointer_x)
    idx = int(np.searchsorted(epochs, t0, side="left"))
    if idx <= 0:
        best = 0
    elif idx >= epochs.size:
        best = epochs.size - 1
    else:
        left = idx - 1
        right = idx
        if abs(t0 - epochs[left]) <= abs(epochs[right] - t0):
            best = left
        else:
            best = right
    return int(np.searchsorted(epochs, epochs[best], side="left"))


def locate(series: SampleSeries, pointer_x: float, scales: ScaleMapping) -> Sample:
    return series[locate_index(series, pointer_x, scales)]
