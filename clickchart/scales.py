from __future__ import annotations

from bisect import bisect_left
from dataclasses import dataclass
from datetime import datetime, timezone, tzinfo
from decimal import Decimal, InvalidOperation
from typing import Union

import numpy as np

from clickchart.samples import SampleSeries


VALUE_HEADROOM = 1.2
VALUE_FLOOR = 1.0
TIME_LABEL_FORMAT = "%H:%M"

_SECOND = 1.0
_MINUTE = 60.0
_HOUR = 3600.0
_DAY = 86400.0

# Candidate tick intervals, shortest first.
TIME_TICK_INTERVALS = (
    _SECOND,
    5 * _SECOND,
    15 * _SECOND,
    30 * _SECOND,
    _MINUTE,
    5 * _MINUTE,
    15 * _MINUTE,
    30 * _MINUTE,
    _HOUR,
    3 * _HOUR,
    6 * _HOUR,
    12 * _HOUR,
    _DAY,
    2 * _DAY,
    7 * _DAY,
    30 * _DAY,
    90 * _DAY,
    365 * _DAY,
)

Instant = Union[datetime, float]


@dataclass(frozen=True)
class TimeScale:
    """Linear map from epoch seconds onto a horizontal pixel range.

    A single-instant domain maps every input to the middle of the range and
    inverts back to that instant.
    """

    t0: float
    t1: float
    r0: float
    r1: float
    tz: tzinfo | None = None

    @property
    def degenerate(self) -> bool:
        return self.t1 == self.t0

    def __call__(self, epoch: float | np.ndarray) -> float | np.ndarray:
        if self.degenerate:
            mid = (self.r0 + self.r1) * 0.5
            if isinstance(epoch, np.ndarray):
                return np.full(epoch.shape, mid, dtype=np.float64)
            return mid
        k = (self.r1 - self.r0) / (self.t1 - self.t0)
        if isinstance(epoch, np.ndarray):
            return self.r0 + (epoch.astype(np.float64, copy=False) - self.t0) * k
        return float(self.r0 + (float(epoch) - self.t0) * k)

    def invert(self, px: float) -> float:
        if self.degenerate or self.r1 == self.r0:
            return self.t0
        return float(self.t0 + (float(px) - self.r0) * (self.t1 - self.t0) / (self.r1 - self.r0))

    def to_datetime(self, epoch: float) -> datetime:
        if self.tz is None:
            return datetime.fromtimestamp(float(epoch))
        return datetime.fromtimestamp(float(epoch), tz=self.tz)


@dataclass(frozen=True)
class ValueScale:
    """Linear map from magnitudes onto an inverted vertical pixel range."""

    d0: float
    d1: float
    r0: float
    r1: float

    def __call__(self, value: float | np.ndarray) -> float | np.ndarray:
        k = (self.r1 - self.r0) / (self.d1 - self.d0)
        if isinstance(value, np.ndarray):
            return self.r0 + (value.astype(np.float64, copy=False) - self.d0) * k
        return float(self.r0 + (float(value) - self.d0) * k)

    def invert(self, py: float) -> float:
        if self.r1 == self.r0:
            return self.d0
        return float(self.d0 + (float(py) - self.r0) * (self.d1 - self.d0) / (self.r1 - self.r0))


@dataclass(frozen=True)
class ScaleMapping:
    time: TimeScale
    value: ValueScale

    def time_to_x(self, instant: Instant) -> float:
        return float(self.time(_to_epoch(instant)))

    def x_to_time(self, px: float) -> float:
        return self.time.invert(px)

    def value_to_y(self, value: float) -> float:
        return float(self.value(value))

    def y_to_value(self, py: float) -> float:
        return self.value.invert(py)


def value_upper_bound(values: np.ndarray) -> float:
    peak = float(np.max(values)) if values.size else 0.0
    upper = peak * VALUE_HEADROOM
    if not np.isfinite(upper) or upper <= 0.0:
        return VALUE_FLOOR
    return upper


def build_scales(series: SampleSeries, inner_width: float, inner_height: float) -> ScaleMapping:
    if len(series) == 0:
        raise ValueError("cannot build scales for an empty series")
    epochs = series.epochs
    time = TimeScale(
        t0=float(epochs[0]),
        t1=float(epochs[-1]),
        r0=0.0,
        r1=float(inner_width),
        tz=series.tzinfo,
    )
    value = ValueScale(
        d0=0.0,
        d1=value_upper_bound(series.values),
        r0=float(inner_height),
        r1=0.0,
    )
    return ScaleMapping(time=time, value=value)


def value_ticks(scale: ValueScale, count: int = 4) -> np.ndarray:
    ticks = generate_nice_ticks(scale.d0, scale.d1, count)
    return ticks_within_range(ticks, vmin=scale.d0, vmax=scale.d1)


def time_tick_interval(span: float, count: int) -> float:
    if count <= 0:
        raise ValueError("count must be > 0")
    target = span / float(count)
    i = bisect_left(TIME_TICK_INTERVALS, target)
    if i == 0:
        return TIME_TICK_INTERVALS[0]
    if i >= len(TIME_TICK_INTERVALS):
        return TIME_TICK_INTERVALS[-1]
    lo = TIME_TICK_INTERVALS[i - 1]
    hi = TIME_TICK_INTERVALS[i]
    return lo if target / lo < hi / target else hi


def time_ticks(scale: TimeScale, count: int) -> np.ndarray:
    """Calendar-aligned tick instants (epoch seconds) inside the time domain.

    Alignment uses the UTC offset in effect at the domain start.
    """

    if scale.degenerate:
        return np.asarray([scale.t0], dtype=np.float64)
    step = time_tick_interval(scale.t1 - scale.t0, count)
    offset = _utc_offset_seconds(scale.t0, scale.tz)
    align = _DAY if step >= _DAY else step
    first = np.ceil((scale.t0 + offset) / align) * align - offset
    ticks = np.arange(first, scale.t1 + step * 1e-9, step, dtype=np.float64)
    return ticks[ticks >= scale.t0]


def format_time_label(epoch: float, tz: tzinfo | None = None) -> str:
    if tz is None:
        return datetime.fromtimestamp(float(epoch)).strftime(TIME_LABEL_FORMAT)
    return datetime.fromtimestamp(float(epoch), tz=tz).strftime(TIME_LABEL_FORMAT)


def format_value_label(value: float) -> str:
    return format_tick(float(value))


def ticks_within_range(ticks: np.ndarray, *, vmin: float, vmax: float) -> np.ndarray:
    if ticks.size == 0:
        return ticks
    step = float(abs(ticks[1] - ticks[0])) if ticks.size > 1 else max(1e-12, abs(vmax - vmin))
    eps = max(1e-12, step * 1e-6)
    mask = (ticks >= (vmin - eps)) & (ticks <= (vmax + eps))
    return ticks[mask]


def generate_nice_ticks(vmin: float, vmax: float, target: int) -> np.ndarray:
    if target <= 0:
        raise ValueError("target must be > 0")
    if vmin == vmax:
        return np.asarray([vmin], dtype=np.float64)

    span = _nice_number(vmax - vmin, round_result=False)
    step = _nice_number(span / max(target - 1, 1), round_result=True)
    tick_min = np.floor(vmin / step) * step
    tick_max = np.ceil(vmax / step) * step

    ticks = np.arange(tick_min, tick_max + 0.5 * step, step, dtype=np.float64)
    # Snap floating-point drift so values like -4.44e-16 become 0.
    ticks = np.rint(ticks / step) * step
    ticks[np.isclose(ticks, 0.0, rtol=0.0, atol=step * 1e-9)] = 0.0
    return ticks


def format_tick(value: float, *, step: float | None = None) -> str:
    if not np.isfinite(value):
        return str(value)
    if step is not None and np.isfinite(step) and step > 0 and abs(value) <= step * 1e-9:
        value = 0.0
    abs_v = abs(value)
    decimals = _decimals_from_step(step) if step is not None else 6
    if abs_v != 0 and (abs_v >= 1e6 or (step is not None and abs(step) < 1e-4) or abs_v < 1e-6):
        return f"{value:.4e}"

    d = Decimal(str(value))
    quant = Decimal("1").scaleb(-decimals)
    try:
        q = d.quantize(quant)
    except InvalidOperation:
        q = d
    out = format(q, "f")
    # Only trim fractional zeros; integers like 30 keep theirs.
    if "." in out:
        out = out.rstrip("0").rstrip(".")
    if out == "-0":
        out = "0"
    return out


def format_ticks_for_axis(ticks: np.ndarray) -> list[str]:
    if ticks.size == 0:
        return []
    if ticks.size == 1:
        return [format_tick(float(ticks[0]))]
    step = float(abs(ticks[1] - ticks[0]))
    return [format_tick(float(v), step=step) for v in ticks]


def _to_epoch(instant: Instant) -> float:
    if isinstance(instant, datetime):
        return instant.timestamp()
    return float(instant)


def _utc_offset_seconds(epoch: float, tz: tzinfo | None) -> float:
    if tz is None:
        local = datetime.fromtimestamp(float(epoch), tz=timezone.utc).astimezone()
    else:
        local = datetime.fromtimestamp(float(epoch), tz=tz)
    offset = local.utcoffset()
    return offset.total_seconds() if offset is not None else 0.0


def _nice_number(value: float, *, round_result: bool) -> float:
    exp = np.floor(np.log10(value))
    frac = value / (10**exp)

    if round_result:
        if frac < 1.5:
            nice_frac = 1.0
        elif frac < 3.0:
            nice_frac = 2.0
        elif frac < 7.0:
            nice_frac = 5.0
        else:
            nice_frac = 10.0
    else:
        if frac <= 1.0:
            nice_frac = 1.0
        elif frac <= 2.0:
            nice_frac = 2.0
        elif frac <= 5.0:
            nice_frac = 5.0
        else:
            nice_frac = 10.0

    return float(nice_frac * (10**exp))


def _decimals_from_step(step: float) -> int:
    if step <= 0 or not np.isfinite(step):
        return 6
    d = Decimal(str(step)).normalize()
    exp = d.as_tuple().exponent
    decimals = max(0, -int(exp))
    return min(12, decimals)
