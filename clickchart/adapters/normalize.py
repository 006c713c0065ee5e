from __future__ import annotations

from collections.abc import Mapping, Sequence
from datetime import datetime, timezone
from decimal import Decimal
import math
from typing import Any

import numpy as np

from clickchart.errors import ChartDataError
from clickchart.samples import Sample, SampleSeries

try:
    import pandas as pd
except Exception:  # pragma: no cover - optional dependency
    pd = None  # type: ignore[assignment]

TIMESTAMP_KEYS = ("timestamp", "date")
VALUE_KEYS = ("value", "clicks")


def normalize_samples(data: Any) -> SampleSeries:
    """Coerce chart input into an ordered `SampleSeries`.

    Accepts a `SampleSeries` (returned unchanged), a sequence of `Sample`s,
    `(timestamp, value)` pairs or mappings, or a pandas DataFrame. Input must
    already be in ascending timestamp order.
    """

    if data is None:
        return SampleSeries.empty()
    if isinstance(data, SampleSeries):
        return data
    if pd is not None and isinstance(data, pd.DataFrame):
        return _from_dataframe(data)
    if isinstance(data, (str, bytes, bytearray)) or not isinstance(data, Sequence):
        raise ChartDataError(f"unsupported sample input type: {type(data)!r}")

    samples = tuple(_coerce_sample(item, index=i) for i, item in enumerate(data))
    _check_tz_consistency(samples)
    return SampleSeries(samples=samples)


def _from_dataframe(frame: Any) -> SampleSeries:
    ts_col = _pick_column(frame, TIMESTAMP_KEYS, kind="datetime")
    value_col = _pick_column(frame, VALUE_KEYS, kind="numeric")
    samples = tuple(
        _coerce_sample((ts, value), index=i)
        for i, (ts, value) in enumerate(zip(frame[ts_col].tolist(), frame[value_col].tolist(), strict=True))
    )
    _check_tz_consistency(samples)
    return SampleSeries(samples=samples)


def _pick_column(frame: Any, preferred: tuple[str, ...], *, kind: str) -> Any:
    for name in preferred:
        if name in frame.columns:
            return name
    if kind == "datetime":
        matches = [c for c in frame.columns if pd.api.types.is_datetime64_any_dtype(frame[c])]
    else:
        matches = [
            c
            for c in frame.columns
            if pd.api.types.is_numeric_dtype(frame[c]) and not pd.api.types.is_bool_dtype(frame[c])
        ]
    if len(matches) != 1:
        raise ChartDataError(f"DataFrame input must contain exactly one {kind} column or one of {list(preferred)}")
    return matches[0]


def _coerce_sample(item: Any, *, index: int) -> Sample:
    if isinstance(item, Sample):
        raw_ts, raw_value = item.timestamp, item.value
    elif isinstance(item, Mapping):
        raw_ts = _first_present(item, TIMESTAMP_KEYS)
        raw_value = _first_present(item, VALUE_KEYS)
    elif isinstance(item, (tuple, list)) and len(item) == 2:
        raw_ts, raw_value = item
    else:
        raise ChartDataError(f"sample at index {index} must be a Sample, mapping or (timestamp, value) pair")
    return Sample(
        timestamp=_coerce_timestamp(raw_ts, index=index),
        value=_coerce_value(raw_value, index=index),
    )


def _first_present(item: Mapping[str, Any], keys: tuple[str, ...]) -> Any:
    for key in keys:
        if key in item:
            return item[key]
    return None


def _coerce_timestamp(raw: Any, *, index: int) -> datetime:
    if pd is not None and isinstance(raw, pd.Timestamp):
        if pd.isna(raw):
            raise ChartDataError(f"timestamp at index {index} is missing")
        return raw.to_pydatetime()
    if isinstance(raw, datetime):
        return raw
    if isinstance(raw, np.datetime64):
        if np.isnat(raw):
            raise ChartDataError(f"timestamp at index {index} is missing")
        micros = raw.astype("datetime64[us]").astype(np.int64)
        return datetime.fromtimestamp(int(micros) / 1_000_000, tz=timezone.utc)
    if isinstance(raw, str):
        try:
            return datetime.fromisoformat(raw.replace("Z", "+00:00"))
        except ValueError as exc:
            raise ChartDataError(f"timestamp at index {index} is not ISO-8601: {raw!r}") from exc
    if isinstance(raw, (int, float, np.integer, np.floating)) and not isinstance(raw, bool):
        if not math.isfinite(float(raw)):
            raise ChartDataError(f"timestamp at index {index} is not finite")
        return datetime.fromtimestamp(float(raw), tz=timezone.utc)
    raise ChartDataError(f"timestamp at index {index} has unsupported type {type(raw)!r}")


def _coerce_value(raw: Any, *, index: int) -> float:
    if raw is None or isinstance(raw, bool):
        raise ChartDataError(f"value at index {index} must be a number, got {raw!r}")
    if isinstance(raw, Decimal):
        value = float(raw)
    else:
        try:
            value = float(raw)
        except (TypeError, ValueError) as exc:
            raise ChartDataError(f"value at index {index} is non-numeric: {raw!r}") from exc
    if not math.isfinite(value):
        raise ChartDataError(f"value at index {index} is not finite")
    return value


def _check_tz_consistency(samples: tuple[Sample, ...]) -> None:
    aware = {s.timestamp.tzinfo is not None and s.timestamp.utcoffset() is not None for s in samples}
    if len(aware) > 1:
        raise ChartDataError("samples mix naive and timezone-aware timestamps")
