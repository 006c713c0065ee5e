from __future__ import annotations

from collections.abc import Mapping, Sequence
from datetime import datetime, timedelta
from typing import Any

from clickchart.adapters.normalize import normalize_samples
from clickchart.errors import ChartDataError
from clickchart.samples import Sample, SampleSeries

DAY_ABBREVIATIONS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
SAMPLE_HOUR = 12


def daily_click_samples(
    daily_clicks: Sequence[Mapping[str, Any]] | None,
    *,
    today: datetime | None = None,
    days: int = 7,
) -> SampleSeries:
    """Expand `[{"day": "Mon", "clicks": 3}, ...]` into one noon sample per day.

    The series ends on `today` and covers `days` consecutive days; weekdays
    missing from the payload count as zero clicks.
    """

    if days <= 0:
        raise ValueError("days must be > 0")
    clicks_by_day: dict[str, float] = {}
    for i, row in enumerate(daily_clicks or ()):
        if not isinstance(row, Mapping):
            raise ChartDataError(f"daily click row at index {i} must be a mapping")
        day = str(row.get("day", ""))
        if day not in DAY_ABBREVIATIONS:
            raise ChartDataError(f"daily click row at index {i} has unknown day {day!r}")
        clicks_by_day[day] = row.get("clicks", 0) or 0

    anchor = (today or datetime.now()).replace(hour=SAMPLE_HOUR, minute=0, second=0, microsecond=0)
    samples = []
    for offset in range(days - 1, -1, -1):
        date = anchor - timedelta(days=offset)
        day = DAY_ABBREVIATIONS[date.weekday()]
        samples.append(Sample(timestamp=date, value=clicks_by_day.get(day, 0)))
    return normalize_samples(samples)
