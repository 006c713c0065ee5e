from __future__ import annotations

from typing import Any, Callable, Mapping

from clickchart.chart import AreaChart
from clickchart.responsive import ResponsiveContainer
from clickchart.theme import DEFAULT_THEME, ChartTheme
from clickchart.viewport import DEFAULT_HEIGHT, Margin


def area_chart(
    samples: Any = None,
    *,
    height: float = DEFAULT_HEIGHT,
    width: float | None = None,
    margin: Margin | Mapping[str, float] | None = None,
    theme: ChartTheme | None = None,
    width_provider: Callable[[], float] | None = None,
) -> ResponsiveContainer:
    if height <= 0:
        raise ValueError("height must be > 0")
    chart = AreaChart(
        samples,
        width=0.0,
        height=height,
        margin=margin,
        theme=theme if theme is not None else DEFAULT_THEME,
    )
    container = ResponsiveContainer(chart, width_provider=width_provider)
    if width is not None:
        container.observe_width(width)
    else:
        container.poll()
    return container
