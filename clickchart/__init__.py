from clickchart.adapters import daily_click_samples, normalize_samples
from clickchart.api import area_chart
from clickchart.chart import AreaChart
from clickchart.errors import ChartDataError
from clickchart.events import PointerEvent
from clickchart.locator import locate
from clickchart.render import ChartDrawing, render_pipeline
from clickchart.responsive import ResponsiveContainer
from clickchart.samples import Sample, SampleSeries
from clickchart.scales import ScaleMapping, build_scales
from clickchart.surface import FrameSurface
from clickchart.theme import ChartTheme, load_theme, validate_theme
from clickchart.tooltip import TooltipController, TooltipState
from clickchart.viewport import Margin, Viewport

__all__ = [
    "AreaChart",
    "ChartDataError",
    "ChartDrawing",
    "ChartTheme",
    "FrameSurface",
    "Margin",
    "PointerEvent",
    "ResponsiveContainer",
    "Sample",
    "SampleSeries",
    "ScaleMapping",
    "TooltipController",
    "TooltipState",
    "Viewport",
    "area_chart",
    "build_scales",
    "daily_click_samples",
    "load_theme",
    "locate",
    "normalize_samples",
    "render_pipeline",
    "validate_theme",
]
