from __future__ import annotations

from dataclasses import asdict, dataclass
from pathlib import Path
import re
import tomllib
from typing import Any, Mapping

_HEX_COLOR = re.compile(r"^#[0-9a-fA-F]{6}([0-9a-fA-F]{2})?$")

RGBA = tuple[int, int, int, int]

_COLOR_TOKENS = (
    "background",
    "primary",
    "area_top",
    "area_bottom",
    "grid",
    "axis_text",
    "placeholder_text",
    "tooltip_bg",
    "tooltip_border",
    "tooltip_muted",
    "tooltip_text",
    "dot_ring",
)


@dataclass(frozen=True)
class ChartTheme:
    """Colour and font tokens for the click-trend chart."""

    background: str = "#FFFFFF"
    primary: str = "#2563EB"
    area_top: str = "#2563EB4D"
    area_bottom: str = "#2563EB00"
    grid: str = "#E5E7EBCC"
    axis_text: str = "#9CA3AF"
    placeholder_text: str = "#9CA3AF"
    tooltip_bg: str = "#FFFFFF"
    tooltip_border: str = "#E5E7EB"
    tooltip_muted: str = "#6B7280"
    tooltip_text: str = "#111827"
    dot_ring: str = "#FFFFFF"
    font_family: str = "DejaVu Sans"
    font_size_px: float = 11.0
    tooltip_font_px: float = 12.0
    series_label: str = "Clicks"

    def rgba(self, token: str) -> RGBA:
        if token not in _COLOR_TOKENS:
            raise ValueError(f"Unknown colour token: {token}")
        return hex_to_rgba(getattr(self, token))


DEFAULT_THEME = ChartTheme()


def hex_to_rgba(value: str) -> RGBA:
    if not _HEX_COLOR.match(value):
        raise ValueError(f"not a hex color: {value!r}")
    r = int(value[1:3], 16)
    g = int(value[3:5], 16)
    b = int(value[5:7], 16)
    a = int(value[7:9], 16) if len(value) == 9 else 255
    return (r, g, b, a)


def validate_theme(overrides: Mapping[str, Any] | None = None) -> ChartTheme:
    """Validate and merge token overrides against the defaults."""

    raw: dict[str, Any] = asdict(DEFAULT_THEME)
    if overrides:
        for key, value in overrides.items():
            if key not in raw:
                raise ValueError(f"Unknown theme token: {key}")
            raw[key] = value

    for key in _COLOR_TOKENS:
        if not isinstance(raw[key], str) or not _HEX_COLOR.match(raw[key]):
            raise ValueError(f"Token `{key}` must be a hex color (#RRGGBB or #RRGGBBAA)")

    for key in ("font_family", "series_label"):
        if not isinstance(raw[key], str) or not raw[key].strip():
            raise ValueError(f"Token `{key}` must be a non-empty string")

    for key in ("font_size_px", "tooltip_font_px"):
        value = raw[key]
        if isinstance(value, bool) or not isinstance(value, (int, float)) or float(value) <= 0:
            raise ValueError(f"Token `{key}` must be a positive number")
        raw[key] = float(value)

    return ChartTheme(**raw)


def load_theme(path: str | Path) -> ChartTheme:
    """Load theme overrides from a TOML file, reading its `[theme]` table when present."""

    theme_path = Path(path)
    if not theme_path.exists():
        raise FileNotFoundError(f"theme file not found: {theme_path}")
    with theme_path.open("rb") as f:
        raw = tomllib.load(f)
    table = raw.get("theme", raw)
    if not isinstance(table, Mapping):
        raise ValueError("`theme` must be a table")
    return validate_theme(table)
