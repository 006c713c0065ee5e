from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping


MIN_VIEWPORT_PX = 10
DEFAULT_HEIGHT = 200
DEFAULT_WIDTH = 600


@dataclass(frozen=True)
class Margin:
    top: float = 20.0
    right: float = 20.0
    bottom: float = 40.0
    left: float = 40.0

    def __post_init__(self) -> None:
        for name in ("top", "right", "bottom", "left"):
            if getattr(self, name) < 0:
                raise ValueError(f"margin.{name} must be >= 0")

    @classmethod
    def coerce(cls, value: "Margin | Mapping[str, float] | None") -> "Margin":
        if value is None:
            return DEFAULT_MARGIN
        if isinstance(value, Margin):
            return value
        unknown = set(value) - {"top", "right", "bottom", "left"}
        if unknown:
            raise ValueError(f"unknown margin keys: {sorted(unknown)}")
        return cls(**{k: float(v) for k, v in value.items()})


DEFAULT_MARGIN = Margin()


@dataclass(frozen=True)
class Viewport:
    width: float
    height: float
    margin: Margin = DEFAULT_MARGIN

    @property
    def inner_width(self) -> float:
        return self.width - self.margin.left - self.margin.right

    @property
    def inner_height(self) -> float:
        return self.height - self.margin.top - self.margin.bottom

    @property
    def plot_rect(self) -> tuple[float, float, float, float]:
        return (self.margin.left, self.margin.top, self.inner_width, self.inner_height)

    def is_renderable(self) -> bool:
        if self.width < MIN_VIEWPORT_PX or self.height < MIN_VIEWPORT_PX:
            return False
        return self.inner_width > 0 and self.inner_height > 0

    def contains_plot_point(self, x: float, y: float) -> bool:
        """Hit-test container-local coordinates against the plot area."""
        x0, y0, w, h = self.plot_rect
        return (x >= x0) and (x <= x0 + w) and (y >= y0) and (y <= y0 + h)
