from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional


PointerEventType = Literal[
    "pointer_down",
    "pointer_move",
    "pointer_leave",
    "touch_start",
    "touch_move",
    "touch_end",
]

SHOW_EVENTS = frozenset({"pointer_down", "pointer_move", "touch_start", "touch_move"})
HIDE_EVENTS = frozenset({"pointer_leave", "touch_end"})


@dataclass(frozen=True)
class PointerEvent:
    """Pointer or touch input in container-local pixels."""

    event_type: PointerEventType
    x: Optional[float] = None
    y: Optional[float] = None
    timestamp: float = 0.0
