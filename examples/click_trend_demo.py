from __future__ import annotations

from datetime import datetime
from pathlib import Path

import numpy as np
from PIL import Image

from clickchart import FrameSurface, PointerEvent, area_chart, daily_click_samples

DAILY_CLICKS = [
    {"day": "Mon", "clicks": 14},
    {"day": "Tue", "clicks": 22},
    {"day": "Wed", "clicks": 9},
    {"day": "Thu", "clicks": 31},
    {"day": "Fri", "clicks": 27},
    {"day": "Sun", "clicks": 6},
]


def _render_frames(today: datetime) -> dict[str, np.ndarray]:
    container = area_chart(daily_click_samples(DAILY_CLICKS, today=today), width=640, height=200)
    surface = FrameSurface(1, 1)
    container.present(surface)
    frames = {"idle": surface.read_snapshot().numpy()}

    drawing = container.render()
    ox, oy = drawing.origin
    peak = drawing.scales.time_to_x(max(container.chart.series, key=lambda s: s.value).timestamp)
    container.handle_event(PointerEvent("pointer_move", ox + peak, oy + 40))
    container.present(surface)
    frames["hover"] = surface.read_snapshot().numpy()

    container.observe_width(360)
    container.present(surface)
    frames["narrow"] = surface.read_snapshot().numpy()
    return frames


def _save_rgba(path: Path, frame: np.ndarray) -> None:
    Image.fromarray(frame).save(path)


def main(out_dir: Path | None = None, *, today: datetime | None = None) -> list[Path]:
    out_dir = out_dir or Path(__file__).resolve().parent / "out"
    out_dir.mkdir(parents=True, exist_ok=True)

    written = []
    for name, frame in _render_frames(today or datetime.now()).items():
        path = out_dir / f"click_trend_{name}.png"
        _save_rgba(path, frame)
        written.append(path)
        print(f"wrote {path}")
    return written


if __name__ == "__main__":
    main()
