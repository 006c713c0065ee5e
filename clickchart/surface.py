from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import TypeAlias

import torch


LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class FullRewrite:
    """Whole-frame replacement; `frame` is a `(H, W, 4)` uint8 tensor."""

    frame: torch.Tensor


@dataclass(frozen=True)
class ReplaceRect:
    """Patch of the frame at `(x, y)`; `patch` is `(height, width, 4)` uint8."""

    x: int
    y: int
    width: int
    height: int
    patch: torch.Tensor


WriteOp: TypeAlias = FullRewrite | ReplaceRect


@dataclass(frozen=True)
class WriteBatch:
    operations: list[WriteOp]


class FrameSurface:
    """RGBA frame the chart is presented on.

    A batch is checked in full before any pixel changes, so a rejected batch
    leaves the frame and its revision untouched.
    """

    def __init__(self, height: int, width: int, background: tuple[int, int, int, int] = (255, 255, 255, 255)) -> None:
        _check_size(height, width)
        self.height = height
        self.width = width
        self._background = torch.tensor(background, dtype=torch.uint8)
        self._frame = self._blank()
        self._revision = 0

    @property
    def revision(self) -> int:
        return self._revision

    def read_snapshot(self) -> torch.Tensor:
        return self._frame.clone()

    def resize(self, height: int, width: int) -> None:
        _check_size(height, width)
        if (height, width) == (self.height, self.width):
            return
        LOGGER.debug("surface resized %dx%d -> %dx%d", self.width, self.height, width, height)
        self.height = height
        self.width = width
        self._frame = self._blank()
        self._revision += 1

    def submit_write_batch(self, batch: WriteBatch) -> int:
        if not batch.operations:
            raise ValueError("write batch must include at least one operation")
        for op in batch.operations:
            self._check_op(op)
        for op in batch.operations:
            if isinstance(op, FullRewrite):
                self._frame = op.frame.clone()
            else:
                self._frame[op.y : op.y + op.height, op.x : op.x + op.width] = op.patch
        self._revision += 1
        return self._revision

    def _blank(self) -> torch.Tensor:
        return self._background.view(1, 1, 4).expand(self.height, self.width, 4).clone()

    def _check_op(self, op: WriteOp) -> None:
        if isinstance(op, FullRewrite):
            _check_pixels(op.frame, (self.height, self.width), "frame")
        elif isinstance(op, ReplaceRect):
            if op.width <= 0 or op.height <= 0 or op.x < 0 or op.y < 0:
                raise ValueError(f"invalid rect ({op.x}, {op.y}, {op.width}, {op.height})")
            if op.x + op.width > self.width or op.y + op.height > self.height:
                raise ValueError("rect exceeds surface bounds")
            _check_pixels(op.patch, (op.height, op.width), "patch")
        else:
            raise TypeError(f"Unsupported write op: {type(op)!r}")


def _check_size(height: int, width: int) -> None:
    if height <= 0 or width <= 0:
        raise ValueError("height and width must be > 0")


def _check_pixels(pixels: torch.Tensor, size: tuple[int, int], label: str) -> None:
    if pixels.dtype != torch.uint8:
        raise ValueError(f"{label} must be uint8, got {pixels.dtype}")
    if tuple(pixels.shape) != (*size, 4):
        raise ValueError(f"{label} has shape {tuple(pixels.shape)}, expected {(*size, 4)}")
