"""Frame sink port and adapters.

Provides FrameSink (Protocol) and two implementations:

- PngFrameSink — rewrites one PNG file per frame
- MockFrameSink — test double that keeps every frame in memory
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol, runtime_checkable

from PIL import Image

from ringclock._surface import ImageSurface

logger = logging.getLogger(__name__)


@runtime_checkable
class FrameSink(Protocol):
    """Port contract for displaying a finished frame."""

    def show(self, surface: ImageSurface) -> None: ...


class PngFrameSink:
    """Write each frame to *path*, replacing the previous one atomically.

    Readers polling the file never observe a half-written image.
    """

    def __init__(self, path: str | Path, *, inverted: bool = False) -> None:
        self._path = Path(path)
        self._inverted = inverted

    @property
    def path(self) -> Path:
        return self._path

    def show(self, surface: ImageSurface) -> None:
        tmp = self._path.with_name(f".{self._path.name}.tmp")
        surface.to_image(inverted=self._inverted).save(tmp, format="PNG")
        os.replace(tmp, self._path)
        logger.debug("Frame written to %s", self._path)


@dataclass
class MockFrameSink:
    """In-memory test double recording every frame shown."""

    inverted: bool = False
    frames: list[Image.Image] = field(default_factory=list)

    def show(self, surface: ImageSurface) -> None:
        self.frames.append(surface.to_image(inverted=self.inverted))

    @property
    def frame_count(self) -> int:
        return len(self.frames)

    @property
    def last(self) -> Image.Image | None:
        return self.frames[-1] if self.frames else None
