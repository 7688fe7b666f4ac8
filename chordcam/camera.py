"""Reading packed YUYV frames from a byte stream."""

from __future__ import annotations

from collections.abc import Iterator
from typing import BinaryIO

DEFAULT_WIDTH = 160
DEFAULT_HEIGHT = 120
BYTES_PER_PIXEL = 2


class FrameReader:
    """Splits a binary stream of raw YUYV frames into whole frames."""

    def __init__(
        self, stream: BinaryIO, width: int = DEFAULT_WIDTH, height: int = DEFAULT_HEIGHT
    ) -> None:
        if width <= 0 or height <= 0:
            raise ValueError("frame size must be positive")
        if (width * height) % 2:
            raise ValueError("a YUYV frame needs an even number of pixels")
        self.stream = stream
        self.width = width
        self.height = height
        self.frame_size = width * height * BYTES_PER_PIXEL
        self.frames_read = 0

    def read(self) -> bytes | None:
        """Return the next frame, or None at the end of the stream.

        Raises ValueError if the stream ends part way through a frame.
        """
        parts: list[bytes] = []
        remaining = self.frame_size
        while remaining:
            piece = self.stream.read(remaining)
            if not piece:
                break
            parts.append(piece)
            remaining -= len(piece)
        data = b"".join(parts)
        if not data:
            return None
        if len(data) < self.frame_size:
            raise ValueError(
                f"truncated frame: {len(data)} of {self.frame_size} bytes"
            )
        self.frames_read += 1
        return data

    def __iter__(self) -> Iterator[bytes]:
        while (frame := self.read()) is not None:
            yield frame