"""Queues of rendered note chunks and the mixers that drain them into output buffers."""

from __future__ import annotations

from collections import deque
from collections.abc import Iterator

import numpy as np

INT16_FULL_SCALE = 32767
DEFAULT_MAX_CHUNKS = 10


def _to_int16(values: np.ndarray) -> np.ndarray:
    """Truncate float sample values toward zero into the int16 range."""
    clipped = np.clip(np.trunc(values), -32768, 32767)
    return clipped.astype(np.int16)


class ChunkQueue:
    """A bounded queue of float sample chunks consumed frame by frame.

    When more than ``max_chunks`` chunks are waiting, pushing a new one drops
    the oldest first.
    """

    def __init__(self, max_chunks: int = DEFAULT_MAX_CHUNKS) -> None:
        if max_chunks < 0:
            raise ValueError("max_chunks must not be negative")
        self.max_chunks = max_chunks
        self._chunks: deque[np.ndarray] = deque()

    def push(self, chunk) -> None:
        """Append a chunk of samples, dropping the oldest one if the queue is over full."""
        if len(self._chunks) > self.max_chunks:
            self._chunks.popleft()
        self._chunks.append(np.asarray(chunk, dtype=np.float32).reshape(-1))

    def __len__(self) -> int:
        return len(self._chunks)

    def _take(self, frames: int) -> Iterator[tuple[int, np.ndarray]]:
        """Consume up to ``frames`` samples, yielding (output offset, samples)."""
        if frames < 0:
            raise ValueError("frames must not be negative")
        pos = 0
        while pos < frames and self._chunks:
            chunk = self._chunks[0]
            n = min(chunk.size, frames - pos)
            if n < chunk.size:
                self._chunks[0] = chunk[n:]
            else:
                self._chunks.popleft()
            yield pos, chunk[:n]
            pos += n

    def mix_mono(self, frames: int) -> np.ndarray:
        """Drain ``frames`` mono float samples; silence fills what the queue lacks."""
        out = np.zeros(frames, dtype=np.float32)
        for start, samples in self._take(frames):
            out[start:start + samples.size] += samples
        return out

    def render_stereo16(self, frames: int) -> np.ndarray:
        """Drain ``frames`` frames as 16-bit stereo, shape (frames, 2)."""
        out = np.zeros((frames, 2), dtype=np.int16)
        for start, samples in self._take(frames):
            clamped = np.clip(samples, -1.0, 1.0).astype(np.float32) * np.float32(
                INT16_FULL_SCALE
            )
            s = _to_int16(clamped)
            out[start:start + samples.size] += s[:, None]
        return out


class StereoReverbMixer:
    """Drains a queue into 16-bit stereo with a simple delay-line echo.

    The delay line is indexed by the position within each output buffer; every
    dry sample is written into it after its echo has been read.
    """

    def __init__(self, queue: ChunkQueue, tail_size: int, reverb: float = 0.5) -> None:
        if tail_size <= 0:
            raise ValueError("tail size must be positive")
        self.queue = queue
        self.reverb = reverb
        self.tail = np.zeros(tail_size, dtype=np.float32)

    def _pieces(self, start: int, count: int) -> Iterator[tuple[int, int]]:
        """Split [start, start+count) into runs that do not wrap around the tail."""
        size = self.tail.size
        pos = start
        end = start + count
        while pos < end:
            boundary = (pos // size + 1) * size
            stop = min(end, boundary)
            yield pos, stop
            pos = stop

    def render(self, frames: int) -> np.ndarray:
        """Produce ``frames`` stereo int16 frames, shape (frames, 2)."""
        acc = np.zeros(frames, dtype=np.int32)
        size = self.tail.size
        for start, samples in self.queue._take(frames):
            for lo, hi in self._pieces(start, samples.size):
                chunk = samples[lo - start:hi - start]
                dry = _to_int16(
                    np.clip(chunk, -1.0, 1.0).astype(np.float32)
                    * np.float32(INT16_FULL_SCALE)
                )
                tail_lo = lo % size
                tail_hi = tail_lo + (hi - lo)
                wet_f = self.tail[tail_lo:tail_hi] * np.float32(INT16_FULL_SCALE) * np.float32(
                    self.reverb
                )
                wet = _to_int16(wet_f)
                acc[lo:hi] += dry.astype(np.int32) + wet.astype(np.int32)
                self.tail[tail_lo:tail_hi] = chunk
        mono = acc.astype(np.int16)
        return np.repeat(mono[:, None], 2, axis=1)