"""Command line: turn a raw YUYV recording into a rendered WAV file."""

from __future__ import annotations

import argparse
import dataclasses
import logging
import random
import sys
import wave
from collections.abc import Iterable, Sequence
from pathlib import Path

import numpy as np

from chordcam.camera import DEFAULT_HEIGHT, DEFAULT_WIDTH, FrameReader
from chordcam.engine import SynthEngine, warmth_from_raw
from chordcam.features import Features, extract_features

log = logging.getLogger(__name__)

FRAME_INTERVAL_SECONDS = 0.05


def render_session(
    frames: Iterable[bytes],
    width: int = DEFAULT_WIDTH,
    height: int = DEFAULT_HEIGHT,
    seconds: float = 4.0,
    rng: random.Random | None = None,
) -> np.ndarray:
    """Render ``seconds`` of int16 stereo audio, shape (n, 2), driven by frames.

    A new frame is taken every 50 ms of audio; once the frames run out the
    last features stay in effect.
    """
    if seconds < 0:
        raise ValueError("seconds must not be negative")
    engine = SynthEngine(rng)
    total = int(seconds * engine.sample_rate)
    interval = max(1, int(FRAME_INTERVAL_SECONDS * engine.sample_rate))
    source = iter(frames)
    features = Features()
    next_frame_at = 0
    produced = 0
    blocks: list[np.ndarray] = []
    while produced < total:
        if produced >= next_frame_at:
            next_frame_at += interval
            frame = next(source, None)
            if frame is not None:
                raw = extract_features(frame, width, height)
                features = dataclasses.replace(raw, warmth=warmth_from_raw(raw.warmth))
                log.info(
                    "[Features] brightness=%.3f warmth=%.3f texture=%.3f objCount=%d",
                    features.brightness,
                    features.warmth,
                    features.texture,
                    features.obj_count,
                )
        blocks.append(engine.render_period(features))
        produced += engine.period
    if not blocks:
        return np.zeros((0, 2), dtype=np.int16)
    return np.concatenate(blocks)[:total]


def write_wav(path, samples, sample_rate: int = 44100) -> None:
    """Write int16 samples, shape (n,) or (n, channels), as a PCM WAV file."""
    data = np.asarray(samples, dtype=np.int16)
    if data.ndim == 1:
        data = data[:, None]
    if data.ndim != 2 or data.shape[1] < 1:
        raise ValueError("samples must be shaped (n,) or (n, channels)")
    with wave.open(str(path), "wb") as out:
        out.setnchannels(data.shape[1])
        out.setsampwidth(2)
        out.setframerate(sample_rate)
        out.writeframes(data.astype("<i2").tobytes())


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="chordcam",
        description="Render chords driven by a raw YUYV frame recording.",
    )
    parser.add_argument("input", help="raw YUYV frames, or - for standard input")
    parser.add_argument("-o", "--output", default="chordcam.wav", help="WAV file to write")
    parser.add_argument("--width", type=int, default=DEFAULT_WIDTH)
    parser.add_argument("--height", type=int, default=DEFAULT_HEIGHT)
    parser.add_argument("--seconds", type=float, default=4.0)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("-v", "--verbose", action="store_true", help="print frame features")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = _parser().parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.INFO, format="%(message)s")
    rng = random.Random(args.seed)
    try:
        if args.input == "-":
            reader = FrameReader(sys.stdin.buffer, args.width, args.height)
            audio = render_session(reader, args.width, args.height, args.seconds, rng)
        else:
            with Path(args.input).open("rb") as stream:
                reader = FrameReader(stream, args.width, args.height)
                audio = render_session(reader, args.width, args.height, args.seconds, rng)
        write_wav(args.output, audio)
    except (OSError, ValueError) as exc:
        print(f"chordcam: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())