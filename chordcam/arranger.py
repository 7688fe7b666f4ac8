"""Chord selection, arpeggio ordering and per-note rendering with echo."""

from __future__ import annotations

import math
import random
from collections.abc import Sequence
from enum import IntEnum

import numpy as np

from chordcam.music import midi_to_freq, remap
from chordcam.waves import Waveform, generate_wave_zero_start

BAR_SECONDS = 4.0
SUB_SECONDS = BAR_SECONDS / 6.0
NOTE_SAMPLE_RATE = 22050
ATTACK_SECONDS = 0.05
OBJECT_SCALE = 25.0


class ArpMode(IntEnum):
    """Order in which a chord's notes are arpeggiated."""

    REVERSE = 0
    SHUFFLE = 1
    FORWARD = 2


def _octave_shift(brightness: float) -> int:
    return int((brightness - 0.5) * 12)


def drift_sequence(seq: Sequence[int], brightness: float, rng: random.Random) -> list[int]:
    """Shuffle the sequence one time in three and transpose it by brightness."""
    notes = list(seq)
    if rng.randint(0, 2) == 1:
        rng.shuffle(notes)
    offset = _octave_shift(brightness)
    return [n + offset for n in notes]


def arrange_sequence(
    seq: Sequence[int], mode, brightness: float, rng: random.Random
) -> list[int]:
    """Reorder the sequence by arpeggio mode, then transpose it by brightness."""
    mode = ArpMode(mode)
    notes = list(seq)
    if mode is ArpMode.REVERSE:
        notes.reverse()
    elif mode is ArpMode.SHUFFLE:
        rng.shuffle(notes)
    elif notes:
        notes = notes[1:] + notes[:1]
    offset = _octave_shift(brightness)
    return [n + offset for n in notes]


def build_sequence(
    chords: Sequence[Sequence[int]], warmth: float, brightness: float, rng: random.Random
) -> list[int]:
    """Pick a chord by warmth, order it at random and shift it by whole octaves.

    The first note is repeated at the end to close the phrase.
    """
    if not chords:
        raise ValueError("no chords to choose from")
    index = min(max(math.floor(warmth), 0), len(chords) - 1)
    chord = list(chords[index])
    if not chord:
        raise ValueError("chosen chord is empty")
    mode = rng.randint(0, 2)
    if mode == ArpMode.REVERSE:
        chord.reverse()
    elif mode == ArpMode.SHUFFLE:
        rng.shuffle(chord)
    offset = int(remap(brightness, 0.0, 1.0, -4.0, 3.0)) * 12
    seq = [n + offset for n in chord]
    seq.append(seq[0])
    return seq


def select_waveform(texture: float) -> Waveform:
    """Smooth scenes play sines, busier ones triangles, the busiest squares."""
    if texture < 0.05:
        return Waveform.SINE
    if texture < 0.10:
        return Waveform.TRIANGLE
    return Waveform.SQUARE


def reverb_amount(obj_count: float) -> float:
    """Echo feedback that falls as more objects are seen."""
    ratio = min(obj_count / OBJECT_SCALE, 1.0)
    amount = remap(ratio * ratio, 0.0, 1.0, 0.9, 0.1) * 0.95
    return min(max(amount, 0.0), 1.0)


class NotePlayer:
    """Renders one note at a time, carrying the echo tail from note to note."""

    def __init__(
        self,
        sample_rate: int = NOTE_SAMPLE_RATE,
        sub_frames: int | None = None,
        delay: int | None = None,
    ) -> None:
        if sample_rate <= 0:
            raise ValueError("sample rate must be positive")
        self.sample_rate = sample_rate
        self.sub_frames = int(SUB_SECONDS * sample_rate) if sub_frames is None else sub_frames
        self.delay = int(SUB_SECONDS * sample_rate * 0.75) if delay is None else delay
        if self.delay <= 0:
            raise ValueError("delay must be positive")
        if self.sub_frames < self.delay:
            raise ValueError("a note must be at least as long as the delay")
        self.tail = np.zeros(self.delay, dtype=np.float32)

    def render(
        self,
        note: int,
        waveform,
        texture: float,
        volume: float = 1.0,
        reverb: float = 1.0,
    ) -> np.ndarray:
        """Render a note with attack, texture-driven release, echo and normalisation."""
        freq = midi_to_freq(note)
        dry = generate_wave_zero_start(
            freq, self.sub_frames, SUB_SECONDS, waveform, self.sample_rate
        ).astype(np.float64)
        length = dry.size

        attack = int(ATTACK_SECONDS * self.sample_rate)
        n = min(attack, length)
        if n > 0:
            dry[:n] *= np.arange(n) / attack

        release = min(int((1.0 - texture * texture) * length), length)
        if release > 0:
            dry[length - release:] *= np.arange(1, release + 1) / release

        dry *= volume

        out = dry * (1.0 - reverb)
        out[: self.delay] += self.tail[: min(self.delay, length)]
        out[self.delay:] += dry[: length - self.delay] * reverb

        peak = float(np.max(np.abs(out))) if length else 0.0
        if peak > 0:
            out /= peak
        result = out.astype(np.float32)
        self.tail = result[length - self.delay:].copy()
        return result