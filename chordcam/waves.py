"""Waveform rendering: whole-note buffers and a sample-by-sample oscillator."""

from __future__ import annotations

import math
from enum import IntEnum

import numpy as np

MAX_FADE = 50


class Waveform(IntEnum):
    """Oscillator shapes."""

    SINE = 0
    TRIANGLE = 1
    SQUARE = 2


def _time_axis(length: int, sample_rate: int) -> np.ndarray:
    if length < 0:
        raise ValueError("length must not be negative")
    if sample_rate <= 0:
        raise ValueError("sample rate must be positive")
    return np.arange(length, dtype=np.float64) / sample_rate


def generate_wave(
    freq: float, length: int, amp: float, kind, sample_rate: int = 48000
) -> np.ndarray:
    """Render ``length`` samples of a waveform with short linear fades at both ends."""
    kind = Waveform(kind)
    t = _time_axis(length, sample_rate)
    phase = 2.0 * math.pi * freq * t
    if kind is Waveform.SINE:
        values = np.sin(phase)
    elif kind is Waveform.TRIANGLE:
        x = 2.0 * (np.fmod(t * freq, 1.0) - 0.5)
        values = 1.0 - 2.0 * np.abs(x)
    else:
        values = np.where(np.sin(phase) >= 0, 1.0, -1.0)
    out = (amp * values).astype(np.float32)

    fade = min(length // 10, MAX_FADE)
    if fade:
        ramp = (np.arange(fade, dtype=np.float32) / np.float32(fade)).astype(np.float32)
        out[:fade] *= ramp
        out[length - fade:] *= ramp[::-1]
    return out


def generate_wave_zero_start(
    freq: float, length: int, amp: float, kind, sample_rate: int = 22050
) -> np.ndarray:
    """Render a waveform without fades, forcing the first sample to zero."""
    kind = Waveform(kind)
    t = _time_axis(length, sample_rate)
    phase = 2.0 * math.pi * freq * t
    if kind is Waveform.SINE:
        values = np.sin(phase)
    elif kind is Waveform.TRIANGLE:
        cycles = t * freq
        x = 2.0 * (cycles - np.floor(cycles + 0.5))
        values = 1.0 - 2.0 * np.abs(x)
    else:
        values = np.where(np.sin(phase) >= 0, 1.0, -1.0)
    out = (amp * values).astype(np.float32)
    if length:
        out[0] = 0.0
    return out


class Oscillator:
    """Phase-accumulating oscillator producing one sample per call."""

    def __init__(self, sample_rate: int = 44100) -> None:
        if sample_rate <= 0:
            raise ValueError("sample rate must be positive")
        self.sample_rate = sample_rate
        self.phase = 0.0
        self.step = 0.0

    def retune(self, freq: float) -> None:
        """Reset the phase and set a new frequency."""
        self.phase = 0.0
        self.step = freq / self.sample_rate

    def _advance(self, value: float) -> float:
        self.phase += self.step
        if self.phase >= 1.0:
            self.phase -= math.floor(self.phase)
        return value

    def sine(self) -> float:
        return self._advance(math.sin(2.0 * math.pi * self.phase))

    def triangle(self) -> float:
        p = self.phase
        return self._advance(4.0 * p - 1.0 if p < 0.5 else 3.0 - 4.0 * p)

    def square(self) -> float:
        return self._advance(1.0 if self.phase < 0.5 else -1.0)

    def next(self, kind) -> float:
        """Produce the next sample of the given waveform."""
        kind = Waveform(kind)
        if kind is Waveform.SINE:
            return self.sine()
        if kind is Waveform.TRIANGLE:
            return self.triangle()
        return self.square()