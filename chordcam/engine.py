"""Bar-based oscillator synth: per-period rendering with filter, attack and echo."""

from __future__ import annotations

import logging
import math
import random
from collections.abc import Sequence

import numpy as np

from chordcam.arranger import ArpMode
from chordcam.features import Features
from chordcam.music import ENGINE_CHORDS, midi_to_freq, remap
from chordcam.waves import Oscillator, Waveform

log = logging.getLogger(__name__)

SAMPLE_RATE = 44100
PERIOD = 512
CHANNELS = 2
BAR_SECONDS = 4.0
SUB_SECONDS = BAR_SECONDS / 6.0
DELAY_SECONDS = 0.5
LPF_ALPHA = 0.1
ATTACK_MS = 10.0
OBJECT_SCALE = 25.0
INT16_FULL_SCALE = 32767


def build_bar_sequence(
    chord: Sequence[int], mode, brightness: float, rng: random.Random
) -> list[int]:
    """Order a chord for one bar, shift it by whole octaves and close it on its first note.

    Reverse mode reverses, shuffle mode shuffles and forward mode rotates the
    chord left by two notes. Brightness 0..1 maps onto an octave shift of -3..+2.
    """
    mode = ArpMode(mode)
    notes = list(chord)
    if not notes:
        raise ValueError("chord is empty")
    if mode is ArpMode.REVERSE:
        notes.reverse()
    elif mode is ArpMode.SHUFFLE:
        rng.shuffle(notes)
    else:
        notes = notes[2:] + notes[:2]
    offset = math.floor(remap(brightness, 0.0, 1.0, -3.0, 2.0)) * 12
    seq = [n + offset for n in notes]
    seq.append(seq[0])
    return seq


def waveform_for_texture(texture: float) -> Waveform:
    """Choose the oscillator shape from how busy the scene is."""
    if texture < 0.07:
        return Waveform.SINE
    if texture < 0.14:
        return Waveform.TRIANGLE
    return Waveform.SQUARE


def reverb_mix(obj_count: float) -> float:
    """Echo mix between 0.3 and 0.5, rising with the number of objects seen."""
    sens = min(obj_count / OBJECT_SCALE, 1.0)
    return remap(sens, 0.0, 1.0, 0.3, 0.5)


def warmth_from_raw(raw: float) -> float:
    """Map a raw red-to-green/blue ratio from [0.2, 0.9] onto [0, 1], clamped."""
    return min(max(remap(raw, 0.2, 0.9, 0.0, 1.0), 0.0), 1.0)


class SynthEngine:
    """Renders stereo 16-bit periods driven by scene features.

    A new chord is chosen at each bar from the warmth, and its notes are
    stepped through once per sub-division of the bar.
    """

    def __init__(
        self,
        rng: random.Random | None = None,
        sample_rate: int = SAMPLE_RATE,
        period: int = PERIOD,
    ) -> None:
        if sample_rate <= 0:
            raise ValueError("sample rate must be positive")
        if period <= 0:
            raise ValueError("period must be positive")
        self.rng = rng if rng is not None else random.Random()
        self.sample_rate = sample_rate
        self.period = period
        self.chords = ENGINE_CHORDS

        self._osc = Oscillator(sample_rate)
        self._delay_line = [0.0] * max(1, int(DELAY_SECONDS * sample_rate))
        self._delay_pos = 0
        self._lpf = 0.0
        self._gain = 1.0
        self._gain_inc = 1.0
        self._env_samples = max(1, int(sample_rate * (ATTACK_MS / 1000.0)))
        self._bar_frames = int(BAR_SECONDS * sample_rate)
        self._sub_frames = int(SUB_SECONDS * sample_rate)
        self._next_bar = 0
        self._sub_count = 0

        self.frame_count = 0
        self.arp_index = 0
        self.sequence: list[int] = list(self.chords[0])
        self._osc.retune(midi_to_freq(self.sequence[0]))

    def _trigger(self, note: int) -> None:
        self._osc.retune(midi_to_freq(note))
        self._gain = 0.0
        self._gain_inc = 1.0 / self._env_samples
        self._sub_count = 0

    def _start_bar(self, features: Features) -> None:
        self._next_bar += self._bar_frames
        count = len(self.chords)
        index = min(max(int(features.warmth * count), 0), count - 1)
        mode = self.rng.randint(0, 2)
        self.sequence = build_bar_sequence(
            self.chords[index], mode, features.brightness, self.rng
        )
        self._trigger(self.sequence[0])

    def render_period(self, features: Features) -> np.ndarray:
        """Render one period as int16 stereo, shape (period, 2)."""
        if self.frame_count >= self._next_bar:
            self._start_bar(features)

        if self._sub_count >= self._sub_frames:
            note = self.sequence[self.arp_index % len(self.sequence)]
            self.arp_index += 1
            self._trigger(note)

        rev = reverb_mix(features.obj_count)
        log.debug(
            "brightness=%s warmth=%s texture=%s objCount=%s revMix=%s",
            features.brightness,
            features.warmth,
            features.texture,
            features.obj_count,
            rev,
        )

        kind = waveform_for_texture(features.texture)
        wave = {
            Waveform.SINE: self._osc.sine,
            Waveform.TRIANGLE: self._osc.triangle,
            Waveform.SQUARE: self._osc.square,
        }[kind]

        line = self._delay_line
        size = len(line)
        pos = self._delay_pos
        lpf = self._lpf
        gain = self._gain
        inc = self._gain_inc
        dry_mix = 1.0 - rev
        out = np.empty(self.period, dtype=np.float64)
        for i in range(self.period):
            lpf += LPF_ALPHA * (wave() - lpf)
            gain = min(gain + inc, 1.0)
            dry = lpf * gain
            fb = line[pos]
            out[i] = dry * dry_mix + fb * rev
            line[pos] = dry + fb * rev
            pos += 1
            if pos >= size:
                pos = 0
        self._delay_pos = pos
        self._lpf = lpf
        self._gain = gain

        self.frame_count += self.period
        self._sub_count += self.period

        mono = np.trunc(np.clip(out, -1.0, 1.0) * INT16_FULL_SCALE).astype(np.int16)
        return np.repeat(mono[:, None], CHANNELS, axis=1)