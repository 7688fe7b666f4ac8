"""Note numbers, frequencies and the chord tables the synth plays from."""

from __future__ import annotations

import operator

A4_NOTE = 69
A4_FREQ = 440.0
NOTE_COUNT = 128

# Chords driven by the raw YUYV camera pipeline.
CAMERA_CHORDS: tuple[tuple[int, ...], ...] = (
    (69, 76, 79, 81, 88, 91),
    (62, 65, 69, 72, 74, 81),
    (63, 68, 70, 75, 80, 82),
    (65, 72, 75, 77, 84, 87),
    (67, 69, 74, 79, 81, 86),
    (60, 64, 67, 71, 72, 79),
    (62, 66, 69, 74, 78, 81),
    (64, 68, 71, 76, 80, 83),
    (65, 67, 72, 77, 79, 84),
    (67, 71, 74, 79, 83, 86),
)

# Chords used by the bar-based oscillator engine.
ENGINE_CHORDS: tuple[tuple[int, ...], ...] = (
    (69, 75, 79, 81, 87, 91),
    (62, 65, 69, 72, 74, 81),
    (63, 69, 73, 75, 81, 85),
    (65, 72, 75, 77, 84, 87),
    (67, 74, 77, 79, 86, 89),
    (60, 64, 67, 72, 72, 79),
    (62, 66, 69, 74, 74, 81),
    (64, 68, 71, 75, 76, 83),
    (65, 67, 72, 77, 77, 84),
    (67, 71, 74, 79, 79, 86),
)

# Plain triads for the simplest arpeggiator.
TRIAD_CHORDS: tuple[tuple[int, ...], ...] = (
    (60, 64, 67),
    (62, 65, 69),
    (64, 67, 71),
    (65, 69, 72),
)

ARP_MODE_NAMES: tuple[str, ...] = ("reverse", "shuffle", "forward")


def midi_to_freq(note: int) -> float:
    """Return the equal-tempered frequency in Hz of a MIDI note 0..127."""
    note = operator.index(note)
    if not 0 <= note < NOTE_COUNT:
        raise ValueError(f"MIDI note out of range 0..{NOTE_COUNT - 1}: {note}")
    return A4_FREQ * 2.0 ** ((note - A4_NOTE) / 12.0)


def remap(
    value: float, in_low: float, in_high: float, out_low: float, out_high: float
) -> float:
    """Map ``value`` linearly from [in_low, in_high] onto [out_low, out_high]."""
    if in_high == in_low:
        raise ValueError("input range is empty")
    return (value - in_low) / (in_high - in_low) * (out_high - out_low) + out_low