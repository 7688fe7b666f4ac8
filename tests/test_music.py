import math

import pytest

from chordcam.music import (
    CAMERA_CHORDS,
    ENGINE_CHORDS,
    TRIAD_CHORDS,
    midi_to_freq,
    remap,
)


def test_a4_is_440():
    assert midi_to_freq(69) == 440.0


@pytest.mark.parametrize("note", [0, 30, 57, 100, 115])
def test_octave_doubles_frequency(note):
    assert math.isclose(midi_to_freq(note + 12), 2 * midi_to_freq(note))


def test_frequencies_increase_with_note():
    freqs = [midi_to_freq(n) for n in range(128)]
    assert all(a < b for a, b in zip(freqs, freqs[1:]))


@pytest.mark.parametrize("note", [-1, 128, 500])
def test_out_of_range_note_rejected(note):
    with pytest.raises(ValueError):
        midi_to_freq(note)


def test_non_integer_note_rejected():
    with pytest.raises(TypeError):
        midi_to_freq(69.5)


def test_remap_endpoints():
    assert remap(0.0, 0.0, 1.0, -4.0, 3.0) == -4.0
    assert remap(1.0, 0.0, 1.0, -4.0, 3.0) == 3.0


def test_remap_round_trip():
    for value in (0.1, 0.37, 0.9):
        mapped = remap(value, 0.2, 0.9, 0.0, 1.0)
        assert math.isclose(remap(mapped, 0.0, 1.0, 0.2, 0.9), value)


def test_remap_midpoint():
    assert math.isclose(remap(0.5, 0.0, 1.0, 0.3, 0.5), (0.3 + 0.5) / 2)


def test_remap_empty_range():
    with pytest.raises(ValueError):
        remap(1.0, 2.0, 2.0, 0.0, 1.0)


def test_chord_tables_hold_valid_notes():
    for table in (CAMERA_CHORDS, ENGINE_CHORDS, TRIAD_CHORDS):
        for chord in table:
            for note in chord:
                assert midi_to_freq(note) > 0
    assert len(CAMERA_CHORDS) == len(ENGINE_CHORDS) == 10
    assert CAMERA_CHORDS[0] == (69, 76, 79, 81, 88, 91)