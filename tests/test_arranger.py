import random

import numpy as np
import pytest

from chordcam.arranger import (
    ArpMode,
    NotePlayer,
    arrange_sequence,
    build_sequence,
    drift_sequence,
    reverb_amount,
    select_waveform,
)
from chordcam.music import CAMERA_CHORDS
from chordcam.waves import Waveform

CHORD = [60, 64, 67, 71]


@pytest.mark.parametrize(
    "texture, expected",
    [(0.0, Waveform.SINE), (0.049, Waveform.SINE), (0.05, Waveform.TRIANGLE),
     (0.099, Waveform.TRIANGLE), (0.10, Waveform.SQUARE), (0.9, Waveform.SQUARE)],
)
def test_select_waveform_thresholds(texture, expected):
    assert select_waveform(texture) is expected


def test_reverb_amount_range_and_monotonic():
    assert reverb_amount(0) == pytest.approx(0.9 * 0.95)
    assert reverb_amount(25) == pytest.approx(0.1 * 0.95)
    assert reverb_amount(100) == pytest.approx(reverb_amount(25))
    values = [reverb_amount(n) for n in range(26)]
    assert all(a >= b for a, b in zip(values, values[1:]))


@pytest.mark.parametrize("seed", range(5))
def test_drift_sequence_is_transposed_permutation(seed):
    rng = random.Random(seed)
    out = drift_sequence(CHORD, 1.0, rng)
    assert sorted(out) == sorted(n + 6 for n in CHORD)


def test_drift_sequence_neutral_brightness_keeps_notes():
    out = drift_sequence(CHORD, 0.5, random.Random(1))
    assert sorted(out) == sorted(CHORD)


def test_arrange_sequence_reverse_and_forward():
    rng = random.Random(0)
    assert arrange_sequence(CHORD, ArpMode.REVERSE, 0.5, rng) == CHORD[::-1]
    assert arrange_sequence(CHORD, ArpMode.FORWARD, 0.5, rng) == CHORD[1:] + CHORD[:1]
    assert arrange_sequence([], ArpMode.FORWARD, 0.5, rng) == []


def test_arrange_sequence_shuffle_is_permutation():
    out = arrange_sequence(CHORD, ArpMode.SHUFFLE, 0.5, random.Random(3))
    assert sorted(out) == sorted(CHORD)


def test_arrange_sequence_rejects_unknown_mode():
    with pytest.raises(ValueError):
        arrange_sequence(CHORD, 7, 0.5, random.Random(0))


@pytest.mark.parametrize("seed", range(4))
def test_build_sequence_closes_phrase(seed):
    seq = build_sequence(CAMERA_CHORDS, 2.3, 0.5, random.Random(seed))
    assert len(seq) == len(CAMERA_CHORDS[2]) + 1
    assert seq[-1] == seq[0]
    assert sorted(seq[:-1]) == sorted(CAMERA_CHORDS[2])


def test_build_sequence_octave_shifts_by_brightness():
    low = build_sequence(CAMERA_CHORDS, 0.0, 0.0, random.Random(0))
    assert sorted(low[:-1]) == sorted(n - 48 for n in CAMERA_CHORDS[0])
    high = build_sequence(CAMERA_CHORDS, 0.0, 1.0, random.Random(0))
    assert sorted(high[:-1]) == sorted(n + 36 for n in CAMERA_CHORDS[0])


def test_build_sequence_clamps_warmth():
    seq = build_sequence(CAMERA_CHORDS, 50.0, 0.5, random.Random(0))
    assert sorted(seq[:-1]) == sorted(CAMERA_CHORDS[-1])


def test_build_sequence_requires_chords():
    with pytest.raises(ValueError):
        build_sequence([], 0.0, 0.5, random.Random(0))


def test_note_player_output_is_normalised():
    player = NotePlayer()
    out = player.render(69, Waveform.SINE, 0.0)
    assert out.size == player.sub_frames
    assert float(np.max(np.abs(out))) == pytest.approx(1.0)
    assert out[0] == 0.0


def test_note_player_keeps_tail_of_last_note():
    player = NotePlayer()
    out = player.render(60, Waveform.SQUARE, 0.5, volume=0.8, reverb=0.4)
    assert player.tail.size == player.delay
    assert np.array_equal(player.tail, out[-player.delay:])


def test_note_player_rejects_short_notes():
    with pytest.raises(ValueError):
        NotePlayer(sub_frames=10, delay=20)


def test_note_player_rejects_out_of_range_note():
    with pytest.raises(ValueError):
        NotePlayer().render(200, Waveform.SINE, 0.0)