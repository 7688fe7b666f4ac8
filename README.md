# chordcam

A chord synthesizer steered by what a camera sees. Each raw YUYV 4:2:2
frame is reduced to a few features:

- **brightness** – mean luma, 0..1;
- **warmth** – mean red against mean green plus blue;
- **texture** – share of horizontal luma steps larger than 20;
- **object count** – texture scaled to 0..25.

The synth engine uses them like this:

- **warmth** picks one of ten six-note chords at the start of every
  four-second bar;
- **brightness** transposes the arpeggio by whole octaves (-3 to +2);
- **texture** chooses the waveform: sine below 0.07, triangle below 0.14,
  square above;
- **object count** sets the echo mix, from 0.3 up to 0.5.

Each bar the chord is reversed, shuffled or rotated, its first note is
repeated at the end, and the notes are stepped through once per sixth of a
bar, each with a 10 ms attack, a one-pole low-pass filter and a 0.5 s
feedback delay. Output is 44.1 kHz 16-bit stereo.

## Installation

```
pip install .
```

The only runtime dependency is numpy.

## Command line

`chordcam` reads a recording of raw YUYV frames, renders the music they
drive and writes it to a 16-bit stereo WAV file at 44100 Hz:

```
chordcam frames.yuv -o out.wav --seconds 8 --seed 1 -v
```

| option | meaning |
| --- | --- |
| `input` | file of raw YUYV frames, or `-` for standard input |
| `-o`, `--output` | WAV file to write (default `chordcam.wav`) |
| `--width`, `--height` | frame size (default 160x120) |
| `--seconds` | length of audio to render (default 4) |
| `--seed` | seed for the random arpeggio choices |
| `-v`, `--verbose` | log the features of each frame |

One frame is consumed for every 50 ms of audio; when the frames run out the
last features stay in effect. A frame cut short at the end of the input is
an error, and the command exits with status 1.

## Library use

```python
import dataclasses
import random

from chordcam.engine import SynthEngine, warmth_from_raw
from chordcam.features import extract_features

engine = SynthEngine(random.Random(0), 44100, 512)
raw = extract_features(frame_bytes, 160, 120, True)
features = dataclasses.replace(raw, warmth=warmth_from_raw(raw.warmth))
period = engine.render_period(features)   # int16 array, shape (512, 2)
```

`extract_features` returns warmth unclamped; `warmth_from_raw` maps it onto
0..1 as the engine expects.

Other building blocks:

- `chordcam.music` – `midi_to_freq`, `remap`, and the chord tables
  `CAMERA_CHORDS`, `ENGINE_CHORDS`, `TRIAD_CHORDS`
- `chordcam.features` – `Features`, `extract_features`, `yuyv_to_rgb`
- `chordcam.waves` – `Waveform`, `generate_wave` (with short fades),
  `generate_wave_zero_start`, and the sample-by-sample `Oscillator`
- `chordcam.mixer` – `ChunkQueue`, a bounded queue of note buffers drained
  as mono float or 16-bit stereo, and `StereoReverbMixer`
- `chordcam.arranger` – `ArpMode`, `drift_sequence`, `arrange_sequence`,
  `build_sequence`, `select_waveform`, `reverb_amount`, and `NotePlayer`,
  which renders whole notes with attack, release, echo and normalisation
- `chordcam.engine` – `SynthEngine`, `build_bar_sequence`,
  `waveform_for_texture`, `reverb_mix`, `warmth_from_raw`
- `chordcam.camera` – `FrameReader`, which splits a byte stream into frames
- `chordcam.cli` – `render_session`, `write_wav`, `main`

## What it does not do

chordcam does not open a camera device and does not play sound. It works
offline: frames come from a file or standard input, and audio goes to a WAV
file. Capturing frames and playing the result are left to other tools.

## Tests

```
pip install .[test]
pytest
```