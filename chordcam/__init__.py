"""Chord synthesizer driven by features of raw YUYV frames, rendered offline to WAV."""

__version__ = "0.1.0"