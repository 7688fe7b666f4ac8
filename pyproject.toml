[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "chordcam"
version = "0.1.0"
description = "Chord synthesizer driven by features of raw YUYV camera frames, rendered to WAV"
requires-python = ">=3.10"
keywords = ["synthesizer", "arpeggiator", "yuyv", "camera", "audio", "reverb", "wav"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: End Users/Desktop",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Multimedia :: Sound/Audio :: Sound Synthesis",
]
dependencies = ["numpy"]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
chordcam = "chordcam.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["chordcam"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
