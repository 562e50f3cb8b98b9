[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "woolyfuzz"
version = "1.0.0"
description = "Fuzz pedal emulation with gated bias, bass roll-off, tone control, supply sag and factory presets"
requires-python = ">=3.10"
dependencies = []
keywords = ["audio", "dsp", "fuzz", "distortion", "guitar", "effect"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Sound/Audio :: Sound Synthesis",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["woolyfuzz"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
