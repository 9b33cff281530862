[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "lyracodec"
version = "0.1.0"
description = "Speech-codec building blocks: log-mel features, comfort noise, band buffering, packet-loss simulation and timing statistics"
requires-python = ">=3.10"
dependencies = ["numpy"]
keywords = ["speech", "codec", "audio", "mel", "spectrogram", "packet loss", "comfort noise"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Sound/Audio :: Conversion",
    "Topic :: Multimedia :: Sound/Audio :: Speech",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["lyracodec"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"
