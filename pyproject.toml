[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "livoxproto"
version = "2.3.0"
description = "Framing, CRC checking and message records for the Livox LiDAR SDK command protocol"
requires-python = ">=3.10"
dependencies = []
keywords = ["lidar", "livox", "protocol", "point-cloud", "crc", "framing"]
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
    "Topic :: Scientific/Engineering :: Interface Engine/Protocol Translator",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["livoxproto"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
