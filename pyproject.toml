[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "quantnet"
version = "0.1.0"
description = "Fixed-point quantized tensor operators, fast math helpers and face-embedding matching"
requires-python = ">=3.10"
keywords = ["quantization", "neural network", "fixed point", "inference", "face recognition", "embedding"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Scientific/Engineering :: Artificial Intelligence",
]
dependencies = [
    "numpy",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["quantnet"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
