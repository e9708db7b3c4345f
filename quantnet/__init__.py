"""Fixed-point quantized tensor operators, fast math helpers and face-embedding matching."""

__version__ = "0.1.0"