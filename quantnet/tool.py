"""Helpers for quantization ranges, vector printing and latency measurement."""

from __future__ import annotations

import time
from collections import deque
from typing import Iterable, Sequence

import numpy as np

__all__ = [
    "truncate",
    "calculate_exponent",
    "format_vector",
    "print_vector",
    "Latency",
]


def truncate(value, dtype):
    """Clip ``value`` into the range of the integer type ``dtype``.

    Scalars give a Python ``int``; arrays give an array of ``dtype``.
    Fractional parts are dropped toward zero after clipping.
    """
    info = np.iinfo(dtype)
    if isinstance(value, np.ndarray):
        return np.clip(value, info.min, info.max).astype(dtype)
    return int(min(max(value, info.min), info.max))


def calculate_exponent(n: int, max_value: int) -> int:
    """Return the exponent for quantizing ``1/n`` into ``max_value`` range."""
    if n <= 0:
        raise ValueError(f"n must be positive, got {n}")
    exp = 0
    tmp = 1 // n
    while tmp < max_value:
        exp += 1
        tmp = (1 << exp) // n
    return exp - 1


def format_vector(array: Iterable[int], message: str | None = None) -> str:
    """Return ``array`` formatted as ``"[x1, x2, ...]"``, prefixed by ``message``."""
    body = "[" + ", ".join(str(item) for item in array) + "]"
    if message:
        return f"{message}: {body}"
    return body


def print_vector(array: Iterable[int], message: str | None = None) -> None:
    """Print ``array`` in the form produced by :func:`format_vector`."""
    print(format_vector(array, message))


class Latency:
    """Measure elapsed time in microseconds, averaged over the last ``size`` runs."""

    def __init__(self, size: int = 1) -> None:
        if size < 1:
            raise ValueError(f"size must be at least 1, got {size}")
        self.size = size
        self.period = 0
        self._history: deque[int] | None = deque(maxlen=size) if size > 1 else None
        self._timestamp: int | None = None

    @staticmethod
    def _now() -> int:
        return time.perf_counter_ns() // 1000

    def start(self) -> None:
        """Record the start timestamp."""
        self._timestamp = self._now()

    def end(self) -> None:
        """Record the period since the last :meth:`start`."""
        if self._timestamp is None:
            raise RuntimeError("end() called before start()")
        self.period = self._now() - self._timestamp
        if self._history is not None:
            self._history.append(self.period)

    @property
    def average_period(self) -> int:
        """Average of the recorded periods, or the last period when size is 1."""
        if self._history is None:
            return self.period
        if not self._history:
            raise RuntimeError("no period has been recorded")
        return sum(self._history) // len(self._history)

    def clear_period(self) -> None:
        """Reset the last period to zero."""
        self.period = 0

    def format(self, *args: str) -> str:
        """Format the average period, optionally labelled by a message or a prefix and key."""
        average = self.average_period
        if not args:
            return f"latency: {average:15d} us"
        if len(args) == 1:
            return f"{args[0]}: {average:15d} us"
        if len(args) == 2:
            prefix, key = args
            return f"{prefix}::{key}: {average} us"
        raise TypeError(f"format() takes at most 2 labels, got {len(args)}")

    def print(self, *args: str) -> None:
        """Print the line produced by :meth:`format`."""
        print(self.format(*args))

    def __repr__(self) -> str:
        return f"Latency(size={self.size}, period={self.period})"


def _as_list(array: Sequence[int]) -> list[int]:
    return list(array)