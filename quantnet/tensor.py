"""Quantized tensor container and the base class of layers."""

from __future__ import annotations

from math import prod
from typing import Iterable, Sequence

import numpy as np

from quantnet.tool import format_vector

__all__ = ["Tensor", "Layer"]


def _normalize_shape(shape: Iterable[int]) -> tuple[int, ...]:
    result = tuple(int(dim) for dim in shape)
    if any(dim < 0 for dim in result):
        raise ValueError(f"shape dimensions must be non-negative, got {list(result)}")
    return result


class Tensor:
    """A fixed-point tensor: integer elements scaled by ``2 ** exponent``.

    ``element`` is a numpy array shaped like ``shape``, or ``None`` when no
    storage is held. ``dtype`` is the element type used when storage is
    allocated.
    """

    def __init__(
        self,
        element: np.ndarray | Sequence | None = None,
        exponent: int = 0,
        shape: Iterable[int] | None = None,
    ) -> None:
        self.exponent = int(exponent)
        self.padding = [0, 0, 0, 0]
        self.dtype = np.dtype(np.int16)
        self._element: np.ndarray | None = None
        if element is None:
            self.shape = _normalize_shape(shape) if shape is not None else ()
            return
        array = np.asarray(element)
        self.dtype = array.dtype
        if shape is None:
            self.shape = tuple(array.shape)
        else:
            self.shape = _normalize_shape(shape)
            if array.size != prod(self.shape):
                raise ValueError(
                    f"element of {array.size} values does not fit shape {list(self.shape)}"
                )
            array = array.reshape(self.shape)
        self._element = array

    @property
    def element(self) -> np.ndarray | None:
        """The element array, or ``None`` if no storage is held."""
        return self._element

    @element.setter
    def element(self, value: np.ndarray | Sequence | None) -> None:
        if value is None:
            self._element = None
            return
        array = np.asarray(value)
        if array.size != self.size:
            raise ValueError(
                f"element of {array.size} values does not fit shape {list(self.shape)}"
            )
        self.dtype = array.dtype
        self._element = array.reshape(self.shape)

    @property
    def size(self) -> int:
        """Number of elements the shape describes."""
        return prod(self.shape)

    def reshape(self, shape: Iterable[int]) -> "Tensor":
        """Set a new shape; held elements must fit it."""
        new_shape = _normalize_shape(shape)
        if self._element is not None:
            if prod(new_shape) != self._element.size:
                raise ValueError(
                    f"cannot reshape {list(self.shape)} to {list(new_shape)}"
                )
            self._element = self._element.reshape(new_shape)
        self.shape = new_shape
        return self

    def expand_dims(self, axis: int | Iterable[int]) -> "Tensor":
        """Insert dimensions of size one at the positions in ``axis``."""
        axes = [axis] if isinstance(axis, int) else list(axis)
        ndim = len(self.shape) + len(axes)
        normalized = sorted(a + ndim if a < 0 else a for a in axes)
        if len(set(normalized)) != len(normalized):
            raise ValueError(f"repeated axis in {axes}")
        if any(a < 0 or a >= ndim for a in normalized):
            raise ValueError(f"axis {axes} out of range for {ndim} dimensions")
        shape = list(self.shape)
        for a in normalized:
            shape.insert(a, 1)
        return self.reshape(shape)

    def flatten(self) -> "Tensor":
        """Reshape to a single dimension."""
        return self.reshape((self.size,))

    def is_same_shape(self, other: "Tensor") -> bool:
        """Whether ``other`` has exactly the same shape."""
        return self.shape == other.shape

    def allocate(self) -> "Tensor":
        """Ensure zero-filled storage of the current shape and dtype exists."""
        if self._element is None or self._element.size != self.size:
            self._element = np.zeros(self.shape, dtype=self.dtype)
        else:
            self._element = self._element.reshape(self.shape)
        return self

    def release(self) -> "Tensor":
        """Drop the element storage, keeping shape and exponent."""
        self._element = None
        return self

    def copy_from(self, other: "Tensor") -> "Tensor":
        """Copy the elements of ``other`` into this tensor's shape."""
        if other.element is None:
            raise ValueError("source tensor holds no elements")
        if other.size != self.size:
            raise ValueError(
                f"cannot copy {other.size} values into shape {list(self.shape)}"
            )
        self._element = np.array(other.element, dtype=self.dtype).reshape(self.shape)
        return self

    def format_shape(self) -> str:
        """Return the shape as ``"shape = [d0, d1, ...]"``."""
        return f"shape = {format_vector(self.shape)}"

    def __repr__(self) -> str:
        return (
            f"Tensor(shape={list(self.shape)}, exponent={self.exponent}, "
            f"dtype={self.dtype.name})"
        )


class Layer:
    """Base class of layers: a layer has a name."""

    def __init__(self, name: str | None = None) -> None:
        self.name = name

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"