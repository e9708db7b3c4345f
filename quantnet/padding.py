"""Padding of tensors along every dimension."""

from __future__ import annotations

import enum
from typing import Sequence

import numpy as np

from quantnet.tensor import Tensor

__all__ = ["PaddingMode", "expand_paddings", "pad"]


class PaddingMode(enum.Enum):
    """How padded values are filled."""

    EMPTY = "empty"
    CONSTANT = "constant"
    EDGE = "edge"
    REFLECT = "reflect"
    SYMMETRIC = "symmetric"


def _expand_pairs(values: Sequence, dims: int, label: str) -> list:
    values = list(values)
    width = dims * 2
    if not values:
        raise ValueError(f"{label} must not be empty")
    if len(values) == 1:
        return values * width
    if len(values) == 2:
        return values * dims
    if len(values) != width:
        raise ValueError(
            f"{label} needs 1, 2 or {width} values, got {len(values)}"
        )
    return values


def expand_paddings(paddings: Sequence[int], dims: int) -> list[int]:
    """Expand ``paddings`` to ``[before0, after0, before1, after1, ...]``.

    One value pads every side; two values give the before/after amount of
    every dimension; otherwise there must be two values per dimension.
    """
    expanded = [int(p) for p in _expand_pairs(paddings, dims, "paddings")]
    if any(p < 0 for p in expanded):
        raise ValueError(f"paddings must be non-negative, got {expanded}")
    return expanded


def pad(
    input: Tensor,
    paddings: Sequence[int],
    constant_values: Sequence[int] = (0,),
    mode: PaddingMode = PaddingMode.CONSTANT,
) -> Tensor:
    """Return ``input`` padded on the edges of each dimension."""
    if input.element is None:
        raise ValueError("input holds no elements")
    dims = len(input.shape)
    expanded = expand_paddings(paddings, dims)
    widths = [(expanded[2 * i], expanded[2 * i + 1]) for i in range(dims)]
    values = input.element

    if mode is PaddingMode.CONSTANT:
        constants = _expand_pairs(constant_values, dims, "constant_values")
        per_axis = [(constants[2 * i], constants[2 * i + 1]) for i in range(dims)]
        result = np.pad(values, widths, mode="constant", constant_values=per_axis)
    elif mode is PaddingMode.EMPTY:
        result = np.pad(values, widths, mode="constant")
    else:
        result = np.pad(values, widths, mode=mode.value)

    return Tensor(result.astype(values.dtype), input.exponent, result.shape)