"""Element-wise quantized operators: leaky ReLU and minimum."""

from __future__ import annotations

import numpy as np

from quantnet.tensor import Tensor
from quantnet.tool import truncate

__all__ = ["leakyrelu", "min2d"]


def _require_element(tensor: Tensor, label: str) -> np.ndarray:
    if tensor.element is None:
        raise ValueError(f"{label} holds no elements")
    return tensor.element


def leakyrelu(
    input: Tensor,
    activation_alpha: int,
    activation_exponent: int,
    inplace: bool = False,
) -> Tensor:
    """Apply leaky ReLU with slope ``activation_alpha * 2 ** activation_exponent``.

    Negative values are scaled by the quantized slope and saturated to the
    element type. With ``inplace`` the input is overwritten and returned.
    """
    values = _require_element(input, "input")
    wide = values.astype(np.int64)
    scaled = wide * int(activation_alpha)
    if activation_exponent < 0:
        scaled = scaled >> -activation_exponent
    else:
        scaled = scaled << activation_exponent
    result = truncate(np.where(wide < 0, scaled, wide), values.dtype)
    if inplace:
        values[...] = result
        return input
    return Tensor(result, input.exponent, input.shape)


def min2d(input0: Tensor, input1: Tensor, inplace: bool = False) -> Tensor:
    """Element-wise minimum of two tensors of equal shape and exponent.

    With ``inplace`` the result is stored into ``input0``, which is returned.
    """
    if not input0.is_same_shape(input1):
        raise ValueError(
            f"shapes differ: {list(input0.shape)} and {list(input1.shape)}"
        )
    if input0.exponent != input1.exponent:
        raise ValueError(
            f"exponents differ: {input0.exponent} and {input1.exponent}"
        )
    a = _require_element(input0, "input0")
    b = _require_element(input1, "input1")
    result = np.minimum(a, b).astype(a.dtype)
    if inplace:
        a[...] = result
        return input0
    return Tensor(result, input0.exponent, input0.shape)