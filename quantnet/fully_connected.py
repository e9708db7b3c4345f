"""Quantized fully connected operator."""

from __future__ import annotations

from typing import Callable

import numpy as np

from quantnet.tensor import Tensor
from quantnet.tool import truncate

__all__ = ["fully_connected"]


def _rounding_shift(values: np.ndarray, shift: int) -> np.ndarray:
    """Multiply by ``2 ** shift``, rounding half up when shifting right."""
    if shift >= 0:
        return values << shift
    n = -shift
    return (values + (1 << (n - 1))) >> n


def fully_connected(
    input: Tensor,
    filter: Tensor,
    output_exponent: int,
    bias: Tensor | None = None,
    activation: Callable[[Tensor], Tensor | None] | None = None,
    flatten: bool = True,
) -> Tensor:
    """Return ``activation(input x filter + bias)`` quantized to ``output_exponent``.

    ``filter`` has shape ``[1, 1, input_dim, output_dim]``. With ``flatten``
    the whole input is one vector of ``input_dim`` values and the output has
    shape ``[output_dim]``; otherwise the last input dimension is
    ``input_dim`` and is replaced by ``output_dim``. ``activation`` receives
    the output tensor and returns the activated tensor (or modifies it and
    returns ``None``).
    """
    if len(filter.shape) != 4 or filter.shape[0] != 1 or filter.shape[1] != 1:
        raise ValueError(f"filter shape must be [1, 1, in, out], got {list(filter.shape)}")
    if input.element is None:
        raise ValueError("input holds no elements")
    if filter.element is None:
        raise ValueError("filter holds no elements")
    input_dim, output_dim = filter.shape[2], filter.shape[3]

    if flatten:
        if input.size != input_dim:
            raise ValueError(
                f"input of {input.size} values does not match filter input {input_dim}"
            )
        output_shape: tuple[int, ...] = (output_dim,)
        rows = input.element.reshape(1, input_dim)
    else:
        if not input.shape or input.shape[-1] != input_dim:
            raise ValueError(
                f"input last dimension {list(input.shape)} does not match filter input {input_dim}"
            )
        output_shape = tuple(input.shape[:-1]) + (output_dim,)
        rows = input.element.reshape(-1, input_dim)

    weights = filter.element.reshape(input_dim, output_dim).astype(np.int64)
    accumulator = rows.astype(np.int64) @ weights
    accumulator_exponent = input.exponent + filter.exponent

    if bias is not None:
        if bias.element is None:
            raise ValueError("bias holds no elements")
        bias_values = bias.element.reshape(-1).astype(np.int64)
        if bias_values.size != output_dim:
            raise ValueError(
                f"bias of {bias_values.size} values does not match output {output_dim}"
            )
        accumulator = accumulator + _rounding_shift(
            bias_values, bias.exponent - accumulator_exponent
        )

    quantized = _rounding_shift(accumulator, accumulator_exponent - output_exponent)
    result = truncate(quantized, input.element.dtype).reshape(output_shape)
    output = Tensor(result, output_exponent, output_shape)

    if activation is not None:
        activated = activation(output)
        if activated is not None:
            output = activated
    return output