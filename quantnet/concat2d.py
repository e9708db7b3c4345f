"""Channel-wise concatenation that shares one block of storage with its inputs."""

from __future__ import annotations

from typing import Sequence

from quantnet.tensor import Layer, Tensor

__all__ = ["Concat2D"]


class Concat2D(Layer):
    """Concatenate tensors along their last (channel) axis.

    The output owns one block of storage. Each input is given a view of its
    own channel range in that block, so producing the inputs fills the
    output without any copy.
    """

    def __init__(self, name: str | None = None) -> None:
        super().__init__(name)
        self._output = Tensor()
        self._inputs: list[Tensor] = []
        self.offsets: list[int] = []
        self.channels: list[int] = []
        self.output_exponent = 0

    def build(self, inputs: Sequence[Tensor]) -> None:
        """Collect the channel count and offset of every input and set the output shape."""
        inputs = list(inputs)
        if not inputs:
            raise ValueError("Concat2D needs at least one input")
        first = inputs[0]
        if not first.shape:
            raise ValueError("inputs must have at least one dimension")
        leading = first.shape[:-1]

        offsets: list[int] = []
        channels: list[int] = []
        total = 0
        for tensor in inputs:
            if tensor.shape[:-1] != leading:
                raise ValueError(
                    f"input shape {list(tensor.shape)} does not match "
                    f"{list(first.shape)} outside the channel axis"
                )
            offsets.append(total)
            channels.append(tensor.shape[-1])
            total += tensor.shape[-1]

        self._inputs = inputs
        self.offsets = offsets
        self.channels = channels
        self.output_exponent = first.exponent

        self._output.release()
        self._output.dtype = first.dtype
        self._output.reshape(leading + (total,))
        self._output.exponent = self.output_exponent

    @property
    def output(self) -> Tensor:
        """The concatenated tensor."""
        return self._output

    def backward(self) -> None:
        """Give the output and every input the largest padding among them."""
        if not self._inputs:
            raise RuntimeError("build() must be called before backward()")
        max_padding = list(self._output.padding)
        for tensor in self._inputs:
            max_padding = [max(a, b) for a, b in zip(max_padding, tensor.padding)]
        self._output.padding = list(max_padding)
        for tensor in self._inputs:
            tensor.padding = list(max_padding)

    def _deliver(self) -> None:
        storage = self._output.element
        for tensor, offset, channel in zip(self._inputs, self.offsets, self.channels):
            tensor.element = storage[..., offset:offset + channel]

    def calloc_element(self) -> None:
        """Allocate zeroed output storage and hand each input its slice of it."""
        if not self._inputs:
            raise RuntimeError("build() must be called before calloc_element()")
        self._output.release()
        self._output.allocate()
        self._deliver()

    def apply_element(self) -> None:
        """Allocate output storage, restore the output exponent and hand out slices."""
        if not self._inputs:
            raise RuntimeError("build() must be called before apply_element()")
        self._output.allocate()
        self._output.exponent = self.output_exponent
        self._deliver()