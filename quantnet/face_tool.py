"""Face embeddings: identities, normalization and cosine similarity."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from quantnet.tensor import Tensor

__all__ = [
    "FaceInfo",
    "FaceID",
    "l2_norm",
    "cos_distance",
    "transform_mfn_output",
]


@dataclass
class FaceInfo:
    """Result of matching a face: the identity's index, name and similarity."""

    id: int
    name: str = ""
    similarity: float = 0.0


@dataclass
class FaceID:
    """An enrolled identity: its index, embedding and name."""

    id: int
    id_emb: Tensor
    name: str = ""

    def describe(self) -> str:
        """Return a one-line description of the identity."""
        return f"id: {self.id}, name: {self.name}"


def _values(tensor: Tensor, label: str) -> np.ndarray:
    if tensor.element is None:
        raise ValueError(f"{label} holds no elements")
    return np.asarray(tensor.element, dtype=np.float64).reshape(-1)


def l2_norm(feature: Tensor) -> Tensor:
    """Scale ``feature`` in place to unit Euclidean length and return it."""
    values = _values(feature, "feature")
    norm = float(np.sqrt(np.sum(values * values)))
    if norm == 0.0:
        raise ValueError("cannot normalize a zero vector")
    dtype = feature.element.dtype if feature.element.dtype.kind == "f" else np.float32
    feature.element = (values / norm).astype(dtype).reshape(feature.shape)
    return feature


def cos_distance(
    id_1: Tensor,
    id_2: Tensor,
    normalized_ids: bool = True,
    kind: int = 0,
) -> float:
    """Return the cosine similarity of two embeddings.

    ``kind`` 0 gives a value in ``[-1, 1]``; ``kind`` 1 maps it to ``[0, 1]``.
    With ``normalized_ids`` false the embeddings are normalized first.
    """
    if kind not in (0, 1):
        raise ValueError(f"kind must be 0 or 1, got {kind}")
    a = _values(id_1, "id_1")
    b = _values(id_2, "id_2")
    if a.size != b.size:
        raise ValueError(f"embedding sizes differ: {a.size} and {b.size}")
    dist = float(np.dot(a, b))
    if not normalized_ids:
        norms = float(np.sqrt(np.dot(a, a) * np.dot(b, b)))
        if norms == 0.0:
            raise ValueError("cannot compare a zero vector")
        dist /= norms
    if kind == 1:
        dist = (dist + 1.0) * 0.5
    return dist


def transform_mfn_output(input: Tensor, norm: bool = True) -> Tensor:
    """Dequantize an embedding to float32, optionally normalizing it."""
    values = _values(input, "input") * 2.0 ** input.exponent
    output = Tensor(values.astype(np.float32), 0, input.shape)
    if norm:
        l2_norm(output)
    return output