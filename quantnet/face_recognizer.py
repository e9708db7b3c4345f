"""Matching face embeddings against a set of enrolled identities."""

from __future__ import annotations

from typing import Iterable

import numpy as np

from quantnet.face_tool import FaceID, FaceInfo, cos_distance
from quantnet.tensor import Tensor

__all__ = ["FaceRecognizer"]


def _copy_tensor(tensor: Tensor) -> Tensor:
    if tensor.element is None:
        raise ValueError("embedding holds no elements")
    return Tensor(np.array(tensor.element), tensor.exponent, tensor.shape)


class FaceRecognizer:
    """Enroll normalized face embeddings and recognize new ones by cosine similarity."""

    def __init__(self, thresh: float = 0.55) -> None:
        self._thresh = 0.55
        self.thresh = thresh
        self._ids: list[FaceID] = []
        self._next_id = 1
        self._last_emb: Tensor | None = None

    @property
    def thresh(self) -> float:
        """Similarity above which two faces are judged the same person."""
        return self._thresh

    @thresh.setter
    def thresh(self, value: float) -> None:
        if not -1.0 <= value <= 1.0:
            raise ValueError(f"threshold must be in [-1, 1], got {value}")
        self._thresh = float(value)

    def recognize(self, emb: Tensor) -> FaceInfo:
        """Return the best-matching identity, or id -1 when none passes the threshold."""
        self._last_emb = _copy_tensor(emb)
        best: FaceID | None = None
        best_similarity = -1.0
        for face_id in self._ids:
            similarity = cos_distance(emb, face_id.id_emb)
            if best is None or similarity > best_similarity:
                best = face_id
                best_similarity = similarity
        if best is None or best_similarity <= self._thresh:
            return FaceInfo(-1, "", best_similarity)
        return FaceInfo(best.id, best.name, best_similarity)

    def enroll_id(self, emb: Tensor, name: str = "") -> int:
        """Enroll a normalized embedding under ``name`` and return its id."""
        stored = _copy_tensor(emb)
        face_id = FaceID(self._next_id, stored, name)
        self._ids.append(face_id)
        self._next_id += 1
        self._last_emb = _copy_tensor(emb)
        return face_id.id

    def delete_id(self, id: int | None = None) -> int:
        """Delete the identity ``id`` (the last enrolled if omitted); return how many remain."""
        if not self._ids:
            raise LookupError("no enrolled ids")
        if id is None:
            self._ids.pop()
        else:
            for index, face_id in enumerate(self._ids):
                if face_id.id == id:
                    del self._ids[index]
                    break
            else:
                raise LookupError(f"no enrolled id {id}")
        return len(self._ids)

    def clear_id(self) -> None:
        """Delete every enrolled identity."""
        self._ids.clear()
        self._next_id = 1

    def set_ids(self, ids: Iterable[FaceID]) -> int:
        """Replace the enrolled identities with copies of ``ids``; return their number."""
        copies = [FaceID(f.id, _copy_tensor(f.id_emb), f.name) for f in ids]
        seen = [f.id for f in copies]
        if len(set(seen)) != len(seen):
            raise ValueError(f"repeated ids in {seen}")
        self._ids = copies
        self._next_id = max(seen, default=0) + 1
        return len(self._ids)

    @property
    def enrolled_ids(self) -> list[FaceInfo]:
        """Id and name of every enrolled identity, in enrollment order."""
        return [FaceInfo(f.id, f.name) for f in self._ids]

    def enrolled_ids_with_name(self, name: str) -> list[FaceInfo]:
        """Enrolled identities whose name is ``name``."""
        return [FaceInfo(f.id, f.name) for f in self._ids if f.name == name]

    @property
    def enrolled_id_num(self) -> int:
        """Number of enrolled identities."""
        return len(self._ids)

    def get_face_emb(self, id: int = -1) -> Tensor:
        """Embedding of identity ``id``, or of the last input if no identity matches."""
        for face_id in self._ids:
            if face_id.id == id:
                return face_id.id_emb
        if self._last_emb is None:
            raise LookupError(f"no enrolled id {id} and no input embedding yet")
        return self._last_emb