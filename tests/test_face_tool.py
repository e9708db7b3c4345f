import numpy as np
import pytest

from quantnet.face_tool import (
    FaceID,
    FaceInfo,
    cos_distance,
    l2_norm,
    transform_mfn_output,
)
from quantnet.tensor import Tensor


def _vec(values):
    return Tensor(np.array(values, dtype=np.float32), 0, (len(values),))


def test_l2_norm_gives_unit_length_and_keeps_direction():
    t = _vec([3.0, 4.0])
    result = l2_norm(t)
    assert result is t
    assert np.linalg.norm(t.element) == pytest.approx(1.0, abs=1e-6)
    assert t.element[0] / t.element[1] == pytest.approx(3.0 / 4.0, rel=1e-6)


def test_l2_norm_zero_vector_raises():
    with pytest.raises(ValueError):
        l2_norm(_vec([0.0, 0.0]))


def test_cos_distance_identical_and_opposite():
    a = l2_norm(_vec([1.0, 2.0, 2.0]))
    b = _vec(list(-a.element))
    assert cos_distance(a, a) == pytest.approx(1.0, abs=1e-6)
    assert cos_distance(a, b) == pytest.approx(-1.0, abs=1e-6)


def test_cos_distance_kind_one_maps_to_unit_interval():
    a = _vec([1.0, 0.0])
    b = _vec([-1.0, 0.0])
    c = _vec([0.0, 1.0])
    assert cos_distance(a, b, kind=1) == pytest.approx(0.0, abs=1e-9)
    assert cos_distance(a, c, kind=1) == pytest.approx(0.5, abs=1e-9)
    assert cos_distance(a, a, kind=1) == pytest.approx(1.0, abs=1e-9)


def test_cos_distance_unnormalized_parallel_vectors():
    a = _vec([3.0, 4.0])
    b = _vec([6.0, 8.0])
    assert cos_distance(a, b, normalized_ids=False) == pytest.approx(1.0, abs=1e-6)


def test_cos_distance_is_symmetric():
    a = _vec([0.2, -0.7, 0.1])
    b = _vec([0.5, 0.3, -0.4])
    assert cos_distance(a, b, normalized_ids=False) == pytest.approx(
        cos_distance(b, a, normalized_ids=False)
    )


def test_cos_distance_size_mismatch_raises():
    with pytest.raises(ValueError):
        cos_distance(_vec([1.0, 0.0]), _vec([1.0, 0.0, 0.0]))


def test_cos_distance_bad_kind_raises():
    with pytest.raises(ValueError):
        cos_distance(_vec([1.0]), _vec([1.0]), kind=2)


def test_transform_mfn_output_dequantizes():
    q = Tensor(np.array([4, -2, 0], dtype=np.int16), -1, (3,))
    out = transform_mfn_output(q, norm=False)
    assert out.element.dtype == np.float32
    assert out.shape == (3,)
    np.testing.assert_allclose(out.element, [2.0, -1.0, 0.0])


def test_transform_mfn_output_normalizes():
    q = Tensor(np.array([30, 40], dtype=np.int8), -3, (2,))
    out = transform_mfn_output(q)
    assert np.linalg.norm(out.element) == pytest.approx(1.0, abs=1e-6)
    assert out.element[0] / out.element[1] == pytest.approx(30 / 40, rel=1e-6)


def test_face_id_describe_holds_id_and_name():
    face = FaceID(7, _vec([1.0]), "alice")
    text = face.describe()
    assert "7" in text
    assert "alice" in text


def test_face_info_defaults():
    info = FaceInfo(3)
    assert (info.id, info.name) == (3, "")