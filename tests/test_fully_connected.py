import numpy as np
import pytest

from quantnet.elementwise import leakyrelu
from quantnet.fully_connected import fully_connected
from quantnet.tensor import Tensor


def identity_filter(n, exponent=0, dtype=np.int16):
    return Tensor(np.eye(n, dtype=dtype).reshape(1, 1, n, n), exponent)


def test_identity_filter_returns_input():
    data = np.array([3, -7, 12], dtype=np.int16)
    out = fully_connected(Tensor(data, -2), identity_filter(3), -2)
    assert list(out.element) == list(data)
    assert out.shape == (3,)
    assert out.exponent == -2


def test_flatten_accepts_multi_dimensional_input():
    data = np.arange(6, dtype=np.int16).reshape(2, 3)
    out = fully_connected(Tensor(data, 0), identity_filter(6), 0)
    assert out.shape == (6,)
    assert list(out.element) == list(range(6))


def test_non_flatten_keeps_leading_dimensions():
    data = np.ones((2, 2, 3), dtype=np.int16)
    weights = Tensor(np.ones((1, 1, 3, 4), dtype=np.int16), 0)
    out = fully_connected(Tensor(data, 0), weights, 0, flatten=False)
    assert out.shape == (2, 2, 4)
    assert np.all(out.element == 3)


def test_matches_integer_matrix_product():
    rng = np.random.default_rng(0)
    x = rng.integers(-20, 20, size=5).astype(np.int16)
    w = rng.integers(-20, 20, size=(5, 4)).astype(np.int16)
    out = fully_connected(Tensor(x, 0), Tensor(w.reshape(1, 1, 5, 4), 0), 0)
    assert list(out.element) == list(x.astype(np.int64) @ w.astype(np.int64))


def test_bias_is_added():
    data = np.array([1, 2, 3], dtype=np.int16)
    bias = Tensor(np.array([10, 20, 30], dtype=np.int16), -2)
    out = fully_connected(Tensor(data, -2), identity_filter(3), -2, bias=bias)
    assert list(out.element) == list(data + bias.element)


def test_output_exponent_rounds():
    out = fully_connected(
        Tensor(np.array([4, 5], dtype=np.int16), 0), identity_filter(2), 1
    )
    assert list(out.element) == [2, 3]


def test_saturates_to_dtype():
    big = np.iinfo(np.int16).max
    weights = Tensor(np.full((1, 1, 2, 1), big, dtype=np.int16), 0)
    data = Tensor(np.array([big, big], dtype=np.int16), 0)
    out = fully_connected(data, weights, 0)
    assert out.element[0] == big


def test_activation_is_applied():
    data = np.array([-5, 0, 6], dtype=np.int16)
    out = fully_connected(
        Tensor(data, 0),
        identity_filter(3),
        0,
        activation=lambda t: leakyrelu(t, 0, 0, inplace=True),
    )
    assert list(out.element) == list(np.maximum(data, 0))


@pytest.mark.parametrize("shape", [(3, 3), (2, 1, 3, 3), (1, 2, 3, 3)])
def test_bad_filter_shape_raises(shape):
    weights = Tensor(np.zeros(shape, dtype=np.int16), 0)
    with pytest.raises(ValueError):
        fully_connected(Tensor(np.zeros(3, dtype=np.int16), 0), weights, 0)


def test_flatten_size_mismatch_raises():
    with pytest.raises(ValueError):
        fully_connected(Tensor(np.zeros(4, dtype=np.int16), 0), identity_filter(3), 0)


def test_non_flatten_last_dim_mismatch_raises():
    with pytest.raises(ValueError):
        fully_connected(
            Tensor(np.zeros((3, 2), dtype=np.int16), 0),
            identity_filter(3),
            0,
            flatten=False,
        )


def test_bias_size_mismatch_raises():
    bias = Tensor(np.zeros(2, dtype=np.int16), 0)
    with pytest.raises(ValueError):
        fully_connected(
            Tensor(np.zeros(3, dtype=np.int16), 0), identity_filter(3), 0, bias=bias
        )