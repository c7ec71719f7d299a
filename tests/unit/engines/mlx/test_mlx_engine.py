"""
Unit tests for the MLX engine (Apple Silicon only).
"""

import numpy as np
import pytest

mx = pytest.importorskip("mlx.core")

from activation_bridge.engines import EngineConfig
from activation_bridge.engines.mlx import MLXEngine, get_mlx_activation
from activation_bridge.host import ActivationFunctionTypeEnum


@pytest.fixture
def engine():
    return MLXEngine(EngineConfig(engine_type="mlx", seed=0))


def test_row_major_round_trip(engine):
    """Test values survive packing into and out of an MLX array."""
    data = np.arange(6, dtype=np.float32)

    rows, columns, out = engine.to_row_major(engine.from_row_major(2, 3, data))

    assert (rows, columns) == (2, 3)
    np.testing.assert_array_equal(out, data)


def test_to_row_major_rejects_non_matrix(engine):
    """Test only 2-D arrays are accepted."""
    with pytest.raises(ValueError, match="2-D"):
        engine.to_row_major(mx.zeros((3,)))


def test_softmax_normalises_columns():
    """Test softmax runs down axis 0."""
    softmax = get_mlx_activation(ActivationFunctionTypeEnum.SOFTMAX)

    output = softmax.get_activation(mx.array(np.random.randn(4, 3).astype(np.float32)), True)

    np.testing.assert_allclose(np.array(output.sum(axis=0)), np.ones(3), rtol=1e-5)


def test_backprop_tanh():
    """Test vjp gradient of tanh."""
    tanh = get_mlx_activation(ActivationFunctionTypeEnum.TANH)
    x = mx.array([[0.0, 0.5], [-1.0, 2.0]])

    grad, parameter_grad = tanh.backprop(x, mx.ones((2, 2)))

    expected = 1 - np.tanh(np.array(x)) ** 2
    np.testing.assert_allclose(np.array(grad), expected, rtol=1e-5)
    assert parameter_grad is None


def test_cpu_device_warns(caplog):
    """Test a non-MLX device string is reported."""
    MLXEngine(EngineConfig(engine_type="mlx", device="cpu"))

    assert "MLX only supports" in caplog.text


def test_float64_data_rejected(engine):
    """Test data MLX cannot hold exactly is refused instead of narrowed."""
    with pytest.raises(ValueError, match="float64"):
        engine.from_row_major(1, 2, np.array([0.1, 0.2], dtype=np.float64))


def test_half_data_round_trip(engine):
    """Test narrower data is widened to the engine dtype and comes back exact."""
    data = np.array([0.5, -1.25, 3.0], dtype=np.float16)

    array = engine.from_row_major(1, 3, data)
    _, _, out = engine.to_row_major(array)

    assert array.dtype == mx.float32
    np.testing.assert_array_equal(out, data.astype(np.float32))
