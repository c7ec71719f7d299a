"""
Unit tests for host-native activation functions.
"""

import numpy as np
import pytest

from activation_bridge.host import (
    ActivationFunctionBaseType,
    ActivationFunctionType,
    FeatureOrientation,
    Neurons,
    Neurons3D,
    NeuronsActivation,
    get_host_activation_function,
)

ROWS = FeatureOrientation.ROWS_SPAN_FEATURE_SET
COLUMNS = FeatureOrientation.COLUMNS_SPAN_FEATURE_SET


def _host(base_type):
    return get_host_activation_function(ActivationFunctionType(base_type))


def _numeric_gradient(function, x, orientation, eps=1e-3):
    """Central differences of sum(f(x) * weights) with fixed weights."""
    weights = np.linspace(-1.0, 1.0, x.size).reshape(x.shape)
    axis = orientation.feature_axis()
    grad = np.zeros_like(x, dtype=np.float64)
    for index in np.ndindex(*x.shape):
        plus = x.astype(np.float64)
        minus = x.astype(np.float64)
        plus[index] += eps
        minus[index] -= eps
        grad[index] = (
            np.sum(function._forward(plus, axis) * weights)
            - np.sum(function._forward(minus, axis) * weights)
        ) / (2 * eps)
    return weights, grad


class TestForward:
    def test_relu(self, rows_activation, context):
        result = _host(ActivationFunctionBaseType.RELU).activate(rows_activation, context)

        expected = np.maximum(rows_activation.get_activations(), 0)
        np.testing.assert_array_equal(result.output.get_activations(), expected)
        assert result.output.feature_orientation is ROWS
        assert result.input is rows_activation

    def test_softmax_rows_sum_to_one(self, rows_activation, context):
        result = _host(ActivationFunctionBaseType.SOFTMAX).activate(rows_activation, context)

        sums = result.output.get_activations().sum(axis=1)
        np.testing.assert_allclose(sums, np.ones(3), rtol=1e-5)

    def test_softmax_columns_sum_to_one(self, examples_by_features, context):
        activation = NeuronsActivation(examples_by_features.T.copy(), COLUMNS, Neurons(4))

        result = _host(ActivationFunctionBaseType.SOFTMAX).activate(activation, context)

        sums = result.output.get_activations().sum(axis=0)
        np.testing.assert_allclose(sums, np.ones(3), rtol=1e-5)

    def test_log_softmax_matches_log_of_softmax(self, rows_activation, context):
        softmax = _host(ActivationFunctionBaseType.SOFTMAX).activate(rows_activation, context)
        log_softmax = _host(ActivationFunctionBaseType.LOG_SOFTMAX).activate(rows_activation, context)

        np.testing.assert_allclose(
            log_softmax.output.get_activations(),
            np.log(softmax.output.get_activations()),
            rtol=1e-5,
            atol=1e-6,
        )

    def test_output_keeps_image_structure(self, context):
        neurons = Neurons3D(2, 2, 1)
        activation = NeuronsActivation(
            np.full((3, 4), -1.0, dtype=np.float32), ROWS, neurons, image=True
        )

        result = _host(ActivationFunctionBaseType.LEAKY_RELU).activate(activation, context)

        assert result.output.is_image
        assert result.output.neurons == neurons
        np.testing.assert_allclose(result.output.get_activations(), -0.01)


class TestBackPropagate:
    @pytest.mark.parametrize("base_type", [
        ActivationFunctionBaseType.SIGMOID,
        ActivationFunctionBaseType.TANH,
        ActivationFunctionBaseType.SOFTMAX,
        ActivationFunctionBaseType.LOG_SOFTMAX,
    ])
    @pytest.mark.parametrize("orientation", [ROWS, COLUMNS])
    def test_matches_numeric_gradient(self, base_type, orientation, examples_by_features, context):
        x = examples_by_features if orientation is ROWS else examples_by_features.T.copy()
        function = _host(base_type)
        activation = function.activate(NeuronsActivation(x, orientation, Neurons(4)), context)
        weights, expected = _numeric_gradient(function, x, orientation)

        grad = function.back_propagate(
            activation,
            NeuronsActivation(weights.astype(np.float32), orientation, Neurons(4)),
            context,
        )

        np.testing.assert_allclose(grad.get_activations(), expected, rtol=1e-2, atol=1e-3)

    def test_gradient_in_other_orientation_is_aligned(self, rows_activation, context):
        function = _host(ActivationFunctionBaseType.RELU)
        activation = function.activate(rows_activation, context)
        upstream = np.arange(12, dtype=np.float32).reshape(3, 4)

        grad = function.back_propagate(
            activation, NeuronsActivation(upstream.T.copy(), COLUMNS, Neurons(4)), context
        )

        assert grad.feature_orientation is ROWS
        expected = np.where(rows_activation.get_activations() > 0, upstream, 0)
        np.testing.assert_array_equal(grad.get_activations(), expected)


class TestLookup:
    def test_gelu_has_no_host_implementation(self):
        with pytest.raises(ValueError, match="No host activation function"):
            _host(ActivationFunctionBaseType.GELU)

    def test_activation_function_type(self):
        assert _host(ActivationFunctionBaseType.TANH).activation_function_type == \
            ActivationFunctionType(ActivationFunctionBaseType.TANH)
