"""
Unit tests for backward propagation through a foreign activation function.
"""

from unittest.mock import MagicMock

import numpy as np
import pytest

from activation_bridge.bridge import HybridDirectedComponentFactory
from activation_bridge.bridge.component_activation import ForeignActivationFunctionComponentActivation
from activation_bridge.host import (
    ActivationFunctionBaseType,
    ActivationFunctionType,
    DirectedComponentGradient,
    FeatureOrientation,
    Neurons,
    Neurons3D,
    NeuronsActivation,
)

ROWS = FeatureOrientation.ROWS_SPAN_FEATURE_SET
COLUMNS = FeatureOrientation.COLUMNS_SPAN_FEATURE_SET


@pytest.fixture
def factory(pytorch_engine):
    return HybridDirectedComponentFactory(pytorch_engine)


def _forward(factory, base_type, activation, context, neurons=Neurons(4)):
    component = factory.create_differentiable_activation_function_component(
        neurons, ActivationFunctionType(base_type)
    )
    return component.forward_propagate(activation, context)


def _gradient(matrix, orientation=ROWS, axons=None):
    return DirectedComponentGradient(
        NeuronsActivation(matrix, orientation, Neurons(4)),
        [] if axons is None else axons,
    )


class TestBackPropagate:
    def test_relu_gradient(self, factory, rows_activation, context):
        activation = _forward(factory, ActivationFunctionBaseType.RELU, rows_activation, context)
        upstream = np.full((3, 4), 2.0, dtype=np.float32)

        result = activation.back_propagate(_gradient(upstream))

        expected = np.where(rows_activation.get_activations() > 0, 2.0, 0.0)
        assert result.output.feature_orientation is ROWS
        assert result.output.neurons == Neurons(4)
        np.testing.assert_array_equal(result.output.get_activations(), expected)

    def test_softmax_gradient_returns_input_orientation(self, factory, rows_activation, context):
        activation = _forward(factory, ActivationFunctionBaseType.SOFTMAX, rows_activation, context)
        upstream = np.arange(12, dtype=np.float32).reshape(3, 4)

        result = activation.back_propagate(_gradient(upstream))

        y = activation.output.get_activations()
        expected = y * (upstream - np.sum(upstream * y, axis=1, keepdims=True))
        assert result.output.feature_orientation is ROWS
        assert (result.output.rows, result.output.columns) == (3, 4)
        np.testing.assert_allclose(result.output.get_activations(), expected, rtol=1e-4, atol=1e-5)

    def test_gradient_in_other_orientation(self, factory, rows_activation, context):
        activation = _forward(factory, ActivationFunctionBaseType.RELU, rows_activation, context)
        upstream = np.arange(12, dtype=np.float32).reshape(3, 4)

        result = activation.back_propagate(_gradient(upstream.T.copy(), COLUMNS))

        expected = np.where(rows_activation.get_activations() > 0, upstream, 0)
        assert result.output.feature_orientation is ROWS
        np.testing.assert_array_equal(result.output.get_activations(), expected)

    def test_axons_gradients_list_is_shared(self, factory, rows_activation, context):
        activation = _forward(factory, ActivationFunctionBaseType.TANH, rows_activation, context)
        axons = [object(), object()]

        result = activation.back_propagate(_gradient(np.ones((3, 4), dtype=np.float32), axons=axons))

        assert result.total_trainable_axons_gradients is axons

    def test_image_structure_preserved(self, factory, context):
        neurons = Neurons3D(2, 1, 2)
        image = NeuronsActivation(np.ones((3, 4), dtype=np.float32), ROWS, neurons, image=True)
        activation = _forward(factory, ActivationFunctionBaseType.SIGMOID, image, context, neurons)
        gradient = DirectedComponentGradient(
            NeuronsActivation(np.ones((3, 4), dtype=np.float32), ROWS, neurons, image=True)
        )

        result = activation.back_propagate(gradient)

        assert result.output.is_image
        assert result.output.neurons == neurons

    def test_parameter_gradient_raises(self, pytorch_engine, rows_activation, matrix_factory):
        foreign = MagicMock()
        foreign.backprop.side_effect = lambda buffer, epsilon: (epsilon, "weights-gradient")
        input_buffer = pytorch_engine.from_row_major(3, 4, rows_activation.get_activations().reshape(-1))
        activation = ForeignActivationFunctionComponentActivation(
            pytorch_engine,
            foreign,
            ActivationFunctionType(ActivationFunctionBaseType.LINEAR),
            rows_activation,
            input_buffer,
            rows_activation,
            ROWS,
            matrix_factory,
        )

        with pytest.raises(RuntimeError, match="with weights not supported"):
            activation.back_propagate(_gradient(np.ones((3, 4), dtype=np.float32)))

    def test_backprop_receives_saved_input_buffer(self, factory, rows_activation, context):
        activation = _forward(factory, ActivationFunctionBaseType.SOFTMAX, rows_activation, context)
        saved = activation.input_buffer
        activation.foreign_activation = MagicMock(wraps=activation.foreign_activation)

        activation.back_propagate(_gradient(np.ones((3, 4), dtype=np.float32)))

        buffer, epsilon = activation.foreign_activation.backprop.call_args[0]
        assert buffer is saved
        assert tuple(epsilon.shape) == (4, 3)


class TestCostFunctionGradient:
    def test_delegates_to_cost_function(self, factory, rows_activation, context):
        activation = _forward(factory, ActivationFunctionBaseType.SOFTMAX, rows_activation, context)
        cost_gradient = MagicMock()

        result = activation.back_propagate_cost_function_gradient(cost_gradient)

        cost_gradient.back_propagate_through_final_activation_function.assert_called_once_with(
            ActivationFunctionType(ActivationFunctionBaseType.SOFTMAX)
        )
        assert result is cost_gradient.back_propagate_through_final_activation_function.return_value

    def test_decompose(self, factory, rows_activation, context):
        activation = _forward(factory, ActivationFunctionBaseType.RELU, rows_activation, context)

        assert activation.decompose() == [activation]
