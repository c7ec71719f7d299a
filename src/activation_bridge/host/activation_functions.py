"""
Host-native activation functions.

Numpy implementations used by the default component factory and exposed to
foreign engines through the host activation adapter.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Dict, Type

import numpy as np

from .activation_types import ActivationFunctionBaseType, ActivationFunctionType
from .components import NeuronsActivationContext
from .neurons import FeatureOrientation, NeuronsActivation

LEAKY_RELU_NEGATIVE_SLOPE = 0.01


@dataclass
class DifferentiableActivationFunctionActivation:
    """Input and output of a single activation function application."""

    activation_function: "DifferentiableActivationFunction"
    input: NeuronsActivation
    output: NeuronsActivation


def _aligned(activation: NeuronsActivation, orientation: FeatureOrientation) -> np.ndarray:
    """Activation matrix laid out in the given orientation."""
    matrix = activation.get_activations()
    if activation.feature_orientation is orientation:
        return matrix
    return matrix.T


class DifferentiableActivationFunction(ABC):
    """Activation function with a backward pass."""

    base_type: ActivationFunctionBaseType

    @property
    def activation_function_type(self) -> ActivationFunctionType:
        return ActivationFunctionType.get_base_type(self.base_type)

    @abstractmethod
    def _forward(self, x: np.ndarray, feature_axis: int) -> np.ndarray:
        pass

    @abstractmethod
    def _backward(self, x: np.ndarray, y: np.ndarray, grad: np.ndarray, feature_axis: int) -> np.ndarray:
        pass

    def activate(
        self, input_activation: NeuronsActivation, context: NeuronsActivationContext
    ) -> DifferentiableActivationFunctionActivation:
        """
        Apply the function.

        Args:
            input_activation: Input activation (either orientation)
            context: Activation context supplying the matrix factory

        Returns:
            Activation holding input and output (output keeps the input's
            orientation, neurons and image flag)
        """
        orientation = input_activation.feature_orientation
        y = self._forward(input_activation.get_activations(), orientation.feature_axis())
        output = NeuronsActivation(
            context.matrix_factory.create_matrix(y),
            orientation,
            input_activation.neurons,
            input_activation.is_image,
        )
        return DifferentiableActivationFunctionActivation(self, input_activation, output)

    def back_propagate(
        self,
        activation: DifferentiableActivationFunctionActivation,
        output_gradient: NeuronsActivation,
        context: NeuronsActivationContext,
    ) -> NeuronsActivation:
        """
        Gradient with respect to the input.

        The output gradient may arrive in either orientation; the result is
        in the orientation of the original input.
        """
        input_activation = activation.input
        orientation = input_activation.feature_orientation
        grad = self._backward(
            input_activation.get_activations(),
            _aligned(activation.output, orientation),
            _aligned(output_gradient, orientation),
            orientation.feature_axis(),
        )
        return NeuronsActivation(
            context.matrix_factory.create_matrix(grad),
            orientation,
            input_activation.neurons,
            input_activation.is_image,
        )

    def __repr__(self):
        return f"{self.__class__.__name__}()"


class LinearActivationFunction(DifferentiableActivationFunction):
    base_type = ActivationFunctionBaseType.LINEAR

    def _forward(self, x, feature_axis):
        return x

    def _backward(self, x, y, grad, feature_axis):
        return grad


class ReluActivationFunction(DifferentiableActivationFunction):
    base_type = ActivationFunctionBaseType.RELU

    def _forward(self, x, feature_axis):
        return np.maximum(x, 0)

    def _backward(self, x, y, grad, feature_axis):
        return np.where(x > 0, grad, 0)


class LeakyReluActivationFunction(DifferentiableActivationFunction):
    base_type = ActivationFunctionBaseType.LEAKY_RELU

    def __init__(self, negative_slope: float = LEAKY_RELU_NEGATIVE_SLOPE):
        self.negative_slope = negative_slope

    def _forward(self, x, feature_axis):
        return np.where(x > 0, x, x * self.negative_slope)

    def _backward(self, x, y, grad, feature_axis):
        return np.where(x > 0, grad, grad * self.negative_slope)


class SigmoidActivationFunction(DifferentiableActivationFunction):
    base_type = ActivationFunctionBaseType.SIGMOID

    def _forward(self, x, feature_axis):
        return 1.0 / (1.0 + np.exp(-x))

    def _backward(self, x, y, grad, feature_axis):
        return grad * y * (1.0 - y)


class TanhActivationFunction(DifferentiableActivationFunction):
    base_type = ActivationFunctionBaseType.TANH

    def _forward(self, x, feature_axis):
        return np.tanh(x)

    def _backward(self, x, y, grad, feature_axis):
        return grad * (1.0 - y * y)


class SoftmaxActivationFunction(DifferentiableActivationFunction):
    """Softmax across the feature axis of each example."""

    base_type = ActivationFunctionBaseType.SOFTMAX

    def _forward(self, x, feature_axis):
        shifted = np.exp(x - np.max(x, axis=feature_axis, keepdims=True))
        return shifted / np.sum(shifted, axis=feature_axis, keepdims=True)

    def _backward(self, x, y, grad, feature_axis):
        return y * (grad - np.sum(grad * y, axis=feature_axis, keepdims=True))


class LogSoftmaxActivationFunction(DifferentiableActivationFunction):
    base_type = ActivationFunctionBaseType.LOG_SOFTMAX

    def _forward(self, x, feature_axis):
        shifted = x - np.max(x, axis=feature_axis, keepdims=True)
        return shifted - np.log(np.sum(np.exp(shifted), axis=feature_axis, keepdims=True))

    def _backward(self, x, y, grad, feature_axis):
        return grad - np.exp(y) * np.sum(grad, axis=feature_axis, keepdims=True)


HOST_ACTIVATION_FUNCTIONS: Dict[ActivationFunctionBaseType, Type[DifferentiableActivationFunction]] = {
    cls.base_type: cls
    for cls in (
        LinearActivationFunction,
        ReluActivationFunction,
        LeakyReluActivationFunction,
        SigmoidActivationFunction,
        TanhActivationFunction,
        SoftmaxActivationFunction,
        LogSoftmaxActivationFunction,
    )
}


def get_host_activation_function(
    activation_function_type: ActivationFunctionType,
) -> DifferentiableActivationFunction:
    """
    Create the host-native implementation of an activation function type.

    Raises:
        ValueError: If the host has no native implementation
    """
    base_type = activation_function_type.base_type
    if base_type not in HOST_ACTIVATION_FUNCTIONS:
        available = ", ".join(t.name for t in HOST_ACTIVATION_FUNCTIONS)
        raise ValueError(
            f"No host activation function for: {activation_function_type}. "
            f"Available: {available}"
        )
    return HOST_ACTIVATION_FUNCTIONS[base_type]()
