"""
Result of forward propagating through a foreign activation function.

Holds everything backward propagation needs (the original input, the foreign
input buffer and the orientation it was packed in) so that no forward
computation is repeated.
"""

from typing import Any, Optional
import logging

from ..engines.protocol import EngineProtocol, ForeignActivation
from ..host.activation_types import ActivationFunctionType
from ..host.components import (
    CostFunctionGradient,
    DifferentiableActivationFunctionComponentActivation,
    DirectedComponentGradient,
)
from ..host.matrix import MatrixFactory
from ..host.neurons import FeatureOrientation, NeuronsActivation
from .layout import from_foreign_buffer, to_foreign_buffer

logger = logging.getLogger(__name__)


class ForeignActivationFunctionComponentActivation(DifferentiableActivationFunctionComponentActivation):
    """
    Adapter wrapping a foreign activation function and its forward output so
    that together they satisfy the host component activation contract.
    """

    def __init__(
        self,
        engine: EngineProtocol,
        foreign_activation: ForeignActivation,
        activation_function_type: ActivationFunctionType,
        input_activation: NeuronsActivation,
        input_buffer: Any,
        output_activation: NeuronsActivation,
        feature_orientation: FeatureOrientation,
        matrix_factory: Optional[MatrixFactory] = None,
    ):
        """
        Args:
            engine: Engine owning input_buffer
            foreign_activation: Foreign activation function applied
            activation_function_type: Host type of the activation function
            input_activation: Host input of the forward pass
            input_buffer: Foreign buffer the forward pass consumed
            output_activation: Host output of the forward pass
            feature_orientation: Orientation input_buffer was packed in
            matrix_factory: Factory for host matrices created during backward
        """
        self.engine = engine
        self.foreign_activation = foreign_activation
        self.activation_function_type = activation_function_type
        self.input = input_activation
        self.input_buffer = input_buffer
        self._output = output_activation
        self.feature_orientation = feature_orientation
        self.matrix_factory = matrix_factory

    @property
    def output(self) -> NeuronsActivation:
        return self._output

    def back_propagate(self, gradient: DirectedComponentGradient) -> DirectedComponentGradient:
        """
        Back propagate through the foreign activation function.

        Args:
            gradient: Gradient with respect to this component's output

        Returns:
            Gradient with respect to the input, sharing the incoming
            trainable axons gradients list

        Raises:
            RuntimeError: If the foreign function reports parameter gradients
        """
        gradient_buffer = to_foreign_buffer(
            self.engine, gradient.output, self.feature_orientation, self.matrix_factory
        )

        input_gradient_buffer, parameter_gradient = self.foreign_activation.backprop(
            self.input_buffer, gradient_buffer
        )
        if parameter_gradient is not None:
            raise RuntimeError(
                f"Activation gradient for activation functions with weights not supported "
                f"({self.activation_function_type})"
            )

        input_gradient = from_foreign_buffer(
            self.engine,
            input_gradient_buffer,
            self.feature_orientation,
            self.input.feature_orientation,
            self.input.neurons,
            self.input.is_image,
            self.matrix_factory,
        )
        return DirectedComponentGradient(input_gradient, gradient.total_trainable_axons_gradients)

    def back_propagate_cost_function_gradient(
        self, cost_function_gradient: CostFunctionGradient
    ) -> DirectedComponentGradient:
        """Final-layer shortcut; the cost function owns the combined derivative."""
        return cost_function_gradient.back_propagate_through_final_activation_function(
            self.activation_function_type
        )
