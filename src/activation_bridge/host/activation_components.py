"""
Host-native activation function components.

Wrap a host DifferentiableActivationFunction in the component contract. These
are what the default component factory creates.
"""

from typing import Any, Optional
import logging

from .activation_functions import (
    DifferentiableActivationFunction,
    DifferentiableActivationFunctionActivation,
)
from .components import (
    CostFunctionGradient,
    DifferentiableActivationFunctionComponent,
    DifferentiableActivationFunctionComponentActivation,
    DirectedComponentGradient,
    NeuronsActivationContext,
)
from .neurons import AnyNeurons, NeuronsActivation

logger = logging.getLogger(__name__)


class HostActivationFunctionComponentActivation(DifferentiableActivationFunctionComponentActivation):
    def __init__(
        self,
        activation: DifferentiableActivationFunctionActivation,
        context: NeuronsActivationContext,
    ):
        self._activation = activation
        self._context = context

    @property
    def output(self) -> NeuronsActivation:
        return self._activation.output

    def back_propagate(self, gradient: DirectedComponentGradient) -> DirectedComponentGradient:
        activation_function = self._activation.activation_function
        input_gradient = activation_function.back_propagate(
            self._activation, gradient.output, self._context
        )
        return DirectedComponentGradient(input_gradient, gradient.total_trainable_axons_gradients)

    def back_propagate_cost_function_gradient(
        self, cost_function_gradient: CostFunctionGradient
    ) -> DirectedComponentGradient:
        return cost_function_gradient.back_propagate_through_final_activation_function(
            self._activation.activation_function.activation_function_type
        )


class HostActivationFunctionComponent(DifferentiableActivationFunctionComponent):
    """Activation function component backed by a host-native function."""

    def __init__(
        self,
        name: str,
        neurons: AnyNeurons,
        activation_function: DifferentiableActivationFunction,
        directed_component_factory: Optional[Any] = None,
    ):
        super().__init__(name, neurons, activation_function.activation_function_type)
        self.activation_function = activation_function
        self.directed_component_factory = directed_component_factory

    def forward_propagate(
        self,
        neurons_activation: NeuronsActivation,
        context: NeuronsActivationContext,
    ) -> HostActivationFunctionComponentActivation:
        logger.debug(f"{self.name}: forward {neurons_activation}")
        activation = self.activation_function.activate(neurons_activation, context)
        return HostActivationFunctionComponentActivation(activation, context)

    def dup(self, directed_component_factory: Any) -> "HostActivationFunctionComponent":
        return HostActivationFunctionComponent(
            self.name, self.input_neurons, self.activation_function, directed_component_factory
        )
