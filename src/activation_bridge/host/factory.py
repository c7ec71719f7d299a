"""
Default component factory of the host framework.

Creates host-native activation function components. Engine-specific factories
extend this class and override the activation function methods.
"""

from typing import Optional
import logging

from .activation_components import HostActivationFunctionComponent
from .activation_functions import DifferentiableActivationFunction, get_host_activation_function
from .activation_types import ActivationFunctionType
from .components import DifferentiableActivationFunctionComponent
from .matrix import MatrixFactory
from .neurons import AnyNeurons

logger = logging.getLogger(__name__)


def default_component_name(activation_function_type: ActivationFunctionType) -> str:
    return f"{activation_function_type.qualified_id.lower()}_activation"


class DefaultDirectedComponentFactory:
    """Host framework component factory."""

    def __init__(self, matrix_factory: Optional[MatrixFactory] = None):
        """
        Initialize factory.

        Args:
            matrix_factory: Factory for host matrices (float32 by default)
        """
        self.matrix_factory = matrix_factory or MatrixFactory()

    def create_differentiable_activation_function_component(
        self,
        neurons: AnyNeurons,
        activation_function_type: ActivationFunctionType,
        name: Optional[str] = None,
    ) -> DifferentiableActivationFunctionComponent:
        """
        Create an activation function component for a neurons layer.

        Args:
            neurons: Layer the activation function applies to
            activation_function_type: Kind of activation function
            name: Component name (derived from the type if None)

        Returns:
            New component

        Raises:
            ValueError: If the activation function type is not supported
        """
        activation_function = get_host_activation_function(activation_function_type)
        return HostActivationFunctionComponent(
            name or default_component_name(activation_function_type),
            neurons,
            activation_function,
            self,
        )

    def create_differentiable_activation_function_component_for_function(
        self,
        neurons: AnyNeurons,
        activation_function: DifferentiableActivationFunction,
        name: Optional[str] = None,
    ) -> DifferentiableActivationFunctionComponent:
        activation_function_type = activation_function.activation_function_type
        return HostActivationFunctionComponent(
            name or default_component_name(activation_function_type),
            neurons,
            activation_function,
            self,
        )
