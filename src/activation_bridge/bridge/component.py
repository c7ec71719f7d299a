"""
Foreign activation function component.

Adapter wrapping a foreign engine's activation function so that it conforms
to the host DifferentiableActivationFunctionComponent contract, allowing
engine-specific activation functions to be used in a host component graph.
"""

from typing import Any, Optional
import logging

from ..engines.protocol import EngineProtocol, ForeignActivation
from ..host.activation_types import ActivationFunctionType
from ..host.components import (
    DifferentiableActivationFunctionComponent,
    NeuronsActivationContext,
)
from ..host.neurons import (
    AnyNeurons,
    Dimension,
    FeatureOrientation,
    FeaturesFormat,
    Neurons3D,
    NeuronsActivation,
    NeuronsActivationFormat,
)
from .component_activation import ForeignActivationFunctionComponentActivation
from .layout import from_foreign_buffer, to_foreign_buffer

logger = logging.getLogger(__name__)


class ForeignActivationFunctionComponent(DifferentiableActivationFunctionComponent):
    """
    Host activation function component backed by a foreign activation.

    Holds only immutable configuration, so a single instance can serve
    concurrent forward passes.
    """

    def __init__(
        self,
        name: str,
        neurons: AnyNeurons,
        engine: EngineProtocol,
        foreign_activation: ForeignActivation,
        activation_function_type: ActivationFunctionType,
        required_orientation: Optional[FeatureOrientation] = None,
        directed_component_factory: Optional[Any] = None,
    ):
        """
        Initialize component.

        Args:
            name: Component name
            neurons: Neurons the activation function applies to
            engine: Foreign engine owning foreign_activation
            foreign_activation: Foreign activation function
            activation_function_type: Host type of the activation function
            required_orientation: Orientation the foreign function needs its
                input in, or None to use the caller's orientation
            directed_component_factory: Factory that owns this component
        """
        super().__init__(name, neurons, activation_function_type)
        self.engine = engine
        self.foreign_activation = foreign_activation
        self.required_orientation = required_orientation
        self.directed_component_factory = directed_component_factory

    def forward_propagate(
        self,
        neurons_activation: NeuronsActivation,
        context: NeuronsActivationContext,
    ) -> ForeignActivationFunctionComponentActivation:
        """
        Forward propagate through the foreign activation function.

        Args:
            neurons_activation: Host input activation
            context: Activation context (matrix factory, training flag)

        Returns:
            Component activation holding the output and backward state

        Raises:
            ValueError: If the input format is not supported
        """
        activation_format = neurons_activation.format
        if not self.is_supported(activation_format):
            raise ValueError(
                f"Input neurons activation format of: {activation_format} not supported "
                f"by {self.name}"
            )

        optimised_format = self.optimised_for()
        if optimised_format is not None and optimised_format != activation_format:
            logger.warning(
                f"{self.name}: not using optimised input format "
                f"(expected {optimised_format.feature_orientation.name}, "
                f"got {activation_format.feature_orientation.name})"
            )

        orientation = self.required_orientation or neurons_activation.feature_orientation
        matrix_factory = context.matrix_factory

        input_buffer = to_foreign_buffer(self.engine, neurons_activation, orientation, matrix_factory)
        output_buffer = self.foreign_activation.get_activation(input_buffer, context.training_context)
        output_activation = from_foreign_buffer(
            self.engine,
            output_buffer,
            orientation,
            neurons_activation.feature_orientation,
            self.output_neurons,
            neurons_activation.is_image,
            matrix_factory,
        )

        return ForeignActivationFunctionComponentActivation(
            self.engine,
            self.foreign_activation,
            self.activation_function_type,
            neurons_activation,
            input_buffer,
            output_activation,
            orientation,
            matrix_factory,
        )

    def is_supported(self, activation_format: NeuronsActivationFormat) -> bool:
        """Flat features in either orientation; images only with 3-D neurons."""
        if activation_format.features_format is FeaturesFormat.IMAGE:
            return isinstance(self.input_neurons, Neurons3D)
        return True

    def optimised_for(self) -> Optional[NeuronsActivationFormat]:
        if self.required_orientation is None:
            return None
        return NeuronsActivationFormat(
            self.required_orientation, FeaturesFormat.FLAT, (Dimension.EXAMPLE,)
        )

    def dup(self, directed_component_factory: Any) -> "ForeignActivationFunctionComponent":
        return ForeignActivationFunctionComponent(
            self.name,
            self.input_neurons,
            self.engine,
            self.foreign_activation,
            self.activation_function_type,
            self.required_orientation,
            directed_component_factory,
        )
