"""
Hybrid component factory.

Extension of the host DefaultDirectedComponentFactory which builds activation
function components from a foreign engine, while every other component is
still created by the host factory.
"""

from typing import Optional
import logging

from ..config import BridgeConfig
from ..engines.factory import EngineRegistry
from ..engines.protocol import EngineProtocol
from ..host.activation_functions import DifferentiableActivationFunction
from ..host.activation_types import ActivationFunctionType, ActivationFunctionTypeEnum
from ..host.factory import DefaultDirectedComponentFactory, default_component_name
from ..host.matrix import MatrixFactory
from ..host.neurons import AnyNeurons, FeatureOrientation
from .component import ForeignActivationFunctionComponent

logger = logging.getLogger(__name__)


class HybridDirectedComponentFactory(DefaultDirectedComponentFactory):
    """Component factory using foreign engine activation functions."""

    def __init__(
        self,
        engine: EngineProtocol,
        matrix_factory: Optional[MatrixFactory] = None,
        config: Optional[BridgeConfig] = None,
    ):
        """
        Initialize factory.

        Args:
            engine: Foreign engine supplying activation functions
            matrix_factory: Factory for host matrices
            config: Bridge configuration (orientation overrides)
        """
        super().__init__(matrix_factory)
        self.engine = engine
        self.config = config or BridgeConfig(engine=engine.name)

    def required_orientation(
        self, activation_function_type: ActivationFunctionType
    ) -> Optional[FeatureOrientation]:
        return self.config.required_orientation(activation_function_type.base_type)

    def create_differentiable_activation_function_component(
        self,
        neurons: AnyNeurons,
        activation_function_type: ActivationFunctionType,
        name: Optional[str] = None,
    ) -> ForeignActivationFunctionComponent:
        """
        Create a foreign-backed activation function component.

        Args:
            neurons: Layer the activation function applies to
            activation_function_type: Host activation function type
            name: Component name (derived from the type if None)

        Returns:
            New bridge component

        Raises:
            ValueError: If the type has no provider-neutral equivalent or the
                engine does not implement it
        """
        kind = ActivationFunctionTypeEnum.find_by_base_type(activation_function_type.base_type)
        if kind is None:
            raise ValueError(
                f"Unsupported activation type: cannot find provider-agnostic "
                f"activation function type for: {activation_function_type}"
            )

        foreign_activation = self.engine.get_activation_function(kind)
        required_orientation = self.required_orientation(activation_function_type)

        logger.debug(
            f"Creating {self.engine.name} {kind.name} component for {neurons} "
            f"(required orientation: {required_orientation.name if required_orientation else None})"
        )
        return ForeignActivationFunctionComponent(
            name or default_component_name(activation_function_type),
            neurons,
            self.engine,
            foreign_activation,
            activation_function_type,
            required_orientation,
            self,
        )

    def create_differentiable_activation_function_component_for_function(
        self,
        neurons: AnyNeurons,
        activation_function: DifferentiableActivationFunction,
        name: Optional[str] = None,
    ) -> ForeignActivationFunctionComponent:
        """Replace a host activation function with the engine's equivalent."""
        return self.create_differentiable_activation_function_component(
            neurons, activation_function.activation_function_type, name
        )


def create_hybrid_component_factory(
    config: Optional[BridgeConfig] = None,
    matrix_factory: Optional[MatrixFactory] = None,
) -> HybridDirectedComponentFactory:
    """
    Build the configured engine and a factory around it.

    Example:
        >>> factory = create_hybrid_component_factory(BridgeConfig(device="cpu"))
        >>> softmax = factory.create_differentiable_activation_function_component(
        ...     Neurons(10), ActivationFunctionType(ActivationFunctionBaseType.SOFTMAX))
    """
    config = config or BridgeConfig()
    engine = EngineRegistry.create(config.to_engine_config())
    return HybridDirectedComponentFactory(engine, matrix_factory, config)
