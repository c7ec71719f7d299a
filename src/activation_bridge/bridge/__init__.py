"""
Bridge Package - Foreign activation functions in host component graphs.

Usage:
    from activation_bridge.bridge import create_hybrid_component_factory

    factory = create_hybrid_component_factory()
    component = factory.create_differentiable_activation_function_component(
        Neurons(4), ActivationFunctionType(ActivationFunctionBaseType.RELU)
    )
    activation = component.forward_propagate(inputs, NeuronsActivationContext())
"""

from .layout import (
    from_foreign_buffer,
    from_foreign_matrix,
    to_foreign_buffer,
    to_foreign_matrix,
)
from .component import ForeignActivationFunctionComponent
from .component_activation import ForeignActivationFunctionComponentActivation
from .component_factory import HybridDirectedComponentFactory, create_hybrid_component_factory
from .host_activation import HostActivationFunctionAdapter

__all__ = [
    # Layout conversion
    "from_foreign_buffer",
    "from_foreign_matrix",
    "to_foreign_buffer",
    "to_foreign_matrix",
    # Components
    "ForeignActivationFunctionComponent",
    "ForeignActivationFunctionComponentActivation",
    "HybridDirectedComponentFactory",
    "create_hybrid_component_factory",
    "HostActivationFunctionAdapter",
]
