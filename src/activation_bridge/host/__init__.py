"""
Host Package - Contracts of the host component-graph framework.

Neurons descriptors, oriented activations, activation function types, the
component forward/backward contract and the default component factory.
"""

from .matrix import MatrixFactory
from .neurons import (
    AnyNeurons,
    Dimension,
    FeatureOrientation,
    FeaturesFormat,
    Neurons,
    Neurons3D,
    NeuronsActivation,
    NeuronsActivationFormat,
)
from .activation_types import (
    ActivationFunctionBaseType,
    ActivationFunctionType,
    ActivationFunctionTypeEnum,
)
from .components import (
    CostFunctionGradient,
    DifferentiableActivationFunctionComponent,
    DifferentiableActivationFunctionComponentActivation,
    DirectedComponentGradient,
    NeuralComponentBaseType,
    NeuralComponentType,
    NeuronsActivationContext,
)
from .activation_functions import (
    DifferentiableActivationFunction,
    DifferentiableActivationFunctionActivation,
    get_host_activation_function,
)
from .activation_components import (
    HostActivationFunctionComponent,
    HostActivationFunctionComponentActivation,
)
from .factory import DefaultDirectedComponentFactory

__all__ = [
    "MatrixFactory",
    # Neurons
    "AnyNeurons",
    "Dimension",
    "FeatureOrientation",
    "FeaturesFormat",
    "Neurons",
    "Neurons3D",
    "NeuronsActivation",
    "NeuronsActivationFormat",
    # Activation function types
    "ActivationFunctionBaseType",
    "ActivationFunctionType",
    "ActivationFunctionTypeEnum",
    # Component contracts
    "CostFunctionGradient",
    "DifferentiableActivationFunctionComponent",
    "DifferentiableActivationFunctionComponentActivation",
    "DirectedComponentGradient",
    "NeuralComponentBaseType",
    "NeuralComponentType",
    "NeuronsActivationContext",
    # Host-native implementations
    "DifferentiableActivationFunction",
    "DifferentiableActivationFunctionActivation",
    "get_host_activation_function",
    "HostActivationFunctionComponent",
    "HostActivationFunctionComponentActivation",
    "DefaultDirectedComponentFactory",
]
