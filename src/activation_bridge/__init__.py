"""
activation_bridge - Foreign activation functions in a host component graph.

Maps activation functions, gradients and numeric buffers between the host
component-graph framework and foreign numeric engines:
- host: neurons, oriented activations, component contracts
- engines: PyTorch and MLX engines behind one protocol
- bridge: layout conversion, bridge components, hybrid component factory

Usage:
    from activation_bridge import (
        ActivationFunctionBaseType, ActivationFunctionType, BridgeConfig,
        Neurons, create_hybrid_component_factory,
    )

    factory = create_hybrid_component_factory(BridgeConfig(device="cpu"))
    relu = factory.create_differentiable_activation_function_component(
        Neurons(4), ActivationFunctionType(ActivationFunctionBaseType.RELU)
    )
"""

from .host import (
    ActivationFunctionBaseType,
    ActivationFunctionType,
    ActivationFunctionTypeEnum,
    DefaultDirectedComponentFactory,
    DirectedComponentGradient,
    FeatureOrientation,
    MatrixFactory,
    Neurons,
    Neurons3D,
    NeuronsActivation,
    NeuronsActivationContext,
)
from .engines import EngineConfig, EngineRegistry, create_engine, register_engine
from .bridge import (
    ForeignActivationFunctionComponent,
    ForeignActivationFunctionComponentActivation,
    HostActivationFunctionAdapter,
    HybridDirectedComponentFactory,
    create_hybrid_component_factory,
    from_foreign_buffer,
    to_foreign_buffer,
)
from .config import BridgeConfig, load_bridge_config
from .infrastructure import setup_logging

__all__ = [
    # Host
    "ActivationFunctionBaseType",
    "ActivationFunctionType",
    "ActivationFunctionTypeEnum",
    "DefaultDirectedComponentFactory",
    "DirectedComponentGradient",
    "FeatureOrientation",
    "MatrixFactory",
    "Neurons",
    "Neurons3D",
    "NeuronsActivation",
    "NeuronsActivationContext",
    # Engines
    "EngineConfig",
    "EngineRegistry",
    "create_engine",
    "register_engine",
    # Bridge
    "ForeignActivationFunctionComponent",
    "ForeignActivationFunctionComponentActivation",
    "HostActivationFunctionAdapter",
    "HybridDirectedComponentFactory",
    "create_hybrid_component_factory",
    "from_foreign_buffer",
    "to_foreign_buffer",
    # Config
    "BridgeConfig",
    "load_bridge_config",
    # Logging
    "setup_logging",
]

__version__ = "0.1.0"
