"""
Engines Package - Foreign numeric engine abstraction.

Provides a unified interface over the foreign libraries whose activation
functions are bridged into the host component graph:
- PyTorch (torch.nn.functional, autograd)
- MLX (Apple Silicon)

Usage:
    from activation_bridge.engines import create_engine

    engine = create_engine("pytorch", device="cpu")
    softmax = engine.get_activation_function(ActivationFunctionTypeEnum.SOFTMAX)
"""

from .protocol import EngineProtocol, EngineConfig, ForeignActivation, VALID_DTYPES
from .factory import (
    BUILTIN_ENGINES,
    EngineRegistry,
    create_engine,
    load_builtin_engine,
    register_engine,
)

__all__ = [
    # Core protocols
    "EngineProtocol",
    "EngineConfig",
    "ForeignActivation",
    "VALID_DTYPES",
    # Factory
    "BUILTIN_ENGINES",
    "EngineRegistry",
    "create_engine",
    "load_builtin_engine",
    "register_engine",
]
