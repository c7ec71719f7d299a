"""
MLX Engine Package - MLX implementation of the engine protocol.

Requires the mlx library (Apple Silicon only).
"""

from .mlx_engine import MLXEngine, DTYPE_MAP
from .mlx_activations import MLXActivation, MLX_ACTIVATIONS, get_mlx_activation

# Register MLX engine with the factory
from ..factory import EngineRegistry

EngineRegistry.register("mlx", MLXEngine)

__all__ = [
    "MLXEngine",
    "DTYPE_MAP",
    "MLXActivation",
    "MLX_ACTIVATIONS",
    "get_mlx_activation",
]
