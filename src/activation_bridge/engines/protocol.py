"""
Engine Protocol - Core abstraction for foreign numeric engines.

Defines the interface that every foreign engine (PyTorch, MLX, etc.) must
implement so its tensors and activation functions can be bridged into the
host component graph.
"""

from typing import Any, List, Optional, Protocol, Tuple
from dataclasses import dataclass

import numpy as np

from ..host.activation_types import ActivationFunctionTypeEnum

VALID_DTYPES = ["float16", "float32", "bfloat16"]


@dataclass
class EngineConfig:
    """Configuration for engine initialization."""

    engine_type: str  # "pytorch" or "mlx"
    device: str = "auto"  # "cuda", "mps", "cpu", "gpu", "auto"
    dtype: str = "float32"  # "float16", "float32", "bfloat16"
    seed: Optional[int] = None
    validate: bool = True  # Set to False to skip validation (for testing)

    def __post_init__(self):
        """Validate configuration."""
        if not self.validate:
            return

        # Import here to avoid circular dependency
        from .factory import EngineRegistry, load_builtin_engine

        load_builtin_engine(self.engine_type)
        if not EngineRegistry.is_registered(self.engine_type):
            available = EngineRegistry.list_engines()
            raise ValueError(
                f"Unknown engine_type: {self.engine_type}. "
                f"Registered engines: {available}"
            )

        if self.dtype not in VALID_DTYPES:
            raise ValueError(
                f"Invalid dtype: {self.dtype}. "
                f"Must be one of {VALID_DTYPES}"
            )


class ForeignActivation(Protocol):
    """
    Differentiable activation function owned by a foreign engine.

    Buffers are the engine's native 2-D tensors.
    """

    def get_activation(self, buffer: Any, training: bool) -> Any:
        """
        Apply the activation function.

        Args:
            buffer: Input tensor
            training: Whether this is a training (vs inference) pass

        Returns:
            Output tensor of the same shape
        """
        ...

    def backprop(self, buffer: Any, epsilon: Any) -> Tuple[Any, Optional[Any]]:
        """
        Back propagate through the activation function.

        Args:
            buffer: Input tensor the forward pass was applied to
            epsilon: Gradient with respect to the output

        Returns:
            (gradient with respect to the input, parameter gradient or None)
        """
        ...


class EngineProtocol(Protocol):
    """
    Protocol defining the interface all engines must implement.

    Engines own a native 2-D tensor type and expose it through row-major
    packing so the layout converter can stay engine-agnostic.
    """

    @property
    def name(self) -> str:
        """Engine name (e.g., 'pytorch', 'mlx')."""
        ...

    @property
    def config(self) -> EngineConfig:
        """Engine configuration."""
        ...

    def from_row_major(self, rows: int, columns: int, data: np.ndarray) -> Any:
        """
        Create a native tensor from row-major values without losing precision.

        Args:
            rows: Number of rows
            columns: Number of columns
            data: Flat row-major float values

        Returns:
            Native (rows, columns) tensor

        Raises:
            ValueError: If the engine cannot hold the data exactly
        """
        ...

    def to_row_major(self, buffer: Any) -> Tuple[int, int, np.ndarray]:
        """
        Extract rows, columns and flat row-major values at the buffer's precision.

        Args:
            buffer: Native 2-D tensor

        Returns:
            (rows, columns, data)
        """
        ...

    def get_activation_function(self, kind: ActivationFunctionTypeEnum) -> ForeignActivation:
        """
        Look up the engine's implementation of an activation function kind.

        Raises:
            ValueError: If the engine does not implement the kind
        """
        ...

    def supported_activation_types(self) -> List[ActivationFunctionTypeEnum]:
        """Activation function kinds this engine implements."""
        ...
