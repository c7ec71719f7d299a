"""
MLX Engine - EngineProtocol implementation backed by MLX arrays.

MLX uses unified memory on Apple Silicon, so there is no device placement:
arrays are created once and used by both CPU and GPU.
"""

from typing import Any, List, Tuple
import logging

import numpy as np
import mlx.core as mx

from ..protocol import EngineConfig, EngineProtocol
from ...host.activation_types import ActivationFunctionTypeEnum
from .mlx_activations import MLX_ACTIVATIONS, MLXActivation, get_mlx_activation

logger = logging.getLogger(__name__)

DTYPE_MAP = {
    "float16": mx.float16,
    "float32": mx.float32,
    "bfloat16": mx.bfloat16,
}


class MLXEngine(EngineProtocol):
    """MLX implementation of EngineProtocol."""

    def __init__(self, config: EngineConfig):
        self._config = config
        self._dtype = DTYPE_MAP.get(config.dtype, mx.float32)

        if config.device not in ("auto", "gpu", "mps"):
            logger.warning(
                f"MLX only supports 'auto', 'gpu', or 'mps'. "
                f"Got '{config.device}', using unified memory default"
            )

        if config.seed is not None:
            mx.random.seed(config.seed)

        logger.info(f"Initialized MLX engine (dtype={config.dtype}, seed={config.seed})")

    @property
    def name(self) -> str:
        return "mlx"

    @property
    def config(self) -> EngineConfig:
        return self._config

    def from_row_major(self, rows: int, columns: int, data: np.ndarray) -> Any:
        """
        Create an MLX array from row-major values.

        Data is widened to the configured dtype when narrower and otherwise
        kept at its own precision.

        Raises:
            ValueError: If the data is float64, which MLX cannot hold exactly
        """
        values = np.array(data, copy=True).reshape(rows, columns)
        if values.dtype.kind != "f":
            values = values.astype(np.float32)
        if values.dtype == np.float64:
            raise ValueError(
                "MLX engine cannot hold float64 data without loss; "
                "use a float32 (or narrower) MatrixFactory"
            )
        array = mx.array(values)
        if self._dtype.size > array.dtype.size:
            array = array.astype(self._dtype)
        return array

    def to_row_major(self, buffer: Any) -> Tuple[int, int, np.ndarray]:
        if buffer.ndim != 2:
            raise ValueError(f"Expected a 2-D array, got shape {tuple(buffer.shape)}")
        rows, columns = buffer.shape
        # numpy has no bfloat16; float32 holds every bfloat16 value exactly
        if buffer.dtype == mx.bfloat16:
            buffer = buffer.astype(mx.float32)
        data = np.array(buffer, copy=True).reshape(-1)
        return rows, columns, data

    def get_activation_function(self, kind: ActivationFunctionTypeEnum) -> MLXActivation:
        return get_mlx_activation(kind)

    def supported_activation_types(self) -> List[ActivationFunctionTypeEnum]:
        return list(MLX_ACTIVATIONS)
