"""
PyTorch Engine - EngineProtocol implementation backed by torch tensors.
"""

from typing import List, Tuple
import logging

import numpy as np
import torch

from ..protocol import EngineConfig, EngineProtocol
from ...host.activation_types import ActivationFunctionTypeEnum
from .pytorch_activations import PYTORCH_ACTIVATIONS, PyTorchActivation, get_pytorch_activation
from .pytorch_device_manager import PyTorchDeviceManager

logger = logging.getLogger(__name__)

DTYPE_MAP = {
    "float16": torch.float16,
    "float32": torch.float32,
    "bfloat16": torch.bfloat16,
}


class PyTorchEngine(EngineProtocol):
    """
    PyTorch implementation of EngineProtocol.

    Native buffers are 2-D torch tensors on the configured device and dtype.
    """

    def __init__(self, config: EngineConfig):
        """
        Initialize PyTorch engine.

        Args:
            config: Engine configuration
        """
        self._config = config
        self._device_manager = PyTorchDeviceManager(config.device)
        self._dtype = DTYPE_MAP.get(config.dtype, torch.float32)

        if config.seed is not None:
            torch.manual_seed(config.seed)
            if torch.cuda.is_available():
                torch.cuda.manual_seed_all(config.seed)

        logger.info(
            f"Initialized PyTorch engine "
            f"(device={self._device_manager.device_type}, "
            f"dtype={config.dtype}, "
            f"seed={config.seed})"
        )

    @property
    def name(self) -> str:
        return "pytorch"

    @property
    def config(self) -> EngineConfig:
        return self._config

    @property
    def dtype(self) -> torch.dtype:
        return self._dtype

    def get_device_manager(self) -> PyTorchDeviceManager:
        return self._device_manager

    def from_row_major(self, rows: int, columns: int, data: np.ndarray) -> torch.Tensor:
        """
        Create a tensor from row-major values.

        The configured dtype is a floor: data is widened to it when narrower
        and otherwise kept at its own precision, so packing never loses bits.
        """
        # Copy so the tensor never aliases host memory
        values = np.array(data, copy=True).reshape(rows, columns)
        if values.dtype.kind != "f":
            values = values.astype(np.float32)
        tensor = torch.from_numpy(values)
        tensor = tensor.to(dtype=torch.promote_types(tensor.dtype, self._dtype))
        return self._device_manager.move_to_device(tensor)

    def to_row_major(self, buffer: torch.Tensor) -> Tuple[int, int, np.ndarray]:
        if buffer.dim() != 2:
            raise ValueError(f"Expected a 2-D tensor, got shape {tuple(buffer.shape)}")
        rows, columns = buffer.shape
        values = buffer.detach().cpu()
        # numpy has no bfloat16; float32 holds every bfloat16 value exactly
        if values.dtype == torch.bfloat16:
            values = values.to(torch.float32)
        data = values.contiguous().reshape(-1).numpy()
        return rows, columns, data

    def get_activation_function(self, kind: ActivationFunctionTypeEnum) -> PyTorchActivation:
        return get_pytorch_activation(kind)

    def supported_activation_types(self) -> List[ActivationFunctionTypeEnum]:
        return list(PYTORCH_ACTIVATIONS)
