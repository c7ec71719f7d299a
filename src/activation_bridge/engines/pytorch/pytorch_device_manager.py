"""
PyTorch Device Manager - Device selection for the PyTorch engine.

Resolves a device string to a torch.device, falling back to CPU when the
requested accelerator is unavailable.
"""

from typing import Any
import logging

import torch

logger = logging.getLogger(__name__)


class PyTorchDeviceManager:
    """Resolves and holds the torch.device tensors are created on."""

    def __init__(self, device: str = "auto"):
        """
        Initialize device manager.

        Args:
            device: Target device ("auto", "cuda", "mps", "cpu")
        """
        self._device = self._resolve_device(device)
        logger.info(f"PyTorch device manager initialized with device: {self._device}")

    @staticmethod
    def _mps_available() -> bool:
        return hasattr(torch.backends, "mps") and torch.backends.mps.is_available()

    def _resolve_device(self, device: str) -> torch.device:
        if device == "auto":
            if torch.cuda.is_available():
                return torch.device("cuda")
            elif self._mps_available():
                return torch.device("mps")
            return torch.device("cpu")

        elif device == "cuda":
            if not torch.cuda.is_available():
                logger.warning("CUDA requested but not available, falling back to CPU")
                return torch.device("cpu")
            return torch.device("cuda")

        elif device == "mps":
            if not self._mps_available():
                logger.warning("MPS requested but not available, falling back to CPU")
                return torch.device("cpu")
            return torch.device("mps")

        elif device == "cpu":
            return torch.device("cpu")

        else:
            logger.warning(f"Unknown device '{device}', falling back to auto")
            return self._resolve_device("auto")

    def get_device(self) -> torch.device:
        return self._device

    def move_to_device(self, obj: Any) -> Any:
        if hasattr(obj, "to"):
            return obj.to(self._device)
        return obj

    def is_available(self) -> bool:
        """True if an accelerator (not CPU) is in use."""
        if self._device.type == "cuda":
            return torch.cuda.is_available()
        elif self._device.type == "mps":
            return self._mps_available()
        return False

    @property
    def device_type(self) -> str:
        """Get device type as string (cuda, mps, cpu)."""
        return self._device.type

    @property
    def is_cpu(self) -> bool:
        return self._device.type == "cpu"
