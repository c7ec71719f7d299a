"""
PyTorch Engine Package - torch implementation of the engine protocol.
"""

from .pytorch_engine import PyTorchEngine, DTYPE_MAP
from .pytorch_activations import PyTorchActivation, PYTORCH_ACTIVATIONS, get_pytorch_activation
from .pytorch_device_manager import PyTorchDeviceManager

# Register PyTorch engine with the factory
from ..factory import EngineRegistry

EngineRegistry.register("pytorch", PyTorchEngine)

__all__ = [
    "PyTorchEngine",
    "DTYPE_MAP",
    "PyTorchActivation",
    "PYTORCH_ACTIVATIONS",
    "get_pytorch_activation",
    "PyTorchDeviceManager",
]
