"""
PyTorch activation functions.

Wraps torch.nn.functional activations in the ForeignActivation protocol.
Backward passes are computed with torch.autograd from the saved input.

Softmax-family functions normalise along dim 0, i.e. they expect the
features of each example to run down a column.
"""

from typing import Callable, Dict, Optional, Tuple
import logging

import torch
import torch.nn.functional as F

from ...host.activation_types import ActivationFunctionTypeEnum

logger = logging.getLogger(__name__)

SOFTMAX_DIM = 0


def _identity(x: torch.Tensor) -> torch.Tensor:
    return x.clone()


PYTORCH_ACTIVATIONS: Dict[ActivationFunctionTypeEnum, Callable[[torch.Tensor], torch.Tensor]] = {
    ActivationFunctionTypeEnum.LINEAR: _identity,
    ActivationFunctionTypeEnum.RELU: F.relu,
    ActivationFunctionTypeEnum.LEAKY_RELU: F.leaky_relu,
    ActivationFunctionTypeEnum.SIGMOID: torch.sigmoid,
    ActivationFunctionTypeEnum.TANH: torch.tanh,
    ActivationFunctionTypeEnum.SOFTMAX: lambda x: F.softmax(x, dim=SOFTMAX_DIM),
    ActivationFunctionTypeEnum.LOG_SOFTMAX: lambda x: F.log_softmax(x, dim=SOFTMAX_DIM),
    ActivationFunctionTypeEnum.GELU: F.gelu,
}


class PyTorchActivation:
    """Differentiable torch activation function."""

    def __init__(self, kind: ActivationFunctionTypeEnum, fn: Callable[[torch.Tensor], torch.Tensor]):
        self.kind = kind
        self._fn = fn

    def get_activation(self, buffer: torch.Tensor, training: bool) -> torch.Tensor:
        # Element-wise kinds behave identically in training and inference
        with torch.no_grad():
            return self._fn(buffer)

    def backprop(
        self, buffer: torch.Tensor, epsilon: torch.Tensor
    ) -> Tuple[torch.Tensor, Optional[torch.Tensor]]:
        """
        Gradient with respect to the input via autograd.

        Activation functions carry no parameters, so the parameter gradient
        is always None.
        """
        x = buffer.detach().clone().requires_grad_(True)
        with torch.enable_grad():
            y = self._fn(x)
            (grad,) = torch.autograd.grad(y, x, grad_outputs=epsilon.to(y.dtype))
        return grad.detach(), None

    def __repr__(self):
        return f"PyTorchActivation({self.kind.name})"


def get_pytorch_activation(kind: ActivationFunctionTypeEnum) -> PyTorchActivation:
    """
    Look up the torch implementation of an activation function kind.

    Raises:
        ValueError: If torch has no mapping for the kind
    """
    if kind not in PYTORCH_ACTIVATIONS:
        raise ValueError(f"PyTorch engine does not implement activation function: {kind.name}")
    return PyTorchActivation(kind, PYTORCH_ACTIVATIONS[kind])
