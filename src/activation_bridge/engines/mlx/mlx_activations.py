"""
MLX activation functions.

MLX arrays are immutable and lazily evaluated; backward passes use mx.vjp
on the saved input. Softmax kinds normalise along axis 0, like the PyTorch
engine.
"""

from typing import Any, Callable, Dict, Optional, Tuple

import mlx.core as mx
import mlx.nn as nn

from ...host.activation_types import ActivationFunctionTypeEnum

SOFTMAX_AXIS = 0


MLX_ACTIVATIONS: Dict[ActivationFunctionTypeEnum, Callable[[Any], Any]] = {
    ActivationFunctionTypeEnum.LINEAR: lambda x: x,
    ActivationFunctionTypeEnum.RELU: nn.relu,
    ActivationFunctionTypeEnum.LEAKY_RELU: lambda x: nn.leaky_relu(x, negative_slope=0.01),
    ActivationFunctionTypeEnum.SIGMOID: nn.sigmoid,
    ActivationFunctionTypeEnum.TANH: mx.tanh,
    ActivationFunctionTypeEnum.SOFTMAX: lambda x: mx.softmax(x, axis=SOFTMAX_AXIS),
    ActivationFunctionTypeEnum.LOG_SOFTMAX: lambda x: nn.log_softmax(x, axis=SOFTMAX_AXIS),
    ActivationFunctionTypeEnum.GELU: nn.gelu,
}


class MLXActivation:
    """Differentiable MLX activation function."""

    def __init__(self, kind: ActivationFunctionTypeEnum, fn: Callable[[Any], Any]):
        self.kind = kind
        self._fn = fn

    def get_activation(self, buffer: Any, training: bool) -> Any:
        output = self._fn(buffer)
        mx.eval(output)
        return output

    def backprop(self, buffer: Any, epsilon: Any) -> Tuple[Any, Optional[Any]]:
        _, (grad,) = mx.vjp(self._fn, [buffer], [epsilon.astype(buffer.dtype)])
        mx.eval(grad)
        return grad, None

    def __repr__(self):
        return f"MLXActivation({self.kind.name})"


def get_mlx_activation(kind: ActivationFunctionTypeEnum) -> MLXActivation:
    if kind not in MLX_ACTIVATIONS:
        raise ValueError(f"MLX engine does not implement activation function: {kind.name}")
    return MLXActivation(kind, MLX_ACTIVATIONS[kind])
