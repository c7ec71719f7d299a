"""
Host activation functions in foreign pipelines.

The reverse of the foreign activation component: wraps a host-native
activation function so that it satisfies the engine's ForeignActivation
protocol. Foreign buffers are read as rows-span-features (examples x
features).
"""

from typing import Any, Optional, Tuple

from ..engines.protocol import EngineProtocol
from ..host.activation_functions import DifferentiableActivationFunction, get_host_activation_function
from ..host.activation_types import ActivationFunctionType
from ..host.components import NeuronsActivationContext
from ..host.matrix import MatrixFactory
from ..host.neurons import FeatureOrientation
from .layout import from_foreign_buffer, to_foreign_buffer

ORIENTATION = FeatureOrientation.ROWS_SPAN_FEATURE_SET


class HostActivationFunctionAdapter:
    """ForeignActivation implemented by a host activation function."""

    def __init__(
        self,
        engine: EngineProtocol,
        activation_function: DifferentiableActivationFunction,
        matrix_factory: Optional[MatrixFactory] = None,
    ):
        self.engine = engine
        self.activation_function = activation_function
        self.matrix_factory = matrix_factory or MatrixFactory()

    @classmethod
    def for_type(
        cls,
        engine: EngineProtocol,
        activation_function_type: ActivationFunctionType,
        matrix_factory: Optional[MatrixFactory] = None,
    ) -> "HostActivationFunctionAdapter":
        return cls(engine, get_host_activation_function(activation_function_type), matrix_factory)

    def _to_host(self, buffer: Any):
        return from_foreign_buffer(
            self.engine, buffer, ORIENTATION, ORIENTATION, matrix_factory=self.matrix_factory
        )

    def get_activation(self, buffer: Any, training: bool) -> Any:
        context = NeuronsActivationContext(self.matrix_factory, training)
        activation = self.activation_function.activate(self._to_host(buffer), context)
        return to_foreign_buffer(self.engine, activation.output, ORIENTATION)

    def backprop(self, buffer: Any, epsilon: Any) -> Tuple[Any, Optional[Any]]:
        # The forward output is not retained by the engine, so recompute it
        context = NeuronsActivationContext(self.matrix_factory, True)
        activation = self.activation_function.activate(self._to_host(buffer), context)
        input_gradient = self.activation_function.back_propagate(
            activation, self._to_host(epsilon), context
        )
        return to_foreign_buffer(self.engine, input_gradient, ORIENTATION), None

    def __repr__(self):
        return f"HostActivationFunctionAdapter({self.activation_function!r}, engine={self.engine.name})"
