"""
Component contracts - Forward/backward protocol of the host component graph.

Defines the interfaces an activation function component must satisfy to take
part in a host component graph, together with the per-call context and
gradient containers passed through them.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Optional, Protocol

from .activation_types import ActivationFunctionType
from .matrix import MatrixFactory
from .neurons import AnyNeurons, NeuronsActivation, NeuronsActivationFormat


@dataclass
class NeuronsActivationContext:
    """Per-call context: matrix allocation and training/inference mode."""

    matrix_factory: MatrixFactory = field(default_factory=MatrixFactory)
    training_context: bool = False


@dataclass
class DirectedComponentGradient:
    """
    Gradient flowing backwards through a component graph.

    Attributes:
        output: Gradient with respect to the component's input activation
        total_trainable_axons_gradients: Parameter gradients accumulated so far
            by components further along the graph
    """

    output: NeuronsActivation
    total_trainable_axons_gradients: List[Any] = field(default_factory=list)


class NeuralComponentBaseType(Enum):
    ACTIVATION_FUNCTION = "activation_function"
    AXONS = "axons"
    COMPONENT_CHAIN = "component_chain"


@dataclass(frozen=True)
class NeuralComponentType:
    base_type: NeuralComponentBaseType
    sub_type_id: Optional[str] = None

    @classmethod
    def create_sub_type(cls, base_type: NeuralComponentBaseType, sub_type_id: str) -> "NeuralComponentType":
        return cls(base_type, sub_type_id)


class CostFunctionGradient(Protocol):
    """Cost function gradient able to shortcut through the final activation."""

    def back_propagate_through_final_activation_function(
        self, activation_function_type: ActivationFunctionType
    ) -> DirectedComponentGradient:
        """
        Combine the cost and final activation derivatives in closed form.

        Args:
            activation_function_type: Type of the network's final activation

        Returns:
            Gradient with respect to the final activation's input
        """
        ...


class DifferentiableActivationFunctionComponentActivation(ABC):
    """Result of forward propagation; carries what backward needs."""

    @property
    @abstractmethod
    def output(self) -> NeuronsActivation:
        """Output activation."""
        pass

    @abstractmethod
    def back_propagate(self, gradient: DirectedComponentGradient) -> DirectedComponentGradient:
        """Back propagate a gradient from the next component."""
        pass

    @abstractmethod
    def back_propagate_cost_function_gradient(
        self, cost_function_gradient: CostFunctionGradient
    ) -> DirectedComponentGradient:
        """Back propagate when this is the network's final activation."""
        pass

    def decompose(self) -> List["DifferentiableActivationFunctionComponentActivation"]:
        return [self]


class DifferentiableActivationFunctionComponent(ABC):
    """
    Activation function component of a host component graph.

    Subclasses implement forward propagation and duplication; format
    negotiation is a capability-set query through is_supported().
    """

    def __init__(
        self,
        name: str,
        neurons: AnyNeurons,
        activation_function_type: ActivationFunctionType,
    ):
        self.name = name
        self._neurons = neurons
        self._activation_function_type = activation_function_type

    @property
    def input_neurons(self) -> AnyNeurons:
        return self._neurons

    @property
    def output_neurons(self) -> AnyNeurons:
        return self._neurons

    @property
    def activation_function_type(self) -> ActivationFunctionType:
        return self._activation_function_type

    @property
    def component_type(self) -> NeuralComponentType:
        return NeuralComponentType.create_sub_type(
            NeuralComponentBaseType.ACTIVATION_FUNCTION,
            self._activation_function_type.qualified_id,
        )

    @abstractmethod
    def forward_propagate(
        self,
        neurons_activation: NeuronsActivation,
        context: NeuronsActivationContext,
    ) -> DifferentiableActivationFunctionComponentActivation:
        """Forward propagate an activation through this component."""
        pass

    @abstractmethod
    def dup(self, directed_component_factory: Any) -> "DifferentiableActivationFunctionComponent":
        """Independent copy bound to the given component factory."""
        pass

    def is_supported(self, activation_format: NeuronsActivationFormat) -> bool:
        return True

    def optimised_for(self) -> Optional[NeuronsActivationFormat]:
        return None

    def decompose(self) -> List["DifferentiableActivationFunctionComponent"]:
        return [self]

    def __repr__(self):
        return (
            f"{self.__class__.__name__}(name={self.name!r}, "
            f"neurons={self._neurons}, type={self._activation_function_type})"
        )
