"""
Activation function types.

ActivationFunctionBaseType is the host framework's own enumeration.
ActivationFunctionTypeEnum is the provider-neutral enumeration that every
foreign engine maps to its native implementations.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class ActivationFunctionBaseType(Enum):
    """Host framework activation function kinds."""

    LINEAR = "linear"
    RELU = "relu"
    LEAKY_RELU = "leaky_relu"
    SIGMOID = "sigmoid"
    TANH = "tanh"
    SOFTMAX = "softmax"
    LOG_SOFTMAX = "log_softmax"
    GELU = "gelu"
    CUSTOM = "custom"  # host-only, no provider-neutral equivalent


@dataclass(frozen=True)
class ActivationFunctionType:
    """Identifies an activation function kind (base type + qualifier)."""

    base_type: ActivationFunctionBaseType
    qualifier: Optional[str] = None

    @classmethod
    def get_base_type(cls, base_type: ActivationFunctionBaseType) -> "ActivationFunctionType":
        return cls(base_type)

    @property
    def qualified_id(self) -> str:
        if self.qualifier:
            return f"{self.base_type.name}_{self.qualifier}"
        return self.base_type.name

    def __str__(self):
        return self.qualified_id


class ActivationFunctionTypeEnum(Enum):
    """Provider-neutral activation function kinds."""

    LINEAR = "linear"
    RELU = "relu"
    LEAKY_RELU = "leaky_relu"
    SIGMOID = "sigmoid"
    TANH = "tanh"
    SOFTMAX = "softmax"
    LOG_SOFTMAX = "log_softmax"
    GELU = "gelu"

    @classmethod
    def find_by_base_type(
        cls, base_type: ActivationFunctionBaseType
    ) -> Optional["ActivationFunctionTypeEnum"]:
        """
        Find the provider-neutral kind for a host base type.

        Args:
            base_type: Host activation function base type

        Returns:
            Matching enum value, or None if the host type has no equivalent
        """
        return cls.__members__.get(base_type.name)

    @property
    def is_softmax_family(self) -> bool:
        """Softmax kinds normalise across the feature axis."""
        return self in (ActivationFunctionTypeEnum.SOFTMAX, ActivationFunctionTypeEnum.LOG_SOFTMAX)
