"""
Neurons - Layer shape descriptors and oriented activation buffers.

A NeuronsActivation pairs a 2-D float matrix with a FeatureOrientation that
says whether each row or each column of the matrix spans the feature set.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple, Union

import numpy as np

from .matrix import MatrixFactory


class FeatureOrientation(Enum):
    """Which axis of an activation matrix indexes the features."""

    ROWS_SPAN_FEATURE_SET = "rows_span_feature_set"  # examples x features
    COLUMNS_SPAN_FEATURE_SET = "columns_span_feature_set"  # features x examples

    def feature_axis(self) -> int:
        """Matrix axis holding the features."""
        return 1 if self is FeatureOrientation.ROWS_SPAN_FEATURE_SET else 0


class FeaturesFormat(Enum):
    """Layout of the feature dimension."""

    FLAT = "flat"
    IMAGE = "image"  # depth x height x width, flattened


class Dimension(Enum):
    EXAMPLE = "example"
    FEATURE = "feature"
    WIDTH = "width"
    HEIGHT = "height"
    DEPTH = "depth"


@dataclass(frozen=True)
class Neurons:
    """1-D layer of neurons."""

    neuron_count: int
    has_bias_unit: bool = False

    def __post_init__(self):
        if self.neuron_count < 0:
            raise ValueError(f"neuron_count must be non-negative, got {self.neuron_count}")


@dataclass(frozen=True)
class Neurons3D:
    """Image-shaped layer of neurons (width x height x depth)."""

    width: int
    height: int
    depth: int
    has_bias_unit: bool = False

    def __post_init__(self):
        if min(self.width, self.height, self.depth) < 0:
            raise ValueError(
                f"Neurons3D dimensions must be non-negative, "
                f"got {self.width}x{self.height}x{self.depth}"
            )

    @property
    def neuron_count(self) -> int:
        return self.width * self.height * self.depth


AnyNeurons = Union[Neurons, Neurons3D]


@dataclass(frozen=True)
class NeuronsActivationFormat:
    """Orientation and feature structure of a NeuronsActivation."""

    feature_orientation: FeatureOrientation
    features_format: FeaturesFormat = FeaturesFormat.FLAT
    example_dimensions: Tuple[Dimension, ...] = (Dimension.EXAMPLE,)


class NeuronsActivation:
    """
    Oriented activation buffer.

    Holds a 2-D matrix whose feature axis is given by the feature orientation.
    The feature count must agree with the neurons descriptor; when no
    descriptor is supplied a 1-D one is derived from the matrix.
    """

    def __init__(
        self,
        activations: np.ndarray,
        feature_orientation: FeatureOrientation,
        neurons: Optional[AnyNeurons] = None,
        image: bool = False,
    ):
        """
        Initialize activation.

        Args:
            activations: 2-D float matrix
            feature_orientation: Whether rows or columns span the feature set
            neurons: Layer descriptor (derived from the matrix if None)
            image: Whether the features are a flattened 3-D image

        Raises:
            ValueError: If the matrix is not 2-D, the feature count disagrees
                with the neurons, or an image activation lacks Neurons3D
        """
        if activations.ndim != 2:
            raise ValueError(
                f"Activations must be a 2-D matrix, got shape {activations.shape}"
            )

        feature_count = activations.shape[feature_orientation.feature_axis()]
        if neurons is None:
            neurons = Neurons(feature_count)
        elif neurons.neuron_count != feature_count:
            raise ValueError(
                f"Feature count {feature_count} of {activations.shape} activations "
                f"({feature_orientation.name}) does not match {neurons}"
            )

        if image and not isinstance(neurons, Neurons3D):
            raise ValueError(
                f"Image activations require Neurons3D, got {type(neurons).__name__}"
            )

        self._activations = activations
        self._feature_orientation = feature_orientation
        self._neurons = neurons
        self._image = image

    @property
    def neurons(self) -> AnyNeurons:
        return self._neurons

    @property
    def feature_orientation(self) -> FeatureOrientation:
        return self._feature_orientation

    @property
    def is_image(self) -> bool:
        return self._image

    @property
    def rows(self) -> int:
        return self._activations.shape[0]

    @property
    def columns(self) -> int:
        return self._activations.shape[1]

    @property
    def feature_count(self) -> int:
        return self._activations.shape[self._feature_orientation.feature_axis()]

    @property
    def example_count(self) -> int:
        return self._activations.shape[1 - self._feature_orientation.feature_axis()]

    @property
    def format(self) -> NeuronsActivationFormat:
        features_format = FeaturesFormat.IMAGE if self._image else FeaturesFormat.FLAT
        return NeuronsActivationFormat(self._feature_orientation, features_format)

    def get_activations(self, matrix_factory: Optional[MatrixFactory] = None) -> np.ndarray:
        """
        Get the activation matrix.

        Args:
            matrix_factory: Optional factory; when given the matrix is copied
                into a matrix it allocates

        Returns:
            2-D matrix in this activation's orientation
        """
        if matrix_factory is None:
            return self._activations
        return matrix_factory.create_matrix(self._activations)

    def as_image_activation(self, neurons: Neurons3D) -> "NeuronsActivation":
        """Reinterpret the features as a flattened image of the given shape."""
        if not isinstance(neurons, Neurons3D):
            raise ValueError(
                f"Image reinterpretation requires Neurons3D, got {type(neurons).__name__}"
            )
        return NeuronsActivation(
            self._activations, self._feature_orientation, neurons, image=True
        )

    def __repr__(self):
        return (
            f"NeuronsActivation(shape={self._activations.shape}, "
            f"orientation={self._feature_orientation.name}, "
            f"neurons={self._neurons}, image={self._image})"
        )
