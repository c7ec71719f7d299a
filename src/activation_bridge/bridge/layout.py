"""
Layout conversion between host activations and foreign engine buffers.

Host activations are oriented 2-D matrices; foreign buffers are the engine's
native 2-D tensors built from row-major data. Converting between the two
either copies the row-major data as is or packs its logical transpose, so no
arithmetic is ever applied to the values.
"""

from typing import Any, Optional
import logging

import numpy as np

from ..engines.protocol import EngineProtocol
from ..host.matrix import MatrixFactory
from ..host.neurons import AnyNeurons, FeatureOrientation, Neurons3D, NeuronsActivation

logger = logging.getLogger(__name__)


def _pack(engine: EngineProtocol, matrix: np.ndarray) -> Any:
    rows, columns = matrix.shape
    return engine.from_row_major(rows, columns, np.ascontiguousarray(matrix).reshape(-1))


def _unpack(engine: EngineProtocol, buffer: Any, matrix_factory: Optional[MatrixFactory]) -> np.ndarray:
    rows, columns, data = engine.to_row_major(buffer)
    matrix_factory = matrix_factory or MatrixFactory()
    return matrix_factory.create_matrix_from_rows_by_rows_array(rows, columns, data)


def to_foreign_buffer(
    engine: EngineProtocol,
    activation: NeuronsActivation,
    target_orientation: FeatureOrientation,
    matrix_factory: Optional[MatrixFactory] = None,
) -> Any:
    """
    Pack a host activation into a foreign buffer.

    Args:
        engine: Foreign engine owning the buffer type
        activation: Host activation (never modified)
        target_orientation: Orientation the foreign buffer must have
        matrix_factory: Factory used to read the activation matrix

    Returns:
        Native buffer; the transpose of the activation matrix when the
        activation's orientation differs from target_orientation
    """
    matrix = activation.get_activations(matrix_factory)
    if activation.feature_orientation is not target_orientation:
        matrix = matrix.T
    logger.debug(
        f"Packing {activation.rows}x{activation.columns} "
        f"{activation.feature_orientation.name} activation as {target_orientation.name}"
    )
    return _pack(engine, matrix)


def from_foreign_buffer(
    engine: EngineProtocol,
    buffer: Any,
    source_orientation: FeatureOrientation,
    target_orientation: FeatureOrientation,
    neurons: Optional[AnyNeurons] = None,
    image: bool = False,
    matrix_factory: Optional[MatrixFactory] = None,
) -> NeuronsActivation:
    """
    Unpack a foreign buffer into a host activation.

    Args:
        engine: Foreign engine owning the buffer type
        buffer: Native buffer laid out in source_orientation
        source_orientation: Orientation of the buffer
        target_orientation: Orientation of the returned activation
        neurons: Neurons descriptor of the returned activation
        image: Reinterpret the features as an image of shape neurons
        matrix_factory: Factory allocating the host matrix

    Returns:
        New host activation

    Raises:
        ValueError: If image is set and neurons is not Neurons3D, or the
            feature count does not match neurons
    """
    if image and not isinstance(neurons, Neurons3D):
        raise ValueError(
            f"Image activation requested for non-3D neurons: {neurons}"
        )

    matrix = _unpack(engine, buffer, matrix_factory)
    if source_orientation is not target_orientation:
        matrix = np.ascontiguousarray(matrix.T)

    activation = NeuronsActivation(matrix, target_orientation, None if image else neurons)
    if image:
        return activation.as_image_activation(neurons)
    return activation


def to_foreign_matrix(engine: EngineProtocol, matrix: np.ndarray, transpose: bool = False) -> Any:
    """Pack a plain host matrix (e.g. weights or biases), optionally transposed."""
    return _pack(engine, matrix.T if transpose else matrix)


def from_foreign_matrix(
    engine: EngineProtocol,
    buffer: Any,
    transpose: bool = False,
    matrix_factory: Optional[MatrixFactory] = None,
) -> np.ndarray:
    """Unpack a foreign buffer into a plain host matrix, optionally transposed."""
    matrix = _unpack(engine, buffer, matrix_factory)
    return np.ascontiguousarray(matrix.T) if transpose else matrix
