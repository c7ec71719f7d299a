"""
Matrix factory - Allocates host-side matrices.

Host matrices are 2-D numpy arrays. All allocation goes through a
MatrixFactory so that dtype is decided in one place.
"""

from typing import Any

import numpy as np


class MatrixFactory:
    """Creates row-major numpy matrices of a fixed dtype."""

    def __init__(self, dtype: Any = np.float32):
        self.dtype = np.dtype(dtype)

    def create_matrix_from_rows_by_rows_array(
        self, rows: int, columns: int, data: Any
    ) -> np.ndarray:
        """
        Create a matrix from row-major data.

        Args:
            rows: Number of rows
            columns: Number of columns
            data: Flat row-major values (rows * columns elements)

        Returns:
            New (rows, columns) matrix owning a copy of the data

        Raises:
            ValueError: If the element count does not match rows * columns
        """
        flat = np.array(data, dtype=self.dtype).reshape(-1)
        if flat.size != rows * columns:
            raise ValueError(
                f"Cannot create {rows}x{columns} matrix from {flat.size} values"
            )
        return flat.reshape(rows, columns)

    def create_matrix(self, matrix: Any) -> np.ndarray:
        """Copy an existing 2-D matrix into a new row-major matrix."""
        return np.array(matrix, dtype=self.dtype, order="C", copy=True)

    def __repr__(self):
        return f"MatrixFactory(dtype={self.dtype})"
