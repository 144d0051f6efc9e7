################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

from __future__ import annotations

from typing import Optional

import numpy as np
from numpy.typing import ArrayLike

from linear_kalman.kalman_types import FloatArray


class LinearAlgebra:
    """Linear-algebra helpers for the Kalman filter.

    Responsibility:
        Coerce caller data into fixed-shape float64 arrays, check finiteness
        and invert the innovation covariance without raising.

    Data contract:
        - Vectors are 1-D arrays of shape (n,). Column vectors of shape
          (n, 1) are accepted and flattened.
        - Matrices are 2-D arrays of an exact (rows, cols) shape.
        - Returned arrays are always fresh copies.

    Determinism and edge cases:
        - invert() reports failure instead of raising when the matrix is
          singular or contains non-finite values.
        - Shape mismatches raise ValueError.
    """

    @staticmethod
    def as_vector(name: str, value: ArrayLike, size: int) -> FloatArray:
        """Return a float64 copy of a vector with the expected length."""
        array: FloatArray = np.array(value, dtype=np.float64)
        if array.ndim == 2 and array.shape[1] == 1:
            array = array.reshape(-1)
        if array.ndim == 0 and size == 1:
            array = array.reshape(1)
        if array.shape != (size,):
            raise ValueError(f"{name} must have shape ({size},), got {array.shape}")
        return array

    @staticmethod
    def as_matrix(name: str, value: ArrayLike, rows: int, cols: int) -> FloatArray:
        """Return a float64 copy of a matrix with the expected shape."""
        array: FloatArray = np.array(value, dtype=np.float64)
        if array.ndim == 0 and rows == 1 and cols == 1:
            array = array.reshape(1, 1)
        if array.shape != (rows, cols):
            raise ValueError(
                f"{name} must have shape ({rows}, {cols}), got {array.shape}"
            )
        return array

    @staticmethod
    def all_finite(array: FloatArray) -> bool:
        """Return True when every element is neither NaN nor Inf."""
        return bool(np.all(np.isfinite(array)))

    @staticmethod
    def invert(matrix: FloatArray) -> Optional[FloatArray]:
        """Return the inverse of a square matrix, or None on failure."""
        if matrix.ndim != 2 or matrix.shape[0] != matrix.shape[1]:
            raise ValueError("invert requires a square matrix")
        if not LinearAlgebra.all_finite(matrix):
            return None

        inverse: FloatArray
        try:
            inverse = np.linalg.inv(matrix)
        except np.linalg.LinAlgError:
            return None

        if not LinearAlgebra.all_finite(inverse):
            return None

        return inverse

    @staticmethod
    def read_only(array: FloatArray) -> FloatArray:
        """Return a non-writeable view of an array."""
        view: FloatArray = array.view()
        view.flags.writeable = False
        return view
