################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""
Identity matrix view that stores only its diagonal
"""

from __future__ import annotations

from typing import Tuple

import numpy as np
from numpy.typing import ArrayLike

from linear_kalman.kalman_types import FloatArray


class DiagonalIdentity:
    """
    Square identity matrix backed by a length-n diagonal

    Element (row, col) is the stored diagonal value when row == col and the
    index is in range, and 0.0 everywhere else. The diagonal is filled with
    1.0 once at construction and never written afterwards.
    """

    # Let numpy defer binary operators to this class
    __array_ufunc__ = None

    def __init__(self, size: int) -> None:
        if isinstance(size, bool) or not isinstance(size, int) or size < 1:
            raise ValueError("size must be a positive int")

        self._size: int = size
        self._diagonal: FloatArray = np.ones(size, dtype=np.float64)
        self._diagonal.flags.writeable = False

    @property
    def shape(self) -> Tuple[int, int]:
        return (self._size, self._size)

    @property
    def diagonal(self) -> FloatArray:
        return self._diagonal

    def __getitem__(self, index: Tuple[int, int]) -> float:
        row, col = index
        if row == col and 0 <= row < self._size:
            return float(self._diagonal[row])
        return 0.0

    def __sub__(self, other: ArrayLike) -> FloatArray:
        """Return I - other as a dense array."""
        matrix: FloatArray = np.asarray(other, dtype=np.float64)
        if matrix.shape != self.shape:
            raise ValueError(
                f"operand must have shape {self.shape}, got {matrix.shape}"
            )

        result: FloatArray = -matrix
        idx: int
        for idx in range(self._size):
            result[idx, idx] += self._diagonal[idx]
        return result

    def to_dense(self) -> FloatArray:
        """Return the materialized identity matrix."""
        return np.diag(self._diagonal)

    def __repr__(self) -> str:
        return f"DiagonalIdentity(size={self._size})"
