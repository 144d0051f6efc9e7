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
Process and measurement model matrices for the linear Kalman filter
"""

from __future__ import annotations

import numbers
from dataclasses import dataclass
from typing import Mapping
from typing import Optional
from typing import Sequence

import numpy as np
from numpy.typing import ArrayLike

from linear_kalman.kalman_types import FloatArray
from linear_kalman.kalman_types import KalmanDimensions
from linear_kalman.math_utils.linalg import LinearAlgebra


@dataclass(frozen=True, slots=True, eq=False)
class KalmanModel:
    """Complete configuration of a linear Kalman filter.

    Models:
        x_k = F x_{k-1} + B u_k + q_k
        z_k = H x_k + r_k

    Data contract:
        dimensions:
            KalmanDimensions the matrices were validated against
        F:
            State transition matrix, n_state x n_state
        H:
            Observation matrix, n_obs x n_state
        B:
            Command matrix, n_state x n_com (n_state x 0 without command)
        Q:
            Process noise covariance, n_state x n_state
        R:
            Measurement noise covariance, n_obs x n_obs
        x0:
            Initial state estimate, length n_state
        P0:
            Initial estimate covariance, n_state x n_state

    Determinism and edge cases:
        - Arrays are float64 copies marked read-only.
        - Q, R and P0 are not checked for symmetry or definiteness.
        - Equality compares every matrix by value.
    """

    dimensions: KalmanDimensions
    F: FloatArray
    H: FloatArray
    B: FloatArray
    Q: FloatArray
    R: FloatArray
    x0: FloatArray
    P0: FloatArray

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, KalmanModel):
            return NotImplemented
        return self.dimensions == other.dimensions and all(
            np.array_equal(getattr(self, name), getattr(other, name))
            for name in ("F", "H", "B", "Q", "R", "x0", "P0")
        )

    def validate(self) -> None:
        """Validate matrix shapes and raise ValueError on failure."""
        self.dimensions.validate()
        n: int = self.dimensions.n_state
        m: int = self.dimensions.n_obs
        c: int = self.dimensions.n_com
        for name, matrix, shape in (
            ("F", self.F, (n, n)),
            ("H", self.H, (m, n)),
            ("B", self.B, (n, c)),
            ("Q", self.Q, (n, n)),
            ("R", self.R, (m, m)),
            ("P0", self.P0, (n, n)),
        ):
            if matrix.shape != shape:
                raise ValueError(f"{name} must have shape {shape}, got {matrix.shape}")
        if self.x0.shape != (n,):
            raise ValueError(f"x0 must have shape ({n},), got {self.x0.shape}")

    @classmethod
    def from_dict(
        cls, dimensions: KalmanDimensions, params: Mapping[str, object]
    ) -> KalmanModel:
        """Construct a model from nested lists, rejecting unknown keys."""
        if not isinstance(params, Mapping):
            raise ValueError("params must be a mapping")
        unknown_keys: list[str] = sorted(set(params.keys()) - set(cls._field_order()))
        if unknown_keys:
            raise ValueError(f"unknown parameter: {unknown_keys[0]}")

        builder: KalmanModelBuilder = KalmanModelBuilder(dimensions)
        if "F" in params:
            builder.set_transition(cls._as_array("F", params["F"]))
        if "H" in params:
            builder.set_observation(cls._as_array("H", params["H"]))
        if "B" in params:
            builder.set_command(cls._as_array("B", params["B"]))
        if "Q" in params:
            builder.set_process_noise(cls._as_array("Q", params["Q"]))
        if "R" in params:
            builder.set_measurement_noise(cls._as_array("R", params["R"]))
        if "x0" in params:
            builder.set_initial_state(cls._as_array("x0", params["x0"]))
        if "P0" in params:
            builder.set_initial_covariance(cls._as_array("P0", params["P0"]))
        return builder.build()

    def as_dict(self) -> dict[str, object]:
        """Return a JSON-serializable dict representation."""
        return {
            "n_state": self.dimensions.n_state,
            "n_obs": self.dimensions.n_obs,
            "n_com": self.dimensions.n_com,
            "F": self.F.tolist(),
            "H": self.H.tolist(),
            "B": self.B.tolist(),
            "Q": self.Q.tolist(),
            "R": self.R.tolist(),
            "x0": self.x0.tolist(),
            "P0": self.P0.tolist(),
        }

    @staticmethod
    def _as_array(name: str, value: object) -> ArrayLike:
        if not isinstance(value, Sequence) or isinstance(value, (str, bytes)):
            raise ValueError(f"{name} must be a sequence")
        cells: np.ndarray = np.array(value, dtype=object)
        cell: object
        for cell in cells.flat:
            if isinstance(cell, bool) or not isinstance(cell, numbers.Real):
                raise ValueError(f"{name} must contain only numbers")
        return cells.astype(np.float64)

    @staticmethod
    def _field_order() -> tuple[str, ...]:
        return ("F", "H", "B", "Q", "R", "x0", "P0")


class KalmanModelBuilder:
    """
    Collects model matrices and produces a validated KalmanModel

    Each setter checks the shape immediately so a wrong matrix is reported at
    the line that provided it. build() requires F, H, Q and R, and B when the
    model has a command input. x0 and P0 default to zeros.
    """

    def __init__(self, dimensions: KalmanDimensions) -> None:
        dimensions.validate()
        self._dimensions: KalmanDimensions = dimensions
        self._F: Optional[FloatArray] = None
        self._H: Optional[FloatArray] = None
        self._B: Optional[FloatArray] = None
        self._Q: Optional[FloatArray] = None
        self._R: Optional[FloatArray] = None
        self._x0: Optional[FloatArray] = None
        self._P0: Optional[FloatArray] = None

    @property
    def dimensions(self) -> KalmanDimensions:
        return self._dimensions

    def set_transition(self, F: ArrayLike) -> KalmanModelBuilder:
        n: int = self._dimensions.n_state
        self._F = LinearAlgebra.as_matrix("F", F, n, n)
        return self

    def set_observation(self, H: ArrayLike) -> KalmanModelBuilder:
        self._H = LinearAlgebra.as_matrix(
            "H", H, self._dimensions.n_obs, self._dimensions.n_state
        )
        return self

    def set_command(self, B: ArrayLike) -> KalmanModelBuilder:
        self._B = LinearAlgebra.as_matrix(
            "B", B, self._dimensions.n_state, self._dimensions.n_com
        )
        return self

    def set_process_noise(self, Q: ArrayLike) -> KalmanModelBuilder:
        n: int = self._dimensions.n_state
        self._Q = LinearAlgebra.as_matrix("Q", Q, n, n)
        return self

    def set_measurement_noise(self, R: ArrayLike) -> KalmanModelBuilder:
        m: int = self._dimensions.n_obs
        self._R = LinearAlgebra.as_matrix("R", R, m, m)
        return self

    def set_initial_state(self, x0: ArrayLike) -> KalmanModelBuilder:
        self._x0 = LinearAlgebra.as_vector("x0", x0, self._dimensions.n_state)
        return self

    def set_initial_covariance(self, P0: ArrayLike) -> KalmanModelBuilder:
        n: int = self._dimensions.n_state
        self._P0 = LinearAlgebra.as_matrix("P0", P0, n, n)
        return self

    def build(self) -> KalmanModel:
        """Return the frozen model, raising ValueError when incomplete."""
        n: int = self._dimensions.n_state
        c: int = self._dimensions.n_com

        F: Optional[FloatArray] = self._F
        H: Optional[FloatArray] = self._H
        Q: Optional[FloatArray] = self._Q
        R: Optional[FloatArray] = self._R

        missing: list[str] = [
            name
            for name, matrix in (("F", F), ("H", H), ("Q", Q), ("R", R))
            if matrix is None
        ]
        if c > 0 and self._B is None:
            missing.append("B")
        if missing or F is None or H is None or Q is None or R is None:
            raise ValueError(f"model is missing: {', '.join(missing)}")

        B: FloatArray = (
            self._B if self._B is not None else np.zeros((n, c), dtype=np.float64)
        )
        x0: FloatArray = (
            self._x0 if self._x0 is not None else np.zeros(n, dtype=np.float64)
        )
        P0: FloatArray = (
            self._P0 if self._P0 is not None else np.zeros((n, n), dtype=np.float64)
        )

        model: KalmanModel = KalmanModel(
            dimensions=self._dimensions,
            F=LinearAlgebra.read_only(F.copy()),
            H=LinearAlgebra.read_only(H.copy()),
            B=LinearAlgebra.read_only(B.copy()),
            Q=LinearAlgebra.read_only(Q.copy()),
            R=LinearAlgebra.read_only(R.copy()),
            x0=LinearAlgebra.read_only(x0.copy()),
            P0=LinearAlgebra.read_only(P0.copy()),
        )
        model.validate()
        return model
