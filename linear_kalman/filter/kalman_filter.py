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
Fixed-dimension linear Kalman filter
"""

from __future__ import annotations

import logging
from typing import Optional

import numpy as np
from numpy.typing import ArrayLike

from linear_kalman.config.kalman_model import KalmanModel
from linear_kalman.config.kalman_params import KalmanParams
from linear_kalman.diagnostics.diagnostic_sink import DiagnosticSink
from linear_kalman.kalman_types import FilterCounters
from linear_kalman.kalman_types import FilterStatus
from linear_kalman.kalman_types import FloatArray
from linear_kalman.kalman_types import KalmanDimensions
from linear_kalman.kalman_types import UpdateResult
from linear_kalman.math_utils.diagonal import DiagonalIdentity
from linear_kalman.math_utils.linalg import LinearAlgebra


_LOG: logging.Logger = logging.getLogger(__name__)

# Diagnostic texts
_MSG_DEGENERATE: str = "'n_state' and 'n_obs' should be > 1"
_MSG_INVALID_OBSERVATION: str = "observation has nan or inf values"
_MSG_INVALID_COMMAND: str = "command has nan or inf values"
_MSG_INVALID_ESTIMATE: str = "estimated vector has nan or inf values"
_MSG_SINGULAR_S: str = "could not invert S matrix, try to reset P matrix"


class KalmanFilter:
    """Linear Kalman filter with fixed state, observation and command sizes.

    Models:
        x_k = F x_{k-1} + B u_k + q_k    (evolution)
        z_k = H x_k + r_k                (measurement)

    Each update runs one predict/correct cycle:
        x <- F x + B u
        P <- F P Fᵀ + Q
        y <- z - H x
        S <- H P Hᵀ + R
        K <- P Hᵀ S⁻¹
        x <- x + K y
        P <- (I - K H) P

    Numeric failures never raise. They are reported through the returned
    UpdateResult and the status attribute:
        - Non-finite observation or command (when check is True) aborts the
          call before anything is mutated.
        - A singular S keeps the predicted x and zeroes P and K.
        - A non-finite corrected x (when check is True) is flagged after P
          has already been corrected.

    Shape errors are programming errors and raise ValueError.
    """

    def __init__(
        self,
        dimensions: KalmanDimensions,
        verbose: bool = True,
        *,
        check: bool = True,
        sink: Optional[DiagnosticSink] = None,
        params: Optional[KalmanParams] = None,
    ) -> None:
        dimensions.validate()

        strict_dimensions: bool = False
        if params is not None:
            params.validate()
            verbose = params.verbose
            check = params.check
            strict_dimensions = params.strict_dimensions

        if strict_dimensions and dimensions.is_degenerate:
            raise ValueError(_MSG_DEGENERATE)

        self._dims: KalmanDimensions = dimensions
        self._sink: DiagnosticSink = sink if sink is not None else _LOG

        # True to emit diagnostics to the sink
        self.verbose: bool = verbose

        # True to reject non-finite inputs and flag non-finite estimates
        self.check: bool = check

        n: int = dimensions.n_state
        m: int = dimensions.n_obs
        c: int = dimensions.n_com

        self._F: FloatArray = np.zeros((n, n), dtype=np.float64)
        self._H: FloatArray = np.zeros((m, n), dtype=np.float64)
        self._B: FloatArray = np.zeros((n, c), dtype=np.float64)
        self._Q: FloatArray = np.zeros((n, n), dtype=np.float64)
        self._R: FloatArray = np.zeros((m, m), dtype=np.float64)
        self._x: FloatArray = np.zeros(n, dtype=np.float64)
        self._P: FloatArray = np.zeros((n, n), dtype=np.float64)
        self._y: FloatArray = np.zeros(m, dtype=np.float64)
        self._S: FloatArray = np.zeros((m, m), dtype=np.float64)
        self._K: FloatArray = np.zeros((n, m), dtype=np.float64)

        self._identity: DiagonalIdentity = DiagonalIdentity(n)
        self._null_command_state: FloatArray = np.zeros(n, dtype=np.float64)

        self._status: FilterStatus = FilterStatus.OK
        self._last_result: Optional[UpdateResult] = None
        self._counters: FilterCounters = FilterCounters()

        if self.verbose:
            self._sink.info(f"init {dimensions.describe()} filter")
            if dimensions.is_degenerate:
                self._sink.warning(_MSG_DEGENERATE)

    @classmethod
    def from_model(
        cls,
        model: KalmanModel,
        verbose: bool = True,
        *,
        check: bool = True,
        sink: Optional[DiagnosticSink] = None,
        params: Optional[KalmanParams] = None,
    ) -> KalmanFilter:
        """Create a filter and apply a complete model to it."""
        kalman: KalmanFilter = cls(
            model.dimensions,
            verbose,
            check=check,
            sink=sink,
            params=params,
        )
        kalman.configure(model)
        return kalman

    ############################################################################
    # Configuration
    ############################################################################

    @property
    def dimensions(self) -> KalmanDimensions:
        return self._dims

    @property
    def F(self) -> FloatArray:
        """State transition matrix, n_state x n_state."""
        return LinearAlgebra.read_only(self._F)

    @F.setter
    def F(self, value: ArrayLike) -> None:
        n: int = self._dims.n_state
        self._F = LinearAlgebra.as_matrix("F", value, n, n)

    @property
    def H(self) -> FloatArray:
        """Observation matrix, n_obs x n_state."""
        return LinearAlgebra.read_only(self._H)

    @H.setter
    def H(self, value: ArrayLike) -> None:
        self._H = LinearAlgebra.as_matrix(
            "H", value, self._dims.n_obs, self._dims.n_state
        )

    @property
    def B(self) -> FloatArray:
        """Command matrix, n_state x n_com."""
        return LinearAlgebra.read_only(self._B)

    @B.setter
    def B(self, value: ArrayLike) -> None:
        self._B = LinearAlgebra.as_matrix(
            "B", value, self._dims.n_state, self._dims.n_com
        )

    @property
    def Q(self) -> FloatArray:
        """Process noise covariance, n_state x n_state."""
        return LinearAlgebra.read_only(self._Q)

    @Q.setter
    def Q(self, value: ArrayLike) -> None:
        n: int = self._dims.n_state
        self._Q = LinearAlgebra.as_matrix("Q", value, n, n)

    @property
    def R(self) -> FloatArray:
        """Measurement noise covariance, n_obs x n_obs."""
        return LinearAlgebra.read_only(self._R)

    @R.setter
    def R(self, value: ArrayLike) -> None:
        m: int = self._dims.n_obs
        self._R = LinearAlgebra.as_matrix("R", value, m, m)

    @property
    def x(self) -> FloatArray:
        """State estimate, only authoritative after a successful update."""
        return LinearAlgebra.read_only(self._x)

    @x.setter
    def x(self, value: ArrayLike) -> None:
        self._x = LinearAlgebra.as_vector("x", value, self._dims.n_state)

    @property
    def P(self) -> FloatArray:
        """Estimate error covariance, n_state x n_state."""
        return LinearAlgebra.read_only(self._P)

    @P.setter
    def P(self, value: ArrayLike) -> None:
        n: int = self._dims.n_state
        self._P = LinearAlgebra.as_matrix("P", value, n, n)

    @property
    def y(self) -> FloatArray:
        """Innovation from the last update."""
        return LinearAlgebra.read_only(self._y)

    @property
    def S(self) -> FloatArray:
        """Innovation covariance from the last update."""
        return LinearAlgebra.read_only(self._S)

    @property
    def K(self) -> FloatArray:
        """Kalman gain from the last update."""
        return LinearAlgebra.read_only(self._K)

    def configure(self, model: KalmanModel) -> None:
        """Apply the model matrices and the initial belief state."""
        if model.dimensions != self._dims:
            raise ValueError(
                f"model dimensions {model.dimensions.describe()} do not match "
                f"filter dimensions {self._dims.describe()}"
            )
        model.validate()

        self.F = model.F
        self.H = model.H
        self.B = model.B
        self.Q = model.Q
        self.R = model.R
        self.reset(model.x0, model.P0)

    def reset(
        self, x0: Optional[ArrayLike] = None, P0: Optional[ArrayLike] = None
    ) -> None:
        """Re-initialize the belief state, zeros when omitted."""
        n: int = self._dims.n_state
        m: int = self._dims.n_obs

        self._x = (
            LinearAlgebra.as_vector("x0", x0, n)
            if x0 is not None
            else np.zeros(n, dtype=np.float64)
        )
        self._P = (
            LinearAlgebra.as_matrix("P0", P0, n, n)
            if P0 is not None
            else np.zeros((n, n), dtype=np.float64)
        )
        self._y = np.zeros(m, dtype=np.float64)
        self._S = np.zeros((m, m), dtype=np.float64)
        self._K = np.zeros((n, m), dtype=np.float64)
        self._status = FilterStatus.OK
        self._last_result = None
        self._counters = FilterCounters()

    ############################################################################
    # Update
    ############################################################################

    @property
    def status(self) -> FilterStatus:
        """Status of the last update, OK (0) on success."""
        return self._status

    @property
    def last_result(self) -> Optional[UpdateResult]:
        return self._last_result

    @property
    def counters(self) -> FilterCounters:
        return self._counters

    def update(
        self, observation: ArrayLike, command: Optional[ArrayLike] = None
    ) -> UpdateResult:
        """Run one predict/correct cycle.

        Args:
            observation: Measurement vector of length n_obs
            command: Optional command vector of length n_com
        """
        obs: FloatArray = LinearAlgebra.as_vector(
            "observation", observation, self._dims.n_obs
        )

        if command is None:
            return self._update(obs, self._null_command_state)

        # Also rejects a non-empty command when n_com is 0
        com: FloatArray = LinearAlgebra.as_vector(
            "command", command, self._dims.n_com
        )

        if self.check and not LinearAlgebra.all_finite(com):
            return self._fail(FilterStatus.INVALID_COMMAND, _MSG_INVALID_COMMAND)

        return self._update(obs, self._B @ com)

    def get_state_copy(self) -> FloatArray:
        """Return a copy of x that the caller may freely modify."""
        return np.array(self._x, dtype=np.float64)

    def get_diagnostics_snapshot(self) -> dict[str, object]:
        """Return a snapshot of recent diagnostic values."""
        return {
            "n_state": self._dims.n_state,
            "n_obs": self._dims.n_obs,
            "n_com": self._dims.n_com,
            "status": self._status.name,
            "last_reason": (
                self._last_result.reason if self._last_result is not None else ""
            ),
            "verbose": self.verbose,
            "check": self.check,
            "P_trace": float(np.trace(self._P)),
            "counters": self._counters.as_dict(),
        }

    def _update(self, obs: FloatArray, command_state: FloatArray) -> UpdateResult:
        if self.check and not LinearAlgebra.all_finite(obs):
            return self._fail(
                FilterStatus.INVALID_OBSERVATION, _MSG_INVALID_OBSERVATION
            )

        # Predict
        self._x = self._F @ self._x + command_state
        self._P = self._F @ self._P @ self._F.T + self._Q

        # Innovation
        self._y = obs - self._H @ self._x
        self._S = self._H @ self._P @ self._H.T + self._R

        # Gain
        S_inv: Optional[FloatArray] = LinearAlgebra.invert(self._S)
        if S_inv is None:
            # Drop all accumulated confidence and keep the uncorrected prediction
            self._P = np.zeros_like(self._P)
            self._K = np.zeros_like(self._K)
            return self._fail(
                FilterStatus.SINGULAR_INNOVATION_COVARIANCE, _MSG_SINGULAR_S
            )
        self._K = self._P @ self._H.T @ S_inv

        # Correct
        self._x = self._x + self._K @ self._y
        self._P = (self._identity - self._K @ self._H) @ self._P

        if self.check and not LinearAlgebra.all_finite(self._x):
            return self._fail(FilterStatus.INVALID_ESTIMATE, _MSG_INVALID_ESTIMATE)

        return self._finish(FilterStatus.OK, "")

    def _fail(self, status: FilterStatus, reason: str) -> UpdateResult:
        if self.verbose:
            self._sink.error(reason)
        return self._finish(status, reason)

    def _finish(self, status: FilterStatus, reason: str) -> UpdateResult:
        self._status = status
        self._counters.record(status)
        result: UpdateResult = UpdateResult(
            status=status,
            x=self.get_state_copy(),
            reason=reason,
        )
        self._last_result = result
        return result
