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
Types shared by the linear Kalman filter
"""

from __future__ import annotations

import enum
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray


FloatArray = NDArray[np.float64]


@dataclass(frozen=True, slots=True)
class KalmanDimensions:
    """
    Fixed dimensions of a Kalman filter

    Fields:
        n_state: Length of the state vector x
        n_obs: Length of the observation vector
        n_com: Length of the command vector, 0 when the model has no command
    """

    n_state: int
    n_obs: int
    n_com: int = 0

    def validate(self) -> None:
        """Validate dimensions and raise ValueError on failure."""
        for name, value in (
            ("n_state", self.n_state),
            ("n_obs", self.n_obs),
            ("n_com", self.n_com),
        ):
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"{name} must be an int")
        if self.n_state < 1:
            raise ValueError("n_state must be >= 1")
        if self.n_obs < 1:
            raise ValueError("n_obs must be >= 1")
        if self.n_com < 0:
            raise ValueError("n_com must be >= 0")

    @property
    def is_degenerate(self) -> bool:
        """True when the state or observation space is scalar."""
        return self.n_state <= 1 or self.n_obs <= 1

    def describe(self) -> str:
        """Return the dimension tuple used in diagnostics."""
        if self.n_com > 0:
            return f"<{self.n_state},{self.n_obs},{self.n_com}>"
        return f"<{self.n_state},{self.n_obs}>"


class FilterStatus(enum.IntEnum):
    """
    Outcome of the last filter update

    Any nonzero value means the state estimate must not be trusted for the
    cycle that produced it.

    Attributes:
        OK: Update completed and x holds the corrected estimate
        INVALID_OBSERVATION: Observation had NaN or Inf values
        INVALID_COMMAND: Command had NaN or Inf values
        SINGULAR_INNOVATION_COVARIANCE: S could not be inverted
        INVALID_ESTIMATE: Corrected state had NaN or Inf values
    """

    OK = 0
    INVALID_OBSERVATION = 1
    INVALID_COMMAND = 2
    SINGULAR_INNOVATION_COVARIANCE = 3
    INVALID_ESTIMATE = 4


@dataclass(frozen=True, slots=True, eq=False)
class UpdateResult:
    """Result of a single filter update.

    Data contract:
        status:
            FilterStatus of the update, OK on success
        x:
            Copy of the state vector after the call, shape (n_state,)
        reason:
            Empty on success, otherwise the diagnostic text for the failure

    Determinism and edge cases:
        - accepted implies reason == ""
        - x is a copy and never aliases filter storage
        - Equality compares x by value
    """

    status: FilterStatus
    x: FloatArray
    reason: str = ""

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, UpdateResult):
            return NotImplemented
        return (
            self.status == other.status
            and self.reason == other.reason
            and np.array_equal(self.x, other.x)
        )

    @property
    def accepted(self) -> bool:
        return self.status == FilterStatus.OK

    def summarize(self) -> str:
        """Return a deterministic summary string for logs."""
        summary: str = f"status={self.status.name} accepted={self.accepted}"
        if not self.accepted:
            summary = f"{summary} reason={self.reason}"
        return summary

    def as_dict(self) -> dict[str, object]:
        """Return a JSON-serializable dict representation."""
        return {
            "status": int(self.status),
            "status_name": self.status.name,
            "x": [float(value) for value in self.x],
            "reason": self.reason,
        }


@dataclass
class FilterCounters:
    """Counters tracking how many updates ended in each outcome."""

    # Count of update calls
    updates: int = 0

    # Count of updates that applied a correction
    accepted: int = 0

    # Count of rejected observations
    invalid_observation: int = 0

    # Count of rejected commands
    invalid_command: int = 0

    # Count of innovation covariance inversion failures
    singular_innovation: int = 0

    # Count of non-finite corrected estimates
    invalid_estimate: int = 0

    def record(self, status: FilterStatus) -> None:
        """Increment the counters for an update outcome."""
        self.updates += 1
        if status == FilterStatus.OK:
            self.accepted += 1
        elif status == FilterStatus.INVALID_OBSERVATION:
            self.invalid_observation += 1
        elif status == FilterStatus.INVALID_COMMAND:
            self.invalid_command += 1
        elif status == FilterStatus.SINGULAR_INNOVATION_COVARIANCE:
            self.singular_innovation += 1
        elif status == FilterStatus.INVALID_ESTIMATE:
            self.invalid_estimate += 1

    def as_dict(self) -> dict[str, int]:
        """Return a JSON-serializable dict representation."""
        return {
            "updates": self.updates,
            "accepted": self.accepted,
            "invalid_observation": self.invalid_observation,
            "invalid_command": self.invalid_command,
            "singular_innovation": self.singular_innovation,
            "invalid_estimate": self.invalid_estimate,
        }
