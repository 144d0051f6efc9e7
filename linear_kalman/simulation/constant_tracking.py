################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Scalar filter tracking a constant value through noisy observations."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

import numpy as np

from linear_kalman.config.kalman_model import KalmanModel
from linear_kalman.config.kalman_model import KalmanModelBuilder
from linear_kalman.diagnostics.diagnostic_sink import DiagnosticSink
from linear_kalman.filter.kalman_filter import KalmanFilter
from linear_kalman.kalman_types import FilterStatus
from linear_kalman.kalman_types import FloatArray
from linear_kalman.kalman_types import KalmanDimensions
from linear_kalman.kalman_types import UpdateResult


_LOG: logging.Logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ConstantTrackingScenario:
    """Parameters of the constant-tracking run."""

    # True value being observed
    true_value: float = 1.0

    # Standard deviation of the additive observation noise
    noise_sigma: float = 0.5

    # Process noise variance Q
    process_noise: float = 0.01

    # Measurement noise variance R
    measurement_noise: float = 1.0

    # Number of updates to run
    steps: int = 200

    # Seed for the noise generator
    seed: int = 0

    # Initial estimate variance P0
    initial_variance: float = 1.0

    def validate(self) -> None:
        """Validate the scenario and raise ValueError on failure."""
        if self.steps < 1:
            raise ValueError("steps must be >= 1")
        if self.noise_sigma < 0.0:
            raise ValueError("noise_sigma must be >= 0")
        if self.process_noise < 0.0:
            raise ValueError("process_noise must be >= 0")
        if self.measurement_noise < 0.0:
            raise ValueError("measurement_noise must be >= 0")
        if self.initial_variance < 0.0:
            raise ValueError("initial_variance must be >= 0")


@dataclass(frozen=True, eq=False)
class ConstantTrackingReport:
    """Histories and final values of a constant-tracking run."""

    # State estimate after each update
    estimates: FloatArray

    # Trace of P after each update
    covariance_traces: FloatArray

    # Number of updates that did not return OK
    failures: int

    @property
    def final_estimate(self) -> float:
        return float(self.estimates[-1])

    @property
    def final_covariance(self) -> float:
        return float(self.covariance_traces[-1])

    def final_error(self, true_value: float) -> float:
        return abs(self.final_estimate - true_value)


def build_constant_model(scenario: ConstantTrackingScenario) -> KalmanModel:
    """Return the scalar random-walk model used by the scenario."""
    return (
        KalmanModelBuilder(KalmanDimensions(n_state=1, n_obs=1))
        .set_transition([[1.0]])
        .set_observation([[1.0]])
        .set_process_noise([[scenario.process_noise]])
        .set_measurement_noise([[scenario.measurement_noise]])
        .set_initial_state([0.0])
        .set_initial_covariance([[scenario.initial_variance]])
        .build()
    )


def run_constant_tracking(
    scenario: ConstantTrackingScenario,
    verbose: bool = False,
    sink: Optional[DiagnosticSink] = None,
) -> ConstantTrackingReport:
    """Feed noisy observations of a constant into a scalar filter."""
    scenario.validate()

    kalman: KalmanFilter = KalmanFilter.from_model(
        build_constant_model(scenario), verbose, sink=sink
    )
    rng: np.random.Generator = np.random.default_rng(scenario.seed)
    noise: FloatArray = rng.normal(0.0, scenario.noise_sigma, size=scenario.steps)

    estimates: FloatArray = np.zeros(scenario.steps, dtype=np.float64)
    traces: FloatArray = np.zeros(scenario.steps, dtype=np.float64)
    failures: int = 0

    step: int
    for step in range(scenario.steps):
        result: UpdateResult = kalman.update([scenario.true_value + noise[step]])
        if result.status != FilterStatus.OK:
            failures += 1
            _LOG.debug("Step %d rejected: %s", step, result.summarize())
        estimates[step] = result.x[0]
        traces[step] = float(np.trace(kalman.P))

    return ConstantTrackingReport(
        estimates=estimates,
        covariance_traces=traces,
        failures=failures,
    )
