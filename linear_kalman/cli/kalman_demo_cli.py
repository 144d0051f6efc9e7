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
Entry point for running the constant-tracking filter demo
"""

import argparse
import logging
from typing import Optional

from linear_kalman.simulation.constant_tracking import ConstantTrackingReport
from linear_kalman.simulation.constant_tracking import ConstantTrackingScenario
from linear_kalman.simulation.constant_tracking import run_constant_tracking


_LOG: logging.Logger = logging.getLogger(__name__)


################################################################################
# Demo entry point
################################################################################


def _parse_args(args: Optional[list[str]] = None) -> argparse.Namespace:
    defaults: ConstantTrackingScenario = ConstantTrackingScenario()

    parser = argparse.ArgumentParser(
        description="Track a noisy constant with a scalar Kalman filter"
    )
    parser.add_argument(
        "--true-value",
        type=float,
        default=defaults.true_value,
        help="Constant value being observed",
    )
    parser.add_argument(
        "--noise-sigma",
        type=float,
        default=defaults.noise_sigma,
        help="Standard deviation of the observation noise",
    )
    parser.add_argument(
        "--process-noise",
        type=float,
        default=defaults.process_noise,
        help="Process noise variance Q",
    )
    parser.add_argument(
        "--measurement-noise",
        type=float,
        default=defaults.measurement_noise,
        help="Measurement noise variance R",
    )
    parser.add_argument(
        "--steps",
        type=int,
        default=defaults.steps,
        help="Number of filter updates",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=defaults.seed,
        help="Seed for the noise generator",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log filter diagnostics",
    )
    return parser.parse_args(args=args)


def main(args: Optional[list[str]] = None) -> int:
    options: argparse.Namespace = _parse_args(args=args)

    logging.basicConfig(
        level=logging.DEBUG if options.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    scenario: ConstantTrackingScenario = ConstantTrackingScenario(
        true_value=options.true_value,
        noise_sigma=options.noise_sigma,
        process_noise=options.process_noise,
        measurement_noise=options.measurement_noise,
        steps=options.steps,
        seed=options.seed,
    )

    report: ConstantTrackingReport = run_constant_tracking(
        scenario, verbose=options.verbose
    )

    _LOG.info(
        "Final estimate %.6f (true %.6f, error %.6f)",
        report.final_estimate,
        scenario.true_value,
        report.final_error(scenario.true_value),
    )
    _LOG.info("Steady-state covariance %.6f", report.final_covariance)
    if report.failures:
        _LOG.warning("%d of %d updates failed", report.failures, scenario.steps)

    return 0
