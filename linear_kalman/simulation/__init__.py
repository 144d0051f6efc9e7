################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

from linear_kalman.simulation.constant_tracking import ConstantTrackingReport
from linear_kalman.simulation.constant_tracking import ConstantTrackingScenario
from linear_kalman.simulation.constant_tracking import run_constant_tracking


__all__ = [
    "ConstantTrackingReport",
    "ConstantTrackingScenario",
    "run_constant_tracking",
]
