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

from linear_kalman.config.kalman_model import KalmanModel
from linear_kalman.config.kalman_model import KalmanModelBuilder
from linear_kalman.config.kalman_params import KalmanParams
from linear_kalman.diagnostics.diagnostic_sink import CallbackSink
from linear_kalman.diagnostics.diagnostic_sink import DiagnosticSink
from linear_kalman.diagnostics.diagnostic_sink import NullSink
from linear_kalman.filter.kalman_filter import KalmanFilter
from linear_kalman.kalman_types import FilterCounters
from linear_kalman.kalman_types import FilterStatus
from linear_kalman.kalman_types import KalmanDimensions
from linear_kalman.kalman_types import UpdateResult


__all__ = [
    "CallbackSink",
    "DiagnosticSink",
    "FilterCounters",
    "FilterStatus",
    "KalmanDimensions",
    "KalmanFilter",
    "KalmanModel",
    "KalmanModelBuilder",
    "KalmanParams",
    "NullSink",
    "UpdateResult",
]
