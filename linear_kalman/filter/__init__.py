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
Kalman filter state machine
"""

from __future__ import annotations

from linear_kalman.filter.kalman_filter import KalmanFilter


__all__ = ["KalmanFilter"]
