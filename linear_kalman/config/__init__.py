################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

from linear_kalman.config.kalman_model import KalmanModel
from linear_kalman.config.kalman_model import KalmanModelBuilder
from linear_kalman.config.kalman_params import KalmanParams


__all__ = [
    "KalmanModel",
    "KalmanModelBuilder",
    "KalmanParams",
]
