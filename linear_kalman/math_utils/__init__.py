################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

from linear_kalman.math_utils.diagonal import DiagonalIdentity
from linear_kalman.math_utils.linalg import LinearAlgebra


__all__ = [
    "DiagonalIdentity",
    "LinearAlgebra",
]
