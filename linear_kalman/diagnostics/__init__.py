################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

from linear_kalman.diagnostics.diagnostic_sink import CallbackSink
from linear_kalman.diagnostics.diagnostic_sink import DiagnosticSink
from linear_kalman.diagnostics.diagnostic_sink import NullSink


__all__ = [
    "CallbackSink",
    "DiagnosticSink",
    "NullSink",
]
