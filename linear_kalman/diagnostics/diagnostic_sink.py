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
Destinations for human-readable filter diagnostics
"""

from __future__ import annotations

from typing import Callable
from typing import Protocol


class DiagnosticSink(Protocol):
    """
    Write-only receiver of filter status messages

    A logging.Logger satisfies this protocol, so the module logger is the
    default sink.
    """

    def info(self, msg: str) -> None: ...

    def warning(self, msg: str) -> None: ...

    def error(self, msg: str) -> None: ...


class CallbackSink:
    """
    Adapts a plain string callback, such as a serial console writer

    Messages are formatted as "KALMAN:<LEVEL>: <message>".
    """

    def __init__(self, callback: Callable[[str], None]) -> None:
        self._callback: Callable[[str], None] = callback

    def info(self, msg: str) -> None:
        self._callback(f"KALMAN:INFO: {msg}")

    def warning(self, msg: str) -> None:
        self._callback(f"KALMAN:WARNING: {msg}")

    def error(self, msg: str) -> None:
        self._callback(f"KALMAN:ERROR: {msg}")


class NullSink:
    """Discards every message."""

    def info(self, msg: str) -> None:
        pass

    def warning(self, msg: str) -> None:
        pass

    def error(self, msg: str) -> None:
        pass
