################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping


@dataclass(frozen=True, slots=True)
class KalmanParams:
    """Runtime toggles for the Kalman filter.

    Data contract:
        verbose:
            True to emit diagnostics to the sink
        check:
            True to reject non-finite observations and commands, and to flag
            non-finite corrected estimates
        strict_dimensions:
            True to refuse construction when n_state or n_obs is 1, instead
            of only warning about it

    Determinism and edge cases:
        - Parameters are explicit inputs; nothing is read from the
          environment.
        - from_dict() rejects unknown keys and non-bool values.
    """

    verbose: bool = True
    check: bool = True
    strict_dimensions: bool = False

    @staticmethod
    def defaults() -> KalmanParams:
        """Return a stable default parameter set."""
        params: KalmanParams = KalmanParams()
        params.validate()
        return params

    @classmethod
    def from_dict(cls, params: Mapping[str, object]) -> KalmanParams:
        """Construct parameters from a mapping, rejecting unknown keys."""
        if not isinstance(params, Mapping):
            raise ValueError("params must be a mapping")
        unknown_keys: list[str] = sorted(set(params.keys()) - set(cls._field_order()))
        if unknown_keys:
            raise ValueError(f"unknown parameter: {unknown_keys[0]}")
        defaults: KalmanParams = cls.defaults()
        result: KalmanParams = cls(
            verbose=cls._as_bool("verbose", params.get("verbose", defaults.verbose)),
            check=cls._as_bool("check", params.get("check", defaults.check)),
            strict_dimensions=cls._as_bool(
                "strict_dimensions",
                params.get("strict_dimensions", defaults.strict_dimensions),
            ),
        )
        result.validate()
        return result

    def validate(self) -> None:
        """Validate parameters and raise ValueError on failure."""
        for name in self._field_order():
            self._as_bool(name, getattr(self, name))

    def as_dict(self) -> dict[str, object]:
        """Return a JSON-serializable dict representation."""
        return {
            "verbose": self.verbose,
            "check": self.check,
            "strict_dimensions": self.strict_dimensions,
        }

    @staticmethod
    def _as_bool(name: str, value: object) -> bool:
        if not isinstance(value, bool):
            raise ValueError(f"{name} must be a bool")
        return value

    @staticmethod
    def _field_order() -> tuple[str, ...]:
        return ("verbose", "check", "strict_dimensions")
