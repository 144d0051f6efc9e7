################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Tests for the predict/correct recursion of the Kalman filter."""

from __future__ import annotations

import numpy as np
import pytest

from linear_kalman.config.kalman_model import KalmanModel
from linear_kalman.config.kalman_model import KalmanModelBuilder
from linear_kalman.filter.kalman_filter import KalmanFilter
from linear_kalman.kalman_types import FilterStatus
from linear_kalman.kalman_types import FloatArray
from linear_kalman.kalman_types import KalmanDimensions
from linear_kalman.kalman_types import UpdateResult


def _make_tracking_filter() -> KalmanFilter:
    kalman: KalmanFilter = KalmanFilter(KalmanDimensions(n_state=2, n_obs=2), False)
    kalman.F = np.eye(2)
    kalman.H = np.eye(2)
    kalman.Q = np.zeros((2, 2))
    kalman.R = np.zeros((2, 2))
    kalman.P = np.eye(2)
    return kalman


def _make_command_model() -> KalmanModel:
    dt: float = 0.1
    return (
        KalmanModelBuilder(KalmanDimensions(n_state=2, n_obs=1, n_com=1))
        .set_transition([[1.0, dt], [0.0, 1.0]])
        .set_observation([[1.0, 0.0]])
        .set_command([[0.5 * dt * dt], [dt]])
        .set_process_noise(np.eye(2) * 0.01)
        .set_measurement_noise([[0.25]])
        .set_initial_state([0.0, 1.0])
        .set_initial_covariance(np.eye(2))
        .build()
    )


def test_construction_zero_initializes_state() -> None:
    kalman: KalmanFilter = KalmanFilter(KalmanDimensions(3, 2, 1), False)

    np.testing.assert_array_equal(kalman.x, np.zeros(3))
    np.testing.assert_array_equal(kalman.P, np.zeros((3, 3)))
    assert kalman.B.shape == (3, 1)
    assert kalman.status == FilterStatus.OK
    assert kalman.check is True
    assert kalman.verbose is False
    assert kalman.last_result is None


def test_default_construction_is_verbose() -> None:
    kalman: KalmanFilter = KalmanFilter(KalmanDimensions(2, 2))

    assert kalman.verbose is True


def test_exact_tracking_with_unit_gain() -> None:
    kalman: KalmanFilter = _make_tracking_filter()
    observation: FloatArray = np.array([3.0, -4.5])

    result: UpdateResult = kalman.update(observation)

    assert result.status == FilterStatus.OK
    assert result.accepted
    assert kalman.status == 0
    np.testing.assert_allclose(kalman.x, observation)
    np.testing.assert_allclose(result.x, observation)
    np.testing.assert_allclose(kalman.K, np.eye(2))
    np.testing.assert_allclose(kalman.P, np.zeros((2, 2)), atol=1e-12)


def test_update_matches_textbook_equations() -> None:
    model: KalmanModel = _make_command_model()
    kalman: KalmanFilter = KalmanFilter.from_model(model, False)
    z: FloatArray = np.array([0.3])
    u: FloatArray = np.array([2.0])

    kalman.update(z, u)

    x_pred: FloatArray = model.F @ model.x0 + model.B @ u
    P_pred: FloatArray = model.F @ model.P0 @ model.F.T + model.Q
    y: FloatArray = z - model.H @ x_pred
    S: FloatArray = model.H @ P_pred @ model.H.T + model.R
    K: FloatArray = P_pred @ model.H.T @ np.linalg.inv(S)
    x_new: FloatArray = x_pred + K @ y
    P_new: FloatArray = (np.eye(2) - K @ model.H) @ P_pred

    np.testing.assert_allclose(kalman.y, y)
    np.testing.assert_allclose(kalman.S, S)
    np.testing.assert_allclose(kalman.K, K)
    np.testing.assert_allclose(kalman.x, x_new)
    np.testing.assert_allclose(kalman.P, P_new)


def test_command_shifts_prediction_by_b_times_command() -> None:
    model: KalmanModel = _make_command_model()
    with_command: KalmanFilter = KalmanFilter.from_model(model, False)
    without_command: KalmanFilter = KalmanFilter.from_model(model, False)
    u: FloatArray = np.array([3.0])

    with_command.update([0.2], u)
    without_command.update([0.2], [0.0])

    # The gain does not depend on x, so the shift passes through (I - K H)
    K: FloatArray = with_command.K
    expected_shift: FloatArray = (np.eye(2) - K @ model.H) @ (model.B @ u)
    np.testing.assert_allclose(with_command.K, without_command.K)
    np.testing.assert_allclose(with_command.x - without_command.x, expected_shift)


def test_command_shift_is_exact_when_correction_is_skipped() -> None:
    dims: KalmanDimensions = KalmanDimensions(n_state=2, n_obs=2, n_com=1)
    B: FloatArray = np.array([[0.5], [-1.0]])
    shifts: list[FloatArray] = []

    command: float
    for command in (0.0, 4.0):
        kalman: KalmanFilter = KalmanFilter(dims, False)
        kalman.F = [[1.0, 1.0], [0.0, 1.0]]
        kalman.B = B
        kalman.x = [1.0, 2.0]
        result: UpdateResult = kalman.update([0.0, 0.0], [command])
        assert result.status == FilterStatus.SINGULAR_INNOVATION_COVARIANCE
        shifts.append(kalman.get_state_copy())

    np.testing.assert_allclose(shifts[1] - shifts[0], B @ np.array([4.0]))


def test_update_without_command_uses_zero_contribution() -> None:
    model: KalmanModel = _make_command_model()
    implicit: KalmanFilter = KalmanFilter.from_model(model, False)
    explicit: KalmanFilter = KalmanFilter.from_model(model, False)

    implicit.update([0.4])
    explicit.update([0.4], [0.0])

    np.testing.assert_allclose(implicit.x, explicit.x)
    np.testing.assert_allclose(implicit.P, explicit.P)


def test_command_rejected_without_command_input() -> None:
    kalman: KalmanFilter = _make_tracking_filter()

    with pytest.raises(ValueError):
        kalman.update([1.0, 2.0], [1.0])


def test_empty_command_matches_no_command() -> None:
    with_empty: KalmanFilter = _make_tracking_filter()
    without: KalmanFilter = _make_tracking_filter()

    result: UpdateResult = with_empty.update([1.0, 2.0], np.zeros(0))
    expected: UpdateResult = without.update([1.0, 2.0])

    assert result.status == FilterStatus.OK
    assert expected.status == FilterStatus.OK
    np.testing.assert_array_equal(result.x, expected.x)
    np.testing.assert_array_equal(with_empty.P, without.P)

    from_list: UpdateResult = _make_tracking_filter().update([1.0, 2.0], [])
    assert from_list.status == FilterStatus.OK
    np.testing.assert_array_equal(from_list.x, [1.0, 2.0])


def test_update_rejects_wrong_observation_length() -> None:
    kalman: KalmanFilter = _make_tracking_filter()

    with pytest.raises(ValueError):
        kalman.update([1.0, 2.0, 3.0])


def test_update_accepts_column_vector_observation() -> None:
    kalman: KalmanFilter = _make_tracking_filter()

    kalman.update(np.array([[1.0], [2.0]]))

    np.testing.assert_allclose(kalman.x, [1.0, 2.0])


def test_state_copy_is_independent() -> None:
    kalman: KalmanFilter = _make_tracking_filter()
    kalman.update([1.0, 2.0])

    copy: FloatArray = kalman.get_state_copy()
    copy[0] = 100.0
    copy[1] = -100.0

    np.testing.assert_allclose(kalman.get_state_copy(), [1.0, 2.0])


def test_state_views_are_read_only() -> None:
    kalman: KalmanFilter = _make_tracking_filter()

    with pytest.raises(ValueError):
        kalman.x[0] = 1.0
    with pytest.raises(ValueError):
        kalman.P[0, 0] = 1.0


def test_assignment_copies_caller_array() -> None:
    kalman: KalmanFilter = _make_tracking_filter()
    x0: FloatArray = np.array([1.0, 2.0])

    kalman.x = x0
    x0[0] = 50.0

    np.testing.assert_allclose(kalman.x, [1.0, 2.0])


def test_assignment_rejects_wrong_shape() -> None:
    kalman: KalmanFilter = _make_tracking_filter()

    with pytest.raises(ValueError):
        kalman.F = np.eye(3)
    with pytest.raises(ValueError):
        kalman.H = np.zeros((3, 2))
    with pytest.raises(ValueError):
        kalman.x = [1.0, 2.0, 3.0]
    with pytest.raises(ValueError):
        kalman.B = np.zeros((2, 1))


def test_configure_rejects_mismatched_model() -> None:
    kalman: KalmanFilter = KalmanFilter(KalmanDimensions(2, 2), False)

    with pytest.raises(ValueError):
        kalman.configure(_make_command_model())


def test_from_model_applies_initial_state() -> None:
    model: KalmanModel = _make_command_model()

    kalman: KalmanFilter = KalmanFilter.from_model(model, False)

    np.testing.assert_allclose(kalman.x, [0.0, 1.0])
    np.testing.assert_allclose(kalman.P, np.eye(2))
    np.testing.assert_allclose(kalman.F, model.F)


def test_reset_restores_belief_and_counters() -> None:
    kalman: KalmanFilter = _make_tracking_filter()
    kalman.update([1.0, 2.0])
    kalman.update([np.nan, 2.0])

    kalman.reset([5.0, 6.0], np.eye(2) * 2.0)

    np.testing.assert_allclose(kalman.x, [5.0, 6.0])
    np.testing.assert_allclose(kalman.P, np.eye(2) * 2.0)
    np.testing.assert_array_equal(kalman.K, np.zeros((2, 2)))
    assert kalman.status == FilterStatus.OK
    assert kalman.counters.updates == 0


def test_reset_defaults_to_zero() -> None:
    kalman: KalmanFilter = _make_tracking_filter()
    kalman.update([1.0, 2.0])

    kalman.reset()

    np.testing.assert_array_equal(kalman.x, np.zeros(2))
    np.testing.assert_array_equal(kalman.P, np.zeros((2, 2)))


def test_diagnostics_snapshot_reports_counters() -> None:
    kalman: KalmanFilter = _make_tracking_filter()
    kalman.update([1.0, 2.0])
    kalman.update([np.inf, 2.0])

    snapshot: dict[str, object] = kalman.get_diagnostics_snapshot()

    assert snapshot["n_state"] == 2
    assert snapshot["status"] == "INVALID_OBSERVATION"
    assert snapshot["last_reason"] == "observation has nan or inf values"
    assert snapshot["counters"] == {
        "updates": 2,
        "accepted": 1,
        "invalid_observation": 1,
        "invalid_command": 0,
        "singular_innovation": 0,
        "invalid_estimate": 0,
    }
