"""Unit tests for the characteristic matrix of delay equilibria."""

import jax.numpy as jnp
import numpy as np
import pytest
import scipy.special

from ddebif.core.problem import DelayEquilibriumProblem
from ddebif.linearization import characteristic, characteristic_matrix, jacobian, Δ


def scalar_feedback(x, xd, p):
    """x' = p - x - x(t - 1)"""
    return p - x - xd[0]


def oscillator(x, xd, p):
    """A delayed oscillator with two delays."""
    return jnp.stack(
        [
            x[1] - p["k"] * xd[0][0],
            -x[0] - 0.5 * x[1] + jnp.sin(xd[1][1]),
        ]
    )


@pytest.fixture
def scalar_problem() -> DelayEquilibriumProblem:
    return DelayEquilibriumProblem.from_function(scalar_feedback, lambda d, p: d, [0.0], [1.0], 1.0)


@pytest.fixture
def oscillator_problem() -> DelayEquilibriumProblem:
    return DelayEquilibriumProblem.from_function(
        oscillator, lambda d, p: p["tau"] * d, np.zeros(2), [1.0, 0.5], {"k": 0.3, "tau": 2.0}
    )


def test_delta_is_the_customary_name() -> None:
    assert Δ is characteristic


def test_scalar_feedback_at_zero(scalar_problem) -> None:
    x = np.array([0.5])
    res = Δ(scalar_problem, x, 1.0, np.array([1.0]), 0.0)
    np.testing.assert_allclose(res, [2.0])


def test_scalar_feedback_root(scalar_problem) -> None:
    """
    Delta(lam) = lam + 1 + exp(-lam) vanishes for lam = W(-e) - 1,
    W being any branch of the Lambert W function.
    """
    x = np.array([0.5])
    for k in [0, 1, -1, 2]:
        lam = complex(scipy.special.lambertw(-np.e, k)) - 1
        res = Δ(scalar_problem, x, 1.0, np.array([1.0]), lam)
        assert abs(res[0]) < 1e-10
        # x' = -x - x(t - 1) is stable
        assert lam.real < 0
    # away from a root the characteristic matrix is regular
    assert abs(Δ(scalar_problem, x, 1.0, np.array([1.0]), -0.567 + 0j)[0]) > 1.0


def test_delay_zero_limit(oscillator_problem) -> None:
    p = {"k": 0.3, "tau": 0.0}
    x = np.array([0.2, -0.1])
    J = jacobian(oscillator_problem, x, p)
    np.testing.assert_array_equal(J.delays, [0.0, 0.0])
    v = np.array([1.0, -2.0])
    for lam in [0.0, 1.5, -0.3 + 2.0j, 4.0j]:
        expected = (lam * np.eye(2) - J.Jall) @ v
        np.testing.assert_allclose(characteristic(oscillator_problem, x, p, v, lam), expected, atol=1e-14)


def test_characteristic_with_delays(oscillator_problem) -> None:
    p = oscillator_problem.params
    x = np.array([0.2, -0.1])
    v = np.array([0.5 + 1.0j, 1.0])
    lam = -0.1 + 1.3j
    J = jacobian(oscillator_problem, x, p)
    np.testing.assert_allclose(J.delays, [2.0, 1.0])
    expected = lam * v - J.J0 @ v
    expected -= np.exp(-lam * 2.0) * (J.Jd[0] @ v) + np.exp(-lam * 1.0) * (J.Jd[1] @ v)
    np.testing.assert_allclose(characteristic(oscillator_problem, x, p, v, lam), expected, atol=1e-14)


def test_characteristic_matrix_acts_like_characteristic(oscillator_problem) -> None:
    p = oscillator_problem.params
    x = np.array([0.2, -0.1])
    lam = 0.4 - 0.7j
    M = characteristic_matrix(oscillator_problem, x, p, lam)
    assert M.shape == (2, 2)
    assert np.iscomplexobj(M)
    for v in np.eye(2):
        np.testing.assert_allclose(M @ v, characteristic(oscillator_problem, x, p, v, lam), atol=1e-14)


def test_singular_characteristic_matrix(scalar_problem) -> None:
    lam = complex(scipy.special.lambertw(-np.e, 0)) - 1
    M = characteristic_matrix(scalar_problem, np.array([0.0]), 1.0, lam)
    assert abs(np.linalg.det(M)) < 1e-10


def test_vector_of_wrong_dimension(oscillator_problem) -> None:
    with pytest.raises(ValueError):
        characteristic(oscillator_problem, np.zeros(2), oscillator_problem.params, np.ones(3), 1.0)
