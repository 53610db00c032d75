"""
The characteristic matrix of a linearized constant-delay system.

    Delta(lambda) = lambda I - J0 - sum_i exp(-lambda tau_i) Jd[i]

lambda is an eigenvalue of the linearization exactly when Delta(lambda) is
singular, and the equilibrium is stable when all of them have negative real
part. Nothing here searches for such lambda: root finders and eigensolvers of
the continuation engine call these functions repeatedly, typically with a
normalization condition on v.
"""

from __future__ import annotations

import numpy as np

from ddebif.core.problem import DelayEquilibriumProblem
from ddebif.core.profiling import profile
from ddebif.core.types import Array, ComplexArray, Params

from .jacobian import jacobian


@profile
def characteristic(problem: DelayEquilibriumProblem, x: Array, p: Params, v: Array, lam: complex) -> ComplexArray:
    """
    Apply the characteristic matrix Delta(lam) to the vector v.

    Parameters
    ----------
    problem
        The delay problem.
    x
        The equilibrium.
    p
        The parameters.
    v
        The vector, of the dimension of the state.
    lam
        The (complex) candidate eigenvalue.

    Returns
    -------
    ComplexArray
        lam * v - J0 v - sum_i exp(-lam * tau_i) * Jd[i] v
    """
    J = jacobian(problem, x, p)
    v = np.asarray(v)
    res = lam * v - J.J0 @ v
    for tau, A in zip(J.delays, J.Jd):
        res = res - np.exp(-lam * tau) * (A @ v)
    return res


#: the customary name of the characteristic matrix
Δ = characteristic


@profile
def characteristic_matrix(problem: DelayEquilibriumProblem, x: Array, p: Params, lam: complex) -> ComplexArray:
    """
    Assemble the dense characteristic matrix Delta(lam).

    For eigensolvers that need the matrix rather than its action, e.g. to
    compute det(Delta(lam)) or a null vector.
    """
    J = jacobian(problem, x, p)
    M = lam * np.eye(J.J0.shape[0], dtype=complex) - J.J0
    for tau, A in zip(J.delays, J.Jd):
        M = M - np.exp(-lam * tau) * A
    return M
