"""Residual and delay-aware linearization of constant-delay equilibria."""

from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np

from ddebif.core.autodiff import as_inexact, to_numpy
from ddebif.core.problem import DelayEquilibriumProblem
from ddebif.core.profiling import profile
from ddebif.core.types import Array, Matrix, Params, RealArray

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class JacobianBundle:
    """
    The linearization of a constant-delay system at an equilibrium.

    dx/dt = J0 x(t) + sum_i Jd[i] x(t - delays[i])

    Jall is the linearization of the equilibrium condition itself, while J0 and
    the Jd blocks are the coefficients of the characteristic matrix. A bundle is
    computed afresh by every call to `jacobian` or `jad`.
    """

    #: the problem that was linearized
    problem: DelayEquilibriumProblem
    #: J0 + sum(Jd)
    Jall: Matrix
    #: derivative with respect to the instantaneous state
    J0: Matrix
    #: derivative with respect to each delayed replica, in the order of the delay slots
    Jd: tuple[Matrix, ...]
    #: the delay magnitudes at the parameters of the linearization
    delays: RealArray

    def transpose(self) -> JacobianBundle:
        """Return a new bundle with every block transposed."""
        return JacobianBundle(
            self.problem,
            self.Jall.T.copy(),
            self.J0.T.copy(),
            tuple(A.T.copy() for A in self.Jd),
            self.delays.copy(),
        )


@profile
def residual(problem: DelayEquilibriumProblem, x: Array, p: Params) -> Array:
    """
    Evaluate the equilibrium condition F(x, [x, ..., x], p).

    x is an equilibrium at p exactly when the residual vanishes.

    Parameters
    ----------
    problem
        The delay problem.
    x
        The state.
    p
        The parameters.

    Returns
    -------
    Array
        The residual vector.
    """
    return np.asarray(problem.vf.residual(x, p))


@profile
def jacobian(problem: DelayEquilibriumProblem, x: Array, p: Params) -> JacobianBundle:
    """
    Linearize the vector field at x separately in the state and in each delayed replica.

    All replicas equal x, so by the chain rule Jall = J0 + sum(Jd) is the
    Jacobian of the residual.

    Parameters
    ----------
    problem
        The delay problem.
    x
        The state, usually an equilibrium.
    p
        The parameters.

    Returns
    -------
    JacobianBundle
        The blocks J0, Jd, their sum and the delay magnitudes at p.

    Raises
    ------
    DelayConfigurationError
        If the delay function returns the wrong number of delays.
    """
    tau = problem.evaluate_delays(p)
    vf = problem.vf
    backend = vf.backend
    x = as_inexact(x)
    xd = vf.replicas(x)
    J0 = to_numpy(backend.jacobian(lambda z: vf.F(z, xd, p), x))

    def replace_slot(i):
        def f(z):
            zd = list(xd)
            zd[i] = z
            return vf.F(x, zd, p)

        return f

    Jd = tuple(to_numpy(backend.jacobian(replace_slot(i), x)) for i in range(problem.n_delays))
    Jall = J0 + sum(Jd, np.zeros_like(J0))
    logger.debug("linearized to blocks of shape %s with delays %s", J0.shape, tau)
    return JacobianBundle(problem, Jall, J0, Jd, tau)


@profile
def jad(problem: DelayEquilibriumProblem, x: Array, p: Params) -> JacobianBundle:
    """
    Linearize like `jacobian` and transpose every block of the result.

    Used for the adjoint linearization when no closed-form adjoint is known.
    Bundles returned earlier are left untouched.
    """
    return jacobian(problem, x, p).transpose()
