"""Vector fields of constant-delay systems together with their derivatives."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from .autodiff import DEFAULT_BACKEND, AutoDiffBackend, to_numpy
from .multilinear import BilinearMap, TrilinearMap
from .types import Array, Matrix, Params, VectorField

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class DifferentiableVectorField:
    """
    A delay vector field F(x, xd, p) and its derivatives with respect to the state.

    The derivatives linearize the equilibrium condition, i.e., every delayed
    replica in xd follows the state x. Derivatives that are not supplied are
    generated eagerly at construction by forward-mode automatic differentiation
    of F. Supplied derivatives are used verbatim and are never checked against
    F; a wrong signature only shows up when the derivative is first called.

    The delay-aware decomposition of the Jacobian into an instantaneous and one
    block per delay is not part of the vector field, see
    `ddebif.linearization.jacobian`.
    """

    #: the vector field F(x, xd, p)
    F: VectorField
    #: the number of delayed replicas F expects in xd
    n_delays: int
    #: directional derivative dF(x, p, dx)
    dF: Callable[..., Array] | None = None
    #: adjoint of the directional derivative dFadjoint(x, p, dx), optional
    dFadjoint: Callable[..., Array] | None = None
    #: Jacobian J(x, p)
    J: Callable[..., Matrix] | None = None
    #: adjoint Jacobian Jadjoint(x, p), optional
    Jadjoint: Callable[..., Matrix] | None = None
    #: second derivative d2F(x, p, dx1, dx2)
    d2F: Callable[..., Array] | None = None
    #: third derivative d3F(x, p, dx1, dx2, dx3)
    d3F: Callable[..., Array] | None = None
    #: symmetric bilinear form of d2F, same signature
    d2Fc: Callable[..., Array] | None = None
    #: symmetric trilinear form of d3F, same signature
    d3Fc: Callable[..., Array] | None = None
    #: whether the Jacobian is symmetric
    issymmetric: bool = False
    #: tolerance for the singularity tests of the continuation engine
    tolerance: float = 1e-8
    #: informative only, all derivatives are evaluated out of place
    inplace: bool = False
    #: the automatic differentiation used for the defaults
    backend: AutoDiffBackend = DEFAULT_BACKEND

    def __post_init__(self) -> None:
        automatic = []
        if self.dF is None:
            object.__setattr__(self, "dF", self._auto_dF)
            automatic.append("dF")
        if self.J is None:
            object.__setattr__(self, "J", self._auto_J)
            automatic.append("J")
        if self.d2F is None:
            object.__setattr__(self, "d2F", self._auto_d2F)
            object.__setattr__(self, "d2Fc", self._symmetric_d2F)
            automatic.append("d2F")
        elif self.d2Fc is None:
            object.__setattr__(self, "d2Fc", self.d2F)
        if self.d3F is None:
            object.__setattr__(self, "d3F", self._auto_d3F)
            object.__setattr__(self, "d3Fc", self._symmetric_d3F)
            automatic.append("d3F")
        elif self.d3Fc is None:
            object.__setattr__(self, "d3Fc", self.d3F)
        logger.debug("vector field with %d delay(s), automatic derivatives: %s", self.n_delays, automatic)

    @property
    def has_adjoint(self) -> bool:
        """Whether a closed-form adjoint Jacobian was supplied."""
        return self.Jadjoint is not None

    def replicas(self, x: Any) -> list[Any]:
        """Return the delayed replicas of a constant history: x once per delay slot."""
        return [x for _ in range(self.n_delays)]

    def residual(self, x: Any, p: Params) -> Any:
        """Evaluate F with every delayed replica equal to x."""
        return self.F(x, self.replicas(x), p)

    # traceable derivatives, these may be nested into each other

    def _jvp1(self, x, p, dx1):
        return self.backend.directional_derivative(lambda y: self.residual(y, p), x, dx1)

    def _jvp2(self, x, p, dx1, dx2):
        return self.backend.directional_derivative(lambda y: self._jvp1(y, p, dx1), x, dx2)

    def _jvp3(self, x, p, dx1, dx2, dx3):
        return self.backend.directional_derivative(lambda y: self._jvp2(y, p, dx1, dx2), x, dx3)

    # numpy valued defaults

    def _auto_dF(self, x: Any, p: Params, dx: Any) -> Array:
        return to_numpy(self._jvp1(x, p, dx))

    def _auto_J(self, x: Any, p: Params) -> Matrix:
        return to_numpy(self.backend.jacobian(lambda y: self.residual(y, p), x))

    def _auto_d2F(self, x: Any, p: Params, dx1: Any, dx2: Any) -> Array:
        return to_numpy(self._jvp2(x, p, dx1, dx2))

    def _auto_d3F(self, x: Any, p: Params, dx1: Any, dx2: Any, dx3: Any) -> Array:
        return to_numpy(self._jvp3(x, p, dx1, dx2, dx3))

    def _symmetric_d2F(self, x: Any, p: Params, dx1: Any, dx2: Any) -> Array:
        return BilinearMap(lambda a, b: self._auto_d2F(x, p, a, b))(dx1, dx2)

    def _symmetric_d3F(self, x: Any, p: Params, dx1: Any, dx2: Any, dx3: Any) -> Array:
        return TrilinearMap(lambda a, b, c: self._auto_d3F(x, p, a, b, c))(dx1, dx2, dx3)
