"""The DelayEquilibriumProblem class and its default callbacks."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import InitVar, dataclass, field
from typing import Any

import matplotlib.pyplot as plt
import numpy as np

from .autodiff import DEFAULT_BACKEND, AutoDiffBackend
from .errors import DelayConfigurationError
from .lens import IdentityLens, Lens
from .types import Array, ArrayLike, Axes, DelayFunction, Params, RealArray, VectorField
from .vector_field import DifferentiableVectorField

logger = logging.getLogger(__name__)


def record_solution_default(x: Array, p: Params) -> float:
    """Record the norm of the state along a branch."""
    return float(np.linalg.norm(x))


def plot_solution_default(x: Array, p: Params, ax: Axes | None = None, **kwargs: Any) -> None:
    """
    Plot the components of an equilibrium into a matplotlib axes object.

    Parameters
    ----------
    x
        The equilibrium state.
    p
        The parameters (unused).
    ax
        The axes to draw into, defaults to the current axes.
    **kwargs
        Passed on to `Axes.plot`.
    """
    if ax is None:
        ax = plt.gca()
    x = np.asarray(x)
    ax.set_xlabel("component")
    ax.set_ylabel("equilibrium x")
    ax.plot(np.arange(x.size), x.ravel(), **kwargs)


@dataclass(frozen=True, eq=False)
class DelayEquilibriumProblem:
    """
    The equilibrium problem of a system with constant delays.

    dx/dt = F(x(t), [x(t - tau_1), ..., x(t - tau_N)], p)

    An equilibrium x is a zero of F with every delayed replica replaced by x
    itself. The problem is an immutable aggregate of the vector field, the delay
    function, the initial guess, the parameters and the lens selecting the
    continuation parameter. A continuation engine passes it to the functions of
    `ddebif.linearization` together with the current state and parameters.

    Construction probes the delay function and the vector field once at
    (u0, params) and raises `DelayConfigurationError` if their sizes disagree
    with the number of delay slots. Pass validate=False to skip the probe.
    """

    #: the vector field and its derivatives
    vf: DifferentiableVectorField
    #: the delay function delays(delays0, p), one magnitude per slot
    delays: DelayFunction
    #: initial guess of the equilibrium
    u0: Array
    #: initial delays, their number fixes the number of delay slots
    delays0: RealArray
    #: the parameters passed to F and to the delay function
    params: Params
    #: selects the continuation parameter among params
    lens: Lens = field(default_factory=IdentityLens)
    #: plot_solution(x, p, **kwargs), called by the engine to display solutions
    plot_solution: Callable[..., Any] = plot_solution_default
    #: record_from_solution(x, p), called by the engine to store indicators of a solution
    record_from_solution: Callable[[Array, Params], Any] = record_solution_default
    validate: InitVar[bool] = True
    #: the type of the initial guess as given, before conversion to a numpy array
    u0_type: type = field(init=False, repr=False)

    def __post_init__(self, validate: bool) -> None:
        object.__setattr__(self, "u0_type", type(self.u0))
        u0 = np.array(self.u0)
        if u0.ndim != 1:
            raise DelayConfigurationError(
                f"The state has to be a one-dimensional array, got an initial guess of shape {u0.shape}."
            )
        u0.flags.writeable = False
        delays0 = np.atleast_1d(np.array(self.delays0, dtype=float))
        delays0.flags.writeable = False
        object.__setattr__(self, "u0", u0)
        object.__setattr__(self, "delays0", delays0)
        if self.vf.n_delays != delays0.size:
            raise DelayConfigurationError(
                f"The vector field expects {self.vf.n_delays} delayed replica(s), "
                f"but {delays0.size} initial delay(s) were given."
            )
        if validate:
            self.evaluate_delays(self.params)
            f0 = np.asarray(self.vf.residual(self.u0, self.params))
            if f0.shape != self.u0.shape:
                raise DelayConfigurationError(
                    f"The vector field maps a state of shape {self.u0.shape} to shape {f0.shape}."
                )
        logger.debug("created %s", self.summary())

    @classmethod
    def from_function(
        cls,
        F: VectorField,
        delays: DelayFunction,
        u0: ArrayLike,
        delays0: ArrayLike,
        params: Params,
        lens: Lens | None = None,
        *,
        dF: Callable[..., Array] | None = None,
        dFadjoint: Callable[..., Array] | None = None,
        J: Callable[..., Array] | None = None,
        Jadjoint: Callable[..., Array] | None = None,
        d2F: Callable[..., Array] | None = None,
        d3F: Callable[..., Array] | None = None,
        issymmetric: bool = False,
        tolerance: float = 1e-8,
        inplace: bool = False,
        backend: AutoDiffBackend | None = None,
        record_from_solution: Callable[[Array, Params], Any] = record_solution_default,
        plot_solution: Callable[..., Any] = plot_solution_default,
        validate: bool = True,
    ) -> DelayEquilibriumProblem:
        """
        Build a problem from a plain vector field function.

        Parameters
        ----------
        F
            The vector field F(x, xd, p), xd being the list of delayed replicas.
        delays
            The delay function delays(delays0, p).
        u0
            Initial guess of the equilibrium.
        delays0
            Initial delays, one per delay slot.
        params
            The parameters.
        lens
            Selects the continuation parameter, defaults to the parameters themselves.
        dF, dFadjoint, J, Jadjoint, d2F, d3F
            Optional closed-form derivatives, see `DifferentiableVectorField`.
            Missing ones are generated by automatic differentiation.
        issymmetric
            Whether the Jacobian is symmetric.
        tolerance
            Tolerance for singularity tests of the continuation engine.
        inplace
            Stored for the engine, derivatives are always evaluated out of place.
        backend
            The automatic differentiation backend, defaults to jax forward mode.
        record_from_solution
            Callback recording indicators of a solution.
        plot_solution
            Callback plotting a solution.
        validate
            Probe the delay function and F at construction.

        Returns
        -------
        DelayEquilibriumProblem
            The new problem.
        """
        vf = DifferentiableVectorField(
            F,
            n_delays=int(np.size(delays0)),
            dF=dF,
            dFadjoint=dFadjoint,
            J=J,
            Jadjoint=Jadjoint,
            d2F=d2F,
            d3F=d3F,
            issymmetric=issymmetric,
            tolerance=tolerance,
            inplace=inplace,
            backend=DEFAULT_BACKEND if backend is None else backend,
        )
        return cls(
            vf,
            delays,
            u0,
            delays0,
            params,
            lens=IdentityLens() if lens is None else lens,
            plot_solution=plot_solution,
            record_from_solution=record_from_solution,
            validate=validate,
        )

    @property
    def n_delays(self) -> int:
        """The number of delay slots."""
        return int(self.delays0.size)

    @property
    def is_symmetric(self) -> bool:
        """Delay problems are never treated as symmetric."""
        return False

    @property
    def is_inplace(self) -> bool:
        """All operations on the problem allocate their results."""
        return False

    @property
    def has_adjoint(self) -> bool:
        """The adjoint linearization is always available through `jad`."""
        return True

    @property
    def vector_type(self) -> type:
        """The type of the initial guess as passed by the user, u0 itself is stored as a numpy array."""
        return self.u0_type

    def evaluate_delays(self, p: Params) -> RealArray:
        """
        Evaluate the delay magnitudes for the given parameters.

        Raises
        ------
        DelayConfigurationError
            If the number of delays differs from the number of delay slots.
        """
        tau = np.atleast_1d(np.asarray(self.delays(self.delays0, p), dtype=float))
        if tau.ndim != 1 or tau.size != self.n_delays:
            raise DelayConfigurationError(
                f"The delay function returned {tau.size} delay(s) for {self.n_delays} delay slot(s)."
            )
        return tau

    def get_param(self) -> Any:
        """Return the value of the continuation parameter."""
        return self.lens.get(self.params)

    def set_param(self, value: Any) -> Params:
        """Return a copy of the parameters with the continuation parameter set to value."""
        return self.lens.set(self.params, value)

    def summary(self) -> str:
        """Return a one-line description of the problem."""
        return (
            f"constant delay problem: {self.u0.size} unknown(s), {self.n_delays} delay(s), "
            f"parameter {self.lens.symbol}"
        )

    def __str__(self) -> str:
        return (
            f"┌─ Constant Delays Bifurcation Problem with uType {self.vector_type.__name__}\n"
            f"├─ Inplace:  {self.is_inplace}\n"
            f"└─ Parameter: {self.lens.symbol}"
        )
