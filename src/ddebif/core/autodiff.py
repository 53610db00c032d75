"""
Forward-mode automatic differentiation.

Every default derivative of a vector field is obtained through an
`AutoDiffBackend`. The backend returns arrays of its own kind, so that its
results can be differentiated again (second and third derivatives are built by
nesting first derivatives). Conversion to numpy happens at the public surface,
see `to_numpy`.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Protocol

import jax
import jax.numpy as jnp
import numpy as np

from .types import Array

# derivatives have to match the float64 precision of the numpy arrays we return
jax.config.update("jax_enable_x64", True)


class AutoDiffBackend(Protocol):
    """The differentiation capability consumed by vector fields and Jacobian assembly."""

    def jacobian(self, f: Callable[[Any], Any], x: Any) -> Any:
        """Return the Jacobian matrix df/dx at x."""
        ...

    def directional_derivative(self, f: Callable[[Any], Any], x: Any, dx: Any) -> Any:
        """Return d/dt f(x + t * dx) at t = 0."""
        ...


class JaxForwardDiff:
    """
    Forward-mode automatic differentiation with jax.

    jax transformations are purely functional and keep no tape, so a single
    instance may be shared by concurrent callers.
    """

    def jacobian(self, f: Callable[[Any], Any], x: Any) -> Any:
        """
        Calculate the Jacobian of f at x by forward-mode propagation.

        Parameters
        ----------
        f
            A jax-traceable function of a single array argument.
        x
            The point of linearization.

        Returns
        -------
        jax.Array
            The matrix with entries df_i/dx_j.
        """
        return jax.jacfwd(f)(as_inexact(x))

    def directional_derivative(self, f: Callable[[Any], Any], x: Any, dx: Any) -> Any:
        """
        Calculate the derivative of f at x along dx, without forming the Jacobian.

        Parameters
        ----------
        f
            A jax-traceable function of a single array argument.
        x
            The point of linearization.
        dx
            The direction.

        Returns
        -------
        jax.Array
            The tangent d/dt f(x + t * dx) at t = 0.
        """
        x = as_inexact(x)
        dx = jnp.asarray(dx, dtype=x.dtype)
        _, tangent = jax.jvp(f, (x,), (dx,))
        return tangent


def as_inexact(x: Any) -> Any:
    """Convert x to a jax array of floating point type, as required for tangents."""
    x = jnp.asarray(x)
    if not jnp.issubdtype(x.dtype, jnp.inexact):
        x = x.astype(jnp.float64)
    return x


def to_numpy(a: Any) -> Array:
    """Convert a backend result to a numpy array."""
    return np.asarray(a)


#: the backend used when a vector field is not given one explicitly
DEFAULT_BACKEND: AutoDiffBackend = JaxForwardDiff()
