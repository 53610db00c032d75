"""Symmetric multilinear maps for the higher derivatives of a vector field."""

from __future__ import annotations

import itertools
from collections.abc import Callable
from typing import Any

import numpy as np

from .types import Array


class MultilinearMap:
    """
    Symmetrization of a function that is linear in each of its arguments.

    Calling the map averages the wrapped function over all orderings of the
    arguments, so that the result does not depend on the order in which they
    are passed. Normal form computations treat second and third derivatives as
    symmetric tensors and rely on this.
    """

    #: the number of vector arguments
    order: int = 0

    def __init__(self, f: Callable[..., Any]) -> None:
        #: the raw multilinear function
        self.f = f

    def __call__(self, *dxs: Any) -> Array:
        if len(dxs) != self.order:
            raise TypeError(f"{type(self).__name__} takes {self.order} arguments, got {len(dxs)}")
        perms = list(itertools.permutations(range(self.order)))
        total = np.asarray(self.f(*dxs))
        for perm in perms[1:]:
            total = total + np.asarray(self.f(*(dxs[i] for i in perm)))
        return total / len(perms)


class BilinearMap(MultilinearMap):
    """A symmetric map (dx1, dx2) -> B(dx1, dx2)."""

    order = 2


class TrilinearMap(MultilinearMap):
    """A symmetric map (dx1, dx2, dx3) -> C(dx1, dx2, dx3)."""

    order = 3
