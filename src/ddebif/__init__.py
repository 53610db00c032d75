"""
ddebif: equilibria of constant-delay systems for bifurcation analysis.

Defines delay equilibrium problems and provides the residual, the Jacobian
blocks with respect to the state and each delayed state, and the
characteristic matrix that decides the stability of an equilibrium. The
continuation engine calling these is not part of this package.
"""

from . import linearization
from .core import (
    AttributeLens,
    BilinearMap,
    DelayConfigurationError,
    DelayEquilibriumProblem,
    DifferentiableVectorField,
    IdentityLens,
    IndexLens,
    JaxForwardDiff,
    Profiler,
    TrilinearMap,
    profile,
)
from .linearization import JacobianBundle, characteristic, characteristic_matrix, jacobian, jad, residual, Δ

__all__ = [
    "DelayEquilibriumProblem",
    "DifferentiableVectorField",
    "DelayConfigurationError",
    "JacobianBundle",
    "residual",
    "jacobian",
    "jad",
    "characteristic",
    "characteristic_matrix",
    "Δ",
    "IdentityLens",
    "IndexLens",
    "AttributeLens",
    "BilinearMap",
    "TrilinearMap",
    "JaxForwardDiff",
    "profile",
    "Profiler",
    "linearization",
]
