"""
Linearization of constant-delay equilibria.

This package provides the residual, the decomposed Jacobian and the
characteristic matrix that a continuation engine needs for tracking an
equilibrium and testing its stability.
"""

from .characteristic import characteristic, characteristic_matrix, Δ
from .jacobian import JacobianBundle, jacobian, jad, residual

__all__ = [
    "JacobianBundle",
    "residual",
    "jacobian",
    "jad",
    "characteristic",
    "characteristic_matrix",
    "Δ",
]
