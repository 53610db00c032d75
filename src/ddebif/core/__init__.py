"""
The 'core' package contains the problem definition and its building blocks.
"""

from .autodiff import AutoDiffBackend, JaxForwardDiff
from .errors import DelayConfigurationError
from .lens import AttributeLens, IdentityLens, IndexLens, Lens
from .multilinear import BilinearMap, MultilinearMap, TrilinearMap
from .problem import DelayEquilibriumProblem, plot_solution_default, record_solution_default
from .profiling import Profiler, profile
from .vector_field import DifferentiableVectorField

__all__ = [
    "DelayEquilibriumProblem",
    "DifferentiableVectorField",
    "DelayConfigurationError",
    "AutoDiffBackend",
    "JaxForwardDiff",
    "Lens",
    "IdentityLens",
    "IndexLens",
    "AttributeLens",
    "MultilinearMap",
    "BilinearMap",
    "TrilinearMap",
    "record_solution_default",
    "plot_solution_default",
    "profile",
    "Profiler",
]
