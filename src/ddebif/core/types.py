"""Common type aliases used throughout the package."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING, Any, TypeAlias

import numpy as np
import numpy.typing

if TYPE_CHECKING:
    import matplotlib.axes

# Common type for Arrays, e.g. the state vector
Array: TypeAlias = numpy.typing.NDArray[np.float64 | np.complexfloating]

# Type for purely real-valued arrays (e.g. delay magnitudes)
RealArray: TypeAlias = numpy.typing.NDArray[np.float64]

# Type for complex-valued arrays (e.g. the action of the characteristic matrix)
ComplexArray: TypeAlias = numpy.typing.NDArray[np.complexfloating]

# Objects that can be coerced into an Array
ArrayLike: TypeAlias = numpy.typing.ArrayLike

# Dense matrices only: the Jacobian blocks are computed by automatic differentiation
Matrix: TypeAlias = np.ndarray

# Parameters may be anything the lens knows how to read and write
Params: TypeAlias = Any

# F(x, xd, p): state, ordered delayed replicas, parameters
VectorField: TypeAlias = Callable[[Any, Sequence[Any], Params], Any]

# delays(delays0, p): one magnitude per delay slot
DelayFunction: TypeAlias = Callable[[Any, Params], Sequence[float]]

# Common type for matplotlib axes
if TYPE_CHECKING:
    Axes: TypeAlias = matplotlib.axes.Axes
else:
    Axes: TypeAlias = Any
