"""
Parameter lenses.

A lens selects the continuation parameter among the parameters of a problem.
A lens never mutates: `set` returns updated parameters and leaves the given
ones untouched, so problems can stay immutable.
"""

from __future__ import annotations

import copy
import dataclasses
from typing import Any

import numpy as np

from .types import Params


class Lens:
    """Base class of all lenses: a get/set pair on a parameter structure."""

    def get(self, params: Params) -> Any:
        """Read the selected value from the parameters."""
        raise NotImplementedError("'Lens' is an abstract base class!")

    def set(self, params: Params, value: Any) -> Params:
        """Return a copy of the parameters with the selected value replaced."""
        raise NotImplementedError("'Lens' is an abstract base class!")

    @property
    def symbol(self) -> str:
        """A short name of the selected parameter, e.g. for axis labels."""
        return "p"

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.symbol})"


class IdentityLens(Lens):
    """Selects the parameters themselves, for problems with a scalar parameter."""

    def get(self, params: Params) -> Any:
        return params

    def set(self, params: Params, value: Any) -> Params:
        return value


class IndexLens(Lens):
    """Selects params[index], for sequences, arrays and dictionaries."""

    def __init__(self, index: Any) -> None:
        self.index = index

    def get(self, params: Params) -> Any:
        return params[self.index]

    def set(self, params: Params, value: Any) -> Params:
        if isinstance(params, tuple):
            items = list(params)
            items[self.index] = value
            # namedtuples are rebuilt from their fields
            return type(params)(*items) if hasattr(params, "_fields") else tuple(items)
        if isinstance(params, np.ndarray):
            new = params.copy()
        else:
            new = copy.copy(params)
        new[self.index] = value
        return new

    @property
    def symbol(self) -> str:
        if isinstance(self.index, str):
            return self.index
        return f"p[{self.index!r}]"


class AttributeLens(Lens):
    """Selects params.<name>, for dataclasses, namedtuples and plain objects."""

    def __init__(self, name: str) -> None:
        self.name = name

    def get(self, params: Params) -> Any:
        return getattr(params, self.name)

    def set(self, params: Params, value: Any) -> Params:
        if dataclasses.is_dataclass(params) and not isinstance(params, type):
            return dataclasses.replace(params, **{self.name: value})
        if hasattr(params, "_replace"):
            return params._replace(**{self.name: value})
        new = copy.copy(params)
        setattr(new, self.name, value)
        return new

    @property
    def symbol(self) -> str:
        return self.name
