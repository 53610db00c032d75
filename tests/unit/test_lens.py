"""Unit tests for the parameter lenses."""

from collections import namedtuple
from dataclasses import dataclass

import numpy as np
import pytest

from ddebif.core.lens import AttributeLens, IdentityLens, IndexLens, Lens


@dataclass(frozen=True)
class Parameters:
    a: float
    b: float


class PlainParameters:
    def __init__(self) -> None:
        self.a = 1.0
        self.b = 2.0


Pair = namedtuple("Pair", ["a", "b"])


def test_identity_lens() -> None:
    lens = IdentityLens()
    assert lens.get(3.0) == 3.0
    assert lens.set(3.0, 4.0) == 4.0
    assert lens.symbol == "p"


def test_index_lens_on_dict() -> None:
    params = {"a": 1.0, "b": 2.0}
    lens = IndexLens("b")
    assert lens.get(params) == 2.0
    new = lens.set(params, 5.0)
    assert new == {"a": 1.0, "b": 5.0}
    assert params["b"] == 2.0
    assert lens.symbol == "b"


def test_index_lens_on_sequences() -> None:
    lens = IndexLens(1)
    assert lens.set([1.0, 2.0], 3.0) == [1.0, 3.0]
    assert lens.set((1.0, 2.0), 3.0) == (1.0, 3.0)
    pair = lens.set(Pair(1.0, 2.0), 3.0)
    assert isinstance(pair, Pair)
    assert pair.b == 3.0
    arr = np.array([1.0, 2.0])
    new = lens.set(arr, 3.0)
    np.testing.assert_array_equal(new, [1.0, 3.0])
    np.testing.assert_array_equal(arr, [1.0, 2.0])
    assert lens.symbol == "p[1]"


def test_attribute_lens() -> None:
    lens = AttributeLens("a")
    params = Parameters(a=1.0, b=2.0)
    assert lens.get(params) == 1.0
    assert lens.set(params, 3.0) == Parameters(a=3.0, b=2.0)
    assert lens.set(Pair(1.0, 2.0), 3.0) == Pair(3.0, 2.0)
    plain = PlainParameters()
    new = lens.set(plain, 3.0)
    assert new.a == 3.0
    assert plain.a == 1.0
    assert lens.symbol == "a"
    assert repr(lens) == "AttributeLens(a)"


def test_abstract_lens() -> None:
    with pytest.raises(NotImplementedError):
        Lens().get(1.0)
    with pytest.raises(NotImplementedError):
        Lens().set(1.0, 2.0)
