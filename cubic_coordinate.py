"""
Cubic and axial coordinates for hexagonal graticules.

Coordinate Systems:
- Cubic (r, s, t): grid addresses, valid when r + s + t == 0
- Axial (p, q): two-component alias of a cubic coordinate (t = -p - q)

Difference vectors such as direction deltas are also CubicCoordinate
values; they are never validated.
"""

import numbers
import operator
from dataclasses import dataclass
from typing import Callable, Iterator, Tuple, TypeVar

from graticule_errors import InvalidCoordinateError

T = TypeVar("T")
R = TypeVar("R")


@dataclass(frozen=True, eq=True)
class CubicCoordinate:
    """
    Immutable cubic coordinate.

    Frozen so it can be used as a dictionary key and compared by value.
    Unpacks like a tuple: ``r, s, t = coord``.
    """
    r: int
    s: int
    t: int

    def __iter__(self) -> Iterator[int]:
        return iter((self.r, self.s, self.t))

    def __getitem__(self, index: int) -> int:
        return (self.r, self.s, self.t)[index]

    def __len__(self) -> int:
        return 3

    def __add__(self, other) -> "CubicCoordinate":
        return add(self, other)

    def __sub__(self, other) -> "CubicCoordinate":
        return sub(self, other)

    def __repr__(self):
        return f"CubicCoordinate({self.r}, {self.s}, {self.t})"


@dataclass(frozen=True, eq=True)
class AxialCoordinate:
    """Immutable axial coordinate (p, q)."""
    p: int
    q: int

    def __iter__(self) -> Iterator[int]:
        return iter((self.p, self.q))

    def __repr__(self):
        return f"AxialCoordinate({self.p}, {self.q})"


def _is_integral(value) -> bool:
    if isinstance(value, numbers.Integral):
        return True
    return isinstance(value, numbers.Real) and float(value).is_integer()


def coordinate(c) -> CubicCoordinate:
    """
    Coerce any 3-sequence of whole numbers into a CubicCoordinate.

    Floats are accepted only when they hold an integral value (2.0).

    Raises:
        InvalidCoordinateError: If a component is not a whole number
    """
    if isinstance(c, CubicCoordinate):
        return c
    r, s, t = c
    if not all(_is_integral(v) for v in (r, s, t)):
        raise InvalidCoordinateError(
            (r, s, t), f"Cubic coordinates {(r, s, t)} must be whole numbers"
        )
    return CubicCoordinate(int(r), int(s), int(t))


# --- Componentwise helpers ---

def apply(c, func: Callable[[T], R]) -> Tuple[R, R, R]:
    """Apply a unary function to every component of a 3-sequence."""
    r, s, t = c
    return (func(r), func(s), func(t))


def apply_pair(a, b, func: Callable[[T, T], R]) -> Tuple[R, R, R]:
    """Apply a binary function pairwise to the components of two 3-sequences."""
    ar, as_, at = a
    br, bs, bt = b
    return (func(ar, br), func(as_, bs), func(at, bt))


def fold(c, func: Callable[[T, T], T]) -> T:
    """Cumulatively combine the components of a 3-sequence: func(func(r, s), t)."""
    r, s, t = c
    return func(func(r, s), t)


# --- Arithmetic ---

def add(a, b) -> CubicCoordinate:
    """Componentwise a + b. The result is not validated."""
    return CubicCoordinate(*apply_pair(a, b, operator.add))


def sub(a, b) -> CubicCoordinate:
    """Componentwise a - b. The result is not validated."""
    return CubicCoordinate(*apply_pair(a, b, operator.sub))


def coordinate_sum(c) -> int:
    """r + s + t"""
    return fold(c, operator.add)


def validate(c):
    """
    Check that r + s + t == 0.

    Args:
        c: Cubic coordinate to check

    Returns:
        The supplied coordinate, unchanged

    Raises:
        InvalidCoordinateError: If the components do not sum to zero
    """
    if coordinate_sum(c) != 0:
        raise InvalidCoordinateError(c)
    return c


# --- Conversions ---

def as_axial(c) -> AxialCoordinate:
    """Convert a cubic coordinate to axial (p, q) = (r, s)."""
    r, s, _ = c
    return AxialCoordinate(r, s)


def as_cubic(a) -> CubicCoordinate:
    """
    Convert an axial coordinate to cubic (p, q, -p - q).

    Inverse of as_axial, so as_cubic(as_axial(c)) == c for every valid c.
    Note the third component is t = -p - q; the (p, -p - q, q) layout
    found in some references is not an inverse of (r, s) axial.
    """
    p, q = a
    return CubicCoordinate(p, q, -p - q)
