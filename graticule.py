"""
Bounded dense storage of hex cells.

A Graticule covers the diamond-shaped region of cubic space bounded by
three per-axis MapDimensions. Cells are kept in a rectangular numpy
object array indexed by (r - r_dim.min, s - s_dim.min); t is derived
from r and s and is only used for validation. The rectangle holds more
slots than the diamond has hexes, which is accepted in exchange for
constant-time offset indexing.

Storage must be allocated with init_storage() after the dimensions are
set and before any cell access. Calling it again discards every cell.

Not thread-safe: embedders must serialise access to a Graticule.
"""

import logging
import numbers
from dataclasses import dataclass
from typing import Any, Callable, Iterator, List, Optional, Tuple

import numpy as np

from cubic_coordinate import CubicCoordinate, coordinate, validate
from graticule_errors import (
    DegenerateDimensionError,
    InvalidCoordinateError,
    OutOfBoundsError,
    UninitializedStorageError,
)
from hex_geometry import DEFAULT_GEOMETRY, Geometry

logger = logging.getLogger(__name__)


@dataclass
class MapDimension:
    """
    Inclusive bounds [min, max] of one logical axis.

    An inverted interval is allowed while a graticule is being
    configured; it only fails once size is evaluated.
    """
    min: int
    max: int

    @property
    def size(self) -> int:
        """
        Number of indices on this axis (max - min + 1).

        Raises:
            DegenerateDimensionError: If min > max
        """
        if self.min > self.max:
            raise DegenerateDimensionError(self)
        return self.max - self.min + 1

    def __contains__(self, value: int) -> bool:
        return self.min <= value <= self.max

    def __iter__(self) -> Iterator[int]:
        return iter(range(self.min, self.max + 1))


class Graticule:
    """
    Hex graticule backed by a dense 2D array.

    Attributes:
        r_dim, s_dim, t_dim: Logical extents on each cubic axis
        geometry: Cartesian scale used for cells on this graticule
    """

    def __init__(
        self,
        r_dim: Optional[MapDimension] = None,
        s_dim: Optional[MapDimension] = None,
        t_dim: Optional[MapDimension] = None,
        geometry: Geometry = DEFAULT_GEOMETRY,
    ):
        self.r_dim = r_dim
        self.s_dim = s_dim
        self.t_dim = t_dim
        self.geometry = geometry

        self._cells: Optional[np.ndarray] = None
        self._storage_bounds: Optional[Tuple[Tuple[int, int], ...]] = None

    # --- Lifecycle ---

    def configure(self, r_dim: MapDimension, s_dim: MapDimension, t_dim: MapDimension) -> None:
        """
        Set the dimensions of this graticule.

        Any existing storage is dropped; init_storage() must be called
        again before cells can be accessed.
        """
        self.r_dim, self.s_dim, self.t_dim = r_dim, s_dim, t_dim
        self._cells = None
        self._storage_bounds = None

    def init_storage(self) -> None:
        """
        Allocate empty storage sized from r_dim and s_dim.

        Replaces any existing storage; previous cells are discarded.

        Raises:
            UninitializedStorageError: If the dimensions have not been set
            DegenerateDimensionError: If any dimension has min > max
        """
        r_size, s_size, _ = [dim.size for dim in self._dimensions()]
        shape = (r_size, s_size)

        self._cells = np.full(shape, None, dtype=object)
        self._storage_bounds = self._current_bounds()
        logger.debug(f"Allocated graticule storage {shape} for {self}")

    def clear(self) -> None:
        """Discard every cell. Alias for init_storage()."""
        self.init_storage()

    @property
    def is_initialized(self) -> bool:
        """True when storage matches the current dimensions."""
        return self._cells is not None and self._storage_bounds == self._current_bounds()

    @property
    def shape(self) -> Tuple[int, int]:
        """Shape of the backing array (r size, s size)."""
        return self._storage().shape

    def _dimensions(self) -> Tuple[MapDimension, MapDimension, MapDimension]:
        if self.r_dim is None or self.s_dim is None or self.t_dim is None:
            raise UninitializedStorageError("Graticule dimensions have not been configured")
        return (self.r_dim, self.s_dim, self.t_dim)

    def _current_bounds(self) -> Optional[Tuple[Tuple[int, int], ...]]:
        if self.r_dim is None or self.s_dim is None or self.t_dim is None:
            return None
        return tuple((d.min, d.max) for d in (self.r_dim, self.s_dim, self.t_dim))

    def _storage(self) -> np.ndarray:
        if self._cells is None:
            raise UninitializedStorageError("Graticule storage accessed before init_storage()")
        if self._storage_bounds != self._current_bounds():
            raise UninitializedStorageError("Graticule dimensions changed since init_storage()")
        return self._cells

    # --- Indexing ---

    def in_bounds(self, c) -> bool:
        """True if c is a valid coordinate inside all three dimensions."""
        r_dim, s_dim, t_dim = self._dimensions()
        try:
            r, s, t = validate(coordinate(c))
        except InvalidCoordinateError:
            return False
        return r in r_dim and s in s_dim and t in t_dim

    def __contains__(self, c) -> bool:
        return self.in_bounds(c)

    def _slot(self, c) -> Tuple[int, int]:
        """Validate c and translate it to an index into the backing array."""
        r, s, t = validate(coordinate(c))
        if r not in self.r_dim or s not in self.s_dim or t not in self.t_dim:
            raise OutOfBoundsError(CubicCoordinate(r, s, t))
        return (r - self.r_dim.min, s - self.s_dim.min)

    @staticmethod
    def _is_single(key) -> bool:
        # Fractional components still count as a single key so they fail validation
        return len(key) == 3 and all(isinstance(v, numbers.Real) for v in key)

    def __getitem__(self, key):
        """
        Get a cell, or None if the slot is empty.

        Accepts g[r, s, t], g[coord], or a list of coordinates for a
        bulk lookup. A bulk lookup checks every coordinate before reading
        any cell, so it either returns a list of the same length or raises.

        Raises:
            UninitializedStorageError: Before init_storage()
            InvalidCoordinateError: If r + s + t != 0
            OutOfBoundsError: If the coordinate is outside the dimensions
        """
        cells = self._storage()
        if self._is_single(key):
            return cells[self._slot(key)]

        slots = [self._slot(c) for c in key]
        return [cells[slot] for slot in slots]

    def __setitem__(self, key, cell: Any) -> None:
        """Store a cell (or None to empty the slot) at g[r, s, t] or g[coord]."""
        cells = self._storage()
        cells[self._slot(key)] = cell

    # --- Traversal ---

    def iter_cells(self) -> Iterator[Any]:
        """
        Iterate over stored cells in row-major storage order.

        Empty slots are skipped. The whole rectangle is scanned; only
        cells placed at valid coordinates can be present.
        """
        for cell in self._storage().flat:
            if cell is not None:
                yield cell

    def apply_cells(self, action: Callable[[Any], Any]) -> None:
        """Call action on every stored cell."""
        for cell in self.iter_cells():
            action(cell)

    def iter_coordinates(self) -> Iterator[CubicCoordinate]:
        """
        Iterate over every valid coordinate within the dimensions.

        Yields each (r, s, t) with r, s and t inside their dimensions and
        r + s + t == 0, by increasing r and then increasing s. Storage
        does not need to be initialised.
        """
        r_dim, s_dim, t_dim = self._dimensions()
        for r in r_dim:
            s_min = max(s_dim.min, -r - t_dim.max)
            s_max = min(s_dim.max, -r - t_dim.min)
            for s in range(s_min, s_max + 1):
                yield CubicCoordinate(r, s, -r - s)

    def apply_coordinates(self, action: Callable[[CubicCoordinate], Any]) -> None:
        """Call action on every valid coordinate. Used to populate graticules."""
        for c in self.iter_coordinates():
            action(c)

    def coordinates(self) -> List[CubicCoordinate]:
        """All valid coordinates, in iter_coordinates() order."""
        return list(self.iter_coordinates())

    def __repr__(self) -> str:
        return f"Graticule(r_dim={self.r_dim}, s_dim={self.s_dim}, t_dim={self.t_dim})"
