"""
Hexagonal grid math on cubic coordinates.

Directions, neighbours, distances, rounding of fractional coordinates
and line drawing.

References:
- https://www.redblobgames.com/grids/hexagons/
"""

from enum import IntEnum
from typing import List, Optional, Sequence, Tuple

from cubic_coordinate import CubicCoordinate, add, apply, apply_pair, coordinate, sub


class Direction(IntEnum):
    """
    The six hex directions.

    Ordinals index both NEIGHBOURS and hex_geometry.FACING_ANGLES,
    so the order must not change.
    """
    FORWARD = 0  # +z
    FORWARD_RIGHT = 1  # +z, +x
    BACK_RIGHT = 2  # -z, +x
    BACK = 3  # -z
    BACK_LEFT = 4  # -z, -x
    FORWARD_LEFT = 5  # +z, -x


# --- Constants ---

# Unit vectors for each Direction, in ordinal order
NEIGHBOURS: Tuple[CubicCoordinate, ...] = (
    CubicCoordinate(0, +1, -1),  # fwd
    CubicCoordinate(+1, 0, -1),  # fwd right
    CubicCoordinate(+1, -1, 0),  # back right
    CubicCoordinate(0, -1, +1),  # back
    CubicCoordinate(-1, 0, +1),  # back left
    CubicCoordinate(-1, +1, 0),  # fwd left
)


# --- Neighbourhood ---

def vector(direction: Direction) -> CubicCoordinate:
    """Unit vector for a direction."""
    return NEIGHBOURS[int(direction)]


def move(c, direction: Direction) -> CubicCoordinate:
    """The coordinate one step from c towards direction."""
    return add(c, vector(direction))


def neighbourhood(hex) -> List[CubicCoordinate]:
    """
    Returns the 6 adjacent coordinates in NEIGHBOURS order.

    No bounds checking is done; callers test membership against a
    Graticule themselves.
    """
    return [add(hex, v) for v in NEIGHBOURS]


def direction_between(a, b) -> Optional[Direction]:
    """The direction of the single step from a to b, or None if b is not adjacent to a."""
    delta = sub(b, a)
    for direction in Direction:
        if NEIGHBOURS[direction] == delta:
            return direction
    return None


# --- Distances ---

def manhattan_distance(a, b=None) -> int:
    """
    Sum of absolute components of a, or of a - b when b is given.

    Always even for valid coordinates.
    """
    if b is not None:
        a = sub(a, b)
    return sum(apply(a, abs))


def distance(a, b) -> int:
    """Number of hex steps from a to b."""
    return manhattan_distance(a, b) // 2


# --- Rounding & Lines ---

def round_coordinate(approx: Sequence[float]) -> CubicCoordinate:
    """
    Rounds fractional cubic coordinates to the nearest valid hex.

    Each component is rounded independently (half to even), then the
    component with the largest rounding error is recomputed from the
    other two so that r + s + t == 0. Ties fall through to t.

    Args:
        approx: Three floats, not necessarily summing to zero

    Returns:
        A valid CubicCoordinate
    """
    r, s, t = apply(approx, round)
    dr, ds, dt = apply(apply_pair((r, s, t), approx, lambda x, y: x - y), abs)

    if dr > ds and dr > dt:
        r = -s - t
    elif ds > dt:
        s = -r - t
    else:
        t = -r - s

    return CubicCoordinate(int(r), int(s), int(t))


def _lerp(a: float, b: float, t: float) -> float:
    return a + (b - a) * t


def line(start, end) -> List[CubicCoordinate]:
    """
    Hexes on the straight line from start to end, both inclusive.

    The result always has distance(start, end) + 1 elements and each
    consecutive pair is adjacent.
    """
    start, end = coordinate(start), coordinate(end)
    n = distance(start, end)
    if n == 0:
        return [start]

    results = []
    for i in range(n + 1):
        t = i / n
        results.append(round_coordinate(apply_pair(start, end, lambda a, b: _lerp(a, b, t))))

    return results
