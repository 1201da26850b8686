"""
Cartesian projection for hexagonal graticules.

Implements flat-top hexagons laid out on the x/z ground plane (y is up),
so every projected vertex has y == 0.

Coordinate Systems:
- Cubic (r, s, t): logical grid coordinates (r+s+t=0)
- Axial (p, q): intermediate form used by the projection, (p, q) = (r, s)
- Cartesian (x, y, z): world coordinates

References:
- https://www.redblobgames.com/grids/hexagons/
"""

from dataclasses import dataclass
from typing import Sequence

import numpy as np

from cubic_coordinate import CubicCoordinate, as_axial
from hex_math import Direction, round_coordinate

# The only square root of three used for projection, so radius and
# apothem based geometries agree exactly.
SQRT3 = float(np.sqrt(3.0))

# Yaw in degrees for each Direction, in Direction ordinal order
FACING_ANGLES = (
    0.0,  # fwd
    300.0,  # fwd right
    240.0,  # back right
    180.0,  # back
    120.0,  # back left
    60.0,  # fwd left
)


def _yaw_matrix(degrees: float) -> np.ndarray:
    """Yaw-only rotation about the y axis; maps +z to (sin, 0, cos)."""
    theta = np.radians(degrees)
    c, s = np.cos(theta), np.sin(theta)
    matrix = np.array([
        [c, 0.0, s],
        [0.0, 1.0, 0.0],
        [-s, 0.0, c],
    ])
    matrix.setflags(write=False)
    return matrix


FACING_ROTATIONS = tuple(_yaw_matrix(angle) for angle in FACING_ANGLES)


@dataclass(frozen=True)
class Geometry:
    """
    Geometric scale of a hex graticule.

    Attributes:
        radius: Distance from a hex center to a vertex (circumradius)
    """
    radius: float

    def __post_init__(self):
        if not self.radius > 0:
            raise ValueError(f"Hex radius must be positive, got {self.radius}")

    @classmethod
    def from_radius(cls, radius: float) -> "Geometry":
        """
        Create a geometry from the circumradius.

        Args:
            radius: Distance from center to a vertex

        Returns:
            Geometry with the given scale
        """
        return cls(float(radius))

    @classmethod
    def from_apothem(cls, apothem: float) -> "Geometry":
        """
        Create a geometry from the apothem.

        Args:
            apothem: Distance from center to the midpoint of an edge

        Returns:
            Geometry with the given scale
        """
        return cls(float(apothem) / (SQRT3 / 2))

    @property
    def apothem(self) -> float:
        """Distance from the center to an edge: (sqrt(3) / 2) * radius."""
        return (SQRT3 / 2) * self.radius

    def center_vertex_at(self, hex) -> np.ndarray:
        """
        Get the cartesian center of a hex.

        Args:
            hex: Cubic coordinate

        Returns:
            Array (x, y, z) with y == 0
        """
        p, q = as_axial(hex)
        x = self.radius * (3.0 / 2 * p)
        z = self.radius * (SQRT3 / 2 * p + SQRT3 * q)
        return np.array([x, 0.0, z])

    def mesh_vertices_at(self, hex) -> np.ndarray:
        """
        Get the vertices describing a hex.

        Returns 7 points: element 0 is the center, elements 1-6 are the
        outer vertices in clockwise order starting from the -x corner.

        Args:
            hex: Cubic coordinate

        Returns:
            Array of shape (7, 3)
        """
        center = self.center_vertex_at(hex)
        radius, apothem = self.radius, self.apothem

        offsets = np.array([
            [0.0, 0.0, 0.0],
            [-radius, 0.0, 0.0],
            [-radius / 2, 0.0, apothem],
            [radius / 2, 0.0, apothem],
            [radius, 0.0, 0.0],
            [radius / 2, 0.0, -apothem],
            [-radius / 2, 0.0, -apothem],
        ])
        return center + offsets

    def hex_at(self, point: Sequence[float]) -> CubicCoordinate:
        """
        Convert a cartesian point to the hex containing it.

        Inverse of center_vertex_at, used to turn picked positions into
        grid coordinates.

        Args:
            point: (x, y, z) world position, or (x, z) on the ground plane

        Returns:
            Nearest valid cubic coordinate
        """
        if len(point) == 3:
            x, _, z = point
        else:
            x, z = point

        p = (2.0 / 3 * x) / self.radius
        q = z / (SQRT3 * self.radius) - p / 2
        return round_coordinate((p, q, -p - q))

    @staticmethod
    def facing_angle(direction: Direction) -> float:
        """Yaw in degrees for a direction."""
        return FACING_ANGLES[int(direction)]

    @staticmethod
    def face(direction: Direction) -> np.ndarray:
        """
        Get the rotation that orients an actor towards a direction.

        Args:
            direction: Direction to face

        Returns:
            Read-only 3x3 rotation matrix about the y axis
        """
        return FACING_ROTATIONS[int(direction)]

    def __repr__(self) -> str:
        return f"Geometry(radius={self.radius}, apothem={self.apothem})"


DEFAULT_GEOMETRY = Geometry.from_radius(1.0)
