"""
Cells stored in a graticule and the occupants that stand on them.

Occupants are a tagged variant: every Occupant carries an OccupantKind,
and behaviour on moving between cells is looked up in a registry of
change handlers keyed by kind.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, Optional, Tuple

import numpy as np

from cubic_coordinate import CubicCoordinate, coordinate, validate
from hex_geometry import DEFAULT_GEOMETRY, Geometry
from hex_math import Direction, direction_between

logger = logging.getLogger(__name__)


@dataclass(eq=False)
class Cell:
    """
    A single hex of a graticule.

    Attributes:
        coordinates: Logical (r, s, t) address, always valid
        geometry: Scale used to derive the cartesian center
        occupant: Occupant standing on this cell, if any
    """
    coordinates: CubicCoordinate
    geometry: Geometry = DEFAULT_GEOMETRY
    occupant: Optional["Occupant"] = field(default=None, repr=False)

    def __post_init__(self):
        self.coordinates = validate(coordinate(self.coordinates))

    @property
    def center_vertex(self) -> np.ndarray:
        """Cartesian (x, y, z) center of this cell."""
        return self.geometry.center_vertex_at(self.coordinates)

    def __str__(self) -> str:
        r, s, t = self.coordinates
        return f"Hex({r}, {s}, {t})"


def coordinate_of(cell: Cell) -> CubicCoordinate:
    """The logical coordinates of a cell."""
    return cell.coordinates


class OccupantKind(Enum):
    """Kinds of things that can occupy a cell."""
    BASIC_ACTOR = "basic_actor"
    MARKER = "marker"


ChangeHandler = Callable[["Occupant"], None]

_CHANGE_HANDLERS: Dict[OccupantKind, ChangeHandler] = {}


def register_change_handler(kind: OccupantKind) -> Callable[[ChangeHandler], ChangeHandler]:
    """
    Register the function called when an occupant of this kind moves.

    Usage:
        @register_change_handler(OccupantKind.MARKER)
        def on_marker_moved(occupant):
            ...
    """
    def decorator(func: ChangeHandler) -> ChangeHandler:
        _CHANGE_HANDLERS[kind] = func
        return func
    return decorator


def unregister_change_handler(kind: OccupantKind) -> Optional[ChangeHandler]:
    """Remove and return the handler registered for kind."""
    return _CHANGE_HANDLERS.pop(kind, None)


def change_handler_for(kind: OccupantKind) -> Optional[ChangeHandler]:
    """The handler registered for kind, if any."""
    return _CHANGE_HANDLERS.get(kind)


@dataclass(eq=False)
class Occupant:
    """
    Something that logically occupies a single cell.

    Attributes:
        kind: Variant tag used to dispatch change handlers
        direction: Facing direction
        location: Cell currently occupied
        previous_location: Cell occupied before the last move
    """
    kind: OccupantKind
    direction: Direction = Direction.FORWARD
    location: Optional[Cell] = None
    previous_location: Optional[Cell] = None

    def move_to(self, cell: Optional[Cell]) -> None:
        """
        Move to cell (or off the graticule when cell is None).

        The change handler for this kind only runs when both the old and
        the new location are cells.

        A cell holds at most one occupant. Moving onto a cell held by
        another occupant takes that occupant off the graticule (its
        location becomes None) and logs a warning.
        """
        if cell is not None and cell.occupant is not None and cell.occupant is not self:
            displaced = cell.occupant
            logger.warning(f"{displaced.kind.value} occupant on {cell} displaced by {self.kind.value}")
            displaced.move_to(None)

        self.previous_location = self.location
        self.location = cell

        if self.previous_location is not None and self.previous_location.occupant is self:
            self.previous_location.occupant = None
        if cell is not None:
            cell.occupant = self

        if self.location is not None and self.previous_location is not None:
            handler = change_handler_for(self.kind)
            if handler is not None:
                handler(self)


@register_change_handler(OccupantKind.BASIC_ACTOR)
def _face_step_direction(occupant: Occupant) -> None:
    """Basic actors turn to face the direction of a single-hex step."""
    step = direction_between(occupant.previous_location.coordinates, occupant.location.coordinates)
    if step is not None:
        occupant.direction = step
    logger.debug(f"{occupant.kind.value} moved {occupant.previous_location} -> {occupant.location}")


def pose(occupant: Occupant, geometry: Optional[Geometry] = None) -> Tuple[np.ndarray, np.ndarray]:
    """
    Position and rotation for drawing an occupant.

    Args:
        occupant: A placed occupant
        geometry: Scale to project with (defaults to the cell's own)

    Returns:
        (center vertex, 3x3 facing rotation)

    Raises:
        ValueError: If the occupant is not on a cell
    """
    if occupant.location is None:
        raise ValueError(f"{occupant.kind.value} occupant has no location")
    geometry = geometry or occupant.location.geometry
    return (
        geometry.center_vertex_at(occupant.location.coordinates),
        geometry.face(occupant.direction),
    )
