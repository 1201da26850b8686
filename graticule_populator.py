"""
Fill a graticule with cells.

Population is destructive: storage is reallocated first, then a cell is
created for every valid coordinate of the graticule.
"""

import logging
from typing import Any, Callable

from cell import Cell
from cubic_coordinate import CubicCoordinate
from graticule import Graticule

logger = logging.getLogger(__name__)

CellFactory = Callable[[CubicCoordinate, Graticule], Any]


def create_cell(coord: CubicCoordinate, parent: Graticule) -> Cell:
    """Default cell factory: an empty Cell using the graticule's geometry."""
    return Cell(coord, geometry=parent.geometry)


def populate(graticule: Graticule, cell_factory: CellFactory = create_cell) -> int:
    """
    Reallocate storage and create a cell at every valid coordinate.

    Args:
        graticule: Configured graticule to fill
        cell_factory: Called with (coordinate, graticule) for each cell

    Returns:
        Number of cells created
    """
    graticule.init_storage()

    count = 0
    for coord in graticule.iter_coordinates():
        graticule[coord] = cell_factory(coord, graticule)
        count += 1

    logger.info(f"Populated {graticule} with {count} cells")
    return count
