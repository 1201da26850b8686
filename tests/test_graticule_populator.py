"""
Tests for filling graticules with cells.
"""

import logging

import pytest

from cell import Cell
from cubic_coordinate import CubicCoordinate
from graticule import Graticule, MapDimension
from graticule_populator import create_cell, populate
from hex_geometry import Geometry


def configured(r=(-1, 1), s=(-1, 1), t=(-1, 1), geometry=None) -> Graticule:
    graticule = Graticule(geometry=geometry) if geometry else Graticule()
    graticule.configure(MapDimension(*r), MapDimension(*s), MapDimension(*t))
    return graticule


class TestPopulate:
    """populate() creates one cell per valid coordinate."""

    def test_radius_one(self):
        graticule = configured()

        count = populate(graticule)

        assert count == 7
        cells = list(graticule.iter_cells())
        assert len(cells) == 7
        for cell in cells:
            assert graticule[cell.coordinates] is cell

    def test_hexagon_of_radius_three(self):
        """A hexagon of radius n holds 3n(n+1) + 1 cells."""
        graticule = configured(r=(-3, 3), s=(-3, 3), t=(-3, 3))
        assert populate(graticule) == 37

    def test_cells_use_graticule_geometry(self):
        geometry = Geometry.from_radius(5.0)
        graticule = configured(geometry=geometry)
        populate(graticule)
        assert all(cell.geometry is geometry for cell in graticule.iter_cells())

    def test_populate_replaces_previous_cells(self):
        graticule = configured()
        populate(graticule)
        first = graticule[0, 0, 0]

        populate(graticule)

        assert graticule[0, 0, 0] is not first
        assert len(list(graticule.iter_cells())) == 7

    def test_custom_factory(self):
        graticule = configured()
        calls = []

        def factory(coord, parent):
            calls.append((coord, parent))
            return f"Hex{tuple(coord)}"

        populate(graticule, factory)

        assert [c for c, _ in calls] == graticule.coordinates()
        assert all(parent is graticule for _, parent in calls)
        assert graticule[1, 0, -1] == "Hex(1, 0, -1)"

    def test_empty_diamond(self):
        """Bounds that admit no zero-sum coordinate give no cells."""
        graticule = configured(r=(1, 2), s=(1, 2), t=(1, 2))
        assert populate(graticule) == 0
        assert graticule.shape == (2, 2)

    def test_logs_count(self, caplog):
        graticule = configured()
        with caplog.at_level(logging.INFO, logger="graticule_populator"):
            populate(graticule)
        assert "7 cells" in caplog.text


class TestCreateCell:
    """Default cell factory."""

    def test_create_cell(self):
        graticule = configured(geometry=Geometry.from_radius(2.0))
        cell = create_cell(CubicCoordinate(0, 1, -1), graticule)
        assert isinstance(cell, Cell)
        assert cell.coordinates == CubicCoordinate(0, 1, -1)
        assert cell.geometry is graticule.geometry
        assert cell.occupant is None


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
