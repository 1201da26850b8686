"""
Tests for cells, occupants and occupant change dispatch.
"""

import numpy as np
import pytest

from cell import (
    Cell,
    Occupant,
    OccupantKind,
    change_handler_for,
    coordinate_of,
    pose,
    register_change_handler,
    unregister_change_handler,
)
from cubic_coordinate import CubicCoordinate
from graticule_errors import InvalidCoordinateError
from hex_geometry import DEFAULT_GEOMETRY, Geometry
from hex_math import Direction, move


@pytest.fixture
def marker_calls():
    """Temporarily register a recording handler for MARKER occupants."""
    calls = []
    previous = change_handler_for(OccupantKind.MARKER)

    @register_change_handler(OccupantKind.MARKER)
    def record(occupant):
        calls.append((occupant.previous_location, occupant.location))

    yield calls

    unregister_change_handler(OccupantKind.MARKER)
    if previous is not None:
        register_change_handler(OccupantKind.MARKER)(previous)


class TestCell:
    """Cell payloads."""

    def test_coordinates_validated(self):
        with pytest.raises(InvalidCoordinateError):
            Cell(CubicCoordinate(1, 1, 0))

    def test_fractional_coordinates_rejected(self):
        with pytest.raises(InvalidCoordinateError):
            Cell((0.5, -0.5, 0))

    def test_tuple_coordinates_coerced(self):
        cell = Cell((1, -1, 0))
        assert cell.coordinates == CubicCoordinate(1, -1, 0)

    def test_coordinate_of(self):
        c = CubicCoordinate(2, -3, 1)
        assert coordinate_of(Cell(c)) == c

    def test_center_vertex_derived(self):
        geometry = Geometry.from_radius(2.0)
        cell = Cell(CubicCoordinate(1, 0, -1), geometry=geometry)
        np.testing.assert_allclose(cell.center_vertex, geometry.center_vertex_at(cell.coordinates))

    def test_default_geometry(self):
        assert Cell(CubicCoordinate(0, 0, 0)).geometry is DEFAULT_GEOMETRY

    def test_str(self):
        assert str(Cell(CubicCoordinate(1, -1, 0))) == "Hex(1, -1, 0)"

    def test_identity_not_value(self):
        """Two cells at the same coordinate are distinct objects."""
        a = Cell(CubicCoordinate(0, 0, 0))
        b = Cell(CubicCoordinate(0, 0, 0))
        assert a != b
        assert len({a, b}) == 2


class TestOccupantMovement:
    """Location tracking and change dispatch."""

    def test_first_placement_does_not_dispatch(self, marker_calls):
        occupant = Occupant(OccupantKind.MARKER)
        cell = Cell(CubicCoordinate(0, 0, 0))

        occupant.move_to(cell)

        assert occupant.location is cell
        assert occupant.previous_location is None
        assert cell.occupant is occupant
        assert marker_calls == []

    def test_move_dispatches(self, marker_calls):
        occupant = Occupant(OccupantKind.MARKER)
        a = Cell(CubicCoordinate(0, 0, 0))
        b = Cell(CubicCoordinate(1, -1, 0))

        occupant.move_to(a)
        occupant.move_to(b)

        assert marker_calls == [(a, b)]
        assert a.occupant is None
        assert b.occupant is occupant

    def test_removal_does_not_dispatch(self, marker_calls):
        occupant = Occupant(OccupantKind.MARKER)
        a = Cell(CubicCoordinate(0, 0, 0))

        occupant.move_to(a)
        occupant.move_to(None)

        assert marker_calls == []
        assert occupant.location is None
        assert occupant.previous_location is a
        assert a.occupant is None

    def test_leaving_does_not_clear_other_occupant(self):
        a = Cell(CubicCoordinate(0, 0, 0))
        b = Cell(CubicCoordinate(0, 1, -1))
        first = Occupant(OccupantKind.MARKER)
        second = Occupant(OccupantKind.MARKER)

        first.move_to(a)
        second.move_to(a)
        first.move_to(b)

        assert a.occupant is second

    def test_moving_onto_occupied_cell_displaces(self, marker_calls, caplog):
        a = Cell(CubicCoordinate(0, 0, 0))
        b = Cell(CubicCoordinate(0, 1, -1))
        first = Occupant(OccupantKind.MARKER)
        second = Occupant(OccupantKind.MARKER)
        first.move_to(a)
        second.move_to(b)

        second.move_to(a)

        assert a.occupant is second
        assert b.occupant is None
        assert first.location is None
        assert first.previous_location is a
        assert marker_calls == [(b, a)]
        assert "displaced" in caplog.text

    def test_moving_onto_own_cell_keeps_occupant(self):
        a = Cell(CubicCoordinate(0, 0, 0))
        occupant = Occupant(OccupantKind.MARKER)
        occupant.move_to(a)

        occupant.move_to(a)

        assert a.occupant is occupant
        assert occupant.location is a

    @pytest.mark.parametrize("direction", list(Direction))
    def test_basic_actor_faces_step(self, direction):
        start = CubicCoordinate(0, 0, 0)
        actor = Occupant(OccupantKind.BASIC_ACTOR)

        actor.move_to(Cell(start))
        actor.move_to(Cell(move(start, direction)))

        assert actor.direction == direction

    def test_basic_actor_keeps_direction_on_jump(self):
        actor = Occupant(OccupantKind.BASIC_ACTOR, direction=Direction.BACK)

        actor.move_to(Cell(CubicCoordinate(0, 0, 0)))
        actor.move_to(Cell(CubicCoordinate(3, -1, -2)))

        assert actor.direction == Direction.BACK


class TestPose:
    """Position and rotation for scene collaborators."""

    def test_pose(self):
        geometry = Geometry.from_radius(2.0)
        cell = Cell(CubicCoordinate(1, 0, -1), geometry=geometry)
        actor = Occupant(OccupantKind.BASIC_ACTOR, direction=Direction.BACK)
        actor.move_to(cell)

        position, rotation = pose(actor)

        np.testing.assert_allclose(position, geometry.center_vertex_at(cell.coordinates))
        np.testing.assert_allclose(rotation, geometry.face(Direction.BACK))

    def test_pose_with_other_geometry(self):
        actor = Occupant(OccupantKind.MARKER)
        actor.move_to(Cell(CubicCoordinate(0, 1, -1)))

        position, _ = pose(actor, Geometry.from_radius(1.0))

        np.testing.assert_allclose(position, [0.0, 0.0, np.sqrt(3)])

    def test_pose_unplaced(self):
        with pytest.raises(ValueError):
            pose(Occupant(OccupantKind.MARKER))


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
