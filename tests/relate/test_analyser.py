"""Tests of the turn analyser and its helpers."""

import numpy as np
import pytest

import relatepy as rp
from relatepy.relate.analyser import (
    ExitWatcher,
    SegmentWatcher,
    TurnsAnalyser,
    analyse_each_turn,
)
from relatepy.relate.turn_ordering import sort_turns

Op = rp.TurnOperation


def _seg(multi_index: int, segment_index: int = 0) -> rp.SegmentId:
    return rp.SegmentId(multi_index, rp.NO_RING, segment_index)


class TestSegmentWatcher:
    def test_new_range(self):
        watcher = SegmentWatcher()
        assert watcher.update(_seg(0, 0))
        assert not watcher.update(_seg(0, 0))
        assert not watcher.update(_seg(0, 3))
        assert watcher.update(_seg(1, 0))
        assert watcher.update(_seg(0, 3))


class TestExitWatcher:
    def test_enter(self):
        watcher = ExitWatcher()
        assert watcher.enter(np.array([0, 0]), _seg(0))
        # Already inside
        assert not watcher.enter(np.array([1, 0]), _seg(1))

    def test_exit_without_entry(self):
        watcher = ExitWatcher()
        assert watcher.exit(np.array([0, 0]), _seg(0), Op.UNION)
        assert watcher.exit_operation == Op.NONE

    def test_exit_matching_entry(self):
        watcher = ExitWatcher()
        watcher.enter(np.array([0, 0]), _seg(0, 0))
        assert not watcher.exit(np.array([1, 0]), _seg(0, 2), Op.UNION)
        assert watcher.exit_operation == Op.UNION
        assert np.allclose(watcher.exit_point, [1, 0])

        # The entry is closed
        assert watcher.enter(np.array([2, 0]), _seg(0, 0))

        watcher.reset_detected_exit()
        assert watcher.exit_operation == Op.NONE

    def test_exit_other_component(self):
        watcher = ExitWatcher()
        watcher.enter(np.array([0, 0]), _seg(0))
        # Still inside component 0 of the other geometry
        assert not watcher.exit(np.array([1, 0]), _seg(1), Op.UNION)
        assert watcher.exit_operation == Op.NONE
        assert not watcher.enter(np.array([2, 0]), _seg(1))

    def test_enter_same_component_twice(self):
        watcher = ExitWatcher()
        assert watcher.enter(np.array([0, 0]), _seg(0, 0))
        # E.g. where the component starts in the middle of an overlap
        assert not watcher.enter(np.array([0, 0]), _seg(0, 3))
        assert not watcher.exit(np.array([1, 0]), _seg(0, 1), Op.UNION)
        # A single exit leaves the component
        assert watcher.enter(np.array([2, 0]), _seg(0, 1))

    def test_reset_entries(self):
        watcher = ExitWatcher()
        watcher.enter(np.array([0, 0]), _seg(0))
        watcher.enter(np.array([1, 0]), _seg(1))
        watcher.reset_entries()
        assert watcher.exit(np.array([2, 0]), _seg(0), Op.UNION)
        assert watcher.enter(np.array([3, 0]), _seg(1))

    def test_no_exit_point(self):
        watcher = ExitWatcher()
        with pytest.raises(AssertionError):
            watcher.exit_point


def _analyse(a, b, op_id: int) -> rp.RelationMatrix:
    """Run a single analyser pass along one of the geometries."""
    a = rp.as_linear_geometry(a)
    b = rp.as_linear_geometry(b)
    geometries = (a, b)
    checkers = (rp.BoundaryChecker(a), rp.BoundaryChecker(b))
    other_op_id = (op_id + 1) % 2

    turns = sort_turns(rp.get_turns(a, b), op_id)
    result = rp.RelationMatrix()
    analyse_each_turn(
        result,
        TurnsAnalyser(op_id),
        turns,
        geometries[op_id],
        geometries[other_op_id],
        checkers[op_id],
        checkers[other_op_id],
    )
    return result


class TestTurnsAnalyser:
    def test_no_turns(self):
        result = rp.RelationMatrix()
        geometry = rp.Linestring([(0, 0), (1, 0)])
        checker = rp.BoundaryChecker(geometry)
        analyse_each_turn(
            result, TurnsAnalyser(0), [], geometry, geometry, checker, checker
        )
        assert str(result) == "FFFFFFFF2"

    def test_crossing(self):
        a = [(0, 0), (2, 2)]
        b = [(0, 2), (2, 0)]
        assert str(_analyse(a, b, 0)) == "0F1FF0FF2"
        # The second pass updates the transposed cells
        assert str(_analyse(a, b, 1)) == "0FFFFF102"

    def test_touch_interior(self):
        # Interior of the first linestring meets the boundary of the second
        a = [(0, 0), (2, 0)]
        b = [(1, 0), (1, 1)]
        assert str(_analyse(a, b, 0)) == "F01FF0FF2"
        assert str(_analyse(a, b, 1)) == "F0FFFF102"

    def test_overlap(self):
        a = [(0, 0), (2, 0)]
        b = [(1, 0), (3, 0)]
        assert str(_analyse(a, b, 0)) == "1F10F0FF2"
        assert str(_analyse(a, b, 1)) == "10FFFF102"

    def test_closed_linestring_starting_on_other(self):
        # The first point of a closed linestring is not a point where the scan enters
        # the other geometry from the outside.
        ring = [(0, 0), (4, 0), (4, 4), (0, 4), (0, 0)]
        assert str(_analyse(ring, ring, 0)) == "1FFFFFFF2"

    def test_segment_ending_at_start_of_closed_linestring(self):
        triangle = [(0, 0), (2, 0), (2, 2), (0, 0)]
        diagonal = [(1, 1), (0, 0)]
        result = _analyse(diagonal, triangle, 0)
        assert result.get(rp.Location.INTERIOR, rp.Location.INTERIOR) == "1"
        # The diagonal never leaves the triangle
        assert result.get(rp.Location.INTERIOR, rp.Location.EXTERIOR) == "F"

    def test_fake_exit(self):
        # The second geometry leaves one component of the first in (1, 0) and
        # immediately enters the next one.
        a = rp.MultiLinestring([[(0, 0), (1, 0)], [(1, 0), (2, 0)]])
        b = [(0, 0), (2, 0)]
        assert str(_analyse(a, b, 1)) == "1FFF0FFF2"
        assert str(_analyse(a, b, 0)) == "1FFF0FFF2"

    def test_stops_when_final(self):
        result = rp.RelationMatrix()
        for row in rp.Location:
            for col in rp.Location:
                result.update(row, col, "2" if row == col == 2 else "1")
        assert result.interrupt
        matrix_before = str(result)

        a = rp.Linestring([(0, 0), (2, 2)])
        b = rp.Linestring([(0, 2), (2, 0)])
        analyse_each_turn(
            result,
            TurnsAnalyser(0),
            rp.get_turns(a, b),
            a,
            b,
            rp.BoundaryChecker(a),
            rp.BoundaryChecker(b),
        )
        assert str(result) == matrix_before
