"""State machine that converts an ordered sequence of turns into entries of the
relation matrix.

The turns are scanned along one of the geometries (the "scanned" geometry, index
``op_id`` in the turns), sorted by :func:`~relatepy.relate.turn_ordering.sort_turns`.
While walking along the scanned geometry, the analyser keeps track of whether it is
inside the other geometry:

    * A turn with operation ``INTERSECTION`` means the scanned geometry continues along
      the other geometry; the interiors overlap.
    * A turn with operation ``UNION`` means the scanned geometry leaves the other
      geometry, or passes through it in a point.
    * A turn with operation ``BLOCKED`` is the last point of a component of the scanned
      geometry.

Since the other geometry may consist of several components, and the turns with these
components may be interleaved in the sorted order, entries into the other geometry are
paired with exits per component of the other geometry, see :class:`ExitWatcher`.

The same analyser class is used for both scan directions. For the second direction the
updates of the relation matrix are transposed.

"""

from __future__ import annotations

import logging
from typing import Optional, Sequence

import numpy as np

import relatepy as rp
from relatepy.geometry.boundary import BoundaryQuery
from relatepy.geometry.intersections import TurnMethod, TurnOperation
from relatepy.relate.matrix import Location

# Module level logger
logger = logging.getLogger(__name__)

module_sections = ["relate"]

INTERIOR = Location.INTERIOR
BOUNDARY = Location.BOUNDARY
EXTERIOR = Location.EXTERIOR


class SegmentWatcher:
    """Detect when a scan moves on to a new component of the scanned geometry."""

    def __init__(self) -> None:
        self._seg_id: Optional[rp.SegmentId] = None

    def update(self, seg_id: "rp.SegmentId") -> bool:
        """Register the segment of the current turn.

        Returns:
            ``True`` if this is the first turn, or the segment belongs to another
            component than the segment of the previous turn.

        """
        result = self._seg_id is None or not self._seg_id.same_range(seg_id)
        self._seg_id = seg_id
        return result


class ExitWatcher:
    """Pair entries into and exits from the components of the other geometry.

    Entries are stored together with the segment of the other geometry. An exit closes
    an entry into the same component of the other geometry, and is remembered as a
    pending exit, so that the next turn can decide if the scan really left the other
    geometry or entered it again in the same point.

    """

    def __init__(self) -> None:
        self.exit_operation: TurnOperation = TurnOperation.NONE
        """Operation of the pending exit, ``NONE`` if there is no pending exit."""

        self._exit_point: Optional[np.ndarray] = None
        self._exit_id: Optional[rp.SegmentId] = None
        self._other_entry_points: list[tuple[rp.SegmentId, np.ndarray]] = []

    def enter(self, point: np.ndarray, other_id: "rp.SegmentId") -> bool:
        """Register an entry into a component of the other geometry.

        At most one entry is kept per component of the other geometry. Entering a
        component the scan is already inside, e.g. where the component starts in the
        middle of an overlap, has no effect.

        Parameters:
            point: The entry point.
            other_id: Segment of the other geometry that is entered.

        Returns:
            ``True`` if the scan was outside all components of the other geometry
            before the entry.

        """
        was_outside = len(self._other_entry_points) == 0
        if not any(
            entry_id.same_range(other_id) for entry_id, _ in self._other_entry_points
        ):
            self._other_entry_points.append((other_id, point))
        return was_outside

    def exit(
        self,
        point: np.ndarray,
        other_id: "rp.SegmentId",
        exit_op: TurnOperation,
    ) -> bool:
        """Register a (possible) exit from a component of the other geometry.

        If there is an entry into the same component, it is closed and the exit becomes
        the pending exit. If there are entries, but none into this component, nothing
        is closed: the scan is still inside another component.

        Parameters:
            point: The exit point.
            other_id: Segment of the other geometry.
            exit_op: Operation of the turn, ``UNION`` or ``BLOCKED``.

        Returns:
            ``True`` if the scan was outside all components of the other geometry
            before the exit.

        """
        if len(self._other_entry_points) == 0:
            return True

        for ind, (entry_id, _) in enumerate(self._other_entry_points):
            if entry_id.same_range(other_id):
                self.exit_operation = exit_op
                self._exit_point = point
                self._exit_id = other_id
                del self._other_entry_points[ind]
                break

        return False

    @property
    def exit_point(self) -> np.ndarray:
        """Point of the pending exit."""
        assert self.exit_operation != TurnOperation.NONE
        assert self._exit_point is not None
        return self._exit_point

    def reset_detected_exit(self) -> None:
        """Forget the pending exit."""
        self.exit_operation = TurnOperation.NONE

    def reset_entries(self) -> None:
        """Forget all entries.

        Used when the scan moves on to a new component. A closed component has no end
        turn, and may thus leave an entry open.

        """
        self._other_entry_points = []


class TurnsAnalyser:
    """Analyse the turns along one of the geometries.

    An analyser is used for a single pass over the turns: call :meth:`apply` for each
    turn in order, followed by :meth:`finish`. See :func:`analyse_each_turn`.

    Parameters:
        op_id: Index (0 or 1) of the scanned geometry in the turns. If 1, updates of
            the relation matrix are transposed.
        tol: Tolerance for point equality.

    """

    def __init__(self, op_id: int, tol: Optional[float] = None) -> None:
        if tol is None:
            tol = rp.geometry_property_checks.default_tolerance()
        self.op_id: int = op_id
        self.other_op_id: int = (op_id + 1) % 2
        self.transpose: bool = op_id != 0
        self.tol: float = tol

        self._exit_watcher = ExitWatcher()
        self._seg_watcher = SegmentWatcher()
        self._last_union = False
        # The last turn that was acted on. Turns with operation NONE are skipped, so
        # this is not necessarily the turn preceding the current one in the sequence.
        self._last_turn: Optional[rp.Turn] = None

    def apply(
        self,
        result: "rp.RelationMatrix",
        turn: "rp.Turn",
        geometry: "rp.LinearGeometry",
        other_geometry: "rp.LinearGeometry",
        boundary_checker: "rp.BoundaryChecker",
        other_boundary_checker: "rp.BoundaryChecker",
    ) -> None:
        """Process the next turn.

        Parameters:
            result: The relation matrix to be updated.
            turn: The turn.
            geometry: The scanned geometry.
            other_geometry: The other geometry.
            boundary_checker: Boundary checker of the scanned geometry.
            other_boundary_checker: Boundary checker of the other geometry.

        """
        op = turn.operations[self.op_id].operation

        if op not in (
            TurnOperation.UNION,
            TurnOperation.INTERSECTION,
            TurnOperation.BLOCKED,
        ):
            return

        seg_id = turn.operations[self.op_id].seg_id

        first_in_range = self._seg_watcher.update(seg_id)
        if first_in_range:
            self._exit_watcher.reset_entries()

        # Handle a possible exit from the previous turn
        fake_enter_detected = False
        if self._exit_watcher.exit_operation == TurnOperation.UNION:
            if not rp.geometry_property_checks.points_equal(
                turn.point, self._exit_watcher.exit_point, self.tol
            ):
                # Real exit: the scan left the other geometry, and did not come back
                # in the same point.
                self._exit_watcher.reset_detected_exit()
                self._update(result, INTERIOR, EXTERIOR, "1")
            elif op == TurnOperation.INTERSECTION:
                # Fake exit: the scan enters the other geometry again in the exit
                # point.
                self._exit_watcher.reset_detected_exit()
                fake_enter_detected = True

        if first_in_range and not fake_enter_detected and self._last_union:
            # The previous component ended outside the other geometry, after its last
            # turn.
            assert self._last_turn is not None
            prev_seg_id = self._last_turn.operations[self.op_id].seg_id
            prev_back = geometry.sub_geometry(prev_seg_id).back()
            if boundary_checker.is_endpoint_boundary(prev_back, BoundaryQuery.BACK):
                self._update(result, BOUNDARY, EXTERIOR, "0")

        self._last_union = op == TurnOperation.UNION
        self._last_turn = turn

        if op == TurnOperation.INTERSECTION:
            self._handle_entry(
                result,
                turn,
                geometry,
                boundary_checker,
                other_boundary_checker,
                first_in_range,
                fake_enter_detected,
            )
        else:
            self._handle_exit(
                result,
                turn,
                geometry,
                boundary_checker,
                other_boundary_checker,
                first_in_range,
            )

    def _handle_entry(
        self,
        result: "rp.RelationMatrix",
        turn: "rp.Turn",
        geometry: "rp.LinearGeometry",
        boundary_checker: "rp.BoundaryChecker",
        other_boundary_checker: "rp.BoundaryChecker",
        first_in_range: bool,
        fake_enter_detected: bool,
    ) -> None:
        this_info = turn.operations[self.op_id]
        other_id = turn.operations[self.other_op_id].seg_id

        was_outside = self._exit_watcher.enter(turn.point, other_id)

        # The interiors overlap
        self._update(result, INTERIOR, INTERIOR, "1")

        if boundary_checker.is_boundary(
            turn.point, this_info.seg_id, BoundaryQuery.FRONT
        ):
            # Going inside on a boundary point
            self._update_boundary_contact(result, turn, other_boundary_checker)
        else:
            # Going inside on a non-boundary point. There is nothing in front of the
            # first point of a component, thus the scan cannot have come from the
            # outside in that case.
            at_front = this_info.seg_id.segment_index == 0 and this_info.fraction == 0
            if was_outside and not fake_enter_detected and not at_front:
                self._update(result, INTERIOR, EXTERIOR, "1")

                if first_in_range:
                    # The first point of the component is outside
                    self._update_front_boundary(
                        result, this_info.seg_id, geometry, boundary_checker
                    )

    def _handle_exit(
        self,
        result: "rp.RelationMatrix",
        turn: "rp.Turn",
        geometry: "rp.LinearGeometry",
        boundary_checker: "rp.BoundaryChecker",
        other_boundary_checker: "rp.BoundaryChecker",
        first_in_range: bool,
    ) -> None:
        this_info = turn.operations[self.op_id]
        other_id = turn.operations[self.other_op_id].seg_id
        op_blocked = this_info.operation == TurnOperation.BLOCKED

        was_outside = self._exit_watcher.exit(
            turn.point, other_id, this_info.operation
        )

        if not was_outside:
            # Inside, possibly going out right now. The last point of a component
            # may be a boundary point.
            if op_blocked and boundary_checker.is_endpoint_boundary(
                turn.point, BoundaryQuery.BACK
            ):
                self._update_boundary_contact(result, turn, other_boundary_checker)
            return

        # The scan is outside the other geometry, which is only touched in this point
        self._update(result, INTERIOR, EXTERIOR, "1")

        if turn.method == TurnMethod.CROSSES:
            # Transversal crossing in the interior of both segments.
            self._update(result, INTERIOR, INTERIOR, "0")
            if first_in_range:
                self._update_front_boundary(
                    result, this_info.seg_id, geometry, boundary_checker
                )
            return

        if op_blocked:
            this_b = boundary_checker.is_endpoint_boundary(
                turn.point, BoundaryQuery.BACK
            )
        else:
            this_b = boundary_checker.is_boundary(
                turn.point, this_info.seg_id, BoundaryQuery.FRONT
            )

        if this_b:
            self._update_boundary_contact(result, turn, other_boundary_checker)

            if first_in_range and op_blocked:
                # The first turn is at the last point, thus the first point is
                # outside.
                self._update_front_boundary(
                    result, this_info.seg_id, geometry, boundary_checker
                )
        else:
            if self._other_is_boundary(turn, other_boundary_checker):
                # Interior point touching the boundary of the other geometry
                self._update(result, INTERIOR, BOUNDARY, "0")
            else:
                self._update(result, INTERIOR, INTERIOR, "0")

            if first_in_range:
                self._update_front_boundary(
                    result, this_info.seg_id, geometry, boundary_checker
                )

    def finish(
        self,
        result: "rp.RelationMatrix",
        geometry: "rp.LinearGeometry",
        boundary_checker: "rp.BoundaryChecker",
    ) -> None:
        """Process the end of the turn sequence.

        If the scan left the other geometry after the last turn, the scanned geometry
        continues in the exterior of the other geometry.

        Parameters:
            result: The relation matrix to be updated.
            geometry: The scanned geometry.
            boundary_checker: Boundary checker of the scanned geometry.

        """
        if self._exit_watcher.exit_operation == TurnOperation.UNION or self._last_union:
            self._update(result, INTERIOR, EXTERIOR, "1")

            assert self._last_turn is not None
            prev_seg_id = self._last_turn.operations[self.op_id].seg_id
            prev_back = geometry.sub_geometry(prev_seg_id).back()
            if boundary_checker.is_endpoint_boundary(prev_back, BoundaryQuery.BACK):
                self._update(result, BOUNDARY, EXTERIOR, "0")

    def _other_is_boundary(
        self, turn: "rp.Turn", other_boundary_checker: "rp.BoundaryChecker"
    ) -> bool:
        other_info = turn.operations[self.other_op_id]
        if other_info.operation == TurnOperation.BLOCKED:
            return other_boundary_checker.is_endpoint_boundary(
                turn.point, BoundaryQuery.BACK
            )
        return other_boundary_checker.is_boundary(
            turn.point, other_info.seg_id, BoundaryQuery.ANY
        )

    def _update_boundary_contact(
        self,
        result: "rp.RelationMatrix",
        turn: "rp.Turn",
        other_boundary_checker: "rp.BoundaryChecker",
    ) -> None:
        """Update the matrix for a boundary point of the scanned geometry in contact
        with the other geometry."""
        if self._other_is_boundary(turn, other_boundary_checker):
            self._update(result, BOUNDARY, BOUNDARY, "0")
        else:
            self._update(result, BOUNDARY, INTERIOR, "0")

    def _update_front_boundary(
        self,
        result: "rp.RelationMatrix",
        seg_id: "rp.SegmentId",
        geometry: "rp.LinearGeometry",
        boundary_checker: "rp.BoundaryChecker",
    ) -> None:
        """Update the matrix for a first point of a component known to be outside the
        other geometry."""
        front = geometry.sub_geometry(seg_id).front()
        if boundary_checker.is_endpoint_boundary(front, BoundaryQuery.FRONT):
            self._update(result, BOUNDARY, EXTERIOR, "0")

    def _update(
        self, result: "rp.RelationMatrix", row: Location, col: Location, code: str
    ) -> None:
        result.update(row, col, code, self.transpose)


@rp.time_logger(sections=module_sections)
def analyse_each_turn(
    result: "rp.RelationMatrix",
    analyser: TurnsAnalyser,
    turns: Sequence["rp.Turn"],
    geometry: "rp.LinearGeometry",
    other_geometry: "rp.LinearGeometry",
    boundary_checker: "rp.BoundaryChecker",
    other_boundary_checker: "rp.BoundaryChecker",
) -> None:
    """Run an analyser over a sequence of turns.

    The scan stops as soon as the relation matrix is final.

    Parameters:
        result: The relation matrix to be updated.
        analyser: The analyser. Should be fresh, and is consumed by the call.
        turns: The turns, sorted along the scanned geometry.
        geometry: The scanned geometry.
        other_geometry: The other geometry.
        boundary_checker: Boundary checker of the scanned geometry.
        other_boundary_checker: Boundary checker of the other geometry.

    """
    if len(turns) == 0:
        return

    for turn in turns:
        analyser.apply(
            result,
            turn,
            geometry,
            other_geometry,
            boundary_checker,
            other_boundary_checker,
        )
        if result.interrupt:
            logger.debug(f"Scan along geometry {analyser.op_id} interrupted")
            return

    analyser.finish(result, geometry, boundary_checker)
