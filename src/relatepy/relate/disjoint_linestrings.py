"""Relation of components that take part in no turns.

A component of a linear geometry that meets the other geometry nowhere is either a
point, which can be located relative to the other geometry directly, or a curve, which
lies entirely in the exterior of the other geometry. In both cases the contribution to
the relation matrix can be determined without analysing turns.

"""

from __future__ import annotations

import logging
from typing import Callable, Optional, Sequence

import numpy as np

import relatepy as rp
from relatepy.relate.matrix import Location

# Module level logger
logger = logging.getLogger(__name__)

module_sections = ["relate"]


def for_each_disjoint_linestring(
    turns: Sequence["rp.Turn"],
    op_id: int,
    geometry: "rp.LinearGeometry",
    predicate: Callable[["rp.Linestring"], bool],
) -> bool:
    """Call a predicate for all components of a geometry that take part in no turns.

    The iteration stops when the predicate returns ``False``.

    Parameters:
        turns: All turns between the geometry and the other geometry.
        op_id: Index of the geometry in the turns (0 or 1).
        geometry: The geometry.
        predicate: Function called with each disjoint component. Should return
            ``True`` to continue the iteration.

    Returns:
        ``True`` if at least one disjoint component was found.

    """
    components = geometry.components()
    detected = np.zeros(len(components), dtype=bool)
    for turn in turns:
        multi_index = turn.operations[op_id].seg_id.multi_index
        assert 0 <= multi_index < len(components)
        detected[multi_index] = True

    found = False
    for ind in np.where(np.logical_not(detected))[0]:
        found = True
        if not predicate(components[ind]):
            break
    return found


class DisjointLinestringScanner:
    """Update the relation matrix for components that take part in no turns.

    Instances are used as predicates in :func:`for_each_disjoint_linestring`.

    Parameters:
        result: The relation matrix to be updated.
        boundary_checker: Boundary checker of the geometry the components belong to.
        other_geometry: The other geometry.
        transpose: If True, the components belong to the second geometry of the
            relation matrix.
        tol: Tolerance for point equality.

    """

    def __init__(
        self,
        result: "rp.RelationMatrix",
        boundary_checker: "rp.BoundaryChecker",
        other_geometry: "rp.LinearGeometry",
        transpose: bool = False,
        tol: Optional[float] = None,
    ) -> None:
        self.result = result
        self.boundary_checker = boundary_checker
        self.other_geometry = other_geometry
        self.transpose = transpose
        self.tol = tol

        # Bit mask of point locations found so far: 1 for inside, 2 for boundary and
        # 4 for outside.
        self._detected_mask_point = 0
        self._detected_open_boundary = False

    def __call__(self, linestring: "rp.Linestring") -> bool:
        kind = rp.check_linestring_kind(linestring, self.tol)

        if kind == rp.LinestringKind.POINT:
            if self._detected_mask_point != 7:
                location = rp.point_in_linear_geometry(
                    linestring.front(), self.other_geometry, self.tol
                )
                if location == rp.PointLocation.INSIDE:
                    self._update(Location.INTERIOR, Location.INTERIOR, "0")
                    self._detected_mask_point |= 1
                elif location == rp.PointLocation.BOUNDARY:
                    self._update(Location.INTERIOR, Location.BOUNDARY, "0")
                    self._detected_mask_point |= 2
                else:
                    self._update(Location.INTERIOR, Location.EXTERIOR, "0")
                    self._detected_mask_point |= 4

        elif kind in (rp.LinestringKind.OPEN, rp.LinestringKind.CLOSED):
            if not self._detected_open_boundary:
                self._update(Location.INTERIOR, Location.EXTERIOR, "1")

                # A closed component may still have boundary points in a
                # multi-linestring.
                front_b = self.boundary_checker.is_endpoint_boundary(
                    linestring.front(), rp.BoundaryQuery.FRONT
                )
                back_b = self.boundary_checker.is_endpoint_boundary(
                    linestring.back(), rp.BoundaryQuery.BACK
                )
                if front_b or back_b:
                    self._update(Location.BOUNDARY, Location.EXTERIOR, "0")
                    self._detected_open_boundary = True

        all_detected = self._detected_mask_point == 7 and self._detected_open_boundary
        return not all_detected and not self.result.interrupt

    def _update(self, row: Location, col: Location, code: str) -> None:
        self.result.update(row, col, code, self.transpose)


@rp.time_logger(sections=module_sections)
def scan_disjoint_linestrings(
    result: "rp.RelationMatrix",
    turns: Sequence["rp.Turn"],
    op_id: int,
    geometry: "rp.LinearGeometry",
    other_geometry: "rp.LinearGeometry",
    boundary_checker: "rp.BoundaryChecker",
    tol: Optional[float] = None,
) -> bool:
    """Update the relation matrix for all components of a geometry that take part in
    no turns.

    Parameters:
        result: The relation matrix.
        turns: All turns between the two geometries.
        op_id: Index of the geometry in the turns. If 1, the matrix is updated with
            the roles of the geometries interchanged.
        geometry: The geometry whose components are scanned.
        other_geometry: The other geometry.
        boundary_checker: Boundary checker of ``geometry``.
        tol: Tolerance for point equality.

    Returns:
        ``True`` if at least one disjoint component was found.

    """
    scanner = DisjointLinestringScanner(
        result, boundary_checker, other_geometry, transpose=op_id != 0, tol=tol
    )
    found = for_each_disjoint_linestring(turns, op_id, geometry, scanner)
    if found:
        logger.debug(f"Found disjoint components in geometry {op_id}")
    return found
