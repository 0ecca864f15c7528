"""Boundary of linear geometries.

The boundary of an open linestring consists of its two endpoints, while a closed
linestring has no boundary. For a multi-linestring the mod-2 rule applies: a point is on
the boundary if it is an endpoint of an odd number of the (non-closed) components.

"""

from __future__ import annotations

from enum import Enum
from typing import Optional

import numpy as np

import relatepy as rp


class BoundaryQuery(Enum):
    """Which end(s) of a linestring a boundary query refers to."""

    FRONT = 0
    BACK = 1
    ANY = 2


class BoundaryChecker:
    """Decide whether points are boundary points of a linear geometry.

    Parameters:
        geometry: The linear geometry.
        tol: Tolerance for point equality.

    """

    def __init__(
        self, geometry: "rp.GeometryLike", tol: Optional[float] = None
    ) -> None:
        if tol is None:
            tol = rp.geometry_property_checks.default_tolerance()
        self.tol: float = tol
        self.geometry: rp.LinearGeometry = rp.as_linear_geometry(geometry, tol)

        # Collect the endpoints of all components that can contribute to the
        # boundary. Components with a single point, and closed components, have no
        # boundary.
        endpoints = []
        for linestring in self.geometry.components():
            if linestring.num_points < 2:
                continue
            if rp.geometry_property_checks.points_equal(
                linestring.front(), linestring.back(), tol
            ):
                continue
            endpoints += [linestring.front(), linestring.back()]

        if len(endpoints) > 0:
            self._endpoints = np.vstack(endpoints).T
        else:
            self._endpoints = np.zeros((2, 0))

        self.has_boundary: bool = any(
            self._odd_count(self._endpoints[:, i])
            for i in range(self._endpoints.shape[1])
        )
        """Whether the geometry has any boundary points."""

    def _odd_count(self, point: np.ndarray) -> bool:
        count = rp.array_operations.count_coinciding_points(
            point, self._endpoints, self.tol
        )
        return count % 2 == 1

    def is_endpoint_boundary(
        self, point: np.ndarray, which: BoundaryQuery = BoundaryQuery.ANY
    ) -> bool:
        """Check if a point, known to be an endpoint of a component, is a boundary
        point of the geometry.

        For a single linestring, ``which`` restricts the test to the front or back
        point. For a multi-linestring the mod-2 rule is applied, and ``which`` has no
        effect.

        Parameters:
            point: ``shape=(2,)``

                The point.
            which: The end(s) of the linestring to compare with.

        Returns:
            ``True`` if the point is a boundary point.

        """
        if not self.has_boundary:
            return False

        if isinstance(self.geometry, rp.Linestring):
            ls = self.geometry
            at_front = which != BoundaryQuery.BACK and (
                rp.geometry_property_checks.points_equal(point, ls.front(), self.tol)
            )
            at_back = which != BoundaryQuery.FRONT and (
                rp.geometry_property_checks.points_equal(point, ls.back(), self.tol)
            )
            return at_front or at_back

        return self._odd_count(point)

    def is_boundary(
        self,
        point: np.ndarray,
        seg_id: "rp.SegmentId",
        which: BoundaryQuery = BoundaryQuery.ANY,
    ) -> bool:
        """Check if a point on a given segment is a boundary point of the geometry.

        The point must coincide with the front of the component and lie on its first
        segment (``FRONT``), or coincide with the back and lie on its last segment
        (``BACK``), or either of these (``ANY``). In addition, the point must be a
        boundary point of the geometry as a whole.

        Parameters:
            point: ``shape=(2,)``

                The point.
            seg_id: Identifier of the segment the point lies on.
            which: The end(s) of the component to compare with.

        Returns:
            ``True`` if the point is a boundary point.

        """
        if not self.has_boundary:
            return False

        linestring = self.geometry.sub_geometry(seg_id)
        if linestring.num_points < 2:
            return False

        at_front = (
            which != BoundaryQuery.BACK
            and seg_id.segment_index == 0
            and rp.geometry_property_checks.points_equal(
                point, linestring.front(), self.tol
            )
        )
        at_back = (
            which != BoundaryQuery.FRONT
            and seg_id.segment_index == linestring.num_segments - 1
            and rp.geometry_property_checks.points_equal(
                point, linestring.back(), self.tol
            )
        )
        if not (at_front or at_back):
            return False

        return self.is_endpoint_boundary(point, which)
