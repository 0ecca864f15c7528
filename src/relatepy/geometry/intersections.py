"""Module with functions for computing intersections between linear geometries.

The main function is :func:`get_turns`, which computes all intersection events
(turns) between two linear geometries. A turn records the point where the geometries
meet, how they meet (:class:`TurnMethod`), and for each of the two geometries what
happens immediately after the point when walking along it (:class:`TurnOperation`):

    ``BLOCKED``: The component ends in the point.
    ``INTERSECTION``: The component continues along the other geometry.
    ``UNION``: The component continues away from the other geometry.
    ``NONE``: The turn carries no information for this geometry.

Points where both geometries arrive along each other and also continue along each
other carry no topological information, and are not reported.

"""

from __future__ import annotations

import logging
from enum import Enum
from typing import NamedTuple, Optional

import numpy as np

import relatepy as rp

# Module level logger
logger = logging.getLogger(__name__)


class TurnOperation(Enum):
    """What happens to one of the geometries immediately after a turn point."""

    NONE = 0
    UNION = 1
    INTERSECTION = 2
    BLOCKED = 3


class TurnMethod(Enum):
    """How two geometries meet in a turn point."""

    NONE = 0
    CROSSES = 1
    """Transversal crossing, the point is in the interior of both segments."""
    TOUCH = 2
    """The point is a vertex of both geometries."""
    TOUCH_INTERIOR = 3
    """The point is a vertex of one geometry and in the interior of a segment of the
    other."""
    EQUAL = 4
    """The geometries run along each other, and the point is a vertex of both."""
    COLLINEAR = 5
    """The geometries run along each other."""


class TurnInfo(NamedTuple):
    """Information on a turn, seen from one of the geometries."""

    operation: TurnOperation
    """What happens to the geometry after the turn point."""
    seg_id: rp.SegmentId
    """Segment the turn point lies on."""
    fraction: float
    """Position of the turn point along the segment, in ``[0, 1]``."""


class Turn(NamedTuple):
    """An intersection event between a segment of one geometry and a segment of
    another."""

    point: np.ndarray
    """Coordinates of the turn point, ``shape=(2,)``."""
    method: TurnMethod
    """How the geometries meet."""
    operations: tuple[TurnInfo, TurnInfo]
    """Information for the first (index 0) and second (index 1) geometry."""


def segments_2d(
    start_1: np.ndarray,
    end_1: np.ndarray,
    start_2: np.ndarray,
    end_2: np.ndarray,
    tol: float = 1e-8,
) -> Optional[np.ndarray]:
    """Check if two line segments, defined by their start- and endpoints, intersect.

    If the segments are (almost) parallel and overlapping, the overlapping segment is
    returned instead of an intersection point.

    Example:
        >>> segments_2d([0, 0], [1, 1], [0, 1], [1, 0])
        array([[0.5],
               [0.5]])

        >>> segments_2d([0, 0], [1, 1], [0, 0], [2, 2])
        array([[0., 1.],
               [0., 1.]])

        >>> segments_2d([0, 0], [1, 0], [0, 1], [1, 1]) is None
        True

    Parameters:
        start_1: ``shape=(2,)``

            Coordinates of start point for first segment.
        end_1: ``shape=(2,)``

            Coordinates of end point for first segment.
        start_2: ``shape=(2,)``

            Coordinates of start point for second segment.
        end_2: ``shape=(2,)``

            Coordinates of end point for second segment.
        tol: ``default=1e-8``

            Tolerance for detecting parallel segments, and for accepting intersections
            close to the ends of the segments.

    Raises:
        ValueError: If the start and endpoints of a segment are the same.

    Returns:
        Coordinates of intersection point, or the endpoints of the overlapping segment.
        In the case of an overlap, the first point (column) will be closest to
        ``start_1``. Shape is ``(2, np)``, where ``np`` is ``1`` for a point
        intersection, or ``2`` for an overlap. If the segments do not intersect,
        ``None`` is returned.

    """
    start_1 = np.asarray(start_1).astype(float)
    end_1 = np.asarray(end_1).astype(float)
    start_2 = np.asarray(start_2).astype(float)
    end_2 = np.asarray(end_2).astype(float)

    # Vectors along first and second segment
    d_1 = end_1 - start_1
    d_2 = end_2 - start_2

    length_1 = np.sqrt(np.sum(d_1 * d_1))
    length_2 = np.sqrt(np.sum(d_2 * d_2))
    if length_1 == 0 or length_2 == 0:
        raise ValueError("Start and endpoint of a segment should be different")

    # Vector between the start points
    d_s = start_2 - start_1

    # An intersection point is characterized by
    #   start_1 + d_1 * t_1 = start_2 + d_2 * t_2
    # The system is solvable unless the segments are parallel, which is checked by the
    # determinant, relative to the segment lengths.
    discr = d_1[0] * (-d_2[1]) - d_1[1] * (-d_2[0])

    if np.abs(discr) < tol * length_1 * length_2:
        # Cross product between segment 1 and the line between the start points
        start_cross_line = d_s[0] * d_1[1] - d_s[1] * d_1[0]
        if np.abs(start_cross_line) >= tol * max(length_1, length_2):
            logger.debug("Segments are parallel, but not colinear")
            return None

        # The segments are colinear. Parametrize segment 2 in terms of segment 1.
        t_start_2 = np.dot(start_2 - start_1, d_1) / length_1**2
        t_end_2 = np.dot(end_2 - start_1, d_1) / length_1**2
        rel_tol = tol / length_1

        if max(t_start_2, t_end_2) < -rel_tol or min(t_start_2, t_end_2) > 1 + rel_tol:
            logger.debug("Colinear segments are not overlapping")
            return None

        t_min = max(min(t_start_2, t_end_2), 0)
        t_max = min(max(t_start_2, t_end_2), 1)

        if t_max - t_min < rel_tol:
            # The segments share a single point, which must be an endpoint
            return (start_1 + d_1 * t_min).reshape((-1, 1))

        p_1 = start_1 + d_1 * t_min
        p_2 = start_1 + d_1 * t_max
        return np.array([[p_1[0], p_2[0]], [p_1[1], p_2[1]]])

    # Solve linear system using Cramer's rule
    t_1 = (d_s[0] * (-d_2[1]) - d_s[1] * (-d_2[0])) / discr
    t_2 = (d_1[0] * d_s[1] - d_1[1] * d_s[0]) / discr

    # The intersection lies on both segments if both t_1 and t_2 are on the unit
    # interval, up to the tolerance measured along the segments.
    tol_1 = tol / length_1
    tol_2 = tol / length_2
    if -tol_1 <= t_1 <= 1 + tol_1 and -tol_2 <= t_2 <= 1 + tol_2:
        isect = start_1 + min(max(t_1, 0), 1) * d_1
        return isect.reshape((-1, 1))

    return None


class _Visit(NamedTuple):
    """A position of a point along a linestring."""

    segment_index: int
    fraction: float
    is_first: bool
    is_last: bool

    def at_vertex(self) -> bool:
        return self.fraction == 0.0 or self.is_last


def _visits(linestring: rp.Linestring, p: np.ndarray, tol: float) -> list[_Visit]:
    """Find all positions of a point along a linestring.

    A point at a vertex is assigned to the segment starting in the vertex, except for
    the last point of an open linestring. The last point of a closed linestring is not
    an end, and is only visited as the first point.

    """
    checks = rp.geometry_property_checks
    closed = rp.check_linestring_kind(linestring, tol) == rp.LinestringKind.CLOSED
    visits = []
    last = linestring.num_segments - 1
    for si in range(linestring.num_segments):
        start, end = linestring.segment(si)
        if not checks.point_on_segment(p, start, end, tol):
            continue
        if checks.points_equal(p, end, tol):
            if si == last and not closed:
                visits.append(_Visit(si, 1.0, False, True))
            # Otherwise the point is the start of the next segment
            continue
        if checks.points_equal(p, start, tol):
            t = 0.0
        else:
            t = checks.segment_fraction(p, start, end)
        visits.append(_Visit(si, t, si == 0 and t == 0.0, False))
    return visits


def _segment_direction(linestring: rp.Linestring, ind: int) -> np.ndarray:
    start, end = linestring.segment(ind)
    d = end - start
    return d / np.linalg.norm(d)


def _runs_along(
    p: np.ndarray, direction: np.ndarray, other: rp.Linestring, tol: float
) -> bool:
    """Check if a linestring, leaving the point p in the given direction, runs along
    another linestring."""
    for si in range(other.num_segments):
        start, end = other.segment(si)
        if not rp.geometry_property_checks.point_on_segment(p, start, end, tol):
            continue
        d = end - start
        cross = direction[0] * d[1] - direction[1] * d[0]
        if np.abs(cross) >= tol * np.linalg.norm(d):
            continue
        # The other segment should extend beyond p in the given direction
        if max(np.dot(start - p, direction), np.dot(end - p, direction)) > tol:
            return True
    return False


def _operation(
    linestring: rp.Linestring,
    visit: _Visit,
    other: rp.Linestring,
    p: np.ndarray,
    tol: float,
) -> TurnOperation:
    """What happens to the linestring immediately after the visited point."""
    if visit.is_last:
        return TurnOperation.BLOCKED
    forward = _segment_direction(linestring, visit.segment_index)
    if _runs_along(p, forward, other, tol):
        return TurnOperation.INTERSECTION
    return TurnOperation.UNION


def _arrives_along(
    linestring: rp.Linestring,
    visit: _Visit,
    other: rp.Linestring,
    p: np.ndarray,
    tol: float,
) -> bool:
    """Check if the linestring arrives at the visited point along the other
    linestring."""
    if visit.is_first:
        return False
    if visit.fraction > 0:
        backward = -_segment_direction(linestring, visit.segment_index)
    else:
        backward = -_segment_direction(linestring, visit.segment_index - 1)
    return _runs_along(p, backward, other, tol)


def _turn_method(
    visit_a: _Visit, visit_b: _Visit, along: bool
) -> TurnMethod:
    a_vertex = visit_a.at_vertex()
    b_vertex = visit_b.at_vertex()
    if along:
        if a_vertex and b_vertex:
            return TurnMethod.EQUAL
        return TurnMethod.COLLINEAR
    if not a_vertex and not b_vertex:
        return TurnMethod.CROSSES
    if a_vertex and b_vertex:
        return TurnMethod.TOUCH
    return TurnMethod.TOUCH_INTERIOR


def _segment_boxes(linestring: rp.Linestring, tol: float) -> tuple[np.ndarray, ...]:
    """Axis aligned bounding boxes of the segments of a linestring, extended by the
    tolerance."""
    start = linestring.pts[:, :-1]
    end = linestring.pts[:, 1:]
    low = np.minimum(start, end) - tol
    high = np.maximum(start, end) + tol
    return low[0], high[0], low[1], high[1]


def _contact_points(
    ls_a: rp.Linestring, ls_b: rp.Linestring, tol: float
) -> np.ndarray:
    """Find all points where two linestrings meet, including the ends of overlapping
    parts. The points are unique up to the tolerance."""
    x_min_a, x_max_a, y_min_a, y_max_a = _segment_boxes(ls_a, tol)
    x_min_b, x_max_b, y_min_b, y_max_b = _segment_boxes(ls_b, tol)

    isect = []
    for sa in range(ls_a.num_segments):
        # Segments of b with a bounding box overlapping that of segment sa
        candidates = np.where(
            np.logical_and.reduce(
                (
                    x_min_b <= x_max_a[sa],
                    x_max_b >= x_min_a[sa],
                    y_min_b <= y_max_a[sa],
                    y_max_b >= y_min_a[sa],
                )
            )
        )[0]
        start_a, end_a = ls_a.segment(sa)
        for sb in candidates:
            start_b, end_b = ls_b.segment(sb)
            p = segments_2d(start_a, end_a, start_b, end_b, tol)
            if p is not None:
                isect.append(p)

    if len(isect) == 0:
        return np.zeros((2, 0))
    points, _, _ = rp.array_operations.uniquify_point_set(np.hstack(isect), tol)
    return points


@rp.time_logger(sections=["geometry"])
def get_turns(
    geometry_a: "rp.GeometryLike",
    geometry_b: "rp.GeometryLike",
    tol: Optional[float] = None,
) -> list[Turn]:
    """Compute the intersection events (turns) between two linear geometries.

    One turn is produced for each point where the geometries meet, and for each pair
    of positions of the point along the involved components. A point visited twice by
    a self-touching component thus gives rise to several turns. The start point of a
    closed component is visited once, and its operation describes the first segment.
    Points inside stretches where the geometries run along each other are not
    reported.

    Components with less than two points never take part in turns.

    Parameters:
        geometry_a: The first geometry. Its information is stored in index 0 of
            :attr:`Turn.operations`.
        geometry_b: The second geometry, stored in index 1.
        tol: Tolerance for point equality and parallel segments.

    Returns:
        List of turns, in no particular order.

    """
    if tol is None:
        tol = rp.geometry_property_checks.default_tolerance()
    geometry_a = rp.as_linear_geometry(geometry_a, tol)
    geometry_b = rp.as_linear_geometry(geometry_b, tol)

    turns: list[Turn] = []

    for ia, ls_a in enumerate(geometry_a.components()):
        if ls_a.num_points < 2:
            continue
        for ib, ls_b in enumerate(geometry_b.components()):
            if ls_b.num_points < 2:
                continue

            points = _contact_points(ls_a, ls_b, tol)
            for pi in range(points.shape[1]):
                p = points[:, pi]
                visits_a = _visits(ls_a, p, tol)
                visits_b = _visits(ls_b, p, tol)
                if len(visits_a) == 0 or len(visits_b) == 0:
                    logger.debug(f"Contact point {p} not found on both linestrings")
                    continue

                for va in visits_a:
                    op_a = _operation(ls_a, va, ls_b, p, tol)
                    back_a = _arrives_along(ls_a, va, ls_b, p, tol)
                    for vb in visits_b:
                        op_b = _operation(ls_b, vb, ls_a, p, tol)
                        back_b = _arrives_along(ls_b, vb, ls_a, p, tol)

                        continuation = (
                            back_a
                            and back_b
                            and op_a == TurnOperation.INTERSECTION
                            and op_b == TurnOperation.INTERSECTION
                        )
                        if continuation:
                            continue

                        along = (
                            back_a
                            or back_b
                            or op_a == TurnOperation.INTERSECTION
                            or op_b == TurnOperation.INTERSECTION
                        )
                        info_a = TurnInfo(
                            op_a,
                            rp.SegmentId(ia, rp.NO_RING, va.segment_index),
                            va.fraction,
                        )
                        info_b = TurnInfo(
                            op_b,
                            rp.SegmentId(ib, rp.NO_RING, vb.segment_index),
                            vb.fraction,
                        )
                        turns.append(
                            Turn(p, _turn_method(va, vb, along), (info_a, info_b))
                        )

    logger.debug(f"Found {len(turns)} turns")
    return turns
