"""This module contains functions for (boolean) inquiries about points, and their
relation to segments and linear geometries."""

from __future__ import annotations

from enum import IntEnum
from typing import Optional

import numpy as np

import relatepy as rp


class PointLocation(IntEnum):
    """Location of a point relative to a geometry.

    The values are ordered so that a larger value means deeper inside the geometry.

    """

    OUTSIDE = -1
    BOUNDARY = 0
    INSIDE = 1


def default_tolerance() -> float:
    """Tolerance used by geometric inquiries when none is given.

    The value is read from the ``tol`` keyword in the ``[geometry]`` section of
    relatepy.cfg, if present.

    Returns:
        The tolerance.

    """
    try:
        return float(rp.config["geometry"]["tol"])
    except KeyError:
        return rp.GEOMETRY_TOL


def points_equal(p: np.ndarray, q: np.ndarray, tol: Optional[float] = None) -> bool:
    """Check if two points are equal up to a tolerance.

    The comparison is made in the maximum norm.

    Parameters:
        p: ``shape=(2,)``

            First point.
        q: ``shape=(2,)``

            Second point.
        tol: Absolute tolerance used in comparison.

    Returns:
        ``True`` if the points coincide.

    """
    if tol is None:
        tol = default_tolerance()
    return bool(np.max(np.abs(np.asarray(p) - np.asarray(q))) <= tol)


def segment_fraction(p: np.ndarray, start: np.ndarray, end: np.ndarray) -> float:
    """Position of the projection of a point onto a segment.

    Parameters:
        p: ``shape=(2,)``

            The point.
        start: ``shape=(2,)``

            Start of the segment.
        end: ``shape=(2,)``

            End of the segment. Should differ from the start.

    Returns:
        The fraction of the segment length at which the projection is found, clipped
        to the unit interval. ``0`` corresponds to ``start``.

    """
    d = end - start
    t = np.dot(p - start, d) / np.dot(d, d)
    return float(min(max(t, 0.0), 1.0))


def point_on_segment(
    p: np.ndarray, start: np.ndarray, end: np.ndarray, tol: Optional[float] = None
) -> bool:
    """Check if a point lies on a segment.

    Examples:
        >>> point_on_segment(np.array([0.5, 0]), np.array([0, 0]), np.array([1, 0]))
        True
        >>> point_on_segment(np.array([2, 0]), np.array([0, 0]), np.array([1, 0]))
        False

    Parameters:
        p: ``shape=(2,)``

            The point.
        start: ``shape=(2,)``

            Start of the segment.
        end: ``shape=(2,)``

            End of the segment.
        tol: Absolute tolerance for the distance between the point and the segment.

    Returns:
        ``True`` if the point lies on the segment, including its endpoints.

    """
    if tol is None:
        tol = default_tolerance()
    p = np.asarray(p, dtype=float)
    start = np.asarray(start, dtype=float)
    end = np.asarray(end, dtype=float)

    if points_equal(start, end, tol):
        # Point-like segment
        return points_equal(p, start, tol)

    t = segment_fraction(p, start, end)
    closest = start + t * (end - start)
    return points_equal(p, closest, tol)


@rp.time_logger(sections=["geometry"])
def point_in_linear_geometry(
    point: np.ndarray, geometry: "rp.GeometryLike", tol: Optional[float] = None
) -> PointLocation:
    """Find the location of a point relative to a linear geometry.

    The boundary of the geometry is given by
    :class:`~relatepy.geometry.boundary.BoundaryChecker`. All other points on the
    segments of the geometry, and the points of point-like components, are inside.

    Examples:
        >>> point_in_linear_geometry(np.array([0.5, 0]), Linestring([(0, 0), (1, 0)]))
        <PointLocation.INSIDE: 1>
        >>> point_in_linear_geometry(np.array([0, 0]), Linestring([(0, 0), (1, 0)]))
        <PointLocation.BOUNDARY: 0>

    Parameters:
        point: ``shape=(2,)``

            The point.
        geometry: The linear geometry.
        tol: Tolerance for point equality.

    Returns:
        Whether the point is inside, on the boundary of, or outside the geometry.

    """
    if tol is None:
        tol = default_tolerance()
    point = np.asarray(point, dtype=float).ravel()
    geometry = rp.as_linear_geometry(geometry, tol)

    if rp.BoundaryChecker(geometry, tol).is_endpoint_boundary(point):
        return PointLocation.BOUNDARY

    for linestring in geometry.components():
        if linestring.num_points == 1:
            if points_equal(point, linestring.front(), tol):
                return PointLocation.INSIDE
            continue

        # Quick rejection based on the bounding box of the linestring.
        if np.any(point < linestring.pts.min(axis=1) - tol) or np.any(
            point > linestring.pts.max(axis=1) + tol
        ):
            continue

        for si in range(linestring.num_segments):
            start, end = linestring.segment(si)
            if point_on_segment(point, start, end, tol):
                return PointLocation.INSIDE

    return PointLocation.OUTSIDE
