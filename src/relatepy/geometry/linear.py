"""Linear geometries: single polylines (linestrings) and collections of polylines
(multi-linestrings).

Points are stored column-wise, that is, a linestring with ``n`` points has coordinates
of ``shape=(2, n)``.

A plain :class:`Linestring` is treated as a geometry with a single component, with
index 0. This gives a uniform way of iterating over the components of any linear
geometry, which is used by the relate algorithm.

"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Iterator, NamedTuple, Optional, Union

import numpy as np

import relatepy as rp

# Module level logger
logger = logging.getLogger(__name__)


class SegmentId(NamedTuple):
    """Identifier of a segment in a linear geometry.

    Segment identifiers are ordered lexicographically, so that sorting a set of
    identifiers visits the components in order, and the segments of each component in
    order.

    """

    multi_index: int
    """Index of the component (linestring) in the geometry."""
    ring_index: int
    """Ring index. Always :data:`~relatepy.utils.common_constants.NO_RING` for linear
    geometries."""
    segment_index: int
    """Index of the segment within the component. Segment ``i`` runs from point ``i``
    to point ``i + 1``."""

    def same_range(self, other: SegmentId) -> bool:
        """Check if two identifiers belong to the same component.

        The segment index is not considered.

        """
        return (
            self.multi_index == other.multi_index
            and self.ring_index == other.ring_index
        )


class LinestringKind(Enum):
    """Classification of a linestring, see :func:`check_linestring_kind`."""

    EMPTY = 0
    POINT = 1
    CLOSED = 2
    OPEN = 3


def _as_point_array(points) -> np.ndarray:
    """Convert coordinates to a float array of ``shape=(2, num_pts)``.

    Numpy arrays are assumed to follow the column convention of the package, while
    other sequences are interpreted as a list of ``(x, y)`` points.

    """
    if isinstance(points, np.ndarray):
        pts = points.astype(float)
        if pts.size == 0:
            return np.zeros((2, 0))
        if pts.ndim == 1:
            pts = pts.reshape((-1, 1))
    else:
        pts = np.asarray(points, dtype=float)
        if pts.size == 0:
            return np.zeros((2, 0))
        if pts.ndim == 1:
            pts = pts.reshape((-1, 1))
        else:
            pts = pts.T

    if pts.ndim != 2:
        raise ValueError(f"Coordinates should be a 2d array, got shape {pts.shape}")
    if pts.shape[0] != rp.COORDINATE_DIMENSION:
        raise ValueError(
            f"Only {rp.COORDINATE_DIMENSION}d coordinates are supported, "
            f"got {pts.shape[0]}d"
        )
    if not np.all(np.isfinite(pts)):
        raise ValueError("Coordinates should be finite")
    return pts


class Linestring:
    """A polyline, defined by an ordered sequence of points.

    Consecutive duplicate points (equal up to the tolerance) are removed on
    construction, thus no segment of a linestring has zero length.

    Parameters:
        points: Coordinates of the points. Either an array of ``shape=(2, num_pts)``,
            or a sequence of ``(x, y)`` pairs.
        tol: Tolerance for point equality. Defaults to
            :func:`~relatepy.geometry.geometry_property_checks.default_tolerance`.

    Raises:
        ValueError: If the coordinates are not 2d, or not finite.

    """

    def __init__(self, points, tol: Optional[float] = None) -> None:
        if tol is None:
            tol = rp.geometry_property_checks.default_tolerance()

        pts = _as_point_array(points)
        if pts.shape[1] > 1:
            step = np.max(np.abs(np.diff(pts, axis=1)), axis=0)
            keep = np.hstack((True, step > tol))
            if not np.all(keep):
                logger.debug(
                    f"Removed {np.sum(~keep)} duplicate points from linestring"
                )
            pts = pts[:, keep]

        pts.setflags(write=False)
        self.pts: np.ndarray = pts
        """Coordinates of the points, ``shape=(2, num_points)``. Read only."""

    @property
    def num_points(self) -> int:
        """Number of points in the linestring."""
        return self.pts.shape[1]

    @property
    def num_segments(self) -> int:
        """Number of segments in the linestring."""
        return max(self.num_points - 1, 0)

    def front(self) -> np.ndarray:
        """First point of the linestring, ``shape=(2,)``."""
        return self.pts[:, 0]

    def back(self) -> np.ndarray:
        """Last point of the linestring, ``shape=(2,)``."""
        return self.pts[:, -1]

    def segment(self, ind: int) -> tuple[np.ndarray, np.ndarray]:
        """Start and end point of a segment."""
        return self.pts[:, ind], self.pts[:, ind + 1]

    def components(self) -> list[Linestring]:
        """The components of the geometry, which for a linestring is itself."""
        return [self]

    def sub_geometry(self, seg_id: SegmentId) -> Linestring:
        """The component a segment belongs to."""
        assert seg_id.multi_index == 0
        return self

    def kind(self, tol: Optional[float] = None) -> LinestringKind:
        """Classification of the linestring, see :func:`check_linestring_kind`."""
        return check_linestring_kind(self, tol)

    def __len__(self) -> int:
        return self.num_points

    def __repr__(self) -> str:
        return f"Linestring({self.pts.T.tolist()})"


class MultiLinestring:
    """A collection of linestrings, treated as a single geometry.

    The boundary of a multi-linestring consists of the points that are endpoints of an
    odd number of its (non-closed) components.

    Parameters:
        linestrings: The components. Each item is either a :class:`Linestring`, or
            coordinates that can be used to construct one.
        tol: Tolerance used when constructing components from coordinates.

    """

    def __init__(self, linestrings, tol: Optional[float] = None) -> None:
        self.linestrings: list[Linestring] = [
            ls if isinstance(ls, Linestring) else Linestring(ls, tol)
            for ls in linestrings
        ]
        """The components of the geometry."""

    def components(self) -> list[Linestring]:
        """The components of the geometry."""
        return self.linestrings

    def sub_geometry(self, seg_id: SegmentId) -> Linestring:
        """The component a segment belongs to."""
        return self.linestrings[seg_id.multi_index]

    def __len__(self) -> int:
        return len(self.linestrings)

    def __iter__(self) -> Iterator[Linestring]:
        return iter(self.linestrings)

    def __getitem__(self, ind: int) -> Linestring:
        return self.linestrings[ind]

    def __repr__(self) -> str:
        s = ", ".join([str(ls.pts.T.tolist()) for ls in self.linestrings])
        return f"MultiLinestring([{s}])"


def as_linear_geometry(
    geometry: "rp.GeometryLike", tol: Optional[float] = None
) -> Union[Linestring, MultiLinestring]:
    """Convert an object to a linear geometry.

    Linestrings and multi-linestrings are returned unchanged. A numpy array is
    interpreted as the coordinates of a linestring, with points as columns. Other
    sequences are linestrings if their items are points (pairs of numbers), and
    multi-linestrings if their items are themselves sequences of points, arrays or
    linestrings. Components without points are allowed anywhere in a
    multi-linestring, and a sequence of empty sequences is a multi-linestring.

    Parameters:
        geometry: Object to convert.
        tol: Tolerance used when constructing linestrings.

    Raises:
        ValueError: If the coordinates are malformed.

    Returns:
        The linear geometry.

    """
    if isinstance(geometry, (Linestring, MultiLinestring)):
        return geometry
    if isinstance(geometry, np.ndarray):
        return Linestring(geometry, tol)

    items = list(geometry)
    if len(items) == 0:
        return Linestring(np.zeros((2, 0)), tol)

    first = items[0]
    if np.isscalar(first):
        # A single point given as a pair of numbers
        return Linestring(items, tol)
    # The first non-empty item decides, so that components without points may lead
    for item in items:
        if isinstance(item, (Linestring, np.ndarray)):
            return MultiLinestring(items, tol)
        sub_items = list(item)
        if len(sub_items) > 0:
            if np.isscalar(sub_items[0]):
                return Linestring(items, tol)
            return MultiLinestring(items, tol)
    # Only empty components
    return MultiLinestring(items, tol)


@rp.time_logger(sections=["geometry"])
def check_linestring_kind(
    linestring: Linestring, tol: Optional[float] = None
) -> LinestringKind:
    """Classify a linestring as empty, a single point, closed or open.

    A linestring is closed if its first and last points are equal, and at least one
    other point differs from them. A linestring where all points are equal degenerates
    to a point.

    Examples:
        >>> check_linestring_kind(Linestring([(0, 0), (1, 0)]))
        <LinestringKind.OPEN: 3>
        >>> check_linestring_kind(Linestring([(0, 0), (1, 0), (1, 1), (0, 0)]))
        <LinestringKind.CLOSED: 2>
        >>> check_linestring_kind(Linestring([(0, 0)]))
        <LinestringKind.POINT: 1>

    Parameters:
        linestring: The linestring to be classified.
        tol: Tolerance for point equality.

    Returns:
        The classification.

    """
    num_points = linestring.num_points
    if num_points == 0:
        return LinestringKind.EMPTY
    elif num_points == 1:
        return LinestringKind.POINT

    front = linestring.front()
    if not rp.geometry_property_checks.points_equal(front, linestring.back(), tol):
        return LinestringKind.OPEN

    for pi in range(1, num_points - 1):
        if not rp.geometry_property_checks.points_equal(
            front, linestring.pts[:, pi], tol
        ):
            return LinestringKind.CLOSED

    return LinestringKind.POINT
