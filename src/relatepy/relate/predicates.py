"""Named spatial predicates for linear geometries, defined by DE-9IM patterns.

Each predicate computes the relation matrix by :func:`~relatepy.relate.relate` and
checks it against one or more patterns. A predicate with several patterns holds if any
of them matches.

"""

from __future__ import annotations

from typing import Optional

import relatepy as rp
from relatepy.relate.linear_linear import relate

# Patterns of the named predicates
EQUALS = ("T*F**FFF*",)
DISJOINT = ("FF*FF****",)
TOUCHES = ("FT*******", "F**T*****", "F***T****")
CROSSES = ("0********",)
WITHIN = ("T*F**F***",)
CONTAINS = ("T*****FF*",)
OVERLAPS = ("1*T***T**",)
COVERS = ("T*****FF*", "*T****FF*", "***T**FF*", "****T*FF*")
COVERED_BY = ("T*F**F***", "*TF**F***", "**FT*F***", "**F*TF***")


def _matches_any(
    geometry_a: "rp.GeometryLike",
    geometry_b: "rp.GeometryLike",
    patterns: tuple[str, ...],
    tol: Optional[float],
) -> bool:
    matrix = relate(geometry_a, geometry_b, tol)
    return any(matrix.matches(pattern) for pattern in patterns)


def relate_pattern(
    geometry_a: "rp.GeometryLike",
    geometry_b: "rp.GeometryLike",
    pattern: str,
    tol: Optional[float] = None,
) -> bool:
    """Check if the relation matrix of two geometries matches a DE-9IM pattern.

    Example:
        >>> relate_pattern([[0, 0], [2, 2]], [[0, 2], [2, 0]], "0********")
        True

    Parameters:
        geometry_a: The first geometry.
        geometry_b: The second geometry.
        pattern: The pattern, see :meth:`~relatepy.relate.matrix.RelationMatrix.matches`.
        tol: Tolerance for point equality.

    Raises:
        ValueError: If the pattern is malformed.

    Returns:
        ``True`` if the matrix matches the pattern.

    """
    return _matches_any(geometry_a, geometry_b, (pattern,), tol)


def equals(geometry_a, geometry_b, tol: Optional[float] = None) -> bool:
    """The geometries cover the same point set."""
    return _matches_any(geometry_a, geometry_b, EQUALS, tol)


def disjoint(geometry_a, geometry_b, tol: Optional[float] = None) -> bool:
    """The geometries have no point in common."""
    return _matches_any(geometry_a, geometry_b, DISJOINT, tol)


def intersects(geometry_a, geometry_b, tol: Optional[float] = None) -> bool:
    """The geometries have at least one point in common."""
    return not disjoint(geometry_a, geometry_b, tol)


def touches(geometry_a, geometry_b, tol: Optional[float] = None) -> bool:
    """The geometries meet, but only in boundary points of at least one of them."""
    return _matches_any(geometry_a, geometry_b, TOUCHES, tol)


def crosses(geometry_a, geometry_b, tol: Optional[float] = None) -> bool:
    """The interiors of the geometries meet in points."""
    return _matches_any(geometry_a, geometry_b, CROSSES, tol)


def within(geometry_a, geometry_b, tol: Optional[float] = None) -> bool:
    """The first geometry lies in the second, and their interiors meet."""
    return _matches_any(geometry_a, geometry_b, WITHIN, tol)


def contains(geometry_a, geometry_b, tol: Optional[float] = None) -> bool:
    """The second geometry lies in the first, and their interiors meet."""
    return _matches_any(geometry_a, geometry_b, CONTAINS, tol)


def overlaps(geometry_a, geometry_b, tol: Optional[float] = None) -> bool:
    """The interiors of the geometries share a curve, and neither lies in the
    other."""
    return _matches_any(geometry_a, geometry_b, OVERLAPS, tol)


def covers(geometry_a, geometry_b, tol: Optional[float] = None) -> bool:
    """No point of the second geometry lies outside the first."""
    return _matches_any(geometry_a, geometry_b, COVERS, tol)


def covered_by(geometry_a, geometry_b, tol: Optional[float] = None) -> bool:
    """No point of the first geometry lies outside the second."""
    return _matches_any(geometry_a, geometry_b, COVERED_BY, tol)
