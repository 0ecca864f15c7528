"""
This package contains functionality for linear geometries and the geometric inquiries
needed by the relate operation.

Note:
    Many of the functions will have a parameter ``tol``, which is used to determine the
    tolerance of the geometric operations, most importantly how close two points must
    be to be considered equal. If no tolerance is given, the value of the ``tol``
    keyword in the ``[geometry]`` section of relatepy.cfg is used, falling back to
    :data:`~relatepy.utils.common_constants.GEOMETRY_TOL`. The relate operation is a
    topological computation, so the general recommendation is to keep the tolerance
    small, and to pass the same tolerance through a full chain of operations.

The content of this package is organized as follows:

    :mod:`~relatepy.geometry.linear` contains the classes
    :class:`~relatepy.geometry.linear.Linestring` and
    :class:`~relatepy.geometry.linear.MultiLinestring`, segment identifiers, and the
    classification of a linestring as empty, point-like, closed or open.

    :mod:`~relatepy.geometry.geometry_property_checks` contains functions for
    inquiries on points, e.g., whether a point lies on a segment, or whether it is
    inside, on the boundary of, or outside a linear geometry.

    :mod:`~relatepy.geometry.boundary` contains the class
    :class:`~relatepy.geometry.boundary.BoundaryChecker`, which decides whether a point
    is a boundary point of a linear geometry.

    :mod:`~relatepy.geometry.intersections` contains functions for computing
    intersections between segments, and the intersection events (turns) between two
    linear geometries.

"""
