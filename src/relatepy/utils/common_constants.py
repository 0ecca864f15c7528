"""
The module is intended to give access to a set of unified keywords and default values.

To access the quantities, invoke rp.KEY.

"""

""" Geometry """
# Default tolerance for point equality and point-on-segment tests. Can be overridden
# by the tol keyword in the [geometry] section of relatepy.cfg.
GEOMETRY_TOL = 1e-10

# Coordinate dimension of the supported geometries. The exterior of a linear geometry
# in the plane is two-dimensional.
COORDINATE_DIMENSION = 2

# Ring index used in segment identifiers of linear geometries. Reserved for geometries
# with rings (polygons), which are not supported.
NO_RING = -1
