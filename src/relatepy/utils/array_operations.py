"""The module contains functions for set operations on point clouds stored as numpy
arrays, with points as columns.

"""

from __future__ import annotations

import numpy as np
from scipy.spatial import KDTree


def uniquify_point_set(
    points: np.ndarray, tol: float = 1e-10
) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Uniquify a set of points so that no two points are closer than ``tol`` from each
    other, measured in the maximum norm.

    The first occurrence of a group of coinciding points is kept, so that the order of
    the points is preserved.

    Parameters:
        points: ``shape=(nd, n_pts)``

            Columns to be uniquified.
        tol: ``default=1e-10``

            Tolerance for when columns are considered equal.

    Returns:
        A tuple with three elements:

        :obj:`~numpy.ndarray`: ``shape=(nd, n_unique)``

            Unique columns.

        :obj:`~numpy.ndarray`: ``shape=(n_unique,)``

            Index of which points that are preserved.

        :obj:`~numpy.ndarray`: ``shape=(n_pts,)``

            Index of the representation of old points in the reduced list.

    """
    num_p = points.shape[1]
    if num_p == 0:
        return points, np.zeros(0, dtype=int), np.zeros(0, dtype=int)

    # The implementation uses Scipy's KDTree implementation to efficiently get the
    # distance between points. Transpose needed to comply with KDTree.
    tree = KDTree(points.T)
    neighbors = tree.query_ball_point(points.T, r=tol, p=np.inf)

    old_2_new = np.full(num_p, -1, dtype=int)
    new_2_old: list[int] = []
    for pi in range(num_p):
        if old_2_new[pi] >= 0:
            # Already represented by a previous point
            continue
        # The point represents itself and all points close to it that have not yet
        # been assigned.
        close = np.asarray(neighbors[pi], dtype=int)
        close = close[old_2_new[close] < 0]
        old_2_new[close] = len(new_2_old)
        new_2_old.append(pi)

    new_2_old_arr = np.asarray(new_2_old, dtype=int)
    return points[:, new_2_old_arr], new_2_old_arr, old_2_new


def count_coinciding_points(
    p: np.ndarray, pset: np.ndarray, tol: float = 1e-10
) -> int:
    """Count the number of points in a point set that coincide with a given point.

    Parameters:
        p: ``shape=(nd,)``

            The point.
        pset: ``shape=(nd, n_pts)``

            Point cloud to search in.
        tol: ``default=1e-10``

            Tolerance for when two points are considered equal, measured in the
            maximum norm.

    Returns:
        Number of columns in ``pset`` that are equal to ``p``.

    """
    if pset.size == 0:
        return 0
    tree = KDTree(pset.T)
    return len(tree.query_ball_point(np.asarray(p, dtype=float), r=tol, p=np.inf))
