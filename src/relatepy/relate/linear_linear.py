"""Computation of the DE-9IM relation matrix of two linear geometries.

The algorithm has three stages:

    1. The intersection events (turns) between the geometries are computed.
    2. Components that take part in no turns are handled directly, see
       :mod:`~relatepy.relate.disjoint_linestrings`.
    3. The turns are sorted along each of the geometries in turn, and analysed by a
       :class:`~relatepy.relate.analyser.TurnsAnalyser`.

The computation stops as soon as the relation matrix is final.

"""

from __future__ import annotations

import logging
from typing import Optional

import relatepy as rp
from relatepy.relate.analyser import TurnsAnalyser, analyse_each_turn
from relatepy.relate.disjoint_linestrings import scan_disjoint_linestrings
from relatepy.relate.matrix import RelationMatrix
from relatepy.relate.turn_ordering import sort_turns

# Module level logger
logger = logging.getLogger(__name__)

module_sections = ["relate"]


@rp.time_logger(sections=module_sections)
def relate(
    geometry_a: "rp.GeometryLike",
    geometry_b: "rp.GeometryLike",
    tol: Optional[float] = None,
) -> RelationMatrix:
    """Compute the DE-9IM relation matrix of two linear geometries.

    Example:
        >>> str(relate([[0, 0], [2, 2]], [[0, 2], [2, 0]]))
        '0F1FF0102'

    Parameters:
        geometry_a: The first geometry, corresponding to the rows of the matrix. Either
            a :class:`~relatepy.geometry.linear.Linestring`, a
            :class:`~relatepy.geometry.linear.MultiLinestring`, or coordinates that
            can be converted by :func:`~relatepy.geometry.linear.as_linear_geometry`.
        geometry_b: The second geometry, corresponding to the columns of the matrix.
        tol: Tolerance for point equality. Defaults to the value given in the
            configuration file, or :data:`~relatepy.utils.common_constants.GEOMETRY_TOL`.

    Returns:
        The relation matrix.

    """
    if tol is None:
        tol = rp.geometry_property_checks.default_tolerance()

    geometry_a = rp.as_linear_geometry(geometry_a, tol)
    geometry_b = rp.as_linear_geometry(geometry_b, tol)

    result = RelationMatrix(rp.COORDINATE_DIMENSION)

    turns = rp.get_turns(geometry_a, geometry_b, tol)

    boundary_checker_a = rp.BoundaryChecker(geometry_a, tol)
    boundary_checker_b = rp.BoundaryChecker(geometry_b, tol)

    scan_disjoint_linestrings(
        result, turns, 0, geometry_a, geometry_b, boundary_checker_a, tol
    )
    if result.interrupt:
        return result

    scan_disjoint_linestrings(
        result, turns, 1, geometry_b, geometry_a, boundary_checker_b, tol
    )
    if result.interrupt:
        return result

    if len(turns) == 0:
        logger.debug("No turns between the geometries")
        return result

    # Scan along the first geometry
    turns = sort_turns(turns, 0)
    analyse_each_turn(
        result,
        TurnsAnalyser(0, tol),
        turns,
        geometry_a,
        geometry_b,
        boundary_checker_a,
        boundary_checker_b,
    )
    if result.interrupt:
        return result

    # Scan along the second geometry
    turns = sort_turns(turns, 1)
    analyse_each_turn(
        result,
        TurnsAnalyser(1, tol),
        turns,
        geometry_b,
        geometry_a,
        boundary_checker_b,
        boundary_checker_a,
    )

    logger.debug(f"Relation matrix: {result}")
    return result
