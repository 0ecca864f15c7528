"""The DE-9IM relation matrix.

The matrix has one row for each of the interior, boundary and exterior of the first
geometry, and one column for each of these parts of the second geometry. Each cell
holds the dimension of the intersection of the two parts:

    ``'F'``: Empty intersection.
    ``'0'``: The parts intersect in points.
    ``'1'``: The parts intersect in curves.
    ``'2'``: The parts intersect in areas.
    ``'T'``: The intersection is non-empty, of unknown dimension.

"""

from __future__ import annotations

import logging
from enum import IntEnum

import numpy as np

# Module level logger
logger = logging.getLogger(__name__)


class Location(IntEnum):
    """Parts of a geometry, used to index the relation matrix."""

    INTERIOR = 0
    BOUNDARY = 1
    EXTERIOR = 2


# Ranking of the codes. A code can only be replaced by a code of higher rank.
_CODE_RANK = {"F": -2, "T": -1, **{str(d): d for d in range(10)}}

_MASK_CODES = set("TF*0123456789")

# Topological dimension of the interior and boundary of a linear geometry. The
# dimension of the exterior is the coordinate dimension, see RelationMatrix.
_LINEAR_PART_DIMENSION = {Location.INTERIOR: 1, Location.BOUNDARY: 0}


def _check_code(code: str) -> None:
    if code not in _CODE_RANK:
        raise ValueError(f"Unknown dimension code {code!r}")


class RelationMatrix:
    """DE-9IM matrix for two linear geometries, with upgrade-only updates.

    All cells are initialized to ``'F'``, except the exterior/exterior cell, which is
    set to the coordinate dimension.

    The matrix keeps track of whether it is final: Once all cells have reached the
    highest dimension possible for two linear geometries, no further computation can
    change the matrix, and :attr:`interrupt` is set.

    Parameters:
        dimension: ``default=2``

            Coordinate dimension of the geometries.

    """

    def __init__(self, dimension: int = 2) -> None:
        self.dimension: int = dimension
        """Coordinate dimension of the geometries."""

        self._cells = np.full((3, 3), "F", dtype="<U1")
        # Ranks of the cell codes, kept in sync with the cells.
        self._ranks = np.full((3, 3), _CODE_RANK["F"], dtype=int)

        dims = [
            _LINEAR_PART_DIMENSION[Location.INTERIOR],
            _LINEAR_PART_DIMENSION[Location.BOUNDARY],
            dimension,
        ]
        self._max_rank = np.array(
            [[min(dims[row], dims[col]) for col in range(3)] for row in range(3)]
        )
        exterior_code = self._code_from_dimension()
        self._max_rank[2, 2] = _CODE_RANK[exterior_code]

        self.interrupt: bool = False
        """Whether the matrix is final, so that further updates cannot change it."""

        self.set(Location.EXTERIOR, Location.EXTERIOR, exterior_code)

    def _code_from_dimension(self) -> str:
        return str(self.dimension) if self.dimension <= 9 else "T"

    def _index(self, row: Location, col: Location, transpose: bool) -> tuple[int, int]:
        if transpose:
            return int(col), int(row)
        return int(row), int(col)

    def get(self, row: Location, col: Location) -> str:
        """The code of a cell."""
        return str(self._cells[int(row), int(col)])

    def __getitem__(self, index: tuple[Location, Location]) -> str:
        return self.get(*index)

    def set(
        self, row: Location, col: Location, code: str, transpose: bool = False
    ) -> None:
        """Unconditionally set the code of a cell.

        Intended for initialization, before the geometries are analysed.

        Parameters:
            row: Part of the first geometry.
            col: Part of the second geometry.
            code: The new code.
            transpose: If True, row and column are interchanged.

        Raises:
            ValueError: If the code is unknown.

        """
        _check_code(code)
        index = self._index(row, col, transpose)
        self._cells[index] = code
        self._ranks[index] = _CODE_RANK[code]
        self._update_interrupt()

    def update(
        self, row: Location, col: Location, code: str, transpose: bool = False
    ) -> None:
        """Update a cell, if the new code carries more information than the present.

        A cell holding ``'1'`` is never downgraded to ``'0'``, and a set cell is never
        reset to ``'F'``.

        Parameters:
            row: Part of the first geometry.
            col: Part of the second geometry.
            code: The new code.
            transpose: If True, row and column are interchanged. Used when the roles
                of the two geometries are swapped.

        Raises:
            ValueError: If the code is unknown.

        """
        _check_code(code)
        index = self._index(row, col, transpose)
        if _CODE_RANK[code] > self._ranks[index]:
            self._cells[index] = code
            self._ranks[index] = _CODE_RANK[code]
            self._update_interrupt()

    def _update_interrupt(self) -> None:
        final = bool(np.all(self._ranks >= self._max_rank))
        if final and not self.interrupt:
            logger.debug(f"Relation matrix {self} is final")
        self.interrupt = final

    def transpose(self) -> RelationMatrix:
        """The matrix with the roles of the two geometries interchanged."""
        other = RelationMatrix(self.dimension)
        other._cells = self._cells.T.copy()
        other._ranks = self._ranks.T.copy()
        other._update_interrupt()
        return other

    def matches(self, mask: str) -> bool:
        """Check if the matrix matches a DE-9IM pattern.

        The pattern has nine characters, given row-wise. Each character is one of

            ``'*'``: Any value.
            ``'T'``: Non-empty intersection.
            ``'F'``: Empty intersection.
            ``'0'``, ``'1'``, ``'2'``: Intersection of exactly this dimension.

        Examples:
            >>> m = RelationMatrix()
            >>> m.update(Location.INTERIOR, Location.INTERIOR, "0")
            >>> m.matches("0********")
            True
            >>> m.matches("T*F**F***")
            True

        Parameters:
            mask: The pattern. Lower case letters are accepted.

        Raises:
            ValueError: If the pattern is malformed.

        Returns:
            ``True`` if the matrix matches the pattern.

        """
        mask = mask.upper()
        if len(mask) != 9 or not set(mask) <= _MASK_CODES:
            raise ValueError(f"Malformed DE-9IM pattern {mask!r}")

        for m, c in zip(mask, str(self)):
            if m == "*":
                continue
            elif m == "T":
                if c == "F":
                    return False
            elif m == "F":
                if c != "F":
                    return False
            elif m != c:
                return False
        return True

    def __str__(self) -> str:
        return "".join(self._cells.ravel().tolist())

    def __repr__(self) -> str:
        return f"RelationMatrix('{self}')"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, RelationMatrix):
            return str(self) == str(other)
        if isinstance(other, str):
            return str(self) == other
        return NotImplemented

    def __hash__(self) -> int:
        return hash(str(self))
