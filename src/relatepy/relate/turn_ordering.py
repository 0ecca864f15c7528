"""Ordering of turns along one of the geometries.

When the turns are sorted for side ``op_id``, all turns on the same component are
visited in order of the segments, and the turns on a segment in the order they are met
when walking along it. This allows the relate algorithm to track whether it is inside or
outside the other geometry by a single pass over the turns.

Turns in the same point are ordered by the operation on the scanned side, so that an
end of a component (``BLOCKED``) comes before leaving the other geometry (``UNION``),
which comes before entering it (``INTERSECTION``).

"""

from __future__ import annotations

from typing import Sequence

import relatepy as rp

TurnOperation = rp.intersections.TurnOperation

_OPERATION_PRIORITY = {
    TurnOperation.NONE: 0,
    TurnOperation.BLOCKED: 1,
    TurnOperation.UNION: 2,
    TurnOperation.INTERSECTION: 3,
}


def turn_sort_key(turn: "rp.Turn", op_id: int) -> tuple:
    """Sort key of a turn, seen from one of the geometries.

    Parameters:
        turn: The turn.
        op_id: Index of the geometry (0 or 1) the turns are scanned along.

    Returns:
        The key, consisting of the segment identifier and the position along the
        segment on the scanned side, followed by tie breakers: the operation on the
        scanned side, the operation on the other side, the method, and the segment
        identifier on the other side.

    """
    this_op = turn.operations[op_id]
    other_op = turn.operations[(op_id + 1) % 2]
    return (
        this_op.seg_id,
        this_op.fraction,
        _OPERATION_PRIORITY[this_op.operation],
        _OPERATION_PRIORITY[other_op.operation],
        turn.method.value,
        other_op.seg_id,
    )


def sort_turns(turns: Sequence["rp.Turn"], op_id: int) -> list["rp.Turn"]:
    """Sort turns along one of the geometries.

    Parameters:
        turns: The turns. The sequence is not modified.
        op_id: Index of the geometry (0 or 1) the turns are sorted along.

    Returns:
        A new list with the sorted turns.

    """
    return sorted(turns, key=lambda turn: turn_sort_key(turn, op_id))
