"""Myers shortest edit script over line sequences. Pure, no I/O.

Reference: E. W. Myers, "An O(ND) Difference Algorithm and Its Variations".

The edit graph has old lines along x and new lines along y. A move right deletes
an old line, a move down inserts a new line, a diagonal move keeps a line that is
equal on both sides. Round `d` finds, for every diagonal k = x - y in [-d, d],
the furthest x reachable with exactly d non-diagonal moves. The `v` array for
each round is kept in `trace` so the path can be walked back from (N, M).
"""

from __future__ import annotations

import enum
from collections.abc import Sequence
from dataclasses import dataclass


class EditKind(str, enum.Enum):
    EQUAL = "equal"
    INSERT = "insert"
    DELETE = "delete"


@dataclass(frozen=True, slots=True)
class EditOp:
    kind: EditKind
    old_index: int | None = None
    new_index: int | None = None


def equal(old_index: int, new_index: int) -> EditOp:
    return EditOp(EditKind.EQUAL, old_index, new_index)


def insert(new_index: int) -> EditOp:
    return EditOp(EditKind.INSERT, None, new_index)


def delete(old_index: int) -> EditOp:
    return EditOp(EditKind.DELETE, old_index, None)


def _comes_from_above(v: list[int], k: int, d: int, offset: int) -> bool:
    """True when diagonal k is entered by a down move (insert) from k + 1.

    k == -d has no lower neighbour and k == d no upper one; in between the
    neighbour that reached further wins, ties going to the delete.
    """
    if k == -d:
        return True
    if k == d:
        return False
    return v[offset + k - 1] < v[offset + k + 1]


def compute_edit_script(old_lines: Sequence[str], new_lines: Sequence[str]) -> list[EditOp]:
    """Return the shortest edit script turning `old_lines` into `new_lines`.

    Operations come in document order: replaying them front to back over
    `old_lines` yields `new_lines`.
    """
    n, m = len(old_lines), len(new_lines)
    max_d = n + m
    # One spare slot on each side so k +/- 1 stays in range at the outer diagonals.
    offset = max_d + 1
    v = [0] * (2 * max_d + 3)
    trace: list[list[int]] = []

    for d in range(max_d + 1):
        trace.append(v.copy())
        for k in range(-d, d + 1, 2):
            if _comes_from_above(v, k, d, offset):
                x = v[offset + k + 1]
            else:
                x = v[offset + k - 1] + 1
            y = x - k

            # Snake
            while x < n and y < m and old_lines[x] == new_lines[y]:
                x += 1
                y += 1

            v[offset + k] = x
            if x >= n and y >= m:
                return _backtrack(trace, n, m, offset)

    raise AssertionError("edit graph search exceeded N + M rounds")  # pragma: no cover


def _backtrack(trace: list[list[int]], n: int, m: int, offset: int) -> list[EditOp]:
    ops: list[EditOp] = []
    x, y = n, m

    for d in range(len(trace) - 1, -1, -1):
        v = trace[d]
        k = x - y
        from_above = _comes_from_above(v, k, d, offset)
        prev_k = k + 1 if from_above else k - 1

        mid_x = v[offset + prev_k]
        if not from_above:
            mid_x += 1
        mid_y = mid_x - k

        while x > mid_x and y > mid_y:
            ops.append(equal(x - 1, y - 1))
            x -= 1
            y -= 1

        if d > 0:
            if from_above:
                ops.append(insert(y - 1))
                y -= 1
            else:
                ops.append(delete(x - 1))
                x -= 1

    ops.reverse()
    return ops
