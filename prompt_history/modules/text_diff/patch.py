"""Apply a diff forwards or backwards. Pure, no DB.

Both directions run in two passes over a mutable line list. Lines leaving the
text are removed from the highest source index down, so a pending lower index
never shifts. Lines entering the text are then inserted from the lowest target
index up, so every line before an insertion point is already final. Removal
indices are positions in the source text and insertion indices positions in the
target text; mixing them in a single ordering does not round-trip.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from prompt_history.core.exceptions import InvalidArgument
from prompt_history.modules.text_diff.calculator import ensure_text, split_lines
from prompt_history.modules.text_diff.schemas import DiffObject


def apply(base_text: str, diff: DiffObject | dict[str, Any]) -> str:
    """Rebuild the new text from the old text and a forward diff."""
    ensure_text(base_text, "base_text")
    d = DiffObject.from_json(diff)

    outgoing = [r.old_index for r in d.removed] + [m.old_index for m in d.modified]
    incoming = [(a.new_index, a.content) for a in d.added] + [
        (m.new_index, m.new_content) for m in d.modified
    ]
    return "\n".join(_patch(split_lines(base_text), outgoing, incoming))


def revert(modified_text: str, diff: DiffObject | dict[str, Any]) -> str:
    """Rebuild the old text from the new text and the diff that produced it."""
    ensure_text(modified_text, "modified_text")
    d = DiffObject.from_json(diff)

    outgoing = [a.new_index for a in d.added] + [m.new_index for m in d.modified]
    incoming = [(r.old_index, r.content) for r in d.removed] + [
        (m.old_index, m.old_content) for m in d.modified
    ]
    return "\n".join(_patch(split_lines(modified_text), outgoing, incoming))


def _patch(
    lines: list[str],
    outgoing: list[int],
    incoming: Iterable[tuple[int, str]],
) -> list[str]:
    if len(set(outgoing)) != len(outgoing):
        raise InvalidArgument("diff removes the same line more than once")

    for index in sorted(outgoing, reverse=True):
        if index >= len(lines):
            raise InvalidArgument(
                f"diff does not fit the text: line {index} is out of range ({len(lines)} lines)"
            )
        del lines[index]

    seen: set[int] = set()
    for index, content in sorted(incoming, key=lambda entry: entry[0]):
        if index in seen:
            raise InvalidArgument("diff inserts two lines at the same position")
        if index > len(lines):
            raise InvalidArgument(
                f"diff does not fit the text: cannot insert at line {index} ({len(lines)} lines)"
            )
        seen.add(index)
        lines.insert(index, content)

    return lines
