"""Pure deterministic diff calculation. No DB."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from prompt_history.core.exceptions import InvalidArgument
from prompt_history.modules.text_diff.myers import EditKind, EditOp, compute_edit_script
from prompt_history.modules.text_diff.schemas import (
    AddedLine,
    DiffObject,
    ModifiedLine,
    RemovedLine,
)


def split_lines(text: str) -> list[str]:
    """Split on "\\n" only; "" is one empty line and a trailing newline adds one."""
    return text.split("\n")


def ensure_text(value: Any, name: str) -> str:
    if value is None:
        raise InvalidArgument(f"{name} must not be None")
    if not isinstance(value, str):
        raise InvalidArgument(f"{name} must be a string, got {type(value).__name__}")
    return value


def build_diff(
    script: Sequence[EditOp],
    old_lines: Sequence[str],
    new_lines: Sequence[str],
) -> DiffObject:
    """Fold an edit script into added / removed / modified entries.

    A delete directly followed by an insert is reported as one modified line.
    Equal ops carry no information for the diff and are dropped.
    """
    added: list[AddedLine] = []
    removed: list[RemovedLine] = []
    modified: list[ModifiedLine] = []

    i = 0
    while i < len(script):
        op = script[i]
        nxt = script[i + 1] if i + 1 < len(script) else None

        if op.kind is EditKind.DELETE and nxt is not None and nxt.kind is EditKind.INSERT:
            assert op.old_index is not None and nxt.new_index is not None
            modified.append(
                ModifiedLine(
                    old_index=op.old_index,
                    new_index=nxt.new_index,
                    old_content=old_lines[op.old_index],
                    new_content=new_lines[nxt.new_index],
                )
            )
            i += 2
            continue

        if op.kind is EditKind.DELETE:
            assert op.old_index is not None
            removed.append(RemovedLine(old_index=op.old_index, content=old_lines[op.old_index]))
        elif op.kind is EditKind.INSERT:
            assert op.new_index is not None
            added.append(AddedLine(new_index=op.new_index, content=new_lines[op.new_index]))
        i += 1

    return DiffObject(added=added, removed=removed, modified=modified)


def calculate(old_text: str, new_text: str) -> DiffObject:
    """Compute the line diff that turns `old_text` into `new_text`."""
    ensure_text(old_text, "old_text")
    ensure_text(new_text, "new_text")

    if old_text == new_text:
        return DiffObject.empty()

    old_lines = split_lines(old_text)
    new_lines = split_lines(new_text)
    return build_diff(compute_edit_script(old_lines, new_lines), old_lines, new_lines)
