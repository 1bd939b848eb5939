"""Text diff schemas: the persisted diff structure and the API bodies.

`DiffObject` is stored verbatim inside every version row, so its JSON shape
(camelCase keys, ints and strings only) is a storage format:

    {
      "added":    [{"newIndex": 2, "content": "c"}],
      "removed":  [{"oldIndex": 1, "content": "b"}],
      "modified": [{"oldIndex": 0, "newIndex": 0, "oldContent": "a", "newContent": "A"}],
      "stats":    {"linesAdded": 1, "linesRemoved": 1, "linesModified": 1, "totalChanges": 3}
    }
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import Field, StrictInt, StrictStr, ValidationError, computed_field

from prompt_history.core.exceptions import InvalidArgument
from prompt_history.schemas.common import CamelModel, FrozenCamelModel

_REQUIRED_LISTS = ("added", "removed", "modified")


# Line entries are a storage format: strict ints and strings, no coercion.


class AddedLine(FrozenCamelModel):
    new_index: StrictInt = Field(ge=0)
    content: StrictStr


class RemovedLine(FrozenCamelModel):
    old_index: StrictInt = Field(ge=0)
    content: StrictStr


class ModifiedLine(FrozenCamelModel):
    old_index: StrictInt = Field(ge=0)
    new_index: StrictInt = Field(ge=0)
    old_content: StrictStr
    new_content: StrictStr


class DiffStats(FrozenCamelModel):
    lines_added: int
    lines_removed: int
    lines_modified: int
    total_changes: int


class DiffObject(FrozenCamelModel):
    """Directional change from one text to another, by whole lines."""

    added: list[AddedLine]
    removed: list[RemovedLine]
    modified: list[ModifiedLine]

    @computed_field  # type: ignore[prop-decorator]
    @property
    def stats(self) -> DiffStats:
        return DiffStats(
            lines_added=len(self.added),
            lines_removed=len(self.removed),
            lines_modified=len(self.modified),
            total_changes=len(self.added) + len(self.removed) + len(self.modified),
        )

    @property
    def is_empty(self) -> bool:
        return not (self.added or self.removed or self.modified)

    @classmethod
    def empty(cls) -> DiffObject:
        return cls(added=[], removed=[], modified=[])

    def to_json(self) -> dict[str, Any]:
        """Plain dict/list/str/int structure, as persisted."""
        return self.model_dump(mode="json", by_alias=True)

    @classmethod
    def from_json(cls, data: Any) -> DiffObject:
        """Parse a persisted diff, raising InvalidArgument when it is malformed."""
        if isinstance(data, DiffObject):
            return data
        if not isinstance(data, Mapping):
            raise InvalidArgument(f"diff must be a mapping, got {type(data).__name__}")
        for key in _REQUIRED_LISTS:
            if not isinstance(data.get(key), list):
                raise InvalidArgument(f"diff.{key} must be a list")
        try:
            return cls.model_validate(dict(data))
        except ValidationError as exc:
            raise InvalidArgument(f"diff is malformed: {exc.error_count()} invalid field(s)") from exc


# ── API bodies ────────────────────────────────────────────────────────────────


class DiffRequest(CamelModel):
    old_text: str
    new_text: str


class DiffResponse(CamelModel):
    diff: DiffObject
    report: str


class PatchRequest(CamelModel):
    text: str
    diff: dict[str, Any]


class PatchResponse(CamelModel):
    text: str
