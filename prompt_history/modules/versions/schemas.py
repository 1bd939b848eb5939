"""Version ledger schemas."""

from __future__ import annotations

import uuid
from datetime import datetime

from prompt_history.modules.text_diff import format_diff
from prompt_history.modules.text_diff.schemas import DiffObject
from prompt_history.schemas.common import CamelModel, FrozenCamelModel


class Version(FrozenCamelModel):
    """One ledger entry. `diff` is None only for a founding entry."""

    id: uuid.UUID
    timestamp: datetime
    diff: DiffObject | None
    note: str

    @property
    def is_founding(self) -> bool:
        return self.diff is None


class VersionListItem(Version):
    """A version as shown in the history view, with its rendered diff report."""

    report: str | None = None

    @classmethod
    def from_version(cls, version: Version) -> VersionListItem:
        return cls(
            id=version.id,
            timestamp=version.timestamp,
            diff=version.diff,
            note=version.note,
            report=format_diff(version.diff) if version.diff is not None else None,
        )


class VersionListResponse(CamelModel):
    items: list[VersionListItem]
    total: int
    max_versions: int


class VersionContentResponse(CamelModel):
    version_id: uuid.UUID
    content: str


class RestoreResponse(CamelModel):
    document_id: uuid.UUID
    content: str
    restored_from: uuid.UUID
    version: Version | None  # None when the restored content equals the current content
