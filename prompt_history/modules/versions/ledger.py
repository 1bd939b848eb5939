"""Bounded, linear version ledger for one document. Pure, no DB.

Entries are kept oldest first. Entry i > 0 holds the diff from the content as
of entry i - 1 to the content as of entry i; the founding entry has no diff.
The document's current content lives outside the ledger and is, by contract,
the content implied by the newest entry.

When the bound is exceeded the oldest entry is dropped together with its diff.
Nothing is merged forward, so content older than the new oldest entry can no
longer be rebuilt.
"""

from __future__ import annotations

import uuid
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime, timezone

from prompt_history.core.exceptions import InvalidArgument, InvalidOperation, NotFound
from prompt_history.modules.text_diff import calculate, revert
from prompt_history.modules.text_diff.calculator import ensure_text
from prompt_history.modules.versions.schemas import Version

DEFAULT_MAX_VERSIONS = 50
FOUNDING_NOTE = "Initial version"
UPDATE_NOTE = "Update"


@dataclass(frozen=True)
class AppendResult:
    version: Version
    evicted: list[Version] = field(default_factory=list)


@dataclass(frozen=True)
class RestoreResult:
    content: str
    target: Version
    appended: AppendResult | None  # None when the content did not change


class VersionLedger:
    def __init__(
        self,
        versions: Iterable[Version] = (),
        max_versions: int = DEFAULT_MAX_VERSIONS,
    ) -> None:
        if max_versions < 1:
            raise InvalidArgument("max_versions must be at least 1")
        self.max_versions = max_versions
        self._versions: list[Version] = list(versions)

    def __len__(self) -> int:
        return len(self._versions)

    @property
    def versions(self) -> tuple[Version, ...]:
        """Chronological view, oldest first."""
        return tuple(self._versions)

    def create_founding(self, content: str, note: str = FOUNDING_NOTE) -> Version:
        """Start the ledger of a new document whose content is `content`."""
        ensure_text(content, "content")
        if self._versions:
            raise InvalidOperation("ledger already has a founding version")
        version = Version(
            id=uuid.uuid4(),
            timestamp=_utcnow(),
            diff=None,
            note=note.strip() or FOUNDING_NOTE,
        )
        self._versions.append(version)
        return version

    def append_version(
        self,
        old_content: str,
        new_content: str,
        note: str = UPDATE_NOTE,
    ) -> AppendResult | None:
        """Record the change old -> new; returns None when nothing changed."""
        diff = calculate(old_content, new_content)
        if old_content == new_content:
            return None

        version = Version(
            id=uuid.uuid4(),
            timestamp=_utcnow(),
            diff=diff,
            note=note.strip() or UPDATE_NOTE,
        )
        self._versions.append(version)

        evicted: list[Version] = []
        while len(self._versions) > self.max_versions:
            evicted.append(self._versions.pop(0))
        return AppendResult(version=version, evicted=evicted)

    def list_versions(self) -> list[Version]:
        """Newest first."""
        return list(reversed(self._versions))

    def get_version(self, version_id: uuid.UUID) -> Version:
        return self._versions[self._index_of(version_id)]

    def delete_version(self, version_id: uuid.UUID) -> Version:
        index = self._index_of(version_id)
        if len(self._versions) == 1:
            raise InvalidOperation("cannot delete the only remaining version")
        return self._versions.pop(index)

    def reconstruct(self, version_id: uuid.UUID, current_content: str) -> str:
        """Content as of `version_id`, rebuilt by reverting newer diffs in turn."""
        ensure_text(current_content, "current_content")
        target = self._index_of(version_id)

        content = current_content
        for version in reversed(self._versions[target + 1:]):
            if version.diff is not None:
                content = revert(content, version.diff)
        return content

    def restore_to_version(self, version_id: uuid.UUID, current_content: str) -> RestoreResult:
        """Rebuild `version_id` and commit it as a new head version."""
        target = self.get_version(version_id)
        content = self.reconstruct(version_id, current_content)
        note = f"Restored from: {target.timestamp:%Y-%m-%d %H:%M:%S}"
        appended = self.append_version(current_content, content, note)
        return RestoreResult(content=content, target=target, appended=appended)

    def _index_of(self, version_id: uuid.UUID) -> int:
        for i, version in enumerate(self._versions):
            if version.id == version_id:
                return i
        raise NotFound(f"version {version_id} not found")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)
