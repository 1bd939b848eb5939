"""Version ledger service: loads a document's ledger, mutates it, persists it.

Every mutating call runs under the document's lock and commits before
releasing it, so read -> compute -> persist never interleaves for one document.
"""

from __future__ import annotations

import uuid

import structlog
from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from prompt_history.core.config import settings
from prompt_history.core.exceptions import NotFound
from prompt_history.core.locks import document_lock
from prompt_history.models.documents import Document, DocumentVersion
from prompt_history.modules.text_diff.schemas import DiffObject
from prompt_history.modules.versions.ledger import (
    AppendResult,
    FOUNDING_NOTE,
    RestoreResult,
    UPDATE_NOTE,
    VersionLedger,
)
from prompt_history.modules.versions.schemas import Version

logger = structlog.get_logger()


# ── Persistence helpers ───────────────────────────────────────────────────────


def _to_version(row: DocumentVersion) -> Version:
    return Version(
        id=row.id,
        timestamp=row.created_at,
        diff=DiffObject.from_json(row.diff) if row.diff is not None else None,
        note=row.note,
    )


async def _get_document(db: AsyncSession, document_id: uuid.UUID) -> Document:
    document = await db.get(Document, document_id)
    if document is None:
        raise NotFound(f"document {document_id} not found")
    return document


async def _load_rows(db: AsyncSession, document_id: uuid.UUID) -> list[DocumentVersion]:
    result = await db.execute(
        select(DocumentVersion)
        .where(DocumentVersion.document_id == document_id)
        .order_by(DocumentVersion.sequence.asc())
    )
    return list(result.scalars().all())


async def load_ledger(
    db: AsyncSession, document_id: uuid.UUID
) -> tuple[VersionLedger, list[DocumentVersion]]:
    rows = await _load_rows(db, document_id)
    ledger = VersionLedger((_to_version(r) for r in rows), max_versions=settings.MAX_VERSIONS)
    return ledger, rows


def _add_row(
    db: AsyncSession, document_id: uuid.UUID, version: Version, sequence: int
) -> DocumentVersion:
    row = DocumentVersion(
        id=version.id,
        document_id=document_id,
        sequence=sequence,
        diff=version.diff.to_json() if version.diff is not None else None,
        note=version.note,
        created_at=version.timestamp,
    )
    db.add(row)
    return row


async def _persist_append(
    db: AsyncSession,
    document_id: uuid.UUID,
    rows: list[DocumentVersion],
    result: AppendResult,
) -> None:
    next_sequence = rows[-1].sequence + 1 if rows else 0
    _add_row(db, document_id, result.version, next_sequence)

    if result.evicted:
        by_id = {r.id: r for r in rows}
        for version in result.evicted:
            await db.delete(by_id[version.id])
        logger.info(
            "version.evicted",
            document_id=str(document_id),
            count=len(result.evicted),
            max_versions=settings.MAX_VERSIONS,
        )

    logger.info(
        "version.created",
        document_id=str(document_id),
        version_id=str(result.version.id),
        total_changes=result.version.diff.stats.total_changes if result.version.diff else 0,
    )


# ── Ledger operations ─────────────────────────────────────────────────────────


async def create_founding(
    db: AsyncSession, document_id: uuid.UUID, content: str, note: str = FOUNDING_NOTE
) -> Version:
    """Start the ledger of a freshly created document. Caller commits."""
    ledger = VersionLedger(max_versions=settings.MAX_VERSIONS)
    version = ledger.create_founding(content, note)
    _add_row(db, document_id, version, 0)
    await db.flush()
    logger.info("version.founded", document_id=str(document_id), version_id=str(version.id))
    return version


async def append_version(
    db: AsyncSession,
    document_id: uuid.UUID,
    old_content: str,
    new_content: str,
    note: str = UPDATE_NOTE,
) -> AppendResult | None:
    """Append old -> new to the ledger. The caller holds the document lock."""
    ledger, rows = await load_ledger(db, document_id)
    result = ledger.append_version(old_content, new_content, note)
    if result is None:
        logger.debug("version.skipped_unchanged", document_id=str(document_id))
        return None
    await _persist_append(db, document_id, rows, result)
    await db.flush()
    return result


async def list_versions(db: AsyncSession, document_id: uuid.UUID) -> list[Version]:
    """All versions of a document, newest first."""
    await _get_document(db, document_id)
    ledger, _ = await load_ledger(db, document_id)
    return ledger.list_versions()


async def get_version_content(
    db: AsyncSession, document_id: uuid.UUID, version_id: uuid.UUID
) -> str:
    """Content as of `version_id`, without touching the ledger."""
    document = await _get_document(db, document_id)
    ledger, _ = await load_ledger(db, document_id)
    return ledger.reconstruct(version_id, document.content)


async def delete_version(
    db: AsyncSession, document_id: uuid.UUID, version_id: uuid.UUID
) -> Version:
    async with document_lock(document_id):
        await _get_document(db, document_id)
        ledger, _ = await load_ledger(db, document_id)
        removed = ledger.delete_version(version_id)
        await db.execute(delete(DocumentVersion).where(DocumentVersion.id == removed.id))
        await db.commit()

    logger.info("version.deleted", document_id=str(document_id), version_id=str(version_id))
    return removed


async def restore_to_version(
    db: AsyncSession, document_id: uuid.UUID, version_id: uuid.UUID
) -> RestoreResult:
    """Rebuild `version_id` and make it the document's content as a new version."""
    async with document_lock(document_id):
        document = await _get_document(db, document_id)
        await db.refresh(document)
        ledger, rows = await load_ledger(db, document_id)
        result = ledger.restore_to_version(version_id, document.content)

        if result.appended is not None:
            await _persist_append(db, document_id, rows, result.appended)
            document.content = result.content
        await db.commit()

    logger.info(
        "version.restored",
        document_id=str(document_id),
        restored_from=str(version_id),
        changed=result.appended is not None,
    )
    return result
