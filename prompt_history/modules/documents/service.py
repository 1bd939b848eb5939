"""Document service: the owner of current content, recording versions on edit."""

from __future__ import annotations

import uuid

import structlog
from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession

from prompt_history.core.exceptions import InvalidArgument, NotFound
from prompt_history.core.locks import document_lock
from prompt_history.models.documents import Document, DocumentVersion
from prompt_history.modules.text_diff.calculator import ensure_text
from prompt_history.modules.versions import service as versions_service
from prompt_history.modules.versions.ledger import FOUNDING_NOTE, UPDATE_NOTE
from prompt_history.modules.versions.schemas import Version

logger = structlog.get_logger()


def _clean_name(name: str) -> str:
    cleaned = ensure_text(name, "name").strip()
    if not cleaned:
        raise InvalidArgument("name must not be blank")
    return cleaned


async def get_document(db: AsyncSession, document_id: uuid.UUID) -> Document:
    document = await db.get(Document, document_id)
    if document is None:
        raise NotFound(f"document {document_id} not found")
    return document


async def create_document(
    db: AsyncSession,
    name: str,
    content: str = "",
    note: str = FOUNDING_NOTE,
) -> tuple[Document, Version]:
    """Create a document together with the founding entry of its ledger."""
    ensure_text(content, "content")
    document = Document(name=_clean_name(name), content=content)
    db.add(document)
    await db.flush()

    founding = await versions_service.create_founding(db, document.id, content, note)
    await db.commit()

    logger.info("document.created", document_id=str(document.id), length=len(content))
    return document, founding


async def update_document(
    db: AsyncSession,
    document_id: uuid.UUID,
    *,
    name: str | None = None,
    content: str | None = None,
    save_version: bool = False,
    note: str = UPDATE_NOTE,
) -> tuple[Document, Version | None]:
    """Update name and/or content; optionally record the content change.

    Runs under the document lock so concurrent edits of one document are
    applied one after the other, each diffed against the content the previous
    one committed.
    """
    if content is not None:
        ensure_text(content, "content")
    if name is not None:
        name = _clean_name(name)

    async with document_lock(document_id):
        document = await get_document(db, document_id)
        # Another session may have committed since this one last read the row.
        await db.refresh(document)

        old_content = document.content
        new_content = content if content is not None else old_content

        version: Version | None = None
        if save_version and new_content != old_content:
            result = await versions_service.append_version(
                db, document_id, old_content, new_content, note
            )
            version = result.version if result else None

        document.content = new_content
        if name is not None:
            document.name = name
        await db.commit()

    logger.info(
        "document.updated",
        document_id=str(document_id),
        versioned=version is not None,
    )
    return document, version


async def delete_document(db: AsyncSession, document_id: uuid.UUID) -> None:
    """Delete a document and its whole ledger."""
    async with document_lock(document_id):
        document = await get_document(db, document_id)
        await db.execute(delete(DocumentVersion).where(DocumentVersion.document_id == document_id))
        await db.delete(document)
        await db.commit()

    logger.info("document.deleted", document_id=str(document_id))
