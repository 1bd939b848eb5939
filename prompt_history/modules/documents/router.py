"""Document API router: the thin host around the version ledger."""

from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from prompt_history.core.database import get_db
from prompt_history.modules.documents import service
from prompt_history.modules.documents.schemas import (
    DocumentCreateRequest,
    DocumentResponse,
    DocumentUpdateRequest,
    DocumentUpdateResponse,
)

router = APIRouter(prefix="/documents", tags=["documents"])


@router.post("", response_model=DocumentUpdateResponse, status_code=status.HTTP_201_CREATED)
async def create_document(
    body: DocumentCreateRequest,
    db: AsyncSession = Depends(get_db),
):
    """Create a document; its founding version is recorded at the same time."""
    document, founding = await service.create_document(
        db, body.name, body.content, body.note
    )
    return DocumentUpdateResponse(
        document=DocumentResponse.model_validate(document),
        version=founding,
    )


@router.get("/{document_id}", response_model=DocumentResponse)
async def get_document(
    document_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
):
    document = await service.get_document(db, document_id)
    return DocumentResponse.model_validate(document)


@router.put("/{document_id}", response_model=DocumentUpdateResponse)
async def update_document(
    document_id: uuid.UUID,
    body: DocumentUpdateRequest,
    db: AsyncSession = Depends(get_db),
):
    """Update a document. `saveVersion` records the content change in the ledger."""
    document, version = await service.update_document(
        db,
        document_id,
        name=body.name,
        content=body.content,
        save_version=body.save_version,
        note=body.note,
    )
    return DocumentUpdateResponse(
        document=DocumentResponse.model_validate(document),
        version=version,
    )


@router.delete("/{document_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_document(
    document_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
) -> None:
    await service.delete_document(db, document_id)
