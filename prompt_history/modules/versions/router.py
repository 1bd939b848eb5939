"""Version ledger API router."""

from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from prompt_history.core.config import settings
from prompt_history.core.database import get_db
from prompt_history.modules.versions import service
from prompt_history.modules.versions.schemas import (
    RestoreResponse,
    VersionContentResponse,
    VersionListItem,
    VersionListResponse,
)

router = APIRouter(prefix="/documents", tags=["document-versions"])


@router.get("/{document_id}/versions", response_model=VersionListResponse)
async def list_versions(
    document_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
):
    """List all versions of a document, newest first, each with its diff report."""
    versions = await service.list_versions(db, document_id)
    return VersionListResponse(
        items=[VersionListItem.from_version(v) for v in versions],
        total=len(versions),
        max_versions=settings.MAX_VERSIONS,
    )


@router.get(
    "/{document_id}/versions/{version_id}/content",
    response_model=VersionContentResponse,
)
async def get_version_content(
    document_id: uuid.UUID,
    version_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
):
    """Preview the content a version had, without restoring it."""
    content = await service.get_version_content(db, document_id, version_id)
    return VersionContentResponse(version_id=version_id, content=content)


@router.delete(
    "/{document_id}/versions/{version_id}",
    status_code=status.HTTP_204_NO_CONTENT,
)
async def delete_version(
    document_id: uuid.UUID,
    version_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
) -> None:
    """Delete one version. The last remaining version cannot be deleted."""
    await service.delete_version(db, document_id, version_id)


@router.post(
    "/{document_id}/versions/{version_id}/restore",
    response_model=RestoreResponse,
)
async def restore_version(
    document_id: uuid.UUID,
    version_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
):
    """Time travel: make a past version's content current, as a new version."""
    result = await service.restore_to_version(db, document_id, version_id)
    return RestoreResponse(
        document_id=document_id,
        content=result.content,
        restored_from=version_id,
        version=result.appended.version if result.appended else None,
    )
