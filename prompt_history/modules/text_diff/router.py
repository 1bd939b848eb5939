"""Text diff API router: stateless preview / patch endpoints."""

from __future__ import annotations

import structlog
from fastapi import APIRouter

from prompt_history.modules.text_diff import apply, calculate, format_diff, revert
from prompt_history.modules.text_diff.schemas import (
    DiffRequest,
    DiffResponse,
    PatchRequest,
    PatchResponse,
)

logger = structlog.get_logger()

router = APIRouter(prefix="/diff", tags=["text-diff"])


@router.post("", response_model=DiffResponse)
async def compute_diff(body: DiffRequest) -> DiffResponse:
    """Diff two texts and render the human readable report."""
    diff = calculate(body.old_text, body.new_text)
    logger.debug("diff.calculated", total_changes=diff.stats.total_changes)
    return DiffResponse(diff=diff, report=format_diff(diff))


@router.post("/apply", response_model=PatchResponse)
async def apply_diff(body: PatchRequest) -> PatchResponse:
    """Rebuild the new text from the old text and a diff."""
    return PatchResponse(text=apply(body.text, body.diff))


@router.post("/revert", response_model=PatchResponse)
async def revert_diff(body: PatchRequest) -> PatchResponse:
    """Rebuild the old text from the new text and a diff."""
    return PatchResponse(text=revert(body.text, body.diff))
