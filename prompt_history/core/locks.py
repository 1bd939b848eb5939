"""Per-document write serialization.

Appending, restoring and deleting versions are read-modify-write cycles over a
single document's ledger. Two cycles for the same document must never
interleave, or the second diff is computed against stale content.
"""

from __future__ import annotations

import asyncio
import uuid
import weakref
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import structlog

logger = structlog.get_logger()

_LOCKS: weakref.WeakValueDictionary[uuid.UUID, asyncio.Lock] = weakref.WeakValueDictionary()


def get_document_lock(document_id: uuid.UUID) -> asyncio.Lock:
    """Return the lock guarding `document_id` (one per document while in use)."""
    lock = _LOCKS.get(document_id)
    if lock is None:
        lock = asyncio.Lock()
        _LOCKS[document_id] = lock
    return lock


@asynccontextmanager
async def document_lock(document_id: uuid.UUID) -> AsyncIterator[None]:
    lock = get_document_lock(document_id)
    if lock.locked():
        logger.debug("document_lock.waiting", document_id=str(document_id))
    async with lock:
        yield
