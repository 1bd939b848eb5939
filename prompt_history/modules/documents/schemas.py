"""Document schemas."""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Annotated

from pydantic import ConfigDict, StringConstraints

from prompt_history.modules.versions.schemas import Version
from prompt_history.schemas.common import CamelModel

# Stripped before the length check, so a blank name is rejected.
DocumentName = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=255)]


class DocumentCreateRequest(CamelModel):
    name: DocumentName
    content: str = ""
    note: str = ""


class DocumentUpdateRequest(CamelModel):
    """Omitted fields keep their value. A version is recorded only when
    `save_version` is set and the content actually changes."""

    name: DocumentName | None = None
    content: str | None = None
    save_version: bool = False
    note: str = ""


class DocumentResponse(CamelModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: str
    content: str
    created_at: datetime
    updated_at: datetime


class DocumentUpdateResponse(CamelModel):
    document: DocumentResponse
    version: Version | None
