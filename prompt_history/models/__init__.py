"""SQLAlchemy models package: import all models so Base.metadata is populated."""

from prompt_history.models.base import BaseModel, TimestampedModel
from prompt_history.models.documents import Document, DocumentVersion

__all__ = [
    "BaseModel",
    "Document",
    "DocumentVersion",
    "TimestampedModel",
]
