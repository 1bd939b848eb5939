"""Documents and their version ledger: append-only diff history per document."""

import uuid

from sqlalchemy import ForeignKey, Index, Integer, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from prompt_history.core.database import JSONType
from prompt_history.models.base import BaseModel, TimestampedModel


class Document(BaseModel):
    """A text document; owns the current content, independent of its ledger."""

    __tablename__ = "documents"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False, default="")

    def __repr__(self) -> str:
        return f"<Document(id={self.id}, name={self.name!r})>"


class DocumentVersion(TimestampedModel):
    """One ledger entry. `created_at` is the version timestamp.

    `diff` holds the DiffObject JSON from the previous entry's content to this
    entry's content, or NULL for the founding entry.
    """

    __tablename__ = "document_versions"

    document_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("documents.id", ondelete="CASCADE"), nullable=False, index=True
    )
    # Chronological position within the document's ledger; gaps after deletes are fine.
    sequence: Mapped[int] = mapped_column(Integer, nullable=False)
    diff: Mapped[dict | None] = mapped_column(JSONType, nullable=True)
    # {added: [...], removed: [...], modified: [...], stats: {...}}
    note: Mapped[str] = mapped_column(Text, nullable=False, default="")

    __table_args__ = (
        Index("ix_document_version_doc_seq", "document_id", "sequence", unique=True),
    )

    def __repr__(self) -> str:
        return (
            f"<DocumentVersion(id={self.id}, document_id={self.document_id}, "
            f"seq={self.sequence})>"
        )
