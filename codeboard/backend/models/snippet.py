"""
Snippet Model.

A named piece of code owned by exactly one note. The snippet keeps only the
owner's id; ownership (and cascade delete) lives on Note.snippets.
"""

from sqlalchemy import ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from codeboard.backend.models.base import Base, IdentityEqualityMixin, IntegerIdMixin, TimestampMixin
from codeboard.backend.models.language import resolve_language

NAME_MAX_LENGTH = 200
LANGUAGE_MAX_LENGTH = 50
CONTENT_MAX_LENGTH = 100_000
IMAGE_URL_MAX_LENGTH = 1000

PREVIEW_LENGTH = 100


class Snippet(IdentityEqualityMixin, IntegerIdMixin, TimestampMixin, Base):
    """Snippet database model."""

    __tablename__ = "code_snippets"

    name: Mapped[str] = mapped_column(
        String(NAME_MAX_LENGTH),
        nullable=False,
        index=True,
    )
    language: Mapped[str | None] = mapped_column(
        String(LANGUAGE_MAX_LENGTH),
        nullable=True,
        index=True,
    )
    content: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
    )
    image_url: Mapped[str | None] = mapped_column(
        String(IMAGE_URL_MAX_LENGTH),
        nullable=True,
    )
    note_id: Mapped[int] = mapped_column(
        ForeignKey("code_notes.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    @property
    def detected_language(self) -> str:
        return resolve_language(self.language, self.content)

    @property
    def content_preview(self) -> str:
        if not self.content or not self.content.strip():
            return "(Empty snippet)"
        if len(self.content) <= PREVIEW_LENGTH:
            return self.content
        return self.content[:PREVIEW_LENGTH] + "..."

    @property
    def line_count(self) -> int:
        if not self.content:
            return 0
        return len(self.formatted_content.split("\n"))

    @property
    def formatted_content(self) -> str:
        if self.content is None:
            return ""
        return self.content.replace("\r\n", "\n").replace("\r", "\n")

    def __repr__(self) -> str:
        return f"<Snippet(id={self.id}, name={self.name!r}, note_id={self.note_id})>"
