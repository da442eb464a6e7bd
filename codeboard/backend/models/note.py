"""
Note Model.

The primary entity: a titled code/text record with an optional description,
a set of tags and an owned, creation-ordered list of snippets.
"""

from collections.abc import Iterable

from sqlalchemy import Enum, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from codeboard.backend.models.base import Base, IdentityEqualityMixin, IntegerIdMixin, TimestampMixin
from codeboard.backend.models.snippet import Snippet
from codeboard.backend.models.tag import NoteTag

TITLE_MAX_LENGTH = 200
DESCRIPTION_MAX_LENGTH = 1000
CONTENT_MAX_LENGTH = 50_000

PREVIEW_LENGTH = 150


class NoteTagLink(Base):
    """Join row attaching one tag (stored by enum name) to one note."""

    __tablename__ = "note_tags"

    note_id: Mapped[int] = mapped_column(
        ForeignKey("code_notes.id", ondelete="CASCADE"),
        primary_key=True,
    )
    tag: Mapped[NoteTag] = mapped_column(
        Enum(NoteTag, native_enum=False, length=32),
        primary_key=True,
        index=True,
    )

    def __repr__(self) -> str:
        return f"<NoteTagLink(note_id={self.note_id}, tag={self.tag.name})>"


class Note(IdentityEqualityMixin, IntegerIdMixin, TimestampMixin, Base):
    """
    Note database model.

    Tags are exposed as a set through `tags`; assigning a new set rewrites
    the join rows. Snippets are owned: removing one from `snippets` or
    deleting the note deletes the snippet rows.
    """

    __tablename__ = "code_notes"

    title: Mapped[str] = mapped_column(
        String(TITLE_MAX_LENGTH),
        nullable=False,
        index=True,
    )
    description: Mapped[str | None] = mapped_column(
        String(DESCRIPTION_MAX_LENGTH),
        nullable=True,
    )
    content: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
    )

    tag_links: Mapped[list[NoteTagLink]] = relationship(
        cascade="all, delete-orphan",
        lazy="selectin",
    )
    snippets: Mapped[list[Snippet]] = relationship(
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by=[Snippet.created_at, Snippet.id],
    )

    @property
    def tags(self) -> set[NoteTag]:
        return {link.tag for link in self.tag_links}

    @tags.setter
    def tags(self, value: Iterable[NoteTag] | None) -> None:
        wanted = set(value or ())
        current = self.tags
        kept = [link for link in self.tag_links if link.tag in wanted]
        added = [NoteTagLink(tag=tag) for tag in sorted(wanted - current, key=lambda t: t.name)]
        self.tag_links = kept + added

    @property
    def tag_names(self) -> list[str]:
        return sorted(tag.name for tag in self.tags)

    @property
    def tags_with_emoji(self) -> list[str]:
        return [NoteTag[name].display_with_emoji for name in self.tag_names]

    def has_tag(self, tag: NoteTag) -> bool:
        return tag in self.tags

    def add_tag(self, tag: NoteTag) -> None:
        if not self.has_tag(tag):
            self.tag_links.append(NoteTagLink(tag=tag))

    def remove_tag(self, tag: NoteTag) -> None:
        self.tags = self.tags - {tag}

    @property
    def snippet_count(self) -> int:
        return len(self.snippets)

    @property
    def content_preview(self) -> str:
        if self.content and self.content.strip():
            if len(self.content) <= PREVIEW_LENGTH:
                return self.content
            return self.content[:PREVIEW_LENGTH] + "..."
        if self.description and self.description.strip():
            return self.description
        return "(No content)"

    def __repr__(self) -> str:
        return f"<Note(id={self.id}, title={self.title!r})>"
