"""
Note Schemas.

Pydantic schemas for note API request/response validation. Tags travel
as enum names ("DATABASE", "api"); unknown names fail request validation.
"""

from datetime import datetime
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from codeboard.backend.models.tag import NoteTag
from codeboard.backend.schemas.snippet import SnippetInput, SnippetResponse


def _parse_tags(value: Any) -> set[NoteTag]:
    if value is None:
        return set()
    if isinstance(value, (str, NoteTag)):
        value = [value]
    elif not isinstance(value, (list, set, tuple, frozenset)):
        raise ValueError("tags must be a tag name or a list of tag names")
    tags = set()
    for item in value:
        tags.add(item if isinstance(item, NoteTag) else NoteTag.from_name(str(item)))
    return tags


class NoteCreate(BaseModel):
    """Schema for creating a new note."""

    title: str = Field(
        ...,
        description="Note title (max 200 characters)",
        examples=["Dijkstra in 20 lines"],
    )
    description: str | None = Field(
        default=None,
        description="Short summary (max 1000 characters)",
    )
    content: str | None = Field(
        default=None,
        description="Note body (max 50,000 characters)",
    )
    tags: set[NoteTag] = Field(
        default_factory=set,
        description="Tag names",
        examples=[["ALGORITHM", "SNIPPET"]],
    )
    snippets: list[SnippetInput] = Field(
        default_factory=list,
        description="Snippets created together with the note",
    )

    @field_validator("tags", mode="before")
    @classmethod
    def _validate_tags(cls, value: Any) -> set[NoteTag]:
        return _parse_tags(value)


class NoteUpdate(BaseModel):
    """
    Schema for replacing a note.

    Title, description, content and tags are replaced wholesale. When
    `snippets` is present the snippet list is reconciled against it;
    when omitted the snippets are left alone.
    """

    title: str = Field(..., description="Note title (max 200 characters)")
    description: str | None = Field(default=None, description="Short summary")
    content: str | None = Field(default=None, description="Note body")
    tags: set[NoteTag] = Field(default_factory=set, description="Tag names")
    snippets: list[SnippetInput] | None = Field(
        default=None,
        description="Full snippet list; omitted snippets are deleted",
    )

    @field_validator("tags", mode="before")
    @classmethod
    def _validate_tags(cls, value: Any) -> set[NoteTag]:
        return _parse_tags(value)


class NoteTagsUpdate(BaseModel):
    """Schema for replacing only the tag set."""

    tags: set[NoteTag] = Field(default_factory=set, description="Tag names")

    @field_validator("tags", mode="before")
    @classmethod
    def _validate_tags(cls, value: Any) -> set[NoteTag]:
        return _parse_tags(value)


class NoteResponse(BaseModel):
    """Schema for note in API responses."""

    id: int = Field(description="Note unique identifier")
    title: str = Field(description="Note title")
    description: str | None = Field(description="Short summary")
    content: str | None = Field(description="Note body")
    tags: list[str] = Field(
        validation_alias=AliasChoices("tag_names", "tags"),
        description="Tag names, sorted",
    )
    snippet_count: int = Field(description="Number of snippets")
    created_at: datetime = Field(description="Creation timestamp")
    updated_at: datetime = Field(description="Last update timestamp")

    model_config = ConfigDict(from_attributes=True)


class NoteDetailResponse(NoteResponse):
    """Note with its snippets."""

    snippets: list[SnippetResponse] = Field(description="Snippets in creation order")


class NoteListResponse(BaseModel):
    """Compact note for list endpoints."""

    id: int
    title: str
    description: str | None
    content_preview: str
    tags: list[str] = Field(validation_alias=AliasChoices("tag_names", "tags"))
    snippet_count: int
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
