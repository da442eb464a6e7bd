"""
Snippet Schemas.

Pydantic schemas for snippet API request/response validation. Length
limits are enforced by the service layer so every caller gets the same
validation failure.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


class SnippetFields(BaseModel):
    """Editable snippet fields."""

    name: str = Field(
        ...,
        description="Snippet name (max 200 characters)",
        examples=["Binary search"],
    )
    language: str | None = Field(
        default=None,
        description="Language; detected from content when omitted",
        examples=["python"],
    )
    content: str | None = Field(
        default=None,
        description="Snippet body (max 100,000 characters)",
    )
    image_url: str | None = Field(
        default=None,
        description="Optional screenshot URL (max 1000 characters)",
    )


class SnippetInput(SnippetFields):
    """
    Snippet inside a note create/update payload.

    On update, an id that belongs to the note updates that snippet in place;
    entries without one are inserted.
    """

    id: int | None = Field(default=None, description="Existing snippet id")


class SnippetCreate(SnippetFields):
    """Schema for creating a standalone snippet."""

    note_id: int | None = Field(default=None, description="Owning note id")

    @model_validator(mode="before")
    @classmethod
    def _lift_note_reference(cls, data: Any) -> Any:
        # Accept {"note": {"id": 1}} as well as {"note_id": 1}
        if isinstance(data, dict) and data.get("note_id") is None:
            note = data.get("note")
            if isinstance(note, dict) and note.get("id") is not None:
                data = {k: v for k, v in data.items() if k != "note"}
                data["note_id"] = note["id"]
        return data


class SnippetUpdate(SnippetFields):
    """Schema for replacing a snippet's fields. The owner is not changeable here."""


class SnippetLanguageUpdate(BaseModel):
    """Schema for changing only the language."""

    language: str = Field(..., description="New language", examples=["go"])


class SnippetResponse(BaseModel):
    """Schema for snippet in API responses."""

    id: int = Field(description="Snippet unique identifier")
    name: str = Field(description="Snippet name")
    language: str | None = Field(description="Declared language")
    detected_language: str = Field(description="Declared or detected language")
    content: str | None = Field(description="Snippet body")
    image_url: str | None = Field(description="Screenshot URL")
    note_id: int = Field(description="Owning note id")
    line_count: int = Field(description="Number of lines in content")
    created_at: datetime = Field(description="Creation timestamp")
    updated_at: datetime = Field(description="Last update timestamp")

    model_config = ConfigDict(from_attributes=True)


class SnippetListResponse(BaseModel):
    """Compact snippet for list endpoints."""

    id: int
    name: str
    detected_language: str
    content_preview: str
    note_id: int
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
