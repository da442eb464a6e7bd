"""
Statistics and Tag Catalog Schemas.
"""

from datetime import date, datetime

from pydantic import BaseModel, Field

from codeboard.backend.models.tag import NoteTag


class TagInfo(BaseModel):
    """One entry of the tag catalog."""

    name: str
    display_name: str
    emoji: str
    description: str

    @classmethod
    def from_tag(cls, tag: NoteTag) -> "TagInfo":
        return cls(
            name=tag.name,
            display_name=tag.display_name,
            emoji=tag.emoji,
            description=tag.description,
        )


class TagCount(BaseModel):
    """Number of notes carrying a tag."""

    tag: str
    display_name: str
    emoji: str
    count: int


class LanguageCount(BaseModel):
    """Number of snippets in a language."""

    language: str
    count: int


class DailyCount(BaseModel):
    """Number of notes created on a calendar day."""

    day: date
    count: int


class StatsOverview(BaseModel):
    """Store-wide totals and breakdowns."""

    total_notes: int
    total_snippets: int
    untagged_notes: int
    tags_usage: dict[str, int] = Field(description="Tag name to note count")
    language_breakdown: dict[str, int] = Field(description="Language to snippet count")
    generated_at: datetime
