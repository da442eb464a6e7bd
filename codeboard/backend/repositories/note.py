"""
Note Repository.

Data access layer for notes: substring search, tag union and
intersection, date-range search, activity windows and tag counts.
"""

from collections.abc import Collection
from datetime import datetime

from sqlalchemy import Select, case, distinct, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from codeboard.backend.core.pagination import Page, PageParams
from codeboard.backend.models.note import Note, NoteTagLink
from codeboard.backend.models.snippet import Snippet
from codeboard.backend.models.tag import NoteTag
from codeboard.backend.repositories.base import BaseRepository


def _text_match(term: str):
    """Case-insensitive substring match on title, description or content."""
    return or_(
        Note.title.icontains(term, autoescape=True),
        Note.description.icontains(term, autoescape=True),
        Note.content.icontains(term, autoescape=True),
    )


class NoteRepository(BaseRepository[Note]):
    """
    Repository for Note model.

    Every SELECT repopulates already-loaded notes so the snippet and tag
    collections reflect rows written elsewhere in the same session.
    """

    model = Note
    resource_name = "Note"
    sortable_fields = frozenset({"id", "title", "created_at", "updated_at"})

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)

    def _select(self) -> Select:
        return select(Note).execution_options(populate_existing=True)

    async def search(self, term: str) -> list[Note]:
        """Notes whose title, description or content contains the term."""
        return await self._fetch_all(
            self._select().where(_text_match(term)).order_by(*self._default_order())
        )

    async def find_by_title(self, term: str) -> list[Note]:
        """Notes whose title contains the term (case-insensitive)."""
        return await self._fetch_all(
            self._select()
            .where(Note.title.icontains(term, autoescape=True))
            .order_by(*self._default_order())
        )

    async def get_by_tags_any(self, tags: Collection[NoteTag]) -> list[Note]:
        """Notes carrying at least one of the tags."""
        note_ids = select(NoteTagLink.note_id).where(NoteTagLink.tag.in_(list(tags)))
        return await self._fetch_all(
            self._select().where(Note.id.in_(note_ids)).order_by(*self._default_order())
        )

    async def get_by_tags_all(self, tags: Collection[NoteTag]) -> list[Note]:
        """
        Notes carrying every one of the tags.

        Join rows are grouped per note and the distinct matching tags
        counted against the size of the requested set.
        """
        wanted = set(tags)
        note_ids = (
            select(NoteTagLink.note_id)
            .where(NoteTagLink.tag.in_(list(wanted)))
            .group_by(NoteTagLink.note_id)
            .having(func.count(distinct(NoteTagLink.tag)) == len(wanted))
        )
        return await self._fetch_all(
            self._select().where(Note.id.in_(note_ids)).order_by(*self._default_order())
        )

    async def advanced_search(
        self,
        params: PageParams,
        term: str | None = None,
        tags: Collection[NoteTag] | None = None,
        start_date: datetime | None = None,
        end_date: datetime | None = None,
    ) -> Page[Note]:
        """
        Combined search, always paged.

        Term, tags (any-match) and the inclusive created_at range are
        ANDed; each is skipped when not given.
        """
        stmt = self._select()
        if term:
            stmt = stmt.where(_text_match(term))
        if tags:
            note_ids = select(NoteTagLink.note_id).where(NoteTagLink.tag.in_(list(tags)))
            stmt = stmt.where(Note.id.in_(note_ids))
        if start_date is not None:
            stmt = stmt.where(Note.created_at >= start_date)
        if end_date is not None:
            stmt = stmt.where(Note.created_at <= end_date)
        return await self._fetch_page(stmt, params)

    async def get_untagged(self) -> list[Note]:
        """Notes with no tags at all."""
        return await self._fetch_all(
            self._select().where(~Note.tag_links.any()).order_by(*self._default_order())
        )

    async def get_recently_active(self, since: datetime) -> list[Note]:
        """Notes created or updated since the cut-off, most recent activity first."""
        last_activity = case(
            (Note.updated_at > Note.created_at, Note.updated_at),
            else_=Note.created_at,
        )
        return await self._fetch_all(
            self._select()
            .where(or_(Note.created_at >= since, Note.updated_at >= since))
            .order_by(last_activity.desc(), Note.id.asc())
        )

    async def get_by_snippet_language(self, language: str) -> list[Note]:
        """Notes owning at least one snippet in the given language."""
        note_ids = select(Snippet.note_id).where(func.lower(Snippet.language) == language.lower())
        return await self._fetch_all(
            self._select().where(Note.id.in_(note_ids)).order_by(*self._default_order())
        )

    async def count_by_tag(self) -> list[tuple[NoteTag, int]]:
        """(tag, distinct note count) for every tag in use, most used first."""
        note_count = func.count(distinct(NoteTagLink.note_id)).label("note_count")
        result = await self.session.execute(
            select(NoteTagLink.tag, note_count)
            .group_by(NoteTagLink.tag)
            .order_by(note_count.desc(), NoteTagLink.tag.asc())
        )
        return [(tag, count) for tag, count in result.all()]

    async def count_created_per_day(
        self,
        start: datetime,
        end: datetime,
    ) -> list[tuple[object, int]]:
        """Raw (day, count) rows for notes created within [start, end]."""
        day = func.date(Note.created_at).label("day")
        result = await self.session.execute(
            select(day, func.count(Note.id))
            .where(Note.created_at >= start, Note.created_at <= end)
            .group_by(day)
            .order_by(day.asc())
        )
        return [(bucket, count) for bucket, count in result.all()]

    async def count_untagged(self) -> int:
        result = await self.session.execute(
            select(func.count()).select_from(Note).where(~Note.tag_links.any())
        )
        return result.scalar_one()
