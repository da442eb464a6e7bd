"""
Snippet Repository.

Data access layer for snippets.
"""

from datetime import datetime

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from codeboard.backend.core.pagination import Page, PageParams
from codeboard.backend.models.snippet import Snippet
from codeboard.backend.repositories.base import BaseRepository


class SnippetRepository(BaseRepository[Snippet]):
    """Repository for Snippet model."""

    model = Snippet
    resource_name = "Snippet"
    sortable_fields = frozenset({"id", "name", "language", "created_at", "updated_at"})

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)

    async def get_by_note(self, note_id: int) -> list[Snippet]:
        """Snippets of one note in creation order."""
        return await self._fetch_all(
            select(Snippet)
            .where(Snippet.note_id == note_id)
            .order_by(Snippet.created_at.asc(), Snippet.id.asc())
        )

    async def search_content(
        self,
        term: str,
        params: PageParams | None = None,
    ) -> list[Snippet] | Page[Snippet]:
        """Snippets whose content contains the term (case-insensitive)."""
        stmt = select(Snippet).where(Snippet.content.icontains(term, autoescape=True))
        return await self._fetch_sorted(stmt, params)

    async def get_by_language(self, language: str) -> list[Snippet]:
        return await self._fetch_all(
            select(Snippet)
            .where(func.lower(Snippet.language) == language.lower())
            .order_by(*self._default_order())
        )

    async def find_by_name(self, term: str) -> list[Snippet]:
        return await self._fetch_all(
            select(Snippet)
            .where(Snippet.name.icontains(term, autoescape=True))
            .order_by(*self._default_order())
        )

    async def get_without_language(self) -> list[Snippet]:
        return await self._fetch_all(
            select(Snippet)
            .where(or_(Snippet.language.is_(None), func.trim(Snippet.language) == ""))
            .order_by(*self._default_order())
        )

    async def get_created_since(self, since: datetime) -> list[Snippet]:
        return await self._fetch_all(
            select(Snippet)
            .where(Snippet.created_at >= since)
            .order_by(*self._default_order())
        )

    async def get_larger_than(self, min_chars: int) -> list[Snippet]:
        """Snippets whose content is longer than min_chars, longest first."""
        length = func.length(Snippet.content)
        return await self._fetch_all(
            select(Snippet)
            .where(length > min_chars)
            .order_by(length.desc(), Snippet.id.asc())
        )

    async def count_by_language(self) -> list[tuple[str, int]]:
        """(lower-cased language, count), most used first; blank languages excluded."""
        language = func.lower(Snippet.language).label("language")
        snippet_count = func.count(Snippet.id).label("snippet_count")
        result = await self.session.execute(
            select(language, snippet_count)
            .where(Snippet.language.is_not(None), func.trim(Snippet.language) != "")
            .group_by(language)
            .order_by(snippet_count.desc(), language.asc())
        )
        return [(name, count) for name, count in result.all()]
