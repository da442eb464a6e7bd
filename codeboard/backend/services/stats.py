"""
Stats Service.

Read-only aggregates over notes and snippets: tag usage, language
breakdown, notes created per day and a store-wide overview.
"""

from datetime import date

from sqlalchemy.ext.asyncio import AsyncSession

from codeboard.backend.core.exceptions import ValidationError
from codeboard.backend.core.utils import as_date, end_of_day, start_of_day, utc_now
from codeboard.backend.models.tag import NoteTag
from codeboard.backend.repositories.note import NoteRepository
from codeboard.backend.repositories.snippet import SnippetRepository
from codeboard.backend.schemas.stats import StatsOverview
from codeboard.backend.services.base import BaseService


class StatsService(BaseService):
    """Service for aggregate reporting."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)
        self.note_repo = NoteRepository(session)
        self.snippet_repo = SnippetRepository(session)

    async def note_stats_by_tag(self) -> list[tuple[NoteTag, int]]:
        """(tag, note count) for tags in use, highest count first."""
        return await self.note_repo.count_by_tag()

    async def snippet_stats_by_language(self) -> list[tuple[str, int]]:
        """(language, snippet count) by lower-cased language, highest count first."""
        return await self.snippet_repo.count_by_language()

    async def notes_created_per_day(self, start: date, end: date) -> list[tuple[date, int]]:
        """
        Notes created per calendar day within [start, end], oldest day first.

        Days without notes are omitted.

        Raises:
            ValidationError: If start is after end
        """
        if start > end:
            raise ValidationError(
                "start_date must not be after end_date",
                details={"start_date": start.isoformat(), "end_date": end.isoformat()},
            )
        rows = await self.note_repo.count_created_per_day(start_of_day(start), end_of_day(end))
        return [(as_date(day), count) for day, count in rows]

    async def overview(self) -> StatsOverview:
        """Totals plus tag and language breakdowns."""
        self._log_debug("Building stats overview")
        tags = await self.note_stats_by_tag()
        languages = await self.snippet_stats_by_language()
        return StatsOverview(
            total_notes=await self.note_repo.count(),
            total_snippets=await self.snippet_repo.count(),
            untagged_notes=await self.note_repo.count_untagged(),
            tags_usage={tag.name: count for tag, count in tags},
            language_breakdown=dict(languages),
            generated_at=utc_now(),
        )
