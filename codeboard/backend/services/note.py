"""
Note Service.

Business logic layer for notes. Orchestrates repositories,
handles validation, and implements business rules.
"""

from collections.abc import Collection
from datetime import date, datetime

from sqlalchemy.ext.asyncio import AsyncSession

from codeboard.backend.core.exceptions import ValidationError
from codeboard.backend.core.pagination import Page, PageParams
from codeboard.backend.core.utils import (
    MAX_WINDOW_DAYS,
    days_ago,
    end_of_day,
    start_of_day,
    utc_now,
)
from codeboard.backend.models.note import (
    CONTENT_MAX_LENGTH,
    DESCRIPTION_MAX_LENGTH,
    TITLE_MAX_LENGTH,
    Note,
)
from codeboard.backend.models.snippet import Snippet
from codeboard.backend.models.tag import NoteTag
from codeboard.backend.repositories.note import NoteRepository
from codeboard.backend.schemas.note import NoteCreate, NoteUpdate
from codeboard.backend.schemas.snippet import SnippetInput
from codeboard.backend.services.base import BaseService
from codeboard.backend.services.snippet import SnippetService


class NoteService(BaseService):
    """
    Service for note business logic.

    Handles note creation, replacement, tag updates, cascade deletion
    and the note-side queries with proper validation and error handling.
    """

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)
        self.repo = NoteRepository(session)
        self.snippets = SnippetService(session)

    def _validate_note(
        self,
        title: str | None,
        description: str | None,
        content: str | None,
    ) -> None:
        """
        Raises:
            ValidationError: If title is blank or any field is too long
        """
        self._validate_required({"title": title}, ["title"], entity="Note")
        self._validate_string_length(title, "title", max_length=TITLE_MAX_LENGTH, entity="Note")
        self._validate_string_length(
            description, "description", max_length=DESCRIPTION_MAX_LENGTH, entity="Note"
        )
        self._validate_string_length(
            content, "content", max_length=CONTENT_MAX_LENGTH, entity="Note"
        )

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    async def create_note(self, data: NoteCreate) -> Note:
        """
        Create a new note together with its inline snippets.

        Args:
            data: Note creation data

        Returns:
            Created note with id, timestamps and snippets populated

        Raises:
            ValidationError: If the note or any snippet is invalid
        """
        self._validate_note(data.title, data.description, data.content)
        for snippet in data.snippets:
            self.snippets.validate_snippet(snippet)

        self._log_operation(
            "Creating note",
            title=data.title,
            tags=sorted(tag.name for tag in data.tags),
            snippets=len(data.snippets),
        )

        now = utc_now()
        note = Note(
            title=data.title,
            description=data.description,
            content=data.content,
            created_at=now,
            updated_at=now,
        )
        note.tags = data.tags
        note.snippets = [self.snippets.build_snippet(s, now) for s in data.snippets]

        await self._execute_db_operation("create_note", self.repo.add(note))

        self._log_debug("Note created", note_id=note.id)
        return await self.repo.get_by_id(note.id)

    async def update_note(self, note_id: int, data: NoteUpdate) -> Note:
        """
        Replace a note's fields and tags, reconciling snippets when given.

        Args:
            note_id: Note ID to update
            data: Full replacement data

        Returns:
            Updated note

        Raises:
            NotFoundError: If note not found
            ValidationError: If the note or any snippet is invalid
        """
        note = await self.repo.get_by_id(note_id)

        self._validate_note(data.title, data.description, data.content)
        for snippet in data.snippets or []:
            self.snippets.validate_snippet(snippet)

        self._log_operation(
            "Updating note",
            note_id=note_id,
            reconcile_snippets=data.snippets is not None,
        )

        now = utc_now()
        note.title = data.title
        note.description = data.description
        note.content = data.content
        note.tags = data.tags
        if data.snippets is not None:
            self._reconcile_snippets(note, data.snippets, now)
        note.updated_at = now

        await self._execute_db_operation("update_note", self.session.flush())
        return await self.repo.get_by_id(note_id)

    def _reconcile_snippets(
        self,
        note: Note,
        incoming: list[SnippetInput],
        now: datetime,
    ) -> None:
        """
        Make the note's snippets match `incoming`.

        Entries whose id names one of this note's snippets update it in
        place; any other entry becomes a new snippet. Snippets left out
        drop off the collection and are deleted as orphans.
        """
        existing = {snippet.id: snippet for snippet in note.snippets}
        kept: list[Snippet] = []
        for item in incoming:
            current = existing.pop(item.id, None) if item.id is not None else None
            if current is None:
                kept.append(self.snippets.build_snippet(item, now))
            else:
                self.snippets.apply_fields(current, item, now)
                kept.append(current)

        if existing:
            self._log_debug(
                "Removing snippets",
                note_id=note.id,
                snippet_ids=sorted(existing),
            )
        note.snippets = kept

    async def update_note_tags(self, note_id: int, tags: Collection[NoteTag]) -> Note:
        """
        Replace only the tag set of a note.

        Raises:
            NotFoundError: If note not found
        """
        note = await self.repo.get_by_id(note_id)
        self._log_operation(
            "Updating note tags",
            note_id=note_id,
            tags=sorted(tag.name for tag in tags),
        )

        note.tags = tags
        note.updated_at = utc_now()

        await self._execute_db_operation("update_note_tags", self.session.flush())
        return await self.repo.get_by_id(note_id)

    async def delete_note(self, note_id: int) -> None:
        """
        Delete a note and every snippet it owns.

        Raises:
            NotFoundError: If note not found
        """
        note = await self.repo.get_by_id(note_id)
        self._log_operation(
            "Deleting note",
            note_id=note_id,
            snippets=note.snippet_count,
        )

        await self.session.delete(note)
        await self._execute_db_operation("delete_note", self.session.flush())

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    async def get_note(self, note_id: int, include_snippets: bool = False) -> Note:
        """
        Get a note by ID.

        Snippets are always loaded with the note; `include_snippets` is
        kept for callers that want to state the intent explicitly.

        Raises:
            NotFoundError: If note not found
        """
        note = await self.repo.get_by_id(note_id)
        if include_snippets:
            self._log_debug("Loaded note with snippets", note_id=note_id, snippets=note.snippet_count)
        return note

    async def list_notes(
        self,
        params: PageParams | None = None,
    ) -> list[Note] | Page[Note]:
        """All notes, newest first unless params say otherwise."""
        return await self.repo.get_all(params)

    async def search_notes(self, term: str | None) -> list[Note]:
        """
        Case-insensitive substring search over title, description and content.

        A blank term returns the default note list.
        """
        if term is None or not term.strip():
            return await self.list_notes()
        self._log_debug("Searching notes", term=term)
        return await self.repo.search(term)

    async def find_by_title(self, term: str | None) -> list[Note]:
        if term is None or not term.strip():
            return await self.list_notes()
        return await self.repo.find_by_title(term)

    async def get_by_tags_any(self, tags: Collection[NoteTag] | None) -> list[Note]:
        """Notes carrying at least one of the tags; no tags lists everything."""
        if not tags:
            return await self.list_notes()
        return await self.repo.get_by_tags_any(tags)

    async def get_by_tags_all(self, tags: Collection[NoteTag] | None) -> list[Note]:
        """Notes carrying all of the tags; no tags lists everything."""
        if not tags:
            return await self.list_notes()
        return await self.repo.get_by_tags_all(tags)

    async def advanced_search(
        self,
        params: PageParams,
        term: str | None = None,
        tags: Collection[NoteTag] | None = None,
        start_date: datetime | date | None = None,
        end_date: datetime | date | None = None,
    ) -> Page[Note]:
        """
        Paged search combining a text term, tags and a created_at range.

        Plain dates widen to the whole day: the start to its first
        instant, the end to its last.

        Raises:
            ValidationError: If start_date is after end_date
        """
        start = _range_start(start_date)
        end = _range_end(end_date)
        if start is not None and end is not None and start > end:
            raise ValidationError(
                "start_date must not be after end_date",
                details={"start_date": start.isoformat(), "end_date": end.isoformat()},
            )

        if term is not None and not term.strip():
            term = None
        self._log_debug(
            "Advanced search",
            term=term,
            tags=sorted(tag.name for tag in tags or []),
            start_date=start,
            end_date=end,
        )
        return await self.repo.advanced_search(
            params,
            term=term,
            tags=tags,
            start_date=start,
            end_date=end,
        )

    async def get_untagged_notes(self) -> list[Note]:
        return await self.repo.get_untagged()

    async def get_recently_active(self, days: int) -> list[Note]:
        """Notes created or updated within the last `days` days."""
        if not 0 <= days <= MAX_WINDOW_DAYS:
            raise ValidationError(
                f"days must be between 0 and {MAX_WINDOW_DAYS}",
                details={"days": days, "max_days": MAX_WINDOW_DAYS},
            )
        return await self.repo.get_recently_active(days_ago(days))

    async def get_by_tag_counts(self) -> list[tuple[NoteTag, int]]:
        """(tag, note count) for every tag in use, most used first."""
        return await self.repo.count_by_tag()

    async def get_notes_by_snippet_language(self, language: str) -> list[Note]:
        """Notes owning at least one snippet in `language` (case-insensitive)."""
        self._validate_required({"language": language}, ["language"])
        return await self.repo.get_by_snippet_language(language.strip())


def _range_start(value: datetime | date | None) -> datetime | None:
    if value is None or isinstance(value, datetime):
        return value
    return start_of_day(value)


def _range_end(value: datetime | date | None) -> datetime | None:
    if value is None or isinstance(value, datetime):
        return value
    return end_of_day(value)
