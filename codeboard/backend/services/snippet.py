"""
Snippet Service.

Business logic for snippets: standalone create, replace, move between
notes, language updates and the snippet-side queries.
"""

from datetime import datetime

from sqlalchemy.ext.asyncio import AsyncSession

from codeboard.backend.core.exceptions import NotFoundError, ValidationError
from codeboard.backend.core.pagination import Page, PageParams
from codeboard.backend.core.utils import MAX_WINDOW_DAYS, days_ago, utc_now
from codeboard.backend.models.snippet import (
    CONTENT_MAX_LENGTH,
    IMAGE_URL_MAX_LENGTH,
    LANGUAGE_MAX_LENGTH,
    NAME_MAX_LENGTH,
    Snippet,
)
from codeboard.backend.repositories.note import NoteRepository
from codeboard.backend.repositories.snippet import SnippetRepository
from codeboard.backend.schemas.snippet import SnippetCreate, SnippetFields, SnippetUpdate
from codeboard.backend.services.base import BaseService


class SnippetService(BaseService):
    """Service for snippet business logic."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)
        self.repo = SnippetRepository(session)
        self.note_repo = NoteRepository(session)

    def validate_snippet(self, data: SnippetFields) -> None:
        """
        Check snippet fields before anything is written.

        Raises:
            ValidationError: If name is blank or any field is too long
        """
        self._validate_required({"name": data.name}, ["name"], entity="Snippet")
        self._validate_string_length(data.name, "name", max_length=NAME_MAX_LENGTH, entity="Snippet")
        self._validate_string_length(
            data.language, "language", max_length=LANGUAGE_MAX_LENGTH, entity="Snippet"
        )
        self._validate_string_length(
            data.content, "content", max_length=CONTENT_MAX_LENGTH, entity="Snippet"
        )
        self._validate_string_length(
            data.image_url, "image_url", max_length=IMAGE_URL_MAX_LENGTH, entity="Snippet"
        )

    @staticmethod
    def build_snippet(data: SnippetFields, now: datetime) -> Snippet:
        """New, unsaved snippet stamped with `now`."""
        return Snippet(
            name=data.name,
            language=data.language,
            content=data.content,
            image_url=data.image_url,
            created_at=now,
            updated_at=now,
        )

    @staticmethod
    def apply_fields(snippet: Snippet, data: SnippetFields, now: datetime) -> None:
        """Replace the editable fields of an existing snippet."""
        snippet.name = data.name
        snippet.language = data.language
        snippet.content = data.content
        snippet.image_url = data.image_url
        snippet.updated_at = now

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    async def create_snippet(self, data: SnippetCreate) -> Snippet:
        """
        Create a snippet under an existing note.

        Raises:
            ValidationError: If no note reference is given or a field is invalid
            NotFoundError: If the referenced note does not exist
        """
        if data.note_id is None:
            raise ValidationError(
                "Snippet must belong to a note",
                details={"entity": "Snippet", "field": "note_id"},
            )
        self.validate_snippet(data)

        note = await self.note_repo.get_by_id(data.note_id)
        self._log_operation("Creating snippet", note_id=note.id, name=data.name)

        now = utc_now()
        snippet = self.build_snippet(data, now)
        note.snippets.append(snippet)
        note.updated_at = now

        await self._execute_db_operation("create_snippet", self.session.flush())
        self._log_debug("Snippet created", snippet_id=snippet.id)
        return snippet

    async def update_snippet(self, snippet_id: int, data: SnippetUpdate) -> Snippet:
        """
        Replace name, language, content and image URL. The owner is kept.

        Raises:
            NotFoundError: If snippet not found
            ValidationError: If a field is invalid
        """
        snippet = await self.repo.get_by_id(snippet_id)
        self.validate_snippet(data)

        self._log_operation("Updating snippet", snippet_id=snippet_id)
        now = utc_now()
        await self._touch_note(snippet.note_id, now)
        self.apply_fields(snippet, data, now)

        await self._execute_db_operation("update_snippet", self.session.flush())
        return snippet

    async def update_snippet_language(self, snippet_id: int, language: str | None) -> Snippet:
        """
        Change only the language of a snippet.

        Raises:
            NotFoundError: If snippet not found
            ValidationError: If language is blank or too long
        """
        snippet = await self.repo.get_by_id(snippet_id)
        self._validate_required({"language": language}, ["language"], entity="Snippet")
        language = language.strip()
        self._validate_string_length(
            language, "language", max_length=LANGUAGE_MAX_LENGTH, entity="Snippet"
        )

        self._log_operation("Updating snippet language", snippet_id=snippet_id, language=language)
        now = utc_now()
        await self._touch_note(snippet.note_id, now)
        snippet.language = language
        snippet.updated_at = now

        await self._execute_db_operation("update_snippet_language", self.session.flush())
        return snippet

    async def move_snippet(self, snippet_id: int, new_note_id: int) -> Snippet:
        """
        Re-link a snippet to another note.

        Raises:
            NotFoundError: If the snippet or the target note does not exist
        """
        snippet = await self.repo.get_by_id(snippet_id)
        target = await self.note_repo.get_by_id(new_note_id)

        if snippet.note_id == target.id:
            return snippet

        self._log_operation(
            "Moving snippet",
            snippet_id=snippet_id,
            from_note_id=snippet.note_id,
            to_note_id=target.id,
        )
        now = utc_now()
        await self._touch_note(snippet.note_id, now)
        snippet.note_id = target.id
        snippet.updated_at = now
        target.updated_at = now

        await self._execute_db_operation("move_snippet", self.session.flush())
        return snippet

    async def delete_snippet(self, snippet_id: int) -> None:
        """
        Delete a single snippet.

        Raises:
            NotFoundError: If snippet not found
        """
        snippet = await self.repo.get_by_id(snippet_id)
        self._log_operation("Deleting snippet", snippet_id=snippet_id, note_id=snippet.note_id)

        await self._touch_note(snippet.note_id, utc_now())
        await self.session.delete(snippet)
        await self._execute_db_operation("delete_snippet", self.session.flush())

    async def _touch_note(self, note_id: int, now: datetime) -> None:
        """
        Bump the owning note's updated_at.

        Must run before the snippet itself is modified: reloading the note
        repopulates its snippets from the database.
        """
        note = await self.note_repo.get_by_id_or_none(note_id)
        if note is not None:
            note.updated_at = now

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    async def get_snippet(self, snippet_id: int) -> Snippet:
        """
        Raises:
            NotFoundError: If snippet not found
        """
        return await self.repo.get_by_id(snippet_id)

    async def list_snippets(
        self,
        params: PageParams | None = None,
    ) -> list[Snippet] | Page[Snippet]:
        return await self.repo.get_all(params)

    async def get_snippets_by_note(self, note_id: int) -> list[Snippet]:
        """
        Snippets of a note, oldest first.

        Raises:
            NotFoundError: If the note does not exist
        """
        if not await self.note_repo.exists(note_id):
            raise NotFoundError("Note", note_id)
        return await self.repo.get_by_note(note_id)

    async def search_snippets_by_content(
        self,
        term: str | None,
        params: PageParams | None = None,
    ) -> list[Snippet] | Page[Snippet]:
        """Content substring search; a blank term lists every snippet."""
        if term is None or not term.strip():
            return await self.list_snippets(params)
        self._log_debug("Searching snippet content", term=term)
        return await self.repo.search_content(term, params)

    async def get_snippets_by_language(self, language: str) -> list[Snippet]:
        self._validate_required({"language": language}, ["language"])
        return await self.repo.get_by_language(language.strip())

    async def find_snippets_by_name(self, term: str | None) -> list[Snippet]:
        """Name substring search; a blank term lists every snippet."""
        if term is None or not term.strip():
            return await self.list_snippets()
        return await self.repo.find_by_name(term)

    async def get_snippets_without_language(self) -> list[Snippet]:
        return await self.repo.get_without_language()

    async def get_recent_snippets(self, days: int) -> list[Snippet]:
        """Snippets created within the last `days` days, newest first."""
        if not 0 <= days <= MAX_WINDOW_DAYS:
            raise ValidationError(
                f"days must be between 0 and {MAX_WINDOW_DAYS}",
                details={"days": days, "max_days": MAX_WINDOW_DAYS},
            )
        return await self.repo.get_created_since(days_ago(days))

    async def get_large_snippets(self, min_chars: int) -> list[Snippet]:
        """Snippets with content longer than `min_chars`, longest first."""
        if min_chars < 0:
            raise ValidationError("min_chars must not be negative", details={"min_chars": min_chars})
        return await self.repo.get_larger_than(min_chars)
