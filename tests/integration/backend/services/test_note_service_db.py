"""
Integration Tests for the note, snippet and stats services.

Services run against the real test database session.
"""

from datetime import timedelta

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from codeboard.backend.core.exceptions import NotFoundError, ValidationError
from codeboard.backend.core.pagination import PageParams
from codeboard.backend.core.utils import utc_now
from codeboard.backend.models import NoteTag
from codeboard.backend.schemas.note import NoteCreate, NoteUpdate
from codeboard.backend.schemas.snippet import SnippetCreate, SnippetInput
from codeboard.backend.services.note import NoteService
from codeboard.backend.services.snippet import SnippetService
from codeboard.backend.services.stats import StatsService


@pytest.fixture
def notes(db_session: AsyncSession) -> NoteService:
    return NoteService(db_session)


@pytest.fixture
def snippets(db_session: AsyncSession) -> SnippetService:
    return SnippetService(db_session)


@pytest.fixture
def stats(db_session: AsyncSession) -> StatsService:
    return StatsService(db_session)


class TestNoteLifecycle:
    """Create, read, replace and delete through NoteService."""

    @pytest.mark.asyncio
    async def test_create_then_get(self, notes):
        created = await notes.create_note(NoteCreate(
            title="Tries",
            content="prefix tree",
            tags=["ALGORITHM"],
            snippets=[SnippetInput(name="insert", language="python")],
        ))

        fetched = await notes.get_note(created.id, include_snippets=True)

        assert fetched.title == "Tries"
        assert fetched.tags == {NoteTag.ALGORITHM}
        assert [s.name for s in fetched.snippets] == ["insert"]
        assert fetched.created_at == fetched.updated_at

    @pytest.mark.asyncio
    async def test_tags_are_never_none(self, notes):
        created = await notes.create_note(NoteCreate(title="plain"))
        assert created.tags == set()
        assert created.tag_names == []

    @pytest.mark.asyncio
    async def test_missing_note(self, notes):
        with pytest.raises(NotFoundError):
            await notes.get_note(999999)

    @pytest.mark.asyncio
    async def test_reconcile_snippets(self, notes):
        created = await notes.create_note(NoteCreate(
            title="t",
            snippets=[SnippetInput(name="a"), SnippetInput(name="b")],
        ))
        a, b = created.snippets

        updated = await notes.update_note(created.id, NoteUpdate(
            title="t",
            snippets=[SnippetInput(id=b.id, name="b2"), SnippetInput(name="c")],
        ))

        names = {s.name for s in updated.snippets}
        assert names == {"b2", "c"}
        assert b.id in {s.id for s in updated.snippets}
        assert a.id not in {s.id for s in updated.snippets}

    @pytest.mark.asyncio
    async def test_delete_cascades(self, notes, snippets):
        created = await notes.create_note(NoteCreate(
            title="t",
            snippets=[SnippetInput(name="a")],
        ))
        snippet_id = created.snippets[0].id

        await notes.delete_note(created.id)

        with pytest.raises(NotFoundError):
            await snippets.get_snippets_by_note(created.id)
        with pytest.raises(NotFoundError):
            await snippets.get_snippet(snippet_id)


class TestNoteQueries:
    """Search and tag filters against real rows."""

    @pytest.mark.asyncio
    async def test_union_contains_intersection(self, notes):
        await notes.create_note(NoteCreate(title="both", tags=["WEB", "API"]))
        await notes.create_note(NoteCreate(title="web", tags=["WEB"]))
        await notes.create_note(NoteCreate(title="api", tags=["API"]))
        wanted = {NoteTag.WEB, NoteTag.API}

        union = {n.title for n in await notes.get_by_tags_any(wanted)}
        intersection = {n.title for n in await notes.get_by_tags_all(wanted)}

        assert union == {"both", "web", "api"}
        assert intersection == {"both"}
        assert intersection <= union

    @pytest.mark.asyncio
    async def test_blank_search_equals_list(self, notes):
        await notes.create_note(NoteCreate(title="a"))
        await notes.create_note(NoteCreate(title="b"))

        assert {n.id for n in await notes.search_notes("")} == {
            n.id for n in await notes.list_notes()
        }

    @pytest.mark.asyncio
    async def test_untagged_after_tag_removal(self, notes):
        note = await notes.create_note(NoteCreate(title="t", tags=["DIY"]))
        assert await notes.get_untagged_notes() == []

        await notes.update_note_tags(note.id, set())

        assert [n.id for n in await notes.get_untagged_notes()] == [note.id]

    @pytest.mark.asyncio
    async def test_advanced_search_paged(self, notes):
        for i in range(3):
            await notes.create_note(NoteCreate(title=f"graph {i}", tags=["ALGORITHM"]))
        await notes.create_note(NoteCreate(title="graph web", tags=["WEB"]))

        page = await notes.advanced_search(
            PageParams(page=0, size=2, sort_by="title", sort_direction="asc", paged=True),
            term="graph",
            tags={NoteTag.ALGORITHM},
            start_date=utc_now().date() - timedelta(days=1),
            end_date=utc_now().date() + timedelta(days=1),
        )

        assert page.total_elements == 3
        assert [n.title for n in page.items] == ["graph 0", "graph 1"]
        assert page.has_next is True


class TestNoteOrdering:
    """Ordering of list and activity queries."""

    @pytest.mark.asyncio
    async def test_recently_active_orders_by_last_activity(self, notes, db_session):
        now = utc_now()
        stale = await notes.create_note(NoteCreate(title="stale"))
        edited = await notes.create_note(NoteCreate(title="edited"))
        fresh = await notes.create_note(NoteCreate(title="fresh"))
        stale.created_at = stale.updated_at = now - timedelta(days=30)
        edited.created_at = now - timedelta(days=20)
        edited.updated_at = now - timedelta(hours=1)
        fresh.created_at = fresh.updated_at = now - timedelta(days=2)
        await db_session.flush()

        recent = await notes.get_recently_active(7)

        assert [n.title for n in recent] == ["edited", "fresh"]

    @pytest.mark.asyncio
    async def test_equal_created_at_keeps_insertion_order(self, notes, db_session):
        created = [await notes.create_note(NoteCreate(title=title)) for title in ("x", "y", "z")]
        stamp = utc_now() - timedelta(minutes=5)
        for note in created:
            note.created_at = note.updated_at = stamp
        await db_session.flush()

        assert [n.title for n in await notes.list_notes()] == ["x", "y", "z"]

class TestSnippetOperations:
    """Snippet mutations against real rows."""

    @pytest.mark.asyncio
    async def test_language_fallback(self, notes, snippets):
        note = await notes.create_note(NoteCreate(title="host"))

        plain = await snippets.create_snippet(
            SnippetCreate(name="p", content="hello world", note_id=note.id)
        )
        java = await snippets.create_snippet(
            SnippetCreate(name="j", content="public class A {}", note_id=note.id)
        )

        assert plain.detected_language == "text"
        assert java.detected_language == "java"
        assert {s.name for s in await snippets.get_snippets_without_language()} == {"p", "j"}

    @pytest.mark.asyncio
    async def test_move_between_notes(self, notes, snippets):
        source = await notes.create_note(NoteCreate(title="s", snippets=[SnippetInput(name="x")]))
        target = await notes.create_note(NoteCreate(title="t"))
        snippet_id = source.snippets[0].id

        moved = await snippets.move_snippet(snippet_id, target.id)

        assert moved.note_id == target.id
        assert await snippets.get_snippets_by_note(source.id) == []
        assert [s.id for s in await snippets.get_snippets_by_note(target.id)] == [snippet_id]

    @pytest.mark.asyncio
    async def test_snippet_change_touches_note(self, notes, snippets):
        note = await notes.create_note(NoteCreate(title="t", snippets=[SnippetInput(name="x")]))
        created_at = note.created_at

        await snippets.update_snippet_language(note.snippets[0].id, "go")
        refreshed = await notes.get_note(note.id)

        assert refreshed.updated_at >= created_at
        assert refreshed.snippets[0].language == "go"


class TestStats:
    """Aggregates against real rows."""

    @pytest.mark.asyncio
    async def test_tag_counts_non_increasing(self, notes, stats):
        await notes.create_note(NoteCreate(title="a", tags=["API"]))
        await notes.create_note(NoteCreate(title="b", tags=["API", "WEB"]))
        await notes.create_note(NoteCreate(title="c", tags=["API", "WEB", "GAMES"]))

        rows = await stats.note_stats_by_tag()

        assert rows[0] == (NoteTag.API, 3)
        counts = [count for _, count in rows]
        assert counts == sorted(counts, reverse=True)

    @pytest.mark.asyncio
    async def test_notes_created_per_day(self, notes, stats):
        await notes.create_note(NoteCreate(title="a"))
        await notes.create_note(NoteCreate(title="b"))
        today = utc_now().date()

        assert await stats.notes_created_per_day(today, today) == [(today, 2)]
        assert await stats.notes_created_per_day(
            today - timedelta(days=10), today - timedelta(days=5)
        ) == []

    @pytest.mark.asyncio
    async def test_inverted_range(self, stats):
        today = utc_now().date()
        with pytest.raises(ValidationError):
            await stats.notes_created_per_day(today, today - timedelta(days=1))
