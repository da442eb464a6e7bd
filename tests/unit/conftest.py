"""
Unit Test Fixtures.

Fixtures for unit tests - all external dependencies are mocked.
Unit tests should be fast and isolated, never touching real databases.
"""

from itertools import count
from unittest.mock import AsyncMock, MagicMock

import pytest

from codeboard.backend.core.utils import utc_now
from codeboard.backend.models import Note, NoteTag, Snippet


# =============================================================================
# Database Mock Fixtures
# =============================================================================


@pytest.fixture
def mock_db_session() -> AsyncMock:
    """
    Mock database session for unit tests.

    Usage:
        def test_service(mock_db_session: AsyncMock):
            service = NoteService(mock_db_session)
    """
    session = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.flush = AsyncMock()
    session.refresh = AsyncMock()
    session.execute = AsyncMock()
    session.add = MagicMock()
    session.delete = AsyncMock()
    return session


@pytest.fixture
def mock_db_result() -> MagicMock:
    """
    Mock database query result.

    Usage:
        def test_query(mock_db_session, mock_db_result):
            mock_db_result.scalar_one_or_none.return_value = note
            mock_db_session.execute.return_value = mock_db_result
    """
    result = MagicMock()
    result.scalar_one_or_none = MagicMock(return_value=None)
    result.scalar_one = MagicMock(return_value=0)
    result.scalars = MagicMock()
    result.scalars.return_value.all = MagicMock(return_value=[])
    result.all = MagicMock(return_value=[])
    return result


# =============================================================================
# Entity Factories
# =============================================================================


@pytest.fixture
def make_note():
    """
    Build detached Note instances with ids and timestamps filled in.

    Usage:
        note = make_note(title="Graphs", tags={NoteTag.ALGORITHM})
    """
    ids = count(1)

    def _make(
        title: str = "Note",
        description: str | None = None,
        content: str | None = None,
        tags: set[NoteTag] | None = None,
        snippets: list[Snippet] | None = None,
    ) -> Note:
        now = utc_now()
        note = Note(
            id=next(ids),
            title=title,
            description=description,
            content=content,
            created_at=now,
            updated_at=now,
        )
        note.tags = tags or set()
        note.snippets = snippets or []
        return note

    return _make


@pytest.fixture
def make_snippet():
    """Build detached Snippet instances."""
    ids = count(100)

    def _make(
        name: str = "snippet",
        language: str | None = None,
        content: str | None = None,
        note_id: int = 1,
    ) -> Snippet:
        now = utc_now()
        return Snippet(
            id=next(ids),
            name=name,
            language=language,
            content=content,
            note_id=note_id,
            created_at=now,
            updated_at=now,
        )

    return _make


# =============================================================================
# Logging Mock Fixtures
# =============================================================================


@pytest.fixture
def mock_logger() -> MagicMock:
    """
    Mock logger for testing logging calls.

    Usage:
        def test_logging(mock_logger):
            with patch("module.get_logger", return_value=mock_logger):
                mock_logger.info.assert_called_once()
    """
    logger = MagicMock()
    logger.debug = MagicMock()
    logger.info = MagicMock()
    logger.warning = MagicMock()
    logger.error = MagicMock()
    logger.exception = MagicMock()
    return logger
