"""
Unit Tests for shared FastAPI dependencies.
"""

from datetime import date, datetime

import pytest

from codeboard.backend.core.dependencies import get_request_id, parse_date_bound, parse_tag_list
from codeboard.backend.core.exceptions import ValidationError
from codeboard.backend.models.tag import NoteTag


class TestParseTagList:
    """Tests for comma-separated tag parsing."""

    def test_none_is_empty(self):
        assert parse_tag_list(None) == set()

    def test_parses_and_deduplicates(self):
        assert parse_tag_list("BACKEND, api,BACKEND") == {NoteTag.BACKEND, NoteTag.API}

    def test_skips_blank_entries(self):
        assert parse_tag_list(",WEB,, ") == {NoteTag.WEB}

    def test_rejects_unknown_name(self):
        with pytest.raises(ValidationError) as exc_info:
            parse_tag_list("WEB,COBOL")
        assert exc_info.value.details == {"field": "tags", "value": "COBOL"}


class TestParseDateBound:
    """Tests for ISO date and datetime range bounds."""

    @pytest.mark.parametrize("raw", [None, "", "  "])
    def test_missing_bound(self, raw):
        assert parse_date_bound(raw, "start_date") is None

    def test_plain_date_stays_a_date(self):
        value = parse_date_bound("2024-05-01", "start_date")
        assert type(value) is date
        assert value == date(2024, 5, 1)

    def test_datetime_is_kept(self):
        assert parse_date_bound("2024-05-01T10:30:00", "end_date") == datetime(2024, 5, 1, 10, 30)

    def test_aware_datetime_becomes_naive_utc(self):
        assert parse_date_bound("2024-05-01T12:00:00+02:00", "end_date") == datetime(2024, 5, 1, 10, 0)

    def test_rejects_garbage(self):
        with pytest.raises(ValidationError) as exc_info:
            parse_date_bound("yesterday", "end_date")
        assert exc_info.value.details == {"field": "end_date", "value": "yesterday"}

class TestGetRequestId:
    """Tests for request ID dependency."""

    @pytest.mark.asyncio
    async def test_uses_header(self):
        assert await get_request_id("abc") == "abc"

    @pytest.mark.asyncio
    async def test_generates_uuid(self):
        assert len(await get_request_id(None)) == 36
