"""
Code Notes API Endpoints.

REST API endpoints for note management and note queries.
"""

from typing import Any

from fastapi import APIRouter, Depends, Query

from codeboard.backend.core.config import get_app_config
from codeboard.backend.core.dependencies import (
    DbSession,
    RequestId,
    parse_date_bound,
    parse_tag_list,
)
from codeboard.backend.core.pagination import (
    Page,
    PageParams,
    create_paginated_response,
    get_page_params,
)
from codeboard.backend.core.utils import MAX_WINDOW_DAYS
from codeboard.backend.models.note import Note
from codeboard.backend.schemas.base import ApiResponse, ResponseMetadata
from codeboard.backend.schemas.note import (
    NoteCreate,
    NoteDetailResponse,
    NoteListResponse,
    NoteResponse,
    NoteTagsUpdate,
    NoteUpdate,
)
from codeboard.backend.services.note import NoteService

router = APIRouter()


def _note_list(
    result: list[Note] | Page[Note],
    request_id: str,
) -> ApiResponse[list[NoteListResponse]] | dict[str, Any]:
    """Flat list envelope, or the paginated envelope for a Page."""
    if isinstance(result, Page):
        return create_paginated_response(
            page=result,
            item_schema=NoteListResponse,
            request_id=request_id,
        )
    return ApiResponse(
        data=[NoteListResponse.model_validate(note) for note in result],
        metadata=ResponseMetadata(request_id=request_id),
    )


def _note_detail(note: Note, request_id: str) -> ApiResponse[NoteDetailResponse]:
    return ApiResponse(
        data=NoteDetailResponse.model_validate(note),
        metadata=ResponseMetadata(request_id=request_id),
    )


@router.get(
    "",
    response_model=None,
    summary="List notes",
    description="All notes, newest first. Supplying page or size returns a page.",
)
async def list_notes(
    db: DbSession,
    request_id: RequestId,
    params: PageParams = Depends(get_page_params),
) -> dict[str, Any] | ApiResponse[list[NoteListResponse]]:
    """List notes, flat or paged."""
    service = NoteService(db)
    result = await service.list_notes(params)
    return _note_list(result, request_id)


@router.post(
    "",
    response_model=ApiResponse[NoteDetailResponse],
    status_code=201,
    summary="Create a note",
    description="Create a note with optional tags and inline snippets.",
)
async def create_note(
    data: NoteCreate,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[NoteDetailResponse]:
    """Create a new note."""
    service = NoteService(db)
    note = await service.create_note(data)
    return _note_detail(note, request_id)


@router.get(
    "/search",
    response_model=ApiResponse[list[NoteListResponse]],
    summary="Search notes",
    description="Case-insensitive search over title, description and content.",
)
async def search_notes(
    db: DbSession,
    request_id: RequestId,
    q: str = Query(default="", max_length=200, description="Search term"),
) -> ApiResponse[list[NoteListResponse]]:
    """Search notes; a blank term lists all notes."""
    service = NoteService(db)
    notes = await service.search_notes(q)
    return _note_list(notes, request_id)


@router.get(
    "/search/title",
    response_model=ApiResponse[list[NoteListResponse]],
    summary="Search note titles",
)
async def search_titles(
    db: DbSession,
    request_id: RequestId,
    q: str = Query(default="", max_length=200, description="Title fragment"),
) -> ApiResponse[list[NoteListResponse]]:
    service = NoteService(db)
    notes = await service.find_by_title(q)
    return _note_list(notes, request_id)


@router.get(
    "/advanced-search",
    summary="Advanced search",
    description=(
        "Paged search combining a text term, any-match tags and an inclusive "
        "created_at range. Every filter is optional."
    ),
)
async def advanced_search(
    db: DbSession,
    request_id: RequestId,
    params: PageParams = Depends(get_page_params),
    q: str | None = Query(default=None, max_length=200, description="Search term"),
    tags: str | None = Query(default=None, description="Comma-separated tag names"),
    start_date: str | None = Query(
        default=None, description="Created on or after (ISO date or datetime)"
    ),
    end_date: str | None = Query(
        default=None, description="Created on or before (ISO date or datetime)"
    ),
) -> dict[str, Any]:
    """Combined search, always paged."""
    service = NoteService(db)
    page = await service.advanced_search(
        params,
        term=q,
        tags=parse_tag_list(tags),
        start_date=parse_date_bound(start_date, "start_date"),
        end_date=parse_date_bound(end_date, "end_date"),
    )
    return create_paginated_response(
        page=page,
        item_schema=NoteListResponse,
        request_id=request_id,
    )


@router.get(
    "/tags/any",
    response_model=ApiResponse[list[NoteListResponse]],
    summary="Notes with any of the tags",
)
async def notes_with_any_tag(
    db: DbSession,
    request_id: RequestId,
    tags: str | None = Query(default=None, description="Comma-separated tag names"),
) -> ApiResponse[list[NoteListResponse]]:
    service = NoteService(db)
    notes = await service.get_by_tags_any(parse_tag_list(tags))
    return _note_list(notes, request_id)


@router.get(
    "/tags/all",
    response_model=ApiResponse[list[NoteListResponse]],
    summary="Notes with all of the tags",
)
async def notes_with_all_tags(
    db: DbSession,
    request_id: RequestId,
    tags: str | None = Query(default=None, description="Comma-separated tag names"),
) -> ApiResponse[list[NoteListResponse]]:
    service = NoteService(db)
    notes = await service.get_by_tags_all(parse_tag_list(tags))
    return _note_list(notes, request_id)


@router.get(
    "/untagged",
    response_model=ApiResponse[list[NoteListResponse]],
    summary="Notes without tags",
)
async def untagged_notes(
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[list[NoteListResponse]]:
    service = NoteService(db)
    notes = await service.get_untagged_notes()
    return _note_list(notes, request_id)


@router.get(
    "/recent",
    response_model=ApiResponse[list[NoteListResponse]],
    summary="Recently active notes",
    description="Notes created or updated within the last N days.",
)
async def recent_notes(
    db: DbSession,
    request_id: RequestId,
    days: int | None = Query(
        default=None, ge=0, le=MAX_WINDOW_DAYS, description="Window in days"
    ),
) -> ApiResponse[list[NoteListResponse]]:
    if days is None:
        days = get_app_config().application.queries.recent_days
    service = NoteService(db)
    notes = await service.get_recently_active(days)
    return _note_list(notes, request_id)


@router.get(
    "/by-snippet-language/{language}",
    response_model=ApiResponse[list[NoteListResponse]],
    summary="Notes with snippets in a language",
)
async def notes_by_snippet_language(
    language: str,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[list[NoteListResponse]]:
    service = NoteService(db)
    notes = await service.get_notes_by_snippet_language(language)
    return _note_list(notes, request_id)


@router.get(
    "/{note_id}",
    response_model=None,
    summary="Get a note",
    description="Get a single note by ID, optionally with its snippets.",
)
async def get_note(
    note_id: int,
    db: DbSession,
    request_id: RequestId,
    include_snippets: bool = Query(default=False, description="Embed the snippets"),
) -> ApiResponse[NoteDetailResponse] | ApiResponse[NoteResponse]:
    """Get a note by ID."""
    service = NoteService(db)
    note = await service.get_note(note_id, include_snippets=include_snippets)
    if include_snippets:
        return _note_detail(note, request_id)
    return ApiResponse(
        data=NoteResponse.model_validate(note),
        metadata=ResponseMetadata(request_id=request_id),
    )


@router.put(
    "/{note_id}",
    response_model=ApiResponse[NoteDetailResponse],
    summary="Replace a note",
    description=(
        "Replace title, description, content and tags. When snippets are "
        "given the snippet list is reconciled against them."
    ),
)
async def update_note(
    note_id: int,
    data: NoteUpdate,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[NoteDetailResponse]:
    """Update a note."""
    service = NoteService(db)
    note = await service.update_note(note_id, data)
    return _note_detail(note, request_id)


@router.put(
    "/{note_id}/tags",
    response_model=ApiResponse[NoteResponse],
    summary="Replace note tags",
)
async def update_note_tags(
    note_id: int,
    data: NoteTagsUpdate,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[NoteResponse]:
    service = NoteService(db)
    note = await service.update_note_tags(note_id, data.tags)
    return ApiResponse(
        data=NoteResponse.model_validate(note),
        metadata=ResponseMetadata(request_id=request_id),
    )


@router.delete(
    "/{note_id}",
    status_code=204,
    summary="Delete a note",
    description="Permanently delete a note and all of its snippets.",
)
async def delete_note(
    note_id: int,
    db: DbSession,
    request_id: RequestId,
) -> None:
    """Delete a note."""
    service = NoteService(db)
    await service.delete_note(note_id)
