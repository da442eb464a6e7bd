"""
Snippets API Endpoints.

REST API endpoints for snippet management and snippet queries.
"""

from typing import Any

from fastapi import APIRouter, Depends, Query

from codeboard.backend.core.config import get_app_config
from codeboard.backend.core.dependencies import DbSession, RequestId
from codeboard.backend.core.pagination import (
    Page,
    PageParams,
    create_paginated_response,
    get_page_params,
)
from codeboard.backend.core.utils import MAX_WINDOW_DAYS
from codeboard.backend.models.snippet import Snippet
from codeboard.backend.schemas.base import ApiResponse, ResponseMetadata
from codeboard.backend.schemas.snippet import (
    SnippetCreate,
    SnippetLanguageUpdate,
    SnippetListResponse,
    SnippetResponse,
    SnippetUpdate,
)
from codeboard.backend.services.snippet import SnippetService

router = APIRouter()


def _snippet_list(
    result: list[Snippet] | Page[Snippet],
    request_id: str,
) -> ApiResponse[list[SnippetListResponse]] | dict[str, Any]:
    if isinstance(result, Page):
        return create_paginated_response(
            page=result,
            item_schema=SnippetListResponse,
            request_id=request_id,
        )
    return ApiResponse(
        data=[SnippetListResponse.model_validate(snippet) for snippet in result],
        metadata=ResponseMetadata(request_id=request_id),
    )


def _snippet(snippet: Snippet, request_id: str) -> ApiResponse[SnippetResponse]:
    return ApiResponse(
        data=SnippetResponse.model_validate(snippet),
        metadata=ResponseMetadata(request_id=request_id),
    )


@router.get(
    "",
    response_model=None,
    summary="List snippets",
    description="All snippets, newest first. Supplying page or size returns a page.",
)
async def list_snippets(
    db: DbSession,
    request_id: RequestId,
    params: PageParams = Depends(get_page_params),
) -> dict[str, Any] | ApiResponse[list[SnippetListResponse]]:
    service = SnippetService(db)
    result = await service.list_snippets(params)
    return _snippet_list(result, request_id)


@router.post(
    "",
    response_model=ApiResponse[SnippetResponse],
    status_code=201,
    summary="Create a snippet",
    description='Create a snippet under an existing note ("note_id" or "note": {"id"}).',
)
async def create_snippet(
    data: SnippetCreate,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[SnippetResponse]:
    """Create a standalone snippet."""
    service = SnippetService(db)
    snippet = await service.create_snippet(data)
    return _snippet(snippet, request_id)


@router.get(
    "/note/{note_id}",
    response_model=ApiResponse[list[SnippetResponse]],
    summary="Snippets of a note",
    description="Snippets owned by a note, oldest first.",
)
async def snippets_by_note(
    note_id: int,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[list[SnippetResponse]]:
    service = SnippetService(db)
    snippets = await service.get_snippets_by_note(note_id)
    return ApiResponse(
        data=[SnippetResponse.model_validate(snippet) for snippet in snippets],
        metadata=ResponseMetadata(request_id=request_id),
    )


@router.get(
    "/language/{language}",
    response_model=ApiResponse[list[SnippetListResponse]],
    summary="Snippets in a language",
)
async def snippets_by_language(
    language: str,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[list[SnippetListResponse]]:
    service = SnippetService(db)
    snippets = await service.get_snippets_by_language(language)
    return _snippet_list(snippets, request_id)


@router.get(
    "/search/name",
    response_model=ApiResponse[list[SnippetListResponse]],
    summary="Search snippet names",
)
async def search_names(
    db: DbSession,
    request_id: RequestId,
    q: str = Query(default="", max_length=200, description="Name fragment"),
) -> ApiResponse[list[SnippetListResponse]]:
    service = SnippetService(db)
    snippets = await service.find_snippets_by_name(q)
    return _snippet_list(snippets, request_id)


@router.get(
    "/search/content",
    response_model=None,
    summary="Search snippet content",
    description="Substring search over content; a blank term lists every snippet.",
)
async def search_content(
    db: DbSession,
    request_id: RequestId,
    q: str = Query(default="", max_length=200, description="Search term"),
    params: PageParams = Depends(get_page_params),
) -> dict[str, Any] | ApiResponse[list[SnippetListResponse]]:
    service = SnippetService(db)
    result = await service.search_snippets_by_content(q, params)
    return _snippet_list(result, request_id)


@router.get(
    "/without-language",
    response_model=ApiResponse[list[SnippetListResponse]],
    summary="Snippets without a language",
)
async def snippets_without_language(
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[list[SnippetListResponse]]:
    service = SnippetService(db)
    snippets = await service.get_snippets_without_language()
    return _snippet_list(snippets, request_id)


@router.get(
    "/recent",
    response_model=ApiResponse[list[SnippetListResponse]],
    summary="Recently created snippets",
)
async def recent_snippets(
    db: DbSession,
    request_id: RequestId,
    days: int | None = Query(
        default=None, ge=0, le=MAX_WINDOW_DAYS, description="Window in days"
    ),
) -> ApiResponse[list[SnippetListResponse]]:
    if days is None:
        days = get_app_config().application.queries.recent_days
    service = SnippetService(db)
    snippets = await service.get_recent_snippets(days)
    return _snippet_list(snippets, request_id)


@router.get(
    "/large",
    response_model=ApiResponse[list[SnippetListResponse]],
    summary="Large snippets",
    description="Snippets whose content is longer than min_size characters, longest first.",
)
async def large_snippets(
    db: DbSession,
    request_id: RequestId,
    min_size: int | None = Query(default=None, ge=0, description="Minimum content length"),
) -> ApiResponse[list[SnippetListResponse]]:
    if min_size is None:
        min_size = get_app_config().application.queries.large_snippet_min_chars
    service = SnippetService(db)
    snippets = await service.get_large_snippets(min_size)
    return _snippet_list(snippets, request_id)


@router.get(
    "/{snippet_id}",
    response_model=ApiResponse[SnippetResponse],
    summary="Get a snippet",
)
async def get_snippet(
    snippet_id: int,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[SnippetResponse]:
    service = SnippetService(db)
    snippet = await service.get_snippet(snippet_id)
    return _snippet(snippet, request_id)


@router.put(
    "/{snippet_id}",
    response_model=ApiResponse[SnippetResponse],
    summary="Replace a snippet",
    description="Replace name, language, content and image URL. The owning note is kept.",
)
async def update_snippet(
    snippet_id: int,
    data: SnippetUpdate,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[SnippetResponse]:
    service = SnippetService(db)
    snippet = await service.update_snippet(snippet_id, data)
    return _snippet(snippet, request_id)


@router.put(
    "/{snippet_id}/move/{new_note_id}",
    response_model=ApiResponse[SnippetResponse],
    summary="Move a snippet",
    description="Re-link a snippet to another note.",
)
async def move_snippet(
    snippet_id: int,
    new_note_id: int,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[SnippetResponse]:
    service = SnippetService(db)
    snippet = await service.move_snippet(snippet_id, new_note_id)
    return _snippet(snippet, request_id)


@router.patch(
    "/{snippet_id}/language",
    response_model=ApiResponse[SnippetResponse],
    summary="Change snippet language",
)
async def update_snippet_language(
    snippet_id: int,
    data: SnippetLanguageUpdate,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[SnippetResponse]:
    service = SnippetService(db)
    snippet = await service.update_snippet_language(snippet_id, data.language)
    return _snippet(snippet, request_id)


@router.delete(
    "/{snippet_id}",
    status_code=204,
    summary="Delete a snippet",
)
async def delete_snippet(
    snippet_id: int,
    db: DbSession,
    request_id: RequestId,
) -> None:
    service = SnippetService(db)
    await service.delete_snippet(snippet_id)
