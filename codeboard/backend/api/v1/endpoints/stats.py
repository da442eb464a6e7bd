"""
Stats API Endpoints.

Aggregate reports over notes and snippets. Disabled unless
features.stats_enabled is set.
"""

from datetime import date, timedelta

from fastapi import APIRouter, Depends, Query

from codeboard.backend.core.config import get_app_config
from codeboard.backend.core.dependencies import DbSession, RequestId
from codeboard.backend.core.exceptions import NotFoundError
from codeboard.backend.core.utils import utc_now
from codeboard.backend.schemas.base import ApiResponse, ResponseMetadata
from codeboard.backend.schemas.stats import DailyCount, LanguageCount, StatsOverview, TagCount
from codeboard.backend.services.stats import StatsService


def require_stats_enabled() -> None:
    """Hide the stats endpoints when the feature flag is off."""
    if not get_app_config().features.stats_enabled:
        raise NotFoundError("Feature", "stats")


router = APIRouter(dependencies=[Depends(require_stats_enabled)])


@router.get(
    "",
    response_model=ApiResponse[StatsOverview],
    summary="Stats overview",
    description="Totals, tag usage and language breakdown.",
)
async def overview(
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[StatsOverview]:
    service = StatsService(db)
    return ApiResponse(
        data=await service.overview(),
        metadata=ResponseMetadata(request_id=request_id),
    )


@router.get(
    "/tags",
    response_model=ApiResponse[list[TagCount]],
    summary="Notes per tag",
    description="Tags in use with their note counts, most used first.",
)
async def tag_stats(
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[list[TagCount]]:
    service = StatsService(db)
    rows = await service.note_stats_by_tag()
    return ApiResponse(
        data=[
            TagCount(tag=tag.name, display_name=tag.display_name, emoji=tag.emoji, count=count)
            for tag, count in rows
        ],
        metadata=ResponseMetadata(request_id=request_id),
    )


@router.get(
    "/languages",
    response_model=ApiResponse[list[LanguageCount]],
    summary="Snippets per language",
)
async def language_stats(
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[list[LanguageCount]]:
    service = StatsService(db)
    rows = await service.snippet_stats_by_language()
    return ApiResponse(
        data=[LanguageCount(language=language, count=count) for language, count in rows],
        metadata=ResponseMetadata(request_id=request_id),
    )


@router.get(
    "/activity",
    response_model=ApiResponse[list[DailyCount]],
    summary="Notes created per day",
    description="Days without notes are omitted. Defaults to the recent window ending today.",
)
async def activity_stats(
    db: DbSession,
    request_id: RequestId,
    start_date: date | None = Query(default=None, description="First day (inclusive)"),
    end_date: date | None = Query(default=None, description="Last day (inclusive)"),
) -> ApiResponse[list[DailyCount]]:
    if end_date is None:
        end_date = utc_now().date()
    if start_date is None:
        days = get_app_config().application.queries.recent_days
        start_date = end_date - timedelta(days=min(days, (end_date - date.min).days))

    service = StatsService(db)
    rows = await service.notes_created_per_day(start_date, end_date)
    return ApiResponse(
        data=[DailyCount(day=day, count=count) for day, count in rows],
        metadata=ResponseMetadata(request_id=request_id),
    )
