"""
Tag Catalog Endpoint.

Lists every tag with its display name, emoji and description.
"""

from fastapi import APIRouter

from codeboard.backend.core.config import get_app_config
from codeboard.backend.core.dependencies import RequestId
from codeboard.backend.core.exceptions import NotFoundError
from codeboard.backend.models.tag import NoteTag
from codeboard.backend.schemas.base import ApiResponse, ResponseMetadata
from codeboard.backend.schemas.stats import TagInfo

router = APIRouter()


@router.get(
    "",
    response_model=ApiResponse[list[TagInfo]],
    summary="Tag catalog",
)
async def list_tags(request_id: RequestId) -> ApiResponse[list[TagInfo]]:
    """All tags in declaration order."""
    if not get_app_config().features.tag_catalog_enabled:
        raise NotFoundError("Feature", "tags")
    return ApiResponse(
        data=[TagInfo.from_tag(tag) for tag in NoteTag],
        metadata=ResponseMetadata(request_id=request_id),
    )
