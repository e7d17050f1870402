"""Activity feed router."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from crew_api.dependencies import get_activity_logger
from crew_api.models.domain.activity import LogCategory
from crew_api.models.domain.user import CurrentUser
from crew_api.models.dto.activity import ActivityLogListResponse
from crew_api.security.auth import get_current_user
from crew_api.services.activity_service import ActivityLogger

router = APIRouter()


@router.get("", response_model=ActivityLogListResponse)
async def list_activity(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    activity: Annotated[ActivityLogger, Depends(get_activity_logger)],
    category: LogCategory | None = None,
    page: int = Query(default=1, ge=1, le=10000),
    page_size: int = Query(default=50, ge=1, le=200),
) -> ActivityLogListResponse:
    """Get the activity feed, newest first."""
    items = await activity.list_logs(
        limit=page_size,
        offset=(page - 1) * page_size,
        category=category,
    )
    total = await activity.count_logs(category)
    return ActivityLogListResponse(items=items, total=total, page=page, page_size=page_size)
