"""Activity feed DTOs."""

from pydantic import BaseModel

from crew_api.models.domain.activity import ActivityLog


class ActivityLogListResponse(BaseModel):
    """Paginated activity feed response."""

    items: list[ActivityLog]
    total: int
    page: int
    page_size: int
