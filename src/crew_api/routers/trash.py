"""Trash router: soft-deleted employees awaiting destruction."""

from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends

from crew_api.config import get_settings
from crew_api.dependencies import get_lifecycle_service
from crew_api.models.domain.user import CurrentUser
from crew_api.models.dto.employee import TrashEntry
from crew_api.security.auth import get_current_user
from crew_api.services.lifecycle_service import (
    LifecycleService,
    PurgeResult,
    TransitionResult,
    days_left_in_trash,
)

router = APIRouter()


@router.get("", response_model=list[TrashEntry])
async def list_trash(
    lifecycle: Annotated[LifecycleService, Depends(get_lifecycle_service)],
) -> list[TrashEntry]:
    """List trashed employees with the days left before destruction."""
    retention = get_settings().trash_retention_days
    today = date.today()
    return [
        TrashEntry(employee=employee, days_left=days_left_in_trash(employee, today, retention))
        for employee in lifecycle.roster.trashed
    ]


@router.post("/{employee_id}/restore", response_model=TransitionResult)
async def restore_employee(
    employee_id: str,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    lifecycle: Annotated[LifecycleService, Depends(get_lifecycle_service)],
) -> TransitionResult:
    """Bring a trashed employee back to the active roster."""
    result = await lifecycle.restore_from_trash(current_user, employee_id)
    return result.raise_for_conflict()


@router.delete("/{employee_id}", response_model=TransitionResult)
async def purge_employee(
    employee_id: str,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    lifecycle: Annotated[LifecycleService, Depends(get_lifecycle_service)],
) -> TransitionResult:
    """Destroy a trashed employee permanently."""
    return await lifecycle.purge(current_user, employee_id)


@router.delete("", response_model=PurgeResult)
async def empty_trash(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    lifecycle: Annotated[LifecycleService, Depends(get_lifecycle_service)],
) -> PurgeResult:
    """Destroy every trashed employee."""
    return await lifecycle.empty_trash(current_user)
