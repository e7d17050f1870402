"""Archive router: former employees and their archive reasons."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from crew_api.dependencies import get_lifecycle_service
from crew_api.models.domain.user import CurrentUser
from crew_api.models.dto.employee import ArchiveEntry, ReasonUpdate
from crew_api.security.auth import get_current_user
from crew_api.services.lifecycle_service import LifecycleService, TransitionResult

router = APIRouter()


@router.get("", response_model=list[ArchiveEntry])
async def list_archive(
    lifecycle: Annotated[LifecycleService, Depends(get_lifecycle_service)],
    pending: bool | None = Query(default=None, description="Only entries awaiting a reason"),
) -> list[ArchiveEntry]:
    """List archived employees.

    Entries archived by the contract sweep stay pending until a reason is
    entered.
    """
    entries = [
        ArchiveEntry(employee=employee, pending=employee.is_pending_archive)
        for employee in lifecycle.roster.archived
    ]
    if pending is not None:
        entries = [entry for entry in entries if entry.pending == pending]
    return entries


@router.post("/{employee_id}/restore", response_model=TransitionResult)
async def restore_employee(
    employee_id: str,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    lifecycle: Annotated[LifecycleService, Depends(get_lifecycle_service)],
) -> TransitionResult:
    """Reinstate an archived employee; the contract end date is cleared."""
    result = await lifecycle.restore_from_archive(current_user, employee_id)
    return result.raise_for_conflict()


@router.put("/{employee_id}/reason", response_model=TransitionResult)
async def update_reason(
    employee_id: str,
    body: ReasonUpdate,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    lifecycle: Annotated[LifecycleService, Depends(get_lifecycle_service)],
) -> TransitionResult:
    """Set the archive reason, finalizing a pending archive."""
    result = await lifecycle.update_archive_reason(current_user, employee_id, body.reason)
    return result.raise_for_conflict()
