"""Planning router: AI task assignment suggestions."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Request

from crew_api.dependencies import get_activity_logger, get_advisor, get_lifecycle_service
from crew_api.models.domain.activity import LogCategory
from crew_api.models.domain.user import CurrentUser
from crew_api.models.dto.planning import PlanningRequest, PlanningResponse
from crew_api.security.auth import get_current_user
from crew_api.security.rate_limit import PLANNING_LIMIT, limiter
from crew_api.services.activity_service import ActivityLogger, LogAction
from crew_api.services.lifecycle_service import LifecycleService
from crew_api.services.planning_service import TaskAssignmentAdvisor, apply_assignments

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/suggest", response_model=PlanningResponse)
@limiter.limit(PLANNING_LIMIT)
async def suggest_assignments(
    request: Request,
    body: PlanningRequest,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    lifecycle: Annotated[LifecycleService, Depends(get_lifecycle_service)],
    advisor: Annotated[TaskAssignmentAdvisor, Depends(get_advisor)],
    activity: Annotated[ActivityLogger, Depends(get_activity_logger)],
) -> PlanningResponse:
    """Suggest who should take each task.

    Only active employees are candidates. An unavailable or malformed AI
    reply yields no suggestions rather than an error.
    """
    employees = lifecycle.roster.active
    if body.employee_ids is not None:
        wanted = set(body.employee_ids)
        employees = [emp for emp in employees if emp.id in wanted]

    assignments = await advisor.suggest(employees, body.tasks, body.vacations)
    if assignments:
        await activity.record(
            current_user.display_name,
            LogAction.AI_PLANNING,
            f"{len(assignments)} tâche(s) assignée(s) par l'IA.",
            LogCategory.TRAINING,
        )
    else:
        logger.info("No assignment suggested for %d task(s)", len(body.tasks))

    return PlanningResponse(assignments=assignments, tasks=apply_assignments(body.tasks, assignments))
