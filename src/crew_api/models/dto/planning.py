"""Planning DTOs."""

from pydantic import BaseModel, Field

from crew_api.models.domain.planning import Assignment, Task, Vacation


class PlanningRequest(BaseModel):
    """Task assignment suggestion request."""

    tasks: list[Task] = Field(min_length=1, max_length=200)
    vacations: list[Vacation] = Field(default_factory=list)
    # Restrict candidates to these active employees; all active employees when omitted
    employee_ids: list[str] | None = None


class PlanningResponse(BaseModel):
    """Suggested assignments and the tasks with those assignments applied."""

    assignments: list[Assignment]
    tasks: list[Task]
