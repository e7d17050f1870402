"""Task planning domain models."""

from enum import StrEnum

from pydantic import BaseModel, Field

from crew_api.models.domain.employee import OptionalDate


class TaskStatus(StrEnum):
    """Task status enum."""

    PENDING = "Pending"
    ASSIGNED = "Assigned"
    DONE = "Done"


class VacationType(StrEnum):
    """Absence type enum."""

    LEAVE = "Congés"
    SICK = "Maladie"
    RTT = "RRT"


class Task(BaseModel):
    """Operational task (cleaning, inventory, delivery...)."""

    id: str = Field(min_length=1)
    title: str
    description: str = ""
    required_skills: list[str] = Field(default_factory=list)
    assigned_to: str | None = None
    deadline: OptionalDate = None
    status: TaskStatus = TaskStatus.PENDING


class Vacation(BaseModel):
    """Employee absence period."""

    id: str
    employee_id: str
    start_date: OptionalDate = None
    end_date: OptionalDate = None
    type: VacationType = VacationType.LEAVE


class Assignment(BaseModel):
    """Suggested task -> employee binding."""

    task_id: str = Field(min_length=1)
    employee_id: str = Field(min_length=1)
    reason: str = ""
