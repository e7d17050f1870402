"""Task assignment advisor backed by a generative AI provider."""

import json
import logging
from typing import Any

from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from crew_api.exceptions import CrewAPIError
from crew_api.models.domain.employee import Employee
from crew_api.models.domain.planning import Assignment, Task, TaskStatus, Vacation
from crew_api.providers.base import GenerativeProvider

logger = logging.getLogger(__name__)

ASSIGNMENT_SCHEMA: dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        "assignments": {
            "type": "ARRAY",
            "items": {
                "type": "OBJECT",
                "properties": {
                    "taskId": {"type": "STRING"},
                    "employeeId": {"type": "STRING"},
                    "reason": {"type": "STRING"},
                },
                "required": ["taskId", "employeeId", "reason"],
            },
        }
    },
    "required": ["assignments"],
}

PROMPT_TEMPLATE = """\
En tant qu'assistant de planification intelligent pour un restaurant (plateforme McFormation), \
affecte de manière optimale les tâches suivantes.

Critères prioritaires :
1. COMPÉTENCE : L'employé doit posséder la compétence requise.
   - Favorise les niveaux "Expert" et "Formé" pour les tâches critiques.
   - Évite d'affecter un "Débutant" seul sur une tâche complexe.
2. DISPONIBILITÉ : L'employé ne doit pas être en vacances (données fournies).
3. ÉQUITÉ : Répartis la charge de travail intelligemment sur l'équipe.

Données :
Employés (Nom, Rôle, Compétences et Niveaux): {employees}
Tâches: {tasks}
Vacances: {vacations}

Explique brièvement la raison de chaque affectation en citant le niveau de compétence \
(ex: "Thomas est Expert sur ce poste").
Réponds uniquement au format JSON.
"""


class _ReplyItem(BaseModel):
    task_id: str = Field(alias="taskId", min_length=1)
    employee_id: str = Field(alias="employeeId", min_length=1)
    reason: str = ""


class _Reply(BaseModel):
    assignments: list[_ReplyItem]


def build_prompt(employees: list[Employee], tasks: list[Task], vacations: list[Vacation]) -> str:
    """Render the planning prompt from roster, task and vacation snapshots."""
    employee_data = [
        {
            "id": emp.id,
            "name": emp.name,
            "role": emp.role.value,
            "skills": [{"name": s.name, "level": s.level.value} for s in emp.skills],
        }
        for emp in employees
    ]
    task_data = [
        {
            "id": task.id,
            "title": task.title,
            "requiredSkills": task.required_skills,
            "deadline": task.deadline.isoformat() if task.deadline else None,
        }
        for task in tasks
    ]
    vacation_data = [
        {
            "employeeId": vac.employee_id,
            "startDate": vac.start_date.isoformat() if vac.start_date else None,
            "endDate": vac.end_date.isoformat() if vac.end_date else None,
            "type": vac.type.value,
        }
        for vac in vacations
    ]
    return PROMPT_TEMPLATE.format(
        employees=json.dumps(employee_data, ensure_ascii=False),
        tasks=json.dumps(task_data, ensure_ascii=False),
        vacations=json.dumps(vacation_data, ensure_ascii=False),
    )


def parse_assignments(text: str) -> list[Assignment]:
    """Parse the provider reply; anything malformed yields no assignments."""
    try:
        reply = _Reply.model_validate(json.loads(text.strip()))
    except (json.JSONDecodeError, PydanticValidationError) as e:
        logger.warning("Unusable planning reply: %s", e)
        return []
    return [
        Assignment(task_id=item.task_id, employee_id=item.employee_id, reason=item.reason)
        for item in reply.assignments
    ]


def apply_assignments(tasks: list[Task], assignments: list[Assignment]) -> list[Task]:
    """New task list with the suggested assignees applied.

    Tasks without a suggestion are returned unchanged.
    """
    by_task = {assignment.task_id: assignment for assignment in assignments}
    return [
        task.model_copy(update={"assigned_to": by_task[task.id].employee_id, "status": TaskStatus.ASSIGNED})
        if task.id in by_task
        else task
        for task in tasks
    ]


class TaskAssignmentAdvisor:
    """Suggests task assignments.

    Skill match, vacation exclusion and workload equity are stated in the
    prompt as policy; this class only builds the request and validates the
    reply. No suggestion is a valid outcome, never an error.
    """

    def __init__(self, provider: GenerativeProvider) -> None:
        """Initialize advisor.

        Args:
            provider: Generative AI provider
        """
        self.provider = provider

    async def suggest(
        self,
        employees: list[Employee],
        tasks: list[Task],
        vacations: list[Vacation],
    ) -> list[Assignment]:
        """Ask the provider for task -> employee assignments.

        Args:
            employees: Candidate employees
            tasks: Tasks to assign
            vacations: Known absences

        Returns:
            Assignments naming known task and employee ids only
        """
        if not tasks or not employees:
            return []

        prompt = build_prompt(employees, tasks, vacations)
        try:
            text = await self.provider.generate_json(prompt, ASSIGNMENT_SCHEMA)
        except CrewAPIError as e:
            logger.error("Planning provider call failed: %s", e.message)
            return []

        task_ids = {task.id for task in tasks}
        employee_ids = {emp.id for emp in employees}
        assignments = []
        for assignment in parse_assignments(text):
            if assignment.task_id not in task_ids or assignment.employee_id not in employee_ids:
                logger.debug(
                    "Dropping assignment of unknown task/employee %s -> %s",
                    assignment.task_id,
                    assignment.employee_id,
                )
                continue
            assignments.append(assignment)
        return assignments
