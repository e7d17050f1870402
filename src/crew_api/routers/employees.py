"""Employees router: the active roster."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from crew_api.dependencies import (
    get_catalog_service,
    get_employee_service,
    get_lifecycle_service,
)
from crew_api.models.domain.employee import Employee, Partition
from crew_api.models.domain.user import CurrentUser
from crew_api.models.dto.employee import (
    ArchiveRequest,
    CertificationRecord,
    CertificationStatus,
    EmployeeCreate,
    EmployeeListResponse,
    EmployeeUpdate,
)
from crew_api.security.auth import get_current_user
from crew_api.services.catalog_service import CatalogService
from crew_api.services.employee_service import EmployeeService
from crew_api.services.lifecycle_service import LifecycleService, TransitionResult
from crew_api.utils.validation import sanitize_search

router = APIRouter()


def _matches(employee: Employee, search: str) -> bool:
    needle = search.lower()
    return any(
        needle in (value or "").lower()
        for value in (employee.name, employee.email, employee.department, employee.role.value)
    )


@router.get("", response_model=EmployeeListResponse)
async def list_employees(
    lifecycle: Annotated[LifecycleService, Depends(get_lifecycle_service)],
    search: str | None = Query(default=None, max_length=200),
    role: str | None = Query(default=None, max_length=50),
    page: int = Query(default=1, ge=1, le=10000),
    page_size: int = Query(default=50, ge=1, le=200),
) -> EmployeeListResponse:
    """List active employees, sorted by name."""
    employees = lifecycle.roster.active
    sanitized = sanitize_search(search)
    if sanitized:
        employees = [emp for emp in employees if _matches(emp, sanitized)]
    if role:
        employees = [emp for emp in employees if emp.role.value == role]

    employees.sort(key=lambda emp: emp.name.lower())
    start = (page - 1) * page_size
    return EmployeeListResponse(
        items=employees[start : start + page_size],
        total=len(employees),
        page=page,
        page_size=page_size,
    )


@router.get("/{employee_id}", response_model=Employee)
async def get_employee(
    employee_id: str,
    lifecycle: Annotated[LifecycleService, Depends(get_lifecycle_service)],
) -> Employee:
    """Get an active employee."""
    return lifecycle.roster.require(Partition.ACTIVE, employee_id)


@router.get("/{employee_id}/certifications", response_model=list[CertificationStatus])
async def get_certifications(
    employee_id: str,
    lifecycle: Annotated[LifecycleService, Depends(get_lifecycle_service)],
    employee_service: Annotated[EmployeeService, Depends(get_employee_service)],
) -> list[CertificationStatus]:
    """Certifications of an active employee with their date-derived status."""
    employee = lifecycle.roster.require(Partition.ACTIVE, employee_id)
    return employee_service.certification_statuses(employee)


@router.post("", response_model=TransitionResult, status_code=status.HTTP_201_CREATED)
async def recruit_employee(
    data: EmployeeCreate,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    employee_service: Annotated[EmployeeService, Depends(get_employee_service)],
    catalog_service: Annotated[CatalogService, Depends(get_catalog_service)],
) -> TransitionResult:
    """Recruit an employee; skills and certifications start from the catalogs."""
    catalogs = await catalog_service.get_catalogs()
    result = await employee_service.recruit(current_user, data, catalogs)
    return result.raise_for_conflict()


@router.patch("/{employee_id}", response_model=TransitionResult)
async def update_employee(
    employee_id: str,
    data: EmployeeUpdate,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    employee_service: Annotated[EmployeeService, Depends(get_employee_service)],
    catalog_service: Annotated[CatalogService, Depends(get_catalog_service)],
) -> TransitionResult:
    """Edit an active employee.

    Setting a contract end date in the past archives the employee.
    """
    catalogs = await catalog_service.get_catalogs()
    result = await employee_service.update(current_user, employee_id, data, catalogs)
    return result.raise_for_conflict()


@router.post("/{employee_id}/certifications", response_model=TransitionResult)
async def record_certification(
    employee_id: str,
    record: CertificationRecord,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    employee_service: Annotated[EmployeeService, Depends(get_employee_service)],
    catalog_service: Annotated[CatalogService, Depends(get_catalog_service)],
) -> TransitionResult:
    """Record a validated certification document."""
    catalogs = await catalog_service.get_catalogs()
    result = await employee_service.record_certification(current_user, employee_id, record, catalogs)
    return result.raise_for_conflict()


@router.post("/{employee_id}/archive", response_model=TransitionResult)
async def archive_employee(
    employee_id: str,
    body: ArchiveRequest,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    lifecycle: Annotated[LifecycleService, Depends(get_lifecycle_service)],
) -> TransitionResult:
    """Archive an active employee."""
    result = await lifecycle.archive(current_user, employee_id, body.reason)
    return result.raise_for_conflict()


@router.delete("/{employee_id}", response_model=TransitionResult)
async def delete_employee(
    employee_id: str,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    lifecycle: Annotated[LifecycleService, Depends(get_lifecycle_service)],
) -> TransitionResult:
    """Move an active employee to the trash."""
    result = await lifecycle.delete(current_user, employee_id)
    return result.raise_for_conflict()
