"""Employee DTOs."""

from pydantic import BaseModel, Field

from crew_api.models.domain.employee import (
    CertSignOff,
    CertStatus,
    DayAvailability,
    Employee,
    OptionalDate,
    Role,
    Skill,
)

DEFAULT_RECRUIT_NAME = "NOUVEL ÉQUIPIER"


class EmployeeCreate(BaseModel):
    """Recruit request DTO."""

    name: str = Field(default=DEFAULT_RECRUIT_NAME, min_length=1, max_length=255)
    email: str = Field(default="", max_length=255)
    role: Role = Role.TEAM_MEMBER
    department: str = Field(default="", max_length=255)
    entry_date: OptionalDate = None
    contract_end_date: OptionalDate = None
    phone_number: str | None = Field(default=None, max_length=50)
    contract_type: str | None = Field(default=None, max_length=100)


class EmployeeUpdate(BaseModel):
    """Profile edit DTO; omitted fields are left unchanged.

    ``version`` is the version the client read; a stale version is rejected.
    """

    name: str | None = Field(default=None, min_length=1, max_length=255)
    email: str | None = Field(default=None, max_length=255)
    role: Role | None = None
    department: str | None = Field(default=None, max_length=255)
    skills: list[Skill] | None = None
    availability: list[DayAvailability] | None = None
    entry_date: OptionalDate = None
    contract_end_date: OptionalDate = None
    phone_number: str | None = Field(default=None, max_length=50)
    contract_type: str | None = Field(default=None, max_length=100)
    version: int | None = Field(default=None, ge=0)


class CertificationRecord(BaseModel):
    """Validated certification document DTO."""

    cert_name: str = Field(min_length=1)
    date_obtained: OptionalDate = None
    document_url: str | None = None
    sign_off: CertSignOff | None = None


class CertificationStatus(BaseModel):
    """Certification with its date-derived status."""

    name: str
    stored_status: CertStatus
    effective_status: CertStatus
    expiry_date: OptionalDate = None


class ArchiveRequest(BaseModel):
    """Archive request DTO."""

    reason: str = Field(min_length=1, max_length=1000)


class ReasonUpdate(BaseModel):
    """Archive reason update DTO."""

    reason: str = Field(min_length=1, max_length=1000)


class EmployeeListResponse(BaseModel):
    """Paginated employee list response."""

    items: list[Employee]
    total: int
    page: int
    page_size: int


class ArchiveEntry(BaseModel):
    """Archived employee with its completion state."""

    employee: Employee
    pending: bool


class TrashEntry(BaseModel):
    """Trashed employee with its remaining retention."""

    employee: Employee
    days_left: int
