"""Dashboard DTOs."""

from datetime import date
from enum import StrEnum

from pydantic import BaseModel, Field

from crew_api.models.domain.employee import Role


class AlertType(StrEnum):
    """Mandatory certification alert type."""

    MISSING = "MISSING"
    EXPIRED = "EXPIRED"
    EXPIRING_SOON = "EXPIRING_SOON"


class AlertPriority(StrEnum):
    """Alert priority."""

    HIGH = "HIGH"
    MEDIUM = "MEDIUM"


class CertAlert(BaseModel):
    """One mandatory certification alert."""

    cert_name: str
    type: AlertType
    priority: AlertPriority
    expiry_date: date | None = None


class EmployeeAlerts(BaseModel):
    """Alerts grouped for one employee."""

    employee_id: str
    employee_name: str
    role: Role
    alerts: list[CertAlert]


class SkillCoverage(BaseModel):
    """Qualified headcount on one catalog skill."""

    skill: str
    qualified_count: int
    total_count: int
    percentage: int = Field(ge=0, le=100)


class ComplianceReport(BaseModel):
    """Compliance dashboard response DTO."""

    generated_on: date
    employee_count: int
    mandatory_cert_count: int
    cert_compliance_rate: int = Field(ge=0, le=100)
    skill_compliance_rate: int = Field(ge=0, le=100)
    global_compliance: int = Field(ge=0, le=100)
    alerts: list[EmployeeAlerts]
    skill_coverage: list[SkillCoverage]
    role_counts: dict[str, int]
