"""Domain models package."""

from crew_api.models.domain.activity import ActivityLog, LogCategory
from crew_api.models.domain.catalog import Catalogs, ContractConfig, GlobalCertConfig
from crew_api.models.domain.employee import (
    AUTO_ARCHIVE_MARKER,
    CertSignOff,
    CertStatus,
    DayAvailability,
    Employee,
    EmployeeCert,
    Partition,
    Role,
    Skill,
    SkillLevel,
)
from crew_api.models.domain.inquiry import Inquiry
from crew_api.models.domain.planning import Assignment, Task, TaskStatus, Vacation, VacationType
from crew_api.models.domain.roster import Roster
from crew_api.models.domain.user import AuthUser, CurrentUser, Session, UserProfile

__all__ = [
    "AUTO_ARCHIVE_MARKER",
    "ActivityLog",
    "Assignment",
    "AuthUser",
    "Catalogs",
    "CertSignOff",
    "CertStatus",
    "ContractConfig",
    "CurrentUser",
    "DayAvailability",
    "Employee",
    "EmployeeCert",
    "GlobalCertConfig",
    "Inquiry",
    "LogCategory",
    "Partition",
    "Role",
    "Roster",
    "Session",
    "Skill",
    "SkillLevel",
    "Task",
    "TaskStatus",
    "UserProfile",
    "Vacation",
    "VacationType",
]
