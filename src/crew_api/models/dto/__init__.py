"""Data Transfer Objects package."""

from crew_api.models.dto.activity import ActivityLogListResponse
from crew_api.models.dto.auth import (
    ProfileUpdateRequest,
    SessionResponse,
    SignInRequest,
    SignUpRequest,
    SignUpResponse,
    UserInfo,
)
from crew_api.models.dto.dashboard import ComplianceReport
from crew_api.models.dto.employee import (
    ArchiveEntry,
    ArchiveRequest,
    CertificationRecord,
    EmployeeCreate,
    EmployeeListResponse,
    EmployeeUpdate,
    ReasonUpdate,
    TrashEntry,
)
from crew_api.models.dto.planning import PlanningRequest, PlanningResponse
from crew_api.models.dto.support import InquiryCreate

__all__ = [
    "ActivityLogListResponse",
    "ArchiveEntry",
    "ArchiveRequest",
    "CertificationRecord",
    "ComplianceReport",
    "EmployeeCreate",
    "EmployeeListResponse",
    "EmployeeUpdate",
    "InquiryCreate",
    "PlanningRequest",
    "PlanningResponse",
    "ProfileUpdateRequest",
    "ReasonUpdate",
    "SessionResponse",
    "SignInRequest",
    "SignUpRequest",
    "SignUpResponse",
    "TrashEntry",
    "UserInfo",
]
