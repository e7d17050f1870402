"""Services package."""

from crew_api.services.activity_service import ActivityLogger
from crew_api.services.catalog_service import CatalogService
from crew_api.services.compliance_service import ComplianceCalculator
from crew_api.services.employee_service import EmployeeService
from crew_api.services.lifecycle_service import LifecycleService
from crew_api.services.planning_service import TaskAssignmentAdvisor
from crew_api.services.session_service import SessionGate
from crew_api.services.support_service import SupportService

__all__ = [
    "ActivityLogger",
    "CatalogService",
    "ComplianceCalculator",
    "EmployeeService",
    "LifecycleService",
    "SessionGate",
    "SupportService",
    "TaskAssignmentAdvisor",
]
