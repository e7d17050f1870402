"""Domain-specific exceptions for the crew console API.

These exceptions provide a clean separation between service-layer errors
and HTTP responses, avoiding string matching in routers.
"""

from typing import Any


class CrewAPIError(Exception):
    """Base exception for all crew console errors."""

    def __init__(self, message: str = "An error occurred", details: dict[str, Any] | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


# =============================================================================
# Resource Not Found Errors (404)
# =============================================================================


class NotFoundError(CrewAPIError):
    """Base class for resource not found errors."""

    pass


class EmployeeNotFoundError(NotFoundError):
    """Raised when an employee is not in the expected roster partition."""

    def __init__(self, employee_id: str | None = None, partition: str | None = None) -> None:
        message = "Employee not found"
        details: dict[str, Any] = {}
        if employee_id:
            details["employee_id"] = employee_id
        if partition:
            details["partition"] = partition
        super().__init__(message, details)


class CertificationNotFoundError(NotFoundError):
    """Raised when a certification is not part of the catalog."""

    def __init__(self, cert_name: str | None = None) -> None:
        message = "Certification not found"
        details = {"cert_name": cert_name} if cert_name else {}
        super().__init__(message, details)


# =============================================================================
# Validation Errors (400)
# =============================================================================


class ValidationError(CrewAPIError):
    """Base class for validation errors."""

    pass


class ArchiveReasonRequiredError(ValidationError):
    """Raised when archiving (or finalizing an archive) without a reason."""

    def __init__(self, employee_id: str | None = None) -> None:
        message = "Archive reason is required"
        details = {"employee_id": employee_id} if employee_id else {}
        super().__init__(message, details)


class UnknownSkillError(ValidationError):
    """Raised when a skill is not part of the skill catalog."""

    def __init__(self, skill_name: str | None = None) -> None:
        message = "Skill is not part of the catalog"
        details = {"skill_name": skill_name} if skill_name else {}
        super().__init__(message, details)


# =============================================================================
# Conflict Errors (409)
# =============================================================================


class ConflictError(CrewAPIError):
    """Base class for resource conflict errors."""

    pass


class EmployeeAlreadyExistsError(ConflictError):
    """Raised when trying to create an employee whose id is already used."""

    def __init__(self, employee_id: str | None = None) -> None:
        message = "Employee already exists"
        details = {"employee_id": employee_id} if employee_id else {}
        super().__init__(message, details)


class VersionConflictError(ConflictError):
    """Raised when an upsert is based on a stale employee version."""

    def __init__(
        self,
        employee_id: str | None = None,
        expected: int | None = None,
        actual: int | None = None,
    ) -> None:
        message = "Employee was modified concurrently"
        details: dict[str, Any] = {}
        if employee_id:
            details["employee_id"] = employee_id
        if expected is not None:
            details["expected_version"] = expected
        if actual is not None:
            details["actual_version"] = actual
        super().__init__(message, details)


# =============================================================================
# Collaborator Errors (401 / 502)
# =============================================================================


class CollaboratorError(CrewAPIError):
    """Base class for failures of an external collaborator."""

    pass


class PersistenceError(CollaboratorError):
    """Raised when the record store rejects or fails a call."""

    def __init__(self, operation: str, reason: str | None = None) -> None:
        message = f"Record store operation failed: {operation}"
        details: dict[str, Any] = {"operation": operation}
        if reason:
            details["reason"] = reason
        super().__init__(message, details)


class AuthenticationError(CollaboratorError):
    """Raised when the auth provider rejects credentials or a session."""

    def __init__(self, message: str = "Invalid credentials") -> None:
        super().__init__(message)


class AIProviderError(CollaboratorError):
    """Raised when the generative AI endpoint fails."""

    def __init__(self, reason: str | None = None) -> None:
        details = {"reason": reason} if reason else {}
        super().__init__("AI provider call failed", details)
