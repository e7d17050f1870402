"""Centralized dependency injection factories for FastAPI.

Services are built per request around the request's record store. The
roster is loaded (which runs the contract sweep) once per request by
``get_lifecycle_service``.
"""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from crew_api.config import get_settings
from crew_api.database import get_record_store
from crew_api.models.domain.user import CurrentUser
from crew_api.providers.base import GenerativeProvider
from crew_api.providers.gemini import GeminiProvider
from crew_api.repositories.store import RecordStore
from crew_api.security.auth import get_current_user
from crew_api.services.activity_service import ActivityLogger
from crew_api.services.catalog_service import CatalogService
from crew_api.services.compliance_service import ComplianceCalculator
from crew_api.services.employee_service import EmployeeService
from crew_api.services.lifecycle_service import LifecycleService
from crew_api.services.planning_service import TaskAssignmentAdvisor
from crew_api.services.support_service import SupportService

# =============================================================================
# Collaborators
# =============================================================================


@lru_cache
def get_generative_provider() -> GenerativeProvider:
    """Get the generative AI provider client."""
    settings = get_settings()
    return GeminiProvider(
        settings.gemini_api_key,
        settings.gemini_model,
        timeout=settings.gemini_timeout_seconds,
    )


# =============================================================================
# Service Factories
# =============================================================================


def get_activity_logger(store: RecordStore = Depends(get_record_store)) -> ActivityLogger:
    """Get ActivityLogger instance."""
    return ActivityLogger(store, feed_limit=get_settings().activity_feed_limit)


def get_catalog_service(
    store: RecordStore = Depends(get_record_store),
    activity: ActivityLogger = Depends(get_activity_logger),
) -> CatalogService:
    """Get CatalogService instance."""
    return CatalogService(store, activity)


def get_compliance_calculator() -> ComplianceCalculator:
    """Get ComplianceCalculator configured from settings."""
    settings = get_settings()
    return ComplianceCalculator(
        expiring_soon_days=settings.expiring_soon_days,
        roles=settings.compliance_roles,
    )


def get_advisor(provider: GenerativeProvider = Depends(get_generative_provider)) -> TaskAssignmentAdvisor:
    """Get TaskAssignmentAdvisor instance."""
    return TaskAssignmentAdvisor(provider)


def get_support_service(store: RecordStore = Depends(get_record_store)) -> SupportService:
    """Get SupportService instance."""
    return SupportService(store)


# =============================================================================
# Roster Service Factories
# =============================================================================


async def get_lifecycle_service(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    store: RecordStore = Depends(get_record_store),
    activity: ActivityLogger = Depends(get_activity_logger),
) -> LifecycleService:
    """Get LifecycleService with the roster loaded for the caller."""
    service = LifecycleService(store, activity)
    await service.load(current_user)
    return service


def get_employee_service(
    lifecycle: LifecycleService = Depends(get_lifecycle_service),
    activity: ActivityLogger = Depends(get_activity_logger),
) -> EmployeeService:
    """Get EmployeeService instance."""
    return EmployeeService(lifecycle, activity)
