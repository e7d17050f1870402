"""Dashboard router."""

from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends

from crew_api.dependencies import (
    get_catalog_service,
    get_compliance_calculator,
    get_lifecycle_service,
)
from crew_api.models.dto.dashboard import ComplianceReport
from crew_api.services.catalog_service import CatalogService
from crew_api.services.compliance_service import ComplianceCalculator
from crew_api.services.lifecycle_service import LifecycleService

router = APIRouter()


@router.get("", response_model=ComplianceReport)
async def get_dashboard(
    lifecycle: Annotated[LifecycleService, Depends(get_lifecycle_service)],
    catalog_service: Annotated[CatalogService, Depends(get_catalog_service)],
    calculator: Annotated[ComplianceCalculator, Depends(get_compliance_calculator)],
) -> ComplianceReport:
    """Get certification alerts and compliance rates of the active roster.

    The roster is swept before the report is computed, so employees whose
    contract has ended are never counted.
    """
    catalogs = await catalog_service.get_catalogs()
    return calculator.build_report(lifecycle.roster.active, catalogs, date.today())
