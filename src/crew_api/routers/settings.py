"""Settings router: skill, certification and contract catalogs."""

from typing import Annotated

from fastapi import APIRouter, Body, Depends

from crew_api.dependencies import get_catalog_service
from crew_api.models.domain.catalog import Catalogs, ContractConfig, GlobalCertConfig
from crew_api.models.domain.user import CurrentUser
from crew_api.security.auth import get_current_user
from crew_api.services.catalog_service import CatalogService

router = APIRouter()

MAX_CATALOG_ENTRIES = 200


@router.get("/catalogs", response_model=Catalogs)
async def get_catalogs(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    catalog_service: Annotated[CatalogService, Depends(get_catalog_service)],
) -> Catalogs:
    """Get the skill, certification and contract catalogs."""
    return await catalog_service.get_catalogs()


@router.put("/catalogs/skills", response_model=list[str])
async def save_skills(
    skills: Annotated[list[str], Body(max_length=MAX_CATALOG_ENTRIES)],
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    catalog_service: Annotated[CatalogService, Depends(get_catalog_service)],
) -> list[str]:
    """Replace the skill catalog."""
    return await catalog_service.save_skills(current_user, skills)


@router.put("/catalogs/certifications", response_model=list[GlobalCertConfig])
async def save_certifications(
    certifications: Annotated[list[GlobalCertConfig], Body(max_length=MAX_CATALOG_ENTRIES)],
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    catalog_service: Annotated[CatalogService, Depends(get_catalog_service)],
) -> list[GlobalCertConfig]:
    """Replace the certification catalog."""
    return await catalog_service.save_certifications(current_user, certifications)


@router.put("/catalogs/contracts", response_model=list[ContractConfig])
async def save_contracts(
    contracts: Annotated[list[ContractConfig], Body(max_length=MAX_CATALOG_ENTRIES)],
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    catalog_service: Annotated[CatalogService, Depends(get_catalog_service)],
) -> list[ContractConfig]:
    """Replace the contract-type catalog."""
    return await catalog_service.save_contracts(current_user, contracts)
