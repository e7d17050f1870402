"""Catalog service: skill, certification and contract-type referentials."""

import logging
from typing import Any

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from crew_api.constants.defaults import (
    CERTS_SETTING_KEY,
    CONTRACTS_SETTING_KEY,
    DEFAULT_CERTIFICATIONS,
    DEFAULT_CONTRACTS,
    DEFAULT_SKILLS,
    SKILLS_SETTING_KEY,
)
from crew_api.exceptions import CrewAPIError, ValidationError
from crew_api.models.domain.activity import LogCategory
from crew_api.models.domain.catalog import Catalogs, ContractConfig, GlobalCertConfig
from crew_api.models.domain.user import CurrentUser
from crew_api.repositories.store import RecordStore
from crew_api.services.activity_service import ActivityLogger, LogAction

logger = logging.getLogger(__name__)

_skills_adapter = TypeAdapter(list[str])
_certs_adapter = TypeAdapter(list[GlobalCertConfig])
_contracts_adapter = TypeAdapter(list[ContractConfig])


def _ensure_unique(names: list[str], catalog: str) -> None:
    """Reject duplicated (case-insensitive) catalog names."""
    seen: set[str] = set()
    for name in names:
        key = name.strip().casefold()
        if key in seen:
            raise ValidationError(f"Duplicate entry in {catalog} catalog", {"name": name})
        seen.add(key)


class CatalogService:
    """Reads and replaces the restaurant's referentials.

    Any catalog the store has no (valid, non-empty) value for falls back to
    the built-in default.
    """

    def __init__(self, store: RecordStore, activity: ActivityLogger) -> None:
        """Initialize service.

        Args:
            store: Record store holding the settings blobs
            activity: Activity logger
        """
        self.store = store
        self.activity = activity

    async def _load(self, key: str, adapter: TypeAdapter, default: list[Any]) -> list[Any]:
        try:
            raw = await self.store.get_setting(key)
        except CrewAPIError as e:
            logger.warning("Could not read setting %s, using defaults: %s", key, e.message)
            return list(default)

        if not raw:
            return list(default)
        try:
            return adapter.validate_python(raw)
        except PydanticValidationError as e:
            logger.warning("Invalid value stored for setting %s, using defaults: %s", key, e)
            return list(default)

    async def get_catalogs(self) -> Catalogs:
        """Current skill, certification and contract catalogs."""
        return Catalogs(
            skills=await self._load(SKILLS_SETTING_KEY, _skills_adapter, DEFAULT_SKILLS),
            certifications=await self._load(CERTS_SETTING_KEY, _certs_adapter, DEFAULT_CERTIFICATIONS),
            contracts=await self._load(CONTRACTS_SETTING_KEY, _contracts_adapter, DEFAULT_CONTRACTS),
        )

    async def save_skills(self, actor: CurrentUser, skills: list[str]) -> list[str]:
        """Replace the skill catalog.

        Raises:
            ValidationError: If a name is blank or duplicated
            PersistenceError: If the store rejects the write
        """
        cleaned = [skill.strip() for skill in skills]
        if any(not skill for skill in cleaned):
            raise ValidationError("Skill names cannot be blank")
        _ensure_unique(cleaned, "skill")

        await self.store.save_setting(SKILLS_SETTING_KEY, cleaned)
        await self.activity.record(
            actor.display_name,
            LogAction.UPDATE_CATALOG,
            f"Référentiel des compétences mis à jour ({len(cleaned)} compétences).",
            LogCategory.TRAINING,
        )
        return cleaned

    async def save_certifications(
        self,
        actor: CurrentUser,
        certifications: list[GlobalCertConfig],
    ) -> list[GlobalCertConfig]:
        """Replace the certification catalog.

        Raises:
            ValidationError: If a name is duplicated
            PersistenceError: If the store rejects the write
        """
        _ensure_unique([cert.name for cert in certifications], "certification")

        await self.store.save_setting(
            CERTS_SETTING_KEY,
            [cert.model_dump(mode="json") for cert in certifications],
        )
        await self.activity.record(
            actor.display_name,
            LogAction.UPDATE_CATALOG,
            f"Référentiel des certifications mis à jour ({len(certifications)} certifications).",
            LogCategory.TRAINING,
        )
        return certifications

    async def save_contracts(
        self,
        actor: CurrentUser,
        contracts: list[ContractConfig],
    ) -> list[ContractConfig]:
        """Replace the contract-type catalog.

        Raises:
            ValidationError: If a name or id is duplicated
            PersistenceError: If the store rejects the write
        """
        _ensure_unique([contract.name for contract in contracts], "contract")
        _ensure_unique([contract.id for contract in contracts], "contract id")

        await self.store.save_setting(
            CONTRACTS_SETTING_KEY,
            [contract.model_dump(mode="json") for contract in contracts],
        )
        await self.activity.record(
            actor.display_name,
            LogAction.UPDATE_CATALOG,
            f"Types de contrat mis à jour ({len(contracts)} contrats).",
            LogCategory.SYSTEM,
        )
        return contracts
