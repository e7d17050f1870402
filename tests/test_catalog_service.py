"""Catalog service tests."""

import pytest

from crew_api.constants.defaults import (
    CERTS_SETTING_KEY,
    DEFAULT_CONTRACTS,
    DEFAULT_SKILLS,
    SKILLS_SETTING_KEY,
)
from crew_api.exceptions import ValidationError
from crew_api.models.domain.activity import LogCategory
from crew_api.models.domain.catalog import ContractConfig, GlobalCertConfig
from crew_api.services.catalog_service import CatalogService


@pytest.fixture
def catalog_service(store, activity) -> CatalogService:
    return CatalogService(store, activity)


class TestCatalogs:
    """Reading and replacing referentials."""

    async def test_defaults_when_store_is_empty(self, catalog_service) -> None:
        catalogs = await catalog_service.get_catalogs()
        assert catalogs.skills == DEFAULT_SKILLS
        assert catalogs.contracts == DEFAULT_CONTRACTS
        assert all(cert.is_mandatory for cert in catalogs.certifications)

    async def test_invalid_stored_value_falls_back(self, store, catalog_service) -> None:
        store.settings[CERTS_SETTING_KEY] = [{"validity_months": "forever"}]
        catalogs = await catalog_service.get_catalogs()
        assert len(catalogs.certifications) == 4

    async def test_save_skills(self, store, actor, catalog_service) -> None:
        saved = await catalog_service.save_skills(actor, [" FRITES ", "DRIVE"])

        assert saved == ["FRITES", "DRIVE"]
        assert store.settings[SKILLS_SETTING_KEY] == ["FRITES", "DRIVE"]
        assert (await catalog_service.get_catalogs()).skills == ["FRITES", "DRIVE"]
        assert store.logs[-1].category == LogCategory.TRAINING

    @pytest.mark.parametrize("skills", [["FRITES", "frites"], ["FRITES", "  "]])
    async def test_invalid_skills_rejected(self, store, actor, catalog_service, skills) -> None:
        with pytest.raises(ValidationError):
            await catalog_service.save_skills(actor, skills)
        assert SKILLS_SETTING_KEY not in store.settings

    async def test_save_certifications_round_trip(self, actor, catalog_service) -> None:
        certs = [GlobalCertConfig(name="HACCP", validity_months=12), GlobalCertConfig(name="BONUS", is_mandatory=False)]
        await catalog_service.save_certifications(actor, certs)

        catalogs = await catalog_service.get_catalogs()

        assert catalogs.certifications == certs
        assert [cert.name for cert in catalogs.mandatory_certifications] == ["HACCP"]

    async def test_save_contracts_logged_as_system(self, store, actor, catalog_service) -> None:
        await catalog_service.save_contracts(actor, [ContractConfig(id="CT-9", name="CDD 20H", weekly_hours=20)])
        assert store.logs[-1].category == LogCategory.SYSTEM

    async def test_duplicate_contract_ids_rejected(self, actor, catalog_service) -> None:
        with pytest.raises(ValidationError):
            await catalog_service.save_contracts(
                actor,
                [ContractConfig(id="CT-1", name="A"), ContractConfig(id="CT-1", name="B")],
            )
