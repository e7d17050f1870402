"""Built-in referentials used until the restaurant saves its own catalogs."""

from crew_api.models.domain.catalog import ContractConfig, GlobalCertConfig
from crew_api.models.domain.employee import DayAvailability

# Settings keys of the catalogs in the record store
SKILLS_SETTING_KEY = "mcfo_skills"
CERTS_SETTING_KEY = "mcfo_certs"
CONTRACTS_SETTING_KEY = "mcfo_contracts"

DEFAULT_SKILLS = [
    "LIGNE / GARNITURE",
    "BOISSONS / DESSERTS",
    "FRITES",
    "DRIVE / COMMANDE",
    "ACCUEIL / SALLE",
    "LIVRAISON",
    "MAINTENANCE LOURDE",
]

DEFAULT_CERTIFICATIONS = [
    GlobalCertConfig(name="FRED APP", is_mandatory=True, validity_months=12),
    GlobalCertConfig(name="HACCP / HYGIÈNE", is_mandatory=True, validity_months=24),
    GlobalCertConfig(name="SST (SECOURISME)", is_mandatory=True, validity_months=24),
    GlobalCertConfig(name="SÉCURITÉ INCENDIE", is_mandatory=True, validity_months=12),
]

DEFAULT_CONTRACTS = [
    ContractConfig(id="CT-1", name="CDI 35H", weekly_hours=35),
    ContractConfig(id="CT-2", name="CDI 24H", weekly_hours=24),
]

WEEKDAYS = ["Lundi", "Mardi", "Mercredi", "Jeudi", "Vendredi", "Samedi", "Dimanche"]


def default_availability() -> list[DayAvailability]:
    """Monday to Friday 08:00-17:00, weekend off."""
    return [
        DayAvailability(day=day, is_available=True, start_time="08:00", end_time="17:00")
        if index < 5
        else DayAvailability(day=day, is_available=False, start_time="00:00", end_time="00:00")
        for index, day in enumerate(WEEKDAYS)
    ]
