"""Catalog (referential) domain models."""

from pydantic import BaseModel, Field


class GlobalCertConfig(BaseModel):
    """Certification catalog entry.

    ``validity_months`` of 0 means the certification never expires.
    """

    name: str = Field(min_length=1, max_length=255)
    is_mandatory: bool = True
    validity_months: int = Field(default=0, ge=0)
    template: str | None = None


class ContractConfig(BaseModel):
    """Contract type catalog entry."""

    id: str = Field(min_length=1)
    name: str = Field(min_length=1, max_length=255)
    weekly_hours: float = Field(default=35, gt=0)


class Catalogs(BaseModel):
    """Skills, certifications and contract types in use by the restaurant."""

    skills: list[str] = Field(default_factory=list)
    certifications: list[GlobalCertConfig] = Field(default_factory=list)
    contracts: list[ContractConfig] = Field(default_factory=list)

    @property
    def mandatory_certifications(self) -> list[GlobalCertConfig]:
        """Catalog entries every employee must hold."""
        return [cert for cert in self.certifications if cert.is_mandatory]

    def cert_config(self, name: str) -> GlobalCertConfig | None:
        """Catalog entry by name."""
        for cert in self.certifications:
            if cert.name == name:
                return cert
        return None
