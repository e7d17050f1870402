"""Employee domain model."""

from datetime import date
from enum import StrEnum
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, Field, model_validator

from crew_api.utils.dates import parse_date

# Prefix of machine-generated archive reasons (contract-expiry sweep)
AUTO_ARCHIVE_MARKER = "[AUTO]"

OptionalDate = Annotated[date | None, BeforeValidator(parse_date)]


class Role(StrEnum):
    """Crew role enum."""

    MANAGER = "manager"
    TRAINER = "formateur/formatrice"
    TEAM_MEMBER = "équipier"
    MCCAFE_SPECIALIST = "mccafé"
    HOST_GREETER = "hôte/hôtesse"


class SkillLevel(StrEnum):
    """Skill level enum, declared from lowest to highest."""

    NOT_TRAINED = "Non Formé"
    BEGINNER = "Débutant"
    INTERMEDIATE = "Intermédiaire"
    TRAINED = "Formé"
    EXPERT = "Expert"

    @property
    def is_qualified(self) -> bool:
        """Formé and Expert count as qualified."""
        return self in (SkillLevel.TRAINED, SkillLevel.EXPERT)


class CertStatus(StrEnum):
    """Certification status enum."""

    TODO = "À faire"
    COMPLETED = "Complété"
    EXPIRED = "Expiré"


class Partition(StrEnum):
    """Roster partition an employee belongs to."""

    ACTIVE = "active"
    ARCHIVED = "archived"
    TRASHED = "deleted"


class Skill(BaseModel):
    """Skill held by an employee."""

    name: str = Field(min_length=1)
    level: SkillLevel = SkillLevel.NOT_TRAINED


class CertSignOff(BaseModel):
    """Interactive sign-off captured when a certification is validated."""

    trainer_name: str | None = None
    trainer_signature: str | None = None
    employee_signature: str | None = None
    evaluation: dict[str, Any] | None = None
    signed_on: OptionalDate = None


class EmployeeCert(BaseModel):
    """Certification record held by an employee."""

    name: str = Field(min_length=1)
    status: CertStatus = CertStatus.TODO
    date_obtained: OptionalDate = None
    expiry_date: OptionalDate = None
    document_url: str | None = None
    sign_off: CertSignOff | None = None

    def is_expired_on(self, today: date) -> bool:
        """Whether the expiry date has been reached (expiring today counts as expired)."""
        return self.expiry_date is not None and self.expiry_date <= today


class DayAvailability(BaseModel):
    """Weekly availability for one day."""

    day: str
    is_available: bool = True
    start_time: str | None = None
    end_time: str | None = None


class Employee(BaseModel):
    """Employee domain model.

    An employee is in exactly one roster partition: active (neither flag set),
    archived (``is_archived``) or trashed (``is_deleted``). Both flags set at
    once is rejected.
    """

    id: str = Field(min_length=1)
    name: str
    email: str = ""
    role: Role = Role.TEAM_MEMBER
    department: str = ""
    skills: list[Skill] = Field(default_factory=list)
    certifications: list[EmployeeCert] = Field(default_factory=list)
    availability: list[DayAvailability] = Field(default_factory=list)
    entry_date: OptionalDate = None
    contract_end_date: OptionalDate = None
    phone_number: str | None = None
    contract_type: str | None = None

    is_archived: bool = False
    archived_date: OptionalDate = None
    archived_reason: str | None = None
    is_deleted: bool = False
    deleted_date: OptionalDate = None

    # Optimistic concurrency token, bumped by the record store on every write
    version: int = Field(default=0, ge=0)

    @model_validator(mode="after")
    def check_lifecycle_flags(self) -> "Employee":
        """Reject records flagged as both archived and deleted."""
        if self.is_archived and self.is_deleted:
            raise ValueError("An employee cannot be archived and deleted at the same time")
        return self

    @property
    def partition(self) -> Partition:
        """Partition implied by the lifecycle flags."""
        if self.is_deleted:
            return Partition.TRASHED
        if self.is_archived:
            return Partition.ARCHIVED
        return Partition.ACTIVE

    @property
    def is_pending_archive(self) -> bool:
        """Archived automatically and still waiting for a human-entered reason."""
        return self.is_archived and AUTO_ARCHIVE_MARKER in (self.archived_reason or "")

    def skill_level(self, skill_name: str) -> SkillLevel | None:
        """Level held on a skill, or None if the skill is not recorded."""
        for skill in self.skills:
            if skill.name == skill_name:
                return skill.level
        return None

    def find_cert(self, cert_name: str) -> EmployeeCert | None:
        """Certification record by name."""
        for cert in self.certifications:
            if cert.name == cert_name:
                return cert
        return None
