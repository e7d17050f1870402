"""Employee records service: recruiting, profile edits and certifications."""

import logging
from collections.abc import Callable
from datetime import date
from uuid import uuid4

from crew_api.constants.defaults import default_availability
from crew_api.exceptions import CertificationNotFoundError, UnknownSkillError
from crew_api.models.domain.activity import LogCategory
from crew_api.models.domain.catalog import Catalogs
from crew_api.models.domain.employee import (
    CertStatus,
    Employee,
    EmployeeCert,
    Partition,
    Skill,
    SkillLevel,
)
from crew_api.models.domain.user import CurrentUser
from crew_api.models.dto.employee import (
    CertificationRecord,
    CertificationStatus,
    EmployeeCreate,
    EmployeeUpdate,
)
from crew_api.services.activity_service import ActivityLogger, LogAction
from crew_api.services.compliance_service import effective_cert_status
from crew_api.services.lifecycle_service import LifecycleService, TransitionResult
from crew_api.utils.dates import add_months

logger = logging.getLogger(__name__)


def generate_employee_id() -> str:
    """New employee id, ``EMP-`` followed by 8 hex characters."""
    return f"EMP-{uuid4().hex[:8].upper()}"


class EmployeeService:
    """Service for employee record edits.

    Partition moves are delegated to the lifecycle service, which owns the
    roster.
    """

    def __init__(
        self,
        lifecycle: LifecycleService,
        activity: ActivityLogger,
        today: Callable[[], date] = date.today,
    ) -> None:
        """Initialize service.

        Args:
            lifecycle: Lifecycle service holding the loaded roster
            activity: Activity logger
            today: Clock returning the current date
        """
        self.lifecycle = lifecycle
        self.activity = activity
        self._today = today

    def build_recruit(self, data: EmployeeCreate, catalogs: Catalogs) -> Employee:
        """New active employee initialized from the catalogs.

        Every catalog skill starts at Non Formé and every catalog
        certification at À faire.
        """
        default_contract = catalogs.contracts[0].name if catalogs.contracts else None
        return Employee(
            id=generate_employee_id(),
            name=data.name,
            email=data.email,
            role=data.role,
            department=data.department,
            skills=[Skill(name=skill, level=SkillLevel.NOT_TRAINED) for skill in catalogs.skills],
            certifications=[
                EmployeeCert(name=cert.name, status=CertStatus.TODO) for cert in catalogs.certifications
            ],
            availability=default_availability(),
            entry_date=data.entry_date or self._today(),
            contract_end_date=data.contract_end_date,
            phone_number=data.phone_number,
            contract_type=data.contract_type or default_contract,
        )

    async def recruit(self, actor: CurrentUser, data: EmployeeCreate, catalogs: Catalogs) -> TransitionResult:
        """Create an employee and add it to the active roster.

        Args:
            actor: Acting user
            data: Recruit fields
            catalogs: Current catalogs

        Returns:
            TransitionResult for the new employee
        """
        employee = self.build_recruit(data, catalogs)
        result = await self.lifecycle.admit(actor, employee)
        await self.activity.record(
            actor.display_name,
            LogAction.RECRUIT,
            f"Nouveau dossier créé pour {employee.name}.",
            LogCategory.TEAM,
        )
        logger.info("Recruited employee %s", employee.id)
        return result

    async def update(
        self,
        actor: CurrentUser,
        employee_id: str,
        changes: EmployeeUpdate,
        catalogs: Catalogs,
    ) -> TransitionResult:
        """Edit the profile of an active employee.

        Raises:
            EmployeeNotFoundError: If the id is not active
            UnknownSkillError: If a skill is not part of the catalog
        """
        current = self.lifecycle.roster.require(Partition.ACTIVE, employee_id)

        fields = changes.model_dump(exclude_unset=True, exclude={"skills", "availability", "version"})
        if changes.skills is not None:
            for skill in changes.skills:
                if skill.name not in catalogs.skills:
                    raise UnknownSkillError(skill.name)
            fields["skills"] = changes.skills
        if changes.availability is not None:
            fields["availability"] = changes.availability
        if changes.version is not None:
            fields["version"] = changes.version

        updated = Employee.model_validate({**current.model_dump(), **fields})
        result = await self.lifecycle.update_active(actor, updated)
        await self.activity.record(
            actor.display_name,
            LogAction.UPDATE_RECORD,
            f"Fiche de {updated.name} mise à jour.",
            LogCategory.TEAM,
        )
        return result

    async def record_certification(
        self,
        actor: CurrentUser,
        employee_id: str,
        record: CertificationRecord,
        catalogs: Catalogs,
    ) -> TransitionResult:
        """Mark a certification as completed and compute its expiry.

        The expiry is the obtained date plus the catalog validity; a validity
        of 0 months never expires.

        Raises:
            EmployeeNotFoundError: If the id is not active
            CertificationNotFoundError: If the certification is not in the catalog
        """
        current = self.lifecycle.roster.require(Partition.ACTIVE, employee_id)
        config = catalogs.cert_config(record.cert_name)
        if config is None:
            raise CertificationNotFoundError(record.cert_name)

        obtained = record.date_obtained or self._today()
        expiry = add_months(obtained, config.validity_months) if config.validity_months > 0 else None
        cert = EmployeeCert(
            name=config.name,
            status=CertStatus.COMPLETED,
            date_obtained=obtained,
            expiry_date=expiry,
            document_url=record.document_url,
            sign_off=record.sign_off,
        )

        certifications = [c for c in current.certifications if c.name != config.name]
        certifications.append(cert)
        updated = current.model_copy(update={"certifications": certifications})

        result = await self.lifecycle.update_active(actor, updated)
        await self.activity.record(
            actor.display_name,
            LogAction.UPDATE_DOCUMENT,
            f"Nouveau document {config.name} ajouté pour {current.name}.",
            LogCategory.SOC,
        )
        return result

    def certification_statuses(self, employee: Employee) -> list[CertificationStatus]:
        """Certifications of an employee with their date-derived status."""
        today = self._today()
        return [
            CertificationStatus(
                name=cert.name,
                stored_status=cert.status,
                effective_status=effective_cert_status(cert, today),
                expiry_date=cert.expiry_date,
            )
            for cert in employee.certifications
        ]
