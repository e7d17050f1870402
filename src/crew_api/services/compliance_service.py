"""Mandatory-certification and skill compliance calculator.

Everything here is a pure computation over the employees, the catalogs and
a reference date. Certification expiry is always derived from the expiry
date, never from the stored status: a ``Complété`` certification whose expiry
date is today or earlier is expired.
"""

from datetime import date, timedelta
from decimal import ROUND_HALF_UP, Decimal

from crew_api.models.domain.catalog import Catalogs, GlobalCertConfig
from crew_api.models.domain.employee import CertStatus, Employee, EmployeeCert, Role
from crew_api.models.dto.dashboard import (
    AlertPriority,
    AlertType,
    CertAlert,
    ComplianceReport,
    EmployeeAlerts,
    SkillCoverage,
)

DEFAULT_EXPIRING_SOON_DAYS = 30


def percentage(numerator: int, denominator: int, empty: int = 100) -> int:
    """Integer percentage rounded half-up.

    Args:
        numerator: Satisfied slots
        denominator: Total slots
        empty: Value returned when there are no slots

    Returns:
        Percentage between 0 and 100
    """
    if denominator <= 0:
        return empty
    value = Decimal(100 * numerator) / Decimal(denominator)
    return int(value.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def effective_cert_status(cert: EmployeeCert, today: date) -> CertStatus:
    """Status of a certification once its expiry date is taken into account."""
    if cert.status == CertStatus.COMPLETED and cert.is_expired_on(today):
        return CertStatus.EXPIRED
    return cert.status


def is_completed_slot(cert: EmployeeCert | None, today: date) -> bool:
    """Whether a certification satisfies its mandatory slot."""
    return cert is not None and effective_cert_status(cert, today) == CertStatus.COMPLETED


def evaluate_cert(
    employee: Employee,
    config: GlobalCertConfig,
    today: date,
    expiring_soon_days: int = DEFAULT_EXPIRING_SOON_DAYS,
) -> CertAlert | None:
    """Alert raised by one mandatory certification, if any.

    Args:
        employee: Employee to evaluate
        config: Mandatory catalog entry
        today: Reference date
        expiring_soon_days: Width of the EXPIRING_SOON window

    Returns:
        CertAlert, or None when the certification is valid
    """
    cert = employee.find_cert(config.name)
    if cert is None or cert.status != CertStatus.COMPLETED:
        return CertAlert(cert_name=config.name, type=AlertType.MISSING, priority=AlertPriority.HIGH)

    if cert.expiry_date is None:
        return None
    if cert.is_expired_on(today):
        return CertAlert(
            cert_name=config.name,
            type=AlertType.EXPIRED,
            priority=AlertPriority.HIGH,
            expiry_date=cert.expiry_date,
        )
    if cert.expiry_date <= today + timedelta(days=expiring_soon_days):
        return CertAlert(
            cert_name=config.name,
            type=AlertType.EXPIRING_SOON,
            priority=AlertPriority.MEDIUM,
            expiry_date=cert.expiry_date,
        )
    return None


def employee_alerts(
    employees: list[Employee],
    mandatory: list[GlobalCertConfig],
    today: date,
    expiring_soon_days: int = DEFAULT_EXPIRING_SOON_DAYS,
) -> list[EmployeeAlerts]:
    """Alerts grouped by employee; employees without alerts are omitted."""
    grouped = []
    for employee in employees:
        alerts = [
            alert
            for config in mandatory
            if (alert := evaluate_cert(employee, config, today, expiring_soon_days)) is not None
        ]
        if alerts:
            grouped.append(
                EmployeeAlerts(
                    employee_id=employee.id,
                    employee_name=employee.name,
                    role=employee.role,
                    alerts=alerts,
                )
            )
    return grouped


def cert_compliance_rate(employees: list[Employee], mandatory: list[GlobalCertConfig], today: date) -> int:
    """Share of mandatory certification slots currently satisfied."""
    completed = sum(
        1
        for employee in employees
        for config in mandatory
        if is_completed_slot(employee.find_cert(config.name), today)
    )
    return percentage(completed, len(employees) * len(mandatory))


def skill_compliance_rate(employees: list[Employee], skills: list[str]) -> int:
    """Share of (employee, catalog skill) slots held at Formé or Expert."""
    qualified = sum(
        1
        for employee in employees
        for skill in skills
        if (level := employee.skill_level(skill)) is not None and level.is_qualified
    )
    return percentage(qualified, len(employees) * len(skills))


def skill_coverage(employees: list[Employee], skills: list[str]) -> list[SkillCoverage]:
    """Qualified headcount per catalog skill."""
    coverage = []
    for skill in skills:
        qualified = sum(
            1
            for employee in employees
            if (level := employee.skill_level(skill)) is not None and level.is_qualified
        )
        coverage.append(
            SkillCoverage(
                skill=skill,
                qualified_count=qualified,
                total_count=len(employees),
                percentage=percentage(qualified, len(employees), empty=0),
            )
        )
    return coverage


class ComplianceCalculator:
    """Builds the compliance dashboard."""

    def __init__(
        self,
        expiring_soon_days: int = DEFAULT_EXPIRING_SOON_DAYS,
        roles: list[Role] | None = None,
    ) -> None:
        """Initialize calculator.

        Args:
            expiring_soon_days: Width of the EXPIRING_SOON window
            roles: Roles counted by the computation; None counts every role
        """
        self.expiring_soon_days = expiring_soon_days
        self.roles = set(roles) if roles is not None else None

    def build_report(self, employees: list[Employee], catalogs: Catalogs, today: date) -> ComplianceReport:
        """Compute alerts and compliance rates for the active roster.

        Args:
            employees: Active employees
            catalogs: Skill and certification catalogs
            today: Reference date

        Returns:
            ComplianceReport
        """
        tracked = [emp for emp in employees if self.roles is None or emp.role in self.roles]
        mandatory = catalogs.mandatory_certifications

        cert_rate = cert_compliance_rate(tracked, mandatory, today)
        skill_rate = skill_compliance_rate(tracked, catalogs.skills)

        role_counts = {role.value: 0 for role in Role}
        for employee in employees:
            role_counts[employee.role.value] += 1

        return ComplianceReport(
            generated_on=today,
            employee_count=len(tracked),
            mandatory_cert_count=len(mandatory),
            cert_compliance_rate=cert_rate,
            skill_compliance_rate=skill_rate,
            global_compliance=int(
                (Decimal(cert_rate + skill_rate) / 2).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
            ),
            alerts=employee_alerts(tracked, mandatory, today, self.expiring_soon_days),
            skill_coverage=skill_coverage(tracked, catalogs.skills),
            role_counts=role_counts,
        )
