"""Roster lifecycle: archive, trash, restore, purge and the contract-expiry sweep.

Transitions are validated before anything changes, then applied to the
in-memory roster, then persisted, then logged. A persistence failure does not
undo the in-memory move; it is reported on the returned result instead.
"""

import asyncio
import logging
from collections.abc import Callable
from datetime import date

from pydantic import BaseModel, Field

from crew_api.exceptions import ArchiveReasonRequiredError, CrewAPIError, VersionConflictError
from crew_api.models.domain.activity import LogCategory
from crew_api.models.domain.employee import AUTO_ARCHIVE_MARKER, Employee, Partition
from crew_api.models.domain.roster import Roster
from crew_api.models.domain.user import CurrentUser
from crew_api.repositories.store import RecordStore
from crew_api.services.activity_service import ActivityLogger, LogAction
from crew_api.utils.dates import format_french

logger = logging.getLogger(__name__)

DEFAULT_TRASH_RETENTION_DAYS = 30


class TransitionResult(BaseModel):
    """Outcome of one lifecycle transition."""

    employee: Employee
    source: Partition | None = None
    # None once the employee has been purged
    target: Partition | None = None
    persisted: bool = True
    conflict: bool = False
    warning: str | None = None

    def raise_for_conflict(self) -> "TransitionResult":
        """Raise if the store rejected the write as based on a stale version.

        Raises:
            VersionConflictError: If the transition hit a version conflict
        """
        if self.conflict:
            raise VersionConflictError(self.employee.id)
        return self


class SweepResult(BaseModel):
    """Outcome of a contract-expiry sweep."""

    archived: list[Employee] = Field(default_factory=list)
    persisted: bool = True
    conflict: bool = False
    warning: str | None = None


class PurgeResult(BaseModel):
    """Outcome of a bulk purge (empty trash, retention purge)."""

    purged_ids: list[str] = Field(default_factory=list)
    persisted: bool = True
    warning: str | None = None


def auto_archive_reason(contract_end_date: date) -> str:
    """Reason written by the sweep, pending a human-entered one."""
    return f"{AUTO_ARCHIVE_MARKER} Fin de contrat le {format_french(contract_end_date)}"


def days_left_in_trash(
    employee: Employee,
    today: date,
    retention_days: int = DEFAULT_TRASH_RETENTION_DAYS,
) -> int:
    """Days before a trashed employee is due for destruction.

    Args:
        employee: Trashed employee
        today: Reference date
        retention_days: Trash retention window

    Returns:
        Remaining days, never negative; the full window when no date is set
    """
    if employee.deleted_date is None:
        return retention_days
    elapsed = max(0, (today - employee.deleted_date).days)
    return max(0, retention_days - elapsed)


class LifecycleService:
    """Owns roster partition membership and the lifecycle flags."""

    def __init__(
        self,
        store: RecordStore,
        activity: ActivityLogger,
        roster: Roster | None = None,
        today: Callable[[], date] = date.today,
    ) -> None:
        """Initialize service.

        Args:
            store: Record store used to persist transitions
            activity: Activity logger receiving one entry per transition
            roster: Roster to operate on (empty until ``load`` is called)
            today: Clock returning the current date
        """
        self.store = store
        self.activity = activity
        self.roster = roster or Roster()
        self._today = today

    async def load(self, actor: CurrentUser) -> SweepResult:
        """Fetch the three partitions from the store, then run the sweep.

        A partition whose fetch fails is treated as empty.

        Args:
            actor: User the sweep's log entries are attributed to

        Returns:
            Result of the sweep run on the loaded roster
        """
        partitions = (Partition.ACTIVE, Partition.ARCHIVED, Partition.TRASHED)
        fetched = await asyncio.gather(
            *(self.store.fetch_employees(partition) for partition in partitions),
            return_exceptions=True,
        )

        loaded: dict[Partition, list[Employee]] = {}
        for partition, outcome in zip(partitions, fetched):
            if isinstance(outcome, BaseException):
                logger.error("Failed to load %s employees: %s", partition.value, outcome)
                loaded[partition] = []
            else:
                loaded[partition] = outcome

        self.roster = Roster(
            active=loaded[Partition.ACTIVE],
            archived=loaded[Partition.ARCHIVED],
            trashed=loaded[Partition.TRASHED],
        )
        logger.debug("Roster loaded: %s", self.roster.counts())
        return await self.sweep(actor)

    async def _persist(self, partition: Partition, employees: list[Employee]) -> tuple[str | None, bool]:
        """Upsert employees and refresh their roster copies with the stored versions.

        Returns:
            (warning, conflict); warning is None when the write succeeded
        """
        try:
            written = await self.store.upsert_employees(employees)
        except VersionConflictError as e:
            logger.warning("Version conflict persisting %s: %s", [emp.id for emp in employees], e.details)
            return f"Not saved, record was modified concurrently: {e.message}", True
        except CrewAPIError as e:
            logger.error("Failed to persist %s: %s", [emp.id for emp in employees], e.message)
            return f"Change applied but not saved: {e.message}", False

        for employee in written:
            self.roster.replace(partition, employee)
        return None, False

    async def _transition(
        self,
        actor: CurrentUser,
        source: Partition,
        target: Partition,
        updated: Employee,
        action: str,
        details: str,
    ) -> TransitionResult:
        self.roster.move(source, target, updated)
        warning, conflict = await self._persist(target, [updated])
        await self.activity.record(actor.display_name, action, details, LogCategory.TEAM)
        logger.info("Employee %s moved %s -> %s", updated.id, source.value, target.value)
        return TransitionResult(
            employee=self.roster.get(target, updated.id) or updated,
            source=source,
            target=target,
            persisted=warning is None,
            conflict=conflict,
            warning=warning,
        )

    async def archive(self, actor: CurrentUser, employee_id: str, reason: str) -> TransitionResult:
        """Archive an active employee with a human-entered reason.

        Raises:
            EmployeeNotFoundError: If the id is not active
            ArchiveReasonRequiredError: If the reason is blank
        """
        employee = self.roster.require(Partition.ACTIVE, employee_id)
        reason = (reason or "").strip()
        if not reason:
            raise ArchiveReasonRequiredError(employee_id)

        updated = employee.model_copy(
            update={
                "is_archived": True,
                "archived_date": self._today(),
                "archived_reason": reason,
                "is_deleted": False,
                "deleted_date": None,
            }
        )
        return await self._transition(
            actor,
            Partition.ACTIVE,
            Partition.ARCHIVED,
            updated,
            LogAction.ARCHIVE,
            f"{employee.name} archivé.",
        )

    async def delete(self, actor: CurrentUser, employee_id: str) -> TransitionResult:
        """Move an active employee to the trash.

        Raises:
            EmployeeNotFoundError: If the id is not active
        """
        employee = self.roster.require(Partition.ACTIVE, employee_id)
        updated = employee.model_copy(
            update={
                "is_deleted": True,
                "deleted_date": self._today(),
                "is_archived": False,
                "archived_date": None,
            }
        )
        return await self._transition(
            actor,
            Partition.ACTIVE,
            Partition.TRASHED,
            updated,
            LogAction.DELETE,
            f"{employee.name} mis à la corbeille.",
        )

    async def restore_from_trash(self, actor: CurrentUser, employee_id: str) -> TransitionResult:
        """Bring a trashed employee back to the active roster, then run the sweep.

        A contract that ended while in the trash sends the employee straight to
        the archive; ``target`` reports the final partition.

        Raises:
            EmployeeNotFoundError: If the id is not in the trash
        """
        employee = self.roster.require(Partition.TRASHED, employee_id)
        updated = employee.model_copy(update={"is_deleted": False, "deleted_date": None})
        self.roster.move(Partition.TRASHED, Partition.ACTIVE, updated)
        warning, conflict = await self._persist(Partition.ACTIVE, [updated])
        await self.activity.record(
            actor.display_name,
            LogAction.RESTORE,
            f"{employee.name} restauré.",
            LogCategory.TEAM,
        )
        logger.info("Employee %s moved %s -> %s", updated.id, Partition.TRASHED.value, Partition.ACTIVE.value)
        return await self._settle(actor, updated, warning, conflict, source=Partition.TRASHED)

    async def restore_from_archive(self, actor: CurrentUser, employee_id: str) -> TransitionResult:
        """Reinstate an archived employee on an open-ended contract.

        The contract end date is always cleared on reintegration.

        Raises:
            EmployeeNotFoundError: If the id is not archived
        """
        employee = self.roster.require(Partition.ARCHIVED, employee_id)
        updated = employee.model_copy(
            update={
                "is_archived": False,
                "archived_date": None,
                "archived_reason": None,
                "contract_end_date": None,
            }
        )
        return await self._transition(
            actor,
            Partition.ARCHIVED,
            Partition.ACTIVE,
            updated,
            LogAction.REINSTATE,
            f"{employee.name} réintégré.",
        )

    async def update_archive_reason(
        self,
        actor: CurrentUser,
        employee_id: str,
        reason: str,
    ) -> TransitionResult:
        """Replace the archive reason of an archived employee in place.

        Used to validate a sweep-generated ``[AUTO]`` reason.

        Raises:
            EmployeeNotFoundError: If the id is not archived
            ArchiveReasonRequiredError: If the reason is blank
        """
        employee = self.roster.require(Partition.ARCHIVED, employee_id)
        reason = (reason or "").strip()
        if not reason:
            raise ArchiveReasonRequiredError(employee_id)

        was_pending = employee.is_pending_archive
        updated = employee.model_copy(update={"archived_reason": reason})
        self.roster.replace(Partition.ARCHIVED, updated)
        warning, conflict = await self._persist(Partition.ARCHIVED, [updated])

        if was_pending:
            action, details = LogAction.FINALIZE_ARCHIVE, f"{employee.name} : motif d'archivage validé."
        else:
            action, details = LogAction.UPDATE_RECORD, f"{employee.name} : motif d'archivage modifié."
        await self.activity.record(actor.display_name, action, details, LogCategory.TEAM)

        return TransitionResult(
            employee=self.roster.get(Partition.ARCHIVED, employee_id) or updated,
            source=Partition.ARCHIVED,
            target=Partition.ARCHIVED,
            persisted=warning is None,
            conflict=conflict,
            warning=warning,
        )

    async def purge(self, actor: CurrentUser, employee_id: str) -> TransitionResult:
        """Destroy a trashed employee permanently.

        Raises:
            EmployeeNotFoundError: If the id is not in the trash
        """
        employee = self.roster.drop(Partition.TRASHED, employee_id)

        warning = None
        try:
            await self.store.delete_employee(employee_id)
        except CrewAPIError as e:
            logger.error("Failed to delete employee %s: %s", employee_id, e.message)
            warning = f"Change applied but not saved: {e.message}"

        await self.activity.record(
            actor.display_name,
            LogAction.PURGE,
            f"Dossier {employee_id} supprimé définitivement.",
            LogCategory.TEAM,
        )
        logger.info("Employee %s purged", employee_id)
        return TransitionResult(
            employee=employee,
            source=Partition.TRASHED,
            target=None,
            persisted=warning is None,
            warning=warning,
        )

    async def empty_trash(self, actor: CurrentUser) -> PurgeResult:
        """Destroy every trashed employee, with a single log entry."""
        ids = [employee.id for employee in self.roster.trashed]
        for employee_id in ids:
            self.roster.drop(Partition.TRASHED, employee_id)

        warning = None
        try:
            await self.store.delete_employees(ids)
        except CrewAPIError as e:
            logger.error("Failed to empty trash: %s", e.message)
            warning = f"Change applied but not saved: {e.message}"

        await self.activity.record(actor.display_name, LogAction.EMPTY_TRASH, "Corbeille vidée.", LogCategory.TEAM)
        logger.info("Trash emptied (%d employee(s))", len(ids))
        return PurgeResult(purged_ids=ids, persisted=warning is None, warning=warning)

    async def purge_expired_trash(
        self,
        actor: CurrentUser,
        retention_days: int = DEFAULT_TRASH_RETENTION_DAYS,
    ) -> PurgeResult:
        """Destroy trashed employees whose retention window has elapsed."""
        today = self._today()
        expired = [
            employee.id
            for employee in self.roster.trashed
            if employee.deleted_date is not None
            and days_left_in_trash(employee, today, retention_days) == 0
        ]

        result = PurgeResult()
        for employee_id in expired:
            outcome = await self.purge(actor, employee_id)
            result.purged_ids.append(employee_id)
            if not outcome.persisted:
                result.persisted = False
                result.warning = outcome.warning
        return result

    async def admit(self, actor: CurrentUser, employee: Employee) -> TransitionResult:
        """Add a new employee to the active roster, then run the sweep.

        Raises:
            EmployeeAlreadyExistsError: If the id is already on the roster
        """
        admitted = employee.model_copy(
            update={
                "is_archived": False,
                "archived_date": None,
                "archived_reason": None,
                "is_deleted": False,
                "deleted_date": None,
            }
        )
        self.roster.add(Partition.ACTIVE, admitted)
        warning, conflict = await self._persist(Partition.ACTIVE, [admitted])
        return await self._settle(actor, admitted, warning, conflict)

    async def update_active(self, actor: CurrentUser, employee: Employee) -> TransitionResult:
        """Replace an active employee's record, then re-run the sweep.

        Lifecycle flags on ``employee`` are ignored; an edit that sets a past
        contract end date therefore ends with the employee archived.

        Raises:
            EmployeeNotFoundError: If the id is not active
        """
        current = self.roster.require(Partition.ACTIVE, employee.id)
        updated = employee.model_copy(
            update={
                "is_archived": current.is_archived,
                "archived_date": current.archived_date,
                "archived_reason": current.archived_reason,
                "is_deleted": current.is_deleted,
                "deleted_date": current.deleted_date,
            }
        )
        self.roster.replace(Partition.ACTIVE, updated)
        warning, conflict = await self._persist(Partition.ACTIVE, [updated])
        return await self._settle(actor, updated, warning, conflict)

    async def _settle(
        self,
        actor: CurrentUser,
        employee: Employee,
        warning: str | None,
        conflict: bool,
        source: Partition = Partition.ACTIVE,
    ) -> TransitionResult:
        sweep = await self.sweep(actor)
        partition = self.roster.partition_of(employee.id)
        current = self.roster.find(employee.id) or employee
        if warning is None and sweep.warning is not None:
            warning, conflict = sweep.warning, sweep.conflict
        return TransitionResult(
            employee=current,
            source=source,
            target=partition,
            persisted=warning is None,
            conflict=conflict,
            warning=warning,
        )

    async def sweep(self, actor: CurrentUser) -> SweepResult:
        """Archive every active employee whose contract ended before today.

        Safe to re-run: archived employees are no longer active, so a second
        pass over the same roster archives nothing.
        """
        today = self._today()
        expired = [
            employee.model_copy(
                update={
                    "is_archived": True,
                    "archived_date": today,
                    "archived_reason": auto_archive_reason(employee.contract_end_date),
                    "is_deleted": False,
                    "deleted_date": None,
                }
            )
            for employee in self.roster.active
            if employee.contract_end_date is not None and employee.contract_end_date < today
        ]
        if not expired:
            return SweepResult()

        self.roster.move_many(Partition.ACTIVE, Partition.ARCHIVED, expired)
        warning, conflict = await self._persist(Partition.ARCHIVED, expired)

        for employee in expired:
            await self.activity.record(
                actor.display_name,
                LogAction.AUTO_ARCHIVE,
                f"{employee.name} archivé automatiquement "
                f"(fin de contrat le {format_french(employee.contract_end_date)}).",
                LogCategory.TEAM,
            )

        logger.info("Contract sweep archived %d employee(s)", len(expired))
        return SweepResult(
            archived=[self.roster.get(Partition.ARCHIVED, emp.id) or emp for emp in expired],
            persisted=warning is None,
            conflict=conflict,
            warning=warning,
        )
