"""Roster lifecycle service tests."""

import asyncio
from datetime import date, timedelta

import pytest

from crew_api.exceptions import ArchiveReasonRequiredError, EmployeeNotFoundError, VersionConflictError
from crew_api.models.domain.activity import LogCategory
from crew_api.models.domain.employee import AUTO_ARCHIVE_MARKER, Partition
from crew_api.models.domain.roster import Roster
from crew_api.services.activity_service import ActivityLogger, LogAction
from crew_api.services.lifecycle_service import LifecycleService, days_left_in_trash
from tests.conftest import TODAY
from tests.fakes import InMemoryRecordStore, make_employee

YESTERDAY = TODAY - timedelta(days=1)


def _assert_exclusive(roster: Roster) -> None:
    ids = [emp.id for partition in Partition for emp in roster.members(partition)]
    assert len(ids) == len(set(ids))


async def _loaded(store: InMemoryRecordStore, lifecycle: LifecycleService, actor, *employees) -> LifecycleService:
    store.seed(*employees)
    await lifecycle.load(actor)
    return lifecycle


class TestLoad:
    """Loading the roster from the store."""

    async def test_load_splits_partitions(self, store, lifecycle, actor) -> None:
        await _loaded(
            store,
            lifecycle,
            actor,
            make_employee("A"),
            make_employee("B", is_archived=True, archived_reason="Départ"),
            make_employee("C", is_deleted=True, deleted_date=TODAY),
        )
        assert lifecycle.roster.counts() == {"active": 1, "archived": 1, "deleted": 1}

    async def test_failed_partition_fetch_yields_empty_partition(self, store, lifecycle, actor) -> None:
        store.fail_partitions = {Partition.ARCHIVED}
        await _loaded(
            store,
            lifecycle,
            actor,
            make_employee("A"),
            make_employee("B", is_archived=True, archived_reason="Départ"),
        )
        assert [emp.id for emp in lifecycle.roster.active] == ["A"]
        assert lifecycle.roster.archived == []

    async def test_load_runs_sweep(self, store, lifecycle, actor) -> None:
        result = await _loaded(store, lifecycle, actor, make_employee("A", contract_end_date=YESTERDAY))
        assert lifecycle.roster.partition_of("A") == Partition.ARCHIVED
        assert result.roster.archived[0].is_pending_archive


class TestSweep:
    """Contract-expiry sweep."""

    async def test_expired_contract_is_auto_archived(self, store, lifecycle, actor) -> None:
        """Contract ended yesterday: archived with a dated reason and one EQUIPE entry."""
        lifecycle.roster = Roster(active=[make_employee("A", contract_end_date=YESTERDAY)])

        result = await lifecycle.sweep(actor)

        assert [emp.id for emp in result.archived] == ["A"]
        archived = lifecycle.roster.get(Partition.ARCHIVED, "A")
        assert archived.is_archived
        assert archived.archived_date == TODAY
        assert archived.archived_reason.startswith(AUTO_ARCHIVE_MARKER)
        assert YESTERDAY.strftime("%d/%m/%Y") in archived.archived_reason
        assert len(store.logs) == 1
        assert store.logs[0].category == LogCategory.TEAM
        assert store.logs[0].action == LogAction.AUTO_ARCHIVE

    async def test_contract_ending_today_stays_active(self, lifecycle, actor) -> None:
        lifecycle.roster = Roster(active=[make_employee("A", contract_end_date=TODAY)])
        result = await lifecycle.sweep(actor)
        assert result.archived == []
        assert lifecycle.roster.partition_of("A") == Partition.ACTIVE

    async def test_sweep_is_idempotent(self, store, lifecycle, actor) -> None:
        lifecycle.roster = Roster(
            active=[
                make_employee("A", contract_end_date=YESTERDAY),
                make_employee("B", contract_end_date=TODAY + timedelta(days=10)),
                make_employee("C"),
            ]
        )
        await lifecycle.sweep(actor)
        counts_after_first = lifecycle.roster.counts()
        logs_after_first = len(store.logs)

        second = await lifecycle.sweep(actor)

        assert second.archived == []
        assert lifecycle.roster.counts() == counts_after_first
        assert len(store.logs) == logs_after_first

    async def test_sweep_persists_in_one_upsert(self, store, lifecycle, actor) -> None:
        lifecycle.roster = Roster(
            active=[
                make_employee("A", contract_end_date=YESTERDAY),
                make_employee("B", contract_end_date=YESTERDAY - timedelta(days=30)),
            ]
        )
        await lifecycle.sweep(actor)
        assert store.upsert_calls == [["A", "B"]]
        assert len(store.logs_with_action(LogAction.AUTO_ARCHIVE)) == 2


class TestTransitions:
    """Manual lifecycle transitions."""

    async def test_archive_requires_reason(self, store, lifecycle, actor) -> None:
        await _loaded(store, lifecycle, actor, make_employee("A"))
        with pytest.raises(ArchiveReasonRequiredError):
            await lifecycle.archive(actor, "A", "   ")
        assert lifecycle.roster.partition_of("A") == Partition.ACTIVE
        assert store.logs == []

    async def test_archive_moves_and_logs_once(self, store, lifecycle, actor) -> None:
        await _loaded(store, lifecycle, actor, make_employee("A", name="Alice"))

        result = await lifecycle.archive(actor, "A", "Démission")

        assert result.persisted
        assert result.source == Partition.ACTIVE
        assert result.target == Partition.ARCHIVED
        assert result.employee.archived_reason == "Démission"
        assert result.employee.archived_date == TODAY
        assert store.employees["A"].is_archived
        assert [(log.action, log.details, log.user) for log in store.logs] == [
            (LogAction.ARCHIVE, "Alice archivé.", "Jean Dupont")
        ]

    async def test_delete_then_restore_from_trash(self, store, lifecycle, actor) -> None:
        await _loaded(store, lifecycle, actor, make_employee("A"))

        deleted = await lifecycle.delete(actor, "A")
        assert deleted.employee.is_deleted
        assert deleted.employee.deleted_date == TODAY
        assert lifecycle.roster.partition_of("A") == Partition.TRASHED

        restored = await lifecycle.restore_from_trash(actor, "A")
        assert not restored.employee.is_deleted
        assert restored.employee.deleted_date is None
        assert lifecycle.roster.partition_of("A") == Partition.ACTIVE
        assert len(store.logs) == 2

    async def test_restore_from_trash_archives_ended_contract(self, store, actor) -> None:
        clock = {"today": TODAY}
        lifecycle = LifecycleService(store, ActivityLogger(store), today=lambda: clock["today"])
        await _loaded(store, lifecycle, actor, make_employee("A", contract_end_date=TODAY + timedelta(days=5)))
        await lifecycle.delete(actor, "A")

        clock["today"] = TODAY + timedelta(days=10)
        restored = await lifecycle.restore_from_trash(actor, "A")

        assert restored.source == Partition.TRASHED
        assert restored.target == Partition.ARCHIVED
        assert restored.employee.archived_reason.startswith(AUTO_ARCHIVE_MARKER)
        assert lifecycle.roster.partition_of("A") == Partition.ARCHIVED
        assert store.employees["A"].is_archived
        assert not store.employees["A"].is_deleted
        _assert_exclusive(lifecycle.roster)

    async def test_restore_from_archive_resets_contract_end(self, store, lifecycle, actor) -> None:
        await _loaded(
            store,
            lifecycle,
            actor,
            make_employee(
                "A",
                is_archived=True,
                archived_date=YESTERDAY,
                archived_reason="Fin de CDD",
                contract_end_date=YESTERDAY,
            ),
        )

        result = await lifecycle.restore_from_archive(actor, "A")

        assert result.employee.contract_end_date is None
        assert not result.employee.is_archived
        assert result.employee.archived_reason is None
        assert lifecycle.roster.partition_of("A") == Partition.ACTIVE
        # Not swept back into the archive
        assert (await lifecycle.sweep(actor)).archived == []

    async def test_unknown_id_is_rejected_without_change(self, store, lifecycle, actor) -> None:
        await _loaded(store, lifecycle, actor, make_employee("A"))
        with pytest.raises(EmployeeNotFoundError):
            await lifecycle.restore_from_trash(actor, "A")
        with pytest.raises(EmployeeNotFoundError):
            await lifecycle.archive(actor, "missing", "reason")
        assert lifecycle.roster.counts() == {"active": 1, "archived": 0, "deleted": 0}
        assert store.logs == []

    async def test_update_reason_finalizes_pending_archive(self, store, lifecycle, actor) -> None:
        await _loaded(store, lifecycle, actor, make_employee("A", contract_end_date=YESTERDAY))
        assert lifecycle.roster.get(Partition.ARCHIVED, "A").is_pending_archive

        result = await lifecycle.update_archive_reason(actor, "A", "Fin de CDD saisonnier")

        assert result.target == Partition.ARCHIVED
        assert not result.employee.is_pending_archive
        assert store.logs[-1].action == LogAction.FINALIZE_ARCHIVE

    async def test_update_reason_on_validated_archive(self, store, lifecycle, actor) -> None:
        await _loaded(store, lifecycle, actor, make_employee("A", is_archived=True, archived_reason="Départ"))
        await lifecycle.update_archive_reason(actor, "A", "Mutation")
        assert store.logs[-1].action == LogAction.UPDATE_RECORD

    async def test_partition_exclusivity_over_sequence(self, store, lifecycle, actor) -> None:
        await _loaded(
            store,
            lifecycle,
            actor,
            make_employee("A"),
            make_employee("B"),
            make_employee("C", contract_end_date=YESTERDAY),
        )
        await lifecycle.archive(actor, "A", "Départ")
        _assert_exclusive(lifecycle.roster)
        await lifecycle.delete(actor, "B")
        _assert_exclusive(lifecycle.roster)
        await lifecycle.restore_from_archive(actor, "A")
        _assert_exclusive(lifecycle.roster)
        await lifecycle.restore_from_archive(actor, "C")
        await lifecycle.delete(actor, "C")
        await lifecycle.purge(actor, "C")
        _assert_exclusive(lifecycle.roster)

        assert lifecycle.roster.partition_of("A") == Partition.ACTIVE
        assert lifecycle.roster.partition_of("B") == Partition.TRASHED
        assert lifecycle.roster.partition_of("C") is None


class TestPurge:
    """Destruction of trashed employees."""

    async def test_purge_removes_everywhere_with_one_delete_call(self, store, lifecycle, actor) -> None:
        await _loaded(store, lifecycle, actor, make_employee("A", is_deleted=True, deleted_date=YESTERDAY))

        result = await lifecycle.purge(actor, "A")

        assert result.target is None
        assert lifecycle.roster.find("A") is None
        for partition in Partition:
            with pytest.raises(EmployeeNotFoundError):
                lifecycle.roster.require(partition, "A")
        assert store.delete_calls == ["A"]
        assert store.logs[-1].details == "Dossier A supprimé définitivement."

    async def test_purge_requires_trashed_employee(self, store, lifecycle, actor) -> None:
        await _loaded(store, lifecycle, actor, make_employee("A"))
        with pytest.raises(EmployeeNotFoundError):
            await lifecycle.purge(actor, "A")
        assert store.delete_calls == []

    async def test_empty_trash_uses_single_call_and_log(self, store, lifecycle, actor) -> None:
        await _loaded(
            store,
            lifecycle,
            actor,
            make_employee("A", is_deleted=True, deleted_date=TODAY),
            make_employee("B", is_deleted=True, deleted_date=TODAY),
            make_employee("C"),
        )

        result = await lifecycle.empty_trash(actor)

        assert sorted(result.purged_ids) == ["A", "B"]
        assert lifecycle.roster.trashed == []
        assert len(store.bulk_delete_calls) == 1
        assert store.logs_with_action(LogAction.EMPTY_TRASH)[0].details == "Corbeille vidée."
        assert len(store.logs) == 1

    async def test_purge_expired_trash(self, store, lifecycle, actor) -> None:
        await _loaded(
            store,
            lifecycle,
            actor,
            make_employee("OLD", is_deleted=True, deleted_date=TODAY - timedelta(days=30)),
            make_employee("NEW", is_deleted=True, deleted_date=TODAY - timedelta(days=29)),
            make_employee("UNDATED", is_deleted=True),
        )

        result = await lifecycle.purge_expired_trash(actor, retention_days=30)

        assert result.purged_ids == ["OLD"]
        assert {emp.id for emp in lifecycle.roster.trashed} == {"NEW", "UNDATED"}


class TestDaysLeftInTrash:
    """Retention countdown."""

    @pytest.mark.parametrize(
        ("deleted_days_ago", "expected"),
        [(0, 30), (1, 29), (29, 1), (30, 0), (45, 0)],
    )
    def test_countdown(self, deleted_days_ago: int, expected: int) -> None:
        employee = make_employee("A", is_deleted=True, deleted_date=TODAY - timedelta(days=deleted_days_ago))
        assert days_left_in_trash(employee, TODAY) == expected

    def test_undated_trash_has_full_window(self) -> None:
        assert days_left_in_trash(make_employee("A", is_deleted=True), TODAY, retention_days=14) == 14

    def test_future_deletion_date_keeps_full_window(self) -> None:
        employee = make_employee("A", is_deleted=True, deleted_date=TODAY + timedelta(days=5))
        assert days_left_in_trash(employee, TODAY) == 30


class TestPersistenceFailures:
    """Collaborator failures are reported, not rolled back."""

    async def test_failed_write_keeps_move_and_warns(self, store, lifecycle, actor) -> None:
        await _loaded(store, lifecycle, actor, make_employee("A"))
        store.fail_writes = True

        result = await lifecycle.delete(actor, "A")

        assert not result.persisted
        assert not result.conflict
        assert result.warning
        assert lifecycle.roster.partition_of("A") == Partition.TRASHED
        _assert_exclusive(lifecycle.roster)
        assert len(store.logs) == 1

    async def test_failed_log_write_does_not_fail_transition(self, store, lifecycle, actor) -> None:
        await _loaded(store, lifecycle, actor, make_employee("A"))
        store.fail_logs = True

        result = await lifecycle.archive(actor, "A", "Départ")

        assert result.persisted
        assert len(lifecycle.activity.failed_entries) == 1


class TestConcurrency:
    """Optimistic version checks on the same employee."""

    async def test_serial_transitions_succeed(self, store, lifecycle, actor) -> None:
        await _loaded(store, lifecycle, actor, make_employee("A"))

        first = await lifecycle.delete(actor, "A")
        second = await lifecycle.restore_from_trash(actor, "A")

        assert first.persisted and second.persisted
        assert store.employees["A"].version == 2

    async def test_stale_writer_gets_conflict(self, store, actor) -> None:
        store.seed(make_employee("A"))
        first = LifecycleService(store, ActivityLogger(store), today=lambda: TODAY)
        second = LifecycleService(store, ActivityLogger(store), today=lambda: TODAY)
        await asyncio.gather(first.load(actor), second.load(actor))

        winner = await first.archive(actor, "A", "Départ")
        loser = await second.delete(actor, "A")

        assert winner.persisted
        assert loser.conflict
        assert not loser.persisted
        with pytest.raises(VersionConflictError):
            loser.raise_for_conflict()
        # The first write is the one kept by the store
        assert store.employees["A"].is_archived
        assert not store.employees["A"].is_deleted


class TestAdmission:
    """New hires and active edits."""

    async def test_admit_with_past_contract_end_is_archived(self, store, lifecycle, actor) -> None:
        await lifecycle.load(actor)
        result = await lifecycle.admit(actor, make_employee("NEW", contract_end_date=date(2020, 1, 1)))
        assert result.target == Partition.ARCHIVED
        assert store.employees["NEW"].is_archived
