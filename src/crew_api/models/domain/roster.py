"""Roster aggregate: the three disjoint employee partitions."""

import logging
from collections.abc import Iterable

from crew_api.exceptions import EmployeeAlreadyExistsError, EmployeeNotFoundError
from crew_api.models.domain.employee import Employee, Partition

logger = logging.getLogger(__name__)

# When fetched data lists an id in several partitions, the first one here wins
_PRECEDENCE = (Partition.TRASHED, Partition.ARCHIVED, Partition.ACTIVE)


class Roster:
    """Ordered active / archived / trashed partitions.

    Every mutation keeps each employee id in exactly one partition: a move
    computes both new partition lists before assigning either of them.
    Newly moved members are prepended (newest first).
    """

    def __init__(
        self,
        active: Iterable[Employee] | None = None,
        archived: Iterable[Employee] | None = None,
        trashed: Iterable[Employee] | None = None,
    ) -> None:
        """Build a roster, dropping ids already seen in a higher-precedence partition."""
        given = {
            Partition.ACTIVE: list(active or []),
            Partition.ARCHIVED: list(archived or []),
            Partition.TRASHED: list(trashed or []),
        }
        self._partitions: dict[Partition, list[Employee]] = {p: [] for p in Partition}
        seen: set[str] = set()
        for partition in _PRECEDENCE:
            for employee in given[partition]:
                if employee.id in seen:
                    logger.warning(
                        "Employee %s listed in several partitions, keeping first of %s",
                        employee.id,
                        [p.value for p in _PRECEDENCE],
                    )
                    continue
                seen.add(employee.id)
                self._partitions[partition].append(employee)

    @property
    def active(self) -> list[Employee]:
        return list(self._partitions[Partition.ACTIVE])

    @property
    def archived(self) -> list[Employee]:
        return list(self._partitions[Partition.ARCHIVED])

    @property
    def trashed(self) -> list[Employee]:
        return list(self._partitions[Partition.TRASHED])

    def members(self, partition: Partition) -> list[Employee]:
        """Members of a partition, in roster order."""
        return list(self._partitions[partition])

    def partition_of(self, employee_id: str) -> Partition | None:
        """Partition holding the id, or None once purged / unknown."""
        for partition, members in self._partitions.items():
            if any(emp.id == employee_id for emp in members):
                return partition
        return None

    def get(self, partition: Partition, employee_id: str) -> Employee | None:
        """Employee by id within one partition."""
        for employee in self._partitions[partition]:
            if employee.id == employee_id:
                return employee
        return None

    def find(self, employee_id: str) -> Employee | None:
        """Employee by id across all partitions."""
        for partition in Partition:
            employee = self.get(partition, employee_id)
            if employee is not None:
                return employee
        return None

    def require(self, partition: Partition, employee_id: str) -> Employee:
        """Employee by id within one partition.

        Raises:
            EmployeeNotFoundError: If the id is not in that partition
        """
        employee = self.get(partition, employee_id)
        if employee is None:
            raise EmployeeNotFoundError(employee_id, partition.value)
        return employee

    def add(self, partition: Partition, employee: Employee) -> None:
        """Prepend a new employee to a partition.

        Raises:
            EmployeeAlreadyExistsError: If the id is already on the roster
        """
        if self.partition_of(employee.id) is not None:
            raise EmployeeAlreadyExistsError(employee.id)
        self._partitions[partition] = [employee, *self._partitions[partition]]

    def move(self, source: Partition, target: Partition, updated: Employee) -> None:
        """Move an employee between partitions, replacing it with ``updated``.

        Raises:
            EmployeeNotFoundError: If the id is not in the source partition
        """
        self.require(source, updated.id)
        remaining = [emp for emp in self._partitions[source] if emp.id != updated.id]
        destination = [updated, *self._partitions[target]]
        self._partitions[source] = remaining
        self._partitions[target] = destination

    def move_many(self, source: Partition, target: Partition, updated: list[Employee]) -> None:
        """Move several employees at once, prepending them to the target in order."""
        ids = {emp.id for emp in updated}
        for employee_id in ids:
            self.require(source, employee_id)
        remaining = [emp for emp in self._partitions[source] if emp.id not in ids]
        destination = [*updated, *self._partitions[target]]
        self._partitions[source] = remaining
        self._partitions[target] = destination

    def replace(self, partition: Partition, updated: Employee) -> None:
        """Replace an employee in place without changing its partition."""
        self.require(partition, updated.id)
        self._partitions[partition] = [
            updated if emp.id == updated.id else emp for emp in self._partitions[partition]
        ]

    def drop(self, partition: Partition, employee_id: str) -> Employee:
        """Remove an employee from the roster entirely (purge)."""
        employee = self.require(partition, employee_id)
        self._partitions[partition] = [
            emp for emp in self._partitions[partition] if emp.id != employee_id
        ]
        return employee

    def counts(self) -> dict[str, int]:
        """Partition sizes keyed by partition name."""
        return {partition.value: len(members) for partition, members in self._partitions.items()}
