"""In-memory collaborators for tests."""

from typing import Any

from crew_api.exceptions import AIProviderError, AuthenticationError, PersistenceError, VersionConflictError
from crew_api.models.domain.activity import ActivityLog
from crew_api.models.domain.employee import Employee, Partition
from crew_api.models.domain.inquiry import Inquiry
from crew_api.models.domain.user import AuthUser, Session, UserProfile
from crew_api.providers.base import AuthProvider, GenerativeProvider
from crew_api.repositories.store import RecordStore


def make_employee(employee_id: str = "EMP-1", name: str | None = None, **fields: Any) -> Employee:
    """Build an employee with sensible defaults."""
    return Employee(id=employee_id, name=name or f"Employee {employee_id}", **fields)


class InMemoryRecordStore(RecordStore):
    """Record store keeping everything in dictionaries.

    ``fail_writes`` / ``fail_logs`` / ``fail_partitions`` make the matching
    calls raise PersistenceError.
    """

    def __init__(self, employees: list[Employee] | None = None) -> None:
        self.employees: dict[str, Employee] = {emp.id: emp for emp in employees or []}
        self.logs: list[ActivityLog] = []
        self.settings: dict[str, Any] = {}
        self.profiles: dict[str, UserProfile] = {}
        self.inquiries: list[Inquiry] = []

        self.upsert_calls: list[list[str]] = []
        self.delete_calls: list[str] = []
        self.bulk_delete_calls: list[list[str]] = []

        self.fail_writes = False
        self.fail_logs = False
        self.fail_partitions: set[Partition] = set()

    def seed(self, *employees: Employee) -> None:
        for employee in employees:
            self.employees[employee.id] = employee

    async def fetch_employees(self, partition: Partition) -> list[Employee]:
        if partition in self.fail_partitions:
            raise PersistenceError("fetch_employees", "unreachable")
        members = [emp for emp in self.employees.values() if emp.partition == partition]
        return sorted(members, key=lambda emp: emp.name)

    async def get_employee(self, employee_id: str) -> Employee | None:
        return self.employees.get(employee_id)

    async def upsert_employees(self, employees: list[Employee]) -> list[Employee]:
        if self.fail_writes:
            raise PersistenceError("upsert_employees", "write refused")
        for employee in employees:
            stored = self.employees.get(employee.id)
            if stored is not None and stored.version != employee.version:
                raise VersionConflictError(employee.id, employee.version, stored.version)

        self.upsert_calls.append([emp.id for emp in employees])
        written = []
        for employee in employees:
            bumped = employee.model_copy(update={"version": employee.version + 1})
            self.employees[employee.id] = bumped
            written.append(bumped)
        return written

    async def delete_employee(self, employee_id: str) -> None:
        if self.fail_writes:
            raise PersistenceError("delete_employee", "write refused")
        self.delete_calls.append(employee_id)
        self.employees.pop(employee_id, None)

    async def delete_employees(self, employee_ids: list[str]) -> None:
        if self.fail_writes:
            raise PersistenceError("delete_employees", "write refused")
        self.bulk_delete_calls.append(list(employee_ids))
        for employee_id in employee_ids:
            self.employees.pop(employee_id, None)

    async def add_log(self, entry: ActivityLog) -> ActivityLog:
        if self.fail_logs:
            raise PersistenceError("add_log", "write refused")
        self.logs.append(entry)
        return entry

    async def get_logs(
        self,
        limit: int = 100,
        offset: int = 0,
        category: str | None = None,
    ) -> list[ActivityLog]:
        entries = [log for log in reversed(self.logs) if category is None or log.category == category]
        return entries[offset : offset + limit]

    async def count_logs(self, category: str | None = None) -> int:
        return sum(1 for log in self.logs if category is None or log.category == category)

    async def get_setting(self, key: str) -> Any | None:
        return self.settings.get(key)

    async def save_setting(self, key: str, value: Any) -> None:
        if self.fail_writes:
            raise PersistenceError("save_setting", "write refused")
        self.settings[key] = value

    async def get_profile(self, user_id: str) -> UserProfile | None:
        return self.profiles.get(user_id)

    async def update_profile(
        self,
        user_id: str,
        first_name: str | None,
        last_name: str | None,
        role: str | None = None,
    ) -> UserProfile:
        if self.fail_writes:
            raise PersistenceError("update_profile", "write refused")
        current = self.profiles.get(user_id) or UserProfile(id=user_id)
        profile = current.model_copy(
            update={
                "first_name": first_name,
                "last_name": last_name,
                "role": role if role is not None else current.role,
            }
        )
        self.profiles[user_id] = profile
        return profile

    async def add_inquiry(self, inquiry: Inquiry) -> Inquiry:
        if self.fail_writes:
            raise PersistenceError("add_inquiry", "write refused")
        saved = inquiry.model_copy(update={"id": f"INQ-{len(self.inquiries) + 1}"})
        self.inquiries.append(saved)
        return saved

    def logs_with_action(self, action: str) -> list[ActivityLog]:
        return [log for log in self.logs if log.action == action]


class FakeAuthProvider(AuthProvider):
    """Auth provider accepting the accounts registered in ``accounts``."""

    def __init__(self) -> None:
        # email -> (password, user)
        self.accounts: dict[str, tuple[str, AuthUser]] = {}
        # access token -> user
        self.tokens: dict[str, AuthUser] = {}
        self.revoked: list[str] = []
        self.fail_sign_out = False

    def register(self, email: str, password: str, user_id: str = "user-1") -> AuthUser:
        user = AuthUser(id=user_id, email=email)
        self.accounts[email] = (password, user)
        return user

    def issue_token(self, user: AuthUser, token: str = "token-1") -> str:
        self.tokens[token] = user
        return token

    async def sign_in(self, email: str, password: str) -> Session:
        account = self.accounts.get(email)
        if account is None or account[0] != password:
            raise AuthenticationError()
        user = account[1]
        token = self.issue_token(user, f"token-{user.id}")
        return Session(access_token=token, user_id=user.id, email=user.email)

    async def sign_up(self, email: str, password: str, metadata: dict[str, Any]) -> AuthUser:
        if email in self.accounts:
            raise AuthenticationError("Invalid credentials")
        user = AuthUser(id=f"user-{len(self.accounts) + 1}", email=email, metadata=metadata)
        self.accounts[email] = (password, user)
        return user

    async def sign_out(self, access_token: str) -> None:
        if self.fail_sign_out:
            raise AuthenticationError()
        self.revoked.append(access_token)
        self.tokens.pop(access_token, None)

    async def get_user(self, access_token: str) -> AuthUser:
        user = self.tokens.get(access_token)
        if user is None:
            raise AuthenticationError("Invalid or expired session")
        return user


class FakeGenerativeProvider(GenerativeProvider):
    """Generative provider returning a canned reply."""

    def __init__(self, reply: str = '{"assignments": []}', fail: bool = False) -> None:
        self.reply = reply
        self.fail = fail
        self.prompts: list[str] = []

    async def generate_json(self, prompt: str, response_schema: dict[str, Any]) -> str:
        self.prompts.append(prompt)
        if self.fail:
            raise AIProviderError("unavailable")
        return self.reply
