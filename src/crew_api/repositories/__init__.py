"""Repositories package."""

from crew_api.repositories.activity_log_repository import ActivityLogRepository
from crew_api.repositories.base import BaseRepository
from crew_api.repositories.employee_repository import EmployeeRepository
from crew_api.repositories.inquiry_repository import InquiryRepository
from crew_api.repositories.profile_repository import ProfileRepository
from crew_api.repositories.settings_repository import SettingsRepository
from crew_api.repositories.store import RecordStore, SQLRecordStore

__all__ = [
    "BaseRepository",
    "ActivityLogRepository",
    "EmployeeRepository",
    "InquiryRepository",
    "ProfileRepository",
    "SettingsRepository",
    "RecordStore",
    "SQLRecordStore",
]
