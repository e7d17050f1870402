"""SQLAlchemy ORM models package."""

from crew_api.models.orm.base import Base
from crew_api.models.orm.activity_log import ActivityLogORM
from crew_api.models.orm.employee import EmployeeORM
from crew_api.models.orm.inquiry import InquiryORM
from crew_api.models.orm.profile import ProfileORM
from crew_api.models.orm.settings import AppSettingORM

__all__ = [
    "Base",
    "ActivityLogORM",
    "AppSettingORM",
    "EmployeeORM",
    "InquiryORM",
    "ProfileORM",
]
