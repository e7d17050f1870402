"""API routers package."""

from crew_api.routers import (
    activity,
    archive,
    auth,
    dashboard,
    employees,
    planning,
    settings,
    support,
    trash,
)

__all__ = [
    "activity",
    "archive",
    "auth",
    "dashboard",
    "employees",
    "planning",
    "settings",
    "support",
    "trash",
]
