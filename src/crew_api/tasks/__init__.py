"""Background tasks package."""

from crew_api.tasks.scheduler import start_scheduler, stop_scheduler

__all__ = [
    "start_scheduler",
    "stop_scheduler",
]
