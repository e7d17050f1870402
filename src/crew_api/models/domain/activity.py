"""Activity log domain model."""

from datetime import datetime
from enum import StrEnum

from pydantic import BaseModel


class LogCategory(StrEnum):
    """Activity log category enum."""

    TEAM = "EQUIPE"
    SOC = "SOC"
    TRAINING = "FORMATION"
    SYSTEM = "SYSTEM"
    LATE = "RETARD"


class ActivityLog(BaseModel):
    """Append-only activity log entry."""

    id: str
    timestamp: datetime
    user: str
    action: str
    details: str
    category: LogCategory
