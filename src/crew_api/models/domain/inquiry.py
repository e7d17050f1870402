"""Support inquiry domain model."""

from datetime import datetime

from pydantic import BaseModel, EmailStr, Field


class Inquiry(BaseModel):
    """Support request sent from the console."""

    id: str | None = None
    name: str = Field(min_length=1, max_length=255)
    email: EmailStr
    subject: str = Field(min_length=1, max_length=255)
    message: str = Field(min_length=1, max_length=5000)
    status: str = "open"
    created_at: datetime | None = None
