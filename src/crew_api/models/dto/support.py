"""Support DTOs."""

from pydantic import BaseModel, EmailStr, Field


class InquiryCreate(BaseModel):
    """Support inquiry request DTO."""

    name: str = Field(min_length=1, max_length=255)
    email: EmailStr
    subject: str = Field(min_length=1, max_length=255)
    message: str = Field(min_length=1, max_length=5000)
