"""Pydantic DTOs for editing user accounts after registration."""

from pydantic import BaseModel, Field


class UserUpdate(BaseModel):
    """Partial account update; omitted fields keep their stored value."""

    email: str | None = Field(None, min_length=3, max_length=254)
    full_name: str | None = Field(None, min_length=1, max_length=100)
    company: str | None = Field(None, max_length=100)
    job_title: str | None = Field(None, max_length=100)
    phone: str | None = Field(None, pattern=r"^\+?[\d\s\-()]+$")
