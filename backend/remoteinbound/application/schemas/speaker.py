"""Pydantic DTOs for the speakers feature."""

from pydantic import BaseModel, Field


class SocialLinksSchema(BaseModel):
    twitter: str | None = Field(None, max_length=100)
    linkedin: str | None = None
    website: str | None = None

    model_config = {"from_attributes": True}


class SpeakerCreate(BaseModel):
    """Schema for publishing a new speaker."""

    name: str = Field(..., min_length=1, max_length=100)
    title: str = Field(..., min_length=1, max_length=100)
    company: str = Field(..., min_length=1, max_length=100)
    bio: str = Field(..., min_length=1, max_length=1000)
    avatar: str | None = None
    social: SocialLinksSchema | None = None
    sessions: list[str] = Field(default_factory=list, max_length=20)


class SpeakerResponse(BaseModel):
    id: str
    name: str
    title: str
    company: str
    bio: str
    avatar: str | None
    social: SocialLinksSchema
    sessions: list[str]

    model_config = {"from_attributes": True}


class SpeakerUpdate(BaseModel):
    """Partial speaker update; omitted fields keep their stored value."""

    name: str | None = Field(None, min_length=1, max_length=100)
    title: str | None = Field(None, min_length=1, max_length=100)
    company: str | None = Field(None, min_length=1, max_length=100)
    bio: str | None = Field(None, min_length=1, max_length=1000)
    avatar: str | None = None
    social: SocialLinksSchema | None = None
    sessions: list[str] | None = Field(None, max_length=20)
